from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_PRICE = Decimal('0')
MAX_PRICE = Decimal('499999.99')


# Create your models here.
class Product(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(MIN_PRICE), MaxValueValidator(MAX_PRICE)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.name} - {self.price}"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price': f"{self.price:.2f}",
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

from decimal import ROUND_HALF_UP, Decimal

from django import forms

from .models import MAX_PRICE, MIN_PRICE, Product

EDITABLE_FIELDS = ['name', 'description', 'price']


class ProductForm(forms.ModelForm):
    """Shared validation rules for creating and updating a product.

    Only the fields listed in ``Meta.fields`` are ever copied onto the
    model, whatever else the request carries.
    """

    price = forms.DecimalField(
        min_value=MIN_PRICE,
        max_value=MAX_PRICE,
        error_messages={
            'required': 'The price field is required.',
            'invalid': 'The price field must be a number.',
            'min_value': f'The price field must be at least {MIN_PRICE}.',
            'max_value': f'The price field must not be greater than {MAX_PRICE}.',
        },
    )

    class Meta:
        model = Product
        fields = EDITABLE_FIELDS
        widgets = {
            'description': forms.Textarea(attrs={'rows': 4}),
        }
        error_messages = {
            'name': {
                'required': 'The name field is required.',
                'max_length': 'The name field must not be greater than 255 characters.',
            },
        }

    def _require_string(self, field):
        value = self.data.get(field)
        if value is not None and not isinstance(value, str):
            raise forms.ValidationError(f'The {field} field must be a string.', code='string')
        return self.cleaned_data[field]

    def clean_name(self):
        return self._require_string('name')

    def clean_description(self):
        return self._require_string('description')

    def clean_price(self):
        price = self.cleaned_data['price']
        return price.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def error_dict(self):
        """One message per invalid field, the way the page displays them."""
        return {field: errors[0] for field, errors in self.errors.items()}

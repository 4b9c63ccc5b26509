from decimal import Decimal

import pytest

from products.models import Product


@pytest.fixture
def make_product(db):
    """Create products with sensible defaults."""
    def _make(name="Laptop", description="A powerful device", price="999.99"):
        return Product.objects.create(name=name, description=description, price=Decimal(price))
    return _make


@pytest.fixture
def ajax():
    """Headers the products page sends with its requests."""
    return {
        "HTTP_X_REQUESTED_WITH": "XMLHttpRequest",
        "HTTP_REFERER": "http://testserver/products?page=1",
    }

"""Validation rules shared by product create and update."""

from decimal import Decimal

import pytest

from products.forms import ProductForm


def form_for(**overrides):
    data = {"name": "Laptop", "description": "A powerful device", "price": "999.99"}
    data.update(overrides)
    return ProductForm(data)


@pytest.mark.django_db
class TestPriceRange:

    @pytest.mark.parametrize("price", ["0", "0.00", "499999.99", "12.5"])
    def test_accepts_prices_in_range(self, price):
        form = form_for(price=price)
        assert form.is_valid(), form.errors

    def test_rejects_price_above_maximum(self):
        form = form_for(price="500000.00")
        assert not form.is_valid()
        assert form.error_dict() == {"price": "The price field must not be greater than 499999.99."}

    def test_rejects_negative_price(self):
        form = form_for(price="-0.01")
        assert not form.is_valid()
        assert form.error_dict() == {"price": "The price field must be at least 0."}

    def test_rejects_non_numeric_price(self):
        form = form_for(price="cheap")
        assert not form.is_valid()
        assert form.error_dict()["price"] == "The price field must be a number."

    def test_requires_price(self):
        form = form_for(price="")
        assert not form.is_valid()
        assert form.error_dict()["price"] == "The price field is required."

    def test_rounds_to_cents(self):
        form = form_for(price="10.005")
        assert form.is_valid(), form.errors
        assert form.cleaned_data["price"] == Decimal("10.01")


@pytest.mark.django_db
class TestName:

    def test_requires_name(self):
        form = form_for(name="")
        assert not form.is_valid()
        assert form.error_dict() == {"name": "The name field is required."}

    def test_whitespace_only_name_is_empty(self):
        form = form_for(name="   ")
        assert not form.is_valid()
        assert "name" in form.errors

    def test_name_length_limit(self):
        assert form_for(name="x" * 255).is_valid()

        form = form_for(name="x" * 256)
        assert not form.is_valid()
        assert form.error_dict()["name"] == "The name field must not be greater than 255 characters."

    def test_description_is_optional(self):
        form = form_for(description="")
        assert form.is_valid(), form.errors
        product = form.save()
        assert product.description == ""

    def test_reports_every_invalid_field(self):
        form = ProductForm({})
        assert not form.is_valid()
        assert set(form.error_dict()) == {"name", "price"}


@pytest.mark.django_db
def test_only_editable_fields_are_assigned():
    form = form_for(id="999", created_at="2000-01-01T00:00:00Z")
    assert form.is_valid(), form.errors

    product = form.save()

    assert product.id != 999
    assert product.created_at.year != 2000

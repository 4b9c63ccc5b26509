"""State of the products page: the listing plus the add/edit dialog.

The same object backs the server-rendered template and the programmatic
page driven through ``ProductsClient``.
"""
import logging
from typing import NamedTuple, Optional

from .client import ProductValidationError
from .forms import EDITABLE_FIELDS

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = 'Are you sure you want to delete this product?'


class DialogMode(NamedTuple):
    kind: str
    product_id: Optional[int] = None

    CREATE = 'create'
    EDIT = 'edit'

    @classmethod
    def create(cls):
        return cls(cls.CREATE)

    @classmethod
    def edit(cls, product_id):
        return cls(cls.EDIT, int(product_id))

    @property
    def is_edit(self):
        return self.kind == self.EDIT


def empty_form_data():
    return {field: '' for field in EDITABLE_FIELDS}


class ProductPage:
    def __init__(self, products=None, client=None):
        self.products = products or {'data': []}
        self.client = client
        self.is_dialog_open = False
        self.mode = DialogMode.create()
        self.data = empty_form_data()
        self.errors = {}
        self.submitting = False

    @property
    def rows(self):
        return self.products.get('data', [])

    @property
    def title(self):
        return 'Edit Product' if self.mode.is_edit else 'Add New Product'

    @property
    def description(self):
        if self.mode.is_edit:
            return 'Make changes to your product here. Click save when done.'
        return 'Enter the product details below. Click save when done.'

    def open_create(self):
        self.errors = {}
        self.data = empty_form_data()
        self.mode = DialogMode.create()
        self.is_dialog_open = True

    def open_edit(self, product):
        self.errors = {}
        self.mode = DialogMode.edit(product['id'])
        self.data = {
            field: '' if product.get(field) is None else str(product[field])
            for field in EDITABLE_FIELDS
        }
        self.is_dialog_open = True

    def close(self):
        self.is_dialog_open = False

    def set_data(self, field, value):
        if field not in EDITABLE_FIELDS:
            raise KeyError(f"Unknown product field: {field}")
        self.data[field] = value

    def reject(self, data, errors, product_id=None):
        """Reopen the dialog on the submitted values and their errors."""
        self.mode = DialogMode.create() if product_id is None else DialogMode.edit(product_id)
        self.data = {
            field: '' if data.get(field) is None else str(data.get(field))
            for field in EDITABLE_FIELDS
        }
        self.errors = dict(errors)
        self.is_dialog_open = True

    def submit(self):
        """Send the dialog's data; True once the server accepted it."""
        if self.submitting:
            return False

        self.submitting = True
        try:
            if self.mode.is_edit:
                products = self.client.update(self.mode.product_id, self.data)
            else:
                products = self.client.create(self.data)
        except ProductValidationError as e:
            self.errors = e.errors
            logger.info(f"Product form rejected: {sorted(e.errors)}")
            return False
        finally:
            self.submitting = False

        self.products = products
        self.data = empty_form_data()
        self.errors = {}
        self.is_dialog_open = False
        self.mode = DialogMode.create()
        return True

    def delete(self, product, confirm):
        """Delete ``product`` if ``confirm`` approves; True when deleted."""
        if not confirm(DELETE_CONFIRMATION):
            return False

        self.products = self.client.delete(product['id'])
        return True

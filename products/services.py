from django.core.paginator import Paginator
from django.db import transaction
import logging
from .models import Product

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class ProductService:
    @staticmethod
    def create_product(form) -> Product:
        """Persist a validated ProductForm as a new product"""
        try:
            with transaction.atomic():
                product = form.save()
            logger.info(f"Created product {product.id} ({product.name})")
            return product
        except Exception as e:
            logger.error(f"Error creating product {form.cleaned_data.get('name')}: {e}")
            raise

    @staticmethod
    def update_product(form) -> Product:
        """Replace name, description and price of the form's bound product"""
        product_id = form.instance.pk
        try:
            with transaction.atomic():
                product = form.save()
            logger.info(f"Updated product {product_id}")
            return product
        except Exception as e:
            logger.error(f"Error updating product {product_id}: {e}")
            raise

    @staticmethod
    def delete_product(product: Product) -> int:
        product_id = product.id
        try:
            with transaction.atomic():
                product.delete()
            logger.info(f"Deleted product {product_id}")
            return product_id
        except Exception as e:
            logger.error(f"Error deleting product {product_id}: {e}")
            raise


class ProductListService:
    @staticmethod
    def list_products(page=1, page_size: int = PAGE_SIZE) -> dict:
        """Newest-first page of products plus pagination metadata"""
        paginator = Paginator(Product.objects.all(), page_size)
        page_obj = paginator.get_page(page)

        return {
            'data': [product.to_dict() for product in page_obj],
            'current_page': page_obj.number,
            'per_page': page_size,
            'total': paginator.count,
            'last_page': paginator.num_pages,
            'has_next': page_obj.has_next(),
            'has_previous': page_obj.has_previous(),
        }

import logging
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)

CSRF_COOKIE = 'csrftoken'


class ProductsClientError(Exception):
    pass


class ProductValidationError(ProductsClientError):
    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"Invalid product data: {', '.join(sorted(errors))}")


class ProductNotFound(ProductsClientError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class ProductsClient:
    """Talks to the /products endpoints the way the products page does.

    Mutations answer with a redirect back to the listing; ``requests``
    follows it, so every call returns the refreshed listing payload.
    """

    def __init__(self, base_url: str, session: requests.Session = None, timeout: int = 30):
        self.base_url = base_url.rstrip('/') + '/'
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'X-Requested-With': 'XMLHttpRequest',
        })
        self.timeout = timeout
        self.page = 1

    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path)

    @property
    def listing_url(self) -> str:
        return self._url(f"products?page={self.page}")

    def list(self, page: int = None) -> dict:
        if page is not None:
            self.page = page
        response = self.session.get(self.listing_url, timeout=self.timeout)
        response.raise_for_status()
        products = response.json()['products']
        self.page = products['current_page']
        return products

    def create(self, data: dict) -> dict:
        return self._mutate('POST', 'products', data)

    def update(self, product_id: int, data: dict) -> dict:
        return self._mutate('PUT', f"products/{product_id}", data, product_id=product_id)

    def delete(self, product_id: int) -> dict:
        return self._mutate('DELETE', f"products/{product_id}", product_id=product_id)

    def _csrf_token(self) -> str:
        if CSRF_COOKIE not in self.session.cookies:
            self.list()
        return self.session.cookies.get(CSRF_COOKIE, '')

    def _mutate(self, method: str, path: str, data: dict = None, product_id: int = None) -> dict:
        headers = {
            'X-CSRFToken': self._csrf_token(),
            'Referer': self.listing_url,
        }
        response = self.session.request(
            method,
            self._url(path),
            json=data,
            headers=headers,
            timeout=self.timeout,
        )

        if response.status_code == 422:
            raise ProductValidationError(response.json().get('errors', {}))
        if response.status_code == 404:
            raise ProductNotFound(product_id)
        response.raise_for_status()

        logger.debug(f"{method} {path} answered {response.status_code} after {len(response.history)} redirect(s)")
        products = response.json()['products']
        self.page = products['current_page']
        return products

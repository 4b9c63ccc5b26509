import json
import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from django.contrib import messages
from django.http import Http404, HttpResponseNotAllowed, HttpResponseRedirect, JsonResponse, QueryDict
from django.shortcuts import get_object_or_404, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods

from .forms import ProductForm
from .models import Product
from .page import ProductPage
from .services import ProductListService, ProductService

logger = logging.getLogger(__name__)

# Query parameters that only drive the dialog; dropped when redirecting back.
DIALOG_PARAMS = ('edit', 'dialog')


def _wants_json(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def _request_method(request):
    """HTML forms tunnel PUT and DELETE through POST with a ``_method`` field."""
    if request.method == 'POST':
        override = request.POST.get('_method', '').upper()
        if override in ('PUT', 'DELETE'):
            return override
    return request.method


def _request_data(request):
    if request.content_type == 'application/json':
        try:
            payload = json.loads(request.body or b'{}')
        except ValueError:
            payload = {}
        return payload if isinstance(payload, dict) else {}
    if request.method == 'POST':
        return request.POST
    return QueryDict(request.body, encoding=request.encoding)


def _referer_page(request):
    referer = request.META.get('HTTP_REFERER', '')
    return dict(parse_qsl(urlsplit(referer).query)).get('page', 1)


def _redirect_back(request, message):
    """303 to the referring page with the dialog closed, else to the listing."""
    if not _wants_json(request):
        messages.success(request, message)

    referer = request.META.get('HTTP_REFERER')
    target = reverse('product-list')
    if referer and url_has_allowed_host_and_scheme(
        referer, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        parts = urlsplit(referer)
        query = [(key, value) for key, value in parse_qsl(parts.query) if key not in DIALOG_PARAMS]
        target = urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), ''))

    response = HttpResponseRedirect(target)
    response.status_code = 303
    return response


def _render_index(request, page, status=200):
    if _wants_json(request):
        return JsonResponse({'products': page.products}, status=status)
    return render(request, 'products/index.html', {'page': page}, status=status)


def _invalid(request, form):
    errors = form.error_dict()
    logger.info(f"Rejected product data, invalid fields: {sorted(errors)}")
    if _wants_json(request):
        return JsonResponse({'errors': errors}, status=422)

    page = ProductPage(ProductListService.list_products(_referer_page(request)))
    page.reject(form.data, errors, product_id=form.instance.pk)
    return _render_index(request, page, status=422)


def _not_found(request, pk):
    logger.warning(f"Product {pk} not found")
    if _wants_json(request):
        return JsonResponse({'error': 'Product not found.'}, status=404)
    raise Http404('Product not found.')


@ensure_csrf_cookie
@require_http_methods(["GET", "POST"])
def product_list(request):
    """List products (GET) or create one (POST)"""
    if request.method == 'POST':
        return product_store(request)

    page = ProductPage(ProductListService.list_products(request.GET.get('page', 1)))

    edit_id = request.GET.get('edit', '')
    if edit_id:
        if not (edit_id.isascii() and edit_id.isdigit()):
            raise Http404('Product not found.')
        page.open_edit(get_object_or_404(Product, pk=edit_id).to_dict())
    elif request.GET.get('dialog') == 'create':
        page.open_create()

    return _render_index(request, page)


def product_store(request):
    form = ProductForm(_request_data(request))
    if not form.is_valid():
        return _invalid(request, form)

    ProductService.create_product(form)
    return _redirect_back(request, 'Product created successfully!')


@require_http_methods(["POST", "PUT", "DELETE"])
def product_detail(request, pk):
    """Update (PUT) or delete (DELETE) a single product"""
    method = _request_method(request)
    if method not in ('PUT', 'DELETE'):
        return HttpResponseNotAllowed(['PUT', 'DELETE'])

    try:
        product = Product.objects.get(pk=pk)
    except Product.DoesNotExist:
        return _not_found(request, pk)

    if method == 'DELETE':
        ProductService.delete_product(product)
        return _redirect_back(request, 'Product deleted successfully!')

    form = ProductForm(_request_data(request), instance=product)
    if not form.is_valid():
        return _invalid(request, form)

    ProductService.update_product(form)
    return _redirect_back(request, 'Product updated successfully!')

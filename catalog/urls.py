"""
URL configuration for catalog project.
"""
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='product-list', permanent=False), name='index'),
    path('', include('products.urls')),
]

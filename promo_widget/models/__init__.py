"""Domain models for the promotion widget generator."""

from .appearance import AppearanceOptions
from .config_models import HeaderPolicy, OutputConfig, WidgetConfig
from .product_row import ProductRow
from .product_view import BrandFilterEntry, Prices, ProductView
from .widget_result import GeneratedWidget

__all__ = [
    # Configuration models
    "AppearanceOptions",
    "HeaderPolicy",
    "OutputConfig",
    "WidgetConfig",
    # Row / render models
    "BrandFilterEntry",
    "GeneratedWidget",
    "Prices",
    "ProductRow",
    "ProductView",
]

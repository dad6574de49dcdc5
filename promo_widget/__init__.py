"""Spreadsheet -> embeddable promotion widget generator."""

from .excel.reader import NoHeaderFound, UnreadableFile, normalize_workbook, read_workbook
from .models import AppearanceOptions, GeneratedWidget, HeaderPolicy, ProductRow, WidgetConfig
from .services.filtering import ActiveFilter
from .services.markup import generate_widget

__all__ = [
    "ActiveFilter",
    "AppearanceOptions",
    "GeneratedWidget",
    "HeaderPolicy",
    "NoHeaderFound",
    "ProductRow",
    "UnreadableFile",
    "WidgetConfig",
    "generate_widget",
    "normalize_workbook",
    "read_workbook",
]

__version__ = "0.1.0"

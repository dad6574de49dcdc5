from __future__ import annotations

from dataclasses import dataclass

from .product_view import BrandFilterEntry

"""Result of one widget generation call."""

__all__ = [
    "EMBED_END_MARKER",
    "EMBED_START_MARKER",
    "GeneratedWidget",
]

EMBED_START_MARKER = "<!-- Start of Promotion Widget -->"
EMBED_END_MARKER = "<!-- End of Promotion Widget -->"


@dataclass(frozen=True)
class GeneratedWidget:
    """The two markup strings plus the facts used to build them.

    ``preview_markup`` has no script: the host view owns filter and expand
    state and re-renders. ``embeddable_markup`` is the copy-paste snippet.
    """
    widget_id: str
    preview_markup: str
    embeddable_markup: str
    brands: tuple[BrandFilterEntry, ...] = ()
    has_flash: bool = False
    filter_bar: bool = False
    row_count: int = 0
    active_flash_count: int = 0

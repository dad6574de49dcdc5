from __future__ import annotations

from dataclasses import dataclass
from datetime import date

"""Render-time views derived from ProductRow.

These structures only live for the duration of one markup pass.
"""

__all__ = [
    "BrandFilterEntry",
    "Prices",
    "ProductView",
]


@dataclass(frozen=True)
class Prices:
    msrp: float | None = None
    map: float | None = None
    dealer: float | None = None
    elite: float | None = None


@dataclass(frozen=True)
class ProductView:
    """Display fields for one product card.

    Text fields hold plain (unescaped) text; escaping happens at the point of
    interpolation into markup.
    """
    index: int
    name: str
    item_number: str
    description_text: str
    brand_name: str
    brand_logo_url: str
    badge_text: str
    is_flash: bool
    flash_start: date | None
    flash_end: date | None
    prices: Prices
    image_url: str
    product_url: str

    @property
    def flash_start_ymd(self) -> str:
        return self.flash_start.isoformat() if self.flash_start else ""

    @property
    def flash_end_ymd(self) -> str:
        return self.flash_end.isoformat() if self.flash_end else ""


@dataclass(frozen=True)
class BrandFilterEntry:
    name: str
    logo_url: str

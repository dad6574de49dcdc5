from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

"""ProductRow model for the promotion widget generator.

A ProductRow is one spreadsheet data row after header normalization. Column
names are lowercased and trimmed; the recognized columns become typed
attributes and everything else is kept in ``extras`` so that the original
mapping can be rebuilt without loss.
"""

__all__ = [
    "RECOGNIZED_FIELDS",
    "ProductRow",
    "normalize_key",
]

# Canonical column name -> attribute name
RECOGNIZED_FIELDS: dict[str, str] = {
    "product name": "product_name",
    "item number": "item_number",
    "product description": "product_description",
    "brand name": "brand_name",
    "brand logo url": "brand_logo_url",
    "special promo text": "special_promo_text",
    "msrp": "msrp",
    "map": "map",
    "dealer price": "dealer_price",
    "elite dealer price": "elite_dealer_price",
    "image url": "image_url",
    "product url": "product_url",
    "flash sale": "flash_sale",
    "flash start date": "flash_start_date",
    "flash end date": "flash_end_date",
    "flash badge text": "flash_badge_text",
}


def normalize_key(key: Any) -> str:
    return str(key).strip().lower()


@dataclass(frozen=True)
class ProductRow:
    """Single normalized spreadsheet row.

    ``index`` is the position of the row in the normalized sequence and acts as
    its identity (description element ids are derived from it). Values are the
    raw cell values: strings and numbers keep their type, blank cells are "".
    """
    index: int = 0
    product_name: Any = ""
    item_number: Any = ""
    product_description: Any = ""
    brand_name: Any = ""
    brand_logo_url: Any = ""
    special_promo_text: Any = ""
    msrp: Any = ""
    map: Any = ""
    dealer_price: Any = ""
    elite_dealer_price: Any = ""
    image_url: Any = ""
    product_url: Any = ""
    flash_sale: Any = ""
    flash_start_date: Any = ""
    flash_end_date: Any = ""
    flash_badge_text: Any = ""
    extras: dict[str, Any] = field(default_factory=dict)  # unrecognized columns
    present: frozenset[str] = frozenset()  # recognized columns the source carried

    @classmethod
    def from_mapping(cls, values: Mapping[Any, Any], index: int = 0) -> ProductRow:
        """Build a row from a column -> value mapping.

        Keys are normalized here as well, so callers may pass header text as
        it appeared in the sheet.
        """
        known: dict[str, Any] = {}
        extras: dict[str, Any] = {}
        present: set[str] = set()
        for raw_key, value in values.items():
            key = normalize_key(raw_key)
            attr = RECOGNIZED_FIELDS.get(key)
            if attr is None:
                extras[key] = value
            else:
                known[attr] = value
                present.add(key)
        return cls(index=index, extras=extras, present=frozenset(present), **known)

    def get(self, key: str, default: Any = "") -> Any:
        key = normalize_key(key)
        attr = RECOGNIZED_FIELDS.get(key)
        if attr is not None:
            return getattr(self, attr)
        return self.extras.get(key, default)

    def as_mapping(self) -> dict[str, Any]:
        """Rebuild the column -> value mapping this row was created from."""
        out: dict[str, Any] = {}
        for key, attr in RECOGNIZED_FIELDS.items():
            if key in self.present:
                out[key] = getattr(self, attr)
        out.update(self.extras)
        return out

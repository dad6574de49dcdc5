from __future__ import annotations

import html
import math
import numbers
import re
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pandas as pd

from ..models.product_row import ProductRow
from ..models.product_view import Prices, ProductView

"""Per-field derivation helpers.

Spreadsheet cells are untrusted, human-edited input. Every helper here is
total: a cell that cannot be interpreted yields an "absent" sentinel ("" or
None) instead of raising, so one bad cell only loses that one value.
"""

__all__ = [
    "DEFAULT_FLASH_BADGE",
    "FLAG_TRUE_VALUES",
    "cell_text",
    "derive_product_view",
    "escape_text",
    "format_price",
    "normalize_date",
    "parse_flag",
    "parse_price",
    "parse_ymd",
]

FLAG_TRUE_VALUES = frozenset({"1", "y", "yes", "true", "t", "x", "✓", "✔", "flash"})
DEFAULT_FLASH_BADGE = "FLASH SALE"

# Spreadsheet day zero (1900 date system, including the 1900 leap-year quirk)
SERIAL_EPOCH = datetime(1899, 12, 30, tzinfo=UTC)

_YMD_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_PRICE_STRIP_RE = re.compile(r"[^0-9.]")
_LEADING_FLOAT_RE = re.compile(r"^(\d+\.?\d*|\.\d+)")

# words pandas resolves against the wall clock at parse time
RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def _is_blank(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def cell_text(value: Any) -> str:
    """Plain text of a cell: blanks become "", 12.0 becomes "12"."""
    if value is None or value is pd.NaT:
        return ""
    if _is_number(value):
        f = float(value)
        if math.isnan(f):
            return ""
        if math.isfinite(f) and f.is_integer() and not isinstance(value, numbers.Integral):
            return str(int(f))
    return str(value)


def escape_text(value: Any) -> str:
    """HTML-escape a cell for interpolation into markup (text or attribute)."""
    return html.escape(cell_text(value), quote=True)


def parse_flag(value: Any) -> bool:
    return cell_text(value).strip().lower() in FLAG_TRUE_VALUES


def parse_price(value: Any) -> float | None:
    """Parse a currency-ish cell ("$1,234.56", 99.5, "USD 10") into a float.

    Returns None when nothing numeric is left after stripping, so that the
    price line is omitted rather than rendered as 0.
    """
    if _is_blank(value):
        return None
    if _is_number(value):
        f = float(value)
        return abs(f) if math.isfinite(f) else None
    cleaned = _PRICE_STRIP_RE.sub("", cell_text(value))
    m = _LEADING_FLOAT_RE.match(cleaned)
    if not m:
        return None
    return float(m.group(1))


def format_price(value: float) -> str:
    return f"${value:.2f}"


def _ymd(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def normalize_date(value: Any) -> str:
    """Normalize a date cell to ``YYYY-MM-DD`` ("" when unparseable).

    - numbers are spreadsheet serials, converted on the UTC calendar
    - ``YYYY-MM-DD`` strings pass through unchanged
    - date/datetime cell objects use their own calendar fields
    - other strings go through pandas and use local calendar fields
    """
    if _is_blank(value):
        return ""
    if _is_number(value):
        serial = float(value)
        if not math.isfinite(serial):
            return ""
        try:
            return _ymd(SERIAL_EPOCH + timedelta(days=serial))
        except OverflowError:
            return ""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return _ymd(value)
    if isinstance(value, date):
        return _ymd(value)

    text = cell_text(value).strip()
    if _YMD_RE.match(text):
        return text
    if text.lower() in RELATIVE_DATE_WORDS:
        return ""
    try:
        ts = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return ""
    if ts is pd.NaT or pd.isna(ts):
        return ""
    if ts.tzinfo is not None:
        return _ymd(ts.to_pydatetime().astimezone())
    return _ymd(ts)


def parse_ymd(text: str) -> date | None:
    """Calendar date of a ``YYYY-MM-DD`` string, None for anything else."""
    m = _YMD_RE.match(text or "")
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def derive_product_view(row: ProductRow) -> ProductView:
    """Derive the display fields of one card from a normalized row."""
    is_flash = parse_flag(row.flash_sale)
    promo = cell_text(row.special_promo_text).strip()
    if promo:
        badge = promo
    elif is_flash:
        badge = cell_text(row.flash_badge_text).strip() or DEFAULT_FLASH_BADGE
    else:
        badge = ""

    if is_flash:
        flash_start = parse_ymd(normalize_date(row.flash_start_date))
        flash_end = parse_ymd(normalize_date(row.flash_end_date))
    else:
        flash_start = flash_end = None

    return ProductView(
        index=row.index,
        name=cell_text(row.product_name),
        item_number=cell_text(row.item_number),
        description_text=cell_text(row.product_description),
        brand_name=cell_text(row.brand_name).strip(),
        brand_logo_url=cell_text(row.brand_logo_url).strip(),
        badge_text=badge,
        is_flash=is_flash,
        flash_start=flash_start,
        flash_end=flash_end,
        prices=Prices(
            msrp=parse_price(row.msrp),
            map=parse_price(row.map),
            dealer=parse_price(row.dealer_price),
            elite=parse_price(row.elite_dealer_price),
        ),
        image_url=cell_text(row.image_url).strip(),
        product_url=cell_text(row.product_url).strip(),
    )

from __future__ import annotations

import dataclasses
import logging
import re
import uuid
from collections.abc import Callable, Collection, Mapping, Sequence
from datetime import datetime
from typing import Any

from ..models.appearance import AppearanceOptions
from ..models.product_row import ProductRow
from ..models.product_view import BrandFilterEntry, ProductView
from ..models.widget_result import EMBED_END_MARKER, EMBED_START_MARKER, GeneratedWidget
from .fields import derive_product_view, escape_text, format_price
from .filtering import ActiveFilter, is_card_visible
from .flash_window import is_flash_active
from .script import render_interaction_script
from .styles import render_styles

"""Markup generator.

``generate_widget`` turns normalized rows plus appearance options into the
preview markup and the embeddable markup. Every cell value is escaped with
``escape_text`` at the point where it is interpolated.
"""

__all__ = [
    "DESCRIPTION_CLAMP_CHARS",
    "collect_brands",
    "generate_widget",
    "new_widget_id",
    "render_card",
    "render_filter_bar",
]

logger = logging.getLogger(__name__)

# descriptions longer than this get a See More toggle
DESCRIPTION_CLAMP_CHARS = 120

# ids end up unescaped in attributes and script text
_WIDGET_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")

RowLike = ProductRow | Mapping[str, Any]


def new_widget_id() -> str:
    return f"promo-widget-{uuid.uuid4().hex}"


def _as_rows(rows: Sequence[RowLike]) -> list[ProductRow]:
    out: list[ProductRow] = []
    for i, row in enumerate(rows):
        if isinstance(row, ProductRow):
            out.append(row if row.index == i else dataclasses.replace(row, index=i))
        else:
            out.append(ProductRow.from_mapping(row, index=i))
    return out


def collect_brands(views: Sequence[ProductView]) -> list[BrandFilterEntry]:
    """Distinct brands with a logo, in first-seen order; first logo wins."""
    entries: dict[str, BrandFilterEntry] = {}
    for view in views:
        if not view.brand_name or not view.brand_logo_url or view.brand_name in entries:
            continue
        entries[view.brand_name] = BrandFilterEntry(view.brand_name, view.brand_logo_url)
    return list(entries.values())


def _price_line(label: str, value: float | None, css_class: str = "") -> str:
    if value is None:
        return ""
    classes = f"promo-price-item {css_class}".strip()
    return (
        f'<div class="{classes}"><span class="promo-price-label">{label}:</span>'
        f'<span class="promo-price-value">{format_price(value)}</span></div>'
    )


def render_card(
    view: ProductView,
    widget_id: str,
    options: AppearanceOptions,
    *,
    expanded: bool = False,
) -> str:
    name = escape_text(view.name)
    brand = escape_text(view.brand_name)
    description_id = f"promo-desc-{widget_id}-{view.index}"

    attrs = [
        'class="promo-product-card"',
        f'data-brand="{brand}"',
        f'data-flash="{"true" if view.is_flash else "false"}"',
    ]
    if view.is_flash and view.flash_start:
        attrs.append(f'data-flash-start="{view.flash_start_ymd}"')
    if view.is_flash and view.flash_end:
        attrs.append(f'data-flash-end="{view.flash_end_ymd}"')

    badge = ""
    if view.badge_text:
        badge_class = "promo-special-badge flash" if view.is_flash else "promo-special-badge"
        badge = f'<div class="{badge_class}">{escape_text(view.badge_text)}</div>'

    brand_logo = ""
    if view.brand_logo_url:
        brand_logo = (
            f'<img src="{escape_text(view.brand_logo_url)}" alt="{brand} Logo" '
            'class="promo-brand-logo" loading="lazy">'
        )

    item_line = ""
    if options.show_item_number and view.item_number.strip():
        item_line = f'<p class="promo-product-item">Item #: {escape_text(view.item_number)}</p>'

    description_class = "promo-product-description expanded" if expanded else "promo-product-description"
    see_more = ""
    if len(view.description_text) > DESCRIPTION_CLAMP_CHARS:
        see_more = (
            f'<a href="#" class="promo-description-toggle" data-target="{description_id}">'
            f'{"See Less" if expanded else "See More"}</a>'
        )

    prices = view.prices
    pricing = "".join((
        _price_line("MSRP", prices.msrp),
        _price_line("MAP", prices.map),
        _price_line("Your Price", prices.dealer, "dealer-price"),
        _price_line("Elite Price", prices.elite, "elite-price"),
    ))

    card_attrs = " ".join(attrs)
    return f"""
<div {card_attrs}>
  {badge}
  <div class="promo-image-wrapper"><img src="{escape_text(view.image_url)}" alt="{name}" class="promo-product-image" loading="lazy" onerror="this.style.display='none'"></div>
  <div class="promo-product-info">
    <div class="promo-product-header">
      <h3 class="promo-product-name">{name}</h3>
      {brand_logo}
    </div>
    {item_line}
    <p class="{description_class}" id="{description_id}">{escape_text(view.description_text)}</p>
    {see_more}
    <div class="promo-product-pricing">{pricing}</div>
    <div class="promo-product-cta-container"><a href="{escape_text(view.product_url)}" target="_blank" rel="noopener noreferrer" class="promo-product-cta">View Deal</a></div>
  </div>
</div>"""


def _filter_item(
    *,
    kind: str,
    label: str,
    logo_box: str,
    aria_label: str,
    active: bool,
    value: str | None = None,
    extra_class: str = "",
) -> str:
    classes = " ".join(c for c in ("promo-filter-item", extra_class, "active" if active else "") if c)
    value_attr = f' data-value="{escape_text(value)}"' if value is not None else ""
    selected = "true" if active else "false"
    return f"""
  <div class="{classes}" data-filter="{kind}"{value_attr} tabindex="0" role="tab" aria-selected="{selected}" aria-label="{escape_text(aria_label)}">
    {logo_box}
    <span class="promo-filter-name">{escape_text(label)}</span>
  </div>"""


def render_filter_bar(
    brands: Sequence[BrandFilterEntry],
    has_flash: bool,
    active: ActiveFilter | None = None,
) -> str:
    """Filter bar markup, or "" when there is nothing to choose between."""
    if not (len(brands) > 1 or has_flash):
        return ""
    active = active or ActiveFilter.all()
    items = [
        _filter_item(
            kind="all",
            label="All",
            logo_box='<div class="promo-filter-logo-box all-brands">All</div>',
            aria_label="Show All",
            active=active.kind == "all",
        )
    ]
    if has_flash:
        items.append(_filter_item(
            kind="flash",
            label="Flash Sales",
            logo_box='<div class="promo-filter-logo-box flash">⚡</div>',
            aria_label="Show Flash Sales",
            active=active.kind == "flash",
            extra_class="flash",
        ))
    for entry in brands:
        name = escape_text(entry.name)
        items.append(_filter_item(
            kind="brand",
            label=entry.name,
            logo_box=(
                '<div class="promo-filter-logo-box">'
                f'<img src="{escape_text(entry.logo_url)}" alt="{name}" class="promo-filter-logo" loading="lazy">'
                "</div>"
            ),
            aria_label=f"Filter by {entry.name}",
            active=active.kind == "brand" and active.value == entry.name,
            value=entry.name,
        ))
    return (
        '\n<div class="promo-logo-filter-container" role="tablist" aria-label="Promotion Filters">'
        + "".join(items)
        + "\n</div>"
    )


def _widget_root(widget_id: str, options: AppearanceOptions, filter_html: str, cards_html: str) -> str:
    return (
        f'<div id="{widget_id}" class="promo-widget" data-theme="{options.theme}" '
        f'data-corners="{options.corner_radius}" data-columns="{options.columns}">'
        f'{filter_html}<div class="promo-widget-container">{cards_html}</div></div>'
    )


def generate_widget(
    rows: Sequence[RowLike],
    options: AppearanceOptions | None = None,
    *,
    id_factory: Callable[[], str] | None = None,
    active_filter: ActiveFilter | None = None,
    now: datetime | None = None,
    expanded: Collection[int] = (),
) -> GeneratedWidget:
    """Generate preview and embeddable markup for ``rows``.

    Args:
        rows: normalized rows (ProductRow or plain mappings), in display order
        options: appearance options; defaults when None
        id_factory: source of the widget instance id (unique per call)
        active_filter: the host view's current filter, applied to the preview only
        now: reference instant for flash windows in the preview
        expanded: row indices whose description is expanded in the preview

    Returns:
        GeneratedWidget with both markup strings
    """
    options = options or AppearanceOptions()
    active_filter = active_filter or ActiveFilter.all()
    widget_id = (id_factory or new_widget_id)()
    if not _WIDGET_ID_RE.match(widget_id):
        raise ValueError(f"invalid widget id: {widget_id!r}")

    views = [derive_product_view(r) for r in _as_rows(rows)]
    brands = collect_brands(views)
    has_flash = any(v.is_flash for v in views)
    filter_bar = len(brands) > 1 or has_flash
    active_flash = sum(
        1 for v in views if is_flash_active(v.is_flash, v.flash_start, v.flash_end, now)
    )
    logger.debug(
        f"generate: rows={len(views)} brands={len(brands)} flash={has_flash} widget_id={widget_id}"
    )

    styles = render_styles(options)

    preview_cards = "".join(
        render_card(v, widget_id, options, expanded=v.index in expanded)
        for v in views
        if is_card_visible(v, active_filter, now)
    )
    preview_markup = styles + _widget_root(
        widget_id, options, render_filter_bar(brands, has_flash, active_filter), preview_cards
    )

    embed_cards = "".join(render_card(v, widget_id, options) for v in views)
    embed_body = _widget_root(widget_id, options, render_filter_bar(brands, has_flash), embed_cards)
    embeddable_markup = "\n".join((
        EMBED_START_MARKER,
        styles,
        embed_body,
        render_interaction_script(widget_id),
        EMBED_END_MARKER,
    ))

    return GeneratedWidget(
        widget_id=widget_id,
        preview_markup=preview_markup,
        embeddable_markup=embeddable_markup,
        brands=tuple(brands),
        has_flash=has_flash,
        filter_bar=filter_bar,
        row_count=len(views),
        active_flash_count=active_flash,
    )

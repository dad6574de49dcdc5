from __future__ import annotations

from ..models.widget_result import GeneratedWidget

"""SUMMARY line rendering."""

__all__ = [
    "render_summary_line",
]


def render_summary_line(widget: GeneratedWidget, sheet_name: str = "") -> str:
    """Render the body of the SUMMARY line for one generation run.

    The ``SUMMARY`` label itself comes from the log formatter
    (``log_summary``), so the returned text starts at ``rows=``.

    Format:
    rows={rows} brands={brands} flash={yes|no} active_flash={active}
    filter_bar={yes|no} sheet={sheet} widget_id={id}

    Examples:
        >>> from promo_widget.models.widget_result import GeneratedWidget
        >>> w = GeneratedWidget(widget_id="promo-widget-x", preview_markup="", embeddable_markup="", row_count=3)
        >>> render_summary_line(w, "Products")
        'rows=3 brands=0 flash=no active_flash=0 filter_bar=no sheet=Products widget_id=promo-widget-x'
    """
    sheet = sheet_name.replace(" ", "_") or "-"
    return (
        f"rows={widget.row_count} "
        f"brands={len(widget.brands)} "
        f"flash={'yes' if widget.has_flash else 'no'} "
        f"active_flash={widget.active_flash_count} "
        f"filter_bar={'yes' if widget.filter_bar else 'no'} "
        f"sheet={sheet} "
        f"widget_id={widget.widget_id}"
    )

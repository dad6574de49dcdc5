from __future__ import annotations

from ..models.appearance import AppearanceOptions
from .fields import escape_text

"""Widget stylesheet.

The stylesheet is constant; theme, corner style and column count are applied
through ``data-theme`` / ``data-corners`` / ``data-columns`` attributes on the
widget root. The accent colour is the single ``--promo-widget-accent-color``
custom property, which a host page may override.
"""

__all__ = [
    "ACCENT_PROPERTY",
    "WIDGET_CSS",
    "render_styles",
]

ACCENT_PROPERTY = "--promo-widget-accent-color"

WIDGET_CSS = """
  .promo-widget {
    --card-bg: #fff;
    --card-border: #ddd;
    --card-shadow: 0 4px 15px rgba(0,0,0,0.08);
    --card-shadow-hover: 0 12px 25px rgba(0,0,0,0.12);
    --text-primary: #333;
    --text-secondary: #555;
    --text-muted: #777;
    --text-label: #666;
    --filter-border: #dee2e6;
    --filter-logo-bg: #fff;
    --filter-name-color: #6c757d;
    --image-bg: #f0f0f0;
    --dealer-price-color: #d9534f;
    --elite-price-color: #b58900;
  }
  .promo-widget[data-theme="dark"] {
    --card-bg: #2d3748;
    --card-border: #4a5568;
    --card-shadow: 0 4px 15px rgba(0,0,0,0.2);
    --card-shadow-hover: 0 12px 25px rgba(0,0,0,0.3);
    --text-primary: #edf2f7;
    --text-secondary: #e2e8f0;
    --text-muted: #a0aec0;
    --text-label: #a0aec0;
    --filter-border: #4a5568;
    --filter-logo-bg: #4a5568;
    --filter-name-color: #a0aec0;
    --image-bg: #4a5568;
    --dealer-price-color: #e53e3e;
    --elite-price-color: #d69e2e;
  }
  [data-corners="sharp"] .promo-product-card,
  [data-corners="sharp"] .promo-filter-logo-box,
  [data-corners="sharp"] .promo-product-cta,
  [data-corners="sharp"] .promo-filter-item,
  [data-corners="sharp"] .promo-special-badge { border-radius: 4px; }
  [data-columns="2"] .promo-widget-container { grid-template-columns: repeat(2, 1fr); }
  [data-columns="3"] .promo-widget-container { grid-template-columns: repeat(3, 1fr); }
  [data-columns="4"] .promo-widget-container { grid-template-columns: repeat(4, 1fr); }
  @media (max-width: 800px) {
    [data-columns="4"] .promo-widget-container,
    [data-columns="3"] .promo-widget-container { grid-template-columns: repeat(2, 1fr); }
  }
  @media (max-width: 500px) {
    [data-columns="4"] .promo-widget-container,
    [data-columns="3"] .promo-widget-container,
    [data-columns="2"] .promo-widget-container { grid-template-columns: 1fr; }
  }
  @keyframes promo-pulse { 0% { transform: scale(1); box-shadow: 0 0 0 0 rgba(0, 123, 255, 0.7); } 70% { transform: scale(1.02); box-shadow: 0 0 0 10px rgba(0, 123, 255, 0); } 100% { transform: scale(1); box-shadow: 0 0 0 0 rgba(0, 123, 255, 0); } }
  @media (prefers-reduced-motion: reduce) { .promo-product-cta { animation: none !important; } }
  .promo-logo-filter-container { display: flex; flex-wrap: wrap; gap: 20px; align-items: flex-start; margin-bottom: 20px; padding-bottom: 20px; border-bottom: 1px solid var(--filter-border); }
  .promo-filter-item { display: flex; flex-direction: column; align-items: center; gap: 5px; cursor: pointer; text-align: center; padding: 5px; border: 2px solid transparent; border-radius: 8px; transition: all 0.2s ease; }
  .promo-filter-logo-box { width: 100px; height: 60px; display: flex; justify-content: center; align-items: center; background-color: var(--filter-logo-bg); border-radius: 6px; box-shadow: 0 2px 4px rgba(0,0,0,0.05); overflow: hidden; font-weight: 700; font-size: 1rem; }
  .promo-filter-logo { max-width: 100%; max-height: 100%; width: auto; height: auto; object-fit: contain; display: block; }
  .promo-filter-logo-box.all-brands { font-weight: 600; border: 2px dashed #ced4da; }
  .promo-filter-logo-box.flash { background: linear-gradient(135deg, #ff6b6b, #feca57); color: #111; }
  .promo-filter-item:hover { transform: scale(1.05); }
  .promo-filter-item.active { border-color: var(--promo-widget-accent-color); }
  .promo-filter-item.active .promo-filter-name { color: var(--promo-widget-accent-color); font-weight: 700; }
  .promo-filter-name { font-size: 0.8em; font-weight: 500; color: var(--filter-name-color); width: 100px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
  .promo-widget-container { display: grid; grid-template-columns: repeat(auto-fill, minmax(250px, 1fr)); gap: 25px; font-family: inherit; padding-top: 15px; }
  .promo-product-card { background-color: var(--card-bg); border: 1px solid var(--card-border); border-radius: 12px; overflow: hidden; box-shadow: var(--card-shadow); transition: transform 0.3s ease, box-shadow 0.3s ease; display: flex; flex-direction: column; position: relative; }
  .promo-product-card:hover { transform: translateY(-8px); box-shadow: var(--card-shadow-hover); }
  .promo-special-badge { position: absolute; top: 12px; left: -1px; background-color: #dc3545; color: white; padding: 5px 12px; font-size: 0.8em; font-weight: 700; border-radius: 0 5px 5px 0; box-shadow: 0 2px 5px rgba(0,0,0,0.2); z-index: 1; }
  .promo-special-badge.flash { background: linear-gradient(135deg, #ff6b6b, #feca57); color: #111; }
  .promo-image-wrapper { display: flex; justify-content: center; align-items: center; min-height: 180px; background-color: var(--image-bg); }
  .promo-product-image { width: auto; max-width: 100%; max-height: 180px; object-fit: contain; display: block; }
  .promo-product-info { padding: 20px; flex-grow: 1; display: flex; flex-direction: column; }
  .promo-product-header { display: flex; justify-content: space-between; align-items: flex-start; gap: 10px; margin-bottom: 5px; }
  .promo-product-name { font-size: 1.2em; font-weight: 600; color: var(--text-primary); line-height: 1.3; flex-grow: 1; margin: 0; }
  .promo-brand-logo { width: 50px; height: 50px; object-fit: contain; flex-shrink: 0; }
  .promo-product-item { font-size: 0.8em; color: var(--text-muted); margin: 0 0 10px 0; }
  .promo-product-description { font-size: 0.9em; color: var(--text-secondary); margin: 0 0 5px 0; line-height: 1.5; display: -webkit-box; -webkit-line-clamp: 2; -webkit-box-orient: vertical; overflow: hidden; min-height: 2.7em; }
  .promo-product-description.expanded { -webkit-line-clamp: unset; min-height: auto; }
  .promo-description-toggle { font-size: 0.85em; font-weight: 600; color: var(--promo-widget-accent-color, #007bff); cursor: pointer; text-decoration: none; margin-bottom: 15px; align-self: flex-start; }
  .promo-product-pricing { margin-bottom: 20px; display: flex; flex-direction: column; gap: 6px; }
  .promo-price-item { display: flex; justify-content: space-between; align-items: baseline; font-size: 0.9em; color: var(--text-secondary); }
  .promo-price-label { font-weight: 500; color: var(--text-label); }
  .promo-price-value { font-weight: 600; color: var(--text-primary); }
  .promo-price-item.dealer-price .promo-price-value { font-weight: 800; color: var(--dealer-price-color); font-size: 1.6em; }
  .promo-price-item.elite-price .promo-price-value { font-weight: 700; color: var(--elite-price-color); font-size: 1.05em; }
  .promo-product-cta-container { margin-top: auto; }
  .promo-product-cta { display: block; width: 100%; padding: 14px; background-color: var(--promo-widget-accent-color); color: #fff; text-align: center; text-decoration: none; border-radius: 8px; font-weight: 700; font-size: 1.1em; transition: filter 0.2s, transform 0.2s; box-sizing: border-box; animation: promo-pulse 2s infinite; }
  .promo-product-cta:hover { filter: brightness(90%); transform: scale(1.03); animation: none; }
"""


def render_styles(options: AppearanceOptions) -> str:
    accent = escape_text(options.accent_color)
    return f"<style>:root {{ {ACCENT_PROPERTY}: {accent}; }}{WIDGET_CSS}</style>"

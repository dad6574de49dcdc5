from __future__ import annotations

import json
from string import Template

from .filtering import FILTER_RULES
from .flash_window import END_OF_DAY, WINDOW_RULES
from .rules import to_js

"""Embedded interaction script.

The script is inlined into the embeddable markup. It knows nothing about the
source rows: visibility is re-derived from each card's ``data-*`` attributes.
The flash-window and filter bodies are rendered from the same rule tables the
preview evaluates in Python.

Initialization polls with requestAnimationFrame until the widget root is in
the document, because host pages may run the script before inserting the
markup.
"""

__all__ = [
    "render_interaction_script",
]

_SCRIPT = Template(r"""<script>
  (function() {
    function parseLocalYMD(ymd) {
      if (!ymd) return null;
      var m = /^([0-9]{4})-([0-9]{2})-([0-9]{2})$$/.exec(ymd);
      if (!m) return null;
      return new Date(Number(m[1]), Number(m[2]) - 1, Number(m[3]), 0, 0, 0, 0);
    }
    function isCurrentlyActiveFlash(card, now) {
      if (card.getAttribute('data-flash') !== 'true') return false;
      now = now || new Date();
      var start = parseLocalYMD(card.getAttribute('data-flash-start'));
      var end = parseLocalYMD(card.getAttribute('data-flash-end'));
      if (end) end.setHours($end_of_day);
$window_rules
      return false;
    }
    function isVisible(type, value, card, now) {
      var is_flash = card.getAttribute('data-flash') === 'true';
      var is_active = isCurrentlyActiveFlash(card, now);
      var brand = card.getAttribute('data-brand') || '';
$filter_rules
      return true;
    }
    function setupPromoWidget(widget) {
      var filterContainer = widget.querySelector('.promo-logo-filter-container');
      var productCards = widget.querySelectorAll('.promo-product-card');
      function applyFilter(type, value) {
        var now = new Date();
        for (var i = 0; i < productCards.length; i++) {
          var card = productCards[i];
          card.style.display = isVisible(type, value || '', card, now) ? 'flex' : 'none';
        }
      }
      function selectFilter(filterItem) {
        var items = filterContainer.querySelectorAll('.promo-filter-item');
        for (var i = 0; i < items.length; i++) {
          items[i].classList.remove('active');
          items[i].setAttribute('aria-selected', 'false');
        }
        filterItem.classList.add('active');
        filterItem.setAttribute('aria-selected', 'true');
        applyFilter(filterItem.getAttribute('data-filter') || 'all', filterItem.getAttribute('data-value'));
      }
      if (filterContainer) {
        filterContainer.addEventListener('click', function(e) {
          var filterItem = e.target.closest('.promo-filter-item');
          if (filterItem) selectFilter(filterItem);
        });
        filterContainer.addEventListener('keydown', function(e) {
          if (e.key !== 'Enter' && e.key !== ' ') return;
          var filterItem = e.target.closest('.promo-filter-item');
          if (!filterItem) return;
          e.preventDefault();
          selectFilter(filterItem);
        });
        var initial = filterContainer.querySelector('[data-filter="all"]');
        if (initial) selectFilter(initial);
      }
      var container = widget.querySelector('.promo-widget-container');
      if (container) {
        container.addEventListener('click', function(e) {
          var toggle = e.target.closest('.promo-description-toggle');
          if (!toggle) return;
          e.preventDefault();
          var description = document.getElementById(toggle.getAttribute('data-target'));
          if (description) {
            description.classList.toggle('expanded');
            toggle.textContent = description.classList.contains('expanded') ? 'See Less' : 'See More';
          }
        });
      }
    }
    function findAndInit() {
      var widget = document.getElementById($widget_id);
      if (widget) {
        setupPromoWidget(widget);
      } else {
        window.requestAnimationFrame(findAndInit);
      }
    }
    window.requestAnimationFrame(findAndInit);
  })();
</script>""")

_INDENT = " " * 6


def _window_rules_js() -> str:
    lines = []
    for guard, outcome in WINDOW_RULES:
        lines.append(f"{_INDENT}if ({to_js(guard)}) return {to_js(outcome)};")
    return "\n".join(lines)


def _filter_rules_js() -> str:
    lines = []
    for kind, expr in FILTER_RULES.items():
        lines.append(f"{_INDENT}if (type === {json.dumps(kind)}) return {to_js(expr)};")
    return "\n".join(lines)


def render_interaction_script(widget_id: str) -> str:
    """Script text for one widget instance, bound to ``widget_id``."""
    # "</" must not appear inside the script element
    literal = json.dumps(widget_id).replace("</", "<\\/")
    return _SCRIPT.substitute(
        widget_id=literal,
        end_of_day=", ".join(str(n) for n in END_OF_DAY),
        window_rules=_window_rules_js(),
        filter_rules=_filter_rules_js(),
    )

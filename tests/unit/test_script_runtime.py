from __future__ import annotations

import json
import re
import shutil
import subprocess
from datetime import date, timedelta
from html.parser import HTMLParser
from pathlib import Path

import pytest

from promo_widget.services.markup import generate_widget

"""Runs the embedded script under node against a minimal DOM built from the embed markup."""

NODE = shutil.which("node")

pytestmark = pytest.mark.skipif(NODE is None, reason="node is not installed")

VOID_TAGS = {"img", "br", "hr", "input", "meta", "link"}

# Element subset the widget script touches: attributes, classList, style,
# closest/querySelector(All) for ".class" and [attr="value"], bubbling listeners.
DOM_HARNESS = r"""
function matches(el, sel) {
  if (sel[0] === '.') return el.classList.contains(sel.slice(1));
  var m = /^\[([\w-]+)="([^"]*)"\]$/.exec(sel);
  return m ? el.getAttribute(m[1]) === m[2] : false;
}
function walk(el, fn) { fn(el); el.children.forEach(function(c) { walk(c, fn); }); }
function makeEl(node, parent) {
  var el = {
    tagName: node.tag, attrs: Object.assign({}, node.attrs), parent: parent,
    style: {}, listeners: {}, text: node.text || '',
    getAttribute: function(n) { return n in this.attrs ? this.attrs[n] : null; },
    setAttribute: function(n, v) { this.attrs[n] = String(v); },
    addEventListener: function(t, fn) { (this.listeners[t] = this.listeners[t] || []).push(fn); },
    closest: function(sel) { for (var e = this; e; e = e.parent) { if (matches(e, sel)) return e; } return null; },
    querySelectorAll: function(sel) {
      var self = this, out = [];
      walk(this, function(e) { if (e !== self && matches(e, sel)) out.push(e); });
      return out;
    },
    querySelector: function(sel) { return this.querySelectorAll(sel)[0] || null; }
  };
  el.classList = {
    list: function() { return (el.attrs['class'] || '').split(/\s+/).filter(Boolean); },
    contains: function(c) { return this.list().indexOf(c) >= 0; },
    add: function(c) { var l = this.list(); if (l.indexOf(c) < 0) l.push(c); el.attrs['class'] = l.join(' '); },
    remove: function(c) { el.attrs['class'] = this.list().filter(function(x) { return x !== c; }).join(' '); },
    toggle: function(c) { if (this.contains(c)) { this.remove(c); return false; } this.add(c); return true; }
  };
  Object.defineProperty(el, 'textContent', {
    get: function() { return el.text; },
    set: function(v) { el.text = String(v); }
  });
  el.children = (node.children || []).map(function(c) { return makeEl(c, el); });
  return el;
}

var root = makeEl(TREE, null);
var inserted = false;
var frames = [];
global.window = { requestAnimationFrame: function(fn) { frames.push(fn); } };
global.document = {
  getElementById: function(id) {
    if (!inserted) return null;
    var found = null;
    walk(root, function(e) { if (!found && e.attrs.id === id) found = e; });
    return found;
  }
};
function flush() { for (var n = 0; frames.length && n < 10; n++) frames.shift()(); }
function dispatch(target, type, extra) {
  var ev = Object.assign({ target: target, preventDefault: function() { this.prevented = true; } }, extra || {});
  for (var e = target; e; e = e.parent) (e.listeners[type] || []).forEach(function(fn) { fn(ev); });
  return ev;
}
function widgetState() {
  var widget = document.getElementById(WIDGET_ID);
  var visible = [];
  widget.querySelectorAll('.promo-product-card').forEach(function(c, i) {
    if (c.style.display !== 'none') visible.push(i);
  });
  var items = widget.querySelectorAll('.promo-filter-item');
  return {
    visible: visible,
    active: items.filter(function(i) { return i.classList.contains('active'); })
      .map(function(i) { return i.getAttribute('data-filter') + ':' + (i.getAttribute('data-value') || ''); }),
    selected: items.filter(function(i) { return i.getAttribute('aria-selected') === 'true'; }).length
  };
}
function filterItem(kind, value) {
  return document.getElementById(WIDGET_ID).querySelectorAll('.promo-filter-item').filter(function(i) {
    return i.getAttribute('data-filter') === kind && (value === undefined || i.getAttribute('data-value') === value);
  })[0];
}
"""

SCENARIO = r"""
var out = {};
flush();
out.waiting = frames.length > 0;
inserted = true;
flush();
out.initial = widgetState();

var globexName = filterItem('brand', 'Globex').querySelector('.promo-filter-name');
dispatch(globexName, 'click');
out.brand = widgetState();

dispatch(filterItem('flash'), 'keydown', { key: 'Enter' });
out.flash = widgetState();

var ignored = dispatch(filterItem('all'), 'keydown', { key: 'a' });
out.ignoredKey = widgetState();
out.ignoredPrevented = !!ignored.prevented;

var toggle = document.getElementById(WIDGET_ID).querySelector('.promo-description-toggle');
var description = document.getElementById(toggle.getAttribute('data-target'));
dispatch(toggle, 'click');
out.expanded = [description.classList.contains('expanded'), toggle.textContent];
dispatch(toggle, 'click');
out.collapsed = [description.classList.contains('expanded'), toggle.textContent];

console.log(JSON.stringify(out));
"""


class _TreeBuilder(HTMLParser):
    """Nested dict tree of the markup; style and script bodies are dropped."""

    def __init__(self) -> None:
        super().__init__()
        self.root = {"tag": "#root", "attrs": {}, "children": [], "text": ""}
        self.stack = [self.root]
        self.raw_depth = 0

    def handle_starttag(self, tag, attrs):
        node = {"tag": tag, "attrs": {k: v or "" for k, v in attrs}, "children": [], "text": ""}
        self.stack[-1]["children"].append(node)
        if tag in VOID_TAGS:
            return
        self.stack.append(node)
        if tag in ("style", "script"):
            self.raw_depth += 1

    def handle_endtag(self, tag):
        if tag in VOID_TAGS:
            return
        if tag in ("style", "script"):
            self.raw_depth -= 1
        self.stack.pop()

    def handle_data(self, data):
        if not self.raw_depth:
            self.stack[-1]["text"] += data


def _run_embed(embed: str, widget_id: str, tmp_path: Path) -> dict:
    builder = _TreeBuilder()
    builder.feed(embed)
    builder.close()
    script_body = re.search(r"<script>(.*)</script>", embed, re.S).group(1)
    source = "\n".join((
        f"var TREE = {json.dumps(builder.root)};",
        f"var WIDGET_ID = {json.dumps(widget_id)};",
        DOM_HARNESS,
        script_body,
        SCENARIO,
    ))
    path = tmp_path / "widget_run.js"
    path.write_text(source, encoding="utf-8")
    done = subprocess.run([NODE, str(path)], capture_output=True, text=True, timeout=60, check=True)
    return json.loads(done.stdout.strip().splitlines()[-1])


@pytest.fixture()
def script_run(tmp_path: Path, fixed_ids) -> dict:
    today = date.today()
    rows = [
        {"product name": "Plain", "brand name": "Acme", "brand logo url": "https://x/acme.png",
         "product description": "d" * 200},
        {"product name": "Live flash", "brand name": "Globex", "brand logo url": "https://x/globex.png",
         "flash sale": "yes", "flash start date": (today - timedelta(days=1)).isoformat(),
         "flash end date": (today + timedelta(days=1)).isoformat()},
        {"product name": "Expired flash", "brand name": "Globex", "brand logo url": "https://x/globex.png",
         "flash sale": "yes", "flash end date": (today - timedelta(days=10)).isoformat()},
    ]
    widget = generate_widget(rows, id_factory=fixed_ids)
    return _run_embed(widget.embeddable_markup, widget.widget_id, tmp_path)


def test_script_waits_for_widget_root(script_run):
    assert script_run["waiting"] is True


def test_initial_selection_is_all(script_run):
    assert script_run["initial"] == {"visible": [0, 1, 2], "active": ["all:"], "selected": 1}


def test_brand_click_shows_only_that_brand(script_run):
    assert script_run["brand"] == {"visible": [1, 2], "active": ["brand:Globex"], "selected": 1}


def test_flash_enter_key_shows_open_windows_only(script_run):
    assert script_run["flash"] == {"visible": [1], "active": ["flash:"], "selected": 1}


def test_other_keys_do_not_change_selection(script_run):
    assert script_run["ignoredKey"] == script_run["flash"]
    assert script_run["ignoredPrevented"] is False


def test_description_toggle(script_run):
    assert script_run["expanded"] == [True, "See Less"]
    assert script_run["collapsed"] == [False, "See More"]

# Shared pytest fixtures
from __future__ import annotations

import itertools
import tempfile
from pathlib import Path

import pandas as pd
import pytest

HEADER = [
    "Product name", "Item number", "Product description", "Brand Name", "Brand Logo URL",
    "Special Promo Text", "MSRP", "MAP", "Dealer Price", "Elite Dealer Price",
    "Image URL", "Product URL", "Flash Sale", "Flash Start Date", "Flash End Date", "Flash Badge Text",
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """header_detection:
  max_missing: 4
  scan_rows: 10
appearance:
  accent_color: "#ff6600"
  columns: 3
  theme: dark
  corner_radius: sharp
  show_item_number: true
output:
  directory: ./out
  preview_file: preview.html
  embed_file: embed.html
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "widget.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def fixed_ids():
    """Deterministic widget id source: promo-widget-test-1, -2, ..."""
    counter = itertools.count(1)
    return lambda: f"promo-widget-test-{next(counter)}"


@pytest.fixture()
def product_rows() -> list[dict[str, object]]:
    return [
        {
            "product name": "Performance Widget",
            "item number": "W-001",
            "product description": "Experience unparalleled performance and reliability with our next-generation widget.",
            "brand name": "Acme Corp",
            "brand logo url": "https://placehold.co/120x60?text=ACME",
            "special promo text": "20% OFF!",
            "msrp": 199.99,
            "map": 179.99,
            "dealer price": 149.99,
            "elite dealer price": 139.99,
            "image url": "https://placehold.co/400x300?text=Product+1",
            "product url": "https://example.com/product1",
        },
        {
            "product name": "Synergy Gadget",
            "item number": "G-002",
            "product description": "Seamlessly integrates with your workflow.",
            "brand name": "Globex Inc",
            "brand logo url": "https://placehold.co/120x60?text=GLOBEX",
            "msrp": "$249.99",
            "dealer price": "199.99",
            "image url": "https://placehold.co/400x300?text=Product+2",
            "product url": "https://example.com/product2",
        },
    ]


def write_xlsx(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_xlsx(temp_workdir: Path):
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return write_xlsx(temp_workdir / "data" / name, sheets)
    return _make


@pytest.fixture()
def catalog_xlsx(make_xlsx) -> Path:
    """Workbook with a notes sheet first and the catalog (title row + header) second."""
    return make_xlsx(
        "catalog.xlsx",
        {
            "Notes": [["Read me"], ["Fill in the Products sheet"]],
            "Products": [
                ["September promotions", None],
                HEADER,
                ["Performance Widget", "W-001", "Fast.", "Acme Corp", "https://x/acme.png", "20% OFF!",
                 199.99, 179.99, 149.99, 139.99, "https://x/1.png", "https://example.com/1", "", "", "", ""],
                ["Synergy Gadget", "G-002", "Handy.", "Globex Inc", "https://x/globex.png", "",
                 249.99, 229.99, 199.99, None, "https://x/2.png", "https://example.com/2",
                 "Yes", "2025-09-15", "2025-09-21", "Weekly Flash"],
            ],
        },
    )

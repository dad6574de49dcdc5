from __future__ import annotations

from dataclasses import dataclass, field

from .appearance import AppearanceOptions

"""Config dataclasses for the promotion widget generator.

``WidgetConfig`` is what ``config.loader.load_config`` returns; every section
has defaults so that a missing config file still yields a usable config.
"""

__all__ = [
    "EXPECTED_COLUMNS",
    "FULL_HEADER_POLICY",
    "HeaderPolicy",
    "OutputConfig",
    "SHORT_EXPECTED_COLUMNS",
    "SHORT_HEADER_POLICY",
    "WidgetConfig",
]

EXPECTED_COLUMNS: tuple[str, ...] = (
    "Product name", "Item number", "Product description", "Brand Name", "Brand Logo URL",
    "Special Promo Text", "MSRP", "MAP", "Dealer Price", "Elite Dealer Price",
    "Image URL", "Product URL",
)
SHORT_EXPECTED_COLUMNS: tuple[str, ...] = EXPECTED_COLUMNS[:5]


@dataclass(frozen=True)
class HeaderPolicy:
    """How the header row is located in a sheet.

    A row qualifies when it contains at least ``required_count`` of the
    expected columns (case and surrounding whitespace ignored). That is
    ``min_present`` when set, otherwise all but ``max_missing`` columns.
    """
    expected_columns: tuple[str, ...] = EXPECTED_COLUMNS
    max_missing: int = 4
    min_present: int | None = None
    scan_rows: int = 10  # only the first rows of a sheet are candidates

    @property
    def lowercase_columns(self) -> tuple[str, ...]:
        return tuple(c.strip().lower() for c in self.expected_columns)

    @property
    def required_count(self) -> int:
        if self.min_present is not None:
            return max(1, self.min_present)
        return max(1, len(self.expected_columns) - self.max_missing)


FULL_HEADER_POLICY = HeaderPolicy()
SHORT_HEADER_POLICY = HeaderPolicy(expected_columns=SHORT_EXPECTED_COLUMNS, min_present=3)


@dataclass(frozen=True)
class OutputConfig:
    directory: str = "./widget"
    preview_file: str = "preview.html"
    embed_file: str = "embed.html"


@dataclass(frozen=True)
class WidgetConfig:
    """Root configuration object."""
    header: HeaderPolicy = field(default_factory=HeaderPolicy)
    appearance: AppearanceOptions = field(default_factory=AppearanceOptions)
    output: OutputConfig = field(default_factory=OutputConfig)

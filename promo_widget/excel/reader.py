from __future__ import annotations

import csv
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.config_models import FULL_HEADER_POLICY, HeaderPolicy
from ..models.product_row import ProductRow, normalize_key
from ..services.fields import cell_text

"""Spreadsheet reading and header-row normalization.

Reading (``read_workbook``) is delegated to pandas and only turns a file into
raw grids, one per sheet, in workbook order. Normalization
(``normalize_workbook``) is pure:

1. look for the header row among the first ``scan_rows`` rows of each sheet
2. a row qualifies when enough expected column names appear in it
   (case/whitespace-insensitive)
3. the first sheet with a qualifying header and at least one data row wins
4. data rows are keyed by the lowercased, trimmed header text
"""

__all__ = [
    "NoHeaderFound",
    "SheetData",
    "UnreadableFile",
    "find_header_row",
    "normalize_workbook",
    "read_workbook",
    "rows_from_grid",
]

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[Any]]

CSV_SUFFIXES = {".csv"}

# .xls is the legacy binary format; only xlrd reads it
EXCEL_ENGINES = {".xls": "xlrd", ".xlsx": "openpyxl", ".xlsm": "openpyxl"}


class UnreadableFile(Exception):
    """Raised when the spreadsheet library cannot decode the file at all."""


class NoHeaderFound(Exception):
    """Raised when no sheet has a recognizable header row with data below it."""

    def __init__(self, expected_columns: Sequence[str]) -> None:
        self.expected_columns = list(expected_columns)
        super().__init__(
            "Could not find required columns on any sheet. "
            f"Please ensure your file includes headers like: {', '.join(self.expected_columns)}"
        )


@dataclass
class SheetData:
    sheet_name: str
    header_row: int  # 0-based index of the header row in the sheet grid
    columns: list[str]  # normalized keys, in column order
    rows: list[ProductRow]


def _blank_to_empty(value: Any) -> Any:
    if value is None:
        return ""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return value


def _frame_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    return [[_blank_to_empty(v) for v in row] for row in df.itertuples(index=False, name=None)]


def _csv_width(path: Path) -> int:
    """Widest record of a CSV file; title rows above the header may be narrower."""
    with path.open(newline="", encoding="utf-8-sig") as fh:
        return max((len(record) for record in csv.reader(fh)), default=0)


def read_workbook(path: Path) -> dict[str, list[list[Any]]]:
    """Read every sheet of ``path`` as a raw grid (no header applied).

    CSV files are read as a single sheet named after the file stem; short
    records are padded to the widest one. Blank cells become "". Cell types
    are kept (numbers stay numbers, date cells stay datetimes).
    """
    path = Path(path)
    suffix = path.suffix.lower()
    frames: dict[str, pd.DataFrame] = {}
    try:
        if suffix in CSV_SUFFIXES:
            width = _csv_width(path)
            frames[path.stem] = pd.read_csv(
                path,
                header=None,
                names=list(range(width)) or None,
                dtype=object,
                keep_default_na=False,
                encoding="utf-8-sig",
            )
        else:
            with pd.ExcelFile(path, engine=EXCEL_ENGINES.get(suffix)) as xls:
                for name in xls.sheet_names:
                    frames[str(name)] = xls.parse(name, header=None, dtype=object)
    except Exception as e:  # any parser failure means the file is unusable
        raise UnreadableFile(f"failed to read '{path.name}': {e}") from e
    return {name: _frame_to_grid(df) for name, df in frames.items()}


def find_header_row(grid: Grid, policy: HeaderPolicy = FULL_HEADER_POLICY) -> int | None:
    """Index of the first qualifying header row within the scan window."""
    expected = policy.lowercase_columns
    for i, row in enumerate(grid[: policy.scan_rows]):
        cells = {cell_text(c).strip().lower() for c in row}
        found = sum(1 for col in expected if col in cells)
        if found >= policy.required_count:
            return i
    return None


def _header_keys(header: Sequence[Any]) -> list[str | None]:
    """Normalized key per column position; None for blank header cells.

    A repeated header keeps its plain name for the first column and gets
    ``_1``, ``_2``... for later ones.
    """
    keys: list[str | None] = []
    seen: dict[str, int] = {}
    for cell in header:
        key = normalize_key(cell_text(cell))
        if not key:
            keys.append(None)
            continue
        if key in seen:
            seen[key] += 1
            key = f"{key}_{seen[key]}"
        else:
            seen[key] = 0
        keys.append(key)
    return keys


def rows_from_grid(grid: Grid, header_index: int) -> list[dict[str, Any]]:
    """Mappings for every non-blank row below ``header_index``."""
    keys = _header_keys(grid[header_index])
    out: list[dict[str, Any]] = []
    for raw in grid[header_index + 1:]:
        values = [_blank_to_empty(v) for v in raw]
        if all(cell_text(v).strip() == "" for v in values):
            continue
        row: dict[str, Any] = {}
        for pos, key in enumerate(keys):
            if key is None:
                continue
            row[key] = values[pos] if pos < len(values) else ""
        out.append(row)
    return out


def normalize_workbook(
    workbook: Mapping[str, Grid],
    policy: HeaderPolicy = FULL_HEADER_POLICY,
) -> SheetData:
    """Normalize the first sheet that has a header row and data.

    Raises:
        NoHeaderFound: no sheet qualifies (the expected columns are attached)
    """
    for sheet_name, grid in workbook.items():
        header_index = find_header_row(grid, policy)
        if header_index is None:
            logger.debug(f"sheet '{sheet_name}': no header row in first {policy.scan_rows} rows")
            continue
        mappings = rows_from_grid(grid, header_index)
        if not mappings:
            logger.debug(f"sheet '{sheet_name}': header at row {header_index + 1} but no data rows")
            continue
        columns = [k for k in _header_keys(grid[header_index]) if k is not None]
        logger.debug(
            f"sheet '{sheet_name}': header at row {header_index + 1}, {len(mappings)} data rows"
        )
        return SheetData(
            sheet_name=sheet_name,
            header_row=header_index,
            columns=columns,
            rows=[ProductRow.from_mapping(m, index=i) for i, m in enumerate(mappings)],
        )
    raise NoHeaderFound(policy.expected_columns)

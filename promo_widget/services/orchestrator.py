from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from ..excel.reader import NoHeaderFound, SheetData, UnreadableFile, normalize_workbook, read_workbook
from ..models.appearance import AppearanceOptions
from ..models.config_models import HeaderPolicy, OutputConfig, WidgetConfig
from ..models.widget_result import GeneratedWidget
from .markup import generate_widget

"""Generation orchestration: spreadsheet file -> rows -> widget markup.

Each step runs to completion before the next one starts. A failure while
reading or normalizing aborts the whole run; nothing is written in that case.
"""

__all__ = [
    "GenerationError",
    "GenerationResult",
    "NoHeaderFound",
    "UnreadableFile",
    "generate_from_file",
    "generate_from_workbook",
    "write_outputs",
]

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when output files cannot be written."""


@dataclass(frozen=True)
class GenerationResult:
    source: str  # file name or "<workbook>"
    sheet: SheetData
    widget: GeneratedWidget


def generate_from_workbook(
    workbook: Mapping[str, Sequence[Sequence[Any]]],
    options: AppearanceOptions | None = None,
    policy: HeaderPolicy | None = None,
    *,
    id_factory: Callable[[], str] | None = None,
    now: datetime | None = None,
    source: str = "<workbook>",
) -> GenerationResult:
    """Normalize an in-memory workbook and generate the widget.

    Raises:
        NoHeaderFound: no sheet has a recognizable header row
    """
    sheet = normalize_workbook(workbook, policy or HeaderPolicy())
    logger.info(f"Using sheet '{sheet.sheet_name}' ({len(sheet.rows)} rows, header row {sheet.header_row + 1})")
    widget = generate_widget(sheet.rows, options, id_factory=id_factory, now=now)
    return GenerationResult(source=source, sheet=sheet, widget=widget)


def generate_from_file(
    path: Path,
    config: WidgetConfig | None = None,
    *,
    id_factory: Callable[[], str] | None = None,
    now: datetime | None = None,
) -> GenerationResult:
    """Read ``path`` and generate the widget with ``config``.

    Raises:
        UnreadableFile: the file could not be decoded
        NoHeaderFound: no sheet has a recognizable header row
    """
    config = config or WidgetConfig()
    logger.info(f"Reading spreadsheet: {path}")
    workbook = read_workbook(path)
    logger.debug(f"sheets: {list(workbook)}")
    return generate_from_workbook(
        workbook,
        config.appearance,
        config.header,
        id_factory=id_factory,
        now=now,
        source=Path(path).name,
    )


def write_outputs(widget: GeneratedWidget, output: OutputConfig, directory: Path | None = None) -> tuple[Path, Path]:
    """Write preview and embed markup; returns (preview_path, embed_path)."""
    out_dir = Path(directory) if directory is not None else Path(output.directory)
    preview_path = out_dir / output.preview_file
    embed_path = out_dir / output.embed_file
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        preview_path.write_text(widget.preview_markup, encoding="utf-8")
        embed_path.write_text(widget.embeddable_markup, encoding="utf-8")
    except OSError as e:
        raise GenerationError(f"failed to write output: {e}") from e
    logger.info(f"Wrote {preview_path} and {embed_path}")
    return preview_path, embed_path

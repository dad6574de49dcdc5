from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from promo_widget.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from promo_widget.excel.reader import (
    NoHeaderFound,
    UnreadableFile,
    find_header_row,
    read_workbook,
    rows_from_grid,
)
from promo_widget.logging.init import log_summary, set_debug, setup_logging
from promo_widget.models.appearance import COLUMN_CHOICES, CORNER_CHOICES, THEME_CHOICES
from promo_widget.models.config_models import WidgetConfig
from promo_widget.services.orchestrator import GenerationError, generate_from_file, write_outputs
from promo_widget.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (values override the process environment)
- Load config (``--config``, ``$PROMO_WIDGET_CONFIG`` or ``config/widget.yml``)
- Apply appearance flags on top of the config
- Read the spreadsheet, generate the widget, write preview.html / embed.html
- Print the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_INPUT_ERROR = 2

ENV_CONFIG = "PROMO_WIDGET_CONFIG"
ENV_OUTPUT_DIR = "PROMO_WIDGET_OUTPUT_DIR"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; a broken file only produces a warning."""
    if not path.exists():
        return
    try:
        load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="promo-widget",
        description="Spreadsheet -> embeddable promotion widget (HTML/CSS/JS)",
    )
    p.add_argument("input", type=Path, help="Product spreadsheet (.xlsx, .xls or .csv)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--out-dir", type=Path, default=None, help="Directory for preview.html / embed.html")
    p.add_argument("--accent-color", default=None, help="Accent colour, e.g. '#007bff'")
    p.add_argument("--columns", choices=COLUMN_CHOICES, default=None)
    p.add_argument("--theme", choices=THEME_CHOICES, default=None)
    p.add_argument("--corners", choices=CORNER_CHOICES, default=None)
    p.add_argument("--hide-item-number", action="store_true", help="Do not show item numbers on cards")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header & first rows then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace, logger) -> WidgetConfig:
    explicit = args.config or (Path(os.environ[ENV_CONFIG]) if os.getenv(ENV_CONFIG) else None)
    if explicit is not None:
        cfg = load_config(explicit)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        logger.debug(f"no config at {DEFAULT_CONFIG_PATH} -> built-in defaults")
        cfg = WidgetConfig()

    overrides: dict[str, Any] = {}
    if args.accent_color is not None:
        overrides["accent_color"] = args.accent_color
    if args.columns is not None:
        overrides["columns"] = args.columns
    if args.theme is not None:
        overrides["theme"] = args.theme
    if args.corners is not None:
        overrides["corner_radius"] = args.corners
    if args.hide_item_number:
        overrides["show_item_number"] = False
    if not overrides:
        return cfg
    try:
        appearance = dataclasses.replace(cfg.appearance, **overrides)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    return dataclasses.replace(cfg, appearance=appearance)


def _inspect_data(path: Path, cfg: WidgetConfig) -> int:
    try:
        workbook = read_workbook(path)
    except UnreadableFile as e:
        print(f"inspect: {e}")
        return EXIT_INPUT_ERROR
    print(f"FILE: {path.name}")
    for sname, grid in workbook.items():
        header_index = find_header_row(grid, cfg.header)
        if header_index is None:
            print(f"  SHEET: {sname} header=not found (first {cfg.header.scan_rows} rows)")
            continue
        rows = rows_from_grid(grid, header_index)
        print(f"  SHEET: {sname} header_row={header_index + 1} data_rows={len(rows)}")
        print(f"    cols={list(rows[0]) if rows else []}")
        safe_rows = []
        for r in rows[:3]:
            safe_rows.append({k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()})
        print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.input, cfg)

    try:
        result = generate_from_file(args.input, cfg)
    except (UnreadableFile, NoHeaderFound) as e:
        logger.error(f"input: {e}")
        return EXIT_INPUT_ERROR

    out_dir = args.out_dir or (Path(os.environ[ENV_OUTPUT_DIR]) if os.getenv(ENV_OUTPUT_DIR) else None)
    try:
        write_outputs(result.widget, cfg.output, out_dir)
    except GenerationError as e:
        logger.error(f"output: {e}")
        return EXIT_FATAL

    log_summary(render_summary_line(result.widget, result.sheet.sheet_name))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

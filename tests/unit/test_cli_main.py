from __future__ import annotations

from pathlib import Path

import pytest

from promo_widget.cli import main as cli_main
from promo_widget.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PROMO_WIDGET_CONFIG", raising=False)
    monkeypatch.delenv("PROMO_WIDGET_OUTPUT_DIR", raising=False)
    reset_logging()
    yield
    reset_logging()


def test_cli_requires_input(temp_workdir: Path):
    with pytest.raises(SystemExit) as e:
        cli_main([])
    assert e.value.code == 2


def test_cli_rejects_unknown_theme(temp_workdir: Path, catalog_xlsx: Path):
    with pytest.raises(SystemExit):
        cli_main([str(catalog_xlsx), "--theme", "neon"])


def test_cli_bad_accent_flag_is_config_error(temp_workdir: Path, catalog_xlsx: Path, capsys):
    code = cli_main([str(catalog_xlsx), "--accent-color", "red;}"])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_cli_config_from_environment(monkeypatch, temp_workdir: Path, catalog_xlsx: Path, sample_config_yaml: str):
    cfg = temp_workdir / "alt.yml"
    cfg.write_text(sample_config_yaml.replace("theme: dark", "theme: light"), encoding="utf-8")
    monkeypatch.setenv("PROMO_WIDGET_CONFIG", str(cfg))
    assert cli_main([str(catalog_xlsx)]) == 0
    assert 'data-theme="light"' in (temp_workdir / "out" / "embed.html").read_text(encoding="utf-8")


def test_cli_dotenv_overrides_environment(monkeypatch, temp_workdir: Path, catalog_xlsx: Path):
    monkeypatch.setenv("PROMO_WIDGET_OUTPUT_DIR", str(temp_workdir / "from_process"))
    (temp_workdir / ".env").write_text(f"PROMO_WIDGET_OUTPUT_DIR={temp_workdir / 'from_dotenv'}\n", encoding="utf-8")
    assert cli_main([str(catalog_xlsx)]) == 0
    assert (temp_workdir / "from_dotenv" / "embed.html").exists()
    assert not (temp_workdir / "from_process").exists()


def test_cli_debug_mode(temp_workdir: Path, catalog_xlsx: Path, capsys):
    assert cli_main([str(catalog_xlsx), "--debug"]) == 0
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG sheet 'Notes': no header row" in out
    assert "INFO Using sheet 'Products'" in out


def test_cli_inspect_data(temp_workdir: Path, catalog_xlsx: Path, capsys):
    code = cli_main([str(catalog_xlsx), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: catalog.xlsx" in out
    assert "SHEET: Notes header=not found" in out
    assert "SHEET: Products header_row=2 data_rows=2" in out
    assert not (temp_workdir / "widget").exists()

"""Command line interface (``python -m promo_widget.cli``)."""

from __future__ import annotations

__all__ = ["main"]


def main(argv: list[str] | None = None) -> int:
    # imported lazily so that ``python -m promo_widget.cli`` runs __main__ only once
    from .__main__ import main as _main

    return _main(argv)

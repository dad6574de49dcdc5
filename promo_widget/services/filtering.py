from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..models.product_view import ProductView
from .flash_window import is_flash_active
from .rules import And, Cmp, Const, Expr, Var, evaluate

"""Filter-bar semantics.

"All" shows every card, whatever the state of its flash window. "Brand" shows
every card of that brand. Only "Flash Sales" consults the window, and shows
flash cards whose window is open at view time.
"""

__all__ = [
    "FILTER_KINDS",
    "FILTER_RULES",
    "ActiveFilter",
    "is_card_visible",
]

FILTER_KINDS = ("all", "flash", "brand")

FILTER_RULES: dict[str, Expr] = {
    "all": Const(True),
    "flash": And(Var("is_flash"), Var("is_active")),
    "brand": Cmp(Var("brand"), "==", Var("value")),
}


@dataclass(frozen=True)
class ActiveFilter:
    """Current filter selection of a view; replaced, never mutated."""
    kind: str = "all"
    value: str = ""

    def __post_init__(self) -> None:
        if self.kind not in FILTER_KINDS:
            raise ValueError(f"unknown filter kind: {self.kind!r}")

    @classmethod
    def all(cls) -> ActiveFilter:
        return cls("all")

    @classmethod
    def flash(cls) -> ActiveFilter:
        return cls("flash")

    @classmethod
    def brand(cls, name: str) -> ActiveFilter:
        return cls("brand", name)


def is_card_visible(view: ProductView, active: ActiveFilter, now: datetime | None = None) -> bool:
    env = {
        "is_flash": view.is_flash,
        "is_active": is_flash_active(view.is_flash, view.flash_start, view.flash_end, now),
        "brand": view.brand_name,
        "value": active.value,
    }
    return bool(evaluate(FILTER_RULES[active.kind], env))

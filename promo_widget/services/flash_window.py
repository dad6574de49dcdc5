from __future__ import annotations

from datetime import date, datetime
from typing import Any

from .fields import parse_ymd
from .rules import And, Cmp, Const, Expr, Not, Var, evaluate

"""Flash-sale activity window.

Start and end are calendar dates in the viewer's local time. The end date is
inclusive through 23:59:59.999 of that day. The decision table below is the
only definition of the window; the embedded script renders its JS version
from the same ``WINDOW_RULES``.

    neither date  -> active
    start and end -> start <= now <= end
    start only    -> now >= start
    end only      -> now <= end
"""

__all__ = [
    "END_OF_DAY",
    "WINDOW_RULES",
    "is_flash_active",
    "local_now",
    "parse_local_ymd",
]

# hour, minute, second, millisecond
END_OF_DAY = (23, 59, 59, 999)

_START = Var("start")
_END = Var("end")
_NOW = Var("now")

# (guard, outcome); first guard that holds decides
WINDOW_RULES: tuple[tuple[Expr, Expr], ...] = (
    (And(Not(_START), Not(_END)), Const(True)),
    (And(_START, _END), And(Cmp(_NOW, ">=", _START), Cmp(_NOW, "<=", _END))),
    (_START, Cmp(_NOW, ">=", _START)),
    (_END, Cmp(_NOW, "<=", _END)),
)


def parse_local_ymd(value: str | date | None) -> datetime | None:
    """Local midnight of a ``YYYY-MM-DD`` date, built from its components."""
    if isinstance(value, datetime):
        value = value.date()
    d = value if isinstance(value, date) else parse_ymd(value or "")
    if d is None:
        return None
    return datetime(d.year, d.month, d.day)


def _end_of_day(d: datetime) -> datetime:
    hour, minute, second, millis = END_OF_DAY
    return d.replace(hour=hour, minute=minute, second=second, microsecond=millis * 1000)


def local_now(now: datetime | None = None) -> datetime:
    """Naive local time; aware datetimes are converted to the local zone."""
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def is_flash_active(
    is_flash: bool,
    start: str | date | None,
    end: str | date | None,
    now: datetime | None = None,
) -> bool:
    if not is_flash:
        return False
    start_dt = parse_local_ymd(start)
    end_dt = parse_local_ymd(end)
    if end_dt is not None:
        end_dt = _end_of_day(end_dt)
    env: dict[str, Any] = {"start": start_dt, "end": end_dt, "now": local_now(now)}
    for guard, outcome in WINDOW_RULES:
        if evaluate(guard, env):
            return bool(evaluate(outcome, env))
    return False

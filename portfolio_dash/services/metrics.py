"""Derived holding metrics computed with ``decimal.Decimal``.

Values arrive as strings from the CSV export and leave as strings, so a
holding stored and re-read never drifts through binary floating point.
Arithmetic runs in a context with the error traps off, so an absurd but
parsable cell yields a zero percentage instead of an exception.
"""

from contextlib import contextmanager
from dataclasses import dataclass, fields
from decimal import (
    ROUND_HALF_UP,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Any, Dict, Iterable, Iterator

from ..dto.portfolio import CsvRow

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PERCENT_QUANTUM = Decimal("0.0001")

# beyond this exponent a plain rendering would spell out every digit
MAX_PLAIN_EXPONENT = 28


@contextmanager
def _lenient_context() -> Iterator[None]:
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        ctx.traps[Overflow] = False
        ctx.traps[DivisionByZero] = False
        yield


def _finite_or_zero(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO


def to_decimal(value: Any) -> Decimal:
    """Parse a cell into a Decimal, falling back to zero on anything odd."""
    if value is None:
        return ZERO
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not number.is_finite():
        return ZERO
    return number


def format_decimal(value: Decimal) -> str:
    if value.is_zero():
        return "0"
    if abs(value.adjusted()) > MAX_PLAIN_EXPONENT:
        return str(value)
    return format(value, "f")


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    with _lenient_context():
        total = sum(values, ZERO)
    return _finite_or_zero(total)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    if whole.is_zero():
        return ZERO
    with _lenient_context():
        result = (part / whole * HUNDRED).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
    return _finite_or_zero(result)


def pnl_percent(pnl: Decimal, invested: Decimal) -> Decimal:
    if invested <= 0:
        return ZERO
    return percent_of(pnl, invested)


def day_change_percent(day_change: Decimal, current_value: Decimal) -> Decimal:
    # relative to the value before today's move
    with _lenient_context():
        previous_value = current_value - day_change
    if current_value <= 0 or not previous_value.is_finite() or previous_value <= 0:
        return ZERO
    return percent_of(day_change, previous_value)


@dataclass(frozen=True)
class HoldingMetrics:
    quantity: Decimal
    avg_cost: Decimal
    ltp: Decimal
    invested: Decimal
    current_value: Decimal
    pnl: Decimal
    pnl_percent: Decimal
    day_change: Decimal
    day_change_percent: Decimal

    def as_strings(self) -> Dict[str, str]:
        return {field.name: format_decimal(getattr(self, field.name)) for field in fields(self)}


def compute_metrics(row: CsvRow) -> HoldingMetrics:
    invested = to_decimal(row.invested)
    current_value = to_decimal(row.current_value)
    pnl = to_decimal(row.pnl)
    day_change = to_decimal(row.day_change)

    return HoldingMetrics(
        quantity=to_decimal(row.quantity),
        avg_cost=to_decimal(row.avg_cost),
        ltp=to_decimal(row.ltp),
        invested=invested,
        current_value=current_value,
        pnl=pnl,
        pnl_percent=pnl_percent(pnl, invested),
        day_change=day_change,
        day_change_percent=day_change_percent(day_change, current_value),
    )

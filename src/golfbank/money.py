"""Decimal money helpers shared by every wager strategy."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from golfbank.config import get_settings

ZERO = Decimal("0.00")


def to_money(value: object) -> Decimal:
    """Quantize ``value`` to the configured money unit (cents by default)."""

    quantum = get_settings().money_quantum
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"not a money amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"not a money amount: {value!r}")
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def split_evenly(total: Decimal, parts: int) -> list[Decimal]:
    """Split ``total`` into ``parts`` shares that add back up to ``total`` exactly.

    Shares differ by at most one money unit; the leftover units go to the
    first shares, so callers control who absorbs them through ordering.
    """

    if parts <= 0:
        return []
    quantum = get_settings().money_quantum
    units = int((to_money(total) / quantum).to_integral_value())
    share, remainder = divmod(units, parts)
    return [(share + (1 if idx < remainder else 0)) * quantum for idx in range(parts)]


def sum_money(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def is_zero_sum(totals: Iterable[Decimal]) -> bool:
    return sum_money(totals) == 0

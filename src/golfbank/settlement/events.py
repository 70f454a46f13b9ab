"""Live money-change events.

The scorecard recomputes the live bank after each score edit. Comparing the
previous bank with the new one yields events the UI can turn into a sound,
a haptic buzz or a money pop; the core itself never touches device feedback.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from golfbank.money import ZERO


class Direction(str, Enum):
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class MoneyDelta:
    player_id: str
    amount: Decimal
    direction: Direction
    hole: int


def diff_live_bank(
    previous: Mapping[str, Decimal],
    current: Mapping[str, Decimal],
    hole: int,
) -> list[MoneyDelta]:
    """Return one event per player whose running total moved, in ``current`` order."""

    events: list[MoneyDelta] = []
    for player_id, amount in current.items():
        change = amount - previous.get(player_id, ZERO)
        if change == 0:
            continue
        events.append(
            MoneyDelta(
                player_id=player_id,
                amount=abs(change),
                direction=Direction.WON if change > 0 else Direction.LOST,
                hole=hole,
            )
        )
    return events

"""Frozen per-player result records returned by the wager strategies."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from golfbank.money import ZERO
from golfbank.wagers.types import BetType, SideBetType


@dataclass(frozen=True)
class NassauResult:
    front: Decimal = ZERO
    back: Decimal = ZERO
    overall: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.front + self.back + self.overall


@dataclass(frozen=True)
class SkinWin:
    hole: int
    amount: Decimal


@dataclass(frozen=True)
class SkinsResult:
    skins: tuple[SkinWin, ...] = ()
    total: Decimal = ZERO

    @property
    def total_skins(self) -> int:
        return len(self.skins)


@dataclass(frozen=True)
class MatchPlayResult:
    holes_won: int = 0
    holes_lost: int = 0
    ties: int = 0
    total: Decimal = ZERO


@dataclass(frozen=True)
class StrokePlayResult:
    total_strokes: int = 0
    differential: int = 0
    total: Decimal = ZERO


@dataclass(frozen=True)
class SideBetWin:
    type: SideBetType
    hole: int
    amount: Decimal


@dataclass(frozen=True)
class SideBetResult:
    side_bets: tuple[SideBetWin, ...] = ()
    total: Decimal = ZERO


WagerResult = Union[NassauResult, SkinsResult, MatchPlayResult, StrokePlayResult]


@dataclass(frozen=True)
class PlayerSettlement:
    """Everything one player won or lost in a round."""

    bets: dict[BetType, WagerResult]
    side_bets: tuple[SideBetWin, ...]
    total: Decimal

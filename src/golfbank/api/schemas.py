"""Pydantic schemas for the Golfbank API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from golfbank.wagers.types import SideBetType


class PlayerIn(BaseModel):
    id: str
    name: str = ""
    handicap_index: float | None = None
    profile_color: str | None = None


class HoleIn(BaseModel):
    number: int = Field(ge=1)
    par: int = Field(default=4, ge=3, le=6)
    handicap: int | None = Field(default=None, ge=1)
    yardage: dict[str, int] = Field(default_factory=dict)


class CourseIn(BaseModel):
    id: str
    name: str = ""
    holes: list[HoleIn]
    slope_rating: dict[str, float] = Field(default_factory=dict)
    course_rating: dict[str, float] = Field(default_factory=dict)


class PlayerHandicapIn(BaseModel):
    handicap_index: float | None = None
    course_handicap: int = 0
    strokes_per_hole: list[int] = Field(default_factory=list)


class RoundIn(BaseModel):
    id: str
    date: date
    players: list[str] = Field(min_length=1)
    course: CourseIn | None = None
    tee_box: str | None = None
    scores: dict[str, list[int]] = Field(default_factory=dict)
    bets: list[dict[str, Any]] = Field(default_factory=list)
    side_bets: list[dict[str, Any]] = Field(default_factory=list)
    side_data: dict[SideBetType, dict[int, str]] = Field(default_factory=dict)
    handicaps: dict[str, PlayerHandicapIn] | None = None
    use_net_scores: bool = False


class SettleRequest(BaseModel):
    round: RoundIn
    player_records: list[PlayerIn] = Field(
        default_factory=list,
        description="Used to derive handicaps when the round does not carry them.",
    )


class LiveBankRequest(SettleRequest):
    through_hole: int = Field(ge=0)
    previous_bank: dict[str, Decimal] | None = None


class CourseHandicapRequest(BaseModel):
    handicap_index: float | None = None
    slope_rating: float | None = None
    course_rating: float
    par: int


class StrokeDistributionRequest(BaseModel):
    course_handicap: int
    holes: list[HoleIn]


class TransfersRequest(BaseModel):
    totals: dict[str, Decimal]


class TransferOut(BaseModel):
    payer: str
    payee: str
    amount: Decimal


class PlayerSettlementOut(BaseModel):
    player_id: str
    bets: dict[str, dict[str, Any]]
    side_bets: list[dict[str, Any]]
    total: Decimal


class SettleResponse(BaseModel):
    round_id: str
    results: list[PlayerSettlementOut]
    transfers: list[TransferOut]


class MoneyDeltaOut(BaseModel):
    player_id: str
    amount: Decimal
    direction: str
    hole: int


class LiveBankResponse(BaseModel):
    round_id: str
    through_hole: int
    bank: dict[str, Decimal]
    events: list[MoneyDeltaOut] = Field(default_factory=list)

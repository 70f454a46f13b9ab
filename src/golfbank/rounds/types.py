"""Dataclasses for players, courses and rounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from golfbank.config import get_settings
from golfbank.wagers.types import Bet, SideBet, SideBetType

DEFAULT_PAR = 4
DEFAULT_NUM_HOLES = 18


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    handicap_index: float | None = None
    profile_color: str | None = None


@dataclass(frozen=True)
class Hole:
    number: int
    par: int = DEFAULT_PAR
    handicap: int | None = None
    yardage: dict[str, int] = field(default_factory=dict)

    @property
    def stroke_rating(self) -> int:
        """Hole handicap rating, falling back to the hole number when unrated."""

        return self.handicap if self.handicap else self.number


@dataclass(frozen=True)
class Course:
    id: str
    name: str
    holes: tuple[Hole, ...]
    slope_rating: dict[str, float] = field(default_factory=dict)
    course_rating: dict[str, float] = field(default_factory=dict)

    @property
    def par(self) -> int:
        return sum(hole.par or DEFAULT_PAR for hole in self.holes)

    def par_for(self, hole_index: int) -> int:
        if 0 <= hole_index < len(self.holes):
            return self.holes[hole_index].par or DEFAULT_PAR
        return DEFAULT_PAR

    def ratings_for(self, tee_box: str | None) -> tuple[float, float]:
        """Return ``(slope, course_rating)`` for a tee, falling back to the white tees."""

        settings = get_settings()
        fallback = settings.default_tee_box
        slope = self.slope_rating.get(tee_box or fallback) or self.slope_rating.get(fallback)
        rating = self.course_rating.get(tee_box or fallback) or self.course_rating.get(fallback)
        return (
            float(slope or settings.default_slope_rating),
            float(rating or settings.default_course_rating),
        )


@dataclass(frozen=True)
class PlayerHandicap:
    handicap_index: float | None
    course_handicap: int
    strokes_per_hole: tuple[int, ...] = ()

    def strokes_on(self, hole_index: int) -> int:
        if 0 <= hole_index < len(self.strokes_per_hole):
            return self.strokes_per_hole[hole_index]
        return 0


@dataclass(frozen=True)
class Round:
    id: str
    date: date
    players: tuple[str, ...]
    course: Course | None = None
    tee_box: str | None = None
    scores: dict[str, tuple[int, ...]] = field(default_factory=dict)
    bets: tuple[Bet, ...] = ()
    side_bets: tuple[SideBet, ...] = ()
    side_data: dict[SideBetType, dict[int, str]] = field(default_factory=dict)
    handicaps: dict[str, PlayerHandicap] = field(default_factory=dict)
    use_net_scores: bool = False
    is_complete: bool = False
    money_results: dict[str, Decimal] | None = None

    @property
    def num_holes(self) -> int:
        if self.course and self.course.holes:
            return len(self.course.holes)
        return DEFAULT_NUM_HOLES

    @property
    def holes(self) -> tuple[Hole, ...]:
        if self.course and self.course.holes:
            return self.course.holes
        return tuple(Hole(number=idx + 1) for idx in range(self.num_holes))

    def par_for(self, hole_index: int) -> int:
        return self.course.par_for(hole_index) if self.course else DEFAULT_PAR

    def scores_for(self, player_id: str) -> tuple[int, ...]:
        return tuple(self.scores.get(player_id, ()))

"""Handicap calculations: course handicaps, stroke allotment and net scoring."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from golfbank.rounds.types import DEFAULT_PAR, Course, Hole, Player, PlayerHandicap

logger = logging.getLogger(__name__)

STANDARD_SLOPE = 113


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def calculate_course_handicap(
    handicap_index: float | None,
    slope_rating: float | None,
    course_rating: float,
    par: int,
) -> int:
    """Course Handicap = Handicap Index x (Slope / 113) + (Course Rating - Par).

    A player without a handicap index (or a course without a slope) plays
    off zero.
    """

    if not handicap_index or not slope_rating:
        return 0
    return _round_half_away(handicap_index * (slope_rating / STANDARD_SLOPE) + (course_rating - par))


def calculate_playing_handicap(course_handicap: int, allowance_percent: float = 100) -> int:
    """Scale a course handicap by a format allowance (95% stroke play, 100% match play)."""

    return _round_half_away(course_handicap * (allowance_percent / 100))


def distribute_handicap_strokes(course_handicap: int, holes: Sequence[Hole]) -> list[int]:
    """Allot strokes hardest hole first, wrapping round for handicaps above the hole count."""

    strokes = [0] * len(holes)
    if not holes or course_handicap <= 0:
        return strokes

    order = sorted(range(len(holes)), key=lambda idx: holes[idx].stroke_rating)
    full_passes, extra = divmod(course_handicap, len(holes))
    for position, hole_idx in enumerate(order):
        strokes[hole_idx] = full_passes + (1 if position < extra else 0)
    return strokes


def calculate_net_score(gross_score: int, strokes_on_hole: int) -> int:
    return max(0, gross_score - strokes_on_hole)


def calculate_all_net_scores(gross_scores: Sequence[int], strokes_per_hole: Sequence[int]) -> list[int]:
    return [
        calculate_net_score(score, strokes_per_hole[idx] if idx < len(strokes_per_hole) else 0)
        if score
        else 0
        for idx, score in enumerate(gross_scores)
    ]


def calculate_stableford_points(net_score: int, par: int) -> int:
    if not net_score or net_score <= 0:
        return 0
    differential = net_score - par
    if differential >= 2:
        return 0
    # bogey 1, par 2, birdie 3, eagle 4, albatross or better 5
    return min(2 - differential, 5)


def calculate_total_stableford_points(net_scores: Sequence[int], holes: Sequence[Hole]) -> int:
    total = 0
    for idx, net_score in enumerate(net_scores):
        par = holes[idx].par if idx < len(holes) and holes[idx].par else DEFAULT_PAR
        total += calculate_stableford_points(net_score, par)
    return total


def calculate_score_differential(
    adjusted_gross_score: float,
    course_rating: float,
    slope_rating: float | None,
) -> float | None:
    """(Adjusted Gross - Course Rating) x 113 / Slope, to one decimal place."""

    if not slope_rating:
        return None
    differential = (adjusted_gross_score - course_rating) * STANDARD_SLOPE / slope_rating
    return round(differential, 1)


def apply_equitable_stroke_control(gross_score: int, par: int, course_handicap: int) -> int:
    if course_handicap <= 9:
        max_score = par + 2
    elif course_handicap <= 19:
        max_score = 7
    elif course_handicap <= 29:
        max_score = 8
    elif course_handicap <= 39:
        max_score = 9
    else:
        max_score = 10
    return min(gross_score, max_score)


def calculate_adjusted_gross_score(
    gross_scores: Sequence[int],
    holes: Sequence[Hole],
    course_handicap: int,
) -> int:
    total = 0
    for idx, score in enumerate(gross_scores):
        par = holes[idx].par if idx < len(holes) and holes[idx].par else DEFAULT_PAR
        total += apply_equitable_stroke_control(score or 0, par, course_handicap)
    return total


def calculate_match_play_strokes(player_course_handicap: int, opponent_course_handicap: int) -> tuple[int, int]:
    """Return ``(gives, receives)`` strokes for a player against one opponent."""

    difference = player_course_handicap - opponent_course_handicap
    if difference > 0:
        return difference, 0
    if difference < 0:
        return 0, -difference
    return 0, 0


def get_strokes_on_hole(hole_handicap: int, strokes_received: int, strokes_given: int = 0) -> int:
    if strokes_received >= hole_handicap:
        return 1 + strokes_received // 18
    if strokes_given >= hole_handicap:
        return -1
    return 0


def format_handicap(handicap_index: float | None) -> str:
    if handicap_index is None:
        return "N/A"
    if handicap_index == 0:
        return "0.0"
    # plus handicaps (better than scratch) are stored negative
    sign = "" if handicap_index > 0 else "+"
    return f"{sign}{abs(handicap_index):.1f}"


def build_player_handicaps(
    players: Iterable[Player],
    course: Course,
    tee_box: str | None = None,
) -> dict[str, PlayerHandicap]:
    """Compute each player's course handicap and per-hole strokes before a round."""

    slope, rating = course.ratings_for(tee_box)
    par = course.par
    handicaps: dict[str, PlayerHandicap] = {}
    for player in players:
        if player.handicap_index is None:
            handicaps[player.id] = PlayerHandicap(handicap_index=None, course_handicap=0)
            continue
        course_handicap = calculate_course_handicap(player.handicap_index, slope, rating, par)
        handicaps[player.id] = PlayerHandicap(
            handicap_index=player.handicap_index,
            course_handicap=course_handicap,
            strokes_per_hole=tuple(distribute_handicap_strokes(course_handicap, course.holes)),
        )
        logger.debug(
            "Player %s: index %.1f -> course handicap %d", player.id, player.handicap_index, course_handicap
        )
    return handicaps


def apply_handicaps(
    scores: Mapping[str, Sequence[int]],
    handicaps: Mapping[str, PlayerHandicap],
) -> dict[str, tuple[int, ...]]:
    """Return net scores for every player; players without a handicap stay gross."""

    net: dict[str, tuple[int, ...]] = {}
    for player_id, gross in scores.items():
        handicap = handicaps.get(player_id)
        if handicap is None:
            net[player_id] = tuple(gross)
        else:
            # an entered score never nets to 0, which would read as "not played"
            net[player_id] = tuple(
                max(1, score) if entered else 0
                for score, entered in zip(
                    calculate_all_net_scores(gross, handicap.strokes_per_hole), gross
                )
            )
    return net

"""Per-hole side bets: judged winners plus the automatic birdie bonus."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal

from golfbank.money import ZERO
from golfbank.rounds.types import DEFAULT_PAR, Hole
from golfbank.wagers.common import PlayerRef, Scores, player_ids, score_at
from golfbank.wagers.results import SideBetResult, SideBetWin
from golfbank.wagers.types import MANUAL_SIDE_BETS, SideBet, SideBetType

logger = logging.getLogger(__name__)

SideData = Mapping[SideBetType, Mapping[int, str]]


def _par(holes: Sequence[Hole], hole_number: int) -> int:
    idx = hole_number - 1
    if 0 <= idx < len(holes) and holes[idx].par:
        return holes[idx].par
    return DEFAULT_PAR


def _manual_winners(side_bet: SideBet, side_data: SideData, holes: Sequence[Hole]) -> list[tuple[int, str]]:
    recorded = side_data.get(side_bet.type) or {}
    winners: list[tuple[int, str]] = []
    for hole_key, winner in recorded.items():
        try:
            hole_number = int(hole_key)
        except (TypeError, ValueError):
            logger.warning("Ignoring %s recorded on unknown hole %r", side_bet.type.value, hole_key)
            continue
        if winner and side_bet.applies_to(hole_number, _par(holes, hole_number)):
            winners.append((hole_number, winner))
    return sorted(winners, key=lambda item: item[0])


def _birdies(
    side_bet: SideBet,
    scores: Scores,
    ids: Sequence[str],
    holes: Sequence[Hole],
) -> list[tuple[int, str]]:
    birdies: list[tuple[int, str]] = []
    num_holes = max((len(scores.get(pid) or ()) for pid in ids), default=0)
    for hole in range(num_holes):
        par = _par(holes, hole + 1)
        if not side_bet.applies_to(hole + 1, par):
            continue
        for pid in ids:
            score = score_at(scores, pid, hole)
            if score and score == par - 1:
                birdies.append((hole + 1, pid))
    return birdies


def calculate_side_bets(
    scores: Scores,
    side_bets: Iterable[SideBet],
    players: Iterable[PlayerRef],
    holes: Sequence[Hole] = (),
    side_data: SideData | None = None,
) -> dict[str, SideBetResult]:
    """Settle side bets. Each win collects the bet's amount from every other player.

    Judged bets (closest to pin, longest drive, sandy, greenie) take their
    winners from ``side_data``: side bet type -> hole number -> player id.
    Birdie bonuses are read straight off the gross scores. ``holes`` supplies
    the pars used for eligibility; unknown holes count as par 4.
    """

    ids = player_ids(players)
    if len(ids) < 2:
        return {pid: SideBetResult() for pid in ids}
    side_data = side_data or {}

    wins: dict[str, list[SideBetWin]] = {pid: [] for pid in ids}
    totals: dict[str, Decimal] = {pid: ZERO for pid in ids}
    for side_bet in side_bets:
        if side_bet.type in MANUAL_SIDE_BETS:
            winners = _manual_winners(side_bet, side_data, holes)
        else:
            winners = _birdies(side_bet, scores, ids, holes)
        for hole_number, winner in winners:
            if winner not in totals:
                logger.warning(
                    "Ignoring %s on hole %d for unknown player %s", side_bet.type.value, hole_number, winner
                )
                continue
            wins[winner].append(SideBetWin(type=side_bet.type, hole=hole_number, amount=side_bet.amount))
            for pid in ids:
                if pid == winner:
                    totals[pid] += side_bet.amount * (len(ids) - 1)
                else:
                    totals[pid] -= side_bet.amount

    return {pid: SideBetResult(side_bets=tuple(wins[pid]), total=totals[pid]) for pid in ids}

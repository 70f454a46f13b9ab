"""Skins: each hole is worth a pot, won outright by the sole low score."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from golfbank.money import ZERO, split_evenly
from golfbank.wagers.common import PlayerRef, Scores, card_length, player_ids, score_at
from golfbank.wagers.results import SkinsResult, SkinWin
from golfbank.wagers.types import SkinsBet

logger = logging.getLogger(__name__)


def calculate_skins(
    scores: Scores,
    bet: SkinsBet,
    players: Iterable[PlayerRef],
    num_holes: int | None = None,
) -> dict[str, SkinsResult]:
    """Settle skins hole by hole.

    A hole is only decided once every player has a score on it. Tied holes
    roll the pot into the next hole when ``carryover`` is set; otherwise the
    pot for that hole goes unpaid. A pot still riding after the last hole is
    never paid out. The winner takes the whole pot and the other players pay
    it in equal shares, to the cent, leftover cents falling to the first
    losers in player order.
    """

    ids = player_ids(players)
    if len(ids) < 2:
        return {pid: SkinsResult() for pid in ids}
    num_holes = card_length(scores, ids) if num_holes is None else num_holes

    wins: dict[str, list[SkinWin]] = {pid: [] for pid in ids}
    totals: dict[str, Decimal] = {pid: ZERO for pid in ids}
    pot = bet.amount
    for hole in range(num_holes):
        hole_scores = {pid: score_at(scores, pid, hole) for pid in ids}
        if not all(hole_scores.values()):
            continue
        low = min(hole_scores.values())
        winners = [pid for pid, score in hole_scores.items() if score == low]
        if len(winners) > 1:
            if bet.carryover:
                pot += bet.amount
                logger.debug("Skins hole %d tied, pot carries to %s", hole + 1, pot)
            continue

        winner = winners[0]
        losers = [pid for pid in ids if pid != winner]
        wins[winner].append(SkinWin(hole=hole + 1, amount=pot))
        totals[winner] += pot
        for pid, share in zip(losers, split_evenly(pot, len(losers))):
            totals[pid] -= share
        pot = bet.amount

    return {pid: SkinsResult(skins=tuple(wins[pid]), total=totals[pid]) for pid in ids}

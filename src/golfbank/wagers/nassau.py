"""Nassau: three independent bets on the front nine, back nine and full round."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from golfbank.money import ZERO, split_evenly
from golfbank.wagers.common import PlayerRef, Scores, card_length, player_ids, settled_holes, strokes_over
from golfbank.wagers.results import NassauResult
from golfbank.wagers.types import NassauBet

logger = logging.getLogger(__name__)

FRONT_NINE = range(0, 9)
BACK_NINE = range(9, 18)


def settle_segment(totals: dict[str, int], stake: Decimal, ids: Sequence[str]) -> dict[str, Decimal]:
    """Low total collects ``stake`` from every other player.

    Players tied for the low total share what the rest pay; the leftover
    cent of an uneven share goes to the leader listed first. When everyone
    ties nobody pays.
    """

    deltas = {pid: ZERO for pid in ids}
    if not totals or stake <= 0:
        return deltas
    low = min(totals.values())
    leaders = [pid for pid in ids if totals[pid] == low]
    losers = [pid for pid in ids if totals[pid] != low]
    if not losers:
        return deltas
    for pid, share in zip(leaders, split_evenly(stake * len(losers), len(leaders))):
        deltas[pid] = share
    for pid in losers:
        deltas[pid] = -stake
    return deltas


def calculate_nassau(
    scores: Scores,
    bet: NassauBet,
    players: Iterable[PlayerRef],
    num_holes: int | None = None,
) -> dict[str, NassauResult]:
    ids = player_ids(players)
    num_holes = card_length(scores, ids) if num_holes is None else num_holes
    segments = {
        "front": (range(0, min(num_holes, FRONT_NINE.stop)), bet.front),
        "back": (range(BACK_NINE.start, min(num_holes, BACK_NINE.stop)), bet.back),
        "overall": (range(0, num_holes), bet.overall),
    }

    settled: dict[str, dict[str, Decimal]] = {}
    for name, (holes, stake) in segments.items():
        counted = settled_holes(scores, ids, holes)
        totals = strokes_over(scores, ids, counted) if counted else {}
        settled[name] = settle_segment(totals, stake, ids)
        logger.debug("Nassau %s over %d holes: %s", name, len(counted), totals)

    return {
        pid: NassauResult(
            front=settled["front"][pid],
            back=settled["back"][pid],
            overall=settled["overall"][pid],
        )
        for pid in ids
    }

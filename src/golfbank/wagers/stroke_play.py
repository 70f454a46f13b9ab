"""Stroke play: paid per stroke of difference in total score."""

from __future__ import annotations

from collections.abc import Iterable

from golfbank.wagers.common import PlayerRef, Scores, card_length, player_ids, settled_holes, strokes_over
from golfbank.wagers.results import StrokePlayResult
from golfbank.wagers.types import StrokePlayBet


def calculate_stroke_play(
    scores: Scores,
    bet: StrokePlayBet,
    players: Iterable[PlayerRef],
    num_holes: int | None = None,
) -> dict[str, StrokePlayResult]:
    """Settle every pair of players on their stroke difference.

    With two players this is the plain head-to-head bet. With more, each
    player's differential is the sum of their pairwise margins, so a mid-pack
    player can win against the field behind and lose to the leader. Totals
    only count holes every player has finished.
    """

    ids = player_ids(players)
    num_holes = card_length(scores, ids) if num_holes is None else num_holes
    totals = strokes_over(scores, ids, settled_holes(scores, ids, range(num_holes)))
    if len(ids) < 2:
        return {pid: StrokePlayResult(total_strokes=totals[pid]) for pid in ids}

    results: dict[str, StrokePlayResult] = {}
    for pid in ids:
        differential = sum(totals[other] - totals[pid] for other in ids if other != pid)
        results[pid] = StrokePlayResult(
            total_strokes=totals[pid],
            differential=differential,
            total=bet.amount * differential,
        )
    return results

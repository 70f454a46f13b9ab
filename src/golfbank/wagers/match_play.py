"""Match play: a head-to-head bet paid hole by hole."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from golfbank.money import ZERO
from golfbank.wagers.common import PlayerRef, Scores, card_length, player_ids, settled_holes
from golfbank.wagers.results import MatchPlayResult
from golfbank.wagers.types import MatchPlayBet


def calculate_match_play(
    scores: Scores,
    bet: MatchPlayBet,
    players: Iterable[PlayerRef],
    num_holes: int | None = None,
) -> dict[str, MatchPlayResult]:
    """Only defined for two players; any other field settles nothing."""

    ids = player_ids(players)
    if len(ids) != 2:
        return {pid: MatchPlayResult() for pid in ids}
    num_holes = card_length(scores, ids) if num_holes is None else num_holes

    first, second = ids
    won = {first: 0, second: 0}
    ties = 0
    for hole in settled_holes(scores, ids, range(num_holes)):
        a, b = scores[first][hole], scores[second][hole]
        if a < b:
            won[first] += 1
        elif b < a:
            won[second] += 1
        else:
            ties += 1

    def _result(pid: str, opponent: str) -> MatchPlayResult:
        net_holes = won[pid] - won[opponent]
        total: Decimal = bet.amount * net_holes if net_holes else ZERO
        return MatchPlayResult(
            holes_won=won[pid],
            holes_lost=won[opponent],
            ties=ties,
            total=total,
        )

    return {first: _result(first, second), second: _result(second, first)}

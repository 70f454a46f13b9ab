"""Score helpers shared by the wager strategies.

A score of 0 means "not entered yet". A hole only counts towards a wager once
every participant in that wager has a score on it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from golfbank.rounds.types import Player

Scores = Mapping[str, Sequence[int]]
PlayerRef = Player | str


def player_ids(players: Iterable[PlayerRef]) -> list[str]:
    return [player if isinstance(player, str) else player.id for player in players]


def score_at(scores: Scores, player_id: str, hole: int) -> int:
    card = scores.get(player_id) or ()
    if hole >= len(card):
        return 0
    score = card[hole]
    return score if score and score > 0 else 0


def card_length(scores: Scores, ids: Sequence[str]) -> int:
    return max((len(scores.get(pid) or ()) for pid in ids), default=0)


def settled_holes(scores: Scores, ids: Sequence[str], holes: Iterable[int]) -> list[int]:
    """Hole indices on which every player in ``ids`` has entered a score."""

    return [hole for hole in holes if ids and all(score_at(scores, pid, hole) for pid in ids)]


def strokes_over(scores: Scores, ids: Sequence[str], holes: Sequence[int]) -> dict[str, int]:
    return {pid: sum(score_at(scores, pid, hole) for hole in holes) for pid in ids}

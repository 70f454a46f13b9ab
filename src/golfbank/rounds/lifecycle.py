"""Round lifecycle: scores are editable until the round is completed, once."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from golfbank.exceptions import RoundStateError, ScoreEntryError
from golfbank.rounds.types import Round
from golfbank.settlement.engine import calculate_round_money, money_results
from golfbank.wagers.common import PlayerRef

logger = logging.getLogger(__name__)


def record_score(round_: Round, player_id: str, hole: int, strokes: int) -> Round:
    """Return a copy of ``round_`` with ``strokes`` entered on 1-based ``hole``.

    Entering 0 clears the hole.
    """

    if round_.is_complete:
        raise RoundStateError(f"Round {round_.id} is complete; scores are frozen")
    if player_id not in round_.players:
        raise ScoreEntryError(f"Player {player_id} is not playing round {round_.id}")
    if not 1 <= hole <= round_.num_holes:
        raise ScoreEntryError(f"Hole {hole} is outside a {round_.num_holes}-hole round")
    if strokes < 0:
        raise ScoreEntryError(f"Stroke count cannot be negative (got {strokes})")

    card = list(round_.scores_for(player_id))
    if len(card) < round_.num_holes:
        card.extend([0] * (round_.num_holes - len(card)))
    card[hole - 1] = strokes
    scores = dict(round_.scores)
    scores[player_id] = tuple(card)
    return replace(round_, scores=scores)


def complete_round(round_: Round, players: Iterable[PlayerRef]) -> Round:
    """Settle the round and freeze it; ``money_results`` becomes authoritative."""

    if round_.is_complete:
        raise RoundStateError(f"Round {round_.id} was already completed")
    settlement = calculate_round_money(round_, players)
    logger.info("Completing round %s", round_.id)
    return replace(round_, is_complete=True, money_results=money_results(settlement))

"""Round settlement: combine every configured wager into per-player totals."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from golfbank.handicap.engine import apply_handicaps
from golfbank.money import ZERO, is_zero_sum
from golfbank.rounds.types import Round
from golfbank.wagers.common import PlayerRef, Scores, player_ids
from golfbank.wagers.match_play import calculate_match_play
from golfbank.wagers.nassau import calculate_nassau
from golfbank.wagers.results import PlayerSettlement, WagerResult
from golfbank.wagers.side_bets import calculate_side_bets
from golfbank.wagers.skins import calculate_skins
from golfbank.wagers.stroke_play import calculate_stroke_play
from golfbank.wagers.types import Bet, BetType

logger = logging.getLogger(__name__)

Strategy = Callable[[Scores, Bet, list[str], int], Mapping[str, WagerResult]]

STRATEGIES: dict[BetType, Strategy] = {
    BetType.NASSAU: calculate_nassau,  # type: ignore[dict-item]
    BetType.SKINS: calculate_skins,  # type: ignore[dict-item]
    BetType.MATCH_PLAY: calculate_match_play,  # type: ignore[dict-item]
    BetType.STROKE_PLAY: calculate_stroke_play,  # type: ignore[dict-item]
}

# Nassau and stroke play only settle on completed nines/rounds, so the running
# bank during play shows hole-by-hole bets only.
LIVE_BET_TYPES = frozenset({BetType.SKINS, BetType.MATCH_PLAY})


@dataclass(frozen=True)
class Transfer:
    payer: str
    payee: str
    amount: Decimal


def wager_scores(round_: Round) -> dict[str, tuple[int, ...]]:
    """Scores the main wagers are settled on: net when the round plays off handicaps."""

    gross = {pid: round_.scores_for(pid) for pid in round_.players}
    if round_.use_net_scores and round_.handicaps:
        return apply_handicaps(gross, round_.handicaps)
    return gross


def calculate_round_money(round_: Round, players: Iterable[PlayerRef]) -> dict[str, PlayerSettlement]:
    """Run every configured bet and the side bets once over the full round."""

    ids = player_ids(players)
    scores = wager_scores(round_)
    gross = {pid: round_.scores_for(pid) for pid in ids}

    per_bet: dict[str, dict[BetType, WagerResult]] = {pid: {} for pid in ids}
    totals: dict[str, Decimal] = {pid: ZERO for pid in ids}
    for bet in round_.bets:
        strategy = STRATEGIES.get(bet.type)
        if strategy is None:
            logger.debug("Round %s: %s bet is settled off the books", round_.id, bet.type.value)
            continue
        results = strategy(scores, bet, ids, round_.num_holes)
        if not is_zero_sum(result.total for result in results.values()):
            logger.error("Round %s: %s results do not net to zero", round_.id, bet.type.value)
        for pid in ids:
            per_bet[pid][bet.type] = results[pid]
            totals[pid] += results[pid].total

    side_results = calculate_side_bets(
        gross,
        round_.side_bets,
        ids,
        holes=round_.holes,
        side_data=round_.side_data,
    )
    settlement = {
        pid: PlayerSettlement(
            bets=per_bet[pid],
            side_bets=side_results[pid].side_bets,
            total=totals[pid] + side_results[pid].total,
        )
        for pid in ids
    }
    logger.info(
        "Round %s settled: %s",
        round_.id,
        {pid: str(result.total) for pid, result in settlement.items()},
    )
    return settlement


def calculate_live_bank(round_: Round, players: Iterable[PlayerRef], through_hole: int) -> dict[str, Decimal]:
    """Running money through the first ``through_hole`` holes, skins and match play only."""

    ids = player_ids(players)
    through_hole = max(0, min(through_hole, round_.num_holes))
    partial = {pid: tuple(card[:through_hole]) for pid, card in wager_scores(round_).items()}

    bank: dict[str, Decimal] = {pid: ZERO for pid in ids}
    for bet in round_.bets:
        if bet.type not in LIVE_BET_TYPES:
            continue
        results = STRATEGIES[bet.type](partial, bet, ids, through_hole)
        for pid in ids:
            bank[pid] += results[pid].total
    return bank


def money_results(settlement: Mapping[str, PlayerSettlement]) -> dict[str, Decimal]:
    """Flatten a settlement into the per-player totals stored on a completed round."""

    return {pid: result.total for pid, result in settlement.items()}


def build_transfers(totals: Mapping[str, Decimal]) -> list[Transfer]:
    """Pay off final totals with as few payments as a greedy match gives.

    Biggest debtor pays biggest creditor first; ties keep player order.
    """

    creditors = sorted(
        ([pid, amount] for pid, amount in totals.items() if amount > 0),
        key=lambda item: -item[1],
    )
    debtors = sorted(
        ([pid, -amount] for pid, amount in totals.items() if amount < 0),
        key=lambda item: -item[1],
    )

    transfers: list[Transfer] = []
    c_idx = d_idx = 0
    while c_idx < len(creditors) and d_idx < len(debtors):
        creditor, debtor = creditors[c_idx], debtors[d_idx]
        amount = min(creditor[1], debtor[1])
        transfers.append(Transfer(payer=debtor[0], payee=creditor[0], amount=amount))
        creditor[1] -= amount
        debtor[1] -= amount
        if creditor[1] == 0:
            c_idx += 1
        if debtor[1] == 0:
            d_idx += 1
    return transfers

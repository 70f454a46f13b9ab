"""Round settlement and live bank tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from golfbank.rounds.types import Course, Hole, PlayerHandicap, Round
from golfbank.settlement.engine import (
    Transfer,
    build_transfers,
    calculate_live_bank,
    calculate_round_money,
    money_results,
)
from golfbank.settlement.events import Direction, MoneyDelta, diff_live_bank
from golfbank.wagers.types import BetType, SideBetType, parse_bet, parse_side_bet


def _course(holes: int = 18) -> Course:
    return Course(
        id="pebble",
        name="Pebble",
        holes=tuple(Hole(number=n, par=3 if n == 3 else 4, handicap=n) for n in range(1, holes + 1)),
        slope_rating={"white": 113},
        course_rating={"white": 72.0},
    )


def _round(scores: dict[str, list[int]], bets: list[dict], **kwargs) -> Round:
    return Round(
        id="r1",
        date=date(2024, 6, 1),
        players=tuple(scores),
        course=kwargs.pop("course", _course()),
        scores={pid: tuple(card) for pid, card in scores.items()},
        bets=tuple(parse_bet(bet) for bet in bets),
        **kwargs,
    )


def test_round_money_sums_every_bet_and_side_bet() -> None:
    round_ = _round(
        {"a": [4] * 18, "b": [5] * 18},
        [
            {"type": "Nassau", "amount": 5},
            {"type": "Skins", "amount": 1},
            {"type": "MatchPlay", "amount": 1},
            {"type": "StrokePlay", "amount": 1},
            {"type": "Custom", "description": "drinks"},
        ],
        side_bets=(parse_side_bet({"type": "ClosestToPin", "amount": 2}),),
        side_data={SideBetType.CLOSEST_TO_PIN: {3: "b"}},
    )
    settlement = calculate_round_money(round_, ["a", "b"])

    a = settlement["a"]
    assert set(a.bets) == {BetType.NASSAU, BetType.SKINS, BetType.MATCH_PLAY, BetType.STROKE_PLAY}
    assert a.bets[BetType.NASSAU].total == Decimal("15")
    assert a.bets[BetType.SKINS].total == Decimal("18")
    assert a.bets[BetType.MATCH_PLAY].total == Decimal("18")
    assert a.bets[BetType.STROKE_PLAY].total == Decimal("18")
    assert a.total == Decimal("67")
    assert settlement["b"].total == Decimal("-67")
    assert [win.hole for win in settlement["b"].side_bets] == [3]
    assert money_results(settlement) == {"a": Decimal("67"), "b": Decimal("-67")}


def test_round_money_is_zero_sum_for_a_foursome() -> None:
    scores = {
        "a": [4, 5, 3, 4, 6, 4, 5, 4, 4] * 2,
        "b": [5, 4, 3, 5, 5, 4, 4, 4, 5] * 2,
        "c": [4, 4, 4, 4, 5, 5, 5, 3, 4] * 2,
        "d": [6, 5, 3, 3, 4, 4, 5, 5, 4] * 2,
    }
    round_ = _round(
        scores,
        [{"type": "Nassau", "amount": 3}, {"type": "Skins", "amount": 1}, {"type": "StrokePlay", "amount": "0.25"}],
        side_bets=(parse_side_bet({"type": "BirdieBonus"}),),
    )
    settlement = calculate_round_money(round_, list(scores))
    assert sum(result.total for result in settlement.values()) == 0
    assert calculate_round_money(round_, list(scores)) == settlement


def test_net_scores_apply_handicap_strokes() -> None:
    course = _course(9)
    handicaps = {"b": PlayerHandicap(handicap_index=9.0, course_handicap=9, strokes_per_hole=(1,) * 9)}
    scores = {"a": [4] * 9, "b": [5] * 9}
    gross = _round(scores, [{"type": "MatchPlay", "amount": 1}], course=course)
    net = _round(scores, [{"type": "MatchPlay", "amount": 1}], course=course, handicaps=handicaps, use_net_scores=True)
    assert calculate_round_money(gross, ["a", "b"])["a"].total == Decimal("9")
    assert calculate_round_money(net, ["a", "b"])["a"].total == 0


def test_live_bank_ignores_holes_after_through_hole() -> None:
    scores = {"a": [4] * 18, "b": [4] * 5 + [3] * 13}
    round_ = _round(scores, [{"type": "Skins", "amount": 1}, {"type": "MatchPlay", "amount": 1}])
    assert calculate_live_bank(round_, ["a", "b"], 5) == {"a": 0, "b": 0}
    # five tied holes carry, so the sixth skin is worth 6
    assert calculate_live_bank(round_, ["a", "b"], 6) == {"a": Decimal("-7"), "b": Decimal("7")}


def test_live_bank_leaves_out_nassau_and_stroke_play() -> None:
    round_ = _round(
        {"a": [4] * 18, "b": [5] * 18},
        [{"type": "Nassau", "amount": 5}, {"type": "StrokePlay", "amount": 1}],
    )
    assert calculate_live_bank(round_, ["a", "b"], 18) == {"a": 0, "b": 0}
    assert calculate_round_money(round_, ["a", "b"])["a"].total == Decimal("33")


def test_live_bank_through_zero_holes_is_empty() -> None:
    round_ = _round({"a": [3] * 18, "b": [5] * 18}, [{"type": "Skins"}])
    assert calculate_live_bank(round_, ["a", "b"], 0) == {"a": 0, "b": 0}


def test_diff_live_bank_emits_money_events() -> None:
    events = diff_live_bank(
        {"a": Decimal("0"), "b": Decimal("0")},
        {"a": Decimal("-7"), "b": Decimal("7"), "c": Decimal("0")},
        hole=6,
    )
    assert events == [
        MoneyDelta(player_id="a", amount=Decimal("7"), direction=Direction.LOST, hole=6),
        MoneyDelta(player_id="b", amount=Decimal("7"), direction=Direction.WON, hole=6),
    ]


def test_build_transfers_settles_debts() -> None:
    transfers = build_transfers({"a": Decimal("15"), "b": Decimal("-10"), "c": Decimal("-5")})
    assert transfers == [
        Transfer(payer="b", payee="a", amount=Decimal("10")),
        Transfer(payer="c", payee="a", amount=Decimal("5")),
    ]
    split = build_transfers({"a": Decimal("10"), "b": Decimal("5"), "c": Decimal("-15")})
    assert split == [
        Transfer(payer="c", payee="a", amount=Decimal("10")),
        Transfer(payer="c", payee="b", amount=Decimal("5")),
    ]
    assert build_transfers({"a": Decimal("0"), "b": Decimal("0")}) == []

"""Match play and stroke play settlement tests."""

from __future__ import annotations

from decimal import Decimal

from golfbank.wagers.match_play import calculate_match_play
from golfbank.wagers.stroke_play import calculate_stroke_play
from golfbank.wagers.types import MatchPlayBet, StrokePlayBet


def _card(total: int, holes: int = 18) -> list[int]:
    base, extra = divmod(total, holes)
    return [base + (1 if idx < extra else 0) for idx in range(holes)]


def test_match_play_pays_per_hole_won() -> None:
    results = calculate_match_play({"a": [3, 3], "b": [4, 4]}, MatchPlayBet(amount=2), ["a", "b"])
    assert results["a"].holes_won == 2
    assert results["a"].total == Decimal("4")
    assert results["b"].holes_lost == 2
    assert results["b"].total == Decimal("-4")


def test_match_play_halves_and_skips_unplayed_holes() -> None:
    scores = {"a": [4, 4, 5, 0], "b": [5, 4, 4, 3]}
    results = calculate_match_play(scores, MatchPlayBet(amount=2), ["a", "b"])
    assert (results["a"].holes_won, results["a"].holes_lost, results["a"].ties) == (1, 1, 1)
    assert results["a"].total == 0
    assert results["b"].total == 0


def test_match_play_needs_exactly_two_players() -> None:
    scores = {"a": [3], "b": [4], "c": [5]}
    results = calculate_match_play(scores, MatchPlayBet(amount=1), ["a", "b", "c"])
    assert all(result.total == 0 and result.holes_won == 0 for result in results.values())


def test_stroke_play_head_to_head() -> None:
    scores = {"a": _card(80), "b": _card(85)}
    results = calculate_stroke_play(scores, StrokePlayBet(amount="0.50"), ["a", "b"])
    assert results["a"].total_strokes == 80
    assert results["a"].differential == 5
    assert results["a"].total == Decimal("2.50")
    assert results["b"].differential == -5
    assert results["b"].total == Decimal("-2.50")


def test_stroke_play_nets_every_pair() -> None:
    scores = {"a": _card(80), "b": _card(85), "c": _card(90)}
    results = calculate_stroke_play(scores, StrokePlayBet(amount=1), ["a", "b", "c"])
    assert results["a"].total == Decimal("15")
    assert results["b"].total == 0
    assert results["c"].total == Decimal("-15")
    assert sum(r.total for r in results.values()) == 0


def test_stroke_play_counts_only_holes_everyone_finished() -> None:
    scores = {"a": [4, 4, 9], "b": [5, 5, 0]}
    results = calculate_stroke_play(scores, StrokePlayBet(amount=1), ["a", "b"])
    assert results["a"].total_strokes == 8
    assert results["a"].total == Decimal("2")


def test_stroke_play_single_player() -> None:
    results = calculate_stroke_play({"a": [4, 5]}, StrokePlayBet(amount=1), ["a"])
    assert results["a"].total_strokes == 9
    assert results["a"].total == 0

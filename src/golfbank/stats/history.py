"""History statistics over completed rounds: rivalries, P/L and scoring."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from golfbank.rounds.types import DEFAULT_PAR, Hole, Player, Round

RECENT_FORM = 5


@dataclass
class RivalryResult:
    round_id: str
    date: date
    result: str
    p1_score: int
    p2_score: int


@dataclass
class Rivalry:
    player1_id: str
    player2_id: str
    total_rounds: int
    player1_wins: int
    player2_wins: int
    ties: int
    player1_money_total: float
    player2_money_total: float
    last_five_results: list[str]
    last_played_date: date | None
    all_results: list[RivalryResult] = field(default_factory=list)
    opponent: Player | None = None


@dataclass
class PlayerStats:
    total_rounds: int = 0
    rounds_won: int = 0
    average_score: float | None = None
    best_score: int | None = None
    worst_score: int | None = None
    total_money: float = 0.0
    win_rate: int = 0
    average_par3: float | None = None
    average_par4: float | None = None
    average_par5: float | None = None
    current_streak: int = 0
    longest_win_streak: int = 0
    longest_lose_streak: int = 0


@dataclass
class MonthlyPL:
    month: str
    year: int
    amount: float
    rounds_played: int


@dataclass
class CourseStats:
    times_played: int
    average_score: float | None
    best_score: int | None
    total_money: float
    last_played: date | None


@dataclass
class LeaderboardRow:
    player: Player
    total_score: int
    holes_played: int
    money: float

    @property
    def thru(self) -> int:
        return self.holes_played


def _card_total(card: Iterable[int]) -> int:
    return sum(score for score in card if score and score > 0)


def _rounds_frame(rounds: Iterable[Round]) -> pd.DataFrame:
    """One row per player per completed round."""

    rows: list[dict] = []
    for round_ in rounds:
        if not round_.is_complete:
            continue
        totals = {pid: _card_total(round_.scores_for(pid)) for pid in round_.players}
        low = min(totals.values(), default=0)
        money = round_.money_results or {}
        for pid in round_.players:
            rows.append(
                {
                    "round_id": round_.id,
                    "date": pd.Timestamp(round_.date),
                    "course_id": round_.course.id if round_.course else None,
                    "player_id": pid,
                    "strokes": totals[pid],
                    "holes_played": sum(1 for s in round_.scores_for(pid) if s and s > 0),
                    "money": float(money.get(pid, 0)),
                    "won": totals[pid] == low,
                }
            )
    columns = ["round_id", "date", "course_id", "player_id", "strokes", "holes_played", "money", "won"]
    df = pd.DataFrame(rows, columns=columns)
    df["date"] = pd.to_datetime(df["date"])
    df["money"] = df["money"].astype(float)
    return df


def calculate_rivalry(rounds: Iterable[Round], player1_id: str, player2_id: str) -> Rivalry | None:
    """Head-to-head record (lower gross total wins) and money over shared rounds."""

    df = _rounds_frame(rounds)
    df = df[df["player_id"].isin([player1_id, player2_id])]
    if df.empty:
        return None
    pivot = df.pivot_table(index=["round_id", "date"], columns="player_id", values=["strokes", "money"])
    if ("strokes", player1_id) not in pivot.columns or ("strokes", player2_id) not in pivot.columns:
        return None
    shared = pivot.dropna(subset=[("strokes", player1_id), ("strokes", player2_id)])
    if shared.empty:
        return None
    shared = shared.sort_index(level="date", kind="stable")

    results: list[RivalryResult] = []
    for (round_id, played), row in shared.iterrows():
        p1, p2 = int(row[("strokes", player1_id)]), int(row[("strokes", player2_id)])
        outcome = "W" if p1 < p2 else "L" if p2 < p1 else "T"
        results.append(RivalryResult(round_id, played.date(), outcome, p1, p2))

    return Rivalry(
        player1_id=player1_id,
        player2_id=player2_id,
        total_rounds=len(results),
        player1_wins=sum(1 for r in results if r.result == "W"),
        player2_wins=sum(1 for r in results if r.result == "L"),
        ties=sum(1 for r in results if r.result == "T"),
        player1_money_total=round(float(shared[("money", player1_id)].sum()), 2),
        player2_money_total=round(float(shared[("money", player2_id)].sum()), 2),
        last_five_results=[r.result for r in results[-RECENT_FORM:]],
        last_played_date=results[-1].date,
        all_results=results,
    )


def get_all_rivalries(rounds: Sequence[Round], player_id: str, all_players: Iterable[Player]) -> list[Rivalry]:
    """Every opponent the player has shared a completed round with, most-played first."""

    rivalries: list[Rivalry] = []
    for player in all_players:
        if player.id == player_id:
            continue
        rivalry = calculate_rivalry(rounds, player_id, player.id)
        if rivalry and rivalry.total_rounds > 0:
            rivalry.opponent = player
            rivalries.append(rivalry)
    return sorted(rivalries, key=lambda r: r.total_rounds, reverse=True)


def _streaks(won: Sequence[bool]) -> tuple[int, int, int]:
    current = longest_win = longest_lose = 0
    win_run = lose_run = 0
    for flag in won:
        if flag:
            win_run, lose_run = win_run + 1, 0
            current = current + 1 if current > 0 else 1
        else:
            win_run, lose_run = 0, lose_run + 1
            current = current - 1 if current < 0 else -1
        longest_win = max(longest_win, win_run)
        longest_lose = max(longest_lose, lose_run)
    return current, longest_win, longest_lose


def _par_averages(rounds: Iterable[Round], player_id: str) -> dict[int, float]:
    rows = [
        {"par": round_.course.holes[idx].par or DEFAULT_PAR, "score": score}
        for round_ in rounds
        if round_.is_complete and player_id in round_.players and round_.course
        for idx, score in enumerate(round_.scores_for(player_id))
        if score and score > 0 and idx < len(round_.course.holes)
    ]
    if not rows:
        return {}
    means = pd.DataFrame(rows).groupby("par")["score"].mean()
    return {int(par): round(float(avg), 1) for par, avg in means.items()}


def calculate_player_stats(rounds: Sequence[Round], player_id: str) -> PlayerStats:
    df = _rounds_frame(rounds)
    df = df[df["player_id"] == player_id].sort_values("date", kind="stable")
    if df.empty:
        return PlayerStats()

    scored = df[df["strokes"] > 0]
    holes = int(scored["holes_played"].sum())
    current, longest_win, longest_lose = _streaks(df["won"].tolist())
    par_avgs = _par_averages(rounds, player_id)
    rounds_won = int(df["won"].sum())
    return PlayerStats(
        total_rounds=len(df),
        rounds_won=rounds_won,
        average_score=round(float(scored["strokes"].sum()) / holes * 18, 1) if holes else None,
        best_score=int(scored["strokes"].min()) if not scored.empty else None,
        worst_score=int(scored["strokes"].max()) if not scored.empty else None,
        total_money=round(float(df["money"].sum()), 2),
        win_rate=round(rounds_won / len(df) * 100),
        average_par3=par_avgs.get(3),
        average_par4=par_avgs.get(4),
        average_par5=par_avgs.get(5),
        current_streak=current,
        longest_win_streak=longest_win,
        longest_lose_streak=longest_lose,
    )


def calculate_monthly_pl(
    rounds: Iterable[Round],
    player_id: str,
    months: int = 6,
    today: date | None = None,
) -> list[MonthlyPL]:
    """Money won or lost per calendar month, oldest first, ending with this month."""

    today = today or date.today()
    df = _rounds_frame(rounds)
    df = df[df["player_id"] == player_id]
    periods = pd.period_range(end=pd.Timestamp(today).to_period("M"), periods=months, freq="M")
    by_month = df.groupby(df["date"].dt.to_period("M")).agg(amount=("money", "sum"), rounds=("round_id", "count"))
    by_month = by_month.reindex(periods, fill_value=0)
    return [
        MonthlyPL(
            month=period.strftime("%b"),
            year=period.year,
            amount=round(float(row["amount"]), 2),
            rounds_played=int(row["rounds"]),
        )
        for period, row in by_month.iterrows()
    ]


def calculate_course_stats(rounds: Iterable[Round], player_id: str, course_id: str) -> CourseStats | None:
    df = _rounds_frame(rounds)
    df = df[(df["player_id"] == player_id) & (df["course_id"] == course_id)]
    if df.empty:
        return None
    scored = df[df["strokes"] > 0]
    return CourseStats(
        times_played=len(df),
        average_score=round(float(scored["strokes"].mean()), 1) if not scored.empty else None,
        best_score=int(scored["strokes"].min()) if not scored.empty else None,
        total_money=round(float(df["money"].sum()), 2),
        last_played=df["date"].max().date(),
    )


def get_round_leaderboard(round_: Round, players: Iterable[Player]) -> list[LeaderboardRow]:
    """Low total first; on equal totals the player further through the round ranks higher."""

    money = round_.money_results or {}
    rows = []
    for player in players:
        card = round_.scores_for(player.id)
        rows.append(
            LeaderboardRow(
                player=player,
                total_score=_card_total(card),
                holes_played=sum(1 for s in card if s and s > 0),
                money=float(money.get(player.id, 0)),
            )
        )
    return sorted(rows, key=lambda row: (row.total_score, -row.holes_played))


def calculate_relative_to_par(scores: Sequence[int], holes: Sequence[Hole]) -> int | None:
    if not scores or not holes:
        return None
    total_par = sum((hole.par or DEFAULT_PAR) for hole in holes[: len(scores)])
    return _card_total(scores) - total_par


def format_relative_to_par(relative_to_par: int | None) -> str:
    if relative_to_par is None:
        return "-"
    if relative_to_par == 0:
        return "E"
    if relative_to_par > 0:
        return f"+{relative_to_par}"
    return str(relative_to_par)

"""FastAPI service exposing the Golfbank settlement engine."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Header, HTTPException, status

from golfbank import __version__
from golfbank.api.schemas import (
    CourseHandicapRequest,
    CourseIn,
    LiveBankRequest,
    LiveBankResponse,
    MoneyDeltaOut,
    PlayerSettlementOut,
    SettleRequest,
    SettleResponse,
    StrokeDistributionRequest,
    TransferOut,
    TransfersRequest,
)
from golfbank.config import get_api_access_key
from golfbank.exceptions import GolfbankError
from golfbank.handicap.engine import (
    build_player_handicaps,
    calculate_course_handicap,
    distribute_handicap_strokes,
)
from golfbank.rounds.types import Course, Hole, Player, PlayerHandicap, Round
from golfbank.settlement.engine import (
    build_transfers,
    calculate_live_bank,
    calculate_round_money,
    money_results,
)
from golfbank.settlement.events import diff_live_bank
from golfbank.wagers.results import PlayerSettlement, WagerResult
from golfbank.wagers.types import parse_bet, parse_side_bet

app = FastAPI(
    title="Golfbank API",
    version=__version__,
    description="Settles golf side games: Nassau, skins, match play, stroke play and side bets.",
)


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if expected is None:
        return
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


APIKeyDep = Annotated[None, Depends(require_api_key)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, Any]:
    return {"name": "golfbank", "version": __version__}


@app.post("/handicap/course")
def course_handicap(payload: CourseHandicapRequest, _: APIKeyDep) -> dict[str, int]:
    value = calculate_course_handicap(
        payload.handicap_index,
        payload.slope_rating,
        payload.course_rating,
        payload.par,
    )
    return {"course_handicap": value}


@app.post("/handicap/strokes")
def handicap_strokes(payload: StrokeDistributionRequest, _: APIKeyDep) -> dict[str, list[int]]:
    holes = [_to_hole(hole) for hole in payload.holes]
    return {"strokes_per_hole": distribute_handicap_strokes(payload.course_handicap, holes)}


@app.post("/rounds/settle", response_model=SettleResponse)
def settle_round(payload: SettleRequest, _: APIKeyDep) -> SettleResponse:
    round_ = _build_round(payload)
    settlement = calculate_round_money(round_, round_.players)
    transfers = build_transfers(money_results(settlement))
    return SettleResponse(
        round_id=round_.id,
        results=[_settlement_out(pid, result) for pid, result in settlement.items()],
        transfers=[TransferOut(**asdict(transfer)) for transfer in transfers],
    )


@app.post("/rounds/live", response_model=LiveBankResponse)
def live_bank(payload: LiveBankRequest, _: APIKeyDep) -> LiveBankResponse:
    round_ = _build_round(payload)
    bank = calculate_live_bank(round_, round_.players, payload.through_hole)
    events = []
    if payload.previous_bank is not None:
        events = [
            MoneyDeltaOut(
                player_id=event.player_id,
                amount=event.amount,
                direction=event.direction.value,
                hole=event.hole,
            )
            for event in diff_live_bank(payload.previous_bank, bank, payload.through_hole)
        ]
    return LiveBankResponse(
        round_id=round_.id,
        through_hole=payload.through_hole,
        bank=bank,
        events=events,
    )


@app.post("/rounds/transfers", response_model=list[TransferOut])
def transfers(payload: TransfersRequest, _: APIKeyDep) -> list[TransferOut]:
    return [TransferOut(**asdict(transfer)) for transfer in build_transfers(payload.totals)]


def _to_hole(hole: Any) -> Hole:
    return Hole(number=hole.number, par=hole.par, handicap=hole.handicap, yardage=dict(hole.yardage))


def _to_course(course: CourseIn) -> Course:
    return Course(
        id=course.id,
        name=course.name,
        holes=tuple(_to_hole(hole) for hole in course.holes),
        slope_rating=dict(course.slope_rating),
        course_rating=dict(course.course_rating),
    )


def _build_round(payload: SettleRequest) -> Round:
    data = payload.round
    course = _to_course(data.course) if data.course else None
    try:
        bets = tuple(parse_bet(bet) for bet in data.bets)
        side_bets = tuple(parse_side_bet(side_bet) for side_bet in data.side_bets)
    except GolfbankError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if data.handicaps is not None:
        handicaps = {
            pid: PlayerHandicap(
                handicap_index=hcp.handicap_index,
                course_handicap=hcp.course_handicap,
                strokes_per_hole=tuple(hcp.strokes_per_hole),
            )
            for pid, hcp in data.handicaps.items()
        }
    elif course and payload.player_records:
        players = [Player(**record.model_dump()) for record in payload.player_records]
        handicaps = build_player_handicaps(players, course, data.tee_box)
    else:
        handicaps = {}

    return Round(
        id=data.id,
        date=data.date,
        players=tuple(data.players),
        course=course,
        tee_box=data.tee_box,
        scores={pid: tuple(card) for pid, card in data.scores.items()},
        bets=bets,
        side_bets=side_bets,
        side_data={kind: dict(winners) for kind, winners in data.side_data.items()},
        handicaps=handicaps,
        use_net_scores=data.use_net_scores,
    )


def _result_out(result: WagerResult) -> dict[str, Any]:
    out = asdict(result)
    out["total"] = result.total
    if hasattr(result, "total_skins"):
        out["total_skins"] = result.total_skins
    return out


def _settlement_out(player_id: str, settlement: PlayerSettlement) -> PlayerSettlementOut:
    return PlayerSettlementOut(
        player_id=player_id,
        bets={bet_type.value: _result_out(result) for bet_type, result in settlement.bets.items()},
        side_bets=[asdict(win) for win in settlement.side_bets],
        total=settlement.total,
    )

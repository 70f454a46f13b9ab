"""API tests."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from golfbank.api import server


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.setattr(server, "get_api_access_key", lambda: None)
    return TestClient(server.app)


def _round_payload(**overrides) -> dict:
    payload = {
        "id": "r1",
        "date": "2024-06-01",
        "players": ["a", "b"],
        "course": {
            "id": "c1",
            "name": "Nine",
            "holes": [{"number": n, "par": 3 if n == 3 else 4, "handicap": n} for n in range(1, 10)],
            "slope_rating": {"white": 113},
            "course_rating": {"white": 35.0},
        },
        "tee_box": "white",
        "scores": {"a": [4] * 9, "b": [5] * 9},
        "bets": [{"type": "Skins", "amount": 1}, {"type": "Nassau", "amount": 5}],
        "side_bets": [{"type": "ClosestToPin", "amount": 2}],
        "side_data": {"ClosestToPin": {"3": "b"}},
    }
    payload.update(overrides)
    return payload


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/version").json()["name"] == "golfbank"


def test_settle_round(client: TestClient) -> None:
    response = client.post("/rounds/settle", json={"round": _round_payload()})
    assert response.status_code == 200
    body = response.json()
    totals = {row["player_id"]: Decimal(row["total"]) for row in body["results"]}
    # skins 9 + nassau front and overall 10 - closest to pin 2
    assert totals == {"a": Decimal("17"), "b": Decimal("-17")}
    a_row = next(row for row in body["results"] if row["player_id"] == "a")
    assert a_row["bets"]["Skins"]["total_skins"] == 9
    assert Decimal(a_row["bets"]["Nassau"]["total"]) == Decimal("10")
    assert body["transfers"] == [{"payer": "b", "payee": "a", "amount": "17.00"}]


def test_settle_with_handicaps_from_player_records(client: TestClient) -> None:
    payload = {
        "round": _round_payload(
            bets=[{"type": "MatchPlay", "amount": 1}],
            side_bets=[],
            side_data={},
            use_net_scores=True,
        ),
        "player_records": [
            {"id": "a", "name": "A"},
            {"id": "b", "name": "B", "handicap_index": 9.0},
        ],
    }
    response = client.post("/rounds/settle", json=payload)
    assert response.status_code == 200
    totals = {row["player_id"]: Decimal(row["total"]) for row in response.json()["results"]}
    # 9.0 index + (35 - 35) -> one stroke a hole wipes out the gap
    assert totals == {"a": Decimal("0"), "b": Decimal("0")}


def test_live_bank_reports_events(client: TestClient) -> None:
    payload = {
        "round": _round_payload(),
        "through_hole": 2,
        "previous_bank": {"a": "1", "b": "-1"},
    }
    response = client.post("/rounds/live", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert {pid: Decimal(v) for pid, v in body["bank"].items()} == {"a": Decimal("2"), "b": Decimal("-2")}
    directions = {event["player_id"]: event["direction"] for event in body["events"]}
    assert directions == {"a": "won", "b": "lost"}


def test_handicap_endpoints(client: TestClient) -> None:
    response = client.post(
        "/handicap/course",
        json={"handicap_index": 10.0, "slope_rating": 125, "course_rating": 71.5, "par": 72},
    )
    assert response.json() == {"course_handicap": 11}
    holes = [{"number": n, "handicap": n} for n in range(1, 10)]
    response = client.post("/handicap/strokes", json={"course_handicap": 3, "holes": holes})
    assert response.json() == {"strokes_per_hole": [1, 1, 1, 0, 0, 0, 0, 0, 0]}


def test_transfers_endpoint(client: TestClient) -> None:
    response = client.post("/rounds/transfers", json={"totals": {"a": "5", "b": "-5"}})
    assert response.json() == [{"payer": "b", "payee": "a", "amount": "5"}]


def test_unknown_bet_type_is_rejected(client: TestClient) -> None:
    response = client.post("/rounds/settle", json={"round": _round_payload(bets=[{"type": "Wolf"}])})
    assert response.status_code == 400


def test_api_key_required_when_configured(monkeypatch) -> None:
    monkeypatch.setattr(server, "get_api_access_key", lambda: "secret")
    client = TestClient(server.app)
    payload = {"round": _round_payload()}
    assert client.post("/rounds/settle", json=payload).status_code == 401
    response = client.post("/rounds/settle", json=payload, headers={"X-API-Key": "secret"})
    assert response.status_code == 200


def test_scalar_nassau_amounts_settle_at_the_shared_stake(client: TestClient) -> None:
    payload = _round_payload(bets=[{"type": "Nassau", "amounts": 5}], side_bets=[], side_data={})
    response = client.post("/rounds/settle", json={"round": payload})
    assert response.status_code == 200
    totals = {row["player_id"]: Decimal(row["total"]) for row in response.json()["results"]}
    assert totals == {"a": Decimal("10"), "b": Decimal("-10")}

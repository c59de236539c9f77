from __future__ import annotations

from fastapi.testclient import TestClient

from obstacle_chess.protocol.http.app import create_app


BOARD = """% mate in one for white
k . . . . . . .
. . . . . . . .
. K . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . R
w 0 0 ---- - 12
"""


def _client() -> TestClient:
    return TestClient(create_app())


def test_load_and_save_board_text() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{game_id}/board", json={"text": BOARD})
    assert r.status_code == 200
    state = r.json()
    assert state["board"][0] == "k . . . . . . ."
    assert state["walls_remaining"] == {"w": 0, "b": 0}
    assert state["fifty_counter"] == 12
    assert state["castling"] == "----"

    r_move = client.post(f"/api/games/{game_id}/actions", json={"action": "h1-h8"})
    assert r_move.json()["checkmate"]

    saved = client.get(f"/api/games/{game_id}/board").json()["text"]
    lines = [ln for ln in saved.splitlines() if not ln.startswith("%")]
    assert lines[0] == "k . . . . . . R"
    assert lines[8] == "b 0 0 ---- - 13"


def test_bad_board_text() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{game_id}/board", json={"text": "k . .\n"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "invalid_file"


def test_log_round_trip() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{game_id}/log", json={"text": "e2-e4\ne7-e5\ne7-e5\ng1-f3\n"})
    assert r.status_code == 200
    assert r.json()["failed"] == 1
    assert r.json()["history"] == ["e2-e4", "e7-e5", "g1-f3"]

    text = client.get(f"/api/games/{game_id}/log").json()["text"]
    assert [ln for ln in text.splitlines() if not ln.startswith("%")] == ["e2-e4", "e7-e5", "g1-f3"]

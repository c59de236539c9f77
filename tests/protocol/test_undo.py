from __future__ import annotations

from fastapi.testclient import TestClient

from obstacle_chess.protocol.http.app import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def _play(client: TestClient, game_id: str, *actions: str) -> None:
    for action in actions:
        r = client.post(f"/api/games/{game_id}/actions", json={"action": action})
        assert r.status_code == 200, r.json()


def test_undo_without_moves_returns_400() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{game_id}/undo")
    assert r.status_code == 400
    body = r.json()
    assert body["error"]["code"] == "no_restore_point"
    assert "no restore points" in body["error"]["message"]


def test_undo_restores_prior_state() -> None:
    client = _client()
    r = client.post("/api/games")
    game_id = r.json()["game_id"]
    start_board = r.json()["board"]
    _play(client, game_id, "e2-e4")
    r_undo = client.post(f"/api/games/{game_id}/undo")
    assert r_undo.status_code == 200
    state = r_undo.json()
    assert state["board"] == start_board
    assert state["active"] == "w"
    assert state["phase"] == "placement"
    assert state["history"] == []


def test_restore_to_index_and_view_snapshot() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    _play(client, game_id, "|a4", "e2-e4", "e7-e5")

    r_view = client.get(f"/api/games/{game_id}/history/1")
    assert r_view.status_code == 200
    view = r_view.json()
    assert view["label"] == "e2-e4"
    assert view["active"] == "w"
    assert view["board"][6] == "P P P P P P P P"

    assert client.get(f"/api/games/{game_id}/history/3").status_code == 400

    r = client.post(f"/api/games/{game_id}/restore", json={"index": 2})
    assert r.status_code == 200
    assert r.json()["history"] == ["|a4", "e2-e4"]
    assert r.json()["active"] == "b"

    r_bad = client.post(f"/api/games/{game_id}/restore", json={"index": 5})
    assert r_bad.status_code == 400
    assert client.post(f"/api/games/{game_id}/restore", json={"index": -1}).status_code == 422

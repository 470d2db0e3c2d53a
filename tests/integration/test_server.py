import time

from fastapi.testclient import TestClient

from server.app import app


def _create_game(client: TestClient, **overrides) -> str:
    body = {"seed": 42, "tick_ms": 0}
    body.update(overrides)
    resp = client.post("/games", json=body)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert "game_id" in data and isinstance(data["game_id"], str)
    return data["game_id"]


def test_create_game_and_snapshot():
    with TestClient(app) as client:
        gid = _create_game(client)

        snap = client.get(f"/games/{gid}/snapshot")
        assert snap.status_code == 200
        data = snap.json()

        assert data["phase"] == "DRAW"
        assert data["current_player_id"] == 0
        assert len(data["players"]) == 2
        assert all("hand" not in p for p in data["players"])
        assert data["deck"]["cards_remaining"] == 88


def test_viewer_sees_own_hand():
    with TestClient(app) as client:
        gid = _create_game(client)
        data = client.get(f"/games/{gid}/snapshot", params={"viewer": 0}).json()
        assert len(data["players"][0]["hand"]) == 5
        assert "hand" not in data["players"][1]


def test_human_draw_via_actions_endpoint():
    with TestClient(app) as client:
        gid = _create_game(client)

        resp = client.post(f"/games/{gid}/actions", json={"action_type": "draw"})
        assert resp.status_code == 200
        assert resp.json()["accepted"] is True

        data = client.get(f"/games/{gid}/snapshot", params={"viewer": 0}).json()
        assert data["phase"] == "ACTION"
        assert len(data["players"][0]["hand"]) == 7
        assert data["players"][0]["moves_left"] == 3

        again = client.post(f"/games/{gid}/actions", json={"action_type": "draw"}).json()
        assert again["accepted"] is False
        assert again["kind"] == "phase_violation"


def test_rejections_are_reported():
    with TestClient(app) as client:
        gid = _create_game(client)

        unknown = client.post(f"/games/{gid}/actions", json={"action_type": "fly"}).json()
        assert unknown["accepted"] is False
        assert "unknown action_type" in unknown["reason"]

        ai_move = client.post(f"/games/{gid}/actions", json={"action_type": "draw", "player_id": 1}).json()
        assert ai_move["accepted"] is False


def test_unknown_player_is_rejected():
    with TestClient(app) as client:
        gid = _create_game(client)

        resp = client.post(f"/games/{gid}/actions", json={"action_type": "draw", "player_id": 7})
        assert resp.status_code == 200
        data = resp.json()
        assert data["accepted"] is False
        assert "unknown player_id" in data["reason"]


def test_legal_actions_endpoint():
    with TestClient(app) as client:
        gid = _create_game(client)
        resp = client.get(f"/games/{gid}/legal_actions")
        assert resp.status_code == 200
        data = resp.json()
        assert data["game_id"] == gid
        assert data["actions"] == [{"action_type": "draw", "params": {}}]


def test_status_endpoint():
    with TestClient(app) as client:
        gid = _create_game(client)
        data = client.get(f"/games/{gid}/status").json()
        assert data["game_id"] == gid
        assert data["phase"] == "DRAW"
        assert data["acting_player_id"] == 0
        assert data["game_over"] is False


def test_unknown_game_is_404():
    with TestClient(app) as client:
        assert client.get("/games/doesnotexist/snapshot").status_code == 404
        assert client.get("/games/doesnotexist/status").status_code == 404
        assert client.post("/games/doesnotexist/actions", json={"action_type": "draw"}).status_code == 404


def test_websocket_streams_initial_snapshot():
    with TestClient(app) as client:
        gid = _create_game(client)

        with client.websocket_connect(f"/ws/games/{gid}?viewer=0") as ws:
            first = ws.receive_json()
            assert first["type"] == "snapshot"
            assert first["game_id"] == gid
            assert len(first["snapshot"]["players"][0]["hand"]) == 5


def test_websocket_snapshots_keep_viewer_hand():
    with TestClient(app) as client:
        gid = _create_game(client)

        with client.websocket_connect(f"/ws/games/{gid}?viewer=0") as ws:
            assert ws.receive_json()["type"] == "snapshot"

            resp = client.post(f"/games/{gid}/actions", json={"action_type": "draw"})
            assert resp.json()["accepted"] is True

            snapshot = None
            for _ in range(10):
                msg = ws.receive_json()
                if msg["type"] == "snapshot" and msg["snapshot"]["phase"] == "ACTION":
                    snapshot = msg["snapshot"]
                    break
            assert snapshot is not None
            assert len(snapshot["players"][0]["hand"]) == 7
            assert "hand" not in snapshot["players"][1]


def test_ai_vs_ai_game_runs_to_the_end():
    with TestClient(app) as client:
        gid = _create_game(client, human=False, time_limit_turns=6)

        data = {}
        for _ in range(200):
            data = client.get(f"/games/{gid}/status").json()
            if data["game_over"]:
                break
            time.sleep(0.05)
        assert data["game_over"] is True
        assert data["phase"] == "GAME_OVER"

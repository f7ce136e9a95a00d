import json
import sqlite3
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from playlytics.api import create_app
from playlytics.config_loader import Settings
from playlytics.persistence import PlayerStore


@pytest.fixture
async def client(tmp_path: Path):
    db_path = tmp_path / "players.sqlite"
    app = create_app(store=PlayerStore(db_path), settings=Settings(db_path=db_path))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


async def _create(client: AsyncClient, **payload) -> dict:
    body = {"sport": "Basketball"}
    body.update(payload)
    resp = await client.post("/players", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_sports_listing(client: AsyncClient):
    resp = await client.get("/sports")
    assert resp.status_code == 200
    labels = [item["label"] for item in resp.json()]
    assert labels == ["Basketball", "Football", "Soccer", "Baseball", "Hockey"]


@pytest.mark.anyio
async def test_player_crud(client: AsyncClient):
    created = await _create(client, name="Ada", matches=10, score=30)
    assert created["assists"] == 0

    resp = await client.get(f"/players/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["score"] == 30

    resp = await client.patch(f"/players/{created['id']}", json={"wins": 6})
    assert resp.status_code == 200
    assert resp.json()["wins"] == 6
    assert resp.json()["score"] == 30

    resp = await client.delete(f"/players/{created['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"/players/{created['id']}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Player not found"


@pytest.mark.anyio
async def test_patch_and_delete_missing_player(client: AsyncClient):
    resp = await client.patch("/players/missing", json={"wins": 1})
    assert resp.status_code == 404
    resp = await client.delete("/players/missing")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_create_requires_name(client: AsyncClient):
    resp = await client.post("/players", json={"sport": "Soccer"})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_list_players_by_sport(client: AsyncClient):
    await _create(client, name="Ada")
    await _create(client, name="Cleo", sport="Soccer")
    newest = await _create(client, name="Ben")

    resp = await client.get("/players", params={"sport": "Basketball"})
    assert resp.status_code == 200
    names = [player["name"] for player in resp.json()]
    assert names == ["Ben", "Ada"]
    assert resp.json()[0]["id"] == newest["id"]


@pytest.mark.anyio
async def test_compare_players_payload(client: AsyncClient):
    ada = await _create(client, name="Ada", matches=10, score=10, assists=10, rebounds=10, wins=8)
    ben = await _create(client, name="Ben", matches=10, score=10, assists=10, rebounds=10, wins=4)

    resp = await client.post("/compare-players", json={"player1Id": ada["id"], "player2Id": ben["id"]})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["comparison"]["player1"] == {
        "name": "Ada",
        "matches": 10,
        "score": 10,
        "assists": 10,
        "rebounds": 10,
        "wins": 8,
    }
    assert payload["trends"] == {
        "player1": {"slope": 0.0, "direction": "Stable performance"},
        "player2": {"slope": 0.0, "direction": "Stable performance"},
    }
    assert payload["insights"] == [
        "Both players show comparable overall performance levels.",
        "Ada has a superior win rate of 80.0% compared to 40.0%.",
    ]


@pytest.mark.anyio
async def test_compare_is_byte_identical_on_repeat(client: AsyncClient):
    ada = await _create(client, name="Ada", matches=12, score=40, assists=25, rebounds=9, wins=7)
    ben = await _create(client, name="Ben", matches=9, score=22, assists=31, rebounds=14, wins=5)
    body = {"player1Id": ada["id"], "player2Id": ben["id"]}

    first = await client.post("/compare-players", json=body)
    second = await client.post("/functions/v1/compare-players", json=body)

    assert first.status_code == 200
    assert first.content == second.content


@pytest.mark.anyio
async def test_compare_missing_id_returns_error_envelope(client: AsyncClient):
    resp = await client.post("/compare-players", json={"player1Id": "abc"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Both player IDs are required"}


@pytest.mark.anyio
async def test_compare_unknown_player_returns_no_partial_data(client: AsyncClient):
    ada = await _create(client, name="Ada")

    resp = await client.post("/compare-players", json={"player1Id": ada["id"], "player2Id": "missing"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Could not find both players"}


@pytest.mark.anyio
async def test_compare_invalid_json_returns_error_envelope(client: AsyncClient):
    resp = await client.post(
        "/compare-players",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 500
    assert set(resp.json()) == {"error"}


@pytest.mark.anyio
async def test_compare_store_failure_returns_error_envelope(client: AsyncClient):
    db_path = client.app.state.player_store.db_path
    conn = sqlite3.connect(db_path)
    conn.execute("DROP TABLE players")
    conn.commit()
    conn.close()

    resp = await client.post("/compare-players", json={"player1Id": "a", "player2Id": "b"})

    assert resp.status_code == 500
    assert "no such table" in resp.json()["error"]


@pytest.mark.anyio
async def test_cors_preflight_and_error_headers(client: AsyncClient):
    resp = await client.options(
        "/compare-players",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"

    resp = await client.post(
        "/compare-players",
        content=json.dumps({}),
        headers={"Origin": "http://example.com", "content-type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.anyio
async def test_compare_malformed_stored_row_returns_error_envelope(client: AsyncClient):
    ada = await _create(client, name="Ada")
    db_path = client.app.state.player_store.db_path
    conn = sqlite3.connect(db_path)
    conn.execute(
        "INSERT INTO players (id, name, sport, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
        ("bad", "Ben", "Basketball", "2025-11-14 14:23:22.12+00", "x"),
    )
    conn.commit()
    conn.close()

    resp = await client.post("/compare-players", json={"player1Id": ada["id"], "player2Id": "bad"})

    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert set(resp.json()) == {"error"}


@pytest.mark.anyio
@pytest.mark.parametrize("path", ["/compare-players", "/functions/v1/compare-players"])
async def test_compare_answers_plain_options_request(client: AsyncClient, path: str):
    resp = await client.options(path)
    assert resp.status_code == 200

    resp = await client.options(path, headers={"Origin": "http://example.com"})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"

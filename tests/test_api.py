"""HTTP and websocket tests against the full app."""

import json
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient

from squigbot.main import app
from squigbot.routers.wallets import get_http_client
from squigbot.services.collections import SQUIGS, UGLY

WALLET = "0x1111111111111111111111111111111111111111"
OTHER = "0x9999999999999999999999999999999999999999"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client: TestClient, display_name: str | None = None) -> tuple[str, dict]:
    username = f"user-{uuid.uuid4().hex[:8]}"
    response = client.post(
        "/register", json={"username": username, "password": "hunter22", "display_name": display_name}
    )
    assert response.status_code == 200
    token = client.post("/token", data={"username": username, "password": "hunter22"}).json()["access_token"]
    return username, {"Authorization": f"Bearer {token}"}


def mock_etherscan(transfers: list[dict] | None = None, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        if status_code != 200:
            return httpx.Response(status_code)
        return httpx.Response(200, json={"status": "1", "result": transfers or []})

    async def override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as mock_client:
            yield mock_client

    app.dependency_overrides[get_http_client] = override


def test_register_and_login(client: TestClient) -> None:
    username, headers = signup(client, display_name="Squiggy")

    me = client.get("/users/me/", headers=headers).json()
    assert me["username"] == username
    assert me["display_name"] == "Squiggy"

    duplicate = client.post("/register", json={"username": username, "password": "x"})
    assert duplicate.status_code == 400

    bad = client.post("/token", data={"username": username, "password": "wrong"})
    assert bad.status_code == 401


def test_update_display_name(client: TestClient) -> None:
    _, headers = signup(client)

    response = client.patch("/users/me/", json={"display_name": "Wiggle"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["display_name"] == "Wiggle"


def test_rooms(client: TestClient) -> None:
    _, headers = signup(client)

    room = client.post("/create-room", json={"room_name": "squig-pit"}, headers=headers).json()

    assert room["max_players"] == 10
    assert client.get(f"/room/{room['id']}").json()["room_name"] == "squig-pit"
    assert any(r["id"] == room["id"] for r in client.get("/rooms").json())
    assert client.get("/room/999999").status_code == 404


def test_link_wallet(client: TestClient) -> None:
    _, headers = signup(client)

    assert client.get("/wallets/me", headers=headers).status_code == 404
    assert client.put("/wallets/me", json={"address": "0x123"}, headers=headers).status_code == 422

    linked = client.put("/wallets/me", json={"address": WALLET}, headers=headers)
    assert linked.status_code == 200

    relinked = client.put("/wallets/me", json={"address": OTHER}, headers=headers)
    assert relinked.json()["address"] == OTHER
    assert client.get("/wallets/me", headers=headers).json()["address"] == OTHER


def test_holdings_need_a_wallet(client: TestClient) -> None:
    _, headers = signup(client)
    mock_etherscan()

    assert client.get("/holdings/ugly", headers=headers).status_code == 400
    assert client.get("/holdings/unknown", headers=headers).status_code == 404


def test_holdings_replay_transfers(client: TestClient) -> None:
    _, headers = signup(client)
    client.put("/wallets/me", json={"address": WALLET}, headers=headers)
    transfers = [{"tokenID": str(i), "from": OTHER, "to": WALLET} for i in range(1, 8)]
    transfers.append({"tokenID": "2", "from": WALLET, "to": OTHER})
    mock_etherscan(transfers)

    first = client.get("/holdings/squigs", headers=headers).json()
    second = client.get("/holdings/squigs", params={"page": 2}, headers=headers).json()

    assert first["total"] == 6
    assert first["total_pages"] == 2
    assert [item["token_id"] for item in first["items"]] == ["1", "3", "4", "5", "6"]
    assert first["items"][0]["image_url"] == SQUIGS.image_url("1")
    assert first["items"][0]["opensea_url"].endswith(f"{SQUIGS.contract}/1")
    assert [item["token_id"] for item in second["items"]] == ["7"]


def test_random_holding(client: TestClient) -> None:
    _, headers = signup(client)
    client.put("/wallets/me", json={"address": WALLET}, headers=headers)
    mock_etherscan([{"tokenID": "42", "from": OTHER, "to": WALLET}])

    item = client.get("/holdings/ugly/random", headers=headers).json()

    assert item == {"token_id": "42", "image_url": UGLY.image_url("42"), "opensea_url": None}


def test_random_holding_when_empty(client: TestClient) -> None:
    _, headers = signup(client)
    client.put("/wallets/me", json={"address": WALLET}, headers=headers)
    mock_etherscan([])

    assert client.get("/holdings/monster/random", headers=headers).status_code == 404
    assert client.get("/holdings/monster", headers=headers).json()["items"] == []


def test_holdings_upstream_failure(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr("squigbot.services.etherscan.RETRY_DELAY", 0)
    _, headers = signup(client)
    client.put("/wallets/me", json={"address": WALLET}, headers=headers)
    mock_etherscan(status_code=500)

    assert client.get("/holdings/ugly", headers=headers).status_code == 502


def test_websocket_rejects_bad_token(client: TestClient) -> None:
    from starlette.websockets import WebSocketDisconnect

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/1?token=not-a-token") as ws:
            ws.receive_json()


def receive_until(ws, event_type: str, limit: int = 50) -> list[dict]:
    events = []
    for _ in range(limit):
        event = ws.receive_json()
        events.append(event)
        if event["type"] == event_type:
            return events
    raise AssertionError(f"no {event_type} event in {events}")


def test_roulette_round_over_websocket(client: TestClient) -> None:
    username, headers = signup(client, display_name="Alice")
    room = client.post("/create-room", json={"room_name": "roulette"}, headers=headers).json()
    token = headers["Authorization"].split()[1]

    with client.websocket_connect(f"/ws/{room['id']}?token={token}") as ws:
        ws.send_json({"type": "start_roulette", "duration_ms": 500, "reminder_offsets_ms": [], "point_award": 3})
        prompt = receive_until(ws, "bot_message")[-1]
        assert prompt["title"] == "Round 1: 🎲 Squig Roulette"

        ws.send_json({"type": "pick", "message_id": prompt["message_id"], "choice": "roulette_4"})
        notice = receive_until(ws, "notice")[-1]
        assert notice["to"] == username
        assert notice["content"] == "You picked **4** 🎯"

        events = receive_until(ws, "round_complete")
        complete = events[-1]
        assert complete["result"]["picks"] == {username: 4}
        assert complete["result"]["points_awarded"] == 3
        won = complete["result"]["rolled"] == 4
        assert complete["scores"] == ([{"username": username, "points": 3}] if won else [])

        ws.send_json({"type": "start_roulette", "duration_ms": 500})
        ws.send_json({"type": "scores"})
        scores = receive_until(ws, "scores")[-1]
        assert scores["session"] == 1


def mock_upstream(handler) -> None:
    async def override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as mock_client:
            yield mock_client

    app.dependency_overrides[get_http_client] = override


def test_token_lookup_needs_no_wallet(client: TestClient) -> None:
    item = client.get("/tokens/squigs/1234").json()

    assert item == {
        "token_id": "1234",
        "image_url": SQUIGS.image_url("1234"),
        "opensea_url": f"https://opensea.io/assets/ethereum/{SQUIGS.contract}/1234",
    }
    assert client.get("/tokens/unknown/1").status_code == 404
    assert client.get("/tokens/squigs/abc").status_code == 422


SQUIG_METADATA = {
    "name": "Squig #7",
    "metadata": {
        "name": "Wiggly",
        "attributes": [
            {"trait_type": "Eyes", "value": "Spiral"},
            {"trait_type": "Body", "value": "Blue"},
            {"trait_type": "Head", "value": "Cap"},
        ],
    },
}


def test_card_details(client: TestClient, monkeypatch, tmp_path) -> None:
    counts = tmp_path / "trait_counts.json"
    counts.write_text(json.dumps({"Eyes": {"Spiral": 12}}), encoding="utf-8")
    monkeypatch.setattr("squigbot.config.TRAIT_COUNTS_PATH", str(counts))
    monkeypatch.setattr("squigbot.config.OPENSEA_API_KEY", "os-key")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/getNFTMetadata"):
            assert request.url.params["tokenId"] == "7"
            return httpx.Response(200, json=SQUIG_METADATA)
        return httpx.Response(200, json={"nft": {"rarity": {"rank": 42, "max_rank": 3333}}})

    mock_upstream(handler)

    card = client.get("/cards/7").json()

    assert card["name"] == "Wiggly"
    assert card["image_url"] == SQUIGS.image_url("7")
    assert card["rarity_label"] == "Uncommon"
    assert card["rarity_color"] == "#10B981"
    assert card["rank"] == {"rank": 42, "score": None, "percentile": None, "total": 3333}
    assert card["traits"]["Eyes"] == [{"trait_type": "Eyes", "value": "Spiral", "count": 12}]
    assert card["traits"]["Body"] == [{"trait_type": "Body", "value": "Blue", "count": None}]
    assert card["traits"]["Special"] == []

    renamed = client.get("/cards/7", params={"name": "My Squig"}).json()
    assert renamed["name"] == "My Squig"


def test_card_survives_missing_rank(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr("squigbot.services.upstream.RETRY_DELAY", 0)
    monkeypatch.setattr("squigbot.config.OPENSEA_API_KEY", "os-key")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/getNFTMetadata"):
            return httpx.Response(200, json={"metadata": {}})
        return httpx.Response(503)

    mock_upstream(handler)

    card = client.get("/cards/9").json()

    assert card["name"] == "Squig #9"
    assert card["rank"] is None
    assert card["rarity_label"] == "Common"


def test_card_metadata_failure(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr("squigbot.services.upstream.RETRY_DELAY", 0)
    mock_upstream(lambda request: httpx.Response(500))

    assert client.get("/cards/7").status_code == 502

"""
HTTP-level tests: bearer handling, status codes and response bodies of the
FastAPI routes, driven in-process through httpx.
"""

from decimal import Decimal

import httpx
import pytest

from app.core.config import settings
from app.main import create_app


async def signup(client, username: str, password: str = "secret") -> str:
    response = await client.post("/api/signup", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestSystemRoutes:
    async def test_root(self, client) -> None:
        response = await client.get("/")
        assert response.status_code == 200
        assert response.text == "Server is running"

    async def test_health(self, client) -> None:
        response = await client.get("/health")
        assert response.json()["status"] == "healthy"

    async def test_wildcard_cors_does_not_allow_credentials(self, client) -> None:
        response = await client.options(
            "/api/rooms",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
        )

        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers

    async def test_credentials_flag_is_ignored_with_wildcard_origins(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "CORS_ALLOW_CREDENTIALS", True)
        transport = httpx.ASGITransport(app=create_app())

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as plain_client:
            response = await plain_client.get("/", headers={"Origin": "https://evil.example"})

        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers


class TestAuthentication:
    async def test_signup_then_login(self, client) -> None:
        await signup(client, "Alice")

        response = await client.post("/api/login", json={"username": "alice", "password": "secret"})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["username"] == "alice"
        assert body["token"]

    async def test_bad_login_is_401(self, client) -> None:
        response = await client.post("/api/login", json={"username": "ghost", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid credentials"}

    async def test_missing_token_is_401(self, client) -> None:
        response = await client.post("/api/rooms", json={"room_name": "Trip"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token missing"

    async def test_invalid_token_is_403(self, client) -> None:
        response = await client.post("/api/rooms", json={"room_name": "Trip"}, headers=bearer("garbage"))

        assert response.status_code == 403
        assert response.json()["success"] is False

    async def test_email_verification_flow(self, client, mailer, monkeypatch) -> None:
        monkeypatch.setattr(settings, "REQUIRE_EMAIL_VERIFICATION", True)

        response = await client.post(
            "/api/signup", json={"username": "alice", "password": "secret", "email": "alice@example.com"}
        )
        assert response.status_code == 200
        assert "token" not in response.json()

        login = await client.post("/api/login", json={"username": "alice", "password": "secret"})
        assert login.status_code == 403

        token = mailer.sent[0][2]
        verify = await client.get("/api/verify-email", params={"token": token})
        assert verify.status_code == 200
        assert verify.json()["success"] is True

        login = await client.post("/api/login", json={"username": "alice", "password": "secret"})
        assert login.status_code == 200

    async def test_verification_token_is_not_an_access_token(self, client, mailer) -> None:
        await client.post("/api/signup", json={"username": "alice", "password": "secret", "email": "a@example.com"})
        verification_token = mailer.sent[0][2]

        response = await client.get("/api/expense/personal", headers=bearer(verification_token))

        assert response.status_code == 403


class TestRoomRoutes:
    async def test_goa_scenario(self, client) -> None:
        alice = await signup(client, "alice")
        bob = await signup(client, "bob")
        carol = await signup(client, "carol")

        created = await client.post("/api/rooms", json={"room_name": "Goa"}, headers=bearer(alice))
        assert created.status_code == 200
        room_id = created.json()["roomId"]
        assert created.json()["room_name"] == "Goa"

        details = await client.get(f"/api/room/{room_id}/details", headers=bearer(carol))
        assert details.json() == {"success": True, "participants": [], "created_by": "alice"}

        joined = await client.post("/api/join-room", json={"room_id": room_id}, headers=bearer(bob))
        assert joined.json() == {"success": True, "message": "Joined room successfully"}

        hotel = await client.post(
            f"/api/room/{room_id}/expense", json={"desc": "Hotel", "amount": 4000}, headers=bearer(alice)
        )
        assert hotel.status_code == 200

        food = await client.post(
            f"/api/room/{room_id}/expense", json={"desc": "Food", "amount": 500}, headers=bearer(carol)
        )
        assert food.status_code == 403
        assert food.json()["message"] == "Only room creator can add expenses"

        history = await client.get(f"/api/room/{room_id}/history", headers=bearer(bob))
        expenses = history.json()["expenses"]
        assert [e["description"] for e in expenses] == ["Hotel", "joined the room"]
        assert expenses[0]["people"] == 1
        assert Decimal(expenses[0]["amount"]) == Decimal("4000")
        assert Decimal(expenses[1]["amount"]) == 0

        participants = await client.get(f"/api/room/{room_id}/participants", headers=bearer(carol))
        assert participants.json() == {"success": True, "users": ["bob"]}

    async def test_history_for_non_member_is_403(self, client) -> None:
        alice = await signup(client, "alice")
        room_id = (await client.post("/api/rooms", json={"room_name": "Goa"}, headers=bearer(alice))).json()["roomId"]

        response = await client.get(f"/api/room/{room_id}/history", headers=bearer(alice))

        assert response.status_code == 403
        assert response.json()["message"] == "You are not a member of this room"

    async def test_history_with_invalid_room_id_is_400(self, client) -> None:
        alice = await signup(client, "alice")

        response = await client.get("/api/room/abc/history", headers=bearer(alice))

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid room ID"}

    async def test_join_unknown_room_is_404(self, client) -> None:
        bob = await signup(client, "bob")

        response = await client.post("/api/join-room", json={"room_id": 999}, headers=bearer(bob))

        assert response.status_code == 404

    async def test_create_room_without_name_is_400(self, client) -> None:
        alice = await signup(client, "alice")

        response = await client.post("/api/rooms", json={}, headers=bearer(alice))

        assert response.status_code == 400
        assert response.json()["message"] == "Room name is required"

    async def test_details_of_unknown_room(self, client) -> None:
        alice = await signup(client, "alice")

        response = await client.get("/api/room/12345/details", headers=bearer(alice))

        assert response.json() == {"success": True, "participants": [], "created_by": ""}


class TestExpenseRoutes:
    async def test_personal_expense_and_history(self, client) -> None:
        alice = await signup(client, "alice")

        created = await client.post(
            "/api/expense", json={"desc": "Coffee", "amount": 4.5, "people": 2}, headers=bearer(alice)
        )
        assert created.json() == {"success": True}

        for path in ("/api/expense/personal", "/api/history"):
            history = await client.get(path, headers=bearer(alice))
            expenses = history.json()["expenses"]
            assert len(expenses) == 1
            assert expenses[0]["description"] == "Coffee"
            assert expenses[0]["people"] == 2
            assert expenses[0]["room_name"] is None

    async def test_zero_amount_is_400(self, client) -> None:
        alice = await signup(client, "alice")

        response = await client.post(
            "/api/expense", json={"desc": "Coffee", "amount": 0, "people": 2}, headers=bearer(alice)
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "All fields are required"}

    @pytest.mark.parametrize("payload", [{"desc": "Coffee", "amount": "lots", "people": 1}, []])
    async def test_malformed_body_is_400(self, client, payload) -> None:
        alice = await signup(client, "alice")

        response = await client.post("/api/expense", json=payload, headers=bearer(alice))

        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_room_spend_summary(self, client) -> None:
        alice = await signup(client, "alice")
        room_id = (await client.post("/api/rooms", json={"room_name": "Goa"}, headers=bearer(alice))).json()["roomId"]
        await client.post(f"/api/room/{room_id}/expense", json={"desc": "Hotel", "amount": 300}, headers=bearer(alice))

        response = await client.get("/api/history/rooms", headers=bearer(alice))

        rooms = response.json()["rooms"]
        assert len(rooms) == 1
        assert rooms[0]["room_id"] == room_id
        assert rooms[0]["room_name"] == "Goa"
        assert Decimal(rooms[0]["total_amount"]) == Decimal("300")
        assert rooms[0]["participants"] == 0

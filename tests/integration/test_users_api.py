"""User endpoint tests: login, social signup, profile, deletion."""

import re

from httpx import AsyncClient


async def _login(client: AsyncClient, username: str | None) -> dict:
    response = await client.post("/user/login", json={"username": username})
    assert response.status_code == 200
    return response.json()


class TestLogin:
    async def test_creates_then_returns_same_user(self, client: AsyncClient):
        first = await _login(client, "alice")
        assert first["username"] == "alice"
        assert first["level"] == 1
        assert first["points"] == 0

        second = await _login(client, "  alice ")
        assert second["id"] == first["id"]

    async def test_blank_username_gets_guest_name(self, client: AsyncClient):
        user = await _login(client, "")
        assert re.fullmatch(r"guest_\d+_[a-z0-9]{6}", user["username"])

    async def test_missing_body_field_gets_guest_name(self, client: AsyncClient):
        response = await client.post("/user/login", json={})
        assert response.status_code == 200
        assert response.json()["username"].startswith("guest_")

    async def test_logout(self, client: AsyncClient):
        response = await client.post("/user/logout")
        assert response.json() == {"status": "ok", "message": "Logged out"}


class TestSocialLogin:
    async def test_creates_provider_account(self, client: AsyncClient):
        response = await client.post("/api/auth/google")
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["provider"] == "google"
        assert re.fullmatch(r"google_\d+", user["username"])
        assert user["points"] == 0

    async def test_rejects_odd_provider_names(self, client: AsyncClient):
        response = await client.post("/api/auth/bad%20name")
        assert response.status_code == 400


class TestProfile:
    async def test_profile_card(self, client: AsyncClient):
        user = await _login(client, "alice")
        await client.post("/explore", json={"user_id": user["id"], "location": "Japan"})
        await client.post("/reviews", json={"user_id": user["id"], "location": "Japan", "rating": 4})

        response = await client.get(f"/users/{user['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["points"] == 25
        assert data["visits"] == 1
        assert data["avgRating"] == 4.0
        assert data["progress"] == {"level": 1, "points": 25, "prev_cap": 0, "next_cap": 250, "percent": 10}

    async def test_profile_unknown_user(self, client: AsyncClient):
        response = await client.get("/users/999")
        assert response.status_code == 404
        assert response.json() == {"detail": "User not found."}

    async def test_update_with_avatar_alias(self, client: AsyncClient):
        user = await _login(client, "alice")
        response = await client.put("/user/update", json={
            "user_id": user["id"],
            "username": "alice_w",
            "email": "alice@example.com",
            "bio": "",
            "avatar": "https://img.example/a.png",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "alice_w"
        assert data["bio"] is None
        assert data["profilePic"] == "https://img.example/a.png"

    async def test_update_with_profile_pic_key(self, client: AsyncClient):
        user = await _login(client, "alice")
        response = await client.put("/user/update", json={
            "user_id": user["id"],
            "username": "alice",
            "profilePic": "p.png",
        })
        assert response.json()["profilePic"] == "p.png"

    async def test_update_taken_username_is_409(self, client: AsyncClient):
        await _login(client, "alice")
        bob = await _login(client, "bob")
        response = await client.put("/user/update", json={"user_id": bob["id"], "username": "alice"})
        assert response.status_code == 409
        assert response.json() == {"detail": "Username already exists."}

    async def test_update_blank_username_is_400(self, client: AsyncClient):
        user = await _login(client, "alice")
        response = await client.put("/user/update", json={"user_id": user["id"], "username": "  "})
        assert response.status_code == 400

    async def test_update_unknown_user_is_404(self, client: AsyncClient):
        response = await client.put("/user/update", json={"user_id": 555, "username": "x"})
        assert response.status_code == 404


class TestDelete:
    async def test_delete_cascades(self, client: AsyncClient):
        user = await _login(client, "alice")
        await client.post("/explore", json={"user_id": user["id"], "location": "Japan"})
        await client.post("/reviews", json={"user_id": user["id"], "location": "Japan", "rating": 5})

        response = await client.request("DELETE", "/user/delete", json={"user_id": user["id"]})
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "User deleted"}

        assert (await client.get(f"/users/{user['id']}")).status_code == 404
        reviews = (await client.get("/reviews", params={"location": "Japan"})).json()["reviews"]
        assert reviews == []

    async def test_delete_unknown_user_is_404(self, client: AsyncClient):
        response = await client.request("DELETE", "/user/delete", json={"user_id": 42})
        assert response.status_code == 404

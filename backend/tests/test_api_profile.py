"""
DevConnector Backend — Profile Endpoint Tests
===============================================

What we test:
    ✅ "me" endpoints require a token; listing and lookup by user are public
    ✅ Upsert creates, then updates, a single profile
    ✅ Required fields are validated
    ✅ Deleting the account removes the profile, posts and login
"""

import uuid

import pytest

from conftest import auth_headers, register

PROFILE = {
    "status": "Developer",
    "skills": "python, fastapi ,sql",
    "company": "Acme",
    "githubusername": "ada",
    "linkedin": "https://linkedin.com/in/ada",
}


class TestUpsert:

    @pytest.mark.asyncio
    async def test_me_without_profile_is_400(self, test_client):
        """Own profile lookup without a profile should be a 400."""
        token = await register(test_client)

        response = await test_client.get("/api/profile/me", headers=auth_headers(token))

        assert response.status_code == 400
        assert response.json()["msg"] == "There is no profile for this user."

    @pytest.mark.asyncio
    async def test_create_then_update(self, test_client):
        """Second upsert should update the same profile rather than create another."""
        token = await register(test_client, name="Ada Lovelace")

        created = await test_client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
        assert created.status_code == 200
        body = created.json()
        assert body["skills"] == ["python", "fastapi", "sql"]
        assert body["social"] == {"linkedin": "https://linkedin.com/in/ada"}
        assert body["user"]["name"] == "Ada Lovelace"

        updated = await test_client.post(
            "/api/profile",
            json={**PROFILE, "status": "Senior Developer"},
            headers=auth_headers(token),
        )
        assert updated.json()["id"] == body["id"]

        me = await test_client.get("/api/profile/me", headers=auth_headers(token))
        assert me.json()["status"] == "Senior Developer"

    @pytest.mark.asyncio
    async def test_status_and_skills_required(self, test_client):
        """Upsert without status and skills should report both fields."""
        token = await register(test_client)

        response = await test_client.post("/api/profile", json={}, headers=auth_headers(token))

        assert response.status_code == 400
        errors = {e["param"]: e["msg"] for e in response.json()["errors"]}
        assert errors == {"status": "Status is required", "skills": "Skills is required"}

    @pytest.mark.asyncio
    async def test_upsert_requires_token(self, test_client):
        """Upsert without a token should be a 401."""
        response = await test_client.post("/api/profile", json=PROFILE)

        assert response.status_code == 401


class TestPublicLookup:

    @pytest.mark.asyncio
    async def test_list_and_lookup_by_user_are_public(self, test_client):
        """Listing and lookup by user should work without a token."""
        token = await register(test_client)
        await test_client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
        me = (await test_client.get("/api/auth", headers=auth_headers(token))).json()

        listing = await test_client.get("/api/profile")
        single = await test_client.get(f"/api/profile/user/{me['id']}")

        assert listing.status_code == 200
        assert len(listing.json()) == 1
        assert single.status_code == 200
        assert single.json()["user"]["id"] == me["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", ["not-a-uuid", str(uuid.uuid4())])
    async def test_unknown_user_profile_is_400(self, test_client, user_id):
        """Unknown or malformed user ids should both be a 400 profile-not-found."""
        response = await test_client.get(f"/api/profile/user/{user_id}")

        assert response.status_code == 400
        assert response.json()["msg"] == "Profile not found."


class TestDeleteAccount:

    @pytest.mark.asyncio
    async def test_delete_account_removes_everything(self, test_client):
        """Deleting the account should remove posts, profile and login."""
        token = await register(test_client, email="leaving@devmail.com", password="secret123")
        await test_client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
        await test_client.post("/api/posts", json={"text": "bye"}, headers=auth_headers(token))

        response = await test_client.delete("/api/profile", headers=auth_headers(token))

        assert response.status_code == 200
        assert response.json() == {"msg": "User deleted."}

        assert (await test_client.get("/api/profile")).json() == []
        login = await test_client.post(
            "/api/auth", json={"email": "leaving@devmail.com", "password": "secret123"}
        )
        assert login.status_code == 400

        # The token is still well-formed, but the account behind it is gone
        me = await test_client.get("/api/auth", headers=auth_headers(token))
        assert me.status_code == 404

        other = await register(test_client, email="stays@devmail.com")
        posts = await test_client.get("/api/posts", headers=auth_headers(other))
        assert posts.json() == []

"""Integration tests for Profile API endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


def _headers(token: str) -> dict[str, str]:
    return {"x-auth-token": token}


PROFILE_BODY = {
    "status": "Developer",
    "company": "Acme",
    "skills": "HTML, CSS,  PHP, Python",
    "twitter": "https://twitter.com/jane",
    "linkedin": "https://linkedin.com/in/jane",
}

EXPERIENCE_BODY = {
    "title": "Engineer",
    "company": "Acme",
    "location": "Remote",
    "from": "2020-01-01",
    "current": True,
}


async def _create_profile(client: AsyncClient, token: str, **overrides) -> dict:
    response = await client.post(
        "/api/v1/profile", json={**PROFILE_BODY, **overrides}, headers=_headers(token)
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestUpsertProfile:
    @pytest.mark.asyncio
    async def test_creates_profile(self, client: AsyncClient, register_user) -> None:
        token, user_id = await register_user()

        data = await _create_profile(client, token)

        assert data["user"] == str(user_id)
        assert data["status"] == "Developer"
        assert data["skills"] == ["HTML", "CSS", "PHP", "Python"]
        assert data["social"] == {
            "twitter": "https://twitter.com/jane",
            "linkedin": "https://linkedin.com/in/jane",
        }
        assert data["experience"] == []

    @pytest.mark.asyncio
    async def test_status_is_required(self, client: AsyncClient, register_user) -> None:
        token, _ = await register_user()

        response = await client.post(
            "/api/v1/profile", json={"company": "Acme"}, headers=_headers(token)
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_update_merges_fields_and_replaces_social(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user()
        created = await _create_profile(client, token)

        data = await _create_profile(
            client,
            token,
            status="Senior Developer",
            company="",
            skills=None,
            twitter=None,
            linkedin=None,
            youtube="https://youtube.com/jane",
        )

        assert data["id"] == created["id"]
        assert data["status"] == "Senior Developer"
        assert data["company"] == "Acme"
        assert data["skills"] == ["HTML", "CSS", "PHP", "Python"]
        assert data["social"] == {"youtube": "https://youtube.com/jane"}

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/profile", json=PROFILE_BODY)

        assert response.status_code == 401


class TestReadProfiles:
    @pytest.mark.asyncio
    async def test_me_without_profile(self, client: AsyncClient, register_user) -> None:
        token, _ = await register_user()

        response = await client.get("/api/v1/profile/me", headers=_headers(token))

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PROFILE_NOT_FOUND"
        assert body["message"] == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_me_returns_own_profile_with_owner(
        self, client: AsyncClient, register_user
    ) -> None:
        token, user_id = await register_user(name="Alice", email="alice@example.com")
        await _create_profile(client, token)

        response = await client.get("/api/v1/profile/me", headers=_headers(token))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"] == str(user_id)
        assert data["owner"]["id"] == str(user_id)
        assert data["owner"]["name"] == "Alice"
        assert data["owner"]["avatar"]

    @pytest.mark.asyncio
    async def test_list_is_public_and_includes_owner(
        self, client: AsyncClient, register_user
    ) -> None:
        token_a, _ = await register_user(name="Alice", email="alice@example.com")
        token_b, _ = await register_user(name="Bob", email="bob@example.com")
        await _create_profile(client, token_a)
        await _create_profile(client, token_b)

        response = await client.get("/api/v1/profile")

        assert response.status_code == 200
        names = {item["owner"]["name"] for item in response.json()["data"]}
        assert names == {"Alice", "Bob"}

    @pytest.mark.asyncio
    async def test_get_by_user(self, client: AsyncClient, register_user) -> None:
        token, user_id = await register_user(name="Alice", email="alice@example.com")
        await _create_profile(client, token)

        response = await client.get(f"/api/v1/profile/user/{user_id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["owner"]["id"] == str(user_id)
        assert data["owner"]["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_get_by_unknown_user(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/v1/profile/user/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_by_malformed_user_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/profile/user/5d7a514b5d2c12c7449be045")

        assert response.status_code == 404
        assert response.json()["error_code"] == "MALFORMED_ID"


class TestExperience:
    @pytest.mark.asyncio
    async def test_add_experience_newest_first(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user()
        await _create_profile(client, token)

        await client.put(
            "/api/v1/profile/experience", json=EXPERIENCE_BODY, headers=_headers(token)
        )
        response = await client.put(
            "/api/v1/profile/experience",
            json={**EXPERIENCE_BODY, "title": "Lead", "current": False, "to": "2023-06-30"},
            headers=_headers(token),
        )

        assert response.status_code == 200
        experience = response.json()["data"]["experience"]
        assert [e["title"] for e in experience] == ["Lead", "Engineer"]
        assert experience[0]["from"] == "2020-01-01"
        assert experience[0]["to"] == "2023-06-30"
        assert experience[1]["current"] is True

    @pytest.mark.asyncio
    async def test_add_experience_requires_profile(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user()

        response = await client.put(
            "/api/v1/profile/experience", json=EXPERIENCE_BODY, headers=_headers(token)
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_add_experience_requires_from_date(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user()
        await _create_profile(client, token)
        body = {k: v for k, v in EXPERIENCE_BODY.items() if k != "from"}

        response = await client.put(
            "/api/v1/profile/experience", json=body, headers=_headers(token)
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_remove_experience(self, client: AsyncClient, register_user) -> None:
        token, _ = await register_user()
        await _create_profile(client, token)
        added = await client.put(
            "/api/v1/profile/experience", json=EXPERIENCE_BODY, headers=_headers(token)
        )
        exp_id = added.json()["data"]["experience"][0]["id"]

        response = await client.delete(
            f"/api/v1/profile/experience/{exp_id}", headers=_headers(token)
        )

        assert response.status_code == 200
        assert response.json()["data"]["experience"] == []

    @pytest.mark.asyncio
    async def test_remove_unknown_experience_is_noop(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user()
        await _create_profile(client, token)
        await client.put(
            "/api/v1/profile/experience", json=EXPERIENCE_BODY, headers=_headers(token)
        )

        response = await client.delete(
            f"/api/v1/profile/experience/{uuid4()}", headers=_headers(token)
        )

        assert response.status_code == 200
        assert len(response.json()["data"]["experience"]) == 1

    @pytest.mark.asyncio
    async def test_add_then_remove_restores_prior_sequence(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user()
        await _create_profile(client, token)
        for title in ("Junior", "Senior", "Lead"):
            seeded = await client.put(
                "/api/v1/profile/experience",
                json={**EXPERIENCE_BODY, "title": title},
                headers=_headers(token),
            )
            assert seeded.status_code == 200
        before = seeded.json()["data"]["experience"]
        assert [e["title"] for e in before] == ["Lead", "Senior", "Junior"]

        added = await client.put(
            "/api/v1/profile/experience",
            json={**EXPERIENCE_BODY, "title": "Contract"},
            headers=_headers(token),
        )
        added_id = added.json()["data"]["experience"][0]["id"]
        response = await client.delete(
            f"/api/v1/profile/experience/{added_id}", headers=_headers(token)
        )

        assert response.status_code == 200
        assert response.json()["data"]["experience"] == before


class TestDeleteProfile:
    @pytest.mark.asyncio
    async def test_deletes_profile_and_user_but_keeps_posts(
        self, client: AsyncClient, register_user
    ) -> None:
        token, user_id = await register_user(name="Alice", email="alice@example.com")
        reader_token, _ = await register_user(name="Bob", email="bob@example.com")
        await _create_profile(client, token)
        post = await client.post(
            "/api/v1/posts", json={"text": "still here"}, headers=_headers(token)
        )
        assert post.status_code == 201

        response = await client.delete("/api/v1/profile", headers=_headers(token))

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted"

        profile = await client.get(f"/api/v1/profile/user/{user_id}")
        assert profile.status_code == 404

        me = await client.get("/api/v1/auth", headers=_headers(token))
        assert me.status_code == 404
        assert me.json()["error_code"] == "USER_NOT_FOUND"

        posts = await client.get("/api/v1/posts", headers=_headers(reader_token))
        assert [p["text"] for p in posts.json()["data"]] == ["still here"]

    @pytest.mark.asyncio
    async def test_email_can_register_again_after_delete(
        self, client: AsyncClient, register_user
    ) -> None:
        token, _ = await register_user(email="alice@example.com")

        await client.delete("/api/v1/profile", headers=_headers(token))

        await register_user(email="alice@example.com")

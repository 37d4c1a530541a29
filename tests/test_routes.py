"""
HTTP tests for the auth, score and leaderboard routes.
"""

import pytest
from redis import exceptions as redis_exceptions

from leaderboard_api.core.security import issue_token

pytestmark = pytest.mark.asyncio


async def register(api, username, password="secret"):
    response = await api.post("/auth", json={"username": username, "password": password})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def submit(api, headers, activity, score):
    response = await api.post("/score", json={"activity": activity, "score": score}, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def players(api):
    """Two registered users with the three-submission scenario loaded."""
    user1 = await register(api, "user@1")
    user2 = await register(api, "user@2")
    await submit(api, user1, "activity-1", 110)
    await submit(api, user2, "activity-1", 120)
    await submit(api, user1, "activity-2", 210)
    return user1, user2


def summary(body):
    return [(e["activity"], e["username"], e["score"], e["rank"]) for e in body]


class TestHealth:
    async def test_health(self, api):
        response = await api.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["store"] is True


class TestAuthRoutes:
    async def test_register_and_list(self, api):
        await register(api, "User@1")

        response = await api.get("/auth")
        assert response.json() == ["user@1"]

    async def test_register_duplicate(self, api):
        await register(api, "user@1")

        response = await api.post("/auth", json={"username": "user@1", "password": "other"})
        assert response.status_code == 409

    async def test_register_missing_password(self, api):
        response = await api.post("/auth", json={"username": "user@1"})
        assert response.status_code == 400

    async def test_register_username_with_delimiter(self, api):
        response = await api.post("/auth", json={"username": "user:1", "password": "x"})
        assert response.status_code == 400

    async def test_login_and_change_password(self, api):
        await register(api, "user@1", "old")

        response = await api.put("/auth", json={"username": "user@1", "password": "old", "newpassword": "new"})
        assert response.status_code == 201
        assert response.json()["token"]

        response = await api.put("/auth", json={"username": "user@1", "password": "old"})
        assert response.status_code == 401

    async def test_login_unknown_user(self, api):
        response = await api.put("/auth", json={"username": "user@x", "password": "x"})
        assert response.status_code == 404

    async def test_unregister_cascades_scores(self, api, players):
        user1, user2 = players

        response = await api.request("PATCH", "/auth", json={"username": "user@1", "password": "secret"})
        assert response.status_code == 204

        response = await api.get("/leaderboard/global/rank/user@1", headers=user2)
        assert response.json() == []
        response = await api.get("/leaderboard/activity-1", headers=user2)
        assert [e["username"] for e in response.json()] == ["user@2"]
        response = await api.get("/auth")
        assert response.json() == ["user@2"]


class TestScoreRoutes:
    async def test_requires_token(self, api):
        response = await api.post("/score", json={"activity": "a", "score": 1})
        assert response.status_code == 401

    async def test_rejects_bad_token(self, api):
        headers = {"Authorization": "Bearer not-a-token"}
        response = await api.get("/score", headers=headers)
        assert response.status_code == 401

    async def test_rejects_token_signed_elsewhere(self, api):
        headers = {"Authorization": f"Bearer {issue_token('user@1', secret='other-secret')}"}
        response = await api.get("/score", headers=headers)
        assert response.status_code == 401

    async def test_submit(self, api):
        headers = await register(api, "user@1")

        body = await submit(api, headers, "activity-1", 110)
        assert body["activity"] == "activity-1"
        assert body["username"] == "user@1"
        assert body["score"] == 110
        assert isinstance(body["timestamp"], int)

    async def test_submit_missing_activity(self, api):
        headers = await register(api, "user@1")

        response = await api.post("/score", json={"score": 10}, headers=headers)
        assert response.status_code == 400

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    async def test_submit_non_finite_score(self, api, token):
        headers = await register(api, "user@1")

        response = await api.post(
            "/score",
            content='{"activity": "a", "score": %s}' % token,
            headers={**headers, "Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidArgument"

        response = await api.get("/leaderboard/a", headers=headers)
        assert response.status_code == 404

    async def test_my_scores(self, api, players):
        user1, _ = players

        response = await api.get("/score", headers=user1)
        assert summary(response.json()) == [
            ("activity-2", "user@1", 210, 1),
            ("activity-1", "user@1", 110, 2),
        ]

    async def test_remove_one_activity(self, api, players):
        user1, _ = players

        response = await api.request("PATCH", "/score", json={"activity": "activity-1"}, headers=user1)
        assert response.status_code == 204

        response = await api.get("/score", headers=user1)
        assert [e["activity"] for e in response.json()] == ["activity-2"]

    async def test_remove_all(self, api, players):
        user1, _ = players

        response = await api.delete("/score", headers=user1)
        assert response.status_code == 204

        response = await api.get("/score", headers=user1)
        assert response.json() == []


class TestLeaderboardRoutes:
    async def test_activity_board(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-1", headers=user1)
        assert response.status_code == 200
        assert summary(response.json()) == [
            ("activity-1", "user@2", 120, 1),
            ("activity-1", "user@1", 110, 2),
        ]

    async def test_unknown_activity(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-x", headers=user1)
        assert response.status_code == 404

    async def test_activity_top(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-1/top/1", headers=user1)
        assert summary(response.json()) == [("activity-1", "user@2", 120, 1)]

    async def test_activity_top_unknown_activity(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-x/top/2", headers=user1)
        assert response.status_code == 404

    @pytest.mark.parametrize("count", ["0", "-1", "abc"])
    async def test_invalid_count(self, api, players, count):
        user1, _ = players

        response = await api.get(f"/leaderboard/activity-1/top/{count}", headers=user1)
        assert response.status_code == 400

    async def test_rank(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-1/rank/user@1", headers=user1)
        body = response.json()
        assert (body["score"], body["rank"]) == (110, 2)

    async def test_rank_without_entry(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-1/rank/user@x", headers=user1)
        assert response.status_code == 200
        assert response.json()["rank"] is None

    async def test_around(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/activity-1/around/user@1/2", headers=user1)
        assert summary(response.json()) == [
            ("activity-1", "user@2", 120, 1),
            ("activity-1", "user@1", 110, 2),
        ]

    async def test_around_odd_window(self, api, players):
        user1, _ = players
        user3 = await register(api, "user@3")
        await submit(api, user3, "activity-1", 100)

        response = await api.get("/leaderboard/activity-1/around/user@1/3", headers=user1)
        assert summary(response.json()) == [
            ("activity-1", "user@2", 120, 1),
            ("activity-1", "user@1", 110, 2),
            ("activity-1", "user@3", 100, 3),
        ]

    async def test_global(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/global", headers=user1)
        assert summary(response.json()) == [
            ("activity-2", "user@1", 210, 1),
            ("activity-1", "user@2", 120, 2),
            ("activity-1", "user@1", 110, 3),
        ]

    async def test_global_top(self, api, players):
        user1, _ = players

        response = await api.get("/leaderboard/global/top/1", headers=user1)
        assert summary(response.json()) == [("activity-2", "user@1", 210, 1)]

    async def test_requires_token(self, api):
        response = await api.get("/leaderboard/global")
        assert response.status_code == 401

    async def test_store_unavailable(self, api, redis_client, monkeypatch):
        headers = await register(api, "user@1")

        async def refuse(*args, **kwargs):
            raise redis_exceptions.ConnectionError("connection refused")

        monkeypatch.setattr(redis_client, "exists", refuse)

        response = await api.get("/leaderboard/activity-1", headers=headers)
        assert response.status_code == 503
        assert response.json()["error"] == "StoreUnavailable"

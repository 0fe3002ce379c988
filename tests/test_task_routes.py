"""
Tests for /api/tasks — ownership-scoped CRUD over HTTP.
"""

import uuid

import pytest

from tasks.store import TaskStore


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def _create(client, token, **payload):
    payload.setdefault("title", "T")
    payload.setdefault("deadline", "2025-01-01")
    res = await client.post("/api/tasks/create", json=payload, headers=_auth(token))
    assert res.status_code == 201, res.text
    return res.json()


class TestCreateAndList:
    async def test_create_sets_caller_as_owner(self, client, make_user):
        user_id, token = await make_user("al", "a@x.com")
        task = await _create(client, token, title="T", deadline="2025-01-01")
        assert task["title"] == "T"
        assert task["deadline"] == "2025-01-01"
        assert task["description"] is None
        assert task["user"] == user_id

    async def test_create_requires_title_and_deadline(self, client, make_user):
        _, token = await make_user("al", "a@x.com")
        res = await client.post(
            "/api/tasks/create", json={"description": "d"}, headers=_auth(token)
        )
        assert res.status_code == 400
        fields = {err["field"] for err in res.json()["errors"]}
        assert fields == {"title", "deadline"}

    async def test_list_is_scoped_to_caller(self, client, make_user):
        _, alice = await make_user("alice", "alice@x.com")
        _, bob = await make_user("bob", "bob@x.com")
        await _create(client, alice, title="A1")
        await _create(client, alice, title="A2")

        res = await client.get("/api/tasks/all", headers=_auth(alice))
        assert [t["title"] for t in res.json()] == ["A1", "A2"]

        res = await client.get("/api/tasks/all", headers=_auth(bob))
        assert res.status_code == 200
        assert res.json() == []

    async def test_unexpected_failure_is_reported_generically(self, client, make_user, monkeypatch):
        _, token = await make_user("al", "a@x.com")

        async def boom(self, owner):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(TaskStore, "list_all", boom)
        res = await client.get("/api/tasks/all", headers=_auth(token))
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to retrieve tasks."}


class TestUpdate:
    async def test_partial_update(self, client, make_user):
        _, token = await make_user("al", "a@x.com")
        task = await _create(client, token, description="keep me")

        res = await client.put(
            f"/api/tasks/update/{task['id']}",
            json={"title": "T2", "deadline": "2025-02-01"},
            headers=_auth(token),
        )
        assert res.status_code == 200, res.text
        body = res.json()
        assert body["title"] == "T2"
        assert body["deadline"] == "2025-02-01"
        assert body["description"] == "keep me"

    @pytest.mark.parametrize("field", ["title", "deadline"])
    async def test_null_required_field_rejected(self, client, make_user, field):
        _, token = await make_user("al", "a@x.com")
        task = await _create(client, token)
        res = await client.put(
            f"/api/tasks/update/{task['id']}", json={field: None}, headers=_auth(token)
        )
        assert res.status_code == 400
        assert [err["field"] for err in res.json()["errors"]] == [field]

        res = await client.get("/api/tasks/all", headers=_auth(token))
        assert res.json()[0][field] == task[field]

    async def test_description_can_be_cleared(self, client, make_user):
        _, token = await make_user("al", "a@x.com")
        task = await _create(client, token, description="old")
        res = await client.put(
            f"/api/tasks/update/{task['id']}", json={"description": None}, headers=_auth(token)
        )
        assert res.status_code == 200, res.text
        assert res.json()["description"] is None
        assert res.json()["title"] == task["title"]

    async def test_foreign_task_matches_missing_task(self, client, make_user):
        _, alice = await make_user("alice", "alice@x.com")
        _, bob = await make_user("bob", "bob@x.com")
        task = await _create(client, alice)

        foreign = await client.put(
            f"/api/tasks/update/{task['id']}", json={"title": "x"}, headers=_auth(bob)
        )
        missing = await client.put(
            f"/api/tasks/update/{uuid.uuid4()}", json={"title": "x"}, headers=_auth(bob)
        )
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json() == {"error": "Task not found or not authorized."}


class TestDelete:
    async def test_delete_returns_task(self, client, make_user):
        _, token = await make_user("al", "a@x.com")
        task = await _create(client, token)

        res = await client.delete(f"/api/tasks/delete/{task['id']}", headers=_auth(token))
        assert res.status_code == 200
        assert res.json()["id"] == task["id"]

        res = await client.get("/api/tasks/all", headers=_auth(token))
        assert res.json() == []

    async def test_foreign_task_matches_missing_task(self, client, make_user):
        _, alice = await make_user("alice", "alice@x.com")
        _, bob = await make_user("bob", "bob@x.com")
        task = await _create(client, alice)

        foreign = await client.delete(f"/api/tasks/delete/{task['id']}", headers=_auth(bob))
        missing = await client.delete("/api/tasks/delete/not-a-uuid", headers=_auth(bob))
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

        res = await client.get("/api/tasks/all", headers=_auth(alice))
        assert len(res.json()) == 1

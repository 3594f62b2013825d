"""End-to-end tests for the notification inbox."""

import pytest

from tests.factories import auth_header


@pytest.fixture
def inbox_owner(client, register):
    """A user who has asked a question that then gets answered twice."""
    owner = register("owner")
    helper = register("helper")
    register("watcher")
    question = client.post(
        "/questions",
        json={
            "title": "Why does my asyncio task never run?",
            "content": "I create a task with create_task but nothing happens.",
            "tags": ["python", "asyncio"],
        },
        headers=auth_header(owner["token"]),
    ).json()
    for _ in range(2):
        response = client.post(
            "/answers",
            json={
                "question_id": question["question_id"],
                "content": "You need to await it or keep a reference to the task. cc @watcher",
            },
            headers=auth_header(helper["token"]),
        )
        assert response.status_code == 201
    return owner, helper


class TestNotifications:
    """End-to-end tests for the notification endpoints."""

    def test_requires_auth(self, client):
        """Should return 401 when not authenticated."""
        assert client.get("/notifications").status_code == 401

    def test_answers_and_mentions_are_delivered(self, client, inbox_owner):
        """Should notify the asker of answers and the mentioned user."""
        owner, helper = inbox_owner
        watcher = client.post(
            "/auth/login", json={"email": "watcher@example.com", "password": "secret123"}
        ).json()

        owner_inbox = client.get("/notifications", headers=auth_header(owner["token"])).json()
        helper_inbox = client.get("/notifications", headers=auth_header(helper["token"])).json()
        watcher_inbox = client.get(
            "/notifications", headers=auth_header(watcher["token"])
        ).json()

        assert owner_inbox["total"] == 2
        assert owner_inbox["unread_count"] == 2
        assert {n["type"] for n in owner_inbox["notifications"]} == {"question_answer"}
        assert helper_inbox["total"] == 0
        assert [n["type"] for n in watcher_inbox["notifications"]] == ["mention", "mention"]

    def test_read_and_delete(self, client, inbox_owner):
        """Should mark read, count and delete notifications."""
        owner, helper = inbox_owner
        headers = auth_header(owner["token"])
        first = client.get("/notifications", headers=headers).json()["notifications"][0]

        read = client.put(f"/notifications/{first['notification_id']}/read", headers=headers)
        count = client.get("/notifications/count", headers=headers).json()
        unread = client.get(
            "/notifications", params={"unread_only": True}, headers=headers
        ).json()
        foreign = client.delete(
            f"/notifications/{first['notification_id']}",
            headers=auth_header(helper["token"]),
        )
        deleted = client.delete(f"/notifications/{first['notification_id']}", headers=headers)
        read_all = client.put("/notifications/read-all", headers=headers).json()
        cleared = client.delete("/notifications", headers=headers).json()

        assert read.json()["is_read"] is True
        assert count["unread_count"] == 1
        assert unread["total"] == 1
        assert foreign.status_code == 404
        assert deleted.json()["deleted"] is True
        assert read_all["count"] == 1
        assert cleared["count"] == 1

"""End-to-end walk through asking, answering and switching the accepted answer."""

from tests.factories import auth_header

ANSWER_TEXT = "Pin the dependency and rebuild the lock file from scratch."


def _accepted_notifications(client, user: dict) -> list[dict]:
    inbox = client.get("/notifications", headers=auth_header(user["token"])).json()
    return [n for n in inbox["notifications"] if n["type"] == "answer_accepted"]


def _answer(client, user: dict, question_id: str) -> dict:
    response = client.post(
        "/answers",
        json={"question_id": question_id, "content": ANSWER_TEXT},
        headers=auth_header(user["token"]),
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_accept_then_switch_accepted_answer(client, register):
    """Acceptance moves from R1 to R2, notifying B once and then C once."""
    a, b, c = register("alice"), register("bob"), register("carol")
    assert client.get("/tags/xy").status_code == 404

    question = client.post(
        "/questions",
        json={
            "title": "Why does my build break after upgrading?",
            "content": "The build passed yesterday and fails today with no code change.",
            "tags": ["xy"],
        },
        headers=auth_header(a["token"]),
    ).json()
    qid = question["question_id"]
    assert client.get("/tags/xy").json()["usage_count"] == 1

    r1 = _answer(client, b, qid)
    r2 = _answer(client, c, qid)
    asker = auth_header(a["token"])

    first = client.post(f"/questions/{qid}/accept-answer/{r1['answer_id']}", headers=asker)
    assert first.status_code == 200, first.text
    assert first.json()["is_answered"] is True
    r1_now = client.get(f"/answers/{r1['answer_id']}", headers=asker).json()
    assert r1_now["is_accepted"] is True
    assert len(_accepted_notifications(client, b)) == 1
    assert _accepted_notifications(client, c) == []

    second = client.post(f"/questions/{qid}/accept-answer/{r2['answer_id']}", headers=asker)
    assert second.status_code == 200, second.text
    assert second.json()["accepted_answer_id"] == r2["answer_id"]

    r1_after = client.get(f"/answers/{r1['answer_id']}", headers=asker).json()
    r2_after = client.get(f"/answers/{r2['answer_id']}", headers=asker).json()
    assert r1_after["is_accepted"] is False
    assert r2_after["is_accepted"] is True
    assert len(_accepted_notifications(client, c)) == 1
    assert len(_accepted_notifications(client, b)) == 1
    assert client.get("/tags/xy").json()["usage_count"] == 1

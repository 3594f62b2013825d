"""End-to-end tests for asking, answering, voting and accepting."""

import pytest

from tests.factories import auth_header

QUESTION = {
    "title": "How do I reverse a list in Python?",
    "content": "I want to iterate over my list backwards without copying it.",
    "tags": ["Python", "lists"],
}
ANSWER_TEXT = "Use reversed(my_list); it returns an iterator and copies nothing."


@pytest.fixture
def asker(register):
    return register("asker")


@pytest.fixture
def answerer(register):
    return register("answerer")


@pytest.fixture
def question(client, asker):
    response = client.post("/questions", json=QUESTION, headers=auth_header(asker["token"]))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def answer(client, question, answerer):
    response = client.post(
        "/answers",
        json={"question_id": question["question_id"], "content": ANSWER_TEXT},
        headers=auth_header(answerer["token"]),
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestQuestions:
    """End-to-end tests for the question endpoints."""

    def test_create_requires_auth(self, client):
        """Should return 401 when not authenticated."""
        response = client.post("/questions", json=QUESTION)

        assert response.status_code == 401

    def test_create_normalizes_tags(self, client, question):
        """Should lower-case tags and start counters at zero."""
        assert question["tags"] == ["python", "lists"]
        assert question["vote_count"] == 0
        assert question["answer_count"] == 0
        assert question["status"] == "open"

        tags = client.get("/tags", params={"order_by": "usage_count"}).json()["tags"]
        usage = {t["name"]: t["usage_count"] for t in tags}
        assert usage == {"lists": 1, "python": 1}

    def test_too_many_tags(self, client, asker):
        """Should reject more than five tags."""
        payload = {**QUESTION, "tags": ["a1", "b2", "c3", "d4", "e5", "f6"]}

        response = client.post("/questions", json=payload, headers=auth_header(asker["token"]))

        assert response.status_code == 400

    def test_view_counts_and_listing(self, client, question):
        """Should count views on detail reads and list with pagination."""
        qid = question["question_id"]
        client.get(f"/questions/{qid}")
        detail = client.get(f"/questions/{qid}").json()
        listing = client.get("/questions", params={"tag": "python", "limit": 1}).json()

        assert detail["views"] == 2
        assert listing["total"] == 1
        assert listing["pages"] == 1
        assert listing["questions"][0]["question_id"] == qid

    def test_unknown_question(self, client):
        """Should return 404 for a missing question."""
        response = client.get("/questions/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404

    def test_only_author_can_edit(self, client, question, answerer, asker):
        """Should return 403 for other users and apply the author's edit."""
        qid = question["question_id"]

        forbidden = client.put(
            f"/questions/{qid}",
            json={"title": "A title hijacked by someone else"},
            headers=auth_header(answerer["token"]),
        )
        edited = client.put(
            f"/questions/{qid}",
            json={"tags": ["python", "iteration"]},
            headers=auth_header(asker["token"]),
        )

        assert forbidden.status_code == 403
        assert edited.status_code == 200
        assert edited.json()["tags"] == ["python", "iteration"]


class TestVoting:
    """End-to-end tests for votes."""

    def test_vote_requires_reputation(self, client, question, answerer):
        """Should return 403 for users below the voting threshold."""
        response = client.post(
            f"/questions/{question['question_id']}/vote",
            json={"vote_type": "upvote"},
            headers=auth_header(answerer["token"]),
        )

        assert response.status_code == 403
        assert "15 reputation" in response.json()["detail"]

    def test_toggle_and_switch(self, client, question, answerer, grant):
        """Should toggle a repeated vote off and switch direction."""
        grant(answerer["user"]["user_id"], 15)
        url = f"/questions/{question['question_id']}/vote"
        headers = auth_header(answerer["token"])

        up = client.post(url, json={"vote_type": "upvote"}, headers=headers).json()
        down = client.post(url, json={"vote_type": "downvote"}, headers=headers).json()
        off = client.post(url, json={"vote_type": "downvote"}, headers=headers).json()

        assert (up["vote_count"], up["user_vote"]) == (1, "upvote")
        assert (down["vote_count"], down["user_vote"]) == (-1, "downvote")
        assert (off["vote_count"], off["user_vote"]) == (0, None)

    def test_self_vote_rejected(self, client, question, asker, grant):
        """Should return 400 when voting on one's own question."""
        grant(asker["user"]["user_id"], 15)

        response = client.post(
            f"/questions/{question['question_id']}/vote",
            json={"vote_type": "upvote"},
            headers=auth_header(asker["token"]),
        )

        assert response.status_code == 400


class TestAnswers:
    """End-to-end tests for answers, approval and acceptance."""

    def test_unapproved_answer_visibility(self, client, question, answer, asker, answerer):
        """Should hide unapproved answers from everyone but the two authors."""
        url = f"/questions/{question['question_id']}/answers"

        anonymous = client.get(url).json()
        for_asker = client.get(url, headers=auth_header(asker["token"])).json()
        for_answerer = client.get(url, headers=auth_header(answerer["token"])).json()

        assert anonymous["answers"] == []
        assert [a["answer_id"] for a in for_asker["answers"]] == [answer["answer_id"]]
        assert [a["answer_id"] for a in for_answerer["answers"]] == [answer["answer_id"]]
        assert client.get(f"/answers/{answer['answer_id']}").status_code == 404

    def test_approve_makes_answer_public(self, client, question, answer, asker, answerer):
        """Should let only the question author approve."""
        approve_url = f"/answers/{answer['answer_id']}/approve"

        denied = client.post(approve_url, headers=auth_header(answerer["token"]))
        approved = client.post(approve_url, headers=auth_header(asker["token"]))
        public = client.get(f"/questions/{question['question_id']}/answers").json()

        assert denied.status_code == 403
        assert approved.json()["is_approved"] is True
        assert [a["answer_id"] for a in public["answers"]] == [answer["answer_id"]]

    def test_accept_and_switch(self, client, question, answer, asker, register):
        """Should keep exactly one accepted answer per question."""
        other = register("another")
        second = client.post(
            "/answers",
            json={"question_id": question["question_id"], "content": ANSWER_TEXT},
            headers=auth_header(other["token"]),
        ).json()
        qid = question["question_id"]
        headers = auth_header(asker["token"])

        first_accept = client.post(
            f"/questions/{qid}/accept-answer/{answer['answer_id']}", headers=headers
        )
        switched = client.post(f"/answers/{second['answer_id']}/accept", headers=headers)
        answers = client.get(f"/questions/{qid}/answers", headers=headers).json()
        detail = client.get(f"/questions/{qid}").json()

        assert first_accept.json()["accepted_answer_id"] == answer["answer_id"]
        assert switched.json()["accepted_answer_id"] == second["answer_id"]
        accepted = [a["answer_id"] for a in answers["answers"] if a["is_accepted"]]
        assert accepted == [second["answer_id"]]
        assert answers["answers"][0]["answer_id"] == second["answer_id"]
        assert detail["is_answered"] is True
        assert detail["answer_count"] == 2

    def test_only_question_author_accepts(self, client, question, answer, answerer):
        """Should return 403 when someone else accepts."""
        response = client.post(
            f"/answers/{answer['answer_id']}/accept", headers=auth_header(answerer["token"])
        )

        assert response.status_code == 403

    def test_unaccept(self, client, question, answer, asker):
        """Should clear the accepted answer."""
        headers = auth_header(asker["token"])
        client.post(f"/answers/{answer['answer_id']}/accept", headers=headers)

        response = client.post(f"/answers/{answer['answer_id']}/unaccept", headers=headers)
        detail = client.get(f"/questions/{question['question_id']}").json()

        assert response.json()["is_accepted"] is False
        assert detail["accepted_answer_id"] is None

    def test_short_answer_rejected(self, client, question, answerer):
        """Should validate answer length at the API layer."""
        response = client.post(
            "/answers",
            json={"question_id": question["question_id"], "content": "Too short"},
            headers=auth_header(answerer["token"]),
        )

        assert response.status_code == 422


class TestComments:
    """End-to-end tests for comments."""

    def test_comment_thread(self, client, question, answerer, grant):
        """Should gate comments on reputation and list them oldest first."""
        headers = auth_header(answerer["token"])
        payload = {"content": "Which Python version?", "question_id": question["question_id"]}

        denied = client.post("/comments", json=payload, headers=headers)
        grant(answerer["user"]["user_id"], 5)
        created = client.post("/comments", json=payload, headers=headers)
        listing = client.get(
            "/comments", params={"question_id": question["question_id"]}
        ).json()

        assert denied.status_code == 403
        assert created.status_code == 201
        assert listing["total"] == 1
        assert listing["comments"][0]["content"] == "Which Python version?"

    def test_comment_needs_one_target(self, client, answerer, grant):
        """Should return 400 without a target."""
        grant(answerer["user"]["user_id"], 5)

        response = client.post(
            "/comments",
            json={"content": "Orphan comment"},
            headers=auth_header(answerer["token"]),
        )

        assert response.status_code == 400

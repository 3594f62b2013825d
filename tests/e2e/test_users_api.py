"""End-to-end tests for user profile and reputation endpoints."""

from tests.factories import auth_header


class TestUserEndpoints:
    """End-to-end tests for user API endpoints."""

    def test_profile_by_username(self, client, register):
        """Should return the public profile without the email."""
        registered = register("alice")

        response = client.get("/users/alice")

        assert response.status_code == 200
        assert response.json()["user_id"] == registered["user"]["user_id"]
        assert "email" not in response.json()
        assert "role" not in response.json()

    def test_get_nonexistent_user_profile(self, client):
        """Should return 404 for nonexistent user."""
        assert client.get("/users/nobody").status_code == 404

    def test_admin_grants_reputation(self, client, register, admin):
        """Should raise reputation and notify the user."""
        user = register("alice")

        response = client.put(
            f"/users/{user['user']['user_id']}/reputation",
            json={"points": 25, "reason": "Helpful answers"},
            headers=auth_header(admin["token"]),
        )
        inbox = client.get("/notifications", headers=auth_header(user["token"])).json()

        assert response.status_code == 200
        assert response.json()["reputation"] == 25
        assert inbox["notifications"][0]["type"] == "reputation_change"

    def test_non_admin_cannot_grant(self, client, register):
        """Should return 403 for regular users."""
        user = register("alice")

        response = client.put(
            f"/users/{user['user']['user_id']}/reputation",
            json={"points": 1000},
            headers=auth_header(user["token"]),
        )

        assert response.status_code == 403

    def test_user_questions(self, client, register):
        """Should list the questions a user asked."""
        user = register("alice")
        client.post(
            "/questions",
            json={
                "title": "What is a Python generator?",
                "content": "I keep seeing yield in code and I don't understand it.",
                "tags": ["python"],
            },
            headers=auth_header(user["token"]),
        )

        response = client.get(f"/users/{user['user']['user_id']}/questions")

        assert response.status_code == 200
        assert [q["title"] for q in response.json()["questions"]] == [
            "What is a Python generator?"
        ]


class TestUserDirectory:
    """End-to-end tests for listing, ranking and role changes."""

    def test_list_users_by_reputation(self, client, register, grant):
        """Should order by reputation and filter by minimum reputation."""
        alice, bob = register("alice"), register("bob")
        grant(bob["user"]["user_id"], 40)
        grant(alice["user"]["user_id"], 10)

        everyone = client.get("/users").json()
        seasoned = client.get("/users", params={"min_reputation": 20}).json()

        names = [u["username"] for u in everyone["users"]]
        assert names.index("bob") < names.index("alice")
        assert [u["username"] for u in seasoned["users"]] == ["bob"]
        assert seasoned["total"] == 1

    def test_leaderboard(self, client, register, grant):
        """Should rank users by reputation, most first."""
        register("alice")
        bob = register("bob")
        grant(bob["user"]["user_id"], 15)

        response = client.get("/users/leaderboard", params={"period": "week", "limit": 1})

        assert response.status_code == 200
        assert response.json()["period"] == "week"
        assert [u["username"] for u in response.json()["users"]] == ["bob"]

    def test_admin_sets_role(self, client, register, admin):
        """Should promote a user, who can then use admin endpoints."""
        alice = register("alice")
        user_id = alice["user"]["user_id"]

        denied = client.put(
            f"/users/{user_id}/role",
            json={"role": "admin"},
            headers=auth_header(alice["token"]),
        )
        promoted = client.put(
            f"/users/{user_id}/role",
            json={"role": "admin"},
            headers=auth_header(admin["token"]),
        )

        assert denied.status_code == 403
        assert promoted.status_code == 200
        assert promoted.json()["role"] == "admin"
        unused = client.get("/tags/unused", headers=auth_header(alice["token"]))
        assert unused.status_code == 200

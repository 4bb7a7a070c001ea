"""Integration tests through the Flask test client."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from habitpulse.constants.habits import TOP_HABIT_PLACEHOLDER

pytestmark = pytest.mark.integration


def _create(client, name="Run", **fields):
    response = client.post("/api/habits/", json={"name": name, **fields})
    assert response.status_code == 201, response.get_json()
    return response.get_json()["habit"]


class TestBasics:
    def test_root_and_health(self, client):
        assert client.get("/").get_json() == {"message": "HabitPulse API is running"}
        health = client.get("/health").get_json()
        assert health["status"] == "ok"
        assert "timestamp" in health

    def test_unknown_route_is_json(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Route not found"}

    def test_wrong_method_is_json(self, client):
        response = client.delete("/health")
        assert response.status_code == 405
        assert "error" in response.get_json()

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/api/habits/"),
            ("post", "/api/habits/"),
            ("post", "/api/habits/1/check-in"),
            ("get", "/api/dashboard/stats"),
            ("get", "/api/auth/me"),
        ],
    )
    def test_protected_routes_require_session(self, client, method, path):
        response = getattr(client, method)(path, json={})
        assert response.status_code == 401
        assert response.get_json() == {"error": "Authentication required"}


class TestAuthRoutes:
    def test_register_login_logout(self, client):
        registered = client.post(
            "/api/auth/register",
            json={"username": "Walker", "email": "walker@example.com", "password": "long-enough"},
        )
        assert registered.status_code == 201
        assert registered.get_json()["user"]["username"] == "walker"
        assert "password_hash" not in registered.get_json()["user"]

        assert client.post("/api/auth/logout").status_code == 200
        assert client.get("/api/auth/me").status_code == 401

        login = client.post("/api/auth/login", json={"username": "walker", "password": "long-enough"})
        assert login.status_code == 200
        assert client.get("/api/auth/me").get_json()["user"]["email"] == "walker@example.com"

    def test_bad_credentials(self, auth_client):
        auth_client.post("/api/auth/logout")
        response = auth_client.post(
            "/api/auth/login", json={"username": "walker", "password": "not-the-one"}
        )
        assert response.status_code == 401
        assert response.get_json() == {"error": "Invalid credentials"}

    def test_missing_credentials(self, client):
        response = client.post("/api/auth/login", json={"username": "walker"})
        assert response.status_code == 400
        assert response.get_json() == {"error": "Username and password required"}

    def test_delete_account(self, auth_client):
        _create(auth_client, "Run")

        response = auth_client.delete("/api/auth/delete-account")
        assert response.status_code == 200
        assert response.get_json() == {"message": "Account deleted successfully"}
        assert auth_client.get("/api/auth/me").status_code == 401

        login = auth_client.post(
            "/api/auth/login", json={"username": "walker", "password": "long-enough"}
        )
        assert login.status_code == 401

        # The username is free again and the new account starts empty.
        auth_client.post(
            "/api/auth/register",
            json={"username": "walker", "email": "walker@example.com", "password": "long-enough"},
        )
        assert auth_client.get("/api/habits/").get_json()["habits"] == []

    def test_delete_account_requires_session(self, client):
        assert client.delete("/api/auth/delete-account").status_code == 401

    def test_duplicate_registration(self, auth_client):
        response = auth_client.post(
            "/api/auth/register",
            json={"username": "walker", "email": "else@example.com", "password": "long-enough"},
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "Username already taken"}


class TestHabitRoutes:
    def test_create_and_list(self, auth_client):
        created = _create(auth_client, "Read", category="learning", icon="B")
        assert created["category"] == "LEARNING"
        assert created["frequency"] == "DAILY"

        habits = auth_client.get("/api/habits/").get_json()["habits"]
        assert [h["name"] for h in habits] == ["Read"]
        assert habits[0]["streak"] == 0
        assert habits[0]["completedDates"] == []

    @pytest.mark.parametrize(
        "body",
        [{}, {"name": "   "}, {"name": "x" * 101}, {"name": "Run", "category": "SPORTS"}],
    )
    def test_create_rejects_bad_bodies(self, auth_client, body):
        response = auth_client.post("/api/habits/", json=body)
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_object_body(self, auth_client):
        response = auth_client.post("/api/habits/", json=["Run"])
        assert response.status_code == 400
        assert response.get_json() == {"error": "Request body must be a JSON object"}

    def test_duplicate_name(self, auth_client):
        _create(auth_client, "Run")
        response = auth_client.post("/api/habits/", json={"name": "run"})
        assert response.status_code == 400

    def test_update_and_delete(self, auth_client):
        habit = _create(auth_client, "Run")

        updated = auth_client.put(f"/api/habits/{habit['id']}", json={"color": "#000"})
        assert updated.status_code == 200
        assert updated.get_json()["habit"]["color"] == "#000"
        assert updated.get_json()["habit"]["name"] == "Run"

        blank = auth_client.put(f"/api/habits/{habit['id']}", json={"name": ""})
        assert blank.status_code == 400

        deleted = auth_client.delete(f"/api/habits/{habit['id']}")
        assert deleted.get_json() == {"message": "Habit deleted successfully"}
        assert auth_client.get("/api/habits/").get_json()["habits"] == []
        assert auth_client.delete(f"/api/habits/{habit['id']}").status_code == 404

    def test_check_in_toggles(self, auth_client):
        habit = _create(auth_client, "Run")
        today = date.today().isoformat()

        first = auth_client.post(f"/api/habits/{habit['id']}/check-in", json={"date": today})
        assert first.get_json() == {
            "habitId": habit["id"],
            "date": today,
            "completed": True,
            "action": "created",
        }
        streak = auth_client.get(f"/api/habits/{habit['id']}/streak").get_json()
        assert streak == {"streak": 1, "longestStreak": 1}

        second = auth_client.post(f"/api/habits/{habit['id']}/check-in", json={"date": today})
        assert second.get_json()["action"] == "removed"
        assert auth_client.get("/api/habits/").get_json()["habits"][0]["totalCompletions"] == 0

    @pytest.mark.parametrize("value", ["2024-13-01", "01/10/2024", "", 20240110])
    def test_check_in_rejects_bad_dates(self, auth_client, value):
        habit = _create(auth_client, "Run")
        response = auth_client.post(f"/api/habits/{habit['id']}/check-in", json={"date": value})
        assert response.status_code == 400

    def test_other_users_habits_are_invisible(self, app, auth_client):
        habit = _create(auth_client, "Run")

        with app.test_client() as other:
            other.post(
                "/api/auth/register",
                json={"username": "sprinter", "email": "s@example.com", "password": "long-enough"},
            )
            assert other.get("/api/habits/").get_json()["habits"] == []
            path = f"/api/habits/{habit['id']}"
            assert other.put(path, json={"name": "Mine"}).status_code == 404
            assert other.delete(path).status_code == 404
            assert other.get(f"{path}/streak").status_code == 404
            today = date.today().isoformat()
            assert other.post(f"{path}/check-in", json={"date": today}).status_code == 404

        assert auth_client.get("/api/habits/").get_json()["habits"][0]["name"] == "Run"


class TestDashboardRoutes:
    def test_empty_dashboard(self, auth_client):
        stats = auth_client.get("/api/dashboard/stats").get_json()
        assert stats["activeHabits"] == 0
        assert stats["topHabit"] == TOP_HABIT_PLACEHOLDER
        assert len(stats["weeklyActivity"]) == 5
        assert stats["scoreChange"] == 0
        assert stats["totalCompletions"] == 0

    def test_dashboard_reflects_check_ins(self, auth_client):
        run = _create(auth_client, "Run", icon="R")
        _create(auth_client, "Read")
        today = date.today()
        for offset in (1, 0):
            day = (today - timedelta(days=offset)).isoformat()
            auth_client.post(f"/api/habits/{run['id']}/check-in", json={"date": day})

        stats = auth_client.get("/api/dashboard/stats").get_json()
        assert stats["activeHabits"] == 2
        assert stats["topHabit"] == {"name": "Run", "streak": 2, "icon": "R"}
        assert stats["weeklyActivity"][-1]["value"] == 1
        assert stats["weeklyActivity"][-2]["value"] == 1
        assert stats["totalCompletions"] == 2

    def test_stats_builder_can_be_replaced(self, app, auth_client):
        class Canned:
            def to_dict(self):
                return {"canned": True}

        app.extensions["dashboard"] = {"stats_builder": lambda repo, **kwargs: Canned()}
        assert auth_client.get("/api/dashboard/stats").get_json() == {"canned": True}

    def test_running_and_five_am_club(self, auth_client):
        assert auth_client.get("/api/dashboard/stats/running").get_json() == {"found": False}

        _create(auth_client, "Morning run")
        running = auth_client.get("/api/dashboard/stats/running").get_json()
        assert running["found"] is True
        assert running["miles"] == 0
        assert running["targetMiles"] == 20

        club = auth_client.get("/api/dashboard/stats/5am-club").get_json()
        assert set(club) == {"members", "count", "joined"}


def test_repository_can_be_swapped(app, auth_client, memory_repo):
    memory_repo.add_habit("From memory")
    app.extensions["habitpulse"]["habit_repository"] = memory_repo

    habits = auth_client.get("/api/habits/").get_json()["habits"]
    assert [h["name"] for h in habits] == ["From memory"]


def test_seed_command(app, client):
    result = app.test_cli_runner().invoke(args=["habitpulse-seed", "--demo", "--days", "7"])
    assert result.exit_code == 0
    assert "Demo user 'demo' ready" in result.output

    login = client.post("/api/auth/login", json={"username": "demo", "password": "demo-password"})
    assert login.status_code == 200
    assert len(client.get("/api/habits/").get_json()["habits"]) == 3


def test_seed_command_requires_flag(app):
    result = app.test_cli_runner().invoke(args=["habitpulse-seed"])
    assert "Use --demo" in result.output

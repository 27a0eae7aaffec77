"""
Tests for the REST API.
"""

import pytest
from fastapi.testclient import TestClient

from sprint_simulator import api


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api, "_openai_client", lambda: None)
    api.session.reset()
    return TestClient(api.app)


def add_seniors(client, count=2):
    ids = []
    for i in range(count):
        response = client.post("/api/team", json={
            "name": f"Dev {i}",
            "skills": {"backend": "senior"}
        })
        assert response.status_code == 200
        ids.append(response.json()["id"])
    return ids


class TestTeamEndpoints:
    """Tests for roster and capacity endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_add_and_list(self, client):
        add_seniors(client, 1)

        members = client.get("/api/team").json()["members"]

        assert len(members) == 1
        assert members[0]["skills"]["backend"] == "senior"
        assert members[0]["skills"]["qa"] is None

    def test_capacity(self, client):
        add_seniors(client, 2)

        capacity = client.get("/api/team/capacity").json()

        assert capacity["daily_capacity"] == pytest.approx(2.0)
        assert capacity["sprint_capacity"] == 10

    def test_invalid_availability(self, client):
        response = client.post("/api/team", json={"name": "X", "availability": 1.5})
        assert response.status_code == 422

    def test_update_and_remove(self, client):
        (member_id,) = add_seniors(client, 1)

        response = client.patch(f"/api/team/{member_id}", json={"availability": 0.5})
        assert response.json()["availability"] == 0.5

        assert client.delete(f"/api/team/{member_id}").status_code == 200
        assert client.delete(f"/api/team/{member_id}").status_code == 404

    def test_skill_level(self, client):
        body = client.get("/api/skills/level", params={"percentage": 70}).json()

        assert body["level"] == "senior"
        assert body["label"] == "Senior (70%)"


class TestPlanningFlow:
    """Tests for the epic, plan and simulation flow."""

    def test_epic_without_openai(self, client):
        response = client.post("/api/epic", json={
            "title": "Accounts",
            "description": "login",
            "use_ai": True
        })

        body = response.json()
        assert body["generator"] == "rule-based"
        assert "not configured" in body["notice"]
        assert body["epic"]["total_points"] == 13

    def test_plan_requires_epic(self, client):
        assert client.post("/api/sprints/plan").status_code == 400

    def test_full_flow(self, client):
        add_seniors(client, 1)
        client.post("/api/epic", json={"title": "Shop", "description": "api"})

        plan = client.post("/api/sprints/plan").json()
        assert plan["sprint_capacity"] == 5
        assert [s["name"] for s in plan["sprints"]] == ["Sprint 1", "Sprint 2 (Overflow)"]

        started = client.post("/api/simulation/start", json={}).json()
        assert started["current_day"] == 1

        advanced = client.post("/api/simulation/advance").json()
        assert advanced["day"]["day"] == "Tue"
        # One point per day cannot finish the 5-point story
        assert advanced["day"]["points"] == {"completed": 0, "in_progress": 5, "remaining": 0}

        assert client.get("/api/simulation/days/1").status_code == 200
        assert client.get("/api/simulation/days/9").status_code == 404

        report = client.get("/api/reports/day").json()["report"]
        assert "DAY 2 (Tue)" in report

    def test_disruption(self, client):
        member_id = add_seniors(client, 2)[0]
        client.post("/api/epic", json={"title": "Shop", "description": "api"})
        client.post("/api/sprints/plan")
        client.post("/api/simulation/start", json={})

        response = client.post("/api/simulation/disruption", json={
            "member_id": member_id,
            "sick_percent": 1.0
        })

        assert response.status_code == 200
        assert response.json()["effective_capacity"] == 1.0

    def test_simulation_required(self, client):
        assert client.get("/api/simulation").status_code == 400
        assert client.post("/api/simulation/advance").status_code == 400

    def test_stateless_metrics(self, client):
        body = client.post("/api/metrics", json={
            "planned_points": 20,
            "completed_points": 10,
            "remaining_points": 10,
            "current_day": 3,
            "total_days": 5,
            "velocity": 4
        }).json()

        assert body["eta"] == 3
        assert body["confidence"] == 75

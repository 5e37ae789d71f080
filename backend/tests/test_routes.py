"""HTTP routes with the repository swapped for an in-memory one."""
import pytest
from fastapi.testclient import TestClient

from lifesim.api.deps import get_repository
from lifesim.db.memory import InMemoryRepository
from lifesim.db.repository import PersistenceError
from lifesim.main import app

client = TestClient(app)


class _FailingRepository(InMemoryRepository):
    def save_scenario(self, *args, **kwargs):
        raise PersistenceError("connection reset by peer")


@pytest.fixture
def repo(user_data):
    repo = InMemoryRepository(users={"u1": user_data})
    app.dependency_overrides[get_repository] = lambda: repo
    yield repo
    app.dependency_overrides.clear()


def test_health_returns_200():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "database" in data
    assert data["benchmarks"]["status"] in ("loaded", "not_loaded")


def test_run_simulation(repo):
    response = client.post("/api/simulations/run", json={
        "user_id": "u1",
        "scenario_type": "JOB_LOSS",
        "parameters": {"income_reduction_pct": 100},
        "start_date": "2024-07-01",
        "duration_months": 12,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["scenario_type"] == "JOB_LOSS"
    assert len(data["snapshots"]) == 13
    assert data["snapshots"][1]["date"] == "2024-08-01"
    assert data["risk_level"] in ("LOW", "MODERATE", "HIGH", "CRITICAL")


def test_run_simulation_rejects_bad_duration(repo):
    response = client.post("/api/simulations/run", json={
        "user_id": "u1", "scenario_type": "CUSTOM", "duration_months": -1,
    })
    assert response.status_code == 422


def test_run_simulation_rejects_bad_parameters(repo):
    response = client.post("/api/simulations/run", json={
        "user_id": "u1", "scenario_type": "MARKET_DOWNTURN", "parameters": {"recovery_months": 0},
    })
    assert response.status_code == 422
    assert "recovery_months" in response.json()["detail"]


def test_compare(repo):
    response = client.post("/api/simulations/compare", json={
        "user_id": "u1",
        "scenario_types": ["JOB_LOSS", "HOME_PURCHASE"],
        "parameters": {"HOME_PURCHASE": {"home_price": 300000}},
        "duration_months": 24,
    })
    assert response.status_code == 200
    assert set(response.json()) == {"JOB_LOSS", "HOME_PURCHASE"}


def test_save_and_list_scenarios(repo):
    response = client.post("/api/scenarios", json={
        "user_id": "u1",
        "name": "Buy a condo",
        "scenario_type": "HOME_PURCHASE",
        "parameters": {"home_price": 250000},
        "tags": ["housing"],
        "duration_months": 36,
    })
    assert response.status_code == 200
    scenario_id = response.json()["scenario_id"]
    assert response.json()["result"]["scenario_id"] == scenario_id

    listed = client.get("/api/scenarios", params={"user_id": "u1"}).json()
    assert [s["scenario_id"] for s in listed] == [scenario_id]
    assert listed[0]["tags"] == ["housing"]


def test_save_scenario_persistence_failure_is_502():
    app.dependency_overrides[get_repository] = lambda: _FailingRepository()
    try:
        response = client.post("/api/scenarios", json={
            "user_id": "u1", "name": "x", "scenario_type": "CUSTOM",
        })
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 502
    assert response.json()["detail"] == "connection reset by peer"


def test_templates_default(repo):
    response = client.get("/api/scenarios/templates")
    assert response.status_code == 200
    assert len(response.json()) == 7


def test_health_score_and_history(repo):
    response = client.post("/api/health-score/u1")
    assert response.status_code == 200
    data = response.json()
    assert 0 <= data["score"] <= 100
    assert data["grade"] in ("A", "B", "C", "D", "F")
    assert set(data["components"]) == {
        "emergency_fund", "debt_to_income", "credit_utilization", "investment_ratio",
        "income_consistency", "retirement_contribution", "budget_compliance",
    }

    history = client.get("/api/health-score/u1/history").json()
    assert len(history) == 1
    assert history[0]["is_current"] is True


def test_save_scenario_rejects_bad_parameters(repo):
    response = client.post("/api/scenarios", json={
        "user_id": "u1",
        "name": "Overleveraged",
        "scenario_type": "HOME_PURCHASE",
        "parameters": {"home_price": 300000, "down_payment_pct": 150},
    })
    assert response.status_code == 422
    assert "down_payment_pct" in response.json()["detail"]
    assert repo.list_saved_scenarios("u1") == []


def test_compare_rejects_bad_parameters(repo):
    response = client.post("/api/simulations/compare", json={
        "user_id": "u1",
        "scenario_types": ["JOB_LOSS"],
        "parameters": {"JOB_LOSS": {"income_reduction_pct": -5}},
    })
    assert response.status_code == 422
    assert "income_reduction_pct" in response.json()["detail"]

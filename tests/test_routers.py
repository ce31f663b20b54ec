import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from uuid6 import uuid7

from company_manager.routers import contracts, employees, game
from company_manager.services.game_db import GameService, get_game_service
from tests.conftest import FIXED_NOW


@pytest.fixture
def client(session_factory, fixed_rng):
    app = FastAPI()
    app.include_router(game.game_router)
    app.include_router(employees.employee_router)
    app.include_router(contracts.contract_router)
    service = GameService(session_factory, fixed_rng, clock=lambda: FIXED_NOW)
    app.dependency_overrides[get_game_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client


def start_game(client, **overrides):
    body = {"company_name": "Acme Analytics", "perks": []}
    body.update(overrides)
    response = client.post("/game/start", json=body)
    assert response.status_code == 201
    return response.json()


def hire_request(candidate):
    return {
        key: candidate[key]
        for key in ("employee_id", "name", "employee_type", "level", "speed", "accuracy", "salary", "morale")
    }


class TestGameRoutes:
    """Session lifecycle over HTTP."""

    def test_start_game(self, client):
        data = start_game(client, perks=["budget_boost"])

        assert data["game_session"]["budget"] == 55000
        assert data["game_session"]["status"] == "active"
        assert data["game_session"]["total_score"] == 55
        assert data["game_session"]["minimum_threshold"] == 100
        assert len(data["contracts"]) == 2
        assert len(data["employee_pool"]) == 5

    @pytest.mark.parametrize("company_name", ["A", "x" * 101])
    def test_company_name_length_is_validated(self, client, company_name):
        response = client.post("/game/start", json={"company_name": company_name})
        assert response.status_code == 422

    def test_unknown_perk_is_rejected(self, client):
        response = client.post("/game/start", json={"company_name": "Acme", "perks": ["free_lunch"]})
        assert response.status_code == 422

    def test_get_game_state(self, client):
        game_session_id = start_game(client)["game_session"]["game_session_id"]

        response = client.get(f"/game/{game_session_id}")

        assert response.status_code == 200
        assert response.json()["game_session"]["current_week"] == 1
        assert len(response.json()["available_contracts"]) == 2

    def test_unknown_game_is_404(self, client):
        response = client.get(f"/game/{uuid7()}")
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_next_turn(self, client):
        game_session_id = start_game(client)["game_session"]["game_session_id"]

        response = client.post(f"/game/{game_session_id}/next-turn")

        assert response.status_code == 200
        assert response.json()["game_session"]["current_week"] == 2
        assert response.json()["quarter_ended"] is False

    def test_end_then_turn_is_409(self, client):
        game_session_id = start_game(client)["game_session"]["game_session_id"]

        ended = client.post(f"/game/{game_session_id}/end")
        turn = client.post(f"/game/{game_session_id}/next-turn")

        assert ended.json()["status"] == "completed"
        assert turn.status_code == 409

    def test_pause_and_resume(self, client):
        game_session_id = start_game(client)["game_session"]["game_session_id"]

        assert client.post(f"/game/{game_session_id}/pause").json()["status"] == "paused"
        assert client.post(f"/game/{game_session_id}/pause").status_code == 409
        assert client.post(f"/game/{game_session_id}/resume").json()["status"] == "active"


class TestEmployeeRoutes:
    """Hiring, training and firing over HTTP."""

    def test_hire_and_list(self, client):
        data = start_game(client)
        game_session_id = data["game_session"]["game_session_id"]
        candidate = data["employee_pool"][0]

        hired = client.post(f"/game/{game_session_id}/employees/hire", json=hire_request(candidate))
        listed = client.get(f"/game/{game_session_id}/employees")

        assert hired.status_code == 201
        assert hired.json()["game_session"]["budget"] == 50000 - 2 * candidate["salary"]
        assert hired.json()["employee"]["is_active"] is True
        assert [e["employee_id"] for e in listed.json()] == [candidate["employee_id"]]

    def test_hire_beyond_budget_is_400(self, client):
        game_session_id = start_game(client)["game_session"]["game_session_id"]
        body = {"name": "Rich Hire", "speed": 20, "accuracy": 80, "salary": 40000}

        response = client.post(f"/game/{game_session_id}/employees/hire", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Insufficient funds. Required: 80000, Available: 50000"
        assert client.get(f"/game/{game_session_id}").json()["game_session"]["budget"] == 50000

    def test_train_and_fire(self, client):
        data = start_game(client)
        game_session_id = data["game_session"]["game_session_id"]
        candidate = data["employee_pool"][0]
        client.post(f"/game/{game_session_id}/employees/hire", json=hire_request(candidate))

        trained = client.post(f"/game/{game_session_id}/employees/{candidate['employee_id']}/train")
        fired = client.post(f"/game/{game_session_id}/employees/{candidate['employee_id']}/fire")
        fired_again = client.post(f"/game/{game_session_id}/employees/{candidate['employee_id']}/fire")

        assert trained.status_code == 200
        assert trained.json()["cost"] == 2000
        assert trained.json()["employee"]["level"] == candidate["level"] + 1
        assert fired.json()["is_active"] is False
        assert fired_again.status_code == 409
        assert client.get(f"/game/{game_session_id}/employees").json() == []


class TestContractRoutes:
    """Accepting and staffing contracts over HTTP."""

    def test_accept_assign_and_work(self, client):
        data = start_game(client)
        game_session_id = data["game_session"]["game_session_id"]
        candidate = data["employee_pool"][0]
        contract_id = data["contracts"][0]["contract_id"]
        client.post(f"/game/{game_session_id}/employees/hire", json=hire_request(candidate))

        accepted = client.post(f"/game/{game_session_id}/contracts/{contract_id}/accept")
        assigned = client.post(f"/game/{game_session_id}/contracts/{contract_id}/assign/{candidate['employee_id']}")
        turn = client.post(f"/game/{game_session_id}/next-turn")

        assert accepted.json()["status"] == "in_progress"
        assert assigned.status_code == 201
        assert assigned.json()["week_assigned"] == 1
        assert turn.json()["contract_results"][0]["current_progress"] == candidate["effective_speed"]

    def test_list_by_status(self, client):
        data = start_game(client)
        game_session_id = data["game_session"]["game_session_id"]
        contract_id = data["contracts"][0]["contract_id"]
        client.post(f"/game/{game_session_id}/contracts/{contract_id}/accept")

        in_progress = client.get(f"/game/{game_session_id}/contracts", params={"status": "in_progress"})
        available = client.get(f"/game/{game_session_id}/contracts", params={"status": "available"})

        assert [c["contract_id"] for c in in_progress.json()] == [contract_id]
        assert len(available.json()) == 1

    def test_accept_twice_is_409(self, client):
        data = start_game(client)
        game_session_id = data["game_session"]["game_session_id"]
        contract_id = data["contracts"][0]["contract_id"]

        client.post(f"/game/{game_session_id}/contracts/{contract_id}/accept")
        response = client.post(f"/game/{game_session_id}/contracts/{contract_id}/accept")

        assert response.status_code == 409

    def test_assign_unknown_employee_is_404(self, client):
        data = start_game(client)
        game_session_id = data["game_session"]["game_session_id"]
        contract_id = data["contracts"][0]["contract_id"]
        client.post(f"/game/{game_session_id}/contracts/{contract_id}/accept")

        response = client.post(f"/game/{game_session_id}/contracts/{contract_id}/assign/{uuid7()}")

        assert response.status_code == 404

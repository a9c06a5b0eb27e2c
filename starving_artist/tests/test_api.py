"""
Tests for API layer.

Tests:
- API service methods
- Request/response serialization
- HTTP endpoints and status codes
- Error handling
"""

import pytest
from fastapi.testclient import TestClient

from ..api import create_app
from ..api.schemas import (
    ActionRequest,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameStatus,
    StageName,
)
from ..api.service import APIService


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    def test_create_game(self, service):
        response = service.create_game(
            CreateGameRequest(num_players=2, art_paths=["painter", "author"], seed=4)
        )

        assert response.status == GameStatus.IN_PROGRESS
        assert response.turn == 1
        assert response.current_turn_player_id == "P1"
        assert [p.art_path for p in response.players] == ["visual_artist", "author"]
        assert all(p.stage == StageName.HOME for p in response.players)
        assert response.players[0].is_current_turn
        assert response.deck_sizes == {"home": 5, "social": 5, "prof_dev": 4, "pro": 4}
        assert response.zeitgeist.milestones == {"dreamer": False, "amateur": False, "pro": False}
        assert response.seed == 4

    def test_create_game_bad_config(self, service):
        with pytest.raises(ValueError):
            service.create_game(CreateGameRequest(config={"rules": {"speed": 2}}))

    def test_get_game(self, service):
        game = service.create_game(CreateGameRequest())

        response = service.get_game(game.game_id)

        assert response.game_id == game.game_id

    def test_get_nonexistent_game(self, service):
        response = service.get_game("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.GAME_NOT_FOUND

    def test_apply_action(self, service):
        game = service.create_game(CreateGameRequest(seed=1))

        response = service.apply_action(game.game_id, ActionRequest(type="draw_home_card"))

        assert response.accepted
        assert response.error is None
        assert response.state_changes
        assert response.game_state.players[0].turn_flags["home_card_drawn"]

    def test_rejected_action(self, service):
        game = service.create_game(CreateGameRequest(seed=1))

        response = service.apply_action(game.game_id, ActionRequest(type="roll_time"))

        assert not response.accepted
        assert response.error_code == "WRONG_STAGE"
        assert response.game_state.players[0].time_this_turn == 0

    def test_unknown_action_type(self, service):
        game = service.create_game(CreateGameRequest())
        with pytest.raises(ValueError):
            service.apply_action(game.game_id, ActionRequest(type="paint_faster"))

    def test_legal_actions(self, service):
        game = service.create_game(CreateGameRequest(seed=1))

        response = service.get_legal_actions(game.game_id)

        assert response.player_id == "P1"
        assert response.count == len(response.actions)
        assert {a.type for a in response.actions} == {
            "draw_home_card", "attempt_leave_home", "end_turn",
        }
        assert {a.group for a in response.actions} == {"home", "turn"}

    def test_end_and_list_games(self, service):
        first = service.create_game(CreateGameRequest())
        second = service.create_game(CreateGameRequest())

        assert set(service.list_games()) == {first.game_id, second.game_id}
        assert service.end_game(first.game_id)
        assert not service.end_game(first.game_id)
        assert service.list_games() == [second.game_id]


class TestEndpoints:
    """Tests for the HTTP surface."""

    @pytest.fixture
    def client(self):
        return TestClient(create_app(APIService()))

    @pytest.fixture
    def game_id(self, client):
        response = client.post("/api/v1/games", json={"num_players": 2, "seed": 8})
        return response.json()["game_id"]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_game(self, client):
        response = client.post("/api/v1/games", json={"num_players": 3, "names": ["A", "B", "C"]})

        assert response.status_code == 201
        body = response.json()
        assert [p["name"] for p in body["players"]] == ["A", "B", "C"]
        assert body["status"] == "in_progress"

    def test_create_game_validation(self, client):
        assert client.post("/api/v1/games", json={"num_players": 0}).status_code == 422

        response = client.post("/api/v1/games", json={"config": {"moon": {"phase": 1}}})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_SETUP"

    def test_get_game(self, client, game_id):
        response = client.get(f"/api/v1/games/{game_id}")

        assert response.status_code == 200
        assert response.json()["game_id"] == game_id

    def test_missing_game(self, client):
        for response in (
            client.get("/api/v1/games/missing"),
            client.delete("/api/v1/games/missing"),
            client.get("/api/v1/games/missing/legal-actions"),
            client.post("/api/v1/games/missing/actions", json={"type": "end_turn"}),
        ):
            assert response.status_code == 404
            assert response.json()["error_code"] == "GAME_NOT_FOUND"

    def test_apply_action(self, client, game_id):
        response = client.post(f"/api/v1/games/{game_id}/actions", json={"type": "end_turn"})

        assert response.status_code == 200
        body = response.json()
        assert body["accepted"]
        assert body["game_state"]["current_turn_player_id"] == "P2"

    def test_rule_rejection_is_not_an_http_error(self, client, game_id):
        response = client.post(
            f"/api/v1/games/{game_id}/actions",
            json={"type": "choose_job", "job_id": "job_teacher"},
        )

        assert response.status_code == 200
        body = response.json()
        assert not body["accepted"]
        assert body["error_code"] == "WRONG_STAGE"

    def test_unknown_action_type(self, client, game_id):
        response = client.post(f"/api/v1/games/{game_id}/actions", json={"type": "nap"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ACTION"

    def test_legal_actions(self, client, game_id):
        response = client.get(f"/api/v1/games/{game_id}/legal-actions")

        assert response.status_code == 200
        assert response.json()["count"] == 3

    def test_list_and_end_game(self, client, game_id):
        assert client.get("/api/v1/games").json()["games"] == [game_id]

        response = client.delete(f"/api/v1/games/{game_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "game_id": game_id}
        assert client.get("/api/v1/games").json()["count"] == 0

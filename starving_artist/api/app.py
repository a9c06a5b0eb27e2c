"""
FastAPI Application - REST API for the Starving Artist engine.

Endpoints:
    GET    /health                                Health check
    POST   /api/v1/games                          Create a game (first turn started)
    GET    /api/v1/games                          List games
    GET    /api/v1/games/{id}                     Get game state
    DELETE /api/v1/games/{id}                     End a game
    POST   /api/v1/games/{id}/actions             Apply an action for the active player
    GET    /api/v1/games/{id}/legal-actions       List the active player's legal actions

All responses are JSON with explicit Pydantic schemas.
Games live in memory only.
"""

from typing import Union
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService
from .schemas import (
    # Request models
    CreateGameRequest,
    ActionRequest,
    # Response models
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    GameListResponse,
    EndGameResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
STARVING_ARTIST_ENV = os.getenv("STARVING_ARTIST_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    is_production = STARVING_ARTIST_ENV == "production"
    app = FastAPI(
        title="Starving Artist Engine API",
        description="""
Rules engine for Starving Artist: move a career from Home through Dreamer and
Amateur to Pro, then finish a Masterwork.

## Playing a game

1. `POST /api/v1/games` sets up the game and starts the first turn
2. `GET /legal-actions` lists what the active player may do
3. `POST /actions` applies one; a rule violation answers `accepted=false`
   with the rejection code and leaves the game unchanged

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `INVALID_ACTION` | Unknown action type |
| `INVALID_SETUP` | Bad players, art paths or config overrides |
        """,
        version=__version__,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=message, error_code=error_code).model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return JSONResponse(status_code=404, content=response.model_dump(mode="json"))

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse, "description": "Invalid setup"}},
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Create a new game.

        Every player starts at Home with zeroed resources. The first turn
        is already started when this returns.
        """
        try:
            return api_service.create_game(request)
        except ValueError as e:
            return make_error_response(ErrorCode.INVALID_SETUP, str(e))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        """List all game IDs held in memory."""
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the current state of a game."""
        response = api_service.get_game(game_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> Union[EndGameResponse, JSONResponse]:
        """End a game and release its memory."""
        if not api_service.end_game(game_id):
            return make_error_response(
                ErrorCode.GAME_NOT_FOUND, f"Game not found: {game_id}", status_code=404
            )
        return EndGameResponse(success=True, game_id=game_id)

    # =========================================================================
    # Action Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action type"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Actions"],
        summary="Apply an action for the active player",
    )
    async def apply_action(
        game_id: str, request: ActionRequest
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Apply an action for the active player.

        A rule violation is not an HTTP error: the response has
        `accepted=false`, the rejection code, and the unchanged state.
        """
        try:
            response = api_service.apply_action(game_id, request)
        except ValueError as e:
            return make_error_response(ErrorCode.INVALID_ACTION, str(e))
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.get(
        "/api/v1/games/{game_id}/legal-actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Actions"],
        summary="List legal actions",
    )
    async def get_legal_actions(game_id: str) -> Union[LegalActionsResponse, JSONResponse]:
        """List every action the active player may take right now."""
        response = api_service.get_legal_actions(game_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="starving-artist-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Starving Artist Engine API",
            "version": __version__,
            "environment": STARVING_ARTIST_ENV,
            "docs": None if is_production else "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn starving_artist.api.app:app
app = create_app()

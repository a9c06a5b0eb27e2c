"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions (one per game)
3. Formats engine state into response models

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..catalog.zeitgeists import get_zeitgeist
from ..engine_core.action import Action, group_of
from ..engine_core.setup import DECK_KEYS
from ..engine_core.state import PlayerState
from ..session import SessionManager, Session
from .schemas import (
    # Requests
    CreateGameRequest,
    ActionRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    MinorWorkInfo,
    ZeitgeistInfo,
    ActionInfo,
    # Enums
    ErrorCode,
)


def _card_info(card) -> CardInfo | None:
    if card is None:
        return None
    return CardInfo(card_id=card.card_id, name=card.name, text=getattr(card, "text", ""))


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create a game
        game = service.create_game(CreateGameRequest(num_players=2, seed=7))

        # Act for the active player
        response = service.apply_action(game.game_id, ActionRequest(type="roll_time"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest) -> GameStateResponse:
        """
        Create a new game with its first turn started.

        Raises ValueError for an invalid setup.
        """
        session = self.session_manager.create_session(
            num_players=request.num_players,
            art_paths=request.art_paths,
            names=request.names,
            seed=request.seed,
            config=request.config,
        )
        return self._session_to_response(session)

    def get_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        """Get the current state of a game."""
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)
        return self._session_to_response(session)

    def end_game(self, game_id: str) -> bool:
        """End a game and release its session."""
        return self.session_manager.end_session(game_id)

    def list_games(self) -> list[str]:
        """List all game IDs held in memory."""
        return self.session_manager.list_sessions()

    def apply_action(self, game_id: str, request: ActionRequest) -> ActionResponse | ErrorResponse:
        """
        Apply an action for the active player.

        Raises ValueError if the action type is unknown.
        """
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)

        action = Action.from_dict(request.model_dump(exclude_none=True))
        result = self.session_manager.dispatch(game_id, action)

        return ActionResponse(
            game_id=game_id,
            accepted=result.success,
            error=result.error,
            error_code=result.error_code,
            state_changes=result.state_changes,
            game_state=self._session_to_response(session),
        )

    def get_legal_actions(self, game_id: str) -> LegalActionsResponse | ErrorResponse:
        """List the legal actions of the active player."""
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)

        actions = self.session_manager.legal_actions(game_id)
        infos = [
            ActionInfo(group=group_of(action.action_type), **action.to_dict())
            for action in actions
        ]
        return LegalActionsResponse(
            game_id=game_id,
            player_id=session.game_state.active_player.player_id,
            actions=infos,
            count=len(infos),
        )

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game not found: {game_id}",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> GameStateResponse:
        state = session.game_state
        active_id = state.active_player.player_id
        zeitgeist = get_zeitgeist(state.zeitgeist.current_id)

        return GameStateResponse(
            game_id=session.session_id,
            status=state.status.value,
            turn=state.turn,
            current_turn_player_id=active_id,
            players=[self._player_to_info(p, p.player_id == active_id) for p in state.players],
            zeitgeist=ZeitgeistInfo(
                zeitgeist_id=zeitgeist.zeitgeist_id if zeitgeist else None,
                name=zeitgeist.name if zeitgeist else None,
                text=zeitgeist.text if zeitgeist else None,
                milestones=dict(state.zeitgeist.milestones),
            ),
            deck_sizes={
                deck_name: getattr(state, key).count
                for key, deck_name in DECK_KEYS.items()
            },
            job_market=list(state.job_deck),
            winner_id=state.winner_id,
            loss_reason=state.loss_reason,
            seed=session.seed,
            created_at=session.created_at,
        )

    def _player_to_info(self, player: PlayerState, is_current: bool) -> PlayerInfo:
        flags = player.turn_flags
        return PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            art_path=player.art_path,
            stage=player.stage.value,
            is_current_turn=is_current,
            money=player.money,
            food=player.food,
            inspiration=player.inspiration,
            craft=player.craft,
            time_this_turn=player.time_this_turn,
            home_progress=player.home_progress,
            minor_works=[
                MinorWorkInfo(work_id=w.work_id, name=w.name, kind=w.kind)
                for w in player.minor_works
            ],
            minor_work_in_progress_id=player.minor_work_in_progress_id,
            minor_work_progress=dict(player.minor_work_progress_by_id),
            platform_bonus=player.platform_bonus,
            portfolio_built=player.portfolio_built,
            masterwork_progress=player.masterwork_progress,
            job_id=player.job_id,
            skipped_work_count=player.skipped_work_count,
            scandal=player.scandal,
            hit_piece_used=player.hit_piece_used,
            pending_social_card=_card_info(player.pending_social_card),
            pending_pro_card=_card_info(player.pending_pro_card),
            focus_stat=flags.focus_stat,
            turn_flags={
                name: value for name, value in vars(flags).items()
                if name != "focus_stat"
            },
        )

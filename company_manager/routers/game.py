from uuid import UUID

from fastapi import APIRouter, Depends, status

from company_manager.converter import DataConverter
from company_manager.models.dc_models import (
    GameInitializationModel,
    GameSessionModel,
    GameStateModel,
    StartGameModel,
    WeekTurnModel,
)
from company_manager.routers.http_errors import unwrap
from company_manager.services.game_db import GameService, get_game_service

game_router = APIRouter(prefix="/game", tags=["game"])
data_converter = DataConverter()


class GameServer:
    @staticmethod
    @game_router.post(
        "/start",
        response_model=GameInitializationModel,
        status_code=status.HTTP_201_CREATED,
    )
    async def start_game(
        start_data: StartGameModel,
        game_service: GameService = Depends(get_game_service),
    ) -> GameInitializationModel:
        """Create a new game session

        Args:
            start_data (StartGameModel):
                    company_name: str
                    perks: List[CompanyPerk]

        Returns:
            GameInitializationModel: The new session, its starting contracts and the hiring pool
        """
        initialization = unwrap(await game_service.initialize_game(start_data.company_name, start_data.perks))
        return data_converter.convert_game_initialization(initialization)

    @staticmethod
    @game_router.get("/{game_session_id}", response_model=GameStateModel)
    async def get_game_state(
        game_session_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> GameStateModel:
        game_state = unwrap(await game_service.get_game_state(game_session_id))
        return data_converter.convert_game_state(game_state)

    @staticmethod
    @game_router.post("/{game_session_id}/next-turn", response_model=WeekTurnModel)
    async def next_turn(
        game_session_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> WeekTurnModel:
        """Advance the game session by one week

        Args:
            game_session_id (UUID): To identify the game session

        Returns:
            WeekTurnModel: Session after the week, contract results, quits and new contracts
        """
        outcome = unwrap(await game_service.process_week_turn(game_session_id))
        return data_converter.convert_week_turn(outcome)

    @staticmethod
    @game_router.post("/{game_session_id}/end", response_model=GameSessionModel)
    async def end_game(
        game_session_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> GameSessionModel:
        game_session = unwrap(await game_service.end_game(game_session_id))
        return data_converter.convert_game_session(game_session)

    @staticmethod
    @game_router.post("/{game_session_id}/pause", response_model=GameSessionModel)
    async def pause_game(
        game_session_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> GameSessionModel:
        game_session = unwrap(await game_service.pause_game(game_session_id))
        return data_converter.convert_game_session(game_session)

    @staticmethod
    @game_router.post("/{game_session_id}/resume", response_model=GameSessionModel)
    async def resume_game(
        game_session_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> GameSessionModel:
        game_session = unwrap(await game_service.resume_game(game_session_id))
        return data_converter.convert_game_session(game_session)

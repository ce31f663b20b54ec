from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status as http_status

from company_manager.converter import DataConverter
from company_manager.models.dc_models import AssignmentModel, ContractModel
from company_manager.models.schema_models import ContractStatus
from company_manager.routers.http_errors import unwrap
from company_manager.services.game_db import GameService, get_game_service

contract_router = APIRouter(prefix="/game/{game_session_id}/contracts", tags=["contracts"])
data_converter = DataConverter()


class ContractServer:
    @staticmethod
    @contract_router.get("", response_model=List[ContractModel])
    async def list_contracts(
        game_session_id: UUID,
        status: ContractStatus | None = None,
        game_service: GameService = Depends(get_game_service),
    ) -> List[ContractModel]:
        contracts = unwrap(await game_service.list_contracts(game_session_id, status=status))
        return data_converter.convert_contracts(contracts)

    @staticmethod
    @contract_router.post("/{contract_id}/accept", response_model=ContractModel)
    async def accept_contract(
        game_session_id: UUID,
        contract_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> ContractModel:
        """Move an available contract to in progress

        Args:
            game_session_id (UUID): To identify the game session
            contract_id (UUID): Contract to accept

        Returns:
            ContractModel: The accepted contract
        """
        contract = unwrap(await game_service.start_contract(game_session_id, contract_id))
        return data_converter.convert_contract(contract)

    @staticmethod
    @contract_router.post(
        "/{contract_id}/assign/{employee_id}",
        response_model=AssignmentModel,
        status_code=http_status.HTTP_201_CREATED,
    )
    async def assign_employee(
        game_session_id: UUID,
        contract_id: UUID,
        employee_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> AssignmentModel:
        assignment = unwrap(await game_service.assign_employee(game_session_id, contract_id, employee_id))
        return AssignmentModel.model_validate(assignment)

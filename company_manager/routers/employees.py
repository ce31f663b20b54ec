from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from company_manager.converter import DataConverter
from company_manager.domain.perks import modifiers_for
from company_manager.models.dc_models import (
    EmployeeHiringModel,
    EmployeeModel,
    EmployeeTrainingModel,
    HireEmployeeModel,
)
from company_manager.routers.http_errors import unwrap
from company_manager.services.game_db import GameService, get_game_service

employee_router = APIRouter(prefix="/game/{game_session_id}/employees", tags=["employees"])
data_converter = DataConverter()


class EmployeeServer:
    @staticmethod
    @employee_router.get("", response_model=List[EmployeeModel])
    async def list_employees(
        game_session_id: UUID,
        active_only: bool = True,
        game_service: GameService = Depends(get_game_service),
    ) -> List[EmployeeModel]:
        game_session = unwrap(await game_service.read_game_session(game_session_id))
        employees = unwrap(await game_service.list_employees(game_session_id, active_only=active_only))
        return data_converter.convert_employees(employees, modifiers_for(game_session.perks))

    @staticmethod
    @employee_router.post(
        "/hire",
        response_model=EmployeeHiringModel,
        status_code=status.HTTP_201_CREATED,
    )
    async def hire_employee(
        game_session_id: UUID,
        hire_request: HireEmployeeModel,
        game_service: GameService = Depends(get_game_service),
    ) -> EmployeeHiringModel:
        """Hire a candidate, paying the hiring cost from the session budget

        Args:
            game_session_id (UUID): To identify the game session
            hire_request (HireEmployeeModel): Candidate taken from the hiring pool

        Returns:
            EmployeeHiringModel: Session with the reduced budget and the hired employee
        """
        template = data_converter.convert_hire_request_to_employeeschema(hire_request, game_session_id)
        hiring = unwrap(await game_service.hire_employee(game_session_id, template))
        return data_converter.convert_employee_hiring(hiring)

    @staticmethod
    @employee_router.post("/{employee_id}/fire", response_model=EmployeeModel)
    async def fire_employee(
        game_session_id: UUID,
        employee_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> EmployeeModel:
        employee = unwrap(await game_service.fire_employee(game_session_id, employee_id))
        return data_converter.convert_employee(employee)

    @staticmethod
    @employee_router.post("/{employee_id}/train", response_model=EmployeeTrainingModel)
    async def train_employee(
        game_session_id: UUID,
        employee_id: UUID,
        game_service: GameService = Depends(get_game_service),
    ) -> EmployeeTrainingModel:
        training = unwrap(await game_service.train_employee(game_session_id, employee_id))
        return data_converter.convert_employee_training(training)

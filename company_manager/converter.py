from typing import Iterable, List
from uuid import UUID

from uuid6 import uuid7

from company_manager.domain import contract_rules, employee_rules
from company_manager.domain.perks import NEUTRAL_MODIFIERS, PerkModifiers, modifiers_for
from company_manager.domain.session_rules import EmployeeHiring, EmployeeTraining, GameInitialization
from company_manager.domain.turn_rules import WeekTurnOutcome
from company_manager.models.dc_models import (
    ContractModel,
    EmployeeHiringModel,
    EmployeeModel,
    EmployeeTrainingModel,
    GameInitializationModel,
    GameSessionModel,
    GameStateModel,
    HireEmployeeModel,
    WeekTurnModel,
)
from company_manager.models.schema_models import (
    ContractSchema,
    EmployeeSchema,
    GameSessionSchema,
)
from company_manager.score_utils import ScoreUtils
from company_manager.services.game_db import GameState

score_utils = ScoreUtils()


class DataConverter:
    """This class is used to convert snapshots into the models sent to the client."""

    def convert_game_session(self, game_session: GameSessionSchema) -> GameSessionModel:
        """Convert the GameSessionSchema to the GameSessionModel, adding score and threshold

        Args:
            game_session (GameSessionSchema): The session snapshot

        Returns:
            GameSessionModel: Session data for transmission to the client
        """
        return GameSessionModel(
            **game_session.model_dump(),
            total_score=score_utils.total_score(game_session),
            minimum_threshold=score_utils.minimum_threshold(game_session.current_quarter),
        )

    def convert_employee(
        self, employee: EmployeeSchema, modifiers: PerkModifiers = NEUTRAL_MODIFIERS
    ) -> EmployeeModel:
        data = employee.model_dump(exclude={"game_session_id"})
        return EmployeeModel(
            **data,
            effective_speed=employee_rules.effective_speed(employee, modifiers),
            effective_accuracy=employee_rules.effective_accuracy(employee),
            quit_chance=employee_rules.quit_chance(employee, modifiers),
        )

    def convert_employees(
        self, employees: Iterable[EmployeeSchema], modifiers: PerkModifiers = NEUTRAL_MODIFIERS
    ) -> List[EmployeeModel]:
        return [self.convert_employee(employee, modifiers) for employee in employees]

    def convert_contract(self, contract: ContractSchema) -> ContractModel:
        data = contract.model_dump(exclude={"game_session_id", "bonus_multiplier"})
        return ContractModel(
            **data,
            completion_percentage=contract_rules.completion_percentage(contract),
            effective_reward=contract_rules.effective_reward(contract),
        )

    def convert_contracts(self, contracts: Iterable[ContractSchema]) -> List[ContractModel]:
        return [self.convert_contract(contract) for contract in contracts]

    def convert_game_initialization(self, initialization: GameInitialization) -> GameInitializationModel:
        modifiers = modifiers_for(initialization.game_session.perks)
        return GameInitializationModel(
            game_session=self.convert_game_session(initialization.game_session),
            contracts=self.convert_contracts(initialization.contracts),
            employee_pool=self.convert_employees(initialization.employee_pool, modifiers),
        )

    def convert_game_state(self, game_state: GameState) -> GameStateModel:
        modifiers = modifiers_for(game_state.game_session.perks)
        return GameStateModel(
            game_session=self.convert_game_session(game_state.game_session),
            active_employees=self.convert_employees(game_state.active_employees, modifiers),
            available_contracts=self.convert_contracts(game_state.available_contracts),
            active_contracts=self.convert_contracts(game_state.active_contracts),
        )

    def convert_week_turn(self, outcome: WeekTurnOutcome) -> WeekTurnModel:
        """Convert the WeekTurnOutcome to the WeekTurnModel

        Args:
            outcome (WeekTurnOutcome): Snapshots changed by the week

        Returns:
            WeekTurnModel: Turn report for transmission to the client
        """
        modifiers = modifiers_for(outcome.game_session.perks)
        return WeekTurnModel(
            game_session=self.convert_game_session(outcome.game_session),
            contract_results=self.convert_contracts(outcome.contract_results),
            completed_contracts=self.convert_contracts(outcome.completed_contracts),
            quit_employees=self.convert_employees(outcome.quit_employees, modifiers),
            new_contracts=self.convert_contracts(outcome.new_contracts),
            salary_paid=outcome.salary_paid,
            reward_earned=outcome.reward_earned,
            quarter_ended=outcome.quarter_ended,
        )

    def convert_employee_hiring(self, hiring: EmployeeHiring) -> EmployeeHiringModel:
        return EmployeeHiringModel(
            game_session=self.convert_game_session(hiring.game_session),
            employee=self.convert_employee(hiring.employee, modifiers_for(hiring.game_session.perks)),
        )

    def convert_employee_training(self, training: EmployeeTraining) -> EmployeeTrainingModel:
        return EmployeeTrainingModel(
            game_session=self.convert_game_session(training.game_session),
            employee=self.convert_employee(training.employee, modifiers_for(training.game_session.perks)),
            cost=training.cost,
        )

    def convert_hire_request_to_employeeschema(
        self, hire_request: HireEmployeeModel, game_session_id: UUID
    ) -> EmployeeSchema:
        """Convert the HireEmployeeModel sent by the client to an unhired EmployeeSchema

        Args:
            hire_request (HireEmployeeModel): Candidate data, usually taken from the hiring pool
            game_session_id (UUID): Session that hires the candidate

        Returns:
            EmployeeSchema: Inactive template; a new id is issued when the client sends none
        """
        data = hire_request.model_dump(exclude={"employee_id"})
        return EmployeeSchema(
            **data,
            employee_id=hire_request.employee_id or uuid7(),
            game_session_id=game_session_id,
            is_active=False,
        )

"""Session-level game rules outside the weekly turn.

Each function takes the snapshots it needs, checks the preconditions and
returns ``Ok`` with the new snapshots or ``Err`` with the reason. Nothing
here is persisted; the service layer saves whatever comes back in ``Ok``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Sequence
from uuid6 import uuid7

from company_manager.domain import contract_rules, employee_rules
from company_manager.domain.perks import modifiers_for
from company_manager.domain.results import Err, Ok, Result, insufficient_funds, invalid_state, not_found
from company_manager.domain.rng import RandomProvider
from company_manager.models.schema_models import (
    CompanyPerk,
    ContractAssignmentSchema,
    ContractSchema,
    ContractStatus,
    EmployeeSchema,
    GameSessionSchema,
    GameStatus,
)

STARTING_BUDGET = 50000


@dataclass(frozen=True)
class GameInitialization:
    game_session: GameSessionSchema
    contracts: List[ContractSchema]
    employee_pool: List[EmployeeSchema]


@dataclass(frozen=True)
class EmployeeHiring:
    game_session: GameSessionSchema
    employee: EmployeeSchema


@dataclass(frozen=True)
class EmployeeTraining:
    game_session: GameSessionSchema
    employee: EmployeeSchema
    cost: int


@dataclass(frozen=True)
class EmployeeDismissal:
    employee: EmployeeSchema
    assignments: List[ContractAssignmentSchema]


def require_active(game_session: GameSessionSchema) -> Err | None:
    if game_session.status != GameStatus.active:
        return invalid_state(f"Game session is not active (status: {game_session.status.value})")
    return None


def initialize_game(
    company_name: str,
    perks: Iterable[CompanyPerk],
    rng: RandomProvider,
    now: datetime,
) -> GameInitialization:
    """Create a new session with its starting contracts and hiring pool"""
    perks = sorted(set(perks), key=lambda perk: perk.value)
    modifiers = modifiers_for(perks)
    game_session = GameSessionSchema(
        game_session_id=uuid7(),
        company_name=company_name,
        current_quarter=1,
        current_week=1,
        budget=STARTING_BUDGET + modifiers.starting_budget_bonus,
        status=GameStatus.active,
        perks=perks,
        started_at=now,
    )
    contracts = contract_rules.generate_contracts(
        game_session.game_session_id,
        game_session.current_quarter,
        contract_rules.initial_contract_count(rng),
        rng,
    )
    employee_pool = employee_rules.generate_employee_pool(game_session.game_session_id, rng)
    return GameInitialization(game_session, contracts, employee_pool)


def hire_employee(
    game_session: GameSessionSchema,
    template: EmployeeSchema,
    now: datetime,
) -> Result[EmployeeHiring]:
    """Hire a template employee, paying two weeks of salary up front.

    The budget is left untouched when the hire is rejected.
    """
    if error := require_active(game_session):
        return error

    modifiers = modifiers_for(game_session.perks)
    cost = employee_rules.hiring_cost(template, modifiers)
    if game_session.budget < cost:
        return insufficient_funds(cost, game_session.budget)

    employee = employee_rules.onboard(template, game_session.game_session_id, now, modifiers)
    game_session = game_session.model_copy(update={"budget": game_session.budget - cost})
    return Ok(EmployeeHiring(game_session, employee))


def train_employee(
    game_session: GameSessionSchema,
    employee: EmployeeSchema,
    rng: RandomProvider,
) -> Result[EmployeeTraining]:
    if error := require_active(game_session):
        return error
    if error := require_member(game_session, employee):
        return error
    if not employee.is_active:
        return invalid_state("Only active employees can be trained")

    cost = employee_rules.training_cost(employee, modifiers_for(game_session.perks))
    if game_session.budget < cost:
        return insufficient_funds(cost, game_session.budget)

    trained = employee_rules.level_up(employee, rng)
    game_session = game_session.model_copy(update={"budget": game_session.budget - cost})
    return Ok(EmployeeTraining(game_session, trained, cost))


def fire_employee(
    game_session: GameSessionSchema,
    employee: EmployeeSchema,
    assignments: Sequence[ContractAssignmentSchema],
) -> Result[EmployeeDismissal]:
    """Deactivate an employee together with their active assignments"""
    if error := require_active(game_session):
        return error
    if error := require_member(game_session, employee):
        return error
    if not employee.is_active:
        return invalid_state("Employee is not currently employed")

    released = [
        assignment.model_copy(update={"is_active": False})
        for assignment in assignments
        if assignment.employee_id == employee.employee_id and assignment.is_active
    ]
    return Ok(EmployeeDismissal(employee.model_copy(update={"is_active": False}), released))


def start_contract(game_session: GameSessionSchema, contract: ContractSchema) -> Result[ContractSchema]:
    if error := require_active(game_session):
        return error
    if error := require_member(game_session, contract):
        return error
    if contract.status != ContractStatus.available:
        return invalid_state("Contract is not available to start")
    return Ok(contract.model_copy(update={"status": ContractStatus.in_progress}))


def assign_employee(
    game_session: GameSessionSchema,
    contract: ContractSchema,
    employee: EmployeeSchema,
    existing: ContractAssignmentSchema | None,
) -> Result[ContractAssignmentSchema]:
    """Assign an employee to a contract for the session's current week.

    Args:
        existing (ContractAssignmentSchema | None): Assignment already stored for the same contract, employee and week

    Returns:
        Result[ContractAssignmentSchema]: The new assignment
    """
    if error := require_active(game_session):
        return error
    if error := require_member(game_session, contract) or require_member(game_session, employee):
        return error
    if contract.status != ContractStatus.in_progress:
        return invalid_state("Contract must be in progress to assign employees")
    if not employee.is_active:
        return invalid_state("Only active employees can be assigned")
    if existing is not None and existing.is_active:
        return invalid_state("Employee already assigned to this contract this week")

    return Ok(
        ContractAssignmentSchema(
            assignment_id=existing.assignment_id if existing is not None else uuid7(),
            contract_id=contract.contract_id,
            employee_id=employee.employee_id,
            quarter_assigned=game_session.current_quarter,
            week_assigned=game_session.current_week,
            is_active=True,
        )
    )


def end_game(game_session: GameSessionSchema, status: GameStatus, now: datetime) -> Result[GameSessionSchema]:
    if game_session.status in (GameStatus.completed, GameStatus.failed):
        return invalid_state("Game session has already ended")
    return Ok(game_session.model_copy(update={"status": status, "ended_at": now}))


def pause_game(game_session: GameSessionSchema) -> Result[GameSessionSchema]:
    if error := require_active(game_session):
        return error
    return Ok(game_session.model_copy(update={"status": GameStatus.paused}))


def resume_game(game_session: GameSessionSchema) -> Result[GameSessionSchema]:
    if game_session.status != GameStatus.paused:
        return invalid_state("Only paused game sessions can be resumed")
    return Ok(game_session.model_copy(update={"status": GameStatus.active}))


def require_member(game_session: GameSessionSchema, entity: ContractSchema | EmployeeSchema) -> Err | None:
    if entity.game_session_id != game_session.game_session_id:
        kind = "Contract" if isinstance(entity, ContractSchema) else "Employee"
        return not_found(f"{kind} not found in this game session")
    return None

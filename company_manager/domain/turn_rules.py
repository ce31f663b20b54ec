"""Weekly turn resolution.

``process_week_turn`` takes the current snapshots of a session and returns
every snapshot the week changes. It never writes anything, so a turn that
ends in ``Err`` leaves no trace and a turn that ends in ``Ok`` can be saved
in a single commit.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Sequence
from uuid import UUID

from company_manager.domain import contract_rules, employee_rules
from company_manager.domain.perks import modifiers_for
from company_manager.domain.results import Ok, Result, not_found
from company_manager.domain.rng import RandomProvider
from company_manager.domain.session_rules import require_active
from company_manager.models.schema_models import (
    ContractAssignmentSchema,
    ContractSchema,
    ContractStatus,
    EmployeeSchema,
    GameSessionSchema,
    GameStatus,
)
from company_manager.score_utils import ScoreUtils

WEEKS_PER_QUARTER = 13

score_utils = ScoreUtils()


@dataclass(frozen=True)
class WeekTurnOutcome:
    game_session: GameSessionSchema
    contract_results: List[ContractSchema]
    quit_employees: List[EmployeeSchema]
    completed_contracts: List[ContractSchema]
    employees: List[EmployeeSchema] = field(default_factory=list)
    new_contracts: List[ContractSchema] = field(default_factory=list)
    salary_paid: int = 0
    reward_earned: int = 0
    quarter_ended: bool = False


def advance_calendar(quarter: int, week: int) -> tuple[int, int, bool]:
    """Move one week forward

    Returns:
        tuple[int, int, bool]: New quarter, new week and whether the quarter rolled over
    """
    week += 1
    if week > WEEKS_PER_QUARTER:
        return quarter + 1, 1, True
    return quarter, week, False


def assigned_employees_by_contract(
    game_session: GameSessionSchema,
    assignments: Sequence[ContractAssignmentSchema],
    employees: Dict[UUID, EmployeeSchema],
) -> Result[Dict[UUID, List[EmployeeSchema]]]:
    """Group this week's active assignments into employees per contract.

    An employee assigned twice to the same contract for the same week is
    counted once.
    """
    assigned: Dict[UUID, List[EmployeeSchema]] = {}
    for assignment in assignments:
        if not assignment.is_active:
            continue
        if (assignment.quarter_assigned, assignment.week_assigned) != (
            game_session.current_quarter,
            game_session.current_week,
        ):
            continue
        employee = employees.get(assignment.employee_id)
        if employee is None:
            return not_found(f"Employee {assignment.employee_id} not found")
        contract_employees = assigned.setdefault(assignment.contract_id, [])
        if employee not in contract_employees:
            contract_employees.append(employee)
    return Ok(assigned)


def process_week_turn(
    game_session: GameSessionSchema,
    employees: Sequence[EmployeeSchema],
    contracts: Sequence[ContractSchema],
    assignments: Sequence[ContractAssignmentSchema],
    rng: RandomProvider,
    now: datetime,
) -> Result[WeekTurnOutcome]:
    """Resolve one week of the game.

    Order of play:
        1. the session must be active
        2. weekly morale perk bonus
        3. progress on every in-progress contract from this week's assignments
        4. retention check, quitting employees are deactivated
        5. salaries of everyone employed at the start of the week are paid,
           including employees who quit this week
        6. rewards and stakeholder points of contracts completed this week
        7. calendar moves one week, rolling the quarter after week 13
        8. on a new quarter the score is checked against that quarter's
           threshold: below it the session fails, otherwise new contracts
           are generated

    Args:
        game_session (GameSessionSchema): Session at the start of the week
        employees (Sequence[EmployeeSchema]): Every employee of the session
        contracts (Sequence[ContractSchema]): Every contract of the session
        assignments (Sequence[ContractAssignmentSchema]): Assignments of the session's contracts
        rng (RandomProvider): Random source for quits and contract generation
        now (datetime): Timestamp used if the session ends this week

    Returns:
        Result[WeekTurnOutcome]: All snapshots changed by the week
    """
    if error := require_active(game_session):
        return error

    modifiers = modifiers_for(game_session.perks)

    employees = employee_rules.apply_morale_bonus(employees, modifiers.weekly_morale_bonus)
    employee_index = {employee.employee_id: employee for employee in employees}

    assigned = assigned_employees_by_contract(game_session, assignments, employee_index)
    if not isinstance(assigned, Ok):
        return assigned

    contract_results = [
        contract_rules.advance_contract(contract, assigned.value.get(contract.contract_id, []), modifiers)
        for contract in contracts
        if contract.status == ContractStatus.in_progress
    ]
    completed_contracts = [
        contract for contract in contract_results if contract.status == ContractStatus.completed
    ]

    salary_paid = sum(employee.salary for employee in employees if employee.is_active)
    employees, quit_employees = employee_rules.evaluate_retention(employees, rng, modifiers)

    reward_earned = sum(int(contract.awarded_reward * modifiers.reward_multiplier) for contract in completed_contracts)
    stakeholder_earned = sum(contract.stakeholder_points for contract in completed_contracts)

    quarter, week, quarter_ended = advance_calendar(game_session.current_quarter, game_session.current_week)
    game_session = game_session.model_copy(
        update={
            "budget": game_session.budget - salary_paid + reward_earned,
            "stakeholder_value": game_session.stakeholder_value + stakeholder_earned,
            "current_quarter": quarter,
            "current_week": week,
        }
    )

    new_contracts: List[ContractSchema] = []
    if quarter_ended:
        if score_utils.meets_threshold(game_session):
            new_contracts = contract_rules.generate_contracts(
                game_session.game_session_id,
                quarter,
                contract_rules.quarterly_contract_count(rng),
                rng,
            )
        else:
            game_session = game_session.model_copy(update={"status": GameStatus.failed, "ended_at": now})

    return Ok(
        WeekTurnOutcome(
            game_session=game_session,
            contract_results=contract_results,
            quit_employees=quit_employees,
            completed_contracts=completed_contracts,
            employees=employees,
            new_contracts=new_contracts,
            salary_paid=salary_paid,
            reward_earned=reward_earned,
            quarter_ended=quarter_ended,
        )
    )

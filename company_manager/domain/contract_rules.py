"""Contract rules that are independent from HTTP and DB.

Covers generation of new contracts and the weekly progress step.

Rule of thumb:
- OK: math on ContractSchema snapshots, draws from a RandomProvider.
- Not OK: touching DB sessions, FastAPI, datetime.now(), etc.
"""

from typing import List, Sequence
from uuid import UUID

from uuid6 import uuid7

from company_manager.domain.employee_rules import effective_accuracy, effective_speed
from company_manager.domain.perks import NEUTRAL_MODIFIERS, PerkModifiers
from company_manager.domain.rng import RandomProvider
from company_manager.models.schema_models import (
    ContractDifficulty,
    ContractSchema,
    ContractStatus,
    EmployeeSchema,
)

# ==============================================================================
# ==== Generation ==============================================================
# ==============================================================================

# Cumulative 1-100 roll: 1-50 easy, 51-80 medium, 81-100 hard.
DIFFICULTY_WEIGHTS = (
    (ContractDifficulty.easy, 50),
    (ContractDifficulty.medium, 30),
    (ContractDifficulty.hard, 20),
)

# Ranges are [low, high).
WORK_RANGES = {
    ContractDifficulty.easy: (50, 100),
    ContractDifficulty.medium: (100, 200),
    ContractDifficulty.hard: (200, 350),
}
DEADLINE_RANGES = {
    ContractDifficulty.easy: (2, 4),
    ContractDifficulty.medium: (3, 6),
    ContractDifficulty.hard: (5, 9),
}
STAKEHOLDER_RANGES = {
    ContractDifficulty.easy: (10, 25),
    ContractDifficulty.medium: (25, 50),
    ContractDifficulty.hard: (50, 100),
}
BASE_REWARDS = {
    ContractDifficulty.easy: 5000,
    ContractDifficulty.medium: 10000,
    ContractDifficulty.hard: 18000,
}
REWARD_PER_QUARTER = 1000
BONUS_MULTIPLIER = 1.5
DEFAULT_ACCURACY_REQUIREMENT = 70

INITIAL_CONTRACT_COUNT_RANGE = (2, 4)
QUARTERLY_CONTRACT_COUNT_RANGE = (3, 6)

TITLES = {
    ContractDifficulty.easy: (
        "Simple Data Entry Project",
        "Basic Website Update",
        "Customer Survey Analysis",
        "Social Media Content Creation",
    ),
    ContractDifficulty.medium: (
        "E-commerce Platform Development",
        "Marketing Campaign Strategy",
        "Database Migration Project",
        "Mobile App Prototype",
    ),
    ContractDifficulty.hard: (
        "Enterprise Software Solution",
        "AI Implementation Project",
        "Complete System Overhaul",
        "International Market Expansion",
    ),
}
DESCRIPTIONS = {
    ContractDifficulty.easy: "A straightforward project that requires basic skills and minimal complexity.",
    ContractDifficulty.medium: "A moderately complex project requiring coordination and specialized knowledge.",
    ContractDifficulty.hard: "A challenging project demanding expertise, innovation, and careful execution.",
}


def base_reward(difficulty: ContractDifficulty, quarter: int) -> int:
    return BASE_REWARDS[difficulty] + quarter * REWARD_PER_QUARTER


def generate_contract(game_session_id: UUID, quarter: int, rng: RandomProvider) -> ContractSchema:
    difficulty = rng.pick(DIFFICULTY_WEIGHTS)
    total_work_required = rng.uniform_long(*WORK_RANGES[difficulty])
    deadline = rng.uniform_long(*DEADLINE_RANGES[difficulty])
    stakeholder_points = rng.uniform_long(*STAKEHOLDER_RANGES[difficulty])
    return ContractSchema(
        contract_id=uuid7(),
        game_session_id=game_session_id,
        title=rng.choice(TITLES[difficulty]),
        description=DESCRIPTIONS[difficulty],
        difficulty=difficulty,
        total_work_required=total_work_required,
        current_progress=0,
        deadline_weeks=deadline,
        weeks_remaining=deadline,
        base_reward=base_reward(difficulty, quarter),
        stakeholder_points=stakeholder_points,
        bonus_multiplier=BONUS_MULTIPLIER,
        status=ContractStatus.available,
        accuracy_requirement=DEFAULT_ACCURACY_REQUIREMENT,
        current_accuracy=100,
    )


def generate_contracts(game_session_id: UUID, quarter: int, count: int, rng: RandomProvider) -> List[ContractSchema]:
    """Generate ``count`` available contracts priced for ``quarter``"""
    return [generate_contract(game_session_id, quarter, rng) for _ in range(count)]


def initial_contract_count(rng: RandomProvider) -> int:
    return rng.uniform_long(*INITIAL_CONTRACT_COUNT_RANGE)


def quarterly_contract_count(rng: RandomProvider) -> int:
    return rng.uniform_long(*QUARTERLY_CONTRACT_COUNT_RANGE)


# ==============================================================================
# ==== Weekly progress =========================================================
# ==============================================================================


def effective_reward(contract: ContractSchema) -> int:
    """Reward paid out on completion

    Returns:
        int: base reward times the bonus multiplier when the accuracy gate is met, half the base otherwise
    """
    if contract.current_accuracy >= contract.accuracy_requirement:
        return int(contract.base_reward * contract.bonus_multiplier)
    return contract.base_reward // 2


def completion_percentage(contract: ContractSchema) -> float:
    return contract.current_progress / contract.total_work_required * 100


def advance_contract(
    contract: ContractSchema,
    assigned_employees: Sequence[EmployeeSchema],
    modifiers: PerkModifiers = NEUTRAL_MODIFIERS,
) -> ContractSchema:
    """Apply one week of work to an in-progress contract.

    The deadline counts down every week whether or not work was done.
    Completion is checked before the deadline, so work landing in the last
    week still completes the contract. The reward is fixed at the moment of
    completion.

    Args:
        contract (ContractSchema): Contract to advance; other statuses are returned unchanged
        assigned_employees (Sequence[EmployeeSchema]): Employees assigned to it this week
        modifiers (PerkModifiers): Session perks, speed multiplier applies

    Returns:
        ContractSchema: The contract after this week
    """
    if contract.status != ContractStatus.in_progress:
        return contract

    contributors = [employee for employee in assigned_employees if employee.is_active]
    speeds = [effective_speed(employee, modifiers) for employee in contributors]
    work_added = sum(speeds)

    current_accuracy = contract.current_accuracy
    if work_added > 0:
        weighted_accuracy = sum(
            effective_accuracy(employee) * speed for employee, speed in zip(contributors, speeds)
        )
        current_accuracy = int(
            (contract.current_accuracy * contract.current_progress + weighted_accuracy)
            / (contract.current_progress + work_added)
        )

    new_progress = min(contract.total_work_required, contract.current_progress + work_added)
    weeks_remaining = contract.weeks_remaining - 1

    status = ContractStatus.in_progress
    if new_progress >= contract.total_work_required:
        status = ContractStatus.completed
    elif weeks_remaining <= 0:
        status = ContractStatus.failed

    advanced = contract.model_copy(
        update={
            "current_progress": new_progress,
            "weeks_remaining": weeks_remaining,
            "current_accuracy": current_accuracy,
            "status": status,
        }
    )
    if status == ContractStatus.completed:
        advanced = advanced.model_copy(update={"awarded_reward": effective_reward(advanced)})
    return advanced

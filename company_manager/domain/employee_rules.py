"""Employee rules: derived stats, weekly retention, generation, hiring and training.

Rule of thumb:
- OK: math on EmployeeSchema snapshots, draws from a RandomProvider.
- Not OK: touching DB sessions or reading the clock.
"""

from datetime import datetime
from typing import List, Sequence, Tuple
from uuid import UUID

from uuid6 import uuid7

from company_manager.domain.perks import NEUTRAL_MODIFIERS, PerkModifiers
from company_manager.domain.rng import RandomProvider
from company_manager.models.schema_models import EmployeeSchema, EmployeeType

# (minimum morale, quit chance in percent), checked top-down.
QUIT_CHANCE_STEPS = ((80, 2), (60, 5), (40, 15), (20, 30))
LOWEST_QUIT_CHANCE_STEP = 50

HIRING_COST_WEEKS = 2
TRAINING_COST_PER_LEVEL = 2000
TRAINING_SALARY_RAISE = 1.15
INITIAL_POOL_SIZE = 5

LEVEL_RANGE = (1, 4)
SPEED_RANGES = {EmployeeType.analyst: (15, 30)}
ACCURACY_RANGES = {EmployeeType.analyst: (70, 90)}
SALARY_RANGES = {EmployeeType.analyst: (600, 900)}
SPEED_PER_LEVEL_RANGE = (3, 8)
ACCURACY_PER_LEVEL_RANGE = (2, 6)
SALARY_PER_LEVEL_RANGE = (100, 300)

FIRST_NAMES = (
    "Alex", "Jordan", "Taylor", "Morgan", "Casey", "Riley", "Avery", "Cameron",
    "Quinn", "Sage", "River", "Rowan", "Emery", "Dakota", "Phoenix", "Skyler",
    "Blake", "Parker", "Drew", "Kai", "Reese", "Charlie", "Hayden", "Remy",
)
LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson", "Thomas",
    "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson", "White",
)


def clamp_morale(morale: int) -> int:
    return min(max(morale, 0), 100)


def effective_speed(employee: EmployeeSchema, modifiers: PerkModifiers = NEUTRAL_MODIFIERS) -> int:
    """Work points the employee contributes this week

    Args:
        employee (EmployeeSchema): The employee
        modifiers (PerkModifiers): Session perks, speed multiplier applies

    Returns:
        int: Base speed scaled by morale and a 10% per-level bonus, at least 1
    """
    morale_factor = employee.morale / 100.0
    level_bonus = 1.0 + (employee.level - 1) * 0.1
    return max(int(employee.speed * morale_factor * level_bonus * modifiers.speed_multiplier), 1)


def effective_accuracy(employee: EmployeeSchema) -> int:
    """Base accuracy scaled by morale and a 5% per-level bonus, within 1..100"""
    morale_factor = employee.morale / 100.0
    level_bonus = 1.0 + (employee.level - 1) * 0.05
    return min(max(int(employee.accuracy * morale_factor * level_bonus), 1), 100)


def quit_chance(employee: EmployeeSchema, modifiers: PerkModifiers = NEUTRAL_MODIFIERS) -> int:
    """Percent chance that the employee quits this week"""
    chance = LOWEST_QUIT_CHANCE_STEP
    for minimum_morale, step_chance in QUIT_CHANCE_STEPS:
        if employee.morale >= minimum_morale:
            chance = step_chance
            break
    return max(chance + modifiers.quit_chance_shift, 0)


def evaluate_retention(
    employees: Sequence[EmployeeSchema],
    rng: RandomProvider,
    modifiers: PerkModifiers = NEUTRAL_MODIFIERS,
) -> Tuple[List[EmployeeSchema], List[EmployeeSchema]]:
    """Roll the weekly quit check for every active employee.

    Each active employee gets one independent 1-100 draw and quits when the
    draw is at or below their quit chance. Inactive employees pass through
    without a draw.

    Args:
        employees (Sequence[EmployeeSchema]): All employees of the session
        rng (RandomProvider): Random source for the draws
        modifiers (PerkModifiers): Session perks, quit chance shift applies

    Returns:
        Tuple[List[EmployeeSchema], List[EmployeeSchema]]: Every employee after the check, and the ones who quit
    """
    updated = []
    quit_employees = []
    for employee in employees:
        if employee.is_active and rng.uniform_int(1, 100) <= quit_chance(employee, modifiers):
            employee = employee.model_copy(update={"is_active": False})
            quit_employees.append(employee)
        updated.append(employee)
    return updated, quit_employees


def apply_morale_bonus(employees: Sequence[EmployeeSchema], bonus: int) -> List[EmployeeSchema]:
    if bonus == 0:
        return list(employees)
    return [
        employee.model_copy(update={"morale": clamp_morale(employee.morale + bonus)})
        if employee.is_active
        else employee
        for employee in employees
    ]


def generate_employee(game_session_id: UUID, rng: RandomProvider) -> EmployeeSchema:
    """Generate an unhired employee template for the hiring pool"""
    employee_type = EmployeeType.analyst
    level = rng.uniform_long(*LEVEL_RANGE)
    speed = rng.uniform_long(*SPEED_RANGES[employee_type]) + level * rng.uniform_long(*SPEED_PER_LEVEL_RANGE)
    accuracy = rng.uniform_long(*ACCURACY_RANGES[employee_type]) + level * rng.uniform_long(
        *ACCURACY_PER_LEVEL_RANGE
    )
    salary = rng.uniform_long(*SALARY_RANGES[employee_type]) + level * rng.uniform_long(*SALARY_PER_LEVEL_RANGE)
    return EmployeeSchema(
        employee_id=uuid7(),
        game_session_id=game_session_id,
        name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        employee_type=employee_type,
        level=level,
        speed=speed,
        accuracy=min(accuracy, 100),
        salary=salary,
        morale=100,
        is_active=False,
    )


def generate_employee_pool(game_session_id: UUID, rng: RandomProvider, size: int = INITIAL_POOL_SIZE) -> List[EmployeeSchema]:
    return [generate_employee(game_session_id, rng) for _ in range(size)]


def hiring_cost(employee: EmployeeSchema, modifiers: PerkModifiers = NEUTRAL_MODIFIERS) -> int:
    return int(employee.salary * HIRING_COST_WEEKS * modifiers.hiring_cost_multiplier)


def training_cost(employee: EmployeeSchema, modifiers: PerkModifiers = NEUTRAL_MODIFIERS) -> int:
    return int(TRAINING_COST_PER_LEVEL * employee.level * modifiers.training_cost_multiplier)


def onboard(
    template: EmployeeSchema,
    game_session_id: UUID,
    now: datetime,
    modifiers: PerkModifiers = NEUTRAL_MODIFIERS,
) -> EmployeeSchema:
    """Turn a hiring-pool template into an active employee of the session"""
    return template.model_copy(
        update={
            "game_session_id": game_session_id,
            "morale": clamp_morale(template.morale + modifiers.starting_morale_bonus),
            "is_active": True,
            "hired_at": now,
        }
    )


def level_up(employee: EmployeeSchema, rng: RandomProvider) -> EmployeeSchema:
    return employee.model_copy(
        update={
            "level": employee.level + 1,
            "speed": employee.speed + rng.uniform_long(*SPEED_PER_LEVEL_RANGE),
            "accuracy": min(employee.accuracy + rng.uniform_long(*ACCURACY_PER_LEVEL_RANGE), 100),
            "salary": int(employee.salary * TRAINING_SALARY_RAISE),
        }
    )

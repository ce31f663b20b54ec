from pydantic import BaseModel, Field
from enum import Enum
from typing import List
from uuid import UUID
from datetime import datetime


class GameStatus(str, Enum):
    active = "active"
    completed = "completed"
    failed = "failed"
    paused = "paused"


class EmployeeType(str, Enum):
    analyst = "analyst"


class ContractDifficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class ContractStatus(str, Enum):
    available = "available"
    in_progress = "in_progress"
    completed = "completed"
    failed = "failed"
    overdue = "overdue"  # part of the status vocabulary, never entered by the turn engine


class CompanyPerk(str, Enum):
    better_onboarding = "better_onboarding"
    cheaper_training = "cheaper_training"
    morale_bonus = "morale_bonus"
    faster_hiring = "faster_hiring"
    budget_boost = "budget_boost"
    employee_loyalty = "employee_loyalty"
    contract_negotiator = "contract_negotiator"
    efficiency_expert = "efficiency_expert"


class GameSessionSchema(BaseModel):
    game_session_id: UUID
    company_name: str = Field(min_length=2, max_length=100)
    current_quarter: int = Field(default=1, ge=1)
    current_week: int = Field(default=1, ge=1, le=13)
    budget: int = 50000
    stakeholder_value: int = 0
    error_penalties: int = 0
    status: GameStatus = GameStatus.active
    perks: List[CompanyPerk] = []
    started_at: datetime
    ended_at: datetime | None = None

    class Config:
        from_attributes = True
        frozen = True


class EmployeeSchema(BaseModel):
    employee_id: UUID
    game_session_id: UUID
    name: str
    employee_type: EmployeeType = EmployeeType.analyst
    level: int = Field(default=1, ge=1)
    speed: int = Field(ge=1)  # work points per week
    accuracy: int = Field(ge=1, le=100)
    salary: int = Field(ge=1)  # weekly
    morale: int = Field(default=100, ge=0, le=100)
    is_active: bool = False
    hired_at: datetime | None = None

    class Config:
        from_attributes = True
        frozen = True


class ContractSchema(BaseModel):
    contract_id: UUID
    game_session_id: UUID
    title: str
    description: str | None = None
    difficulty: ContractDifficulty
    total_work_required: int = Field(ge=1)
    current_progress: int = Field(default=0, ge=0)
    deadline_weeks: int
    weeks_remaining: int
    base_reward: int
    stakeholder_points: int
    bonus_multiplier: float = 1.0
    status: ContractStatus = ContractStatus.available
    accuracy_requirement: int = 70
    current_accuracy: int = 100
    awarded_reward: int | None = None

    class Config:
        from_attributes = True
        frozen = True


class ContractAssignmentSchema(BaseModel):
    assignment_id: UUID
    contract_id: UUID
    employee_id: UUID
    quarter_assigned: int
    week_assigned: int
    is_active: bool = True

    class Config:
        from_attributes = True
        frozen = True

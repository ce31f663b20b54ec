from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import List, Optional

from company_manager.models.schema_models import (
    CompanyPerk,
    ContractDifficulty,
    ContractStatus,
    EmployeeType,
    GameStatus,
)


class StartGameModel(BaseModel):
    company_name: str = Field(min_length=2, max_length=100)
    perks: List[CompanyPerk] = []


class HireEmployeeModel(BaseModel):
    """Candidate picked from the hiring pool returned at game start"""

    employee_id: Optional[UUID] = None
    name: str = Field(min_length=1, max_length=50)
    employee_type: EmployeeType = EmployeeType.analyst
    level: int = Field(default=1, ge=1)
    speed: int = Field(ge=1)
    accuracy: int = Field(ge=1, le=100)
    salary: int = Field(ge=1)
    morale: int = Field(default=100, ge=0, le=100)


class GameSessionModel(BaseModel):
    game_session_id: UUID
    company_name: str
    current_quarter: int
    current_week: int
    budget: int
    stakeholder_value: int
    error_penalties: int
    status: GameStatus
    perks: List[CompanyPerk]
    started_at: datetime
    ended_at: Optional[datetime] = None
    total_score: int
    minimum_threshold: int

    class Config:
        from_attributes = True


class EmployeeModel(BaseModel):
    employee_id: UUID
    name: str
    employee_type: EmployeeType
    level: int
    speed: int
    accuracy: int
    salary: int
    morale: int
    is_active: bool
    hired_at: Optional[datetime] = None
    effective_speed: int
    effective_accuracy: int
    quit_chance: int

    class Config:
        from_attributes = True


class ContractModel(BaseModel):
    contract_id: UUID
    title: str
    description: Optional[str] = None
    difficulty: ContractDifficulty
    total_work_required: int
    current_progress: int
    completion_percentage: float
    deadline_weeks: int
    weeks_remaining: int
    base_reward: int
    effective_reward: int
    stakeholder_points: int
    status: ContractStatus
    accuracy_requirement: int
    current_accuracy: int
    awarded_reward: Optional[int] = None

    class Config:
        from_attributes = True


class AssignmentModel(BaseModel):
    assignment_id: UUID
    contract_id: UUID
    employee_id: UUID
    quarter_assigned: int
    week_assigned: int
    is_active: bool

    class Config:
        from_attributes = True


class GameInitializationModel(BaseModel):
    game_session: GameSessionModel
    contracts: List[ContractModel]
    employee_pool: List[EmployeeModel]


class GameStateModel(BaseModel):
    game_session: GameSessionModel
    active_employees: List[EmployeeModel]
    available_contracts: List[ContractModel]
    active_contracts: List[ContractModel]


class WeekTurnModel(BaseModel):
    game_session: GameSessionModel
    contract_results: List[ContractModel]
    completed_contracts: List[ContractModel]
    quit_employees: List[EmployeeModel]
    new_contracts: List[ContractModel]
    salary_paid: int
    reward_earned: int
    quarter_ended: bool


class EmployeeHiringModel(BaseModel):
    game_session: GameSessionModel
    employee: EmployeeModel


class EmployeeTrainingModel(BaseModel):
    game_session: GameSessionModel
    employee: EmployeeModel
    cost: int

from sqlalchemy.orm import DeclarativeBase, relationship
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, BigInteger, Boolean, DateTime, Enum, Float, Integer, String, Uuid
from uuid6 import uuid7
from datetime import datetime

from company_manager.models.schema_models import (
    ContractDifficulty,
    ContractStatus,
    EmployeeType,
    GameStatus,
)


class Base(DeclarativeBase):
    pass


class GameSession(Base):
    __tablename__ = "game_session"
    game_session_id = Column(Uuid, primary_key=True, default=uuid7)
    company_name = Column(String(100))
    current_quarter = Column(Integer, default=1)
    current_week = Column(Integer, default=1)
    budget = Column(BigInteger, default=50000)
    stakeholder_value = Column(Integer, default=0)
    error_penalties = Column(Integer, default=0)
    status = Column(Enum(GameStatus, native_enum=False), default=GameStatus.active)
    perks = Column(JSON, default=list)
    started_at = Column(DateTime, default=datetime.now)
    ended_at = Column(DateTime, nullable=True)

    employees = relationship(
        "Employee",
        primaryjoin="GameSession.game_session_id == foreign(Employee.game_session_id)",
        back_populates="game_session",
    )
    contracts = relationship(
        "Contract",
        primaryjoin="GameSession.game_session_id == foreign(Contract.game_session_id)",
        back_populates="game_session",
    )


class Employee(Base):
    __tablename__ = "employee"
    employee_id = Column(Uuid, primary_key=True, default=uuid7)
    game_session_id = Column(Uuid, index=True)
    name = Column(String(50))
    employee_type = Column(Enum(EmployeeType, native_enum=False), default=EmployeeType.analyst)
    level = Column(Integer, default=1)
    speed = Column(Integer)
    accuracy = Column(Integer)
    salary = Column(BigInteger)
    morale = Column(Integer, default=100)
    is_active = Column(Boolean, default=False)
    hired_at = Column(DateTime, nullable=True)

    game_session = relationship(
        "GameSession",
        primaryjoin="foreign(Employee.game_session_id) == GameSession.game_session_id",
        back_populates="employees",
    )
    assignments = relationship(
        "ContractAssignment",
        primaryjoin="Employee.employee_id == foreign(ContractAssignment.employee_id)",
        back_populates="employee",
    )


class Contract(Base):
    __tablename__ = "contract"
    contract_id = Column(Uuid, primary_key=True, default=uuid7)
    game_session_id = Column(Uuid, index=True)
    title = Column(String(100))
    description = Column(String(500), nullable=True)
    difficulty = Column(Enum(ContractDifficulty, native_enum=False))
    total_work_required = Column(Integer)
    current_progress = Column(Integer, default=0)
    deadline_weeks = Column(Integer)
    weeks_remaining = Column(Integer)
    base_reward = Column(BigInteger)
    stakeholder_points = Column(Integer)
    bonus_multiplier = Column(Float, default=1.0)
    status = Column(Enum(ContractStatus, native_enum=False), default=ContractStatus.available)
    accuracy_requirement = Column(Integer, default=70)
    current_accuracy = Column(Integer, default=100)
    awarded_reward = Column(BigInteger, nullable=True)

    game_session = relationship(
        "GameSession",
        primaryjoin="foreign(Contract.game_session_id) == GameSession.game_session_id",
        back_populates="contracts",
    )
    assignments = relationship(
        "ContractAssignment",
        primaryjoin="Contract.contract_id == foreign(ContractAssignment.contract_id)",
        back_populates="contract",
    )


class ContractAssignment(Base):
    __tablename__ = "contract_assignment"
    assignment_id = Column(Uuid, primary_key=True, default=uuid7)
    contract_id = Column(Uuid, index=True)
    employee_id = Column(Uuid, index=True)
    quarter_assigned = Column(Integer)
    week_assigned = Column(Integer)
    is_active = Column(Boolean, default=True)

    contract = relationship(
        "Contract",
        primaryjoin="foreign(ContractAssignment.contract_id) == Contract.contract_id",
        back_populates="assignments",
    )
    employee = relationship(
        "Employee",
        primaryjoin="foreign(ContractAssignment.employee_id) == Employee.employee_id",
        back_populates="assignments",
    )

import asyncio
from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from uuid6 import uuid7

from company_manager.db import create_tables
from company_manager.domain.rng import RandomProvider
from company_manager.models.schema_models import (
    ContractDifficulty,
    ContractSchema,
    ContractStatus,
    EmployeeSchema,
    GameSessionSchema,
    GameStatus,
)

FIXED_NOW = datetime(2024, 1, 1, 9, 0, 0)


class FixedRandom:
    """Deterministic stand-in: inclusive draws hit the top, exclusive draws hit the bottom.

    With the top of 1..100 drawn every week nobody ever quits.
    """

    def spawn(self):
        return self

    def uniform_int(self, low, high):
        return high

    def uniform_long(self, low, high):
        return low

    def pick(self, alternatives):
        return alternatives[0][0]

    def choice(self, values):
        return values[0]


@pytest.fixture
def seeded_rng():
    return RandomProvider(42)


@pytest.fixture
def fixed_rng():
    return FixedRandom()


@pytest.fixture
def make_game_session():
    def factory(**overrides) -> GameSessionSchema:
        data = dict(
            game_session_id=uuid7(),
            company_name="Acme Analytics",
            current_quarter=1,
            current_week=1,
            budget=50000,
            stakeholder_value=0,
            error_penalties=0,
            status=GameStatus.active,
            perks=[],
            started_at=FIXED_NOW,
        )
        data.update(overrides)
        return GameSessionSchema(**data)

    return factory


@pytest.fixture
def make_employee():
    def factory(game_session_id=None, **overrides) -> EmployeeSchema:
        data = dict(
            employee_id=uuid7(),
            game_session_id=game_session_id or uuid7(),
            name="Alex Smith",
            level=1,
            speed=40,
            accuracy=80,
            salary=1000,
            morale=100,
            is_active=True,
            hired_at=FIXED_NOW,
        )
        data.update(overrides)
        return EmployeeSchema(**data)

    return factory


@pytest.fixture
def make_contract():
    def factory(game_session_id=None, **overrides) -> ContractSchema:
        data = dict(
            contract_id=uuid7(),
            game_session_id=game_session_id or uuid7(),
            title="Customer Satisfaction Survey Analysis",
            difficulty=ContractDifficulty.easy,
            total_work_required=100,
            current_progress=0,
            deadline_weeks=5,
            weeks_remaining=5,
            base_reward=6000,
            stakeholder_points=20,
            bonus_multiplier=1.5,
            status=ContractStatus.in_progress,
        )
        data.update(overrides)
        return ContractSchema(**data)

    return factory


@pytest.fixture
def session_factory(tmp_path):
    """Session factory bound to a fresh sqlite file with every table created"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'game.sqlite3'}", poolclass=NullPool)
    asyncio.run(create_tables(engine))
    yield async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )
    asyncio.run(engine.dispose())

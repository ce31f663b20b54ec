"""DB service layer for game-session use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries and per-session locking.
- Game rules live in company_manager.domain; this module loads snapshots,
  hands them to the rules and saves whatever comes back in ``Ok``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from company_manager.crud import ReadData, SaveData
from company_manager.db import Session
from company_manager.domain import session_rules
from company_manager.domain.results import Err, Ok, Result, invalid_state, not_found
from company_manager.domain.rng import RandomProvider
from company_manager.domain.session_rules import EmployeeHiring, EmployeeTraining, GameInitialization
from company_manager.domain.turn_rules import WeekTurnOutcome, process_week_turn
from company_manager.load_secrets import rng_seed
from company_manager.models.schema_models import (
    CompanyPerk,
    ContractAssignmentSchema,
    ContractSchema,
    ContractStatus,
    EmployeeSchema,
    GameSessionSchema,
    GameStatus,
)
from company_manager.score_utils import ScoreUtils
from company_manager.session_lock_manager import SessionLockManager

score_utils = ScoreUtils()


@dataclass(frozen=True)
class GameState:
    game_session: GameSessionSchema
    active_employees: List[EmployeeSchema]
    available_contracts: List[ContractSchema]
    active_contracts: List[ContractSchema]
    total_score: int
    minimum_threshold: int


def game_session_not_found(game_session_id: UUID) -> Err:
    return not_found(f"Game session {game_session_id} not found")


class GameService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        random_provider: RandomProvider,
        clock: Callable[[], datetime] = datetime.now,
        locks: SessionLockManager | None = None,
    ):
        self.session_factory = session_factory
        self.random_provider = random_provider
        self.clock = clock
        self.locks = locks if locks is not None else SessionLockManager()

    async def initialize_game(
        self, company_name: str, perks: Iterable[CompanyPerk] = ()
    ) -> Result[GameInitialization]:
        """Create a game session with its starting contracts and a hiring pool.

        The hiring pool is returned but not stored; a pool employee only
        becomes a record once hired.
        """
        initialization = session_rules.initialize_game(
            company_name, perks, self.random_provider.spawn(), self.clock()
        )
        async with self.session_factory() as session:
            async with session.begin():
                await SaveData.save_game_session(initialization.game_session, session)
                await SaveData.save_contracts(initialization.contracts, session)

        logging.info(
            f"Started game {initialization.game_session.game_session_id} for '{company_name}' "
            f"with {len(initialization.contracts)} contracts"
        )
        return Ok(initialization)

    async def process_week_turn(self, game_session_id: UUID) -> Result[WeekTurnOutcome]:
        """Advance the game session by one week.

        Reads, rules and writes run under the session's lock and inside one
        transaction, so two turns of the same session never interleave and a
        rejected turn commits nothing.

        Args:
            game_session_id (UUID): To identify the game session

        Returns:
            Result[WeekTurnOutcome]: Updated session, contract results, quitters and completed contracts
        """
        async with self.locks.hold(game_session_id):
            try:
                result = await self.run_week_turn(game_session_id)
            except SQLAlchemyError as e:
                logging.error(f"Failed to process week turn for {game_session_id}: {e}")
                raise

        if isinstance(result, Err):
            logging.warning(f"Week turn rejected for {game_session_id}: {result.reason}")
            return result

        outcome = result.value
        updated = outcome.game_session
        logging.info(
            f"Game {game_session_id} now Q{updated.current_quarter} W{updated.current_week}: "
            f"salaries {outcome.salary_paid}, rewards {outcome.reward_earned}, "
            f"{len(outcome.completed_contracts)} completed, {len(outcome.quit_employees)} quit"
        )
        for employee in outcome.quit_employees:
            logging.info(f"Employee {employee.name} ({employee.employee_id}) quit")
        if outcome.quarter_ended:
            if updated.status == GameStatus.failed:
                logging.info(
                    f"Game {game_session_id} failed quarter {updated.current_quarter} "
                    f"with score {score_utils.total_score(updated)}"
                )
            else:
                logging.info(
                    f"Game {game_session_id} entered quarter {updated.current_quarter} "
                    f"with {len(outcome.new_contracts)} new contracts"
                )
        return result

    async def run_week_turn(self, game_session_id: UUID) -> Result[WeekTurnOutcome]:
        """Load, resolve and save one week inside a single transaction. Caller holds the session lock."""
        async with self.session_factory() as session:
            async with session.begin():
                game_session = await ReadData.read_game_session(game_session_id, session, for_update=True)
                if game_session is None:
                    return game_session_not_found(game_session_id)

                employees = await ReadData.read_employees(game_session_id, session)
                contracts = await ReadData.read_contracts(game_session_id, session)
                assignments = await ReadData.read_assignments(
                    game_session_id,
                    session,
                    quarter=game_session.current_quarter,
                    week=game_session.current_week,
                )

                result = process_week_turn(
                    game_session,
                    employees,
                    contracts,
                    assignments,
                    self.random_provider.spawn(),
                    self.clock(),
                )
                if isinstance(result, Err):
                    return result

                outcome = result.value
                await SaveData.save_game_session(outcome.game_session, session)
                await SaveData.save_employees(outcome.employees, session)
                await SaveData.save_contracts(outcome.contract_results, session)
                await SaveData.save_contracts(outcome.new_contracts, session)
        return result

    async def hire_employee(self, game_session_id: UUID, template: EmployeeSchema) -> Result[EmployeeHiring]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session, for_update=True)
                    if game_session is None:
                        return game_session_not_found(game_session_id)

                    if await ReadData.read_employee(template.employee_id, session) is not None:
                        return invalid_state(f"Employee {template.employee_id} has already been hired")

                    result = session_rules.hire_employee(game_session, template, self.clock())
                    if isinstance(result, Err):
                        logging.info(f"Hire rejected for {game_session_id}: {result.reason}")
                        return result

                    await SaveData.save_game_session(result.value.game_session, session)
                    await SaveData.save_employee(result.value.employee, session)

        logging.info(f"Hired {result.value.employee.name} into game {game_session_id}")
        return result

    async def train_employee(self, game_session_id: UUID, employee_id: UUID) -> Result[EmployeeTraining]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session, for_update=True)
                    if game_session is None:
                        return game_session_not_found(game_session_id)
                    employee = await ReadData.read_employee(employee_id, session)
                    if employee is None:
                        return not_found(f"Employee {employee_id} not found")

                    result = session_rules.train_employee(game_session, employee, self.random_provider.spawn())
                    if isinstance(result, Err):
                        return result

                    await SaveData.save_game_session(result.value.game_session, session)
                    await SaveData.save_employee(result.value.employee, session)

        logging.info(f"Trained employee {employee_id} to level {result.value.employee.level}")
        return result

    async def fire_employee(self, game_session_id: UUID, employee_id: UUID) -> Result[EmployeeSchema]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session)
                    if game_session is None:
                        return game_session_not_found(game_session_id)
                    employee = await ReadData.read_employee(employee_id, session)
                    if employee is None:
                        return not_found(f"Employee {employee_id} not found")
                    assignments = await ReadData.read_assignments(game_session_id, session)

                    result = session_rules.fire_employee(game_session, employee, assignments)
                    if isinstance(result, Err):
                        return result

                    await SaveData.save_employee(result.value.employee, session)
                    await SaveData.save_assignments(result.value.assignments, session)

        logging.info(f"Fired employee {employee_id} from game {game_session_id}")
        return Ok(result.value.employee)

    async def start_contract(self, game_session_id: UUID, contract_id: UUID) -> Result[ContractSchema]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session)
                    if game_session is None:
                        return game_session_not_found(game_session_id)
                    contract = await ReadData.read_contract(contract_id, session)
                    if contract is None:
                        return not_found(f"Contract {contract_id} not found")

                    result = session_rules.start_contract(game_session, contract)
                    if isinstance(result, Err):
                        return result
                    await SaveData.save_contract(result.value, session)

        logging.info(f"Contract {contract_id} accepted in game {game_session_id}")
        return result

    async def assign_employee(
        self, game_session_id: UUID, contract_id: UUID, employee_id: UUID
    ) -> Result[ContractAssignmentSchema]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session)
                    if game_session is None:
                        return game_session_not_found(game_session_id)
                    contract = await ReadData.read_contract(contract_id, session)
                    if contract is None:
                        return not_found(f"Contract {contract_id} not found")
                    employee = await ReadData.read_employee(employee_id, session)
                    if employee is None:
                        return not_found(f"Employee {employee_id} not found")
                    existing = await ReadData.read_assignment(
                        contract_id,
                        employee_id,
                        game_session.current_quarter,
                        game_session.current_week,
                        session,
                    )

                    result = session_rules.assign_employee(game_session, contract, employee, existing)
                    if isinstance(result, Err):
                        return result
                    await SaveData.save_assignment(result.value, session)

        logging.info(
            f"Employee {employee_id} assigned to contract {contract_id} "
            f"for Q{result.value.quarter_assigned} W{result.value.week_assigned}"
        )
        return result

    async def end_game(
        self, game_session_id: UUID, status: GameStatus = GameStatus.completed
    ) -> Result[GameSessionSchema]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session, for_update=True)
                    if game_session is None:
                        return game_session_not_found(game_session_id)

                    result = session_rules.end_game(game_session, status, self.clock())
                    if isinstance(result, Err):
                        return result
                    await SaveData.save_game_session(result.value, session)

        logging.info(
            f"Game {game_session_id} ended as {status.value}, final score {score_utils.total_score(result.value)}"
        )
        await self.locks.cleanup(game_session_id)
        return result

    async def pause_game(self, game_session_id: UUID) -> Result[GameSessionSchema]:
        return await self.change_status(game_session_id, session_rules.pause_game)

    async def resume_game(self, game_session_id: UUID) -> Result[GameSessionSchema]:
        return await self.change_status(game_session_id, session_rules.resume_game)

    async def change_status(
        self,
        game_session_id: UUID,
        rule: Callable[[GameSessionSchema], Result[GameSessionSchema]],
    ) -> Result[GameSessionSchema]:
        async with self.locks.hold(game_session_id):
            async with self.session_factory() as session:
                async with session.begin():
                    game_session = await ReadData.read_game_session(game_session_id, session, for_update=True)
                    if game_session is None:
                        return game_session_not_found(game_session_id)

                    result = rule(game_session)
                    if isinstance(result, Err):
                        return result
                    await SaveData.save_game_session(result.value, session)

        logging.info(f"Game {game_session_id} is now {result.value.status.value}")
        return result

    async def get_game_state(self, game_session_id: UUID) -> Result[GameState]:
        async with self.session_factory() as session:
            game_session = await ReadData.read_game_session(game_session_id, session)
            if game_session is None:
                return game_session_not_found(game_session_id)
            active_employees = await ReadData.read_employees(game_session_id, session, active_only=True)
            available_contracts = await ReadData.read_contracts(
                game_session_id, session, status=ContractStatus.available
            )
            active_contracts = await ReadData.read_contracts(
                game_session_id, session, status=ContractStatus.in_progress
            )

        return Ok(
            GameState(
                game_session=game_session,
                active_employees=active_employees,
                available_contracts=available_contracts,
                active_contracts=active_contracts,
                total_score=score_utils.total_score(game_session),
                minimum_threshold=score_utils.minimum_threshold(game_session.current_quarter),
            )
        )

    async def read_game_session(self, game_session_id: UUID) -> Result[GameSessionSchema]:
        async with self.session_factory() as session:
            game_session = await ReadData.read_game_session(game_session_id, session)
        if game_session is None:
            return game_session_not_found(game_session_id)
        return Ok(game_session)

    async def list_employees(self, game_session_id: UUID, active_only: bool = True) -> Result[List[EmployeeSchema]]:
        async with self.session_factory() as session:
            if await ReadData.read_game_session(game_session_id, session) is None:
                return game_session_not_found(game_session_id)
            return Ok(await ReadData.read_employees(game_session_id, session, active_only=active_only))

    async def list_contracts(
        self, game_session_id: UUID, status: ContractStatus | None = None
    ) -> Result[List[ContractSchema]]:
        async with self.session_factory() as session:
            if await ReadData.read_game_session(game_session_id, session) is None:
                return game_session_not_found(game_session_id)
            return Ok(await ReadData.read_contracts(game_session_id, session, status=status))


game_service = GameService(Session, RandomProvider(rng_seed))


def get_game_service() -> GameService:
    return game_service

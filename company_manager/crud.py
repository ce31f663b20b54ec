from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Iterable, List
from uuid import UUID

from company_manager.models.schema_models import (
    ContractAssignmentSchema,
    ContractSchema,
    ContractStatus,
    EmployeeSchema,
    GameSessionSchema,
)
from company_manager.models.schemas import (
    Contract,
    ContractAssignment,
    Employee,
    GameSession,
)

# Helpers here never commit: the caller owns the transaction (session.begin()).


class ReadData:
    @staticmethod
    async def read_game_session(
        game_session_id: UUID, session: AsyncSession, for_update: bool = False
    ) -> GameSessionSchema | None:
        """Read game session data from database

        Args:
            game_session_id (UUID): To identify the game session
            session (AsyncSession): AsyncSession object to interact with database
            for_update (bool): Lock the row until the surrounding transaction ends

        Returns:
            GameSessionSchema | None: Game session data, None if not found
        """
        stmt = select(GameSession).where(GameSession.game_session_id == game_session_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        result = result.scalars().first()

        if result is None:
            return None
        return GameSessionSchema.model_validate(result)

    @staticmethod
    async def read_employee(employee_id: UUID, session: AsyncSession) -> EmployeeSchema | None:
        """Read employee data from database

        Args:
            employee_id (UUID): To identify the employee

        Returns:
            EmployeeSchema | None: Employee data, None if not found
        """
        result = await session.get(Employee, employee_id)
        if result is None:
            return None
        return EmployeeSchema.model_validate(result)

    @staticmethod
    async def read_contract(contract_id: UUID, session: AsyncSession) -> ContractSchema | None:
        """Read contract data from database

        Args:
            contract_id (UUID): To identify the contract

        Returns:
            ContractSchema | None: Contract data, None if not found
        """
        result = await session.get(Contract, contract_id)
        if result is None:
            return None
        return ContractSchema.model_validate(result)

    @staticmethod
    async def read_employees(
        game_session_id: UUID, session: AsyncSession, active_only: bool = False
    ) -> List[EmployeeSchema]:
        """Read the employees of a game session in creation order"""
        stmt = select(Employee).where(Employee.game_session_id == game_session_id)
        if active_only:
            stmt = stmt.where(Employee.is_active.is_(True))
        result = await session.execute(stmt.order_by(Employee.employee_id))
        return [EmployeeSchema.model_validate(row) for row in result.scalars().all()]

    @staticmethod
    async def read_contracts(
        game_session_id: UUID, session: AsyncSession, status: ContractStatus | None = None
    ) -> List[ContractSchema]:
        """Read the contracts of a game session, optionally filtered by status"""
        stmt = select(Contract).where(Contract.game_session_id == game_session_id)
        if status is not None:
            stmt = stmt.where(Contract.status == status)
        result = await session.execute(stmt.order_by(Contract.contract_id))
        return [ContractSchema.model_validate(row) for row in result.scalars().all()]

    @staticmethod
    async def read_assignments(
        game_session_id: UUID,
        session: AsyncSession,
        quarter: int | None = None,
        week: int | None = None,
        active_only: bool = True,
    ) -> List[ContractAssignmentSchema]:
        """Read assignments of the game session's contracts

        Args:
            game_session_id (UUID): To identify the game session
            quarter (int | None): Only assignments made in this quarter
            week (int | None): Only assignments made in this week
            active_only (bool): Skip deactivated assignments

        Returns:
            List[ContractAssignmentSchema]: Matching assignments
        """
        stmt = (
            select(ContractAssignment)
            .join(ContractAssignment.contract)
            .where(Contract.game_session_id == game_session_id)
        )
        if quarter is not None:
            stmt = stmt.where(ContractAssignment.quarter_assigned == quarter)
        if week is not None:
            stmt = stmt.where(ContractAssignment.week_assigned == week)
        if active_only:
            stmt = stmt.where(ContractAssignment.is_active.is_(True))
        result = await session.execute(stmt.order_by(ContractAssignment.assignment_id))
        return [ContractAssignmentSchema.model_validate(row) for row in result.scalars().all()]

    @staticmethod
    async def read_assignment(
        contract_id: UUID,
        employee_id: UUID,
        quarter: int,
        week: int,
        session: AsyncSession,
    ) -> ContractAssignmentSchema | None:
        """Read the assignment of an employee to a contract for one week, if any"""
        stmt = select(ContractAssignment).where(
            ContractAssignment.contract_id == contract_id,
            ContractAssignment.employee_id == employee_id,
            ContractAssignment.quarter_assigned == quarter,
            ContractAssignment.week_assigned == week,
        )
        result = await session.execute(stmt)
        result = result.scalars().first()

        if result is None:
            return None
        return ContractAssignmentSchema.model_validate(result)


class SaveData:
    """Replace-on-save: every snapshot is merged by primary key."""

    @staticmethod
    async def save_game_session(game_session: GameSessionSchema, session: AsyncSession) -> None:
        data = game_session.model_dump()
        data["perks"] = [perk.value for perk in game_session.perks]
        await session.merge(GameSession(**data))

    @staticmethod
    async def save_employee(employee: EmployeeSchema, session: AsyncSession) -> None:
        await session.merge(Employee(**employee.model_dump()))

    @staticmethod
    async def save_contract(contract: ContractSchema, session: AsyncSession) -> None:
        await session.merge(Contract(**contract.model_dump()))

    @staticmethod
    async def save_assignment(assignment: ContractAssignmentSchema, session: AsyncSession) -> None:
        await session.merge(ContractAssignment(**assignment.model_dump()))

    @staticmethod
    async def save_employees(employees: Iterable[EmployeeSchema], session: AsyncSession) -> None:
        for employee in employees:
            await SaveData.save_employee(employee, session)

    @staticmethod
    async def save_contracts(contracts: Iterable[ContractSchema], session: AsyncSession) -> None:
        for contract in contracts:
            await SaveData.save_contract(contract, session)

    @staticmethod
    async def save_assignments(assignments: Iterable[ContractAssignmentSchema], session: AsyncSession) -> None:
        for assignment in assignments:
            await SaveData.save_assignment(assignment, session)

from uuid6 import uuid7

from company_manager.domain.results import Err, ErrorKind, Ok
from company_manager.domain.turn_rules import advance_calendar, process_week_turn
from company_manager.models.schema_models import (
    CompanyPerk,
    ContractAssignmentSchema,
    ContractStatus,
    GameStatus,
)
from tests.conftest import FIXED_NOW


class LowRandom:
    """Every 1-100 roll comes up 1, so every active employee quits."""

    def uniform_int(self, low, high):
        return low


def assignment_for(contract, employee, quarter=1, week=1, is_active=True):
    return ContractAssignmentSchema(
        assignment_id=uuid7(),
        contract_id=contract.contract_id,
        employee_id=employee.employee_id,
        quarter_assigned=quarter,
        week_assigned=week,
        is_active=is_active,
    )


class TestAdvanceCalendar:
    """Week and quarter counting."""

    def test_week_moves_forward(self):
        assert advance_calendar(1, 5) == (1, 6, False)

    def test_week_thirteen_rolls_the_quarter(self):
        assert advance_calendar(2, 13) == (3, 1, True)

    def test_week_stays_in_range_over_a_year(self):
        quarter, week = 1, 1
        for _ in range(52):
            previous_quarter = quarter
            quarter, week, rolled = advance_calendar(quarter, week)
            assert 1 <= week <= 13
            assert rolled == (quarter == previous_quarter + 1)
        assert (quarter, week) == (5, 1)


class TestProcessWeekTurn:
    """One week of play on in-memory snapshots."""

    def test_plain_week(self, make_game_session, make_employee, fixed_rng):
        game_session = make_game_session(current_week=5, budget=50000)
        employee = make_employee(game_session.game_session_id, salary=800)

        result = process_week_turn(game_session, [employee], [], [], fixed_rng, FIXED_NOW)

        assert isinstance(result, Ok)
        outcome = result.value
        assert outcome.game_session.current_week == 6
        assert outcome.game_session.current_quarter == 1
        assert outcome.game_session.budget == 49200
        assert outcome.salary_paid == 800
        assert outcome.quit_employees == []
        assert not outcome.quarter_ended

    def test_quarter_failure_below_threshold(self, make_game_session, fixed_rng):
        game_session = make_game_session(current_quarter=1, current_week=13, stakeholder_value=50, budget=40000)

        outcome = process_week_turn(game_session, [], [], [], fixed_rng, FIXED_NOW).value

        assert outcome.quarter_ended
        assert outcome.game_session.current_quarter == 2
        assert outcome.game_session.current_week == 1
        assert outcome.game_session.status == GameStatus.failed
        assert outcome.game_session.ended_at == FIXED_NOW
        assert outcome.new_contracts == []

    def test_threshold_is_checked_against_new_quarter(self, make_game_session, fixed_rng):
        """A score of 150 clears quarter 1 but not quarter 2, which the session is entering."""
        game_session = make_game_session(current_quarter=1, current_week=13, stakeholder_value=100, budget=50000)

        outcome = process_week_turn(game_session, [], [], [], fixed_rng, FIXED_NOW).value

        assert outcome.game_session.status == GameStatus.failed

    def test_surviving_quarter_generates_contracts(self, make_game_session, fixed_rng):
        game_session = make_game_session(current_quarter=1, current_week=13, stakeholder_value=300, budget=50000)

        outcome = process_week_turn(game_session, [], [], [], fixed_rng, FIXED_NOW).value

        assert outcome.game_session.status == GameStatus.active
        assert outcome.game_session.ended_at is None
        assert len(outcome.new_contracts) == 3
        for contract in outcome.new_contracts:
            assert contract.status == ContractStatus.available
            assert contract.game_session_id == game_session.game_session_id
            assert contract.base_reward == 5000 + 2 * 1000

    def test_quitting_employee_is_paid_for_the_week(self, make_game_session, make_employee):
        game_session = make_game_session(budget=10000)
        employee = make_employee(game_session.game_session_id, salary=900, morale=10)

        outcome = process_week_turn(game_session, [employee], [], [], LowRandom(), FIXED_NOW).value

        assert outcome.salary_paid == 900
        assert outcome.game_session.budget == 9100
        assert [e.employee_id for e in outcome.quit_employees] == [employee.employee_id]
        assert not outcome.employees[0].is_active

    def test_inactive_employees_are_not_paid(self, make_game_session, make_employee, fixed_rng):
        game_session = make_game_session(budget=10000)
        employee = make_employee(game_session.game_session_id, salary=900, is_active=False)

        outcome = process_week_turn(game_session, [employee], [], [], fixed_rng, FIXED_NOW).value

        assert outcome.salary_paid == 0
        assert outcome.game_session.budget == 10000

    def test_budget_may_go_negative(self, make_game_session, make_employee, fixed_rng):
        game_session = make_game_session(budget=500)
        employee = make_employee(game_session.game_session_id, salary=900)

        outcome = process_week_turn(game_session, [employee], [], [], fixed_rng, FIXED_NOW).value

        assert outcome.game_session.budget == -400

    def test_completed_contract_pays_reward_and_points(
        self, make_game_session, make_employee, make_contract, fixed_rng
    ):
        game_session = make_game_session(budget=20000, stakeholder_value=10)
        employee = make_employee(game_session.game_session_id, speed=40, accuracy=80, salary=1000)
        contract = make_contract(
            game_session.game_session_id, total_work_required=40, base_reward=6000, stakeholder_points=20
        )

        outcome = process_week_turn(
            game_session, [employee], [contract], [assignment_for(contract, employee)], fixed_rng, FIXED_NOW
        ).value

        assert [c.contract_id for c in outcome.completed_contracts] == [contract.contract_id]
        assert outcome.reward_earned == 9000
        assert outcome.game_session.budget == 20000 - 1000 + 9000
        assert outcome.game_session.stakeholder_value == 30

    def test_negotiator_perk_raises_paid_reward(self, make_game_session, make_employee, make_contract, fixed_rng):
        game_session = make_game_session(perks=[CompanyPerk.contract_negotiator])
        employee = make_employee(game_session.game_session_id, speed=40, accuracy=80)
        contract = make_contract(game_session.game_session_id, total_work_required=40, base_reward=6000)

        outcome = process_week_turn(
            game_session, [employee], [contract], [assignment_for(contract, employee)], fixed_rng, FIXED_NOW
        ).value

        assert outcome.completed_contracts[0].awarded_reward == 9000
        assert outcome.reward_earned == int(9000 * 1.15)

    def test_only_this_weeks_assignments_count(self, make_game_session, make_employee, make_contract, fixed_rng):
        game_session = make_game_session(current_week=4)
        employee = make_employee(game_session.game_session_id, speed=40)
        contract = make_contract(game_session.game_session_id, total_work_required=100)
        assignments = [
            assignment_for(contract, employee, week=3),
            assignment_for(contract, employee, week=4, is_active=False),
        ]

        outcome = process_week_turn(game_session, [employee], [contract], assignments, fixed_rng, FIXED_NOW).value

        assert outcome.contract_results[0].current_progress == 0
        assert outcome.contract_results[0].weeks_remaining == contract.weeks_remaining - 1

    def test_duplicate_assignment_counts_once(self, make_game_session, make_employee, make_contract, fixed_rng):
        game_session = make_game_session()
        employee = make_employee(game_session.game_session_id, speed=40)
        contract = make_contract(game_session.game_session_id, total_work_required=100)
        assignments = [assignment_for(contract, employee), assignment_for(contract, employee)]

        outcome = process_week_turn(game_session, [employee], [contract], assignments, fixed_rng, FIXED_NOW).value

        assert outcome.contract_results[0].current_progress == 40

    def test_unknown_employee_aborts_turn(self, make_game_session, make_employee, make_contract, fixed_rng):
        game_session = make_game_session()
        stranger = make_employee(game_session.game_session_id)
        contract = make_contract(game_session.game_session_id)

        result = process_week_turn(
            game_session, [], [contract], [assignment_for(contract, stranger)], fixed_rng, FIXED_NOW
        )

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.not_found

    def test_inactive_session_is_rejected(self, make_game_session, fixed_rng):
        for status in (GameStatus.paused, GameStatus.completed, GameStatus.failed):
            result = process_week_turn(make_game_session(status=status), [], [], [], fixed_rng, FIXED_NOW)
            assert isinstance(result, Err)
            assert result.kind == ErrorKind.invalid_state

    def test_morale_perk_lifts_active_employees(self, make_game_session, make_employee, fixed_rng):
        game_session = make_game_session(perks=[CompanyPerk.morale_bonus])
        employee = make_employee(game_session.game_session_id, morale=70)

        outcome = process_week_turn(game_session, [employee], [], [], fixed_rng, FIXED_NOW).value

        assert outcome.employees[0].morale == 75

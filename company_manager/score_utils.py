from company_manager.models.schema_models import GameSessionSchema

BUDGET_POINTS_DIVISOR = 1000
QUARTER_THRESHOLDS = {1: 100, 2: 200, 3: 350, 4: 500}
LATE_QUARTER_THRESHOLD_STEP = 150


class ScoreUtils:
    def total_score(self, game_session: GameSessionSchema) -> int:
        """Calculate the total score of the session

        Args:
            game_session (GameSessionSchema): Session to score

        Returns:
            int: Stakeholder value plus one point per full 1000 of budget (floored), minus error penalties
        """
        return (
            game_session.stakeholder_value
            + game_session.budget // BUDGET_POINTS_DIVISOR
            - game_session.error_penalties
        )

    def minimum_threshold(self, quarter: int) -> int:
        """Get the minimum score needed to survive the given quarter

        Args:
            quarter (int): Quarter number, starting at 1

        Returns:
            int: Score threshold
        """
        if quarter in QUARTER_THRESHOLDS:
            return QUARTER_THRESHOLDS[quarter]
        return QUARTER_THRESHOLDS[4] + (quarter - 4) * LATE_QUARTER_THRESHOLD_STEP

    def meets_threshold(self, game_session: GameSessionSchema) -> bool:
        return self.total_score(game_session) >= self.minimum_threshold(game_session.current_quarter)

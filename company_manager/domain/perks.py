from dataclasses import dataclass
from typing import Iterable

from company_manager.models.schema_models import CompanyPerk


@dataclass(frozen=True)
class PerkModifiers:
    """Session-wide adjustments; the defaults leave every rule unchanged."""

    starting_morale_bonus: int = 0
    training_cost_multiplier: float = 1.0
    weekly_morale_bonus: int = 0
    hiring_cost_multiplier: float = 1.0
    starting_budget_bonus: int = 0
    quit_chance_shift: int = 0
    reward_multiplier: float = 1.0
    speed_multiplier: float = 1.0


NEUTRAL_MODIFIERS = PerkModifiers()

PERK_EFFECTS = {
    CompanyPerk.better_onboarding: {"starting_morale_bonus": 10},
    CompanyPerk.cheaper_training: {"training_cost_multiplier": 0.75},
    CompanyPerk.morale_bonus: {"weekly_morale_bonus": 5},
    CompanyPerk.faster_hiring: {"hiring_cost_multiplier": 0.8},
    CompanyPerk.budget_boost: {"starting_budget_bonus": 5000},
    CompanyPerk.employee_loyalty: {"quit_chance_shift": -5},
    CompanyPerk.contract_negotiator: {"reward_multiplier": 1.15},
    CompanyPerk.efficiency_expert: {"speed_multiplier": 1.1},
}


def modifiers_for(perks: Iterable[CompanyPerk]) -> PerkModifiers:
    """Fold a session's perks into one set of modifiers"""
    effects = {}
    for perk in set(perks):
        effects.update(PERK_EFFECTS[perk])
    return PerkModifiers(**effects)

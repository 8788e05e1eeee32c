"""
Backroom staff: what the coaches, physios and psychologist are worth to the squad.

Coaching ratings feed seasonal growth through ``development_bonus``; the medical
team shortens layoffs (``recovery_weeks_per_matchday``) and lowers the per-match
knock risk (``injury_prevention_chance``). Any post left empty rates as a
neutral 50, so a club with no staff develops and heals at the base rate.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from models.constants import (
    NEUTRAL_STAFF_EFFECTIVENESS,
    POSITIONS_ATTACK,
    POSITIONS_DEFENCE,
    POSITIONS_MIDFIELD,
    STAFF_PRIORITY_ORDER,
    STAFF_RECOMMENDATIONS,
    STAFF_RENEWAL_RAISE,
    STAFF_RENEWAL_YEARS,
    STAFF_ROLE_SALARIES,
)
from models.staff import CoachingEffect, DevelopmentBonus, StaffMember


def _best(staff: Iterable[StaffMember], role: str) -> float:
    rated = [s.effectiveness for s in staff if s.role == role]
    return max(rated) if rated else NEUTRAL_STAFF_EFFECTIVENESS


def _mean(staff: Iterable[StaffMember], role: str) -> float:
    rated = [s.effectiveness for s in staff if s.role == role]
    return sum(rated) / len(rated) if rated else NEUTRAL_STAFF_EFFECTIVENESS


# ===================================================================
# Coaching
# ===================================================================

def coaching_effects(staff: Iterable[StaffMember]) -> CoachingEffect:
    """Each specialism is rated by its best coach on the books."""
    staff = list(staff)
    return CoachingEffect(
        attacking=_best(staff, "attacking_coach"),
        defensive=_best(staff, "defensive_coach"),
        fitness=_best(staff, "fitness_coach"),
        goalkeeping=_best(staff, "goalkeeper_coach"),
        psychology=_best(staff, "sports_psychologist"),
    )


def development_bonus(position: str, effects: CoachingEffect, age: int, potential: float) -> DevelopmentBonus:
    """Attribute growth the coaching team adds for one player in one season.

    Each term is (coach rating - 50) x a position weight, so below-average
    coaches hold players back. Under-25s get 1.5x, 25-29 1x, older players 0.5x;
    a high ceiling adds up to a further 20%.
    """
    age_mult = 1.5 if age < 25 else 1.0 if age < 30 else 0.5
    potential_mult = 1 + (potential - 70) / 30 * 0.2

    attack = effects.attacking - 50
    defence = effects.defensive - 50
    fitness = effects.fitness - 50
    attacking = defending = physical = technical = 0.0
    if position in POSITIONS_ATTACK:
        attacking = attack * 0.2
        technical = attack * 0.15
    elif position in POSITIONS_DEFENCE:
        defending = defence * 0.2
        physical = fitness * 0.1
    elif position in POSITIONS_MIDFIELD:
        attacking = attack * 0.1
        defending = defence * 0.1
        technical = attack * 0.15
    elif position == "GK":
        defending = (effects.goalkeeping - 50) * 0.25
    physical += fitness * 0.15
    mental = (effects.psychology - 50) * 0.1

    scale = age_mult * potential_mult
    return DevelopmentBonus(
        attacking=round(attacking * scale),
        defending=round(defending * scale),
        physical=round(physical * scale),
        technical=round(technical * scale),
        mental=round(mental * scale),
    )


# ===================================================================
# Medical
# ===================================================================

@dataclass
class MedicalEffect:
    injury_recovery_rate: int
    prevention_rate: int
    overall: int


def medical_effectiveness(staff: Iterable[StaffMember]) -> MedicalEffect:
    """Head physio leads; fitness coaches assist; the psychologist supports.

    Recovery weighs them 50/30/20, prevention 40/40/20.
    """
    staff = list(staff)
    physio = _best(staff, "head_physio")
    assistants = _mean(staff, "fitness_coach")
    psychologist = _best(staff, "sports_psychologist")
    recovery = round(physio * 0.5 + assistants * 0.3 + psychologist * 0.2)
    return MedicalEffect(
        injury_recovery_rate=recovery,
        prevention_rate=round(physio * 0.4 + assistants * 0.4 + psychologist * 0.2),
        overall=recovery,
    )


def recovery_weeks_per_matchday(effectiveness: float) -> int:
    """Injury weeks healed per matchday: 1 at a neutral 50, 2 from 75 up."""
    return max(1, int(1 + (effectiveness - 50) * 0.02 + 0.5))


def apply_injury_recovery(injury_weeks: int, effectiveness: float) -> int:
    return max(0, injury_weeks - recovery_weeks_per_matchday(effectiveness))


def injury_prevention_chance(base_probability: float, effectiveness: float) -> float:
    """Per-match knock probability after the medical team's prevention work.

    Every point above 50 takes 0.02 percentage points off; never below 0.
    """
    return max(0.0, base_probability - (effectiveness - 50) * 0.0002)


# ===================================================================
# Hiring and contracts
# ===================================================================

def total_staff_costs(staff: Iterable[StaffMember]) -> int:
    """Annual wage bill for the backroom team."""
    return sum(s.salary for s in staff)


def staff_recommendations(staff: Iterable[StaffMember], budget: float) -> list[dict]:
    """Unfilled posts worth hiring for, affordable within *budget*, most urgent first."""
    filled = {s.role for s in staff}
    picks = [
        {
            "role": role,
            "priority": priority,
            "estimated_cost": STAFF_ROLE_SALARIES[role],
            "expected_benefit": benefit,
        }
        for role, priority, benefit in STAFF_RECOMMENDATIONS
        if role not in filled and STAFF_ROLE_SALARIES[role] <= budget
    ]
    return sorted(picks, key=lambda r: STAFF_PRIORITY_ORDER[r["priority"]])


def renew_staff_contract(
    member: StaffMember,
    season: int,
    years: int = STAFF_RENEWAL_YEARS,
    raise_pct: float = STAFF_RENEWAL_RAISE,
) -> StaffMember:
    return replace(
        member,
        salary=round(member.salary * (1 + raise_pct)),
        contract_start_year=season,
        contract_end_year=season + years,
    )


def expiring_staff_contracts(staff: Iterable[StaffMember], season: int) -> list[StaffMember]:
    """Staff whose deal ends this season or earlier."""
    return [s for s in staff if s.contract_end_year <= season]

"""
Tactical evaluator.

Two layers:

1. **Advanced systems** (gegenpressing, tiki-taka, ...): score how well a squad's
   average attributes meet a system's requirements and rank the systems.
2. **In-match instructions** (balanced, attacking, park-the-bus, ...): shift the
   match-state scalars by an instruction's deltas, scaled by how effective the
   instruction is given the formation and the players' skills.

Everything here is pure; randomness only enters through an injected ``rng``.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Iterable

from models.player import Player
from models.ratings import squad_average
from models.tactics import (
    AdvancedTacticalSystem,
    Formation,
    GegenpressingState,
    MatchState,
    PressureZone,
    TikiTakaState,
    FORMATIONS,
    TACTICAL_SYSTEMS,
    TACTIC_ATTRIBUTES,
)
from models.constants import POSSESSION_MIN, POSSESSION_MAX
from simulation.errors import EmptySquadError, UnknownTacticError

SCORE_PER_MET_REQUIREMENT = 20
SCORE_PENALTY_PER_MISS = 15


@dataclass(frozen=True)
class InstructionImpact:
    possession_change: float = 0.0
    attacking_power_change: float = 0.0
    defensive_strength_change: float = 0.0
    injury_risk_increase: float = 0.0
    morale_cost: float = 0.0


INSTRUCTION_IMPACTS: dict[str, InstructionImpact] = {
    "balanced": InstructionImpact(0, 0, 0, 0.0, 0),
    "attacking": InstructionImpact(10, 25, -20, 0.02, -5),
    "defensive": InstructionImpact(-10, -15, 25, 0.0, 0),
    "counter_attack": InstructionImpact(-15, 20, 15, 0.03, -10),
    "possession": InstructionImpact(20, 10, -5, 0.01, 0),
    "high_press": InstructionImpact(5, 15, -10, 0.05, -15),
    "park_the_bus": InstructionImpact(-25, -30, 35, 0.0, -20),
    "long_ball": InstructionImpact(-20, 15, 10, 0.02, -5),
}

# Formation fit bonus per instruction; formations not listed get 0
FORMATION_INSTRUCTION_BONUS: dict[str, dict[str, float]] = {
    "4-3-3": {"balanced": 10, "attacking": 5, "defensive": 0, "counter_attack": 5,
              "possession": 10, "high_press": 5, "park_the_bus": -5, "long_ball": 0},
    "4-2-3-1": {"balanced": 5, "attacking": 0, "defensive": 15, "counter_attack": 10,
                "possession": 5, "high_press": 0, "park_the_bus": 10, "long_ball": 5},
    "3-5-2": {"balanced": 5, "attacking": 15, "defensive": 0, "counter_attack": 5,
              "possession": 15, "high_press": 10, "park_the_bus": -10, "long_ball": 0},
    "5-3-2": {"balanced": 0, "attacking": -10, "defensive": 20, "counter_attack": 15,
              "possession": 0, "high_press": -5, "park_the_bus": 15, "long_ball": 10},
}

INSTRUCTION_DESCRIPTIONS: dict[str, dict] = {
    "balanced": {
        "name": "Balanced",
        "description": "Equal focus on attack and defence",
        "pros": ["Stable", "Flexible", "No morale cost"],
        "cons": ["No particular advantage", "Predictable"],
    },
    "attacking": {
        "name": "Attacking",
        "description": "Commit more players forward",
        "pros": ["More goal-scoring chances"],
        "cons": ["Defensive vulnerability", "Higher injury risk"],
    },
    "defensive": {
        "name": "Defensive",
        "description": "Prioritise a compact, solid shape",
        "pros": ["Strong defence", "Compact shape"],
        "cons": ["Less possession", "Limited attacking opportunities"],
    },
    "counter_attack": {
        "name": "Counter Attack",
        "description": "Absorb pressure and break into space",
        "pros": ["Effective against strong teams", "Quick transitions"],
        "cons": ["Requires fast players", "Morale cost", "Higher injury risk"],
    },
    "possession": {
        "name": "Possession",
        "description": "Control the game through the ball",
        "pros": ["Dominates possession", "Limits opponent chances"],
        "cons": ["Requires skilled passers", "Can be slow to break down a block"],
    },
    "high_press": {
        "name": "High Press",
        "description": "Press the opponent high up the pitch",
        "pros": ["Forces turnovers", "Wins the ball near goal"],
        "cons": ["Exhausting", "Large morale cost", "Highest injury risk"],
    },
    "park_the_bus": {
        "name": "Park the Bus",
        "description": "Everyone behind the ball to protect a lead",
        "pros": ["Very hard to break down"],
        "cons": ["Gives up possession", "Almost no attacking threat", "Morale cost"],
    },
    "long_ball": {
        "name": "Long Ball",
        "description": "Bypass midfield with direct balls forward",
        "pros": ["Direct", "Works with strong forwards"],
        "cons": ["Low possession", "Inaccurate"],
    },
}


@dataclass
class Suitability:
    suitable: bool = False
    missing_attributes: list[str] = field(default_factory=list)
    score: float = 0.0

    def to_dict(self) -> dict:
        return {
            "suitable": self.suitable,
            "missing_attributes": list(self.missing_attributes),
            "score": self.score,
        }


# ===================================================================
# Advanced tactical systems
# ===================================================================

def get_tactical_system(name: str) -> AdvancedTacticalSystem:
    try:
        return TACTICAL_SYSTEMS[name]
    except KeyError:
        raise UnknownTacticError(f"Unknown tactical system {name!r}") from None


def get_formation(code: str) -> Formation:
    try:
        return replace(FORMATIONS[code])
    except KeyError:
        raise UnknownTacticError(f"Unknown formation {code!r}") from None


def squad_tactic_averages(squad: Iterable[Player]) -> dict[str, float]:
    players = list(squad)
    return {attr: squad_average(players, attr) for attr in TACTIC_ATTRIBUTES}


def suitability(squad: Iterable[Player], system: AdvancedTacticalSystem) -> Suitability:
    """Score how well *squad* meets *system*'s required average attributes.

    +20 for each requirement met, -15 for each miss, floored at 0. The squad is
    suitable only when no requirement is missed.
    """
    players = list(squad)
    if not players:
        raise EmptySquadError("Cannot evaluate a tactical system for an empty squad")
    averages = squad_tactic_averages(players)
    missing: list[str] = []
    score = 0.0
    for attr, required in system.required_attributes.items():
        avg = averages[attr]
        if avg < required:
            missing.append(f"{attr} ({round(avg)} vs {required} required)")
        else:
            score += SCORE_PER_MET_REQUIREMENT
    return Suitability(
        suitable=not missing,
        missing_attributes=missing,
        score=max(0.0, score - len(missing) * SCORE_PENALTY_PER_MISS),
    )


def recommend_tactics(squad: Iterable[Player]) -> list[tuple[AdvancedTacticalSystem, Suitability]]:
    """All known systems, best fit first. Ties keep declaration order (stable sort)."""
    players = list(squad)
    scored = [(system, suitability(players, system)) for system in TACTICAL_SYSTEMS.values()]
    return sorted(scored, key=lambda pair: -pair[1].score)


def possession_shift(squad: Iterable[Player], system: AdvancedTacticalSystem) -> float:
    """Possession points a system adds when played, scaled by squad fit."""
    fit = suitability(squad, system)
    return system.impact.possession * fit.score / 100.0


def recommend_formation(
    squad: Iterable[Player],
    play_style: str = "balanced",
    rng: random.Random | None = None,
) -> Formation:
    """Pick a formation matching *play_style* (balanced allows any style)."""
    rng = rng or random.Random()
    candidates = [FORMATIONS[c] for c in ("4-3-3", "4-2-3-1", "3-5-2", "4-1-4-1")]
    if play_style == "defensive":
        candidates = [f for f in candidates if f.style in ("defensive", "balanced")]
    elif play_style == "attacking":
        candidates = [f for f in candidates if f.style in ("attacking", "balanced")]
    return replace(rng.choice(candidates))


# ===================================================================
# In-match instructions
# ===================================================================

def instruction_impact(instruction: str) -> InstructionImpact:
    try:
        return INSTRUCTION_IMPACTS[instruction]
    except KeyError:
        raise UnknownTacticError(f"Unknown tactical instruction {instruction!r}") from None


def tactical_effectiveness(instruction: str, skills: dict[str, float], formation_code: str) -> float:
    """0-100: base 50, plus formation fit, plus a skill term for skill-driven instructions."""
    instruction_impact(instruction)
    effectiveness = 50.0
    effectiveness += FORMATION_INSTRUCTION_BONUS.get(formation_code, {}).get(instruction, 0)

    pace = skills.get("pace", 70)
    passing = skills.get("passing", 70)
    defense = skills.get("defense", 70)
    dribbling = skills.get("dribbling", 70)
    if instruction == "possession":
        effectiveness += (passing - 70) * 0.3
    elif instruction == "high_press":
        effectiveness += (pace - 70) * 0.3
    elif instruction in ("defensive", "park_the_bus"):
        effectiveness += (defense - 70) * 0.3
    elif instruction == "counter_attack":
        effectiveness += (pace - 70) * 0.2 + (dribbling - 70) * 0.2

    return max(0.0, min(100.0, effectiveness))


def apply_tactical_adjustment(
    state: MatchState,
    instruction: str,
    skills: dict[str, float],
    formation_code: str,
) -> MatchState:
    """Return a new MatchState with *instruction* applied.

    Deltas are scaled by effectiveness / 100. Possession stays in [20, 80],
    morale in [0, 100], attacking power and defensive strength at or above 0.
    Injury risk never decreases.
    """
    impact = instruction_impact(instruction)
    scale = tactical_effectiveness(instruction, skills, formation_code) / 100.0
    return MatchState(
        possession=max(POSSESSION_MIN, min(POSSESSION_MAX, state.possession + impact.possession_change * scale)),
        attacking_power=max(0.0, state.attacking_power + impact.attacking_power_change * scale),
        defensive_strength=max(0.0, state.defensive_strength + impact.defensive_strength_change * scale),
        morale=max(0.0, min(100.0, state.morale + impact.morale_cost)),
        injury_risk=state.injury_risk + max(0.0, impact.injury_risk_increase),
    )


def recommend_instructions(
    own_score: int,
    opponent_score: int,
    possession: float,
    minutes_remaining: int,
    squad_rating: float,
    opponent_rating: float,
) -> list[str]:
    """Instructions suited to the current scoreline and time left."""
    rating_difference = squad_rating - opponent_rating
    recommendations: list[str] = []

    if own_score > opponent_score:
        if minutes_remaining < 15:
            recommendations.append("park_the_bus")
        elif minutes_remaining < 30:
            recommendations.append("defensive")
        else:
            recommendations.append("balanced")
    elif own_score < opponent_score:
        if minutes_remaining < 20:
            recommendations.extend(["attacking", "high_press"])
        elif rating_difference > 5:
            recommendations.append("counter_attack")
        else:
            recommendations.append("attacking")
    else:
        if minutes_remaining < 10:
            recommendations.append("attacking")
        elif possession > 55:
            recommendations.append("possession")
        elif possession < 45:
            recommendations.append("counter_attack")
        else:
            recommendations.append("balanced")

    return recommendations or ["balanced"]


def describe_instruction(instruction: str) -> dict:
    instruction_impact(instruction)
    return dict(INSTRUCTION_DESCRIPTIONS[instruction])


# ===================================================================
# System-specific phase simulations
# ===================================================================

def initial_gegenpressing_state() -> GegenpressingState:
    return GegenpressingState(
        pressure_zones=[
            PressureZone("attacking", 95, 3, 85),
            PressureZone("midfield", 80, 4, 75),
            PressureZone("defensive", 60, 2, 65),
        ],
    )


def initial_tiki_taka_state() -> TikiTakaState:
    return TikiTakaState()


def simulate_gegenpressing(
    state: GegenpressingState,
    player_fitness: float,
    team_coordination: float,
    rng: random.Random,
) -> tuple[GegenpressingState, bool, float]:
    """One pressing phase. Returns (new state, ball recovered, fatigue increase)."""
    recovery_chance = state.ball_recovery_rate * (player_fitness / 100) * (team_coordination / 100)
    ball_recovered = rng.random() * 100 < recovery_chance
    fatigue_increase = 2 + (100 - player_fitness) * 0.02
    new_state = replace(
        state,
        pressure_zones=list(state.pressure_zones),
        fatigue_level=min(100.0, state.fatigue_level + fatigue_increase),
        player_coordination=max(50.0, state.player_coordination - fatigue_increase * 0.5),
    )
    return new_state, ball_recovered, fatigue_increase


def simulate_tiki_taka(
    state: TikiTakaState,
    player_passing: float,
    player_dribbling: float,
    opponent_pressure: float,
    rng: random.Random,
) -> tuple[TikiTakaState, float, bool]:
    """One possession phase. Returns (new state, goal chance 0-100, ball lost)."""
    pass_completion = max(70.0, state.pass_completion_rate - (opponent_pressure / 100) * 15)
    ball_lost = rng.random() * 100 < (100 - pass_completion) * 0.5
    goal_chance = state.possession_percentage * (player_passing / 100) * (player_dribbling / 100) * 0.1
    new_state = replace(
        state,
        pass_completion_rate=pass_completion,
        possession_percentage=min(85.0, state.possession_percentage + (-5 if ball_lost else 2)),
        ball_retention_time=state.ball_retention_time + (-10 if ball_lost else 5),
    )
    return new_state, min(100.0, goal_chance), ball_lost

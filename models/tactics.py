"""
Tactical DTOs: formations, advanced tactical systems, and the in-match state
scalars that tactical instructions adjust.

The catalogue of formations and advanced systems lives here as plain data so the
evaluator in simulation/tactics.py stays a set of pure functions.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

STYLES = ("defensive", "balanced", "attacking")
PRESSING_LEVELS = ("low", "medium", "high")
BUILD_UP_PLAYS = ("short", "mixed", "long")

# Five attributes a tactical system may demand; stamina is read from `physical`
TACTIC_ATTRIBUTES = ("pace", "passing", "dribbling", "defense", "stamina")


@dataclass
class Formation:
    """A named shape plus the style / pressing / build-up settings played from it."""

    code: str = "4-4-2"
    defenders: int = 4
    midfielders: int = 4
    forwards: int = 2
    style: str = "balanced"
    pressing: str = "medium"
    build_up: str = "mixed"

    def __post_init__(self) -> None:
        if self.style not in STYLES:
            raise ValueError(f"style must be one of {STYLES}, got {self.style!r}")
        if self.pressing not in PRESSING_LEVELS:
            raise ValueError(f"pressing must be one of {PRESSING_LEVELS}, got {self.pressing!r}")
        if self.build_up not in BUILD_UP_PLAYS:
            raise ValueError(f"build_up must be one of {BUILD_UP_PLAYS}, got {self.build_up!r}")
        if self.defenders + self.midfielders + self.forwards != 10:
            raise ValueError(
                f"formation {self.code} must field 10 outfield players, "
                f"got {self.defenders + self.midfielders + self.forwards}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Formation":
        return cls(**{k: data[k] for k in cls.__dataclass_fields__ if k in data})


@dataclass
class MatchImpact:
    """How an advanced system shifts the match when it is played."""

    possession: float = 0.0
    pressure_intensity: float = 50.0
    build_up_speed: float = 50.0
    defensive_vulnerability: float = 0.0
    injury_risk: float = 0.0


@dataclass
class RoleModification:
    role_name: str = ""
    position: str = ""
    attribute_boosts: dict[str, int] = field(default_factory=dict)
    attribute_penalties: dict[str, int] = field(default_factory=dict)
    stamina_drain: int = 0


@dataclass
class AdvancedTacticalSystem:
    """A named tactical philosophy with attribute requirements and match impact."""

    name: str = ""
    display_name: str = ""
    description: str = ""
    required_formations: list[str] = field(default_factory=list)
    required_attributes: dict[str, float] = field(default_factory=dict)
    impact: MatchImpact = field(default_factory=MatchImpact)
    role_modifications: dict[str, RoleModification] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.required_attributes) - set(TACTIC_ATTRIBUTES)
        if unknown:
            raise ValueError(f"unknown required attributes: {sorted(unknown)}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "required_formations": list(self.required_formations),
            "required_attributes": dict(self.required_attributes),
            "impact": {f.name: getattr(self.impact, f.name) for f in fields(self.impact)},
            "role_modifications": {
                key: {f.name: getattr(role, f.name) for f in fields(role)}
                for key, role in self.role_modifications.items()
            },
        }


@dataclass
class MatchState:
    """In-match scalars adjusted by tactical instructions."""

    possession: float = 50.0
    attacking_power: float = 50.0
    defensive_strength: float = 50.0
    morale: float = 50.0
    injury_risk: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class PressureZone:
    area: str = "midfield"  # defensive | midfield | attacking
    intensity: float = 0.0
    player_count: int = 0
    recovery_rate: float = 0.0


@dataclass
class GegenpressingState:
    pressure_zones: list[PressureZone] = field(default_factory=list)
    ball_recovery_rate: float = 78.0
    transition_speed: float = 90.0
    player_coordination: float = 75.0
    fatigue_level: float = 0.0


@dataclass
class TikiTakaState:
    possession_percentage: float = 65.0
    pass_completion_rate: float = 88.0
    average_pass_length: float = 8.0  # metres
    ball_retention_time: float = 45.0  # seconds
    player_movement: float = 85.0


# ===================================================================
# Catalogue
# ===================================================================

FORMATIONS: dict[str, Formation] = {
    "4-4-2": Formation("4-4-2", 4, 4, 2, "balanced", "medium", "mixed"),
    "4-3-3": Formation("4-3-3", 4, 3, 3, "balanced", "high", "short"),
    "4-2-3-1": Formation("4-2-3-1", 4, 5, 1, "defensive", "medium", "mixed"),
    "3-5-2": Formation("3-5-2", 3, 5, 2, "balanced", "medium", "short"),
    "4-1-4-1": Formation("4-1-4-1", 4, 5, 1, "attacking", "high", "short"),
    "5-3-2": Formation("5-3-2", 5, 3, 2, "defensive", "low", "long"),
}

GEGENPRESSING = AdvancedTacticalSystem(
    name="gegenpressing",
    display_name="Gegenpressing",
    description="Win the ball back immediately after losing it. Demands pace and stamina.",
    required_formations=["4-3-3", "4-2-3-1", "3-5-2"],
    required_attributes={"pace": 78, "passing": 75, "dribbling": 72, "defense": 76, "stamina": 85},
    impact=MatchImpact(possession=-15, pressure_intensity=95, build_up_speed=85,
                       defensive_vulnerability=25, injury_risk=0.08),
    role_modifications={
        "forward": RoleModification("Gegenpressing Forward", "ST",
                                    {"pace": 5, "defense": 8, "stamina": 10}, {"dribbling": -3}, 90),
        "midfielder": RoleModification("Gegenpressing Midfielder", "CM",
                                       {"pace": 3, "defense": 6, "stamina": 12, "passing": 4}, {}, 95),
        "defender": RoleModification("Gegenpressing Defender", "CB",
                                     {"pace": 4, "passing": 5}, {}, 85),
    },
)

TIKI_TAKA = AdvancedTacticalSystem(
    name="tiki_taka",
    display_name="Tiki-Taka",
    description="Short passing and patient circulation to dominate the ball.",
    required_formations=["4-3-3", "3-5-2", "4-1-4-1"],
    required_attributes={"pace": 72, "passing": 88, "dribbling": 82, "defense": 70, "stamina": 80},
    impact=MatchImpact(possession=25, pressure_intensity=35, build_up_speed=45,
                       defensive_vulnerability=40, injury_risk=0.02),
    role_modifications={
        "forward": RoleModification("Tiki-Taka Forward", "ST",
                                    {"passing": 8, "dribbling": 6}, {"pace": -2, "defense": -3}, 70),
        "midfielder": RoleModification("Tiki-Taka Midfielder", "CM",
                                       {"passing": 10, "dribbling": 8}, {"defense": -4}, 75),
        "defender": RoleModification("Tiki-Taka Defender", "CB", {"passing": 8}, {"pace": -3}, 65),
    },
)

FALSE_NINE = AdvancedTacticalSystem(
    name="false_nine",
    display_name="False Nine",
    description="The centre forward drops deep to pull defenders out and open space.",
    required_formations=["4-3-3", "3-5-2"],
    required_attributes={"pace": 75, "passing": 80, "dribbling": 85, "defense": 65, "stamina": 78},
    impact=MatchImpact(possession=15, pressure_intensity=50, build_up_speed=60,
                       defensive_vulnerability=35, injury_risk=0.04),
    role_modifications={
        "false_nine": RoleModification("False Nine", "ST",
                                       {"passing": 12, "dribbling": 8}, {"pace": -5, "defense": -2}, 80),
        "support": RoleModification("False Nine Support", "CM", {"pace": 4, "defense": 5}, {}, 85),
    },
)

INVERTED_FULLBACKS = AdvancedTacticalSystem(
    name="inverted_fullbacks",
    display_name="Inverted Fullbacks",
    description="Fullbacks step into midfield in possession to overload the centre.",
    required_formations=["4-3-3", "4-2-3-1"],
    required_attributes={"pace": 80, "passing": 78, "dribbling": 80, "defense": 72, "stamina": 82},
    impact=MatchImpact(possession=12, pressure_intensity=55, build_up_speed=65,
                       defensive_vulnerability=30, injury_risk=0.05),
    role_modifications={
        "fullback": RoleModification("Inverted Fullback", "LB/RB",
                                     {"dribbling": 8, "passing": 6}, {"defense": -5}, 85),
    },
)

WING_BACKS = AdvancedTacticalSystem(
    name="wing_backs",
    display_name="Wing Backs",
    description="Wide defenders push high to provide width in attack.",
    required_formations=["5-3-2", "3-5-2"],
    required_attributes={"pace": 85, "passing": 76, "dribbling": 78, "defense": 74, "stamina": 88},
    impact=MatchImpact(possession=10, pressure_intensity=60, build_up_speed=70,
                       defensive_vulnerability=20, injury_risk=0.06),
    role_modifications={
        "wingback": RoleModification("Attacking Wing Back", "LWB/RWB",
                                     {"pace": 10, "dribbling": 8, "stamina": 12}, {"defense": -3}, 95),
    },
)

# Declaration order is the recommendation tie-break
TACTICAL_SYSTEMS: dict[str, AdvancedTacticalSystem] = {
    s.name: s for s in (GEGENPRESSING, TIKI_TAKA, FALSE_NINE, INVERTED_FULLBACKS, WING_BACKS)
}

"""
Backroom staff DTOs.

StaffMember is one hired coach, physio, psychologist or scout.
CoachingEffect is the coaching team's rating per specialism (an empty post
counts as neutral), and DevelopmentBonus is what that team adds to one player's
seasonal growth.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

from models.constants import (
    STAFF_NATIONALITIES,
    STAFF_NATIONALITY_MULTIPLIERS,
    STAFF_ROLE_SALARIES,
    STAFF_ROLES,
    STAFF_SALARY_PER_EFFECTIVENESS_POINT,
    STAFF_SALARY_PER_EXPERIENCE_YEAR,
)


def staff_salary(role: str, experience: int, effectiveness: float, nationality: str) -> int:
    """Annual salary: role base plus experience and effectiveness premiums, scaled by market."""
    base = (
        STAFF_ROLE_SALARIES[role]
        + experience * STAFF_SALARY_PER_EXPERIENCE_YEAR
        + (effectiveness - 50) * STAFF_SALARY_PER_EFFECTIVENESS_POINT
    )
    return round(base * STAFF_NATIONALITY_MULTIPLIERS[nationality])


@dataclass
class StaffMember:
    id: str = ""
    name: str = ""
    role: str = "assistant_coach"
    nationality: str = "european"
    age: int = 40
    experience: int = 10  # years
    effectiveness: int = 50  # 0-100
    salary: int = 0  # annual
    contract_start_year: int = 0
    contract_end_year: int = 0
    specializations: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.role not in STAFF_ROLES:
            raise ValueError(f"role must be one of {STAFF_ROLES}, got {self.role!r}")
        if self.nationality not in STAFF_NATIONALITIES:
            raise ValueError(f"nationality must be one of {STAFF_NATIONALITIES}, got {self.nationality!r}")
        if not 0 <= self.effectiveness <= 100:
            raise ValueError(f"effectiveness must be between 0 and 100, got {self.effectiveness}")
        if self.experience < 0:
            raise ValueError(f"experience must be >= 0, got {self.experience}")

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["specializations"] = list(self.specializations)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaffMember":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class CoachingEffect:
    attacking: float = 50.0
    defensive: float = 50.0
    fitness: float = 50.0
    goalkeeping: float = 50.0
    psychology: float = 50.0

    @property
    def average(self) -> float:
        return (self.attacking + self.defensive + self.fitness + self.goalkeeping + self.psychology) / 5

    def to_dict(self) -> Dict[str, float]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["average"] = self.average
        return data


@dataclass
class DevelopmentBonus:
    attacking: int = 0
    defending: int = 0
    physical: int = 0
    technical: int = 0
    mental: int = 0

    @property
    def total(self) -> int:
        return self.attacking + self.defending + self.physical + self.technical + self.mental

    def to_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

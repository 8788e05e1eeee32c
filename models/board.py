"""
Board expectation DTOs.
Objectives are generated once at season start and only ever move forward:
progress updates can complete an objective but never un-complete it.
"""
from dataclasses import dataclass, field, fields
from typing import Dict, Any, List

from models.constants import DIFFICULTIES, OBJECTIVE_TYPES


@dataclass
class SeasonObjective:
    """A board-set target for the season."""

    id: str = ""
    type: str = "league_position"
    title: str = ""
    description: str = ""
    target: float = 1.0
    current: float = 0.0
    reward: float = 0.0
    penalty: float = 0.0
    difficulty: str = "medium"
    completed: bool = False
    progress: float = 0.0  # percent, may exceed 100

    def __post_init__(self) -> None:
        if self.type not in OBJECTIVE_TYPES:
            raise ValueError(f"objective type must be one of {OBJECTIVE_TYPES}, got {self.type!r}")
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {DIFFICULTIES}, got {self.difficulty!r}")
        if self.target <= 0:
            raise ValueError(f"target must be > 0, got {self.target}")

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeasonObjective":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class BoardExpectation:
    """The board's objectives for a season and its current view of the manager."""

    season_year: int = 0
    difficulty: str = "medium"
    objectives: List[SeasonObjective] = field(default_factory=list)
    job_security: float = 50.0
    manager_rating: float = 50.0
    board_confidence: float = 50.0
    pressure_level: float = 0.0

    def objective(self, objective_id: str) -> SeasonObjective | None:
        for obj in self.objectives:
            if obj.id == objective_id:
                return obj
        return None

    def objective_of_type(self, objective_type: str) -> SeasonObjective | None:
        for obj in self.objectives:
            if obj.type == objective_type:
                return obj
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for o in self.objectives if o.completed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season_year": self.season_year,
            "difficulty": self.difficulty,
            "objectives": [o.to_dict() for o in self.objectives],
            "job_security": self.job_security,
            "manager_rating": self.manager_rating,
            "board_confidence": self.board_confidence,
            "pressure_level": self.pressure_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardExpectation":
        return cls(
            season_year=data.get("season_year", 0),
            difficulty=data.get("difficulty", "medium"),
            objectives=[SeasonObjective.from_dict(o) for o in data.get("objectives", [])],
            job_security=data.get("job_security", 50.0),
            manager_rating=data.get("manager_rating", 50.0),
            board_confidence=data.get("board_confidence", 50.0),
            pressure_level=data.get("pressure_level", 0.0),
        )

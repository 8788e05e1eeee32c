"""
Fixture and league-table DTOs.

Fixture identity (id, clubs, matchday) is fixed when the season is scheduled;
only the result fields change, once, when the match is recorded.
"""
from dataclasses import dataclass, field, fields
from typing import Dict, Any, List


@dataclass
class Fixture:
    """One scheduled league match."""

    id: int = 0
    matchday: int = 1
    home_club_id: int = 0
    away_club_id: int = 0
    home_club_name: str = ""
    away_club_name: str = ""
    played: bool = False
    home_goals: int | None = None
    away_goals: int | None = None

    def involves(self, club_id: int) -> bool:
        return club_id in (self.home_club_id, self.away_club_id)

    def record_result(self, home_goals: int, away_goals: int) -> None:
        if self.played:
            raise ValueError(f"fixture {self.id} already has a result")
        self.home_goals = home_goals
        self.away_goals = away_goals
        self.played = True

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Fixture":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class SeasonWeek:
    week: int = 1
    fixtures: List[Fixture] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"week": self.week, "fixtures": [f.to_dict() for f in self.fixtures]}


@dataclass
class LeagueStanding:
    """One club's row in the league table."""

    club_id: int = 0
    club_name: str = ""
    position: int = 0
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["goal_difference"] = self.goal_difference
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeagueStanding":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})

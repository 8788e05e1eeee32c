"""
Match result DTOs.

MatchEvent is one minute-stamped entry on the timeline (goal, assist, card, injury).
TeamMatchStats holds one side's aggregate statistics.
MatchResult wraps the score, timeline, both stat lines, and the man of the match.
"""
from dataclasses import dataclass, field, fields
from typing import Dict, Any, List

EVENT_TYPES = ("goal", "assist", "yellow_card", "red_card", "injury", "substitution")


@dataclass
class MatchEvent:
    """A single timeline entry attributed to one player."""

    minute: int = 0
    type: str = "goal"
    player_id: int = 0
    player_name: str = ""
    club_id: int = 0
    impact: int = 0  # form impact on the player involved
    description: str = ""

    def __post_init__(self) -> None:
        if self.type not in EVENT_TYPES:
            raise ValueError(f"event type must be one of {EVENT_TYPES}, got {self.type!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchEvent":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class TeamMatchStats:
    """Aggregate statistics for one side of a match."""

    club_id: int = 0
    possession: float = 50.0
    expected_goals: float = 0.0
    shots: int = 0
    shots_on_target: int = 0
    passes: int = 0
    pass_accuracy: float = 0.0
    tackles: int = 0
    interceptions: int = 0
    fouls: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    injuries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamMatchStats":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class ManOfTheMatch:
    player_id: int = 0
    player_name: str = ""
    club_id: int = 0
    rating: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ManOfTheMatch":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class MatchResult:
    """Full result of a simulated match."""

    home_club_id: int = 0
    away_club_id: int = 0
    home_goals: int = 0
    away_goals: int = 0
    events: List[MatchEvent] = field(default_factory=list)
    home_stats: TeamMatchStats = field(default_factory=TeamMatchStats)
    away_stats: TeamMatchStats = field(default_factory=TeamMatchStats)
    man_of_the_match: ManOfTheMatch = field(default_factory=ManOfTheMatch)
    fixture_id: int | None = None
    duration: str = "ft"

    @property
    def winner_id(self) -> int | None:
        if self.home_goals > self.away_goals:
            return self.home_club_id
        if self.away_goals > self.home_goals:
            return self.away_club_id
        return None

    @property
    def is_draw(self) -> bool:
        return self.home_goals == self.away_goals

    @property
    def scoreline(self) -> str:
        return f"{self.home_goals}-{self.away_goals}"

    def outcome_for(self, club_id: int) -> str:
        """'win', 'draw' or 'loss' from *club_id*'s perspective."""
        if self.is_draw:
            return "draw"
        return "win" if self.winner_id == club_id else "loss"

    def events_for_player(self, player_id: int) -> List[MatchEvent]:
        return [e for e in self.events if e.player_id == player_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixture_id": self.fixture_id,
            "home_club_id": self.home_club_id,
            "away_club_id": self.away_club_id,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
            "events": [e.to_dict() for e in self.events],
            "home_stats": self.home_stats.to_dict(),
            "away_stats": self.away_stats.to_dict(),
            "man_of_the_match": self.man_of_the_match.to_dict(),
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        return cls(
            fixture_id=data.get("fixture_id"),
            home_club_id=data.get("home_club_id", 0),
            away_club_id=data.get("away_club_id", 0),
            home_goals=data.get("home_goals", 0),
            away_goals=data.get("away_goals", 0),
            events=[MatchEvent.from_dict(e) for e in data.get("events", [])],
            home_stats=TeamMatchStats.from_dict(data.get("home_stats") or {}),
            away_stats=TeamMatchStats.from_dict(data.get("away_stats") or {}),
            man_of_the_match=ManOfTheMatch.from_dict(data.get("man_of_the_match") or {}),
            duration=data.get("duration", "ft"),
        )

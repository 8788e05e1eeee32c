"""
Career aggregate DTOs.

CareerGameState is the single unit of persistence: every engine transition takes
one and returns a new one. It holds the managed club and squad, the rest of the
league (clubs and their squads), the season's fixtures and table, and the
derived financial and board views.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from models.board import BoardExpectation
from models.club import Club
from models.finances import ClubFinances
from models.fixture import Fixture, LeagueStanding
from models.match_result import MatchResult
from models.player import Player
from models.staff import StaffMember
from models.tactics import Formation
from models.transfer import TransferListing, TransferOffer, IncomingOffer


@dataclass
class SeasonStats:
    """The managed club's running totals for the current season."""

    year: int = 0
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    league_position: int = 0
    points_total: int = 0
    best_player_name: str = ""
    best_player_rating: float = 0.0
    top_scorer_name: str = ""
    top_scorer_goals: int = 0
    win_streak: int = 0
    current_form: int = 0  # wins in the last five
    player_goals: dict[int, int] = field(default_factory=dict)

    @property
    def win_rate(self) -> float:
        return self.wins / self.matches_played if self.matches_played else 0.0

    @property
    def points_per_game(self) -> float:
        return self.points_total / self.matches_played if self.matches_played else 0.0

    def to_dict(self) -> dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["player_goals"] = {str(k): v for k, v in self.player_goals.items()}
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeasonStats":
        kwargs = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        kwargs["player_goals"] = {int(k): v for k, v in (data.get("player_goals") or {}).items()}
        return cls(**kwargs)


@dataclass
class YouthAcademy:
    players: list[Player] = field(default_factory=list)
    facilities: int = 3  # 1-5

    def __post_init__(self) -> None:
        if not 1 <= self.facilities <= 5:
            raise ValueError(f"facilities must be between 1 and 5, got {self.facilities}")

    def to_dict(self) -> dict[str, Any]:
        return {"players": [p.to_dict() for p in self.players], "facilities": self.facilities}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YouthAcademy":
        return cls(
            players=[Player.from_dict(p) for p in data.get("players", [])],
            facilities=data.get("facilities", 3),
        )


@dataclass
class CareerGameState:
    """Root aggregate of a career save."""

    current_season: int = 2024
    current_matchday: int = 1
    club: Club = field(default_factory=Club)
    squad: list[Player] = field(default_factory=list)
    league_clubs: list[Club] = field(default_factory=list)  # every club, managed one included
    opponent_squads: dict[int, list[Player]] = field(default_factory=dict)
    fixtures: list[Fixture] = field(default_factory=list)
    league_table: list[LeagueStanding] = field(default_factory=list)
    season_stats: SeasonStats = field(default_factory=SeasonStats)
    recent_results: list[MatchResult] = field(default_factory=list)
    youth: YouthAcademy = field(default_factory=YouthAcademy)
    transfer_listings: list[TransferListing] = field(default_factory=list)
    transfer_offers: list[TransferOffer] = field(default_factory=list)
    incoming_offers: list[IncomingOffer] = field(default_factory=list)
    finances: ClubFinances = field(default_factory=ClubFinances)
    board: BoardExpectation = field(default_factory=BoardExpectation)
    formation: Formation = field(default_factory=Formation)
    tactical_system: str | None = None
    difficulty: str = "medium"
    next_player_id: int = 1
    staff: list[StaffMember] = field(default_factory=list)
    next_staff_id: int = 1

    # ===================================================================
    # Lookups
    # ===================================================================

    @property
    def club_id(self) -> int:
        return self.club.id

    @property
    def matchdays_in_season(self) -> int:
        return max((f.matchday for f in self.fixtures), default=0)

    @property
    def is_season_complete(self) -> bool:
        return bool(self.fixtures) and all(f.played for f in self.fixtures)

    @property
    def phase(self) -> str:
        """pre-season | in-season | season-end"""
        if self.is_season_complete:
            return "season-end"
        if any(f.played for f in self.fixtures):
            return "in-season"
        return "pre-season"

    def fixture(self, fixture_id: int) -> Fixture | None:
        for f in self.fixtures:
            if f.id == fixture_id:
                return f
        return None

    def club_by_id(self, club_id: int) -> Club | None:
        if club_id == self.club.id:
            return self.club
        for c in self.league_clubs:
            if c.id == club_id:
                return c
        return None

    def squad_for(self, club_id: int) -> list[Player]:
        if club_id == self.club.id:
            return self.squad
        return self.opponent_squads.get(club_id, [])

    def standing_for(self, club_id: int) -> LeagueStanding | None:
        for row in self.league_table:
            if row.club_id == club_id:
                return row
        return None

    def player(self, player_id: int) -> Player | None:
        for p in self.squad:
            if p.id == player_id:
                return p
        return None

    def staff_member(self, staff_id: str) -> StaffMember | None:
        for s in self.staff:
            if s.id == staff_id:
                return s
        return None

    # ===================================================================
    # Serialization
    # ===================================================================

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_season": self.current_season,
            "current_matchday": self.current_matchday,
            "club": self.club.to_dict(),
            "squad": [p.to_dict() for p in self.squad],
            "league_clubs": [c.to_dict() for c in self.league_clubs],
            "opponent_squads": {
                str(club_id): [p.to_dict() for p in players]
                for club_id, players in self.opponent_squads.items()
            },
            "fixtures": [f.to_dict() for f in self.fixtures],
            "league_table": [row.to_dict() for row in self.league_table],
            "season_stats": self.season_stats.to_dict(),
            "recent_results": [r.to_dict() for r in self.recent_results],
            "youth": self.youth.to_dict(),
            "transfer_listings": [t.to_dict() for t in self.transfer_listings],
            "transfer_offers": [o.to_dict() for o in self.transfer_offers],
            "incoming_offers": [o.to_dict() for o in self.incoming_offers],
            "finances": self.finances.to_dict(),
            "board": self.board.to_dict(),
            "formation": self.formation.to_dict(),
            "tactical_system": self.tactical_system,
            "difficulty": self.difficulty,
            "next_player_id": self.next_player_id,
            "staff": [s.to_dict() for s in self.staff],
            "next_staff_id": self.next_staff_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CareerGameState":
        finances = dict(data.get("finances") or {})
        finances.pop("monthly_expenses", None)
        return cls(
            current_season=data.get("current_season", 2024),
            current_matchday=data.get("current_matchday", 1),
            club=Club.from_dict(data.get("club") or {}),
            squad=[Player.from_dict(p) for p in data.get("squad", [])],
            league_clubs=[Club.from_dict(c) for c in data.get("league_clubs", [])],
            opponent_squads={
                int(club_id): [Player.from_dict(p) for p in players]
                for club_id, players in (data.get("opponent_squads") or {}).items()
            },
            fixtures=[Fixture.from_dict(f) for f in data.get("fixtures", [])],
            league_table=[LeagueStanding.from_dict(r) for r in data.get("league_table", [])],
            season_stats=SeasonStats.from_dict(data.get("season_stats") or {}),
            recent_results=[MatchResult.from_dict(r) for r in data.get("recent_results", [])],
            youth=YouthAcademy.from_dict(data.get("youth") or {}),
            transfer_listings=[TransferListing.from_dict(t) for t in data.get("transfer_listings", [])],
            transfer_offers=[TransferOffer.from_dict(o) for o in data.get("transfer_offers", [])],
            incoming_offers=[IncomingOffer.from_dict(o) for o in data.get("incoming_offers", [])],
            finances=ClubFinances.from_dict(finances),
            board=BoardExpectation.from_dict(data.get("board") or {}),
            formation=Formation.from_dict(data.get("formation") or {}),
            tactical_system=data.get("tactical_system"),
            difficulty=data.get("difficulty", "medium"),
            next_player_id=data.get("next_player_id", 1),
            staff=[StaffMember.from_dict(s) for s in data.get("staff", [])],
            next_staff_id=data.get("next_staff_id", 1),
        )

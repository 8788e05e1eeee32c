"""
Data models for the football career simulation.
Plain dataclass records with to_dict / from_dict for persistence collaborators.
"""
from .player import Player
from .manager import Manager
from .club import Club
from .finances import ClubFinances, SponsorshipDeal, RevenueProjection
from .fixture import Fixture, LeagueStanding, SeasonWeek
from .match_result import MatchEvent, TeamMatchStats, ManOfTheMatch, MatchResult
from .tactics import (
    Formation,
    AdvancedTacticalSystem,
    MatchState,
    FORMATIONS,
    TACTICAL_SYSTEMS,
)
from .board import SeasonObjective, BoardExpectation
from .transfer import TransferListing, TransferOffer, IncomingOffer
from .staff import StaffMember, CoachingEffect, DevelopmentBonus
from .career import SeasonStats, YouthAcademy, CareerGameState

__all__ = [
    "Player",
    "Manager",
    "Club",
    "ClubFinances",
    "SponsorshipDeal",
    "RevenueProjection",
    "Fixture",
    "LeagueStanding",
    "SeasonWeek",
    "MatchEvent",
    "TeamMatchStats",
    "ManOfTheMatch",
    "MatchResult",
    "Formation",
    "AdvancedTacticalSystem",
    "MatchState",
    "FORMATIONS",
    "TACTICAL_SYSTEMS",
    "SeasonObjective",
    "BoardExpectation",
    "TransferListing",
    "TransferOffer",
    "IncomingOffer",
    "StaffMember",
    "CoachingEffect",
    "DevelopmentBonus",
    "SeasonStats",
    "YouthAcademy",
    "CareerGameState",
]

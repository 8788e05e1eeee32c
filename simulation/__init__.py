"""
Simulation layer for the football career.
Match engine, tactics, player development, fixtures and standings, finances,
board expectations, backroom staff, squad analytics, the transfer market, and
the career orchestrator tying them together.
"""
from .engine import simulate_match, MatchSetup, TeamSetup
from .schedule import generate_fixtures, organize_by_week, build_season_fixtures, update_standings
from .career import (
    new_career,
    initialize_career,
    play_match,
    play_matchday,
    advance_matchday,
    end_season,
    promote_youth_player,
    hire_staff,
    release_staff,
    staff_report,
    squad_report,
    sign_player,
    refresh_transfer_offers,
    accept_incoming_offer,
    set_tactics,
    career_summary,
)
from .errors import CareerError

__all__ = [
    "simulate_match",
    "MatchSetup",
    "TeamSetup",
    "generate_fixtures",
    "organize_by_week",
    "build_season_fixtures",
    "update_standings",
    "new_career",
    "initialize_career",
    "play_match",
    "play_matchday",
    "advance_matchday",
    "end_season",
    "promote_youth_player",
    "hire_staff",
    "release_staff",
    "staff_report",
    "squad_report",
    "sign_player",
    "refresh_transfer_offers",
    "accept_incoming_offer",
    "set_tactics",
    "career_summary",
    "CareerError",
]

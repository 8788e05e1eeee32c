"""
Procedural generation of clubs, squads, youth intakes and players.
"""
from .generate import (
    generate_league,
    generate_club,
    generate_squad,
    generate_staff,
    generate_youth_intake,
    make_player,
    make_staff_member,
)

__all__ = [
    "generate_league",
    "generate_club",
    "generate_squad",
    "generate_staff",
    "generate_youth_intake",
    "make_player",
    "make_staff_member",
]

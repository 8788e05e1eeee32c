"""
Rating calculations: position-specific overall rating, and team strength as a
position-weighted, form-scaled mean of squad ratings.
Single source of truth for turning attributes and squads into scalar strength.
"""
from typing import Iterable

from .constants import (
    POSITION_STAT_WEIGHTS,
    POSITION_STRENGTH_WEIGHTS,
    NEUTRAL_TEAM_STRENGTH,
    ATTRIBUTE_MIN,
    ATTRIBUTE_MAX,
)
from .player import Player


def _attr_value(value: float | None, default: float = 50.0) -> float:
    return min(float(ATTRIBUTE_MAX), max(float(ATTRIBUTE_MIN), float(value) if value is not None else default))


def compute_overall(player_attrs: dict, position: str) -> float:
    """Weighted sum of the six core attributes for a position. Returns 0-99 (unrounded)."""
    weights = POSITION_STAT_WEIGHTS.get(position, {})
    if not weights:
        values = [_attr_value(v) for v in player_attrs.values()]
        return sum(values) / len(values) if values else 0.0
    total = 0.0
    for attr, w in weights.items():
        total += w * _attr_value(player_attrs.get(attr))
    return min(float(ATTRIBUTE_MAX), max(float(ATTRIBUTE_MIN), total))


def form_multiplier(form: float) -> float:
    """0.5 at zero form, 1.0 at full form."""
    return 0.5 + 0.5 * (max(0.0, min(100.0, form)) / 100.0)


def team_strength(squad: Iterable[Player]) -> float:
    """Position-weighted mean of overall ratings, each scaled by the player's form.

    strength = sum(rating * position_weight * form_multiplier) / sum(position_weight)

    Every coefficient on a rating is positive, so strength never drops when a
    single player's rating rises. An empty squad returns NEUTRAL_TEAM_STRENGTH.
    """
    weighted = 0.0
    weight_total = 0.0
    for player in squad:
        w = POSITION_STRENGTH_WEIGHTS.get(player.position, 1.0)
        weighted += player.overall_rating * w * form_multiplier(player.form)
        weight_total += w
    if weight_total <= 0:
        return NEUTRAL_TEAM_STRENGTH
    return weighted / weight_total


def average_rating(players: Iterable[Player], default: float = NEUTRAL_TEAM_STRENGTH) -> float:
    """Plain mean overall rating (used by the match engine's possession split)."""
    ratings = [p.overall_rating for p in players]
    return sum(ratings) / len(ratings) if ratings else default


def squad_average(players: Iterable[Player], attr: str) -> float:
    """Mean of one attribute across players; 'stamina' reads the physical attribute."""
    key = "physical" if attr == "stamina" else attr
    values = [getattr(p, key) for p in players]
    return sum(values) / len(values) if values else 0.0


def performance_multiplier(overall_rating: float, form: float, morale: float) -> float:
    """Rating scaled by form (+-20%) and morale (+-10%)."""
    form_effect = (form - 50) / 250
    morale_effect = (morale - 50) / 500
    return (overall_rating / 100) * (1 + form_effect + morale_effect)

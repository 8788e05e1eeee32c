"""
Player development and morale model.

Three cadences:

- **per match** (``apply_match_outcome``): form follows the player's own events,
  morale follows the result, and injuries come from both the match timeline and
  a separate per-player knock roll.
- **per matchday** (``advance_matchday_players``): injuries heal (a week, or
  faster with a good medical team) and form decays.
- **per season** (``develop_for_new_season``, ``resolve_contract``,
  ``age_academy``): aging, growth toward potential (plus any coaching bonus)
  or decline, contract expiry, and academy release.

Every function returns new Player records; inputs are never mutated.
Ratings stay floats here and are only rounded for display.
"""
from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable

from models.constants import (
    FORM_IMPACT_SCALE,
    MORALE_WIN,
    MORALE_DRAW,
    MORALE_LOSS,
    MATCH_INJURY_PROBABILITY,
    INJURY_WEEKS_RANGE,
    WEEKLY_FORM_DECAY,
    YOUNG_PLAYER_AGE,
    PRIME_PLAYER_AGE,
    DECLINE_AGE,
    YOUNG_GROWTH_RANGE,
    PRIME_GROWTH_RANGE,
    DECLINE_RANGE,
    RATING_FLOOR,
    CONTRACT_DEPARTURE_PROBABILITY,
    CONTRACT_EXTENSION_YEARS,
    YOUTH_RELEASE_AGE,
    POSITIONS_DEFENCE,
    POSITIONS_MIDFIELD,
    POSITIONS_ATTACK,
    LINEUP_SIZE,
    YOUTH_DEVELOPMENT_AGE,
    YOUTH_DEVELOPMENT_RATING,
    YOUTH_PROMOTION_AGE,
    COACHING_GROWTH_PER_BONUS_POINT,
    YOUTH_PROMOTION_POTENTIAL,
)
from models.match_result import MatchEvent, MatchResult
from models.player import Player
from models.staff import CoachingEffect
from models.tactics import Formation
from simulation.errors import EmptySquadError
from simulation.staff import development_bonus


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# ===================================================================
# Per match
# ===================================================================

def _morale_delta(result: MatchResult, is_home: bool) -> int:
    own, other = (result.home_goals, result.away_goals) if is_home else (result.away_goals, result.home_goals)
    if own > other:
        return MORALE_WIN
    if own < other:
        return MORALE_LOSS
    return MORALE_DRAW


def apply_match_outcome(
    player: Player,
    events: Iterable[MatchEvent],
    result: MatchResult,
    is_home: bool,
    rng: random.Random,
    injury_probability: float = MATCH_INJURY_PROBABILITY,
) -> Player:
    """Return *player* after one match.

    Form moves by FORM_IMPACT_SCALE x the summed impact of the player's own
    events. Morale moves +10 / -5 / -15 for a win / draw / loss. An injury event
    on the timeline and the independent knock roll (2% unless the medical team
    says otherwise) each set a 1-4 week layoff; the longer layoff wins when
    both happen.
    """
    own_events = [e for e in events if e.player_id == player.id and e.club_id == player.club_id]
    impact = sum(e.impact for e in own_events)
    form = _clamp(player.form + impact * FORM_IMPACT_SCALE, 0, 100)
    morale = _clamp(player.morale + _morale_delta(result, is_home), 0, 100)

    injury_weeks = player.injury_weeks
    if any(e.type == "injury" for e in own_events):
        injury_weeks = max(injury_weeks, rng.randint(*INJURY_WEEKS_RANGE))
    if rng.random() < injury_probability:
        injury_weeks = max(injury_weeks, rng.randint(*INJURY_WEEKS_RANGE))

    return replace(player, form=form, morale=morale, injury_weeks=injury_weeks)


def apply_match_to_squad(
    squad: Iterable[Player],
    result: MatchResult,
    is_home: bool,
    rng: random.Random,
    injury_probability: float = MATCH_INJURY_PROBABILITY,
) -> list[Player]:
    """apply_match_outcome for every player in the squad, in squad order."""
    return [apply_match_outcome(p, result.events, result, is_home, rng, injury_probability) for p in squad]


# ===================================================================
# Per matchday
# ===================================================================

def advance_matchday_players(squad: Iterable[Player], recovery_weeks: int = 1) -> list[Player]:
    """Heal *recovery_weeks* of injury and decay form, both floored at 0."""
    out: list[Player] = []
    for p in squad:
        out.append(replace(
            p,
            injury_weeks=max(0, p.injury_weeks - recovery_weeks),
            form=max(0.0, p.form - WEEKLY_FORM_DECAY),
        ))
    return out


# ===================================================================
# Per season
# ===================================================================

def develop_for_new_season(
    player: Player,
    rng: random.Random,
    coaching: CoachingEffect | None = None,
) -> Player:
    """Age the player one year, then grow toward potential or decline.

    Bands use the new age: under 25 gains 1-3, 25-29 gains 0-1 (both capped at
    potential), over 32 loses 0-2 with a floor of 40. Potential never drops.
    With *coaching*, growing players also gain 0.1 per point of their
    coaching bonus, still capped at potential and never below where they were.
    """
    age = player.age + 1
    rating = player.overall_rating
    if age < PRIME_PLAYER_AGE:
        growth = rng.randint(*(YOUNG_GROWTH_RANGE if age < YOUNG_PLAYER_AGE else PRIME_GROWTH_RANGE))
        if coaching is not None:
            bonus = development_bonus(player.position, coaching, age, player.potential)
            growth += bonus.total * COACHING_GROWTH_PER_BONUS_POINT
        rating = max(rating, min(player.potential, rating + growth))
    elif age > DECLINE_AGE:
        rating = max(min(rating, RATING_FLOOR), rating - rng.randint(*DECLINE_RANGE))
    return replace(player, age=age, overall_rating=rating, potential=max(player.potential, rating))


def resolve_contract(player: Player, season: int, rng: random.Random) -> Player | None:
    """Expiring contract (end year <= season): 50% the player leaves (None), else runs to season + 3."""
    if player.contract_end_year > season:
        return player
    if rng.random() < CONTRACT_DEPARTURE_PROBABILITY:
        return None
    return replace(player, contract_end_year=season + CONTRACT_EXTENSION_YEARS)


def age_squad(
    squad: Iterable[Player],
    season: int,
    rng: random.Random,
    coaching: CoachingEffect | None = None,
) -> tuple[list[Player], list[Player]]:
    """Develop every player and resolve expiring contracts. Returns (kept, departed)."""
    kept: list[Player] = []
    departed: list[Player] = []
    for p in squad:
        developed = develop_for_new_season(p, rng, coaching)
        resolved = resolve_contract(developed, season, rng)
        if resolved is None:
            departed.append(developed)
        else:
            kept.append(resolved)
    return kept, departed


def age_academy(
    youth: Iterable[Player],
    season: int,
    rng: random.Random,
    coaching: CoachingEffect | None = None,
) -> tuple[list[Player], list[Player]]:
    """Age the academy like the senior squad, then release anyone who reached YOUTH_RELEASE_AGE unpromoted."""
    kept, released = age_squad(youth, season, rng, coaching)
    released.extend(p for p in kept if p.age >= YOUTH_RELEASE_AGE)
    return [p for p in kept if p.age < YOUTH_RELEASE_AGE], released


# ===================================================================
# Squad helpers
# ===================================================================

def select_lineup(squad: Iterable[Player], formation: Formation) -> list[Player]:
    """Best available XI for *formation*: one keeper, then each line by rating.

    Lines the squad cannot fill are topped up with the best remaining players.
    Raises EmptySquadError when nobody is available.
    """
    available = sorted((p for p in squad if p.is_available), key=lambda p: -p.overall_rating)
    if not available:
        raise EmptySquadError("No available players to pick a lineup from")

    chosen: list[Player] = []
    chosen_ids: set[int] = set()

    def _take(positions: Iterable[str] | None, count: int) -> None:
        for p in available:
            if count <= 0:
                return
            if id(p) in chosen_ids:
                continue
            if positions is not None and p.position not in positions:
                continue
            chosen.append(p)
            chosen_ids.add(id(p))
            count -= 1

    _take(("GK",), 1)
    _take(POSITIONS_DEFENCE, formation.defenders)
    _take(POSITIONS_MIDFIELD, formation.midfielders)
    _take(POSITIONS_ATTACK, formation.forwards)
    _take(None, LINEUP_SIZE - len(chosen))
    return chosen


def estimate_transfer_value(
    age: int,
    overall_rating: float,
    potential: float,
    contract_years_remaining: int,
) -> int:
    """Market value rounded to the nearest 100k, never below 100k."""
    value = overall_rating * overall_rating * 1000
    if age < 23:
        value *= 1.2 * (potential / overall_rating if overall_rating > 0 else 1.0)
    elif age > 32:
        value *= 0.5
    elif age > 30:
        value *= 0.7
    if contract_years_remaining < 1:
        value *= 0.5
    elif contract_years_remaining < 2:
        value *= 0.75
    return max(100_000, int(round(value / 100_000)) * 100_000)


def development_status(player: Player) -> str:
    """Coarse label for where the player sits on their career curve."""
    if player.age > DECLINE_AGE:
        return "declining"
    if player.potential - player.overall_rating < 1:
        return "peaked"
    if player.age < YOUNG_PLAYER_AGE:
        return "developing"
    return "established"


def count_developed_youngsters(squad: Iterable[Player]) -> int:
    """Players under 23 rated 80 or more (board development objective)."""
    return sum(
        1 for p in squad
        if p.age < YOUTH_DEVELOPMENT_AGE and p.overall_rating >= YOUTH_DEVELOPMENT_RATING
    )


def identify_youth_promotion_candidates(youth: Iterable[Player]) -> list[Player]:
    """Academy players ready for the first team, highest potential first."""
    ready = [
        p for p in youth
        if p.age >= YOUTH_PROMOTION_AGE or p.potential >= YOUTH_PROMOTION_POTENTIAL
    ]
    return sorted(ready, key=lambda p: (-p.potential, p.id))

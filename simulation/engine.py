"""
Match simulation engine.

Turns two lineups into a final score, a minute-stamped event timeline, per-team
statistics and a man of the match.  Key design goals:

1. **Rating-driven**: possession comes from relative mean rating (plus home
   advantage and formation style); expected goals come from the shooting of the
   forwards and midfielders, scaled by possession share.
2. **Internally consistent**: card and injury counts in the team statistics are
   counted from the event timeline, and shots on target never fall below goals.
3. **Deterministic under a seed**: every random draw goes through the injected
   ``random.Random`` so the same seed and setup reproduce the same match.

The lineups may share players (a caller standing in for missing opponent data);
events are attributed by lineup slot, never by looking a player up by id.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

from models.constants import (
    HOME_ADVANTAGE,
    NEUTRAL_VENUE,
    POSSESSION_MIN,
    POSSESSION_MAX,
    STYLE_POSSESSION_SKEW,
    FORWARD_XG_FACTOR,
    MIDFIELD_XG_FACTOR,
    STYLE_XG_MULTIPLIERS,
    BONUS_GOAL_PROBABILITY,
    GOAL_MINUTE_RANGE,
    EVENT_MINUTE_RANGE,
    YELLOW_CARD_RANGE,
    RED_CARD_PROBABILITY,
    INJURY_EVENT_PROBABILITY,
    MOTM_RATING_RANGE,
    EVENT_IMPACTS,
    XG_FORWARD_POSITIONS,
    XG_MIDFIELD_POSITIONS,
    POINTS_WIN,
    POINTS_DRAW,
)
from models.match_result import MatchEvent, TeamMatchStats, ManOfTheMatch, MatchResult
from models.player import Player
from models.ratings import average_rating
from models.tactics import AdvancedTacticalSystem, Formation
from simulation.errors import EmptySquadError
from simulation.tactics import possession_shift


@dataclass
class TeamSetup:
    """One side of a match: who plays, in what shape, with which system."""

    club_id: int
    lineup: list[Player]
    formation: Formation
    tactical_system: AdvancedTacticalSystem | None = None
    club_name: str = ""


@dataclass
class MatchSetup:
    home: TeamSetup
    away: TeamSetup
    neutral_venue: bool = False
    home_advantage: float = HOME_ADVANTAGE
    fixture_id: int | None = None


# ===================================================================
# Helper utilities
# ===================================================================

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _style_skew(style: str) -> float:
    if style == "attacking":
        return STYLE_POSSESSION_SKEW
    if style == "defensive":
        return -STYLE_POSSESSION_SKEW
    return 0.0


# ===================================================================
# Possession and expected goals
# ===================================================================

def compute_possession(setup: MatchSetup) -> tuple[float, float]:
    """(home %, away %) from relative mean rating, style skew and tactical systems."""
    venue = NEUTRAL_VENUE if setup.neutral_venue else setup.home_advantage
    home_strength = average_rating(setup.home.lineup) * venue
    away_strength = average_rating(setup.away.lineup)
    total = home_strength + away_strength
    home = home_strength / total * 100 if total > 0 else 50.0

    # An attacking away side takes possession from the home side
    home += _style_skew(setup.home.formation.style)
    home -= _style_skew(setup.away.formation.style)

    if setup.home.tactical_system is not None:
        home += possession_shift(setup.home.lineup, setup.home.tactical_system)
    if setup.away.tactical_system is not None:
        home -= possession_shift(setup.away.lineup, setup.away.tactical_system)

    home = _clamp(home, POSSESSION_MIN, POSSESSION_MAX)
    return home, 100.0 - home


def expected_goals(lineup: Iterable[Player], possession: float, style: str) -> float:
    """Sum of shooting-driven chances from forwards and midfielders, rounded to 2 dp."""
    share = possession / 50.0
    xg = 0.0
    for player in lineup:
        if player.position in XG_FORWARD_POSITIONS:
            xg += player.shooting / 100 * FORWARD_XG_FACTOR * share
        elif player.position in XG_MIDFIELD_POSITIONS:
            xg += player.shooting / 100 * MIDFIELD_XG_FACTOR * share
    xg *= STYLE_XG_MULTIPLIERS.get(style, 1.0)
    return round(xg, 2)


# ===================================================================
# Timeline
# ===================================================================

def _goal_events(
    side: TeamSetup,
    goals: int,
    rng: random.Random,
) -> list[MatchEvent]:
    events: list[MatchEvent] = []
    lo, hi = GOAL_MINUTE_RANGE
    for _ in range(goals):
        minute = rng.randint(lo, hi)
        scorer = rng.choice(side.lineup)
        events.append(MatchEvent(
            minute=minute,
            type="goal",
            player_id=scorer.id,
            player_name=scorer.name,
            club_id=side.club_id,
            impact=EVENT_IMPACTS["goal"],
            description=f"Goal! {scorer.name} scores",
        ))
        assister = rng.choice(side.lineup)
        if assister.id != scorer.id:
            events.append(MatchEvent(
                minute=minute,
                type="assist",
                player_id=assister.id,
                player_name=assister.name,
                club_id=side.club_id,
                impact=EVENT_IMPACTS["assist"],
                description=f"Assisted by {assister.name}",
            ))
    return events


def _discipline_events(
    pool: list[tuple[int, Player]],
    home_count: int,
    rng: random.Random,
) -> list[tuple[MatchEvent, int]]:
    """Yellow cards, an occasional red, and an occasional injury from either side.

    Returns (event, side) pairs; side is 0 for the first *home_count* pool slots.
    """
    events: list[tuple[MatchEvent, int]] = []
    lo, hi = EVENT_MINUTE_RANGE

    def _event(kind: str, text: str) -> tuple[MatchEvent, int]:
        index = rng.randrange(len(pool))
        club_id, player = pool[index]
        event = MatchEvent(
            minute=rng.randint(lo, hi),
            type=kind,
            player_id=player.id,
            player_name=player.name,
            club_id=club_id,
            impact=EVENT_IMPACTS[kind],
            description=f"{text}: {player.name}",
        )
        return event, 0 if index < home_count else 1

    for _ in range(rng.randint(*YELLOW_CARD_RANGE)):
        events.append(_event("yellow_card", "Yellow card"))
    if rng.random() < RED_CARD_PROBABILITY:
        events.append(_event("red_card", "Red card"))
    if rng.random() < INJURY_EVENT_PROBABILITY:
        events.append(_event("injury", "Injury"))
    return events


# ===================================================================
# Statistics
# ===================================================================

def _team_stats(
    club_id: int,
    xg: float,
    goals: int,
    possession: float,
    events: list[MatchEvent],
    side_index: int,
    event_sides: list[int],
    rng: random.Random,
) -> TeamMatchStats:
    own = [e for e, s in zip(events, event_sides) if s == side_index]
    yellows = sum(1 for e in own if e.type == "yellow_card")
    reds = sum(1 for e in own if e.type == "red_card")
    injuries = sum(1 for e in own if e.type == "injury")

    on_target = max(goals, _round_half_up(xg * 1.5 + rng.random() * 2))
    shots = max(on_target, _round_half_up(xg * 2.5 + rng.random() * 4))
    passes = _round_half_up(possession / 100 * 600 + rng.random() * 100)
    pass_accuracy = round(75 + rng.random() * 15, 1)
    tackles = 15 + rng.randint(0, 7)
    interceptions = 5 + rng.randint(0, 5)
    fouls = max(yellows + reds, 8 + rng.randint(0, 5))

    return TeamMatchStats(
        club_id=club_id,
        possession=round(possession, 1),
        expected_goals=xg,
        shots=shots,
        shots_on_target=on_target,
        passes=passes,
        pass_accuracy=pass_accuracy,
        tackles=tackles,
        interceptions=interceptions,
        fouls=fouls,
        yellow_cards=yellows,
        red_cards=reds,
        injuries=injuries,
    )


# ===================================================================
# Public API
# ===================================================================

def simulate_match(
    setup: MatchSetup,
    rng: random.Random | None = None,
    *,
    seed: int | None = None,
) -> MatchResult:
    """Simulate a single match.

    Parameters
    ----------
    setup : MatchSetup
        Both sides' lineups, formations and optional tactical systems.
    rng : random.Random | None
        Random source. Takes precedence over ``seed``.
    seed : int | None
        Seed for a fresh ``random.Random`` when no ``rng`` is given.

    Returns
    -------
    MatchResult
        Score, sorted event timeline, both stat lines and the man of the match.

    Raises
    ------
    EmptySquadError
        If either lineup is empty.
    """
    if not setup.home.lineup:
        raise EmptySquadError(f"Home lineup for club {setup.home.club_id} is empty")
    if not setup.away.lineup:
        raise EmptySquadError(f"Away lineup for club {setup.away.club_id} is empty")
    rng = rng if rng is not None else random.Random(seed)

    # 1. Possession
    home_poss, away_poss = compute_possession(setup)

    # 2. Expected goals
    home_xg = expected_goals(setup.home.lineup, home_poss, setup.home.formation.style)
    away_xg = expected_goals(setup.away.lineup, away_poss, setup.away.formation.style)

    # 3. Score: rounded xG plus one coin-flip bonus goal per side
    home_goals = _round_half_up(home_xg) + (1 if rng.random() < BONUS_GOAL_PROBABILITY else 0)
    away_goals = _round_half_up(away_xg) + (1 if rng.random() < BONUS_GOAL_PROBABILITY else 0)

    # 4-5. Timeline; each event remembers which side (0 home, 1 away) it belongs to
    tagged: list[tuple[MatchEvent, int]] = []
    tagged += [(e, 0) for e in _goal_events(setup.home, home_goals, rng)]
    tagged += [(e, 1) for e in _goal_events(setup.away, away_goals, rng)]
    pool = [(setup.home.club_id, p) for p in setup.home.lineup]
    home_count = len(pool)
    pool += [(setup.away.club_id, p) for p in setup.away.lineup]
    tagged += _discipline_events(pool, home_count, rng)

    # 6. Stable sort by minute
    tagged.sort(key=lambda pair: pair[0].minute)
    events = [e for e, _ in tagged]
    sides = [s for _, s in tagged]

    # 7. Man of the match: uniform pick, not performance-weighted
    motm_club, motm_player = rng.choice(pool)
    motm = ManOfTheMatch(
        player_id=motm_player.id,
        player_name=motm_player.name,
        club_id=motm_club,
        rating=round(rng.uniform(*MOTM_RATING_RANGE), 1),
    )

    # 8. Statistics
    home_stats = _team_stats(setup.home.club_id, home_xg, home_goals, home_poss, events, 0, sides, rng)
    away_stats = _team_stats(setup.away.club_id, away_xg, away_goals, away_poss, events, 1, sides, rng)

    return MatchResult(
        fixture_id=setup.fixture_id,
        home_club_id=setup.home.club_id,
        away_club_id=setup.away.club_id,
        home_goals=home_goals,
        away_goals=away_goals,
        events=events,
        home_stats=home_stats,
        away_stats=away_stats,
        man_of_the_match=motm,
    )


def points_awarded(result: MatchResult) -> tuple[int, int]:
    """(home points, away points)."""
    if result.home_goals > result.away_goals:
        return POINTS_WIN, 0
    if result.home_goals < result.away_goals:
        return 0, POINTS_WIN
    return POINTS_DRAW, POINTS_DRAW


def morale_impact(
    is_home: bool,
    own_goals: int,
    opponent_goals: int,
    own_rating: float,
    opponent_rating: float,
) -> int:
    """Squad-level morale swing for a result, with upset and home-win adjustments (-30..30)."""
    if own_goals > opponent_goals:
        impact = 15
    elif own_goals == opponent_goals:
        impact = 5
    else:
        impact = -15

    rating_difference = own_rating - opponent_rating
    if own_goals > opponent_goals and rating_difference < -5:
        impact += 10
    elif own_goals < opponent_goals and rating_difference > 5:
        impact -= 15

    if is_home and own_goals > opponent_goals:
        impact += 5
    return int(_clamp(impact, -30, 30))


def match_report(result: MatchResult, home_name: str = "Home", away_name: str = "Away") -> list[str]:
    """Plain-text report lines: scoreline, timeline, key stats, man of the match."""
    names = {result.home_club_id: home_name, result.away_club_id: away_name}
    lines = [f"{home_name} {result.home_goals} - {result.away_goals} {away_name}"]
    for event in result.events:
        lines.append(f"{event.minute:>3}' {names.get(event.club_id, '')}: {event.description}")
    h, a = result.home_stats, result.away_stats
    lines.append(f"Possession {h.possession:.0f}% - {a.possession:.0f}%")
    lines.append(f"Shots {h.shots} ({h.shots_on_target}) - {a.shots} ({a.shots_on_target})")
    lines.append(f"xG {h.expected_goals:.2f} - {a.expected_goals:.2f}")
    motm = result.man_of_the_match
    lines.append(f"Man of the match: {motm.player_name} ({motm.rating:.1f})")
    return lines

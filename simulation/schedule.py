"""
Season scheduling and the league table.

Two fixture generators are provided:

- ``generate_fixtures`` lists every ordered pair once (pair by pair, home leg
  first) and ``organize_by_week`` cuts that list into contiguous weekly chunks.
  Simple and order-preserving, but a club may appear twice in one chunk.
- ``generate_round_robin`` uses the circle method so every club plays exactly
  once per week across 2(n-1) weeks.  The career uses this one.

``update_standings`` applies one result and re-sorts the whole table.
"""
from __future__ import annotations

import math
import random
from collections import deque
from dataclasses import replace
from typing import Iterable, Iterator, Sequence

from models.club import Club
from models.constants import POINTS_WIN, POINTS_DRAW
from models.fixture import Fixture, LeagueStanding, SeasonWeek
from simulation.errors import UnknownClubError


def _club_refs(club_count: int, clubs: Sequence | None) -> list[tuple[int, str]]:
    if clubs is None:
        return [(i + 1, f"Team {i + 1}") for i in range(club_count)]
    refs: list[tuple[int, str]] = []
    for c in clubs[:club_count]:
        if isinstance(c, Club):
            refs.append((c.id, c.name))
        else:
            club_id, name = c
            refs.append((club_id, name))
    return refs


def generate_fixtures(club_count: int, clubs: Sequence | None = None) -> list[Fixture]:
    """Every ordered pair of clubs once: n(n-1) fixtures with ids 1..n(n-1).

    Parameters
    ----------
    club_count : int
        Number of clubs in the league.
    clubs : sequence of Club or (id, name), optional
        Defaults to ids 1..n named "Team i".

    Returns
    -------
    list[Fixture]
        Each pair's home leg directly followed by its return leg.  Matchdays
        follow the contiguous 2(n-1)-week split used by ``organize_by_week``.
    """
    refs = _club_refs(club_count, clubs)
    n = len(refs)
    if n < 2:
        return []
    weeks = 2 * (n - 1)
    per_week = math.ceil(n * (n - 1) / weeks)

    fixtures: list[Fixture] = []
    for i in range(n):
        for j in range(i + 1, n):
            for (home_id, home_name), (away_id, away_name) in ((refs[i], refs[j]), (refs[j], refs[i])):
                fixture_id = len(fixtures) + 1
                fixtures.append(Fixture(
                    id=fixture_id,
                    matchday=(fixture_id - 1) // per_week + 1,
                    home_club_id=home_id,
                    away_club_id=away_id,
                    home_club_name=home_name,
                    away_club_name=away_name,
                ))
    return fixtures


def organize_by_week(fixtures: Sequence[Fixture], week_count: int) -> list[SeasonWeek]:
    """Split *fixtures* into *week_count* contiguous chunks of ceil(len / weeks).

    Order is preserved, so concatenating the weeks gives back the input list.
    Trailing weeks may be empty when the division is uneven.
    """
    if week_count <= 0:
        raise ValueError(f"week_count must be > 0, got {week_count}")
    per_week = math.ceil(len(fixtures) / week_count) if fixtures else 0
    weeks: list[SeasonWeek] = []
    for week in range(1, week_count + 1):
        start = (week - 1) * per_week
        weeks.append(SeasonWeek(week=week, fixtures=list(fixtures[start:start + per_week])))
    return weeks


def _circle_rounds(slots: list) -> Iterator[list[tuple]]:
    """Yield len(slots) - 1 rounds of pairings for an even number of slots.

    Slot 0 stays put while the rest turn one place per round; the first half of
    the line-up meets the second half mirrored. Venues flip on alternate rounds
    and alternate boards.
    """
    anchor, ring = slots[0], deque(slots[1:])
    for round_idx in range(len(slots) - 1):
        line = [anchor, *ring]
        half = len(line) // 2
        boards = zip(line[:half], reversed(line[half:]))
        yield [(b, a) if (round_idx + i) % 2 else (a, b) for i, (a, b) in enumerate(boards)]
        ring.rotate(1)


def generate_round_robin(
    club_ids: list[int],
    rng: random.Random | None = None,
) -> list[tuple[int, int, int]]:
    """Double round robin as (week, home_club_id, away_club_id), every club once per week.

    An odd club count gets a bye each week. With *rng* the starting order is
    shuffled. The return legs follow the first half with venues swapped.
    """
    if len(club_ids) < 2:
        return []
    slots: list[int | None] = list(club_ids)
    if rng is not None:
        rng.shuffle(slots)
    if len(slots) % 2:
        slots.append(None)

    first_legs = [
        (week, home, away)
        for week, pairs in enumerate(_circle_rounds(slots), start=1)
        for home, away in pairs
        if home is not None and away is not None
    ]
    rounds = len(slots) - 1
    return first_legs + [(week + rounds, away, home) for week, home, away in first_legs]


def build_season_fixtures(clubs: Sequence[Club], rng: random.Random | None = None) -> list[Fixture]:
    """Circle-method fixtures for *clubs* with stable ids 1..n(n-1) in matchday order."""
    names = {c.id: c.name for c in clubs}
    schedule = generate_round_robin([c.id for c in clubs], rng)
    return [
        Fixture(
            id=i + 1,
            matchday=week,
            home_club_id=home,
            away_club_id=away,
            home_club_name=names[home],
            away_club_name=names[away],
        )
        for i, (week, home, away) in enumerate(schedule)
    ]


# ===================================================================
# League table
# ===================================================================

def _table_key(row: LeagueStanding) -> tuple:
    # Points, goal difference, goals scored, then club id for a total order
    return (-row.points, -row.goal_difference, -row.goals_for, row.club_id)


def sort_standings(standings: Iterable[LeagueStanding]) -> list[LeagueStanding]:
    """Fully re-sort the table and re-number positions 1..n."""
    ordered = sorted(standings, key=_table_key)
    return [replace(row, position=i + 1) for i, row in enumerate(ordered)]


def initial_standings(clubs: Iterable[Club]) -> list[LeagueStanding]:
    return sort_standings(LeagueStanding(club_id=c.id, club_name=c.name) for c in clubs)


def update_standings(
    standings: Sequence[LeagueStanding],
    home_id: int,
    away_id: int,
    home_goals: int,
    away_goals: int,
) -> list[LeagueStanding]:
    """Apply one result and return a freshly sorted table.

    Always increments: callers must apply each fixture at most once (the
    orchestrator guards this with the fixture's ``played`` flag).

    Raises
    ------
    UnknownClubError
        If either club has no row in *standings*.
    """
    rows = {row.club_id: replace(row) for row in standings}
    for club_id in (home_id, away_id):
        if club_id not in rows:
            raise UnknownClubError(club_id)
    home, away = rows[home_id], rows[away_id]

    home.played += 1
    home.goals_for += home_goals
    home.goals_against += away_goals
    away.played += 1
    away.goals_for += away_goals
    away.goals_against += home_goals

    if home_goals > away_goals:
        home.won += 1
        home.points += POINTS_WIN
        away.lost += 1
    elif home_goals < away_goals:
        away.won += 1
        away.points += POINTS_WIN
        home.lost += 1
    else:
        home.drawn += 1
        away.drawn += 1
        home.points += POINTS_DRAW
        away.points += POINTS_DRAW

    return sort_standings(rows.values())

"""
Generate clubs ([Prefix] [City] names), squads, youth intakes, backroom staff and players.
Uses an injected random.Random so a seed reproduces the same league.

Procedural logic:
- A player is built around a target rating: each attribute starts at the target,
  is pushed up or down by how much the position values it, and gets a little
  Gaussian noise. The attributes are then shifted together so the position-weighted
  overall lands on the target.
- Potential is headroom above the overall that shrinks with age.
- Squads fill a fixed position template; club quality sets the squad's rating band.
"""
from __future__ import annotations

import random
from itertools import product

from models.club import Club
from models.constants import (
    ATTRIBUTE_MAX,
    CITIES,
    CLUB_PREFIXES,
    CORE_ATTRIBUTES,
    COUNTRIES,
    FIRST_NAMES,
    LAST_NAMES,
    POSITION_STAT_WEIGHTS,
    SQUAD_POSITION_COUNTS,
    STARTING_STAFF_ROLES,
    YOUTH_INTAKE_SIZE,
    DEFAULT_LEAGUE_SIZE,
)
from models.finances import SponsorshipDeal
from models.manager import Manager
from models.player import Player
from models.ratings import compute_overall
from models.staff import StaffMember, staff_salary

ATTRIBUTE_FLOOR = 1
POSITION_EMPHASIS = 60.0
ATTRIBUTE_NOISE = 4.0


def _seed_rng(seed: int | str | None) -> int:
    """Convert optional seed to int; if None, draw one so the caller can log it."""
    if seed is None:
        return random.randint(0, 2**31 - 1)
    if isinstance(seed, str):
        return sum(ord(ch) * 31 ** i for i, ch in enumerate(seed)) % (2**31)
    return int(seed)


def _clamp_attr(value: float) -> int:
    return int(max(ATTRIBUTE_FLOOR, min(ATTRIBUTE_MAX, round(value))))


def _unique_club_names(n: int, rng: random.Random) -> list[str]:
    """Generate n unique [Prefix] [City] club names."""
    pairs = list(product(CLUB_PREFIXES, CITIES))
    rng.shuffle(pairs)
    return [f"{prefix} {city}" for prefix, city in pairs[:n]]


def _random_name(rng: random.Random) -> tuple[str, str]:
    return rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)


def _attributes_for_target(position: str, target: float, rng: random.Random) -> dict[str, int]:
    weights = POSITION_STAT_WEIGHTS[position]
    mean_w = 1.0 / len(CORE_ATTRIBUTES)
    raw = {
        attr: target + (weights[attr] - mean_w) * POSITION_EMPHASIS + rng.gauss(0, ATTRIBUTE_NOISE)
        for attr in CORE_ATTRIBUTES
    }
    # Shift everything so the weighted overall sits on the target
    offset = target - compute_overall(raw, position)
    return {attr: _clamp_attr(v + offset) for attr, v in raw.items()}


def _potential_for_age(overall: float, age: int, rng: random.Random) -> float:
    if age < 21:
        headroom = rng.uniform(5, 20)
    elif age < 25:
        headroom = rng.uniform(2, 10)
    elif age < 29:
        headroom = rng.uniform(0, 3)
    else:
        headroom = 0.0
    return min(float(ATTRIBUTE_MAX), overall + headroom)


def make_player(
    rng: random.Random,
    *,
    player_id: int,
    club_id: int,
    position: str,
    age: int,
    target_rating: float,
    season: int,
    is_youth_player: bool = False,
) -> Player:
    """Build one player around *target_rating* for *position*."""
    first, last = _random_name(rng)
    attrs = _attributes_for_target(position, target_rating, rng)
    overall = compute_overall(attrs, position)
    return Player(
        id=player_id,
        club_id=club_id,
        first_name=first,
        last_name=last,
        position=position,
        age=age,
        overall_rating=overall,
        potential=max(overall, _potential_for_age(overall, age, rng)),
        form=float(rng.randint(55, 80)),
        morale=float(rng.randint(55, 80)),
        contract_end_year=season + rng.randint(1, 4),
        is_youth_player=is_youth_player,
        **attrs,
    )


def generate_squad(
    rng: random.Random,
    club_id: int,
    first_player_id: int,
    season: int,
    quality: float = 70.0,
) -> list[Player]:
    """A full senior squad following SQUAD_POSITION_COUNTS, rated around *quality*."""
    squad: list[Player] = []
    next_id = first_player_id
    for position, count in SQUAD_POSITION_COUNTS.items():
        for _ in range(count):
            squad.append(make_player(
                rng,
                player_id=next_id,
                club_id=club_id,
                position=position,
                age=rng.randint(18, 34),
                target_rating=max(40.0, min(95.0, rng.gauss(quality, 5))),
                season=season,
            ))
            next_id += 1
    return squad


def generate_youth_intake(
    rng: random.Random,
    club_id: int,
    first_player_id: int,
    season: int,
    academy_quality: int = 3,
    count: int = YOUTH_INTAKE_SIZE,
) -> list[Player]:
    """Academy prospects aged 16-18; better academies raise both rating and ceiling."""
    intake: list[Player] = []
    for i in range(count):
        age = rng.randint(16, 18)
        player = make_player(
            rng,
            player_id=first_player_id + i,
            club_id=club_id,
            position=rng.choice(list(SQUAD_POSITION_COUNTS)),
            age=age,
            target_rating=rng.uniform(45, 55) + academy_quality * 2,
            season=season,
            is_youth_player=True,
        )
        ceiling = player.potential + academy_quality * rng.uniform(1, 3)
        player.potential = min(float(ATTRIBUTE_MAX), max(player.potential, ceiling))
        intake.append(player)
    return intake


def make_staff_member(
    rng: random.Random,
    staff_id: int,
    role: str,
    season: int,
    nationality: str = "european",
) -> StaffMember:
    """A staff profile for *role*: 5-29 years in the game, 60-89 effectiveness."""
    experience = rng.randint(5, 29)
    effectiveness = rng.randint(60, 89)
    return StaffMember(
        id=f"staff_{staff_id}",
        name=" ".join(_random_name(rng)),
        role=role,
        nationality=nationality,
        age=30 + experience,
        experience=experience,
        effectiveness=effectiveness,
        salary=staff_salary(role, experience, effectiveness, nationality),
        contract_start_year=season,
        contract_end_year=season + 2 + experience // 5,
    )


def generate_staff(
    rng: random.Random,
    first_staff_id: int,
    season: int,
    roles: list[str] | None = None,
) -> list[StaffMember]:
    return [
        make_staff_member(rng, first_staff_id + i, role, season)
        for i, role in enumerate(roles if roles is not None else STARTING_STAFF_ROLES)
    ]


def generate_club(
    rng: random.Random,
    club_id: int,
    name: str,
    quality: float = 70.0,
    country: str | None = None,
) -> Club:
    """A club whose commercial size scales with *quality* (squad rating band)."""
    scale = max(0.3, (quality - 50) / 25)
    return Club(
        id=club_id,
        name=name,
        country=country or rng.choice(COUNTRIES),
        division=1,
        budget=round(50_000_000 * scale * rng.uniform(0.8, 1.2)),
        manager=Manager(name=" ".join(_random_name(rng)), experience=rng.randint(0, 60),
                        reputation=rng.randint(30, 80), salary=round(1_000_000 * scale)),
        stadium_capacity=int(20_000 + 30_000 * scale * rng.uniform(0.7, 1.3)),
        fan_base=int(150_000 + 400_000 * scale * rng.uniform(0.7, 1.3)),
        ticket_price=rng.randint(35, 70),
        training_ground_quality=rng.randint(2, 5),
        medical_facility_quality=rng.randint(2, 5),
        youth_academy_quality=rng.randint(1, 5),
        coaching_staff=rng.randint(3, 8),
        medical_staff=rng.randint(2, 6),
        scouting_staff=rng.randint(1, 5),
        television_deal=round(30_000_000 * scale),
        sponsorship_deals=[
            SponsorshipDeal(
                id=f"sp_{club_id}_1",
                name=f"{name} Kit Partner",
                annual_value=round(8_000_000 * scale),
                years_remaining=rng.randint(1, 4),
                performance_bonus=round(1_000_000 * scale),
            ),
        ],
    )


def generate_league(
    seed: int | str | None = None,
    club_count: int = DEFAULT_LEAGUE_SIZE,
    season: int = 2024,
    rng: random.Random | None = None,
) -> tuple[list[Club], dict[int, list[Player]], int]:
    """Generate a league of clubs with squads.

    Returns
    -------
    (clubs, squads by club id, next free player id)
    """
    rng = rng or random.Random(_seed_rng(seed))
    names = _unique_club_names(club_count, rng)
    clubs: list[Club] = []
    squads: dict[int, list[Player]] = {}
    next_player_id = 1
    for i, name in enumerate(names):
        club_id = i + 1
        quality = rng.uniform(62, 80)
        clubs.append(generate_club(rng, club_id, name, quality))
        squad = generate_squad(rng, club_id, next_player_id, season, quality)
        squads[club_id] = squad
        next_player_id += len(squad)
    return clubs, squads, next_player_id

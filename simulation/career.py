"""
Career orchestrator: the state machine tying the simulation together.

    pre-season -> in-season (matchday 1..N) -> season-end -> pre-season (next year) -> ...

Every public transition deep-copies the incoming ``CareerGameState`` and returns
a new one; the caller's value is never mutated and nothing is cached between
calls. Randomness always comes from the ``rng`` argument.

Order of work for one played fixture:
match engine -> player development -> league table -> season stats -> board.
Finances close every MATCHDAYS_PER_MONTH matchdays in ``advance_matchday``.
"""
from __future__ import annotations

import copy
import logging
import random
from dataclasses import replace
from typing import Any

from generation.generate import (
    _seed_rng,
    generate_league,
    generate_staff,
    generate_youth_intake,
    make_player,
    make_staff_member,
)
from models.board import BoardExpectation
from models.career import CareerGameState, SeasonStats, YouthAcademy
from models.club import Club
from models.constants import (
    MATCHDAYS_PER_MONTH,
    POINTS_WIN,
    POINTS_DRAW,
    RECENT_RESULTS_LIMIT,
    CONTRACT_EXTENSION_YEARS,
    MATCH_INJURY_PROBABILITY,
    STAFF_NATIONALITIES,
    STAFF_ROLES,
    YOUTH_INTAKE_SIZE,
)
from models.fixture import Fixture
from models.match_result import MatchResult
from models.player import Player
from models.ratings import team_strength
from models.staff import StaffMember
from models.tactics import FORMATIONS, Formation
from models.transfer import TransferOffer
from simulation import board as board_model
from simulation import finances as finance_model
from simulation import squad as squad_analysis
from simulation import staff as staff_model
from simulation import transfers as market
from simulation.development import (
    advance_matchday_players,
    age_academy,
    age_squad,
    apply_match_to_squad,
    count_developed_youngsters,
    identify_youth_promotion_candidates,
    select_lineup,
)
from simulation.engine import MatchSetup, TeamSetup, simulate_match
from simulation.errors import (
    ClubNotInFixtureError,
    FixtureAlreadyPlayedError,
    FixtureNotFoundError,
    InsufficientFundsError,
    PlayerNotFoundError,
    StaffNotFoundError,
    UnknownStaffRoleError,
)
from simulation.schedule import build_season_fixtures, initial_standings, update_standings
from simulation.tactics import get_formation, get_tactical_system

logger = logging.getLogger(__name__)

AI_FORMATION = "4-4-2"
TRANSFER_MARKET_SIZE = 30


# ===================================================================
# Initialization
# ===================================================================

def _months_in_season(fixtures: list[Fixture]) -> int:
    matchdays = max((f.matchday for f in fixtures), default=0)
    return max(1, matchdays // MATCHDAYS_PER_MONTH)


def _next_staff_id(staff: list[StaffMember]) -> int:
    suffixes = [s.id[len("staff_"):] for s in staff if s.id.startswith("staff_")]
    numbers = [int(n) for n in suffixes if n.isdigit()]
    return max(numbers, default=0) + 1


def predicted_position(club_id: int, squad: list[Player], opponent_squads: dict[int, list[Player]]) -> int:
    """Where the club would finish if the table followed squad strength."""
    own = team_strength(squad)
    return 1 + sum(1 for cid, players in opponent_squads.items() if cid != club_id and team_strength(players) > own)


def initialize_career(
    club: Club,
    squad: list[Player],
    league_clubs: list[Club],
    opponent_squads: dict[int, list[Player]],
    rng: random.Random,
    *,
    season: int = 2024,
    difficulty: str = "medium",
    formation: Formation | None = None,
    next_player_id: int | None = None,
    staff: list[StaffMember] | None = None,
) -> CareerGameState:
    """Build the pre-season state for a managed *club* in a league.

    *league_clubs* should contain every club in the league; the managed club is
    added if missing. *opponent_squads* is keyed by club id. Without *staff* a
    starting backroom team is generated.
    """
    clubs = list(league_clubs)
    if all(c.id != club.id for c in clubs):
        clubs.insert(0, club)
    all_players = list(squad) + [p for players in opponent_squads.values() for p in players]
    if next_player_id is None:
        next_player_id = max((p.id for p in all_players), default=0) + 1

    fixtures = build_season_fixtures(clubs, rng)
    expected = predicted_position(club.id, squad, opponent_squads)
    youth = generate_youth_intake(rng, club.id, next_player_id, season, club.youth_academy_quality)
    next_player_id += len(youth)
    listings = market.generate_transfer_market(
        rng, [c.name for c in clubs if c.id != club.id], next_player_id, season, TRANSFER_MARKET_SIZE
    )
    next_player_id += len(listings)
    if staff is None:
        staff = generate_staff(rng, 1, season)
    next_staff_id = _next_staff_id(staff)

    state = CareerGameState(
        current_season=season,
        current_matchday=1,
        club=copy.deepcopy(club),
        squad=copy.deepcopy(list(squad)),
        league_clubs=copy.deepcopy(clubs),
        opponent_squads={
            cid: copy.deepcopy(players) for cid, players in opponent_squads.items() if cid != club.id
        },
        fixtures=fixtures,
        league_table=initial_standings(clubs),
        season_stats=SeasonStats(year=season),
        youth=YouthAcademy(players=youth, facilities=club.youth_academy_quality),
        transfer_listings=listings,
        finances=finance_model.initial_finances(club, squad, staff),
        board=board_model.create_expectation(season, difficulty, expected, _months_in_season(fixtures)),
        formation=formation or get_formation(AI_FORMATION),
        difficulty=difficulty,
        next_player_id=next_player_id,
        staff=copy.deepcopy(list(staff)),
        next_staff_id=next_staff_id,
    )
    logger.info(
        "Career initialized: %s, season %d, %d clubs, %d fixtures, difficulty %s",
        club.name, season, len(clubs), len(fixtures), difficulty,
    )
    return state


def new_career(
    seed: int | str | None = None,
    *,
    club_index: int = 0,
    club_count: int = 20,
    season: int = 2024,
    difficulty: str = "medium",
    manager_name: str = "",
) -> CareerGameState:
    """Generate a league and start a career managing the club at *club_index*."""
    rng = random.Random(_seed_rng(seed))
    clubs, squads, next_id = generate_league(club_count=club_count, season=season, rng=rng)
    club = clubs[club_index % len(clubs)]
    if manager_name:
        club.manager = replace(club.manager, name=manager_name)
    squad = squads.pop(club.id)
    return initialize_career(
        club, squad, clubs, squads, rng,
        season=season, difficulty=difficulty, next_player_id=next_id,
    )


# ===================================================================
# Playing matches
# ===================================================================

def _team_setup(state: CareerGameState, club_id: int) -> TeamSetup:
    club = state.club_by_id(club_id)
    squad = state.squad_for(club_id)
    if club_id == state.club_id:
        formation = state.formation
        system = get_tactical_system(state.tactical_system) if state.tactical_system else None
    else:
        formation = FORMATIONS[AI_FORMATION]
        system = None
    return TeamSetup(
        club_id=club_id,
        lineup=select_lineup(squad, formation),
        formation=formation,
        tactical_system=system,
        club_name=club.name if club else "",
    )


def _set_squad(state: CareerGameState, club_id: int, squad: list[Player]) -> None:
    if club_id == state.club_id:
        state.squad = squad
    else:
        state.opponent_squads[club_id] = squad


def _record_managed_result(state: CareerGameState, result: MatchResult, is_home: bool) -> None:
    stats = state.season_stats
    own, other = (result.home_goals, result.away_goals) if is_home else (result.away_goals, result.home_goals)
    stats.matches_played += 1
    stats.goals_for += own
    stats.goals_against += other
    if own > other:
        stats.wins += 1
        stats.points_total += POINTS_WIN
        stats.win_streak += 1
    elif own == other:
        stats.draws += 1
        stats.points_total += POINTS_DRAW
        stats.win_streak = 0
    else:
        stats.losses += 1
        stats.win_streak = 0

    names: dict[int, str] = {}
    for event in result.events:
        if event.type == "goal" and event.club_id == state.club_id:
            stats.player_goals[event.player_id] = stats.player_goals.get(event.player_id, 0) + 1
            names[event.player_id] = event.player_name
    if stats.player_goals:
        scorer_id = max(stats.player_goals, key=lambda pid: (stats.player_goals[pid], -pid))
        scorer = state.player(scorer_id)
        stats.top_scorer_name = scorer.name if scorer else names.get(scorer_id, stats.top_scorer_name)
        stats.top_scorer_goals = stats.player_goals[scorer_id]
    if state.squad:
        best = max(state.squad, key=lambda p: p.overall_rating)
        stats.best_player_name = best.name
        stats.best_player_rating = best.overall_rating

    state.recent_results.append(result)
    del state.recent_results[:-RECENT_RESULTS_LIMIT]
    stats.current_form = sum(1 for r in state.recent_results if r.outcome_for(state.club_id) == "win")


def _refresh_board(state: CareerGameState) -> None:
    stats = state.season_stats
    row = state.standing_for(state.club_id)
    if row is not None:
        stats.league_position = row.position
    points = state.board.objective_of_type("points_target")
    board = state.board
    if points is not None:
        board = board_model.update_progress(board, points.id, stats.points_total)
    state.board = board_model.refresh_metrics(
        board, stats, stats.matches_played, state.matchdays_in_season
    )


def _injury_probability(state: CareerGameState, club_id: int) -> float:
    if club_id != state.club_id:
        return MATCH_INJURY_PROBABILITY
    medical = staff_model.medical_effectiveness(state.staff)
    return staff_model.injury_prevention_chance(MATCH_INJURY_PROBABILITY, medical.prevention_rate)


def _play_fixture(state: CareerGameState, fixture: Fixture, rng: random.Random) -> MatchResult:
    """Play *fixture* in place on an already-copied *state*."""
    home = _team_setup(state, fixture.home_club_id)
    away = _team_setup(state, fixture.away_club_id)
    result = simulate_match(MatchSetup(home=home, away=away, fixture_id=fixture.id), rng)

    fixture.record_result(result.home_goals, result.away_goals)
    state.league_table = update_standings(
        state.league_table, fixture.home_club_id, fixture.away_club_id,
        result.home_goals, result.away_goals,
    )
    for club_id, is_home in ((fixture.home_club_id, True), (fixture.away_club_id, False)):
        squad = apply_match_to_squad(
            state.squad_for(club_id), result, is_home, rng, _injury_probability(state, club_id)
        )
        _set_squad(state, club_id, squad)
    if fixture.involves(state.club_id):
        _record_managed_result(state, result, fixture.home_club_id == state.club_id)

    logger.debug(
        "Matchday %d: %s %d-%d %s",
        fixture.matchday, fixture.home_club_name, result.home_goals, result.away_goals,
        fixture.away_club_name,
    )
    return result


def play_match(
    state: CareerGameState,
    fixture_id: int,
    rng: random.Random,
) -> tuple[MatchResult, CareerGameState]:
    """Play one of the managed club's fixtures.

    Raises
    ------
    FixtureNotFoundError
        No fixture with *fixture_id*.
    FixtureAlreadyPlayedError
        The fixture already has a result.
    ClubNotInFixtureError
        The managed club does not play in it.
    EmptySquadError
        Either side has no available players.
    """
    new_state = copy.deepcopy(state)
    fixture = new_state.fixture(fixture_id)
    if fixture is None:
        raise FixtureNotFoundError(fixture_id)
    if fixture.played:
        raise FixtureAlreadyPlayedError(fixture_id)
    if not fixture.involves(new_state.club_id):
        raise ClubNotInFixtureError(fixture_id, new_state.club_id)

    result = _play_fixture(new_state, fixture, rng)
    _refresh_board(new_state)
    return result, new_state


def play_matchday(
    state: CareerGameState,
    rng: random.Random,
) -> tuple[list[MatchResult], CareerGameState]:
    """Play every unplayed fixture of the current matchday, the managed club's included."""
    new_state = copy.deepcopy(state)
    results = [
        _play_fixture(new_state, fixture, rng)
        for fixture in new_state.fixtures
        if fixture.matchday == new_state.current_matchday and not fixture.played
    ]
    _refresh_board(new_state)
    return results, new_state


def next_fixture(state: CareerGameState) -> Fixture | None:
    """The managed club's earliest unplayed fixture."""
    pending = [f for f in state.fixtures if not f.played and f.involves(state.club_id)]
    return min(pending, key=lambda f: (f.matchday, f.id), default=None)


# ===================================================================
# Matchday and season transitions
# ===================================================================

def advance_matchday(state: CareerGameState) -> CareerGameState:
    """Heal injuries and decay form across the league, then move to the next matchday.

    The managed club heals at the pace its medical team sets; everyone else
    heals a week per matchday.
    Every MATCHDAYS_PER_MONTH matchdays the month is closed on the club's finances;
    a profitable month counts toward the board's financial objective.
    """
    new_state = copy.deepcopy(state)
    medical = staff_model.medical_effectiveness(new_state.staff)
    recovery = staff_model.recovery_weeks_per_matchday(medical.injury_recovery_rate)
    new_state.squad = advance_matchday_players(new_state.squad, recovery)
    new_state.youth.players = advance_matchday_players(new_state.youth.players, recovery)
    new_state.opponent_squads = {
        cid: advance_matchday_players(players) for cid, players in new_state.opponent_squads.items()
    }
    completed_matchday = new_state.current_matchday
    new_state.current_matchday += 1

    if completed_matchday % MATCHDAYS_PER_MONTH == 0:
        row = new_state.standing_for(new_state.club_id)
        position = row.position if row else len(new_state.league_table)
        new_state.finances = finance_model.close_month(
            new_state.finances, new_state.club, new_state.squad, position,
            league_size=len(new_state.league_table), staff=new_state.staff,
        )
        financial = new_state.board.objective_of_type("financial")
        if financial is not None and new_state.finances.profit_margin > 0:
            new_state.board = board_model.update_progress(
                new_state.board, financial.id, financial.current + 1
            )
        _refresh_board(new_state)
    return new_state


def _replace_departures(
    state: CareerGameState,
    club_id: int,
    kept: list[Player],
    departed: list[Player],
    rng: random.Random,
) -> list[Player]:
    """AI clubs re-sign a like-for-like player for each departure."""
    squad = list(kept)
    for gone in departed:
        squad.append(make_player(
            rng,
            player_id=state.next_player_id,
            club_id=club_id,
            position=gone.position,
            age=rng.randint(20, 28),
            target_rating=gone.overall_rating,
            season=state.current_season,
        ))
        state.next_player_id += 1
    return squad


def end_season(state: CareerGameState, rng: random.Random) -> CareerGameState:
    """Close the season and return the next season's pre-season state.

    Finalizes the board's objectives and money, ages and develops every player
    (the managed club with its coaching bonus), resolves expiring player and
    staff contracts, brings in a youth intake, and regenerates
    fixtures, table, objectives and season statistics.

    Not guarded: calling it twice for one season ages everyone twice.
    """
    new_state = copy.deepcopy(state)
    season = new_state.current_season
    row = new_state.standing_for(new_state.club_id)
    final_position = row.position if row else len(new_state.league_table)
    new_state.season_stats.league_position = final_position

    # Board verdict on the finished season
    board = new_state.board
    for objective_type, value in (
        ("league_position", final_position),
        ("player_development", count_developed_youngsters(new_state.squad)),
    ):
        objective = board.objective_of_type(objective_type)
        if objective is not None:
            board = board_model.update_progress(board, objective.id, value)
    board = board_model.refresh_metrics(
        board, new_state.season_stats, new_state.season_stats.matches_played,
        new_state.matchdays_in_season,
    )
    bonus = board_model.season_bonus(board)
    penalties = board_model.season_penalties(board)
    if board_model.should_sack(board, board.job_security):
        logger.warning(
            "Board has lost faith in %s after season %d (job security %.0f)",
            new_state.club.manager.name or "the manager", season, board.job_security,
        )

    # Money
    funds, perf_bonus, perf_penalties = finance_model.apply_performance_financials(
        new_state.finances.available_funds, final_position,
        new_state.season_stats.win_rate, new_state.club.sponsorship_deals,
    )
    new_state.club.budget = finance_model.season_budget(
        new_state.club.budget, final_position, new_state.club.television_deal
    )
    new_state.finances = replace(
        new_state.finances,
        available_funds=funds + bonus - penalties,
        total_budget=new_state.club.budget,
        prize_money_earned=float(finance_model.prize_money(final_position)),
    )

    # Players
    coaching = staff_model.coaching_effects(new_state.staff)
    kept, departed = age_squad(new_state.squad, season, rng, coaching)
    for p in departed:
        logger.info("%s left %s on contract expiry", p.name, new_state.club.name)
    new_state.squad = kept
    for club_id, players in list(new_state.opponent_squads.items()):
        ai_kept, ai_departed = age_squad(players, season, rng)
        new_state.opponent_squads[club_id] = _replace_departures(new_state, club_id, ai_kept, ai_departed, rng)
    new_state.youth.players, released = age_academy(new_state.youth.players, season, rng, coaching)
    for p in released:
        logger.info("%s released from the %s academy", p.name, new_state.club.name)

    # Staff
    expiring = {s.id for s in staff_model.expiring_staff_contracts(new_state.staff, season)}
    new_state.staff = [
        staff_model.renew_staff_contract(s, season) if s.id in expiring else s for s in new_state.staff
    ]
    if expiring:
        logger.info("Renewed %d staff contracts at %s", len(expiring), new_state.club.name)

    # Next season
    next_season = season + 1
    intake = generate_youth_intake(
        rng, new_state.club_id, new_state.next_player_id, next_season,
        new_state.club.youth_academy_quality, YOUTH_INTAKE_SIZE,
    )
    new_state.next_player_id += len(intake)
    new_state.youth.players.extend(intake)

    new_state.current_season = next_season
    new_state.current_matchday = 1
    new_state.fixtures = build_season_fixtures(new_state.league_clubs, rng)
    new_state.league_table = initial_standings(new_state.league_clubs)
    new_state.season_stats = SeasonStats(year=next_season)
    new_state.difficulty = board_model.next_difficulty(final_position, len(new_state.league_clubs))
    new_state.board = board_model.create_expectation(
        next_season, new_state.difficulty, final_position, _months_in_season(new_state.fixtures)
    )

    other_clubs = [c.name for c in new_state.league_clubs if c.id != new_state.club_id]
    new_state.transfer_listings = market.generate_transfer_market(
        rng, other_clubs, new_state.next_player_id, next_season, TRANSFER_MARKET_SIZE
    )
    new_state.next_player_id += len(new_state.transfer_listings)
    new_state.transfer_offers = []
    new_state.incoming_offers = market.generate_incoming_offers(new_state.squad, next_season, other_clubs, rng)

    logger.info(
        "Season %d ended: %s finished %d (bonus %.0f, performance %+.0f); %d departures; next difficulty %s",
        season, new_state.club.name, final_position, bonus, perf_bonus - perf_penalties,
        len(departed), new_state.difficulty,
    )
    return new_state


# ===================================================================
# Squad management
# ===================================================================

def youth_promotion_candidates(state: CareerGameState) -> list[Player]:
    return identify_youth_promotion_candidates(state.youth.players)


def promote_youth_player(state: CareerGameState, player_id: int) -> CareerGameState:
    """Move an academy player into the senior squad on a fresh contract."""
    new_state = copy.deepcopy(state)
    for i, p in enumerate(new_state.youth.players):
        if p.id == player_id:
            promoted = replace(
                p,
                is_youth_player=False,
                contract_end_year=new_state.current_season + CONTRACT_EXTENSION_YEARS,
            )
            del new_state.youth.players[i]
            new_state.squad.append(promoted)
            logger.info("%s promoted from the academy", promoted.name)
            return new_state
    raise PlayerNotFoundError(player_id)


def sign_player(
    state: CareerGameState,
    player_id: int,
    offer_amount: int,
    rng: random.Random,
) -> tuple[TransferOffer, CareerGameState]:
    """Bid for a listed player; the selling club answers with one AI negotiation round.

    An accepted bid is paid from available funds and the player joins the squad.

    Raises
    ------
    PlayerNotFoundError
        No listing for *player_id*.
    InsufficientFundsError
        The bid exceeds available funds.
    """
    new_state = copy.deepcopy(state)
    index = next((i for i, t in enumerate(new_state.transfer_listings) if t.player.id == player_id), None)
    if index is None:
        raise PlayerNotFoundError(player_id)
    if offer_amount > new_state.finances.available_funds:
        raise InsufficientFundsError(offer_amount, new_state.finances.available_funds)

    listing = new_state.transfer_listings[index]
    offer = market.make_offer(listing, new_state.club.name, offer_amount, len(new_state.transfer_offers) + 1)
    offer = market.negotiate(offer, rng)
    new_state.transfer_offers.append(offer)

    if offer.status == "accepted":
        del new_state.transfer_listings[index]
        signed = replace(
            listing.player,
            club_id=new_state.club_id,
            contract_end_year=new_state.current_season + CONTRACT_EXTENSION_YEARS,
        )
        new_state.squad.append(signed)
        new_state.finances = replace(
            new_state.finances, available_funds=new_state.finances.available_funds - offer.offer_price
        )
        logger.info("%s signed %s for %d", new_state.club.name, signed.name, offer.offer_price)
    return offer, new_state


def refresh_transfer_offers(state: CareerGameState, rng: random.Random) -> CareerGameState:
    """New market listings and a fresh round of bids for the managed club's players."""
    new_state = copy.deepcopy(state)
    other_clubs = [c.name for c in new_state.league_clubs if c.id != new_state.club_id]
    new_state.transfer_listings = market.generate_transfer_market(
        rng, other_clubs, new_state.next_player_id, new_state.current_season, TRANSFER_MARKET_SIZE
    )
    new_state.next_player_id += len(new_state.transfer_listings)
    new_state.incoming_offers = market.generate_incoming_offers(
        new_state.squad, new_state.current_season, other_clubs, rng
    )
    return new_state


def accept_incoming_offer(state: CareerGameState, player_id: int) -> CareerGameState:
    """Sell a squad player to the club bidding for them."""
    new_state = copy.deepcopy(state)
    offer = next((o for o in new_state.incoming_offers if o.player_id == player_id), None)
    player = new_state.player(player_id)
    if offer is None or player is None:
        raise PlayerNotFoundError(player_id)
    new_state.squad = [p for p in new_state.squad if p.id != player_id]
    new_state.incoming_offers = [o for o in new_state.incoming_offers if o.player_id != player_id]
    new_state.finances = replace(
        new_state.finances, available_funds=new_state.finances.available_funds + offer.amount
    )
    logger.info("%s sold %s to %s for %d", new_state.club.name, player.name, offer.bidding_club, offer.amount)
    return new_state


def set_tactics(
    state: CareerGameState,
    formation_code: str | None = None,
    tactical_system: str | None = None,
    clear_system: bool = False,
) -> CareerGameState:
    """Change the managed club's formation and/or advanced tactical system."""
    new_state = copy.deepcopy(state)
    if formation_code is not None:
        new_state.formation = get_formation(formation_code)
    if clear_system:
        new_state.tactical_system = None
    elif tactical_system is not None:
        new_state.tactical_system = get_tactical_system(tactical_system).name
    return new_state


# ===================================================================
# Backroom staff
# ===================================================================

def hire_staff(
    state: CareerGameState,
    role: str,
    rng: random.Random,
    nationality: str = "european",
) -> tuple[StaffMember, CareerGameState]:
    """Hire a new *role* from the staff market; the first year's salary is paid up front.

    Raises
    ------
    InsufficientFundsError
        Available funds do not cover the salary.
    UnknownStaffRoleError
        Unknown role or nationality.
    """
    if role not in STAFF_ROLES or nationality not in STAFF_NATIONALITIES:
        raise UnknownStaffRoleError(f"Unknown staff role {role!r} or nationality {nationality!r}")
    new_state = copy.deepcopy(state)
    member = make_staff_member(rng, new_state.next_staff_id, role, new_state.current_season, nationality)
    if member.salary > new_state.finances.available_funds:
        raise InsufficientFundsError(member.salary, new_state.finances.available_funds)
    new_state.next_staff_id += 1
    new_state.staff.append(member)
    new_state.finances = replace(
        new_state.finances, available_funds=new_state.finances.available_funds - member.salary
    )
    logger.info("%s hired %s as %s for %d a year", new_state.club.name, member.name, role, member.salary)
    return member, new_state


def release_staff(state: CareerGameState, staff_id: str) -> CareerGameState:
    new_state = copy.deepcopy(state)
    member = new_state.staff_member(staff_id)
    if member is None:
        raise StaffNotFoundError(staff_id)
    new_state.staff = [s for s in new_state.staff if s.id != staff_id]
    logger.info("%s released %s (%s)", new_state.club.name, member.name, member.role)
    return new_state


def staff_report(state: CareerGameState) -> dict[str, Any]:
    """Roster, what it is worth on the pitch and in the treatment room, and open posts worth filling."""
    medical = staff_model.medical_effectiveness(state.staff)
    return {
        "staff": [s.to_dict() for s in state.staff],
        "total_costs": staff_model.total_staff_costs(state.staff),
        "coaching": staff_model.coaching_effects(state.staff).to_dict(),
        "medical": {
            "injury_recovery_rate": medical.injury_recovery_rate,
            "prevention_rate": medical.prevention_rate,
            "overall": medical.overall,
        },
        "expiring": [s.id for s in staff_model.expiring_staff_contracts(state.staff, state.current_season)],
        "recommendations": staff_model.staff_recommendations(state.staff, state.finances.available_funds),
    }


def squad_report(state: CareerGameState) -> dict[str, Any]:
    """Balance, next-season projection, wage headroom and academy readiness for the managed squad."""
    squad = state.squad
    senior_average = sum(p.overall_rating for p in squad) / len(squad) if squad else 0.0
    league = [p for players in state.opponent_squads.values() for p in players] + list(squad)
    league_average = sum(p.overall_rating for p in league) / len(league) if league else 0.0
    wage_budget = finance_model.budget_allocation(state.finances.total_budget)["player_wages"]
    academy = []
    for p in identify_youth_promotion_candidates(state.youth.players):
        score, label = squad_analysis.youth_readiness(p, senior_average)
        academy.append({"player_id": p.id, "name": p.name, "readiness": score, "recommendation": label})
    return {
        "balance": squad_analysis.analyze_squad_balance(squad),
        "projection": squad_analysis.project_squad_strength(squad, state.current_season),
        "wage_budget": squad_analysis.wage_budget_utility(wage_budget, finance_model.total_wages(squad)),
        "development_pace": round(squad_analysis.reputation_multiplier(senior_average, league_average), 3),
        "academy": academy,
    }


def career_summary(state: CareerGameState) -> dict[str, Any]:
    """Read-only projection for display: ratings rounded here, nowhere else."""
    board: BoardExpectation = state.board
    stats = state.season_stats
    return {
        "club": state.club.name,
        "season": state.current_season,
        "matchday": state.current_matchday,
        "phase": state.phase,
        "league_position": stats.league_position,
        "record": f"{stats.wins}-{stats.draws}-{stats.losses}",
        "points": stats.points_total,
        "goal_difference": stats.goals_for - stats.goals_against,
        "top_scorer": {"name": stats.top_scorer_name, "goals": stats.top_scorer_goals},
        "squad_size": len(state.squad),
        "squad_rating": round(sum(p.overall_rating for p in state.squad) / len(state.squad)) if state.squad else 0,
        "available_funds": round(state.finances.available_funds),
        "financial_status": state.finances.financial_status,
        "job_security": round(board.job_security),
        "job_status": board_model.job_status(board.job_security),
        "board_confidence": round(board.board_confidence),
        "pressure_level": round(board.pressure_level),
        "objectives_completed": board.completed_count,
    }

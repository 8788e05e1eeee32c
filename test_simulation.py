"""
Tests for ratings, the match engine, tactics and player development.

Usage:
    pytest test_simulation.py -v
"""
import random

import pytest

from models import Player, FORMATIONS, TACTICAL_SYSTEMS
from models.constants import NEUTRAL_TEAM_STRENGTH, POSSESSION_MIN, POSSESSION_MAX
from models.match_result import MatchEvent, MatchResult
from models.ratings import (
    average_rating,
    compute_overall,
    form_multiplier,
    performance_multiplier,
    squad_average,
    team_strength,
)
from models.tactics import MatchState, TIKI_TAKA
from simulation.development import (
    advance_matchday_players,
    age_academy,
    apply_match_outcome,
    count_developed_youngsters,
    develop_for_new_season,
    development_status,
    estimate_transfer_value,
    resolve_contract,
    select_lineup,
)
from simulation.engine import (
    MatchSetup,
    TeamSetup,
    compute_possession,
    expected_goals,
    match_report,
    morale_impact,
    points_awarded,
    simulate_match,
)
from simulation.errors import EmptySquadError, UnknownTacticError
from simulation.tactics import (
    apply_tactical_adjustment,
    get_formation,
    get_tactical_system,
    describe_instruction,
    initial_gegenpressing_state,
    initial_tiki_taka_state,
    instruction_impact,
    recommend_formation,
    recommend_instructions,
    recommend_tactics,
    suitability,
    simulate_gegenpressing,
    simulate_tiki_taka,
    tactical_effectiveness,
)

XI_POSITIONS = ["GK", "CB", "CB", "LB", "RB", "CM", "CM", "LM", "RM", "ST", "ST"]


def _player(pid, position="CM", rating=70.0, club_id=1, **kwargs):
    attrs = {a: kwargs.pop(a, 70) for a in ("pace", "shooting", "passing", "dribbling", "defense", "physical")}
    defaults = dict(
        id=pid,
        club_id=club_id,
        first_name="P",
        last_name=str(pid),
        position=position,
        age=25,
        overall_rating=rating,
        potential=max(rating, kwargs.pop("potential", rating)),
        form=60.0,
        morale=60.0,
        contract_end_year=2030,
    )
    defaults.update(kwargs)
    return Player(**defaults, **attrs)


def _lineup(club_id, first_id, rating=70.0, **attrs):
    return [_player(first_id + i, pos, rating, club_id=club_id, **attrs) for i, pos in enumerate(XI_POSITIONS)]


def _setup(home_rating=70.0, away_rating=70.0, neutral=False):
    return MatchSetup(
        home=TeamSetup(1, _lineup(1, 1, home_rating), FORMATIONS["4-4-2"], club_name="Home"),
        away=TeamSetup(2, _lineup(2, 100, away_rating), FORMATIONS["4-4-2"], club_name="Away"),
        neutral_venue=neutral,
    )


class _FixedRandom(random.Random):
    """Never rolls the independent injury; randint picks the low end."""

    def random(self):
        return 0.99

    def randint(self, a, b):
        return a


# ===================================================================
# Ratings
# ===================================================================

class TestRatings:
    def test_empty_squad_is_neutral(self):
        assert team_strength([]) == NEUTRAL_TEAM_STRENGTH

    def test_strength_is_monotonic_in_each_rating(self):
        rng = random.Random(3)
        for _ in range(25):
            squad = [_player(i, rng.choice(XI_POSITIONS), rng.uniform(40, 90), form=rng.uniform(0, 100))
                     for i in range(11)]
            before = team_strength(squad)
            idx = rng.randrange(len(squad))
            bumped = list(squad)
            bumped[idx] = _player(idx, squad[idx].position, squad[idx].overall_rating + 5, form=squad[idx].form)
            assert team_strength(bumped) >= before

    def test_form_scales_strength(self):
        sharp = [_player(1, "ST", 80, form=100)]
        tired = [_player(1, "ST", 80, form=0)]
        assert team_strength(sharp) == pytest.approx(80.0)
        assert team_strength(tired) == pytest.approx(40.0)
        assert form_multiplier(50) == pytest.approx(0.75)

    def test_overall_is_weighted_by_position(self):
        attrs = {"pace": 60, "shooting": 90, "passing": 60, "dribbling": 60, "defense": 30, "physical": 60}
        assert compute_overall(attrs, "ST") > compute_overall(attrs, "CB")

    def test_performance_multiplier(self):
        assert performance_multiplier(80, 50, 50) == pytest.approx(0.8)
        assert performance_multiplier(80, 100, 100) == pytest.approx(1.04)

    def test_plain_averages(self):
        squad = [_player(1, rating=60.0, physical=50), _player(2, rating=80.0, physical=90)]
        assert average_rating(squad) == pytest.approx(70)
        assert average_rating([]) == NEUTRAL_TEAM_STRENGTH
        assert squad_average(squad, "stamina") == pytest.approx(70)
        assert squad_average([], "pace") == 0.0

    def test_potential_cannot_sit_below_rating(self):
        with pytest.raises(ValueError):
            Player(overall_rating=85.0, potential=70.0)
        with pytest.raises(ValueError):
            Player.from_dict({"overall_rating": 60.0, "potential": 59.5})
        assert Player(overall_rating=70.0, potential=70.0).display_potential == 70


# ===================================================================
# Match engine
# ===================================================================

class TestMatchEngine:
    def test_same_seed_same_match(self):
        a = simulate_match(_setup(), random.Random(2024))
        b = simulate_match(_setup(), random.Random(2024))
        assert a.to_dict() == b.to_dict()

    def test_seed_keyword(self):
        assert simulate_match(_setup(), seed=9).to_dict() == simulate_match(_setup(), seed=9).to_dict()

    def test_empty_lineup_raises(self):
        setup = _setup()
        setup.away.lineup = []
        with pytest.raises(EmptySquadError):
            simulate_match(setup, random.Random(1))

    def test_statistics_agree_with_timeline(self):
        for seed in range(60):
            result = simulate_match(_setup(75, 68), random.Random(seed))
            assert [e.minute for e in result.events] == sorted(e.minute for e in result.events)
            for stats, goals in ((result.home_stats, result.home_goals), (result.away_stats, result.away_goals)):
                own = [e for e in result.events if e.club_id == stats.club_id]
                assert sum(1 for e in own if e.type == "goal") == goals
                assert stats.yellow_cards == sum(1 for e in own if e.type == "yellow_card")
                assert stats.red_cards == sum(1 for e in own if e.type == "red_card")
                assert stats.injuries == sum(1 for e in own if e.type == "injury")
                assert stats.shots_on_target >= goals
                assert stats.shots >= stats.shots_on_target
                assert stats.fouls >= stats.yellow_cards + stats.red_cards
            assert result.home_stats.possession + result.away_stats.possession == pytest.approx(100.0, abs=0.11)
            assert POSSESSION_MIN <= result.home_stats.possession <= POSSESSION_MAX
            assert 2 <= sum(1 for e in result.events if e.type == "yellow_card") <= 5
            assert 7.5 <= result.man_of_the_match.rating <= 10

    def test_assist_never_credits_the_scorer(self):
        for seed in range(30):
            result = simulate_match(_setup(), random.Random(seed))
            for i, event in enumerate(result.events):
                if event.type == "assist":
                    scorer = next(e for e in result.events[:i][::-1] if e.type == "goal" and e.minute == event.minute)
                    assert scorer.player_id != event.player_id

    def test_home_advantage_and_neutral_venue(self):
        home, away = compute_possession(_setup())
        assert home > 50 > away
        assert compute_possession(_setup(neutral=True)) == (50.0, 50.0)

    def test_possession_is_clamped(self):
        home, away = compute_possession(_setup(home_rating=99, away_rating=5))
        assert home == POSSESSION_MAX
        assert away == pytest.approx(100 - POSSESSION_MAX)

    def test_expected_goals_from_attack_and_midfield(self):
        lineup = [_player(1, "ST", shooting=80), _player(2, "CM", shooting=50), _player(3, "CB", shooting=99)]
        assert expected_goals(lineup, 50, "balanced") == pytest.approx(0.29)
        assert expected_goals(lineup, 50, "attacking") == pytest.approx(0.38)
        assert expected_goals(lineup, 50, "defensive") == pytest.approx(0.17)
        assert expected_goals([], 80, "attacking") == 0

    def test_points_and_report(self):
        result = simulate_match(_setup(), random.Random(11))
        home_pts, away_pts = points_awarded(result)
        if result.home_goals > result.away_goals:
            assert (home_pts, away_pts) == (3, 0)
        elif result.home_goals < result.away_goals:
            assert (home_pts, away_pts) == (0, 3)
        else:
            assert (home_pts, away_pts) == (1, 1)
        lines = match_report(result, "Home", "Away")
        assert lines[0] == f"Home {result.home_goals} - {result.away_goals} Away"
        assert lines[-1].startswith("Man of the match:")

    def test_result_round_trip(self):
        result = simulate_match(_setup(), random.Random(5))
        assert MatchResult.from_dict(result.to_dict()).to_dict() == result.to_dict()

    def test_morale_impact(self):
        assert morale_impact(True, 2, 1, 60, 70) == 30
        assert morale_impact(False, 0, 2, 80, 70) == -30
        assert morale_impact(False, 1, 1, 70, 70) == 5


# ===================================================================
# Tactics
# ===================================================================

class TestTactics:
    def test_suitable_iff_every_requirement_met(self):
        strong = _lineup(1, 1, pace=99, shooting=99, passing=99, dribbling=99, defense=99, physical=99)
        fit = suitability(strong, TIKI_TAKA)
        assert fit.suitable and fit.missing_attributes == []
        assert fit.score == 100

        short_passing = _lineup(1, 1, pace=99, shooting=99, passing=87, dribbling=99, defense=99, physical=99)
        fit = suitability(short_passing, TIKI_TAKA)
        assert not fit.suitable
        assert len(fit.missing_attributes) == 1
        assert fit.score == 4 * 20 - 15

    def test_suitability_boolean_matches_averages(self):
        rng = random.Random(8)
        for _ in range(20):
            squad = [
                _player(i, pace=rng.randint(60, 99), passing=rng.randint(60, 99), dribbling=rng.randint(60, 99),
                        defense=rng.randint(60, 99), physical=rng.randint(60, 99))
                for i in range(11)
            ]
            for system in TACTICAL_SYSTEMS.values():
                averages = {
                    "pace": sum(p.pace for p in squad) / 11,
                    "passing": sum(p.passing for p in squad) / 11,
                    "dribbling": sum(p.dribbling for p in squad) / 11,
                    "defense": sum(p.defense for p in squad) / 11,
                    "stamina": sum(p.physical for p in squad) / 11,
                }
                expected = all(averages[a] >= t for a, t in system.required_attributes.items())
                assert suitability(squad, system).suitable is expected

    def test_empty_squad_suitability_raises(self):
        with pytest.raises(EmptySquadError):
            suitability([], TIKI_TAKA)

    def test_recommendations_sorted_with_stable_ties(self):
        squad = _lineup(1, 1)
        ranked = recommend_tactics(squad)
        scores = [fit.score for _, fit in ranked]
        assert scores == sorted(scores, reverse=True)
        assert len(ranked) == len(TACTICAL_SYSTEMS)
        # An all-70 squad misses most requirements, so every score floors at 0
        assert [s.name for s, _ in ranked] == list(TACTICAL_SYSTEMS)

    def test_unknown_names_raise(self):
        with pytest.raises(UnknownTacticError):
            get_formation("2-2-6")
        with pytest.raises(UnknownTacticError):
            get_tactical_system("catenaccio")
        assert get_formation("4-3-3") is not FORMATIONS["4-3-3"]
        assert instruction_impact("park_the_bus").possession_change == -25
        with pytest.raises(UnknownTacticError):
            instruction_impact("route_one")

    def test_adjustment_respects_bounds(self):
        state = MatchState(possession=22, morale=5)
        skills = {"pace": 70, "passing": 70, "defense": 70, "dribbling": 70}
        adjusted = apply_tactical_adjustment(state, "park_the_bus", skills, "5-3-2")
        assert adjusted.possession == POSSESSION_MIN
        assert adjusted.morale == 0
        assert adjusted.injury_risk >= state.injury_risk
        assert state.possession == 22

    def test_instruction_recommendations(self):
        assert recommend_instructions(1, 0, 50, 10, 70, 70) == ["park_the_bus"]
        assert recommend_instructions(0, 1, 50, 10, 70, 70) == ["attacking", "high_press"]
        assert recommend_instructions(0, 0, 60, 45, 70, 70) == ["possession"]

    def test_instruction_catalogue(self):
        assert "name" in describe_instruction("counter_attack")
        with pytest.raises(UnknownTacticError):
            describe_instruction("hoof_it")
        skills = {"pace": 90, "passing": 70, "defense": 70, "dribbling": 70}
        assert tactical_effectiveness("high_press", skills, "3-5-2") == pytest.approx(50 + 10 + 6)

    def test_recommend_formation_respects_style(self):
        for seed in range(10):
            formation = recommend_formation(_lineup(1, 1), "defensive", random.Random(seed))
            assert formation.style in ("defensive", "balanced")
            assert formation is not FORMATIONS[formation.code]

    def test_gegenpressing_phase(self):
        state = initial_gegenpressing_state()
        after, recovered, fatigue = simulate_gegenpressing(state, 100, 100, _FixedRandom())
        assert not recovered
        assert fatigue == pytest.approx(2)
        assert after.fatigue_level == pytest.approx(2)
        assert after.player_coordination == pytest.approx(74)
        assert state.fatigue_level == 0
        assert len(after.pressure_zones) == 3

    def test_tiki_taka_phase(self):
        state = initial_tiki_taka_state()
        after, chance, lost = simulate_tiki_taka(state, 100, 100, 0, _FixedRandom())
        assert not lost
        assert chance == pytest.approx(6.5)
        assert after.possession_percentage == pytest.approx(67)
        pressed, _, _ = simulate_tiki_taka(state, 80, 80, 100, _FixedRandom())
        assert pressed.pass_completion_rate == pytest.approx(73)


# ===================================================================
# Development
# ===================================================================

class TestDevelopment:
    def _result(self, home_goals, away_goals, events=()):
        return MatchResult(home_club_id=1, away_club_id=2, home_goals=home_goals, away_goals=away_goals,
                           events=list(events))

    def test_goal_raises_form_and_win_raises_morale(self):
        player = _player(5, "ST", form=60, morale=60)
        goal = MatchEvent(minute=30, type="goal", player_id=5, player_name="P 5", club_id=1, impact=5)
        updated = apply_match_outcome(player, [goal], self._result(1, 0, [goal]), True, _FixedRandom())
        assert updated.form == 85
        assert updated.morale == 70
        assert updated.injury_weeks == 0
        assert player.form == 60

    def test_events_for_same_id_on_other_club_are_ignored(self):
        player = _player(5, "ST", form=60)
        other = MatchEvent(minute=30, type="goal", player_id=5, player_name="X", club_id=2, impact=5)
        updated = apply_match_outcome(player, [other], self._result(0, 1, [other]), True, _FixedRandom())
        assert updated.form == 60
        assert updated.morale == 45

    def test_form_and_morale_clamped(self):
        player = _player(5, "ST", form=98, morale=3)
        red = MatchEvent(minute=30, type="red_card", player_id=5, player_name="P", club_id=1, impact=-3)
        goals = [MatchEvent(minute=m, type="goal", player_id=5, player_name="P", club_id=1, impact=5)
                 for m in (20, 40)]
        up = apply_match_outcome(player, goals, self._result(0, 3, goals), True, _FixedRandom())
        assert up.form == 100 and up.morale == 0
        down = apply_match_outcome(_player(5, form=4), [red], self._result(1, 1, [red]), True, _FixedRandom())
        assert down.form == 0

    def test_injury_event_sets_layoff(self):
        player = _player(5)
        injury = MatchEvent(minute=50, type="injury", player_id=5, player_name="P", club_id=1, impact=-2)
        updated = apply_match_outcome(player, [injury], self._result(0, 0, [injury]), False, _FixedRandom())
        assert updated.injury_weeks == 1
        assert not updated.is_available

    def test_advance_heals_and_decays(self):
        squad = [_player(1, injury_weeks=2, form=1), _player(2, form=50)]
        after = advance_matchday_players(squad)
        assert [p.injury_weeks for p in after] == [1, 0]
        assert [p.form for p in after] == [0, 48]

    def test_advance_is_identity_for_fit_formless_squad(self):
        squad = [_player(i, form=0, injury_weeks=0) for i in range(5)]
        assert advance_matchday_players(squad) == squad

    def test_young_player_grows_toward_potential(self):
        for seed in range(20):
            player = _player(1, age=22, rating=70, potential=85)
            grown = develop_for_new_season(player, random.Random(seed))
            assert grown.age == 23
            assert 70 <= grown.overall_rating <= 73
            assert grown.overall_rating <= grown.potential
            assert grown.potential == 85

    def test_growth_capped_at_potential(self):
        grown = develop_for_new_season(_player(1, age=20, rating=70, potential=71), random.Random(1))
        assert grown.overall_rating <= 71

    def test_veteran_declines_with_floor(self):
        veteran = develop_for_new_season(_player(1, age=33, rating=41), _FixedRandom())
        assert veteran.age == 34
        assert veteran.overall_rating >= 40
        old = _player(2, age=35, rating=80)
        for seed in range(10):
            declined = develop_for_new_season(old, random.Random(seed))
            assert 78 <= declined.overall_rating <= 80
            assert declined.potential >= old.potential

    def test_contract_resolution(self):
        active = _player(1, contract_end_year=2026)
        assert resolve_contract(active, 2024, random.Random(1)) is active
        expiring = _player(2, contract_end_year=2024)
        stays = resolve_contract(expiring, 2024, _FixedRandom())
        assert stays.contract_end_year == 2027
        stale = _player(3, contract_end_year=2019)
        assert resolve_contract(stale, 2024, _FixedRandom()).contract_end_year == 2027

    def test_academy_releases_overage_prospects(self):
        youth = [
            _player(1, rating=55.0, age=22, potential=60.0, is_youth_player=True),
            _player(2, rating=50.0, age=17, potential=70.0, is_youth_player=True, contract_end_year=2024),
        ]
        kept, released = age_academy(youth, 2024, _FixedRandom())
        assert [p.id for p in kept] == [2]
        assert kept[0].contract_end_year == 2027
        assert [p.id for p in released] == [1]

    def test_lineup_picks_keeper_and_skips_injured(self):
        squad = _lineup(1, 1) + [_player(50, "GK", 90, injury_weeks=3), _player(51, "GK", 60)]
        lineup = select_lineup(squad, FORMATIONS["4-4-2"])
        assert len(lineup) == 11
        assert all(p.id != 50 for p in lineup)
        assert lineup[0].position == "GK" and lineup[0].overall_rating == 70

    def test_lineup_needs_available_players(self):
        with pytest.raises(EmptySquadError):
            select_lineup([_player(1, injury_weeks=2)], FORMATIONS["4-4-2"])

    def test_development_status(self):
        assert development_status(_player(1, age=33)) == "declining"
        assert development_status(_player(2, age=27, rating=75)) == "peaked"
        assert development_status(_player(3, age=20, rating=60, potential=80)) == "developing"
        assert development_status(_player(4, age=27, rating=70, potential=75)) == "established"

    def test_helpers(self):
        assert estimate_transfer_value(25, 80, 82, 3) == 6_400_000
        assert estimate_transfer_value(34, 40, 40, 0) == 400_000
        squad = [_player(1, age=21, rating=82), _player(2, age=24, rating=85), _player(3, age=20, rating=79)]
        assert count_developed_youngsters(squad) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

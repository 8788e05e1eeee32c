"""
Tests for backroom staff effects and squad analytics.

Usage:
    pytest test_staff_squad.py -v
"""
import random

import pytest

from generation import generate_staff, make_staff_member
from models import CoachingEffect, Player, StaffMember
from models.constants import STAFF_RECOMMENDATIONS, STARTING_STAFF_ROLES
from models.staff import staff_salary
from simulation import squad as squad_analysis
from simulation import staff as staff_model
from simulation.development import advance_matchday_players, develop_for_new_season


class _FixedRandom(random.Random):
    """randint picks the low end."""

    def randint(self, a, b):
        return a


def _player(pid, position="CM", rating=70.0, **kwargs):
    defaults = dict(
        id=pid,
        club_id=1,
        first_name="P",
        last_name=str(pid),
        position=position,
        age=25,
        overall_rating=rating,
        potential=max(rating, kwargs.pop("potential", rating)),
        contract_end_year=2030,
    )
    defaults.update(kwargs)
    return Player(**defaults)


def _coach(role, effectiveness, sid="staff_1"):
    return StaffMember(id=sid, role=role, effectiveness=effectiveness)


# ===================================================================
# Staff records
# ===================================================================

class TestStaffMember:
    def test_salary(self):
        # (120k base + 10 years x 5k + 20 points x 1k) x 0.7 market
        assert staff_salary("head_physio", 10, 70, "african") == 133_000
        assert staff_salary("scout", 0, 50, "european") == 50_000

    def test_validation(self):
        with pytest.raises(ValueError):
            StaffMember(role="kit_man")
        with pytest.raises(ValueError):
            StaffMember(nationality="martian")
        with pytest.raises(ValueError):
            StaffMember(effectiveness=101)
        member = StaffMember(id="staff_4", role="scout", specializations=["youth"])
        assert StaffMember.from_dict({**member.to_dict(), "unknown": 1}) == member

    def test_generated_profiles(self):
        rng = random.Random(3)
        for sid in range(1, 30):
            member = make_staff_member(rng, sid, "defensive_coach", 2024, "south_american")
            assert 5 <= member.experience <= 29
            assert 60 <= member.effectiveness <= 89
            assert member.age == 30 + member.experience
            assert member.contract_end_year == 2026 + member.experience // 5
            assert member.salary == staff_salary(
                "defensive_coach", member.experience, member.effectiveness, "south_american")
        staff = generate_staff(random.Random(1), 5, 2024)
        assert [s.role for s in staff] == STARTING_STAFF_ROLES
        assert staff[0].id == "staff_5"


# ===================================================================
# Coaching
# ===================================================================

class TestCoaching:
    def test_empty_posts_are_neutral(self):
        effects = staff_model.coaching_effects([])
        assert effects == CoachingEffect()
        assert effects.average == 50
        assert staff_model.development_bonus("ST", effects, 20, 90).total == 0

    def test_best_coach_rates_the_post(self):
        effects = staff_model.coaching_effects([
            _coach("attacking_coach", 65, "staff_1"),
            _coach("attacking_coach", 80, "staff_2"),
            _coach("sports_psychologist", 70, "staff_3"),
        ])
        assert effects.attacking == 80
        assert effects.psychology == 70
        assert effects.defensive == 50

    def test_bonus_by_position_and_age(self):
        effects = CoachingEffect(attacking=90)
        # 1.5 for under-25s, x1.1 for a potential of 85
        striker = staff_model.development_bonus("ST", effects, 20, 85)
        assert (striker.attacking, striker.technical, striker.defending) == (13, 10, 0)
        keeper = staff_model.development_bonus("GK", CoachingEffect(goalkeeping=80), 31, 70)
        assert keeper.defending == 4
        defender = staff_model.development_bonus("CB", CoachingEffect(defensive=30), 27, 70)
        assert defender.defending == -4

    def test_coaching_lifts_growth_up_to_potential(self):
        young = _player(1, "ST", 60, age=20, potential=80)
        assert develop_for_new_season(young, _FixedRandom()).overall_rating == 61
        coached = develop_for_new_season(young, _FixedRandom(), CoachingEffect(attacking=90))
        assert coached.overall_rating == pytest.approx(63.3)
        capped = develop_for_new_season(
            _player(2, "ST", 60, age=20, potential=61.5), _FixedRandom(), CoachingEffect(attacking=90))
        assert capped.overall_rating == 61.5

    def test_poor_coaching_never_costs_rating(self):
        awful = CoachingEffect(attacking=0, defensive=0, fitness=0, goalkeeping=0, psychology=0)
        young = _player(1, "ST", 60, age=20, potential=80)
        assert develop_for_new_season(young, _FixedRandom(), awful).overall_rating == 60

    def test_veterans_skip_coaching(self):
        veteran = _player(1, "ST", 70, age=31, potential=70)
        after = develop_for_new_season(veteran, _FixedRandom(), CoachingEffect(attacking=100))
        assert after.overall_rating == 70


# ===================================================================
# Medical
# ===================================================================

class TestMedical:
    def test_weights(self):
        medical = staff_model.medical_effectiveness([
            _coach("head_physio", 90, "staff_1"),
            _coach("fitness_coach", 60, "staff_2"),
            _coach("fitness_coach", 80, "staff_3"),
            _coach("sports_psychologist", 60, "staff_4"),
        ])
        assert medical.injury_recovery_rate == 78
        assert medical.prevention_rate == 76
        empty = staff_model.medical_effectiveness([])
        assert (empty.injury_recovery_rate, empty.prevention_rate) == (50, 50)

    @pytest.mark.parametrize("effectiveness,weeks", [(0, 1), (50, 1), (74, 1), (75, 2), (100, 2)])
    def test_recovery_pace(self, effectiveness, weeks):
        assert staff_model.recovery_weeks_per_matchday(effectiveness) == weeks

    def test_recovery_and_prevention(self):
        assert staff_model.apply_injury_recovery(3, 80) == 1
        assert staff_model.apply_injury_recovery(1, 80) == 0
        assert staff_model.injury_prevention_chance(0.02, 50) == 0.02
        assert staff_model.injury_prevention_chance(0.02, 100) == pytest.approx(0.01)
        assert staff_model.injury_prevention_chance(0.001, 100) == 0.0
        assert staff_model.injury_prevention_chance(0.02, 30) == pytest.approx(0.024)

    def test_matchday_heals_at_given_pace(self):
        squad = [_player(1, injury_weeks=3), _player(2, injury_weeks=1)]
        assert [p.injury_weeks for p in advance_matchday_players(squad, 2)] == [1, 0]


# ===================================================================
# Hiring and contracts
# ===================================================================

class TestStaffMarket:
    def test_recommendations(self):
        picks = staff_model.staff_recommendations([], 1_000_000)
        assert picks[0]["role"] == "head_physio"
        assert [p["priority"] for p in picks] == ["critical", "high", "high", "medium", "medium", "medium"]
        cheap = staff_model.staff_recommendations([], 110_000)
        assert {p["role"] for p in cheap} == {"fitness_coach", "goalkeeper_coach", "sports_psychologist"}
        nearly_full = [_coach(role, 70, f"staff_{i}") for i, (role, _, _) in enumerate(
            [r for r in STAFF_RECOMMENDATIONS if r[0] != "goalkeeper_coach"])]
        assert [p["role"] for p in staff_model.staff_recommendations(nearly_full, 1_000_000)] == ["goalkeeper_coach"]

    def test_renewal_and_expiry(self):
        member = StaffMember(id="staff_1", role="scout", salary=100_000, contract_end_year=2025)
        renewed = staff_model.renew_staff_contract(member, 2025)
        assert (renewed.salary, renewed.contract_start_year, renewed.contract_end_year) == (110_000, 2025, 2027)
        assert member.salary == 100_000
        later = StaffMember(id="staff_2", role="scout", salary=80_000, contract_end_year=2027)
        assert staff_model.expiring_staff_contracts([member, later], 2025) == [member]
        assert staff_model.total_staff_costs([member, later]) == 180_000


# ===================================================================
# Squad analytics
# ===================================================================

class TestSquadAnalysis:
    def _squad(self):
        return (
            [_player(i, "CB", 60) for i in range(1, 5)]
            + [_player(i, "CM", 70) for i in range(5, 8)]
            + [_player(i, "ST", 80) for i in range(8, 10)]
            + [_player(10, "GK", 70)]
        )

    def test_average_by_position(self):
        squad = [_player(1, "CB", 60), _player(2, "CB", 65), _player(3, "ST", 80)]
        assert squad_analysis.squad_average_by_position(squad, "CB") == 62
        assert squad_analysis.squad_average_by_position(squad, "GK") == 0

    def test_balance(self):
        report = squad_analysis.analyze_squad_balance(self._squad())
        assert report["strong_positions"] == ["ST"]
        assert report["weak_positions"] == ["CB"]
        assert report["age_balance"] == "very_young"
        assert report["suggestions"] == ["Strengthen CB positions"]

    def test_thin_squad_suggestions(self):
        report = squad_analysis.analyze_squad_balance([_player(1, "GK", 70, age=33)])
        assert report["age_balance"] == "aging"
        assert "Critical: Add defenders to squad" in report["suggestions"]
        assert "Critical: Add midfielders to squad" in report["suggestions"]
        assert "Add forwards/wingers for depth" in report["suggestions"]
        assert "Consider rejuvenating squad with younger players" in report["suggestions"]
        assert squad_analysis.analyze_squad_balance([])["weak_positions"] == []

    @pytest.mark.parametrize("age,label", [(24, "very_young"), (27, "young"), (29, "balanced"),
                                           (30, "slightly_aging"), (32, "aging")])
    def test_age_labels(self, age, label):
        assert squad_analysis.age_balance(age) == label

    def test_projection(self):
        squad = [
            _player(1, rating=60, age=22, potential=90),
            _player(2, rating=70, age=27),
            _player(3, rating=40.5, age=33),
            _player(4, rating=75, contract_end_year=2024),
        ]
        projection = squad_analysis.project_squad_strength(squad, 2024)
        # (63 + 70.5 + 40) / 3
        assert projection == {"projected_rating": 58, "players_leaving": 1, "players_staying": 3, "confidence": 75}
        assert squad_analysis.project_squad_strength([], 2024)["confidence"] == 0

    @pytest.mark.parametrize("used,status", [(120, "overspent"), (95, "critical"), (80, "tight"),
                                             (60, "comfortable"), (40, "abundant")])
    def test_wage_budget(self, used, status):
        utility = squad_analysis.wage_budget_utility(100, used)
        assert utility["status"] == status
        assert utility["remaining_budget"] == 100 - used
        assert utility["percentage_used"] == used

    def test_wage_budget_without_money(self):
        assert squad_analysis.wage_budget_utility(0, 10)["status"] == "overspent"

    def test_youth_readiness(self):
        ready = _player(1, rating=70, age=23, potential=95)
        assert squad_analysis.youth_readiness(ready, 70) == (100, "ready")
        raw = _player(2, rating=45, age=16, potential=60)
        assert squad_analysis.youth_readiness(raw, 75) == (64, "developing")

    def test_reputation(self):
        assert squad_analysis.reputation_multiplier(75, 70) == pytest.approx(1.025)
        assert squad_analysis.reputation_multiplier(70, 70) == 1

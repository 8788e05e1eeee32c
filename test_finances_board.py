"""
Tests for the financial model, board expectations and the transfer market.

Usage:
    pytest test_finances_board.py -v
"""
import random

import pytest

from models import Club, ClubFinances, Player, SeasonStats
from models.finances import SponsorshipDeal
from simulation import board as board_model
from simulation import finances as fin
from simulation import transfers as market
from simulation.errors import ObjectiveNotFoundError


def _club(**overrides):
    defaults = dict(
        id=1,
        name="Test Club",
        budget=50_000_000,
        stadium_capacity=40_000,
        fan_base=300_000,
        ticket_price=50,
        television_deal=24_000_000,
        sponsorship_deals=[SponsorshipDeal(id="sp1", name="Kit", annual_value=12_000_000, performance_bonus=500_000)],
    )
    defaults.update(overrides)
    return Club(**defaults)


def _stats(played, wins, draws, position=0):
    return SeasonStats(
        year=2024,
        matches_played=played,
        wins=wins,
        draws=draws,
        losses=played - wins - draws,
        points_total=wins * 3 + draws,
        league_position=position,
    )


# ===================================================================
# Finances
# ===================================================================

class TestFinancialStatus:
    @pytest.mark.parametrize("funds,expenses,status", [
        (1_000_000, 50_000, "good"),
        (1_300_000, 50_000, "excellent"),
        (400_000, 50_000, "stable"),
        (150_000, 50_000, "struggling"),
        (50_000, 50_000, "critical"),
        (-10, 50_000, "critical"),
    ])
    def test_runway_bands(self, funds, expenses, status):
        assert fin.financial_status(funds, expenses) == status

    def test_zero_expenses(self):
        assert fin.financial_status(10, 0) == "excellent"
        assert fin.financial_status(0, 0) == "critical"


class TestRevenueAndExpenses:
    def test_attendance_rewards_higher_position(self):
        assert fin.attendance_percentage(1) > fin.attendance_percentage(10) > fin.attendance_percentage(20)
        assert fin.attendance_percentage(20) == 43.0
        assert fin.attendance_percentage(1) == 100.0

    def test_ticket_and_merchandise(self):
        assert fin.ticket_revenue(40_000, 50, 50, 2) == 2_000_000
        assert fin.merchandise_revenue(100_000, 2, 10) == 1_500_000
        assert fin.merchandise_revenue(100_000, 18, 10) == 700_000

    def test_prize_money_table(self):
        assert fin.prize_money(1) == 15_000_000
        assert fin.prize_money(20) == 25_000
        assert fin.prize_money(25) == 25_000

    def test_wages_adjust_for_age(self):
        young = Player(id=1, age=20, overall_rating=70, potential=70)
        prime = Player(id=2, age=27, overall_rating=70, potential=70)
        veteran = Player(id=3, age=33, overall_rating=70, potential=70)
        assert fin.weekly_wage(prime) == 140_000
        assert fin.weekly_wage(young) == pytest.approx(182_000)
        assert fin.weekly_wage(veteran) == pytest.approx(98_000)
        assert fin.total_wages([prime]) == 140_000 * 52

    def test_monthly_expenses_breakdown(self):
        club = _club()
        expenses = fin.monthly_expenses(club, [Player(id=1, age=27, overall_rating=70, potential=70)])
        assert set(expenses) == {"player_wages", "staff_salaries", "facility_maintenance"}
        assert expenses["player_wages"] == pytest.approx(140_000 * 52 / 12)
        assert all(v >= 0 for v in expenses.values())

    def test_close_month_moves_funds(self):
        club = _club()
        squad = [Player(id=i, age=26, overall_rating=70, potential=70) for i in range(20)]
        opening = fin.initial_finances(club, squad)
        closed = fin.close_month(opening, club, squad, league_position=3)
        projection = fin.project_monthly_revenue(club, 3)
        expected = opening.available_funds + projection.total_revenue - sum(fin.monthly_expenses(club, squad).values())
        assert closed.available_funds == pytest.approx(expected)
        assert closed.months_closed == 1
        assert closed.monthly_revenue == pytest.approx(projection.total_revenue)
        assert opening.months_closed == 0

    def test_performance_financials(self):
        deals = _club().sponsorship_deals
        budget, bonus, penalties = fin.apply_performance_financials(10_000_000, 1, 0.7, deals)
        assert bonus == 15_000_000 + 500_000 + 2_000_000
        assert penalties == 0
        assert budget == 10_000_000 + bonus
        budget, bonus, penalties = fin.apply_performance_financials(10_000_000, 19, 0.2, deals)
        assert penalties == 6_000_000
        assert budget == 10_000_000 + 50_000 - 6_000_000

    def test_month_of_losses_runs_into_debt(self):
        month = fin.simulate_financial_month(ClubFinances(available_funds=100_000), 50_000, 80_000)
        assert month.available_funds == 70_000
        assert month.profit_margin == pytest.approx(-60)
        assert month.financial_status == "critical"
        assert month.debt_level == 0
        overdrawn = fin.simulate_financial_month(month, 0, 80_000)
        assert overdrawn.debt_level == 10_000
        assert overdrawn.profit_margin == 0

    def test_season_budget_follows_position(self):
        assert fin.season_budget(10_000_000, 1, 24_000_000) == 53_900_000
        assert fin.season_budget(10_000_000, 10, 24_000_000) == 10_000_000 + 24_000_000 + fin.prize_money(10)
        assert fin.season_budget(10_000_000, 20, 24_000_000) == 30_622_500

    def test_budget_allocation_sums_to_budget(self):
        allocation = fin.budget_allocation(10_000_000)
        assert sum(allocation.values()) == 10_000_000
        assert allocation["player_wages"] == 5_000_000

    def test_warnings(self):
        broke = ClubFinances(total_budget=1_000_000, available_funds=-800_000, weekly_wages=50_000,
                             debt_level=800_000, profit_margin=-10, financial_status="critical")
        warnings = fin.financial_warnings(broke)
        assert len(warnings) == 4
        assert fin.financial_warnings(ClubFinances(available_funds=1e9, financial_status="excellent")) == []


# ===================================================================
# Board
# ===================================================================

class TestObjectives:
    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
    def test_five_fixed_objectives(self, difficulty):
        objectives = board_model.generate_objectives(2024, difficulty, 8)
        assert [o.type for o in objectives] == [
            "league_position", "points_target", "cup_win", "player_development", "financial",
        ]
        assert len({o.id for o in objectives}) == 5

    def test_harder_tiers_ask_more_and_pay_more(self):
        easy = board_model.generate_objectives(2024, "easy", 8)
        hard = board_model.generate_objectives(2024, "hard", 8)
        assert hard[0].target < easy[0].target
        assert hard[1].target > easy[1].target
        assert all(h.reward > e.reward for h, e in zip(hard, easy))

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            board_model.generate_objectives(2024, "nightmare", 8)

    def test_progress_and_sticky_completion(self):
        expectation = board_model.create_expectation(2024, "medium", 10)
        halfway = board_model.update_progress(expectation, "obj_2", 30)
        assert halfway.objective("obj_2").progress == pytest.approx(50)
        assert not halfway.objective("obj_2").completed
        done = board_model.update_progress(halfway, "obj_2", 60)
        assert done.objective("obj_2").completed
        dipped = board_model.update_progress(done, "obj_2", 10)
        assert dipped.objective("obj_2").completed
        assert not expectation.objective("obj_2").completed

    def test_position_progress_counts_down(self):
        expectation = board_model.create_expectation(2024, "medium", 10)
        assert board_model.update_progress(expectation, "obj_1", 6).objective("obj_1").completed
        partial = board_model.update_progress(expectation, "obj_1", 9).objective("obj_1")
        assert partial.progress == pytest.approx(50)
        assert board_model.update_progress(expectation, "obj_1", 15).objective("obj_1").progress == 0

    def test_unknown_objective(self):
        with pytest.raises(ObjectiveNotFoundError):
            board_model.update_progress(board_model.create_expectation(2024, "easy", 5), "obj_9", 1)


class TestBoardMetrics:
    def test_metrics_clamped(self):
        expectation = board_model.create_expectation(2024, "hard", 15)
        for played, wins, draws in ((0, 0, 0), (10, 0, 0), (10, 10, 0), (38, 5, 20)):
            refreshed = board_model.refresh_metrics(expectation, _stats(played, wins, draws, 12), played, 38)
            for value in (refreshed.job_security, refreshed.board_confidence,
                          refreshed.pressure_level, refreshed.manager_rating):
                assert 0 <= value <= 100

    def test_winning_improves_security(self):
        expectation = board_model.create_expectation(2024, "medium", 10)
        assert board_model.job_security(expectation, 10, 8, 1) > board_model.job_security(expectation, 10, 1, 1)
        assert board_model.job_security(expectation, 10, 8, 1) == 75
        assert board_model.job_security(expectation, 10, 1, 1) == 15

    def test_confidence_rises_late_in_season(self):
        expectation = board_model.create_expectation(2024, "medium", 10)
        early = board_model.board_confidence(expectation, 60, 5, 38)
        late = board_model.board_confidence(expectation, 60, 38, 38)
        assert late - early == pytest.approx(10)

    def test_manager_rating(self):
        assert board_model.manager_rating(_stats(0, 0, 0)) == 50
        assert board_model.manager_rating(_stats(10, 8, 1, position=2)) == 100
        assert board_model.manager_rating(_stats(10, 1, 1, position=15)) == 20

    def test_sacking_and_labels(self):
        expectation = board_model.create_expectation(2024, "hard", 15)
        assert board_model.should_sack(expectation, 5)
        assert board_model.should_sack(expectation, 50)
        assert not board_model.should_sack(board_model.create_expectation(2024, "easy", 15), 50)
        on_course = board_model.update_progress(board_model.create_expectation(2024, "hard", 3), "obj_2", 40)
        assert not board_model.should_sack(on_course, 60)
        assert board_model.job_status(85) == "Secure"
        assert board_model.job_status(15) == "Critical"

    def test_bonus_and_penalties(self):
        expectation = board_model.update_progress(board_model.create_expectation(2024, "easy", 5), "obj_3", 1)
        assert board_model.season_bonus(expectation) == 100_000
        assert board_model.season_penalties(expectation) == 20_000 + 30_000 + 15_000 + 25_000

    @pytest.mark.parametrize("position,difficulty", [(1, "hard"), (4, "hard"), (5, "medium"), (10, "medium"),
                                                     (11, "easy"), (20, "easy")])
    def test_next_difficulty(self, position, difficulty):
        assert board_model.next_difficulty(position, 20) == difficulty


# ===================================================================
# Transfers
# ===================================================================

class TestTransfers:
    def test_market_sorted_by_value(self):
        listings = market.generate_transfer_market(random.Random(1), ["A", "B"], 1000, 2024, count=20)
        values = [t.market_value for t in listings]
        assert values == sorted(values, reverse=True)
        assert len({t.player.id for t in listings}) == 20
        assert all(t.selling_club in ("A", "B") for t in listings)

    def test_negotiation_responses(self):
        listing = market.generate_transfer_market(random.Random(2), ["A"], 1, 2024, count=1)[0]
        lowball = market.make_offer(listing, "Us", int(listing.asking_price * 0.5), 1)
        assert market.ai_response(lowball, random.Random(1)) == "reject"
        middling = market.make_offer(listing, "Us", int(listing.asking_price * 0.8), 2)
        assert market.ai_response(middling, random.Random(1)) == "counter"
        countered = market.negotiate(middling, random.Random(1))
        assert countered.status == "countered"
        assert middling.offer_price < countered.offer_price <= listing.asking_price
        assert countered.negotiation_round == 2

    def test_bad_response(self):
        listing = market.generate_transfer_market(random.Random(2), ["A"], 1, 2024, count=1)[0]
        with pytest.raises(ValueError):
            market.respond_to_offer(market.make_offer(listing, "Us", 1, 1), "maybe")

    def test_filters(self):
        listings = market.generate_transfer_market(random.Random(3), ["Alpha City"], 1, 2024, count=30)
        strikers = market.filter_by_position(listings, "ST")
        assert all(t.player.position == "ST" for t in strikers)
        cheap = market.filter_by_budget(listings, 2_000_000)
        assert all(t.market_value <= 2_000_000 for t in cheap)
        assert all(t.player.overall_rating >= 85 for t in market.filter_by_rating(listings, 85))
        assert market.search_listings(listings, "alpha") == listings

    def test_incoming_offers_skip_youth(self):
        squad = [
            Player(id=i, age=24, overall_rating=75, potential=75, contract_end_year=2027, is_youth_player=(i % 2 == 0))
            for i in range(40)
        ]
        offers = market.generate_incoming_offers(squad, 2024, ["Rivals"], random.Random(4), chance=1.0)
        assert {o.player_id for o in offers} == {p.id for p in squad if not p.is_youth_player}
        assert all(o.amount > 0 for o in offers)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

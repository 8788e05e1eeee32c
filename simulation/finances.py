"""
Financial model: stateless revenue, expense and health calculations.

The career orchestrator calls ``close_month`` every few matchdays and stores the
result on ``CareerGameState.finances``; every other function is a pure formula.
Monetary amounts are annual unless the name says monthly or weekly.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence

from models.club import Club
from models.constants import (
    WAGE_PER_RATING_POINT,
    WEEKS_PER_YEAR,
    YOUNG_WAGE_MULTIPLIER,
    VETERAN_WAGE_MULTIPLIER,
    YOUNG_PLAYER_AGE,
    STAFF_BASE_SALARIES,
    FACILITY_COST_PER_1000_SEATS,
    FACILITY_COST_TRAINING,
    FACILITY_COST_MEDICAL,
    FACILITY_COST_ACADEMY,
    FINANCIAL_STATUS_THRESHOLDS,
    DEFAULT_TICKET_PRICE,
    HOME_MATCHES_PER_MONTH,
    MERCHANDISE_PER_FAN,
    PRIZE_MONEY,
    BUDGET_ALLOCATION_SHARES,
    DEFAULT_LEAGUE_SIZE,
)
from models.finances import ClubFinances, RevenueProjection, SponsorshipDeal
from models.player import Player
from models.staff import StaffMember
from simulation.staff import total_staff_costs

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


# ===================================================================
# Revenue
# ===================================================================

def ticket_revenue(capacity: int, attendance_pct: float, price: float, matches_per_month: int) -> int:
    attendance = capacity * (attendance_pct / 100)
    return round(attendance * price * matches_per_month)


def merchandise_revenue(fan_base: int, league_position: int, revenue_per_fan: float) -> int:
    """Annual merchandise: 1.5x for the top 4, 1.2x for the top 8, 0.7x below 15th."""
    multiplier = 1.0
    if league_position <= 4:
        multiplier = 1.5
    elif league_position <= 8:
        multiplier = 1.2
    elif league_position > 15:
        multiplier = 0.7
    return round(fan_base * revenue_per_fan * multiplier)


def attendance_percentage(league_position: int, league_size: int = DEFAULT_LEAGUE_SIZE) -> float:
    """Higher in the table fills more seats: 40% floor plus 3 points per place above bottom."""
    places_above_bottom = max(0, league_size - league_position + 1)
    return min(100.0, 40.0 + places_above_bottom * 3)


def prize_money(league_position: int) -> int:
    if 1 <= league_position <= len(PRIZE_MONEY):
        return PRIZE_MONEY[league_position - 1]
    return PRIZE_MONEY[-1]


# ===================================================================
# Expenses
# ===================================================================

def weekly_wage(player: Player) -> float:
    wage = player.overall_rating * WAGE_PER_RATING_POINT
    if player.age < YOUNG_PLAYER_AGE:
        wage *= YOUNG_WAGE_MULTIPLIER
    elif player.age > 30:
        wage *= VETERAN_WAGE_MULTIPLIER
    return wage


def total_wages(players: Iterable[Player]) -> float:
    """Annual wage bill: rating x 2000 per week, age-adjusted, x 52."""
    return sum(weekly_wage(p) for p in players) * WEEKS_PER_YEAR


def staff_salaries(manager_salary: float, coaching_staff: int, medical_staff: int, scouting_staff: int) -> float:
    return (
        manager_salary
        + coaching_staff * STAFF_BASE_SALARIES["coach"]
        + medical_staff * STAFF_BASE_SALARIES["medical"]
        + scouting_staff * STAFF_BASE_SALARIES["scout"]
    )


def facility_maintenance(
    stadium_capacity: int,
    training_ground_quality: int,
    medical_facility_quality: int,
    youth_academy_quality: int,
) -> int:
    return round(
        stadium_capacity / 1000 * FACILITY_COST_PER_1000_SEATS
        + training_ground_quality * FACILITY_COST_TRAINING
        + medical_facility_quality * FACILITY_COST_MEDICAL
        + youth_academy_quality * FACILITY_COST_ACADEMY
    )


def monthly_expenses(
    club: Club,
    squad: Iterable[Player],
    staff: Sequence[StaffMember] | None = None,
) -> dict[str, float]:
    """Monthly share of wages, staff salaries and facility upkeep.

    With a *staff* roster the backroom bill is the manager plus those
    contracts; without one it falls back to the club's headcounts.
    """
    if staff is None:
        backroom = staff_salaries(club.manager.salary, club.coaching_staff, club.medical_staff, club.scouting_staff)
    else:
        backroom = club.manager.salary + total_staff_costs(staff)
    return {
        "player_wages": total_wages(squad) / MONTHS_PER_YEAR,
        "staff_salaries": backroom / MONTHS_PER_YEAR,
        "facility_maintenance": facility_maintenance(
            club.stadium_capacity,
            club.training_ground_quality,
            club.medical_facility_quality,
            club.youth_academy_quality,
        ) / MONTHS_PER_YEAR,
    }


# ===================================================================
# Health
# ===================================================================

def financial_status(available_funds: float, monthly_expenses: float) -> str:
    """Classify by months of runway: >24 excellent, >12 good, >6 stable, >2 struggling.

    With no expenses the runway is unbounded: any positive balance is excellent,
    otherwise critical.
    """
    if monthly_expenses <= 0:
        return "excellent" if available_funds > 0 else "critical"
    months = available_funds / monthly_expenses
    for threshold, status in FINANCIAL_STATUS_THRESHOLDS:
        if months > threshold:
            return status
    return "critical"


def project_monthly_revenue(
    club: Club,
    league_position: int,
    month: int = 1,
    matches_this_month: int = HOME_MATCHES_PER_MONTH,
    league_size: int = DEFAULT_LEAGUE_SIZE,
) -> RevenueProjection:
    """Forecast one month's revenue. Expenses and net profit are left for the caller."""
    price = club.ticket_price or DEFAULT_TICKET_PRICE
    tickets = ticket_revenue(
        club.stadium_capacity,
        attendance_percentage(league_position, league_size),
        price,
        matches_this_month,
    )
    merchandise = merchandise_revenue(club.fan_base, league_position, MERCHANDISE_PER_FAN) / MONTHS_PER_YEAR
    sponsorship = sum(d.annual_value for d in club.sponsorship_deals) / MONTHS_PER_YEAR
    television = club.television_deal / MONTHS_PER_YEAR
    return RevenueProjection(
        month=month,
        ticket_revenue=tickets,
        sponsorship_revenue=sponsorship,
        merchandise_revenue=merchandise,
        television_revenue=television,
    )


def simulate_financial_month(
    finances: ClubFinances,
    monthly_revenue: float,
    expenses: float,
) -> ClubFinances:
    """Apply one month of cash flow and reclassify health."""
    net = monthly_revenue - expenses
    funds = finances.available_funds + net
    return replace(
        finances,
        available_funds=funds,
        monthly_revenue=monthly_revenue,
        profit_margin=(net / monthly_revenue * 100) if monthly_revenue else 0.0,
        financial_status=financial_status(funds, expenses),
        debt_level=max(0.0, -funds),
    )


def close_month(
    finances: ClubFinances,
    club: Club,
    squad: Iterable[Player],
    league_position: int,
    league_size: int = DEFAULT_LEAGUE_SIZE,
    staff: Sequence[StaffMember] | None = None,
) -> ClubFinances:
    """Project revenue, compute expenses, and apply one month to *finances*."""
    players = list(squad)
    month = finances.months_closed % MONTHS_PER_YEAR + 1
    projection = project_monthly_revenue(club, league_position, month=month, league_size=league_size)
    expenses = monthly_expenses(club, players, staff)
    total_expenses = sum(expenses.values())
    updated = simulate_financial_month(finances, projection.total_revenue, total_expenses)
    updated = replace(
        updated,
        ticket_revenue=projection.ticket_revenue,
        sponsorship_revenue=projection.sponsorship_revenue,
        merchandise_revenue=projection.merchandise_revenue,
        television_revenue=projection.television_revenue,
        player_wages=expenses["player_wages"],
        staff_salaries=expenses["staff_salaries"],
        facility_maintenance=expenses["facility_maintenance"],
        weekly_wages=sum(weekly_wage(p) for p in players),
        months_closed=finances.months_closed + 1,
    )
    logger.info(
        "Month %d closed for %s: revenue %.0f, expenses %.0f, status %s",
        updated.months_closed, club.name, projection.total_revenue, total_expenses,
        updated.financial_status,
    )
    return updated


# ===================================================================
# Season-level adjustments
# ===================================================================

def apply_performance_financials(
    current_budget: float,
    league_position: int,
    win_rate: float,
    sponsorship_deals: Iterable[SponsorshipDeal],
) -> tuple[float, float, float]:
    """End-of-season bonuses and penalties. Returns (new budget, bonus, penalties).

    *win_rate* is a 0-1 fraction.
    """
    bonus = float(prize_money(league_position))
    penalties = 0.0
    if league_position <= 4:
        bonus += sum(d.performance_bonus for d in sponsorship_deals)
    if league_position > 18:
        penalties += 5_000_000
    if win_rate > 0.6:
        bonus += 2_000_000
    elif win_rate < 0.3:
        penalties += 1_000_000
    return current_budget + bonus - penalties, bonus, penalties


def season_budget(current_budget: float, league_position: int, television_deal: float) -> int:
    """Next season's budget: TV money and prize money, then a sponsorship swing."""
    budget = current_budget + television_deal + prize_money(league_position)
    if league_position <= 4:
        budget *= 1.1
    elif league_position <= 8:
        budget *= 1.05
    elif league_position > 15:
        budget *= 0.9
    return round(budget)


def budget_allocation(total_budget: float) -> dict[str, int]:
    return {key: round(total_budget * share) for key, share in BUDGET_ALLOCATION_SHARES.items()}


def financial_warnings(finances: ClubFinances) -> list[str]:
    warnings: list[str] = []
    if finances.financial_status == "critical":
        warnings.append("CRITICAL: club finances are in severe danger")
    elif finances.financial_status == "struggling":
        warnings.append("WARNING: club finances are struggling")
    if finances.debt_level > finances.total_budget * 0.5:
        warnings.append("High debt level; consider selling players")
    if finances.available_funds < finances.weekly_wages * 4:
        warnings.append("Low cash reserves; wages may not be covered for a month")
    if finances.profit_margin < 0:
        warnings.append("Operating at a loss: revenue is below expenses")
    return warnings


def initial_finances(
    club: Club,
    squad: Iterable[Player],
    staff: Sequence[StaffMember] | None = None,
) -> ClubFinances:
    """Opening ledger for a club: funds equal the budget, status from projected expenses."""
    players = list(squad)
    expenses = monthly_expenses(club, players, staff)
    total = sum(expenses.values())
    return ClubFinances(
        total_budget=club.budget,
        available_funds=float(club.budget),
        weekly_wages=sum(weekly_wage(p) for p in players),
        player_wages=expenses["player_wages"],
        staff_salaries=expenses["staff_salaries"],
        facility_maintenance=expenses["facility_maintenance"],
        financial_status=financial_status(club.budget, total),
    )

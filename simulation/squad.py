"""
Squad analytics for the managed club: balance by position, next-season
projection, wage headroom and academy readiness.
"""
from __future__ import annotations

from typing import Any, Iterable

from models.constants import (
    POSITIONS_ATTACK,
    POSITIONS_DEFENCE,
    POSITIONS_MIDFIELD,
    RATING_FLOOR,
    YOUTH_RELEASE_AGE,
)
from models.player import Player

BALANCE_MARGIN = 5


def squad_average_by_position(squad: Iterable[Player], position: str) -> int:
    """Rounded mean rating of the players listed at *position*; 0 when there are none."""
    ratings = [p.overall_rating for p in squad if p.position == position]
    return round(sum(ratings) / len(ratings)) if ratings else 0


def age_balance(average_age: float) -> str:
    if average_age < 26:
        return "very_young"
    if average_age < 28:
        return "young"
    if average_age > 31:
        return "aging"
    if average_age > 29:
        return "slightly_aging"
    return "balanced"


def analyze_squad_balance(squad: Iterable[Player]) -> dict[str, Any]:
    """Strong and weak positions, age profile, and what to fix first.

    A position is strong (weak) when its mean rating sits more than 5 above
    (below) the mean of the position means.
    """
    squad = list(squad)
    if not squad:
        return {"strong_positions": [], "weak_positions": [], "age_balance": "balanced",
                "suggestions": ["Squad is empty; sign players before the season starts"]}

    by_position: dict[str, list[float]] = {}
    for p in squad:
        by_position.setdefault(p.position, []).append(p.overall_rating)
    means = {pos: sum(r) / len(r) for pos, r in by_position.items()}
    overall = sum(means.values()) / len(means)
    average_age = sum(p.age for p in squad) / len(squad)

    strong = sorted(pos for pos, m in means.items() if m > overall + BALANCE_MARGIN)
    weak = sorted(pos for pos, m in means.items() if m < overall - BALANCE_MARGIN)

    suggestions: list[str] = []
    if weak:
        suggestions.append(f"Strengthen {', '.join(weak)} positions")
    if average_age > 30:
        suggestions.append("Consider rejuvenating squad with younger players")
    if average_age < 25:
        suggestions.append("Squad may lack experience; consider adding experienced players")
    if sum(1 for p in squad if p.position in POSITIONS_DEFENCE) < 4:
        suggestions.append("Critical: Add defenders to squad")
    if sum(1 for p in squad if p.position in POSITIONS_MIDFIELD) < 3:
        suggestions.append("Critical: Add midfielders to squad")
    if sum(1 for p in squad if p.position in POSITIONS_ATTACK) < 2:
        suggestions.append("Add forwards/wingers for depth")

    return {
        "strong_positions": strong,
        "weak_positions": weak,
        "age_balance": age_balance(average_age),
        "suggestions": suggestions,
    }


def project_squad_strength(squad: Iterable[Player], season: int) -> dict[str, int]:
    """Rough next-season average for the players still under contract.

    Under-25s close a tenth of their potential gap (at most 3), 25-29 add half
    a point, older players lose one point down to the rating floor.
    """
    squad = list(squad)
    projected = 0.0
    staying = 0
    for p in squad:
        if p.contract_end_year <= season:
            continue
        staying += 1
        if p.age < 25:
            projected += p.overall_rating + min(3.0, (p.potential - p.overall_rating) * 0.1)
        elif p.age < 30:
            projected += p.overall_rating + 0.5
        else:
            projected += max(p.overall_rating - 1, RATING_FLOOR)
    return {
        "projected_rating": round(projected / max(1, staying)),
        "players_leaving": len(squad) - staying,
        "players_staying": staying,
        "confidence": round(100 * staying / len(squad)) if squad else 0,
    }


def wage_budget_utility(available_budget: float, used_wages: float) -> dict[str, Any]:
    """How much of the wage budget is committed, and the headroom left."""
    used_pct = used_wages / available_budget * 100 if available_budget > 0 else float("inf")
    if used_pct > 100:
        status = "overspent"
    elif used_pct > 90:
        status = "critical"
    elif used_pct > 75:
        status = "tight"
    elif used_pct > 50:
        status = "comfortable"
    else:
        status = "abundant"
    return {
        "percentage_used": round(used_pct) if used_pct != float("inf") else None,
        "remaining_budget": available_budget - used_wages,
        "status": status,
    }


def youth_readiness(player: Player, senior_average: float) -> tuple[int, str]:
    """Readiness score 0-100+ for an academy player against the senior squad, with a label.

    Weighs age toward YOUTH_RELEASE_AGE 30%, rating against the senior average
    40%, and potential against 95 30%.
    """
    age_score = min(player.age / YOUTH_RELEASE_AGE * 100, 100)
    rating_score = player.overall_rating / senior_average * 100 if senior_average > 0 else 100
    potential_score = player.potential / 95 * 100
    score = round(age_score * 0.3 + rating_score * 0.4 + potential_score * 0.3)
    if score >= 80:
        label = "ready"
    elif score >= 65:
        label = "close"
    elif score >= 50:
        label = "developing"
    else:
        label = "too_young"
    return score, label


def reputation_multiplier(club_average: float, league_average: float) -> float:
    """Development pace at a club relative to the league: +0.5% per rating point above average."""
    return 1 + (club_average - league_average) * 0.005

"""
Board expectation tracker.

Five objectives per season (position, points, cup, youth development, financial
health), generated from the difficulty tier. Job security, board confidence and
pressure are derived independently from the objectives and results, each
clamped to 0-100.
"""
from __future__ import annotations

import copy

from models.board import BoardExpectation, SeasonObjective
from models.career import SeasonStats
from models.constants import DIFFICULTIES, DIFFICULTY_SETTINGS, DEFAULT_LEAGUE_SIZE
from simulation.errors import ObjectiveNotFoundError

SACKING_EXEMPT_OBJECTIVES = ("cup_win",)


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def generate_objectives(
    season: int,
    difficulty: str,
    current_position: int,
    months_in_season: int = 10,
) -> list[SeasonObjective]:
    """Exactly five objectives with difficulty-scaled targets and rewards.

    The league-position objective counts progress the other way round (lower is
    better), so its progress comes from the position gap, not current / target.
    """
    if difficulty not in DIFFICULTY_SETTINGS:
        raise ValueError(f"difficulty must be one of {DIFFICULTIES}, got {difficulty!r}")
    position_target, points_target, multiplier = DIFFICULTY_SETTINGS[difficulty]

    position_progress = _position_progress(position_target, current_position)
    return [
        SeasonObjective(
            id="obj_1",
            type="league_position",
            title=f"Finish in the top {position_target}",
            description=f"Finish the {season} season in the top {position_target} positions",
            target=position_target,
            current=current_position,
            reward=50_000 * multiplier,
            penalty=20_000,
            difficulty=difficulty,
            completed=False,
            progress=position_progress,
        ),
        SeasonObjective(
            id="obj_2",
            type="points_target",
            title="Accumulate points",
            description=f"Earn at least {points_target} points this season",
            target=points_target,
            reward=75_000 * multiplier,
            penalty=30_000,
            difficulty=difficulty,
        ),
        SeasonObjective(
            id="obj_3",
            type="cup_win",
            title="Win the domestic cup",
            description="Win the domestic cup competition",
            target=1,
            reward=100_000 * multiplier,
            penalty=50_000,
            difficulty=difficulty,
        ),
        SeasonObjective(
            id="obj_4",
            type="player_development",
            title="Develop young talent",
            description="Develop 3 players under 23 to an 80+ overall rating",
            target=3,
            reward=40_000 * multiplier,
            penalty=15_000,
            difficulty=difficulty,
        ),
        SeasonObjective(
            id="obj_5",
            type="financial",
            title="Maintain financial health",
            description="Keep monthly profit positive throughout the season",
            target=months_in_season,
            reward=30_000 * multiplier,
            penalty=25_000,
            difficulty=difficulty,
        ),
    ]


def _position_progress(target: float, position: float) -> float:
    if position <= 0:
        return 0.0
    if position <= target:
        return 100.0
    return max(0.0, (target - position) / target * 100 + 100)


def create_expectation(season: int, difficulty: str, current_position: int, months_in_season: int = 10) -> BoardExpectation:
    return BoardExpectation(
        season_year=season,
        difficulty=difficulty,
        objectives=generate_objectives(season, difficulty, current_position, months_in_season),
    )


def update_progress(expectation: BoardExpectation, objective_id: str, current: float) -> BoardExpectation:
    """Set an objective's current value and recompute its progress.

    Completion is sticky: once an objective reaches 100% it stays completed
    even if later progress falls back.
    """
    updated = copy.deepcopy(expectation)
    objective = updated.objective(objective_id)
    if objective is None:
        raise ObjectiveNotFoundError(objective_id)
    objective.current = current
    if objective.type == "league_position":
        objective.progress = _position_progress(objective.target, current)
    else:
        objective.progress = current / objective.target * 100
    if objective.progress >= 100:
        objective.completed = True
    return updated


# ===================================================================
# Derived metrics
# ===================================================================

def job_security(expectation: BoardExpectation, matches_played: int, wins: int, draws: int) -> float:
    win_rate = wins / matches_played * 100 if matches_played else 0.0
    points_per_game = (wins * 3 + draws) / matches_played if matches_played else 0.0

    score = 50.0 + expectation.completed_count * 10
    if win_rate >= 60:
        score += 15
    elif win_rate >= 45:
        score += 5
    elif win_rate < 30:
        score -= 20

    if points_per_game >= 2:
        score += 10
    elif points_per_game < 1.5:
        score -= 15
    return _clamp(score)


def board_confidence(
    expectation: BoardExpectation,
    manager_rating: float,
    matchdays_played: int,
    matchdays_in_season: int,
) -> float:
    """50 base, up to +30 from objective progress, up to +15 from the manager
    rating, and up to +10 once the season is past halfway."""
    confidence = 50.0
    if expectation.objectives:
        avg_progress = sum(min(100.0, o.progress) for o in expectation.objectives) / len(expectation.objectives)
        confidence += avg_progress / 100 * 30
    confidence += manager_rating / 100 * 15
    if matchdays_in_season > 0:
        completion = matchdays_played / matchdays_in_season * 100
        if completion > 50:
            confidence += min(10.0, (completion - 50) / 5)
    return _clamp(confidence)


def pressure_level(expectation: BoardExpectation, security: float) -> float:
    pressure = 0.0
    if expectation.objectives:
        incomplete = sum(1 for o in expectation.objectives if not o.completed)
        pressure = incomplete / len(expectation.objectives) * 50
    if security < 30:
        pressure += 40
    elif security < 50:
        pressure += 20
    elif security > 80:
        pressure -= 10
    return _clamp(pressure)


def manager_rating(stats: SeasonStats, expected_position: int = 5) -> float:
    """0-100 verdict on the season so far from points efficiency, position and win rate."""
    rating = 50.0
    if stats.matches_played == 0:
        return rating
    efficiency = stats.points_total / (stats.matches_played * 3) * 100
    if efficiency > 70:
        rating += 30
    elif efficiency > 60:
        rating += 20
    elif efficiency > 50:
        rating += 10

    if stats.league_position and stats.league_position < expected_position:
        rating += 15
    elif stats.league_position > expected_position + 3:
        rating -= 15

    win_rate = stats.win_rate * 100
    if win_rate > 50:
        rating += 10
    elif win_rate < 30:
        rating -= 15
    return _clamp(rating)


def refresh_metrics(
    expectation: BoardExpectation,
    stats: SeasonStats,
    matchdays_played: int,
    matchdays_in_season: int,
) -> BoardExpectation:
    """Recompute the four derived scalars on a copy of *expectation*."""
    updated = copy.deepcopy(expectation)
    position_target = DIFFICULTY_SETTINGS[expectation.difficulty][0]
    updated.manager_rating = manager_rating(stats, expected_position=position_target)
    updated.job_security = job_security(updated, stats.matches_played, stats.wins, stats.draws)
    updated.board_confidence = board_confidence(
        updated, updated.manager_rating, matchdays_played, matchdays_in_season
    )
    updated.pressure_level = pressure_level(updated, updated.job_security)
    return updated


def should_sack(expectation: BoardExpectation, security: float) -> bool:
    """Sack below 10 security, or when three hard objectives sit under 25%.

    No cup competition is played, so the cup objective never counts here.
    """
    if security < 10:
        return True
    failing_hard = [
        o for o in expectation.objectives
        if o.type not in SACKING_EXEMPT_OBJECTIVES
        and o.difficulty == "hard" and not o.completed and o.progress < 25
    ]
    return len(failing_hard) >= 3


def season_bonus(expectation: BoardExpectation) -> float:
    return sum(o.reward for o in expectation.objectives if o.completed)


def season_penalties(expectation: BoardExpectation) -> float:
    return sum(o.penalty for o in expectation.objectives if not o.completed)


def job_status(security: float) -> str:
    if security >= 80:
        return "Secure"
    if security >= 60:
        return "Stable"
    if security >= 40:
        return "Under Scrutiny"
    if security >= 20:
        return "In Danger"
    return "Critical"


def next_difficulty(final_position: int, league_size: int = DEFAULT_LEAGUE_SIZE) -> str:
    """Difficulty for next season's objectives from where the club finished."""
    if final_position <= 4:
        return "hard"
    if final_position <= league_size // 2:
        return "medium"
    return "easy"

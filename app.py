"""
Football career: Flask JSON API.
Thin collaborator over the simulation core. Careers live in an in-memory store;
every mutating call on a career runs under that career's lock so concurrent
requests cannot play the same matchday twice.
"""
import logging
import random
import threading
import uuid
from dataclasses import dataclass, field

from flask import Blueprint, Flask, current_app, jsonify, request

from generation.generate import _seed_rng
from models import CareerGameState
from rate_limit import RateLimiter
from simulation import (
    CareerError,
    advance_matchday,
    career_summary,
    end_season,
    hire_staff,
    new_career,
    play_match,
    play_matchday,
    release_staff,
    set_tactics,
    squad_report,
    staff_report,
)
from simulation.errors import (
    FixtureAlreadyPlayedError,
    FixtureNotFoundError,
    ObjectiveNotFoundError,
    PlayerNotFoundError,
    StaffNotFoundError,
    UnknownClubError,
)
from simulation.finances import budget_allocation, financial_warnings
from simulation.board import job_status
from simulation.tactics import recommend_tactics

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "RATE_LIMIT_REQUESTS": 120,
    "RATE_LIMIT_WINDOW_SECONDS": 60,
    "DEFAULT_SEASON": 2024,
    "DEFAULT_LEAGUE_SIZE": 20,
}

NOT_FOUND_ERRORS = (
    FixtureNotFoundError, PlayerNotFoundError, ObjectiveNotFoundError, UnknownClubError, StaffNotFoundError,
)
CONFLICT_ERRORS = (FixtureAlreadyPlayedError,)


@dataclass
class _CareerSlot:
    state: CareerGameState
    rng: random.Random
    lock: threading.Lock = field(default_factory=threading.Lock)


class CareerStore:
    """Careers by id. The store lock guards the table; each slot's lock guards its career."""

    def __init__(self) -> None:
        self._slots: dict[str, _CareerSlot] = {}
        self._lock = threading.Lock()

    def add(self, state: CareerGameState, rng: random.Random) -> str:
        career_id = uuid.uuid4().hex[:12]
        with self._lock:
            self._slots[career_id] = _CareerSlot(state=state, rng=rng)
        return career_id

    def get(self, career_id: str) -> _CareerSlot | None:
        with self._lock:
            return self._slots.get(career_id)

    def __len__(self) -> int:
        return len(self._slots)


class CareerNotFound(Exception):
    pass


api = Blueprint("api", __name__, url_prefix="/api")


def _store() -> CareerStore:
    return current_app.extensions["career_store"]


def _slot(career_id: str) -> _CareerSlot:
    slot = _store().get(career_id)
    if slot is None:
        raise CareerNotFound(career_id)
    return slot


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@api.before_request
def _rate_limit():
    limiter: RateLimiter = current_app.extensions["rate_limiter"]
    if not limiter.allow(request.remote_addr or "unknown"):
        return jsonify({"error": "Too many requests"}), 429
    return None


@api.errorhandler(CareerNotFound)
def _career_not_found(err: CareerNotFound):
    return jsonify({"error": f"Career {err.args[0]} not found"}), 404


@api.errorhandler(CareerError)
def _career_error(err: CareerError):
    if isinstance(err, NOT_FOUND_ERRORS):
        status = 404
    elif isinstance(err, CONFLICT_ERRORS):
        status = 409
    else:
        status = 400
    return jsonify({"error": str(err)}), status


# ===================================================================
# Careers
# ===================================================================

@api.route("/careers", methods=["POST"])
def create_career():
    """Generate a league and start a career. Body: seed, club_index, club_count, difficulty, manager_name."""
    body = _body()
    seed = body.get("seed")
    if seed is not None and not isinstance(seed, (int, str)):
        return jsonify({"error": "seed must be an integer or a string"}), 400
    seed = _seed_rng(seed)
    try:
        club_count = int(body.get("club_count", current_app.config["DEFAULT_LEAGUE_SIZE"]))
        club_index = int(body.get("club_index", 0))
        season = int(body.get("season", current_app.config["DEFAULT_SEASON"]))
    except (TypeError, ValueError):
        return jsonify({"error": "club_count, club_index and season must be integers"}), 400
    if club_count < 2:
        return jsonify({"error": "A league needs at least 2 clubs"}), 400
    try:
        state = new_career(
            seed,
            club_index=club_index,
            club_count=club_count,
            season=season,
            difficulty=body.get("difficulty", "medium"),
            manager_name=body.get("manager_name", ""),
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    rng = random.Random(seed)
    career_id = _store().add(state, rng)
    logger.info("Created career %s for %s", career_id, state.club.name)
    return jsonify({"id": career_id, "summary": career_summary(state)}), 201


@api.route("/careers/<career_id>", methods=["GET"])
def get_career(career_id: str):
    slot = _slot(career_id)
    return jsonify({"id": career_id, "summary": career_summary(slot.state), "state": slot.state.to_dict()})


@api.route("/careers/<career_id>", methods=["PUT"])
def replace_career(career_id: str):
    """Load a saved state (as returned by GET) into an existing career."""
    slot = _slot(career_id)
    body = _body()
    data = body.get("state", body)
    try:
        state = CareerGameState.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid career state: {e}"}), 400
    with slot.lock:
        slot.state = state
    return jsonify({"id": career_id, "summary": career_summary(state)})


# ===================================================================
# Season flow
# ===================================================================

@api.route("/careers/<career_id>/fixtures/<int:fixture_id>/play", methods=["POST"])
def play_fixture(career_id: str, fixture_id: int):
    slot = _slot(career_id)
    with slot.lock:
        result, slot.state = play_match(slot.state, fixture_id, slot.rng)
        summary = career_summary(slot.state)
    return jsonify({"result": result.to_dict(), "summary": summary})


@api.route("/careers/<career_id>/matchday/play", methods=["POST"])
def play_current_matchday(career_id: str):
    slot = _slot(career_id)
    with slot.lock:
        matchday = slot.state.current_matchday
        results, slot.state = play_matchday(slot.state, slot.rng)
        summary = career_summary(slot.state)
    return jsonify({"matchday": matchday, "results": [r.to_dict() for r in results], "summary": summary})


@api.route("/careers/<career_id>/matchday/advance", methods=["POST"])
def advance_current_matchday(career_id: str):
    slot = _slot(career_id)
    with slot.lock:
        if slot.state.current_matchday > slot.state.matchdays_in_season:
            return jsonify({"error": "Season is over; end the season first"}), 409
        slot.state = advance_matchday(slot.state)
        summary = career_summary(slot.state)
    return jsonify({"summary": summary})


@api.route("/careers/<career_id>/season/end", methods=["POST"])
def end_current_season(career_id: str):
    slot = _slot(career_id)
    with slot.lock:
        if not slot.state.is_season_complete:
            return jsonify({"error": "Season still has unplayed fixtures"}), 409
        slot.state = end_season(slot.state, slot.rng)
        summary = career_summary(slot.state)
    return jsonify({"summary": summary})


# ===================================================================
# Read views and tactics
# ===================================================================

@api.route("/careers/<career_id>/standings", methods=["GET"])
def standings(career_id: str):
    state = _slot(career_id).state
    return jsonify({"season": state.current_season, "table": [row.to_dict() for row in state.league_table]})


@api.route("/careers/<career_id>/board", methods=["GET"])
def board(career_id: str):
    board = _slot(career_id).state.board
    data = board.to_dict()
    data["job_status"] = job_status(board.job_security)
    return jsonify(data)


@api.route("/careers/<career_id>/finances", methods=["GET"])
def finances(career_id: str):
    state = _slot(career_id).state
    return jsonify({
        "finances": state.finances.to_dict(),
        "budget_allocation": budget_allocation(state.finances.total_budget),
        "warnings": financial_warnings(state.finances),
    })


def _tactics_view(state: CareerGameState) -> dict:
    recommendations = recommend_tactics(state.squad) if state.squad else []
    return {
        "formation": state.formation.to_dict(),
        "tactical_system": state.tactical_system,
        "recommendations": [
            {"system": system.name, **fit.to_dict()} for system, fit in recommendations
        ],
    }


@api.route("/careers/<career_id>/tactics", methods=["GET"])
def get_tactics(career_id: str):
    return jsonify(_tactics_view(_slot(career_id).state))


@api.route("/careers/<career_id>/tactics", methods=["POST"])
def update_tactics(career_id: str):
    """Body: formation (code), tactical_system (name, or null to clear)."""
    slot = _slot(career_id)
    body = _body()
    with slot.lock:
        slot.state = set_tactics(
            slot.state,
            formation_code=body.get("formation"),
            tactical_system=body.get("tactical_system"),
            clear_system="tactical_system" in body and body["tactical_system"] is None,
        )
        view = _tactics_view(slot.state)
    return jsonify(view)


# ===================================================================
# Staff and squad
# ===================================================================

@api.route("/careers/<career_id>/staff", methods=["GET"])
def get_staff(career_id: str):
    return jsonify(staff_report(_slot(career_id).state))


@api.route("/careers/<career_id>/staff", methods=["POST"])
def hire(career_id: str):
    """Body: role, nationality (default european)."""
    slot = _slot(career_id)
    body = _body()
    role, nationality = body.get("role"), body.get("nationality", "european")
    if not isinstance(role, str) or not isinstance(nationality, str):
        return jsonify({"error": "role and nationality must be strings"}), 400
    with slot.lock:
        member, slot.state = hire_staff(slot.state, role, slot.rng, nationality)
        funds = slot.state.finances.available_funds
    return jsonify({"staff": member.to_dict(), "available_funds": round(funds)}), 201


@api.route("/careers/<career_id>/staff/<staff_id>", methods=["DELETE"])
def release(career_id: str, staff_id: str):
    slot = _slot(career_id)
    with slot.lock:
        slot.state = release_staff(slot.state, staff_id)
    return "", 204


@api.route("/careers/<career_id>/squad", methods=["GET"])
def squad(career_id: str):
    state = _slot(career_id).state
    return jsonify({
        "players": [p.to_dict() for p in state.squad],
        "report": squad_report(state),
    })


def create_app(config: dict | None = None) -> Flask:
    """App factory: defaults, then CAREER_* environment variables, then *config*."""
    flask_app = Flask(__name__)
    flask_app.config.update(DEFAULT_CONFIG)
    flask_app.config.from_prefixed_env("CAREER")
    if config:
        flask_app.config.update(config)
    flask_app.extensions["career_store"] = CareerStore()
    flask_app.extensions["rate_limiter"] = RateLimiter(
        flask_app.config["RATE_LIMIT_REQUESTS"],
        flask_app.config["RATE_LIMIT_WINDOW_SECONDS"],
    )
    flask_app.register_blueprint(api)
    return flask_app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=5000)

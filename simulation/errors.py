"""
Precondition errors raised by the simulation core.
All subclass ValueError so callers that only know about bad input still catch them.
"""


class CareerError(ValueError):
    """Base class for a career operation refused because its input is invalid."""


class FixtureNotFoundError(CareerError):
    def __init__(self, fixture_id: int) -> None:
        super().__init__(f"Fixture {fixture_id} not found")
        self.fixture_id = fixture_id


class FixtureAlreadyPlayedError(CareerError):
    def __init__(self, fixture_id: int) -> None:
        super().__init__(f"Fixture {fixture_id} has already been played")
        self.fixture_id = fixture_id


class ClubNotInFixtureError(CareerError):
    def __init__(self, fixture_id: int, club_id: int) -> None:
        super().__init__(f"Club {club_id} does not play in fixture {fixture_id}")
        self.fixture_id = fixture_id
        self.club_id = club_id


class EmptySquadError(CareerError):
    """A lineup or squad needed for simulation has no available players."""


class UnknownClubError(CareerError):
    def __init__(self, club_id: int) -> None:
        super().__init__(f"Club {club_id} is not in the league table")
        self.club_id = club_id


class ObjectiveNotFoundError(CareerError):
    def __init__(self, objective_id: str) -> None:
        super().__init__(f"Objective {objective_id!r} not found")
        self.objective_id = objective_id


class PlayerNotFoundError(CareerError):
    def __init__(self, player_id: int) -> None:
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class InsufficientFundsError(CareerError):
    def __init__(self, required: float, available: float) -> None:
        super().__init__(f"Insufficient funds: need {required:,.0f}, have {available:,.0f}")
        self.required = required
        self.available = available


class UnknownTacticError(CareerError):
    """Formation, tactical system, or instruction name not recognised."""


class StaffNotFoundError(CareerError):
    def __init__(self, staff_id: str) -> None:
        super().__init__(f"Staff member {staff_id!r} not found")
        self.staff_id = staff_id


class UnknownStaffRoleError(CareerError):
    """Staff role or nationality not recognised."""

"""
Player DTO for the football career simulation.
Six core attributes on a 0-99 scale; overall_rating and potential stay floats
internally and are rounded only for display.
"""
from dataclasses import dataclass, fields
from typing import Dict, Any

from models.constants import POSITIONS, CORE_ATTRIBUTES, ATTRIBUTE_MIN, ATTRIBUTE_MAX


@dataclass
class Player:
    """A player registered to a club (clubs own players by reference via club_id)."""

    id: int = 0
    club_id: int = 0
    first_name: str = ""
    last_name: str = ""
    position: str = "CM"
    age: int = 18
    pace: int = 50
    shooting: int = 50
    passing: int = 50
    dribbling: int = 50
    defense: int = 50
    physical: int = 50
    overall_rating: float = 50.0
    potential: float = 50.0  # never decreases
    form: float = 50.0       # 0-100, decays weekly
    morale: float = 50.0     # 0-100, driven by results
    injury_weeks: int = 0    # unavailable while > 0
    contract_end_year: int = 0
    is_youth_player: bool = False

    def __post_init__(self) -> None:
        if self.position not in POSITIONS:
            raise ValueError(f"position must be one of {POSITIONS}, got {self.position!r}")
        for key in CORE_ATTRIBUTES:
            val = getattr(self, key)
            if not ATTRIBUTE_MIN <= val <= ATTRIBUTE_MAX:
                raise ValueError(f"{key} must be between {ATTRIBUTE_MIN} and {ATTRIBUTE_MAX}, got {val}")
        if not 0 <= self.form <= 100:
            raise ValueError(f"form must be between 0 and 100, got {self.form}")
        if not 0 <= self.morale <= 100:
            raise ValueError(f"morale must be between 0 and 100, got {self.morale}")
        if self.injury_weeks < 0:
            raise ValueError(f"injury_weeks must be >= 0, got {self.injury_weeks}")
        if self.potential < self.overall_rating:
            raise ValueError(
                f"potential must be >= overall_rating, got {self.potential} < {self.overall_rating}"
            )

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_available(self) -> bool:
        return self.injury_weeks == 0

    @property
    def display_rating(self) -> int:
        """Rating as shown to the user (half-up rounding at the presentation edge)."""
        return int(self.overall_rating + 0.5)

    @property
    def display_potential(self) -> int:
        return int(self.potential + 0.5)

    def attributes(self) -> Dict[str, int]:
        return {key: getattr(self, key) for key in CORE_ATTRIBUTES}

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

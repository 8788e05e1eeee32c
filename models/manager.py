"""
Manager DTO for the football career simulation.
Experience and reputation are scored 0-99; the board's verdict on the manager
lives in the board expectation, not here.
"""
from dataclasses import dataclass
from typing import Dict

SKILL_MIN = 0
SKILL_MAX = 99

# Display names and internal keys for the scored manager traits
MANAGER_TRAITS: Dict[str, str] = {
    "experience": "Experience",
    "reputation": "Reputation",
}


@dataclass
class Manager:
    """Represents the human player as the club's manager."""

    name: str = ""
    experience: int = 0
    reputation: int = 50
    salary: int = 0  # annual

    def __post_init__(self) -> None:
        for key in MANAGER_TRAITS:
            val = getattr(self, key)
            if not SKILL_MIN <= val <= SKILL_MAX:
                raise ValueError(f"{key} must be between {SKILL_MIN} and {SKILL_MAX}, got {val}")
        if self.salary < 0:
            raise ValueError(f"salary must be >= 0, got {self.salary}")

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "experience": self.experience,
            "reputation": self.reputation,
            "salary": self.salary,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Manager":
        return cls(
            name=data.get("name", ""),
            experience=data.get("experience", 0),
            reputation=data.get("reputation", 50),
            salary=data.get("salary", 0),
        )

"""
Club DTO for the football career simulation.
A club carries its commercial and facility inputs; the squad itself is a list of
Players held by the career state, each pointing back here through club_id.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from models.finances import SponsorshipDeal
from models.manager import Manager

FACILITY_MIN = 1
FACILITY_MAX = 5


@dataclass
class Club:
    """A club in the league (managed by the user or by the AI)."""

    id: int = 0
    name: str = ""
    country: str = ""
    division: int = 1
    budget: int = 0
    weekly_wages: float = 0.0
    manager: Manager = field(default_factory=Manager)

    # Financial model inputs
    stadium_capacity: int = 30_000
    fan_base: int = 200_000
    ticket_price: int = 50
    training_ground_quality: int = 3  # 1-5
    medical_facility_quality: int = 3  # 1-5
    youth_academy_quality: int = 3  # 1-5
    coaching_staff: int = 4
    medical_staff: int = 3
    scouting_staff: int = 2
    television_deal: int = 0  # annual
    sponsorship_deals: List[SponsorshipDeal] = field(default_factory=list)

    def __post_init__(self) -> None:
        for key in ("training_ground_quality", "medical_facility_quality", "youth_academy_quality"):
            val = getattr(self, key)
            if not FACILITY_MIN <= val <= FACILITY_MAX:
                raise ValueError(f"{key} must be between {FACILITY_MIN} and {FACILITY_MAX}, got {val}")
        if self.stadium_capacity < 0:
            raise ValueError(f"stadium_capacity must be >= 0, got {self.stadium_capacity}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "division": self.division,
            "budget": self.budget,
            "weekly_wages": self.weekly_wages,
            "manager": self.manager.to_dict(),
            "stadium_capacity": self.stadium_capacity,
            "fan_base": self.fan_base,
            "ticket_price": self.ticket_price,
            "training_ground_quality": self.training_ground_quality,
            "medical_facility_quality": self.medical_facility_quality,
            "youth_academy_quality": self.youth_academy_quality,
            "coaching_staff": self.coaching_staff,
            "medical_staff": self.medical_staff,
            "scouting_staff": self.scouting_staff,
            "television_deal": self.television_deal,
            "sponsorship_deals": [d.to_dict() for d in self.sponsorship_deals],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Club":
        return cls(
            id=data.get("id", 0),
            name=data.get("name", ""),
            country=data.get("country", ""),
            division=data.get("division", 1),
            budget=data.get("budget", 0),
            weekly_wages=data.get("weekly_wages", 0.0),
            manager=Manager.from_dict(data.get("manager") or {}),
            stadium_capacity=data.get("stadium_capacity", 30_000),
            fan_base=data.get("fan_base", 200_000),
            ticket_price=data.get("ticket_price", 50),
            training_ground_quality=data.get("training_ground_quality", 3),
            medical_facility_quality=data.get("medical_facility_quality", 3),
            youth_academy_quality=data.get("youth_academy_quality", 3),
            coaching_staff=data.get("coaching_staff", 4),
            medical_staff=data.get("medical_staff", 3),
            scouting_staff=data.get("scouting_staff", 2),
            television_deal=data.get("television_deal", 0),
            sponsorship_deals=[SponsorshipDeal.from_dict(d) for d in data.get("sponsorship_deals", [])],
        )

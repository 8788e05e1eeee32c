"""
Club finance DTOs.

SponsorshipDeal is a commercial contract owned by a club.
ClubFinances is the club's running ledger, refreshed at each monthly close.
RevenueProjection is the one-month forecast produced by the financial model.
"""
from dataclasses import dataclass, field, fields
from typing import Dict, Any, List

FINANCIAL_STATUSES = ["excellent", "good", "stable", "struggling", "critical"]


@dataclass
class SponsorshipDeal:
    """A sponsor paying an annual fee, with a bonus for a top-4 finish."""

    id: str = ""
    name: str = ""
    annual_value: int = 0
    years_remaining: int = 1
    performance_bonus: int = 0
    termination_clause: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SponsorshipDeal":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class ClubFinances:
    """Budget, cash and the revenue / expense breakdown of the last closed month."""

    total_budget: int = 0
    available_funds: float = 0.0
    weekly_wages: float = 0.0
    monthly_revenue: float = 0.0

    # Revenue streams
    ticket_revenue: float = 0.0
    sponsorship_revenue: float = 0.0
    merchandise_revenue: float = 0.0
    television_revenue: float = 0.0
    prize_money_earned: float = 0.0

    # Expenses (monthly)
    player_wages: float = 0.0
    staff_salaries: float = 0.0
    facility_maintenance: float = 0.0

    profit_margin: float = 0.0
    debt_level: float = 0.0
    financial_status: str = "stable"
    months_closed: int = 0

    def __post_init__(self) -> None:
        if self.financial_status not in FINANCIAL_STATUSES:
            raise ValueError(
                f"financial_status must be one of {FINANCIAL_STATUSES}, got {self.financial_status!r}"
            )

    @property
    def monthly_expenses(self) -> float:
        return self.player_wages + self.staff_salaries + self.facility_maintenance

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["monthly_expenses"] = self.monthly_expenses
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClubFinances":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class RevenueProjection:
    """Forecast for a single month. Expenses and net profit are filled by the caller."""

    month: int = 1
    ticket_revenue: float = 0.0
    sponsorship_revenue: float = 0.0
    merchandise_revenue: float = 0.0
    television_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    breakdown: List[str] = field(default_factory=list)

    @property
    def total_revenue(self) -> float:
        return (
            self.ticket_revenue
            + self.sponsorship_revenue
            + self.merchandise_revenue
            + self.television_revenue
        )

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["total_revenue"] = self.total_revenue
        return d

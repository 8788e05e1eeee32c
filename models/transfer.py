"""
Transfer market DTOs.

TransferListing is a player another club is willing to sell.
TransferOffer tracks the managed club's bid for a listing through negotiation.
IncomingOffer is an AI club's bid for one of the managed club's players.
"""
from dataclasses import dataclass, field, fields
from typing import Dict, Any

from models.player import Player

OFFER_STATUSES = ("pending", "accepted", "rejected", "countered")


@dataclass
class TransferListing:
    player: Player = field(default_factory=Player)
    selling_club: str = ""
    nationality: str = ""
    market_value: int = 0
    asking_price: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player.to_dict(),
            "selling_club": self.selling_club,
            "nationality": self.nationality,
            "market_value": self.market_value,
            "asking_price": self.asking_price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransferListing":
        return cls(
            player=Player.from_dict(data.get("player") or {}),
            selling_club=data.get("selling_club", ""),
            nationality=data.get("nationality", ""),
            market_value=data.get("market_value", 0),
            asking_price=data.get("asking_price", 0),
        )


@dataclass
class TransferOffer:
    id: int = 0
    player_id: int = 0
    player_name: str = ""
    from_club: str = ""
    to_club: str = ""
    offer_price: int = 0
    asking_price: int = 0
    max_offer: int = 0
    status: str = "pending"
    negotiation_round: int = 1

    def __post_init__(self) -> None:
        if self.status not in OFFER_STATUSES:
            raise ValueError(f"status must be one of {OFFER_STATUSES}, got {self.status!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransferOffer":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class IncomingOffer:
    player_id: int = 0
    player_name: str = ""
    bidding_club: str = ""
    amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IncomingOffer":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})

"""
Transfer market: listings from other clubs, bids and AI negotiation, and
incoming bids for the managed club's players.
"""
from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable

from generation.generate import make_player
from models.constants import COUNTRIES, POSITIONS
from models.player import Player
from models.transfer import TransferListing, TransferOffer, IncomingOffer
from simulation.development import estimate_transfer_value

BASE_MARKET_VALUE = 1_000_000
MAX_OFFER_MULTIPLIER = 1.5


def market_value(rating: float) -> float:
    """1M at a 70 rating, growing with the cube of rating / 70."""
    return BASE_MARKET_VALUE * (rating / 70) ** 3


def generate_transfer_market(
    rng: random.Random,
    clubs: list[str],
    first_player_id: int,
    season: int,
    count: int = 50,
) -> list[TransferListing]:
    """Random listings rated 70-99, most valuable first."""
    listings: list[TransferListing] = []
    for i in range(count):
        position = rng.choice(POSITIONS)
        rating = 70 + rng.random() * 29
        player = make_player(
            rng,
            player_id=first_player_id + i,
            club_id=0,
            position=position,
            age=rng.randint(18, 32),
            target_rating=rating,
            season=season,
        )
        value = market_value(player.overall_rating)
        listings.append(TransferListing(
            player=player,
            selling_club=rng.choice(clubs) if clubs else "Free Agent",
            nationality=rng.choice(COUNTRIES),
            market_value=round(value),
            asking_price=round(value * (0.9 + rng.random() * 0.3)),
        ))
    return sorted(listings, key=lambda t: -t.market_value)


def make_offer(listing: TransferListing, buying_club: str, amount: int, offer_id: int) -> TransferOffer:
    return TransferOffer(
        id=offer_id,
        player_id=listing.player.id,
        player_name=listing.player.name,
        from_club=listing.selling_club,
        to_club=buying_club,
        offer_price=amount,
        asking_price=listing.asking_price,
        max_offer=round(listing.market_value * MAX_OFFER_MULTIPLIER),
    )


def ai_response(offer: TransferOffer, rng: random.Random) -> str:
    """Selling club's reaction: 'accept', 'counter' or 'reject'."""
    if offer.offer_price >= offer.asking_price * 0.95:
        return "accept" if rng.random() > 0.3 else "counter"
    if offer.offer_price >= offer.asking_price * 0.7:
        return "counter"
    return "reject"


def counter_offer_price(offer: TransferOffer, rng: random.Random) -> int:
    """Meet the buyer 30-50% of the way toward the asking price."""
    gap = offer.asking_price - offer.offer_price
    return round(offer.offer_price + gap * (0.3 + rng.random() * 0.2))


def respond_to_offer(offer: TransferOffer, response: str, counter_price: int | None = None) -> TransferOffer:
    if response == "accept":
        return replace(offer, status="accepted")
    if response == "reject":
        return replace(offer, status="rejected")
    if response == "counter":
        price = counter_price if counter_price is not None else max(
            round(offer.offer_price * 0.95), round(offer.asking_price * 0.8)
        )
        return replace(
            offer,
            offer_price=price,
            status="countered",
            negotiation_round=offer.negotiation_round + 1,
        )
    raise ValueError(f"response must be accept, reject or counter, got {response!r}")


def negotiate(offer: TransferOffer, rng: random.Random) -> TransferOffer:
    """Run one round of AI negotiation on *offer*."""
    response = ai_response(offer, rng)
    if response == "counter":
        return respond_to_offer(offer, "counter", counter_offer_price(offer, rng))
    return respond_to_offer(offer, response)


def generate_incoming_offers(
    squad: Iterable[Player],
    season: int,
    clubs: list[str],
    rng: random.Random,
    chance: float = 0.1,
) -> list[IncomingOffer]:
    """AI bids for the managed club's players, near their estimated value."""
    offers: list[IncomingOffer] = []
    for p in squad:
        if p.is_youth_player or not clubs or rng.random() >= chance:
            continue
        value = estimate_transfer_value(p.age, p.overall_rating, p.potential, p.contract_end_year - season)
        offers.append(IncomingOffer(
            player_id=p.id,
            player_name=p.name,
            bidding_club=rng.choice(clubs),
            amount=round(value * (0.8 + rng.random() * 0.4)),
        ))
    return offers


# ===================================================================
# Filters
# ===================================================================

def filter_by_position(listings: Iterable[TransferListing], position: str) -> list[TransferListing]:
    return [t for t in listings if t.player.position == position]


def filter_by_budget(listings: Iterable[TransferListing], budget: float) -> list[TransferListing]:
    return [t for t in listings if t.market_value <= budget]


def filter_by_rating(listings: Iterable[TransferListing], min_rating: float) -> list[TransferListing]:
    return [t for t in listings if t.player.overall_rating >= min_rating]


def search_listings(listings: Iterable[TransferListing], query: str) -> list[TransferListing]:
    q = query.lower()
    return [
        t for t in listings
        if q in t.player.name.lower() or q in t.selling_club.lower() or q in t.nationality.lower()
    ]

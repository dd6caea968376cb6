"""Listing data models and valuation rules."""

import logging
from enum import Enum

from pydantic import BaseModel

from realestate_agent.utils.helpers import normalize_city, round_half_up

logger = logging.getLogger(__name__)

# Uplift applied to the base price, keyed by normalized city name
CITY_MODIFIERS: dict[str, float] = {
    "budapest": 0.30,
    "debrecen": 0.20,
    "nyíregyháza": 0.15,
    "nyiregyhaza": 0.15,
}

LOW_FLOOR_RANGE = (0, 2)
LOW_FLOOR_MODIFIER = 1.05
TOP_FLOOR = 10
TOP_FLOOR_MODIFIER = 0.95
INSULATION_MODIFIER = 1.05


class Genre(str, Enum):
    """Category of property."""

    CONDOMINIUM = "CONDOMINIUM"
    FAMILYHOUSE = "FAMILYHOUSE"
    FARM = "FARM"

    @classmethod
    def from_string(cls, value: str) -> "Genre":
        """Convert text to Genre, case-insensitive. Raises ValueError if unknown."""
        return cls(value.strip().upper())


class Listing(BaseModel):
    """A priced property: price per square meter, area, rooms and city."""

    city: str | None = None
    price_per_unit: float = 0.0
    area: int = 0
    rooms: float = 0.0
    genre: Genre = Genre.CONDOMINIUM

    model_config = {"validate_assignment": True}

    def model_post_init(self, __context) -> None:
        logger.debug("Created %s city=%s price=%.2f sqm=%d rooms=%.1f",
                     type(self).__name__, self.city, self.price_per_unit, self.area, self.rooms)

    @property
    def city_modifier(self) -> float:
        """Relative uplift for the listing's city (0.0 when unknown)."""
        return CITY_MODIFIERS.get(normalize_city(self.city), 0.0)

    @property
    def total_price(self) -> int:
        """Price per sqm times area with the city modifier, rounded half up."""
        base = self.price_per_unit * self.area
        return round_half_up(base * (1.0 + self.city_modifier))

    @property
    def sort_key(self) -> tuple[int, str]:
        """Ordering and deduplication key used by the catalog."""
        return self.total_price, (self.city or "").lower()

    def average_sqm_per_room(self) -> float:
        """Average square meters per room, or 0.0 without rooms."""
        if self.rooms <= 0:
            return 0.0
        return self.area / self.rooms

    def make_discount(self, percent: int) -> None:
        """
        Reduce the price per square meter by a percentage.

        Args:
            percent: Whole percent to take off. Values <= 0 are ignored.
        """
        if percent <= 0:
            return
        self.price_per_unit = self.price_per_unit * (1.0 - percent / 100.0)
        logger.debug("Discounted %s by %d%%, new price %.2f", self.city, percent, self.price_per_unit)

    def summary(self) -> str:
        """Human readable description used in reports."""
        return (
            f"RealEstate [city = {self.city}, genre = {self.genre.value}, "
            f"pricePerSqm = {self.price_per_unit:.2f}, sqm = {self.area}, "
            f"rooms = {float(self.rooms)}]\n"
            f"Total price (with city modifier): {self.total_price}\n"
            f"Average sqm per room: {self.average_sqm_per_room():.2f}"
        )

    def __str__(self) -> str:
        return self.summary()


class PanelListing(Listing):
    """Panel block apartment, priced with floor and insulation modifiers."""

    floor: int = 0
    insulated: bool = False

    @property
    def total_price(self) -> int:
        """
        City-adjusted total with floor and insulation modifiers.

        The inherited total is already rounded; the modifiers are applied on
        top of that integer and the result is rounded a second time.
        """
        total = float(super().total_price)

        low, high = LOW_FLOOR_RANGE
        if low <= self.floor <= high:
            total *= LOW_FLOOR_MODIFIER
        elif self.floor == TOP_FLOOR:
            total *= TOP_FLOOR_MODIFIER

        if self.insulated:
            total *= INSULATION_MODIFIER

        return round_half_up(total)

    def room_price(self) -> int:
        """Average price of one room without any city/floor/insulation modifier."""
        if self.rooms <= 0:
            return 0
        return round_half_up(self.price_per_unit * self.area / self.rooms)

    def has_same_amount(self, other: Listing | None) -> bool:
        """True when the other listing has the same total price."""
        if other is None:
            return False
        return self.total_price == other.total_price

    def summary(self) -> str:
        return (
            f"Panel Apartment [city={self.city}, genre={self.genre.value}, "
            f"pricePerSqm={self.price_per_unit:.2f}, sqm={self.area}, "
            f"rooms={float(self.rooms)}, floor={self.floor}, "
            f"insulated={str(self.insulated).lower()}]\n"
            f"Total price (with modifiers): {self.total_price}\n"
            f"Average sqm per room: {self.average_sqm_per_room():.2f}\n"
            f"Average room price (base, no modifiers): {self.room_price()}"
        )

"""Statistical report over an ordered set of listings."""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from realestate_agent.models import Genre, Listing
from realestate_agent.utils.helpers import normalize_city

SEPARATOR = "-" * 60 + "\n"
TITLE = "REAL ESTATE REPORT\n"
EMPTY_REPORT = "No properties available.\n"
NONE_MARKER = "  (none)\n\n"

BUDAPEST = "budapest"


class ReportStats(BaseModel):
    """Values shown in the report."""

    count: int
    average_price_per_unit: float
    cheapest_total_price: int
    budapest_top_sqm_per_room: float
    total_price_sum: int
    average_total_price: float
    condos_under_average: list[Listing] = Field(default_factory=list)


def most_expensive_in(listings: Sequence[Listing], city: str) -> Listing | None:
    """First listing with the highest total price in a city (case-insensitive)."""
    wanted = normalize_city(city)
    best = None
    for listing in listings:
        if listing.city is None or normalize_city(listing.city) != wanted:
            continue
        if best is None or listing.total_price > best.total_price:
            best = listing
    return best


def compute_stats(listings: Sequence[Listing]) -> ReportStats:
    """
    Compute report values for a non-empty, sort-ordered sequence.

    Args:
        listings: Listings in ascending (total price, city) order

    Returns:
        ReportStats

    Raises:
        ValueError: If listings is empty
    """
    if not listings:
        raise ValueError("Cannot compute statistics without listings")

    count = len(listings)
    average_price = sum(listing.price_per_unit for listing in listings) / count

    top_budapest = most_expensive_in(listings, BUDAPEST)
    budapest_sqm = top_budapest.average_sqm_per_room() if top_budapest else 0.0

    total = sum(listing.total_price for listing in listings)
    average_total = total / count

    condos = [
        listing for listing in listings
        if listing.genre == Genre.CONDOMINIUM and listing.total_price <= average_total
    ]

    return ReportStats(
        count=count,
        average_price_per_unit=average_price,
        cheapest_total_price=listings[0].total_price,
        budapest_top_sqm_per_room=budapest_sqm,
        total_price_sum=total,
        average_total_price=average_total,
        condos_under_average=condos,
    )


def build_report(listings: Sequence[Listing]) -> str:
    """
    Render the seven-section report.

    Args:
        listings: Listings in ascending (total price, city) order

    Returns:
        Report text, or the "no properties" line for an empty input
    """
    if not listings:
        return EMPTY_REPORT

    stats = compute_stats(listings)

    parts = [
        SEPARATOR,
        TITLE,
        SEPARATOR,
        f"1) Average square meter price of real estate: {stats.average_price_per_unit:.2f}\n\n",
        f"2) Price of the cheapest property: {stats.cheapest_total_price}\n\n",
        "3) Average sqm per room of the most expensive apartment in Budapest: "
        f"{stats.budapest_top_sqm_per_room:.2f}\n\n",
        f"4) Total price of all properties: {stats.total_price_sum}\n\n",
        "5) CONDOMINIUM properties with total price <= average price of properties:\n",
        SEPARATOR,
    ]

    if not stats.condos_under_average:
        parts.append(NONE_MARKER)
    else:
        for listing in stats.condos_under_average:
            parts.append(listing.summary() + "\n")
            parts.append(SEPARATOR)

    parts.append(
        f"6) Average square meter price of real estate (repeated): {stats.average_price_per_unit:.2f}\n\n"
    )
    parts.append(f"7) Total price of properties (repeated): {stats.total_price_sum}\n")

    return "".join(parts)

"""Parsing of pound-delimited listing lines."""

import logging
import math
from collections.abc import Iterable, Iterator

from realestate_agent.models import Genre, Listing, PanelListing
from realestate_agent.utils.helpers import parse_flag

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "#"
MIN_FIELDS = 6
PANEL_FIELDS = 8

KIND_REALESTATE = "REALESTATE"
KIND_PANEL = "PANEL"

# Used when the input file is missing or unreadable
SAMPLE_DATA: tuple[str, ...] = (
    "REALESTATE#Budapest#250000#100#4#CONDOMINIUM",
    "REALESTATE#Debrecen#220000#120#5#FAMILYHOUSE",
    "REALESTATE#Nyíregyháza#110000#60#2#FARM",
    "REALESTATE#Nyíregyháza#250000#160#6#FAMILYHOUSE",
    "REALESTATE#Kisvárda#150000#50#2#CONDOMINIUM",
    "REALESTATE#Nyíregyháza#150000#68#4#CONDOMINIUM#4#yes",
    "PANEL#Budapest#180000#70#3#CONDOMINIUM#4#no",
    "PANEL#Debrecen#120000#35#2#CONDOMINIUM#0#yes",
    "PANEL#Tiszaújváros#120000#750#3#CONDOMINIUM#10#no",
    "PANEL#Nyíregyháza#170000#80#3#CONDOMINIUM#7#no",
)


class ListingParseError(ValueError):
    """A line could not be turned into a listing."""

    def __init__(self, line: str, reason: str):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


def _parse_float(text: str, name: str, line: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise ListingParseError(line, f"Invalid {name} {text!r}") from None
    if not math.isfinite(value):
        raise ListingParseError(line, f"Invalid {name} {text!r}")
    return value


def _parse_int(text: str, name: str, line: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ListingParseError(line, f"Invalid {name} {text!r}") from None


def _split_fields(line: str, delimiter: str) -> list[str]:
    """Split a line, dropping trailing empty fields."""
    fields = line.strip().split(delimiter)
    while fields and not fields[-1]:
        fields.pop()
    return fields


def _check_range(listing: Listing, line: str) -> None:
    """Reject listings whose computed prices do not fit a finite number."""
    try:
        listing.total_price
        if isinstance(listing, PanelListing):
            listing.room_price()
    except OverflowError:
        raise ListingParseError(line, "Price out of range") from None


def parse_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> Listing:
    """
    Parse one line into a Listing or PanelListing.

    Format: KIND#city#price#sqm#rooms#GENRE[#floor#insulated]

    Args:
        line: Raw input line
        delimiter: Field separator

    Returns:
        Listing (REALESTATE) or PanelListing (PANEL)

    Raises:
        ListingParseError: If the line is malformed
    """
    parts = [part.strip() for part in _split_fields(line, delimiter)]
    if len(parts) < MIN_FIELDS:
        raise ListingParseError(line, "Not enough fields")

    kind = parts[0].upper()
    if kind not in (KIND_REALESTATE, KIND_PANEL):
        raise ListingParseError(line, f"Unknown kind {parts[0]!r}")

    city = parts[1]
    price = _parse_float(parts[2], "price", line)
    sqm = _parse_int(parts[3], "sqm", line)
    rooms = _parse_float(parts[4], "rooms", line)
    try:
        genre = Genre.from_string(parts[5])
    except ValueError:
        raise ListingParseError(line, f"Unknown genre {parts[5]!r}") from None

    if kind == KIND_PANEL:
        if len(parts) < PANEL_FIELDS:
            raise ListingParseError(line, "Panel requires floor and insulation")
        floor = _parse_int(parts[6], "floor", line)
        insulated = parse_flag(parts[7])
        logger.debug("Parsed panel: city=%s, floor=%d, insulated=%s", city, floor, insulated)
        listing = PanelListing(
            city=city,
            price_per_unit=price,
            area=sqm,
            rooms=rooms,
            genre=genre,
            floor=floor,
            insulated=insulated,
        )
    else:
        logger.debug("Parsed real estate: city=%s", city)
        listing = Listing(city=city, price_per_unit=price, area=sqm, rooms=rooms, genre=genre)

    _check_range(listing, line)
    return listing


def parse_lines(lines: Iterable[str], delimiter: str = DEFAULT_DELIMITER) -> Iterator[Listing]:
    """
    Parse many lines, skipping blank and malformed ones.

    Yields:
        Listings in input order
    """
    for number, line in enumerate(lines, start=1):
        if line is None or not line.strip():
            continue
        try:
            yield parse_line(line, delimiter)
        except ListingParseError as e:
            logger.error("Skipping invalid line %d: %s", number, e)

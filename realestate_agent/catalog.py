"""Ordered, duplicate-collapsing catalog of listings."""

import logging
from bisect import bisect_left
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from realestate_agent import storage
from realestate_agent.config import Settings, settings as default_settings
from realestate_agent.models import Listing
from realestate_agent.parser import SAMPLE_DATA, parse_lines
from realestate_agent.report import build_report

logger = logging.getLogger(__name__)


class Catalog:
    """
    Listings kept in ascending (total price, lowercased city) order.

    Two listings with the same key count as the same entry: the one
    inserted first stays, later ones are dropped. Keys are taken at
    insertion time, so mutating a stored listing does not reorder it.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings
        self._keys: list[tuple[int, str]] = []
        self._listings: list[Listing] = []
        self.last_saved_to: Path | None = None

    def __len__(self) -> int:
        return len(self._listings)

    def __iter__(self) -> Iterator[Listing]:
        return iter(tuple(self._listings))

    def __bool__(self) -> bool:
        return bool(self._listings)

    @property
    def listings(self) -> tuple[Listing, ...]:
        """Snapshot of the listings in sort order."""
        return tuple(self._listings)

    def first(self) -> Listing:
        """Cheapest listing. Raises LookupError when empty."""
        if not self._listings:
            raise LookupError("Catalog is empty")
        return self._listings[0]

    def add(self, listing: Listing) -> bool:
        """
        Insert a listing in order.

        Returns:
            True if inserted, False if an entry with the same key exists
        """
        key = listing.sort_key
        index = bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            logger.warning("Duplicate of existing entry %s, skipping %s", key, listing.city)
            return False

        self._keys.insert(index, key)
        self._listings.insert(index, listing)
        return True

    def load_lines(self, lines: Iterable[str]) -> int:
        """
        Parse raw lines and insert the resulting listings.

        Returns:
            Number of listings inserted
        """
        inserted = 0
        for listing in parse_lines(lines, self.settings.delimiter):
            try:
                added = self.add(listing)
            except OverflowError as e:
                logger.error("Skipping %s listing: %s", listing.city, e)
                continue
            if added:
                inserted += 1
        logger.info("Finished loading properties. Total properties: %d", len(self))
        return inserted

    def load(self, source: str | Path | Iterable[str] | None = None) -> int:
        """
        Load listings from a file path or an iterable of lines.

        A missing or unreadable file falls back to the built-in sample data.

        Args:
            source: Path, lines, or None for the configured input file

        Returns:
            Number of listings inserted
        """
        if source is None:
            source = self.settings.input_file

        if isinstance(source, (str, Path)):
            lines = storage.read_lines(source)
            if lines is None:
                logger.info("Loading sample data instead of '%s'", source)
                lines = list(SAMPLE_DATA)
        else:
            lines = source

        return self.load_lines(lines)

    def build_report(self) -> str:
        """Report text for the current contents."""
        return build_report(self._listings)

    def produce_report(
        self,
        destination: str | Path | None = None,
        display: Callable[[str], object] | None = print,
    ) -> str:
        """
        Build the report, show it and write it to a file.

        Write failures are logged and do not raise.

        Args:
            destination: Output path, defaults to the configured output file
            display: Callable receiving the report text, None to skip

        Returns:
            The report text
        """
        if destination is None:
            destination = self.settings.output_file

        report = self.build_report()
        if display is not None:
            display(report)
        if storage.write_report(destination, report):
            self.last_saved_to = Path(destination)
        else:
            self.last_saved_to = None
        return report

#!/usr/bin/env python3
"""
Tests for realestate_agent.catalog and realestate_agent.storage

Covers:
- Catalog.add: ordering and deduplication by (total price, city)
- Catalog.load: lines, files, sample data fallback
- Catalog.produce_report: display and persistence, write failures
- storage: read_lines / write_report
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from realestate_agent import storage
from realestate_agent.catalog import Catalog
from realestate_agent.config import Settings
from realestate_agent.models import Genre, Listing, PanelListing
from realestate_agent.parser import SAMPLE_DATA
from realestate_agent.report import EMPTY_REPORT


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def catalog():
    """Empty catalog."""
    return Catalog(Settings())


@pytest.fixture
def sample_catalog():
    """Catalog loaded with the built-in sample data."""
    catalog = Catalog(Settings())
    catalog.load(list(SAMPLE_DATA))
    return catalog


@pytest.fixture
def listing_file(tmp_path):
    """Input file with two valid lines and one invalid line."""
    path = tmp_path / "realestates.txt"
    path.write_text(
        "REALESTATE#Budapest#200000#100#4#CONDOMINIUM\n"
        "REALESTATE#Budapest#200000#100#4#CASTLE\n"
        "\n"
        "PANEL#Debrecen#150000#60#3#CONDOMINIUM#2#yes\n",
        encoding="utf-8",
    )
    return path


# =============================================================================
# TESTS: ordering and deduplication
# =============================================================================

class TestCatalogAdd:
    """Tests for Catalog.add."""

    def test_sorted_by_total_price(self, catalog):
        catalog.add(Listing(city="Eger", price_per_unit=300, area=1))
        catalog.add(Listing(city="Eger", price_per_unit=100, area=1))
        catalog.add(Listing(city="Eger", price_per_unit=200, area=1))

        assert [listing.total_price for listing in catalog] == [100, 200, 300]

    def test_ties_sorted_by_city(self, catalog):
        catalog.add(Listing(city="Szeged", price_per_unit=100, area=1))
        catalog.add(Listing(city="eger", price_per_unit=100, area=1))
        catalog.add(Listing(city="Pécs", price_per_unit=100, area=1))

        assert [listing.city for listing in catalog] == ["eger", "Pécs", "Szeged"]

    def test_missing_city_sorts_first(self, catalog):
        catalog.add(Listing(city="Eger", price_per_unit=100, area=1))
        catalog.add(Listing(city=None, price_per_unit=100, area=1))

        assert catalog.first().city is None

    def test_same_key_keeps_first(self, catalog):
        """Different listings with equal total price and city collapse to one."""
        first = Listing(city="Eger", price_per_unit=100, area=10, rooms=1, genre=Genre.FARM)
        second = PanelListing(city="EGER", price_per_unit=1000, area=1, rooms=3, floor=5)
        assert first.sort_key == second.sort_key

        assert catalog.add(first) is True
        assert catalog.add(second) is False

        assert len(catalog) == 1
        assert catalog.first() is first

    def test_same_price_other_city_kept(self, catalog):
        catalog.add(Listing(city="Eger", price_per_unit=100, area=10))
        catalog.add(Listing(city="Pécs", price_per_unit=100, area=10))

        assert len(catalog) == 2

    def test_listings_is_snapshot(self, sample_catalog):
        snapshot = sample_catalog.listings
        sample_catalog.add(Listing(city="Eger", price_per_unit=1, area=1))

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 10
        assert len(sample_catalog) == 11

    def test_first_on_empty(self, catalog):
        with pytest.raises(LookupError):
            catalog.first()

    def test_empty_is_falsy(self, catalog):
        assert not catalog
        assert list(catalog) == []


# =============================================================================
# TESTS: loading
# =============================================================================

class TestCatalogLoad:
    """Tests for Catalog.load."""

    def test_load_lines(self, catalog):
        inserted = catalog.load([
            "REALESTATE#Budapest#200000#100#4#CONDOMINIUM",
            "PANEL#Debrecen#150000#60#3#CONDOMINIUM#2#yes",
        ])

        assert inserted == 2
        assert [listing.total_price for listing in catalog] == [11907000, 26000000]

    def test_load_file(self, catalog, listing_file):
        inserted = catalog.load(listing_file)

        assert inserted == 2
        assert [listing.city for listing in catalog] == ["Debrecen", "Budapest"]

    def test_load_file_as_string(self, catalog, listing_file):
        assert catalog.load(str(listing_file)) == 2

    def test_missing_file_uses_sample_data(self, catalog, tmp_path):
        inserted = catalog.load(tmp_path / "missing.txt")

        assert inserted == 10
        assert len(catalog) == 10

    def test_unreadable_file_uses_sample_data(self, catalog, tmp_path):
        """A directory cannot be read as a file."""
        assert catalog.load(tmp_path) == 10

    def test_invalid_utf8_uses_sample_data(self, catalog, tmp_path):
        path = tmp_path / "broken.txt"
        path.write_bytes(b"REALESTATE#\xff\xfe#1#1#1#FARM\n")

        assert catalog.load(path) == 10

    def test_default_source_from_settings(self, tmp_path, listing_file):
        catalog = Catalog(Settings(input_file=str(listing_file)))
        assert catalog.load() == 2

    def test_custom_delimiter(self):
        catalog = Catalog(Settings(delimiter=";"))
        catalog.load(["REALESTATE;Eger;100;10;1;FARM"])

        assert catalog.first().total_price == 1000

    def test_overflowing_line_does_not_stop_load(self, catalog):
        """A line whose total price overflows is skipped, later lines still load."""
        inserted = catalog.load([
            "REALESTATE#Budapest#1e308#1000#4#CONDOMINIUM",
            "REALESTATE#Debrecen#220000#120#5#FAMILYHOUSE",
        ])

        assert inserted == 1
        assert catalog.first().city == "Debrecen"

    def test_overflowing_listing_skipped_in_load_lines(self, catalog):
        with patch("realestate_agent.catalog.parse_lines") as mock_parse:
            mock_parse.return_value = [
                Listing(city="Budapest", price_per_unit=1e308, area=1000),
                Listing(city="Eger", price_per_unit=100, area=10),
            ]
            inserted = catalog.load_lines(["ignored"])

        assert inserted == 1
        assert [listing.city for listing in catalog] == ["Eger"]

    def test_duplicates_in_source_keep_first(self, catalog):
        catalog.load([
            "REALESTATE#Eger#100#10#1#FARM",
            "REALESTATE#eger#1000#1#4#CONDOMINIUM",
        ])

        assert len(catalog) == 1
        assert catalog.first().genre is Genre.FARM

    def test_sample_data_order(self, sample_catalog):
        totals = [listing.total_price for listing in sample_catalog]

        assert totals == sorted(totals)
        assert totals[0] == 5556600
        assert totals[-1] == 85500000

    def test_sample_data_kinds(self, sample_catalog):
        panels = [listing for listing in sample_catalog if isinstance(listing, PanelListing)]

        assert len(sample_catalog) == 10
        assert len(panels) == 4


# =============================================================================
# TESTS: produce_report
# =============================================================================

class TestProduceReport:
    """Tests for Catalog.produce_report."""

    def test_empty_catalog(self, catalog, tmp_path):
        shown = []
        output = tmp_path / "report.txt"

        text = catalog.produce_report(output, display=shown.append)

        assert text == EMPTY_REPORT
        assert text.strip() == "No properties available."
        assert shown == [text]
        assert output.read_text(encoding="utf-8") == text
        assert catalog.last_saved_to == output

    def test_report_displayed_and_written(self, sample_catalog, tmp_path):
        shown = []
        output = tmp_path / "report.txt"

        text = sample_catalog.produce_report(output, display=shown.append)

        assert "REAL ESTATE REPORT" in text
        assert shown == [text]
        assert output.read_text(encoding="utf-8") == text

    def test_write_failure_is_swallowed(self, sample_catalog, tmp_path):
        shown = []

        text = sample_catalog.produce_report(tmp_path, display=shown.append)

        assert shown == [text]
        assert "REAL ESTATE REPORT" in text
        assert sample_catalog.last_saved_to is None

    def test_default_destination_from_settings(self, tmp_path):
        output = tmp_path / "out.txt"
        catalog = Catalog(Settings(output_file=str(output)))

        catalog.produce_report(display=None)

        assert output.read_text(encoding="utf-8") == EMPTY_REPORT

    def test_default_display_is_print(self, catalog, tmp_path, capsys):
        catalog.produce_report(tmp_path / "report.txt")

        captured = capsys.readouterr()
        assert "No properties available." in captured.out

    def test_build_report_matches_produce(self, sample_catalog, tmp_path):
        with patch("realestate_agent.catalog.storage.write_report", return_value=True) as mock_write:
            text = sample_catalog.produce_report(tmp_path / "x.txt", display=None)

        mock_write.assert_called_once_with(tmp_path / "x.txt", text)
        assert text == sample_catalog.build_report()


# =============================================================================
# TESTS: storage
# =============================================================================

class TestStorage:
    """Tests for storage helpers."""

    def test_read_lines(self, listing_file):
        lines = storage.read_lines(listing_file)

        assert len(lines) == 4
        assert lines[2] == ""

    def test_read_missing(self, tmp_path):
        assert storage.read_lines(tmp_path / "missing.txt") is None

    def test_read_keeps_accents(self, tmp_path):
        path = tmp_path / "in.txt"
        path.write_text("REALESTATE#Nyíregyháza#1#1#1#FARM\n", encoding="utf-8")

        assert storage.read_lines(path) == ["REALESTATE#Nyíregyháza#1#1#1#FARM"]

    def test_write_report(self, tmp_path):
        path = tmp_path / "report.txt"

        assert storage.write_report(path, "hello\n") is True
        assert path.read_text(encoding="utf-8") == "hello\n"

    def test_write_report_overwrites(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("old content that is longer", encoding="utf-8")

        storage.write_report(path, "new")

        assert path.read_text(encoding="utf-8") == "new"

    def test_write_report_failure(self, tmp_path):
        assert storage.write_report(tmp_path / "no" / "such" / "dir.txt", "x") is False

    def test_write_lines(self, tmp_path):
        path = tmp_path / "lines.txt"

        assert storage.write_lines(path, ["a", "b"]) == 2
        assert path.read_text(encoding="utf-8") == "a\nb\n"

    def test_path_objects_and_strings(self, tmp_path):
        path = tmp_path / "report.txt"
        storage.write_report(str(path), "x")

        assert Path(path).exists()

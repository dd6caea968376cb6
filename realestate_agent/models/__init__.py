"""Listing models."""

from realestate_agent.models.listing import CITY_MODIFIERS, Genre, Listing, PanelListing

__all__ = ["CITY_MODIFIERS", "Genre", "Listing", "PanelListing"]

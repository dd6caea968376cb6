"""Real estate catalog loader and valuation report generator."""

__version__ = "0.1.0"

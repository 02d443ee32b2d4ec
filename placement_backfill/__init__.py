"""Backfill placement ids on location_l10n from the LiteAPI places endpoint."""

__version__ = "1.0.0"

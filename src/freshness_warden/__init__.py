"""Freshness Warden: track data-source freshness against per-source SLAs."""

__version__ = "0.1.0"

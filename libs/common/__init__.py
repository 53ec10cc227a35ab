"""Shared helpers used across the tracking library and its integrations."""

from .config import TrackerSettings, get_settings

__all__ = ["TrackerSettings", "get_settings"]

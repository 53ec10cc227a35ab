"""Client for the Matomo HTTP Tracking API."""

from .binding import MatomoHooks, MatomoProvider, use_matomo
from .exceptions import (
    MatomoConfigurationError,
    MatomoError,
    MatomoProviderError,
    MatomoResponseError,
    MatomoTransportError,
    MatomoValidationError,
)
from .tracker import MatomoTracker, TrackFailure, TrackResult, TrackSuccess

__all__ = [
    "MatomoTracker",
    "TrackResult",
    "TrackSuccess",
    "TrackFailure",
    "MatomoHooks",
    "MatomoProvider",
    "use_matomo",
    "MatomoError",
    "MatomoConfigurationError",
    "MatomoValidationError",
    "MatomoTransportError",
    "MatomoResponseError",
    "MatomoProviderError",
]

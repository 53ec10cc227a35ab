"""Exceptions raised or returned by the Matomo tracker."""

from __future__ import annotations

import httpx


class MatomoError(Exception):
    """Base error for the Matomo tracking client."""


class MatomoConfigurationError(MatomoError, ValueError):
    """Raised when the tracker is constructed without url base or site id."""


class MatomoValidationError(MatomoError, ValueError):
    """Raised when a tracking call misses a required field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required.")
        self.field = field


class MatomoTransportError(MatomoError):
    """HTTP transport failed before Matomo answered."""


class MatomoResponseError(MatomoError):
    """Matomo answered with a non-success status."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"Matomo responded with status={response.status_code} {response.reason_phrase}".rstrip())

    @property
    def status_code(self) -> int:
        return self.response.status_code


class MatomoProviderError(MatomoError, LookupError):
    """Raised when no tracker is provided to the calling context."""

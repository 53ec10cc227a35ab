from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from libs.common import get_settings

from .binding import MatomoHooks, use_matomo
from .tracker import MatomoTracker


@lru_cache(maxsize=1)
def get_matomo_tracker() -> MatomoTracker:
    """Shared tracker built from environment settings, reused by every request."""
    return MatomoTracker.from_settings(get_settings())


def get_matomo(tracker: MatomoTracker = Depends(get_matomo_tracker)) -> MatomoHooks:
    return use_matomo(tracker)


async def close_matomo_tracker() -> None:
    """Close the shared tracker's HTTP client; call from the app's shutdown or lifespan handler."""
    if get_matomo_tracker.cache_info().currsize:
        await get_matomo_tracker().aclose()
        get_matomo_tracker.cache_clear()

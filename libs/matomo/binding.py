"""Expose one shared tracker to application code.

``MatomoProvider`` installs a tracker for the current context (task, thread
or ``with`` block) and ``use_matomo`` hands out its forwarding hooks. Hooks are
memoized per tracker, so repeated reads return the same functions until the
tracker itself changes.
"""

from __future__ import annotations

import weakref
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import MatomoProviderError
from .tracker import MatomoTracker

_current_tracker: ContextVar[MatomoTracker | None] = ContextVar("matomo_tracker", default=None)
_hooks: "weakref.WeakKeyDictionary[MatomoTracker, MatomoHooks]" = weakref.WeakKeyDictionary()

HOOK_NAMES = (
    "track_app_start",
    "track_screen_view",
    "track_action",
    "track_event",
    "track_content",
    "track_site_search",
    "track_link",
    "track_download",
    "update_user_info",
    "remove_user_info",
)


def set_tracker(tracker: MatomoTracker | None) -> Token:
    return _current_tracker.set(tracker)


def get_tracker() -> MatomoTracker | None:
    return _current_tracker.get()


def _forward(ref: "weakref.ref[MatomoTracker]", name: str) -> Callable[..., Any]:
    # Holds the tracker weakly, otherwise the memo entry would keep its own key alive
    def call(*args: Any, **kwargs: Any) -> Any:
        tracker = ref()
        if tracker is None:
            raise MatomoProviderError("Matomo tracker is no longer available.")
        return getattr(tracker, name)(*args, **kwargs)

    method = getattr(MatomoTracker, name)
    call.__name__ = name
    call.__qualname__ = f"MatomoHooks.{name}"
    call.__doc__ = method.__doc__
    return call


@dataclass(frozen=True)
class MatomoHooks:
    """Forwarding functions bound to one tracker instance."""

    track_app_start: Callable[..., Any]
    track_screen_view: Callable[..., Any]
    track_action: Callable[..., Any]
    track_event: Callable[..., Any]
    track_content: Callable[..., Any]
    track_site_search: Callable[..., Any]
    track_link: Callable[..., Any]
    track_download: Callable[..., Any]
    update_user_info: Callable[..., Any]
    remove_user_info: Callable[..., Any]

    @classmethod
    def for_tracker(cls, tracker: MatomoTracker) -> "MatomoHooks":
        ref = weakref.ref(tracker)
        return cls(**{name: _forward(ref, name) for name in HOOK_NAMES})


def use_matomo(tracker: MatomoTracker | None = None) -> MatomoHooks:
    """Return the memoized hooks of ``tracker`` or of the tracker provided to this context."""
    if tracker is None:
        tracker = get_tracker()
    if tracker is None:
        raise MatomoProviderError("No Matomo tracker provided; wrap the call in MatomoProvider.")
    hooks = _hooks.get(tracker)
    if hooks is None:
        hooks = _hooks[tracker] = MatomoHooks.for_tracker(tracker)
    return hooks


class MatomoProvider:
    """Context manager making ``tracker`` the ambient tracker inside its block."""

    def __init__(self, tracker: MatomoTracker) -> None:
        self.tracker = tracker
        self._tokens: list[Token] = []

    def __enter__(self) -> MatomoHooks:
        self._tokens.append(set_tracker(self.tracker))
        return use_matomo(self.tracker)

    def __exit__(self, exc_type, exc, tb) -> None:
        _current_tracker.reset(self._tokens.pop())

    async def __aenter__(self) -> MatomoHooks:
        return self.__enter__()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.__exit__(exc_type, exc, tb)


__all__ = [
    "MatomoHooks",
    "MatomoProvider",
    "use_matomo",
    "get_tracker",
    "set_tracker",
]

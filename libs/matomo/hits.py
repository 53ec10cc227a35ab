"""Builders mapping tracking calls onto Matomo Tracking API parameters.

Doc: https://developer.matomo.org/api-reference/tracking-api

Every builder validates its required fields, drops optional parameters that
were not given and merges ``user_info`` last, so callers can override any
generated parameter (for example ``lang`` or ``idsite``).
"""

from __future__ import annotations

from typing import Any, Mapping

from .constants import APP_START_ACTION, SCREEN_ACTION_PREFIX
from .exceptions import MatomoValidationError

UserInfo = Mapping[str, Any]


def _require(field: str, value: Any) -> None:
    if value is None or value == "":
        raise MatomoValidationError(field)


def _compose(params: dict[str, Any], user_info: UserInfo | None) -> dict[str, Any]:
    fields = {key: value for key, value in params.items() if value is not None}
    if user_info:
        fields.update(user_info)
    return fields


def build_app_start(user_info: UserInfo | None = None) -> dict[str, Any]:
    """App start is tracked as an action in the 'App' category."""
    return build_action(APP_START_ACTION, user_info)


def build_screen_view(name: str, user_info: UserInfo | None = None) -> dict[str, Any]:
    """Screen view is tracked as an action in the 'Screen' category."""
    _require("name", name)
    return build_action(f"{SCREEN_ACTION_PREFIX}{name}", user_info)


def build_action(name: str, user_info: UserInfo | None = None) -> dict[str, Any]:
    """
    Build an action hit.

    Slashes in ``name`` set one or several categories, e.g. ``Help / Feedback``
    creates the action Feedback in the category Help.
    """
    _require("name", name)
    return _compose({"action_name": name}, user_info)


def build_event(
    category: str,
    action: str,
    name: str | None = None,
    value: float | None = None,
    campaign: str | None = None,
    user_info: UserInfo | None = None,
) -> dict[str, Any]:
    """
    Build a custom event hit.

    ``value`` must be numeric; it is passed through without coercion.
    """
    _require("category", category)
    _require("action", action)
    return _compose(
        {"e_c": category, "e_a": action, "e_n": name, "e_v": value, "mtm_campaign": campaign},
        user_info,
    )


def build_content(
    name: str,
    piece: str | None = None,
    target: str | None = None,
    interaction: str | None = None,
    user_info: UserInfo | None = None,
) -> dict[str, Any]:
    """Build a content impression, or a content interaction when ``interaction`` is set."""
    _require("name", name)
    return _compose({"c_n": name, "c_p": piece, "c_t": target, "c_i": interaction}, user_info)


def build_site_search(
    keyword: str,
    category: str | None = None,
    count: int | None = None,
    user_info: UserInfo | None = None,
) -> dict[str, Any]:
    """
    Build a site search hit.

    A ``count`` of 0 is kept: Matomo reports such keywords as "No Result Search Keyword".
    """
    _require("keyword", keyword)
    return _compose({"search": keyword, "search_cat": category, "search_count": count}, user_info)


def build_link(link: str, user_info: UserInfo | None = None) -> dict[str, Any]:
    _require("link", link)
    return _compose({"link": link, "url": link}, user_info)


def build_download(download: str, user_info: UserInfo | None = None) -> dict[str, Any]:
    _require("download", download)
    return _compose({"download": download, "url": download}, user_info)


__all__ = [
    "UserInfo",
    "build_app_start",
    "build_screen_view",
    "build_action",
    "build_event",
    "build_content",
    "build_site_search",
    "build_link",
    "build_download",
]

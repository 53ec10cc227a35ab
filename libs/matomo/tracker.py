from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Mapping, Union

import httpx

from libs.common import TrackerSettings, get_settings

from .constants import (
    API_VERSION,
    DEFAULT_TRACKER_PATH,
    HEADER_ACCEPT,
    HEADER_CONTENT_TYPE,
    LANG_PARAM,
    REC,
    SEND_IMAGE,
    USER_ID_PARAM,
)
from .exceptions import (
    MatomoConfigurationError,
    MatomoError,
    MatomoResponseError,
    MatomoTransportError,
)
from .hits import (
    UserInfo,
    build_action,
    build_app_start,
    build_content,
    build_download,
    build_event,
    build_link,
    build_screen_view,
    build_site_search,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackSuccess:
    response: httpx.Response

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class TrackFailure:
    error: MatomoError

    @property
    def ok(self) -> bool:
        return False


TrackResult = Union[TrackSuccess, TrackFailure]


async def _skipped() -> None:
    return None


class MatomoTracker:
    """
    Thin async wrapper around the Matomo Tracking API.

    Every tracking call sends one form-encoded POST. Missing configuration or
    required fields raise immediately; network failures and non-success
    statuses never raise, they come back as ``TrackFailure``.
    """

    def __init__(
        self,
        url_base: str | None,
        site_id: int | None,
        *,
        tracker_url: str | None = None,
        user_id: str | None = None,
        disabled: bool = False,
        log: bool = False,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not url_base:
            raise MatomoConfigurationError("url_base is required for Matomo tracking.")
        if not site_id:
            raise MatomoConfigurationError("site_id is required for Matomo tracking.")

        self.url_base = url_base.rstrip("/") + "/"
        self.tracker_url = tracker_url or f"{self.url_base}{DEFAULT_TRACKER_PATH}"
        self.site_id = site_id
        self.user_id = user_id or None
        self.disabled = disabled
        self.log = log
        self._identity: dict[str, Any] = {}

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

        if disabled:
            if log:
                logger.info("Matomo tracking is disabled.")
            return

        if log:
            logger.info(
                f"Matomo tracking is enabled for: tracker_url={self.tracker_url}, "
                f"site_id={self.site_id}, user_id={self.user_id}"
            )

    @classmethod
    def from_settings(
        cls,
        settings: TrackerSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> "MatomoTracker":
        settings = settings or get_settings()
        return cls(
            settings.matomo_url_base,
            settings.matomo_site_id,
            tracker_url=settings.matomo_tracker_url,
            user_id=settings.matomo_user_id,
            disabled=settings.matomo_disabled,
            log=settings.matomo_log,
            timeout=settings.matomo_timeout,
            client=client,
        )

    def track_app_start(self, user_info: UserInfo | None = None) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_app_start(user_info))

    def track_screen_view(self, name: str, user_info: UserInfo | None = None) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_screen_view(name, user_info))

    def track_action(self, name: str, user_info: UserInfo | None = None) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_action(name, user_info))

    def track_event(
        self,
        category: str,
        action: str,
        name: str | None = None,
        value: float | None = None,
        campaign: str | None = None,
        user_info: UserInfo | None = None,
    ) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_event(category, action, name, value, campaign, user_info))

    def track_content(
        self,
        name: str,
        piece: str | None = None,
        target: str | None = None,
        interaction: str | None = None,
        user_info: UserInfo | None = None,
    ) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_content(name, piece, target, interaction, user_info))

    def track_site_search(
        self,
        keyword: str,
        category: str | None = None,
        count: int | None = None,
        user_info: UserInfo | None = None,
    ) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_site_search(keyword, category, count, user_info))

    def track_link(self, link: str, user_info: UserInfo | None = None) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_link(link, user_info))

    def track_download(self, download: str, user_info: UserInfo | None = None) -> Awaitable[TrackResult | None]:
        if self.disabled:
            return _skipped()
        return self.track(build_download(download, user_info))

    def update_user_info(self, user_info: UserInfo) -> None:
        """
        Attach identity parameters to every following hit.

        ``uid`` (or ``user_id``) replaces the tracked user id, any other key is
        sent as an extra parameter until ``remove_user_info`` is called.
        """
        info = dict(user_info)
        user_id = info.pop(USER_ID_PARAM, None)
        alias = info.pop("user_id", None)
        if user_id or alias:
            self.user_id = user_id or alias
        self._identity.update(info)
        if self.log:
            logger.info(f"Matomo user info updated: user_id={self.user_id}, params={sorted(self._identity)}")

    def remove_user_info(self) -> None:
        self.user_id = None
        self._identity.clear()
        if self.log:
            logger.info("Matomo user info removed")

    def track(self, fields: Mapping[str, Any] | None) -> Awaitable[TrackResult | None]:
        """
        Send one hit to Matomo.

        The request is assembled immediately, so identity changes made after
        this call do not affect it. The returned awaitable resolves to a
        ``TrackResult``, or to ``None`` when nothing was sent.
        """
        if self.disabled or not fields:
            return _skipped()

        # identity params first so call fields win on collision
        data = {**self._identity, **fields}
        # lang goes to the Accept-Language header, a body param would shadow it
        lang = data.pop(LANG_PARAM, None)
        headers = {
            "Accept": HEADER_ACCEPT,
            "Accept-Language": "" if lang is None else str(lang),
            "Content-Type": HEADER_CONTENT_TYPE,
        }

        payload: dict[str, Any] = {"idsite": self.site_id, "rec": REC, "apiv": API_VERSION}
        if self.user_id:
            payload[USER_ID_PARAM] = self.user_id
        payload["send_image"] = SEND_IMAGE
        payload.update(data)

        return self._send(payload, headers)

    async def _send(self, payload: dict[str, Any], headers: dict[str, str]) -> TrackResult:
        try:
            response = await self._client.post(self.tracker_url, data=payload, headers=headers)
        # non-ASCII header values fail while httpx builds the request
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            error = MatomoTransportError(str(exc) or type(exc).__name__)
            error.__cause__ = exc
            return self._failed(error, payload)

        if not response.is_success:
            return self._failed(MatomoResponseError(response), payload)

        if self.log:
            logger.info(f"Matomo tracking is sent: {self.tracker_url} payload={payload}")
        return TrackSuccess(response)

    def _failed(self, error: MatomoError, payload: dict[str, Any]) -> TrackFailure:
        if self.log:
            logger.info(f"Matomo tracking is not sent: {self.tracker_url} payload={payload}")
        logger.warning(f"Matomo tracking error: {type(error).__name__}: {error}")
        return TrackFailure(error)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "MatomoTracker":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = [
    "MatomoTracker",
    "TrackResult",
    "TrackSuccess",
    "TrackFailure",
]

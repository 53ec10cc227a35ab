from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from .binding import MatomoProvider
from .tracker import MatomoTracker


class MatomoMiddleware(BaseMiddleware):
    """Provides the shared tracker to handlers as ``matomo`` and as the ambient tracker."""

    def __init__(self, tracker: MatomoTracker, key: str = "matomo") -> None:
        super().__init__()
        self.tracker = tracker
        self.key = key

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        async with MatomoProvider(self.tracker) as hooks:
            data[self.key] = hooks
            return await handler(event, data)

"""In-process event bus replacing the browser's same-page events.

Stores publish after they have persisted, and handlers run synchronously
in subscription order, so every mounted view sees the post-mutation state
before control returns to the caller.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

CART_UPDATED = "cartUpdated"
WISHLIST_UPDATED = "wishlistUpdated"
PROFILE_UPDATED = "profileUpdated"

Handler = Callable[[Any], None]


class EventBus:

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """Register *handler*; returns a callable that unsubscribes it."""
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def emit(self, event: str, detail: Any = None) -> None:
        handlers = list(self._handlers.get(event, ()))
        logger.debug(f"{event} -> {len(handlers)} handler(s)")
        for handler in handlers:
            handler(detail)

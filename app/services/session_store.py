import time
from collections.abc import Callable, MutableMapping
from typing import Any

from cachetools import TTLCache
from loguru import logger


class ChatSessionStore:
    """
    In-memory mapping of session key -> persistent chat handle.

    Handles are created lazily by ``factory`` on first use of a key and reused
    afterwards. With ``idle_ttl`` > 0 a handle unused for that many seconds is
    dropped and a fresh one is created on the next access.
    """

    def __init__(
        self,
        factory: Callable[[], Any],
        idle_ttl: int = 0,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._factory = factory
        self._sessions: MutableMapping[str, Any]
        if idle_ttl > 0:
            self._sessions = TTLCache(maxsize=maxsize, ttl=idle_ttl, timer=timer)
        else:
            self._sessions = {}

    def get_or_create(self, key: str) -> Any:
        handle = self._sessions.get(key)
        if handle is None:
            logger.info(f"[{key}] Starting new chat session")
            handle = self._factory()
        # Re-inserting refreshes the idle deadline of a TTLCache entry
        self._sessions[key] = handle
        return handle

    def __contains__(self, key: str) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()

# File: fellowship/core/rate_limit.py
import logging
import math
import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List

from fellowship.core.config import settings
from fellowship.core.exceptions import RateLimited

logger = logging.getLogger(__name__)


class InvitationRateLimiter:
    """Sliding-window limit on invitations sent per account.

    One instance is built at startup and shared through ``app.state``. REST
    handlers run on a thread pool, so every key is guarded by its own lock.
    """

    def __init__(
        self,
        limit: int = settings.INVITATION_RATE_LIMIT,
        window_seconds: int = settings.INVITATION_RATE_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self._sent: Dict[str, List[float]] = defaultdict(list)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _prune(self, key: str, now: float) -> List[float]:
        cutoff = now - self.window_seconds
        recent = [ts for ts in self._sent.get(key, []) if ts > cutoff]
        if recent:
            self._sent[key] = recent
        else:
            self._sent.pop(key, None)
        return recent

    def remaining(self, key: str) -> int:
        with self._lock_for(key):
            return max(self.limit - len(self._prune(key, self.clock())), 0)

    def _check_locked(self, key: str, now: float) -> None:
        recent = self._prune(key, now)
        if len(recent) >= self.limit:
            retry_after = max(int(math.ceil(recent[0] + self.window_seconds - now)), 1)
            logger.warning(f"Invitation rate limit hit for user {key}")
            raise RateLimited(retry_after=retry_after)

    @contextmanager
    def slot(self, key: str) -> Iterator[None]:
        """Hold the account's quota for the duration of one issuance.

        Checks on entry and records a timestamp only if the body completes, so
        a rejected attempt never consumes quota. The per-account lock is held
        throughout, which serialises concurrent issuance by the same account.
        """
        lock = self._lock_for(key)
        with lock:
            self._check_locked(key, self.clock())
            yield
            self._sent[key].append(self.clock())


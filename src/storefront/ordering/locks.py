"""Per-owner mutual exclusion for cart mutations and checkout.

Locks are in-process. Entries are reference counted so an owner's lock
disappears once nobody holds or waits on it.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.errors import Unavailable
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class OwnerLocks:
    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, owner_id):
        key = str(owner_id)
        with self._guard:
            entry = self._entries.setdefault(key, _Entry())
            entry.users += 1

        try:
            if not entry.lock.acquire(timeout=self.timeout):
                logger.warning("Timed out waiting for owner lock", owner_id=key, timeout=self.timeout)
                raise Unavailable(reason=f"Owner lock wait exceeded {self.timeout}s")
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]


def process_for_owner(locks: OwnerLocks, owner_id, command):
    """Process ``command`` synchronously while holding the owner's lock."""
    with locks.hold(owner_id):
        return current_domain.process(command, asynchronous=False)

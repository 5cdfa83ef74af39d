"""
Hasher Pool
Thread-safe reuse of hash objects behind a hash factory.

Hashers are checked out through a context manager and always returned to
the pool, including when the body raises. A pooled hasher is reused only
if it can be cleared in place through a reset() method (third-party
hashers such as xxhash). hashlib objects have no reset(), so those are
discarded on checkout and a fresh one is drawn from the factory. The
factory is the only way hashers are created; no copy() is required.

Pooling never changes results; a tree works the same with max_size=0.
"""
from __future__ import annotations

import logging
import queue
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from merkletree.crypto.hashing import HashFactory


logger = logging.getLogger(__name__)


class HasherPool:
    """
    Bounded pool of reusable hash objects.

    Example:
        >>> import hashlib
        >>> pool = HasherPool(hashlib.sha256, max_size=2)
        >>> with pool.checkout() as h:
        ...     h.update(b"abc")
        ...     d = h.digest()
        >>> pool.idle
        1
    """

    def __init__(self, factory: HashFactory, max_size: int = 4) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self._factory = factory
        self._idle: queue.LifoQueue[Any] = queue.LifoQueue(maxsize=max_size or 1)
        self._max_size = max_size
        self._created = 0
        self._lock = threading.Lock()

    @property
    def factory(self) -> HashFactory:
        return self._factory

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def idle(self) -> int:
        """Number of hashers currently waiting in the pool."""
        return self._idle.qsize()

    @property
    def created(self) -> int:
        """Number of hashers this pool has had to allocate."""
        return self._created

    @contextmanager
    def checkout(self) -> Iterator[Any]:
        """Yield a clean hasher and return it to the pool on exit."""
        hasher = self._acquire()
        try:
            yield hasher
        finally:
            self._release(hasher)

    def digest(self, *parts: bytes) -> bytes:
        """Hash the concatenation of parts using a pooled hasher."""
        with self.checkout() as hasher:
            for part in parts:
                hasher.update(part)
            return hasher.digest()

    def _acquire(self) -> Any:
        try:
            hasher = self._idle.get_nowait()
        except queue.Empty:
            return self._new()

        reset = getattr(hasher, "reset", None)
        if callable(reset):
            reset()
            return hasher
        return self._new()

    def _new(self) -> Any:
        with self._lock:
            self._created += 1
        return self._factory()

    def _release(self, hasher: Any) -> None:
        if self._max_size == 0:
            return
        try:
            self._idle.put_nowait(hasher)
        except queue.Full:
            logger.debug("Hasher pool full, dropping hasher")


__all__ = ["HasherPool"]

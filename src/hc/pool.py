"""Thread-safe object pools for requests and responses.

Objects returned by ``acquire`` are exclusively owned by the caller until
they are handed back with ``release``. Releasing is optional: an object
that is never released is simply garbage collected. There is no
use-after-release detection.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, List, TypeVar

from .models import Request, Response

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POOL_SIZE = 64


class ObjectPool(Generic[T]):
    """Bounded free list of reusable objects.

    :param factory: Callable creating a new object when the pool is empty
    :type factory: Callable[[], T]
    :param max_size: Maximum number of idle objects kept for reuse
    :type max_size: int
    """

    def __init__(self, factory: Callable[[], T], max_size: int = DEFAULT_POOL_SIZE):
        self._factory = factory
        self._max_size = max_size
        self._free: List[T] = []
        self._lock = threading.Lock()

    def acquire(self) -> T:
        """Take an idle object or create a new one."""
        with self._lock:
            if self._free:
                return self._free.pop()
        return self._factory()

    def release(self, obj: T) -> None:
        """Reset ``obj`` and keep it for reuse if the pool has room.

        The caller must not touch ``obj`` after releasing it.
        """
        obj.reset()
        with self._lock:
            if len(self._free) < self._max_size:
                self._free.append(obj)
                return
        logger.debug("Pool full (%d idle), dropping %r", self._max_size, obj)

    @contextmanager
    def scope(self) -> Iterator[T]:
        """Acquire an object for the duration of a ``with`` block."""
        obj = self.acquire()
        try:
            yield obj
        finally:
            self.release(obj)

    def __len__(self) -> int:
        with self._lock:
            return len(self._free)


request_pool: ObjectPool[Request] = ObjectPool(Request)
response_pool: ObjectPool[Response] = ObjectPool(Response)

"""Single-flight loading cache for remote lookups."""

import asyncio
import logging
from collections import Counter
from collections.abc import Awaitable, Callable, Hashable
from functools import partial
from typing import Generic, TypeVar

from sonar_gate.infrastructure.sonar.errors import CacheLoadError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _loaded(future: asyncio.Future) -> bool:
    return future.done() and not future.cancelled() and future.exception() is None


class AsyncLoadingCache(Generic[K, V]):
    """Load-on-miss cache with at most one in-flight load per key.

    Concurrent ``get`` calls for the same key await the same future, so the
    loader runs once. Successful values are kept for the lifetime of the
    cache. A failed or cancelled load is dropped, and the next ``get`` for
    that key loads again. When the last caller waiting on a load is
    cancelled, the load is cancelled too.

    Lookup and insertion happen without an ``await`` in between, which makes
    them atomic on the event loop; no lock is needed.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._entries: dict[K, asyncio.Future[V]] = {}
        self._waiting: Counter[asyncio.Future[V]] = Counter()

    def __len__(self) -> int:
        return sum(1 for f in self._entries.values() if _loaded(f))

    def __contains__(self, key: object) -> bool:
        future = self._entries.get(key)  # type: ignore[arg-type]
        return future is not None and _loaded(future)

    async def get(self, key: K, loader: Callable[[], Awaitable[V]]) -> V:
        """Return the cached value for ``key``, calling ``loader`` on a miss.

        Raises:
            CacheLoadError: loader raised; the original error is chained

        """
        future = self._entries.get(key)
        if future is None:
            future = asyncio.ensure_future(loader())
            self._entries[key] = future
            future.add_done_callback(partial(self._drop_failed, key))
        else:
            logger.debug("%s cache hit for %s", self._name, key)

        self._waiting[future] += 1
        try:
            # Shielded: one caller being cancelled must not cancel the shared load.
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            if self._waiting[future] == 1 and not future.done():
                future.cancel()
                await asyncio.wait([future])
            raise
        except Exception as e:
            raise CacheLoadError(self._name, str(key)) from e
        finally:
            self._waiting[future] -= 1
            if not self._waiting[future]:
                del self._waiting[future]

    def _drop_failed(self, key: K, future: asyncio.Future[V]) -> None:
        if not future.cancelled() and future.exception() is None:
            return
        if self._entries.get(key) is future:
            del self._entries[key]

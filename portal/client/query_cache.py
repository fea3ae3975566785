import logging
from typing import Any, Callable, Dict, Iterable

logger = logging.getLogger(__name__)

# read-models derived from submission and message lists; stale together after
# any mutation touching status, messages or delivery info
PROJECT_QUERY_KEYS = ("submissions", "userProjects", "allMessages", "allUserMessages")


class QueryCache:
    """Named read queries with invalidate-then-refetch semantics.

    A key becomes active the first time it is read and stays active until
    released. Only active keys are refetched eagerly after invalidation.
    """

    def __init__(self):
        self._fetchers: Dict[str, Callable[[], Any]] = {}
        self._data: Dict[str, Any] = {}
        self._stale = set()
        self._active = set()

    def register(self, key: str, fetcher: Callable[[], Any]) -> None:
        self._fetchers[key] = fetcher
        self._stale.add(key)

    def get(self, key: str) -> Any:
        self._active.add(key)
        if key not in self._data or key in self._stale:
            self._fetch(key)
        return self._data[key]

    def peek(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._stale.discard(key)

    def is_stale(self, key: str) -> bool:
        return key in self._stale or key not in self._data

    def is_active(self, key: str) -> bool:
        return key in self._active

    def release(self, key: str) -> None:
        """The view reading this key went away; stop refetching it."""
        self._active.discard(key)

    def invalidate(self, keys: Iterable[str]) -> None:
        self._stale.update(keys)

    def refetch_active(self, keys: Iterable[str]) -> None:
        for key in keys:
            if key not in self._active or key not in self._fetchers:
                continue
            try:
                self._fetch(key)
            except Exception as e:
                # the key stays stale and is fetched again on next read
                logger.error(f"Refetch of '{key}' failed: {e}")

    def refresh(self, keys: Iterable[str] = PROJECT_QUERY_KEYS) -> None:
        keys = tuple(keys)
        self.invalidate(keys)
        self.refetch_active(keys)

    def _fetch(self, key: str) -> None:
        if key not in self._fetchers:
            raise KeyError(f"No fetcher registered for '{key}'")
        self._data[key] = self._fetchers[key]()
        self._stale.discard(key)

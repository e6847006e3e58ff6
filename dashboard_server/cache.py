import logging
import threading
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class ViewCache:
    """In-process store of rendered views, keyed by request path.

    A view stays cached until a write revalidates its path; the next request
    for that path then recomputes it through its loader. A load that overlaps
    a revalidation is served to its caller but never stored.
    """

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get_or_set(self, path: str, loader: Callable[[], Any]) -> Any:
        with self._lock:
            if path in self._entries:
                return self._entries[path]
            generation = self._generations.get(path, 0)
        value = loader()
        with self._lock:
            if self._generations.get(path, 0) == generation:
                self._entries[path] = value
            else:
                logger.debug("Discarded view of %s loaded before revalidation", path)
        return value

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            self._entries.pop(path, None)
            self._generations[path] = self._generations.get(path, 0) + 1
        logger.debug("Revalidated cached view %s", path)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

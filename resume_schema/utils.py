# resume_schema/utils.py
import json
import logging
from collections import OrderedDict
from typing import Any, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


def setup_logging(log_level: str = "INFO"):
    """Configure logging for scripts using resume_schema"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


class LRUCache(Generic[K, V]):
    """
    Bounded least-recently-used cache with O(1) get/set

    Args:
        capacity: Maximum number of entries kept
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"LRU cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: "OrderedDict[K, V]" = OrderedDict()

    def get(self, key: K) -> Optional[V]:
        """Return cached value and mark it most recently used"""
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def set(self, key: K, value: V):
        """Insert or update a value, evicting the least recently used entry"""
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"LRU cache evicted key: {evicted!r}")
        self._entries[key] = value

    def clear(self):
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"<LRUCache: {len(self._entries)}/{self.capacity}>"


def stable_hash(value: Any) -> str:
    """
    Canonical string for a JSON-like value

    Object keys are sorted recursively so insertion order does not matter.
    Sequence order is kept.
    """
    if value is None:
        return 'null'

    if isinstance(value, dict):
        parts = [
            f"{json.dumps(str(key))}:{stable_hash(value[key])}"
            for key in sorted(value, key=str)
        ]
        return '{' + ','.join(parts) + '}'

    if isinstance(value, (list, tuple)):
        return '[' + ','.join(stable_hash(v) for v in value) + ']'

    if hasattr(value, 'to_dict'):
        return stable_hash(value.to_dict())

    try:
        return json.dumps(value)
    except TypeError:
        return json.dumps(str(value))

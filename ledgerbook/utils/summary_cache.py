import logging
from collections import OrderedDict
from typing import Any, Hashable, Optional

from fastapi import Request

logger = logging.getLogger(__name__)


class SummaryCache:
    """
    Memo for summary reports keyed by the filter tuple.

    Holds at most `max_keys` entries and drops the least recently used one
    when full. Nothing expires on its own; writers call invalidate().
    """

    def __init__(self, max_keys: int = 64):
        if max_keys <= 0:
            raise ValueError("max_keys must be > 0")
        self.max_keys = max_keys
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()

    def get(self, key: Hashable) -> Optional[Any]:
        if key not in self._data:
            return None
        self._data.move_to_end(key)
        logger.debug("summary cache hit: %s", key)
        return self._data[key]

    def set(self, key: Hashable, value: Any) -> None:
        self._data[key] = value
        self._data.move_to_end(key)
        while len(self._data) > self.max_keys:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("summary cache evicted: %s", evicted)

    def invalidate(self) -> None:
        if self._data:
            logger.debug("summary cache cleared (%d entries)", len(self._data))
        self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


def get_summary_cache(request: Request) -> SummaryCache:
    return request.app.state.summary_cache

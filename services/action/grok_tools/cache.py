"""Single-slot, time-bounded cache for the rendered model listing."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from packages.grok_shared.logging import get_logger

_LOGGER = get_logger(__name__)

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class _CacheSlot:
    value: str
    inserted_at: float


class ModelCache:
    """Hold at most one value that expires ``ttl_seconds`` after insertion.

    The slot is an immutable object swapped by a single attribute
    assignment, so concurrent readers on one event loop always observe a
    complete old or new entry. Two concurrent misses may both refetch and
    the later ``put`` wins.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._slot: _CacheSlot | None = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self) -> str | None:
        """Return the stored value while it is younger than the TTL."""
        slot = self._slot
        if slot is None:
            _LOGGER.debug("model cache miss: empty")
            return None
        if self._clock() - slot.inserted_at >= self._ttl_seconds:
            _LOGGER.debug("model cache miss: expired")
            return None
        _LOGGER.debug("model cache hit")
        return slot.value

    def put(self, value: str) -> None:
        """Replace any prior entry with ``value`` stamped at the current time."""
        self._slot = _CacheSlot(value=value, inserted_at=self._clock())

    def clear(self) -> None:
        """Drop the stored entry."""
        self._slot = None

from __future__ import annotations

import itertools
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Hashable

DEFAULT_MAX_KEYS = 10_000


@dataclass(frozen=True)
class Ticket:
    key: Hashable
    generation: int


class LatestRequestGuard:
    """Per-key generation counter: only the newest ticket may publish a result.

    A page that reloads on every filter change draws a ticket before fetching;
    when the fetch completes, ``is_current`` tells whether a newer request for
    the same key started in the meantime.

    Keys are kept least-recently-issued first and the oldest are evicted past
    ``max_keys``, so lapsed sessions do not accumulate. Generations come from
    one counter shared by all keys; a key issued again after eviction never
    reuses a number an outstanding ticket holds.
    """

    def __init__(self, max_keys: int = DEFAULT_MAX_KEYS) -> None:
        if max_keys < 1:
            raise ValueError("max_keys must be positive")
        self._max_keys = max_keys
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._latest: OrderedDict[Hashable, int] = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)

    def issue(self, key: Hashable) -> Ticket:
        with self._lock:
            generation = next(self._counter)
            self._latest[key] = generation
            self._latest.move_to_end(key)
            while len(self._latest) > self._max_keys:
                self._latest.popitem(last=False)
            return Ticket(key=key, generation=generation)

    def is_current(self, ticket: Ticket) -> bool:
        with self._lock:
            return self._latest.get(ticket.key) == ticket.generation

    def forget(self, key: Hashable) -> None:
        with self._lock:
            self._latest.pop(key, None)

    def forget_prefix(self, prefix: Hashable) -> None:
        """Drop every tuple key whose first element is ``prefix`` (e.g. on logout)."""
        with self._lock:
            for key in [k for k in self._latest if isinstance(k, tuple) and k and k[0] == prefix]:
                del self._latest[key]

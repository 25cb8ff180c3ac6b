"""In-memory storage for the most recent wrap result."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass
class LatestResultRepository(Generic[T]):
    """Keeps only the result of the last submitted upload.

    Tokens grow monotonically. A result published with a token older than the
    newest one handed out is discarded, so a slow earlier upload can never
    overwrite the state of a newer one.
    """

    _counter: Iterator[int] = field(default_factory=lambda: itertools.count(1))
    _newest: int = 0
    _result: T | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def next_token(self) -> int:
        with self._lock:
            self._newest = next(self._counter)
            return self._newest

    def publish(self, token: int, result: T) -> bool:
        with self._lock:
            if token != self._newest:
                return False
            self._result = result
            return True

    def latest(self) -> T | None:
        with self._lock:
            return self._result


__all__ = ["LatestResultRepository"]

"""Thread-safe initialize-once cell."""

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class OnceCell(Generic[T]):
    """Value computed at most once, shared by all threads.

    A computation that raises leaves the cell empty so a later call retries.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._set = False

    def get_or_init(self, init: Callable[[], T]) -> T:
        if self._set:
            return self._value
        with self._lock:
            if not self._set:
                self._value = init()
                self._set = True
        return self._value

    def is_set(self) -> bool:
        return self._set

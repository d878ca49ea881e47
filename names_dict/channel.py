"""Bounded single-producer/single-consumer channel with close and cancel."""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, TypeVar


T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised by put after close/cancel, and by get once nothing more will arrive."""


class BoundedChannel(Generic[T]):
    """Fixed-capacity FIFO between one producer and one consumer.

    ``put`` blocks while the channel is full, ``get`` blocks while it is empty.
    ``close`` lets the consumer drain what is queued before it sees
    ChannelClosed; ``cancel`` drops everything and wakes both sides.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._cancelled = False

    def put(self, item: T) -> None:
        with self._cond:
            while len(self._items) >= self.capacity and not (self._closed or self._cancelled):
                self._cond.wait()
            if self._closed or self._cancelled:
                raise ChannelClosed("put on a closed channel")
            self._items.append(item)
            self._cond.notify_all()

    def get(self) -> T:
        with self._cond:
            while not self._items and not (self._closed or self._cancelled):
                self._cond.wait()
            if self._cancelled or not self._items:
                raise ChannelClosed("channel drained")
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> None:
        with self._cond:
            self._cancelled = True
            self._items.clear()
            self._cond.notify_all()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def full(self) -> bool:
        with self._cond:
            return len(self._items) >= self.capacity

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return

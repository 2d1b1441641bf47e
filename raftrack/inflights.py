"""Sliding window of in-flight append messages sent to a follower."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True)
class Inflight:
    """One in-flight append message."""

    index: int
    """Index of the last entry inside the message."""
    bytes: int
    """Total byte size of the entries in the message."""


class Inflights:
    """Limits the number of unacknowledged append messages sent to a follower.

    Callers check ``is_full()`` before sending, call ``add()`` for every new
    append, and release quota via ``free_le()`` whenever an ack arrives.
    A ``max_bytes`` of 0 means there is no byte limit. The byte limit is soft:
    a single message that takes the total from below the limit to at or above
    it is accepted.
    """

    def __init__(self, size: int, max_bytes: int) -> None:
        self.size = size
        self.max_bytes = max_bytes
        self._flights: deque[Inflight] = deque()
        self._bytes = 0

    def clone(self) -> Inflights:
        """Return an identical copy that shares no state with this one."""
        other = Inflights(self.size, self.max_bytes)
        other._flights = deque(self._flights)
        other._bytes = self._bytes
        return other

    def add(self, index: int, bytes: int) -> None:
        """Record a newly dispatched message.

        Indexes of consecutive calls must be monotonic. Raises RuntimeError
        if the window is full.
        """
        if self.is_full():
            raise RuntimeError("cannot add into a full inflights")
        self._flights.append(Inflight(index, bytes))
        self._bytes += bytes

    def free_le(self, to: int) -> None:
        """Free all in-flight messages whose index is at most ``to``."""
        flights = self._flights
        while flights and flights[0].index <= to:
            self._bytes -= flights.popleft().bytes

    def is_full(self) -> bool:
        """Return True if no more messages can be sent at the moment."""
        return len(self._flights) == self.size or (
            self.max_bytes != 0 and self._bytes >= self.max_bytes
        )

    def __len__(self) -> int:
        return len(self._flights)

    def reset(self) -> None:
        """Free all in-flight messages."""
        self._flights.clear()
        self._bytes = 0

    def pending(self) -> list[Inflight]:
        """Return the in-flight messages, oldest first."""
        return list(self._flights)

    def __repr__(self) -> str:
        return (
            f"Inflights(size={self.size}, max_bytes={self.max_bytes}, "
            f"pending={self.pending()!r})"
        )
"""Fixed-capacity byte FIFO."""

from __future__ import annotations


class Fifo:
    """A first-in first-out byte queue with a fixed capacity.

    Writes beyond the free space are truncated; reads return at most the
    bytes that are queued.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("fifo size must be at least 1")
        self._size = size
        self._buffer = bytearray()

    @property
    def size(self) -> int:
        """Capacity of the FIFO in bytes."""
        return self._size

    def __len__(self) -> int:
        return len(self._buffer)

    def space(self) -> int:
        """Number of bytes that can still be written."""
        return self._size - len(self._buffer)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Append as much of ``data`` as fits and return the number of bytes written."""
        chunk = memoryview(data).cast("B")[: self.space()]
        self._buffer += chunk
        return len(chunk)

    def peek(self, size: int) -> bytes:
        """Return up to ``size`` bytes from the front without removing them."""
        _check_count(size)
        return bytes(self._buffer[:size])

    def pop(self, size: int) -> int:
        """Discard up to ``size`` bytes from the front and return how many were discarded."""
        _check_count(size)
        count = min(size, len(self._buffer))
        del self._buffer[:count]
        return count

    def read(self, size: int) -> bytes:
        """Remove and return up to ``size`` bytes from the front."""
        data = self.peek(size)
        self.pop(len(data))
        return data

    def clear(self) -> None:
        """Discard everything queued."""
        self._buffer.clear()


def _check_count(size: int) -> None:
    if size < 0:
        raise ValueError("byte count must not be negative")
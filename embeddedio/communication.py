"""Byte-stream communication service that dispatches received data to callbacks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from itertools import count
from typing import Callable

SendCallback = Callable[[bytes], None]
ReceiveCallback = Callable[[SendCallback, bytes], int]


class CommunicationService(ABC):
    """Base class for a bidirectional byte channel.

    Subclasses implement :meth:`send`; received data is fed to :meth:`receive`,
    which offers it to the registered callbacks. A callback returns how many
    bytes it consumed.
    """

    def __init__(self) -> None:
        self._callbacks: dict[int, ReceiveCallback] = {}
        self._ids = count()

    def register_receive_callback(self, callback: ReceiveCallback) -> int:
        """Register ``callback`` for received data and return its id."""
        callback_id = next(self._ids)
        self._callbacks[callback_id] = callback
        return callback_id

    def unregister_receive_callback(self, callback_id: int) -> None:
        """Remove the callback registered under ``callback_id``, if any."""
        self._callbacks.pop(callback_id, None)

    def receive(self, data: bytes | bytearray | memoryview) -> int:
        """Offer ``data`` to the callbacks and return the number of bytes handled.

        Callbacks are tried in registration order. Whenever one consumes data,
        the remainder is offered again starting from the first callback. The
        loop stops when all data is handled or no callback consumes anything.
        """
        payload = bytes(data)
        handled = 0
        while handled < len(payload):
            remaining = payload[handled:]
            for callback in list(self._callbacks.values()):
                consumed = callback(self.send, remaining)
                if consumed < 0 or consumed > len(remaining):
                    raise ValueError(
                        f"callback reported {consumed} bytes handled of {len(remaining)}"
                    )
                if consumed > 0:
                    handled += consumed
                    break
            else:
                break
        return handled

    @abstractmethod
    def send(self, data: bytes | bytearray | memoryview) -> None:
        """Transmit ``data`` on the channel."""
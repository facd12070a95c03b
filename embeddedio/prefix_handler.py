"""Dispatch received data to callbacks selected by a leading prefix."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count

from embeddedio.communication import ReceiveCallback, SendCallback


@dataclass(frozen=True)
class _PrefixEntry:
    callback: ReceiveCallback
    prefix: bytes
    handles_data: bool


class PrefixHandler:
    """Routes data to callbacks whose prefix matches the start of the data.

    A matched callback receives the data after the prefix and returns how many
    of those bytes it consumed.
    """

    def __init__(self) -> None:
        self._entries: dict[int, _PrefixEntry] = {}
        self._ids = count()

    def register_receive_callback(
        self,
        callback: ReceiveCallback,
        prefix: bytes | bytearray | str,
        handles_data: bool = True,
    ) -> int:
        """Register ``callback`` for data starting with ``prefix`` and return its id.

        When ``handles_data`` is false the prefix is consumed even if the
        callback reports no bytes handled.
        """
        if isinstance(prefix, str):
            prefix = prefix.encode()
        callback_id = next(self._ids)
        self._entries[callback_id] = _PrefixEntry(callback, bytes(prefix), handles_data)
        return callback_id

    def unregister_receive_callback(self, callback_id: int) -> None:
        """Remove the callback registered under ``callback_id``, if any."""
        self._entries.pop(callback_id, None)

    def unregister_prefix(self, prefix: bytes | bytearray | str) -> None:
        """Remove every callback registered for ``prefix``."""
        if isinstance(prefix, str):
            prefix = prefix.encode()
        prefix = bytes(prefix)
        self._entries = {
            callback_id: entry
            for callback_id, entry in self._entries.items()
            if entry.prefix != prefix
        }

    def receive(self, send: SendCallback, data: bytes | bytearray | memoryview) -> int:
        """Offer ``data`` to matching callbacks and return the number of bytes handled."""
        payload = bytes(data)
        handled = 0
        while handled < len(payload):
            remaining = payload[handled:]
            for entry in list(self._entries.values()):
                if not remaining.startswith(entry.prefix):
                    continue
                body = remaining[len(entry.prefix):]
                consumed = entry.callback(send, body)
                if consumed < 0 or consumed > len(body):
                    raise ValueError(
                        f"callback reported {consumed} bytes handled of {len(body)}"
                    )
                if not entry.handles_data or consumed > 0:
                    handled += consumed + len(entry.prefix)
                    break
            else:
                break
        return handled
"""CAN bus service with identifier and masked-identifier receive callbacks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import total_ordering
from itertools import count
from typing import Callable

MAX_DATA_LENGTH = 8
_IDENTIFIER_BITS = 29
_BUS_BITS = 3


@total_ordering
@dataclass(frozen=True)
class CANIdentifier:
    """A 29-bit CAN identifier on one of eight buses."""

    identifier: int
    bus_number: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.identifier < 1 << _IDENTIFIER_BITS:
            raise ValueError(f"CAN identifier out of range: {self.identifier:#x}")
        if not 0 <= self.bus_number < 1 << _BUS_BITS:
            raise ValueError(f"CAN bus number out of range: {self.bus_number}")

    def __and__(self, other: CANIdentifier) -> CANIdentifier:
        if not isinstance(other, CANIdentifier):
            return NotImplemented
        return CANIdentifier(
            self.identifier & other.identifier, self.bus_number & other.bus_number
        )

    def __lt__(self, other: CANIdentifier) -> bool:
        if not isinstance(other, CANIdentifier):
            return NotImplemented
        return (self.bus_number, self.identifier) < (other.bus_number, other.identifier)


CANSendCallback = Callable[[CANIdentifier, bytes], None]
CANReceiveCallback = Callable[[CANSendCallback, bytes], None]
CANMaskCallback = Callable[[CANSendCallback, CANIdentifier, bytes], None]


@dataclass(frozen=True)
class _IdentifierEntry:
    identifier: CANIdentifier
    callback: CANReceiveCallback


@dataclass(frozen=True)
class _MaskEntry:
    identifier: CANIdentifier
    mask: CANIdentifier
    callback: CANMaskCallback

    def matches(self, identifier: CANIdentifier) -> bool:
        return (self.identifier & self.mask) == (identifier & self.mask)


def _check_data(data: bytes | bytearray | memoryview) -> bytes:
    payload = bytes(data)
    if len(payload) > MAX_DATA_LENGTH:
        raise ValueError(f"CAN frames carry at most {MAX_DATA_LENGTH} bytes")
    return payload


class CANService(ABC):
    """Base class for a CAN bus; subclasses implement :meth:`send`."""

    def __init__(self) -> None:
        self._identifier_callbacks: dict[int, _IdentifierEntry] = {}
        self._mask_callbacks: dict[int, _MaskEntry] = {}
        self._ids = count()

    def register_receive_callback(
        self, identifier: CANIdentifier, callback: CANReceiveCallback
    ) -> int:
        """Call ``callback(send, data)`` for frames on exactly ``identifier``; return its id."""
        callback_id = next(self._ids)
        self._identifier_callbacks[callback_id] = _IdentifierEntry(identifier, callback)
        return callback_id

    def register_mask_callback(
        self, identifier: CANIdentifier, mask: CANIdentifier, callback: CANMaskCallback
    ) -> int:
        """Call ``callback(send, identifier, data)`` for frames matching ``identifier`` under ``mask``."""
        callback_id = next(self._ids)
        self._mask_callbacks[callback_id] = _MaskEntry(identifier, mask, callback)
        return callback_id

    def unregister_receive_callback(self, callback_id: int) -> None:
        """Remove the callback registered under ``callback_id``, if any."""
        self._identifier_callbacks.pop(callback_id, None)
        self._mask_callbacks.pop(callback_id, None)

    def unregister_mask(self, identifier: CANIdentifier, mask: CANIdentifier) -> None:
        """Remove every masked callback registered with ``identifier`` and ``mask``."""
        self._mask_callbacks = {
            callback_id: entry
            for callback_id, entry in self._mask_callbacks.items()
            if not (entry.identifier == identifier and entry.mask == mask)
        }

    def unregister_identifier(self, identifier: CANIdentifier) -> None:
        """Remove every exact-identifier callback registered for ``identifier``."""
        self._identifier_callbacks = {
            callback_id: entry
            for callback_id, entry in self._identifier_callbacks.items()
            if entry.identifier != identifier
        }

    def receive(self, identifier: CANIdentifier, data: bytes | bytearray | memoryview) -> None:
        """Dispatch a received frame: exact-identifier callbacks first, then masked ones."""
        payload = _check_data(data)
        for entry in list(self._identifier_callbacks.values()):
            if entry.identifier == identifier:
                entry.callback(self.send, payload)
        for entry in list(self._mask_callbacks.values()):
            if entry.matches(identifier):
                entry.callback(self.send, identifier, payload)

    @abstractmethod
    def send(self, identifier: CANIdentifier, data: bytes | bytearray | memoryview) -> None:
        """Transmit ``data`` (at most eight bytes) on ``identifier``."""
"""Abstract hardware service interfaces: analog, digital and PWM pins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

Callback = Callable[[], None]

#: Pin number treated as "no pin" by every service.
NULL_PIN = 0xFFFF


class PinDirection(IntEnum):
    """Direction a pin is initialised as."""

    IN = 0
    OUT = 1


@dataclass(frozen=True)
class PwmValue:
    """Period and pulse width of a PWM signal, in seconds."""

    period: float
    pulse_width: float


class AnalogService(ABC):
    """Reads voltages from analog input pins."""

    @abstractmethod
    def init_pin(self, pin: int) -> None:
        """Initialise ``pin`` as an analog input."""

    @abstractmethod
    def read_pin(self, pin: int) -> float:
        """Return the voltage on ``pin``."""


class DigitalService(ABC):
    """Reads, writes and watches digital pins."""

    @abstractmethod
    def init_pin(self, pin: int, direction: PinDirection) -> None:
        """Initialise ``pin`` as a digital input or output."""

    @abstractmethod
    def read_pin(self, pin: int) -> bool:
        """Return the state of ``pin``."""

    @abstractmethod
    def write_pin(self, pin: int, value: bool) -> None:
        """Set the state of ``pin``."""

    @abstractmethod
    def attach_interrupt(self, pin: int, callback: Callback) -> None:
        """Call ``callback`` whenever ``pin`` changes state; one callback per pin."""

    @abstractmethod
    def detach_interrupt(self, pin: int) -> None:
        """Remove the callback attached to ``pin``."""


class PwmService(ABC):
    """Reads and writes PWM pins."""

    @abstractmethod
    def init_pin(self, pin: int, direction: PinDirection, min_frequency: int) -> None:
        """Initialise ``pin`` for PWM able to run at ``min_frequency``."""

    @abstractmethod
    def read_pin(self, pin: int) -> PwmValue:
        """Return the PWM signal measured on ``pin``."""

    @abstractmethod
    def write_pin(self, pin: int, value: PwmValue) -> None:
        """Drive ``pin`` with the PWM signal ``value``."""
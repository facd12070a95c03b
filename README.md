# embeddedio

Hardware-independent building blocks for embedded I/O services. A board
support layer subclasses the abstract services and supplies the
hardware-specific parts. The package provides the shared logic: callback
dispatch, task scheduling on a wrapping 32-bit tick, byte FIFOs and CRC-32.

## Install

```
pip install embeddedio
pip install "embeddedio[test]"   # with the test dependencies
```

## Modules

- `embeddedio.crc`: `crc32(data)` returns the standard reflected CRC-32
  (polynomial 0xEDB88320) of a bytes-like object as an unsigned 32-bit integer.
- `embeddedio.fifo`: `Fifo(size)` is a fixed-capacity byte queue. `write(data)`
  stores as much as fits and returns the count written; `read(n)` and
  `peek(n)` return up to `n` bytes, with and without removing them; `pop(n)`
  discards up to `n` bytes; `clear()` empties it; `space()` gives the free
  capacity, `size` the total capacity, and `len()` the number of bytes held.
  A size below 1 or a negative count raises `ValueError`.
- `embeddedio.interfaces`: `PinDirection` (`IN`, `OUT`), the frozen dataclass
  `PwmValue(period, pulse_width)`, the `NULL_PIN` constant (0xFFFF), and the
  abstract `AnalogService`, `DigitalService` and `PwmService`.
- `embeddedio.communication`: `CommunicationService` offers received bytes to
  its registered callbacks in registration order. A callback is called as
  `callback(send, data)` and returns how many bytes it consumed; after any
  consumption the rest is offered again from the first callback. `receive`
  returns the total handled. A callback reporting a negative count or more
  than it was given raises `ValueError`. Subclasses implement `send`.
- `embeddedio.prefix_handler`: `PrefixHandler` routes incoming data to
  callbacks whose prefix (bytes or str) starts the data; the callback gets the
  bytes after the prefix. With `handles_data=False` the prefix is consumed even
  when the callback handles nothing. Callbacks are removed by id with
  `unregister_receive_callback` or all at once by prefix with
  `unregister_prefix`.
- `embeddedio.can`: `CANIdentifier(identifier, bus_number=0)` holds a 29-bit
  identifier and a 3-bit bus number, supports `&` and ordering, and rejects
  values out of range. `CANService` dispatches frames of at most
  `MAX_DATA_LENGTH` (8) bytes to callbacks registered for an exact identifier
  (`register_receive_callback`) and then to those registered for an
  identifier under a mask (`register_mask_callback`). Callbacks are removed
  with `unregister_receive_callback`, `unregister_identifier` and
  `unregister_mask`. Subclasses implement `send`.
- `embeddedio.timer`: `Task`, `TimerService` and the wrap-aware tick
  comparisons `tick_less_than_tick` and `tick_less_than_equal_to_tick`.

## Example

```python
from embeddedio.communication import CommunicationService
from embeddedio.prefix_handler import PrefixHandler


class LoopbackService(CommunicationService):
    def __init__(self):
        super().__init__()
        self.sent = []

    def send(self, data):
        self.sent.append(bytes(data))


service = LoopbackService()
commands = PrefixHandler()
service.register_receive_callback(commands.receive)


def ping(send, data):
    send(b"pong")
    return len(data)


commands.register_receive_callback(ping, b"ping", True)
handled = service.receive(b"ping!")
# handled == 5, service.sent == [b"pong"]
```

## Timer services

A concrete `TimerService` implements `get_tick`, `get_ticks_per_second` and
`schedule_interrupt(tick)`. When the hardware timer reaches the requested
tick, it calls `return_callback()`, which runs every due task and re-arms the
timer for the next one.

`schedule_task(task, tick)` inserts a `Task` or moves one already scheduled;
`unschedule_task(task)` removes it; `schedule_callback(callback, tick)` runs a
plain callable once. `task_list()` returns the held tasks in execution order.
Tasks run in order of their scheduled tick, and the ordering stays correct
when the 32-bit tick counter wraps.

`calibrate()` measures the timer's `latency` and `min_tick` by running probe
tasks; it blocks until they have executed, so call it only once the timer is
running and delivering `return_callback()`.

## What the package does not include

There are no concrete drivers: no implementation of the analog, digital, PWM,
communication, CAN or timer services for any particular board. Each must be
supplied by subclassing the abstract services.

## Tests

```
pytest
```
"""Hardware-independent I/O service abstractions: CRC-32, byte FIFO, pin interfaces, communication, prefix and CAN dispatch, and tick timer scheduling."""

__version__ = "0.1.0"

__all__ = ["can", "communication", "crc", "fifo", "interfaces", "prefix_handler", "timer"]
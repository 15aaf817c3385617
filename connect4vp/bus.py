"""Transaction payloads, response codes and the address map of the platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Registers of the hardware block.
ADDR_START = 0x00
ADDR_READY = 0x01
ADDR_WIN_VAL = 0x02
ADDR_LAST_MOVE = 0x03

# Size of the block RAM in bytes (240 KB).
BRAM_SIZE = 0x3A980

# Clock period in nanoseconds (100 MHz).
DELAY = 10

VP_ADDR_BRAM_L = 0x00000000
VP_ADDR_BRAM_H = 0x00000000 + BRAM_SIZE

VP_ADDR_IP_HARD_L = 0x40000000
VP_ADDR_IP_HARD_H = 0x4000000F


class Command(Enum):
    """Kind of bus transaction."""

    READ = 0
    WRITE = 1
    IGNORE = 2


class ResponseStatus(Enum):
    """Outcome of a bus transaction."""

    OK = 1
    INCOMPLETE = 0
    GENERIC_ERROR = -1
    ADDRESS_ERROR = -2
    COMMAND_ERROR = -3
    BURST_ERROR = -4
    BYTE_ENABLE_ERROR = -5


class BusError(Exception):
    """Raised when a transaction cannot be delivered."""


@dataclass
class Payload:
    """A single bus transaction; ``data`` is read from or filled in place."""

    command: Command = Command.IGNORE
    address: int = 0
    data: bytearray = field(default_factory=bytearray)
    length: int | None = None
    response_status: ResponseStatus = ResponseStatus.INCOMPLETE

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)
        if self.length is None:
            self.length = len(self.data)

    def is_response_ok(self) -> bool:
        """Return True when the target reported success."""
        return self.response_status is ResponseStatus.OK
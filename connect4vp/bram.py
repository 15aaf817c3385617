"""Block RAM target holding the game board."""

from __future__ import annotations

from .bus import BRAM_SIZE, DELAY, BusError, Command, Payload, ResponseStatus


class Bram:
    """Byte-addressed memory, initially filled with spaces."""

    def __init__(self, size: int = BRAM_SIZE) -> None:
        self.mem = bytearray(b" " * size)

    def b_transport(self, payload: Payload, offset: int) -> int:
        """Serve a read or write and return the offset advanced by one clock period."""
        command = payload.command
        if command not in (Command.READ, Command.WRITE):
            payload.response_status = ResponseStatus.COMMAND_ERROR
            return offset + DELAY

        addr = payload.address
        length = payload.length
        if addr < 0 or addr + length > len(self.mem):
            raise BusError(f"BRAM access out of range: {addr:#x}+{length}")

        if command is Command.WRITE:
            self.mem[addr:addr + length] = payload.data[:length]
        else:
            payload.data[:length] = self.mem[addr:addr + length]
        payload.response_status = ResponseStatus.OK
        return offset + DELAY
"""Hardware block that decides whether the last move won the game."""

from __future__ import annotations

import sys

from .bus import (
    ADDR_LAST_MOVE,
    ADDR_READY,
    ADDR_START,
    ADDR_WIN_VAL,
    VP_ADDR_BRAM_L,
    Command,
    Payload,
    ResponseStatus,
)
from .utils import to_int, to_uchar

NO_WINNER = 0
WIN_X = 1
WIN_O = 2
TIE = 3

_BLANK = ord(" ")
_X = ord("X")
_ROWS_WIDTH = 7


class Hard:
    """Register-mapped winner detector reading the board from block RAM."""

    def __init__(self, bram) -> None:
        self.bram_socket = bram
        self.offset = 0
        self.start = 0
        self.ready = 1
        self.win_value = 0
        self.last_move = 0

    def b_transport(self, payload: Payload, offset: int) -> int:
        """Serve a register access; the caller's offset is returned unchanged."""
        payload.response_status = ResponseStatus.OK
        addr = payload.address

        if payload.command is Command.WRITE:
            if addr == ADDR_START:
                self.start = to_int(payload.data) & 0x1
                if self.start == 1 and self.ready == 1:
                    self.ready = 0
                    self.winning(self.last_move)
                    self.ready = 1
            elif addr == ADDR_LAST_MOVE:
                self.last_move = to_int(payload.data) & 0xFFFFFFFFFFFFFFFF
            else:
                payload.response_status = ResponseStatus.ADDRESS_ERROR
        elif payload.command is Command.READ:
            if addr == ADDR_WIN_VAL:
                self.win_value = self.winning(self.last_move) & 0x7
                payload.data[:4] = to_uchar(self.win_value)
            elif addr == ADDR_READY:
                payload.data[:4] = to_uchar(self.ready)
            else:
                payload.response_status = ResponseStatus.ADDRESS_ERROR
        else:
            payload.response_status = ResponseStatus.COMMAND_ERROR
            print("Wrong command", file=sys.stdout)
        return offset

    def _result(self, symbol: int) -> int:
        return WIN_X if symbol == _X else WIN_O

    def winning(self, last_move: int) -> int:
        """Return the game state after ``last_move``: none, X won, O won or tie."""
        symbol = self.read_bram(last_move)
        if symbol == _BLANK:
            return NO_WINNER

        row, col = divmod(last_move, _ROWS_WIDTH)

        def line(step_row: int, step_col: int) -> bool:
            return all(
                self.read_bram((row + k * step_row) * _ROWS_WIDTH + col + k * step_col) == symbol
                for k in (1, 2, 3)
            )

        if col <= 3 and line(0, 1):
            return self._result(symbol)
        if row <= 2 and line(1, 0):
            return self._result(symbol)
        if row <= 2 and col <= 3 and line(1, 1):
            return self._result(symbol)
        if row <= 2 and col >= 3 and line(1, -1):
            return self._result(symbol)

        if row == 5:
            if any(self.read_bram(5 * _ROWS_WIDTH + c) == _BLANK for c in range(_ROWS_WIDTH)):
                return NO_WINNER
            return TIE

        return NO_WINNER

    def read_bram(self, addr: int) -> int:
        """Read one byte of block RAM."""
        payload = Payload(Command.READ, VP_ADDR_BRAM_L + addr, bytearray(1))
        self.offset = self.bram_socket.b_transport(payload, self.offset)
        return payload.data[0]
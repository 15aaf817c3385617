"""Processor model that plays Connect Four against moves read from a file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from .bus import (
    ADDR_LAST_MOVE,
    ADDR_READY,
    ADDR_START,
    ADDR_WIN_VAL,
    DELAY,
    VP_ADDR_BRAM_L,
    VP_ADDR_IP_HARD_L,
    Command,
    Payload,
)
from .hard import NO_WINNER, TIE, WIN_O, WIN_X
from .utils import to_int, to_uchar

_BLANK = ord(" ")
_X = ord("X")
_O = ord("O")
_COLUMNS = 7
_LAST_CELL = 42
_MAX_DEPTH = 6
_POLL_NS = 10
_RULE = "-" * 57

_OUTCOMES = {WIN_X: "Player X WON", WIN_O: "Player O WON", TIE: "Tie"}


def _symbol(value) -> int:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {value!r}")
        return ord(value)
    return value


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _read_moves(path) -> list[int]:
    moves = []
    with open(path, encoding="utf-8") as handle:
        for token in handle.read().split():
            try:
                moves.append(int(token))
            except ValueError:
                break
    return moves


class Cpu:
    """Game logic that drives the board in block RAM and the winner detector."""

    def __init__(self, interconnect, moves_path="input.txt", out: TextIO | None = None) -> None:
        self.interconnect_socket = interconnect
        self.moves_path = Path(moves_path)
        self.out = out if out is not None else sys.stdout
        self.last_move = 0
        self.play_out = 0
        self.eva = 0
        self.provocation = False
        self.offset = 0
        self.now = 0
        self.read_ddr_cnt = 0
        self.write_ddr_cnt = 0
        self._moves: list[int] = []
        self._move_index = 0

    def _report(self, message: str) -> None:
        print(f"Info: CPU: {message}", file=self.out)

    def get_ip(self) -> int:
        """Run the winner detector on the last move and return its verdict."""
        self.write_hard(ADDR_LAST_MOVE, self.last_move)
        self.write_hard(ADDR_START, 1)
        while not self.read_hard(ADDR_READY):
            self.now += _POLL_NS
        self.write_hard(ADDR_START, 0)
        return self.read_hard(ADDR_WIN_VAL)

    def game_play(self) -> int:
        """Alternate computer and player moves until the game ends; return the outcome."""
        self._report("game_play started")
        while True:
            ai_move = self.ai_manager()
            self.write_bram(ai_move, "O")
            self.board()
            outcome = self.get_ip()
            if outcome in _OUTCOMES:
                self._report(_OUTCOMES[outcome])
                return outcome
            if outcome == NO_WINNER:
                self.play_position("X")

    def get_value(self, column: int) -> int:
        """Return the lowest free cell of ``column`` (1-7), or 0 if there is none."""
        if column > _COLUMNS:
            return 0
        for row in range(_COLUMNS):
            cell = column + _COLUMNS * row
            if self.read_bram(cell)[0] == _BLANK:
                return cell if cell <= _LAST_CELL else 0
        return 0

    def board(self) -> str:
        """Draw the board, write it to the output stream and return it."""
        parts = ["\n", "".join(f"    {c}   " for c in range(1, _COLUMNS + 1)), "\n"]
        for line in range(24):
            if line % 4 == 0:
                parts.append(_RULE)
            elif (line - 2) % 4 == 0:
                start = _LAST_CELL + 1 - _COLUMNS * ((line + 2) // 4)
                for cell in range(start, start + _COLUMNS):
                    parts.append(f"|   {chr(self.read_bram(cell)[0])}   ")
                parts.append("|")
            else:
                parts.append("|" + " " * 7)
                parts.append(("|" + " " * 7) * (_COLUMNS - 1) + "|")
            parts.append("\n")
        parts.append(_RULE)
        if self.provocation:
            parts.append("\nHehe I'm sure of my winning :D \n")
        text = "".join(parts)
        self.out.write(text)
        return text

    def _is_free(self, position: int) -> bool:
        return self.read_bram(position)[0] == _BLANK and position != 0

    def play_position(self, symbol) -> None:
        """Place ``symbol`` in the column given by the next move from the moves file."""
        if self._move_index >= len(self._moves):
            self._moves = _read_moves(self.moves_path)
            self._move_index = 0
        if self._move_index >= len(self._moves):
            return

        position = self.get_value(self._moves[self._move_index])
        self._move_index += 1
        if not self._is_free(position):
            print(
                "WARNING: Invalid move or position already taken. "
                "Taking the next available position.",
                file=self.out,
            )
            if self._move_index >= len(self._moves):
                raise RuntimeError("ERROR: invalid move or position already taken.")
            position = self.get_value(self._moves[self._move_index])
            if not self._is_free(position):
                raise RuntimeError("ERROR: invalid move or position already taken.")

        self.write_bram(position, symbol)
        self.last_move = position

    def ai_manager(self) -> int:
        """Choose the cell for the computer's next move."""
        best_score = 9999999.0
        best_cell = 0
        for column in range(1, _COLUMNS + 1):
            self.play_out = 0
            self.eva = 0
            cell = self.get_value(column)
            if cell == 0:
                continue
            self.write_bram(cell, "O")
            self.last_move = cell
            if self.get_ip() == WIN_O:
                self.write_bram(cell, " ")
                self.last_move = cell
                return cell

            score = float(-(100 * self.nega_max(1)))
            if self.play_out != 0:
                score -= _trunc_div(100 * self.eva, self.play_out)
            if -score >= 100:
                self.provocation = True
            if best_score > score:
                best_score = score
                best_cell = cell
            self.write_bram(cell, " ")
            self.last_move = cell
        return best_cell

    def _record_end(self, symbol: int) -> None:
        self.play_out += 1
        self.eva += 1 if symbol == _O else -1

    def nega_max(self, depth: int) -> int:
        """Score the position by searching alternate moves to a fixed depth."""
        symbol = _X if depth % 2 != 0 else _O
        cells = {column: self.get_value(column) for column in range(1, _COLUMNS + 1)}

        for cell in cells.values():
            if cell == 0:
                continue
            self.write_bram(cell, symbol)
            self.last_move = cell
            if self.get_ip() != NO_WINNER:
                self._record_end(symbol)
                self.write_bram(cell, " ")
                return -1
            self.write_bram(cell, " ")
            self.last_move = cell

        chance = 0
        if depth <= _MAX_DEPTH:
            for column, cell in cells.items():
                if cell == 0:
                    continue
                self.write_bram(cell, symbol)
                if self.get_ip() != NO_WINNER:
                    self._record_end(symbol)
                    self.write_bram(cell, " ")
                    self.last_move = cell
                    return -1
                score = self.nega_max(depth + 1)
                if column == 1:
                    chance = score
                if chance < score:
                    chance = score
                self.write_bram(cell, " ")
                self.last_move = cell
        return -chance

    def read_bram(self, addr: int, length: int = 1) -> bytes:
        """Read ``length`` bytes of block RAM one transaction at a time."""
        self.offset += 10 * DELAY
        data = bytearray()
        for i in range(length):
            self.write_ddr_cnt += 4
            payload = Payload(
                command=Command.READ,
                address=VP_ADDR_BRAM_L + addr + i,
                data=bytearray(1),
            )
            self.offset = self.interconnect_socket.b_transport(payload, self.offset)
            data += payload.data[:1]
        return bytes(data)

    def write_bram(self, addr: int, value) -> None:
        """Write one byte (or one-character string) to block RAM."""
        self.offset += DELAY
        self.read_ddr_cnt += 1
        payload = Payload(
            command=Command.WRITE,
            address=VP_ADDR_BRAM_L + addr,
            data=bytearray([_symbol(value)]),
        )
        self.offset = self.interconnect_socket.b_transport(payload, self.offset)

    def read_hard(self, addr: int) -> int:
        """Read a register of the winner detector."""
        payload = Payload(
            command=Command.READ,
            address=VP_ADDR_IP_HARD_L + addr,
            data=bytearray(8),
            length=1,
        )
        self.interconnect_socket.b_transport(payload, 0)
        return to_int(payload.data)

    def write_hard(self, addr: int, value: int) -> None:
        """Write a register of the winner detector."""
        payload = Payload(
            command=Command.WRITE,
            address=VP_ADDR_IP_HARD_L + addr,
            data=bytearray(to_uchar(value)),
            length=1,
        )
        self.offset = self.interconnect_socket.b_transport(payload, self.offset)
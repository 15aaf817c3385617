# connect4vp

A Connect Four game that runs on a small simulated hardware platform.

The platform has four parts. They talk to each other through
memory-mapped transactions (`Payload` objects from `connect4vp.bus`):

- **`Cpu`** (`connect4vp.cpu`) plays the `O` pieces. It chooses its moves
  with a negamax search, draws the board and reads the player's moves
  from a file.
- **`Bram`** (`connect4vp.bram`) is a byte-addressed memory. It starts
  filled with spaces and holds the 7 × 6 board, one byte per cell.
- **`Hard`** (`connect4vp.hard`) is a win detector with `start`, `ready`,
  `win value` and `last move` registers. After a move it reports one of
  four results: no winner yet, `X` won, `O` won, or a tie (the bottom row
  of the drawing is full).
- **`Interconnect`** (`connect4vp.interconnect`) sends each transaction
  to the memory or to the win detector according to its address, and
  adds bus delay to the time offset. An address outside both ranges
  raises `BusError`.

`VirtualPlatform` (`connect4vp.vp`) connects these parts.
`VirtualPlatform.run()` plays one whole game and returns its result.

## Installing

```
pip install .
```

## Playing

The computer moves first. Your moves, as `X`, come from a file: column
numbers from 1 to 7, separated by whitespace, used in order. By default
the file is `input.txt` in the current directory.

```
3 4 4 5 2
```

Start the game:

```
connect4vp
```

To read your moves from another file:

```
connect4vp --moves my_moves.txt
```

The board is printed after each computer move. The game ends with one of
these lines: `Info: CPU: Player X WON`, `Info: CPU: Player O WON` or
`Info: CPU: Tie`.

If you pick a column that is full, a warning is printed and the next
move in the file is used instead. If that move does not work either, the
program stops with an error. It also stops with `Can't open file` and
exit status 1 if the moves file cannot be opened.

When the moves file has been used up, it is read again from the start.

## Using it from Python

```python
import io
from connect4vp.vp import VirtualPlatform

out = io.StringIO()
result = VirtualPlatform(moves_path="input.txt", out=out).run()
# result: 1 = X won, 2 = O won, 3 = tie
```

You can also use the bus parts on their own:

- `Bram` with `Payload` and `Command` from `connect4vp.bus`.
- `to_int` and `to_uchar` from `connect4vp.utils`. They pack a register
  value into four big-endian bytes and unpack it again.
- `to_hex`, which formats a byte as two hex digits.

## What it does not do

The game is not interactive. The player's moves come only from a file,
never from the keyboard. The platform does not model clock-accurate
timing. Delays are only added up as a nanosecond offset on the `Cpu`,
and nothing reports this offset.

## Tests

```
pip install .[test]
pytest
```
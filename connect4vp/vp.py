"""Virtual platform wiring the processor, interconnect, hardware block and RAM."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from .bram import Bram
from .cpu import Cpu
from .hard import Hard
from .interconnect import Interconnect


class VirtualPlatform:
    """The complete system: a processor playing through the bus against a move file."""

    def __init__(self, moves_path="input.txt", out: TextIO | None = None) -> None:
        self.bram = Bram()
        self.hard = Hard(self.bram)
        self.interconnect = Interconnect(self.bram, self.hard)
        self.cpu = Cpu(self.interconnect, moves_path=moves_path, out=out)

    def run(self) -> int:
        """Play one game and return its outcome."""
        return self.cpu.game_play()


def main(argv=None) -> int:
    """Play a game of Connect Four on the virtual platform."""
    parser = argparse.ArgumentParser(
        prog="connect4vp",
        description="Play Connect Four against the computer on a simulated platform.",
    )
    parser.add_argument(
        "--moves",
        default="input.txt",
        help="file with the player's column numbers (default: input.txt)",
    )
    args = parser.parse_args(argv)

    platform = VirtualPlatform(moves_path=args.moves)
    try:
        platform.run()
    except OSError:
        print("Can't open file", file=sys.stderr)
        return 1
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
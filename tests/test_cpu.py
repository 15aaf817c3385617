import io

import pytest

from connect4vp.bram import Bram
from connect4vp.bus import ADDR_LAST_MOVE, ADDR_READY
from connect4vp.cpu import Cpu
from connect4vp.hard import NO_WINNER, TIE, WIN_O, WIN_X, Hard
from connect4vp.interconnect import Interconnect


@pytest.fixture
def system(tmp_path):
    bram = Bram()
    hard = Hard(bram)
    interconnect = Interconnect(bram, hard)
    out = io.StringIO()
    cpu = Cpu(interconnect, moves_path=tmp_path / "input.txt", out=out)
    return cpu, bram, hard, out


def fill_board(bram):
    for addr in range(1, 43):
        bram.mem[addr] = ord("a") + addr % 5


def test_write_then_read_round_trip(system):
    cpu, bram, _, _ = system
    cpu.write_bram(5, "X")
    assert cpu.read_bram(5) == b"X"
    assert bram.mem[5] == ord("X")


def test_write_accepts_byte_value(system):
    cpu, _, _, _ = system
    cpu.write_bram(9, ord("O"))
    assert cpu.read_bram(9, 1) == b"O"


def test_read_bram_length(system):
    cpu, _, _, _ = system
    cpu.write_bram(1, "X")
    cpu.write_bram(2, "O")
    assert cpu.read_bram(1, 3) == b"XO "


def test_counters_and_offset(system):
    cpu, _, _, _ = system
    before = cpu.offset
    cpu.write_bram(3, "X")
    assert cpu.read_ddr_cnt == 1
    assert cpu.offset > before
    cpu.read_bram(3, 1)
    assert cpu.write_ddr_cnt == 4


@pytest.mark.parametrize("column", range(1, 8))
def test_get_value_on_empty_board(system, column):
    cpu, _, _, _ = system
    assert cpu.get_value(column) == column


def test_get_value_rejects_large_column(system):
    cpu, _, _, _ = system
    assert cpu.get_value(8) == 0


def test_get_value_stacks_in_column(system):
    cpu, _, _, _ = system
    first = cpu.get_value(3)
    cpu.write_bram(first, "X")
    second = cpu.get_value(3)
    assert second > first
    assert cpu.read_bram(second) == b" "
    assert cpu.read_bram(second - 7) == b"X"


def test_get_value_full_column(system):
    cpu, bram, _, _ = system
    fill_board(bram)
    assert cpu.get_value(3) == 0


def test_hard_registers(system):
    cpu, _, hard, _ = system
    assert cpu.read_hard(ADDR_READY) == 1
    cpu.write_hard(ADDR_LAST_MOVE, 17)
    assert hard.last_move == 17


def test_get_ip_detects_x_win(system):
    cpu, _, _, _ = system
    for addr in range(4):
        cpu.write_bram(addr, "X")
    cpu.last_move = 0
    assert cpu.get_ip() == WIN_X


def test_get_ip_blank_cell(system):
    cpu, _, _, _ = system
    cpu.last_move = 10
    assert cpu.get_ip() == NO_WINNER


def test_get_ip_tie(system):
    cpu, bram, _, _ = system
    fill_board(bram)
    cpu.last_move = 35
    assert cpu.get_ip() == TIE


def test_board_rendering(system):
    cpu, _, _, out = system
    cpu.write_bram(36, "X")
    text = cpu.board()
    assert text == out.getvalue()
    assert text.startswith("\n    1   ")
    assert text.count("X") == 1
    rules = [line for line in text.splitlines() if line.startswith("-")]
    assert all(line == "-" * 57 for line in rules)
    assert "Hehe" not in text


def test_board_with_provocation(system):
    cpu, _, _, _ = system
    cpu.provocation = True
    assert cpu.board().endswith("Hehe I'm sure of my winning :D \n")


def test_play_position_reads_moves(system, tmp_path):
    cpu, _, _, _ = system
    (tmp_path / "input.txt").write_text("4 2\n")
    cpu.play_position("X")
    assert cpu.last_move == 4
    assert cpu.read_bram(4) == b"X"
    cpu.play_position("X")
    assert cpu.last_move == 2
    cpu.play_position("X")
    assert cpu.last_move % 7 == 4
    assert cpu.last_move != 4
    assert cpu.read_bram(cpu.last_move) == b"X"


def test_play_position_missing_file(system):
    cpu, _, _, _ = system
    with pytest.raises(OSError):
        cpu.play_position("X")


def test_play_position_replaces_invalid_move(system, tmp_path):
    cpu, _, _, out = system
    (tmp_path / "input.txt").write_text("9 3")
    cpu.play_position("X")
    assert "WARNING" in out.getvalue()
    assert cpu.last_move == 3
    assert cpu.read_bram(3) == b"X"


def test_play_position_no_replacement(system, tmp_path):
    cpu, _, _, _ = system
    (tmp_path / "input.txt").write_text("9")
    with pytest.raises(RuntimeError):
        cpu.play_position("X")


def test_nega_max_single_free_cell(system):
    cpu, bram, _, _ = system
    fill_board(bram)
    bram.mem[42] = ord(" ")
    snapshot = bytes(bram.mem[:64])
    assert cpu.nega_max(1) == 0
    assert cpu.play_out == 0
    assert bytes(bram.mem[:64]) == snapshot


def _board_with_gap(bram, symbol):
    fill_board(bram)
    bram.mem[38] = ord(" ")
    for addr in (39, 40, 41):
        bram.mem[addr] = ord(symbol)


def test_nega_max_immediate_x_win(system):
    cpu, bram, _, _ = system
    _board_with_gap(bram, "X")
    assert cpu.nega_max(1) == -1
    assert cpu.play_out == 1
    assert cpu.eva == -1
    assert bram.mem[38] == ord(" ")


def test_nega_max_even_depth_counts_for_o(system):
    cpu, bram, _, _ = system
    _board_with_gap(bram, "O")
    assert cpu.nega_max(2) == -1
    assert cpu.eva == 1


def test_ai_manager_takes_winning_cell(system):
    cpu, bram, _, _ = system
    for addr in (2, 3, 4):
        cpu.write_bram(addr, "O")
    assert cpu.ai_manager() == 1
    assert bram.mem[1] == ord(" ")


def test_ai_manager_only_free_cell(system):
    cpu, bram, _, _ = system
    _board_with_gap(bram, "X")
    snapshot = bytes(bram.mem[:64])
    assert cpu.ai_manager() == 38
    assert bytes(bram.mem[:64]) == snapshot


def test_game_play_o_wins(system):
    cpu, bram, _, out = system
    _board_with_gap(bram, "O")
    assert cpu.game_play() == WIN_O
    assert "Player O WON" in out.getvalue()
    assert bram.mem[38] == ord("O")
import pytest

from connect4vp.bram import Bram
from connect4vp.bus import (
    ADDR_READY,
    DELAY,
    VP_ADDR_BRAM_L,
    VP_ADDR_IP_HARD_H,
    VP_ADDR_IP_HARD_L,
    BusError,
    Command,
    Payload,
    ResponseStatus,
)
from connect4vp.hard import Hard
from connect4vp.interconnect import Interconnect
from connect4vp.utils import to_int


@pytest.fixture
def parts():
    bram = Bram()
    hard = Hard(bram)
    return bram, hard, Interconnect(bram, hard)


def test_write_reaches_bram(parts):
    bram, _, bus = parts
    payload = Payload(Command.WRITE, VP_ADDR_BRAM_L + 5, b"X")
    offset = bus.b_transport(payload, 0)
    assert payload.is_response_ok()
    assert bram.mem[5:6] == b"X"
    assert offset == DELAY


def test_address_restored_after_routing(parts):
    _, _, bus = parts
    payload = Payload(Command.READ, VP_ADDR_IP_HARD_L + ADDR_READY, bytearray(8), length=1)
    bus.b_transport(payload, 0)
    assert payload.address == VP_ADDR_IP_HARD_L + ADDR_READY


def test_hard_register_read_and_delay(parts):
    _, _, bus = parts
    payload = Payload(Command.READ, VP_ADDR_IP_HARD_L + ADDR_READY, bytearray(8), length=1)
    offset = bus.b_transport(payload, 0)
    assert to_int(payload.data) == 1
    assert offset == 5 * DELAY


def test_read_through_bus_matches_bram(parts):
    bram, _, bus = parts
    bram.b_transport(Payload(Command.WRITE, 20, b"O"), 0)
    payload = Payload(Command.READ, 20, bytearray(1))
    bus.b_transport(payload, 0)
    assert payload.data == bytearray(b"O")


def test_wrong_address_raises(parts):
    _, _, bus = parts
    payload = Payload(Command.READ, VP_ADDR_IP_HARD_H + 1, bytearray(4))
    with pytest.raises(BusError):
        bus.b_transport(payload, 0)
    assert payload.response_status is ResponseStatus.ADDRESS_ERROR
"""Address decoder routing transactions to block RAM or the hardware block."""

from __future__ import annotations

from .bus import (
    DELAY,
    VP_ADDR_BRAM_H,
    VP_ADDR_BRAM_L,
    VP_ADDR_IP_HARD_H,
    VP_ADDR_IP_HARD_L,
    BusError,
    Payload,
    ResponseStatus,
)

_LOCAL_MASK = 0x00FFFFFF


class Interconnect:
    """Routes each transaction by its address to the matching target."""

    def __init__(self, bram, hard) -> None:
        self.bram_socket = bram
        self.hard_socket = hard

    def b_transport(self, payload: Payload, offset: int) -> int:
        """Forward the transaction and return the updated offset."""
        addr = payload.address
        local = addr & _LOCAL_MASK

        if VP_ADDR_BRAM_L <= addr <= VP_ADDR_BRAM_H:
            payload.address = local
            try:
                offset = self.bram_socket.b_transport(payload, offset)
            finally:
                payload.address = addr
            return offset

        if VP_ADDR_IP_HARD_L <= addr <= VP_ADDR_IP_HARD_H:
            payload.address = local
            try:
                offset = self.hard_socket.b_transport(payload, offset)
            finally:
                payload.address = addr
            return offset + 5 * DELAY

        payload.response_status = ResponseStatus.ADDRESS_ERROR
        raise BusError("Wrong address.")
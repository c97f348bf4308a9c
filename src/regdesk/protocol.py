"""uvicorn HTTP protocol with a deadline on reading each request"""

import logging

import h11
from uvicorn.protocols.http.h11_impl import H11Protocol

logger = logging.getLogger(__name__)

# h11 client states in which the request is still being read
_READING_STATES = (h11.IDLE, h11.SEND_BODY)


class ReadTimeoutH11Protocol(H11Protocol):
    """
    h11 protocol bounding the time taken to read a whole request, request
    line and headers included.

    The deadline starts when the connection is accepted, or when the first
    bytes of a following keep-alive request arrive, and is cleared once the
    request body is complete. A connection still reading when it expires is
    closed.
    """

    def __init__(self, *args, read_timeout: float, **kwargs):
        super().__init__(*args, **kwargs)
        self.read_timeout = read_timeout
        self.read_timeout_handle = None

    def connection_made(self, transport):
        super().connection_made(transport)
        self._arm_read_timeout()

    def connection_lost(self, exc):
        self._cancel_read_timeout()
        super().connection_lost(exc)

    def data_received(self, data: bytes) -> None:
        if self.read_timeout_handle is None and self.conn.their_state is h11.IDLE:
            self._arm_read_timeout()
        super().data_received(data)
        if self.conn.their_state not in _READING_STATES:
            self._cancel_read_timeout()

    def _arm_read_timeout(self):
        self._cancel_read_timeout()
        self.read_timeout_handle = self.loop.call_later(
            self.read_timeout, self._on_read_timeout
        )

    def _cancel_read_timeout(self):
        if self.read_timeout_handle is not None:
            self.read_timeout_handle.cancel()
            self.read_timeout_handle = None

    def _on_read_timeout(self):
        self.read_timeout_handle = None
        if self.transport.is_closing():
            return
        logger.warning(
            f"Closing connection from {self.client}: request not read within {self.read_timeout}s"
        )
        self.transport.close()

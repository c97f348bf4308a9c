"""ASGI middleware bounding how long a request may take to read and write"""

import asyncio
import logging

logger = logging.getLogger(__name__)


class IOTimeoutMiddleware:
    """
    Apply one read deadline to receiving the whole request body and one write
    deadline to sending the whole response.

    Both deadlines start when the request reaches the application. Once the
    request body has been fully received, further `receive` calls
    (disconnect polling) are passed through without a deadline.
    """

    def __init__(self, app, read_timeout: float, write_timeout: float):
        self.app = app
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        loop = asyncio.get_running_loop()
        read_deadline = loop.time() + self.read_timeout
        write_deadline = loop.time() + self.write_timeout
        body_complete = False

        async def timed_receive():
            nonlocal body_complete
            if body_complete:
                return await receive()
            try:
                message = await asyncio.wait_for(
                    receive(), max(read_deadline - loop.time(), 0)
                )
            except asyncio.TimeoutError:
                logger.warning(f"Read timed out after {self.read_timeout}s on {scope['path']}")
                raise
            if message["type"] != "http.request" or not message.get("more_body", False):
                body_complete = True
            return message

        async def timed_send(message):
            try:
                await asyncio.wait_for(send(message), max(write_deadline - loop.time(), 0))
            except asyncio.TimeoutError:
                logger.warning(f"Write timed out after {self.write_timeout}s on {scope['path']}")
                raise

        await self.app(scope, timed_receive, timed_send)

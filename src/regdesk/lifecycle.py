"""Server lifecycle: background serving, SIGINT wait and bounded shutdown"""

import enum
import functools
import signal
import threading
import time
from typing import Optional

import uvicorn

from regdesk.config import config
from regdesk.logging_config import get_logger
from regdesk.protocol import ReadTimeoutH11Protocol

logger = get_logger(__name__)

# Extra time allowed past the graceful timeout for the serving thread to exit
SHUTDOWN_GRACE_SECONDS = 2.0


class LifecycleState(enum.Enum):
    STARTING = "starting"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class ServerLifecycle:
    """Runs an ASGI app on a background thread until an interrupt arrives"""

    def __init__(
        self,
        app,
        host: str,
        port: int,
        graceful_timeout: float,
        read_timeout: Optional[float] = None,
    ):
        self.graceful_timeout = graceful_timeout
        self.read_timeout = read_timeout if read_timeout is not None else config["read_timeout"]
        self.state = LifecycleState.STARTING
        self._interrupted = threading.Event()
        self._thread = None

        self.server = uvicorn.Server(
            uvicorn.Config(
                app,
                host=host,
                port=port,
                http=functools.partial(ReadTimeoutH11Protocol, read_timeout=self.read_timeout),
                timeout_keep_alive=config["idle_timeout"],
                timeout_graceful_shutdown=graceful_timeout,
                log_level=config["log_level"].lower(),
                log_config=None,
            )
        )

    def _serve(self):
        try:
            self.server.run()
        except SystemExit as e:
            # uvicorn exits when it cannot bind; keep the main thread alive
            logger.error(f"Server failed to start (exit status {e.code})")
        except Exception as e:
            logger.error(f"Server stopped with error: {e}")

    def start(self):
        """Start serving on a background thread"""
        logger.info(f"starting on {self.server.config.host}:{self.server.config.port}")
        self._thread = threading.Thread(target=self._serve, name="http-server", daemon=True)
        self._thread.start()
        self.state = LifecycleState.LISTENING

    def wait_until_started(self, timeout: float = 10.0) -> bool:
        """Block until the server accepts connections or `timeout` elapses"""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self.server.started:
                return True
            if not self._thread.is_alive():
                return False
            time.sleep(0.05)
        return False

    def interrupt(self, *_args):
        """Request shutdown; installed as the SIGINT handler"""
        self._interrupted.set()

    def wait_for_interrupt(self):
        """
        Block the calling (main) thread until SIGINT is received.

        Only SIGINT is intercepted; other termination signals keep their
        default behaviour and end the process immediately.
        """
        signal.signal(signal.SIGINT, self.interrupt)
        self._interrupted.wait()

    def shutdown(self) -> bool:
        """
        Stop accepting connections and drain in-flight requests.

        Connections still open once the graceful timeout elapses are closed
        forcibly. Returns True when the serving thread finished in time.
        """
        self.state = LifecycleState.SHUTTING_DOWN
        self.server.should_exit = True

        drained = True
        if self._thread is not None:
            self._thread.join(self.graceful_timeout + SHUTDOWN_GRACE_SECONDS)
            drained = not self._thread.is_alive()
            if not drained:
                # Second request makes uvicorn skip any remaining waits
                self.server.force_exit = True
                logger.warning("Graceful shutdown timed out, forcing exit")

        self.state = LifecycleState.STOPPED
        logger.info("shutting down")
        return drained

    def run(self) -> bool:
        """Serve until SIGINT, then shut down"""
        self.start()
        self.wait_for_interrupt()
        return self.shutdown()

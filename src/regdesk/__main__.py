"""RegDesk entry point"""

import argparse
import sys

from regdesk.config import config
from regdesk.context import AppContext
from regdesk.lifecycle import ServerLifecycle
from regdesk.logging_config import get_logger, setup_logging
from regdesk.main import create_app
from regdesk.models.database import init_database
from regdesk.templating import load_templates
from regdesk.utils.duration import parse_duration

logger = get_logger(__name__)


def _duration(value: str) -> float:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="regdesk", description="Name and phone registration server")
    parser.add_argument(
        "--graceful-timeout",
        type=_duration,
        default=_duration(config["graceful_timeout"]),
        help="the duration for which the server gracefully waits for existing "
        "connections to finish - e.g. 15s or 1m",
    )
    return parser.parse_args(argv)


def build_context(graceful_timeout: float) -> AppContext:
    """Initialize storage and templates; any failure here is fatal"""
    engine = init_database(config["database_path"])
    try:
        templates = load_templates(config["template_dir"])
    except Exception:
        engine.dispose()
        raise
    return AppContext(
        engine=engine,
        templates=templates,
        static_dir=config["static_dir"],
        graceful_timeout=graceful_timeout,
    )


def start_app(graceful_timeout: float):
    """Build the context and the web application; the engine is released on failure"""
    context = None
    try:
        context = build_context(graceful_timeout)
        return context, create_app(context)
    except Exception as e:
        logger.error(f"Failed to start: {e}")
        if context is not None:
            context.close()
        raise


def main(argv=None):
    setup_logging()
    args = parse_args(argv)

    context, app = start_app(args.graceful_timeout)

    lifecycle = ServerLifecycle(
        app,
        host=config["host"],
        port=config["port"],
        graceful_timeout=context.graceful_timeout,
    )
    try:
        lifecycle.run()
    finally:
        context.close()

    sys.exit(0)


if __name__ == "__main__":
    main()

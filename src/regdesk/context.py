"""Application context shared by every request handler"""

from dataclasses import dataclass
from typing import Dict

from jinja2 import Template
from sqlalchemy.engine import Engine


@dataclass(frozen=True)
class AppContext:
    """Resources constructed once at startup and passed to the web application"""

    engine: Engine
    templates: Dict[str, Template]
    static_dir: str
    graceful_timeout: float

    def close(self):
        """Release the database handle"""
        self.engine.dispose()

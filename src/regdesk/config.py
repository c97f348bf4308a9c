"""Configuration loader for RegDesk"""

import os
from pathlib import Path

from dotenv import load_dotenv

package_dir = Path(__file__).parent
env_path = Path.cwd() / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    "database_path": os.getenv("DATABASE_PATH", "./database.db"),
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "80")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "template_dir": os.getenv("TEMPLATE_DIR", str(package_dir / "templates")),
    "static_dir": os.getenv("STATIC_DIR", str(package_dir / "static")),
    "graceful_timeout": os.getenv("GRACEFUL_TIMEOUT", "15s"),
    # Fixed per-connection timeouts in seconds
    "read_timeout": 15.0,
    "write_timeout": 15.0,
    "idle_timeout": 60,
}

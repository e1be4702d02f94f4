"""Client configuration constants."""

import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

try:
    __version__ = version("cfclient")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Cloud Controller API endpoint, e.g. https://api.sys.example.com
CF_API_URL = os.environ.get("CF_API", "")
# cf CLI home, the config lives at $CF_HOME/.cf/config.json
CF_HOME = Path(os.environ.get("CF_HOME", str(Path.home())))
CF_CONFIG_PATH = CF_HOME / ".cf" / "config.json"
CF_ACCESS_TOKEN_ENV = "CF_ACCESS_TOKEN"

USER_AGENT = f"cfclient-python/{__version__}"
DEFAULT_TIMEOUT = 30.0  # seconds, per HTTP request

# Waiting on jobs, packages, builds and deployments
DEFAULT_POLL_TIMEOUT = float(os.environ.get("CF_POLL_TIMEOUT", "300"))  # seconds
DEFAULT_POLL_INTERVAL = float(os.environ.get("CF_POLL_INTERVAL", "1"))  # seconds

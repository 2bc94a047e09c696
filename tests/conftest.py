"""Test configuration.

The application reads its configuration at import time and serves requests
from other threads than the test body, so the test settings are put in the
environment before anything from the package is imported.
"""

import os
from pathlib import Path

_ROOT = Path(__file__).resolve().parent.parent

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["LIBRARY_CONFIG_FILE"] = str(_ROOT / "config.yaml")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SIGNING_SECRET"] = "test-signing-secret"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from tests.fixtures import *  # noqa: E402,F401,F403

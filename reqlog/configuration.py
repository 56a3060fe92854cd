"""Runtime configuration read from the process environment."""

import os

DEFAULT_ENVIRONMENT = "dev"


def get_environment() -> str:
    """Return the deployment environment from ``ENV``, defaulting to ``dev``."""
    return os.environ.get("ENV") or DEFAULT_ENVIRONMENT
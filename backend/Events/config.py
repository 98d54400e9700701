"""backend.Events.config

Environment-driven settings for the events Lambda. Values are read from the
environment on every call so tests (and Lambda configuration updates) take
effect without reloading the module.
"""

import os
from typing import Optional

DEFAULT_ORIGIN = "http://localhost:3000"


def events_table_name() -> Optional[str]:
    """Name of the DynamoDB table holding events, or None when unset."""
    name = (os.environ.get("EVENTS_TABLE") or "").strip()
    return name or None


def default_origin() -> str:
    """CORS origin used when the request carries no Origin header."""
    return os.environ.get("DEFAULT_ORIGIN") or DEFAULT_ORIGIN


def aws_region() -> Optional[str]:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")


def log_level() -> str:
    """Raw LOG_LEVEL value: "0" silent, "1" INFO, anything else DEBUG."""
    return os.environ.get("LOG_LEVEL", "1")

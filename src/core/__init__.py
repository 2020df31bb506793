"""Core configuration, logging and shared types for XRY report processing."""

from .config import AppConfig, LoggingConfig, XryConfig, load_app_config  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401

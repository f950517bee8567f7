"""Core services for cursor context options and logging."""

from .config import DEFAULT_OPTIONS, ContextOptions, build_options
from .logging_setup import JsonFormatter, configure_logging, get_logger

__all__ = [
    "ContextOptions",
    "DEFAULT_OPTIONS",
    "JsonFormatter",
    "build_options",
    "configure_logging",
    "get_logger",
]

"""Observability helpers: logging configuration for the donmai loggers."""

from .logging import JsonFormatter, configure_from_settings, configure_logging

__all__ = ["JsonFormatter", "configure_logging", "configure_from_settings"]

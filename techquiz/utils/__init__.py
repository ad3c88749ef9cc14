"""Utility helpers."""
from .log import setup_logging, LOGGER_NAME

__all__ = ["setup_logging", "LOGGER_NAME"]

"""Core configuration, security primitives and result types."""

from lynkai.core.config import get_settings, settings
from lynkai.core.results import AuthError, ErrorKind, Result, TokenPair

__all__ = ["AuthError", "ErrorKind", "Result", "TokenPair", "get_settings", "settings"]

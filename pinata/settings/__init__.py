"""Application settings loading."""

from .app import AppSettings, MissingCredentialsError, get_settings


__all__ = ["AppSettings", "MissingCredentialsError", "get_settings"]

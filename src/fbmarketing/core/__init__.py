"""Core configuration for the marketing API client."""

from .config import ClientConfig

__all__ = ["ClientConfig"]

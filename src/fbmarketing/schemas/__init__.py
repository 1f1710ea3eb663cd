"""Exports of Pydantic schemas for Graph API objects."""

from . import videos
from .videos import *  # noqa: F401,F403 - re-export video models

__all__ = videos.__all__

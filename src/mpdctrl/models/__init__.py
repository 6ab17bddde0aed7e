"""Data models for mpdctrl configuration."""

from mpdctrl.models.server import MpdServer

__all__ = ["MpdServer"]

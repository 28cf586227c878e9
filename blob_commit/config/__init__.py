"""Configuration package."""

from blob_commit.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]

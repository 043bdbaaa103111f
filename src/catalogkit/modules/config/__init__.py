"""Config feature - echo of the process settings."""

from .router import ConfigRouter

__all__ = ["ConfigRouter"]

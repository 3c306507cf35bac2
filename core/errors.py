"""Startup errors raised by the banner subsystem.

Config and sink errors propagate out of startup. Resource errors never leave
the renderer: a missing banner resource falls back to the default banner.
"""

from __future__ import annotations


class BannerConfigError(ValueError):
    """Banner configuration is invalid (e.g. an unknown banner mode)."""


class SinkWriteError(OSError):
    """The console or log channel rejected the banner write."""


class ResourceUnavailableError(LookupError):
    """A banner text resource could not be found or read."""

    def __init__(self, location: str, reason: str = "not found") -> None:
        super().__init__(f"Banner resource '{location}' {reason}")
        self.location = location
        self.reason = reason

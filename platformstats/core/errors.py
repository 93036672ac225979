"""
Error taxonomy for platformstats.

Readers raise these; the section wrappers in the platform collector
catch them so one failing section never stops the rest of the report.
"""

import os
from typing import Optional


class PlatformStatsError(Exception):
    """Base class for all platformstats errors."""


class IOUnavailable(PlatformStatsError):
    """A pseudo-file could not be opened (sensor absent, permissions, kernel)."""

    def __init__(self, path: str, errno: Optional[int] = None, strerror: Optional[str] = None):
        self.path = str(path)
        self.errno = errno
        self.strerror = strerror or (os.strerror(errno) if errno else "unavailable")
        super().__init__(f"Unable to open {self.path}: {self.strerror}")

    @classmethod
    def from_os_error(cls, path, exc: OSError) -> "IOUnavailable":
        return cls(path, exc.errno, exc.strerror)


class ParseError(PlatformStatsError):
    """A pseudo-file was opened but did not hold the expected token shape."""

    def __init__(self, path: str, message: str, content: str = ""):
        self.path = str(path)
        self.content = content
        super().__init__(f"{self.path}: {message}")


class DeviceNotFound(PlatformStatsError):
    """No hwmon device carries the requested name."""

    def __init__(self, name: str, root: str):
        self.name = name
        self.root = str(root)
        super().__init__(f"no hwmon device found for {name} under {self.root}")


class InvalidState(PlatformStatsError):
    """A computation was asked to run on inputs it cannot handle."""

"""
Scalar reads from sysfs and procfs entries.

Entries are addressed the way the kernel numbers its devices: a base
path, a numeric device id and a suffix, e.g. ``/sys/class/hwmon/hwmon``
+ ``3`` + ``/power1_input``.
"""

import logging
from pathlib import Path

from ..core.errors import IOUnavailable, ParseError


logger = logging.getLogger(__name__)


def build_path(base_path: str, suffix: str, device_id: int) -> str:
    """Join base, id and suffix into the absolute entry path."""
    if device_id < 0:
        raise ValueError(f"device id must be >= 0, got {device_id}")
    return f"{base_path}{device_id}{suffix}"


class SysfsReader:
    """Reads single-value sysfs entries."""

    def _read_token(self, path: str) -> str:
        try:
            content = Path(path).read_text()
        except OSError as e:
            logger.debug(f"Could not open {path}: {e}")
            raise IOUnavailable.from_os_error(path, e) from e

        tokens = content.split()
        if not tokens:
            raise ParseError(path, "entry is empty", content)
        return tokens[0]

    def read_int(self, base_path: str, suffix: str, device_id: int) -> int:
        """Read an integer entry."""
        path = build_path(base_path, suffix, device_id)
        token = self._read_token(path)
        try:
            return int(token)
        except ValueError:
            raise ParseError(path, f"expected an integer, got {token!r}", token) from None

    def read_float(self, base_path: str, suffix: str, device_id: int) -> float:
        """Read a numeric entry as a float."""
        path = build_path(base_path, suffix, device_id)
        token = self._read_token(path)
        try:
            return float(token)
        except ValueError:
            raise ParseError(path, f"expected a number, got {token!r}", token) from None

    def read_string(self, base_path: str, suffix: str, device_id: int) -> str:
        """Read the first whitespace-separated token of an entry."""
        return self._read_token(build_path(base_path, suffix, device_id))

"""
/proc/meminfo reader.

Fields are looked up by label by default. The positional strategy reads
fixed line offsets instead, which breaks silently whenever a kernel
reorders or adds fields; it is kept for parity with older tooling.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..core.errors import IOUnavailable, ParseError
from ..core.models import MemoryInfo


logger = logging.getLogger(__name__)

# Model attribute -> kernel label
MEMINFO_FIELDS = {
    "mem_total": "MemTotal",
    "mem_free": "MemFree",
    "mem_available": "MemAvailable",
    "swap_total": "SwapTotal",
    "swap_free": "SwapFree",
    "cma_total": "CmaTotal",
    "cma_free": "CmaFree",
}

# Model attribute -> line offset, for the positional strategy
MEMINFO_LINE_OFFSETS = {
    "mem_total": 0,
    "mem_free": 2,
    "mem_available": 4,
    "swap_total": 14,
    "swap_free": 16,
    "cma_total": 41,
    "cma_free": 43,
}

STRATEGIES = ("label", "positional")


def parse_meminfo(text: str) -> Dict[str, int]:
    """
    Parse meminfo text into a ``{label: value}`` mapping.

    Lines look like ``MemTotal:        4022348 kB``. Lines that do not
    carry an integer value are ignored.
    """
    values = {}
    for line in text.splitlines():
        label, sep, rest = line.partition(":")
        if not sep:
            continue
        tokens = rest.split()
        if not tokens:
            continue
        try:
            values[label.strip()] = int(tokens[0])
        except ValueError:
            continue
    return values


class MemoryInfoReader:
    """Extracts RAM, swap and CMA fields from the memory-info pseudo-file."""

    def __init__(self, proc_root: str = "/proc", strategy: str = "label"):
        strategy = strategy.strip().lower()
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown meminfo strategy {strategy!r}, expected one of {STRATEGIES}")
        self.meminfo_path = Path(proc_root) / "meminfo"
        self.strategy = strategy

    def _read_text(self) -> str:
        try:
            return self.meminfo_path.read_text()
        except OSError as e:
            raise IOUnavailable.from_os_error(self.meminfo_path, e) from e

    def read(self, fields: Optional[List[str]] = None) -> MemoryInfo:
        """Read the requested model fields (all of them by default)."""
        fields = fields or list(MEMINFO_FIELDS)
        text = self._read_text()

        if self.strategy == "positional":
            values = self._read_positional(text, fields)
        else:
            labelled = parse_meminfo(text)
            values = {name: labelled.get(MEMINFO_FIELDS[name]) for name in fields}
            missing = [MEMINFO_FIELDS[name] for name, value in values.items() if value is None]
            if missing:
                logger.debug(f"{self.meminfo_path} has no {', '.join(missing)}")

        return MemoryInfo(**values)

    def _read_positional(self, text: str, fields: List[str]) -> Dict[str, int]:
        lines = text.splitlines()
        values = {}
        for name in fields:
            offset = MEMINFO_LINE_OFFSETS[name]
            if offset >= len(lines):
                raise ParseError(self.meminfo_path, f"no line {offset} for {MEMINFO_FIELDS[name]}")
            tokens = lines[offset].split()
            try:
                # Label token is not checked against the expected name
                values[name] = int(tokens[1])
            except (IndexError, ValueError):
                raise ParseError(
                    self.meminfo_path, f"line {offset} has no integer value", lines[offset]
                ) from None
        return values

    def get_ram(self) -> MemoryInfo:
        return self.read(["mem_total", "mem_free", "mem_available"])

    def get_swap(self) -> MemoryInfo:
        return self.read(["swap_total", "swap_free"])

    def get_cma(self) -> MemoryInfo:
        return self.read(["cma_total", "cma_free"])

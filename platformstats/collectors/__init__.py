"""Collectors module for gathering platform statistics."""

from .sysfs import SysfsReader
from .hwmon import HwmonLocator
from .cpu import CpuStatSampler, CpuCollector
from .memory import MemoryInfoReader, parse_meminfo
from .power import PowerCollector
from .platform_collector import PlatformCollector, get_platform_snapshot

__all__ = [
    "SysfsReader",
    "HwmonLocator",
    "CpuStatSampler",
    "CpuCollector",
    "MemoryInfoReader",
    "parse_meminfo",
    "PowerCollector",
    "PlatformCollector",
    "get_platform_snapshot",
]

"""Core module containing data models, computations and configuration."""

from .models import (
    CpuStat,
    CpuUtilization,
    CpuFrequency,
    MemoryInfo,
    HwmonDevice,
    PowerSample,
    PowerMetrics,
    SysmonMetrics,
    PlatformSnapshot,
)
from .errors import (
    PlatformStatsError,
    IOUnavailable,
    ParseError,
    DeviceNotFound,
    InvalidState,
)
from .load import calculate_load
from .moving_average import MovingAverageBuffer
from .config import Config

__all__ = [
    "CpuStat",
    "CpuUtilization",
    "CpuFrequency",
    "MemoryInfo",
    "HwmonDevice",
    "PowerSample",
    "PowerMetrics",
    "SysmonMetrics",
    "PlatformSnapshot",
    "PlatformStatsError",
    "IOUnavailable",
    "ParseError",
    "DeviceNotFound",
    "InvalidState",
    "calculate_load",
    "MovingAverageBuffer",
    "Config",
]

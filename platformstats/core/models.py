"""
Data models for platform statistics.

These dataclasses represent the values sampled from procfs and sysfs
during a single report invocation. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass
class CpuStat:
    """Per-CPU accounting counters from one /proc/stat row, in jiffies."""

    cpu_id: int
    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    total_util: float = 0.0

    @property
    def idle_time(self) -> int:
        return self.idle + self.iowait

    @property
    def non_idle_time(self) -> int:
        return self.user + self.nice + self.system + self.irq + self.softirq

    @property
    def total_time(self) -> int:
        return self.idle_time + self.non_idle_time


@dataclass
class CpuUtilization:
    """Load of one CPU computed from two samples."""

    cpu_id: int
    utilization: float
    prev: CpuStat
    curr: CpuStat


@dataclass
class CpuFrequency:
    """Current frequency of one CPU as reported by cpufreq."""

    cpu_id: int
    frequency_khz: float

    @property
    def frequency_mhz(self) -> float:
        return self.frequency_khz / 1000


@dataclass
class MemoryInfo:
    """Memory fields from /proc/meminfo, in kilobytes."""

    mem_total: Optional[int] = None
    mem_free: Optional[int] = None
    mem_available: Optional[int] = None
    swap_total: Optional[int] = None
    swap_free: Optional[int] = None
    cma_total: Optional[int] = None
    cma_free: Optional[int] = None

    def as_dict(self) -> Dict[str, Optional[int]]:
        """Named-field mapping keyed by the kernel labels."""
        return {
            "MemTotal": self.mem_total,
            "MemFree": self.mem_free,
            "MemAvailable": self.mem_available,
            "SwapTotal": self.swap_total,
            "SwapFree": self.swap_free,
            "CmaTotal": self.cma_total,
            "CmaFree": self.cma_free,
        }


@dataclass
class HwmonDevice:
    """A device registered under the hwmon class."""

    hwmon_id: int
    name: str
    path: str = ""


@dataclass
class PowerSample:
    """One board power sensor reading and the running averages after it."""

    index: int
    power_mw: Optional[int] = None
    current_ma: Optional[int] = None
    voltage_mv: Optional[int] = None
    avg_power_mw: Optional[int] = None
    avg_current_ma: Optional[int] = None
    avg_voltage_mv: Optional[int] = None


@dataclass
class PowerMetrics:
    """Samples collected from the board power sensor."""

    device: Optional[HwmonDevice] = None
    samples: List[PowerSample] = field(default_factory=list)

    @property
    def last(self) -> Optional[PowerSample]:
        return self.samples[-1] if self.samples else None


@dataclass
class SysmonMetrics:
    """
    Rails and temperatures from the on-chip analog monitor (AMS).

    Temperatures are millidegrees Celsius, voltages millivolts. A rail
    that could not be read is None.
    """

    device: Optional[HwmonDevice] = None
    lpd_temp_mc: Optional[int] = None
    fpd_temp_mc: Optional[int] = None
    pl_temp_mc: Optional[int] = None
    vcc_pspll_mv: Optional[int] = None
    pl_vccint_mv: Optional[int] = None
    volt_ddrs_mv: Optional[int] = None
    vcc_psintfp_mv: Optional[int] = None
    vcc_ps_fpd_mv: Optional[int] = None
    ps_io_bank_500_mv: Optional[int] = None
    vcc_ps_gtr_mv: Optional[int] = None
    vtt_ps_gtr_mv: Optional[int] = None

    @staticmethod
    def to_celsius(millidegrees: Optional[int]) -> Optional[int]:
        if millidegrees is None:
            return None
        return int(millidegrees / 1000)


@dataclass
class PlatformSnapshot:
    """Everything gathered by one report invocation."""

    cpu_utilization: List[CpuUtilization] = field(default_factory=list)
    memory: MemoryInfo = field(default_factory=MemoryInfo)
    power: PowerMetrics = field(default_factory=PowerMetrics)
    sysmon: SysmonMetrics = field(default_factory=SysmonMetrics)
    cpu_frequency: List[CpuFrequency] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
    collection_duration_ms: float = 0.0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert snapshot to dictionary for serialization."""
        return {
            "cpu_utilization": {
                f"cpu{u.cpu_id}": u.utilization for u in self.cpu_utilization
            },
            "memory_kb": self.memory.as_dict(),
            "power": {
                "device": self.power.device.name if self.power.device else None,
                "samples": [
                    {
                        "power_mw": s.power_mw,
                        "current_ma": s.current_ma,
                        "voltage_mv": s.voltage_mv,
                        "avg_power_mw": s.avg_power_mw,
                        "avg_current_ma": s.avg_current_ma,
                        "avg_voltage_mv": s.avg_voltage_mv,
                    }
                    for s in self.power.samples
                ],
            },
            "sysmon": {
                "device": self.sysmon.device.name if self.sysmon.device else None,
                "lpd_temp_c": SysmonMetrics.to_celsius(self.sysmon.lpd_temp_mc),
                "fpd_temp_c": SysmonMetrics.to_celsius(self.sysmon.fpd_temp_mc),
                "pl_temp_c": SysmonMetrics.to_celsius(self.sysmon.pl_temp_mc),
                "vcc_pspll_mv": self.sysmon.vcc_pspll_mv,
                "pl_vccint_mv": self.sysmon.pl_vccint_mv,
                "volt_ddrs_mv": self.sysmon.volt_ddrs_mv,
                "vcc_psintfp_mv": self.sysmon.vcc_psintfp_mv,
                "vcc_ps_fpd_mv": self.sysmon.vcc_ps_fpd_mv,
                "ps_io_bank_500_mv": self.sysmon.ps_io_bank_500_mv,
                "vcc_ps_gtr_mv": self.sysmon.vcc_ps_gtr_mv,
                "vtt_ps_gtr_mv": self.sysmon.vtt_ps_gtr_mv,
            },
            "cpu_frequency_mhz": {
                f"cpu{f.cpu_id}": f.frequency_mhz for f in self.cpu_frequency
            },
            "timestamp": self.timestamp.isoformat(),
            "collection_duration_ms": self.collection_duration_ms,
            "errors": self.errors,
        }

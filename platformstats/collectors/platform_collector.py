"""
Platform Statistics Collector.

Gathers every report section from the local board. Sections are
independent: a failure in one is recorded and the others still run.
"""

import logging
import time
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..core.config import Config
from ..core.errors import PlatformStatsError
from ..core.models import (
    CpuUtilization,
    CpuFrequency,
    MemoryInfo,
    PowerMetrics,
    PowerSample,
    SysmonMetrics,
    PlatformSnapshot,
)
from .cpu import CpuCollector
from .hwmon import HwmonLocator
from .memory import MemoryInfoReader
from .power import PowerCollector
from .sysfs import SysfsReader


logger = logging.getLogger(__name__)

# Report sections in the order collect_all runs them
SECTIONS = ("cpu_util", "ram", "swap", "power", "cma", "cpu_freq")


class PlatformCollector:
    """
    Collects platform statistics from the local machine.

    Reads procfs and sysfs directly; roots come from the configuration so
    the collector can be pointed at a fixture tree.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        paths = self.config.paths
        sampling = self.config.sampling

        self.reader = SysfsReader()
        self.locator = HwmonLocator(
            paths.hwmon_root,
            reader=self.reader,
            cache=self.config.devices.cache_lookups,
        )
        self.cpu = CpuCollector(
            proc_root=paths.proc_root,
            cpu_sysfs_root=paths.cpu_sysfs_root,
            load_interval=sampling.load_interval,
            cpu_count=sampling.cpu_count,
            reader=self.reader,
        )
        self.memory = MemoryInfoReader(paths.proc_root, strategy=self.config.memory.strategy)
        self.power = PowerCollector(
            self.locator,
            power_sensor=self.config.devices.power_sensor,
            sysmon=self.config.devices.sysmon,
        )

    def get_cpu_utilization(self) -> List[CpuUtilization]:
        return self.cpu.get_utilization()

    def get_ram(self) -> MemoryInfo:
        return self.memory.get_ram()

    def get_swap(self) -> MemoryInfo:
        return self.memory.get_swap()

    def get_cma(self) -> MemoryInfo:
        return self.memory.get_cma()

    def get_cpu_frequency(self) -> List[CpuFrequency]:
        return self.cpu.get_frequencies()

    def get_power(self, rate: Optional[float] = None, duration: Optional[int] = None,
                  on_sample: Optional[Callable[[PowerSample], None]] = None) -> PowerMetrics:
        """Run the board power sensor sampling loop."""
        rate = self.config.sampling.rate if rate is None else rate
        duration = self.config.sampling.duration if duration is None else duration

        device = self.power.find_power_sensor()
        metrics = PowerMetrics(device=device)
        for sample in self.power.sample_ina260(rate, duration, device=device):
            metrics.samples.append(sample)
            if on_sample:
                on_sample(sample)
        return metrics

    def get_sysmon(self) -> SysmonMetrics:
        return self.power.get_sysmon()

    def _run_section(self, name: str, func: Callable, errors: List[str]):
        """Run one section, recording its failure instead of raising."""
        try:
            return func()
        except (PlatformStatsError, OSError) as e:
            logger.error(f"{name} unavailable: {e}")
            errors.append(f"{name}: {e}")
            return None

    def collect(self, sections: Optional[Iterable[str]] = None,
                on_power_sample: Optional[Callable[[PowerSample], None]] = None) -> PlatformSnapshot:
        """Collect the requested sections (all by default) into a snapshot."""
        wanted = set(sections) if sections is not None else set(SECTIONS)
        unknown = wanted - set(SECTIONS)
        if unknown:
            raise ValueError(f"Unknown sections: {', '.join(sorted(unknown))}")

        start_time = time.time()
        snapshot = PlatformSnapshot()
        errors = snapshot.errors
        memory = snapshot.memory

        if "cpu_util" in wanted:
            result = self._run_section("CPU utilization", self.get_cpu_utilization, errors)
            snapshot.cpu_utilization = result or []

        if "ram" in wanted:
            ram = self._run_section("RAM utilization", self.get_ram, errors)
            if ram:
                memory.mem_total = ram.mem_total
                memory.mem_free = ram.mem_free
                memory.mem_available = ram.mem_available

        if "swap" in wanted:
            swap = self._run_section("Swap utilization", self.get_swap, errors)
            if swap:
                memory.swap_total = swap.swap_total
                memory.swap_free = swap.swap_free

        if "power" in wanted:
            power = self._run_section(
                "Power utilization",
                lambda: self.get_power(on_sample=on_power_sample),
                errors,
            )
            if power:
                snapshot.power = power

            sysmon = self._run_section("AMS", self.get_sysmon, errors)
            if sysmon:
                snapshot.sysmon = sysmon

        if "cma" in wanted:
            cma = self._run_section("CMA utilization", self.get_cma, errors)
            if cma:
                memory.cma_total = cma.cma_total
                memory.cma_free = cma.cma_free

        if "cpu_freq" in wanted:
            result = self._run_section("CPU frequency", self.get_cpu_frequency, errors)
            snapshot.cpu_frequency = result or []

        snapshot.timestamp = datetime.now()
        snapshot.collection_duration_ms = (time.time() - start_time) * 1000
        return snapshot

    def collect_all(self) -> PlatformSnapshot:
        """Collect every section and return a complete snapshot."""
        return self.collect()


# Convenience function for quick local statistics
def get_platform_snapshot(config: Optional[Config] = None) -> PlatformSnapshot:
    """Get a statistics snapshot of the local board."""
    collector = PlatformCollector(config)
    return collector.collect_all()

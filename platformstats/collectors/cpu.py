"""
CPU utilization and frequency collection.

Utilization comes from two /proc/stat samples taken a fixed interval
apart; frequency from each CPU's cpufreq entry.
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

import psutil

from ..core.errors import IOUnavailable, ParseError, PlatformStatsError
from ..core.load import calculate_load
from ..core.models import CpuStat, CpuUtilization, CpuFrequency
from .sysfs import SysfsReader


logger = logging.getLogger(__name__)

# Counter columns after the "cpuN" label, in kernel order
CPU_STAT_FIELDS = ("user", "nice", "system", "idle", "iowait", "irq", "softirq")


class CpuStatSampler:
    """Reads one CPU's row from the kernel accounting table."""

    def __init__(self, proc_root: str = "/proc"):
        self.stat_path = Path(proc_root) / "stat"

    def sample(self, cpu_id: int) -> CpuStat:
        """
        Read counters for ``cpu_id``.

        Row 0 is the aggregate ``cpu`` line, so ``cpuN`` lives on row N+1.
        """
        try:
            lines = self.stat_path.read_text().splitlines()
        except OSError as e:
            raise IOUnavailable.from_os_error(self.stat_path, e) from e

        row = cpu_id + 1
        if cpu_id < 0 or row >= len(lines):
            raise ParseError(self.stat_path, f"no accounting row for CPU{cpu_id}")

        tokens = lines[row].split()
        if len(tokens) < len(CPU_STAT_FIELDS) + 1 or not tokens[0].startswith("cpu"):
            raise ParseError(self.stat_path, f"row {row} is not a CPU row", lines[row])

        try:
            counters = [int(t) for t in tokens[1:len(CPU_STAT_FIELDS) + 1]]
        except ValueError:
            raise ParseError(self.stat_path, f"non-integer counter in row {row}", lines[row]) from None

        return CpuStat(cpu_id, *counters)


class CpuCollector:
    """Collects per-CPU load and frequency."""

    def __init__(self, proc_root: str = "/proc", cpu_sysfs_root: str = "/sys/devices/system/cpu",
                 load_interval: float = 1.0, cpu_count: int = 0,
                 reader: Optional[SysfsReader] = None):
        self.sampler = CpuStatSampler(proc_root)
        self.reader = reader or SysfsReader()
        self.freq_base = f"{str(cpu_sysfs_root).rstrip('/')}/cpu"
        self.load_interval = load_interval
        self._cpu_count = cpu_count

    def cpu_count(self) -> int:
        """Number of CPUs to sample: the configured override, else the online logical CPUs."""
        if self._cpu_count > 0:
            return self._cpu_count
        return psutil.cpu_count(logical=True) or 1

    def cpu_ids(self) -> List[int]:
        return list(range(self.cpu_count()))

    def get_utilization(self, cpu_ids: Optional[Iterable[int]] = None) -> List[CpuUtilization]:
        """
        Sample every CPU twice, ``load_interval`` seconds apart, and
        compute the load of each.

        A CPU whose row cannot be parsed is skipped; an unreadable
        /proc/stat fails the whole call.
        """
        ids = list(cpu_ids) if cpu_ids is not None else self.cpu_ids()

        first = {}
        for cpu_id in ids:
            try:
                first[cpu_id] = self.sampler.sample(cpu_id)
            except ParseError as e:
                logger.warning(f"CPU{cpu_id} skipped: {e}")

        self._pause()

        results = []
        for cpu_id, prev in first.items():
            try:
                curr = self.sampler.sample(cpu_id)
                curr.total_util = calculate_load(prev, curr)
            except IOUnavailable:
                raise
            except PlatformStatsError as e:
                # Unparseable row or no elapsed jiffies
                logger.warning(f"CPU{cpu_id} skipped: {e}")
                continue

            results.append(CpuUtilization(
                cpu_id=cpu_id,
                utilization=curr.total_util,
                prev=prev,
                curr=curr,
            ))

        return results

    def _pause(self):
        time.sleep(self.load_interval)

    def get_frequency(self, cpu_id: int) -> CpuFrequency:
        """Current frequency of one CPU, in kHz as the kernel reports it."""
        khz = self.reader.read_float(self.freq_base, "/cpufreq/cpuinfo_cur_freq", cpu_id)
        return CpuFrequency(cpu_id=cpu_id, frequency_khz=khz)

    def get_frequencies(self, cpu_ids: Optional[Iterable[int]] = None) -> List[CpuFrequency]:
        """Frequency of every CPU that exposes one."""
        ids = list(cpu_ids) if cpu_ids is not None else self.cpu_ids()
        frequencies = []
        errors = []
        for cpu_id in ids:
            try:
                frequencies.append(self.get_frequency(cpu_id))
            except PlatformStatsError as e:
                logger.warning(f"CPU{cpu_id} frequency unavailable: {e}")
                errors.append(e)

        if errors and not frequencies:
            raise errors[0]
        return frequencies

"""
Console report formatting.

Prints snapshot sections in the layout of the classic platformstats
report. Nothing here reads hardware.
"""

import sys
from typing import List, Optional, TextIO

from .core.models import (
    CpuStat,
    CpuUtilization,
    CpuFrequency,
    MemoryInfo,
    PowerMetrics,
    PowerSample,
    SysmonMetrics,
    PlatformSnapshot,
)


def _fmt(value, unit: str = "") -> str:
    if value is None:
        return "N/A"
    return f"{value} {unit}".rstrip()


class ReportPrinter:
    """Writes human-readable report sections to a text stream."""

    def __init__(self, out: Optional[TextIO] = None, verbose: bool = False):
        self.out = out or sys.stdout
        self.verbose = verbose

    def _print(self, text: str = ""):
        print(text, file=self.out)

    def print_cpu_stat(self, stat: CpuStat):
        self._print(
            f"CPU{stat.cpu_id}: {stat.user} {stat.nice} {stat.system} {stat.idle} "
            f"{stat.iowait} {stat.irq} {stat.softirq}"
        )

    def print_cpu_utilization(self, utilization: List[CpuUtilization]):
        self._print("CPU Utilization")
        for u in utilization:
            if self.verbose:
                self._print(f"cpu_id={u.cpu_id}")
                self._print("Stats at t0")
                self.print_cpu_stat(u.prev)
                self._print("Stats at t1")
                self.print_cpu_stat(u.curr)
            self._print(f"CPU{u.cpu_id}\t:     {u.utilization:f}%")
        self._print()

    def print_ram(self, memory: MemoryInfo):
        self._print("RAM Utilization")
        self._print(f"MemTotal      :     {_fmt(memory.mem_total, 'kB')}")
        self._print(f"MemFree       :     {_fmt(memory.mem_free, 'kB')}")
        self._print(f"MemAvailable  :     {_fmt(memory.mem_available, 'kB')}")
        self._print()

    def print_swap(self, memory: MemoryInfo):
        self._print("Swap Mem Utilization")
        self._print(f"SwapTotal    :    {_fmt(memory.swap_total, 'kB')}")
        self._print(f"SwapFree     :    {_fmt(memory.swap_free, 'kB')}")
        self._print()

    def print_cma(self, memory: MemoryInfo):
        self._print("CMA Mem Utilization")
        self._print(f"CmaTotal   :     {_fmt(memory.cma_total, 'kB')}")
        self._print(f"CmaFree    :     {_fmt(memory.cma_free, 'kB')}")
        self._print()

    def print_power_header(self):
        self._print("Power Utilization")

    def print_power_sample(self, sample: PowerSample):
        self._print(
            f"SOM total power    :     {_fmt(sample.power_mw, 'mW')}\t "
            f"SOM avg power    :    {_fmt(sample.avg_power_mw, 'mW')}"
        )
        self._print(
            f"SOM total current  :     {_fmt(sample.current_ma, 'mA')}\t\t "
            f"SOM avg current  :    {_fmt(sample.avg_current_ma, 'mA')}"
        )
        self._print(
            f"SOM total voltage  :     {_fmt(sample.voltage_mv, 'mV')}\t "
            f"SOM avg voltage  :   {_fmt(sample.avg_voltage_mv, 'mV')}"
        )
        self._print()

    def print_power(self, power: PowerMetrics):
        self.print_power_header()
        for sample in power.samples:
            self.print_power_sample(sample)

    def print_sysmon(self, sysmon: SysmonMetrics):
        if sysmon.device is None:
            return
        c = SysmonMetrics.to_celsius
        self._print("AMS CTRL")
        self._print(f"System PLLs voltage measurement, VCC_PSLL             :     {_fmt(sysmon.vcc_pspll_mv, 'mV')}")
        self._print(f"PL internal voltage measurement, VCC_PSBATT           :     {_fmt(sysmon.pl_vccint_mv, 'mV')}")
        self._print(f"Voltage measurement for six DDR I/O PLLs, VCC_PSDDR_PLL :     {_fmt(sysmon.volt_ddrs_mv, 'mV')}")
        self._print(f"VCC_PSINTFP_DDR voltage measurement                   :     {_fmt(sysmon.vcc_psintfp_mv, 'mV')}")
        self._print()
        self._print("PS Sysmon")
        self._print(f"LPD temperature measurement                           :     {_fmt(c(sysmon.lpd_temp_mc), 'C')}")
        self._print(f"FPD temperature measurement (REMOTE)                  :     {_fmt(c(sysmon.fpd_temp_mc), 'C')}")
        self._print(f"VCC PS FPD voltage measurement (supply 2)             :     {_fmt(sysmon.vcc_ps_fpd_mv, 'mV')}")
        self._print(f"PS IO Bank 500 voltage measurement (supply 6)         :     {_fmt(sysmon.ps_io_bank_500_mv, 'mV')}")
        self._print(f"VCC PS GTR voltage                                    :     {_fmt(sysmon.vcc_ps_gtr_mv, 'mV')}")
        self._print(f"VTT PS GTR voltage                                    :     {_fmt(sysmon.vtt_ps_gtr_mv, 'mV')}")
        self._print()
        self._print("PL Sysmon")
        self._print(f"PL temperature                                        :     {_fmt(c(sysmon.pl_temp_mc), 'C')}")
        self._print()

    def print_cpu_frequency(self, frequencies: List[CpuFrequency]):
        self._print("CPU Frequency")
        for f in frequencies:
            self._print(f"CPU{f.cpu_id}\t:    {f.frequency_mhz:f} MHz")
        self._print()

    def print_errors(self, errors: List[str]):
        for error in errors:
            self._print(error)
        if errors:
            self._print()

    def print_section(self, section: str, snapshot: PlatformSnapshot, power_streamed: bool = False,
                      include_errors: bool = True):
        """Print one section of a snapshot, followed by its recorded errors."""
        if section == "cpu_util":
            self.print_cpu_utilization(snapshot.cpu_utilization)
        elif section == "ram":
            self.print_ram(snapshot.memory)
        elif section == "swap":
            self.print_swap(snapshot.memory)
        elif section == "power":
            if not power_streamed:
                self.print_power(snapshot.power)
            self.print_sysmon(snapshot.sysmon)
        elif section == "cma":
            self.print_cma(snapshot.memory)
        elif section == "cpu_freq":
            self.print_cpu_frequency(snapshot.cpu_frequency)
        else:
            raise ValueError(f"Unknown section: {section}")
        if include_errors:
            self.print_errors(snapshot.errors)

    def print_snapshot(self, snapshot: PlatformSnapshot, sections):
        """Print the given sections of a fully collected snapshot."""
        for section in sections:
            self.print_section(section, snapshot, include_errors=False)
        self.print_errors(snapshot.errors)

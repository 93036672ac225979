"""
Board power and on-chip monitor telemetry.

The INA260 board sensor is sampled in a loop and smoothed with moving
averages; the AMS rails and temperatures are read once.
"""

import logging
import time
from typing import Iterator, Optional

from ..core.errors import InvalidState, PlatformStatsError
from ..core.models import HwmonDevice, PowerSample, SysmonMetrics
from ..core.moving_average import MovingAverageBuffer
from .hwmon import HwmonLocator
from .sysfs import SysfsReader


logger = logging.getLogger(__name__)

# SysmonMetrics attribute -> hwmon entry of the AMS device
SYSMON_ENTRIES = {
    "lpd_temp_mc": "/temp1_input",
    "fpd_temp_mc": "/temp2_input",
    "pl_temp_mc": "/temp3_input",
    "vcc_pspll_mv": "/in1_input",
    "pl_vccint_mv": "/in3_input",
    "volt_ddrs_mv": "/in6_input",
    "vcc_psintfp_mv": "/in7_input",
    "vcc_ps_fpd_mv": "/in9_input",
    "ps_io_bank_500_mv": "/in13_input",
    "vcc_ps_gtr_mv": "/in16_input",
    "vtt_ps_gtr_mv": "/in17_input",
}


class PowerCollector:
    """Reads power, current, voltage and temperature from hwmon devices."""

    def __init__(self, locator: HwmonLocator, power_sensor: str = "ina260_u14", sysmon: str = "ams"):
        self.locator = locator
        self.reader: SysfsReader = locator.reader
        self.power_sensor = power_sensor
        self.sysmon = sysmon

    def find_power_sensor(self) -> HwmonDevice:
        return self.locator.find_device(self.power_sensor)

    def find_sysmon(self) -> HwmonDevice:
        return self.locator.find_device(self.sysmon)

    def _read_optional(self, device: HwmonDevice, suffix: str) -> Optional[int]:
        """Read one entry; an unavailable entry yields None."""
        try:
            return self.reader.read_int(self.locator.base_path, suffix, device.hwmon_id)
        except PlatformStatsError as e:
            logger.warning(f"{device.name}: {e}")
            return None

    def sample_ina260(self, rate: float = 1, duration: int = 1,
                      device: Optional[HwmonDevice] = None) -> Iterator[PowerSample]:
        """
        Yield ``duration`` samples from the board power sensor, ``rate``
        seconds apart.

        Averages run over a window of ``duration`` samples, so they
        cover every sample taken so far.
        """
        if duration <= 0:
            raise InvalidState(f"power sampling duration must be positive, got {duration}")
        if rate < 0:
            raise InvalidState(f"power sampling rate must not be negative, got {rate}")

        device = device or self.find_power_sensor()
        power_avg = MovingAverageBuffer(duration)
        curr_avg = MovingAverageBuffer(duration)
        volt_avg = MovingAverageBuffer(duration)

        for i in range(duration):
            sample = PowerSample(index=i)

            power_uw = self._read_optional(device, "/power1_input")
            if power_uw is not None:
                sample.power_mw = int(power_uw / 1000)
                sample.avg_power_mw = power_avg.push(sample.power_mw)

            sample.current_ma = self._read_optional(device, "/curr1_input")
            if sample.current_ma is not None:
                sample.avg_current_ma = curr_avg.push(sample.current_ma)

            sample.voltage_mv = self._read_optional(device, "/in1_input")
            if sample.voltage_mv is not None:
                sample.avg_voltage_mv = volt_avg.push(sample.voltage_mv)

            yield sample

            if i < duration - 1:
                self._pause(rate)

    def _pause(self, seconds: float):
        time.sleep(seconds)

    def get_sysmon(self, device: Optional[HwmonDevice] = None) -> SysmonMetrics:
        """Read the AMS temperatures and voltage rails."""
        device = device or self.find_sysmon()
        metrics = SysmonMetrics(device=device)
        for attr, suffix in SYSMON_ENTRIES.items():
            setattr(metrics, attr, self._read_optional(device, suffix))
        return metrics

"""
hwmon device lookup.

Devices are numbered hwmon0..hwmonN under the class root; the only way
to tell them apart is the ``name`` entry each one exposes.
"""

import logging
import os
from typing import Dict, List, Optional

from ..core.errors import DeviceNotFound, IOUnavailable, PlatformStatsError
from ..core.models import HwmonDevice
from .sysfs import SysfsReader


logger = logging.getLogger(__name__)


class HwmonLocator:
    """
    Resolves hwmon device ids by name.

    Each lookup rescans the devices unless ``cache`` is set, in which
    case resolved names are remembered for the life of the locator.
    """

    def __init__(self, root: str = "/sys/class/hwmon", reader: Optional[SysfsReader] = None,
                 cache: bool = False):
        self.root = str(root).rstrip("/")
        self.reader = reader or SysfsReader()
        self.cache = cache
        self._ids: Dict[str, int] = {}

    @property
    def base_path(self) -> str:
        """Prefix that a device id is appended to."""
        return f"{self.root}/hwmon"

    def count_devices(self) -> int:
        """Count entries of the hwmon root whose name contains 'hwmon'."""
        try:
            entries = os.listdir(self.root)
        except OSError as e:
            raise IOUnavailable.from_os_error(self.root, e) from e
        return sum(1 for entry in entries if "hwmon" in entry)

    def read_name(self, hwmon_id: int) -> str:
        return self.reader.read_string(self.base_path, "/name", hwmon_id)

    def resolve_id(self, target_name: str) -> Optional[int]:
        """Return the first hwmon id whose name equals target_name, or None."""
        if self.cache and target_name in self._ids:
            return self._ids[target_name]

        for hwmon_id in range(self.count_devices()):
            try:
                device_name = self.read_name(hwmon_id)
            except PlatformStatsError as e:
                logger.debug(f"Skipping hwmon{hwmon_id}: {e}")
                continue

            logger.debug(f"hwmon{hwmon_id}: device_name = {device_name}")
            if device_name == target_name:
                if self.cache:
                    self._ids[target_name] = hwmon_id
                return hwmon_id

        return None

    def find_device(self, target_name: str) -> HwmonDevice:
        """Like resolve_id, but raises DeviceNotFound when nothing matches."""
        hwmon_id = self.resolve_id(target_name)
        if hwmon_id is None:
            raise DeviceNotFound(target_name, self.root)
        return HwmonDevice(
            hwmon_id=hwmon_id,
            name=target_name,
            path=f"{self.base_path}{hwmon_id}",
        )

    def list_devices(self) -> List[HwmonDevice]:
        """All devices whose name entry could be read."""
        devices = []
        for hwmon_id in range(self.count_devices()):
            try:
                name = self.read_name(hwmon_id)
            except PlatformStatsError as e:
                logger.debug(f"Skipping hwmon{hwmon_id}: {e}")
                continue
            devices.append(HwmonDevice(hwmon_id=hwmon_id, name=name, path=f"{self.base_path}{hwmon_id}"))
        return devices

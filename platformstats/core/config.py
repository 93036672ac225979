"""
Configuration management for platformstats.

Every value has a working default, so no file is required. An optional
YAML file and environment variables can override the defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


MEMINFO_STRATEGIES = ("label", "positional")


class ConfigError(ValueError):
    """Configuration holds a value platformstats cannot use."""


@dataclass
class PathsConfig:
    """Roots of the kernel pseudo-filesystems."""

    proc_root: str = "/proc"
    hwmon_root: str = "/sys/class/hwmon"
    cpu_sysfs_root: str = "/sys/devices/system/cpu"


@dataclass
class SamplingConfig:
    """Sampling intervals and counts."""

    rate: int = 1  # Seconds between power samples
    duration: int = 1  # Number of power samples
    load_interval: float = 1.0  # Seconds between the two CPU load samples
    cpu_count: int = 0  # 0 = autodetect online CPUs


@dataclass
class DevicesConfig:
    """hwmon device names to look up."""

    power_sensor: str = "ina260_u14"
    sysmon: str = "ams"
    cache_lookups: bool = False


@dataclass
class MemoryConfig:
    """How /proc/meminfo is parsed."""

    strategy: str = "label"  # label or positional


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Main configuration container."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    devices: DevicesConfig = field(default_factory=DevicesConfig)
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(path)
        if not config_path.exists():
            config = cls()
            config._apply_env_overrides()
            config.validate()
            return config

        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        config = cls()

        if "paths" in data:
            config.paths = PathsConfig(**data["paths"])

        if "sampling" in data:
            config.sampling = SamplingConfig(**data["sampling"])

        if "devices" in data:
            config.devices = DevicesConfig(**data["devices"])

        if "memory" in data:
            config.memory = MemoryConfig(**data["memory"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        # Override with environment variables
        config._apply_env_overrides()
        config.validate()

        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        # Paths
        if os.getenv("PLATFORMSTATS_PROC_ROOT"):
            self.paths.proc_root = os.getenv("PLATFORMSTATS_PROC_ROOT")
        if os.getenv("PLATFORMSTATS_HWMON_ROOT"):
            self.paths.hwmon_root = os.getenv("PLATFORMSTATS_HWMON_ROOT")
        if os.getenv("PLATFORMSTATS_CPU_ROOT"):
            self.paths.cpu_sysfs_root = os.getenv("PLATFORMSTATS_CPU_ROOT")

        # Sampling
        if os.getenv("PLATFORMSTATS_RATE"):
            self.sampling.rate = int(os.getenv("PLATFORMSTATS_RATE"))
        if os.getenv("PLATFORMSTATS_DURATION"):
            self.sampling.duration = int(os.getenv("PLATFORMSTATS_DURATION"))

        # Memory parsing
        if os.getenv("PLATFORMSTATS_MEMINFO_STRATEGY"):
            self.memory.strategy = os.getenv("PLATFORMSTATS_MEMINFO_STRATEGY")

        # Logging
        if os.getenv("LOG_LEVEL"):
            self.logging.level = os.getenv("LOG_LEVEL")

    def validate(self):
        """Normalise values and reject ones the collectors cannot use."""
        self.memory.strategy = str(self.memory.strategy).strip().lower()
        if self.memory.strategy not in MEMINFO_STRATEGIES:
            raise ConfigError(
                f"memory.strategy must be one of {', '.join(MEMINFO_STRATEGIES)}, "
                f"got {self.memory.strategy!r}"
            )

    def to_yaml(self, path: str):
        """Save configuration to YAML file."""
        data = {
            "paths": {
                "proc_root": self.paths.proc_root,
                "hwmon_root": self.paths.hwmon_root,
                "cpu_sysfs_root": self.paths.cpu_sysfs_root,
            },
            "sampling": {
                "rate": self.sampling.rate,
                "duration": self.sampling.duration,
                "load_interval": self.sampling.load_interval,
                "cpu_count": self.sampling.cpu_count,
            },
            "devices": {
                "power_sensor": self.devices.power_sensor,
                "sysmon": self.devices.sysmon,
                "cache_lookups": self.devices.cache_lookups,
            },
            "memory": {
                "strategy": self.memory.strategy,
            },
            "logging": {
                "level": self.logging.level,
                "file_path": self.logging.file_path,
            },
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    # Check common locations
    candidates = [
        Path("config/platformstats.yaml"),
        Path("platformstats.yaml"),
        Path.home() / ".platformstats" / "config.yaml",
        Path("/etc/platformstats/config.yaml"),
    ]

    for path in candidates:
        if path.exists():
            return str(path)

    # Return the first candidate as default
    return str(candidates[0])

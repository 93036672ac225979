"""Fixture trees that mimic procfs and sysfs on a ZynqMP board."""

from pathlib import Path

import pytest

from platformstats.collectors.cpu import CpuCollector
from platformstats.core.config import Config


PROC_STAT = """\
cpu  200 0 100 1600 100 0 0 0 0 0
cpu0 100 0 50 800 50 0 0 0 0 0
cpu1 100 0 50 800 50 0 0 0 0 0
intr 12345 0 0 1 2 3 4 5
ctxt 998877
btime 1700000000
processes 4242
"""

# Layout of a 5.x ZynqMP kernel
PROC_MEMINFO = """\
MemTotal:        4022348 kB
MemFree:         3421020 kB
MemAvailable:    3611132 kB
Buffers:           10300 kB
Cached:           248832 kB
SwapCached:            0 kB
Active:            66012 kB
Inactive:         241988 kB
Active(anon):        644 kB
Inactive(anon):    64268 kB
Active(file):      65368 kB
Inactive(file):   177720 kB
Unevictable:           0 kB
Mlocked:               0 kB
SwapTotal:        524284 kB
SwapFree:         524000 kB
Dirty:                 8 kB
Writeback:             0 kB
AnonPages:         48924 kB
Mapped:            57596 kB
Shmem:             16044 kB
KReclaimable:      20412 kB
Slab:              45852 kB
SReclaimable:      20412 kB
SUnreclaim:        25440 kB
KernelStack:        2896 kB
PageTables:         1524 kB
NFS_Unstable:          0 kB
Bounce:                0 kB
WritebackTmp:          0 kB
CommitLimit:     2535456 kB
Committed_AS:     180996 kB
VmallocTotal:   135290159040 kB
VmallocUsed:        5560 kB
VmallocChunk:          0 kB
Percpu:              912 kB
AnonHugePages:         0 kB
ShmemHugePages:        0 kB
ShmemPmdMapped:        0 kB
FileHugePages:         0 kB
FilePmdMapped:         0 kB
CmaTotal:         262144 kB
CmaFree:          260724 kB
HugePages_Total:       0
HugePages_Free:        0
Hugepagesize:       2048 kB
"""


def positional_meminfo() -> str:
    """meminfo laid out at the fixed offsets the positional strategy reads."""
    lines = [f"Filler{i}:        {i} kB" for i in range(45)]
    lines[0] = "MemTotal:        4022348 kB"
    lines[2] = "MemFree:         3421020 kB"
    lines[4] = "MemAvailable:    3611132 kB"
    lines[14] = "SwapTotal:        524284 kB"
    lines[16] = "SwapFree:         524000 kB"
    lines[41] = "CmaTotal:         262144 kB"
    lines[43] = "CmaFree:          260724 kB"
    return "\n".join(lines) + "\n"


def write_hwmon(root: Path, hwmon_id: int, name: str, entries: dict) -> Path:
    device = root / f"hwmon{hwmon_id}"
    device.mkdir(parents=True)
    (device / "name").write_text(f"{name}\n")
    for entry, value in entries.items():
        (device / entry).write_text(f"{value}\n")
    return device


@pytest.fixture
def proc_root(tmp_path):
    root = tmp_path / "proc"
    root.mkdir()
    (root / "stat").write_text(PROC_STAT)
    (root / "meminfo").write_text(PROC_MEMINFO)
    return root


@pytest.fixture
def cpu_root(tmp_path):
    root = tmp_path / "cpu"
    for cpu_id, khz in enumerate([1199999, 1333333]):
        cpufreq = root / f"cpu{cpu_id}" / "cpufreq"
        cpufreq.mkdir(parents=True)
        (cpufreq / "cpuinfo_cur_freq").write_text(f"{khz}\n")
    return root


@pytest.fixture
def hwmon_root(tmp_path):
    root = tmp_path / "hwmon"
    root.mkdir()
    write_hwmon(root, 0, "foo", {"temp1_input": 40000})
    write_hwmon(root, 1, "ina260_u14", {
        "power1_input": 5000000,
        "curr1_input": 417,
        "in1_input": 12000,
    })
    write_hwmon(root, 2, "ams", {
        "temp1_input": 45123,
        "temp2_input": 46999,
        "temp3_input": 44010,
        "in1_input": 1200,
        "in3_input": 850,
        "in6_input": 1190,
        "in7_input": 850,
        "in9_input": 851,
        "in13_input": 1800,
        "in16_input": 851,
        "in17_input": 1801,
    })
    return root


@pytest.fixture
def config(proc_root, cpu_root, hwmon_root):
    config = Config()
    config.paths.proc_root = str(proc_root)
    config.paths.cpu_sysfs_root = str(cpu_root)
    config.paths.hwmon_root = str(hwmon_root)
    config.sampling.cpu_count = 2
    config.sampling.load_interval = 0
    return config


@pytest.fixture
def advance_stat(proc_root, monkeypatch):
    """Make the CPU sampling pause advance the counters of cpu0 and cpu1."""
    def fake_pause(collector):
        (proc_root / "stat").write_text(
            "cpu  220 0 100 1620 100 0 0 0 0 0\n"
            "cpu0 110 0 50 800 50 0 0 0 0 0\n"
            "cpu1 110 0 50 820 50 0 0 0 0 0\n"
        )

    monkeypatch.setattr(CpuCollector, "_pause", fake_pause)
    return fake_pause

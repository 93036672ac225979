"""Tests for board power and AMS telemetry."""

import pytest

from platformstats.collectors.hwmon import HwmonLocator
from platformstats.collectors.power import PowerCollector
from platformstats.core.errors import DeviceNotFound, InvalidState


@pytest.fixture
def collector(hwmon_root):
    return PowerCollector(HwmonLocator(str(hwmon_root)))


@pytest.fixture
def feed_samples(hwmon_root, monkeypatch):
    """Write the next reading into the INA260 entries on every pause."""
    device = hwmon_root / "hwmon1"
    readings = iter([
        (2000000, 500, 12010),
        (3000000, 600, 12020),
        (4000000, 700, 12030),
    ])
    sleeps = []

    def fake_pause(collector, seconds):
        sleeps.append(seconds)
        power_uw, current_ma, voltage_mv = next(readings)
        (device / "power1_input").write_text(f"{power_uw}\n")
        (device / "curr1_input").write_text(f"{current_ma}\n")
        (device / "in1_input").write_text(f"{voltage_mv}\n")

    (device / "power1_input").write_text("1000000\n")
    (device / "curr1_input").write_text("400\n")
    (device / "in1_input").write_text("12000\n")
    monkeypatch.setattr(PowerCollector, "_pause", fake_pause)
    return sleeps


def test_samples_are_averaged(collector, feed_samples):
    samples = list(collector.sample_ina260(rate=2, duration=3))

    assert [s.power_mw for s in samples] == [1000, 2000, 3000]
    assert [s.avg_power_mw for s in samples] == [1000, 1500, 2000]
    assert [s.current_ma for s in samples] == [400, 500, 600]
    assert [s.avg_current_ma for s in samples] == [400, 450, 500]
    assert [s.avg_voltage_mv for s in samples] == [12000, 12005, 12010]
    assert feed_samples == [2, 2]


def test_single_sample_does_not_sleep(collector, feed_samples):
    samples = list(collector.sample_ina260(rate=1, duration=1))

    assert len(samples) == 1
    assert samples[0].power_mw == 1000
    assert samples[0].avg_power_mw == 1000
    assert feed_samples == []


def test_microwatts_truncate_to_milliwatts(collector, hwmon_root):
    (hwmon_root / "hwmon1" / "power1_input").write_text("4999999\n")
    sample = next(collector.sample_ina260(duration=1))
    assert sample.power_mw == 4999


def test_missing_rail_is_none_not_fatal(collector, hwmon_root):
    (hwmon_root / "hwmon1" / "curr1_input").unlink()
    sample = next(collector.sample_ina260(duration=1))

    assert sample.power_mw == 5000
    assert sample.current_ma is None
    assert sample.avg_current_ma is None
    assert sample.voltage_mv == 12000


def test_non_positive_duration_is_invalid(collector):
    with pytest.raises(InvalidState):
        next(collector.sample_ina260(duration=0))


def test_missing_power_sensor(tmp_path):
    (tmp_path / "hwmon").mkdir()
    collector = PowerCollector(HwmonLocator(str(tmp_path / "hwmon")))
    with pytest.raises(DeviceNotFound):
        next(collector.sample_ina260(duration=1))


def test_sysmon_reads_rails_and_temperatures(collector):
    sysmon = collector.get_sysmon()

    assert sysmon.device.hwmon_id == 2
    assert sysmon.lpd_temp_mc == 45123
    assert sysmon.to_celsius(sysmon.fpd_temp_mc) == 46
    assert sysmon.pl_temp_mc == 44010
    assert sysmon.vcc_pspll_mv == 1200
    assert sysmon.ps_io_bank_500_mv == 1800
    assert sysmon.vtt_ps_gtr_mv == 1801


def test_sysmon_missing_rail_is_none(collector, hwmon_root):
    (hwmon_root / "hwmon2" / "in17_input").unlink()
    sysmon = collector.get_sysmon()

    assert sysmon.vtt_ps_gtr_mv is None
    assert sysmon.vcc_ps_gtr_mv == 851


def test_negative_rate_is_invalid(collector):
    with pytest.raises(InvalidState):
        next(collector.sample_ina260(rate=-1, duration=2))


def test_negative_rate_fails_only_power_section(config):
    from platformstats.collectors.platform_collector import PlatformCollector

    config.sampling.rate = -1
    config.sampling.duration = 2
    snapshot = PlatformCollector(config).collect(["power", "cma", "cpu_freq"])

    assert snapshot.power.samples == []
    assert snapshot.errors == ["Power utilization: power sampling rate must not be negative, got -1"]
    assert snapshot.sysmon.device.name == "ams"
    assert snapshot.memory.cma_total == 262144
    assert [f.cpu_id for f in snapshot.cpu_frequency] == [0, 1]

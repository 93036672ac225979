"""Tests for hwmon device lookup."""

import pytest

from platformstats.collectors.hwmon import HwmonLocator
from platformstats.core.errors import DeviceNotFound, IOUnavailable

from conftest import write_hwmon


@pytest.fixture
def two_devices(tmp_path):
    root = tmp_path / "hwmon"
    write_hwmon(root, 0, "foo", {})
    write_hwmon(root, 1, "ina260_u14", {})
    return root


def test_count_only_hwmon_entries(two_devices):
    (two_devices / "power").mkdir()
    assert HwmonLocator(str(two_devices)).count_devices() == 2


def test_count_missing_root_is_io_unavailable(tmp_path):
    with pytest.raises(IOUnavailable):
        HwmonLocator(str(tmp_path / "absent")).count_devices()


def test_resolve_id_finds_device(two_devices):
    locator = HwmonLocator(str(two_devices))
    assert locator.resolve_id("ina260_u14") == 1


def test_resolve_id_not_found_returns_none(two_devices):
    locator = HwmonLocator(str(two_devices))
    assert locator.resolve_id("missing") is None


def test_match_is_exact_and_case_sensitive(two_devices):
    locator = HwmonLocator(str(two_devices))
    assert locator.resolve_id("INA260_U14") is None
    assert locator.resolve_id("ina260") is None


def test_first_match_wins(tmp_path):
    root = tmp_path / "hwmon"
    write_hwmon(root, 0, "ams", {})
    write_hwmon(root, 1, "ams", {})
    assert HwmonLocator(str(root)).resolve_id("ams") == 0


def test_unreadable_name_is_skipped(tmp_path):
    root = tmp_path / "hwmon"
    (root / "hwmon0").mkdir(parents=True)
    write_hwmon(root, 1, "ams", {})
    assert HwmonLocator(str(root)).resolve_id("ams") == 1


def test_find_device_raises_when_missing(two_devices):
    locator = HwmonLocator(str(two_devices))

    device = locator.find_device("ina260_u14")
    assert device.hwmon_id == 1
    assert device.path.endswith("hwmon1")

    with pytest.raises(DeviceNotFound) as exc_info:
        locator.find_device("ams")
    assert "no hwmon device found for ams" in str(exc_info.value)


def test_lookup_rescans_without_cache(two_devices):
    locator = HwmonLocator(str(two_devices))
    assert locator.resolve_id("ina260_u14") == 1

    (two_devices / "hwmon1" / "name").write_text("renamed\n")
    assert locator.resolve_id("ina260_u14") is None


def test_cache_remembers_resolved_ids(two_devices):
    locator = HwmonLocator(str(two_devices), cache=True)
    assert locator.resolve_id("ina260_u14") == 1

    (two_devices / "hwmon1" / "name").write_text("renamed\n")
    assert locator.resolve_id("ina260_u14") == 1


def test_list_devices(two_devices):
    names = [(d.hwmon_id, d.name) for d in HwmonLocator(str(two_devices)).list_devices()]
    assert names == [(0, "foo"), (1, "ina260_u14")]

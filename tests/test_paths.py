"""Tests for amdgpu_settings.paths - sysfs directory resolution."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from amdgpu_settings.errors import DeviceNotFoundError, HardwareMonitorNotFoundError
from amdgpu_settings.paths import DevicePaths, resolve_device
from tests.conftest import make_card


class TestResolveDevice:
    def test_resolves_home_and_hwmon(self, drm_root, card0):
        paths = resolve_device(0, str(drm_root))
        assert paths.home_path == str(card0)
        assert paths.hwmon_path == str(card0 / "hwmon" / "hwmon3")

    def test_picks_the_right_card(self, drm_root):
        make_card(drm_root, index=0, hwmon="hwmon2")
        card1 = make_card(drm_root, index=1, hwmon="hwmon5")
        paths = resolve_device(1, str(drm_root))
        assert paths.hwmon_path == str(card1 / "hwmon" / "hwmon5")

    def test_missing_device(self, drm_root, card0):
        with pytest.raises(DeviceNotFoundError):
            resolve_device(7, str(drm_root))

    def test_missing_device_checked_before_any_open(self, drm_root):
        with patch("builtins.open") as mock_open, patch("glob.glob") as mock_glob:
            with pytest.raises(DeviceNotFoundError):
                resolve_device(0, str(drm_root))
        mock_open.assert_not_called()
        mock_glob.assert_not_called()

    def test_missing_hwmon(self, drm_root):
        make_card(drm_root, hwmon=None)
        with pytest.raises(HardwareMonitorNotFoundError):
            resolve_device(0, str(drm_root))

    def test_hwmon_file_is_not_a_directory(self, drm_root):
        home = make_card(drm_root, hwmon=None)
        (home / "hwmon").mkdir()
        (home / "hwmon" / "hwmon0").write_text("")
        with pytest.raises(HardwareMonitorNotFoundError):
            resolve_device(0, str(drm_root))


class TestDevicePaths:
    def test_control_file_locations(self):
        paths = DevicePaths(home_path="/d", hwmon_path="/d/hwmon/hwmon1")
        assert paths.performance_level == os.path.join("/d", "power_dpm_force_performance_level")
        assert paths.power_profile_mode == os.path.join("/d", "pp_power_profile_mode")
        assert paths.od_clk_voltage == os.path.join("/d", "pp_od_clk_voltage")
        assert paths.power_cap == os.path.join("/d/hwmon/hwmon1", "power1_cap")
        assert paths.power_cap_default == os.path.join("/d/hwmon/hwmon1", "power1_cap_default")
        assert paths.fan_file("fan_zero_rpm_enable") == os.path.join(
            "/d", "gpu_od", "fan_ctrl", "fan_zero_rpm_enable")

"""Tests for amdgpu_settings.reset - restoring card defaults."""

from __future__ import annotations

import pytest

from amdgpu_settings.errors import ControlFileUnavailableError
from amdgpu_settings.paths import resolve_device
from amdgpu_settings.reset import DeviceReset
from tests.conftest import RecordingWriter, make_card


class TestDeviceReset:
    def test_reset_order(self, paths):
        writer = RecordingWriter(reads={paths.power_cap_default: "220000000"})
        DeviceReset(writer).reset(paths)

        assert writer.writes == [
            (paths.performance_level, "auto"),
            (paths.power_cap, "220000000"),
            (paths.power_profile_mode, "0"),
            (paths.od_clk_voltage, "r"),
        ]

    def test_reset_on_sysfs_tree(self, drm_root):
        home = make_card(drm_root, default_cap="220000000")
        paths = resolve_device(0, str(drm_root))
        DeviceReset().reset(paths)

        assert (home / "hwmon" / "hwmon3" / "power1_cap").read_text() == "220000000"
        assert (home / "pp_od_clk_voltage").read_text() == "r"
        assert (home / "power_dpm_force_performance_level").read_text() == "auto"
        assert (home / "pp_power_profile_mode").read_text() == "0"

    def test_missing_default_cap(self, drm_root):
        home = make_card(drm_root)
        (home / "hwmon" / "hwmon3" / "power1_cap_default").unlink()
        paths = resolve_device(0, str(drm_root))

        with pytest.raises(ControlFileUnavailableError) as excinfo:
            DeviceReset().reset(paths)
        assert excinfo.value.step == "default power cap"
        assert (home / "power_dpm_force_performance_level").read_text() == "auto"
        assert (home / "pp_od_clk_voltage").read_text().startswith("OD_SCLK:")

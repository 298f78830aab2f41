"""Shared fixtures: a fake sysfs tree and a recording writer."""

from __future__ import annotations

import os

import pytest

from amdgpu_settings.config import ConfigManager
from amdgpu_settings.control import ControlWriter
from amdgpu_settings.errors import ControlFileUnavailableError
from amdgpu_settings.paths import DevicePaths


class RecordingWriter(ControlWriter):
    """Records writes in order instead of touching the filesystem."""

    def __init__(self, missing=(), failing=(), reads=None):
        self.writes: list[tuple[str, str]] = []
        self.missing = set(missing)
        self.failing = set(failing)
        self.reads = reads or {}

    def write(self, path, value):
        if path in self.missing:
            raise ControlFileUnavailableError(path, "No such file or directory", missing=True)
        if path in self.failing:
            raise OSError(22, "Invalid argument")
        self.writes.append((path, value))

    def read(self, path):
        if path in self.reads:
            return self.reads[path]
        return super().read(path)

    def values_for(self, path):
        return [value for p, value in self.writes if p == path]


FAN_FILES = ("fan_target_temperature", "fan_zero_rpm_enable", "fan_zero_rpm_stop_temperature")


def make_card(drm_root, index=0, hwmon="hwmon3", fan_files=FAN_FILES, default_cap="220000000"):
    """Create card<index>/device with the amdgpu control files under drm_root."""
    home = drm_root / f"card{index}" / "device"
    home.mkdir(parents=True)
    (home / "power_dpm_force_performance_level").write_text("auto\n")
    (home / "pp_power_profile_mode").write_text("0 BOOTUP_DEFAULT*\n1 3D_FULL_SCREEN\n")
    (home / "pp_od_clk_voltage").write_text("OD_SCLK:\n0: 500Mhz\n1: 2500Mhz\n")
    (home / "pp_dpm_sclk").write_text("0: 500Mhz\n1: 2500Mhz *\n")
    fan_dir = home / "gpu_od" / "fan_ctrl"
    fan_dir.mkdir(parents=True)
    for name in fan_files:
        (fan_dir / name).write_text("0\n")
    if hwmon:
        hwmon_dir = home / "hwmon" / hwmon
        hwmon_dir.mkdir(parents=True)
        (hwmon_dir / "power1_cap").write_text("200000000\n")
        (hwmon_dir / "power1_cap_default").write_text(f"{default_cap}\n")
    return home


@pytest.fixture
def drm_root(tmp_path):
    root = tmp_path / "drm"
    root.mkdir()
    return root


@pytest.fixture
def card0(drm_root):
    return make_card(drm_root)


@pytest.fixture
def paths():
    home = os.path.join("/fake", "card0", "device")
    return DevicePaths(home_path=home, hwmon_path=os.path.join(home, "hwmon", "hwmon0"))


@pytest.fixture(autouse=True)
def fresh_config():
    """ConfigManager is a singleton; give each test its own instance."""
    ConfigManager._instance = None
    yield
    ConfigManager._instance = None

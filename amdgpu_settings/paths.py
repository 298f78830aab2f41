#!/usr/bin/env python3
"""
Device path resolution.

Finds the sysfs directories for a card: the device attribute directory and
its hardware-monitor directory.
"""

import glob
import logging
import os
from dataclasses import dataclass

from .errors import DeviceNotFoundError, HardwareMonitorNotFoundError

DRM_ROOT = "/sys/class/drm"

# Control files under the device directory
PERFORMANCE_LEVEL_FILE = "power_dpm_force_performance_level"
POWER_PROFILE_MODE_FILE = "pp_power_profile_mode"
OD_CLK_VOLTAGE_FILE = "pp_od_clk_voltage"
DPM_SCLK_FILE = "pp_dpm_sclk"
DPM_MCLK_FILE = "pp_dpm_mclk"
FAN_CTRL_DIR = os.path.join("gpu_od", "fan_ctrl")
FAN_TARGET_TEMPERATURE_FILE = "fan_target_temperature"
FAN_ZERO_RPM_ENABLE_FILE = "fan_zero_rpm_enable"
FAN_ZERO_RPM_STOP_TEMPERATURE_FILE = "fan_zero_rpm_stop_temperature"

# Control files under the hwmon directory
POWER_CAP_FILE = "power1_cap"
POWER_CAP_DEFAULT_FILE = "power1_cap_default"


@dataclass(frozen=True)
class DevicePaths:
    """Resolved sysfs locations for one card."""
    home_path: str
    hwmon_path: str

    def device_file(self, name: str) -> str:
        return os.path.join(self.home_path, name)

    def fan_file(self, name: str) -> str:
        return os.path.join(self.home_path, FAN_CTRL_DIR, name)

    def hwmon_file(self, name: str) -> str:
        return os.path.join(self.hwmon_path, name)

    @property
    def performance_level(self) -> str:
        return self.device_file(PERFORMANCE_LEVEL_FILE)

    @property
    def power_profile_mode(self) -> str:
        return self.device_file(POWER_PROFILE_MODE_FILE)

    @property
    def od_clk_voltage(self) -> str:
        return self.device_file(OD_CLK_VOLTAGE_FILE)

    @property
    def power_cap(self) -> str:
        return self.hwmon_file(POWER_CAP_FILE)

    @property
    def power_cap_default(self) -> str:
        return self.hwmon_file(POWER_CAP_DEFAULT_FILE)


def resolve_device(device_index: int, drm_root: str = DRM_ROOT) -> DevicePaths:
    """
    Resolve the sysfs directories for a card.

    Args:
        device_index: Card number, as in /sys/class/drm/card<N>
        drm_root: Root of the DRM class directory

    Raises:
        DeviceNotFoundError: If card<N>/device does not exist
        HardwareMonitorNotFoundError: If the card has no hwmon directory
    """
    home_path = os.path.join(drm_root, f"card{device_index}", "device")
    if not os.path.isdir(home_path):
        raise DeviceNotFoundError(f"No device directory for card {device_index}: {home_path}")

    # One hwmon<N> per card is expected; the suffix is assigned at boot.
    for hwmon_path in sorted(glob.glob(os.path.join(home_path, "hwmon", "hwmon*"))):
        if os.path.isdir(hwmon_path):
            logging.debug("card%d: device=%s hwmon=%s", device_index, home_path, hwmon_path)
            return DevicePaths(home_path=home_path, hwmon_path=hwmon_path)

    raise HardwareMonitorNotFoundError(f"No hwmon directory for card {device_index} under {home_path}")

#!/usr/bin/env python3
"""
Device reading module.

Reads the current contents of a card's control files for display.
"""

from typing import Dict, List, Optional, Tuple

from .control import ControlWriter
from .errors import ControlFileUnavailableError
from .paths import (
    DevicePaths,
    DPM_MCLK_FILE,
    DPM_SCLK_FILE,
    FAN_TARGET_TEMPERATURE_FILE,
    FAN_ZERO_RPM_ENABLE_FILE,
    FAN_ZERO_RPM_STOP_TEMPERATURE_FILE,
    OD_CLK_VOLTAGE_FILE,
    PERFORMANCE_LEVEL_FILE,
    POWER_CAP_DEFAULT_FILE,
    POWER_CAP_FILE,
    POWER_PROFILE_MODE_FILE,
)


def format_power(microwatts: Optional[str]) -> Optional[str]:
    """Render a microwatt reading as watts, e.g. '180000000' -> '180.0 W'."""
    if microwatts is None:
        return None
    try:
        return f"{int(microwatts) / 1_000_000:.1f} W"
    except ValueError:
        return microwatts


class DeviceReader:
    """
    Reads control files of one card.

    Files that do not exist or cannot be read are reported as None rather
    than failing the whole read.
    """

    def __init__(self, paths: DevicePaths, reader: Optional[ControlWriter] = None):
        self.paths = paths
        self.reader = reader or ControlWriter()

    def _entries(self) -> List[Tuple[str, str]]:
        p = self.paths
        return [
            ("performance level", p.device_file(PERFORMANCE_LEVEL_FILE)),
            ("power profile mode", p.device_file(POWER_PROFILE_MODE_FILE)),
            ("overdrive", p.device_file(OD_CLK_VOLTAGE_FILE)),
            ("core clock levels", p.device_file(DPM_SCLK_FILE)),
            ("memory clock levels", p.device_file(DPM_MCLK_FILE)),
            ("power cap", p.hwmon_file(POWER_CAP_FILE)),
            ("default power cap", p.hwmon_file(POWER_CAP_DEFAULT_FILE)),
            ("fan target temperature", p.fan_file(FAN_TARGET_TEMPERATURE_FILE)),
            ("fan zero RPM enable", p.fan_file(FAN_ZERO_RPM_ENABLE_FILE)),
            ("fan zero RPM stop temperature", p.fan_file(FAN_ZERO_RPM_STOP_TEMPERATURE_FILE)),
        ]

    def _read_file(self, path: str) -> Optional[str]:
        try:
            return self.reader.read(path)
        except ControlFileUnavailableError:
            return None

    def read(self) -> Dict[str, Optional[str]]:
        """Return label -> file content, in display order."""
        return {label: self._read_file(path) for label, path in self._entries()}

    def render(self) -> str:
        """Format the current state as text for the terminal."""
        lines = [f"Device: {self.paths.home_path}", f"Hwmon:  {self.paths.hwmon_path}"]
        for label, value in self.read().items():
            if label in ("power cap", "default power cap"):
                value = format_power(value)
            if value is None:
                lines.append(f"{label}: unavailable")
            elif "\n" in value:
                lines.append(f"{label}:")
                lines.extend(f"    {row}" for row in value.splitlines())
            else:
                lines.append(f"{label}: {value}")
        return "\n".join(lines)

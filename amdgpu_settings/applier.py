#!/usr/bin/env python3
"""
Settings application module.

Writes DeviceSettings to a card's control files. The write order matters:
the performance level must be manual before overrides are accepted, and a
power cap write resets pending overrides on some hardware, so it goes first.
All clock and voltage tokens go to pp_od_clk_voltage and end with a commit.

Writes are not transactional. The first failing step aborts the rest and
leaves earlier writes in place.
"""

import logging
from typing import List, Optional

from .commands import StepResult, WriteControlCommand
from .control import ControlWriter
from .paths import (
    DevicePaths,
    FAN_TARGET_TEMPERATURE_FILE,
    FAN_ZERO_RPM_ENABLE_FILE,
    FAN_ZERO_RPM_STOP_TEMPERATURE_FILE,
)
from .profile import DeviceSettings

DEFAULT_PERFORMANCE_LEVEL = "manual"
COMMIT_TOKEN = "c"


class SettingsApplier:
    """
    Applies DeviceSettings to a resolved device.

    plan() builds the ordered list of write commands; apply() executes it.
    """

    def __init__(self, writer: Optional[ControlWriter] = None):
        """Initialize the applier with the writer used for every control file."""
        self.writer = writer or ControlWriter()

    def _command(self, step: str, path: str, value: object,
                 optional: bool = False) -> WriteControlCommand:
        return WriteControlCommand(step, path, str(value), self.writer, optional=optional)

    def plan(self, settings: DeviceSettings, paths: DevicePaths) -> List[WriteControlCommand]:
        """Return the write commands for settings, in hardware-safe order."""
        steps = [self._command(
            "performance level",
            paths.performance_level,
            settings.performance_level or DEFAULT_PERFORMANCE_LEVEL,
        )]

        if settings.power_cap is not None:
            steps.append(self._command("power cap", paths.power_cap, settings.power_cap))

        if settings.power_profile_index is not None:
            steps.append(self._command(
                "power profile", paths.power_profile_mode, settings.power_profile_index))

        if settings.fan_target_temperature is not None:
            steps.append(self._command(
                "fan target temperature",
                paths.fan_file(FAN_TARGET_TEMPERATURE_FILE),
                settings.fan_target_temperature,
            ))

        # Zero-RPM controls only exist on newer kernels
        if settings.fan_zero_rpm_enabled is not None:
            steps.append(self._command(
                "fan zero RPM enable",
                paths.fan_file(FAN_ZERO_RPM_ENABLE_FILE),
                1 if settings.fan_zero_rpm_enabled else 0,
                optional=True,
            ))

        if settings.fan_zero_rpm_stop_temperature is not None:
            steps.append(self._command(
                "fan zero RPM stop temperature",
                paths.fan_file(FAN_ZERO_RPM_STOP_TEMPERATURE_FILE),
                settings.fan_zero_rpm_stop_temperature,
                optional=True,
            ))

        steps.extend(self._override_plan(settings, paths))
        return steps

    def _override_plan(self, settings: DeviceSettings,
                       paths: DevicePaths) -> List[WriteControlCommand]:
        """Tokens for pp_od_clk_voltage, always ending with the commit token."""
        od_file = paths.od_clk_voltage
        tokens = []

        if settings.clock_offset_single is not None:
            tokens.append(("core clock offset", f"s {settings.clock_offset_single}"))
        else:
            if settings.clock_offset_min is not None:
                tokens.append(("core clock min", f"s 0 {settings.clock_offset_min}"))
            if settings.clock_offset_max is not None:
                tokens.append(("core clock max", f"s 1 {settings.clock_offset_max}"))

        if settings.memory_clock_min is not None:
            tokens.append(("memory clock min", f"m 0 {settings.memory_clock_min}"))
        if settings.memory_clock_max is not None:
            tokens.append(("memory clock max", f"m 1 {settings.memory_clock_max}"))

        if settings.voltage_offset is not None:
            tokens.append(("voltage offset", f"vo {settings.voltage_offset}"))

        tokens.append(("commit overrides", COMMIT_TOKEN))
        return [self._command(step, od_file, token) for step, token in tokens]

    def apply(self, settings: DeviceSettings, paths: DevicePaths) -> List[StepResult]:
        """
        Write settings to the device.

        Args:
            settings: Parsed profile settings
            paths: Resolved paths for settings.device_index

        Returns:
            One StepResult per executed step

        Raises:
            ApplyError: If a write fails after its file was opened
            ControlFileUnavailableError: If a required control file is missing
        """
        if settings.clock_offset_single is not None and (
                settings.clock_offset_min is not None or settings.clock_offset_max is not None):
            logging.info("OD_SCLK_OFFSET set; ignoring OD_SCLK min/max")

        steps = self.plan(settings, paths)
        logging.info("Applying %d settings to %s", len(steps), paths.home_path)
        results = []
        for command in steps:
            results.append(command.execute())
        skipped = results.count(StepResult.FEATURE_UNAVAILABLE)
        logging.info("Settings applied (%d skipped)", skipped)
        return results

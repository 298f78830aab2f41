#!/usr/bin/env python3
"""Restore a card's factory defaults."""

import logging
from typing import List, Optional

from .commands import StepResult, WriteControlCommand
from .control import ControlWriter
from .errors import ControlFileUnavailableError
from .paths import DevicePaths

AUTO_PERFORMANCE_LEVEL = "auto"
BOOTUP_DEFAULT_PROFILE_INDEX = 0
RESET_TOKEN = "r"


class DeviceReset:
    """
    Returns a card to automatic control.

    The power cap default comes from power1_cap_default, which the firmware
    supplies. Writing 'r' to pp_od_clk_voltage drops committed overrides.
    """

    def __init__(self, writer: Optional[ControlWriter] = None):
        self.writer = writer or ControlWriter()

    def reset(self, paths: DevicePaths) -> List[StepResult]:
        """
        Reset the device.

        Raises:
            ControlFileUnavailableError: If the default power cap cannot be read
                or a control file is missing
            ApplyError: If a write fails
        """
        logging.info("Resetting %s", paths.home_path)
        results = [WriteControlCommand(
            "performance level", paths.performance_level,
            AUTO_PERFORMANCE_LEVEL, self.writer).execute()]

        try:
            default_cap = self.writer.read(paths.power_cap_default)
        except ControlFileUnavailableError as exc:
            raise ControlFileUnavailableError(
                exc.path, exc.reason, missing=exc.missing, step="default power cap") from exc
        results.append(WriteControlCommand(
            "power cap", paths.power_cap, default_cap, self.writer).execute())

        results.append(WriteControlCommand(
            "power profile", paths.power_profile_mode,
            str(BOOTUP_DEFAULT_PROFILE_INDEX), self.writer).execute())
        results.append(WriteControlCommand(
            "reset overrides", paths.od_clk_voltage, RESET_TOKEN, self.writer).execute())
        return results

#!/usr/bin/env python3
"""
Exception types raised while parsing profiles and driving the device.

Every error derives from AmdgpuSettingsError so the CLI can catch one type
and report the failed step.
"""

from typing import Optional


class AmdgpuSettingsError(Exception):
    """Base exception for amdgpu-settings errors."""
    pass


class FormatError(AmdgpuSettingsError):
    """Raised when profile text is malformed or a value has the wrong type."""
    pass


class DeviceNotFoundError(AmdgpuSettingsError):
    """Raised when the card's device directory does not exist."""
    pass


class HardwareMonitorNotFoundError(AmdgpuSettingsError):
    """Raised when no hwmon directory exists for the card."""
    pass


class ControlFileUnavailableError(AmdgpuSettingsError):
    """Raised when a control file is missing or cannot be opened."""

    def __init__(self, path: str, reason: str = "", missing: bool = False,
                 step: Optional[str] = None):
        self.path = path
        self.reason = reason
        self.missing = missing
        self.step = step
        message = f"control file unavailable: {path}"
        if reason:
            message = f"{message} ({reason})"
        if step:
            message = f"{step}: {message}"
        super().__init__(message)


class ApplyError(AmdgpuSettingsError):
    """Raised when a write fails after its control file was opened."""

    def __init__(self, step: str, path: str, reason: Optional[str] = None):
        self.step = step
        self.path = path
        message = f"{step}: write to {path} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

"""
AMD GPU Settings Package.

Applies power, clock and fan profiles to AMD GPUs by writing to the
amdgpu sysfs control files.
"""

__version__ = "0.1.0"

# Core components
from .profile import DeviceSettings, parse_profile, load_profile, format_profile
from .paths import DevicePaths, resolve_device
from .applier import SettingsApplier
from .reset import DeviceReset
from .reader import DeviceReader
from .control import ControlWriter, DryRunWriter
from .commands import StepResult, WriteControlCommand
from .config import ConfigManager
from .events import event_bus

# Errors
from .errors import (
    AmdgpuSettingsError,
    FormatError,
    DeviceNotFoundError,
    HardwareMonitorNotFoundError,
    ControlFileUnavailableError,
    ApplyError,
)

__all__ = [
    "DeviceSettings", "parse_profile", "load_profile", "format_profile",
    "DevicePaths", "resolve_device",
    "SettingsApplier", "DeviceReset", "DeviceReader",
    "ControlWriter", "DryRunWriter",
    "StepResult", "WriteControlCommand",
    "ConfigManager",
    "event_bus",
    "AmdgpuSettingsError", "FormatError", "DeviceNotFoundError",
    "HardwareMonitorNotFoundError", "ControlFileUnavailableError", "ApplyError",
    "__version__"
]

#!/usr/bin/env python3
"""
Profile parsing module.

Turns the line-oriented profile text into a DeviceSettings record, and
formats a DeviceSettings back into the same text.

Example profile:

    GPU#: 0
    PERFORMANCE_LEVEL:
    manual
    POWER_CAP:
    180000000
    OD_SCLK:
    0: 500Mhz
    1: 2000Mhz

    OD_VDDGFX_OFFSET:
    -50mV
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .errors import FormatError

DEVICE_PREFIX = "GPU#"
DEVICE_PREFIX_WIDTH = 6   # 4-char token + ": "
BLOCK_VALUE_OFFSET = 3    # selector + ": "
UNIT_MARKERS = "Mm"

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


@dataclass(frozen=True)
class DeviceSettings:
    """Settings for one card, as read from a profile.

    A field left as None was not present in the profile and must leave the
    hardware state untouched.
    """
    device_index: int
    performance_level: Optional[str] = None
    power_profile_index: Optional[int] = None
    clock_offset_min: Optional[int] = None
    clock_offset_max: Optional[int] = None
    clock_offset_single: Optional[int] = None
    memory_clock_min: Optional[int] = None
    memory_clock_max: Optional[int] = None
    voltage_offset: Optional[int] = None
    power_cap: Optional[int] = None
    fan_target_temperature: Optional[int] = None
    fan_zero_rpm_enabled: Optional[bool] = None
    fan_zero_rpm_stop_temperature: Optional[int] = None


def _split_at_unit(text: str) -> str:
    """Return the part of text before the first unit marker."""
    cut = len(text)
    for marker in UNIT_MARKERS:
        pos = text.find(marker)
        if pos != -1 and pos < cut:
            cut = pos
    return text[:cut]


def _parse_int(text: str, directive: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise FormatError(f"Invalid {directive} value: {text!r}")


def _parse_unsigned(text: str, directive: str) -> int:
    value = _parse_int(text, directive)
    if value < 0:
        raise FormatError(f"Invalid {directive} value: {text!r} (must not be negative)")
    return value


def _parse_bool(text: str, directive: str) -> bool:
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise FormatError(f"Invalid {directive} value: {text!r}")


def _parse_level(text: str, directive: str) -> str:
    level = text.strip()
    if not level:
        raise FormatError(f"Missing {directive} value")
    return level


def _parse_voltage(text: str, directive: str) -> int:
    return _parse_int(_split_at_unit(text), directive)


# keyword -> (field, value parser)
SCALAR_DIRECTIVES: Dict[str, tuple] = {
    "PERFORMANCE_LEVEL:": ("performance_level", _parse_level),
    "POWER_PROFILE_INDEX:": ("power_profile_index", _parse_unsigned),
    "OD_SCLK_OFFSET:": ("clock_offset_single", _parse_int),
    "OD_VDDGFX_OFFSET:": ("voltage_offset", _parse_voltage),
    "POWER_CAP:": ("power_cap", _parse_unsigned),
    "FAN_TARGET_TEMPERATURE:": ("fan_target_temperature", _parse_unsigned),
    "FAN_ZERO_RPM_ENABLE:": ("fan_zero_rpm_enabled", _parse_bool),
    "FAN_ZERO_RPM_STOP_TEMPERATURE:": ("fan_zero_rpm_stop_temperature", _parse_unsigned),
}

# keyword -> (field for selector '0', field for selector '1')
BLOCK_DIRECTIVES: Dict[str, tuple] = {
    "OD_SCLK:": ("clock_offset_min", "clock_offset_max"),
    "OD_MCLK:": ("memory_clock_min", "memory_clock_max"),
}


def _parse_device_line(line: str) -> int:
    """Extract the card index from the first profile line (e.g. 'GPU#: 0')."""
    suffix = line.strip()[DEVICE_PREFIX_WIDTH:]
    if not suffix:
        raise FormatError(f"Invalid device line: {line!r}")
    try:
        index = int(suffix)
    except ValueError:
        raise FormatError(
            f"Invalid device line: {line!r}. Check /sys/class/drm/card# for the card index"
        )
    if index < 0:
        raise FormatError(f"Invalid device line: {line!r}")
    return index


def _parse_scalar(keyword: str, lines: List[str], values: Dict[str, object]) -> None:
    """Parse the single data line following a scalar keyword."""
    field, parser = SCALAR_DIRECTIVES[keyword]
    if len(lines) < 2:
        raise FormatError(f"Missing value after {keyword}")
    values[field] = parser(lines[1], keyword.rstrip(":"))


def _parse_block(keyword: str, lines: List[str], values: Dict[str, object]) -> None:
    """
    Parse the data lines following a block keyword, up to the first blank line.

    An unknown selector stops the block; values read before it are kept.
    """
    directive = keyword.rstrip(":")
    min_field, max_field = BLOCK_DIRECTIVES[keyword]
    for line in lines[1:]:
        if not line.strip():
            break
        magnitude = _parse_int(_split_at_unit(line[BLOCK_VALUE_OFFSET:]), directive)
        selector = line[0]
        if selector == "0":
            values[min_field] = magnitude
        elif selector == "1":
            values[max_field] = magnitude
        else:
            logging.warning("Invalid %s option %r, ignoring rest of block", directive, line)
            return


def parse_profile(text: str) -> DeviceSettings:
    """
    Parse profile text into DeviceSettings.

    Args:
        text: Full profile contents

    Returns:
        The parsed settings

    Raises:
        FormatError: If the device line is missing or a value is malformed
    """
    lines = text.splitlines()
    if not lines:
        raise FormatError("Empty profile: expected a device line such as 'GPU#: 0'")

    values: Dict[str, object] = {"device_index": _parse_device_line(lines[0])}

    for i, raw in enumerate(lines):
        keyword = raw.strip()
        if keyword in SCALAR_DIRECTIVES:
            _parse_scalar(keyword, lines[i:], values)
        elif keyword in BLOCK_DIRECTIVES:
            _parse_block(keyword, lines[i:], values)

    settings = DeviceSettings(**values)
    logging.debug("Parsed profile: %s", settings)
    return settings


def load_profile(path: str) -> DeviceSettings:
    """Read and parse a profile file."""
    try:
        with open(path, "r") as f:
            text = f.read()
    except OSError as exc:
        raise FormatError(f"Cannot read profile {path}: {exc}")
    return parse_profile(text)


def _format_bool(value: bool) -> str:
    return "1" if value else "0"


def format_profile(settings: DeviceSettings) -> str:
    """Render settings as profile text; only fields that are set are written."""
    out = [f"{DEVICE_PREFIX}: {settings.device_index}"]

    formatters: Dict[str, Callable[[object], str]] = {
        "fan_zero_rpm_enabled": _format_bool,
        "voltage_offset": lambda v: f"{v}mV",
    }
    for keyword, (field, _) in SCALAR_DIRECTIVES.items():
        value = getattr(settings, field)
        if value is None:
            continue
        out.append(keyword)
        out.append(formatters.get(field, str)(value))

    for keyword, (min_field, max_field) in BLOCK_DIRECTIVES.items():
        low = getattr(settings, min_field)
        high = getattr(settings, max_field)
        if low is None and high is None:
            continue
        out.append(keyword)
        if low is not None:
            out.append(f"0: {low}Mhz")
        if high is not None:
            out.append(f"1: {high}Mhz")
        out.append("")

    return "\n".join(out) + "\n"

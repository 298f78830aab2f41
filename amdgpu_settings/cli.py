#!/usr/bin/env python3
"""amdgpu-settings command line

Applies a text profile of power, clock and fan settings to an AMD GPU through
sysfs, resets a card to its defaults, or shows the current state.

    amdgpu-settings set [PROFILE]
    amdgpu-settings reset CARD_OR_PROFILE
    amdgpu-settings info CARD_OR_PROFILE

CARD_OR_PROFILE is a card number (as in /sys/class/drm/card<N>) or a profile
whose first line names the card.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .applier import SettingsApplier
from .config import ConfigManager, find_config_file
from .control import ControlWriter, DryRunWriter
from .errors import AmdgpuSettingsError
from .events import event_bus
from .paths import DRM_ROOT, resolve_device
from .profile import load_profile
from .reader import DeviceReader
from .reset import DeviceReset


def setup_logging(log_level_str: str = "INFO", log_file_path: Optional[str] = None) -> None:
    """Configure logging for console output and, if given, a log file."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(module)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=handlers,
        force=True,
    )
    logging.debug("Logging initialized at level %s", log_level_str.upper())


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="amdgpu-settings",
        description="Apply power, clock and fan profiles to AMD GPUs.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML configuration file. If not provided, searches in standard locations."
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (overrides the config file)."
    )
    parser.add_argument(
        "--drm-root",
        default=None,
        help="DRM class directory (overrides the config file)."
    )
    sub = parser.add_subparsers(dest="command")

    set_cmd = sub.add_parser("set", help="Apply a profile")
    set_cmd.add_argument("profile", nargs="?", default=None,
                         help="Profile path (default: from config)")
    set_cmd.add_argument("--dry-run", action="store_true",
                         help="Log the writes without performing them")

    reset_cmd = sub.add_parser("reset", help="Restore card defaults")
    reset_cmd.add_argument("target", metavar="CARD_OR_PROFILE")

    info_cmd = sub.add_parser("info", help="Show current card settings")
    info_cmd.add_argument("target", metavar="CARD_OR_PROFILE")

    return parser


def device_index_for(target: str) -> int:
    """Card number from a CLI argument: digits are the index, anything else a profile."""
    if target.isdigit():
        return int(target)
    return load_profile(target).device_index


def _report_write(payload) -> None:
    logging.info("%s -> %s", payload["step"], payload["value"])


def cmd_set(args, config: ConfigManager) -> None:
    profile_path = args.profile or config.default_profile
    logging.info("Loading profile %s", profile_path)
    settings = load_profile(profile_path)
    paths = resolve_device(settings.device_index, args.drm_root)
    writer = DryRunWriter() if args.dry_run else ControlWriter()
    SettingsApplier(writer).apply(settings, paths)


def cmd_reset(args, config: ConfigManager) -> None:
    paths = resolve_device(device_index_for(args.target), args.drm_root)
    DeviceReset().reset(paths)


def cmd_info(args, config: ConfigManager) -> None:
    paths = resolve_device(device_index_for(args.target), args.drm_root)
    print(DeviceReader(paths).render())


COMMANDS = {
    "set": cmd_set,
    "reset": cmd_reset,
    "info": cmd_info,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse args and dispatch to the subcommand.

    Returns 0 on success and 1 when parsing, resolving, applying, resetting
    or reading fails.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = ConfigManager(find_config_file(args.config))
    except (FileNotFoundError, ValueError) as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return 1

    setup_logging(args.log_level or config.log_level, config.log_file)
    if config.config_path:
        logging.debug("Using configuration from: %s", config.config_path)

    if args.drm_root is None:
        args.drm_root = config.drm_root

    # Writing to sysfs requires root; dry runs and test trees do not.
    writes = args.command == "reset" or (args.command == "set" and not args.dry_run)
    on_sysfs = os.path.realpath(args.drm_root) == os.path.realpath(DRM_ROOT)
    if writes and on_sysfs and os.geteuid() != 0:
        logging.error("amdgpu-settings %s must be run as root", args.command)
        return 1

    event_bus.subscribe("control_written", _report_write)
    try:
        COMMANDS[args.command](args, config)
    except AmdgpuSettingsError as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1
    finally:
        event_bus.unsubscribe("control_written", _report_write)
    return 0


if __name__ == "__main__":
    sys.exit(main())

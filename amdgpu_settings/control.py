#!/usr/bin/env python3
"""
Control-file access.

Writes and reads single values on sysfs control files. Each write opens the
file, writes one string and closes it again.
"""

import logging
import os

from .errors import ControlFileUnavailableError


class ControlWriter:
    """Writes strings to sysfs control files."""

    def write(self, path: str, value: str) -> None:
        """
        Write one value to a control file.

        Raises:
            ControlFileUnavailableError: If the file cannot be opened
            OSError: If the kernel rejects the write
        """
        # No O_CREAT: sysfs attributes must already exist
        try:
            f = os.fdopen(os.open(path, os.O_WRONLY | os.O_TRUNC), "w")
        except FileNotFoundError as exc:
            raise ControlFileUnavailableError(path, exc.strerror or str(exc), missing=True)
        except OSError as exc:
            raise ControlFileUnavailableError(path, exc.strerror or str(exc))
        with f:
            f.write(value)
        logging.debug("%s <- %r", path, value)

    def read(self, path: str) -> str:
        """Return the stripped content of a control file."""
        try:
            with open(path, "r") as f:
                return f.read().strip()
        except FileNotFoundError as exc:
            raise ControlFileUnavailableError(path, exc.strerror or str(exc), missing=True)
        except OSError as exc:
            raise ControlFileUnavailableError(path, exc.strerror or str(exc))


class DryRunWriter(ControlWriter):
    """Logs writes instead of performing them. Reads still hit the filesystem."""

    def write(self, path: str, value: str) -> None:
        if not os.path.exists(path):
            raise ControlFileUnavailableError(path, "No such file or directory", missing=True)
        logging.info("[dry-run] %s <- %r", path, value)

#!/usr/bin/env python3
"""
Command pattern implementation for control-file writes.

Each write the applier or reset performs is one WriteControlCommand; a
sequence of commands executed in order is the write plan for a device.
"""

import enum
import logging
from abc import ABC, abstractmethod

from .control import ControlWriter
from .errors import ApplyError, ControlFileUnavailableError
from .events import event_bus


class StepResult(enum.Enum):
    """Outcome of a single executed step."""
    WRITTEN = "written"
    FEATURE_UNAVAILABLE = "feature_unavailable"


class Command(ABC):
    """Base command interface for the Command pattern."""

    @abstractmethod
    def execute(self) -> StepResult:
        """Execute the command."""
        pass


class WriteControlCommand(Command):
    """Command to write one value to one control file."""

    def __init__(self, step: str, path: str, value: str,
                 writer: ControlWriter, optional: bool = False):
        """
        Initialize the command.

        Args:
            step: Human-readable step name, used in errors and logs
            path: Control file to write
            value: String written to the file
            writer: ControlWriter performing the write
            optional: If True, a missing control file is skipped with a notice
        """
        self.step = step
        self.path = path
        self.value = value
        self.writer = writer
        self.optional = optional

    def execute(self) -> StepResult:
        """Write the value; a failure aborts with ApplyError or ControlFileUnavailableError."""
        try:
            self.writer.write(self.path, self.value)
        except ControlFileUnavailableError as exc:
            if self.optional and exc.missing:
                logging.warning("Skipping %s: %s not supported by this kernel", self.step, self.path)
                event_bus.publish("feature_unavailable", {"step": self.step, "path": self.path})
                return StepResult.FEATURE_UNAVAILABLE
            raise ControlFileUnavailableError(
                exc.path, exc.reason, missing=exc.missing, step=self.step) from exc
        except OSError as exc:
            raise ApplyError(self.step, self.path, exc.strerror or str(exc))

        event_bus.publish("control_written", {
            "step": self.step,
            "path": self.path,
            "value": self.value,
        })
        return StepResult.WRITTEN

    def __repr__(self) -> str:
        return f"WriteControlCommand({self.step!r}, {self.path!r}, {self.value!r})"

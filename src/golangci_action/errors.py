# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the lint pipeline."""

from __future__ import annotations


class ActionError(Exception):
    """Base class for failures that mark the run as failed."""


class ConfigConflictError(ActionError):
    """Raised when mutually exclusive options are supplied together."""


class InvalidConfigError(ActionError):
    """Raised when a configuration value is malformed or points nowhere."""


class MalformedOutputError(ActionError):
    """Raised when golangci-lint output cannot be interpreted as a report."""


class ToolFatalError(ActionError):
    """Raised when golangci-lint exits with a fatal status code."""

    def __init__(self, exit_code: int) -> None:
        """Record the exit status reported by the subprocess.

        Args:
            exit_code: Status code returned by golangci-lint.
        """

        super().__init__(f"golangci-lint exit with code {exit_code}")
        self.exit_code = exit_code


class FindingsPresentError(ActionError):
    """Raised when at least one issue meets the configured failure severity."""


class PreparationError(ActionError):
    """Raised when a prerequisite (binary, toolchain, cache) cannot be acquired."""


__all__ = [
    "ActionError",
    "ConfigConflictError",
    "FindingsPresentError",
    "InvalidConfigError",
    "MalformedOutputError",
    "PreparationError",
    "ToolFatalError",
]

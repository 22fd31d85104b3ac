# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console logging that speaks the GitHub Actions workflow-command dialect.

Plain messages are rendered through Rich, while warnings, errors and groups
are written as ``::command::`` lines so the Actions runner can surface them in
the job summary and fold grouped output.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from rich.console import Console
from rich.text import Text


def _escape_data(message: str) -> str:
    """Escape characters that terminate a workflow-command payload."""

    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


@dataclass(slots=True)
class ActionLogger:
    """Adapter around a Rich console emitting workflow-command output."""

    console: Console
    debug_enabled: bool = False
    failure_message: str | None = field(default=None, init=False)

    @property
    def failed(self) -> bool:
        """Return ``True`` once :meth:`set_failed` has been called."""

        return self.failure_message is not None

    def info(self, message: str) -> None:
        """Write an informational line.

        Args:
            message: Text to display.
        """

        self.console.print(Text(message))

    def ok(self, message: str) -> None:
        """Write a success line styled in green.

        Args:
            message: Text describing the successful state.
        """

        self.console.print(Text(message, style="green"))

    def warn(self, message: str) -> None:
        """Emit a ``::warning::`` workflow command.

        Args:
            message: Text describing the warning condition.
        """

        self._command("warning", message)

    def error(self, message: str) -> None:
        """Emit an ``::error::`` workflow command.

        Args:
            message: Text describing the error.
        """

        self._command("error", message)

    def debug(self, message: str) -> None:
        """Emit a ``::debug::`` workflow command when debug output is enabled.

        Args:
            message: Diagnostic payload.
        """

        if self.debug_enabled:
            self._command("debug", message)

    def set_failed(self, message: str) -> None:
        """Mark the run as failed and report ``message`` as an error.

        Args:
            message: User-facing reason for the failure.
        """

        self.failure_message = message
        self.error(message)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Fold everything logged inside the block under ``title``.

        Args:
            title: Label shown for the collapsed group.

        Yields:
            None: Control returns to the caller inside the group.
        """

        self._command("group", title)
        try:
            yield
        finally:
            self._command("endgroup", "")

    def _command(self, name: str, message: str) -> None:
        self.console.print(
            f"::{name}::{_escape_data(message)}",
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )


def build_action_logger(*, debug: bool = False, no_color: bool = False) -> ActionLogger:
    """Return an :class:`ActionLogger` bound to a dedicated Rich console.

    Args:
        debug: Whether ``::debug::`` output should be emitted.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        ActionLogger: Logger writing to standard output.
    """

    console = Console(no_color=no_color, emoji=False, highlight=False, soft_wrap=True)
    return ActionLogger(console=console, debug_enabled=debug)


__all__ = ["ActionLogger", "build_action_logger"]

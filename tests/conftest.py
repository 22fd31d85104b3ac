# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO

import pytest
from rich.console import Console

from golangci_action.logging import ActionLogger
from golangci_action.models import Issue
from golangci_action.severity import Severity

IssueFactory = Callable[..., Issue]


@pytest.fixture
def logger() -> ActionLogger:
    """Return a logger writing to an in-memory console."""

    console = Console(file=StringIO(), width=400, no_color=True, emoji=False, highlight=False, soft_wrap=True)
    return ActionLogger(console=console, debug_enabled=True)


@pytest.fixture
def output(logger: ActionLogger) -> Callable[[], str]:
    """Return a callable yielding everything written to ``logger`` so far."""

    def _read() -> str:
        stream = logger.console.file
        assert isinstance(stream, StringIO)
        return stream.getvalue()

    return _read


@pytest.fixture
def make_issue() -> IssueFactory:
    """Return a factory building issues with sensible defaults."""

    def _make(
        *,
        text: str = "error return value not checked",
        linter: str = "errcheck",
        severity: Severity = Severity.FAILURE,
        filename: str = "pkg/main.go",
        line: int = 10,
        column: int = 0,
        line_range: tuple[int, int] | None = None,
        new_lines: list[str] | None = None,
    ) -> Issue:
        payload: dict[str, object] = {
            "Text": text,
            "FromLinter": linter,
            "Severity": severity,
            "Pos": {"Filename": filename, "Line": line, "Column": column},
        }
        if line_range is not None:
            payload["LineRange"] = {"From": line_range[0], "To": line_range[1]}
        if new_lines is not None:
            payload["Replacement"] = {"NeedOnlyDelete": False, "NewLines": new_lines}
        return Issue.model_validate(payload)

    return _make

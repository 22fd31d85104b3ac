# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell-free subprocess wrapper returning :class:`ExecutionResult` objects."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are passed as argument
# lists and ``shell=True`` is never used.
import subprocess  # nosec B404 - shell-free wrapper around golangci-lint execution
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .models import ExecutionResult


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None


class RunnerCallable(Protocol):
    """Callable protocol for executing an external command."""

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> ExecutionResult:
        """Execute ``args`` and return the captured result."""
        ...


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text, treating ``None`` as empty output."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH`` when it is relative.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list with an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> ExecutionResult:
    """Execute ``args`` and capture its output without raising on failure.

    A non-zero exit status is reported through :attr:`ExecutionResult.code`
    rather than as an exception; golangci-lint uses it to signal findings.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory, environment and timeout overrides.

    Returns:
        ExecutionResult: Captured stdout, stderr and exit status.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    try:
        completed = subprocess.run(  # nosec B603 - argument list, no shell expansion
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            timeout=resolved_options.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        return ExecutionResult(
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
            code=124,
        )
    return ExecutionResult(
        stdout=_ensure_text(completed.stdout),
        stderr=_ensure_text(completed.stderr),
        code=completed.returncode,
    )


__all__ = ["CommandOptions", "RunnerCallable", "run_command"]

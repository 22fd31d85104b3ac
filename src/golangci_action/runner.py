# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble, execute and interpret a golangci-lint invocation."""

from __future__ import annotations

import shlex
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import httpx

from .annotations import AnnotationPublisher, log_issues
from .config import ActionInputs
from .context import RunContext
from .errors import (
    ConfigConflictError,
    FindingsPresentError,
    InvalidConfigError,
    MalformedOutputError,
    ToolFatalError,
)
from .gate import DEFAULT_FAILURE_SEVERITY, resolve_failure_severity, should_fail
from .logging import ActionLogger
from .models import ExecutionResult, Report
from .parser import parse_report
from .process import CommandOptions, RunnerCallable, run_command
from .severity import Severity

OUT_FORMAT_ARG: Final[str] = "out-format"
PATH_PREFIX_ARG: Final[str] = "path-prefix"
NEW_ISSUE_ARGS: Final[frozenset[str]] = frozenset({"new", "new-from-rev", "new-from-patch"})
FINDINGS_EXIT_CODE: Final[int] = 1


@dataclass(frozen=True, slots=True)
class LintInvocation:
    """Concrete command line and working directory for golangci-lint."""

    argv: tuple[str, ...]
    cwd: Path | None = None

    @property
    def display(self) -> str:
        """Return the command as a shell-quoted string for logging."""

        return shlex.join(self.argv)


def collect_arg_names(user_args: str) -> set[str]:
    """Return the option names present in a raw argument string.

    Tokens are split on whitespace; only tokens starting with ``-`` count,
    with leading dashes and any ``=value`` suffix removed.

    Args:
        user_args: Raw ``args`` input.

    Returns:
        set[str]: Option names such as ``"out-format"``.
    """

    names: set[str] = set()
    for token in user_args.split():
        name = token.split("=", 1)[0]
        if name.startswith("-"):
            names.add(name.lstrip("-"))
    return names


def build_invocation(lint_path: Path, patch_path: str, inputs: ActionInputs) -> LintInvocation:
    """Build the golangci-lint command line honouring user arguments.

    Args:
        lint_path: Path of the golangci-lint executable.
        patch_path: Pull request patch for only-new-issues mode, or ``""``.
        inputs: Validated action inputs.

    Returns:
        LintInvocation: Arguments and working directory to execute.

    Raises:
        ConfigConflictError: If user arguments clash with arguments the action controls.
        InvalidConfigError: If the working directory does not exist.
    """

    user_arg_names = collect_arg_names(inputs.args)
    added_args: list[str] = []

    if OUT_FORMAT_ARG in user_arg_names:
        raise ConfigConflictError("please, don't change out-format for golangci-lint: it can be broken in a future")
    added_args.append(f"--{OUT_FORMAT_ARG}=json")

    if patch_path:
        if user_arg_names & NEW_ISSUE_ARGS:
            raise ConfigConflictError("please, don't specify manually --new* args when requesting only new issues")
        added_args.append(f"--new-from-patch={patch_path}")
        # Override config values.
        added_args.extend(("--new=false", "--new-from-rev="))

    cwd: Path | None = None
    working_directory = inputs.working_directory
    if working_directory is not None:
        if patch_path:
            raise ConfigConflictError("options working-directory and only-new-issues aren't compatible")
        if not working_directory.is_dir():
            raise InvalidConfigError(f"working-directory ({working_directory}) was not a path")
        if PATH_PREFIX_ARG not in user_arg_names:
            added_args.append(f"--{PATH_PREFIX_ARG}={working_directory}")
        cwd = working_directory.resolve()

    try:
        user_args = shlex.split(inputs.args)
    except ValueError as exc:
        raise InvalidConfigError(f"args ({inputs.args}) could not be parsed: {exc}") from exc
    argv = (str(lint_path), "run", *added_args, *user_args)
    return LintInvocation(argv=argv, cwd=cwd)


@dataclass(slots=True)
class LintRunner:
    """Execution driver that runs golangci-lint and routes its result."""

    inputs: ActionInputs
    context: RunContext
    logger: ActionLogger
    publisher: AnnotationPublisher | None = None
    runner: RunnerCallable = run_command

    def run(self, lint_path: Path, patch_path: str) -> None:
        """Execute golangci-lint and interpret its output.

        Args:
            lint_path: Path of the golangci-lint executable.
            patch_path: Pull request patch path or ``""``.

        Raises:
            ActionError: If configuration is invalid, the output is malformed,
                blocking issues were found, or golangci-lint failed fatally.
        """

        if self.inputs.debug_cache:
            status = self.runner((str(lint_path), "cache", "status"))
            self.logger.info(status.stdout.rstrip())

        invocation = build_invocation(lint_path, patch_path, self.inputs)
        self.logger.info(f"Running [{invocation.display}] in [{invocation.cwd or ''}] ...")
        started_at = time.monotonic()
        try:
            result = self.runner(invocation.argv, options=CommandOptions(cwd=invocation.cwd))
            self.process_result(result)
        finally:
            elapsed_ms = int((time.monotonic() - started_at) * 1000)
            self.logger.info(f"Ran golangci-lint in {elapsed_ms}ms")

    def process_result(self, result: ExecutionResult) -> None:
        """Publish findings from ``result`` and decide whether the run failed.

        Output is parsed and published before the exit code is interpreted,
        so annotations appear even when golangci-lint exits fatally.

        Args:
            result: Captured golangci-lint execution.

        Raises:
            MalformedOutputError: If stdout is not a golangci-lint report, or
                golangci-lint exited with 1 without producing one.
            FindingsPresentError: If an issue meets the failure severity.
            ToolFatalError: If golangci-lint exited with any non-zero code other than 1.
        """

        report: Report | None = None
        if result.stdout:
            try:
                report = parse_report(result.stdout)
            except MalformedOutputError as exc:
                raise MalformedOutputError(f"there was an error processing golangci-lint output: {exc}") from exc
            self._log_advisory(report)
            log_issues(report.issues, self.logger)
            self._publish(report)

        if result.stderr:
            self.logger.info(result.stderr)

        exit_code = result.exit_code
        if exit_code == FINDINGS_EXIT_CODE:
            if report is None:
                raise MalformedOutputError("unexpected state, golangci-lint exited with 1, but provided no lint output")
            if should_fail(report.issues, self._failure_severity_label()):
                raise FindingsPresentError("issues found")
        elif exit_code != 0:
            # Negative codes mean golangci-lint was killed by a signal.
            raise ToolFatalError(exit_code)
        self.logger.ok("golangci-lint found no blocking issues")

    def _failure_severity_label(self) -> str:
        label = self.inputs.failure_severity
        if resolve_failure_severity(label) is None:
            choices = " | ".join(severity.value for severity in Severity)
            self.logger.warn(
                f'failure-severity must be one of ({choices}). "{label}" not supported, '
                f"using default ({DEFAULT_FAILURE_SEVERITY.value})",
            )
        return label

    def _log_advisory(self, report: Report) -> None:
        advisory = report.advisory
        for warning in advisory.warnings:
            prefix = f"[{warning.tag}] " if warning.tag else ""
            self.logger.info(f"golangci-lint warning: {prefix}{warning.text}")
        if advisory.linters:
            self.logger.debug(f"enabled linters: {', '.join(advisory.enabled_linters)}")
        if advisory.error:
            self.logger.info(f"golangci-lint reported an error: {advisory.error}")

    def _publish(self, report: Report) -> None:
        if self.publisher is None or not self.context.supports_annotations:
            return
        try:
            self.publisher.publish(report.issues)
        except (httpx.HTTPError, ValueError) as exc:
            self.logger.warn(f"failed to publish annotations: {exc}")


__all__ = [
    "LintInvocation",
    "LintRunner",
    "build_invocation",
    "collect_arg_names",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Publish parsed issues as GitHub check-run annotations."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Final, Protocol

from .logging import ActionLogger
from .models import Annotation, Issue
from .severity import Severity

ANNOTATION_BATCH_SIZE: Final[int] = 50
_SUGGESTION_FENCE: Final[str] = "```"


class CheckRunAPI(Protocol):
    """Subset of the GitHub client used for publishing annotations."""

    def get_check_run(self, check_run_id: int) -> dict[str, object]:
        """Return the check run payload."""
        ...

    def update_check_run(
        self,
        check_run_id: int,
        *,
        title: str,
        summary: str,
        annotations: Sequence[dict[str, object]],
    ) -> None:
        """Attach a batch of annotations to the check run."""
        ...


def build_annotation(issue: Issue) -> Annotation:
    """Return the annotation describing ``issue``.

    Columns are only reported for single-line issues; issues spanning a line
    range end on the range's last line instead.

    Args:
        issue: Parsed issue.

    Returns:
        Annotation: Check-run annotation payload model.
    """

    end_line = issue.pos.line
    start_column: int | None = None
    end_column: int | None = None
    if issue.line_range is not None:
        end_line = issue.line_range.to_line
    elif issue.pos.column:
        start_column = end_column = issue.pos.column

    raw_details: str | None = None
    if issue.replacement is not None:
        body = "\n".join(issue.replacement.new_lines)
        raw_details = f"{_SUGGESTION_FENCE}suggestion\n{body}\n{_SUGGESTION_FENCE}"

    return Annotation(
        path=issue.pos.filename,
        start_line=issue.pos.line,
        end_line=end_line,
        start_column=start_column,
        end_column=end_column,
        title=issue.from_linter,
        message=issue.text,
        annotation_level=issue.severity,
        raw_details=raw_details,
    )


def chunk_annotations(
    annotations: Sequence[Annotation],
    size: int = ANNOTATION_BATCH_SIZE,
) -> Iterator[Sequence[Annotation]]:
    """Yield consecutive batches of at most ``size`` annotations in order."""

    if size < 1:
        raise ValueError("batch size must be positive")
    for start in range(0, len(annotations), size):
        yield annotations[start : start + size]


class AnnotationPublisher:
    """Attach issues to the current check run in bounded batches."""

    def __init__(
        self,
        api: CheckRunAPI,
        check_run_id: int,
        *,
        batch_size: int = ANNOTATION_BATCH_SIZE,
    ) -> None:
        self._api = api
        self._check_run_id = check_run_id
        self._batch_size = batch_size

    def publish(self, issues: Sequence[Issue]) -> int:
        """Submit annotations for ``issues`` one batch at a time.

        The check run title is fetched once and reused as both title and
        summary for every update so existing output is not replaced.

        Args:
            issues: Issues in report order.

        Returns:
            int: Number of update calls performed.

        Raises:
            httpx.HTTPError: If the API rejects a request; no retries are attempted.
        """

        if not issues:
            return 0
        annotations = [build_annotation(issue) for issue in issues]
        current = self._api.get_check_run(self._check_run_id)
        title = _output_title(current)
        calls = 0
        for batch in chunk_annotations(annotations, self._batch_size):
            self._api.update_check_run(
                self._check_run_id,
                title=title,
                summary=title,
                annotations=[annotation.to_payload() for annotation in batch],
            )
            calls += 1
        return calls


def _output_title(check_run: dict[str, object]) -> str:
    output = check_run.get("output")
    if isinstance(output, dict):
        title = output.get("title")
        if isinstance(title, str):
            return title
    return ""


def format_issue(issue: Issue) -> str:
    """Return ``file:line[-to|:col] - text (linter)`` for ``issue``."""

    until = ""
    if issue.line_range is not None:
        until = f"-{issue.line_range.to_line}"
    elif issue.pos.column:
        until = f":{issue.pos.column}"
    return f"{issue.pos.filename}:{issue.pos.line}{until} - {issue.text} ({issue.from_linter})"


def log_issues(issues: Sequence[Issue], logger: ActionLogger) -> None:
    """Echo each issue as an ``::error::`` or ``::warning::`` workflow command."""

    for issue in issues:
        if issue.severity == Severity.FAILURE:
            logger.error(format_issue(issue))
        else:
            logger.warn(format_issue(issue))


__all__ = [
    "ANNOTATION_BATCH_SIZE",
    "AnnotationPublisher",
    "CheckRunAPI",
    "build_annotation",
    "chunk_annotations",
    "format_issue",
    "log_issues",
]

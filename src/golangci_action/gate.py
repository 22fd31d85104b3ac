# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether parsed issues should fail the run."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from .models import Issue
from .severity import Severity

DEFAULT_FAILURE_SEVERITY: Final[Severity] = Severity.NOTICE


def resolve_failure_severity(label: str) -> Severity | None:
    """Return the threshold named by ``label`` or ``None`` when unsupported."""

    return Severity.from_name(label)


def should_fail(issues: Sequence[Issue], threshold_label: str) -> bool:
    """Return ``True`` when any issue meets the configured failure severity.

    An unsupported ``threshold_label`` falls back to
    :data:`DEFAULT_FAILURE_SEVERITY`. Callers wanting to report the fallback
    should check :func:`resolve_failure_severity` themselves.

    Args:
        issues: Normalised issues from the parsed report.
        threshold_label: Severity name configured by the user.

    Returns:
        bool: ``True`` when the run should be marked failed.
    """

    if not issues:
        return False
    threshold = resolve_failure_severity(threshold_label) or DEFAULT_FAILURE_SEVERITY
    if threshold == Severity.minimum():
        return True
    return any(issue.severity >= threshold for issue in issues)


__all__ = ["DEFAULT_FAILURE_SEVERITY", "resolve_failure_severity", "should_fail"]

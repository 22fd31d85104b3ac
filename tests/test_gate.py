# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the failure gate."""

from __future__ import annotations

import pytest

from golangci_action.gate import resolve_failure_severity, should_fail
from golangci_action.severity import Severity

_THRESHOLDS = ("notice", "warning", "failure")


@pytest.mark.parametrize("threshold", [*_THRESHOLDS, "bogus", ""])
def test_no_issues_never_fail(threshold: str) -> None:
    assert should_fail([], threshold) is False


def test_notice_threshold_fails_on_any_issue(make_issue) -> None:
    assert should_fail([make_issue(severity=Severity.NOTICE)], "notice") is True
    assert should_fail([make_issue(severity=Severity.FAILURE)], "NOTICE") is True


def test_unknown_threshold_falls_back_to_notice(make_issue) -> None:
    assert resolve_failure_severity("error") is None
    assert should_fail([make_issue(severity=Severity.NOTICE)], "error") is True


@pytest.mark.parametrize(
    ("severity", "threshold", "expected"),
    [
        (Severity.NOTICE, "warning", False),
        (Severity.WARNING, "warning", True),
        (Severity.FAILURE, "warning", True),
        (Severity.WARNING, "failure", False),
        (Severity.FAILURE, "failure", True),
    ],
)
def test_threshold_comparison(make_issue, severity: Severity, threshold: str, expected: bool) -> None:
    assert should_fail([make_issue(severity=severity)], threshold) is expected


def test_any_issue_at_threshold_triggers_failure(make_issue) -> None:
    issues = [make_issue(severity=Severity.NOTICE), make_issue(severity=Severity.WARNING)]

    assert should_fail(issues, "warning") is True
    assert should_fail(issues, "failure") is False


@pytest.mark.parametrize(
    "severities",
    [
        [Severity.NOTICE],
        [Severity.WARNING],
        [Severity.FAILURE],
        [Severity.NOTICE, Severity.WARNING],
        [Severity.WARNING, Severity.FAILURE],
    ],
)
def test_raising_threshold_never_turns_pass_into_fail(make_issue, severities: list[Severity]) -> None:
    issues = [make_issue(severity=severity) for severity in severities]
    results = [should_fail(issues, threshold) for threshold in _THRESHOLDS]

    for lower, higher in zip(results, results[1:]):
        assert lower or not higher

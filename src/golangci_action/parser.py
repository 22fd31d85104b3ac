# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert golangci-lint JSON output into a typed :class:`Report`."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Final

from pydantic import ValidationError

from .errors import MalformedOutputError
from .models import Issue, Report, ReportAdvisory
from .severity import IGNORE_SEVERITY_LABEL, normalize_severity

_ISSUES_KEY: Final[str] = "Issues"
_REPORT_KEY: Final[str] = "Report"
_SEVERITY_KEY: Final[str] = "Severity"


def parse_report(raw_text: str) -> Report:
    """Parse golangci-lint stdout into a :class:`Report`.

    The ``Report`` section is the signature of genuine golangci-lint output;
    any payload without it is rejected even when ``Issues`` is present. Only
    issues carrying the ``ignore`` sentinel severity are kept, and their
    severity is normalised through :func:`normalize_severity`.

    Args:
        raw_text: Text written to stdout by ``golangci-lint run --out-format=json``.

    Returns:
        Report: Parsed issues together with the advisory section.

    Raises:
        MalformedOutputError: If the text is not JSON, lacks the ``Report``
            section, or a retained issue does not match the expected shape.
    """

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(f"golangci-lint returned invalid json: {exc}") from exc
    if not isinstance(payload, Mapping) or payload.get(_REPORT_KEY) is None:
        raise MalformedOutputError("golangci-lint returned invalid json")

    try:
        advisory = ReportAdvisory.model_validate(payload[_REPORT_KEY])
        issues = tuple(_build_issue(entry) for entry in _retained_entries(payload.get(_ISSUES_KEY)))
    except ValidationError as exc:
        raise MalformedOutputError(f"golangci-lint returned invalid json: {exc}") from exc
    return Report(issues=issues, advisory=advisory)


def _retained_entries(raw_issues: object) -> list[Mapping[str, object]]:
    """Return the raw issue mappings that survive the sentinel filter.

    Args:
        raw_issues: ``Issues`` value from the payload; ``null`` when nothing was found.

    Returns:
        list[Mapping[str, object]]: Issue mappings whose severity is the ``ignore`` sentinel.

    Raises:
        MalformedOutputError: If ``Issues`` is neither null nor an array.
    """

    if raw_issues is None:
        return []
    if not isinstance(raw_issues, Sequence) or isinstance(raw_issues, (str, bytes)):
        raise MalformedOutputError("golangci-lint returned invalid json: Issues is not an array")
    return [
        entry
        for entry in raw_issues
        if isinstance(entry, Mapping) and entry.get(_SEVERITY_KEY) == IGNORE_SEVERITY_LABEL
    ]


def _build_issue(entry: Mapping[str, object]) -> Issue:
    label = str(entry.get(_SEVERITY_KEY, ""))
    return Issue.model_validate({**entry, _SEVERITY_KEY: normalize_severity(label)})


__all__ = ["parse_report"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed models for golangci-lint reports and GitHub check-run annotations."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity


class _ReportModel(BaseModel):
    """Base for models populated from golangci-lint's PascalCase JSON."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Position(_ReportModel):
    """Source position reported for an issue."""

    filename: str = Field(alias="Filename")
    line: int = Field(alias="Line")
    column: int = Field(default=0, alias="Column")


class LineRange(_ReportModel):
    """Inclusive line range covered by an issue."""

    from_line: int = Field(alias="From")
    to_line: int = Field(alias="To")


class Replacement(_ReportModel):
    """Suggested fix attached to an issue."""

    need_only_delete: bool = Field(default=False, alias="NeedOnlyDelete")
    new_lines: list[str] = Field(default_factory=list, alias="NewLines")


class Issue(_ReportModel):
    """A single normalised finding."""

    text: str = Field(alias="Text")
    from_linter: str = Field(alias="FromLinter")
    severity: Severity = Field(alias="Severity")
    pos: Position = Field(alias="Pos")
    line_range: LineRange | None = Field(default=None, alias="LineRange")
    replacement: Replacement | None = Field(default=None, alias="Replacement")


class ReportWarning(_ReportModel):
    """Warning emitted by golangci-lint while producing the report."""

    tag: str | None = Field(default=None, alias="Tag")
    text: str = Field(alias="Text")


class LinterStatus(_ReportModel):
    """Linter known to golangci-lint and whether it ran."""

    name: str = Field(alias="Name")
    enabled: bool = Field(default=False, alias="Enabled")


class ReportAdvisory(_ReportModel):
    """Advisory section of the report; logged but never used for gating."""

    warnings: list[ReportWarning] = Field(default_factory=list, alias="Warnings")
    linters: list[LinterStatus] = Field(default_factory=list, alias="Linters")
    error: str | None = Field(default=None, alias="Error")

    @property
    def enabled_linters(self) -> list[str]:
        """Return the names of linters that were enabled for the run."""

        return [linter.name for linter in self.linters if linter.enabled]


class Report(_ReportModel):
    """Parsed output of one golangci-lint invocation."""

    issues: tuple[Issue, ...] = ()
    advisory: ReportAdvisory


class Annotation(BaseModel):
    """Check-run annotation payload derived from an :class:`Issue`."""

    model_config = ConfigDict(frozen=True)

    path: str
    start_line: int
    end_line: int
    start_column: int | None = None
    end_column: int | None = None
    title: str
    message: str
    annotation_level: Severity
    raw_details: str | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body fragment accepted by the check-runs API."""

        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Captured output of a finished subprocess."""

    stdout: str
    stderr: str
    code: int | None = None

    @property
    def exit_code(self) -> int:
        """Return the exit status treating a missing code as success."""

        return self.code or 0


__all__ = [
    "Annotation",
    "ExecutionResult",
    "Issue",
    "LineRange",
    "LinterStatus",
    "Position",
    "Replacement",
    "Report",
    "ReportAdvisory",
    "ReportWarning",
]

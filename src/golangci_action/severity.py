# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Annotation levels ordered from least to most severe.

    Members compare by rank rather than by their string value so that
    thresholds can be expressed as ``issue.severity >= threshold``.
    """

    NOTICE = "notice"
    WARNING = "warning"
    FAILURE = "failure"

    @property
    def rank(self) -> int:
        """Return the position of the member within the total order.

        Returns:
            int: Zero for the least severe member.
        """

        return _SEVERITY_RANKS[self]

    @classmethod
    def from_name(cls, name: str) -> Severity | None:
        """Resolve ``name`` against the canonical member names.

        Args:
            name: Case-insensitive severity name such as ``"warning"``.

        Returns:
            Severity | None: Matching member, or ``None`` when ``name`` is not canonical.
        """

        try:
            return cls(name.strip().lower())
        except ValueError:
            return None

    @classmethod
    def minimum(cls) -> Severity:
        """Return the least severe member."""

        return cls.NOTICE

    @classmethod
    def maximum(cls) -> Severity:
        """Return the most severe member."""

        return cls.FAILURE

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_SEVERITY_RANKS: Final[dict[Severity, int]] = {
    Severity.NOTICE: 0,
    Severity.WARNING: 1,
    Severity.FAILURE: 2,
}

SEVERITY_ALIASES: Final[Mapping[str, Severity]] = {
    "info": Severity.NOTICE,
    "notice": Severity.NOTICE,
    "minor": Severity.WARNING,
    "warning": Severity.WARNING,
    "error": Severity.FAILURE,
    "major": Severity.FAILURE,
    "critical": Severity.FAILURE,
    "blocker": Severity.FAILURE,
    "failure": Severity.FAILURE,
}

# Sentinel label carried by issues that the report parser retains.
IGNORE_SEVERITY_LABEL: Final[str] = "ignore"


def normalize_severity(label: str) -> Severity:
    """Map a tool-reported severity label onto :class:`Severity`.

    Unknown labels resolve to the most severe member so an unrecognised
    finding is never downgraded.

    Args:
        label: Severity label emitted by golangci-lint or one of its linters.

    Returns:
        Severity: Canonical severity for ``label``.
    """

    return SEVERITY_ALIASES.get(label.lower(), Severity.maximum())


__all__ = [
    "IGNORE_SEVERITY_LABEL",
    "SEVERITY_ALIASES",
    "Severity",
    "normalize_severity",
]

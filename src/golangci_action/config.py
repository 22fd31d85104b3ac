# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-supplied action inputs."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfigError

_BOOLEAN_INPUTS: Final[frozenset[str]] = frozenset({"true", "false"})
_INPUT_PREFIX: Final[str] = "INPUT_"
CACHE_DEBUG_FLAG: Final[str] = "cache"


def input_env_name(name: str) -> str:
    """Return the environment variable the Actions runner uses for input ``name``.

    Args:
        name: Input name as declared in ``action.yml`` (for example ``only-new-issues``).

    Returns:
        str: Upper-cased variable name with spaces replaced by underscores.
    """

    return f"{_INPUT_PREFIX}{name.replace(' ', '_').upper()}"


class ActionInputs(BaseModel):
    """Validated configuration consumed by the lint pipeline."""

    model_config = ConfigDict(frozen=True)

    only_new_issues: bool = False
    github_token: str = ""
    failure_severity: str = "notice"
    debug: frozenset[str] = Field(default_factory=frozenset)
    args: str = ""
    working_directory: Path | None = None
    version: str = "latest"

    @field_validator("only_new_issues", mode="before")
    @classmethod
    def _parse_only_new_issues(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip()
            if normalized not in _BOOLEAN_INPUTS:
                raise ValueError(f'invalid value of "only-new-issues": "{normalized}", expected "true" or "false"')
            return normalized == "true"
        return value

    @field_validator("debug", mode="before")
    @classmethod
    def _parse_debug(cls, value: object) -> object:
        if isinstance(value, str):
            return frozenset(flag.strip() for flag in value.split(",") if flag.strip())
        return value

    @field_validator("working_directory", mode="before")
    @classmethod
    def _blank_working_directory(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("failure_severity", "args", "version", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @property
    def debug_cache(self) -> bool:
        """Return ``True`` when cache diagnostics were requested."""

        return CACHE_DEBUG_FLAG in self.debug


def load_inputs(raw: Mapping[str, object]) -> ActionInputs:
    """Validate ``raw`` input values into :class:`ActionInputs`.

    Args:
        raw: Mapping of field names to raw values; ``None`` entries are ignored.

    Returns:
        ActionInputs: Validated inputs.

    Raises:
        InvalidConfigError: If any value fails validation.
    """

    values = {key: value for key, value in raw.items() if value is not None}
    try:
        return ActionInputs.model_validate(values)
    except ValidationError as exc:
        messages = "; ".join(str(error["msg"]).removeprefix("Value error, ") for error in exc.errors())
        raise InvalidConfigError(messages) from exc


__all__ = [
    "CACHE_DEBUG_FLAG",
    "ActionInputs",
    "input_env_name",
    "load_inputs",
]

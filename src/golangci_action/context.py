# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Explicit description of the workflow run hosting the action."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict

from .errors import InvalidConfigError

PULL_REQUEST_EVENT: Final[str] = "pull_request"
PUSH_EVENT: Final[str] = "push"
ANNOTATED_EVENTS: Final[frozenset[str]] = frozenset({PULL_REQUEST_EVENT, PUSH_EVENT})
DEFAULT_API_URL: Final[str] = "https://api.github.com"


class RunContext(BaseModel):
    """Event, repository and run identifiers for the current workflow run."""

    model_config = ConfigDict(frozen=True)

    event_name: str = ""
    owner: str = ""
    repo: str = ""
    run_id: int = 0
    pull_request_number: int | None = None
    api_url: str = DEFAULT_API_URL

    @property
    def is_pull_request(self) -> bool:
        """Return ``True`` when the run was triggered by a pull request event."""

        return self.event_name == PULL_REQUEST_EVENT

    @property
    def supports_annotations(self) -> bool:
        """Return ``True`` when check-run annotations can be attached for this event."""

        return self.event_name in ANNOTATED_EVENTS

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> RunContext:
        """Build the context from ``GITHUB_*`` variables and the event payload.

        Args:
            environ: Environment mapping; defaults to :data:`os.environ`.

        Returns:
            RunContext: Context describing the hosting workflow run.

        Raises:
            InvalidConfigError: If the repository slug or run id is malformed.
        """

        env = os.environ if environ is None else environ
        owner, repo = "", ""
        repository = env.get("GITHUB_REPOSITORY", "")
        if repository:
            owner, sep, repo = repository.partition("/")
            if not sep or not owner or not repo:
                raise InvalidConfigError(f"GITHUB_REPOSITORY ({repository}) is not in owner/repo form")
        run_id_text = env.get("GITHUB_RUN_ID", "0") or "0"
        try:
            run_id = int(run_id_text)
        except ValueError as exc:
            raise InvalidConfigError(f"GITHUB_RUN_ID ({run_id_text}) is not a number") from exc
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            owner=owner,
            repo=repo,
            run_id=run_id,
            pull_request_number=_pull_request_number(env.get("GITHUB_EVENT_PATH")),
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )


def _pull_request_number(event_path: str | None) -> int | None:
    """Return the pull request number recorded in the event payload, if any."""

    if not event_path:
        return None
    path = Path(event_path)
    if not path.is_file():
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidConfigError(f"unable to read event payload {event_path}: {exc}") from exc
    pull = payload.get("pull_request") if isinstance(payload, dict) else None
    if not isinstance(pull, dict):
        return None
    number = pull.get("number")
    return number if isinstance(number, int) else None


def add_path(directory: Path, environ: Mapping[str, str] | None = None) -> None:
    """Prepend ``directory`` to ``PATH`` for this process and later workflow steps.

    Args:
        directory: Directory containing executables.
        environ: Environment mapping used to locate ``GITHUB_PATH``.
    """

    env = os.environ if environ is None else environ
    path_file = env.get("GITHUB_PATH")
    if path_file:
        with Path(path_file).open("a", encoding="utf-8") as handle:
            handle.write(f"{directory}{os.linesep}")
    os.environ["PATH"] = f"{directory}{os.pathsep}{os.environ.get('PATH', '')}"


__all__ = [
    "ANNOTATED_EVENTS",
    "PULL_REQUEST_EVENT",
    "PUSH_EVENT",
    "RunContext",
    "add_path",
]

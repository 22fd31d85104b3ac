# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for action inputs and the workflow run context."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from golangci_action.config import ActionInputs, input_env_name, load_inputs
from golangci_action.context import RunContext, add_path
from golangci_action.errors import InvalidConfigError


def test_input_env_name_matches_runner_convention() -> None:
    assert input_env_name("only-new-issues") == "INPUT_ONLY-NEW-ISSUES"
    assert input_env_name("github token") == "INPUT_GITHUB_TOKEN"


def test_defaults() -> None:
    inputs = load_inputs({})

    assert inputs == ActionInputs()
    assert inputs.only_new_issues is False
    assert inputs.failure_severity == "notice"
    assert inputs.working_directory is None
    assert inputs.debug_cache is False


@pytest.mark.parametrize(("raw", "expected"), [("true", True), (" false ", False)])
def test_only_new_issues_accepts_boolean_strings(raw: str, expected: bool) -> None:
    assert load_inputs({"only_new_issues": raw}).only_new_issues is expected


@pytest.mark.parametrize("raw", ["yes", "True", "1", ""])
def test_only_new_issues_rejects_other_values(raw: str) -> None:
    with pytest.raises(InvalidConfigError, match="only-new-issues"):
        load_inputs({"only_new_issues": raw})


def test_debug_flags_are_split() -> None:
    inputs = load_inputs({"debug": "verbose, cache,,"})

    assert inputs.debug == frozenset({"verbose", "cache"})
    assert inputs.debug_cache is True


def test_blank_working_directory_is_unset() -> None:
    assert load_inputs({"working_directory": "  "}).working_directory is None
    assert load_inputs({"working_directory": "svc"}).working_directory == Path("svc")


def test_context_from_environ(tmp_path: Path) -> None:
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"pull_request": {"number": 12}}), encoding="utf-8")

    context = RunContext.from_environ(
        {
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_REPOSITORY": "acme/svc",
            "GITHUB_RUN_ID": "555",
            "GITHUB_EVENT_PATH": str(event),
        },
    )

    assert (context.owner, context.repo, context.run_id) == ("acme", "svc", 555)
    assert context.pull_request_number == 12
    assert context.is_pull_request
    assert context.supports_annotations
    assert context.api_url == "https://api.github.com"


def test_context_without_pull_request_payload(tmp_path: Path) -> None:
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"ref": "refs/heads/main"}), encoding="utf-8")

    context = RunContext.from_environ({"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(event)})

    assert context.pull_request_number is None
    assert not context.is_pull_request
    assert context.supports_annotations


def test_context_rejects_malformed_values() -> None:
    with pytest.raises(InvalidConfigError):
        RunContext.from_environ({"GITHUB_REPOSITORY": "no-slash"})
    with pytest.raises(InvalidConfigError):
        RunContext.from_environ({"GITHUB_RUN_ID": "abc"})


def test_add_path_updates_process_and_workflow(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path_file = tmp_path / "github_path"
    monkeypatch.setenv("PATH", "/usr/bin")

    add_path(Path("/opt/golangci"), {"GITHUB_PATH": str(path_file)})

    assert os.environ["PATH"].split(os.pathsep)[0] == "/opt/golangci"
    assert path_file.read_text(encoding="utf-8").strip() == "/opt/golangci"

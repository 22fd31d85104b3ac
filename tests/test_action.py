# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for :func:`golangci_action.action.run_action`."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import httpx
import pytest

from golangci_action.action import Collaborators, post_run, run_action
from golangci_action.config import load_inputs
from golangci_action.context import RunContext
from golangci_action.errors import PreparationError
from golangci_action.github import GitHubClient
from golangci_action.models import ExecutionResult
from golangci_action.process import CommandOptions

LINT_PATH = Path("/opt/golangci/golangci-lint")


class StubResolver:
    def resolve(self) -> str:
        return "v1.59.1"


class StubInstaller:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    def install(self, version: str) -> Path:
        if self.error is not None:
            raise self.error
        return LINT_PATH


class StubToolchain:
    def install(self) -> None:
        return None


class StubCache:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.saved = False

    def restore(self) -> None:
        return None

    def save(self) -> None:
        if self.error is not None:
            raise self.error
        self.saved = True


class ScriptedRunner:
    def __init__(self, result: ExecutionResult) -> None:
        self.result = result
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> ExecutionResult:
        self.calls.append(tuple(args))
        return self.result


@pytest.fixture(autouse=True)
def _isolated_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_PATH", raising=False)
    monkeypatch.setenv("PATH", "/usr/bin")


def _collaborators(**overrides: object) -> Collaborators:
    values: dict[str, object] = {
        "version_resolver": StubResolver(),
        "lint_installer": StubInstaller(),
        "toolchain_installer": StubToolchain(),
        "cache": StubCache(),
    }
    values.update(overrides)
    return Collaborators(**values)


def _client(requests: list[httpx.Request]) -> GitHubClient:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"output": {"title": "golangci-lint"}})
        return httpx.Response(200, json={})

    context = RunContext(event_name="push", owner="acme", repo="svc", run_id=3)
    return GitHubClient(context, "token", transport=httpx.MockTransport(handler))


def _report(count: int) -> str:
    issues = [
        {
            "FromLinter": "unused",
            "Text": f"func f{index} is unused",
            "Severity": "ignore",
            "Pos": {"Filename": "lib.go", "Line": index + 1, "Column": 6},
        }
        for index in range(count)
    ]
    return json.dumps({"Issues": issues, "Report": {}})


def _run(logger, result: ExecutionResult, *, event: str = "push", requests=None, **inputs: object):
    requests = [] if requests is None else requests
    runner = ScriptedRunner(result)
    context = RunContext(event_name=event, owner="acme", repo="svc", run_id=3)
    with _client(requests) as client:
        succeeded = run_action(
            load_inputs(inputs),
            context,
            logger,
            client=client,
            collaborators=_collaborators(),
            runner=runner,
        )
    return succeeded, runner


def test_clean_run(logger, output) -> None:
    succeeded, runner = _run(logger, ExecutionResult(stdout=_report(0), stderr="", code=0))

    assert succeeded is True
    assert logger.failure_message is None
    assert runner.calls[0][:2] == (str(LINT_PATH), "run")
    text = output()
    assert "::group::prepare environment" in text
    assert "::group::run golangci-lint" in text
    assert "found no blocking issues" in text


def test_findings_fail_run_and_are_annotated(logger) -> None:
    requests: list[httpx.Request] = []

    succeeded, _ = _run(
        logger,
        ExecutionResult(stdout=_report(120), stderr="", code=1),
        requests=requests,
        failure_severity="warning",
    )

    assert succeeded is False
    assert logger.failure_message == "issues found"
    assert [request.method for request in requests] == ["GET", "PATCH", "PATCH", "PATCH"]


def test_fatal_exit_fails_run(logger) -> None:
    succeeded, _ = _run(logger, ExecutionResult(stdout="", stderr="level=error msg=oops", code=3))

    assert succeeded is False
    assert logger.failure_message == "golangci-lint exit with code 3"


def test_conflicting_args_fail_before_spawning(logger, output) -> None:
    succeeded, runner = _run(
        logger,
        ExecutionResult(stdout="", stderr="", code=0),
        args="--out-format=xml",
    )

    assert succeeded is False
    assert runner.calls == []
    assert "::error::please, don't change out-format" in output()


def test_only_new_issues_outside_pull_request_skips_patch(logger) -> None:
    requests: list[httpx.Request] = []

    succeeded, runner = _run(
        logger,
        ExecutionResult(stdout=_report(0), stderr="", code=0),
        requests=requests,
        only_new_issues="true",
    )

    assert succeeded is True
    assert not any(arg.startswith("--new-from-patch") for arg in runner.calls[0])
    assert requests == []


def test_preparation_failure_is_reported(logger) -> None:
    context = RunContext(event_name="push", owner="acme", repo="svc", run_id=3)
    runner = ScriptedRunner(ExecutionResult(stdout="", stderr="", code=0))
    with _client([]) as client:
        succeeded = run_action(
            load_inputs({}),
            context,
            logger,
            client=client,
            collaborators=_collaborators(lint_installer=StubInstaller(PreparationError("golangci-lint missing"))),
            runner=runner,
        )

    assert succeeded is False
    assert logger.failure_message == "golangci-lint missing"
    assert runner.calls == []


def test_post_run_saves_cache(logger) -> None:
    cache = StubCache()

    assert post_run(cache, logger) is True
    assert cache.saved is True


def test_post_run_failure_sets_failed(logger, output) -> None:
    assert post_run(StubCache(PreparationError("disk full")), logger) is False
    assert "Failed to post-run: disk full" in output()


class FailingResolver:
    def resolve(self) -> str:
        raise RuntimeError("version lookup failed")


def test_unexpected_collaborator_error_fails_run(logger, output) -> None:
    context = RunContext(event_name="push", owner="acme", repo="svc", run_id=3)
    runner = ScriptedRunner(ExecutionResult(stdout="", stderr="", code=0))
    with _client([]) as client:
        succeeded = run_action(
            load_inputs({}),
            context,
            logger,
            client=client,
            collaborators=_collaborators(version_resolver=FailingResolver()),
            runner=runner,
        )

    assert succeeded is False
    assert logger.failure_message == "failed to prepare golangci-lint: version lookup failed"
    assert runner.calls == []
    assert "::endgroup::" in output()


def test_unexpected_runner_error_fails_run(logger, output) -> None:
    def exploding_runner(args: Sequence[str], *, options: CommandOptions | None = None) -> ExecutionResult:
        raise RuntimeError("runner crashed")

    context = RunContext(event_name="push", owner="acme", repo="svc", run_id=3)
    with _client([]) as client:
        succeeded = run_action(
            load_inputs({}),
            context,
            logger,
            client=client,
            collaborators=_collaborators(),
            runner=exploding_runner,
        )

    assert succeeded is False
    assert logger.failure_message == "runner crashed"
    assert "::error::Failed to run: RuntimeError('runner crashed')" in output()


def test_post_run_os_error_sets_failed(logger, output) -> None:
    assert post_run(StubCache(OSError("read-only file system")), logger) is False
    assert logger.failure_message == "read-only file system"
    assert "Failed to post-run: read-only file system" in output()

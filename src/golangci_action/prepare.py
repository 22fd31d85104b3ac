# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent acquisition of everything golangci-lint needs before it runs."""

from __future__ import annotations

import tempfile
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol, TypeVar

import httpx

from .config import ActionInputs
from .context import RunContext
from .errors import ActionError, PreparationError
from .installers import BuildCache, LintInstaller, ToolchainInstaller, VersionResolver
from .logging import ActionLogger

PATCH_FILE_NAME: Final[str] = "pull.patch"
_HTTP_OK: Final[int] = 200
_PREPARATION_TASKS: Final[int] = 4

ResultT = TypeVar("ResultT")


class PullRequestDiffAPI(Protocol):
    """Subset of the GitHub client used to download pull request diffs."""

    def get_pull_request_diff(self, number: int) -> httpx.Response:
        """Return the API response carrying the diff of ``number``."""
        ...


@dataclass(frozen=True, slots=True)
class PreparedEnvironment:
    """Results of environment preparation consumed by the execution driver."""

    lint_path: Path
    patch_path: str


@dataclass(slots=True)
class PatchFetcher:
    """Download the pull request diff used for only-new-issues analysis.

    Every failure degrades to an empty path so the run widens to the whole
    codebase instead of aborting.
    """

    inputs: ActionInputs
    context: RunContext
    api: PullRequestDiffAPI
    logger: ActionLogger

    def fetch(self) -> str:
        """Return the path of the written patch file, or ``""`` when unavailable."""

        if not self.inputs.only_new_issues:
            return ""
        if not self.context.is_pull_request:
            self.logger.info(
                "Not fetching patch for showing only new issues because it's not a pull request "
                f"context: event name is {self.context.event_name}",
            )
            return ""
        number = self.context.pull_request_number
        if number is None:
            self.logger.warn("No pull request in context")
            return ""

        try:
            response = self.api.get_pull_request_diff(number)
        except httpx.HTTPError as exc:
            self.logger.warn(f"failed to fetch pull request patch: {exc}")
            return ""
        if response.status_code != _HTTP_OK:
            self.logger.warn(f"failed to fetch pull request patch: response status is {response.status_code}")
            return ""

        try:
            patch_path = Path(tempfile.mkdtemp()) / PATCH_FILE_NAME
            self.logger.info(f"Writing patch to {patch_path}")
            patch_path.write_text(response.text, encoding="utf-8")
        except OSError as exc:
            self.logger.warn(f"failed to save pull request patch: {exc}")
            return ""
        return str(patch_path)


@dataclass(slots=True)
class EnvironmentPreparer:
    """Launch all preparation tasks at once and join them in a fixed order."""

    version_resolver: VersionResolver
    lint_installer: LintInstaller
    toolchain_installer: ToolchainInstaller
    cache: BuildCache
    patch_fetcher: PatchFetcher
    logger: ActionLogger

    def prepare(self) -> PreparedEnvironment:
        """Acquire the lint binary, toolchain, cache and optional patch concurrently.

        The lint binary is awaited first because its path is needed before
        anything else; the remaining joins follow for simplicity rather than
        dependency. Failures of the first three tasks surface as
        :class:`PreparationError`; the patch fetcher never raises.

        Returns:
            PreparedEnvironment: Lint executable path and patch path (possibly empty).

        Raises:
            PreparationError: If the lint binary, toolchain or cache could not be prepared.
        """

        started_at = time.monotonic()
        with ThreadPoolExecutor(max_workers=_PREPARATION_TASKS, thread_name_prefix="prepare") as pool:
            restore_cache = pool.submit(self.cache.restore)
            prepare_lint = pool.submit(self._prepare_lint)
            install_toolchain = pool.submit(self.toolchain_installer.install)
            fetch_patch = pool.submit(self.patch_fetcher.fetch)

            lint_path = _join(prepare_lint, "prepare golangci-lint")
            _join(install_toolchain, "install go")
            _join(restore_cache, "restore cache")
            patch_path = fetch_patch.result()

        elapsed_ms = int((time.monotonic() - started_at) * 1000)
        self.logger.info(f"Prepared env in {elapsed_ms}ms")
        return PreparedEnvironment(lint_path=lint_path, patch_path=patch_path)

    def _prepare_lint(self) -> Path:
        version = self.version_resolver.resolve()
        return self.lint_installer.install(version)


def _join(future: Future[ResultT], task: str) -> ResultT:
    """Return the result of ``future``, reporting foreign failures as preparation errors."""

    try:
        return future.result()
    except ActionError:
        raise
    except Exception as exc:
        raise PreparationError(f"failed to {task}: {exc}") from exc


__all__ = [
    "PATCH_FILE_NAME",
    "EnvironmentPreparer",
    "PatchFetcher",
    "PreparedEnvironment",
    "PullRequestDiffAPI",
]

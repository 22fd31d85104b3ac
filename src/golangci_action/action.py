# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Top-level run and post-run entry points."""

from __future__ import annotations

from dataclasses import dataclass

from .annotations import AnnotationPublisher
from .config import ActionInputs
from .context import RunContext, add_path
from .errors import ActionError
from .github import GitHubClient
from .installers import (
    BuildCache,
    LintInstaller,
    NullBuildCache,
    PathLintInstaller,
    PathToolchainInstaller,
    StaticVersionResolver,
    ToolchainInstaller,
    VersionResolver,
)
from .logging import ActionLogger
from .prepare import EnvironmentPreparer, PatchFetcher
from .process import RunnerCallable, run_command
from .runner import LintRunner


@dataclass(slots=True)
class Collaborators:
    """External services used to prepare the environment."""

    version_resolver: VersionResolver
    lint_installer: LintInstaller
    toolchain_installer: ToolchainInstaller
    cache: BuildCache

    @classmethod
    def defaults(cls, inputs: ActionInputs, logger: ActionLogger) -> Collaborators:
        """Return collaborators that rely on tools already present on ``PATH``."""

        return cls(
            version_resolver=StaticVersionResolver(inputs.version),
            lint_installer=PathLintInstaller(logger),
            toolchain_installer=PathToolchainInstaller(logger),
            cache=NullBuildCache(logger),
        )


def run_action(
    inputs: ActionInputs,
    context: RunContext,
    logger: ActionLogger,
    *,
    client: GitHubClient,
    collaborators: Collaborators | None = None,
    runner: RunnerCallable = run_command,
) -> bool:
    """Prepare the environment, run golangci-lint and report the outcome.

    Every failure, expected or not, is converted into a single failed status
    on ``logger``; nothing here exits the process.

    Args:
        inputs: Validated action inputs.
        context: Workflow run context.
        logger: Logger receiving progress and the final status.
        client: GitHub API client used for diffs and annotations.
        collaborators: Installers and cache; defaults to ``PATH`` lookups.
        runner: Subprocess runner used to execute golangci-lint.

    Returns:
        bool: ``True`` when the run finished without a failed status.
    """

    services = collaborators or Collaborators.defaults(inputs, logger)
    preparer = EnvironmentPreparer(
        version_resolver=services.version_resolver,
        lint_installer=services.lint_installer,
        toolchain_installer=services.toolchain_installer,
        cache=services.cache,
        patch_fetcher=PatchFetcher(inputs=inputs, context=context, api=client, logger=logger),
        logger=logger,
    )
    lint_runner = LintRunner(
        inputs=inputs,
        context=context,
        logger=logger,
        publisher=AnnotationPublisher(client, context.run_id),
        runner=runner,
    )
    try:
        with logger.group("prepare environment"):
            env = preparer.prepare()
        add_path(env.lint_path.parent)
        with logger.group("run golangci-lint"):
            lint_runner.run(env.lint_path, env.patch_path)
    except ActionError as exc:
        logger.set_failed(str(exc))
    except Exception as exc:
        logger.error(f"Failed to run: {exc!r}")
        logger.set_failed(str(exc))
    return not logger.failed


def post_run(cache: BuildCache, logger: ActionLogger) -> bool:
    """Persist the build cache after the main run.

    Returns:
        bool: ``True`` when the cache was saved without a failed status.
    """

    try:
        cache.save()
    except Exception as exc:
        logger.error(f"Failed to post-run: {exc}")
        logger.set_failed(str(exc))
    return not logger.failed


__all__ = ["Collaborators", "post_run", "run_action"]

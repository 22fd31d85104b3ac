# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer entry point for the ``run`` and ``post-run`` action phases."""

from __future__ import annotations

from typing import Annotated

import typer

from .action import Collaborators, post_run, run_action
from .config import ActionInputs, input_env_name, load_inputs
from .context import RunContext
from .errors import InvalidConfigError
from .github import GitHubClient
from .logging import ActionLogger, build_action_logger

app = typer.Typer(help="Run golangci-lint and publish its findings to GitHub.", no_args_is_help=True)

ONLY_NEW_ISSUES_OPTION = Annotated[
    str,
    typer.Option(
        "--only-new-issues",
        envvar=input_env_name("only-new-issues"),
        help="Report only issues introduced by the pull request (true/false).",
    ),
]
GITHUB_TOKEN_OPTION = Annotated[
    str,
    typer.Option("--github-token", envvar=input_env_name("github-token"), help="Token for the GitHub API."),
]
FAILURE_SEVERITY_OPTION = Annotated[
    str,
    typer.Option(
        "--failure-severity",
        envvar=input_env_name("failure-severity"),
        help="Lowest severity that fails the run (notice, warning, failure).",
    ),
]
DEBUG_OPTION = Annotated[
    str,
    typer.Option("--debug", envvar=input_env_name("debug"), help="Comma-separated debug flags, e.g. 'cache'."),
]
ARGS_OPTION = Annotated[
    str,
    typer.Option("--args", envvar=input_env_name("args"), help="Extra arguments passed to golangci-lint run."),
]
WORKING_DIRECTORY_OPTION = Annotated[
    str,
    typer.Option(
        "--working-directory",
        envvar=input_env_name("working-directory"),
        help="Directory to run golangci-lint in.",
    ),
]
VERSION_OPTION = Annotated[
    str,
    typer.Option("--version", envvar=input_env_name("version"), help="golangci-lint version to use."),
]


def _load_or_exit(raw: dict[str, object], logger: ActionLogger) -> ActionInputs:
    try:
        return load_inputs(raw)
    except InvalidConfigError as exc:
        logger.set_failed(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("run")
def run_command(
    only_new_issues: ONLY_NEW_ISSUES_OPTION = "false",
    github_token: GITHUB_TOKEN_OPTION = "",
    failure_severity: FAILURE_SEVERITY_OPTION = "notice",
    debug: DEBUG_OPTION = "",
    args: ARGS_OPTION = "",
    working_directory: WORKING_DIRECTORY_OPTION = "",
    version: VERSION_OPTION = "latest",
) -> None:
    """Prepare the environment, run golangci-lint and publish annotations."""

    logger = build_action_logger(debug=bool(debug.strip()))
    inputs = _load_or_exit(
        {
            "only_new_issues": only_new_issues,
            "github_token": github_token,
            "failure_severity": failure_severity,
            "debug": debug,
            "args": args,
            "working_directory": working_directory,
            "version": version,
        },
        logger,
    )
    try:
        context = RunContext.from_environ()
    except InvalidConfigError as exc:
        logger.set_failed(str(exc))
        raise typer.Exit(code=1) from exc

    with GitHubClient(context, inputs.github_token) as client:
        succeeded = run_action(inputs, context, logger, client=client)
    if not succeeded:
        raise typer.Exit(code=1)


@app.command("post-run")
def post_run_command(
    debug: DEBUG_OPTION = "",
    version: VERSION_OPTION = "latest",
) -> None:
    """Save the build cache once the workflow job is finishing."""

    logger = build_action_logger(debug=bool(debug.strip()))
    inputs = _load_or_exit({"debug": debug, "version": version}, logger)
    if not post_run(Collaborators.defaults(inputs, logger).cache, logger):
        raise typer.Exit(code=1)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]

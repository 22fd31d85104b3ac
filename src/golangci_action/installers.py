# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Collaborators that acquire golangci-lint, the Go toolchain and the build cache.

Downloading binaries and persisting caches belong to the hosting platform;
the defaults here locate already-installed executables on ``PATH`` and treat
the cache as a no-op so the pipeline can run on any prepared runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from shutil import which
from typing import Final, Protocol

from .errors import PreparationError
from .logging import ActionLogger

LINT_EXECUTABLE: Final[str] = "golangci-lint"
GO_EXECUTABLE: Final[str] = "go"


class VersionResolver(Protocol):
    """Resolve which golangci-lint version should be installed."""

    def resolve(self) -> str:
        """Return the version identifier."""
        ...


class LintInstaller(Protocol):
    """Install golangci-lint and report where its executable lives."""

    def install(self, version: str) -> Path:
        """Return the path to the installed executable."""
        ...


class ToolchainInstaller(Protocol):
    """Make the Go toolchain available to golangci-lint."""

    def install(self) -> None:
        """Install or verify the toolchain."""
        ...


class BuildCache(Protocol):
    """Restore and save the build and lint caches between runs."""

    def restore(self) -> None:
        """Restore cached state before linting."""
        ...

    def save(self) -> None:
        """Persist cached state after linting."""
        ...


@dataclass(frozen=True, slots=True)
class StaticVersionResolver:
    """Return the version requested through the ``version`` input."""

    version: str = "latest"

    def resolve(self) -> str:
        return self.version or "latest"


@dataclass(frozen=True, slots=True)
class PathLintInstaller:
    """Locate a pre-installed golangci-lint executable on ``PATH``."""

    logger: ActionLogger
    executable: str = LINT_EXECUTABLE

    def install(self, version: str) -> Path:
        """Return the executable path, logging the requested version.

        Args:
            version: Requested golangci-lint version; only reported.

        Returns:
            Path: Absolute path of the executable.

        Raises:
            PreparationError: If the executable is not on ``PATH``.
        """

        resolved = which(self.executable)
        if resolved is None:
            raise PreparationError(f"{self.executable} ({version}) was not found on PATH")
        self.logger.info(f"Using {self.executable} {version} from {resolved}")
        return Path(resolved)


@dataclass(frozen=True, slots=True)
class PathToolchainInstaller:
    """Verify that the Go toolchain is already on ``PATH``."""

    logger: ActionLogger
    executable: str = GO_EXECUTABLE

    def install(self) -> None:
        resolved = which(self.executable)
        if resolved is None:
            raise PreparationError(f"{self.executable} toolchain was not found on PATH")
        self.logger.debug(f"Using Go toolchain at {resolved}")


@dataclass(frozen=True, slots=True)
class NullBuildCache:
    """Cache implementation for hosts that manage caching themselves."""

    logger: ActionLogger

    def restore(self) -> None:
        self.logger.debug("Cache restore skipped: no cache backend configured")

    def save(self) -> None:
        self.logger.debug("Cache save skipped: no cache backend configured")


__all__ = [
    "BuildCache",
    "LintInstaller",
    "NullBuildCache",
    "PathLintInstaller",
    "PathToolchainInstaller",
    "StaticVersionResolver",
    "ToolchainInstaller",
    "VersionResolver",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Minimal GitHub REST client for pull request diffs and check runs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

import httpx

from .context import RunContext

DIFF_MEDIA_TYPE: Final[str] = "application/vnd.github.v3.diff"
JSON_MEDIA_TYPE: Final[str] = "application/vnd.github+json"
DEFAULT_TIMEOUT: Final[float] = 30.0


class GitHubClient:
    """Thin wrapper around :class:`httpx.Client` scoped to one repository."""

    def __init__(
        self,
        context: RunContext,
        token: str,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._context = context
        self._client = httpx.Client(
            base_url=context.api_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": JSON_MEDIA_TYPE,
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self._context.owner}/{self._context.repo}"

    def get_pull_request_diff(self, number: int) -> httpx.Response:
        """Request the unified diff of pull request ``number``.

        The response is returned as-is so callers can decide how to treat
        non-200 statuses.

        Args:
            number: Pull request number.

        Returns:
            httpx.Response: Raw API response whose body is the diff text.

        Raises:
            httpx.HTTPError: If the request cannot be sent.
        """

        return self._client.get(f"{self._repo_path}/pulls/{number}", headers={"Accept": DIFF_MEDIA_TYPE})

    def get_check_run(self, check_run_id: int) -> dict[str, object]:
        """Return the check run identified by ``check_run_id``.

        Raises:
            httpx.HTTPStatusError: If the API rejects the request.
            httpx.DecodingError: If the body is not a JSON object.
        """

        response = self._client.get(f"{self._repo_path}/check-runs/{check_run_id}")
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise httpx.DecodingError(f"check run {check_run_id} returned invalid json", request=response.request) from exc
        if not isinstance(payload, dict):
            raise httpx.DecodingError(f"check run {check_run_id} is not a json object", request=response.request)
        return payload

    def update_check_run(
        self,
        check_run_id: int,
        *,
        title: str,
        summary: str,
        annotations: Sequence[dict[str, object]],
    ) -> None:
        """Attach ``annotations`` to the check run output.

        Args:
            check_run_id: Identifier of the check run to update.
            title: Output title to keep on the check run.
            summary: Output summary to keep on the check run.
            annotations: Annotation payloads; the API accepts at most 50 per call.

        Raises:
            httpx.HTTPStatusError: If the API rejects the update.
        """

        response = self._client.patch(
            f"{self._repo_path}/check-runs/{check_run_id}",
            json={"output": {"title": title, "summary": summary, "annotations": list(annotations)}},
        )
        response.raise_for_status()

    def close(self) -> None:
        """Release pooled connections."""

        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["GitHubClient"]

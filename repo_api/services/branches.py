"""Branch lookups and creation through the git data API."""
from __future__ import annotations

from typing import Optional

from ..clients.github import ApiClient, expect_status
from ..errors import MalformedApiResponse
from ..utils.logging_utils import get_logger, logging_context

logger = get_logger("repo_api.services.branches")


class BranchResolver:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def latest_commit_sha(self, branch: str) -> Optional[str]:
        """Return the head commit SHA of ``branch``, or ``None`` when it does not exist."""

        resp = self._client.request("GET", self._client.repo_path("branches", branch))
        if resp.status_code == 404:
            with logging_context(repo=self._client.full_name, branch=branch):
                logger.debug("Branch not found")
            return None
        expect_status(resp, {200}, f"read branch {branch}")

        commit = resp.body.get("commit") if isinstance(resp.body, dict) else None
        sha = commit.get("sha") if isinstance(commit, dict) else None
        if not sha:
            raise MalformedApiResponse(f"Branch response for {branch!r} has no commit.sha")
        return sha

    def default_branch_name(self) -> str:
        resp = expect_status(
            self._client.request("GET", self._client.repo_path()),
            {200},
            "read repository",
        )
        name = resp.body.get("default_branch") if isinstance(resp.body, dict) else None
        if not name:
            raise MalformedApiResponse(f"Repository response for {self._client.full_name} has no default_branch")
        return name

    def create_branch(self, name: str, from_sha: str) -> None:
        payload = {"ref": f"refs/heads/{name}", "sha": from_sha}
        expect_status(
            self._client.request("POST", self._client.repo_path("git", "refs"), json_body=payload),
            {201},
            f"create branch {name}",
        )
        with logging_context(repo=self._client.full_name, branch=name, action="create_branch"):
            logger.info("Created branch", extra={"context": {"sha": from_sha}})

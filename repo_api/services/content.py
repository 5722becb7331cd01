"""Upload files to a repository branch, creating the branch when it is missing."""
from __future__ import annotations

import base64
import os
from pathlib import Path
from typing import Any, Optional, Union

from ..clients.github import ApiClient, expect_status
from ..errors import BranchBootstrapFailed, FileNotFound, FileReadError, UnexpectedApiResponse
from ..schemas import UploadOptions
from ..utils.logging_utils import get_logger, logging_context
from .branches import BranchResolver

logger = get_logger("repo_api.services.content")

PathLike = Union[str, os.PathLike]


class ContentPublisher:
    """Commits file content to a branch through the contents API.

    When the target branch does not exist it is created from the head of the
    repository's default branch first. A branch created this way is left in place
    if the upload itself fails; nothing is rolled back.
    """

    def __init__(self, client: ApiClient, branches: BranchResolver | None = None) -> None:
        self._client = client
        self._branches = branches or BranchResolver(client)

    def ensure_branch(self, branch: str) -> str:
        """Return the head SHA of ``branch``, creating it from the default branch if absent."""

        sha = self._branches.latest_commit_sha(branch)
        if sha is not None:
            return sha

        with logging_context(repo=self._client.full_name, branch=branch, action="bootstrap_branch"):
            default_branch = self._branches.default_branch_name()
            source_sha = self._branches.latest_commit_sha(default_branch)
            if source_sha is None:
                raise BranchBootstrapFailed(
                    f"Cannot create branch {branch!r}: default branch {default_branch!r} has no commits"
                )
            logger.info("Bootstrapping branch", extra={"context": {"source_branch": default_branch}})
            self._branches.create_branch(branch, source_sha)
        return source_sha

    def upload_file(
            self,
            local_path: PathLike,
            repo_path: str,
            options: Optional[UploadOptions] = None,
    ) -> dict[str, Any]:
        """Commit the file at ``local_path`` to ``repo_path`` and return the API response."""

        return self.upload_bytes(_read_file(Path(local_path)), repo_path, options)

    def upload_bytes(
            self,
            content: bytes,
            repo_path: str,
            options: Optional[UploadOptions] = None,
    ) -> dict[str, Any]:
        options = options or UploadOptions()
        self.ensure_branch(options.branch)

        payload = {
            "message": options.commit_message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": options.branch,
        }
        with logging_context(repo=self._client.full_name, branch=options.branch, path=repo_path):
            resp = self._client.request("PUT", self._client.repo_path("contents", repo_path), json_body=payload)
            try:
                expect_status(resp, {201}, f"upload {repo_path}")
            except UnexpectedApiResponse:
                logger.warning("Upload failed; branch is left as is")
                raise
            logger.info("Uploaded content", extra={"context": {"size": len(content)}})
        return resp.body


def _read_file(path: Path) -> bytes:
    if not path.exists():
        raise FileNotFound(f"File not found at path: {path}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"Failed to read file: {path}") from exc

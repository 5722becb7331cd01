"""Issue listing, creation, updates, comments and timelines for one repository.

An :class:`IssueService` is either *unbound* or *bound* to one issue number. Binding
fetches the issue and caches it so that partial updates can be merged against the
last known title, body, labels and assignees. The cache is not refreshed behind the
caller's back; a remote edit between fetch and update is overwritten by the update.

Instances are not safe for concurrent use. Use one service per logical task.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ..clients.github import ApiClient, expect_status
from ..errors import IssueNotBound, MalformedApiResponse
from ..schemas import Issue, IssueListFilters, IssueWrite
from ..utils.logging_utils import get_logger, logging_context

logger = get_logger("repo_api.services.issues")


@dataclass(frozen=True)
class Unbound:
    pass


@dataclass(frozen=True)
class Bound:
    issue_number: int
    issue: Issue


IssueBinding = Union[Unbound, Bound]


def _parse_issue(body: Any) -> Issue:
    try:
        return Issue.model_validate(body)
    except ValidationError as exc:
        raise MalformedApiResponse(f"Response is not a valid issue: {exc}") from exc


class IssueService:
    def __init__(self, client: ApiClient, issue_number: Optional[int] = None) -> None:
        self._client = client
        self._state: IssueBinding = Unbound()
        if issue_number:
            self.set_issue_number(issue_number)

    @property
    def state(self) -> IssueBinding:
        return self._state

    @property
    def issue_number(self) -> Optional[int]:
        return self._state.issue_number if isinstance(self._state, Bound) else None

    @property
    def issue(self) -> Issue:
        """The cached copy of the bound issue."""
        return self._require_bound().issue

    def _require_bound(self) -> Bound:
        if not isinstance(self._state, Bound):
            raise IssueNotBound()
        return self._state

    def _fetch(self, number: int) -> Issue:
        resp = expect_status(
            self._client.request("GET", self._client.repo_path("issues", str(number))),
            {200},
            f"fetch issue #{number}",
        )
        return _parse_issue(resp.body)

    def set_issue_number(self, issue_number: int) -> Issue:
        """Bind to ``issue_number``, replacing any previously cached issue."""

        if isinstance(issue_number, bool) or not isinstance(issue_number, int) or issue_number < 1:
            raise ValueError(f"Issue number must be a positive integer, got {issue_number!r}")
        issue = self._fetch(issue_number)
        self._state = Bound(issue_number=issue_number, issue=issue)
        with logging_context(repo=self._client.full_name, number=issue_number):
            logger.debug("Bound issue")
        return issue

    def refresh(self) -> Issue:
        """Re-fetch the bound issue and replace the cached copy."""
        return self.set_issue_number(self._require_bound().issue_number)

    def list_issues(self, filters: Optional[IssueListFilters] = None, **filter_kwargs: Any) -> list[Issue]:
        """List repository issues.

        Filters are given either as an :class:`IssueListFilters` or as keyword
        arguments of the same names; unknown names raise a ``ValidationError``.
        """

        if filters is None:
            filters = IssueListFilters(**filter_kwargs)
        elif filter_kwargs:
            filters = filters.model_copy(update=IssueListFilters(**filter_kwargs).model_dump(exclude_none=True))
        resp = expect_status(
            self._client.request("GET", self._client.repo_path("issues"), params=filters.to_params()),
            {200},
            "list issues",
        )
        if not isinstance(resp.body, list):
            raise MalformedApiResponse("Issue listing did not return a JSON array")
        return [_parse_issue(item) for item in resp.body]

    def create_issue(
            self,
            title: str,
            body: str,
            *,
            labels: Optional[list[str]] = None,
            assignees: Optional[list[str]] = None,
            type: Optional[str] = None,
            milestone: Optional[int] = None,
    ) -> Issue:
        """Open a new issue and bind this service to it.

        ``labels`` and ``assignees`` are always sent, as empty lists when omitted.
        """

        payload = IssueWrite(
            title=title,
            body=body,
            labels=list(labels or []),
            assignees=list(assignees or []),
            type=type,
            milestone=milestone,
        ).to_payload()
        resp = expect_status(
            self._client.request("POST", self._client.repo_path("issues"), json_body=payload),
            {201},
            "create issue",
        )
        issue = _parse_issue(resp.body)
        self._state = Bound(issue_number=issue.number, issue=issue)
        with logging_context(repo=self._client.full_name, number=issue.number, action="create_issue"):
            logger.info("Created issue")
        return issue

    def update_issue(
            self,
            *,
            title: Optional[str] = None,
            body: Optional[str] = None,
            labels: Optional[list[str]] = None,
            assignees: Optional[list[str]] = None,
            type: Optional[str] = None,
            state: Optional[str] = None,
            state_reason: Optional[str] = None,
            milestone: Optional[int] = None,
    ) -> Issue:
        """Patch the bound issue. Fields left as ``None`` keep their cached values.

        ``None`` always means "unchanged", so this method cannot send an explicit
        ``null``: a milestone or body cannot be cleared through it. Pass ``labels=[]``
        or ``assignees=[]`` to clear those lists.
        """

        bound = self._require_bound()
        cached = bound.issue
        payload: dict[str, Any] = {
            "title": cached.title,
            "body": cached.body,
            "labels": cached.label_names(),
            "assignees": cached.assignee_logins(),
        }
        payload.update(
            IssueWrite(
                title=title,
                body=body,
                labels=labels,
                assignees=assignees,
                type=type,
                state=state,
                state_reason=state_reason,
                milestone=milestone,
            ).to_payload()
        )
        resp = expect_status(
            self._client.request(
                "PATCH", self._client.repo_path("issues", str(bound.issue_number)), json_body=payload
            ),
            {200},
            f"update issue #{bound.issue_number}",
        )
        issue = _parse_issue(resp.body)
        self._state = Bound(issue_number=bound.issue_number, issue=issue)
        with logging_context(repo=self._client.full_name, number=bound.issue_number, action="update_issue"):
            logger.info("Updated issue", extra={"context": {"fields": sorted(payload)}})
        return issue

    def comment(self, text: str, extra: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Post a comment on the bound issue.

        ``extra`` is merged over ``{"body": text}`` as given. Both 200 and 201 count as success.
        """

        bound = self._require_bound()
        payload: dict[str, Any] = {"body": text, **(extra or {})}
        resp = expect_status(
            self._client.request(
                "POST",
                self._client.repo_path("issues", str(bound.issue_number), "comments"),
                json_body=payload,
            ),
            {200, 201},
            f"comment on issue #{bound.issue_number}",
        )
        with logging_context(repo=self._client.full_name, number=bound.issue_number, action="create_comment"):
            logger.info("Created comment")
        return resp.body

    def get_timeline(self) -> list[dict[str, Any]]:
        bound = self._require_bound()
        resp = expect_status(
            self._client.request("GET", self._client.repo_path("issues", str(bound.issue_number), "timeline")),
            {200},
            f"read timeline of issue #{bound.issue_number}",
        )
        if not isinstance(resp.body, list):
            raise MalformedApiResponse("Timeline did not return a JSON array")
        return resp.body

    def get_available_labels(self) -> set[str]:
        """Names of every label defined on the repository."""

        resp = expect_status(
            self._client.request("GET", self._client.repo_path("labels")),
            {200},
            "list labels",
        )
        if not isinstance(resp.body, list):
            raise MalformedApiResponse("Label listing did not return a JSON array")
        return {item["name"] for item in resp.body if isinstance(item, dict) and "name" in item}

    def labels(self) -> set[str]:
        return set(self.issue.label_names())

    def assignees(self) -> set[str]:
        return set(self.issue.assignee_logins())

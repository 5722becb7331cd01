"""Pydantic schemas for the GitHub resources and per-operation options."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class Label(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    login: str


class Issue(BaseModel):
    """An issue as returned by the REST API; unknown fields are preserved."""

    model_config = ConfigDict(extra="allow")

    number: PositiveInt
    title: str = ""
    body: Optional[str] = None
    state: Optional[str] = None
    labels: list[Label] = Field(default_factory=list)
    assignees: list[User] = Field(default_factory=list)

    @field_validator("labels", mode="before")
    @classmethod
    def _labels_from_names(cls, value: Any) -> Any:
        if value is None:
            return []
        return [{"name": item} if isinstance(item, str) else item for item in value]

    @field_validator("assignees", mode="before")
    @classmethod
    def _assignees_default(cls, value: Any) -> Any:
        return [] if value is None else value

    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]

    def assignee_logins(self) -> list[str]:
        return [user.login for user in self.assignees]


class IssueListFilters(BaseModel):
    """Query filters for listing repository issues. Unset filters are never sent."""

    model_config = ConfigDict(extra="forbid")

    state: Optional[Literal["open", "closed", "all"]] = None
    labels: Optional[list[str]] = None
    sort: Optional[Literal["created", "updated", "comments"]] = None
    direction: Optional[Literal["asc", "desc"]] = None
    per_page: Optional[int] = Field(default=None, ge=1, le=100)
    page: Optional[PositiveInt] = None
    milestone: Optional[str] = None
    assignee: Optional[str] = None
    type: Optional[str] = None
    creator: Optional[str] = None
    mentioned: Optional[str] = None
    since: Optional[datetime] = None

    @field_validator("milestone", mode="before")
    @classmethod
    def _milestone_as_text(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if key == "labels":
                if value:
                    params[key] = ",".join(value)
            elif key == "since":
                params[key] = _iso8601(value)
            else:
                params[key] = str(value)
        return params


def _iso8601(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class IssueWrite(BaseModel):
    """Fields accepted when creating or updating an issue."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    body: Optional[str] = None
    labels: Optional[list[str]] = None
    assignees: Optional[list[str]] = None
    type: Optional[str] = None
    state: Optional[Literal["open", "closed"]] = None
    state_reason: Optional[Literal["completed", "not_planned", "reopened"]] = None
    milestone: Optional[int] = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class UploadOptions(BaseModel):
    """Commit settings for a content upload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    commit_message: str = Field(default="Add file via API", min_length=1)
    branch: str = Field(default="main", min_length=1)

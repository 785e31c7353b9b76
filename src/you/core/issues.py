"""Tracker issue records - no I/O dependencies."""

from dataclasses import dataclass, field
from enum import Enum

from ..errors import DecodeError


class ExpandField(Enum):
    """Extra issue fields the tracker can include in a response."""

    TRANSITIONS = "transitions"
    ATTACHMENTS = "attachments"
    COMMENTS = "comments"


def join_expand(fields: list[ExpandField]) -> str:
    """Serialize expand fields as the comma-joined query value."""
    return ",".join(f.value for f in fields)


@dataclass
class User:
    self_link: str | None = None
    id: str | None = None
    display: str | None = None
    passport_uid: int | None = None
    cloud_uid: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "User":
        return cls(
            self_link=data.get("self"),
            id=data.get("id"),
            display=data.get("display"),
            passport_uid=data.get("passportUid"),
            cloud_uid=data.get("cloudUid"),
        )


@dataclass
class Reference:
    """A keyed tracker reference: status, priority, issue type, queue."""

    self_link: str | None = None
    id: str | None = None
    key: str | None = None
    display: str | None = None

    @classmethod
    def from_api(cls, data: dict):
        return cls(
            self_link=data.get("self"),
            id=data.get("id"),
            key=data.get("key"),
            display=data.get("display"),
        )


class Status(Reference):
    pass


class Priority(Reference):
    pass


class IssueType(Reference):
    pass


class Queue(Reference):
    pass


class ParentIssue(Reference):
    pass


@dataclass
class Sprint:
    self_link: str | None = None
    id: str | None = None
    display: str | None = None

    @classmethod
    def from_api(cls, data: dict):
        return cls(self_link=data.get("self"), id=data.get("id"), display=data.get("display"))


class ProjectInfo(Sprint):
    pass


@dataclass
class Project:
    """Primary and secondary projects of an issue."""

    primary: ProjectInfo | None = None
    secondary: list[ProjectInfo] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Project":
        return cls(
            primary=_optional(ProjectInfo, data.get("primary")),
            secondary=[ProjectInfo.from_api(p) for p in data.get("secondary") or []],
        )


def _optional(model, data: dict | None):
    return model.from_api(data) if data else None


@dataclass
class Issue:
    """
    A work item as returned by the tracker API.

    Only `key` and `summary` are required. Everything else mirrors the
    upstream JSON and defaults to absent / empty.
    """

    key: str
    summary: str
    self_link: str | None = None
    id: str | None = None
    version: int | None = None
    last_comment_updated_at: str | None = None
    parent: ParentIssue | None = None
    aliases: list[str] = field(default_factory=list)
    updated_by: User | None = None
    description: str | None = None
    sprint: list[Sprint] = field(default_factory=list)
    issue_type: IssueType | None = None
    priority: Priority | None = None
    created_at: str | None = None
    followers: list[User] = field(default_factory=list)
    created_by: User | None = None
    votes: int = 0
    assignee: User | None = None
    project: Project | None = None
    queue: Queue | None = None
    updated_at: str | None = None
    status: Status | None = None
    previous_status: Status | None = None
    favorite: bool = False
    tags: list[str] = field(default_factory=list)

    @property
    def status_display(self) -> str | None:
        return self.status.display if self.status else None

    @classmethod
    def from_api(cls, data: dict) -> "Issue":
        """Create Issue from tracker API response."""
        if not isinstance(data, dict):
            raise DecodeError(f"Expected issue object, got {type(data).__name__}")
        try:
            key = data["key"]
            summary = data["summary"]
        except KeyError as e:
            raise DecodeError(f"Issue is missing required field {e}") from e

        return cls(
            key=key,
            summary=summary,
            self_link=data.get("self"),
            id=data.get("id"),
            version=data.get("version"),
            last_comment_updated_at=data.get("lastCommentUpdatedAt"),
            parent=_optional(ParentIssue, data.get("parent")),
            aliases=list(data.get("aliases") or []),
            updated_by=_optional(User, data.get("updatedBy")),
            description=data.get("description"),
            sprint=[Sprint.from_api(s) for s in data.get("sprint") or []],
            issue_type=_optional(IssueType, data.get("type")),
            priority=_optional(Priority, data.get("priority")),
            created_at=data.get("createdAt"),
            followers=[User.from_api(u) for u in data.get("followers") or []],
            created_by=_optional(User, data.get("createdBy")),
            votes=data.get("votes") or 0,
            assignee=_optional(User, data.get("assignee")),
            project=_optional(Project, data.get("project")),
            queue=_optional(Queue, data.get("queue")),
            updated_at=data.get("updatedAt"),
            status=_optional(Status, data.get("status")),
            previous_status=_optional(Status, data.get("previousStatus")),
            favorite=bool(data.get("favorite", False)),
            tags=list(data.get("tags") or []),
        )


def issues_from_api(data) -> list[Issue]:
    """Decode a JSON array of issues."""
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list of issues, got {type(data).__name__}")
    return [Issue.from_api(item) for item in data]


def format_issue_output(issue: Issue, link_base: str = "https://st.yandex-team.ru") -> str:
    """
    Format an issue as a readable text block.

    Pure function - no I/O.
    """
    status = issue.status_display or "Unknown"
    description = issue.description or "No description"
    description_md = "\n".join(f"   {line}" for line in description.splitlines()) or "   "

    return f"""Issue: {issue.key}

Summary:
   {issue.summary}

Status: {status}

Description:
{description_md}

Link:
   {link_base.rstrip("/")}/{issue.key}"""

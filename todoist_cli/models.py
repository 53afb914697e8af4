"""
Typed models for Todoist entities and parsed references.

Remote payloads are loosely shaped (snake_case from the REST/Sync APIs,
camelCase from SDK-style proxies, fields added and renamed between API
versions). Everything is coerced once here, so the rest of the package only
touches attributes.
"""

from __future__ import annotations

from dataclasses import dataclass

from todoist_cli import config
from todoist_cli._utils import _first_field, _get_field
from todoist_cli.exceptions import RemoteFailure


def _expect_object(value, entity):
    if isinstance(value, dict):
        return value
    raise RemoteFailure(
        f"Unexpected {entity} payload from Todoist API: "
        f"expected JSON object, got {type(value).__name__}."
    )


def _expect_id(data, entity):
    """The entity id; a payload without one is not a single entity."""
    value = data.get("id")
    if value is None or value == "":
        raise RemoteFailure(f"Unexpected {entity} payload from Todoist API: missing 'id'.")
    return str(value)


def _opt_str(value):
    if value is None or value == "":
        return None
    return str(value)


def _as_bool(value):
    return bool(value) if value is not None else False


@dataclass(frozen=True)
class Due:
    date: str | None = None
    datetime: str | None = None
    string: str | None = None
    is_recurring: bool = False

    @classmethod
    def from_api(cls, value):
        if not value:
            return None
        data = _expect_object(value, "due")
        return cls(
            date=_opt_str(data.get("date")),
            datetime=_opt_str(data.get("datetime")),
            string=_opt_str(data.get("string")),
            is_recurring=_as_bool(_get_field(data, "is_recurring", "isRecurring")),
        )


@dataclass(frozen=True)
class Task:
    id: str
    content: str
    description: str = ""
    priority: int = 1
    due: Due | None = None
    deadline: str | None = None
    labels: tuple[str, ...] = ()
    project_id: str | None = None
    section_id: str | None = None
    parent_id: str | None = None
    url: str = ""

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "task")
        tid = _expect_id(data, "task")
        deadline = data.get("deadline")
        if isinstance(deadline, dict):
            deadline = deadline.get("date")
        try:
            priority = int(data.get("priority") or 1)
        except (TypeError, ValueError):
            priority = 1
        return cls(
            id=tid,
            content=str(data.get("content") or ""),
            description=str(data.get("description") or ""),
            priority=priority,
            due=Due.from_api(data.get("due")),
            deadline=_opt_str(deadline),
            labels=tuple(str(label) for label in data.get("labels") or ()),
            project_id=_opt_str(_get_field(data, "project_id", "projectId")),
            section_id=_opt_str(_get_field(data, "section_id", "sectionId")),
            parent_id=_opt_str(_get_field(data, "parent_id", "parentId")),
            url=str(data.get("url") or f"{config.APP_URL}/task/{tid}"),
        )


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    color: str | None = None
    is_inbox: bool = False
    is_favorite: bool = False
    parent_id: str | None = None
    url: str = ""

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "project")
        pid = _expect_id(data, "project")
        return cls(
            id=pid,
            name=str(data.get("name") or ""),
            color=_opt_str(data.get("color")),
            is_inbox=_as_bool(
                _first_field(data, "is_inbox_project", "inbox_project", "isInboxProject")
            ),
            is_favorite=_as_bool(_get_field(data, "is_favorite", "isFavorite")),
            parent_id=_opt_str(_get_field(data, "parent_id", "parentId")),
            url=str(data.get("url") or f"{config.APP_URL}/project/{pid}"),
        )


@dataclass(frozen=True)
class Section:
    id: str
    name: str
    project_id: str | None = None
    order: int | None = None

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "section")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            project_id=_opt_str(_get_field(data, "project_id", "projectId")),
            order=_first_field(data, "order", "section_order", "childOrder"),
        )


@dataclass(frozen=True)
class Label:
    id: str
    name: str
    color: str | None = None
    is_favorite: bool = False

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "label")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            color=_opt_str(data.get("color")),
            is_favorite=_as_bool(_get_field(data, "is_favorite", "isFavorite")),
        )


@dataclass(frozen=True)
class Attachment:
    file_name: str | None = None


@dataclass(frozen=True)
class Comment:
    id: str
    content: str
    posted_at: str | None = None
    task_id: str | None = None
    project_id: str | None = None
    attachment: Attachment | None = None

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "comment")
        raw_attachment = _first_field(data, "file_attachment", "fileAttachment", "attachment")
        attachment = None
        if isinstance(raw_attachment, dict):
            attachment = Attachment(
                file_name=_opt_str(_get_field(raw_attachment, "file_name", "fileName"))
            )
        return cls(
            id=str(data.get("id", "")),
            content=str(data.get("content") or ""),
            posted_at=_opt_str(_get_field(data, "posted_at", "postedAt")),
            task_id=_opt_str(_first_field(data, "task_id", "item_id", "taskId")),
            project_id=_opt_str(_get_field(data, "project_id", "projectId")),
            attachment=attachment,
        )


@dataclass(frozen=True)
class Reminder:
    """Exactly one of minute_offset / due is populated by the remote system."""

    id: str
    task_id: str | None = None
    minute_offset: int | None = None
    due: dict | None = None
    is_deleted: bool = False

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "reminder")
        due = data.get("due")
        return cls(
            id=str(data.get("id", "")),
            task_id=_opt_str(_first_field(data, "item_id", "task_id", "itemId")),
            minute_offset=_get_field(data, "minute_offset", "minuteOffset"),
            due=due if isinstance(due, dict) else None,
            is_deleted=_as_bool(_get_field(data, "is_deleted", "isDeleted")),
        )


@dataclass(frozen=True)
class ActivityEvent:
    id: str
    event_type: str | None = None
    object_type: str | None = None
    object_id: str | None = None
    event_date: str | None = None
    parent_project_id: str | None = None
    extra_data: dict | None = None

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "activity event")
        extra = _get_field(data, "extra_data", "extraData")
        return cls(
            id=str(data.get("id", "")),
            event_type=_opt_str(_get_field(data, "event_type", "eventType")),
            object_type=_opt_str(_get_field(data, "object_type", "objectType")),
            object_id=_opt_str(_get_field(data, "object_id", "objectId")),
            event_date=_opt_str(_get_field(data, "event_date", "eventDate")),
            parent_project_id=_opt_str(_get_field(data, "parent_project_id", "parentProjectId")),
            extra_data=extra if isinstance(extra, dict) else None,
        )


@dataclass(frozen=True)
class CompletedTask:
    id: str
    content: str
    completed_at: str | None = None
    project_id: str | None = None

    @classmethod
    def from_api(cls, value):
        data = _expect_object(value, "completed task")
        return cls(
            id=str(_first_field(data, "id", "task_id", "taskId") or ""),
            content=str(data.get("content") or ""),
            completed_at=_opt_str(
                _first_field(data, "completed_at", "completedAt", "completed_date")
            ),
            project_id=_opt_str(_get_field(data, "project_id", "projectId")),
        )


# ---------------------------------------------------------------------------
# Parsed references
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Reference:
    """One-shot parsed intent of a user ref: a URL id, an explicit id, or a query."""

    kind: str  # "url" | "id" | "query"
    value: str
    url_kind: str | None = None

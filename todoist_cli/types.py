"""Typed response definitions for TodoistClient methods.

These TypedDicts document the shape of dicts returned by public API methods.
They are optional; runtime behavior is unchanged (plain dicts).
Keys use the camelCase names of the JSON output contract.
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# Entity records
# ---------------------------------------------------------------------------


class TaskRecord(TypedDict, total=False):
    """Formatted task. description/labels/sectionId/parentId may be absent."""

    id: str
    content: str
    description: str
    priority: int
    due: str | None
    dueString: str | None
    isRecurring: bool
    deadline: str | None
    labels: list[str]
    projectId: str | None
    sectionId: str
    parentId: str
    url: str


class TaskStub(TypedDict):
    id: str
    content: str


class CommentRecord(TypedDict, total=False):
    id: str
    content: str
    postedAt: str | None
    taskId: str
    projectId: str
    hasAttachment: bool
    attachmentName: str


class ProjectRow(TypedDict):
    id: str
    name: str
    color: str | None
    isInbox: bool
    isFavorite: bool
    url: str


class ReminderRow(TypedDict):
    id: str
    minuteOffset: int | None
    due: dict | None


# ---------------------------------------------------------------------------
# Command results
# ---------------------------------------------------------------------------


class TaskListResult(TypedDict):
    count: int
    tasks: list[TaskRecord]


class CountOnly(TypedDict):
    count: int


class ProjectCount(TypedDict):
    id: str
    name: str
    taskCount: int


class ReviewResult(TypedDict):
    """Return type of TodoistClient.review()."""

    today: TaskListResult
    inbox: TaskListResult
    overdue: TaskListResult
    floating: CountOnly
    projects: list[ProjectCount]
    total: int


class NextAction(TypedDict):
    command: str
    description: str

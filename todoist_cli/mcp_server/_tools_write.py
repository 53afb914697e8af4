"""Write tools: task, comment and reminder mutations."""

from __future__ import annotations

from todoist_cli.mcp_server._core import _call


def add_task(
    content: str,
    description: str | None = None,
    due: str | None = None,
    deadline: str | None = None,
    priority: int | None = None,
    labels: list[str] | None = None,
    project: str | None = None,
    section: str | None = None,
    parent: str | None = None,
) -> dict:
    """Create a task.

    Args:
        content: Task title.
        due: Natural language due string, e.g. 'tomorrow 9am'.
        deadline: YYYY-MM-DD.
        priority: 1-4, 4 is most urgent.
        project: Project name, URL, id:<id> or raw id. Defaults to the inbox.
        section: Section id.
        parent: Parent task id.

    Returns:
        The created task.
    """
    return _call(
        "add_task",
        content,
        description=description,
        due=due,
        deadline=deadline,
        priority=priority,
        labels=labels,
        project=project,
        section=section,
        parent=parent,
    )


def complete_task(ref: str) -> dict:
    return _call("complete_task", ref)


def reopen_task(ref: str) -> dict:
    return _call("reopen_task", ref)


def update_task(
    ref: str,
    content: str | None = None,
    description: str | None = None,
    due: str | None = None,
    deadline: str | None = None,
    priority: int | None = None,
    labels: list[str] | None = None,
) -> dict:
    """Update task fields. At least one field must be given."""
    return _call(
        "update_task",
        ref,
        content=content,
        description=description,
        due=due,
        deadline=deadline,
        priority=priority,
        labels=labels,
    )


def move_task(
    ref: str,
    project: str | None = None,
    section: str | None = None,
    parent: str | None = None,
) -> dict:
    """Move a task to a project (ref), section (id) or parent task (id)."""
    return _call("move_task", ref, project=project, section=section, parent=parent)


def delete_task(ref: str) -> dict:
    """Delete a task permanently."""
    return _call("delete_task", ref)


def add_comment(ref: str, content: str) -> dict:
    return _call("add_comment", ref, content)


def add_reminder(ref: str, before: str | None = None, at: str | None = None) -> dict:
    """Add a reminder. Give exactly one of before or at.

    Args:
        before: Duration before the task's due, e.g. '30m', '1h', '2h30m'.
            The task must have a due date.
        at: Absolute datetime, e.g. '2026-02-20T10:00'.
    """
    return _call("add_reminder", ref, before=before, at=at)


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(add_task)
    mcp.tool()(complete_task)
    mcp.tool()(reopen_task)
    mcp.tool()(update_task)
    mcp.tool()(move_task)
    mcp.tool()(delete_task)
    mcp.tool()(add_comment)
    mcp.tool()(add_reminder)

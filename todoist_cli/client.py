"""
TodoistClient — public Python API for managing Todoist tasks.

Single entry point for programmatic use, the CLI commands and the MCP server.
All methods return flat dicts suitable for JSON serialization and raise
CliError subclasses on failure.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

# TypedDict return types live in todoist_cli.types for documentation.
# Method signatures use plain dict[str, Any] for mypy compatibility.
from typing import Any

from todoist_cli import config
from todoist_cli._utils import _date_component, _parse_int, _split_csv, parse_duration
from todoist_cli.api import TodoistApi
from todoist_cli.exceptions import NotFound, UsageError
from todoist_cli.formatters import (
    format_activity_event,
    format_comment,
    format_completed_task,
    format_label,
    format_project,
    format_reminder,
    format_section,
    format_task,
    task_stub,
)
from todoist_cli.resolver import resolve_project, resolve_task, strip_id_prefix

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _priority(value):
    """Validate a 1-4 priority; stored as-is, no p1-p4 remapping."""
    if value is None:
        return None
    parsed = _parse_int(value, "priority")
    if parsed not in config.VALID_PRIORITIES:
        raise UsageError(f"Invalid --priority '{value}'. Use 1, 2, 3 or 4 (4 is most urgent).")
    return parsed


def _labels(value):
    if value is None:
        return None
    if isinstance(value, str):
        return _split_csv(value)
    return [str(v).strip() for v in value if str(v).strip()]


def _optional_int(value, flag):
    return None if value is None else _parse_int(value, flag)


def _task_list(tasks):
    return {"count": len(tasks), "tasks": [format_task(t) for t in tasks]}


def _find_inbox(projects):
    return next((p for p in projects if p.is_inbox), None)


def _due_day(task):
    if task.due is None:
        return None
    return _date_component(task.due.date or task.due.datetime)


def partition_review(today_tasks, all_tasks, projects, today):
    """Split the full listing into inbox / overdue / floating plus per-project counts.

    Overdue compares calendar dates only: a task due *today* is not overdue.
    """
    inbox = _find_inbox(projects)
    inbox_tasks = [t for t in all_tasks if inbox and t.project_id == inbox.id]
    overdue = [t for t in all_tasks if t.due is not None and (_due_day(t) or today) < today]
    floating = [t for t in all_tasks if t.due is None]
    counts: dict[str | None, int] = {}
    for t in all_tasks:
        counts[t.project_id] = counts.get(t.project_id, 0) + 1
    return {
        "today": _task_list(today_tasks),
        "inbox": _task_list(inbox_tasks),
        "overdue": _task_list(overdue),
        "floating": {"count": len(floating)},
        "projects": [
            {"id": p.id, "name": p.name, "taskCount": counts.get(p.id, 0)}
            for p in projects
            if not p.is_inbox
        ],
        "total": len(all_tasks),
    }


# ---------------------------------------------------------------------------
# TodoistClient
# ---------------------------------------------------------------------------


class TodoistClient:
    """Public API surface for Todoist.

    All methods use keyword-only options and return plain dicts suitable
    for JSON serialization. Raises CliError subclasses on failure.
    """

    def __init__(self, api=None, *, credentials=None):
        """Initialize the client.

        Args:
            api: A ready TodoistApi (tests pass a fake). Built on demand
                from *credentials* otherwise.
            credentials: CredentialProvider used to obtain the API token.
        """
        self.api = api if api is not None else TodoistApi(credentials)

    # -------------------------------------------------------------------
    # Task reads
    # -------------------------------------------------------------------

    def today(self) -> dict[str, Any]:
        """Tasks matching the 'today' filter (due today plus overdue)."""
        return _task_list(self.api.filter_tasks("today"))

    def inbox(self) -> dict[str, Any]:
        """Tasks in the inbox project."""
        inbox = _find_inbox(self.api.get_projects())
        if inbox is None:
            raise NotFound("No inbox project found")
        result = _task_list(self.api.get_tasks(project_id=inbox.id))
        return {"count": result["count"], "projectId": inbox.id, "tasks": result["tasks"]}

    def search(self, query: str) -> dict[str, Any]:
        tasks = self.api.filter_tasks(f"search: {query}", limit=config.SEARCH_LIMIT)
        return {"query": query, **_task_list(tasks)}

    def list_tasks(
        self,
        *,
        filter_query: str | None = None,
        project: str | None = None,
        label: str | None = None,
    ) -> dict[str, Any]:
        """List tasks by filter query, project ref, or label (first one given wins).

        Returns:
            dict with 'filter' (human label of what was listed), 'count', 'tasks'.
        """
        if filter_query:
            tasks = self.api.filter_tasks(filter_query)
            description = f"filter: {filter_query}"
        elif project:
            proj = resolve_project(self.api, project)
            tasks = self.api.get_tasks(project_id=proj.id)
            description = f"project: {proj.name}"
        else:
            tasks = self.api.get_tasks(label=label or None)
            description = f"label: {label}" if label else "all"
        return {"filter": description, **_task_list(tasks)}

    def show_task(self, ref: str) -> dict[str, Any]:
        """Full task record plus its comments."""
        task = resolve_task(self.api, ref)
        comments = self.api.get_comments(task_id=task.id)
        detail = format_task(task)
        detail["comments"] = [format_comment(c) for c in comments]
        return detail

    # -------------------------------------------------------------------
    # Task mutations
    # -------------------------------------------------------------------

    def add_task(
        self,
        content: str,
        *,
        description: str | None = None,
        due: str | None = None,
        deadline: str | None = None,
        priority: int | str | None = None,
        labels: str | list[str] | None = None,
        project: str | None = None,
        section: str | None = None,
        parent: str | None = None,
    ) -> dict[str, Any]:
        """Create a task. *project* is a ref; *section* and *parent* are ids."""
        if not content or not content.strip():
            raise UsageError("Task content cannot be empty.")
        project_id = resolve_project(self.api, project).id if project else None
        task = self.api.add_task(
            content,
            description=description or None,
            due_string=due or None,
            deadline_date=deadline or None,
            priority=_priority(priority),
            labels=_labels(labels),
            project_id=project_id,
            section_id=strip_id_prefix(section) if section else None,
            parent_id=strip_id_prefix(parent) if parent else None,
        )
        return format_task(task)

    def complete_task(self, ref: str) -> dict[str, Any]:
        task = resolve_task(self.api, ref)
        self.api.close_task(task.id)
        return {"completed": format_task(task)}

    def reopen_task(self, ref: str) -> dict[str, Any]:
        task = resolve_task(self.api, ref)
        self.api.reopen_task(task.id)
        return {"task": format_task(task)}

    def update_task(
        self,
        ref: str,
        *,
        content: str | None = None,
        description: str | None = None,
        due: str | None = None,
        deadline: str | None = None,
        priority: int | str | None = None,
        labels: str | list[str] | None = None,
    ) -> dict[str, Any]:
        fields = {
            "content": content,
            "description": description,
            "due_string": due,
            "deadline_date": deadline,
            "priority": _priority(priority),
            "labels": _labels(labels),
        }
        fields = {k: v for k, v in fields.items() if v is not None}
        if not fields:
            raise UsageError(
                "No update flags provided. Use --content, --description, --due, "
                "--deadline, --priority or --labels."
            )
        task = resolve_task(self.api, ref)
        return format_task(self.api.update_task(task.id, **fields))

    def move_task(
        self,
        ref: str,
        *,
        project: str | None = None,
        section: str | None = None,
        parent: str | None = None,
    ) -> dict[str, Any]:
        if not (project or section or parent):
            raise UsageError(
                f"Usage: {config.PROG} move <ref> --project NAME | --section ID | --parent ID"
            )
        task = resolve_task(self.api, ref)
        project_id = resolve_project(self.api, project).id if project else None
        moved = self.api.move_task(
            task.id,
            project_id=project_id,
            section_id=strip_id_prefix(section) if section else None,
            parent_id=strip_id_prefix(parent) if parent else None,
        )
        return format_task(moved)

    def delete_task(self, ref: str) -> dict[str, Any]:
        task = resolve_task(self.api, ref)
        self.api.delete_task(task.id)
        return {"deleted": task_stub(task)}

    # -------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------

    def list_comments(self, ref: str) -> dict[str, Any]:
        task = resolve_task(self.api, ref)
        comments = self.api.get_comments(task_id=task.id)
        return {
            "taskId": task.id,
            "taskContent": task.content,
            "count": len(comments),
            "comments": [format_comment(c) for c in comments],
        }

    def add_comment(self, ref: str, content: str) -> dict[str, Any]:
        if not content:
            raise UsageError("Comment content is required (--content 'text').")
        task = resolve_task(self.api, ref)
        comment = self.api.add_comment(task_id=task.id, content=content)
        return {"task": task_stub(task), "comment": format_comment(comment)}

    def update_comment(self, comment_id: str, content: str) -> dict[str, Any]:
        if not content:
            raise UsageError("Comment content is required (--content 'text').")
        cid = strip_id_prefix(comment_id)
        self.api.update_comment(cid, content=content)
        return {"comment": format_comment(self.api.get_comment(cid))}

    def delete_comment(self, comment_id: str) -> dict[str, Any]:
        cid = strip_id_prefix(comment_id)
        comment = self.api.get_comment(cid)
        self.api.delete_comment(cid)
        return {"deleted": {"id": comment.id, "content": comment.content[:80]}}

    # -------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------

    def list_reminders(self, ref: str) -> dict[str, Any]:
        task = resolve_task(self.api, ref)
        reminders = [
            r for r in self.api.get_reminders() if r.task_id == task.id and not r.is_deleted
        ]
        return {
            "task": task_stub(task),
            "count": len(reminders),
            "reminders": [format_reminder(r) for r in reminders],
        }

    def add_reminder(
        self,
        ref: str,
        *,
        before: str | None = None,
        at: str | None = None,
    ) -> dict[str, Any]:
        """Add a reminder *before* the task's due (duration) or *at* an absolute time.

        Exactly one of the two must be given. A relative reminder needs the
        task to carry a due value.
        """
        if not before and not at:
            raise UsageError("Must specify --before <duration> or --at <datetime>")
        if before and at:
            raise UsageError("Use either --before or --at, not both.")
        minutes = parse_duration(before) if before else None

        task = resolve_task(self.api, ref)
        if minutes is not None and task.due is None:
            raise UsageError("Cannot use --before: task has no due date. Use --at instead.")

        reminder_id = self.api.add_reminder(
            task.id,
            minute_offset=minutes,
            due={"date": at} if at else None,
        )
        result = {
            "task": task_stub(task),
            "reminder": f"{before} before due" if before else f"at {at}",
        }
        if reminder_id:
            result["reminderId"] = str(reminder_id)
        return result

    def delete_reminder(self, reminder_id: str) -> dict[str, Any]:
        rid = strip_id_prefix(reminder_id)
        self.api.delete_reminder(rid)
        return {"deleted": {"id": rid}}

    # -------------------------------------------------------------------
    # Activity / completed
    # -------------------------------------------------------------------

    def activity(
        self,
        *,
        since: str | None = None,
        until: str | None = None,
        object_type: str | None = None,
        event_type: str | None = None,
        project: str | None = None,
        limit: int | str | None = None,
    ) -> dict[str, Any]:
        parent_project_id = resolve_project(self.api, project).id if project else None
        events = self.api.get_activity(
            object_type=object_type,
            event_type=event_type,
            parent_project_id=parent_project_id,
            since=since,
            until=until,
            limit=_optional_int(limit, "limit"),
        )
        return {"count": len(events), "events": [format_activity_event(e) for e in events]}

    def completed(
        self,
        *,
        since: str | None = None,
        until: str | None = None,
        project: str | None = None,
        limit: int | str | None = None,
        today: date | None = None,
    ) -> dict[str, Any]:
        """Tasks completed in [since, until); defaults to today's local date."""
        today = today or date.today()
        since = since or today.isoformat()
        until = until or (today + timedelta(days=1)).isoformat()
        project_id = resolve_project(self.api, project).id if project else None
        tasks = self.api.get_completed_tasks(
            since=since,
            until=until,
            project_id=project_id,
            limit=_optional_int(limit, "limit"),
        )
        return {
            "period": {"since": since, "until": until},
            "count": len(tasks),
            "tasks": [format_completed_task(t) for t in tasks],
        }

    # -------------------------------------------------------------------
    # Organization
    # -------------------------------------------------------------------

    def list_projects(self) -> dict[str, Any]:
        projects = self.api.get_projects()
        return {"count": len(projects), "projects": [format_project(p) for p in projects]}

    def list_sections(self, *, project: str | None = None) -> dict[str, Any]:
        project_id = resolve_project(self.api, project).id if project else None
        sections = self.api.get_sections(project_id=project_id)
        return {"count": len(sections), "sections": [format_section(s) for s in sections]}

    def list_labels(self) -> dict[str, Any]:
        labels = self.api.get_labels()
        return {"count": len(labels), "labels": [format_label(label) for label in labels]}

    def add_project(
        self,
        name: str,
        *,
        color: str | None = None,
        favorite: bool = False,
        parent: str | None = None,
    ) -> dict[str, Any]:
        if not name or not name.strip():
            raise UsageError("Project name cannot be empty.")
        parent_id = resolve_project(self.api, parent).id if parent else None
        project = self.api.add_project(
            name,
            color=color or None,
            is_favorite=True if favorite else None,
            parent_id=parent_id,
        )
        return {"id": project.id, "name": project.name, "color": project.color, "url": project.url}

    def add_section(
        self,
        name: str,
        project: str,
        *,
        order: int | str | None = None,
    ) -> dict[str, Any]:
        if not name or not name.strip():
            raise UsageError("Section name cannot be empty.")
        proj = resolve_project(self.api, project)
        section = self.api.add_section(name, proj.id, order=_optional_int(order, "order"))
        return {"id": section.id, "name": section.name, "projectId": section.project_id}

    # -------------------------------------------------------------------
    # Review dashboard
    # -------------------------------------------------------------------

    def review(self, *, today: date | None = None) -> dict[str, Any]:
        """Daily review: today, inbox, overdue, floating count, per-project counts.

        The three reads are independent and run concurrently.
        """
        with ThreadPoolExecutor(max_workers=3) as pool:
            today_future = pool.submit(self.api.filter_tasks, "today")
            all_future = pool.submit(self.api.get_tasks)
            projects_future = pool.submit(self.api.get_projects)
            today_tasks = today_future.result()
            all_tasks = all_future.result()
            projects = projects_future.result()
        return partition_review(today_tasks, all_tasks, projects, today or date.today())

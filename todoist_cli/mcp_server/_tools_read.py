"""Read tools: task queries, comments, organization and the review dashboard."""

from __future__ import annotations

from todoist_cli.mcp_server._core import _call


def today() -> dict:
    """Tasks due today plus overdue ones.

    Returns:
        Dict with count and tasks.
    """
    return _call("today")


def inbox() -> dict:
    """Tasks in the inbox project (needs triage)."""
    return _call("inbox")


def search(query: str) -> dict:
    """Search tasks by text (max 20 results)."""
    return _call("search", query)


def list_tasks(
    filter_query: str | None = None,
    project: str | None = None,
    label: str | None = None,
) -> dict:
    """List tasks. The first given of filter_query, project, label wins.

    Args:
        filter_query: Todoist filter syntax, e.g. 'p1 & today'.
        project: Project name, URL, id:<id> or raw id.
        label: Label name.

    Returns:
        Dict with filter (what was listed), count and tasks.
    """
    return _call("list_tasks", filter_query=filter_query, project=project, label=label)


def show_task(ref: str) -> dict:
    """Full task record plus its comments. ref: name, URL, id:<id> or raw id."""
    return _call("show_task", ref)


def list_comments(ref: str) -> dict:
    return _call("list_comments", ref)


def list_projects() -> dict:
    return _call("list_projects")


def list_sections(project: str | None = None) -> dict:
    """List sections, optionally restricted to one project ref."""
    return _call("list_sections", project=project)


def list_labels() -> dict:
    return _call("list_labels")


def list_reminders(ref: str) -> dict:
    """Active reminders of one task."""
    return _call("list_reminders", ref)


def review() -> dict:
    """Daily review dashboard.

    Returns:
        Dict with today, inbox and overdue task lists, the floating (no due)
        count, per-project task counts and the total.
    """
    return _call("review")


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(today)
    mcp.tool()(inbox)
    mcp.tool()(search)
    mcp.tool()(list_tasks)
    mcp.tool()(show_task)
    mcp.tool()(list_comments)
    mcp.tool()(list_projects)
    mcp.tool()(list_sections)
    mcp.tool()(list_labels)
    mcp.tool()(list_reminders)
    mcp.tool()(review)

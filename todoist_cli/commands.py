"""
Command implementations for todoist-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI verb.

Business logic lives in client.py (TodoistClient). These thin wrappers
check usage, map flags to keyword args and emit the envelope with its
suggested next actions.
"""

from todoist_cli import config
from todoist_cli.client import TodoistClient
from todoist_cli.exceptions import UsageError
from todoist_cli.formatters import next_action, output

P = config.PROG


def _get_client():
    """Return a TodoistClient (token is resolved lazily on first request)."""
    return TodoistClient()


def _arg(ns, index=0):
    args = getattr(ns, "args", None) or []
    return args[index] if len(args) > index else None


def _flag(ns, name):
    """String value of a --flag; a bare flag with no value is a usage error."""
    value = getattr(ns, name, None)
    if value is True:
        raise UsageError(f"--{name.replace('_', '-')} requires a value.")
    return value


def _require(value, usage):
    if not value:
        raise UsageError(f"Usage: {P} {usage}")
    return value


# ---------------------------------------------------------------------------
# Task reads
# ---------------------------------------------------------------------------


def cmd_today(ns):
    output(
        "today",
        _get_client().today(),
        [
            next_action(f"{P} inbox", "Check inbox"),
            next_action(f"{P} complete <ref>", "Complete a task"),
        ],
    )


def cmd_inbox(ns):
    output(
        "inbox",
        _get_client().inbox(),
        [
            next_action(f"{P} add 'Task title'", "Add to inbox"),
            next_action(f"{P} complete <ref>", "Complete a task"),
        ],
    )


def cmd_search(ns):
    query = _require(_arg(ns), "search <query>")
    output(
        "search",
        _get_client().search(query),
        [
            next_action(f"{P} show <ref>", "Show task details + comments"),
            next_action(f"{P} complete <ref>", "Complete a task"),
        ],
    )


def cmd_list(ns):
    result = _get_client().list_tasks(
        filter_query=_flag(ns, "filter"),
        project=_flag(ns, "project"),
        label=_flag(ns, "label"),
    )
    output("list", result)


def cmd_show(ns):
    ref = _require(_arg(ns), "show <ref>")
    result = _get_client().show_task(ref)
    output(
        "show",
        result,
        [
            next_action(f"{P} comment-add {result['id']} --content 'text'", "Add a comment"),
            next_action(f"{P} complete {result['id']}", "Complete this task"),
        ],
    )


# ---------------------------------------------------------------------------
# Task mutations
# ---------------------------------------------------------------------------


def cmd_add(ns):
    content = _require(_arg(ns), "add 'content' [--due X] [--project NAME] ...")
    result = _get_client().add_task(
        content,
        description=_flag(ns, "description"),
        due=_flag(ns, "due"),
        deadline=_flag(ns, "deadline"),
        priority=_flag(ns, "priority"),
        labels=_flag(ns, "labels"),
        project=_flag(ns, "project"),
        section=_flag(ns, "section"),
        parent=_flag(ns, "parent"),
    )
    output(
        "add",
        result,
        [
            next_action(f"{P} complete {result['id']}", "Complete this task"),
            next_action(f"{P} today", "View today's tasks"),
        ],
    )


def cmd_complete(ns):
    ref = _require(_arg(ns), "complete <ref>")
    output(
        "complete",
        _get_client().complete_task(ref),
        [next_action(f"{P} today", "View remaining today tasks")],
    )


def cmd_reopen(ns):
    ref = _require(_arg(ns), "reopen <ref>")
    output("reopen", _get_client().reopen_task(ref))


def cmd_update(ns):
    ref = _require(_arg(ns), "update <ref> [--content X] ...")
    result = _get_client().update_task(
        ref,
        content=_flag(ns, "content"),
        description=_flag(ns, "description"),
        due=_flag(ns, "due"),
        deadline=_flag(ns, "deadline"),
        priority=_flag(ns, "priority"),
        labels=_flag(ns, "labels"),
    )
    output("update", result)


def cmd_move(ns):
    ref = _require(_arg(ns), "move <ref> --project NAME | --section ID | --parent ID")
    result = _get_client().move_task(
        ref,
        project=_flag(ns, "project"),
        section=_flag(ns, "section"),
        parent=_flag(ns, "parent"),
    )
    output("move", result)


def cmd_delete(ns):
    ref = _require(_arg(ns), "delete <ref>")
    output("delete", _get_client().delete_task(ref))


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def cmd_comments(ns):
    ref = _require(_arg(ns), "comments <ref>")
    result = _get_client().list_comments(ref)
    output(
        "comments",
        result,
        [
            next_action(
                f"{P} comment-add {result['taskId']} --content 'text'", "Add a comment"
            )
        ],
    )


def cmd_comment_add(ns):
    ref = _arg(ns)
    content = _flag(ns, "content")
    if not ref or not content:
        raise UsageError(f"Usage: {P} comment-add <ref> --content 'text'")
    result = _get_client().add_comment(ref, content)
    output(
        "comment-add",
        result,
        [
            next_action(
                f"{P} comments {result['task']['id']}", "View all comments on this task"
            )
        ],
    )


def cmd_comment_update(ns):
    comment_id = _arg(ns)
    content = _flag(ns, "content")
    if not comment_id or not content:
        raise UsageError(f"Usage: {P} comment-update <commentId> --content 'text'")
    output("comment-update", _get_client().update_comment(comment_id, content))


def cmd_comment_delete(ns):
    comment_id = _require(_arg(ns), "comment-delete <commentId>")
    output("comment-delete", _get_client().delete_comment(comment_id))


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------


def cmd_reminders(ns):
    ref = _require(_arg(ns), "reminders <ref>")
    output("reminders", _get_client().list_reminders(ref))


def cmd_reminder_add(ns):
    ref = _require(_arg(ns), "reminder-add <ref> --before 30m | --at 2026-02-20T10:00")
    result = _get_client().add_reminder(ref, before=_flag(ns, "before"), at=_flag(ns, "at"))
    output(
        "reminder-add",
        result,
        [
            next_action(
                f"{P} reminders {result['task']['id']}", "List reminders for this task"
            )
        ],
    )


def cmd_reminder_delete(ns):
    reminder_id = _require(_arg(ns), "reminder-delete <reminderId>")
    output("reminder-delete", _get_client().delete_reminder(reminder_id))


# ---------------------------------------------------------------------------
# Activity / completed
# ---------------------------------------------------------------------------


def cmd_activity(ns):
    result = _get_client().activity(
        since=_flag(ns, "since"),
        until=_flag(ns, "until"),
        object_type=_flag(ns, "type"),
        event_type=_flag(ns, "event"),
        project=_flag(ns, "project"),
        limit=_flag(ns, "limit"),
    )
    output(
        "activity",
        result,
        [
            next_action(f"{P} activity --event completed --since <date>", "Filter activity"),
            next_action(f"{P} completed", "View completed tasks"),
        ],
    )


def cmd_completed(ns):
    result = _get_client().completed(
        since=_flag(ns, "since"),
        until=_flag(ns, "until"),
        project=_flag(ns, "project"),
        limit=_flag(ns, "limit"),
    )
    output(
        "completed",
        result,
        [
            next_action(f"{P} completed --since <date>", "Completed since date"),
            next_action(f"{P} activity", "Full activity log"),
        ],
    )


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------


def cmd_projects(ns):
    output(
        "projects",
        _get_client().list_projects(),
        [next_action(f"{P} list --project <name>", "List tasks in a project")],
    )


def cmd_sections(ns):
    output("sections", _get_client().list_sections(project=_flag(ns, "project")))


def cmd_labels(ns):
    output("labels", _get_client().list_labels())


def cmd_add_project(ns):
    name = _require(_arg(ns), "add-project 'name' [--color X]")
    result = _get_client().add_project(
        name,
        color=_flag(ns, "color"),
        favorite=getattr(ns, "favorite", None) in (True, "true"),
        parent=_flag(ns, "parent"),
    )
    output("add-project", result)


def cmd_add_section(ns):
    name = _arg(ns)
    project = _flag(ns, "project")
    if not name or not project:
        raise UsageError(f"Usage: {P} add-section 'name' --project NAME")
    output("add-section", _get_client().add_section(name, project, order=_flag(ns, "order")))


def cmd_review(ns):
    output(
        "review",
        _get_client().review(),
        [
            next_action(f"{P} inbox", "Process inbox to zero"),
            next_action(f"{P} complete <ref>", "Complete a task"),
            next_action(f"{P} add 'task' --due today", "Add a task for today"),
        ],
    )


# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------

HELP_COMMANDS = {
    # Tasks
    "today": "Tasks due today + overdue",
    "inbox": "Inbox tasks (needs triage)",
    "search <query>": "Search tasks by text",
    "list [--filter X] [--project NAME] [--label X]": "List tasks with filters",
    "show <ref>": "Task detail + comments",
    "add 'content' [--due X] [--deadline YYYY-MM-DD] [--project NAME] [--section ID] "
    "[--parent ID] [--priority 1-4] [--labels a,b] [--description X]": "Create a task",
    "complete <ref>": "Complete a task",
    "reopen <ref>": "Reopen a completed task",
    "update <ref> [--content X] [--due X] [--deadline YYYY-MM-DD] [--priority 1-4] "
    "[--labels a,b] [--description X]": "Update a task",
    "move <ref> --project NAME | --section ID | --parent ID": "Move a task",
    "delete <ref>": "Delete a task permanently",
    # Comments
    "comments <ref>": "List comments on a task",
    "comment-add <ref> --content 'text'": "Add a comment to a task",
    "comment-update <commentId> --content 'text'": "Update a comment",
    "comment-delete <commentId>": "Delete a comment",
    # Reminders
    "reminders <ref>": "List reminders for a task",
    "reminder-add <ref> --before 30m | --at 2026-02-20T10:00": "Add a reminder",
    "reminder-delete <reminderId>": "Delete a reminder",
    # Activity
    "activity [--since X] [--until X] [--type task|comment|project] "
    "[--event added|completed|updated|deleted] [--project NAME] [--limit N]": "Activity log",
    "completed [--since X] [--until X] [--project NAME] [--limit N]": "Completed tasks",
    # Organization
    "review": "Daily review dashboard (today, inbox, overdue, projects)",
    "projects": "List all projects",
    "sections [--project NAME]": "List sections",
    "labels": "List all labels",
    "add-project 'name' [--color X] [--favorite] [--parent NAME]": "Create a project",
    "add-section 'name' --project NAME [--order N]": "Create a section",
}


def help_result():
    return {
        "version": config.VERSION,
        "auth": f"{config.TOKEN_ENV_VAR} env var or 'secrets lease todoist_api_token'",
        "notes": [
            "All <ref> args accept: task name, Todoist URL, id:xxx, or raw ID",
            "Project args (--project) also accept project names",
            "Global flags: --verbose/-v logs HTTP requests to stderr, --version prints the version",
        ],
        "commands": HELP_COMMANDS,
    }


def cmd_help(ns):
    output("help", help_result())

"""Output formatting package for todoist-cli.

Re-exports all public names so consumers can do:
    from todoist_cli.formatters import format_task
"""

from todoist_cli.formatters._core import (
    emit_error,
    envelope,
    error_payload,
    next_action,
    output,
)
from todoist_cli.formatters._entities import (
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

__all__ = [
    "emit_error",
    "envelope",
    "error_payload",
    "format_activity_event",
    "format_comment",
    "format_completed_task",
    "format_label",
    "format_project",
    "format_reminder",
    "format_section",
    "format_task",
    "next_action",
    "output",
    "task_stub",
]

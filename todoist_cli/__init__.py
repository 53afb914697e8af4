"""todoist-cli — agent-first CLI for managing Todoist tasks, comments and projects."""

from todoist_cli.client import TodoistClient
from todoist_cli.config import VERSION
from todoist_cli.exceptions import (
    AmbiguousReference,
    CliError,
    CredentialMissing,
    NotFound,
    RemoteFailure,
    ResolutionError,
    UsageError,
)
from todoist_cli.types import (
    CommentRecord,
    NextAction,
    ProjectRow,
    ReminderRow,
    ReviewResult,
    TaskListResult,
    TaskRecord,
)

__all__ = [
    "VERSION",
    "TodoistClient",
    "AmbiguousReference",
    "CliError",
    "CredentialMissing",
    "NotFound",
    "RemoteFailure",
    "ResolutionError",
    "UsageError",
    "CommentRecord",
    "NextAction",
    "ProjectRow",
    "ReminderRow",
    "ReviewResult",
    "TaskListResult",
    "TaskRecord",
]

"""Core helpers: client caching, _call dispatcher, response contract."""

from __future__ import annotations

from todoist_cli.client import TodoistClient
from todoist_cli.exceptions import (
    CliError,
    CredentialMissing,
    RemoteFailure,
    ResolutionError,
    UsageError,
)

_client: TodoistClient | None = None


def _get_client() -> TodoistClient:
    """Return a cached TodoistClient, creating one on first use."""
    global _client
    if _client is None:
        _client = TodoistClient()
    return _client


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return the MCP error envelope."""
    return {"ok": False, "error": message, "type": error_type}


def _error_type(err: CliError) -> str:
    if isinstance(err, CredentialMissing):
        return "credentials"
    if isinstance(err, ResolutionError):
        return "resolution"
    if isinstance(err, UsageError):
        return "usage"
    if isinstance(err, RemoteFailure):
        return "remote"
    return "error"


_ALLOWED_METHODS = {
    "today",
    "inbox",
    "search",
    "list_tasks",
    "show_task",
    "add_task",
    "complete_task",
    "reopen_task",
    "update_task",
    "move_task",
    "delete_task",
    "list_comments",
    "add_comment",
    "list_projects",
    "list_sections",
    "list_labels",
    "list_reminders",
    "add_reminder",
    "review",
}


def _call(method_name: str, *args, **kwargs) -> dict:
    """Call a TodoistClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}")
    try:
        client = _get_client()
        return {"ok": True, "result": getattr(client, method_name)(*args, **kwargs)}
    except CliError as e:
        return _contract_error(str(e), _error_type(e))
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}")

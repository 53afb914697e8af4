"""MCP server exposing TodoistClient methods as tools.

Package structure:
  __init__.py       — FastMCP init, register() calls, re-exports
  __main__.py       — ``python -m todoist_cli.mcp_server`` entry point
  _core.py          — Client caching, _call dispatcher, response contract
  _tools_read.py    — task, comment and organization queries plus review
  _tools_write.py   — task, comment and reminder mutations

Run: python -m todoist_cli.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from todoist_cli.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "todoist",
    instructions=(
        "Todoist task management tools. "
        "Task refs accept a task name, a Todoist URL, id:<id> or a raw id. "
        "Project refs also accept project names. "
        "Priority is 1-4 where 4 is most urgent.\n"
        "Start a session with review for a dashboard instead of assembling "
        "one from list_tasks calls."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from todoist_cli.mcp_server._core import (  # noqa: E402, F401
    _call,
    _client,
    _contract_error,
    _get_client,
)
from todoist_cli.mcp_server._tools_read import (  # noqa: E402, F401
    inbox,
    list_comments,
    list_labels,
    list_projects,
    list_reminders,
    list_sections,
    list_tasks,
    review,
    search,
    show_task,
    today,
)
from todoist_cli.mcp_server._tools_write import (  # noqa: E402, F401
    add_comment,
    add_reminder,
    add_task,
    complete_task,
    delete_task,
    move_task,
    reopen_task,
    update_task,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()

"""
todoist-cli — agent-first CLI for managing Todoist tasks, comments and projects
"""

import argparse
import sys

from todoist_cli import config
from todoist_cli.commands import (
    cmd_activity,
    cmd_add,
    cmd_add_project,
    cmd_add_section,
    cmd_comment_add,
    cmd_comment_delete,
    cmd_comment_update,
    cmd_comments,
    cmd_complete,
    cmd_completed,
    cmd_delete,
    cmd_help,
    cmd_inbox,
    cmd_labels,
    cmd_list,
    cmd_move,
    cmd_projects,
    cmd_reminder_add,
    cmd_reminder_delete,
    cmd_reminders,
    cmd_reopen,
    cmd_review,
    cmd_search,
    cmd_sections,
    cmd_show,
    cmd_today,
    cmd_update,
)
from todoist_cli.exceptions import CliError, RemoteFailure, UsageError
from todoist_cli.formatters import emit_error

COMMANDS = {
    # Tasks
    "today": cmd_today,
    "inbox": cmd_inbox,
    "search": cmd_search,
    "list": cmd_list,
    "show": cmd_show,
    "add": cmd_add,
    "complete": cmd_complete,
    "reopen": cmd_reopen,
    "update": cmd_update,
    "move": cmd_move,
    "delete": cmd_delete,
    # Comments
    "comments": cmd_comments,
    "comment-add": cmd_comment_add,
    "comment-update": cmd_comment_update,
    "comment-delete": cmd_comment_delete,
    # Reminders
    "reminders": cmd_reminders,
    "reminder-add": cmd_reminder_add,
    "reminder-delete": cmd_reminder_delete,
    # Activity
    "activity": cmd_activity,
    "completed": cmd_completed,
    # Organization
    "review": cmd_review,
    "projects": cmd_projects,
    "sections": cmd_sections,
    "labels": cmd_labels,
    "add-project": cmd_add_project,
    "add-section": cmd_add_section,
}

HELP_WORDS = {"help", "--help", "-h"}


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (verbose, remaining_argv). Handles --version directly. A token
    in the value slot of a ``--flag`` (``--content -v``) is left in place.
    """
    verbose = False
    remaining = []
    for arg in argv:
        prev = remaining[-1] if remaining else ""
        if prev.startswith("--") and arg and not arg.startswith("--"):
            remaining.append(arg)
        elif arg == "--version":
            print(f"{config.PROG} {config.VERSION}")
            sys.exit(0)
        elif arg in ("--verbose", "-v"):
            verbose = True
        else:
            remaining.append(arg)
    return verbose, remaining


def _split_args(argv):
    """Split verb arguments into (flags, positionals).

    ``--flag value`` pairs become flags; a ``--flag`` not followed by a
    non-flag token is True. Everything else is positional, in order.
    """
    flags = {}
    positionals = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith("--"):
            key = arg[2:]
            nxt = argv[i + 1] if i + 1 < len(argv) else None
            if nxt is not None and nxt != "" and not nxt.startswith("--"):
                flags[key] = nxt
                i += 2
                continue
            flags[key] = True
        else:
            positionals.append(arg)
        i += 1
    return flags, positionals


def build_namespace(argv):
    """Namespace with ``args`` (positionals) and one attribute per flag."""
    flags, positionals = _split_args(argv)
    ns = argparse.Namespace(args=positionals)
    for key, value in flags.items():
        setattr(ns, key.replace("-", "_"), value)
    return ns


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def run(argv):
    """Run one verb. Returns the process exit code."""
    verbose, argv = _extract_global_flags(argv)
    config.RUNTIME_VERBOSE = verbose
    if verbose:
        config.HTTP_LOG_ENABLED = True

    if not argv or argv[0] in HELP_WORDS:
        cmd_help(build_namespace([]))
        return 0

    verb = argv[0]
    try:
        handler = COMMANDS.get(verb)
        if handler is None:
            raise UsageError(f"Unknown command: {verb}. Run '{config.PROG} help' for usage.")
        handler(build_namespace(argv[1:]))
    except RemoteFailure as e:
        emit_error(f"{verb} failed: {e}")
        return e.exit_code
    except CliError as e:
        emit_error(str(e))
        return e.exit_code
    except Exception as e:
        emit_error(f"{verb} failed: {e}")
        return 1
    return 0


def main():
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()

"""Core output dispatchers: the success and failure envelopes."""

import json
import sys

from todoist_cli import config


def next_action(command, description):
    return {"command": command, "description": description}


def envelope(command, result, next_actions=None):
    """Build the success envelope; next_actions is omitted when not given."""
    payload = {
        "ok": True,
        "command": f"{config.PROG} {command}",
        "result": result,
    }
    if next_actions:
        payload["next_actions"] = list(next_actions)
    return payload


def output(command, result, next_actions=None):
    """Print the success envelope to stdout."""
    print(json.dumps(envelope(command, result, next_actions), indent=2, ensure_ascii=False))


def error_payload(message):
    return {"ok": False, "error": message}


def emit_error(message):
    """Print the failure envelope to stderr as a single JSON line."""
    print(json.dumps(error_payload(message), ensure_ascii=False), file=sys.stderr)

"""
API token acquisition.

Order: process environment, project .env, then an external secret lease
(``secrets lease todoist_api_token``). The provider is a plain value handed to
the API adapter, so tests inject fake environments and lease invokers.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from todoist_cli import config
from todoist_cli.exceptions import CredentialMissing

MISSING_TOKEN_MESSAGE = (
    f"No {config.TOKEN_ENV_VAR} found. Set it via:\n"
    f"  export {config.TOKEN_ENV_VAR}=<token>          # env var\n"
    "  secrets add todoist_api_token              # agent-secrets\n"
    f"Get your token at: {config.TOKEN_SETTINGS_URL}"
)


def lease_token(command=None, timeout=None):
    """Ask the agent-secrets CLI for a short-lived token. Returns '' if unavailable."""
    command = command or config.LEASE_COMMAND
    timeout = config.LEASE_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        proc = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return ""
    if proc.returncode != 0:
        return ""
    return (proc.stdout or "").strip()


@dataclass(frozen=True)
class CredentialProvider:
    """Resolves the bearer token; raises CredentialMissing with setup help."""

    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    env_file: Mapping[str, str] = field(default_factory=lambda: config.env)
    lease: Callable[[], str] = field(default_factory=lambda: lease_token)

    def token(self) -> str:
        for source in (self.environ, self.env_file):
            value = (source.get(config.TOKEN_ENV_VAR) or "").strip()
            if value:
                return value
        leased = (self.lease() or "").strip()
        if leased:
            return leased
        raise CredentialMissing(MISSING_TOKEN_MESSAGE)

"""
todoist-cli shared configuration, constants, and module-level state.
Standalone module: no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")


def load_env(path=None):
    env = {}
    path = path or ENV_PATH
    if os.path.exists(path):
        with open(path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    return env


def _lookup(key):
    """Process environment wins over .env values."""
    raw = os.environ.get(key)
    if raw is None:
        raw = env.get(key)
    return raw


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = _lookup(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = _lookup(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = _lookup(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.2.0"
PROG = "todoist-cli"

TOKEN_ENV_VAR = "TODOIST_API_TOKEN"
LEASE_COMMAND = ["secrets", "lease", "todoist_api_token", "--ttl", "1h"]
TOKEN_SETTINGS_URL = "https://app.todoist.com/app/settings/integrations/developer"

APP_URL = "https://app.todoist.com/app"
URL_KINDS = ("task", "project", "label", "filter")

VALID_PRIORITIES = {1, 2, 3, 4}

MAX_AMBIGUOUS_CANDIDATES = 5
RESOLVE_SEARCH_LIMIT = 10
SEARCH_LIMIT = 20

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

API_BASE_URL = (_lookup("TODOIST_API_BASE_URL") or "https://api.todoist.com/api/v1").rstrip("/")
HTTP_TIMEOUT_SECONDS = _env_int("TODOIST_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("TODOIST_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("TODOIST_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("TODOIST_HTTP_LOG_SAMPLE_RATE", 1.0)))
LEASE_TIMEOUT_SECONDS = _env_float("TODOIST_LEASE_TIMEOUT_SECONDS", 3.0)

# ---------------------------------------------------------------------------
# Runtime flags (set by the CLI)
# ---------------------------------------------------------------------------

RUNTIME_VERBOSE = False

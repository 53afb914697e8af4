"""
HTTP request layer and typed Todoist API adapter for todoist-cli.

The request layer makes exactly one attempt per call: there is no retry or
backoff, so a failed network call surfaces immediately as RemoteFailure.
"""

import hashlib
import json
import re
import sys
import threading
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from todoist_cli import config
from todoist_cli.credentials import CredentialProvider
from todoist_cli.exceptions import CredentialMissing, HTTPError, RemoteFailure
from todoist_cli.models import (
    ActivityEvent,
    Comment,
    CompletedTask,
    Label,
    Project,
    Reminder,
    Section,
    Task,
)

_TRANSIENT_HTTP_CODES = frozenset({429, 502, 503, 504})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in {"token", "access_token"}:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _log_enabled():
    return config.HTTP_LOG_ENABLED or config.RUNTIME_VERBOSE


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not _log_enabled():
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, detail=None):
    """Build a consistent CLI-safe HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"{message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


def _http_request(url, data=None, headers=None, method="POST"):
    """Make a single HTTP request with standard error handling.
    Returns parsed JSON on success, None for an empty body (204).
    Raises HTTPError for HTTP errors (caller handles specific codes).
    Raises RemoteFailure on network/timeout/parse errors."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(request_id)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    start = time.perf_counter()
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    if sampled:
        _log_http_event(
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
        )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise RemoteFailure(
                    "Response too large from Todoist API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes).",
                    request_id=request_id,
                )
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=getattr(resp, "status", 200),
                    content_type=content_type,
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            if not raw.strip():
                return None
            try:
                return json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                if content_type and "json" not in content_type.lower():
                    raise RemoteFailure(
                        f"Unexpected Content-Type from server ({content_type}). "
                        "This may be a proxy or network issue.",
                        request_id=request_id,
                    ) from None
                raise RemoteFailure(
                    "Unexpected response from Todoist API (not valid JSON).",
                    request_id=request_id,
                ) from None
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise RemoteFailure(
            _error_envelope(
                f"Request timed out after {timeout} seconds. Is the Todoist API reachable?",
                request_id=request_id,
            ),
            request_id=request_id,
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise RemoteFailure(
            _error_envelope(f"Connection failed: {e.reason}", request_id=request_id),
            request_id=request_id,
        ) from e


def _remote_failure_from_http(e):
    """Translate an HTTPError into the user-facing error taxonomy."""
    if e.code in (401, 403):
        return CredentialMissing(
            f"Todoist rejected the API token (HTTP {e.code}). "
            f"Check {config.TOKEN_ENV_VAR} or re-lease it with: "
            "secrets lease todoist_api_token\n"
            f"Get a token at: {config.TOKEN_SETTINGS_URL}"
        )
    server_req_id = e.headers.get("X-Request-Id") if e.headers else None
    if e.code == 429:
        return RemoteFailure(
            "Rate limit reached on the Todoist API. Wait a few seconds and retry.",
            status=429,
            request_id=server_req_id,
        )
    hint = " (transient, safe to re-run)" if e.code in _TRANSIENT_HTTP_CODES else ""
    return RemoteFailure(
        _error_envelope(
            f"HTTP {e.code}: {e.reason}{hint}",
            status=e.code,
            request_id=server_req_id,
            detail=_sanitize_error(e.body),
        ),
        status=e.code,
        request_id=server_req_id,
    )


def _results(payload, key="results"):
    """Unwrap a paginated list response (first page only)."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        items = payload.get(key)
        if isinstance(items, list):
            return items
        if items is None:
            return []
    raise RemoteFailure(
        f"Unexpected list response shape from Todoist API: expected '{key}' array."
    )


def _path_id(value):
    """Escape a user-supplied id for use as a single URL path segment."""
    return urllib.parse.quote(str(value), safe="")


def _clean(fields):
    """Drop None values so the API keeps its own defaults."""
    return {k: v for k, v in fields.items() if v is not None}


# ---------------------------------------------------------------------------
# Typed adapter
# ---------------------------------------------------------------------------


class TodoistApi:
    """Thin typed wrapper over the Todoist REST and Sync endpoints.

    Every method performs one request and returns model instances.
    Raises RemoteFailure / CredentialMissing on failure.
    """

    def __init__(self, credentials=None, *, base_url=None, token=None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self._credentials = credentials
        self._token = token or None
        self._token_lock = threading.Lock()

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------

    def token(self):
        """Bearer token, resolved once on first use."""
        with self._token_lock:
            if self._token is None:
                self._token = (self._credentials or CredentialProvider()).token()
            return self._token

    def request(self, method, path, *, params=None, data=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            query = urllib.parse.urlencode(_clean(params), doseq=True)
            if query:
                url = f"{url}?{query}"
        headers = {
            "Authorization": f"Bearer {self.token()}",
            "Accept": "application/json",
            "X-Request-Id": str(uuid.uuid4()),
        }
        if data is not None:
            headers["Content-Type"] = "application/json"
        try:
            return _http_request(url, data, headers, method)
        except HTTPError as e:
            raise _remote_failure_from_http(e) from e

    def _get(self, path, **params):
        return self.request("GET", path, params=params)

    def _post(self, path, data=None):
        return self.request("POST", path, data=data if data is not None else {})

    # -------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------

    def get_task(self, task_id):
        return Task.from_api(self._get(f"tasks/{_path_id(task_id)}"))

    def get_tasks(self, *, project_id=None, section_id=None, parent_id=None, label=None):
        payload = self._get(
            "tasks",
            project_id=project_id,
            section_id=section_id,
            parent_id=parent_id,
            label=label,
        )
        return [Task.from_api(t) for t in _results(payload)]

    def filter_tasks(self, query, *, limit=None):
        payload = self._get("tasks/filter", query=query, limit=limit)
        return [Task.from_api(t) for t in _results(payload)]

    def add_task(self, content, **fields):
        return Task.from_api(self._post("tasks", _clean({"content": content, **fields})))

    def update_task(self, task_id, **fields):
        return Task.from_api(self._post(f"tasks/{_path_id(task_id)}", _clean(fields)))

    def move_task(self, task_id, *, project_id=None, section_id=None, parent_id=None):
        payload = self._post(
            f"tasks/{_path_id(task_id)}/move",
            _clean({"project_id": project_id, "section_id": section_id, "parent_id": parent_id}),
        )
        if not payload:
            return self.get_task(task_id)
        return Task.from_api(payload)

    def close_task(self, task_id):
        self._post(f"tasks/{_path_id(task_id)}/close")

    def reopen_task(self, task_id):
        self._post(f"tasks/{_path_id(task_id)}/reopen")

    def delete_task(self, task_id):
        self.request("DELETE", f"tasks/{_path_id(task_id)}")

    def get_completed_tasks(self, *, since, until, project_id=None, limit=None):
        payload = self._get(
            "tasks/completed/by_completion_date",
            since=since,
            until=until,
            project_id=project_id,
            limit=limit,
        )
        return [CompletedTask.from_api(t) for t in _results(payload, "items")]

    # -------------------------------------------------------------------
    # Projects, sections, labels
    # -------------------------------------------------------------------

    def get_project(self, project_id):
        return Project.from_api(self._get(f"projects/{_path_id(project_id)}"))

    def get_projects(self):
        return [Project.from_api(p) for p in _results(self._get("projects"))]

    def add_project(self, name, **fields):
        return Project.from_api(self._post("projects", _clean({"name": name, **fields})))

    def get_sections(self, *, project_id=None):
        payload = self._get("sections", project_id=project_id)
        return [Section.from_api(s) for s in _results(payload)]

    def add_section(self, name, project_id, *, order=None):
        payload = self._post(
            "sections", _clean({"name": name, "project_id": project_id, "order": order})
        )
        return Section.from_api(payload)

    def get_labels(self):
        return [Label.from_api(label) for label in _results(self._get("labels"))]

    # -------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------

    def get_comments(self, *, task_id=None, project_id=None):
        payload = self._get("comments", task_id=task_id, project_id=project_id)
        return [Comment.from_api(c) for c in _results(payload)]

    def get_comment(self, comment_id):
        return Comment.from_api(self._get(f"comments/{_path_id(comment_id)}"))

    def add_comment(self, *, task_id, content):
        return Comment.from_api(self._post("comments", {"task_id": task_id, "content": content}))

    def update_comment(self, comment_id, *, content):
        return self._post(f"comments/{_path_id(comment_id)}", {"content": content})

    def delete_comment(self, comment_id):
        self.request("DELETE", f"comments/{_path_id(comment_id)}")

    # -------------------------------------------------------------------
    # Activity
    # -------------------------------------------------------------------

    def get_activity(
        self,
        *,
        object_type=None,
        event_type=None,
        parent_project_id=None,
        since=None,
        until=None,
        limit=None,
    ):
        payload = self._get(
            "activities",
            object_type=object_type,
            event_type=event_type,
            parent_project_id=parent_project_id,
            date_from=since,
            date_to=until,
            limit=limit,
        )
        return [ActivityEvent.from_api(e) for e in _results(payload)]

    # -------------------------------------------------------------------
    # Sync command batches (reminders)
    # -------------------------------------------------------------------

    def sync(self, *, commands=None, resource_types=None, sync_token="*"):
        data = {}
        if commands is not None:
            data["commands"] = commands
        if resource_types is not None:
            data["sync_token"] = sync_token
            data["resource_types"] = resource_types
        payload = self._post("sync", data)
        if not isinstance(payload, dict):
            raise RemoteFailure("Unexpected sync response from Todoist API.")
        return payload

    def _run_command(self, command_type, args, *, temp_id=False):
        command = {"type": command_type, "uuid": str(uuid.uuid4()), "args": args}
        if temp_id:
            command["temp_id"] = str(uuid.uuid4())
        payload = self.sync(commands=[command])
        status = (payload.get("sync_status") or {}).get(command["uuid"])
        if status is None:
            raise RemoteFailure(f"Sync command {command_type} failed: no status in response.")
        if status != "ok":
            detail = status.get("error") if isinstance(status, dict) else status
            raise RemoteFailure(f"Sync command {command_type} failed: {detail}")
        if temp_id:
            return (payload.get("temp_id_mapping") or {}).get(command["temp_id"])
        return None

    def get_reminders(self):
        payload = self.sync(resource_types=["reminders"])
        return [Reminder.from_api(r) for r in payload.get("reminders") or []]

    def add_reminder(self, task_id, *, minute_offset=None, due=None):
        args = {"item_id": task_id}
        if minute_offset is not None:
            args["minute_offset"] = minute_offset
        if due is not None:
            args["due"] = due
        return self._run_command("reminder_add", args, temp_id=True)

    def delete_reminder(self, reminder_id):
        self._run_command("reminder_delete", {"id": reminder_id})

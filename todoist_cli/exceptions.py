"""
todoist-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
Every error is terminal for the current invocation and exits with code 1.
"""


class CliError(Exception):
    """Exit code 1: validation, not-found, network, parse errors."""

    exit_code = 1


# ---------------------------------------------------------------------------
# Reference resolution
# ---------------------------------------------------------------------------


class ResolutionError(CliError):
    """A ref could not be turned into exactly one entity."""


class EmptyReference(ResolutionError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"{kind.capitalize()} reference cannot be empty.")


class WrongUrlKind(ResolutionError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} URL, got {actual} URL.")


class AmbiguousReference(ResolutionError):
    """Several candidates matched; carries at most a handful as (text, id)."""

    def __init__(self, kind, ref, candidates):
        self.kind = kind
        self.ref = ref
        self.candidates = list(candidates)
        lines = [f'  "{text}" (id:{cid})' for text, cid in self.candidates]
        super().__init__(f'Ambiguous {kind} "{ref}". Matches:\n' + "\n".join(lines))


class NotFound(ResolutionError):
    pass


# ---------------------------------------------------------------------------
# Input, remote and credential failures
# ---------------------------------------------------------------------------


class UsageError(CliError):
    """Missing or malformed CLI argument."""


class DurationError(UsageError):
    def __init__(self, text):
        self.text = text
        super().__init__(f'Invalid duration "{text}". Examples: 30m, 1h, 2h30m')


class RemoteFailure(CliError):
    """Network or API error; the message is passed through to the user."""

    def __init__(self, message, status=None, request_id=None):
        self.status = status
        self.request_id = request_id
        super().__init__(message)


class CredentialMissing(CliError):
    """No API token from the environment, .env or the secret lease."""


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}

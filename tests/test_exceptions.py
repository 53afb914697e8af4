"""Tests for exceptions.py — hierarchy and message formats."""

import pytest

from todoist_cli.exceptions import (
    AmbiguousReference,
    CliError,
    CredentialMissing,
    DurationError,
    EmptyReference,
    HTTPError,
    NotFound,
    RemoteFailure,
    ResolutionError,
    UsageError,
    WrongUrlKind,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [ResolutionError, NotFound, UsageError, DurationError, RemoteFailure, CredentialMissing],
    )
    def test_all_are_cli_errors_with_exit_code_1(self, cls):
        assert issubclass(cls, CliError)
        assert cls.exit_code == 1

    def test_resolution_family(self):
        for cls in (EmptyReference, WrongUrlKind, AmbiguousReference, NotFound):
            assert issubclass(cls, ResolutionError)

    def test_duration_error_is_usage_error(self):
        assert issubclass(DurationError, UsageError)

    def test_http_error_is_not_cli_error(self):
        assert not issubclass(HTTPError, CliError)


class TestMessages:
    def test_empty_reference(self):
        assert str(EmptyReference("task")) == "Task reference cannot be empty."

    def test_wrong_url_kind(self):
        err = WrongUrlKind("task", "project")
        assert str(err) == "Expected a task URL, got project URL."
        assert err.expected == "task"
        assert err.actual == "project"

    def test_ambiguous_lists_candidates(self):
        err = AmbiguousReference("task", "deploy", [("Deploy API", "1"), ("Deploy web", "2")])
        msg = str(err)
        assert msg.startswith('Ambiguous task "deploy". Matches:')
        assert '"Deploy API" (id:1)' in msg
        assert '"Deploy web" (id:2)' in msg
        assert err.candidates == [("Deploy API", "1"), ("Deploy web", "2")]

    def test_duration_error_names_examples(self):
        assert str(DurationError("abc")) == 'Invalid duration "abc". Examples: 30m, 1h, 2h30m'

    def test_remote_failure_carries_status(self):
        err = RemoteFailure("HTTP 500: boom", status=500, request_id="r1")
        assert str(err) == "HTTP 500: boom"
        assert err.status == 500
        assert err.request_id == "r1"

    def test_http_error_attributes(self):
        err = HTTPError(404, "Not Found", "missing")
        assert err.code == 404
        assert err.reason == "Not Found"
        assert err.body == "missing"
        assert err.headers == {}

"""Tests for TodoistClient — the public programmatic API surface.
Mocks at the TodoistApi boundary. Asserts on returned dicts, not stdout.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from todoist_cli.client import TodoistClient, partition_review
from todoist_cli.exceptions import (
    AmbiguousReference,
    DurationError,
    NotFound,
    RemoteFailure,
    UsageError,
)
from todoist_cli.models import (
    ActivityEvent,
    Comment,
    CompletedTask,
    Due,
    Label,
    Project,
    Reminder,
    Section,
    Task,
)

TODAY = date(2026, 2, 20)

INBOX = Project(id="p0", name="Inbox", is_inbox=True)
WORK = Project(id="p1", name="Work")


def _task(tid, content="x", due=None, project_id="p1", **kw):
    return Task(
        id=tid,
        content=content,
        due=Due(date=due) if due else None,
        project_id=project_id,
        **kw,
    )


def _client(**returns):
    api = MagicMock()
    api.get_projects.return_value = [INBOX, WORK]
    api.filter_tasks.return_value = []
    api.get_tasks.return_value = []
    api.get_comments.return_value = []
    for name, val in returns.items():
        getattr(api, name).return_value = val
    return TodoistClient(api), api


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestReads:
    def test_today(self):
        client, api = _client(filter_tasks=[_task("1"), _task("2")])
        result = client.today()
        api.filter_tasks.assert_called_once_with("today")
        assert result["count"] == 2
        assert [t["id"] for t in result["tasks"]] == ["1", "2"]

    def test_inbox(self):
        client, api = _client(get_tasks=[_task("1", project_id="p0")])
        result = client.inbox()
        api.get_tasks.assert_called_once_with(project_id="p0")
        assert result["projectId"] == "p0"
        assert result["count"] == 1

    def test_inbox_missing(self):
        client, _ = _client(get_projects=[WORK])
        with pytest.raises(NotFound, match="No inbox project found"):
            client.inbox()

    def test_search(self):
        client, api = _client(filter_tasks=[_task("1", "Buy milk")])
        result = client.search("milk")
        api.filter_tasks.assert_called_once_with("search: milk", limit=20)
        assert result["query"] == "milk"
        assert result["count"] == 1

    def test_list_all(self):
        client, api = _client(get_tasks=[_task("1")])
        result = client.list_tasks()
        assert result["filter"] == "all"
        api.get_tasks.assert_called_once_with(label=None)

    def test_list_filter_wins(self):
        client, api = _client()
        result = client.list_tasks(filter_query="p1", project="Work", label="x")
        api.filter_tasks.assert_called_once_with("p1")
        assert result["filter"] == "filter: p1"

    def test_list_project_uses_resolved_name(self):
        client, api = _client()
        result = client.list_tasks(project="work")
        api.get_tasks.assert_called_once_with(project_id="p1")
        assert result["filter"] == "project: Work"

    def test_list_label(self):
        client, api = _client()
        assert client.list_tasks(label="errand")["filter"] == "label: errand"
        api.get_tasks.assert_called_once_with(label="errand")

    def test_show_includes_comments(self):
        task = _task("t1", "Buy milk")
        client, api = _client(
            get_task=task, get_comments=[Comment(id="c1", content="2%", task_id="t1")]
        )
        result = client.show_task("id:t1")
        api.get_comments.assert_called_once_with(task_id="t1")
        assert result["content"] == "Buy milk"
        assert result["comments"][0]["content"] == "2%"


# ---------------------------------------------------------------------------
# Task mutations
# ---------------------------------------------------------------------------


class TestAddTask:
    def test_priority_passed_verbatim(self):
        client, api = _client(add_task=_task("9", "Buy milk", priority=2))
        result = client.add_task("Buy milk", priority="2")
        assert api.add_task.call_args.kwargs["priority"] == 2
        assert result["priority"] == 2

    def test_fields_mapped(self):
        client, api = _client(add_task=_task("9"))
        client.add_task(
            "Write report",
            description="Q1",
            due="tomorrow",
            deadline="2026-03-01",
            labels="work, urgent",
            project="Work",
            section="id:s1",
            parent="t0",
        )
        kwargs = api.add_task.call_args.kwargs
        assert api.add_task.call_args.args == ("Write report",)
        assert kwargs["due_string"] == "tomorrow"
        assert kwargs["deadline_date"] == "2026-03-01"
        assert kwargs["labels"] == ["work", "urgent"]
        assert kwargs["project_id"] == "p1"
        assert kwargs["section_id"] == "s1"
        assert kwargs["parent_id"] == "t0"

    @pytest.mark.parametrize("priority", ["0", "5", "high"])
    def test_invalid_priority(self, priority):
        client, api = _client()
        with pytest.raises(UsageError, match="priority"):
            client.add_task("x", priority=priority)
        api.add_task.assert_not_called()

    def test_empty_content(self):
        client, _ = _client()
        with pytest.raises(UsageError):
            client.add_task("  ")


class TestTaskMutations:
    def test_complete(self):
        client, api = _client(get_task=_task("t1", "Buy milk"))
        result = client.complete_task("id:t1")
        api.close_task.assert_called_once_with("t1")
        assert result["completed"]["content"] == "Buy milk"

    def test_reopen(self):
        client, api = _client(get_task=_task("t1"))
        assert client.reopen_task("id:t1")["task"]["id"] == "t1"
        api.reopen_task.assert_called_once_with("t1")

    def test_update_requires_a_field(self):
        client, api = _client()
        with pytest.raises(UsageError, match="No update flags provided"):
            client.update_task("id:t1")
        api.get_task.assert_not_called()

    def test_update_sends_only_given_fields(self):
        client, api = _client(get_task=_task("t1"), update_task=_task("t1", "New"))
        result = client.update_task("id:t1", content="New", priority=4)
        api.update_task.assert_called_once_with("t1", content="New", priority=4)
        assert result["content"] == "New"

    def test_move_requires_target(self):
        client, _ = _client()
        with pytest.raises(UsageError, match="Usage: todoist-cli move"):
            client.move_task("id:t1")

    def test_move_to_project(self):
        client, api = _client(get_task=_task("t1"), move_task=_task("t1", project_id="p0"))
        result = client.move_task("id:t1", project="Inbox")
        api.move_task.assert_called_once_with(
            "t1", project_id="p0", section_id=None, parent_id=None
        )
        assert result["projectId"] == "p0"

    def test_delete(self):
        client, api = _client(get_task=_task("t1", "Old"))
        assert client.delete_task("id:t1") == {"deleted": {"id": "t1", "content": "Old"}}
        api.delete_task.assert_called_once_with("t1")

    def test_ambiguous_deploy(self):
        client, api = _client(
            filter_tasks=[_task("1", "Deploy API"), _task("2", "Deploy web")]
        )
        with pytest.raises(AmbiguousReference):
            client.complete_task("deploy")
        api.close_task.assert_not_called()


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class TestComments:
    def test_list(self):
        comments = [Comment(id="c1", content="a"), Comment(id="c2", content="b")]
        client, _ = _client(get_task=_task("t1", "Buy milk"), get_comments=comments)
        result = client.list_comments("id:t1")
        assert result["taskId"] == "t1"
        assert result["taskContent"] == "Buy milk"
        assert result["count"] == 2

    def test_add(self):
        client, api = _client(
            get_task=_task("t1", "Buy milk"), add_comment=Comment(id="c1", content="hi")
        )
        result = client.add_comment("id:t1", "hi")
        api.add_comment.assert_called_once_with(task_id="t1", content="hi")
        assert result["task"] == {"id": "t1", "content": "Buy milk"}
        assert result["comment"]["id"] == "c1"

    def test_update_strips_id_prefix(self):
        client, api = _client(get_comment=Comment(id="c1", content="new"))
        result = client.update_comment("id:c1", "new")
        api.update_comment.assert_called_once_with("c1", content="new")
        assert result["comment"]["content"] == "new"

    def test_delete_truncates_content(self):
        client, api = _client(get_comment=Comment(id="c1", content="x" * 100))
        result = client.delete_comment("c1")
        api.delete_comment.assert_called_once_with("c1")
        assert len(result["deleted"]["content"]) == 80


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------


class TestReminders:
    def test_list_filters_task_and_deleted(self):
        reminders = [
            Reminder(id="r1", task_id="t1", minute_offset=30),
            Reminder(id="r2", task_id="t1", minute_offset=10, is_deleted=True),
            Reminder(id="r3", task_id="t2", minute_offset=5),
        ]
        client, _ = _client(get_task=_task("t1"), get_reminders=reminders)
        result = client.list_reminders("id:t1")
        assert result["count"] == 1
        assert result["reminders"][0]["id"] == "r1"

    def test_before(self):
        client, api = _client(get_task=_task("t1", due="2026-02-20"), add_reminder="r9")
        result = client.add_reminder("id:t1", before="2h30m")
        api.add_reminder.assert_called_once_with("t1", minute_offset=150, due=None)
        assert result == {
            "task": {"id": "t1", "content": "x"},
            "reminder": "2h30m before due",
            "reminderId": "r9",
        }

    def test_at(self):
        client, api = _client(get_task=_task("t1"), add_reminder=None)
        result = client.add_reminder("id:t1", at="2026-02-20T10:00")
        api.add_reminder.assert_called_once_with(
            "t1", minute_offset=None, due={"date": "2026-02-20T10:00"}
        )
        assert result["reminder"] == "at 2026-02-20T10:00"
        assert "reminderId" not in result

    def test_before_without_due_rejected(self):
        client, api = _client(get_task=_task("t1"))
        with pytest.raises(UsageError, match="task has no due date"):
            client.add_reminder("id:t1", before="30m")
        api.add_reminder.assert_not_called()

    def test_neither_or_both(self):
        client, _ = _client()
        with pytest.raises(UsageError, match="--before <duration> or --at <datetime>"):
            client.add_reminder("id:t1")
        with pytest.raises(UsageError, match="not both"):
            client.add_reminder("id:t1", before="30m", at="2026-02-20T10:00")

    def test_invalid_duration(self):
        client, api = _client()
        with pytest.raises(DurationError):
            client.add_reminder("id:t1", before="soon")
        api.get_task.assert_not_called()

    def test_delete(self):
        client, api = _client()
        assert client.delete_reminder("id:r1") == {"deleted": {"id": "r1"}}
        api.delete_reminder.assert_called_once_with("r1")


# ---------------------------------------------------------------------------
# Activity / completed / organization
# ---------------------------------------------------------------------------


class TestActivity:
    def test_activity(self):
        events = [ActivityEvent(id="e1", object_id="t1", extra_data={"content": "Buy"})]
        client, api = _client(get_activity=events)
        result = client.activity(event_type="completed", project="Work", limit="5")
        api.get_activity.assert_called_once_with(
            object_type=None,
            event_type="completed",
            parent_project_id="p1",
            since=None,
            until=None,
            limit=5,
        )
        assert result["count"] == 1
        assert result["events"][0]["content"] == "Buy"

    def test_completed_defaults_to_today(self):
        client, api = _client(get_completed_tasks=[CompletedTask(id="t1", content="x")])
        result = client.completed(today=TODAY)
        assert result["period"] == {"since": "2026-02-20", "until": "2026-02-21"}
        assert api.get_completed_tasks.call_args.kwargs["since"] == "2026-02-20"
        assert result["count"] == 1

    def test_completed_bad_limit(self):
        client, _ = _client()
        with pytest.raises(UsageError, match="Invalid --limit"):
            client.completed(limit="many", today=TODAY)


class TestOrganization:
    def test_projects(self):
        client, _ = _client()
        result = client.list_projects()
        assert result["count"] == 2
        assert result["projects"][0]["isInbox"] is True

    def test_sections_for_project(self):
        client, api = _client(get_sections=[Section(id="s1", name="Doing", project_id="p1")])
        result = client.list_sections(project="Work")
        api.get_sections.assert_called_once_with(project_id="p1")
        assert result["sections"][0]["name"] == "Doing"

    def test_labels(self):
        client, _ = _client(get_labels=[Label(id="l1", name="work")])
        assert client.list_labels()["labels"][0]["name"] == "work"

    def test_add_project(self):
        client, api = _client(add_project=Project(id="p9", name="Garden", url="u"))
        result = client.add_project("Garden", favorite=True, parent="Work")
        api.add_project.assert_called_once_with(
            "Garden", color=None, is_favorite=True, parent_id="p1"
        )
        assert result == {"id": "p9", "name": "Garden", "color": None, "url": "u"}

    def test_add_section(self):
        client, api = _client(add_section=Section(id="s9", name="Later", project_id="p1"))
        result = client.add_section("Later", "Work", order="3")
        api.add_section.assert_called_once_with("Later", "p1", order=3)
        assert result == {"id": "s9", "name": "Later", "projectId": "p1"}


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


class TestPartitionReview:
    def test_today_is_not_overdue_yesterday_is(self):
        tasks = [
            _task("due-today", due="2026-02-20"),
            _task("due-yesterday", due="2026-02-19"),
            _task("floating"),
        ]
        result = partition_review([], tasks, [INBOX, WORK], TODAY)
        assert [t["id"] for t in result["overdue"]["tasks"]] == ["due-yesterday"]
        assert result["floating"] == {"count": 1}
        assert result["total"] == 3

    def test_datetime_due_compares_date_only(self):
        task = Task(id="t", content="x", due=Due(datetime="2026-02-20T08:00:00Z"))
        result = partition_review([], [task], [], TODAY)
        assert result["overdue"]["count"] == 0

    def test_inbox_and_project_counts(self):
        tasks = [_task("1", project_id="p0"), _task("2"), _task("3")]
        result = partition_review([], tasks, [INBOX, WORK], TODAY)
        assert result["inbox"]["count"] == 1
        assert result["projects"] == [{"id": "p1", "name": "Work", "taskCount": 2}]

    def test_no_inbox_flagged(self):
        result = partition_review([], [_task("1", project_id="p0")], [WORK], TODAY)
        assert result["inbox"] == {"count": 0, "tasks": []}


class TestReview:
    def test_runs_three_reads(self):
        client, api = _client(
            filter_tasks=[_task("1", due="2026-02-20")],
            get_tasks=[_task("1", due="2026-02-20"), _task("2", project_id="p0")],
        )
        result = client.review(today=TODAY)
        api.filter_tasks.assert_called_once_with("today")
        api.get_tasks.assert_called_once_with()
        api.get_projects.assert_called_once_with()
        assert result["today"]["count"] == 1
        assert result["inbox"]["count"] == 1
        assert result["total"] == 2

    def test_first_failure_propagates(self):
        client, api = _client()
        api.get_projects.side_effect = RemoteFailure("HTTP 500: boom")
        with pytest.raises(RemoteFailure, match="boom"):
            client.review(today=TODAY)

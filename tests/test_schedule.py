import pytest

from agentdesk.errors import NotFoundError, ValidationError
from agentdesk.schedule import CRON_EVENT_DURATION_MS, HOUR_MS, WEEK_MS, ScheduleService

from conftest import FakeClock

NOW = 1_700_000_000_000


@pytest.fixture
def service(store):
    return ScheduleService(store, clock=FakeClock(start=NOW, step=0))


class TestTasks:
    def test_add_and_list_by_next_run(self, service):
        later = service.add_task("report", "weekly report", "cron", NOW + 2 * HOUR_MS, schedule_expr="0 9 * * 1")
        sooner = service.add_task("backup", "", "every", NOW + HOUR_MS)

        assert [t.id for t in service.list_tasks()] == [sooner.id, later.id]
        assert later.status == "active"

    def test_list_filters(self, service):
        a = service.add_task("a", "", "at", NOW)
        b = service.add_task("b", "", "at", NOW + HOUR_MS)
        service.add_task("c", "", "at", NOW + 5 * HOUR_MS)
        service.update_task_status(a.id, "paused")

        assert [t.id for t in service.list_tasks(status="paused")] == [a.id]
        assert [t.id for t in service.list_tasks(start=NOW, end=NOW + HOUR_MS)] == [a.id, b.id]

    def test_missing_fields(self, service):
        with pytest.raises(ValidationError, match="name, scheduleType"):
            service.add_task(None, "", None, NOW)

    def test_unknown_schedule_type(self, service):
        with pytest.raises(ValidationError):
            service.add_task("x", "", "sometimes", NOW)

    def test_status_update_and_delete(self, service):
        task = service.add_task("x", "", "at", NOW)

        assert service.update_task_status(task.id, "completed").status == "completed"
        with pytest.raises(ValidationError):
            service.update_task_status(task.id, "exploded")

        service.delete_task(task.id)
        with pytest.raises(NotFoundError):
            service.delete_task(task.id)
        with pytest.raises(NotFoundError):
            service.update_task_status(task.id, "active")


class TestEvents:
    def test_create_and_range(self, service):
        inside = service.create_event("standup", NOW + HOUR_MS, "meeting", end_time=NOW + 2 * HOUR_MS)
        service.create_event("later", NOW + 10 * HOUR_MS, "meeting")

        events = service.events_in_range(NOW, NOW + HOUR_MS)

        assert [e.id for e in events] == [inside.id]
        assert events[0].status == "scheduled"

    def test_create_validation(self, service):
        with pytest.raises(ValidationError, match="title"):
            service.create_event("", NOW, "meeting")
        with pytest.raises(ValidationError):
            service.create_event("x", NOW, "meeting", end_time=NOW - 1)
        with pytest.raises(ValidationError):
            service.events_in_range(NOW, NOW - 1)

    def test_week_window_is_half_open(self, service):
        first = service.create_event("start", NOW, "task")
        service.create_event("next week", NOW + WEEK_MS, "task")

        assert [e.id for e in service.week_events(NOW)] == [first.id]

    def test_upcoming_skips_past_events(self, service):
        service.create_event("past", NOW - HOUR_MS, "task")
        soon = service.create_event("soon", NOW + HOUR_MS, "task")
        later = service.create_event("later", NOW + 2 * HOUR_MS, "task")

        assert [e.id for e in service.upcoming_events()] == [soon.id, later.id]
        assert [e.id for e in service.upcoming_events(limit=1)] == [soon.id]

    def test_import_cron_jobs(self, service):
        ids = service.import_cron_jobs(
            [
                {"title": "backup", "cron_expression": "0 3 * * *", "command": "backup.sh"},
                {"title": "digest", "description": "daily digest", "cron_expression": "0 8 * * *", "command": "digest"},
            ]
        )

        events = service.cron_events()
        assert [e.id for e in events] == ids
        first = events[0]
        assert first.start_time == NOW + HOUR_MS
        assert first.end_time == NOW + HOUR_MS + CRON_EVENT_DURATION_MS
        assert first.recurrence == "0 3 * * *"
        assert first.source == "cron_job"
        assert first.metadata == {"cron_expression": "0 3 * * *", "command": "backup.sh"}

    def test_import_validates_every_job_first(self, service):
        with pytest.raises(ValidationError, match="command"):
            service.import_cron_jobs(
                [
                    {"title": "ok", "cron_expression": "* * * * *", "command": "run"},
                    {"title": "bad", "cron_expression": "* * * * *"},
                ]
            )
        assert service.cron_events() == []

    def test_event_status_and_delete(self, service):
        event = service.create_event("x", NOW, "meeting")

        assert service.update_event_status(event.id, "completed").status == "completed"
        service.delete_event(event.id)
        with pytest.raises(NotFoundError):
            service.update_event_status(event.id, "completed")
        with pytest.raises(NotFoundError):
            service.delete_event(event.id)

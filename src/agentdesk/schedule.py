"""Scheduled tasks and calendar events shown on the dashboard."""

import logging
from typing import Any, Callable, Optional

from agentdesk.errors import NotFoundError, ValidationError
from agentdesk.models import CalendarEvent, ScheduledTask
from agentdesk.storage import WorkspaceStore, now_ms

logger = logging.getLogger(__name__)

HOUR_MS = 60 * 60 * 1000
WEEK_MS = 7 * 24 * HOUR_MS
CRON_EVENT_DURATION_MS = 5 * 60 * 1000

SCHEDULE_TYPES = ("cron", "at", "every")
TASK_STATUSES = ("active", "paused", "completed")


def _require(**fields: Any) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


class ScheduleService:
    """Read/filter and write operations for tasks and calendar events."""

    def __init__(self, store: WorkspaceStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self.clock = clock

    # Tasks

    def add_task(
        self,
        name: str,
        description: str,
        schedule_type: str,
        next_run_at: int,
        schedule_expr: Optional[str] = None,
        payload: Optional[str] = None,
    ) -> ScheduledTask:
        _require(name=name, scheduleType=schedule_type, nextRunAt=next_run_at)
        if schedule_type not in SCHEDULE_TYPES:
            raise ValidationError(f"scheduleType must be one of {', '.join(SCHEDULE_TYPES)}")

        task = self.store.insert_task(
            name=name,
            description=description or "",
            schedule_type=schedule_type,
            next_run_at=next_run_at,
            schedule_expr=schedule_expr,
            payload=payload,
        )
        logger.info(f"Added task {task.id}: {name}")
        return task

    def list_tasks(
        self,
        status: Optional[str] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[ScheduledTask]:
        return self.store.list_tasks(status=status, start=start, end=end)

    def update_task_status(self, task_id: int, status: str) -> ScheduledTask:
        if status not in TASK_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(TASK_STATUSES)}")
        if not self.store.update_task_status(task_id, status):
            raise NotFoundError(f"Task not found: {task_id}")
        return self.store.get_task(task_id)

    def delete_task(self, task_id: int) -> None:
        if not self.store.delete_task(task_id):
            raise NotFoundError(f"Task not found: {task_id}")

    # Events

    def create_event(
        self,
        title: str,
        start_time: int,
        event_type: str,
        description: Optional[str] = None,
        end_time: Optional[int] = None,
        recurrence: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> CalendarEvent:
        _require(title=title, startTime=start_time, type=event_type)
        if end_time is not None and end_time < start_time:
            raise ValidationError("endTime must not be earlier than startTime")

        return self.store.insert_event(
            title=title,
            start_time=start_time,
            event_type=event_type,
            description=description,
            end_time=end_time,
            recurrence=recurrence,
            metadata=metadata,
            source=source,
        )

    def events_in_range(self, start: int, end: int) -> list[CalendarEvent]:
        if end < start:
            raise ValidationError("endTime must not be earlier than startTime")
        return self.store.events_between(start, end)

    def week_events(self, week_start: int) -> list[CalendarEvent]:
        """Events starting in the seven days from ``week_start``."""
        return self.store.events_between(week_start, week_start + WEEK_MS, end_inclusive=False)

    def upcoming_events(self, limit: int = 10) -> list[CalendarEvent]:
        return self.store.events_between(self.clock(), limit=limit)

    def cron_events(self) -> list[CalendarEvent]:
        return self.store.events_by_type("cron")

    def import_cron_jobs(self, jobs: list[dict[str, str]]) -> list[int]:
        """Create a ``cron`` event for each job, first run one hour out.

        Every job is validated before any event is written.
        """
        for job in jobs:
            _require(
                title=job.get("title"),
                cronExpression=job.get("cron_expression"),
                command=job.get("command"),
            )

        next_run = self.clock() + HOUR_MS
        ids = []
        for job in jobs:
            event = self.store.insert_event(
                title=job["title"],
                description=job.get("description", ""),
                start_time=next_run,
                end_time=next_run + CRON_EVENT_DURATION_MS,
                event_type="cron",
                recurrence=job["cron_expression"],
                source="cron_job",
                metadata={
                    "cron_expression": job["cron_expression"],
                    "command": job["command"],
                },
            )
            ids.append(event.id)

        logger.info(f"Imported {len(ids)} cron jobs")
        return ids

    def update_event_status(self, event_id: int, status: str) -> CalendarEvent:
        _require(status=status)
        if not self.store.update_event_status(event_id, status):
            raise NotFoundError(f"Event not found: {event_id}")
        return self.store.get_event(event_id)

    def delete_event(self, event_id: int) -> None:
        if not self.store.delete_event(event_id):
            raise NotFoundError(f"Event not found: {event_id}")

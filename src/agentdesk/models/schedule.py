"""Scheduled task and calendar event records."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ScheduledTask:
    """A recurring or one-shot job the agent runs."""

    id: int
    name: str
    description: str
    schedule_type: str  # cron, at, every
    next_run_at: int
    status: str = "active"
    schedule_expr: Optional[str] = None
    last_run_at: Optional[int] = None
    payload: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "scheduleType": self.schedule_type,
            "scheduleExpr": self.schedule_expr,
            "nextRunAt": self.next_run_at,
            "lastRunAt": self.last_run_at,
            "status": self.status,
            "payload": self.payload,
        }


@dataclass
class CalendarEvent:
    """An entry on the agent's calendar."""

    id: int
    title: str
    start_time: int
    type: str
    status: str = "scheduled"
    description: Optional[str] = None
    end_time: Optional[int] = None
    recurrence: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    source: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "type": self.type,
            "recurrence": self.recurrence,
            "status": self.status,
            "metadata": self.metadata,
            "source": self.source,
        }

"""
Schedule Routes

Scheduled tasks and calendar events for the dashboard's calendar view.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from ...schedule import ScheduleService
from ..dependencies import get_schedule_service
from ..models import CronImportRequest, EventCreate, StatusUpdate, TaskCreate

tasks_router = APIRouter(prefix="/tasks", tags=["tasks"])
events_router = APIRouter(prefix="/events", tags=["events"])

ScheduleDep = Annotated[ScheduleService, Depends(get_schedule_service)]


# ---------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------

@tasks_router.get("")
def list_tasks(
    service: ScheduleDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    start: Optional[int] = Query(None, alias="from"),
    end: Optional[int] = Query(None, alias="to"),
) -> dict:
    tasks = service.list_tasks(status=status_filter, start=start, end=end)
    return {"tasks": [task.to_dict() for task in tasks], "count": len(tasks)}


@tasks_router.post("", status_code=status.HTTP_201_CREATED)
def add_task(service: ScheduleDep, req: TaskCreate) -> dict:
    task = service.add_task(
        name=req.name,
        description=req.description,
        schedule_type=req.schedule_type,
        next_run_at=req.next_run_at,
        schedule_expr=req.schedule_expr,
        payload=req.payload,
    )
    return {"success": True, "task": task.to_dict()}


@tasks_router.patch("/{task_id}")
def update_task_status(service: ScheduleDep, task_id: int, req: StatusUpdate) -> dict:
    task = service.update_task_status(task_id, req.status)
    return {"success": True, "task": task.to_dict()}


@tasks_router.delete("/{task_id}")
def delete_task(service: ScheduleDep, task_id: int) -> dict:
    service.delete_task(task_id)
    return {"success": True}


# ---------------------------------------------------------------------
# Calendar events
# ---------------------------------------------------------------------

@events_router.get("")
def events_in_range(
    service: ScheduleDep,
    start: int = Query(..., alias="startTime"),
    end: int = Query(..., alias="endTime"),
) -> dict:
    events = service.events_in_range(start, end)
    return {"events": [event.to_dict() for event in events], "count": len(events)}


@events_router.get("/week")
def week_events(service: ScheduleDep, week_start: int = Query(..., alias="weekStart")) -> dict:
    events = service.week_events(week_start)
    return {"events": [event.to_dict() for event in events], "count": len(events)}


@events_router.get("/upcoming")
def upcoming_events(service: ScheduleDep, limit: int = Query(10, ge=1, le=200)) -> dict:
    events = service.upcoming_events(limit)
    return {"events": [event.to_dict() for event in events], "count": len(events)}


@events_router.get("/cron")
def cron_events(service: ScheduleDep) -> dict:
    events = service.cron_events()
    return {"events": [event.to_dict() for event in events], "count": len(events)}


@events_router.post("", status_code=status.HTTP_201_CREATED)
def create_event(service: ScheduleDep, req: EventCreate) -> dict:
    event = service.create_event(
        title=req.title,
        start_time=req.start_time,
        event_type=req.type,
        description=req.description,
        end_time=req.end_time,
        recurrence=req.recurrence,
        metadata=req.metadata,
        source=req.source,
    )
    return {"success": True, "event": event.to_dict()}


@events_router.post("/cron/import", status_code=status.HTTP_201_CREATED)
def import_cron_jobs(service: ScheduleDep, req: CronImportRequest) -> dict:
    ids = service.import_cron_jobs(
        [
            {
                "title": job.title,
                "description": job.description,
                "cron_expression": job.cron_expression,
                "command": job.command,
            }
            for job in req.jobs
        ]
    )
    return {"success": True, "ids": ids, "count": len(ids)}


@events_router.patch("/{event_id}")
def update_event_status(service: ScheduleDep, event_id: int, req: StatusUpdate) -> dict:
    event = service.update_event_status(event_id, req.status)
    return {"success": True, "event": event.to_dict()}


@events_router.delete("/{event_id}")
def delete_event(service: ScheduleDep, event_id: int) -> dict:
    service.delete_event(event_id)
    return {"success": True}

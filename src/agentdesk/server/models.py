"""
API Models

Request bodies for the HTTP surface. Fields use the dashboard's camelCase
names on the wire. Required-field checks for task, event and cron payloads
are left to the services so that missing values come back as 400s with a
message naming the fields.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ReindexRequest(WireModel):
    full_reindex: bool = Field(default=False, alias="fullReindex")
    apply: bool = False


class EntryCreate(WireModel):
    content: str = ""
    title: str = ""
    file_path: str = Field(default="", alias="filePath")
    file_type: str = Field(default="", alias="fileType")
    source_type: str = Field(default="", alias="sourceType")
    content_type: str = Field(default="document", alias="contentType")
    line_number: Optional[int] = Field(default=None, alias="lineNumber", ge=1)
    context: Optional[str] = None


class ActivityCreate(WireModel):
    action_type: str = Field(default="", alias="actionType")
    description: str = ""
    status: Literal["success", "failed", "pending"]
    metadata: Optional[Dict[str, Any]] = None
    source: Optional[str] = None


class TaskCreate(WireModel):
    name: Optional[str] = None
    description: str = ""
    schedule_type: Optional[str] = Field(default=None, alias="scheduleType")
    schedule_expr: Optional[str] = Field(default=None, alias="scheduleExpr")
    next_run_at: Optional[int] = Field(default=None, alias="nextRunAt")
    payload: Optional[str] = None


class StatusUpdate(WireModel):
    status: str


class EventCreate(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[int] = Field(default=None, alias="startTime")
    end_time: Optional[int] = Field(default=None, alias="endTime")
    type: Optional[str] = None
    recurrence: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    source: Optional[str] = None


class CronJob(WireModel):
    title: Optional[str] = None
    description: str = ""
    cron_expression: Optional[str] = Field(default=None, alias="cronExpression")
    command: Optional[str] = None


class CronImportRequest(WireModel):
    jobs: List[CronJob] = Field(default_factory=list)

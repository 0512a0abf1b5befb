"""Pydantic schemas for the read-only field attendance entities."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


# ── Attendance ──────────────────────────────────────────────────────
class AttendanceRecord(BaseModel):
    record_id: str
    employee_id: str
    check_in_time: str
    check_out_time: str | None = None  # null while the shift is open
    work_area_id: str
    is_offline_entry: bool = False
    sync_time: str | None = None  # null until synced
    created_at: str
    updated_at: str


# ── Activity / GPS samples ──────────────────────────────────────────
class ActivityData(BaseModel):
    activity_id: str
    record_id: str
    employee_id: str
    record_time: str
    latitude: float
    longitude: float
    altitude: float | None = None
    heading: float | None = None
    acceleration_x: float | None = None
    acceleration_y: float | None = None
    acceleration_z: float | None = None
    activity_type: str
    is_synced: bool = False
    created_at: str


# ── Employee (domain shape) ─────────────────────────────────────────
class Employee(BaseModel):
    employee_id: str
    name: str
    email: str
    phone_number: str | None = None
    assigned_area: str | None = None
    is_active: bool = True
    created_at: str
    updated_at: str


# ── Work area (polygon) ─────────────────────────────────────────────
class WorkArea(BaseModel):
    area_id: str
    area_name: str
    coordinates: list[list[float]]  # ordered [lat, lng] pairs
    description: str | None = None
    created_at: str
    updated_at: str


# ── Punches ─────────────────────────────────────────────────────────
class PunchStatus(str, Enum):
    PUNCH_IN = "PunchIn"
    PUNCH_OUT = "PunchOut"


class Punch(BaseModel):
    punch_id: str
    employee_id: str
    status: PunchStatus
    timestamp: str
    area_id: str
    latitude: float
    longitude: float


# ── Tools / tasks ───────────────────────────────────────────────────
class Tool(BaseModel):
    tool_id: str
    name: str
    category: str


class Task(BaseModel):
    task_id: str
    title: str
    area_id: str
    assigned_employee_ids: list[str]
    required_tool_ids: list[str]
    scheduled_start: str


# ── Reports ─────────────────────────────────────────────────────────
class ToolUsage(BaseModel):
    tool_id: str
    minutes_used: int


class EmployeeReport(BaseModel):
    report_id: str
    employee_id: str
    date: str  # YYYY-MM-DD
    task_ids: list[str]
    worked_minutes: int
    tool_usage: list[ToolUsage] = Field(default_factory=list)
    activities: list[ActivityData] = Field(default_factory=list)


class AdminReport(BaseModel):
    report_id: str
    date: str  # YYYY-MM-DD
    area_id: str
    employee_ids: list[str]
    total_worked_minutes: int
    open_records: int

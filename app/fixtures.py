"""
Demo data served by the read-only query actions.

Nothing here is persisted; timestamps are generated on every call.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.schemas.attendance import (ActivityData, AdminReport, AttendanceRecord,
                                    Employee, EmployeeReport, Punch, PunchStatus,
                                    Task, Tool, ToolUsage, WorkArea)
from app.schemas.staff import CircularGeoFence, GeoPoint


def _iso(dt: datetime) -> str:
    return dt.isoformat()


def _shift_start(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(hours=8)


def attendance_records() -> list[AttendanceRecord]:
    now = datetime.now(timezone.utc)
    start = _shift_start(now)
    return [
        AttendanceRecord(
            record_id="att001",
            employee_id="emp001",
            check_in_time=_iso(start),
            check_out_time=None,
            work_area_id="area001",
            is_offline_entry=False,
            sync_time=None,
            created_at=_iso(now),
            updated_at=_iso(now),
        ),
        AttendanceRecord(
            record_id="att002",
            employee_id="emp002",
            check_in_time=_iso(start + timedelta(minutes=12)),
            check_out_time=None,
            work_area_id="area002",
            is_offline_entry=True,
            sync_time=None,
            created_at=_iso(now),
            updated_at=_iso(now),
        ),
    ]


def activity_data() -> list[ActivityData]:
    now = datetime.now(timezone.utc)
    return [
        ActivityData(
            activity_id="act001",
            record_id="att001",
            employee_id="emp001",
            record_time=_iso(now),
            latitude=35.6895,
            longitude=139.6917,
            altitude=10.0,
            heading=90.0,
            acceleration_x=0.1,
            acceleration_y=0.2,
            acceleration_z=0.3,
            activity_type="walking",
            is_synced=True,
            created_at=_iso(now),
        ),
        ActivityData(
            activity_id="act002",
            record_id="att002",
            employee_id="emp002",
            record_time=_iso(now),
            latitude=35.1002,
            longitude=139.1004,
            activity_type="stationary",
            is_synced=False,
            created_at=_iso(now),
        ),
    ]


def employees() -> list[Employee]:
    now = _iso(datetime.now(timezone.utc))
    return [
        Employee(
            employee_id="emp001",
            name="John Doe",
            email="john.doe@example.com",
            phone_number="123-456-7890",
            assigned_area="area001",
            is_active=True,
            created_at=now,
            updated_at=now,
        ),
        Employee(
            employee_id="emp002",
            name="Jane Roe",
            email="jane.roe@example.com",
            phone_number=None,
            assigned_area="area002",
            is_active=True,
            created_at=now,
            updated_at=now,
        ),
    ]


def work_areas() -> list[WorkArea]:
    now = _iso(datetime.now(timezone.utc))
    return [
        WorkArea(
            area_id="area001",
            area_name="Main Office",
            coordinates=[[35.689, 139.691], [35.690, 139.692], [35.688, 139.693]],
            description="Main office building area",
            created_at=now,
            updated_at=now,
        ),
        WorkArea(
            area_id="area002",
            area_name="North Yard",
            coordinates=[[35.101, 139.099], [35.102, 139.101], [35.099, 139.102]],
            description=None,
            created_at=now,
            updated_at=now,
        ),
    ]


def geofences() -> list[CircularGeoFence]:
    return [
        CircularGeoFence(
            id="area001",
            name="Main Office",
            center=GeoPoint(lat=35.6895, lng=139.6917),
            radius=120,
            description="Main office building area",
            color="#1e88e5",
        ),
        CircularGeoFence(
            id="area002",
            name="North Yard",
            center=GeoPoint(lat=35.1, lng=139.1),
            radius=50,
            description="",
            color="#43a047",
        ),
    ]


def punches() -> list[Punch]:
    start = _shift_start(datetime.now(timezone.utc))
    return [
        Punch(
            punch_id="pun001",
            employee_id="emp001",
            status=PunchStatus.PUNCH_IN,
            timestamp=_iso(start),
            area_id="area001",
            latitude=35.6895,
            longitude=139.6917,
        ),
        Punch(
            punch_id="pun002",
            employee_id="emp002",
            status=PunchStatus.PUNCH_IN,
            timestamp=_iso(start + timedelta(minutes=12)),
            area_id="area002",
            latitude=35.1001,
            longitude=139.1001,
        ),
        Punch(
            punch_id="pun003",
            employee_id="emp001",
            status=PunchStatus.PUNCH_OUT,
            timestamp=_iso(start + timedelta(hours=4)),
            area_id="area001",
            latitude=35.6896,
            longitude=139.6915,
        ),
    ]


def tools() -> list[Tool]:
    return [
        Tool(tool_id="tool001", name="Hammer drill", category="power"),
        Tool(tool_id="tool002", name="Laser level", category="measuring"),
        Tool(tool_id="tool003", name="Safety harness", category="safety"),
    ]


def tasks() -> list[Task]:
    start = _shift_start(datetime.now(timezone.utc))
    return [
        Task(
            task_id="task001",
            title="Install ceiling anchors",
            area_id="area001",
            assigned_employee_ids=["emp001"],
            required_tool_ids=["tool001", "tool003"],
            scheduled_start=_iso(start + timedelta(hours=1)),
        ),
        Task(
            task_id="task002",
            title="Survey yard boundary",
            area_id="area002",
            assigned_employee_ids=["emp001", "emp002"],
            required_tool_ids=["tool002"],
            scheduled_start=_iso(start + timedelta(hours=3)),
        ),
    ]


def employee_reports() -> list[EmployeeReport]:
    today = datetime.now(timezone.utc).date().isoformat()
    samples = {a.employee_id: a for a in activity_data()}
    return [
        EmployeeReport(
            report_id="rep001",
            employee_id="emp001",
            date=today,
            task_ids=["task001", "task002"],
            worked_minutes=240,
            tool_usage=[
                ToolUsage(tool_id="tool001", minutes_used=95),
                ToolUsage(tool_id="tool003", minutes_used=120),
            ],
            activities=[samples["emp001"]],
        ),
        EmployeeReport(
            report_id="rep002",
            employee_id="emp002",
            date=today,
            task_ids=["task002"],
            worked_minutes=180,
            tool_usage=[ToolUsage(tool_id="tool002", minutes_used=60)],
            activities=[samples["emp002"]],
        ),
    ]


def admin_reports() -> list[AdminReport]:
    today = datetime.now(timezone.utc).date().isoformat()
    return [
        AdminReport(
            report_id="adm001",
            date=today,
            area_id="area001",
            employee_ids=["emp001"],
            total_worked_minutes=240,
            open_records=1,
        ),
        AdminReport(
            report_id="adm002",
            date=today,
            area_id="area002",
            employee_ids=["emp002"],
            total_worked_minutes=180,
            open_records=1,
        ),
    ]

"""
Action handlers and the catalogs the router dispatches on.

Query actions return the payload that goes into ``data``.
Command actions return the whole secondary envelope (``{"success": ...}``).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from app import fixtures
from app.api.v1.deps import ActionContext
from app.core.exceptions import ActionError
from app.schemas.staff import CircularGeoFence, StaffRecord
from app.schemas.token import AuthRequest, AuthResponse, TokenCheckResponse
from app.schemas.user import Denied

logger = logging.getLogger(__name__)

QueryHandler = Callable[[ActionContext, dict[str, str]], Awaitable[Any]]
CommandHandler = Callable[[ActionContext, dict[str, Any]], Awaitable[dict[str, Any]]]


def _invalid_payload(field: str, exc: ValidationError) -> ActionError:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or field}: {err['msg']}" for err in exc.errors()
    )
    return ActionError(f"Invalid {field}: {problems}")


# ── Fixture queries ─────────────────────────────────────────────────
def _by_employee(item: BaseModel, employee_id: str) -> bool:
    return getattr(item, "employee_id", None) == employee_id


def _by_assignee(item: BaseModel, employee_id: str) -> bool:
    return employee_id in item.assigned_employee_ids  # type: ignore[attr-defined]


def _by_member(item: BaseModel, employee_id: str) -> bool:
    return employee_id in item.employee_ids  # type: ignore[attr-defined]


def _fixture_query(
    source: Callable[[], list[BaseModel]],
    predicate: Callable[[BaseModel, str], bool] | None = None,
) -> QueryHandler:
    async def handler(_ctx: ActionContext, params: dict[str, str]) -> list[BaseModel]:
        items = source()
        employee_id = params.get("employee_id")
        if predicate is None or not employee_id:
            return items
        return [item for item in items if predicate(item, employee_id)]

    return handler


# ── Store queries ───────────────────────────────────────────────────
async def _get_employees(ctx: ActionContext, params: dict[str, str]) -> list[StaffRecord]:
    return await ctx.staff.list_all(params.get("employee_id") or None)


async def _get_all_employees(ctx: ActionContext, _params: dict[str, str]) -> list[StaffRecord]:
    return await ctx.staff.list_all()


async def _get_all_workareas(ctx: ActionContext, _params: dict[str, str]) -> list[CircularGeoFence]:
    return await ctx.areas.list_all()


QUERY_ACTIONS: dict[str, QueryHandler] = {
    "getAttendanceData": _fixture_query(fixtures.attendance_records, _by_employee),
    "getActivityData": _fixture_query(fixtures.activity_data, _by_employee),
    "getEmployeeData": _fixture_query(fixtures.employees, _by_employee),
    "getWorkareaData": _fixture_query(fixtures.work_areas),
    "getGeofences": _fixture_query(fixtures.geofences),
    "getPunches": _fixture_query(fixtures.punches, _by_employee),
    "getTasks": _fixture_query(fixtures.tasks, _by_assignee),
    "getEmployeeReports": _fixture_query(fixtures.employee_reports, _by_employee),
    "getAdminReports": _fixture_query(fixtures.admin_reports, _by_member),
    "getTools": _fixture_query(fixtures.tools),
    "getEmployees": _get_employees,
    "getAllEmployees": _get_all_employees,
    "getAllWorkareas": _get_all_workareas,
}


# ── Auth commands ───────────────────────────────────────────────────
async def _login(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    try:
        creds = AuthRequest.model_validate(body)
    except ValidationError as e:
        raise _invalid_payload("credentials", e) from e
    user = await ctx.registry.authenticate(creds.username, creds.password)
    if user is None:
        logger.warning("Failed login for %r", creds.username)
        return AuthResponse(success=False).model_dump(exclude_none=True)
    token = await ctx.registry.issue(user)
    return AuthResponse(success=True, token=token).model_dump()


async def _check_token(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    outcome = await ctx.registry.authorize(body.get("token"))
    return TokenCheckResponse(success=not isinstance(outcome, Denied)).model_dump()


async def _logout(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    return {"success": await ctx.registry.revoke(body.get("token"))}


# ── Staff commands ──────────────────────────────────────────────────
async def _add_employee(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    payload = body.get("newEmployee")
    if not payload:
        return {"success": False}
    try:
        staff = StaffRecord.model_validate(payload)
    except ValidationError as e:
        raise _invalid_payload("newEmployee", e) from e
    return {"success": await ctx.staff.add(staff)}


async def _delete_employee(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    employee_id = body.get("employeeId")
    if employee_id in (None, ""):
        return {"success": False}
    return {"success": await ctx.staff.delete(str(employee_id))}


async def _get_employee_by_id(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    staff_id = body.get("id")
    if staff_id in (None, ""):
        return {"success": False}
    staff = await ctx.staff.get(str(staff_id))
    if staff is None:
        return {"success": False}
    return {"success": True, "employee": staff}


async def _list_employees(ctx: ActionContext, _body: dict[str, Any]) -> dict[str, Any]:
    return {"success": True, "employees": await ctx.staff.list_all()}


# ── Work area commands ──────────────────────────────────────────────
async def _add_workarea(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    payload = body.get("area")
    if not payload:
        return {"success": False}
    try:
        area = CircularGeoFence.model_validate(payload)
    except ValidationError as e:
        raise _invalid_payload("area", e) from e
    return {"success": await ctx.areas.add(area)}


async def _delete_workarea(ctx: ActionContext, body: dict[str, Any]) -> dict[str, Any]:
    area_id = body.get("areaId")
    if area_id in (None, ""):
        return {"success": False}
    return {"success": await ctx.areas.delete(str(area_id))}


async def _list_workareas(ctx: ActionContext, _body: dict[str, Any]) -> dict[str, Any]:
    return {"success": True, "areas": await ctx.areas.list_all()}


# name -> (handler, requires a valid token)
COMMAND_ACTIONS: dict[str, tuple[CommandHandler, bool]] = {
    "login": (_login, False),
    "checkToken": (_check_token, False),
    "logout": (_logout, False),
    "addEmployee": (_add_employee, True),
    "deleteEmployee": (_delete_employee, True),
    "getEmployeeById": (_get_employee_by_id, True),
    "getAllEmployees": (_list_employees, True),
    "addWorkarea": (_add_workarea, True),
    "deleteWorkarea": (_delete_workarea, True),
    "getAllWorkareas": (_list_workareas, True),
}

"""
Action router: one GET entry point for queries, one POST entry point for
commands, both keyed by ``action``.

Every request ends in a well-formed envelope with HTTP 200, whatever goes
wrong inside the handler.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder

from app.api.v1.actions import COMMAND_ACTIONS, QUERY_ACTIONS
from app.api.v1.deps import ActionContext, get_action_context
from app.core.config import settings
from app.core.exceptions import ActionError, MalformedBodyError, UnknownActionError
from app.core.rate_limit import limiter
from app.schemas.envelope import failure, success
from app.schemas.user import Denied

router = APIRouter(tags=["actions"])
logger = logging.getLogger(__name__)


def _failure_from(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, ActionError):
        return failure(exc.message).to_wire()
    return failure(str(exc) or exc.__class__.__name__).to_wire()


async def _read_body(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError as e:
        raise MalformedBodyError(f"Request body is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise MalformedBodyError("Request body must be a JSON object")
    return body


# ── Queries ─────────────────────────────────────────────────────────
@router.get("/exec")
async def run_query(
    request: Request,
    action: str | None = None,
    ctx: ActionContext = Depends(get_action_context),
) -> dict[str, Any]:
    """Run a read-only action; the result is wrapped as ``data``."""
    try:
        handler = QUERY_ACTIONS.get(action or "")
        if handler is None:
            raise UnknownActionError(action, sorted(QUERY_ACTIONS))
        params = {k: v for k, v in request.query_params.items() if k != "action"}
        logger.debug("Query %s %s", action, params)
        data = await handler(ctx, params)
        return success(jsonable_encoder(data, by_alias=True)).to_wire()
    except UnknownActionError as e:
        logger.info("Rejected query: %s", e.message)
        return _failure_from(e)
    except Exception as e:
        logger.exception("Query %s failed", action)
        return _failure_from(e)


# ── Commands ────────────────────────────────────────────────────────
@router.post("/exec")
@limiter.limit(settings.COMMAND_RATE_LIMIT)
async def run_command(
    request: Request,
    action: str | None = None,
    ctx: ActionContext = Depends(get_action_context),
) -> dict[str, Any]:
    """Run a command; ``action`` comes from the query string or the body."""
    try:
        body = await _read_body(request)
        action = action or body.get("action")
        entry = COMMAND_ACTIONS.get(action) if isinstance(action, str) else None
        if entry is None:
            raise UnknownActionError(
                action if isinstance(action, str) else None, sorted(COMMAND_ACTIONS)
            )
        handler, gated = entry

        if gated:
            outcome = await ctx.registry.authorize(body.get("token"))
            if isinstance(outcome, Denied):
                logger.warning("Denied %s: %s", action, outcome.reason)
                return {"success": False}
            logger.debug("Command %s by %s", action, outcome.username)

        result = await handler(ctx, body)
        return jsonable_encoder(result, by_alias=True)
    except ActionError as e:
        logger.info("Rejected command %s: %s", action, e.message)
        return _failure_from(e)
    except Exception as e:
        logger.exception("Command %s failed", action)
        return _failure_from(e)

"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import dispatch, health

api_router = APIRouter()

# GET / POST action dispatch
api_router.include_router(dispatch.router)

# Liveness
api_router.include_router(health.router)

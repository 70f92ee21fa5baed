"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import authorize
from app.api.v1.endpoints import todos, user

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    user.router, prefix="/user", tags=["Users"]
)
api_router.include_router(
    todos.router,
    prefix="/todos",
    tags=["Todos"],
    dependencies=[Depends(authorize)],
)

"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Unlike a router-level auth dependency, no route here is rejected
before it runs: every request resolves an AuthContext (possibly anonymous)
and the service layer decides. Health and auth routes simply never look
at the context.
"""

from fastapi import APIRouter

from tasktrack.api.auth import router as auth_router
from tasktrack.api.health import router as health_router
from tasktrack.api.projects import router as projects_router
from tasktrack.api.tasks import router as tasks_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(projects_router, tags=["projects"])
api_router.include_router(tasks_router, tags=["tasks"])

"""Project API routes.

Learn: Routes translate HTTP to service calls and nothing more. The
caller's AuthContext is resolved by a dependency and handed to the
service explicitly; ownership is enforced inside the service by the
guard, and failures reach the client through the error translator.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.api.pagination import page_body, project_page
from tasktrack.auth.context import AuthContext
from tasktrack.auth.dependencies import get_auth_context, require_user
from tasktrack.db.engine import get_db
from tasktrack.db.models import User
from tasktrack.db.pagination import PageRequest
from tasktrack.schemas.common import PageRead
from tasktrack.schemas.project import (
    ProgressRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from tasktrack.services.project_service import ProjectService

router = APIRouter(prefix="/projects")


def _project_svc(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    body: ProjectCreate,
    owner: User = Depends(require_user),
    svc: ProjectService = Depends(_project_svc),
):
    """Create a project owned by the caller."""
    result = await svc.create_project(body.title, body.description, owner)
    return ProjectRead.from_result(result)


@router.get("", response_model=PageRead[ProjectRead])
async def list_projects(
    owner: User = Depends(require_user),
    page: PageRequest = Depends(project_page),
    svc: ProjectService = Depends(_project_svc),
):
    """List the caller's projects (paged), each with progress."""
    result = await svc.list_projects(owner, page)
    return page_body(result, [ProjectRead.from_result(r) for r in result.content])


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    svc: ProjectService = Depends(_project_svc),
):
    return ProjectRead.from_result(await svc.get_project(project_id, ctx))


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    svc: ProjectService = Depends(_project_svc),
):
    """Replace a project's title and description."""
    result = await svc.update_project(project_id, ctx, body.title, body.description)
    return ProjectRead.from_result(result)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    svc: ProjectService = Depends(_project_svc),
):
    """Delete a project and all of its tasks."""
    await svc.delete_project(project_id, ctx)
    return Response(status_code=204)


@router.get("/{project_id}/progress", response_model=ProgressRead)
async def get_project_progress(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    svc: ProjectService = Depends(_project_svc),
):
    snapshot = await svc.get_progress(project_id, ctx)
    return ProgressRead.from_snapshot(project_id, snapshot)

"""API routes. Everything except login and health requires a Bearer token."""

from fastapi import APIRouter, Depends

from pipeline_api.api import auth, change_requests, end_users, health, pipelines, project_categories, users
from pipeline_api.api.deps import get_current_user

public_router = APIRouter()
public_router.include_router(auth.router, prefix="/login", tags=["auth"])
public_router.include_router(health.router, prefix="/health", tags=["health"])

protected_router = APIRouter(dependencies=[Depends(get_current_user)])
protected_router.include_router(pipelines.router, prefix="/pipelines", tags=["pipelines"])
protected_router.include_router(users.router, prefix="/users", tags=["users"])
protected_router.include_router(end_users.router, prefix="/endusers", tags=["end users"])
protected_router.include_router(
    project_categories.router, prefix="/project-categories", tags=["project categories"]
)
# Path used by earlier clients.
protected_router.include_router(
    project_categories.router, prefix="/categories", include_in_schema=False
)
protected_router.include_router(
    change_requests.router, prefix="/change-request", tags=["change requests"]
)
protected_router.include_router(
    change_requests.approval_router, prefix="/approve-change-request", tags=["change requests"]
)

router = APIRouter()
router.include_router(public_router)
router.include_router(protected_router)

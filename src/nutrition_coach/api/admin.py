"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from nutrition_coach.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/users/{user_id}/quota", dependencies=[Depends(require_admin)])
async def user_quota(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's meal plan permission for today."""
    container: AppContainer = request.app.state.container
    return asdict(container.meal_plan_service.check_permission(user_id))


@router.post("/catalog/refresh", dependencies=[Depends(require_admin)])
async def refresh_catalog(request: Request) -> dict[str, int]:
    """Reload the recipe catalog from storage."""
    container: AppContainer = request.app.state.container
    return {"recipes": container.catalog_service.refresh()}

"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from sales_bot.containers import AppContainer

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


@router.get("/sessions", dependencies=[Depends(require_admin)])
async def list_sessions(request: Request) -> dict[str, object]:
    """Return sales conversations currently in progress."""
    container: AppContainer = request.app.state.container
    return {"sessions": container.admin_service.list_sessions()}


@router.get("/sales", dependencies=[Depends(require_admin)])
async def list_sales(request: Request, limit: int = 20) -> dict[str, object]:
    """Return recently recorded sales."""
    container: AppContainer = request.app.state.container
    return {"sales": container.admin_service.list_sales(limit)}

"""News sync API endpoints."""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.postgres import get_session as get_db
from app.schemas.news import SyncResponse
from app.services.news_sync import NewsSyncService, build_sync_service, execute_sync

router = APIRouter()


async def get_sync_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[NewsSyncService, None]:
    """Dependency providing a sync service bound to the request's session."""
    service = build_sync_service(db)
    try:
        yield service
    finally:
        await service.close()


@router.post("/sync", response_model=SyncResponse, response_model_exclude_none=True)
async def sync_news(
    source: str | None = None,
    service: NewsSyncService = Depends(get_sync_service),
) -> Any:
    """
    Run one full news sync.

    Fetches every registered feed (or only `source`), stores new relevant
    articles and returns the run counters. Partial failures are reported in
    `errors`; only a failure of the whole run returns success=false.
    """
    if source and service.registry.get(source) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feed source {source} not found",
        )

    result = await execute_sync(service, source)
    if not result["success"]:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=result)
    return result

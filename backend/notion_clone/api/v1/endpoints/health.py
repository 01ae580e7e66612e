from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from notion_clone.config import settings
from notion_clone.dependencies import get_store

if TYPE_CHECKING:
    from notion_clone.db.base import DocumentStore

router = APIRouter()


@router.get("")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "notion-clone-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check(store: DocumentStore = Depends(get_store)):
    """Readiness check endpoint."""
    db_status = "connected"
    try:
        await asyncio.to_thread(store.ping)
    except PyMongoError as e:
        db_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "database": db_status,
            "api_prefix": settings.api_prefix
        }
    )

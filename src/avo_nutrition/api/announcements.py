"""Announcement rich text endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from avo_nutrition.api.models import AnnouncementBody  # noqa: TC001

if TYPE_CHECKING:
    from avo_nutrition.containers import AppContainer

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.post("/parse")
async def parse(payload: AnnouncementBody, request: Request) -> dict[str, object]:
    """Return render-safe segments and parse flags."""
    container: AppContainer = request.app.state.container
    parsed = container.announcement_service.parse(payload.body)
    return {
        "segments": [asdict(segment) for segment in parsed.segments],
        "meta": asdict(parsed.meta),
    }


@router.post("/preview")
async def preview(payload: AnnouncementBody, request: Request) -> dict[str, str]:
    """Return the plain-text preview line."""
    container: AppContainer = request.app.state.container
    return {"text": container.announcement_service.preview(payload.body)}


@router.post("/validate")
async def validate(payload: AnnouncementBody, request: Request) -> dict[str, object]:
    """Check a body before publishing."""
    container: AppContainer = request.app.state.container
    return asdict(container.announcement_service.validate(payload.body))

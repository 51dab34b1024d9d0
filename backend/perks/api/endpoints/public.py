from __future__ import annotations

import time

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict:
    started_at = request.app.state.context.started_at
    return {
        "status": "ok",
        "uptime": round(time.monotonic() - started_at, 3),
        "timestamp": int(time.time() * 1000),
    }

"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check whether POS data goes to Supabase or stays in memory."""
    from ...config import settings
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set CAMPUSCOFFEE_SUPABASE_URL and CAMPUSCOFFEE_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table(settings.supabase_pos_table).select("id").limit(1).execute()
        return {"configured": True, "connected": True, "table": settings.supabase_pos_table}
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }

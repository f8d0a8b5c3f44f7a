"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..services.pos import PosService, build_pos_service


@lru_cache()
def get_pos_service() -> PosService:
    """One service (and store) per process; override in tests via ``dependency_overrides``."""
    return build_pos_service()

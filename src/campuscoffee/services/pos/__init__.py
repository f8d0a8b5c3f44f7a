"""Point-of-sale service helpers."""

from .service import PosService, build_pos_service

__all__ = ["PosService", "build_pos_service"]

"""API v1: search and health routes."""

from app.api.v1.router import api_router

__all__ = ["api_router"]

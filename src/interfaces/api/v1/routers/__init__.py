"""
API v1 routers.

This module exports all router instances for the API endpoints.
"""

from src.interfaces.api.v1.routers import ads, catalog, health, metrics, users

__all__ = ["ads", "catalog", "health", "metrics", "users"]

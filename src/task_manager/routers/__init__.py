"""Routers package."""

from . import ai, auth, pages, tasks

__all__ = ["ai", "auth", "pages", "tasks"]

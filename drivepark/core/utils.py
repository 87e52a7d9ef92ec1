"""
Utility helpers shared across routers/services.
"""

from __future__ import annotations

from fastapi import Request


def app_service(request: Request, name: str):
    """Return an object stored on app.state (services, templates, settings)."""
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured")
    return svc

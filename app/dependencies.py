"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Request

from app.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """The process-wide service container built in the application lifespan."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("service container is not initialised")
    return container

"""Shared httpx client factory."""

from __future__ import annotations

import httpx

from core.config import Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the httpx client every adapter in a process shares."""
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=settings.http_max_connections,
            max_keepalive_connections=max(1, settings.http_max_connections // 2),
        ),
        timeout=httpx.Timeout(settings.http_timeout, connect=settings.http_connect_timeout),
    )

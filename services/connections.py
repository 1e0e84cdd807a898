"""Connection service — validate stored integrations before publishing.

Lets callers tell "credentials invalid" (ConnectionValidationError) apart
from "publish failed" (PublishError raised by the adapter itself).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import httpx
import structlog

from core.exceptions import ConnectionValidationError, UnknownProviderError
from db.models import Integration
from services.publishers import get_adapter

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ConnectionCheck:
    integration_id: str
    provider: str
    ok: bool
    error: str | None = None


class ConnectionService:
    """Runs adapter.test_connection() for stored integrations."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def check(self, integration: Integration) -> ConnectionCheck:
        """Never raises: unknown providers and bad configs become ok=False."""
        try:
            adapter = get_adapter(integration.provider, integration.config, self._http)
        except (UnknownProviderError, ConnectionValidationError) as exc:
            return ConnectionCheck(integration.id, integration.provider, ok=False, error=exc.message)

        ok = await adapter.test_connection()
        log.info("connection_checked", integration_id=integration.id, provider=integration.provider, ok=ok)
        return ConnectionCheck(
            integration.id,
            integration.provider,
            ok=ok,
            error=None if ok else "Credentials rejected or platform unreachable",
        )

    async def check_all(self, integrations: Iterable[Integration]) -> list[ConnectionCheck]:
        return [await self.check(integration) for integration in integrations]

    async def ensure_valid(self, integration: Integration) -> None:
        """Raise ConnectionValidationError unless the integration connects."""
        result = await self.check(integration)
        if not result.ok:
            raise ConnectionValidationError(
                f"{integration.provider} connection {integration.id} failed: {result.error}"
            )

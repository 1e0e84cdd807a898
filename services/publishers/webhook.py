"""Generic webhook adapter — POSTs the post as JSON to a caller-owned URL.

Every call carries a fresh idempotencyKey; deduplication is the receiver's job.

X-Signature modes:
  - "raw": the shared secret itself (anyone who sees one request can replay it)
  - "hmac": sha256=<hex HMAC-SHA256 of the exact request body>
"""

from __future__ import annotations

import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx
import structlog

from core.exceptions import PublishError

from .base import PublishInput, PublishResult, api_request, send_request

log = structlog.get_logger()

_PROVIDER = "Webhook"

SigningMode = Literal["raw", "hmac"]


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    url: str
    secret: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    signing: SigningMode = "raw"


def sign_body(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


class WebhookAdapter:
    provider = _PROVIDER
    supports_scheduling = True  # "when" is forwarded, the receiver decides
    supports_images = True
    supports_tags = True

    def __init__(self, config: WebhookConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    async def test_connection(self) -> bool:
        """HEAD the URL; any 2xx counts as reachable."""
        try:
            resp = await send_request(self._client, _PROVIDER, "HEAD", self._config.url, headers=self._config.headers)
        except PublishError as exc:
            log.warning("webhook_validate_failed", url=self._config.url, error=str(exc))
            return False
        if not resp.is_success:
            log.warning("webhook_validate_failed", url=self._config.url, status=resp.status_code)
        return resp.is_success

    def _build_request(self, input: PublishInput) -> tuple[bytes, dict[str, str]]:
        payload: dict[str, Any] = {**input.to_payload(), "idempotencyKey": str(uuid.uuid4())}
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")

        headers = {"Content-Type": "application/json", **self._config.headers}
        if self._config.secret:
            if self._config.signing == "hmac":
                headers["X-Signature"] = sign_body(self._config.secret, body)
            else:
                headers["X-Signature"] = self._config.secret
        return body, headers

    async def publish(self, input: PublishInput) -> PublishResult:
        body, headers = self._build_request(input)
        data = await api_request(self._client, _PROVIDER, "POST", self._config.url, content=body, headers=headers)
        if not isinstance(data, dict):
            data = {}

        # The receiver may not echo an id; "" is a valid result here.
        external_id = str(data.get("id") or "")
        log.info("webhook_delivered", url=self._config.url, external_id=external_id or None)
        return PublishResult(external_id=external_id, url=data.get("url"))

"""WordPress (self-hosted) adapter — WP REST API v2, Basic Auth.

Auth: username + Application Password.
Tags are sent as given; sites that only accept term IDs must receive IDs.
Errors: non-2xx raises PublishError, no retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from core.exceptions import PublishError

from .base import PublishInput, PublishResult, api_request, require_id
from .media import upload_featured_image_to_self_hosted

log = structlog.get_logger()

_PROVIDER = "WP"


@dataclass(frozen=True, slots=True)
class WordPressConfig:
    url: str
    username: str
    password: str  # application password
    post_type: str = "posts"


class WordPressAdapter:
    """WP REST API v2 at {url}/wp-json/wp/v2."""

    provider = _PROVIDER
    supports_scheduling = True
    supports_images = True
    supports_tags = True

    def __init__(self, config: WordPressConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._config.url.rstrip("/") + "/wp-json/wp/v2"

    @property
    def _auth(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self._config.username, self._config.password)

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        return await api_request(
            self._client,
            _PROVIDER,
            method,
            f"{self.base_url}{path}",
            auth=self._auth,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    async def test_connection(self) -> bool:
        """GET /users/me — verify the application password."""
        try:
            await self._api("GET", "/users/me")
            return True
        except PublishError as exc:
            log.warning("wordpress_validate_failed", url=self._config.url, status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        body: dict[str, Any] = {
            "title": input.title,
            "content": input.html,
            "status": "future" if input.when else "publish",
        }
        if input.excerpt is not None:
            body["excerpt"] = input.excerpt
        if input.when:
            body["date"] = input.when
        if input.tags:
            body["tags"] = list(input.tags)

        image = await upload_featured_image_to_self_hosted(
            self._config,
            input.image_url,
            self._client,
            alt_text=input.title,
        )
        if image is not None:
            body["featured_media"] = image.id

        post = await self._api("POST", f"/{self._config.post_type}", json=body)
        result = PublishResult(external_id=require_id(_PROVIDER, post.get("id")), url=post.get("link"))
        log.info(
            "wordpress_published",
            post_id=result.external_id,
            scheduled=bool(input.when),
            featured_media=image.id if image else None,
        )
        return result

    async def delete_post(self, post_id: str) -> bool:
        """Permanently delete a post (skips trash). Returns True on success."""
        try:
            await self._api("DELETE", f"/{self._config.post_type}/{post_id}", params={"force": "true"})
            return True
        except PublishError as exc:
            log.error("wordpress_delete_failed", post_id=post_id, error=str(exc))
            return False

"""Pydantic v2 models for stored integrations and publishing jobs.

Persistence belongs to the host application; these are the shapes the
dispatcher reads and returns.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JobStatus = Literal["queued", "running", "succeeded", "failed"]


class Integration(BaseModel):
    """A connected publishing account (provider + stored credential config)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    provider: str
    config: dict[str, Any] = Field(default_factory=dict)
    name: str | None = None


class PublishingJob(BaseModel):
    """One queued publish of one post to one integration."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    integration_id: str
    payload: dict[str, Any]  # camelCase PublishInput fields
    status: JobStatus = "queued"
    attempts: int = 0
    run_at: datetime
    last_error: str | None = None
    external_id: str | None = None
    url: str | None = None

"""Pydantic response models for the HTTP surface.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str = Field(description="Service status, always 'ok' when reachable.")
    version: str = Field(description="Installed design_translator version.")
    archive_enabled: bool = Field(
        description="Whether cards are mirrored to an archive channel.",
    )


class UrlVerificationRequest(BaseModel):
    """Slack's url_verification handshake payload."""

    type: str = Field(description="Always 'url_verification' for the handshake.")
    challenge: str = Field(description="Token to echo back to Slack.")
    token: Optional[str] = Field(default=None, description="Deprecated verification token.")

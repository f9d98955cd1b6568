from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HostedTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Left untyped so a wrong value reaches the interval check instead of
    # failing schema validation.
    subscription_interval: Any = Field(default=None, alias="subscriptionInterval")


class HostedTokenResponse(BaseModel):
    token: str


class ErrorResponse(BaseModel):
    error: str
    details: list[dict[str, Any]] | None = None

"""Shared API dependencies."""
from __future__ import annotations

from fastapi import Request

from app.config import Settings
from app.integrations.authorize_net import AuthorizeNetClient
from app.services.hosted_token_service import HostedTokenService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hosted_token_service(request: Request) -> HostedTokenService:
    client: AuthorizeNetClient = request.app.state.authorize_net
    return HostedTokenService(request.app.state.settings, client)


__all__ = ["get_app_settings", "get_hosted_token_service"]

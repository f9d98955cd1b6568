"""
Accept Hosted API Routes
"""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from app.api.dependencies import get_hosted_token_service
from app.schemas.hosted_token import ErrorResponse, HostedTokenRequest, HostedTokenResponse
from app.services.hosted_token_service import HostedTokenService

router = APIRouter()


@router.post(
    "/getAcceptHostedToken",
    response_model=HostedTokenResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_accept_hosted_token(
    payload: HostedTokenRequest | None = Body(default=None),
    service: HostedTokenService = Depends(get_hosted_token_service),
) -> HostedTokenResponse:
    """Return an Accept Hosted form token for a monthly or bimonthly subscription."""
    result = await service.get_token(payload.subscription_interval if payload else None)
    return HostedTokenResponse(token=result.token)

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from app.config import Settings
from app.core.exceptions import UpstreamFailureError
from app.schemas.authorize_net import GatewayResponse, HostedPaymentPageEnvelope, MerchantAuthentication

logger = logging.getLogger(__name__)


class AuthorizeNetClient:
    """Authorize.Net JSON API client for Accept Hosted token requests."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_url = settings.auth_net_api_url
        self.environment = settings.gateway_environment
        self.timeout = settings.auth_net_timeout_seconds
        self._login_id = settings.auth_net_api_login_id
        self._transaction_key = settings.auth_net_transaction_key
        self._transport = transport

    def merchant_authentication(self) -> MerchantAuthentication:
        return MerchantAuthentication(
            name=self._login_id,
            transaction_key=self._transaction_key.get_secret_value(),
        )

    async def get_hosted_payment_page(self, envelope: HostedPaymentPageEnvelope) -> GatewayResponse:
        """POST a getHostedPaymentPageRequest and parse the gateway's answer."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.api_url,
                    json=envelope.to_payload(),
                )
                response.raise_for_status()
            except httpx.HTTPError as exc:
                logger.error("Authorize.Net request to %s failed: %s", self.api_url, exc)
                raise UpstreamFailureError("Authorize.Net request failed") from exc

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> GatewayResponse:
        data = self._decode(response)
        try:
            return GatewayResponse.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected Authorize.Net response shape: %s", response.text[:500])
            raise UpstreamFailureError("Malformed Authorize.Net response") from exc

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        # The gateway prefixes its JSON with a UTF-8 byte order mark.
        try:
            return json.loads(response.content.decode("utf-8-sig"))
        except (UnicodeDecodeError, ValueError) as exc:
            logger.error("Authorize.Net returned a non-JSON body (status=%s)", response.status_code)
            raise UpstreamFailureError("Malformed Authorize.Net response") from exc

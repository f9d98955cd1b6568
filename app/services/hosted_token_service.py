"""
Accept Hosted token flow: validate the interval, build the ARB descriptor and
the hosted payment page request, call the gateway and translate its answer.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any

from app.config import Settings
from app.core.exceptions import GatewayRejectedError, InvalidInputError
from app.integrations.authorize_net import AuthorizeNetClient
from app.schemas.authorize_net import (
    ArbSubscription,
    BillTo,
    CreditCard,
    Customer,
    GetHostedPaymentPageRequest,
    HostedPaymentPageEnvelope,
    HostedPaymentSetting,
    HostedPaymentSettings,
    Payment,
    PaymentSchedule,
    ScheduleInterval,
    SubscriptionInterval,
    TransactionRequest,
)

logger = logging.getLogger(__name__)

INVALID_INTERVAL_MESSAGE = 'Invalid subscriptionInterval. Must be "monthly" or "bimonthly".'

# ARB has no "forever"; 9999 is the gateway's ongoing-subscription value.
UNBOUNDED_OCCURRENCES = 9999

# Placeholders until Accept Hosted collects the real card and contact.
PLACEHOLDER_CARD_NUMBER = "4111111111111111"
PLACEHOLDER_CARD_EXPIRATION = "2025-12"
PLACEHOLDER_EMAIL = "customer@example.com"
PLACEHOLDER_FIRST_NAME = "First"
PLACEHOLDER_LAST_NAME = "Last"


@dataclass(frozen=True)
class HostedTokenResult:
    token: str
    subscription: ArbSubscription


def parse_interval(value: Any) -> SubscriptionInterval:
    """Accept exactly "monthly" or "bimonthly"."""
    if not isinstance(value, str) or not value:
        raise InvalidInputError(INVALID_INTERVAL_MESSAGE)
    try:
        return SubscriptionInterval(value)
    except ValueError:
        raise InvalidInputError(INVALID_INTERVAL_MESSAGE) from None


class HostedTokenService:
    """Stateless builder for Accept Hosted token requests."""

    def __init__(self, settings: Settings, client: AuthorizeNetClient):
        self.settings = settings
        self.client = client

    def build_subscription(self, interval: SubscriptionInterval, *, today: date | None = None) -> ArbSubscription:
        """Unpriced ARB descriptor; pricing and card capture happen on the hosted form."""
        start = today or date.today()
        return ArbSubscription(
            name=self.settings.subscription_name,
            payment_schedule=PaymentSchedule(
                interval=ScheduleInterval(length=interval.months, unit="months"),
                start_date=start.isoformat(),
                total_occurrences=UNBOUNDED_OCCURRENCES,
            ),
            amount=0,
            payment=Payment(
                credit_card=CreditCard(
                    card_number=PLACEHOLDER_CARD_NUMBER,
                    expiration_date=PLACEHOLDER_CARD_EXPIRATION,
                )
            ),
            customer=Customer(id=str(uuid.uuid4()), email=PLACEHOLDER_EMAIL),
            bill_to=BillTo(first_name=PLACEHOLDER_FIRST_NAME, last_name=PLACEHOLDER_LAST_NAME),
        )

    def build_hosted_payment_settings(self) -> HostedPaymentSettings:
        return HostedPaymentSettings(
            setting=[
                HostedPaymentSetting.encode(
                    "hostedPaymentReturnOptions",
                    {
                        "showReceipt": False,
                        "url": str(self.settings.payment_return_url),
                        "urlText": "Continue",
                        "cancelUrl": str(self.settings.payment_cancel_url),
                        "cancelUrlText": "Cancel",
                    },
                ),
                HostedPaymentSetting.encode(
                    "hostedPaymentButtonOptions",
                    {"text": self.settings.payment_button_text},
                ),
                HostedPaymentSetting.encode("hostedPaymentOrderOptions", {"show": False}),
                HostedPaymentSetting.encode("hostedPaymentPaymentOptions", {"cardCodeRequired": True}),
            ]
        )

    def build_hosted_page_request(self) -> HostedPaymentPageEnvelope:
        return HostedPaymentPageEnvelope(
            get_hosted_payment_page_request=GetHostedPaymentPageRequest(
                merchant_authentication=self.client.merchant_authentication(),
                transaction_request=TransactionRequest(transaction_type="authCaptureTransaction", amount="0"),
                hosted_payment_settings=self.build_hosted_payment_settings(),
            )
        )

    async def get_token(self, raw_interval: Any) -> HostedTokenResult:
        interval = parse_interval(raw_interval)
        subscription = self.build_subscription(interval)
        envelope = self.build_hosted_page_request()

        logger.info(
            "Requesting Accept Hosted token interval=%s customer=%s gateway=%s",
            interval.value,
            subscription.customer.id,
            self.client.environment,
        )
        response = await self.client.get_hosted_payment_page(envelope)

        if not response.ok or not response.token:
            logger.warning(
                "Accept Hosted token rejected resultCode=%s messages=%s",
                response.messages.result_code,
                response.diagnostics(),
            )
            raise GatewayRejectedError(response.messages.result_code, response.diagnostics())

        return HostedTokenResult(token=response.token, subscription=subscription)

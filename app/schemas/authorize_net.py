"""Authorize.Net JSON API payloads used by the Accept Hosted flow.

Field names follow the gateway's camelCase contract; models are built with
snake_case attributes and dumped with ``by_alias=True``.
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GatewayModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SubscriptionInterval(str, Enum):
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"

    @property
    def months(self) -> int:
        return INTERVAL_MONTHS[self]


INTERVAL_MONTHS = {
    SubscriptionInterval.MONTHLY: 1,
    SubscriptionInterval.BIMONTHLY: 2,
}


# ---------------------------------------------------------------------------
# ARB subscription descriptor
# ---------------------------------------------------------------------------


class ScheduleInterval(GatewayModel):
    length: int
    unit: str = "months"


class PaymentSchedule(GatewayModel):
    interval: ScheduleInterval
    start_date: str
    total_occurrences: int


class CreditCard(GatewayModel):
    card_number: str
    expiration_date: str


class Payment(GatewayModel):
    credit_card: CreditCard


class Customer(GatewayModel):
    id: str
    email: str


class BillTo(GatewayModel):
    first_name: str
    last_name: str


class ArbSubscription(GatewayModel):
    name: str
    payment_schedule: PaymentSchedule
    amount: int = 0
    payment: Payment
    customer: Customer
    bill_to: BillTo


# ---------------------------------------------------------------------------
# getHostedPaymentPageRequest envelope
# ---------------------------------------------------------------------------


class MerchantAuthentication(GatewayModel):
    name: str
    transaction_key: str


class TransactionRequest(GatewayModel):
    transaction_type: str = "authCaptureTransaction"
    amount: str = "0"


class HostedPaymentSetting(GatewayModel):
    setting_name: str
    setting_value: str

    @classmethod
    def encode(cls, name: str, value: dict[str, Any]) -> "HostedPaymentSetting":
        """The gateway expects each setting value as a JSON string."""
        return cls(setting_name=name, setting_value=json.dumps(value, separators=(",", ":")))


class HostedPaymentSettings(GatewayModel):
    setting: list[HostedPaymentSetting] = Field(default_factory=list)


class GetHostedPaymentPageRequest(GatewayModel):
    merchant_authentication: MerchantAuthentication
    transaction_request: TransactionRequest = Field(default_factory=TransactionRequest)
    hosted_payment_settings: HostedPaymentSettings


class HostedPaymentPageEnvelope(GatewayModel):
    get_hosted_payment_page_request: GetHostedPaymentPageRequest


# ---------------------------------------------------------------------------
# Gateway response
# ---------------------------------------------------------------------------


class GatewayMessage(GatewayModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    code: str | None = None
    text: str | None = None


class GatewayMessages(GatewayModel):
    result_code: str
    message: list[GatewayMessage] = Field(default_factory=list)


class GatewayResponse(GatewayModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    messages: GatewayMessages
    token: str | None = None

    @property
    def ok(self) -> bool:
        return self.messages.result_code == "Ok"

    def diagnostics(self) -> list[dict[str, Any]]:
        return [message.model_dump(by_alias=True, exclude_none=True) for message in self.messages.message]

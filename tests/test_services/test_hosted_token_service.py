from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from app.core.exceptions import GatewayRejectedError, InvalidInputError, UpstreamFailureError
from app.integrations.authorize_net import AuthorizeNetClient
from app.schemas.authorize_net import SubscriptionInterval
from app.services.hosted_token_service import HostedTokenService, parse_interval
from conftest import error_body, make_settings, ok_body


def make_service(settings, gateway) -> HostedTokenService:
    return HostedTokenService(settings, AuthorizeNetClient(settings, transport=gateway.transport))


@pytest.mark.parametrize("value", [None, "", "weekly", "Monthly", " monthly", "yearly", 1, ["monthly"], {"x": 1}])
def test_parse_interval_rejects_unknown_values(value):
    with pytest.raises(InvalidInputError) as exc:
        parse_interval(value)
    assert exc.value.public_message == 'Invalid subscriptionInterval. Must be "monthly" or "bimonthly".'


def test_interval_months():
    assert parse_interval("monthly").months == 1
    assert parse_interval("bimonthly").months == 2


@pytest.mark.parametrize("interval,length", [("monthly", 1), ("bimonthly", 2)])
def test_build_subscription_schedule(settings, gateway, interval, length):
    service = make_service(settings, gateway)
    sub = service.build_subscription(SubscriptionInterval(interval), today=date(2026, 10, 18)).to_payload()

    assert sub["name"] == "BigCommerce Subscription"
    assert sub["paymentSchedule"] == {
        "interval": {"length": length, "unit": "months"},
        "startDate": "2026-10-18",
        "totalOccurrences": 9999,
    }
    assert sub["amount"] == 0
    assert sub["payment"] == {"creditCard": {"cardNumber": "4111111111111111", "expirationDate": "2025-12"}}
    assert sub["customer"]["email"] == "customer@example.com"
    assert sub["billTo"] == {"firstName": "First", "lastName": "Last"}


def test_build_subscription_defaults_to_today(settings, gateway):
    service = make_service(settings, gateway)
    sub = service.build_subscription(SubscriptionInterval.MONTHLY)
    assert sub.payment_schedule.start_date == date.today().isoformat()


def test_customer_id_is_fresh_per_descriptor(settings, gateway):
    service = make_service(settings, gateway)
    ids = {service.build_subscription(SubscriptionInterval.MONTHLY).customer.id for _ in range(50)}
    assert len(ids) == 50


def test_hosted_page_request_envelope(settings, gateway):
    payload = make_service(settings, gateway).build_hosted_page_request().to_payload()
    request = payload["getHostedPaymentPageRequest"]

    assert request["merchantAuthentication"] == {"name": "test-login", "transactionKey": "test-transaction-key"}
    assert request["transactionRequest"] == {"transactionType": "authCaptureTransaction", "amount": "0"}

    settings_by_name = {s["settingName"]: s["settingValue"] for s in request["hostedPaymentSettings"]["setting"]}
    assert list(settings_by_name) == [
        "hostedPaymentReturnOptions",
        "hostedPaymentButtonOptions",
        "hostedPaymentOrderOptions",
        "hostedPaymentPaymentOptions",
    ]
    assert all(isinstance(value, str) for value in settings_by_name.values())
    assert json.loads(settings_by_name["hostedPaymentReturnOptions"]) == {
        "showReceipt": False,
        "url": "https://yourdomain.com/payment-success",
        "urlText": "Continue",
        "cancelUrl": "https://yourdomain.com/payment-cancel",
        "cancelUrlText": "Cancel",
    }
    assert json.loads(settings_by_name["hostedPaymentButtonOptions"]) == {"text": "Subscribe"}
    assert json.loads(settings_by_name["hostedPaymentOrderOptions"]) == {"show": False}
    assert json.loads(settings_by_name["hostedPaymentPaymentOptions"]) == {"cardCodeRequired": True}


def test_hosted_page_settings_follow_configuration(gateway):
    settings = make_settings(
        PAYMENT_RETURN_URL="https://shop.example.com/thanks",
        PAYMENT_CANCEL_URL="https://shop.example.com/cart",
        PAYMENT_BUTTON_TEXT="Start plan",
    )
    payload = make_service(settings, gateway).build_hosted_page_request().to_payload()
    values = {
        s["settingName"]: json.loads(s["settingValue"])
        for s in payload["getHostedPaymentPageRequest"]["hostedPaymentSettings"]["setting"]
    }
    assert values["hostedPaymentReturnOptions"]["url"] == "https://shop.example.com/thanks"
    assert values["hostedPaymentReturnOptions"]["cancelUrl"] == "https://shop.example.com/cart"
    assert values["hostedPaymentButtonOptions"] == {"text": "Start plan"}


@pytest.mark.asyncio
async def test_get_token_returns_gateway_token(settings, gateway):
    gateway.body = ok_body("tok_abc")
    result = await make_service(settings, gateway).get_token("bimonthly")

    assert result.token == "tok_abc"
    assert result.subscription.payment_schedule.interval.length == 2
    assert len(gateway.requests) == 1
    assert "getHostedPaymentPageRequest" in gateway.sent_payloads()[0]


@pytest.mark.asyncio
async def test_get_token_generates_distinct_customer_ids(settings, gateway):
    service = make_service(settings, gateway)
    first = await service.get_token("monthly")
    second = await service.get_token("monthly")
    assert first.subscription.customer.id != second.subscription.customer.id


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, "", "weekly"])
async def test_get_token_invalid_interval_makes_no_call(settings, gateway, value):
    with pytest.raises(InvalidInputError):
        await make_service(settings, gateway).get_token(value)
    assert gateway.requests == []


@pytest.mark.asyncio
async def test_get_token_gateway_rejection_carries_messages(settings, gateway):
    gateway.body = error_body("E00007", "User authentication failed due to invalid authentication values.")
    with pytest.raises(GatewayRejectedError) as exc:
        await make_service(settings, gateway).get_token("monthly")

    assert exc.value.result_code == "Error"
    assert exc.value.messages == [
        {"code": "E00007", "text": "User authentication failed due to invalid authentication values."}
    ]


@pytest.mark.asyncio
async def test_get_token_transport_error_is_upstream_failure(settings, gateway):
    gateway.error = httpx.ConnectError("connection refused")
    with pytest.raises(UpstreamFailureError):
        await make_service(settings, gateway).get_token("monthly")

import json
import os
import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault('AUTH_NET_API_LOGIN_ID', 'test-login')
os.environ.setdefault('AUTH_NET_TRANSACTION_KEY', 'test-transaction-key')
os.environ.setdefault('AUTH_NET_ENVIRONMENT', 'sandbox')

from app.config import Settings  # noqa: E402

# Authorize.Net prefixes its JSON responses with a byte order mark.
BOM = '\ufeff'


class FakeGateway:
    """Records requests and answers them with a canned Authorize.Net body."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.body: str = ok_body('tok_123')
        self.status_code = 200
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.body.encode('utf-8'))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def sent_payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


def ok_body(token: str) -> str:
    return BOM + json.dumps({
        'token': token,
        'messages': {'resultCode': 'Ok', 'message': [{'code': 'I00001', 'text': 'Successful.'}]},
    })


def error_body(code: str = 'E00007', text: str = 'User authentication failed due to invalid authentication values.') -> str:
    return BOM + json.dumps({
        'messages': {'resultCode': 'Error', 'message': [{'code': code, 'text': text}]},
    })


def make_settings(**overrides) -> Settings:
    values = {
        'AUTH_NET_API_LOGIN_ID': 'test-login',
        'AUTH_NET_TRANSACTION_KEY': 'test-transaction-key',
        'AUTH_NET_ENVIRONMENT': 'sandbox',
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()

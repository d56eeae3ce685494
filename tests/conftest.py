import sys
from pathlib import Path
import os
import time

import httpx
import pytest
from jose import jwt

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("API_BASE_URL", "http://wallet.test")

from wallet_client.db.storage import InMemoryStorage
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.transaction import TransactionSchema
from wallet_client.schemas.user import UserSchema
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.session import SessionStore

BASE_URL = "http://wallet.test"


def make_token(expires_in: int = 3600, **claims) -> str:
    payload = {"sub": "1", **claims}
    if expires_in is not None:
        payload["exp"] = int(time.time()) + expires_in
    return jwt.encode(payload, "test-secret", algorithm="HS256")


class FakeWalletApi:
    """httpx.MockTransport handler keyed by (method, path).

    A route holds a list of responses; each call takes the next one and the
    last one repeats. A response is an httpx.Response, a (status, json) pair
    or a callable taking the request.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses):
        self.routes[(method, path)] = list(responses)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responses = self.routes.get((request.method, request.url.path))
        if not responses:
            return httpx.Response(404, json={"success": False, "message": "No route", "data": None})
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        if callable(response):
            response = response(request)
        if isinstance(response, httpx.Response):
            return response
        status, body = response
        return httpx.Response(status, json=body)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def session(storage) -> SessionStore:
    session = SessionStore.load(storage)
    session.set_token(make_token())
    return session


@pytest.fixture
def fake_api() -> FakeWalletApi:
    return FakeWalletApi()


@pytest.fixture
def api(session, fake_api) -> WalletApiService:
    return WalletApiService(
        session,
        base_url=BASE_URL,
        transport=httpx.MockTransport(fake_api),
        retry_attempts=3,
        retry_backoff=0,
    )


@pytest.fixture
def user() -> UserSchema:
    return UserSchema(
        id=1,
        email="jane@example.com",
        username="jane",
        fullname="Jane Doe",
        phone_number="081234567890",
    )


@pytest.fixture
def wallet() -> WalletSchema:
    return WalletSchema(id=42, user_id=1, owner_name="Jane Doe", account_number="1000000042", balance=150_000)


@pytest.fixture
def user_payload() -> dict:
    return {
        "id": 1,
        "email": "jane@example.com",
        "username": "jane",
        "fullname": "Jane Doe",
        "phoneNumber": "081234567890",
        "avatarUrl": None,
    }


@pytest.fixture
def wallet_payload() -> dict:
    return {
        "id": 42,
        "user": {"id": 1, "fullname": "Jane Doe"},
        "accountNumber": "1000000042",
        "balance": 150000,
        "createdAt": "2026-01-05T08:00:00",
        "updatedAt": "2026-10-01T09:30:00",
    }


@pytest.fixture
def transfer_out() -> TransactionSchema:
    return TransactionSchema.model_validate({
        "id": 7,
        "walletId": 42,
        "recipientWalletId": 99,
        "transactionType": "TRANSFER",
        "amount": 50000,
        "transactionDate": "2026-10-18T10:15:00",
        "description": "Dinner",
        "senderName": "Jane Doe",
        "recipientName": "Budi Santoso",
        "senderAccountNumber": "1000000042",
        "recipientAccountNumber": "1000000099",
    })


@pytest.fixture
def transfer_in() -> TransactionSchema:
    return TransactionSchema.model_validate({
        "id": 8,
        "walletId": 10,
        "recipientWalletId": 42,
        "transactionType": "TRANSFER",
        "amount": 20000,
        "transactionDate": "2026-10-18T12:00:00",
        "senderName": "Sari Wulandari",
        "recipientName": "Jane Doe",
    })


@pytest.fixture
def top_up() -> TransactionSchema:
    return TransactionSchema.model_validate({
        "id": 9,
        "walletId": 42,
        "transactionType": "TOP_UP",
        "amount": 100000,
        "transactionDate": "2026-10-17T08:00:00",
        "option": "Bank Transfer",
        "description": "Salary",
    })

import httpx
import logging
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from wallet_client.core.config import settings
from wallet_client.core.exceptions import (
    ExternalServiceClientError,
    ExternalServiceException,
    ExternalServiceServerError,
    ResourceNotFoundException,
    ServiceUnreachableException,
    UnauthenticatedException,
)
from wallet_client.core.security import is_token_expired
from wallet_client.schemas.auth import LoginRequest, LoginResponse
from wallet_client.schemas.envelope import unwrap_envelope, unwrap_page
from wallet_client.schemas.pagination import Page
from wallet_client.schemas.transaction import (
    BalanceGraphRequest,
    BalanceGraphResult,
    TopUpRequest,
    TransactionSchema,
    TransactionType,
    TransferRequest,
    WalletSummary,
)
from wallet_client.schemas.user import RegisterRequest, UserSchema
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.session import SessionStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class WalletApiService:
    def __init__(
        self,
        session: SessionStore,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_attempts: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self._transport = transport
        attempts = retry_attempts if retry_attempts is not None else settings.retry_attempts
        backoff = retry_backoff if retry_backoff is not None else settings.retry_backoff_seconds
        # reads only; a POST is never replayed
        self._read_retrying = AsyncRetrying(
            retry=retry_if_exception_type((ServiceUnreachableException, ExternalServiceServerError)),
            wait=wait_exponential(multiplier=backoff, max=10),
            stop=stop_after_attempt(max(attempts, 1)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def _auth_headers(self) -> Dict[str, str]:
        token = self.session.get_token()
        if not token:
            raise UnauthenticatedException("You are not logged in.")
        if is_token_expired(token):
            logger.info("Stored auth token has expired, clearing it")
            self.session.clear_token()
            raise UnauthenticatedException()
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            result = response.json()
        except ValueError:
            return ""
        if isinstance(result, dict):
            return (
                result.get("message")
                or result.get("error")
                or result.get("detail")
                or ""
            )
        return ""

    async def _send(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a request to the wallet API and map failures to exceptions."""
        headers = {"Content-Type": "application/json"}
        if authenticated:
            headers.update(self._auth_headers())

        url = f"{self.base_url}{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                if method.upper() == "GET":
                    response = await client.get(url, params=data, headers=headers)
                elif method.upper() == "POST":
                    response = await client.post(url, json=data, headers=headers)
                else:
                    raise ValueError(f"Unsupported HTTP method: {method}")
        except httpx.RequestError as e:
            logger.exception(f"Request error for {method} {endpoint}")
            raise ServiceUnreachableException(f"Request failed: {str(e)}")

        logger.debug(
            "Wallet API response (%s) from %s: status=%s",
            method,
            url,
            response.status_code,
        )

        if 200 <= response.status_code < 300:
            return response

        message = self._error_message(response)

        if response.status_code == 401:
            logger.warning("Wallet API rejected credentials (%s %s)", method, endpoint)
            self.session.clear_token()
            raise UnauthenticatedException(message or "Session expired. Please log in again.")

        if response.status_code == 404:
            raise ResourceNotFoundException(message or f"Not found: {endpoint}")

        if 400 <= response.status_code < 500:
            logger.warning(
                "Wallet API client error (%s %s): %s", method, endpoint, message or response.text
            )
            raise ExternalServiceClientError(
                message or f"Client error: {response.text}", status_code=response.status_code
            )

        logger.error(
            "Wallet API server error (%s %s): %s", method, endpoint, message or response.text
        )
        raise ExternalServiceServerError(
            message or f"Server error: {response.text}",
            status_code=response.status_code if response.status_code >= 500 else 502,
        )

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        response = await self._send(method, endpoint, data, authenticated)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ExternalServiceServerError(f"Invalid JSON from {endpoint}")

    async def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async for attempt in self._read_retrying.copy():
            with attempt:
                result = await self._make_request("GET", endpoint, params)
        return result

    @staticmethod
    def _parse(model: Type[M], payload: Any) -> M:
        try:
            return model.model_validate(unwrap_envelope(payload))
        except ValidationError as exc:
            logger.error("Unexpected %s payload from wallet API: %s", model.__name__, exc)
            raise ExternalServiceServerError(f"Unexpected {model.__name__} response format")

    @staticmethod
    def _parse_list(model: Type[M], payload: Any) -> List[M]:
        items = unwrap_envelope(payload)
        if not isinstance(items, list):
            raise ExternalServiceServerError(f"Expected a list of {model.__name__}")
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as exc:
            logger.error("Unexpected %s payload from wallet API: %s", model.__name__, exc)
            raise ExternalServiceServerError(f"Unexpected {model.__name__} response format")

    # auth

    async def register(self, payload: RegisterRequest) -> UserSchema:
        result = await self._make_request(
            "POST",
            "/api/auth/register",
            payload.model_dump(by_alias=True, mode="json"),
            authenticated=False,
        )
        user = self._parse(UserSchema, result)
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> LoginResponse:
        payload = LoginRequest(email=email, password=password)
        result = await self._make_request(
            "POST",
            "/api/auth/login",
            payload.model_dump(by_alias=True),
            authenticated=False,
        )
        login = self._parse(LoginResponse, result)
        if not login.token:
            raise ExternalServiceServerError("Invalid login response")
        self.session.set_token(login.token)
        logger.info("User %s logged in", login.user_id)
        return login

    async def logout(self) -> None:
        try:
            await self._make_request("POST", "/api/auth/logout")
        except ExternalServiceException as exc:
            logger.warning("Logout request failed, clearing local token anyway: %s", exc)
        finally:
            self.session.clear_token()

    # users

    async def get_me(self) -> UserSchema:
        return self._parse(UserSchema, await self._get("/api/users/me"))

    async def get_user(self, user_id: int) -> UserSchema:
        return self._parse(UserSchema, await self._get(f"/api/users/{user_id}"))

    # wallets

    async def list_wallets(self) -> List[WalletSchema]:
        return self._parse_list(WalletSchema, await self._get("/api/wallets"))

    async def get_wallet(self, wallet_id: int) -> WalletSchema:
        return self._parse(WalletSchema, await self._get(f"/api/wallets/{wallet_id}"))

    async def get_wallets_by_user(self, user_id: int) -> List[WalletSchema]:
        return self._parse_list(WalletSchema, await self._get(f"/api/wallets/user/{user_id}"))

    async def create_wallet(self, user_id: int) -> WalletSchema:
        logger.info("Creating wallet for user %s", user_id)
        result = await self._make_request("POST", f"/api/wallets/{user_id}", {"userId": user_id})
        return self._parse(WalletSchema, result)

    async def find_user_wallet(self, user: UserSchema) -> Optional[WalletSchema]:
        """Return the wallet owned by ``user``, or None when there is none."""
        try:
            wallets = await self.get_wallets_by_user(user.id)
        except ResourceNotFoundException:
            logger.info("No wallet listing for user %s", user.id)
            return None

        for wallet in wallets:
            if wallet.user_id == user.id:
                logger.debug("Found wallet %s for user %s", wallet.id, user.id)
                return wallet
        return None

    async def find_or_create_wallet(self, user: UserSchema) -> WalletSchema:
        wallet = await self.find_user_wallet(user)
        if wallet is None:
            wallet = await self.create_wallet(user.id)
        return wallet

    async def login_and_setup_wallet(self, email: str, password: str) -> Tuple[UserSchema, WalletSchema]:
        login = await self.login(email, password)
        user = await self.get_user(login.user_id)
        wallet = await self.find_or_create_wallet(user)
        return user, wallet

    # transactions

    async def top_up(self, payload: TopUpRequest) -> TransactionSchema:
        result = await self._make_request(
            "POST", "/api/transactions", payload.model_dump(by_alias=True, mode="json")
        )
        transaction = self._parse(TransactionSchema, result)
        logger.info("Top up %s of %s to wallet %s", transaction.id, transaction.amount, payload.wallet_id)
        return transaction

    async def transfer(self, payload: TransferRequest) -> TransactionSchema:
        result = await self._make_request(
            "POST", "/api/transactions", payload.model_dump(by_alias=True, mode="json")
        )
        transaction = self._parse(TransactionSchema, result)
        logger.info(
            "Transfer %s of %s from wallet %s to %s",
            transaction.id,
            transaction.amount,
            payload.wallet_id,
            payload.recipient_account_number,
        )
        return transaction

    async def filter_transactions(
        self,
        wallet_id: int,
        page: int = 0,
        size: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
        sort_by: str = "transactionDate",
        order: str = "desc",
        time_range: Optional[str] = None,
    ) -> Page[TransactionSchema]:
        params: Dict[str, Any] = {
            "walletId": wallet_id,
            "page": page,
            "size": size or settings.default_page_size,
            "sortBy": sort_by,
            "order": order,
        }
        if transaction_type:
            params["type"] = TransactionType(transaction_type).value
        if time_range:
            params["timeRange"] = time_range

        result = await self._get("/api/transactions/filter", params)
        try:
            return Page[TransactionSchema].model_validate(unwrap_page(result))
        except (ValueError, ValidationError) as exc:
            logger.error("Unexpected transaction page from wallet API: %s", exc)
            raise ExternalServiceServerError("Unexpected transaction page format")

    async def get_transaction(self, transaction_id: int) -> TransactionSchema:
        return self._parse(TransactionSchema, await self._get(f"/api/transactions/{transaction_id}"))

    async def get_summary(self, wallet_id: int) -> WalletSummary:
        return self._parse(WalletSummary, await self._get(f"/api/transactions/summary/{wallet_id}"))

    async def get_balance_graph(self, payload: BalanceGraphRequest) -> BalanceGraphResult:
        result = await self._make_request(
            "POST",
            "/api/transactions/graph",
            payload.model_dump(by_alias=True, mode="json", exclude_none=True),
        )
        body = unwrap_envelope(result)
        if isinstance(body, list):
            year = result.get("year") if isinstance(result, dict) else None
            body = {"data": body, "year": year}
        return self._parse(BalanceGraphResult, body)

    async def export_transaction_pdf(self, transaction_id: int) -> bytes:
        async for attempt in self._read_retrying.copy():
            with attempt:
                response = await self._send("GET", f"/api/transactions/export-pdf/{transaction_id}")
        return response.content

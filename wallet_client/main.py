from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar
import logging

import httpx

from wallet_client.core.config import settings
from wallet_client.core.logging_config import setup_logging
from wallet_client.core.result import Result
from wallet_client.db.storage import JsonFileStorage, KeyValueStorage
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.handlers.exception_handlers import run_safely
from wallet_client.services.auth import AuthService
from wallet_client.services.dashboard import DashboardService
from wallet_client.services.history import TransactionHistoryService
from wallet_client.services.proof import ProofService
from wallet_client.services.session import SessionStore
from wallet_client.services.summary import SummaryService
from wallet_client.services.topup import TopUpService
from wallet_client.services.transfer import TransferService

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class WalletApp:
    session: SessionStore
    api: WalletApiService
    auth: AuthService
    dashboard: DashboardService
    top_up: TopUpService
    transfer: TransferService
    history: TransactionHistoryService
    summary: SummaryService
    proof: ProofService

    async def call(self, operation: Awaitable[T]) -> Result[T]:
        """Run a controller call for a screen that renders errors by kind instead of catching."""
        return await run_safely(operation)


def build_app(
    storage: Optional[KeyValueStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    configure_logging: bool = True,
) -> WalletApp:
    """Wire one session into the API client and every screen controller."""
    if configure_logging:
        setup_logging()

    session = SessionStore.load(storage or JsonFileStorage(settings.storage_path))
    api = WalletApiService(session, transport=transport)
    logger.info("Wallet client ready for %s", api.base_url)

    return WalletApp(
        session=session,
        api=api,
        auth=AuthService(api, session),
        dashboard=DashboardService(api, session),
        top_up=TopUpService(api, session),
        transfer=TransferService(api, session),
        history=TransactionHistoryService(api, session),
        summary=SummaryService(api, session),
        proof=ProofService(api, session),
    )

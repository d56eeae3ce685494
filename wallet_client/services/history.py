import logging
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel

from wallet_client.core.exceptions import WalletNotLoadedException
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.transaction import TransactionSchema, TransactionType
from wallet_client.services.direction import ResolvedTransaction, resolve_all
from wallet_client.services.session import SessionStore
from wallet_client.utils.mist import transaction_day

logger = logging.getLogger(__name__)


class HistoryPage(BaseModel):
    items: List[ResolvedTransaction]
    page: int
    total_pages: int
    total_elements: int
    has_next: bool


def filter_transactions(
    transactions: Iterable[TransactionSchema],
    transaction_type: Optional[TransactionType] = None,
    on_date: Optional[date] = None,
) -> List[TransactionSchema]:
    """Keep the transactions matching the type and/or calendar day given."""
    matched = []
    for transaction in transactions:
        if transaction_type and transaction.transaction_type != transaction_type:
            continue
        if on_date:
            if transaction.transaction_date is None:
                continue
            if transaction_day(transaction.transaction_date) != on_date:
                continue
        matched.append(transaction)
    return matched


class TransactionHistoryService:
    def __init__(self, api: WalletApiService, session: SessionStore):
        self.api = api
        self.session = session

    async def fetch(
        self,
        page: int = 0,
        size: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
        on_date: Optional[date] = None,
        time_range: Optional[str] = None,
    ) -> HistoryPage:
        wallet = self.session.get_wallet()
        if wallet is None:
            raise WalletNotLoadedException()

        result = await self.api.filter_transactions(
            wallet.id,
            page=page,
            size=size,
            transaction_type=transaction_type,
            time_range=time_range,
        )
        rows = filter_transactions(result.content, transaction_type, on_date)
        logger.debug(
            "History page %s for wallet %s: %s of %s rows kept",
            page, wallet.id, len(rows), len(result.content),
        )
        return HistoryPage(
            items=resolve_all(rows, wallet.id),
            page=result.number,
            total_pages=result.total_pages,
            total_elements=result.total_elements,
            has_next=not result.last,
        )

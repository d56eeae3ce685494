import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from wallet_client.core.exceptions import (
    ResourceNotFoundException,
    TransactionNotFoundException,
    WalletNotLoadedException,
)
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.transaction import TransactionSchema
from wallet_client.schemas.user import UserSchema
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.session import SessionStore
from wallet_client.utils.mist import format_transaction_date
from wallet_client.utils.money import Money

logger = logging.getLogger(__name__)


class ProofRow(BaseModel):
    label: str
    value: str
    sub: Optional[str] = None


class TransactionProof(BaseModel):
    transaction: TransactionSchema
    date_display: str
    rows: List[ProofRow]
    detail_rows: List[ProofRow]


def build_proof(
    transaction: TransactionSchema,
    user: Optional[UserSchema] = None,
    wallet: Optional[WalletSchema] = None,
) -> TransactionProof:
    """Rows shown on the proof-of-transaction page; ``detail_rows`` sit behind "Detail"."""
    amount = str(Money(transaction.amount))
    rows = [ProofRow(label="Amount", value=amount)]
    detail_rows = []

    if transaction.is_top_up:
        rows.append(ProofRow(label="From", value=transaction.option or transaction.description or "-"))
    else:
        rows.append(
            ProofRow(
                label="Recipient",
                value=transaction.recipient_name or "-",
                sub=transaction.recipient_account_number,
            )
        )
        detail_rows.append(
            ProofRow(
                label="Sender",
                value=transaction.sender_name or (user.fullname if user else "-"),
                sub=transaction.sender_account_number or (wallet.account_number if wallet else None),
            )
        )

    detail_rows.extend([
        ProofRow(label="Transaction Id", value=str(transaction.id)),
        ProofRow(label="Notes", value=transaction.description or "-"),
        ProofRow(label="Total", value=amount),
    ])
    return TransactionProof(
        transaction=transaction,
        date_display=format_transaction_date(transaction.transaction_date),
        rows=rows,
        detail_rows=detail_rows,
    )


class ProofService:
    def __init__(self, api: WalletApiService, session: SessionStore):
        self.api = api
        self.session = session

    async def latest_transaction(self) -> TransactionSchema:
        wallet = self.session.get_wallet()
        if wallet is None:
            raise WalletNotLoadedException()
        page = await self.api.filter_transactions(wallet.id)
        if not page.content:
            raise TransactionNotFoundException(f"No transactions for wallet {wallet.id}")
        return max(page.content, key=lambda transaction: transaction.id)

    async def load(self, transaction_id: Optional[int] = None) -> TransactionProof:
        if transaction_id is None:
            transaction = await self.latest_transaction()
        else:
            try:
                transaction = await self.api.get_transaction(transaction_id)
            except ResourceNotFoundException as exc:
                raise TransactionNotFoundException(f"Transaction {transaction_id} not found") from exc
        return build_proof(transaction, self.session.get_user(), self.session.get_wallet())

    async def download(self, transaction_id: int, directory: str | Path) -> Path:
        content = await self.api.export_transaction_pdf(transaction_id)
        path = Path(directory) / f"transaction-{transaction_id}.pdf"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        logger.info("Saved proof of transaction %s to %s", transaction_id, path)
        return path

import logging
from typing import List, Optional

from wallet_client.core.exceptions import (
    InsufficientBalanceException,
    RecipientRequiredException,
    SelfTransferException,
    WalletNotLoadedException,
)
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.transaction import TransactionSchema, TransferRequest
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.amount import normalize_amount, require_amount
from wallet_client.services.refresh import RefreshTracker, SubmissionGuard, refresh_session_wallet
from wallet_client.services.session import SessionStore

logger = logging.getLogger(__name__)


class TransferService:
    def __init__(self, api: WalletApiService, session: SessionStore):
        self.api = api
        self.session = session
        self.guard = SubmissionGuard("transfer")
        self.tracker = RefreshTracker()

    def _own_wallet(self) -> WalletSchema:
        wallet = self.session.get_wallet()
        if wallet is None:
            raise WalletNotLoadedException()
        return wallet

    async def load_recipients(self) -> List[WalletSchema]:
        """Every wallet except the session's own; refreshes the own wallet too."""
        my_wallet = self._own_wallet()
        generation = self.tracker.begin()

        wallets = await self.api.list_wallets()

        updated = next((wallet for wallet in wallets if wallet.id == my_wallet.id), None)
        if updated is not None and self.tracker.is_current(generation):
            self.session.set_wallet(updated)
        return [wallet for wallet in wallets if wallet.id != my_wallet.id]

    def validate(self, amount_text: str, recipient: Optional[WalletSchema]) -> int:
        my_wallet = self._own_wallet()
        amount = normalize_amount(amount_text)
        if not amount.value:
            require_amount(amount, "Please enter a valid amount to transfer.")
        if recipient is None:
            raise RecipientRequiredException()
        if recipient.id == my_wallet.id:
            raise SelfTransferException(my_wallet.id)
        value = require_amount(amount)
        if value > my_wallet.balance:
            raise InsufficientBalanceException(my_wallet.balance, value)
        return value

    async def submit(
        self,
        amount_text: str,
        recipient: Optional[WalletSchema],
        notes: str = "",
    ) -> TransactionSchema:
        async with self.guard:
            amount = self.validate(amount_text, recipient)
            my_wallet = self._own_wallet()

            transaction = await self.api.transfer(
                TransferRequest(
                    wallet_id=my_wallet.id,
                    amount=amount,
                    recipient_account_number=recipient.account_number,
                    description=notes,
                )
            )
            await refresh_session_wallet(self.api, self.session)
            return transaction

import logging

from wallet_client.core.exceptions import UnsupportedPaymentOptionException, WalletNotFoundException
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.transaction import TopUpRequest, TransactionSchema
from wallet_client.services.amount import normalize_amount, require_amount
from wallet_client.services.refresh import SubmissionGuard, refresh_session_wallet
from wallet_client.services.session import SessionStore

logger = logging.getLogger(__name__)

PAYMENT_OPTIONS = ("BYOND Pay", "Bank Transfer", "Credit Card")
DEFAULT_PAYMENT_OPTION = PAYMENT_OPTIONS[0]


class TopUpService:
    def __init__(self, api: WalletApiService, session: SessionStore):
        self.api = api
        self.session = session
        self.guard = SubmissionGuard("top up")

    async def submit(
        self,
        amount_text: str,
        option: str = DEFAULT_PAYMENT_OPTION,
        notes: str = "",
    ) -> TransactionSchema:
        async with self.guard:
            amount = require_amount(normalize_amount(amount_text))
            if option not in PAYMENT_OPTIONS:
                raise UnsupportedPaymentOptionException(option)

            wallet = self.session.get_wallet()
            if wallet is None:
                raise WalletNotFoundException()

            transaction = await self.api.top_up(
                TopUpRequest(wallet_id=wallet.id, amount=amount, option=option, description=notes)
            )
            await refresh_session_wallet(self.api, self.session)
            return transaction

import logging
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel

from wallet_client.core.exceptions import WalletNotFoundException
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.user import UserSchema
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.direction import ResolvedTransaction, resolve_all
from wallet_client.services.refresh import RefreshTracker
from wallet_client.services.session import SessionStore
from wallet_client.utils.mist import first_name
from wallet_client.utils.money import Money

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS = 4


def greeting_for(hour: int) -> str:
    if 5 <= hour < 12:
        return "Morning"
    if 12 <= hour < 17:
        return "Afternoon"
    if 17 <= hour < 21:
        return "Evening"
    return "Night"


class DashboardView(BaseModel):
    user: UserSchema
    wallet: WalletSchema
    greeting: str
    first_name: str
    balance_display: str
    recent_transactions: List[ResolvedTransaction]


class DashboardService:
    def __init__(
        self,
        api: WalletApiService,
        session: SessionStore,
        recent_limit: int = RECENT_TRANSACTIONS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.api = api
        self.session = session
        self.recent_limit = recent_limit
        self.clock = clock
        self.tracker = RefreshTracker()

    async def refresh(self) -> Optional[DashboardView]:
        """Re-fetch user, wallet and recent transactions on focus.

        Returns None when a newer refresh started while this one was in
        flight; its results are dropped instead of overwriting newer state.
        """
        generation = self.tracker.begin()

        user = await self.api.get_me()
        wallet = await self.api.find_user_wallet(user)
        if wallet is None:
            logger.warning("No wallet found for user ID: %s", user.id)
            raise WalletNotFoundException()
        page = await self.api.filter_transactions(wallet.id, size=self.recent_limit)

        if not self.tracker.is_current(generation):
            logger.debug("Discarding stale dashboard refresh %s", generation)
            return None

        self.session.set_user(user)
        self.session.set_wallet(wallet)

        return DashboardView(
            user=user,
            wallet=wallet,
            greeting=greeting_for(self.clock().hour),
            first_name=first_name(user.fullname) or "User",
            balance_display=str(Money(wallet.balance)),
            recent_transactions=resolve_all(page.content, wallet.id),
        )

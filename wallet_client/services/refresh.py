import logging
from typing import TYPE_CHECKING, Optional

from wallet_client.core.exceptions import DuplicateSubmissionException, ExternalServiceException
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.session import SessionStore

if TYPE_CHECKING:
    from wallet_client.external.wallet_api import WalletApiService

logger = logging.getLogger(__name__)


class SubmissionGuard:
    """Lets one submission of an action run at a time.

    The in-flight flag is set before the first await, so a second submit on
    the same event loop sees it immediately.
    """

    def __init__(self, action: str):
        self.action = action
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def __aenter__(self) -> "SubmissionGuard":
        if self._in_flight:
            raise DuplicateSubmissionException(self.action)
        self._in_flight = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._in_flight = False
        return False


class RefreshTracker:
    """Generation counter for focus refreshes; only the newest may commit."""

    def __init__(self):
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation


async def refresh_session_wallet(api: "WalletApiService", session: SessionStore) -> Optional[WalletSchema]:
    """Re-fetch the session wallet after a transaction; the balance is the server's."""
    wallet = session.get_wallet()
    if wallet is None:
        return None
    try:
        updated = await api.get_wallet(wallet.id)
    except ExternalServiceException as exc:
        logger.warning("Could not refresh wallet %s after transaction: %s", wallet.id, exc)
        return None
    session.set_wallet(updated)
    return updated

import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from wallet_client.db.storage import KeyValueStorage
from wallet_client.schemas.user import UserSchema
from wallet_client.schemas.wallet import WalletSchema

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

USER_KEY = "userData"
WALLET_KEY = "walletData"
TOKEN_KEY = "authToken"


class SessionStore:
    """Current user, wallet and token, shared by the controllers.

    Every setter replaces the value in memory and writes it through to
    storage. Storage failures are logged and never reach the caller; the
    server stays the source of truth and the next refresh rewrites it.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self._user: Optional[UserSchema] = None
        self._wallet: Optional[WalletSchema] = None

    @classmethod
    def load(cls, storage: KeyValueStorage) -> "SessionStore":
        session = cls(storage)
        session.hydrate()
        return session

    def hydrate(self) -> None:
        self._user = self._read(USER_KEY, UserSchema)
        self._wallet = self._read(WALLET_KEY, WalletSchema)
        logger.debug(
            "Hydrated session: user=%s wallet=%s",
            self._user.id if self._user else None,
            self._wallet.id if self._wallet else None,
        )

    def _read(self, key: str, model: Type[M]) -> Optional[M]:
        try:
            raw = self.storage.get_item(key)
        except OSError:
            logger.exception("Failed to read %s from storage", key)
            return None
        if not raw:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding unreadable %s from storage: %s", key, exc.errors()[0].get("msg"))
            return None

    def _persist(self, key: str, value: Optional[str]) -> None:
        try:
            if value is None:
                self.storage.remove_item(key)
            else:
                self.storage.set_item(key, value)
        except OSError:
            logger.exception("Failed to persist %s", key)

    def get_user(self) -> Optional[UserSchema]:
        return self._user

    def set_user(self, user: UserSchema) -> None:
        self._user = user
        self._persist(USER_KEY, user.model_dump_json(by_alias=True))

    def get_wallet(self) -> Optional[WalletSchema]:
        return self._wallet

    def set_wallet(self, wallet: WalletSchema) -> None:
        self._wallet = wallet
        self._persist(WALLET_KEY, wallet.model_dump_json(by_alias=True))

    def get_token(self) -> Optional[str]:
        try:
            return self.storage.get_item(TOKEN_KEY)
        except OSError:
            logger.exception("Failed to read auth token from storage")
            return None

    def set_token(self, token: str) -> None:
        self._persist(TOKEN_KEY, token)

    def clear_token(self) -> None:
        self._persist(TOKEN_KEY, None)

    def clear(self) -> None:
        self._user = None
        self._wallet = None
        for key in (USER_KEY, WALLET_KEY, TOKEN_KEY):
            self._persist(key, None)

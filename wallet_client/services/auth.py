import logging
from typing import Dict, Tuple

from wallet_client.core.exceptions import (
    ExternalServiceException,
    MissingCredentialsException,
    RegistrationFailedException,
    RegistrationValidationException,
    UnauthenticatedException,
)
from wallet_client.core.security import is_token_expired
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.handlers.exception_handlers import registration_error_message
from wallet_client.schemas.user import RegisterRequest, UserSchema
from wallet_client.schemas.wallet import WalletSchema
from wallet_client.services.session import SessionStore
from wallet_client.utils.mist import (
    is_valid_avatar_url,
    is_valid_email,
    is_valid_password,
    is_valid_phone_number,
)

logger = logging.getLogger(__name__)


def validate_registration(payload: RegisterRequest) -> Dict[str, str]:
    """Return field name -> error message for every invalid field."""
    errors: Dict[str, str] = {}

    if not payload.fullname.strip():
        errors["fullname"] = "Full Name is required"
    if not payload.username.strip():
        errors["username"] = "Username is required"

    if not payload.email:
        errors["email"] = "Email cannot be empty"
    elif not is_valid_email(payload.email):
        errors["email"] = "Invalid email format"

    if not payload.password:
        errors["password"] = "Password cannot be empty"
    elif len(payload.password) < 8 or len(payload.password) > 32:
        errors["password"] = "Password must be between 8 and 32 characters"
    elif not is_valid_password(payload.password):
        errors["password"] = (
            "Password must contain uppercase, lowercase, digit, and special character (!@#$%^&*)"
        )

    if not payload.phone_number:
        errors["phoneNumber"] = "Phone Number cannot be empty"
    elif not is_valid_phone_number(payload.phone_number):
        errors["phoneNumber"] = "Phone number must start with 0 and be 10 to 13 digits long"

    if payload.avatar_url and not is_valid_avatar_url(payload.avatar_url):
        errors["avatarUrl"] = "Avatar URL must start with http:// or https://"

    return errors


class AuthService:
    def __init__(self, api: WalletApiService, session: SessionStore):
        self.api = api
        self.session = session

    async def register(self, payload: RegisterRequest) -> UserSchema:
        errors = validate_registration(payload)
        if errors:
            raise RegistrationValidationException(errors)

        try:
            user = await self.api.register(payload)
        except ExternalServiceException as exc:
            logger.warning("Registration of %s failed: %s", payload.email, exc)
            raise RegistrationFailedException(
                exc.status_code, registration_error_message(exc.status_code)
            ) from exc

        self.session.set_user(user)
        return user

    async def login(self, email: str, password: str) -> Tuple[UserSchema, WalletSchema]:
        if not email or not password:
            raise MissingCredentialsException()

        try:
            user, wallet = await self.api.login_and_setup_wallet(email, password)
        except UnauthenticatedException as exc:
            raise UnauthenticatedException("Incorrect email or password.") from exc

        self.session.set_user(user)
        self.session.set_wallet(wallet)
        return user, wallet

    def check_auth(self) -> bool:
        """True when a stored token exists and has not expired; clears it otherwise."""
        token = self.session.get_token()
        if not token or is_token_expired(token):
            self.session.clear_token()
            return False
        return True

    async def logout(self) -> None:
        await self.api.logout()
        self.session.clear()
        logger.info("Session cleared")

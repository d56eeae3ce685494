import logging
from typing import Awaitable, TypeVar

from wallet_client.core.exceptions import (
    BusinessLogicException,
    ExternalServiceException,
    UnauthenticatedException,
)
from wallet_client.core.result import ErrorKind, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


def business_logic_exception_handler(exc: BusinessLogicException) -> Result:
    if exc.status_code == 404:
        kind = ErrorKind.not_found
    elif exc.status_code >= 500:
        kind = ErrorKind.network
    else:
        kind = ErrorKind.validation
    return Result.failure(kind, str(exc), exc.status_code)

def external_service_exception_handler(exc: ExternalServiceException) -> Result:
    if isinstance(exc, UnauthenticatedException):
        kind = ErrorKind.unauthenticated
    elif exc.status_code == 404:
        kind = ErrorKind.not_found
    elif 400 <= exc.status_code < 500:
        kind = ErrorKind.validation
    else:
        kind = ErrorKind.network
    return Result.failure(kind, str(exc), exc.status_code)

def to_result(exc: Exception) -> Result:
    if isinstance(exc, BusinessLogicException):
        return business_logic_exception_handler(exc)
    if isinstance(exc, ExternalServiceException):
        return external_service_exception_handler(exc)
    raise TypeError(f"No result mapping for {type(exc).__name__}")

async def run_safely(awaitable: Awaitable[T]) -> Result[T]:
    """Await a wallet operation and fold its known failures into a Result.

    Anything outside the client's own exception families propagates.
    """
    try:
        value = await awaitable
    except (BusinessLogicException, ExternalServiceException) as exc:
        result = to_result(exc)
        logger.info("Wallet operation failed (%s): %s", result.error_kind.value, result.message)
        return result
    return Result.success(value)

def registration_error_message(status_code: int | None) -> str:
    if status_code == 409:
        return "This email or username is already taken. Please choose another."
    if status_code == 400:
        return "Please check your input and try again."
    if status_code is not None and status_code >= 500:
        return "Server error. Please try again later."
    return "Something went wrong. Please try again later."

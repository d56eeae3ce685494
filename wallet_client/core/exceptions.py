# exceptions.py

class BusinessLogicException(Exception):
    """Base class for client-side rule violations."""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)


class InvalidAmountException(BusinessLogicException):
    def __init__(self, detail: str = "Please enter a valid amount."):
        super().__init__(status_code=400, detail=detail)

class AmountOutOfRangeException(BusinessLogicException):
    def __init__(self, amount: int, detail: str):
        self.amount = amount
        super().__init__(status_code=400, detail=detail)

class InsufficientBalanceException(BusinessLogicException):
    def __init__(self, balance: int, required: int):
        self.balance = balance
        self.required = required
        super().__init__(
            status_code=400,
            detail=f"Insufficient balance: {balance} available, {required} required"
        )

class RecipientRequiredException(BusinessLogicException):
    def __init__(self):
        super().__init__(status_code=400, detail="Please select a wallet to send to.")

class SelfTransferException(BusinessLogicException):
    def __init__(self, wallet_id: int):
        self.wallet_id = wallet_id
        super().__init__(status_code=400, detail="You cannot transfer to your own wallet.")

class RegistrationValidationException(BusinessLogicException):
    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(status_code=400, detail="; ".join(errors.values()))

class MissingCredentialsException(BusinessLogicException):
    def __init__(self):
        super().__init__(status_code=400, detail="Email and password are required.")

class UnsupportedPaymentOptionException(BusinessLogicException):
    def __init__(self, option: str):
        super().__init__(status_code=400, detail=f"Unsupported payment option: {option}")

class RegistrationFailedException(BusinessLogicException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class DuplicateSubmissionException(BusinessLogicException):
    def __init__(self, action: str):
        super().__init__(status_code=409, detail=f"A {action} is already being submitted")

class WalletNotLoadedException(BusinessLogicException):
    def __init__(self):
        super().__init__(status_code=409, detail="Wallet is not loaded yet")

class WalletNotFoundException(BusinessLogicException):
    def __init__(self, detail: str = "Wallet not found. Please re-login."):
        super().__init__(status_code=404, detail=detail)

class TransactionNotFoundException(BusinessLogicException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)



class ExternalServiceException(Exception):
    """Base class for wallet API related exceptions."""
    def __init__(self, detail: str, status_code: int = 500):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)

class ExternalServiceClientError(ExternalServiceException):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(status_code=status_code, detail=message)

class ResourceNotFoundException(ExternalServiceClientError):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)

class UnauthenticatedException(ExternalServiceClientError):
    """Raised when there is no usable token or the API rejects it."""
    def __init__(self, message: str = "Session expired. Please log in again."):
        super().__init__(message, status_code=401)

class ExternalServiceServerError(ExternalServiceException):
    def __init__(self, message: str, status_code: int = 502):
        super().__init__(status_code=status_code, detail=message)

class ServiceUnreachableException(ExternalServiceException):
    """Exception raised when there is an issue connecting to the wallet API."""
    def __init__(self, message: str):
        super().__init__(status_code=503, detail=message)

from .auth import LoginRequest, LoginResponse
from .pagination import Page
from .transaction import (
    BalanceGraphPoint,
    BalanceGraphRequest,
    BalanceGraphResult,
    GraphView,
    TopUpRequest,
    TransactionSchema,
    TransactionType,
    TransferRequest,
    WalletSummary,
)
from .user import RegisterRequest, UserSchema
from .wallet import WalletSchema

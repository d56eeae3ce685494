import logging
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from wallet_client.core.exceptions import WalletNotLoadedException
from wallet_client.schemas.transaction import TransactionSchema, TransactionType
from wallet_client.utils.mist import parse_identifier
from wallet_client.utils.money import Money

logger = logging.getLogger(__name__)

NO_COUNTERPARTY = "-"


class Direction(str, Enum):
    credit = "credit"
    debit = "debit"


class ResolvedTransaction(BaseModel):
    transaction: TransactionSchema
    direction: Direction
    sign: str
    amount_display: str
    counterparty: str

    @property
    def is_credit(self) -> bool:
        return self.direction == Direction.credit


def resolve_direction(transaction: TransactionSchema, viewer_wallet_id: Optional[int | str]) -> ResolvedTransaction:
    """
    Classify a transaction as seen from the viewer's wallet.

    Top-ups always credit the wallet. A transfer credits the viewer when the
    viewer is the recipient and debits otherwise. The counterparty of a
    transfer is the other side: the receiver when the viewer sent it, the
    sender otherwise.

    Raises:
        WalletNotLoadedException: If there is no viewer wallet id yet.
        ValueError: If the viewer wallet id is not a valid identifier.
    """
    if viewer_wallet_id is None:
        raise WalletNotLoadedException()
    viewer = parse_identifier(viewer_wallet_id)

    if transaction.transaction_type == TransactionType.top_up:
        direction = Direction.credit
        counterparty = transaction.option or transaction.description or NO_COUNTERPARTY
    else:
        is_sender = transaction.wallet_id == viewer
        is_receiver = transaction.recipient_wallet_id == viewer
        direction = Direction.credit if is_receiver else Direction.debit
        name = transaction.recipient_name if is_sender else transaction.sender_name
        counterparty = name or NO_COUNTERPARTY
        if not is_sender and not is_receiver:
            logger.warning(
                "Transaction %s involves neither side of wallet %s", transaction.id, viewer
            )

    sign = "+" if direction == Direction.credit else "-"
    return ResolvedTransaction(
        transaction=transaction,
        direction=direction,
        sign=sign,
        amount_display=Money(transaction.amount).signed(sign),
        counterparty=counterparty,
    )

def resolve_all(transactions: Iterable[TransactionSchema], viewer_wallet_id: Optional[int | str]) -> List[ResolvedTransaction]:
    return [resolve_direction(transaction, viewer_wallet_id) for transaction in transactions]

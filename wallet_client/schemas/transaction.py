from datetime import datetime
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, Field, field_serializer, model_validator

from wallet_client.schemas.common import AccountNumber, Amount, ApiModel, Identifier


class TransactionType(str, Enum):
    top_up = "TOP_UP"
    transfer = "TRANSFER"


def _nested_owner(wallet: Any) -> dict:
    if isinstance(wallet, dict):
        owner = wallet.get("user")
        if isinstance(owner, dict):
            return {"name": owner.get("fullname"), "account_number": wallet.get("accountNumber")}
    return {}


class TransactionSchema(ApiModel):
    id: Identifier
    wallet_id: Identifier
    transaction_type: TransactionType = Field(
        validation_alias=AliasChoices("transactionType", "type", "transaction_type"),
        serialization_alias="transactionType",
    )
    amount: Amount
    recipient_wallet_id: Optional[Identifier] = None
    transaction_date: Optional[datetime] = None
    description: Optional[str] = None
    option: Optional[str] = None
    sender_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("senderName", "senderFullname", "sender_name"),
        serialization_alias="senderName",
    )
    recipient_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("recipientName", "receiverFullname", "receiverName", "recipient_name"),
        serialization_alias="recipientName",
    )
    sender_account_number: Optional[AccountNumber] = Field(
        default=None,
        validation_alias=AliasChoices("senderAccountNumber", "sender_account_number"),
        serialization_alias="senderAccountNumber",
    )
    recipient_account_number: Optional[AccountNumber] = Field(
        default=None,
        validation_alias=AliasChoices(
            "recipientAccountNumber", "receiverAccountNumber", "recipient_account_number"
        ),
        serialization_alias="recipientAccountNumber",
    )

    @model_validator(mode="before")
    @classmethod
    def _flatten_wallets(cls, data: Any) -> Any:
        # older payloads embed senderWallet/receiverWallet instead of names
        if not isinstance(data, dict):
            return data
        sender = _nested_owner(data.get("senderWallet"))
        receiver = _nested_owner(data.get("receiverWallet"))
        if not sender and not receiver:
            return data
        data = dict(data)
        if sender.get("name") and not data.get("senderName"):
            data["senderName"] = sender["name"]
        if sender.get("account_number") and not data.get("senderAccountNumber"):
            data["senderAccountNumber"] = sender["account_number"]
        if receiver.get("name") and not data.get("recipientName"):
            data["recipientName"] = receiver["name"]
        if receiver.get("account_number") and not data.get("recipientAccountNumber"):
            data["recipientAccountNumber"] = receiver["account_number"]
        return data

    @property
    def is_top_up(self) -> bool:
        return self.transaction_type == TransactionType.top_up


class TopUpRequest(ApiModel):
    wallet_id: Identifier
    transaction_type: Literal[TransactionType.top_up] = TransactionType.top_up
    amount: Amount
    option: str
    description: str = ""

    @field_serializer("amount")
    def _amount_as_string(self, amount: int) -> str:
        return str(amount)


class TransferRequest(ApiModel):
    wallet_id: Identifier
    transaction_type: Literal[TransactionType.transfer] = TransactionType.transfer
    amount: Amount
    recipient_account_number: str
    description: str = ""

    @field_serializer("amount")
    def _amount_as_string(self, amount: int) -> str:
        return str(amount)


class WalletSummary(ApiModel):
    balance: Amount = 0
    total_income: Amount = 0
    total_outcome: Amount = 0


class GraphView(str, Enum):
    quartal = "quartal"
    monthly = "monthly"
    weekly = "weekly"


class BalanceGraphRequest(ApiModel):
    wallet_id: Identifier
    view: GraphView
    year: int
    month: Optional[str] = None


class BalanceGraphPoint(ApiModel):
    label: str
    income: Amount = 0
    outcome: Amount = 0


class BalanceGraphResult(ApiModel):
    data: List[BalanceGraphPoint] = Field(default_factory=list)
    year: Optional[int] = None

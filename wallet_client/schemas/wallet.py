from datetime import datetime
from typing import Any, Optional

from pydantic import model_validator

from wallet_client.schemas.common import AccountNumber, Amount, ApiModel, Identifier


class WalletSchema(ApiModel):
    id: Identifier
    user_id: Optional[Identifier] = None
    owner_name: Optional[str] = None
    account_number: AccountNumber
    balance: Amount = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_owner(cls, data: Any) -> Any:
        # the API nests the owner as {"user": {"id": .., "fullname": ..}}
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            owner = data["user"]
            data = dict(data)
            if data.get("userId") is None and data.get("user_id") is None:
                data["userId"] = owner.get("id")
            if not data.get("ownerName") and owner.get("fullname"):
                data["ownerName"] = owner["fullname"]
        return data


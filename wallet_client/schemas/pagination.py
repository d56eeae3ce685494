from typing import Generic, List, TypeVar

from pydantic import Field

from wallet_client.schemas.common import ApiModel

# Define a generic type variable
T = TypeVar('T')  # T can be any schema (e.g., TransactionSchema, WalletSchema)


class Page(ApiModel, Generic[T]):
    """One page of a Spring-style paginated listing."""
    content: List[T] = Field(default_factory=list)
    total_pages: int = 1
    total_elements: int = 0
    size: int = 0
    number: int = 0
    first: bool = True
    last: bool = True
    empty: bool = True

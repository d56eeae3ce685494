from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from wallet_client.utils.mist import parse_identifier
from wallet_client.utils.money import parse_whole_amount


def _number_to_str(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value

# ids are parsed here, once; everything downstream compares ints
Identifier = Annotated[int, BeforeValidator(parse_identifier)]
Amount = Annotated[int, BeforeValidator(parse_whole_amount)]
AccountNumber = Annotated[str, BeforeValidator(_number_to_str)]


class ApiModel(BaseModel):
    """Base for payloads exchanged with the wallet API (camelCase on the wire)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

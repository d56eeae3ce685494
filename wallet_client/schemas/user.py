from typing import Optional

from wallet_client.schemas.common import ApiModel, Identifier


class UserSchema(ApiModel):
    id: Identifier
    email: str
    username: str = ""
    fullname: str = ""
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None


class RegisterRequest(ApiModel):
    email: str
    username: str
    fullname: str
    password: str
    phone_number: str
    avatar_url: Optional[str] = None

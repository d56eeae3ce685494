from wallet_client.schemas.common import ApiModel, Identifier


class LoginRequest(ApiModel):
    email: str
    password: str

class LoginResponse(ApiModel):
    message: str = ""
    token: str
    user_id: Identifier

import pytest

from conftest import make_token
from wallet_client.core.exceptions import (
    MissingCredentialsException,
    RegistrationFailedException,
    RegistrationValidationException,
    UnauthenticatedException,
)
from wallet_client.schemas.user import RegisterRequest
from wallet_client.services.auth import AuthService, validate_registration


def registration(**overrides) -> RegisterRequest:
    fields = {
        "email": "jane@example.com",
        "username": "jane",
        "fullname": "Jane Doe",
        "password": "Secret#123",
        "phone_number": "081234567890",
        "avatar_url": None,
    }
    fields.update(overrides)
    return RegisterRequest(**fields)


def test_valid_registration_has_no_errors():
    assert validate_registration(registration()) == {}


@pytest.mark.parametrize(
    "overrides, field, message",
    [
        ({"fullname": " "}, "fullname", "Full Name is required"),
        ({"username": ""}, "username", "Username is required"),
        ({"email": ""}, "email", "Email cannot be empty"),
        ({"email": "jane@example"}, "email", "Invalid email format"),
        ({"password": "Ab#1"}, "password", "Password must be between 8 and 32 characters"),
        ({"password": "alllowercase#1"}, "password", "Password must contain uppercase, lowercase, digit, and special character (!@#$%^&*)"),
        ({"phone_number": "81234567890"}, "phoneNumber", "Phone number must start with 0 and be 10 to 13 digits long"),
        ({"phone_number": "0123"}, "phoneNumber", "Phone number must start with 0 and be 10 to 13 digits long"),
        ({"avatar_url": "ftp://x/y.png"}, "avatarUrl", "Avatar URL must start with http:// or https://"),
    ],
)
def test_registration_field_errors(overrides, field, message):
    errors = validate_registration(registration(**overrides))
    assert errors[field] == message


@pytest.mark.anyio
async def test_register_rejects_invalid_fields_without_calling_api(api, fake_api, session):
    service = AuthService(api, session)

    with pytest.raises(RegistrationValidationException) as excinfo:
        await service.register(registration(email="nope"))

    assert "email" in excinfo.value.errors
    assert fake_api.requests == []


@pytest.mark.anyio
async def test_register_stores_user(api, fake_api, session, user_payload):
    fake_api.add("POST", "/api/auth/register", (201, user_payload))

    user = await AuthService(api, session).register(registration())

    assert session.get_user() == user


@pytest.mark.anyio
@pytest.mark.parametrize(
    "status, message",
    [
        (409, "This email or username is already taken. Please choose another."),
        (400, "Please check your input and try again."),
        (500, "Server error. Please try again later."),
    ],
)
async def test_register_failure_messages(api, fake_api, session, status, message):
    fake_api.add("POST", "/api/auth/register", (status, {"message": "raw server message"}))

    with pytest.raises(RegistrationFailedException) as excinfo:
        await AuthService(api, session).register(registration())

    assert excinfo.value.detail == message
    assert excinfo.value.status_code == status


@pytest.mark.anyio
async def test_login_requires_credentials(api, session):
    with pytest.raises(MissingCredentialsException):
        await AuthService(api, session).login("", "secret")


@pytest.mark.anyio
async def test_login_stores_user_and_wallet(api, fake_api, session, user_payload, wallet_payload):
    fake_api.add("POST", "/api/auth/login", (200, {"token": make_token(), "userId": 1}))
    fake_api.add("GET", "/api/users/1", (200, user_payload))
    fake_api.add("GET", "/api/wallets/user/1", (200, [wallet_payload]))

    user, wallet = await AuthService(api, session).login("jane@example.com", "Secret#123")

    assert session.get_user() == user
    assert session.get_wallet() == wallet


@pytest.mark.anyio
async def test_login_with_wrong_password(api, fake_api, session):
    fake_api.add("POST", "/api/auth/login", (401, {"message": "Bad credentials"}))

    with pytest.raises(UnauthenticatedException) as excinfo:
        await AuthService(api, session).login("jane@example.com", "wrong")

    assert str(excinfo.value) == "Incorrect email or password."


def test_check_auth(api, session):
    service = AuthService(api, session)
    assert service.check_auth() is True

    session.set_token(make_token(expires_in=-1))
    assert service.check_auth() is False
    assert session.get_token() is None

    assert service.check_auth() is False


@pytest.mark.anyio
async def test_logout_clears_session(api, fake_api, session, user, wallet):
    fake_api.add("POST", "/api/auth/logout", (200, {"success": True, "message": "bye", "data": None}))
    session.set_user(user)
    session.set_wallet(wallet)

    await AuthService(api, session).logout()

    assert session.get_user() is None
    assert session.get_wallet() is None
    assert session.get_token() is None

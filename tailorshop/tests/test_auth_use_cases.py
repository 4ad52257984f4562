from __future__ import annotations

from datetime import timedelta

import pytest

from tailorshop.application.use_cases.users import (
    AuthenticateRequestUseCase,
    ChangePasswordUseCase,
    DeleteProfileUseCase,
    GetProfileUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
    extract_bearer_token,
)
from tailorshop.domain.users.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    UnauthorizedError,
    UserNotFoundError,
)


@pytest.fixture()
def register(users, tokens, hasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, tokens=tokens, password_hasher=hasher)


@pytest.fixture()
def login(users, tokens, hasher) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher)


@pytest.fixture()
def authenticate(users, tokens) -> AuthenticateRequestUseCase:
    return AuthenticateRequestUseCase(users=users, tokens=tokens)


def _register_ada(register: RegisterUserUseCase, **overrides):
    values = {"name": "Ada", "email": "ada@example.com", "phone": None, "password": "secret1"}
    values.update(overrides)
    return register.execute(**values)


def test_register_user_success(register, users, tokens) -> None:
    user, token = _register_ada(register)

    assert user.name == "Ada"
    assert user.password_hash == "hashed:secret1"
    assert tokens.verify(token).user_id == user.id
    assert users.find_by_id(user.id) is not None


def test_register_duplicate_email_raises(register) -> None:
    _register_ada(register)

    with pytest.raises(DuplicateIdentityError):
        _register_ada(register, name="Other", password="another1")


def test_register_duplicate_phone_raises(register) -> None:
    _register_ada(register, email=None, phone="08012345678")

    with pytest.raises(DuplicateIdentityError):
        _register_ada(register, email="new@example.com", phone="08012345678")


def test_register_duplicate_error_message(register) -> None:
    _register_ada(register)

    with pytest.raises(DuplicateIdentityError) as exc_info:
        _register_ada(register)

    assert exc_info.value.message == "User already exists with this email or phone"


def test_login_user_success(register, login, tokens, clock) -> None:
    user, _ = _register_ada(register)
    clock.advance(timedelta(minutes=5))

    logged_in, token = login.execute(email="ada@example.com", password="secret1")

    assert logged_in.id == user.id
    assert logged_in.last_login_at == clock.now
    assert tokens.verify(token).user_id == user.id


def test_login_by_phone(register, login) -> None:
    user, _ = _register_ada(register, email=None, phone="08012345678")

    logged_in, _ = login.execute(phone="08012345678", password="secret1")

    assert logged_in.id == user.id


def test_login_wrong_password_and_unknown_identity_look_the_same(register, login) -> None:
    _register_ada(register)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute(email="ada@example.com", password="wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute(email="nobody@example.com", password="secret1")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("Bearer ", None),
        ("Basic abc", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected) -> None:
    assert extract_bearer_token(header) == expected


def test_authenticate_valid_token(register, authenticate) -> None:
    user, token = _register_ada(register)

    assert authenticate.execute(f"Bearer {token}").id == user.id


def test_authenticate_missing_header(authenticate) -> None:
    with pytest.raises(UnauthorizedError):
        authenticate.execute(None)


def test_authenticate_expired_token(register, authenticate, clock) -> None:
    _, token = _register_ada(register)
    clock.advance(timedelta(days=8))

    with pytest.raises(UnauthorizedError) as exc_info:
        authenticate.execute(f"Bearer {token}")

    assert exc_info.value.code == "unauthorized"


def test_authenticate_deleted_user(register, authenticate, users) -> None:
    user, token = _register_ada(register)
    users.delete(user.id)

    with pytest.raises(UnauthorizedError):
        authenticate.execute(f"Bearer {token}")


def test_get_profile_missing_user(users) -> None:
    with pytest.raises(UserNotFoundError):
        GetProfileUseCase(users=users).execute(99)


def test_update_profile_changes_name(register, users) -> None:
    user, _ = _register_ada(register)

    updated = UpdateProfileUseCase(users=users).execute(user.id, name="Ada Lovelace")

    assert updated.name == "Ada Lovelace"
    assert updated.email == "ada@example.com"


def test_update_profile_to_own_email_is_allowed(register, users) -> None:
    user, _ = _register_ada(register)

    updated = UpdateProfileUseCase(users=users).execute(user.id, email="ada@example.com")

    assert updated.email == "ada@example.com"


def test_update_profile_to_taken_email_raises(register, users) -> None:
    user, _ = _register_ada(register)
    _register_ada(register, name="Grace", email="grace@example.com")

    with pytest.raises(DuplicateIdentityError):
        UpdateProfileUseCase(users=users).execute(user.id, email="grace@example.com")


def test_delete_profile(register, users) -> None:
    user, _ = _register_ada(register)

    DeleteProfileUseCase(users=users).execute(user.id)

    assert users.find_by_id(user.id) is None


def test_change_password(register, login, users, hasher) -> None:
    user, _ = _register_ada(register)
    use_case = ChangePasswordUseCase(users=users, password_hasher=hasher)

    use_case.execute(user.id, current_password="secret1", new_password="newsecret")

    with pytest.raises(InvalidCredentialsError):
        login.execute(email="ada@example.com", password="secret1")
    assert login.execute(email="ada@example.com", password="newsecret")[0].id == user.id


def test_change_password_wrong_current(register, users, hasher) -> None:
    user, _ = _register_ada(register)
    use_case = ChangePasswordUseCase(users=users, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsError):
        use_case.execute(user.id, current_password="nope", new_password="newsecret")

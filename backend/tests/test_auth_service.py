"""
DevConnector Backend — Auth Service Unit Tests
================================================

What:  Tests for login, registration and current-user lookup.
How:   Uses mock repositories and a mock password hasher (no DB, no bcrypt).

What we test:
    ✅ Login issues a token for the matching user
    ✅ Unknown email and wrong password raise the same error
    ✅ Registration stores a hashed password and a gravatar avatar
    ✅ Duplicate email is rejected before anything is stored
    ✅ Current user lookup excludes the password
"""

import uuid

import pytest

from devconnector.exceptions import InvalidCredentialsError, NotFoundError, UserExistsError
from devconnector.schemas.auth import LoginRequest, RegisterRequest
from devconnector.services.auth_service import AuthService, gravatar_url


@pytest.fixture
def service(mock_users, mock_passwords, token_service):
    return AuthService(mock_users, mock_passwords, token_service)


class TestGravatar:

    def test_url_shape(self):
        """Avatar URL should be a protocol-relative gravatar link."""
        url = gravatar_url("ada@devmail.com")

        assert url.startswith("//www.gravatar.com/avatar/")
        assert url.endswith("?s=200&r=pg&d=mm")

    def test_case_and_whitespace_insensitive(self):
        """Email case and surrounding spaces should not change the avatar."""
        assert gravatar_url("  Ada@DevMail.com ") == gravatar_url("ada@devmail.com")


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success_returns_token_for_user(
        self, service, mock_users, make_user, token_service
    ):
        """Matching credentials should return a token for that user."""
        user = make_user(password="secret123")
        mock_users.find_by_email.return_value = user

        result = await service.login(LoginRequest(email="ada@devmail.com", password="secret123"))

        assert token_service.verify(result.token) == str(user.id)

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_are_indistinguishable(
        self, service, mock_users, make_user
    ):
        """Both login failures should raise the same error."""
        mock_users.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login(LoginRequest(email="nobody@devmail.com", password="secret123"))

        mock_users.find_by_email.return_value = make_user(password="secret123")
        with pytest.raises(InvalidCredentialsError) as mismatch:
            await service.login(LoginRequest(email="ada@devmail.com", password="wrong-one"))

        assert unknown.value.message == mismatch.value.message == "Invalid Credentials"
        assert unknown.value.errors == mismatch.value.errors


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_stores_hashed_password_and_avatar(
        self, service, mock_users, token_service
    ):
        """Registration should store the hash and gravatar, never the plain password."""
        mock_users.find_by_email.return_value = None

        result = await service.register(
            RegisterRequest(name="Ada Lovelace", email="ada@devmail.com", password="secret123")
        )

        mock_users.add.assert_awaited_once()
        stored = mock_users.add.await_args.args[0]
        assert stored.password == "hashed:secret123"
        assert stored.avatar == gravatar_url("ada@devmail.com")
        assert stored.created_at is not None
        assert token_service.verify(result.token) == str(stored.id)

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, service, mock_users, mock_passwords, make_user):
        """Existing email should raise UserExistsError."""
        mock_users.find_by_email.return_value = make_user()

        with pytest.raises(UserExistsError) as exc_info:
            await service.register(
                RegisterRequest(name="Other", email="ada@devmail.com", password="secret123")
            )

        assert exc_info.value.errors == [{"msg": "User already exists"}]
        mock_users.add.assert_not_awaited()
        mock_passwords.hash.assert_not_awaited()


class TestCurrentUser:

    @pytest.mark.asyncio
    async def test_returns_user_without_password(self, service, mock_users, make_user):
        """Current user lookup should return the stored user."""
        user = make_user()
        mock_users.find_by_id.return_value = user

        result = await service.current_user(str(user.id))

        assert result.id == user.id
        assert result.email == user.email
        assert "password" not in result.model_dump()

    @pytest.mark.asyncio
    async def test_deleted_account_raises_not_found(self, service, mock_users):
        """Token for a deleted account should resolve to NotFoundError."""
        mock_users.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.current_user(str(uuid.uuid4()))

"""
Portico Backend — Security Tests
==================================

What:  Tests for password hashing, access tokens, revocation and the
       require_user dependency.
How:   Token tests use a fixed secret; Redis is an AsyncMock.

What we test:
    ✅ Hash/verify accepts the right password only
    ✅ Issued tokens decode to the same identity
    ✅ Expired, tampered and foreign tokens are rejected
    ✅ Revocation keys expire together with the token
    ✅ /secure/ routes reject missing, invalid and revoked tokens
"""

import os
import time

import jwt
import pytest

from portico.exceptions import AuthenticationException
from portico.security.passwords import hash_password, verify_password
from portico.security.tokens import TokenService

TEST_SECRET = os.environ["JWT_SECRET"]


class TestPasswords:

    def test_correct_password_verifies(self):
        stored = hash_password("correct-horse")
        assert verify_password("correct-horse", stored) is True

    def test_wrong_password_fails(self):
        stored = hash_password("correct-horse")
        assert verify_password("battery-staple", stored) is False

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash_fails(self):
        assert verify_password("anything", "not-a-hash") is False


class TestTokenService:

    def test_issue_and_decode(self, token_service, make_user):
        user = make_user(user_id=7, username="carol", roles=["USER", "ADMIN"])

        profile = token_service.decode(token_service.issue(user))

        assert profile.id == 7
        assert profile.username == "carol"
        assert profile.roles == frozenset({"USER", "ADMIN"})
        assert profile.token_id
        assert profile.expires_at > time.time()

    def test_remember_me_extends_lifetime(self, token_service, make_user):
        user = make_user()

        short = token_service.decode(token_service.issue(user))
        long = token_service.decode(token_service.issue(user, increase_expired=True))

        assert long.expires_at - short.expires_at >= (60 * 24 - 15) * 60 - 5

    def test_each_token_has_its_own_id(self, token_service, make_user):
        user = make_user()

        first = token_service.decode(token_service.issue(user))
        second = token_service.decode(token_service.issue(user))

        assert first.token_id != second.token_id

    def test_expired_token_is_rejected(self, token_service):
        now = int(time.time())
        token = jwt.encode(
            {"sub": "1", "jti": "x", "iat": now - 120, "exp": now - 60},
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationException, match="expired"):
            token_service.decode(token)

    def test_tampered_token_is_rejected(self, token_service, make_user):
        token = token_service.issue(make_user())
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(AuthenticationException, match="invalid"):
            token_service.decode(tampered)

    def test_foreign_secret_is_rejected(self, token_service, make_user):
        other = TokenService(secret="another-secret-that-is-long-enough-too", algorithm="HS256")

        with pytest.raises(AuthenticationException, match="invalid"):
            token_service.decode(other.issue(make_user()))

    def test_missing_jti_is_rejected(self, token_service):
        token = jwt.encode(
            {"sub": "1", "exp": int(time.time()) + 60},
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationException):
            token_service.decode(token)

    def test_non_numeric_subject_is_rejected(self, token_service):
        token = jwt.encode(
            {"sub": "alice", "jti": "x", "exp": int(time.time()) + 60},
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationException, match="invalid"):
            token_service.decode(token)


class TestTokenRevocationStore:

    @pytest.mark.asyncio
    async def test_revoke_sets_key_until_expiry(self, revocation_store, mock_redis):
        expires_at = int(time.time()) + 600

        await revocation_store.revoke("abc", expires_at)

        args, kwargs = mock_redis.set.call_args
        assert args == ("test:revoked:abc", "1")
        assert 590 <= kwargs["ex"] <= 600

    @pytest.mark.asyncio
    async def test_revoke_past_token_keeps_short_marker(self, revocation_store, mock_redis):
        await revocation_store.revoke("old", int(time.time()) - 10)

        assert mock_redis.set.call_args.kwargs["ex"] == 1

    @pytest.mark.asyncio
    async def test_is_revoked(self, revocation_store, mock_redis):
        mock_redis.exists.return_value = 1

        assert await revocation_store.is_revoked("abc") is True
        mock_redis.exists.assert_awaited_once_with("test:revoked:abc")

    @pytest.mark.asyncio
    async def test_unknown_token_is_not_revoked(self, revocation_store):
        assert await revocation_store.is_revoked("never-seen") is False


class TestRequireUser:

    @pytest.mark.asyncio
    async def test_missing_header_is_unauthorized(self, test_client):
        response = await test_client.get("/api/user/secure/info")

        assert response.status_code == 401
        assert response.json()["message"] == "app.common.exception.AuthorizationException"

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_is_unauthorized(self, test_client):
        response = await test_client.get(
            "/api/user/secure/info", headers={"Authorization": "Basic YWxpY2U6cHc="}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token_is_authentication_failure(self, test_client):
        response = await test_client.get(
            "/api/user/secure/info", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "code": 400,
            "success": False,
            "message": "Access token is invalid",
        }

    @pytest.mark.asyncio
    async def test_revoked_token_is_rejected(
        self, test_client, mock_redis, make_user, auth_headers
    ):
        mock_redis.exists.return_value = 1

        response = await test_client.get(
            "/api/test/secure/admin", headers=auth_headers(make_user(roles=["ADMIN"]))
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Access token has been revoked"

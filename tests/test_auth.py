"""
Optional bearer-token protection of the users routes
"""

import jwt
import pytest

from crud_backend.app import create_app
from crud_backend.config.settings import Settings
from crud_backend.database.factory import memory_stores
from crud_backend.utils.auth import create_access_token, decode_access_token


@pytest.fixture
def secured_app(auth_settings):
    return create_app(auth_settings, stores=memory_stores())


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestTokens:

    def test_round_trip(self, auth_settings):
        token = create_access_token("alice", auth_settings)

        assert decode_access_token(token, auth_settings)["sub"] == "alice"

    def test_audience_and_issuer_are_checked(self, auth_settings):
        issuing = Settings(
            env="TEST", enable_auth=True, jwt_secret=auth_settings.jwt_secret,
            jwt_audience="crud-api", jwt_issuer="crud-auth"
        )
        verifying = Settings(
            env="TEST", enable_auth=True, jwt_secret=auth_settings.jwt_secret,
            jwt_audience="other-api", jwt_issuer="crud-auth"
        )
        token = create_access_token("alice", issuing)

        assert decode_access_token(token, issuing)["aud"] == "crud-api"
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token, verifying)

    def test_secret_required(self, settings):
        with pytest.raises(ValueError):
            create_access_token("alice", settings)


class TestProtectedRoutes:

    @pytest.mark.asyncio
    async def test_auth_is_off_by_default(self, api_client):
        assert (await api_client.get("/v1/users")).status_code == 200

    @pytest.mark.asyncio
    async def test_missing_header_is_401(self, secured_app, client_for):
        async with client_for(secured_app) as client:
            response = await client.get("/v1/users")

        assert response.status_code == 401
        assert response.json() == {"error": "Missing Authorization header"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_wrong_scheme_is_401(self, secured_app, client_for):
        async with client_for(secured_app) as client:
            response = await client.get("/v1/users", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_forged_token_is_401(self, secured_app, auth_settings, client_for):
        forged = jwt.encode({"sub": "mallory", "exp": 9999999999}, "some-other-secret-0123456789abcdef", algorithm="HS256")

        async with client_for(secured_app) as client:
            response = await client.get("/v1/users", headers=bearer(forged))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    @pytest.mark.asyncio
    async def test_expired_token_is_401(self, secured_app, auth_settings, client_for):
        token = create_access_token("alice", auth_settings, ttl_seconds=-60)

        async with client_for(secured_app) as client:
            response = await client.get("/v1/users", headers=bearer(token))

        assert response.status_code == 401
        assert response.json() == {"error": "Token has expired"}

    @pytest.mark.asyncio
    async def test_valid_token_reaches_users(self, secured_app, auth_settings, client_for):
        headers = bearer(create_access_token("alice", auth_settings))

        async with client_for(secured_app) as client:
            created = await client.post("/v1/users", json={"email": "a@b.com", "name": "A"}, headers=headers)
            listed = await client.get("/v1/users", headers=headers)

        assert created.status_code == 201
        assert listed.json() == [created.json()]

    @pytest.mark.asyncio
    async def test_posts_and_health_stay_open(self, secured_app, client_for):
        async with client_for(secured_app) as client:
            assert (await client.get("/v1/posts")).status_code == 200
            assert (await client.get("/v1/health")).status_code == 200

# =============================================================================
# tests/test_auth.py - Authorization Gate Tests
# =============================================================================
# Tokens are signed locally with the HS256 secret from settings, or with a
# throwaway ES256 key served from a mocked JWKS endpoint.
# =============================================================================

import time
from uuid import uuid4

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from fastapi import HTTPException
from jose import jwk, jwt

from app.auth import decode_token, dependencies
from app.config import settings

USER_ID = str(uuid4())


def _token(secret=None, **claims):
    payload = {
        "sub": USER_ID,
        "email": "staff@example.com",
        "aud": "authenticated",
        "role": "authenticated",
        "iat": int(time.time()),
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TestTokenRoutes:

    @pytest.mark.parametrize("prefix", ["/auth", "/authorization"])
    def test_verify_valid_token(self, client, prefix):
        response = client.get(f"{prefix}/verify", headers=_auth(_token()))

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "user_id": USER_ID,
            "email": "staff@example.com",
        }

    def test_me(self, client):
        response = client.get("/auth/me", headers=_auth(_token()))

        assert response.json()["id"] == USER_ID
        assert response.json()["role"] == "authenticated"

    def test_expired_token(self, client):
        token = _token(exp=int(time.time()) - 10)

        response = client.get("/auth/verify", headers=_auth(token))

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_wrong_secret(self, client):
        token = _token(secret="some-other-secret-value")

        assert client.get("/auth/verify", headers=_auth(token)).status_code == 401

    def test_wrong_audience(self, client):
        token = _token(aud="anon")

        assert client.get("/auth/verify", headers=_auth(token)).status_code == 401

    def test_subject_must_be_uuid(self, client):
        token = _token(sub="not-a-uuid")

        response = client.get("/auth/verify", headers=_auth(token))

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token: malformed user ID"

    def test_missing_header(self, client):
        assert client.get("/auth/verify").status_code in (401, 403)


class TestContactUsGate:

    def test_open_when_auth_not_required(self, client):
        assert client.get("/contact-us/count").status_code == 200

    def test_requires_token_when_enabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "AUTH_REQUIRED", True)

        assert client.get("/contact-us/count").status_code == 401
        assert client.get("/contact-us/count", headers=_auth(_token())).status_code == 200
        assert client.get("/contact-us/count", headers=_auth("garbage")).status_code == 401


def _es256_keypair(kid):
    private_key = ec.generate_private_key(ec.SECP256R1())
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    public_jwk = jwk.construct(public_pem, algorithm="ES256").to_dict()
    public_jwk["kid"] = kid
    return private_pem, public_jwk


@pytest.mark.asyncio
class TestSigningKeys:

    @pytest.fixture(autouse=True)
    def empty_jwks_cache(self, monkeypatch):
        monkeypatch.setattr(dependencies, "_jwks_cache", {})
        monkeypatch.setattr(dependencies, "_jwks_cache_time", 0)

    @pytest.fixture
    def jwks_server(self, monkeypatch):
        """Serve a JWKS document through httpx.AsyncClient and record requests."""
        served = {"keys": [], "requests": []}

        def handler(request):
            served["requests"].append(str(request.url))
            return httpx.Response(200, json={"keys": served["keys"]})

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )
        return served

    async def test_es256_token_verified_with_fetched_keys(self, jwks_server):
        private_pem, public_jwk = _es256_keypair("key-1")
        jwks_server["keys"].append(public_jwk)
        token = jwt.encode(
            {"sub": USER_ID, "aud": "authenticated", "exp": int(time.time()) + 60},
            private_pem,
            algorithm="ES256",
            headers={"kid": "key-1"},
        )

        user = await decode_token(token)
        await decode_token(token)

        assert str(user.id) == USER_ID
        assert jwks_server["requests"] == [
            "https://test-project.supabase.co/auth/v1/.well-known/jwks.json"
        ]

    async def test_unknown_kid_is_rejected(self, jwks_server):
        private_pem, _ = _es256_keypair("key-1")
        token = jwt.encode(
            {"sub": USER_ID, "aud": "authenticated", "exp": int(time.time()) + 60},
            private_pem,
            algorithm="ES256",
            headers={"kid": "missing"},
        )

        with pytest.raises(HTTPException) as exc_info:
            await decode_token(token)

        assert exc_info.value.status_code == 401

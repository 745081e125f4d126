"""Authentication — verifies bearer-token resolution and the internal key gate.

Invariants:
    - No Authorization header -> 401
    - Invalid, expired or revoked Firebase tokens -> 401
    - Certificate or revocation lookup failures -> 503
    - An unset INTERNAL_API_KEY rejects every key with 403
"""

import pytest
from firebase_admin import auth, exceptions

import scouting.infrastructure.firebase as firebase_module
from scouting.api.dependencies import get_current_user
from scouting.config import get_settings
from scouting.main import app

BEARER = {"Authorization": "Bearer some.id.token"}


@pytest.fixture
def real_auth(client, monkeypatch):
    """Use the real get_current_user with a stubbed Firebase app."""
    app.dependency_overrides.pop(get_current_user, None)
    monkeypatch.setattr(firebase_module, "get_firebase_app", lambda settings: object())
    return client


def _token_check(monkeypatch, outcome):
    calls = []

    def fake_verify(token, app=None, check_revoked=False):
        calls.append({"token": token, "check_revoked": check_revoked})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(auth, "verify_id_token", fake_verify)
    return calls


async def test_valid_token_resolves_caller(real_auth, seed_user, monkeypatch):
    calls = _token_check(monkeypatch, {"uid": "user-1", "email": "ana@example.com"})

    res = await real_auth.get("/user/me", headers=BEARER)

    assert res.status_code == 200
    assert res.json()["data"]["id"] == "user-1"
    assert calls == [{"token": "some.id.token", "check_revoked": True}]


async def test_missing_authorization_returns_401(real_auth, monkeypatch):
    calls = _token_check(monkeypatch, {"uid": "user-1"})

    res = await real_auth.get("/user/me")

    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"
    assert calls == []


async def test_non_bearer_scheme_returns_401(real_auth, monkeypatch):
    _token_check(monkeypatch, {"uid": "user-1"})

    res = await real_auth.get("/user/me", headers={"Authorization": "Basic abc"})

    assert res.status_code == 401


@pytest.mark.parametrize("error", [
    auth.InvalidIdTokenError("bad signature"),
    auth.ExpiredIdTokenError("expired", cause=None),
    auth.RevokedIdTokenError("revoked"),
    auth.UserDisabledError("disabled"),
    ValueError("not a JWT"),
])
async def test_rejected_tokens_return_401(real_auth, monkeypatch, error):
    _token_check(monkeypatch, error)

    res = await real_auth.get("/user/me", headers=BEARER)

    assert res.status_code == 401
    assert res.json()["message"] == "Invalid or expired token"


@pytest.mark.parametrize("error", [
    auth.CertificateFetchError("no certs", cause=None),
    exceptions.UnavailableError("backend down"),
])
async def test_identity_provider_failures_return_503(real_auth, monkeypatch, error):
    _token_check(monkeypatch, error)

    res = await real_auth.get("/user/me", headers=BEARER)

    assert res.status_code == 503
    assert res.json()["error"]["code"] == "IDENTITY_PROVIDER_ERROR"


async def test_unset_internal_key_rejects_every_request(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "internal_api_key", None)

    res = await client.get("/internal/next-match", headers={"x-api-key": "anything"})

    assert res.status_code == 403
    assert res.json()["message"] == "Invalid API key"

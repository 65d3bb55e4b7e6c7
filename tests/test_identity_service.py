"""LDAP gateway client tests."""

import httpx
import pytest

from cwie.core.exceptions import UnauthenticatedError
from cwie.services.identity_service import IdentityVerifier, encode_password

from .conftest import LDAP_URL


def test_encode_password_is_hex_of_utf8():
    assert encode_password("abc") == "616263"
    assert encode_password("ก") == "e0b881"


@pytest.mark.asyncio
async def test_verify_credentials_returns_record(identity_verifier):
    record = await identity_verifier.verify_credentials("65160001", "Secret#123")

    assert record.username == "65160001"
    assert record.first_name == "Somchai"
    assert record.email == "65160001@go.buu.ac.th"


@pytest.mark.asyncio
async def test_wrong_password_is_unauthenticated(identity_verifier):
    with pytest.raises(UnauthenticatedError):
        await identity_verifier.verify_credentials("65160001", "wrong")


@pytest.mark.asyncio
async def test_sends_username_and_hex_password():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"username": "65160001"})

    verifier = IdentityVerifier(LDAP_URL, transport=httpx.MockTransport(handler))
    await verifier.verify_credentials("65160001", "pw")

    assert seen == {"username": "65160001", "password": "7077"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={}),
        httpx.Response(200, json=["unexpected"]),
        httpx.Response(200, content=b"not json"),
        httpx.Response(500, json={"username": "65160001"}),
    ],
)
async def test_unusable_responses_are_unauthenticated(response):
    verifier = IdentityVerifier(LDAP_URL, transport=httpx.MockTransport(lambda request: response))

    with pytest.raises(UnauthenticatedError, match="LDAP authentication failed"):
        await verifier.verify_credentials("65160001", "pw")


@pytest.mark.asyncio
async def test_network_failure_is_unauthenticated():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    verifier = IdentityVerifier(LDAP_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(UnauthenticatedError):
        await verifier.verify_credentials("65160001", "pw")


def test_tls_verification_is_on_by_default():
    assert IdentityVerifier(LDAP_URL).verify is True

"""
Tests for the three-legged OAuth handshake.
"""

import pytest

from tumblr_client.exceptions import ApiError, ArgumentError, DecodingError, InvalidOperationError
from tumblr_client.http_client import HttpResponse
from tumblr_client.oauth import Token
from tumblr_client.oauth_client import OAuthClient, extract_verifier

CALLBACK = "https://example.com/callback"


def token_response(body: str, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, body=body.encode("utf-8"), reason="OK" if status == 200 else "Unauthorized")


@pytest.fixture
def oauth(transport):
    """OAuth client on the recording transport."""
    return OAuthClient(
        "consumer-key",
        "consumer-secret",
        CALLBACK,
        transport=transport,
        nonce_source=lambda: "fixed-nonce",
        clock=lambda: 1700000000,
    )


class TestExtractVerifier:
    """Test extract_verifier."""

    def test_plain_verifier(self):
        """A bare verifier is returned as is."""
        assert extract_verifier(" abc123 ") == "abc123"

    def test_callback_url(self):
        """The verifier is read from a callback URL."""
        url = f"{CALLBACK}?oauth_token=tok&oauth_verifier=ver%2F1#_=_"

        assert extract_verifier(url) == "ver/1"

    @pytest.mark.parametrize("value", [None, "", "  ", f"{CALLBACK}?oauth_verifier="])
    def test_missing_verifier(self, value):
        """Blank verifiers are rejected."""
        with pytest.raises(ArgumentError):
            extract_verifier(value)


class TestOAuthClient:
    """Test OAuthClient."""

    def test_callback_required(self, transport):
        """A callback URL is required."""
        with pytest.raises(ArgumentError):
            OAuthClient("key", "secret", "", transport=transport)

    @pytest.mark.asyncio
    async def test_get_request_token(self, oauth, transport):
        """The request token call is a signed POST with the callback."""
        transport.queue(token_response(
            "oauth_token=req-token&oauth_token_secret=req-secret&oauth_callback_confirmed=true"
        ))

        token = await oauth.get_request_token()

        assert token == Token("req-token", "req-secret")
        request = transport.last
        assert request.method == "POST"
        assert request.url == "https://www.tumblr.com/oauth/request_token"
        assert 'oauth_callback="https%3A%2F%2Fexample.com%2Fcallback"' in request.headers["Authorization"]
        assert "oauth_token=" not in request.headers["Authorization"]

    @pytest.mark.asyncio
    async def test_callback_not_confirmed(self, oauth, transport):
        """An unconfirmed callback is rejected."""
        transport.queue(token_response(
            "oauth_token=req-token&oauth_token_secret=req-secret&oauth_callback_confirmed=false"
        ))

        with pytest.raises(DecodingError):
            await oauth.get_request_token()

    @pytest.mark.asyncio
    async def test_missing_token_fields(self, oauth, transport):
        """Responses without token and secret are rejected."""
        transport.queue(token_response("oauth_token=req-token"))

        with pytest.raises(DecodingError):
            await oauth.get_request_token()

    @pytest.mark.asyncio
    async def test_error_status(self, oauth, transport):
        """Non-2xx responses raise ApiError."""
        transport.queue(token_response("oauth_problem=signature_invalid", status=401))

        with pytest.raises(ApiError) as exc_info:
            await oauth.get_request_token()

        assert exc_info.value.status == 401
        assert "signature_invalid" in exc_info.value.details

    def test_get_authorize_url(self, oauth):
        """The authorize URL carries the request token key."""
        url = oauth.get_authorize_url(Token("req token", "secret"))

        assert url == "https://www.tumblr.com/oauth/authorize?oauth_token=req+token"

    @pytest.mark.asyncio
    async def test_get_access_token(self, oauth, transport):
        """The access token call is signed with the request token and verifier."""
        transport.queue(token_response("oauth_token=acc-token&oauth_token_secret=acc-secret"))

        token = await oauth.get_access_token(
            Token("req-token", "req-secret"),
            f"{CALLBACK}?oauth_token=req-token&oauth_verifier=ver",
        )

        assert token == Token("acc-token", "acc-secret")
        header = transport.last.headers["Authorization"]
        assert transport.last.url == "https://www.tumblr.com/oauth/access_token"
        assert 'oauth_token="req-token"' in header
        assert 'oauth_verifier="ver"' in header

    @pytest.mark.asyncio
    async def test_get_access_token_requires_request_token(self, oauth, transport):
        """The request token is required."""
        with pytest.raises(ArgumentError):
            await oauth.get_access_token(None, "ver")

        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_closed_client(self, oauth, transport):
        """A closed client refuses every call."""
        async with oauth:
            pass

        with pytest.raises(InvalidOperationError):
            await oauth.get_request_token()
        assert transport.call_count == 0
        assert not transport.closed

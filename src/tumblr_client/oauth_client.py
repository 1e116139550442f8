"""
Three-legged OAuth 1.0a handshake.

1. ``get_request_token`` obtains a temporary token bound to the callback URL.
2. The user visits ``get_authorize_url(request_token)`` and approves access.
3. ``get_access_token`` exchanges the request token and the verifier from
   the callback for the long-lived access token used by ``TumblrClient``.
"""

import logging
from typing import Dict, Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from .constants import (
    FORM_CONTENT_TYPE,
    HTTP_POST,
    OAUTH_ACCESS_TOKEN_URL,
    OAUTH_AUTHORIZE_URL,
    OAUTH_REQUEST_TOKEN_URL,
    is_success_status,
)
from .exceptions import ApiError, ArgumentError, DecodingError, InvalidOperationError
from .http_client import AiohttpTransport, HttpResponse, Transport
from .oauth import Clock, NonceSource, OAuthSigner, Token

logger = logging.getLogger(__name__)


def _parse_token_response(response: HttpResponse, url: str) -> Dict[str, str]:
    text = response.body.decode("utf-8", errors="replace")

    if not is_success_status(response.status):
        raise ApiError(
            response.reason or f"HTTP {response.status}",
            status=response.status,
            details=text[:200] or None,
            url=url,
        )

    values = {key: items[0] for key, items in parse_qs(text, keep_blank_values=True).items()}
    for name in ("oauth_token", "oauth_token_secret"):
        if not values.get(name):
            raise DecodingError("Token response is missing a field", details=name)
    return values


def extract_verifier(verifier_or_callback_url: str) -> str:
    """Return the ``oauth_verifier`` from a callback URL, or the value itself."""
    if verifier_or_callback_url is None or not verifier_or_callback_url.strip():
        raise ArgumentError("Verifier cannot be empty.", argument="verifier")

    value = verifier_or_callback_url.strip()
    if "oauth_verifier=" not in value:
        return value

    query = urlsplit(value).query or value.split("?", 1)[-1]
    verifiers = parse_qs(query).get("oauth_verifier")
    if not verifiers or not verifiers[0]:
        raise ArgumentError("Callback URL carries no oauth_verifier.", argument="verifier")
    return verifiers[0]


class OAuthClient:
    """
    Client for the OAuth 1.0a authorization endpoints.

    Example:
        ```python
        async with OAuthClient(key, secret, "https://example.com/callback") as oauth:
            request_token = await oauth.get_request_token()
            print(oauth.get_authorize_url(request_token))
            access_token = await oauth.get_access_token(request_token, callback_url)
        ```
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        callback_url: str,
        transport: Optional[Transport] = None,
        nonce_source: Optional[NonceSource] = None,
        clock: Optional[Clock] = None,
    ):
        if not callback_url:
            raise ArgumentError("Callback URL cannot be empty.", argument="callback_url")

        self._signer = OAuthSigner(consumer_key, consumer_secret, nonce_source, clock)
        self.callback_url = callback_url
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else AiohttpTransport()
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidOperationError("OAuthClient has been closed")

    async def _post_signed(
        self,
        url: str,
        token: Optional[Token],
        extra_oauth: Dict[str, str],
    ) -> Dict[str, str]:
        signed = self._signer.sign(HTTP_POST, url, [], token=token, extra_oauth=extra_oauth)
        headers = {
            "Authorization": OAuthSigner.authorization_header(signed),
            "Content-Type": FORM_CONTENT_TYPE,
        }
        response = await self._transport.send(HTTP_POST, url, headers, b"")
        return _parse_token_response(response, url)

    async def get_request_token(self) -> Token:
        """Obtain a temporary request token."""
        self._ensure_open()

        values = await self._post_signed(
            OAUTH_REQUEST_TOKEN_URL, None, {"oauth_callback": self.callback_url}
        )
        if values.get("oauth_callback_confirmed", "true").lower() != "true":
            raise DecodingError("Callback was not confirmed by the server")

        logger.info("Obtained OAuth request token")
        return Token(values["oauth_token"], values["oauth_token_secret"])

    def get_authorize_url(self, request_token: Token) -> str:
        """URL the user must open to authorize the request token."""
        if request_token is None:
            raise ArgumentError("Request token cannot be None.", argument="request_token")
        return f"{OAUTH_AUTHORIZE_URL}?{urlencode({'oauth_token': request_token.key})}"

    async def get_access_token(self, request_token: Token, verifier_or_callback_url: str) -> Token:
        """
        Exchange an authorized request token for an access token.

        Args:
            request_token: Token returned by ``get_request_token``
            verifier_or_callback_url: The ``oauth_verifier`` value, or the
                full callback URL the user was redirected to
        """
        self._ensure_open()
        if request_token is None:
            raise ArgumentError("Request token cannot be None.", argument="request_token")
        verifier = extract_verifier(verifier_or_callback_url)

        values = await self._post_signed(
            OAUTH_ACCESS_TOKEN_URL, request_token, {"oauth_verifier": verifier}
        )

        logger.info("Obtained OAuth access token")
        return Token(values["oauth_token"], values["oauth_token_secret"])

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "OAuthClient":
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

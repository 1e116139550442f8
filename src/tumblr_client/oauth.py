"""
OAuth 1.0a request signing (HMAC-SHA1).

With a fixed nonce source and clock the signature is reproducible.

Example:
    ```python
    signer = OAuthSigner("key", "secret", nonce_source=lambda: "n", clock=lambda: 0)
    signed = signer.sign("GET", "https://api.tumblr.com/v2/user/info", token=token)
    headers = {"Authorization": signer.authorization_header(signed)}
    ```
"""

import base64
import hashlib
import hmac
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from .constants import OAUTH_SIGNATURE_METHOD, OAUTH_VERSION
from .exceptions import ArgumentError

logger = logging.getLogger(__name__)

NonceSource = Callable[[], str]
Clock = Callable[[], float]

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Token:
    """OAuth token credentials (request token or access token)."""

    key: str
    secret: str

    def __post_init__(self):
        if not self.key:
            raise ArgumentError("Token key cannot be empty.", argument="key")
        if self.secret is None:
            raise ArgumentError("Token secret cannot be None.", argument="secret")

    def __repr__(self) -> str:
        return f"Token(key={self.key!r}, secret='***')"


def percent_encode(value: str) -> str:
    """Percent-encode per RFC 3986; only ``A-Z a-z 0-9 - . _ ~`` stay literal."""
    return quote(str(value), safe="-._~")


def normalize_url(url: str) -> str:
    """
    Base string URI: lowercase scheme and host, default port dropped,
    query and fragment removed.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    port = parts.port

    netloc = host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{port}"

    return urlunsplit((scheme, netloc, parts.path or "/", "", ""))


def _nonce() -> str:
    return secrets.token_hex(16)


class OAuthSigner:
    """
    Signs requests with OAuth 1.0a HMAC-SHA1.

    Args:
        consumer_key: Application consumer key
        consumer_secret: Application consumer secret
        nonce_source: Callable returning a fresh nonce per request
        clock: Callable returning the current time in epoch seconds
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        nonce_source: Optional[NonceSource] = None,
        clock: Optional[Clock] = None,
    ):
        if not consumer_key:
            raise ArgumentError("Consumer key cannot be empty.", argument="consumer_key")
        if not consumer_secret:
            raise ArgumentError("Consumer secret cannot be empty.", argument="consumer_secret")

        self.consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._nonce_source = nonce_source or _nonce
        self._clock = clock or time.time

    def protocol_parameters(
        self,
        token: Optional[Token] = None,
        extra: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """The ``oauth_*`` parameters for one request, without the signature."""
        params = {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": self._nonce_source(),
            "oauth_signature_method": OAUTH_SIGNATURE_METHOD,
            "oauth_timestamp": str(int(self._clock())),
            "oauth_version": OAUTH_VERSION,
        }
        if token is not None:
            params["oauth_token"] = token.key
        if extra:
            params.update(extra)
        return params

    @staticmethod
    def normalize_parameters(pairs: Iterable[Tuple[str, str]]) -> str:
        """Encode, sort by name then value, and join as ``name=value&...``."""
        encoded = sorted(
            (percent_encode(name), percent_encode(value)) for name, value in pairs
        )
        return "&".join(f"{name}={value}" for name, value in encoded)

    @classmethod
    def signature_base_string(
        cls,
        http_method: str,
        url: str,
        pairs: Iterable[Tuple[str, str]],
    ) -> str:
        # Query parameters already on the URL take part in the signature
        query_pairs = parse_qsl(urlsplit(url).query, keep_blank_values=True)
        all_pairs = list(pairs) + query_pairs

        return "&".join((
            http_method.upper(),
            percent_encode(normalize_url(url)),
            percent_encode(cls.normalize_parameters(all_pairs)),
        ))

    def signing_key(self, token: Optional[Token] = None) -> str:
        token_secret = token.secret if token is not None else ""
        return f"{percent_encode(self._consumer_secret)}&{percent_encode(token_secret)}"

    def signature(self, base_string: str, token: Optional[Token] = None) -> str:
        digest = hmac.new(
            self.signing_key(token).encode("utf-8"),
            base_string.encode("utf-8"),
            hashlib.sha1,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def sign(
        self,
        http_method: str,
        url: str,
        parameters: Optional[Iterable[Tuple[str, str]]] = None,
        token: Optional[Token] = None,
        extra_oauth: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """
        Sign a request.

        Args:
            http_method: HTTP verb
            url: Absolute request URL (may carry a query string)
            parameters: Request parameters sent in the query or form body
            token: Access or request token, if any
            extra_oauth: Additional protocol parameters such as
                ``oauth_callback`` or ``oauth_verifier``

        Returns:
            The protocol parameters including ``oauth_signature``
        """
        oauth_params = self.protocol_parameters(token, extra_oauth)
        request_pairs: List[Tuple[str, str]] = list(parameters or [])

        base_string = self.signature_base_string(
            http_method, url, request_pairs + list(oauth_params.items())
        )
        oauth_params["oauth_signature"] = self.signature(base_string, token)

        logger.debug(f"Signed {http_method.upper()} {normalize_url(url)}")
        return oauth_params

    @staticmethod
    def authorization_header(oauth_params: Mapping[str, str]) -> str:
        """Render signed protocol parameters as an ``Authorization`` header value."""
        fields = ", ".join(
            f'{percent_encode(name)}="{percent_encode(value)}"'
            for name, value in sorted(oauth_params.items())
        )
        return f"OAuth {fields}"

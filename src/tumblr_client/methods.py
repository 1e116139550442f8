"""Value objects describing a single Tumblr API call."""

from typing import Optional
from urllib.parse import urlsplit

from .constants import (
    BLOG_DOMAIN_SUFFIX,
    BLOG_METHOD_URL_TEMPLATE,
    HTTP_GET,
    SUPPORTED_HTTP_METHODS,
    USER_METHOD_URL_TEMPLATE,
)
from .exceptions import ArgumentError
from .oauth import Token
from .parameters import MethodParameterSet


def validate_blog_name(blog_name: Optional[str], argument: str = "blog_name") -> str:
    """
    Validate a blog identifier and return its full host name.

    Bare names get the ``.tumblr.com`` suffix; anything containing a dot
    (a custom domain or an already qualified name) is kept as is.

    Raises:
        ArgumentError: If the name is None, empty or whitespace
    """
    if blog_name is None:
        raise ArgumentError("Blog name cannot be None.", argument=argument)

    name = blog_name.strip()
    if not name:
        raise ArgumentError("Blog name cannot be empty.", argument=argument)

    if "." not in name:
        name += BLOG_DOMAIN_SUFFIX

    return name


def _require_name(value: Optional[str], argument: str) -> str:
    if value is None or not value.strip():
        raise ArgumentError(f"{argument} cannot be empty.", argument=argument)
    return value.strip()


class ApiMethod:
    """
    One API call: absolute URL, HTTP verb, optional token and parameters.

    Instances are read-only once built; the parameter set is copied on
    construction so later changes by the caller do not leak in.
    """

    __slots__ = ("_url", "_http_method", "_token", "_parameters")

    def __init__(
        self,
        url: str,
        token: Optional[Token] = None,
        http_method: str = HTTP_GET,
        parameters: Optional[MethodParameterSet] = None,
    ):
        if url is None:
            raise ArgumentError("URL cannot be None.", argument="url")

        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ArgumentError("URL must be absolute.", details=url, argument="url")

        if http_method is None or http_method.upper() not in SUPPORTED_HTTP_METHODS:
            raise ArgumentError(
                f"Unsupported HTTP method: {http_method}",
                details=f"expected one of {', '.join(sorted(SUPPORTED_HTTP_METHODS))}",
                argument="http_method",
            )

        self._url = url
        self._http_method = http_method.upper()
        self._token = token
        self._parameters = parameters.copy() if parameters is not None else MethodParameterSet()

    @property
    def url(self) -> str:
        return self._url

    @property
    def http_method(self) -> str:
        return self._http_method

    @property
    def token(self) -> Optional[Token]:
        return self._token

    @property
    def parameters(self) -> MethodParameterSet:
        return self._parameters.copy()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._http_method} {self._url}, "
            f"params={len(self._parameters)}, token={'yes' if self._token else 'no'})"
        )


class BlogMethod(ApiMethod):
    """API call on ``/blog/{blog}/{method}``."""

    __slots__ = ("blog_name", "method_name")

    def __init__(
        self,
        blog_name: str,
        method_name: str,
        token: Optional[Token] = None,
        http_method: str = HTTP_GET,
        parameters: Optional[MethodParameterSet] = None,
    ):
        blog = validate_blog_name(blog_name)
        method = _require_name(method_name, "method_name")

        super().__init__(
            BLOG_METHOD_URL_TEMPLATE.format(blog_name=blog, method_name=method),
            token,
            http_method,
            parameters,
        )
        self.blog_name = blog
        self.method_name = method


class UserMethod(ApiMethod):
    """API call on ``/user/{method}``."""

    __slots__ = ("method_name",)

    def __init__(
        self,
        method_name: str,
        token: Optional[Token] = None,
        http_method: str = HTTP_GET,
        parameters: Optional[MethodParameterSet] = None,
    ):
        method = _require_name(method_name, "method_name")

        super().__init__(
            USER_METHOD_URL_TEMPLATE.format(method_name=method),
            token,
            http_method,
            parameters,
        )
        self.method_name = method

"""Constants for the Tumblr API client."""

from typing import Final

# Transport defaults
DEFAULT_TIMEOUT: Final[float] = 30.0  # HTTP request timeout in seconds

USER_AGENT: Final[str] = "TumblrClient/0.1.0 (+https://www.tumblr.com/docs/en/api/v2)"

# Tumblr API endpoints
TUMBLR_API_BASE: Final[str] = "https://api.tumblr.com/v2"
BLOG_METHOD_URL_TEMPLATE: Final[str] = TUMBLR_API_BASE + "/blog/{blog_name}/{method_name}"
USER_METHOD_URL_TEMPLATE: Final[str] = TUMBLR_API_BASE + "/user/{method_name}"
TAGGED_URL: Final[str] = TUMBLR_API_BASE + "/tagged"
BLOG_DOMAIN_SUFFIX: Final[str] = ".tumblr.com"

# OAuth 1.0a endpoints
OAUTH_REQUEST_TOKEN_URL: Final[str] = "https://www.tumblr.com/oauth/request_token"
OAUTH_AUTHORIZE_URL: Final[str] = "https://www.tumblr.com/oauth/authorize"
OAUTH_ACCESS_TOKEN_URL: Final[str] = "https://www.tumblr.com/oauth/access_token"
OAUTH_SIGNATURE_METHOD: Final[str] = "HMAC-SHA1"
OAUTH_VERSION: Final[str] = "1.0"

# Paging limits imposed by the platform
DEFAULT_PAGE_SIZE: Final[int] = 20
MAX_PAGE_SIZE: Final[int] = 20

# Filtered content limits
MAX_FILTERED_CONTENT_COUNT: Final[int] = 200
MAX_FILTERED_CONTENT_LENGTH: Final[int] = 250

# Content types
FORM_CONTENT_TYPE: Final[str] = "application/x-www-form-urlencoded"

# HTTP methods accepted by the API
HTTP_GET: Final[str] = "GET"
HTTP_POST: Final[str] = "POST"
HTTP_PUT: Final[str] = "PUT"
HTTP_DELETE: Final[str] = "DELETE"

SUPPORTED_HTTP_METHODS: Final[frozenset[str]] = frozenset({
    HTTP_GET,
    HTTP_POST,
    HTTP_PUT,
    HTTP_DELETE,
})

# HTTP status codes
HTTP_OK: Final[int] = 200
HTTP_CREATED: Final[int] = 201
HTTP_NO_CONTENT: Final[int] = 204
HTTP_BAD_REQUEST: Final[int] = 400
HTTP_UNAUTHORIZED: Final[int] = 401
HTTP_FORBIDDEN: Final[int] = 403
HTTP_NOT_FOUND: Final[int] = 404
HTTP_TOO_MANY_REQUESTS: Final[int] = 429
HTTP_INTERNAL_SERVER_ERROR: Final[int] = 500


def is_success_status(status: int) -> bool:
    """Return True for 2xx status codes."""
    return 200 <= status < 300

"""
Tumblr Client - typed asynchronous client for the Tumblr v2 API.

Signs every request with OAuth 1.0a, decodes responses into frozen pydantic
models and dispatches posts to one variant per post kind.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Import main components for convenient access
from .client import TumblrClient
from .config import ClientConfig, ConfigLoader, load_config
from .enums import (
    AvatarShape,
    DashboardOption,
    NoteType,
    NotificationsTypes,
    PostCreationState,
    PostFilter,
    PostFormat,
    PostType,
)
from .exceptions import (
    ApiError,
    ApiErrorDetail,
    ArgumentError,
    ConfigurationError,
    DecodingError,
    InvalidOperationError,
    TransportError,
    TumblrClientError,
)
from .http_client import AiohttpTransport, HttpResponse, Transport
from .logger import setup_logging
from .methods import ApiMethod, BlogMethod, UserMethod
from .oauth import OAuthSigner, Token
from .oauth_client import OAuthClient
from .pagination import offset_paginate, paginate
from .parameters import MethodParameterSet
from .post_data import PostData
from .posts import (
    AnswerPost,
    AudioPost,
    BasePost,
    ChatPost,
    LinkPost,
    PhotoPost,
    QuotePost,
    TextPost,
    UnknownPost,
    VideoPost,
    decode_post,
)
from .rate_limiter import RateLimiter

# Package-level exports
__all__ = [
    "__version__",
    "__license__",
    # Clients
    "TumblrClient",
    "OAuthClient",
    # Configuration
    "ClientConfig",
    "ConfigLoader",
    "load_config",
    "setup_logging",
    # Request building
    "ApiMethod",
    "BlogMethod",
    "UserMethod",
    "MethodParameterSet",
    "OAuthSigner",
    "Token",
    "PostData",
    # Transport
    "Transport",
    "AiohttpTransport",
    "HttpResponse",
    "RateLimiter",
    # Pagination
    "paginate",
    "offset_paginate",
    # Posts
    "BasePost",
    "TextPost",
    "PhotoPost",
    "QuotePost",
    "LinkPost",
    "AnswerPost",
    "VideoPost",
    "AudioPost",
    "ChatPost",
    "UnknownPost",
    "decode_post",
    # Enums
    "PostType",
    "PostFilter",
    "PostFormat",
    "PostCreationState",
    "NoteType",
    "AvatarShape",
    "DashboardOption",
    "NotificationsTypes",
    # Exceptions
    "TumblrClientError",
    "ArgumentError",
    "InvalidOperationError",
    "ApiError",
    "ApiErrorDetail",
    "TransportError",
    "DecodingError",
    "ConfigurationError",
]

"""
Async client for the Tumblr v2 API.

``TumblrClient`` exposes every supported endpoint as a coroutine. Each call
runs the same pipeline: argument checks, an ``ApiMethod`` with its
``MethodParameterSet``, OAuth 1.0a signing, one transport round trip,
envelope unwrapping and typed decoding.

Example:
    ```python
    async with TumblrClient(consumer_key, consumer_secret, token) as client:
        info = await client.get_blog_info("staff")
        posts = await client.get_posts("staff", limit=5)
    ```
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional, TypeVar, Union

from .config import ClientConfig
from .constants import (
    DEFAULT_PAGE_SIZE,
    FORM_CONTENT_TYPE,
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    MAX_FILTERED_CONTENT_COUNT,
    MAX_FILTERED_CONTENT_LENGTH,
    MAX_PAGE_SIZE,
    TAGGED_URL,
)
from .converters import TimestampConverter
from .enums import (
    NOTIFICATIONS_TYPES_WIRE,
    POST_TYPE_WIRE,
    DashboardOption,
    NotificationsTypes,
    PostCreationState,
    PostFilter,
    PostType,
)
from .envelope import decode, unwrap
from .exceptions import ArgumentError, InvalidOperationError
from .http_client import AiohttpTransport, HttpResponse, Transport
from .methods import ApiMethod, BlogMethod, UserMethod, validate_blog_name
from .models import (
    BlocksResponse,
    BlogBase,
    BlogInfo,
    FilteredContentResponse,
    FollowedBy,
    Followers,
    Following,
    Notification,
    NotificationsResponse,
    PostCreationInfo,
    UserInfo,
    UserLimits,
)
from .oauth import Clock, NonceSource, OAuthSigner, Token
from .parameters import MethodParameterSet
from .post_data import PostData, format_publish_on
from .posts import AnyPost, BasePost, Likes, Posts, decode_posts
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_offset(offset: int, argument: str = "offset") -> None:
    if offset < 0:
        raise ArgumentError(f"{argument} must be greater or equal to zero.", argument=argument)


def _check_limit(limit: int, argument: str = "limit") -> None:
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ArgumentError(
            f"{argument} must be between 1 and {MAX_PAGE_SIZE}.", argument=argument
        )


def _check_positive(value: int, argument: str) -> None:
    if value <= 0:
        raise ArgumentError(f"{argument} must be greater than zero.", argument=argument)


def _check_text(value: Optional[str], argument: str) -> str:
    if value is None:
        raise ArgumentError(f"{argument} cannot be None.", argument=argument)
    if not value.strip():
        raise ArgumentError(f"{argument} cannot be empty.", argument=argument)
    return value


def _check_filtered_content(item: Optional[str], argument: str = "filtered_content") -> str:
    text = _check_text(item, argument)
    if len(text) > MAX_FILTERED_CONTENT_LENGTH:
        raise ArgumentError(
            f"Each filtered string cannot be more than {MAX_FILTERED_CONTENT_LENGTH} "
            f"characters in length.",
            argument=argument,
        )
    return text


class TumblrClient:
    """
    Asynchronous Tumblr API client.

    Args:
        consumer_key: Application consumer key, also sent as ``api_key``
        consumer_secret: Application consumer secret
        token: OAuth access token; operations on private data require it
        transport: Object implementing ``Transport``; an ``AiohttpTransport``
            owned by the client is created when omitted
        nonce_source: Nonce generator for signing (tests inject a fixed one)
        clock: Time source for signing

    The client holds no mutable state besides its closed flag, so concurrent
    calls on one instance are safe. Closing is final: every later call raises
    ``InvalidOperationError`` without touching the network.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        token: Optional[Token] = None,
        transport: Optional[Transport] = None,
        nonce_source: Optional[NonceSource] = None,
        clock: Optional[Clock] = None,
    ):
        self._signer = OAuthSigner(consumer_key, consumer_secret, nonce_source, clock)
        self._token = token
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else AiohttpTransport()
        self._closed = False

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[Transport] = None) -> "TumblrClient":
        """Build a client from a loaded ``ClientConfig``."""
        owns_transport = transport is None
        if owns_transport:
            rate_limiter = RateLimiter(config.rate_limit) if config.rate_limit else None
            transport = AiohttpTransport(
                timeout=config.timeout,
                user_agent=config.user_agent,
                rate_limiter=rate_limiter,
            )

        client = cls(config.consumer_key, config.consumer_secret, config.token, transport)
        client._owns_transport = owns_transport
        return client

    @property
    def api_key(self) -> str:
        return self._signer.consumer_key

    @property
    def token(self) -> Optional[Token]:
        return self._token

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Close the client and release the transport it owns."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            await self._transport.close()
        logger.debug("TumblrClient closed")

    async def __aenter__(self) -> "TumblrClient":
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidOperationError("TumblrClient has been closed")

    def _require_token(self, operation: str) -> Token:
        if self._token is None:
            raise InvalidOperationError(f"{operation} requires an OAuth token to be specified.")
        return self._token

    def _public_parameters(self) -> MethodParameterSet:
        parameters = MethodParameterSet()
        parameters.add("api_key", self.api_key)
        return parameters

    async def _send(self, method: ApiMethod) -> HttpResponse:
        parameters = method.parameters
        pairs = list(parameters)

        signed = self._signer.sign(method.http_method, method.url, pairs, token=method.token)
        headers = {"Authorization": OAuthSigner.authorization_header(signed)}

        url = method.url
        body = None
        if method.http_method == HTTP_GET:
            if pairs:
                url = f"{url}{'&' if '?' in url else '?'}{parameters.to_query_string()}"
        else:
            headers["Content-Type"] = FORM_CONTENT_TYPE
            body = parameters.to_form_body()

        return await self._transport.send(method.http_method, url, headers, body)

    async def call_api_method(
        self,
        method: ApiMethod,
        model: Any = None,
        member: Optional[str] = None,
        convert: Optional[Callable[[Any], T]] = None,
    ) -> Any:
        """
        Run an arbitrary API call.

        Args:
            method: The call to run
            model: Pydantic model or type to validate the ``response`` member
                against; the raw payload is returned when omitted
            member: Key of ``response`` to validate instead of the whole member
            convert: Function applied to the decoded result

        Raises:
            InvalidOperationError: If the client is closed
            TransportError: If no HTTP response was obtained
            ApiError: If the platform reports a failure
            DecodingError: If the payload does not match ``model``
        """
        self._ensure_open()

        response = await self._send(method)
        payload = unwrap(response.status, response.body, url=method.url, reason=response.reason)

        result = payload if model is None else decode(payload, model, member)
        return convert(result) if convert is not None else result

    async def _call_no_result(self, method: ApiMethod) -> None:
        await self.call_api_method(method)

    # Blog operations

    async def get_blog_info(self, blog_name: str) -> BlogInfo:
        """Public information about a blog."""
        self._ensure_open()
        validate_blog_name(blog_name)

        return await self.call_api_method(
            BlogMethod(blog_name, "info", self._token, HTTP_GET, self._public_parameters()),
            BlogInfo,
            member="blog",
        )

    async def get_blog_likes(
        self,
        blog_name: str,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        before: Optional[datetime] = None,
        after: Optional[datetime] = None,
    ) -> Likes:
        """Posts liked by a blog, when the blog shares its likes."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(offset)
        _check_limit(limit)
        if before is not None and after is not None:
            raise ArgumentError("Only one of before and after can be given.", argument="before")

        parameters = self._public_parameters()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)
        parameters.add("before", before)
        parameters.add("after", after)

        return await self.call_api_method(
            BlogMethod(blog_name, "likes", self._token, HTTP_GET, parameters),
            Likes,
        )

    async def get_posts(
        self,
        blog_name: str,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        type: PostType = PostType.ALL,
        include_reblog_info: bool = False,
        include_notes_info: bool = False,
        filter: PostFilter = PostFilter.HTML,
        tag: Optional[str] = None,
    ) -> Posts:
        """
        Published posts of a blog.

        Args:
            blog_name: Blog to read
            offset: Index of the first post
            limit: Number of posts (1-20)
            type: Restrict to one kind of post
            include_reblog_info: Include reblog fields
            include_notes_info: Include the notes of each post
            filter: Body format
            tag: Restrict to posts with this tag
        """
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(offset)
        _check_limit(limit)

        method_name = "posts" if type is PostType.ALL else f"posts/{POST_TYPE_WIRE.encode(type)}"

        parameters = self._public_parameters()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)
        parameters.add("reblog_info", include_reblog_info, False)
        parameters.add("notes_info", include_notes_info, False)
        parameters.add("filter", filter, PostFilter.HTML)
        parameters.add("tag", tag, "")

        return await self.call_api_method(
            BlogMethod(blog_name, method_name, self._token, HTTP_GET, parameters),
            Posts,
        )

    async def get_post(
        self,
        blog_name: str,
        post_id: int,
        include_reblog_info: bool = False,
        include_notes_info: bool = False,
        filter: PostFilter = PostFilter.HTML,
    ) -> Optional[BasePost]:
        """A single post by id, or None when the blog has no such post."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_positive(post_id, "post_id")

        parameters = self._public_parameters()
        parameters.add("id", post_id)
        parameters.add("reblog_info", include_reblog_info, False)
        parameters.add("notes_info", include_notes_info, False)
        parameters.add("filter", filter, PostFilter.HTML)

        posts: Posts = await self.call_api_method(
            BlogMethod(blog_name, "posts", self._token, HTTP_GET, parameters),
            Posts,
        )
        return posts.posts[0] if posts.posts else None

    async def create_post(self, blog_name: str, post_data: PostData) -> PostCreationInfo:
        """Create a post on a blog of the authenticated user."""
        self._ensure_open()
        validate_blog_name(blog_name)
        if post_data is None:
            raise ArgumentError("post_data cannot be None.", argument="post_data")
        token = self._require_token("create_post")

        return await self.call_api_method(
            BlogMethod(blog_name, "post", token, HTTP_POST, post_data.to_parameter_set()),
            PostCreationInfo,
        )

    async def edit_post(self, blog_name: str, post_id: int, post_data: PostData) -> PostCreationInfo:
        """Replace the content of an existing post."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_positive(post_id, "post_id")
        if post_data is None:
            raise ArgumentError("post_data cannot be None.", argument="post_data")
        token = self._require_token("edit_post")

        parameters = post_data.to_parameter_set()
        parameters.add("id", post_id)

        return await self.call_api_method(
            BlogMethod(blog_name, "post/edit", token, HTTP_POST, parameters),
            PostCreationInfo,
        )

    async def delete_post(self, blog_name: str, post_id: int) -> PostCreationInfo:
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_positive(post_id, "post_id")
        token = self._require_token("delete_post")

        parameters = MethodParameterSet()
        parameters.add("id", post_id)

        return await self.call_api_method(
            BlogMethod(blog_name, "post/delete", token, HTTP_POST, parameters),
            PostCreationInfo,
        )

    async def reblog(
        self,
        blog_name: str,
        post_id: int,
        reblog_key: str,
        comment: Optional[str] = None,
        state: PostCreationState = PostCreationState.PUBLISHED,
        publish_on: Optional[datetime] = None,
    ) -> PostCreationInfo:
        """
        Reblog a post to one of the user's blogs.

        ``publish_on`` schedules a queued reblog and must be in the future.
        """
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_positive(post_id, "post_id")
        _check_text(reblog_key, "reblog_key")
        if publish_on is not None:
            if state is not PostCreationState.QUEUE:
                raise ArgumentError("publish_on requires the queue state.", argument="publish_on")
            when = publish_on if publish_on.tzinfo else publish_on.replace(tzinfo=timezone.utc)
            if when <= datetime.now(timezone.utc):
                raise ArgumentError("publish_on must be in the future.", argument="publish_on")
        token = self._require_token("reblog")

        parameters = MethodParameterSet()
        parameters.add("id", post_id)
        parameters.add("reblog_key", reblog_key)
        parameters.add("comment", comment, "")
        parameters.add("state", state, PostCreationState.PUBLISHED)
        if publish_on is not None:
            parameters.add("publish_on", format_publish_on(publish_on))

        return await self.call_api_method(
            BlogMethod(blog_name, "post/reblog", token, HTTP_POST, parameters),
            PostCreationInfo,
        )

    async def get_followers(
        self,
        blog_name: str,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Followers:
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(offset)
        _check_limit(limit)
        token = self._require_token("get_followers")

        parameters = MethodParameterSet()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)

        return await self.call_api_method(
            BlogMethod(blog_name, "followers", token, HTTP_GET, parameters),
            Followers,
        )

    async def get_followed_by(self, blog_name: str, query: str) -> bool:
        """Whether the blog ``query`` follows ``blog_name``."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_text(query, "query")
        token = self._require_token("get_followed_by")

        parameters = MethodParameterSet()
        parameters.add("query", query)

        result: FollowedBy = await self.call_api_method(
            BlogMethod(blog_name, "followed_by", token, HTTP_GET, parameters),
            FollowedBy,
        )
        return result.followed_by

    async def get_draft_posts(
        self,
        blog_name: str,
        since_id: int = 0,
        filter: PostFilter = PostFilter.HTML,
    ) -> List[BasePost]:
        """Draft posts of a blog, paged by ``since_id``."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(since_id, "since_id")
        token = self._require_token("get_draft_posts")

        parameters = MethodParameterSet()
        parameters.add("since_id", since_id, 0)
        parameters.add("filter", filter, PostFilter.HTML)

        return await self.call_api_method(
            BlogMethod(blog_name, "posts/draft", token, HTTP_GET, parameters),
            List[AnyPost],
            member="posts",
        )

    async def get_submission_posts(
        self,
        blog_name: str,
        offset: int = 0,
        filter: PostFilter = PostFilter.HTML,
    ) -> List[BasePost]:
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(offset)
        token = self._require_token("get_submission_posts")

        parameters = MethodParameterSet()
        parameters.add("offset", offset, 0)
        parameters.add("filter", filter, PostFilter.HTML)

        return await self.call_api_method(
            BlogMethod(blog_name, "posts/submission", token, HTTP_GET, parameters),
            List[AnyPost],
            member="posts",
        )

    async def get_queued_posts(
        self,
        blog_name: str,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        filter: PostFilter = PostFilter.HTML,
    ) -> List[BasePost]:
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(offset)
        _check_limit(limit)
        token = self._require_token("get_queued_posts")

        parameters = MethodParameterSet()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)
        parameters.add("filter", filter, PostFilter.HTML)

        return await self.call_api_method(
            BlogMethod(blog_name, "posts/queue", token, HTTP_GET, parameters),
            List[AnyPost],
            member="posts",
        )

    async def reorder_queue(self, blog_name: str, post_id: int, insert_after: int = 0) -> None:
        """Move a queued post after another one (0 moves it to the top)."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_positive(post_id, "post_id")
        _check_offset(insert_after, "insert_after")
        token = self._require_token("reorder_queue")

        parameters = MethodParameterSet()
        parameters.add("post_id", post_id)
        parameters.add("insert_after", insert_after)

        await self._call_no_result(
            BlogMethod(blog_name, "posts/queue/reorder", token, HTTP_POST, parameters)
        )

    async def shuffle_queue(self, blog_name: str) -> None:
        self._ensure_open()
        validate_blog_name(blog_name)
        token = self._require_token("shuffle_queue")

        await self._call_no_result(
            BlogMethod(blog_name, "posts/queue/shuffle", token, HTTP_POST)
        )

    async def get_notifications(
        self,
        blog_name: str,
        before: Optional[datetime] = None,
        types: NotificationsTypes = NotificationsTypes.ALL,
    ) -> List[Notification]:
        """
        Activity feed of a blog, newest first.

        Args:
            blog_name: Blog to read
            before: Only notifications older than this time
            types: Kinds of notifications to return
        """
        self._ensure_open()
        validate_blog_name(blog_name)
        if not types:
            raise ArgumentError("At least one notification type is required.", argument="types")
        token = self._require_token("get_notifications")

        parameters = MethodParameterSet()
        if before is not None:
            parameters.add("before", TimestampConverter.encode(before), 0)
        if types != NotificationsTypes.ALL:
            parameters.add("types", NOTIFICATIONS_TYPES_WIRE.encode_flags(types))

        result: NotificationsResponse = await self.call_api_method(
            BlogMethod(blog_name, "notifications", token, HTTP_GET, parameters),
            NotificationsResponse,
        )
        return result.notifications

    async def get_blocks(
        self,
        blog_name: str,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> List[BlogBase]:
        """Blogs blocked by ``blog_name``."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_offset(offset)
        _check_limit(limit)
        token = self._require_token("get_blocks")

        parameters = MethodParameterSet()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)

        result: BlocksResponse = await self.call_api_method(
            BlogMethod(blog_name, "blocks", token, HTTP_GET, parameters),
            BlocksResponse,
        )
        return result.blocked_tumblelogs

    async def block(self, blog_name: str, blocked_blog_name: str) -> None:
        """Block another blog."""
        self._ensure_open()
        validate_blog_name(blog_name)
        blocked = validate_blog_name(blocked_blog_name, "blocked_blog_name")
        token = self._require_token("block")

        parameters = MethodParameterSet()
        parameters.add("blocked_tumblelog", blocked)

        await self._call_no_result(BlogMethod(blog_name, "blocks", token, HTTP_POST, parameters))

    async def block_by_post(self, blog_name: str, post_id: int) -> None:
        """Block the (possibly anonymous) author of a post."""
        self._ensure_open()
        validate_blog_name(blog_name)
        _check_positive(post_id, "post_id")
        token = self._require_token("block_by_post")

        parameters = MethodParameterSet()
        parameters.add("post_id", post_id)

        await self._call_no_result(BlogMethod(blog_name, "blocks", token, HTTP_POST, parameters))

    async def unblock(self, blog_name: str, blocked_blog_name: Optional[str] = None) -> None:
        """
        Remove a block.

        Without ``blocked_blog_name`` every block of an anonymous asker is
        removed.
        """
        self._ensure_open()
        validate_blog_name(blog_name)
        blocked = None
        if blocked_blog_name is not None:
            blocked = validate_blog_name(blocked_blog_name, "blocked_blog_name")
        token = self._require_token("unblock")

        parameters = MethodParameterSet()
        if blocked is None:
            parameters.add("anonymous_only", True)
        else:
            parameters.add("blocked_tumblelog", blocked)

        await self._call_no_result(BlogMethod(blog_name, "blocks", token, HTTP_DELETE, parameters))

    # User operations

    async def get_user_info(self) -> UserInfo:
        self._ensure_open()
        token = self._require_token("get_user_info")

        return await self.call_api_method(
            UserMethod("info", token, HTTP_GET),
            UserInfo,
            member="user",
        )

    async def get_user_limits(self) -> UserLimits:
        """Daily limits and remaining allowances of the user."""
        self._ensure_open()
        token = self._require_token("get_user_limits")

        return await self.call_api_method(
            UserMethod("limits", token, HTTP_GET),
            UserLimits,
            member="user",
        )

    async def get_following(self, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Following:
        self._ensure_open()
        _check_offset(offset)
        _check_limit(limit)
        token = self._require_token("get_following")

        parameters = MethodParameterSet()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)

        return await self.call_api_method(
            UserMethod("following", token, HTTP_GET, parameters),
            Following,
        )

    async def get_likes(
        self,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        before: Optional[datetime] = None,
        after: Optional[datetime] = None,
    ) -> Likes:
        """Posts liked by the user."""
        self._ensure_open()
        _check_offset(offset)
        _check_limit(limit)
        if before is not None and after is not None:
            raise ArgumentError("Only one of before and after can be given.", argument="before")
        token = self._require_token("get_likes")

        parameters = MethodParameterSet()
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)
        parameters.add("before", before)
        parameters.add("after", after)

        return await self.call_api_method(
            UserMethod("likes", token, HTTP_GET, parameters),
            Likes,
        )

    async def _like_action(self, method_name: str, post_id: int, reblog_key: str) -> None:
        self._ensure_open()
        _check_positive(post_id, "post_id")
        _check_text(reblog_key, "reblog_key")
        token = self._require_token(method_name)

        parameters = MethodParameterSet()
        parameters.add("id", post_id)
        parameters.add("reblog_key", reblog_key)

        await self._call_no_result(UserMethod(method_name, token, HTTP_POST, parameters))

    async def like(self, post_id: int, reblog_key: str) -> None:
        await self._like_action("like", post_id, reblog_key)

    async def unlike(self, post_id: int, reblog_key: str) -> None:
        await self._like_action("unlike", post_id, reblog_key)

    async def _follow_action(self, method_name: str, blog_name: str) -> None:
        self._ensure_open()
        blog = validate_blog_name(blog_name)
        token = self._require_token(method_name)

        parameters = MethodParameterSet()
        parameters.add("url", blog)

        await self._call_no_result(UserMethod(method_name, token, HTTP_POST, parameters))

    async def follow(self, blog_name: str) -> None:
        await self._follow_action("follow", blog_name)

    async def unfollow(self, blog_name: str) -> None:
        await self._follow_action("unfollow", blog_name)

    async def get_dashboard_posts(
        self,
        since_id: int = 0,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        type: PostType = PostType.ALL,
        include_reblog_info: bool = False,
        include_notes_info: bool = False,
        option: Optional[DashboardOption] = None,
    ) -> List[BasePost]:
        """
        Posts from the user's dashboard.

        ``since_id`` returns posts newer than that id. With ``option`` set,
        the id is used as a ``before_id`` or ``after_id`` anchor instead.
        """
        self._ensure_open()
        _check_offset(since_id, "since_id")
        _check_offset(offset)
        _check_limit(limit)
        token = self._require_token("get_dashboard_posts")

        parameters = MethodParameterSet()
        parameters.add("type", type, PostType.ALL)
        if option is DashboardOption.BEFORE:
            parameters.add("before_id", since_id, 0)
        elif option is DashboardOption.AFTER:
            parameters.add("after_id", since_id, 0)
        else:
            parameters.add("since_id", since_id, 0)
        parameters.add("offset", offset, 0)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)
        parameters.add("reblog_info", include_reblog_info, False)
        parameters.add("notes_info", include_notes_info, False)

        return await self.call_api_method(
            UserMethod("dashboard", token, HTTP_GET, parameters),
            List[AnyPost],
            member="posts",
        )

    async def get_filtered_content(self) -> List[str]:
        """The user's content filter strings."""
        self._ensure_open()
        token = self._require_token("get_filtered_content")

        result: FilteredContentResponse = await self.call_api_method(
            UserMethod("filtered_content", token, HTTP_GET),
            FilteredContentResponse,
        )
        return result.filtered_content

    async def set_filtered_content(self, filtered_content: Union[str, Iterable[str]]) -> None:
        """
        Add content filter strings.

        A single string is rejected when it already exists. A collection is
        sent in one call. Every item must be non-blank and at most 250
        characters, and the user can hold at most 200 filters in total;
        malformed input is rejected before any request is made. Items are
        stripped of surrounding whitespace before they are sent.
        """
        self._ensure_open()
        if filtered_content is None:
            raise ArgumentError("filtered_content cannot be None.", argument="filtered_content")

        if isinstance(filtered_content, str):
            await self._add_filtered_content(_check_filtered_content(filtered_content))
            return

        items = list(filtered_content)
        if not items:
            raise ArgumentError("filtered_content cannot be empty.", argument="filtered_content")
        for index, item in enumerate(items):
            _check_filtered_content(item, f"filtered_content[{index}]")
        if len(items) > MAX_FILTERED_CONTENT_COUNT:
            raise ArgumentError(
                f"Each user can have a maximum of {MAX_FILTERED_CONTENT_COUNT} filtered strings.",
                argument="filtered_content",
            )
        self._require_token("set_filtered_content")

        current = await self.get_filtered_content()
        if len(current) + len(items) > MAX_FILTERED_CONTENT_COUNT:
            raise ArgumentError(
                f"Each user can have a maximum of {MAX_FILTERED_CONTENT_COUNT} filtered strings. "
                f"You have only {MAX_FILTERED_CONTENT_COUNT - len(current)} free.",
                argument="filtered_content",
            )

        parameters = MethodParameterSet()
        parameters.add("filtered_content", [item.strip() for item in items])

        await self._call_no_result(
            UserMethod("filtered_content", self._token, HTTP_POST, parameters)
        )

    async def _add_filtered_content(self, item: str) -> None:
        self._require_token("set_filtered_content")

        current = await self.get_filtered_content()
        if len(current) + 1 > MAX_FILTERED_CONTENT_COUNT:
            raise ArgumentError(
                f"The maximum of {MAX_FILTERED_CONTENT_COUNT} filtered strings is reached.",
                argument="filtered_content",
            )

        item = item.strip()
        if item in current:
            raise ArgumentError(f"{item} already exists", argument="filtered_content")

        parameters = MethodParameterSet()
        parameters.add("filtered_content", item)

        await self._call_no_result(
            UserMethod("filtered_content", self._token, HTTP_POST, parameters)
        )

    async def delete_filtered_content(self, filtered_content: str) -> None:
        self._ensure_open()
        item = _check_filtered_content(filtered_content)
        token = self._require_token("delete_filtered_content")

        parameters = MethodParameterSet()
        parameters.add("filtered_content", item)

        await self._call_no_result(
            UserMethod("filtered_content", token, HTTP_DELETE, parameters)
        )

    # Tagged posts

    async def get_tagged_posts(
        self,
        tag: str,
        before: Optional[datetime] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        filter: PostFilter = PostFilter.HTML,
    ) -> List[BasePost]:
        """Public posts with a tag, across all blogs."""
        self._ensure_open()
        _check_text(tag, "tag")
        _check_limit(limit)

        parameters = self._public_parameters()
        parameters.add("tag", tag)
        parameters.add("before", before)
        parameters.add("limit", limit, DEFAULT_PAGE_SIZE)
        parameters.add("filter", filter, PostFilter.HTML)

        return await self.call_api_method(
            ApiMethod(TAGGED_URL, self._token, HTTP_GET, parameters),
            convert=decode_posts,
        )

    def __repr__(self) -> str:
        return (
            f"TumblrClient(authenticated={self._token is not None}, "
            f"closed={self._closed})"
        )

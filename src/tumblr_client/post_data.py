"""
Encoder for post creation and editing parameters.

``PostData`` instances are built through one factory per post kind and
rendered into a ``MethodParameterSet`` by ``to_parameter_set``. Media is
referenced by URL; binary uploads are not supported.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from .enums import PostCreationState, PostFormat, PostType
from .exceptions import ArgumentError
from .parameters import MethodParameterSet


def _require(value: Optional[str], argument: str) -> str:
    if value is None or not value.strip():
        raise ArgumentError(f"{argument} cannot be empty.", argument=argument)
    return value


def format_publish_on(value: datetime) -> str:
    """RFC 1123 date in GMT, as expected by ``publish_on``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


@dataclass(frozen=True)
class PostData:
    """
    Parameters for creating or editing a post.

    Attributes:
        post_type: Kind of post to create
        fields: Kind-specific wire fields, in the order they are sent
        tags: Tags to attach
        state: Published, draft, queue or private
        format: Body format (html or markdown)
        slug: Short text used in the post URL
        date: Publish date shown on the post
        publish_on: Scheduled publish time for queued posts
        tweet: Custom tweet text, or "off"
    """

    post_type: PostType
    fields: Tuple[Tuple[str, Any], ...] = ()
    tags: Tuple[str, ...] = ()
    state: PostCreationState = PostCreationState.PUBLISHED
    format: PostFormat = PostFormat.HTML
    slug: Optional[str] = None
    date: Optional[datetime] = None
    publish_on: Optional[datetime] = None
    tweet: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.post_type is PostType.ALL:
            raise ArgumentError("Post type must be a concrete kind.", argument="post_type")
        if self.publish_on is not None and self.state is not PostCreationState.QUEUE:
            raise ArgumentError(
                "publish_on requires the queue state.",
                argument="publish_on",
            )

    @classmethod
    def _create(cls, post_type: PostType, fields: Iterable[Tuple[str, Any]], **options) -> "PostData":
        tags = options.pop("tags", None) or ()
        return cls(post_type=post_type, fields=tuple(fields), tags=tuple(tags), **options)

    @classmethod
    def create_text(cls, body: str, title: Optional[str] = None, **options) -> "PostData":
        return cls._create(
            PostType.TEXT,
            [("title", title), ("body", _require(body, "body"))],
            **options,
        )

    @classmethod
    def create_photo(
        cls,
        source: str,
        caption: Optional[str] = None,
        link: Optional[str] = None,
        **options,
    ) -> "PostData":
        """Photo post from an image URL."""
        return cls._create(
            PostType.PHOTO,
            [("caption", caption), ("link", link), ("source", _require(source, "source"))],
            **options,
        )

    @classmethod
    def create_quote(cls, quote: str, source: Optional[str] = None, **options) -> "PostData":
        return cls._create(
            PostType.QUOTE,
            [("quote", _require(quote, "quote")), ("source", source)],
            **options,
        )

    @classmethod
    def create_link(
        cls,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: Optional[str] = None,
        excerpt: Optional[str] = None,
        author: Optional[str] = None,
        **options,
    ) -> "PostData":
        return cls._create(
            PostType.LINK,
            [
                ("title", title),
                ("url", _require(url, "url")),
                ("description", description),
                ("thumbnail", thumbnail),
                ("excerpt", excerpt),
                ("author", author),
            ],
            **options,
        )

    @classmethod
    def create_chat(cls, conversation: str, title: Optional[str] = None, **options) -> "PostData":
        return cls._create(
            PostType.CHAT,
            [("title", title), ("conversation", _require(conversation, "conversation"))],
            **options,
        )

    @classmethod
    def create_audio(cls, external_url: str, caption: Optional[str] = None, **options) -> "PostData":
        return cls._create(
            PostType.AUDIO,
            [("caption", caption), ("external_url", _require(external_url, "external_url"))],
            **options,
        )

    @classmethod
    def create_video(cls, embed: str, caption: Optional[str] = None, **options) -> "PostData":
        """Video post from embed code or a video page URL."""
        return cls._create(
            PostType.VIDEO,
            [("caption", caption), ("embed", _require(embed, "embed"))],
            **options,
        )

    def with_state(self, state: PostCreationState, publish_on: Optional[datetime] = None) -> "PostData":
        return replace(self, state=state, publish_on=publish_on)

    def to_parameter_set(self) -> MethodParameterSet:
        """
        Render the post as request parameters.

        Defaults (published state, html format) are left out; tags are sent
        as one comma-separated value.
        """
        parameters = MethodParameterSet()
        parameters.add("type", self.post_type)
        parameters.add("state", self.state, PostCreationState.PUBLISHED)
        parameters.add("format", self.format, PostFormat.HTML)

        if self.tags:
            parameters.add("tags", ",".join(tag.strip() for tag in self.tags if tag.strip()), "")

        parameters.add("slug", self.slug, "")
        parameters.add("tweet", self.tweet, "")

        if self.date is not None:
            parameters.add("date", format_publish_on(self.date))
        if self.publish_on is not None:
            parameters.add("publish_on", format_publish_on(self.publish_on))

        for name, value in self.fields:
            parameters.add(name, value)

        for name, value in self.extra.items():
            parameters.add(name, value)

        return parameters

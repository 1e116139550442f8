"""
Post variants and their discriminated decoding.

A post payload is dispatched on its ``type`` member before anything else is
validated: each known tag selects exactly one variant model, and any other
tag falls back to ``UnknownPost`` so posts of kinds added by the platform
later are still returned with their shared fields.

Example:
    ```python
    post = decode_post({"type": "photo", "id": 5, "photos": [...]})
    if isinstance(post, PhotoPost):
        print(post.photos[0].original_size.url)
    ```
"""

import logging
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError

from .converters import Timestamp, TumblrBool, TumblrLong
from .enums import POST_TYPE_WIRE, PostFormatField, PostStateField, PostType
from .exceptions import DecodingError
from .models import (
    BaseNote,
    BlogBase,
    BlogInfo,
    ChatDialogue,
    Links,
    PhotoInfo,
    Trail,
    TumblrModel,
    VideoPlayer,
)

logger = logging.getLogger(__name__)

UNKNOWN_TAG = "unknown"


class BasePost(TumblrModel):
    """Fields shared by every kind of post."""

    id: TumblrLong = Field(..., description="Unique post identifier")
    id_string: Optional[str] = None
    type: str = Field(..., description="Wire tag of the post kind")
    blog_name: Optional[str] = None
    blog: Optional[BlogBase] = None
    post_url: Optional[str] = None
    short_url: Optional[str] = None
    slug: Optional[str] = None
    timestamp: Timestamp = None
    date: Optional[str] = None
    format: PostFormatField = None
    state: PostStateField = None
    reblog_key: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    summary: Optional[str] = None
    note_count: TumblrLong = 0
    liked: TumblrBool = False
    followed: TumblrBool = False
    can_like: TumblrBool = False
    can_reblog: TumblrBool = False
    can_reply: TumblrBool = False
    source_url: Optional[str] = None
    source_title: Optional[str] = None
    reblogged_from_id: Optional[TumblrLong] = None
    reblogged_from_url: Optional[str] = None
    reblogged_from_name: Optional[str] = None
    reblogged_from_title: Optional[str] = None
    reblogged_root_id: Optional[TumblrLong] = None
    reblogged_root_url: Optional[str] = None
    reblogged_root_name: Optional[str] = None
    reblogged_root_title: Optional[str] = None
    trail: List[Trail] = Field(default_factory=list)
    notes: List[BaseNote] = Field(default_factory=list)

    @property
    def post_type(self) -> Optional[PostType]:
        """The post kind as an enum, or None for kinds this client does not know."""
        return POST_TYPE_WIRE.decode_or_none(self.type)


class TextPost(BasePost):
    type: Literal["text"] = "text"
    title: Optional[str] = None
    body: Optional[str] = None


class PhotoPost(BasePost):
    type: Literal["photo"] = "photo"
    caption: Optional[str] = None
    photos: List[PhotoInfo] = Field(default_factory=list)
    image_permalink: Optional[str] = None
    link_url: Optional[str] = None
    width: Optional[TumblrLong] = None
    height: Optional[TumblrLong] = None


class QuotePost(BasePost):
    type: Literal["quote"] = "quote"
    text: Optional[str] = None
    source: Optional[str] = None


class LinkPost(BasePost):
    type: Literal["link"] = "link"
    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    excerpt: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None
    link_image: Optional[str] = None


class AnswerPost(BasePost):
    type: Literal["answer"] = "answer"
    asking_name: Optional[str] = None
    asking_url: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None


class VideoPost(BasePost):
    type: Literal["video"] = "video"
    caption: Optional[str] = None
    player: List[VideoPlayer] = Field(default_factory=list)
    video_url: Optional[str] = None
    video_type: Optional[str] = None
    permalink_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    thumbnail_width: Optional[TumblrLong] = None
    thumbnail_height: Optional[TumblrLong] = None


class AudioPost(BasePost):
    type: Literal["audio"] = "audio"
    caption: Optional[str] = None
    player: Optional[str] = None
    plays: TumblrLong = 0
    album_art: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    track_name: Optional[str] = None
    track_number: Optional[TumblrLong] = None
    year: Optional[TumblrLong] = None
    audio_url: Optional[str] = None
    audio_source_url: Optional[str] = None
    audio_type: Optional[str] = None


class ChatPost(BasePost):
    type: Literal["chat"] = "chat"
    title: Optional[str] = None
    body: Optional[str] = None
    dialogue: List[ChatDialogue] = Field(default_factory=list)


class UnknownPost(BasePost):
    """
    A post whose ``type`` this client does not recognize.

    Shared fields are decoded as usual; every other member of the payload is
    kept as an extra attribute (see ``model_extra``).
    """

    model_config = ConfigDict(extra="allow")


POST_VARIANTS = {
    "text": TextPost,
    "photo": PhotoPost,
    "quote": QuotePost,
    "link": LinkPost,
    "answer": AnswerPost,
    "video": VideoPost,
    "audio": AudioPost,
    "chat": ChatPost,
}


def post_tag(value: Any) -> Optional[str]:
    """
    Discriminator for the post union.

    Returns the variant tag for a known ``type``, ``"unknown"`` for any other
    value and None when the input is not a post object at all, which makes
    validation fail.
    """
    if isinstance(value, dict):
        raw = value.get("type")
    elif isinstance(value, BasePost):
        raw = value.type
    else:
        return None

    if isinstance(raw, str) and raw in POST_VARIANTS:
        return raw
    return UNKNOWN_TAG


AnyPost = Annotated[
    Union[
        Annotated[TextPost, Tag("text")],
        Annotated[PhotoPost, Tag("photo")],
        Annotated[QuotePost, Tag("quote")],
        Annotated[LinkPost, Tag("link")],
        Annotated[AnswerPost, Tag("answer")],
        Annotated[VideoPost, Tag("video")],
        Annotated[AudioPost, Tag("audio")],
        Annotated[ChatPost, Tag("chat")],
        Annotated[UnknownPost, Tag(UNKNOWN_TAG)],
    ],
    Discriminator(post_tag),
]

_POST_ADAPTER: TypeAdapter = TypeAdapter(AnyPost)
_POST_LIST_ADAPTER: TypeAdapter = TypeAdapter(List[AnyPost])


def decode_post(data: Any) -> BasePost:
    """
    Decode a single post payload into its variant.

    Raises:
        DecodingError: If the payload is not a JSON object or violates the
            variant's field contract
    """
    if not isinstance(data, dict):
        raise DecodingError("Post payload must be an object", details=type(data).__name__)

    try:
        post = _POST_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise DecodingError("Invalid post payload", details=str(e))

    if isinstance(post, UnknownPost):
        logger.debug(f"Decoded post {post.id} of unknown type {post.type!r}")
    return post


def decode_posts(data: Any) -> List[BasePost]:
    """Decode a JSON array of posts."""
    if not isinstance(data, list):
        raise DecodingError("Post list payload must be an array", details=type(data).__name__)

    try:
        return _POST_LIST_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise DecodingError("Invalid post list payload", details=str(e))


class Posts(TumblrModel):
    """A page of posts, with the owning blog for blog-scoped listings."""

    blog: Optional[BlogInfo] = None
    posts: List[AnyPost] = Field(default_factory=list)
    total_posts: TumblrLong = 0
    links: Optional[Links] = Field(None, alias="_links")


class Likes(TumblrModel):
    """A page of liked posts."""

    liked_posts: List[AnyPost] = Field(default_factory=list)
    liked_count: TumblrLong = 0
    links: Optional[Links] = Field(None, alias="_links")

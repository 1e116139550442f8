"""
Typed response models for Tumblr API payloads.

Every model is a frozen pydantic model materialized once per response.
Unknown keys are ignored and wire encodings are normalized by the converter
types declared on each field. Post variants live in ``posts.py``.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .converters import Timestamp, TumblrBool, TumblrLong
from .enums import (
    AvatarShapeField,
    NotificationTypeField,
    NoteTypeField,
    NotificationsTypes,
    PostFormatField,
    PostTypeField,
)


class TumblrModel(BaseModel):
    """Base for all response models."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Theme(TumblrModel):
    """Visual theme of a blog."""

    avatar_shape: AvatarShapeField = None
    background_color: Optional[str] = None
    body_font: Optional[str] = None
    header_bounds: Optional[str] = None
    header_image: Optional[str] = None
    header_image_focused: Optional[str] = None
    header_image_scaled: Optional[str] = None
    header_stretch: TumblrBool = False
    link_color: Optional[str] = None
    show_avatar: TumblrBool = False
    show_description: TumblrBool = False
    show_header_image: TumblrBool = False
    show_title: TumblrBool = False
    title_color: Optional[str] = None
    title_font: Optional[str] = None
    title_font_weight: Optional[str] = None


class BlogBase(TumblrModel):
    """Minimal blog description shared by most blog listings."""

    name: str = Field(..., description="Short blog name")
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    uuid: Optional[str] = None
    updated: Timestamp = Field(None, description="Time of the most recent post")


class BlogInfo(BlogBase):
    """Full blog information returned by ``/blog/{blog}/info``."""

    posts: TumblrLong = Field(0, description="Number of posts on the blog")
    likes: TumblrLong = Field(0, description="Number of likes, when shared")
    is_nsfw: TumblrBool = False
    is_adult: TumblrBool = False
    ask: TumblrBool = False
    ask_anon: TumblrBool = False
    ask_page_title: Optional[str] = None
    can_submit: TumblrBool = False
    can_send_fan_mail: TumblrBool = False
    followed: TumblrBool = False
    share_likes: TumblrBool = False
    submission_page_title: Optional[str] = None
    theme: Optional[Theme] = None


class UserBlogInfo(BlogInfo):
    """A blog owned by the authenticated user."""

    primary: TumblrBool = False
    admin: TumblrBool = False
    followers: TumblrLong = 0
    messages: TumblrLong = 0
    queue: TumblrLong = 0
    drafts: TumblrLong = 0
    facebook: TumblrBool = False
    tweet: TumblrBool = False
    type: Optional[str] = None


class UserInfo(TumblrModel):
    """Account information of the authenticated user."""

    name: str
    likes: TumblrLong = 0
    following: TumblrLong = 0
    default_post_format: PostFormatField = None
    blogs: List[UserBlogInfo] = Field(default_factory=list)


class Follower(TumblrModel):
    name: str
    url: Optional[str] = None
    updated: Timestamp = None
    following: TumblrBool = False


class Followers(TumblrModel):
    """One page of a blog's followers."""

    total_users: TumblrLong = 0
    users: List[Follower] = Field(default_factory=list)


class Following(TumblrModel):
    """One page of the blogs the user follows."""

    total_blogs: TumblrLong = 0
    blogs: List[BlogBase] = Field(default_factory=list)


class FollowedBy(TumblrModel):
    followed_by: TumblrBool = False


class PostCreationInfo(TumblrModel):
    """Identifier of a post created, edited or reblogged."""

    post_id: TumblrLong = Field(..., alias="id")


class TrailBlog(TumblrModel):
    name: str
    active: TumblrBool = False
    theme: Optional[Theme] = None
    share_likes: TumblrBool = False
    share_following: TumblrBool = False
    can_be_followed: TumblrBool = False


class TrailPost(TumblrModel):
    id: TumblrLong = 0


class Trail(TumblrModel):
    """One entry in a post's reblog trail."""

    blog: Optional[TrailBlog] = None
    post: Optional[TrailPost] = None
    content: Optional[str] = None
    content_raw: Optional[str] = None
    is_root_item: TumblrBool = False
    is_current_item: TumblrBool = False


class BaseNote(TumblrModel):
    """A note (like, reblog, reply) attached to a post."""

    type: NoteTypeField = None
    timestamp: Timestamp = None
    blog_name: Optional[str] = None
    blog_uuid: Optional[str] = None
    blog_url: Optional[str] = None
    followed: TumblrBool = False
    avatar_shape: AvatarShapeField = None
    post_id: Optional[str] = None
    reblog_parent_blog_name: Optional[str] = None
    added_text: Optional[str] = None
    reply_text: Optional[str] = None


class PhotoSize(TumblrModel):
    width: int = 0
    height: int = 0
    url: str


class Exif(TumblrModel):
    """Camera metadata attached to a photo."""

    camera: Optional[str] = Field(None, alias="Camera")
    iso: Optional[TumblrLong] = Field(None, alias="ISO")
    aperture: Optional[str] = Field(None, alias="Aperture")
    exposure: Optional[str] = Field(None, alias="Exposure")
    focal_length: Optional[str] = Field(None, alias="FocalLength")


class PhotoInfo(TumblrModel):
    caption: Optional[str] = None
    original_size: Optional[PhotoSize] = None
    alt_sizes: List[PhotoSize] = Field(default_factory=list)
    exif: Optional[Exif] = None


class VideoPlayer(TumblrModel):
    width: Optional[TumblrLong] = None
    embed_code: Optional[str] = None


class ChatDialogue(TumblrModel):
    label: Optional[str] = None
    name: Optional[str] = None
    phrase: Optional[str] = None


class QueryParams(TumblrModel):
    """Query parameters of a pagination link."""

    offset: TumblrLong = 0
    limit: TumblrLong = 0
    before: Timestamp = None


class Link(TumblrModel):
    type: Optional[str] = None
    method: Optional[str] = None
    href: Optional[str] = None
    query_params: Optional[QueryParams] = None


class Links(TumblrModel):
    """``_links`` member of paged responses."""

    previous: Optional[Link] = None
    next: Optional[Link] = None
    terms_of_service: Optional[Link] = None


class Notification(TumblrModel):
    """
    One entry of a blog's activity feed.

    Only a subset of the fields is populated for any given ``type``; absent
    fields keep their defaults. When the platform sends a type token this
    client does not know, ``type`` is the empty flag and ``type_name`` keeps
    the raw token.
    """

    type: NotificationTypeField = NotificationsTypes(0)
    type_name: Optional[str] = None
    timestamp: Timestamp = None
    before: Timestamp = None
    target_post_id: TumblrLong = 0
    target_post_summary: Optional[str] = None
    target_post_type: PostTypeField = None
    target_tumblelog_name: Optional[str] = None
    target_tumblelog_uuid: Optional[str] = None
    target_root_post_id: Optional[TumblrLong] = None
    from_tumblelog_name: Optional[str] = None
    from_tumblelog_uuid: Optional[str] = None
    from_tumblelog_is_adult: TumblrBool = False
    followed: TumblrBool = False
    private_channel: TumblrBool = False
    post_type: PostTypeField = None
    post_id: TumblrLong = 0
    post_tags: List[str] = Field(default_factory=list)
    media_url: Optional[str] = None
    media_url_large: Optional[str] = None
    reblog_key: Optional[str] = None
    added_text: Optional[str] = None
    reply_text: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _keep_raw_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type_name" not in data:
            raw = data.get("type")
            if isinstance(raw, str):
                data = {**data, "type_name": raw}
        return data

    @property
    def is_known_type(self) -> bool:
        return bool(self.type)


class NotificationsResponse(TumblrModel):
    notifications: List[Notification] = Field(default_factory=list)
    links: Optional[Links] = Field(None, alias="_links")


class BlocksResponse(TumblrModel):
    blocked_tumblelogs: List[BlogBase] = Field(default_factory=list)
    links: Optional[Links] = Field(None, alias="_links")


class UserLimit(TumblrModel):
    """Remaining allowance for one kind of action."""

    description: Optional[str] = None
    limit: TumblrLong = 0
    remaining: TumblrLong = 0
    reset_at: Timestamp = None


class UserLimits(TumblrModel):
    """Daily limits of the authenticated user."""

    blogs: Optional[UserLimit] = None
    follows: Optional[UserLimit] = None
    likes: Optional[UserLimit] = None
    photos: Optional[UserLimit] = None
    posts: Optional[UserLimit] = None
    video_seconds: Optional[UserLimit] = Field(None, alias="video_Seconds")
    videos: Optional[UserLimit] = None


class FilteredContentResponse(TumblrModel):
    filtered_content: List[str] = Field(default_factory=list)


"""
Enumerations used on the wire, each paired with an explicit token table.

The tables below are the single source of truth for how an enum member is
spelled in requests and responses. They are built once at import and never
mutated.
"""

from enum import Enum, IntFlag
from typing import Annotated, Optional

from pydantic import PlainSerializer, PlainValidator

from .converters import EnumStringConverter


class PostType(Enum):
    """Kinds of posts, plus ``ALL`` for unfiltered listings."""

    ALL = 0
    TEXT = 1
    QUOTE = 2
    LINK = 3
    ANSWER = 4
    VIDEO = 5
    AUDIO = 6
    PHOTO = 7
    CHAT = 8


class PostFilter(Enum):
    """Body format requested for post listings."""

    HTML = 0
    TEXT = 1
    RAW = 2


class PostFormat(Enum):
    """Format of a post body when creating or editing."""

    HTML = 0
    MARKDOWN = 1


class PostCreationState(Enum):
    """State a created, edited or reblogged post ends up in."""

    PUBLISHED = 0
    DRAFT = 1
    QUEUE = 2
    PRIVATE = 3


class NoteType(Enum):
    LIKE = 0
    REBLOG = 1
    POSTED = 2
    ANSWER = 3
    REPLY = 4


class AvatarShape(Enum):
    SQUARE = 0
    CIRCLE = 1


class DashboardOption(Enum):
    """Direction of an id-anchored dashboard query."""

    BEFORE = 0
    AFTER = 1


class NotificationsTypes(IntFlag):
    """Kinds of activity shown in a blog's notification feed."""

    LIKE = 1 << 0
    REPLY = 1 << 1
    FOLLOWER = 1 << 2
    MENTION_IN_REPLY = 1 << 3
    MENTION_IN_POST = 1 << 4
    REBLOG_NAKED = 1 << 5
    REBLOG_WITH_CONTENT = 1 << 6
    ASK = 1 << 7
    ANSWERED_ASK = 1 << 8
    NEW_GROUP_BLOG_MEMBER = 1 << 9
    POST_ATTRIBUTION = 1 << 10
    POST_FLAGGED = 1 << 11
    POST_APPEAL_ACCEPTED = 1 << 12
    POST_APPEAL_REJECTED = 1 << 13
    WHAT_YOU_MISSED = 1 << 14
    CONVERSATIONAL_NOTE = 1 << 15
    MILESTONE_BIRTHDAY = 1 << 16

    ALL = (1 << 17) - 1


POST_TYPE_WIRE = EnumStringConverter(PostType, {
    PostType.ALL: "all",
    PostType.TEXT: "text",
    PostType.QUOTE: "quote",
    PostType.LINK: "link",
    PostType.ANSWER: "answer",
    PostType.VIDEO: "video",
    PostType.AUDIO: "audio",
    PostType.PHOTO: "photo",
    PostType.CHAT: "chat",
})

POST_FILTER_WIRE = EnumStringConverter(PostFilter, {
    PostFilter.HTML: "html",
    PostFilter.TEXT: "text",
    PostFilter.RAW: "raw",
})

POST_FORMAT_WIRE = EnumStringConverter(PostFormat, {
    PostFormat.HTML: "html",
    PostFormat.MARKDOWN: "markdown",
})

POST_CREATION_STATE_WIRE = EnumStringConverter(PostCreationState, {
    PostCreationState.PUBLISHED: "published",
    PostCreationState.DRAFT: "draft",
    PostCreationState.QUEUE: "queue",
    PostCreationState.PRIVATE: "private",
})

NOTE_TYPE_WIRE = EnumStringConverter(NoteType, {
    NoteType.LIKE: "like",
    NoteType.REBLOG: "reblog",
    NoteType.POSTED: "posted",
    NoteType.ANSWER: "answer",
    NoteType.REPLY: "reply",
})

AVATAR_SHAPE_WIRE = EnumStringConverter(AvatarShape, {
    AvatarShape.SQUARE: "square",
    AvatarShape.CIRCLE: "circle",
})

NOTIFICATIONS_TYPES_WIRE = EnumStringConverter(NotificationsTypes, {
    NotificationsTypes.LIKE: "like",
    NotificationsTypes.REPLY: "reply",
    NotificationsTypes.FOLLOWER: "follower",
    NotificationsTypes.MENTION_IN_REPLY: "mention_in_reply",
    NotificationsTypes.MENTION_IN_POST: "mention_in_post",
    NotificationsTypes.REBLOG_NAKED: "reblog_naked",
    NotificationsTypes.REBLOG_WITH_CONTENT: "reblog_with_content",
    NotificationsTypes.ASK: "ask",
    NotificationsTypes.ANSWERED_ASK: "answered_ask",
    NotificationsTypes.NEW_GROUP_BLOG_MEMBER: "new_group_blog_member",
    NotificationsTypes.POST_ATTRIBUTION: "post_attribution",
    NotificationsTypes.POST_FLAGGED: "post_flagged",
    NotificationsTypes.POST_APPEAL_ACCEPTED: "post_appeal_accepted",
    NotificationsTypes.POST_APPEAL_REJECTED: "post_appeal_rejected",
    NotificationsTypes.WHAT_YOU_MISSED: "what_you_missed",
    NotificationsTypes.CONVERSATIONAL_NOTE: "conversational_note",
    NotificationsTypes.MILESTONE_BIRTHDAY: "milestone_birthday",
})

# Converters keyed by enum type, used when encoding request parameters
WIRE_CONVERTERS = {
    converter.enum_type: converter
    for converter in (
        POST_TYPE_WIRE,
        POST_FILTER_WIRE,
        POST_FORMAT_WIRE,
        POST_CREATION_STATE_WIRE,
        NOTE_TYPE_WIRE,
        AVATAR_SHAPE_WIRE,
        NOTIFICATIONS_TYPES_WIRE,
    )
}


def to_wire(value: Enum) -> str:
    """Return the wire token of an enum member that has a lookup table."""
    try:
        converter = WIRE_CONVERTERS[type(value)]
    except KeyError:
        raise ValueError(f"{type(value).__name__} has no wire token table")
    return converter.encode(value)


# Pydantic field types; unknown tokens decode to None (or the empty flag)
PostTypeField = Annotated[
    Optional[PostType],
    PlainValidator(POST_TYPE_WIRE.decode_or_none),
    PlainSerializer(POST_TYPE_WIRE.encode_or_none),
]

PostFormatField = Annotated[
    Optional[PostFormat],
    PlainValidator(POST_FORMAT_WIRE.decode_or_none),
    PlainSerializer(POST_FORMAT_WIRE.encode_or_none),
]

PostStateField = Annotated[
    Optional[PostCreationState],
    PlainValidator(POST_CREATION_STATE_WIRE.decode_or_none),
    PlainSerializer(POST_CREATION_STATE_WIRE.encode_or_none),
]

NoteTypeField = Annotated[
    Optional[NoteType],
    PlainValidator(NOTE_TYPE_WIRE.decode_or_none),
    PlainSerializer(NOTE_TYPE_WIRE.encode_or_none),
]

AvatarShapeField = Annotated[
    Optional[AvatarShape],
    PlainValidator(AVATAR_SHAPE_WIRE.decode_or_none),
    PlainSerializer(AVATAR_SHAPE_WIRE.encode_or_none),
]

NotificationTypeField = Annotated[
    NotificationsTypes,
    PlainValidator(NOTIFICATIONS_TYPES_WIRE.decode_flag_or_empty),
    PlainSerializer(NOTIFICATIONS_TYPES_WIRE.encode_flag_token),
]

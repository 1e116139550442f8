"""
Tests for post variants and their dispatch.
"""

from datetime import datetime, timezone

import pytest

from tumblr_client.enums import NoteType, PostCreationState, PostFormat, PostType
from tumblr_client.exceptions import DecodingError
from tumblr_client.posts import (
    AnswerPost,
    ChatPost,
    LinkPost,
    Likes,
    PhotoPost,
    Posts,
    TextPost,
    UnknownPost,
    decode_post,
    decode_posts,
    post_tag,
)


class TestDecodePost:
    """Test single post decoding."""

    def test_photo_post(self, sample_photo_post):
        """Photo payloads decode to PhotoPost with nested media."""
        post = decode_post(sample_photo_post)

        assert isinstance(post, PhotoPost)
        assert post.id == 123456789
        assert post.post_type is PostType.PHOTO
        assert post.note_count == 12
        assert post.liked is False
        assert post.state is PostCreationState.PUBLISHED
        assert post.format is PostFormat.HTML
        assert post.timestamp == datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert post.photos[0].original_size.width == 1280
        assert post.photos[0].alt_sizes[0].url.endswith("_500.jpg")
        assert post.photos[0].exif.iso == 200

    def test_trail_and_notes(self, sample_photo_post):
        """Trail entries and notes are decoded."""
        post = decode_post(sample_photo_post)

        assert post.trail[0].blog.name == "origin-blog"
        assert post.trail[0].blog.theme.header_stretch is True
        assert post.trail[0].post.id == 987
        assert post.trail[0].is_root_item is True
        assert [note.type for note in post.notes] == [NoteType.LIKE, NoteType.REBLOG]
        assert post.notes[0].timestamp == datetime.fromtimestamp(1609459300, tz=timezone.utc)

    def test_text_post(self, sample_text_post):
        """Text payloads decode to TextPost."""
        post = decode_post(sample_text_post)

        assert isinstance(post, TextPost)
        assert post.title == "Hello"
        assert post.body == "<p>World</p>"

    @pytest.mark.parametrize("tag, variant", [
        ("answer", AnswerPost),
        ("link", LinkPost),
        ("chat", ChatPost),
    ])
    def test_dispatch_by_type(self, tag, variant):
        """Each known tag selects exactly one variant."""
        assert type(decode_post({"id": 1, "type": tag})) is variant

    def test_unknown_type_falls_back(self):
        """Unrecognized tags decode to UnknownPost with shared fields."""
        post = decode_post({
            "id": 5,
            "type": "poll",
            "blog_name": "test-blog",
            "question": "Cats or dogs?",
        })

        assert isinstance(post, UnknownPost)
        assert post.id == 5
        assert post.type == "poll"
        assert post.post_type is None
        assert post.blog_name == "test-blog"
        assert post.model_extra["question"] == "Cats or dogs?"

    def test_missing_type_raises(self):
        """A post without a type cannot be decoded."""
        with pytest.raises(DecodingError):
            decode_post({"id": 5})

    def test_non_object_raises(self):
        """Post payloads must be JSON objects."""
        with pytest.raises(DecodingError):
            decode_post(["not", "a", "post"])
        with pytest.raises(DecodingError):
            decode_post("photo")

    def test_variant_contract_violation_raises(self):
        """Invalid field values become DecodingError."""
        with pytest.raises(DecodingError):
            decode_post({"id": "not-a-number", "type": "text"})

    @pytest.mark.parametrize("timestamp", [1e20, "1e400", 10**30, float("nan")])
    def test_out_of_range_timestamp_raises(self, timestamp):
        """Timestamps outside the datetime range become DecodingError."""
        with pytest.raises(DecodingError):
            decode_post({"type": "text", "id": 1, "timestamp": timestamp})


class TestDecodePosts:
    """Test post list decoding."""

    def test_mixed_list(self, sample_photo_post, sample_text_post):
        """Each element is dispatched on its own tag."""
        posts = decode_posts([sample_photo_post, sample_text_post, {"id": 9, "type": "poll"}])

        assert [type(post) for post in posts] == [PhotoPost, TextPost, UnknownPost]

    def test_non_array_raises(self):
        """The payload must be an array."""
        with pytest.raises(DecodingError):
            decode_posts({"posts": []})

    def test_non_object_element_raises(self):
        """Non-object elements fail decoding."""
        with pytest.raises(DecodingError):
            decode_posts([{"id": 1, "type": "text"}, 42])


class TestPostTag:
    """Test the union discriminator."""

    def test_tags(self):
        """Known, unknown and invalid inputs."""
        assert post_tag({"type": "video"}) == "video"
        assert post_tag({"type": "poll"}) == "unknown"
        assert post_tag({"type": 3}) == "unknown"
        assert post_tag(42) is None


class TestPageModels:
    """Test Posts and Likes pages."""

    def test_posts_page(self, sample_blog_info, sample_photo_post):
        """Blog listings carry the blog, the posts and the total."""
        page = Posts.model_validate({
            "blog": sample_blog_info,
            "posts": [sample_photo_post],
            "total_posts": "100",
        })

        assert page.blog.name == "test-blog"
        assert isinstance(page.posts[0], PhotoPost)
        assert page.total_posts == 100
        assert page.links is None

    def test_likes_page(self, sample_text_post):
        """Likes pages carry the liked posts and their count."""
        page = Likes.model_validate({
            "liked_posts": [sample_text_post, {"id": 2, "type": "poll"}],
            "liked_count": 2,
            "_links": {"next": {"href": "/v2/user/likes?before=1609459200"}},
        })

        assert isinstance(page.liked_posts[1], UnknownPost)
        assert page.liked_count == 2
        assert page.links.next.href.startswith("/v2/user/likes")

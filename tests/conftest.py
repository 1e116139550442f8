"""
Shared fixtures and configuration for pytest.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, List, Mapping, Optional
from urllib.parse import parse_qsl, urlsplit

import pytest

from tumblr_client.client import TumblrClient
from tumblr_client.http_client import HttpResponse
from tumblr_client.oauth import Token


def make_envelope(response: Any, status: int = 200, msg: str = "OK") -> HttpResponse:
    """Build an HTTP response carrying a Tumblr envelope."""
    body = json.dumps({"meta": {"status": status, "msg": msg}, "response": response})
    return HttpResponse(status=status, body=body.encode("utf-8"), reason=msg)


class RecordedRequest:
    """One request seen by ``RecordingTransport``."""

    def __init__(self, method: str, url: str, headers: Mapping[str, str], body: Optional[bytes]):
        self.method = method
        self.url = url
        self.headers = dict(headers)
        self.body = body

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> dict:
        return dict(parse_qsl(urlsplit(self.url).query, keep_blank_values=True))

    @property
    def form(self) -> dict:
        if not self.body:
            return {}
        return dict(parse_qsl(self.body.decode("utf-8"), keep_blank_values=True))


class RecordingTransport:
    """In-memory transport returning queued responses and recording requests."""

    def __init__(self, responses: Optional[List[HttpResponse]] = None):
        self.responses: List[HttpResponse] = list(responses or [])
        self.requests: List[RecordedRequest] = []
        self.closed = False

    def queue(self, response: HttpResponse) -> None:
        self.responses.append(response)

    async def send(self, method, url, headers, body=None) -> HttpResponse:
        self.requests.append(RecordedRequest(method, url, headers, body))
        if not self.responses:
            return make_envelope({})
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def envelope():
    """Factory building enveloped HTTP responses."""
    return make_envelope


@pytest.fixture
def transport():
    """Recording transport with an empty response queue."""
    return RecordingTransport()


@pytest.fixture
def token():
    """OAuth access token."""
    return Token("access-token", "access-secret")


@pytest.fixture
def client(transport, token):
    """Authenticated client on the recording transport."""
    return TumblrClient(
        "consumer-key",
        "consumer-secret",
        token=token,
        transport=transport,
        nonce_source=lambda: "fixed-nonce",
        clock=lambda: 1700000000,
    )


@pytest.fixture
def anonymous_client(transport):
    """Client without an OAuth token."""
    return TumblrClient("consumer-key", "consumer-secret", transport=transport)


@pytest.fixture
def sample_blog_info():
    """Sample blog information payload."""
    return {
        'name': 'test-blog',
        'title': 'Test Blog',
        'url': 'https://test-blog.tumblr.com/',
        'description': 'A test blog for unit tests',
        'updated': 1609459200,
        'posts': 100,
        'ask': True,
        'ask_anon': 'false',
        'is_nsfw': False,
        'share_likes': 'true',
        'likes': '',
    }


@pytest.fixture
def sample_photo_post():
    """Sample photo post payload."""
    return {
        'id': 123456789,
        'id_string': '123456789',
        'blog_name': 'test-blog',
        'post_url': 'https://test-blog.tumblr.com/post/123456789',
        'type': 'photo',
        'timestamp': 1609459200,
        'date': '2021-01-01 00:00:00 GMT',
        'format': 'html',
        'reblog_key': 'abc123',
        'tags': ['test', 'photo'],
        'state': 'published',
        'note_count': '12',
        'liked': 'false',
        'caption': '<p>Test caption</p>',
        'photos': [
            {
                'caption': 'Test image 1',
                'original_size': {
                    'url': 'https://64.media.tumblr.com/abc123/tumblr_test1_1280.jpg',
                    'width': 1280,
                    'height': 720,
                },
                'alt_sizes': [
                    {
                        'url': 'https://64.media.tumblr.com/abc123/tumblr_test1_500.jpg',
                        'width': 500,
                        'height': 281,
                    }
                ],
                'exif': {'Camera': 'X100V', 'ISO': 200, 'Aperture': 'f/2'},
            }
        ],
        'trail': [
            {
                'blog': {
                    'name': 'origin-blog',
                    'active': True,
                    'theme': {'avatar_shape': 'circle', 'header_stretch': 'true'},
                },
                'post': {'id': '987'},
                'content': '<p>original</p>',
                'is_root_item': True,
            }
        ],
        'notes': [
            {'type': 'like', 'timestamp': '1609459300', 'blog_name': 'fan'},
            {'type': 'reblog', 'timestamp': 1609459400, 'blog_name': 'other'},
        ],
    }


@pytest.fixture
def sample_text_post():
    """Sample text post payload."""
    return {
        'id': 42,
        'blog_name': 'test-blog',
        'type': 'text',
        'timestamp': 1609459200,
        'title': 'Hello',
        'body': '<p>World</p>',
        'tags': [],
    }

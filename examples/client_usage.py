"""
Example usage of the Tumblr client.

This script demonstrates loading credentials, reading public blog data and
walking paged listings. Set TUMBLR_CONSUMER_KEY and TUMBLR_CONSUMER_SECRET
(and optionally TUMBLR_OAUTH_TOKEN / TUMBLR_OAUTH_TOKEN_SECRET) in the
environment or a .env file before running it.
"""

import asyncio

from tumblr_client import (
    ApiError,
    ConfigurationError,
    PostCreationState,
    PostData,
    PostType,
    TumblrClient,
    load_config,
    offset_paginate,
    paginate,
    setup_logging,
)
from tumblr_client.pagination import notification_cursor


def banner(title: str) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)


async def example_1_blog_info(client: TumblrClient, blog_name: str):
    """Example 1: Read public information about a blog."""
    banner("Example 1: Blog Info")

    info = await client.get_blog_info(blog_name)
    print(f"Title: {info.title}")
    print(f"Posts: {info.posts}")
    print(f"Updated: {info.updated}")
    print()


async def example_2_photo_posts(client: TumblrClient, blog_name: str):
    """Example 2: Walk the photo posts of a blog, three pages at most."""
    banner("Example 2: Photo Posts")

    async def fetch(offset):
        page = await client.get_posts(blog_name, offset=offset, type=PostType.PHOTO)
        return page.posts

    async for post in offset_paginate(fetch, max_pages=3):
        sizes = post.photos[0].alt_sizes if post.photos else []
        print(f"{post.id}: {len(sizes)} size(s), {post.note_count} note(s)")
    print()


async def example_3_notifications(client: TumblrClient, blog_name: str):
    """Example 3: Read the activity feed of one of the user's blogs."""
    banner("Example 3: Notifications")

    async def fetch(before):
        return await client.get_notifications(blog_name, before=before)

    async for notification in paginate(fetch, notification_cursor, max_pages=2):
        print(f"{notification.timestamp}: {notification.type_name} from {notification.from_tumblelog_name}")
    print()


async def example_4_draft(client: TumblrClient, blog_name: str):
    """Example 4: Save a text post as a draft."""
    banner("Example 4: Draft Post")

    post = PostData.create_text("Written with tumblr-client.", title="Hello", tags=["api"])
    created = await client.create_post(blog_name, post.with_state(PostCreationState.DRAFT))
    print(f"Created draft {created.post_id}")
    print()


async def main():
    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return

    setup_logging(verbose=config.verbose, log_file=config.log_file)

    async with TumblrClient.from_config(config) as client:
        try:
            await example_1_blog_info(client, "staff")
            await example_2_photo_posts(client, "staff")

            if client.token is not None:
                user = await client.get_user_info()
                own_blog = user.blogs[0].name
                await example_3_notifications(client, own_blog)
                await example_4_draft(client, own_blog)
        except ApiError as e:
            print(f"API error: {e}")


if __name__ == "__main__":
    asyncio.run(main())

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from pinboard_search.adapters.pinboard_http import PinboardTransport
from pinboard_search.config import Settings
from pinboard_search.core.normalize import to_posts, to_tag_vocabulary
from pinboard_search.core.posts import sort_posts
from pinboard_search.core.render import render_posts, render_tag_counts
from pinboard_search.core.tags import tags_like
from pinboard_search.types import Post, TagCount


def get_tags(transport: PinboardTransport) -> dict[str, int]:
    return to_tag_vocabulary(transport.fetch_tags())


def get_posts(transport: PinboardTransport, tags: Sequence[str]) -> list[Post]:
    return to_posts(transport.fetch_posts(tags))


def search_tags(
    transport: PinboardTransport, queries: Sequence[str], out: TextIO
) -> list[TagCount]:
    tag_counts = tags_like(get_tags(transport), queries)
    render_tag_counts(tag_counts, out)
    return tag_counts


def search_posts(
    transport: PinboardTransport,
    tags: Sequence[str],
    out: TextIO,
    interactive: bool | None = None,
) -> list[Post]:
    # The API ANDs the tag filters; results are not re-filtered here.
    posts = sort_posts(get_posts(transport, tags))
    render_posts(posts, out, interactive=interactive)
    return posts


def run(
    settings: Settings,
    transport: PinboardTransport | None = None,
    out: TextIO | None = None,
) -> int:
    """Run one query and render it; returns the number of rendered items."""
    out = out or sys.stdout
    if settings.credentials is None:
        logging.debug("No Pinboard credentials configured.")
    transport = transport or PinboardTransport(
        base_url=settings.base_url,
        credentials=settings.credentials,
        timeout=settings.timeout,
    )
    if settings.tag_search:
        items: Sequence[object] = search_tags(transport, settings.tags, out)
    else:
        items = search_posts(transport, settings.tags, out)
    logging.debug("Rendered %d items", len(items))
    return len(items)

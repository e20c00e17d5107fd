from pinboard_search.adapters.pinboard_http import PinboardTransport
from pinboard_search.app import run, search_posts, search_tags
from pinboard_search.cli import main, parse_args
from pinboard_search.config import load_env, load_settings
from pinboard_search.core.normalize import to_posts, to_tag_vocabulary
from pinboard_search.core.posts import sort_posts
from pinboard_search.core.render import (
    format_timestamp,
    is_interactive_output,
    render,
    render_posts,
    render_tag_counts,
)
from pinboard_search.core.tags import tags_like

__all__ = [
    "PinboardTransport",
    "format_timestamp",
    "is_interactive_output",
    "load_env",
    "load_settings",
    "main",
    "parse_args",
    "render",
    "render_posts",
    "render_tag_counts",
    "run",
    "search_posts",
    "search_tags",
    "sort_posts",
    "tags_like",
    "to_posts",
    "to_tag_vocabulary",
]


if __name__ == "__main__":
    raise SystemExit(main())

from collections.abc import Iterable

from pinboard_search.types import Post


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    return sorted(posts, key=lambda post: post.saved_at)

from collections.abc import Sequence
from datetime import datetime, tzinfo
from typing import TextIO

from pinboard_search.types import Post, TagCount

BOLD_RED = (1, 31)
UNDERLINE_WHITE = (4, 37)
MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def is_interactive_output(stream: object) -> bool:
    isatty = getattr(stream, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def _style(text: str, *codes: int) -> str:
    seq = ";".join(str(code) for code in codes)
    return f"\033[{seq}m{text}\033[0m" if seq else text


def _maybe(text: str, enable: bool, *codes: int) -> str:
    return _style(text, *codes) if enable else text


def format_timestamp(moment: datetime, tz: tzinfo | None = None) -> str:
    """Format as ``Jan. 2, 2024 3:04pm`` in local time (or ``tz``)."""
    local = moment.astimezone(tz)
    hour = local.hour % 12 or 12
    marker = "am" if local.hour < 12 else "pm"
    return (
        f"{MONTHS[local.month - 1]}. {local.day}, {local.year:04d} "
        f"{hour}:{local.minute:02d}{marker}"
    )


def format_post(post: Post, interactive: bool, tz: tzinfo | None = None) -> str:
    lines = [f"Title: {_maybe(post.title, interactive, *BOLD_RED)}"]
    if post.description:
        lines.append(f"Description: {post.description}")
    lines.append(f"Date: {format_timestamp(post.saved_at, tz)}")
    lines.append(f"Tags: {' '.join(post.tags)}")
    lines.append(f"URL: {_maybe(post.url or '', interactive, *UNDERLINE_WHITE)}")
    return "\n".join(lines) + "\n\n"


def render_posts(
    posts: Sequence[Post],
    out: TextIO,
    interactive: bool | None = None,
    tz: tzinfo | None = None,
) -> None:
    if interactive is None:
        interactive = is_interactive_output(out)
    for post in posts:
        out.write(format_post(post, interactive, tz))


def render_tag_counts(tag_counts: Sequence[TagCount], out: TextIO) -> None:
    for tag_count in tag_counts:
        out.write(f"{tag_count}\n")


def render(
    items: Sequence[Post] | Sequence[TagCount],
    out: TextIO,
    interactive: bool | None = None,
    tz: tzinfo | None = None,
) -> None:
    if items and isinstance(items[0], TagCount):
        render_tag_counts(items, out)  # type: ignore[arg-type]
        return
    render_posts(items, out, interactive=interactive, tz=tz)  # type: ignore[arg-type]

"""Conversion of Pinboard wire records into the typed domain model.

The API encodes booleans as ``"yes"``/``"no"``, tags as one space separated
string and, depending on the endpoint version, tag counts as strings. All of
that is decoded here and nowhere else.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from urllib.parse import urlsplit

from pinboard_search.types import DecodeError, Post, RawPostRecord


def is_yes(value: object) -> bool:
    return value == "yes"


def split_tags(value: object) -> list[str]:
    if not isinstance(value, str):
        return []
    return value.split()


def parse_time(value: object) -> datetime:
    if not isinstance(value, str) or not value:
        raise DecodeError(f"Missing or invalid post time: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"Invalid post time: {value!r}") from exc
    if moment.tzinfo is None:
        raise DecodeError(f"Post time has no UTC offset: {value!r}")
    return moment


def parse_href(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    href = value.strip()
    try:
        parts = urlsplit(href)
    except ValueError:
        parts = None
    # Absolute URLs only; whitespace never survives inside a valid href.
    if parts is None or not parts.scheme or not parts.netloc or any(
        char.isspace() for char in href
    ):
        logging.warning("Ignoring invalid URL: %r", value)
        return None
    return href


def to_post(raw: RawPostRecord) -> Post:
    return Post(
        title=raw.get("description") or "",
        description=raw.get("extended") or "",
        content_hash=raw.get("hash") or "",
        meta=raw.get("meta") or "",
        tags=tuple(split_tags(raw.get("tags"))),
        saved_at=parse_time(raw.get("time")),
        url=parse_href(raw.get("href")),
        shared=is_yes(raw.get("shared")),
        to_read=is_yes(raw.get("toread")),
    )


def to_posts(raw: Iterable[object]) -> list[Post]:
    posts: list[Post] = []
    for record in raw:
        if not isinstance(record, dict):
            raise DecodeError(f"Unexpected post record: {record!r}")
        posts.append(to_post(record))  # type: ignore[arg-type]
    logging.debug("Normalized %d posts", len(posts))
    return posts


def to_tag_vocabulary(raw: Mapping[str, object]) -> dict[str, int]:
    vocabulary: dict[str, int] = {}
    for tag, count in raw.items():
        # bool is an int subclass but never a valid count
        if isinstance(count, bool):
            raise DecodeError(f"Invalid count for tag {tag!r}: {count!r}")
        if isinstance(count, int) and count >= 0:
            vocabulary[tag] = count
            continue
        if isinstance(count, str):
            text = count.strip()
            if text.isascii() and text.isdigit():
                vocabulary[tag] = int(text)
                continue
        raise DecodeError(f"Invalid count for tag {tag!r}: {count!r}")
    return vocabulary

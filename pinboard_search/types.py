from dataclasses import dataclass
from datetime import datetime
import json
from typing import TypedDict


class RawPostRecord(TypedDict, total=False):
    description: str
    extended: str
    hash: str
    href: str
    meta: str
    shared: str
    tags: str
    time: str
    toread: str


@dataclass(frozen=True)
class Post:
    title: str
    description: str
    content_hash: str
    meta: str
    tags: tuple[str, ...]
    saved_at: datetime
    url: str | None
    shared: bool
    to_read: bool


@dataclass(frozen=True)
class TagCount:
    tag: str
    count: int

    def __str__(self) -> str:
        return f"{json.dumps(self.tag, ensure_ascii=False)}: {self.count}"


@dataclass(frozen=True)
class TokenCredentials:
    token: str


@dataclass(frozen=True)
class BasicCredentials:
    username: str
    password: str


Credentials = TokenCredentials | BasicCredentials | None


class PinboardError(RuntimeError):
    pass


class TransportError(PinboardError):
    pass


class RequestTimeoutError(TransportError):
    pass


class RemoteError(PinboardError):
    def __init__(self, status: int, reason: str = "") -> None:
        self.status = status
        self.reason = reason
        message = f"Pinboard returned HTTP {status}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class DecodeError(PinboardError):
    pass

import base64
import http.client
import json
import logging
import time
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Sequence

from pinboard_search.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from pinboard_search.types import (
    BasicCredentials,
    Credentials,
    DecodeError,
    RemoteError,
    RequestTimeoutError,
    TokenCredentials,
    TransportError,
)

TAGS_PATH = "/v1/tags/get"
POSTS_PATH = "/v1/posts/all"
READ_CHUNK_SIZE = 64 * 1024

QueryParams = Sequence[tuple[str, str]]


def _set_socket_timeout(response: object, seconds: float) -> None:
    raw = getattr(getattr(response, "fp", None), "raw", None)
    sock = getattr(raw, "_sock", None)
    if sock is not None:
        sock.settimeout(seconds)


class PinboardTransport:
    """Read-only access to the Pinboard v1 API.

    Credentials are fixed at construction: a token travels as the
    ``auth_token`` query parameter, basic credentials as an
    ``Authorization`` header. Each ``fetch`` issues exactly one GET and
    ``timeout`` bounds the whole call, body included.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        credentials: Credentials = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout

    def build_url(self, path: str, params: QueryParams = ()) -> str:
        query: list[tuple[str, str]] = [("format", "json")]
        if isinstance(self.credentials, TokenCredentials):
            query.append(("auth_token", self.credentials.token))
        query.extend(params)
        return f"{self.base_url}/{path.lstrip('/')}?{urllib.parse.urlencode(query)}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if isinstance(self.credentials, BasicCredentials):
            pair = f"{self.credentials.username}:{self.credentials.password}"
            encoded = base64.b64encode(pair.encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {encoded}"
        return headers

    def fetch(self, path: str, params: QueryParams = ()) -> bytes:
        try:
            request = urllib.request.Request(
                self.build_url(path, params), headers=self._headers()
            )
        except ValueError as exc:
            raise TransportError(f"Invalid request URL for {path}: {exc}") from exc
        logging.debug("GET %s (%d query params)", path, len(params))
        deadline = time.monotonic() + self.timeout
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
                if not 200 <= status < 300:
                    raise RemoteError(status, response.reason or "")
                chunks: list[bytes] = []
                while True:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise RequestTimeoutError(
                            f"Request to {path} timed out after {self.timeout:g}s"
                        )
                    # read1 returns after at most one socket read.
                    _set_socket_timeout(response, remaining)
                    chunk = response.read1(READ_CHUNK_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except urllib.error.HTTPError as exc:
            raise RemoteError(exc.code, str(exc.reason or "")) from exc
        except urllib.error.URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                raise RequestTimeoutError(
                    f"Request to {path} timed out after {self.timeout:g}s"
                ) from exc
            raise TransportError(f"Request to {path} failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise RequestTimeoutError(
                f"Request to {path} timed out after {self.timeout:g}s"
            ) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise TransportError(f"Request to {path} failed: {exc}") from exc

        body = b"".join(chunks)
        logging.debug("Received %d bytes from %s", len(body), path)
        return body

    def fetch_json(self, path: str, params: QueryParams = ()) -> object:
        body = self.fetch(path, params)
        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"Invalid JSON from {path}: {exc}") from exc

    def fetch_tags(self) -> dict[str, object]:
        payload = self.fetch_json(TAGS_PATH)
        if not isinstance(payload, dict):
            raise DecodeError("Unexpected tags response (expected an object).")
        return payload

    def fetch_posts(self, tags: Sequence[str] = ()) -> list[object]:
        payload = self.fetch_json(POSTS_PATH, [("tag", tag) for tag in tags])
        if not isinstance(payload, list):
            raise DecodeError("Unexpected posts response (expected a list).")
        return payload

import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from pinboard_search.types import BasicCredentials, Credentials, TokenCredentials

ENV_PREFIX = "PINBOARD_"
DEFAULT_BASE_URL = "https://api.pinboard.in"
DEFAULT_TIMEOUT = 5.0

_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


def load_env(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not path.exists():
        return values

    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def env_lookup(
    environ: Mapping[str, str], file_env: Mapping[str, str], name: str
) -> str | None:
    """Return ``PINBOARD_<NAME>`` from the environment, then from the env file."""
    key = ENV_PREFIX + name.upper()
    value = environ.get(key)
    if value is None:
        value = file_env.get(key)
    return value


def parse_timeout(value: str | float) -> float:
    """Parse seconds (``5``, ``2.5``) or a duration such as ``500ms`` or ``1m30s``."""
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip().lower()
        if _NUMBER_RE.fullmatch(text):
            seconds = float(text)
        else:
            parts = _DURATION_PART_RE.findall(text)
            if not parts or "".join(number + unit for number, unit in parts) != text:
                raise ValueError(f"invalid timeout: {value!r}")
            seconds = sum(
                float(number) * _DURATION_UNITS[unit] for number, unit in parts
            )
    if seconds <= 0:
        raise ValueError(f"timeout must be positive: {value!r}")
    return seconds


def check_base_url(value: str) -> None:
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError(f"invalid base URL (expected http:// or https://): {value!r}")


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


@dataclass(frozen=True)
class Settings:
    tags: tuple[str, ...] = ()
    tag_search: bool = False
    credentials: Credentials = None
    timeout: float = DEFAULT_TIMEOUT
    base_url: str = DEFAULT_BASE_URL


def load_settings(
    tags: Sequence[str] = (),
    tag_search: bool | None = None,
    user: str | None = None,
    password: str | None = None,
    auth_token: str | None = None,
    timeout: str | None = None,
    base_url: str | None = None,
    environ: Mapping[str, str] | None = None,
    env_path: Path = Path(".env"),
) -> Settings:
    """Merge explicit options with ``PINBOARD_*`` variables and the env file.

    Explicit values win; ``None`` means "not given". Raises ``ValueError``
    for malformed timeout or boolean values.
    """
    env = os.environ if environ is None else environ
    file_env = load_env(env_path)

    def lookup(value: str | None, name: str) -> str | None:
        return value if value is not None else env_lookup(env, file_env, name)

    if tag_search is None:
        raw_search = env_lookup(env, file_env, "tag_search")
        tag_search = parse_bool(raw_search) if raw_search is not None else False

    raw_timeout = lookup(timeout, "timeout")
    resolved_base_url = lookup(base_url, "base_url") or DEFAULT_BASE_URL
    check_base_url(resolved_base_url)
    return Settings(
        tags=tuple(tags),
        tag_search=tag_search,
        credentials=resolve_credentials(
            lookup(user, "user"),
            lookup(password, "password"),
            lookup(auth_token, "auth_token"),
        ),
        timeout=parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT,
        base_url=resolved_base_url,
    )


def resolve_credentials(
    user: str | None, password: str | None, token: str | None
) -> Credentials:
    # Basic auth wins as soon as either half of it is present.
    if user or password:
        return BasicCredentials(username=user or "", password=password or "")
    if token:
        return TokenCredentials(token=token)
    return None

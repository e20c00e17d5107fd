import argparse
import logging
import sys

from pinboard_search.app import run
from pinboard_search.config import DEFAULT_BASE_URL, load_settings
from pinboard_search.types import PinboardError

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_USAGE = 2

DESCRIPTION = "pinboard-search - a Pinboard search client"
EPILOG = (
    "All options may be set by an environment variable or a .env entry, "
    "like $PINBOARD_AUTH_TOKEN."
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pinboard-search", description=DESCRIPTION, epilog=EPILOG
    )
    parser.add_argument("tags", nargs="*", help="Tags to search for.")
    parser.add_argument(
        "-t",
        "--tag-search",
        action="store_true",
        default=None,
        help="Search for similar tags, rather than saved pages.",
    )
    parser.add_argument(
        "--timeout",
        default=None,
        help="Timeout for the query, e.g. 5, 2.5s, 500ms or 1m30s (default 5s).",
    )
    parser.add_argument("--user", default=None, help="Username.")
    parser.add_argument("--password", default=None, help="Password.")
    parser.add_argument(
        "--auth-token",
        default=None,
        metavar="TOKEN",
        help="Auth token, see https://pinboard.in/settings/password",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help=f"API endpoint (default {DEFAULT_BASE_URL}).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log requests to stderr."
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
    except SystemExit:
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )
    try:
        settings = load_settings(
            tags=args.tags,
            tag_search=args.tag_search,
            user=args.user,
            password=args.password,
            auth_token=args.auth_token,
            timeout=args.timeout,
            base_url=args.base_url,
        )
    except ValueError as exc:
        print(f"Usage error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        run(settings)
    except PinboardError as exc:
        print(f"Runtime error: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

import tempfile
import unittest
from pathlib import Path

from pinboard_search.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    load_env,
    load_settings,
    parse_bool,
    parse_timeout,
    resolve_credentials,
)
from pinboard_search.types import BasicCredentials, TokenCredentials


class LoadEnvTest(unittest.TestCase):
    def test_parses_quotes_and_skips_comments(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env_path = Path(tmpdir) / ".env"
            env_path.write_text(
                "# pinboard\nPINBOARD_AUTH_TOKEN='me:ABC'\n\nbroken line\n"
                'PINBOARD_TIMEOUT = "3s"\n',
                encoding="utf-8",
            )
            values = load_env(env_path)

        self.assertEqual(
            values, {"PINBOARD_AUTH_TOKEN": "me:ABC", "PINBOARD_TIMEOUT": "3s"}
        )

    def test_missing_file(self) -> None:
        self.assertEqual(load_env(Path("/nonexistent/.env")), {})


class ParseTest(unittest.TestCase):
    def test_parse_timeout(self) -> None:
        self.assertEqual(parse_timeout("5"), 5.0)
        self.assertEqual(parse_timeout("2.5s"), 2.5)
        self.assertAlmostEqual(parse_timeout("500ms"), 0.5)
        self.assertEqual(parse_timeout("1m"), 60.0)
        self.assertEqual(parse_timeout(3), 3.0)
        self.assertEqual(parse_timeout("1m30s"), 90.0)
        self.assertAlmostEqual(parse_timeout("1h2m3.5s"), 3723.5)
        self.assertAlmostEqual(parse_timeout("2s500ms"), 2.5)
        for value in ("", "soon", "-1s", "0", "5 days", "1m30", "s", "1m 30s"):
            with self.assertRaises(ValueError):
                parse_timeout(value)

    def test_parse_bool(self) -> None:
        self.assertTrue(parse_bool("Yes"))
        self.assertFalse(parse_bool("0"))
        with self.assertRaises(ValueError):
            parse_bool("maybe")


class CredentialsTest(unittest.TestCase):
    def test_basic_takes_precedence(self) -> None:
        self.assertEqual(
            resolve_credentials("me", "pw", "token"), BasicCredentials("me", "pw")
        )
        self.assertEqual(resolve_credentials(None, "pw", None), BasicCredentials("", "pw"))

    def test_token_and_none(self) -> None:
        self.assertEqual(resolve_credentials("", "", "t"), TokenCredentials("t"))
        self.assertIsNone(resolve_credentials(None, None, None))


class LoadSettingsTest(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = load_settings(environ={}, env_path=Path("/nonexistent/.env"))

        self.assertEqual(settings.tags, ())
        self.assertFalse(settings.tag_search)
        self.assertIsNone(settings.credentials)
        self.assertEqual(settings.timeout, DEFAULT_TIMEOUT)
        self.assertEqual(settings.base_url, DEFAULT_BASE_URL)

    def test_options_override_environment_over_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env_path = Path(tmpdir) / ".env"
            env_path.write_text(
                "PINBOARD_AUTH_TOKEN=from-file\nPINBOARD_TIMEOUT=9\n"
                "PINBOARD_TAG_SEARCH=true\nPINBOARD_BASE_URL=http://file.local\n",
                encoding="utf-8",
            )
            settings = load_settings(
                tags=["go"],
                timeout="1s",
                environ={"PINBOARD_AUTH_TOKEN": "from-env"},
                env_path=env_path,
            )

        self.assertEqual(settings.tags, ("go",))
        self.assertTrue(settings.tag_search)
        self.assertEqual(settings.credentials, TokenCredentials("from-env"))
        self.assertEqual(settings.timeout, 1.0)
        self.assertEqual(settings.base_url, "http://file.local")

    def test_explicit_flag_beats_environment(self) -> None:
        settings = load_settings(
            tag_search=True,
            user="me",
            environ={"PINBOARD_TAG_SEARCH": "no", "PINBOARD_AUTH_TOKEN": "t"},
            env_path=Path("/nonexistent/.env"),
        )

        self.assertTrue(settings.tag_search)
        self.assertEqual(settings.credentials, BasicCredentials("me", ""))

    def test_base_url_must_be_http_with_host(self) -> None:
        for value in ("api.pinboard.in", "ftp://api.pinboard.in", "https://"):
            with self.assertRaises(ValueError):
                load_settings(base_url=value, environ={}, env_path=Path("/nonexistent/.env"))
        with self.assertRaises(ValueError):
            load_settings(
                environ={"PINBOARD_BASE_URL": "localhost:8080"},
                env_path=Path("/nonexistent/.env"),
            )
        settings = load_settings(
            base_url="http://127.0.0.1:8080", environ={}, env_path=Path("/nonexistent/.env")
        )
        self.assertEqual(settings.base_url, "http://127.0.0.1:8080")

    def test_invalid_environment_values(self) -> None:
        for environ in ({"PINBOARD_TIMEOUT": "later"}, {"PINBOARD_TAG_SEARCH": "?"}):
            with self.assertRaises(ValueError):
                load_settings(environ=environ, env_path=Path("/nonexistent/.env"))


if __name__ == "__main__":
    unittest.main()

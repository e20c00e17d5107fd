import unittest
from pathlib import Path

try:
    import tomllib
except ImportError:  # Python 3.10
    tomllib = None

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


@unittest.skipIf(tomllib is None, "tomllib requires Python 3.11+")
class PackagingTest(unittest.TestCase):
    def test_only_the_package_is_installed(self) -> None:
        config = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
        setuptools = config["tool"]["setuptools"]

        self.assertNotIn("main", setuptools.get("py-modules", []))
        self.assertEqual(setuptools["packages"]["find"]["include"], ["pinboard_search*"])
        self.assertEqual(
            config["project"]["scripts"]["pinboard-search"], "pinboard_search.cli:main"
        )


if __name__ == "__main__":
    unittest.main()

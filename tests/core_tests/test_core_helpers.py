import os
import unittest
from unittest.mock import patch

from core.collections import dedupe
from core.constants import LOCATIONS_ENV, locations_config_paths
from core.text_utils import collapse_ws, html_to_text, normalize_unicode


class CoreCollectionsTests(unittest.TestCase):
    def test_dedupe_preserves_order(self):
        self.assertEqual(dedupe([1, 2, 2, 3, 1]), [1, 2, 3])

    def test_dedupe_with_key(self):
        items = [("a", 1), ("a", 2), ("b", 3)]
        self.assertEqual(dedupe(items, key_fn=lambda x: x[0]), [("a", 1), ("b", 3)])


class CoreTextUtilsTests(unittest.TestCase):
    def test_html_to_text(self):
        self.assertEqual(html_to_text("<td>Doe&amp;Co <b>10</b></td>"), "Doe&Co 10")
        self.assertEqual(html_to_text(""), "")

    def test_normalize_unicode(self):
        self.assertEqual(normalize_unicode("4–5 pm"), "4-5 pm")

    def test_collapse_ws(self):
        self.assertEqual(collapse_ws(" a  b \n c "), "a b c")


class CoreConstantsTests(unittest.TestCase):
    def test_locations_paths_order(self):
        env = {LOCATIONS_ENV: "/tmp/custom.yaml", "XDG_CONFIG_HOME": "/xdg", "HOME": "/home/u"}
        with patch.dict(os.environ, env):
            paths = locations_config_paths()
        self.assertEqual(paths, [
            "/tmp/custom.yaml",
            "/xdg/swim-reports/locations.yaml",
            "/home/u/.config/swim-reports/locations.yaml",
        ])

    def test_locations_paths_dedupe(self):
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": "/home/u/.config", "HOME": "/home/u"}):
            os.environ.pop(LOCATIONS_ENV, None)
            paths = locations_config_paths()
        self.assertEqual(paths, ["/home/u/.config/swim-reports/locations.yaml"])


if __name__ == "__main__":
    unittest.main()

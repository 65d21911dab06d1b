"""Tests for core/yamlio.py YAML helpers."""

import tempfile
import unittest
from pathlib import Path

import yaml

from core.yamlio import dump_config, load_config


class TestLoadConfig(unittest.TestCase):
    """Tests for load_config function."""

    def test_load_valid_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "locations.yaml"
            path.write_text("locations:\n  - id: loc-west\n    name: Westside\n", encoding="utf-8")
            result = load_config(str(path))
            self.assertEqual(result, {"locations": [{"id": "loc-west", "name": "Westside"}]})

    def test_load_missing_or_empty_returns_empty(self):
        self.assertEqual(load_config("/nonexistent/path/config.yaml"), {})
        self.assertEqual(load_config(None), {})
        self.assertEqual(load_config(""), {})
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yaml"
            path.write_text("   \n\n", encoding="utf-8")
            self.assertEqual(load_config(str(path)), {})
            path.write_text("~\n", encoding="utf-8")
            self.assertEqual(load_config(str(path)), {})

    def test_load_allows_non_dict(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.yaml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            self.assertEqual(load_config(str(path)), ["a", "b"])

    def test_load_invalid_yaml_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yaml"
            path.write_text("key: [unclosed\n", encoding="utf-8")
            with self.assertRaises(yaml.YAMLError):
                load_config(str(path))


class TestDumpConfig(unittest.TestCase):
    """Tests for dump_config function."""

    def test_dump_creates_parent_directories(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "dir" / "summary.yaml"
            dump_config(str(path), {"created": True})
            self.assertTrue(path.exists())

    def test_dump_preserves_order_and_roundtrips(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ordered.yaml"
            data = {"files": [{"path": "b.html", "status": "parsed"}], "count": 1, "aardvark": "ü"}
            dump_config(str(path), data)
            content = path.read_text(encoding="utf-8")
            self.assertLess(content.find("files"), content.find("aardvark"))
            self.assertIn("ü", content)
            self.assertNotIn("!!python", content)
            self.assertEqual(load_config(str(path)), data)


if __name__ == "__main__":
    unittest.main()

"""Shared test fixtures and utilities.

Output capture and temporary files for the report tests.
"""

from __future__ import annotations

import io
import os
import shutil
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from typing import Optional


# -----------------------------------------------------------------------------
# YAML config helpers
# -----------------------------------------------------------------------------


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Write a dict to a temporary YAML file, return the path."""
    import yaml

    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


def write_text(dir: str, filename: str, content: str) -> str:
    """Write a text file under dir and return its path."""
    p = os.path.join(dir, filename)
    with open(p, "w", encoding="utf-8") as fh:
        fh.write(content)
    return p


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_stderr():
    """Context manager that captures stderr and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stderr(buf):
        yield buf


# -----------------------------------------------------------------------------
# Temp directory mixin
# -----------------------------------------------------------------------------


class TempDirMixin:
    """Mixin providing a temporary directory that's cleaned up after each test.

    Usage:
        class MyTest(TempDirMixin, unittest.TestCase):
            def test_something(self):
                path = os.path.join(self.tmpdir, "report.html")
                ...
    """

    tmpdir: str

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()

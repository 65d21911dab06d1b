"""Shared text processing utilities for report parsing and CLI output."""
from __future__ import annotations

import re
from html import unescape

__all__ = [
    "html_to_text",
    "normalize_unicode",
    "collapse_ws",
]

_RE_TAG = re.compile(r"<[^>]+>")
_RE_WS = re.compile(r"\s+")

# Hyphen-like and space-like code points that vendor exports mix into dates and times
_PUNCT_TABLE = str.maketrans({
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2212": "-",
    "\u00A0": " ",
    "\u202F": " ",
})


def html_to_text(s: str) -> str:
    """Flatten an HTML fragment to a single line of visible text.

    Tags become separators, entities are unescaped and whitespace collapsed.
    """
    if not s:
        return ""
    s = unescape(_RE_TAG.sub(" ", s))
    return _RE_WS.sub(" ", s).strip()


def normalize_unicode(text: str) -> str:
    """Map dash variants to '-' and non-breaking spaces to ' '."""
    if not text:
        return ""
    return text.translate(_PUNCT_TABLE)


def collapse_ws(text: str) -> str:
    """Collapse runs of whitespace (including NBSP) to one space and trim."""
    if not text:
        return ""
    return _RE_WS.sub(" ", str(text).replace("\u00A0", " ")).strip()

"""Base parser class and shared helpers for report extractors."""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, TypeVar

from .constants import RE_REPORT_YEAR
from .markup import Markup

T = TypeVar('T')


class ReportInputError(ValueError):
    """Raised when a parser is handed something that is not an HTML document."""


def ensure_html(html: Any) -> str:
    """Return html unchanged, or raise ReportInputError for non-string/blank input."""
    if not isinstance(html, str):
        raise ReportInputError(f'Report HTML must be a string, got {type(html).__name__}')
    if not html.strip():
        raise ReportInputError('Report HTML is empty')
    return html


def first_result(strategies: Iterable[Callable[..., Optional[T]]], *args: Any) -> Optional[T]:
    """Run strategies in order and return the first truthy result.

    Each strategy takes the same positional arguments and returns a value or
    None/empty when it does not apply.
    """
    for strategy in strategies:
        result = strategy(*args)
        if result:
            return result
    return None


def extract_report_year(html: str) -> Optional[int]:
    """Year of the embedded '"startDate":"YYYY-MM-DD' filter, when present."""
    m = re.search(RE_REPORT_YEAR, html)
    return int(m.group(1)) if m else None


class ReportParser(ABC):
    """Base class for report parsers.

    Subclasses implement ``extract`` over a parsed document; ``parse``
    validates the input and parses the markup once.
    """

    def parse(self, html: str) -> Any:
        """Parse records from an HTML report.

        Args:
            html: Full report document

        Returns:
            Extracted records: a list, or a ReportParseResult for table reports

        Raises:
            ReportInputError: If html is not a non-blank string
        """
        html = ensure_html(html)
        return self.extract(Markup.parse(html), html)

    @abstractmethod
    def extract(self, doc: Markup, html: str) -> Any:
        """Extract records from a parsed document (html is the raw source)."""
        pass

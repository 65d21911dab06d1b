"""CLI output formatting utilities.

Renders parsed report records as text, JSON, YAML or a table.
Dataclass records are flattened with ``dataclasses.asdict``.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO

import yaml


class OutputFormat(str, Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
    quiet: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout


def to_plain(data: Any) -> Any:
    """Convert dataclasses, enums and containers to JSON/YAML friendly values."""
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, dict):
        return {k: to_plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(v) for v in data]
    if isinstance(data, Enum):
        return data.value
    return data


class OutputWriter:
    """Handles formatted output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_verbose(self, message: str) -> None:
        """Print a verbose message (only if verbose mode is enabled)."""
        if self.config.verbose:
            self.print(message)

    def print_data(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data in the configured format.

        Args:
            data: Data to print (dict, list, dataclass, or any serializable object).
            headers: Optional column headers for table format.
        """
        fmt = self.config.format

        if fmt == OutputFormat.JSON:
            self.print(json.dumps(to_plain(data), indent=2, default=str))
        elif fmt == OutputFormat.YAML:
            self.print(yaml.safe_dump(to_plain(data), default_flow_style=False, sort_keys=False), end="")
        elif fmt == OutputFormat.TABLE:
            self._print_table(data, headers)
        else:
            self._print_text(data)

    def print_dict(self, data: Dict[str, Any], *, separator: str = ": ", indent: int = 0) -> None:
        """Print a dictionary as key-value pairs."""
        prefix = " " * indent
        for key, value in data.items():
            self.print(f"{prefix}{key}{separator}{value}")

    def _print_table(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data as a table."""
        rows = [to_plain(row) for row in self._to_rows(data)]
        if not rows:
            return

        # Determine headers from first row if not provided
        if headers is None and isinstance(rows[0], dict):
            headers = list(rows[0].keys())

        if not headers:
            for row in rows:
                if isinstance(row, (list, tuple)):
                    self.print(" | ".join(str(v) for v in row))
                else:
                    self.print(str(row))
            return

        str_rows = [self._row_to_strings(row, headers) for row in rows]
        widths = [len(h) for h in headers]
        for str_row in str_rows:
            for i, val in enumerate(str_row[:len(widths)]):
                widths[i] = max(widths[i], len(val))

        header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        self.print(header_line)
        self.print("-" * len(header_line))
        for str_row in str_rows:
            padded = [val.ljust(widths[i]) if i < len(widths) else val for i, val in enumerate(str_row)]
            self.print(" | ".join(padded).rstrip())

    @staticmethod
    def _row_to_strings(row: Any, headers: List[str]) -> List[str]:
        if isinstance(row, dict):
            return ["" if row.get(h) is None else str(row.get(h)) for h in headers]
        if isinstance(row, (list, tuple)):
            return [str(v) for v in row]
        return [str(row)]

    def _print_text(self, data: Any) -> None:
        """Print data as plain text."""
        if isinstance(data, str):
            self.print(data)
        elif isinstance(data, dict):
            self.print_dict(data)
        elif isinstance(data, (list, tuple)):
            for item in data:
                self._print_text(item)
        elif is_dataclass(data):
            self.print_dict(asdict(data))
        else:
            self.print(str(data))

    @staticmethod
    def _to_rows(data: Any) -> List[Any]:
        """Convert data to a list of rows."""
        if isinstance(data, (list, tuple)):
            return list(data)
        return [data]

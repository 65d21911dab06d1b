"""Exit codes and error types for reports-assistant.

Library code raises ``ReportInputError``; the CLI layer raises the
``CLIError`` subclasses below for bad sources, configs and network fetches,
and every one of them maps to a distinct process exit code.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

LOG = logging.getLogger(__name__)


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3  # known-locations YAML unreadable or malformed
    NETWORK_ERROR = 5  # report URL could not be fetched
    NOT_FOUND = 6  # report file, directory or --locations path missing
    INTERRUPTED = 130


@dataclass
class CLIError(Exception):
    """Failure reported to the user as ``Error: <message>`` plus an optional hint."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(CLIError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.CONFIG_ERROR, hint)


class NetworkError(CLIError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NETWORK_ERROR, hint)


class NotFoundError(CLIError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NOT_FOUND, hint)


class UsageError(CLIError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


def exit_code_for(error: BaseException) -> ExitCode:
    """Exit code an exception maps to (CLIError carries its own)."""
    if isinstance(error, CLIError):
        return error.code
    if isinstance(error, KeyboardInterrupt):
        return ExitCode.INTERRUPTED
    return ExitCode.ERROR


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Print ``error`` to stderr and return its exit code.

    Unexpected exceptions keep their traceback in the debug log, which the
    CLI routes to stderr under --verbose.
    """
    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return ExitCode.INTERRUPTED

    print(f"Error: {error}", file=sys.stderr)
    if isinstance(error, CLIError):
        if error.hint:
            print(f"Hint: {error.hint}", file=sys.stderr)
        return error.code

    if verbose:
        LOG.debug("unhandled %s", type(error).__name__, exc_info=error)
    return ExitCode.ERROR

"""Declarative argparse front end shared by the report CLIs.

Commands register through decorators; every command receives the parsed
namespace with an ``_output`` OutputWriter attached and returns an exit code.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .cli_errors import CLIError, ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter


CommandFunc = Callable[[argparse.Namespace], int]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class Argument:
    name_or_flags: tuple
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandDef:
    name: str
    func: CommandFunc
    help: str = ""
    arguments: List[Argument] = field(default_factory=list)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library loggers to stderr: DEBUG with --verbose, ERROR with --quiet."""
    level = logging.DEBUG if verbose else (logging.ERROR if quiet else logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


class CLIApp:
    """Subcommand CLI built from decorated functions.

    Example usage:
        app = CLIApp("reports-assistant", "Report tools")

        @app.command("detect", help="Detect report metadata")
        @app.argument("--source", required=True, help="Report file")
        def cmd_detect(args):
            ...
            return 0
    """

    def __init__(self, name: str, description: str = "", *, add_common_args: bool = True):
        self.name = name
        self.description = description
        self.add_common_args = add_common_args
        self._commands: Dict[str, CommandDef] = {}
        self._parser: Optional[argparse.ArgumentParser] = None
        self._pending_arguments: List[Argument] = []

    def command(self, name: str, *, help: str = "") -> Callable[[CommandFunc], CommandFunc]:
        """Register the decorated function as subcommand ``name``.

        Arguments declared with @argument underneath are attached in source order.
        """
        def decorator(func: CommandFunc) -> CommandFunc:
            arguments = list(reversed(self._pending_arguments))
            self._pending_arguments.clear()
            self._commands[name] = CommandDef(name=name, func=func, help=help, arguments=arguments)
            return func
        return decorator

    def argument(self, *name_or_flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        """Queue an argparse argument for the next @command (place it below @command)."""
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending_arguments.append(Argument(name_or_flags, kwargs))
            return func
        return decorator

    @property
    def commands(self) -> Dict[str, CommandDef]:
        return dict(self._commands)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.add_common_args:
            parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging to stderr")
            parser.add_argument("--quiet", "-q", action="store_true", help="Only print results and errors")
            parser.add_argument(
                "--output", "-o",
                choices=[f.value for f in OutputFormat],
                default="text",
                help="Output format (default: text)",
            )
        if self._commands:
            subparsers = parser.add_subparsers(dest="command", metavar="<command>")
            for cmd_def in self._commands.values():
                sub = subparsers.add_parser(cmd_def.name, help=cmd_def.help, description=cmd_def.help)
                for arg in cmd_def.arguments:
                    sub.add_argument(*arg.name_or_flags, **arg.kwargs)
                sub.set_defaults(_cmd_func=cmd_def.func)
        self._parser = parser
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse argv, configure logging and output, and dispatch. Returns the exit code."""
        parser = self._parser or self.build_parser()
        args = parser.parse_args(argv)
        verbose = getattr(args, "verbose", False)
        quiet = getattr(args, "quiet", False)
        configure_logging(verbose=verbose, quiet=quiet)
        args._output = OutputWriter(OutputConfig(
            format=OutputFormat(getattr(args, "output", "text")),
            verbose=verbose,
            quiet=quiet,
        ))

        cmd_func = getattr(args, "_cmd_func", None)
        if cmd_func is None:
            parser.print_help()
            return ExitCode.USAGE

        try:
            return int(cmd_func(args))
        except CLIError as e:
            return handle_error(e, verbose=verbose)
        except KeyboardInterrupt:
            print("\nInterrupted.", file=sys.stderr)
            return ExitCode.INTERRUPTED
        except Exception as e:
            return handle_error(e, verbose=verbose)

"""Reports Assistant CLI

Classifies and parses iClassPro HTML exports:
- detect: report type, location label and date ranges
- preflight: resolve the location against the configured known locations
- parse: extract classes, roster entries or table rows
- scan: preflight and parse every report in a directory

Known locations come from --locations, $REPORTS_LOCATIONS or
~/.config/swim-reports/locations.yaml.
"""
from __future__ import annotations

import argparse
from typing import List, Optional

from core.cli_framework import CLIApp
from core.pipeline import run_pipeline
from reports import REPORT_KINDS

from .pipeline import (
    DetectProcessor,
    DetectProducer,
    DetectRequest,
    ParseProcessor,
    ParseProducer,
    ParseRequest,
    PreflightProcessor,
    PreflightProducer,
    PreflightRequest,
    ScanProcessor,
    ScanProducer,
    ScanRequest,
)


app = CLIApp(
    "reports-assistant",
    "Reports Assistant CLI for classifying and parsing iClassPro report exports.",
    add_common_args=True,
)


@app.command("detect", help="Detect report type, location label and date ranges")
@app.argument("--source", required=True, help="Report HTML path or http(s) URL")
def cmd_detect(args: argparse.Namespace) -> int:
    request = DetectRequest(source=args.source)
    return run_pipeline(request, DetectProcessor(), DetectProducer(args._output))


@app.command("preflight", help="Resolve the report location against known locations")
@app.argument("--source", required=True, help="Report HTML path or http(s) URL")
@app.argument("--locations", help="Known locations YAML (default: config search path)")
def cmd_preflight(args: argparse.Namespace) -> int:
    request = PreflightRequest(source=args.source, locations_path=getattr(args, "locations", None))
    return run_pipeline(request, PreflightProcessor(), PreflightProducer(args._output))


@app.command("parse", help="Parse a report into classes, roster entries or rows")
@app.argument("--source", required=True, help="Report HTML path or http(s) URL")
@app.argument("--kind", choices=["auto", *REPORT_KINDS], default="auto", help="Force report kind (default auto)")
def cmd_parse(args: argparse.Namespace) -> int:
    request = ParseRequest(source=args.source, kind=getattr(args, "kind", None))
    return run_pipeline(request, ParseProcessor(), ParseProducer(args._output))


@app.command("scan", help="Preflight and parse every report in a directory")
@app.argument("--dir", dest="directory", required=True, help="Directory of .html/.htm exports")
@app.argument("--locations", help="Known locations YAML (default: config search path)")
@app.argument("--out", help="Write a YAML summary to this path")
def cmd_scan(args: argparse.Namespace) -> int:
    request = ScanRequest(
        directory=args.directory,
        locations_path=getattr(args, "locations", None),
        out_path=getattr(args, "out", None),
    )
    return run_pipeline(request, ScanProcessor(), ScanProducer(args._output))


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI."""
    return app.run(argv)


if __name__ == "__main__":
    raise SystemExit(main())

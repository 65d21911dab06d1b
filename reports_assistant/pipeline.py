"""Pipeline primitives for the report assistant commands."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
import yaml

from core.cli_errors import ConfigError, NetworkError, NotFoundError
from core.cli_output import OutputFormat, OutputWriter
from core.constants import DEFAULT_REQUEST_TIMEOUT, REPORT_FILE_SUFFIXES, locations_config_paths
from core.pipeline import BaseProducer, RequestConsumer, SafeProcessor
from core.yamlio import dump_config, load_config
from reports import (
    KnownLocation,
    ParsedReport,
    ReportInputError,
    REPORT_TYPE_UNKNOWN,
    ReportMetadata,
    WARN_NO_PARSER,
    detect_location_candidates,
    detect_report_metadata,
    is_resolved,
    parse_report,
    preflight_report,
    report_fingerprint,
)

LOG = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Sources and config
# -----------------------------------------------------------------------------


def read_source(source: str) -> str:
    """Read a report from a file path or an http(s) URL."""
    if source.startswith(("http://", "https://")):
        try:
            resp = requests.get(source, timeout=DEFAULT_REQUEST_TIMEOUT)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to fetch {source}: {exc}") from exc
        return resp.text
    path = Path(source).expanduser()
    if not path.is_file():
        raise NotFoundError(f"Report file not found: {path}")
    return path.read_text(encoding="utf-8", errors="replace")


def resolve_locations_path(explicit: Optional[str] = None) -> Optional[str]:
    """The --locations file, else the first existing default config path."""
    if explicit:
        path = Path(explicit).expanduser()
        if not path.exists():
            raise NotFoundError(
                f"Locations file not found: {path}",
                hint="Create a YAML file with a top-level 'locations' list of {id, name, code}.",
            )
        return str(path)
    for candidate in locations_config_paths():
        if Path(candidate).exists():
            return candidate
    return None


def load_known_locations(explicit: Optional[str] = None) -> List[KnownLocation]:
    """Known locations from YAML (``locations: [{id, name, code}]``); [] when unconfigured."""
    path = resolve_locations_path(explicit)
    if path is None:
        LOG.debug("no locations config found in %s", locations_config_paths())
        return []
    try:
        data = load_config(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping in {path}")
    entries = data.get("locations") or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ConfigError(f"'locations' must be a list of mappings in {path}")
    locations = [KnownLocation.coerce(e) for e in entries]
    missing = [loc.name or "?" for loc in locations if not loc.id]
    if missing:
        raise ConfigError(f"Locations without an id in {path}: {', '.join(missing)}")
    return locations


def _emit(output: OutputWriter, data: Any) -> bool:
    """Print data for structured formats; returns False for text output."""
    if output.config.format == OutputFormat.TEXT:
        return False
    output.print_data(data)
    return True


# -----------------------------------------------------------------------------
# Detect pipeline
# -----------------------------------------------------------------------------


@dataclass
class DetectRequest:
    source: str


DetectRequestConsumer = RequestConsumer[DetectRequest]


@dataclass
class DetectResult:
    metadata: ReportMetadata
    candidates: List[str] = field(default_factory=list)


class DetectProcessor(SafeProcessor[DetectRequest, DetectResult]):
    def _process_safe(self, payload: DetectRequest) -> DetectResult:
        html = read_source(payload.source)
        return DetectResult(
            metadata=detect_report_metadata(html),
            candidates=detect_location_candidates(html),
        )


def _metadata_lines(meta: ReportMetadata) -> List[str]:
    ranges = ", ".join(r.raw or "" for r in meta.date_ranges) or "-"
    return [
        f"report_type: {meta.report_type}",
        f"location: {meta.detected_location_name or '-'}",
        f"date_ranges: {ranges}",
        f"warnings: {', '.join(meta.warnings) or '-'}",
    ]


class DetectProducer(BaseProducer):
    def __init__(self, output: Optional[OutputWriter] = None) -> None:
        self.output = output or OutputWriter()

    def _produce_success(self, payload: DetectResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if _emit(self.output, payload):
            return
        for line in _metadata_lines(payload.metadata):
            self.output.print(line)
        if payload.candidates:
            self.output.print(f"candidates: {', '.join(payload.candidates)}")


# -----------------------------------------------------------------------------
# Preflight pipeline
# -----------------------------------------------------------------------------


@dataclass
class PreflightRequest:
    source: str
    locations_path: Optional[str] = None


PreflightRequestConsumer = RequestConsumer[PreflightRequest]


@dataclass
class PreflightResult:
    metadata: ReportMetadata
    resolved: bool
    known_count: int


class PreflightProcessor(SafeProcessor[PreflightRequest, PreflightResult]):
    def _process_safe(self, payload: PreflightRequest) -> PreflightResult:
        known = load_known_locations(payload.locations_path)
        meta = preflight_report(read_source(payload.source), known)
        return PreflightResult(metadata=meta, resolved=is_resolved(meta), known_count=len(known))


class PreflightProducer(BaseProducer):
    def __init__(self, output: Optional[OutputWriter] = None) -> None:
        self.output = output or OutputWriter()

    def _produce_success(self, payload: PreflightResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if _emit(self.output, payload):
            return
        for line in _metadata_lines(payload.metadata):
            self.output.print(line)
        ids = payload.metadata.detected_location_ids
        self.output.print(f"location_ids: {', '.join(ids) or '-'}")
        if payload.resolved:
            self.output.print("resolved: yes")
        elif not payload.known_count:
            self.output.print("resolved: no (no known locations configured)")
        else:
            self.output.print(f"resolved: no ({len(ids)} matches)")


# -----------------------------------------------------------------------------
# Parse pipeline
# -----------------------------------------------------------------------------


@dataclass
class ParseRequest:
    source: str
    kind: Optional[str] = None


ParseRequestConsumer = RequestConsumer[ParseRequest]


class ParseProcessor(SafeProcessor[ParseRequest, ParsedReport]):
    def _process_safe(self, payload: ParseRequest) -> ParsedReport:
        return parse_report(read_source(payload.source), payload.kind)


class ParseProducer(BaseProducer):
    def __init__(self, output: Optional[OutputWriter] = None) -> None:
        self.output = output or OutputWriter()

    def _produce_success(self, payload: ParsedReport, diagnostics: Optional[Dict[str, Any]]) -> None:
        fmt = self.output.config.format
        if fmt == OutputFormat.TABLE:
            self.output.print_data(payload.classes or payload.entries or payload.rows)
            return
        if _emit(self.output, payload):
            return
        for line in _metadata_lines(payload.metadata):
            self.output.print(line)
        self.output.print(
            f"classes: {len(payload.classes)}  entries: {len(payload.entries)}  rows: {len(payload.rows)}"
        )
        if payload.warnings:
            self.output.print(f"parse_warnings: {', '.join(payload.warnings)}")
        for record in payload.classes + payload.entries + payload.rows:
            fields = ", ".join(f"{k}={v}" for k, v in asdict(record).items() if v not in (None, False))
            self.output.print(f"- {fields}")


# -----------------------------------------------------------------------------
# Scan pipeline
# -----------------------------------------------------------------------------

STATUS_PARSED = "parsed"
STATUS_DUPLICATE = "duplicate"
STATUS_UNRESOLVED = "unresolved_location"
STATUS_INVALID = "invalid"
STATUS_UNSUPPORTED = "unsupported"


@dataclass
class ScanRequest:
    directory: str
    locations_path: Optional[str] = None
    out_path: Optional[str] = None


ScanRequestConsumer = RequestConsumer[ScanRequest]


@dataclass
class ScanEntry:
    path: str
    status: str
    fingerprint: Optional[str] = None
    report_type: Optional[str] = None
    location_ids: List[str] = field(default_factory=list)
    classes: int = 0
    entries: int = 0
    rows: int = 0
    warnings: List[str] = field(default_factory=list)


@dataclass
class ScanResult:
    entries: List[ScanEntry]
    out_path: Optional[str] = None

    def counts(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for entry in self.entries:
            out[entry.status] = out.get(entry.status, 0) + 1
        return out


def report_files(directory: Path) -> List[Path]:
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in REPORT_FILE_SUFFIXES)


class ScanProcessor(SafeProcessor[ScanRequest, ScanResult]):
    """Preflight and parse every report in a directory.

    Files whose location does not resolve to exactly one known location are
    not parsed; neither are repeats of an already-seen document nor reports
    of unknown type. Problems with one file are recorded on its entry and
    never stop the scan.
    """

    def _process_safe(self, payload: ScanRequest) -> ScanResult:
        directory = Path(payload.directory).expanduser()
        if not directory.is_dir():
            raise NotFoundError(f"Directory not found: {directory}")
        known = load_known_locations(payload.locations_path)
        seen: Dict[str, str] = {}
        entries = [self._scan_file(path, known, seen) for path in report_files(directory)]
        return ScanResult(entries=entries, out_path=payload.out_path)

    def _scan_file(self, path: Path, known: List[KnownLocation], seen: Dict[str, str]) -> ScanEntry:
        try:
            html = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOG.debug("cannot read %s", path, exc_info=True)
            return ScanEntry(path=str(path), status=STATUS_INVALID, warnings=[f"unreadable: {exc}"])
        fingerprint = report_fingerprint(html)
        if fingerprint in seen:
            LOG.debug("%s duplicates %s", path, seen[fingerprint])
            return ScanEntry(path=str(path), status=STATUS_DUPLICATE, fingerprint=fingerprint)
        seen[fingerprint] = str(path)

        try:
            meta = preflight_report(html, known)
        except ReportInputError as exc:
            return ScanEntry(path=str(path), status=STATUS_INVALID, fingerprint=fingerprint, warnings=[str(exc)])

        entry = ScanEntry(
            path=str(path),
            status=STATUS_UNRESOLVED,
            fingerprint=fingerprint,
            report_type=meta.report_type,
            location_ids=list(meta.detected_location_ids),
            warnings=list(meta.warnings),
        )
        if not is_resolved(meta):
            return entry
        if meta.report_type == REPORT_TYPE_UNKNOWN:
            entry.status = STATUS_UNSUPPORTED
            entry.warnings.append(WARN_NO_PARSER)
            return entry

        report = parse_report(html)
        entry.status = STATUS_PARSED
        entry.classes = len(report.classes)
        entry.entries = len(report.entries)
        entry.rows = len(report.rows)
        entry.warnings.extend(w for w in report.warnings if w not in entry.warnings)
        return entry


class ScanProducer(BaseProducer):
    def __init__(self, output: Optional[OutputWriter] = None) -> None:
        self.output = output or OutputWriter()

    def _produce_success(self, payload: ScanResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if payload.out_path:
            dump_config(payload.out_path, {"files": [asdict(e) for e in payload.entries]})
        if _emit(self.output, payload.entries):
            return
        for e in payload.entries:
            ids = ",".join(e.location_ids) or "-"
            detail = f"classes={e.classes} entries={e.entries} rows={e.rows}" if e.status == STATUS_PARSED else ""
            self.output.print(f"{e.status:<20} {e.report_type or '-':<20} {ids:<12} {Path(e.path).name} {detail}".rstrip())
            for warning in e.warnings:
                self.output.print_verbose(f"    warning: {warning}")
        summary = ", ".join(f"{k}={v}" for k, v in sorted(payload.counts().items())) or "no report files"
        self.output.print(f"Scanned {len(payload.entries)} files: {summary}")
        if payload.out_path:
            self.output.print(f"Wrote summary to {payload.out_path}")

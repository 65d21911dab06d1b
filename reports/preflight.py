"""Preflight: classify a report and match it to a known location."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Sequence, Union

from .base import ensure_html
from .markup import Markup
from .metadata import candidates_from_markup, metadata_from_markup
from .model import KnownLocation, ReportMetadata
from .text_utils import normalize_location_name

LOG = logging.getLogger(__name__)

LocationLike = Union[KnownLocation, Mapping[str, Any]]


def _matches(candidate: str, name: str, code: str) -> bool:
    if name and (name == candidate or candidate in name or name in candidate):
        return True
    return bool(code) and candidate == code


def resolve_locations(candidates: Iterable[str], known: Sequence[LocationLike]) -> List[str]:
    """Match location name candidates against known locations.

    Names and codes are compared lowercased with non-alphanumerics removed.
    A candidate matches on equality, substring either way, or equality with
    the location code. Matches across all candidates are unioned.

    Returns:
        Matched location ids in first-hit order. Anything other than exactly
        one id is ambiguous.
    """
    locations = [KnownLocation.coerce(loc) for loc in known]
    normalized = [
        (loc.id, normalize_location_name(loc.name), normalize_location_name(loc.code))
        for loc in locations
    ]
    hits: List[str] = []
    for cand in candidates:
        cand_norm = normalize_location_name(cand)
        if not cand_norm:
            continue
        for loc_id, name, code in normalized:
            if loc_id not in hits and _matches(cand_norm, name, code):
                hits.append(loc_id)
    return hits


def preflight_report(html: str, known: Sequence[LocationLike]) -> ReportMetadata:
    """Detect report metadata and fill ``detected_location_ids``."""
    html = ensure_html(html)
    doc = Markup.parse(html)
    meta = metadata_from_markup(doc, html)
    candidates = candidates_from_markup(doc, html)
    meta.detected_location_ids = resolve_locations(candidates, known)
    LOG.debug('preflight candidates=%s ids=%s', candidates, meta.detected_location_ids)
    return meta


def is_resolved(meta: ReportMetadata) -> bool:
    """True when exactly one known location matched."""
    return len(meta.detected_location_ids) == 1

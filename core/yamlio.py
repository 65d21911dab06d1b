"""YAML files used by reports-assistant: the known-locations config and scan summaries."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

__all__ = ["load_config", "dump_config"]


def load_config(path: Optional[str]) -> Any:
    """Parsed contents of a YAML file, or {} when the path is unset, missing or blank.

    The root is returned as parsed; ``load_known_locations`` checks that it
    is a mapping with a ``locations`` list.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
    """
    if not path or not Path(path).is_file():
        return {}
    text = Path(path).read_text(encoding="utf-8")
    if not text.strip():
        return {}
    data = yaml.safe_load(text)
    return {} if data is None else data


def dump_config(path: str, data: Dict[str, Any]) -> None:
    """Write ``data`` as block-style YAML, keys in insertion order, creating parent dirs."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False, allow_unicode=True, default_flow_style=False)

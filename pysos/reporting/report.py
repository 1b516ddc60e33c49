from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pysos.utils.jsonable import to_jsonable

REPORT_SCHEMA_VERSION = 1


def stamp_report_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Attach run-level metadata to a result payload without changing its shape."""

    from pysos import __version__ as pysos_version

    stamped = dict(payload)
    stamped.setdefault("schema_version", int(REPORT_SCHEMA_VERSION))
    stamped.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    stamped.setdefault("pysos_version", pysos_version)
    return stamped


def save_run_report(path: str | Path, results: dict) -> None:
    """Save a run result dict as JSON (converting numpy types)."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    payload = to_jsonable(results)
    out_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

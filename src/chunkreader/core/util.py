from __future__ import annotations
from dataclasses import asdict
from typing import Any, Dict, Iterable
from .model import ScanResult


def result_asdict(res: ScanResult, *, fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict (skip None) optionally filtered."""
    payload = {k: v for k, v in asdict(res).items() if v is not None}
    if fields:
        wanted = set(fields) | {"source", "success"}
        payload = {k: v for k, v in payload.items() if k in wanted}
    return payload

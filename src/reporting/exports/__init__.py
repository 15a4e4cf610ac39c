"""Central export facade over the contact-map serializers."""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Union

from analysis.distance_matrix import DistanceMatrix
from reporting.serializer import export_contacts_text, export_eps

_FORMATTERS = {
    "txt": export_contacts_text,
    "text": export_contacts_text,
    "eps": export_eps,
    "ps": export_eps,
}


def export(format: str, dm: DistanceMatrix, threshold: float, tool: Optional[str] = None) -> Union[str, bytes]:
    fmt = format.lower()
    fn = _FORMATTERS.get(fmt)
    if not fn:
        raise ValueError(f"Unsupported export format: {format}")
    return fn(dm, threshold, tool)


def export_to_file(path: Union[str, Path],
                   format: str,
                   dm: DistanceMatrix,
                   threshold: float,
                   tool: Optional[str] = None) -> Path:
    """Serialize and write in one step; text formats are UTF-8, EPS is written as bytes."""
    payload = export(format, dm, threshold, tool)
    target = Path(path)
    if isinstance(payload, bytes):
        target.write_bytes(payload)
    else:
        target.write_text(payload, encoding="utf-8")
    return target

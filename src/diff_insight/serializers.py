"""JSON-ready dictionaries from result models.

Single place where frozen dataclasses become plain data:
- tuples become lists, enums become their values
- file change records gain their ``status`` and computed ``impact``
- ``None`` fields are kept, so consumers see a stable key set per record type
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from .changes.models import RECORD_TYPES, AnalysisResult

FILE_CHANGE_TYPES = tuple(RECORD_TYPES.values())


def to_dict(value: Any) -> Any:
    """Recursively convert a result model into JSON-serializable data."""
    if isinstance(value, FILE_CHANGE_TYPES):
        return serialize_file_change(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(key): to_dict(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dict(item) for item in value]
    return value


def serialize_file_change(record) -> dict[str, Any]:
    data: dict[str, Any] = {"status": record.status.value}
    for f in fields(record):
        data[f.name] = to_dict(getattr(record, f.name))
    data["impact"] = to_dict(record.impact)
    return data


def serialize_result(result: AnalysisResult) -> dict[str, Any]:
    return to_dict(result)

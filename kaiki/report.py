"""Comparison results and the out.json report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Mapping

_LIST_FIELDS = (
    ("failed_items", "failedItems"),
    ("new_items", "newItems"),
    ("deleted_items", "deletedItems"),
    ("passed_items", "passedItems"),
    ("expected_items", "expectedItems"),
    ("actual_items", "actualItems"),
    ("diff_items", "diffItems"),
)

_DIR_FIELDS = (
    ("actual_dir", "actualDir"),
    ("expected_dir", "expectedDir"),
    ("diff_dir", "diffDir"),
)


class ReportError(Exception):
    """Raised when a report cannot be serialized, parsed or written."""


@dataclass(kw_only=True)
class ComparisonResult:
    """The outcome of comparing expected and actual images (reg-suit compatible)."""

    actual_dir: str
    expected_dir: str
    diff_dir: str
    failed_items: list[str] = field(default_factory=list)
    new_items: list[str] = field(default_factory=list)
    deleted_items: list[str] = field(default_factory=list)
    passed_items: list[str] = field(default_factory=list)
    expected_items: list[str] = field(default_factory=list)
    actual_items: list[str] = field(default_factory=list)
    diff_items: list[str] = field(default_factory=list)

    def has_failures(self) -> bool:
        """Return True if any image failed the comparison."""
        return bool(self.failed_items)

    def has_changes(self) -> bool:
        """Return True if any image failed, was added or was deleted."""
        return bool(self.failed_items or self.new_items or self.deleted_items)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase mapping used in out.json."""
        data: dict[str, Any] = {
            key: list(getattr(self, attr)) for attr, key in _LIST_FIELDS
        }
        data.update({key: getattr(self, attr) for attr, key in _DIR_FIELDS})
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComparisonResult:
        """Build a result from a camelCase mapping; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise ReportError("comparison result must be a JSON object")
        values: dict[str, Any] = {}
        for attr, key in _LIST_FIELDS:
            if key not in data:
                raise ReportError(f"missing field `{key}`")
            items = data[key]
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                raise ReportError(f"field `{key}` must be a list of strings")
            values[attr] = list(items)
        for attr, key in _DIR_FIELDS:
            if key not in data:
                raise ReportError(f"missing field `{key}`")
            value = data[key]
            if not isinstance(value, str):
                raise ReportError(f"field `{key}` must be a string")
            values[attr] = value
        return cls(**values)

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to JSON; compact unless an indent is given."""
        if indent is None:
            return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> ComparisonResult:
        """Parse a result from JSON text."""
        try:
            data = json.loads(text)
        except (ValueError, TypeError) as exc:
            raise ReportError(f"serialization failed: {exc}") from exc
        return cls.from_dict(data)


def is_passed(
    diff_count: int,
    total_pixels: int,
    threshold_pixel: int | None = None,
    threshold_rate: float | None = None,
) -> bool:
    """Decide whether an image comparison is within the allowed threshold.

    A pixel threshold takes precedence over a rate threshold; with neither,
    only an exact match passes.
    """
    if threshold_pixel is not None:
        return diff_count <= threshold_pixel
    if threshold_rate is not None:
        if total_pixels == 0:
            return True
        return diff_count / total_pixels <= threshold_rate
    return diff_count == 0


def write_json_report(result: ComparisonResult, output_path: str | PathLike[str]) -> None:
    """Write the result as pretty-printed out.json."""
    try:
        Path(output_path).write_text(result.to_json(indent=2), encoding="utf-8")
    except OSError as exc:
        raise ReportError(f"failed to write report: {exc}") from exc
# Filter catalog (which filter types each search type accepts) and
# non-raising validation of raw filter payloads.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional

import yaml

from salesnav.settings import settings
from .types import SearchType, SelectionType

DEFAULT_FILTERS_PATH = os.path.join(os.path.dirname(__file__), "filters.yaml")


@dataclass
class FilterTypeInfo:
    type: str
    name: str
    description: str = ""


@dataclass
class ValidationIssue:
    filter: str
    message: str


@dataclass
class ValidationReport:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@lru_cache(maxsize=4)
def load_filter_catalog(path: Optional[str] = None) -> Dict[SearchType, List[FilterTypeInfo]]:
    """Load filters.yaml; FILTERS_PATH in settings overrides the packaged file."""
    path = path or settings.FILTERS_PATH or DEFAULT_FILTERS_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Filter catalog not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    catalog: Dict[SearchType, List[FilterTypeInfo]] = {}
    for search_type in SearchType:
        entries = data.get(search_type.value) or []
        catalog[search_type] = [
            FilterTypeInfo(
                type=e["type"],
                name=e.get("name", e["type"]),
                description=e.get("description", ""),
            )
            for e in entries
        ]
    return catalog


def allowed_filter_types(search_type: SearchType) -> List[str]:
    return [info.type for info in load_filter_catalog()[search_type]]


def validate_filters(search_type: SearchType, raw_filters: List[Dict[str, Any]]) -> ValidationReport:
    """
    Check raw filters against the catalog for `search_type`.
    Missing types, types not allowed for the search type, empty value lists
    and values without id or text are errors; an unknown selectionType is
    only a warning.
    """
    allowed = set(allowed_filter_types(search_type))
    selections = {s.value for s in SelectionType}
    report = ValidationReport()

    for index, flt in enumerate(raw_filters):
        ftype = flt.get("type") if isinstance(flt, dict) else None
        if not ftype:
            report.errors.append(ValidationIssue(f"filter[{index}]", "Filter type is missing"))
            continue

        if ftype not in allowed:
            report.errors.append(ValidationIssue(
                ftype, f"Filter type '{ftype}' is not valid for a '{search_type.value}' search"
            ))

        values = flt.get("values")
        if not isinstance(values, list) or not values:
            report.errors.append(ValidationIssue(ftype, "A filter must contain at least one value"))
            continue

        for vi, value in enumerate(values):
            label = f"{ftype}[{vi}]"
            if not isinstance(value, dict) or not value.get("id") or not value.get("text"):
                report.errors.append(ValidationIssue(label, "Each value needs an id and a text"))
                continue
            sel = value.get("selectionType")
            if sel and sel not in selections:
                report.warnings.append(ValidationIssue(label, "selectionType must be 'INCLUDED' or 'EXCLUDED'"))

    return report

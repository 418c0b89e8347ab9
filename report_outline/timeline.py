"""
Timeline health expansion.

A report carries its per-project feature outlines as a JSON-encoded
`timelineHealth` array. Each project is stored next to its raw delta and the
normalized outline, keyed by project and report date downstream.
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping

import structlog
from pydantic import TypeAdapter, ValidationError

from .models import Delta, FeatureRecord, ProjectFeatures, ProjectFromFe
from .normalize import delta_to_outline

logger = structlog.get_logger(__name__)

_projects_adapter = TypeAdapter(List[ProjectFromFe])


class TimelineHealthError(ValueError):
    """Raised when a report's timelineHealth field cannot be decoded."""


def feature_record(raw_features: Mapping[str, Any], delta: Delta) -> FeatureRecord:
    # the client's delta is kept as received, compact like JSON.stringify
    raw = json.dumps(raw_features, separators=(",", ":"), ensure_ascii=False)
    return FeatureRecord(delta=raw, normalized=delta_to_outline(delta))


def normalize_timeline_health(raw: str) -> List[ProjectFeatures]:
    """
    Expand a JSON-encoded timelineHealth array into per-project feature records.

    Raises TimelineHealthError when the text is not JSON or an entry does not
    look like {name, status, features: {ops: [...]}}.
    """
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise TimelineHealthError(f"timelineHealth is not valid JSON: {exc.msg}") from exc

    if not isinstance(decoded, list):
        raise TimelineHealthError("timelineHealth must be a JSON array")

    try:
        projects = _projects_adapter.validate_python(decoded)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise TimelineHealthError(f"invalid project at {location}: {first['msg']}") from exc

    results: List[ProjectFeatures] = []
    for entry, project in zip(decoded, projects):
        record = feature_record(entry["features"], project.features)
        logger.info(
            "project_features_normalized",
            project=project.name,
            status=project.status.value,
            ops=len(project.features.ops),
            roots=len(record.normalized),
        )
        results.append(ProjectFeatures(name=project.name, status=project.status, features=record))

    return results

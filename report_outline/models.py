from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DeltaOp(BaseModel):
    # retain/delete keys and unknown attributes are tolerated, only insert is read
    model_config = ConfigDict(extra="allow")

    insert: Union[str, Dict[str, Any]]
    attributes: Optional[Any] = Field(default=None, examples=[{"list": "bullet", "indent": 1}])


class Delta(BaseModel):
    ops: List[DeltaOp]


class OutlineNode(BaseModel):
    value: str
    children: List[OutlineNode] = Field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class ProjectStatus(str, Enum):
    AT_RISK_UNCONTROLLED = "AT_RISK_UNCONTROLLED"
    AT_RISK_UNDER_CONTROL = "AT_RISK_UNDER_CONTROL"
    ON_TRACK = "ON_TRACK"
    NONE = "NONE"


class ProjectFromFe(BaseModel):
    uid: Optional[str] = None
    name: str
    status: ProjectStatus
    features: Delta


class FeatureRecord(BaseModel):
    delta: str
    normalized: List[OutlineNode]


class ProjectFeatures(BaseModel):
    name: str
    status: ProjectStatus
    features: FeatureRecord


class TimelineHealthRequest(BaseModel):
    timelineHealth: str


class HealthResponse(BaseModel):
    ok: bool = True

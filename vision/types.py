from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FeatureKind(str, Enum):
    """Detection features understood by the Google Vision API."""

    LABEL_DETECTION = "LABEL_DETECTION"
    TEXT_DETECTION = "TEXT_DETECTION"
    DOCUMENT_TEXT_DETECTION = "DOCUMENT_TEXT_DETECTION"
    OBJECT_LOCALIZATION = "OBJECT_LOCALIZATION"
    FACE_DETECTION = "FACE_DETECTION"
    LANDMARK_DETECTION = "LANDMARK_DETECTION"
    LOGO_DETECTION = "LOGO_DETECTION"
    SAFE_SEARCH_DETECTION = "SAFE_SEARCH_DETECTION"
    IMAGE_PROPERTIES = "IMAGE_PROPERTIES"
    CROP_HINTS = "CROP_HINTS"
    WEB_DETECTION = "WEB_DETECTION"


DEFAULT_FEATURES: List[str] = [
    FeatureKind.LABEL_DETECTION.value,
    FeatureKind.TEXT_DETECTION.value,
    FeatureKind.OBJECT_LOCALIZATION.value,
]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Label(_Frozen):
    description: str
    score: float


class Vertex(_Frozen):
    x: float = 0.0
    y: float = 0.0


class BoundingPoly(_Frozen):
    vertices: List[Vertex] = Field(default_factory=list)
    normalized_vertices: List[Vertex] = Field(
        default_factory=list, alias="normalizedVertices"
    )


class DetectedObject(_Frozen):
    name: str
    score: float
    bounding_poly: BoundingPoly = Field(
        default_factory=BoundingPoly, alias="boundingPoly"
    )


class AnalysisResult(_Frozen):
    """
    Normalized output of one image analysis.

    Serialized with `to_dict()` as
    `{"labels": [...], "text": "...", "objects": [...]}`.
    """

    labels: List[Label] = Field(default_factory=list)
    text: str = ""
    objects: List[DetectedObject] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

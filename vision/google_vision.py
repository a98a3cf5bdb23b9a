from __future__ import annotations

import logging
from typing import Any, List, Optional

from google.cloud import vision

from config import VisionConfig
from vision.base import VisionBackendError
from vision.types import AnalysisResult, BoundingPoly, DetectedObject, Label, Vertex
from vision.utils import parse_image_ref

log = logging.getLogger(__name__)


def _build_image(image_ref: str) -> vision.Image:
    ref = parse_image_ref(image_ref)
    if ref.content is not None:
        log.info("[VISION] inline base64 image, %d bytes", len(ref.content))
        return vision.Image(content=ref.content)
    return vision.Image(source=vision.ImageSource(image_uri=ref.uri))


def _vertices(points: Any) -> List[Vertex]:
    return [Vertex(x=p.x, y=p.y) for p in (points or [])]


def to_analysis_result(response: Any) -> AnalysisResult:
    """
    Map an `AnnotateImageResponse` onto `AnalysisResult`.

    Absent annotations become empty lists and absent text an empty string.
    """
    full_text = getattr(response, "full_text_annotation", None)
    objects = []
    for obj in response.localized_object_annotations or []:
        poly = getattr(obj, "bounding_poly", None)
        objects.append(
            DetectedObject(
                name=obj.name,
                score=obj.score,
                bounding_poly=BoundingPoly(
                    vertices=_vertices(getattr(poly, "vertices", None)),
                    normalized_vertices=_vertices(getattr(poly, "normalized_vertices", None)),
                ),
            )
        )

    return AnalysisResult(
        labels=[
            Label(description=label.description, score=label.score)
            for label in (response.label_annotations or [])
        ],
        text=(getattr(full_text, "text", "") or "") if full_text else "",
        objects=objects,
    )


class GoogleVisionBackend:
    """Live backend calling Google Cloud Vision `annotate_image`."""

    name = "google"

    def __init__(self, config: VisionConfig, client: Optional[Any] = None):
        self.config = config
        if client is None:
            log.info("[VISION] loading credentials from %s", config.credentials_path)
            client = vision.ImageAnnotatorClient.from_service_account_json(
                config.credentials_path
            )
        self.client = client

    def analyze(self, image_ref: str, features: List[str]) -> AnalysisResult:
        request = vision.AnnotateImageRequest(
            image=_build_image(image_ref),
            features=[vision.Feature(type_=vision.Feature.Type[f]) for f in features],
        )

        log.info("[VISION] calling Google Vision")
        response = self.client.annotate_image(request)

        error = getattr(response, "error", None)
        if error is not None and getattr(error, "message", ""):
            raise VisionBackendError(f"Google Vision API error: {error.message}")

        result = to_analysis_result(response)
        log.info(
            "[VISION] labels=%d text=%s objects=%d",
            len(result.labels),
            "yes" if result.text else "no",
            len(result.objects),
        )
        return result

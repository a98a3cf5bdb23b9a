"""
Static analysis results used when no live vision backend is available.

These keep the demo usable without Google credentials.
"""

from __future__ import annotations

import logging
from typing import List

from vision.types import AnalysisResult, BoundingPoly, DetectedObject, Label, Vertex
from vision.utils import is_inline, unsplash_photo_id

log = logging.getLogger(__name__)

# Leading bytes of the bundled portrait test image.
PERSON_SIGNATURE = (
    "/9j/4AAQSkZJRgABAQAAAQABAAD/2wCEAAkGBxISEBMQEhIWFhEQFxUZEhgSFhcYEhATGhUXGRcRFhUY"
)


def _box(x1: float, y1: float, x2: float, y2: float) -> BoundingPoly:
    return BoundingPoly(
        vertices=[
            Vertex(x=x1, y=y1),
            Vertex(x=x2, y=y1),
            Vertex(x=x2, y=y2),
            Vertex(x=x1, y=y2),
        ]
    )


def _labels(*pairs) -> List[Label]:
    return [Label(description=d, score=s) for d, s in pairs]


PERSON_RESULT = AnalysisResult(
    labels=_labels(
        ("Person", 0.98),
        ("Human", 0.97),
        ("Face", 0.95),
        ("Portrait", 0.92),
        ("Photography", 0.90),
    ),
    text="",
    objects=[
        DetectedObject(name="Person", score=0.98, bounding_poly=_box(100, 50, 500, 700)),
        DetectedObject(name="Face", score=0.95, bounding_poly=_box(200, 100, 400, 300)),
    ],
)

GENERIC_RESULT = AnalysisResult(
    labels=_labels(
        ("Object", 0.90),
        ("Item", 0.85),
        ("Product", 0.80),
        ("Artifact", 0.75),
        ("Material", 0.70),
    ),
    text="",
    objects=[
        DetectedObject(name="Object", score=0.90, bounding_poly=_box(150, 150, 450, 450)),
    ],
)

LANDSCAPE_RESULT = AnalysisResult(
    labels=_labels(
        ("Sky", 0.95),
        ("Cloud", 0.92),
        ("Tree", 0.87),
        ("Nature", 0.85),
        ("Landscape", 0.82),
    ),
    text="",
    objects=[
        DetectedObject(name="Tree", score=0.87, bounding_poly=_box(10, 10, 100, 200)),
        DetectedObject(name="Sky", score=0.95, bounding_poly=_box(0, 0, 800, 300)),
    ],
)


class FixtureBackend:
    """Picks a canned result by looking at the image reference only."""

    name = "fixture"

    def analyze(self, image_ref: str, features: List[str]) -> AnalysisResult:
        photo_id = unsplash_photo_id(image_ref)
        if photo_id:
            log.info("[FIXTURE] Unsplash photo id: %s", photo_id)

        if is_inline(image_ref):
            if PERSON_SIGNATURE in image_ref:
                log.info("[FIXTURE] person image signature matched")
                return PERSON_RESULT
            log.info("[FIXTURE] generic result for inline image")
            return GENERIC_RESULT

        log.info("[FIXTURE] landscape result for URL")
        return LANDSCAPE_RESULT

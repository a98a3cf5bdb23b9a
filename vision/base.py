"""Image-analysis backend interface."""

from __future__ import annotations

from typing import List, Protocol

from vision.types import AnalysisResult


class VisionBackendError(RuntimeError):
    """Raised by a backend when the analysis service reports a failure."""


class VisionBackend(Protocol):
    """Contract shared by the live Google backend and the fixture backend."""

    name: str

    def analyze(self, image_ref: str, features: List[str]) -> AnalysisResult:
        """Analyze one image and return the normalized result."""
        ...

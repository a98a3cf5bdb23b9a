from __future__ import annotations

import logging
import os
from typing import List, Optional

from config import VisionConfig
from vision.base import VisionBackend
from vision.fixtures import FixtureBackend
from vision.google_vision import GoogleVisionBackend
from vision.types import DEFAULT_FEATURES, AnalysisResult
from vision.utils import preview

log = logging.getLogger(__name__)


class VisionAdapter:
    """
    Front door for image analysis.

    Delegates to `backend` when one is configured and substitutes the
    fixture result whenever the backend is missing or fails, so `analyze`
    never raises.
    """

    def __init__(
        self,
        backend: Optional[VisionBackend] = None,
        fallback: Optional[VisionBackend] = None,
    ):
        self.backend = backend
        self.fallback = fallback or FixtureBackend()

    @property
    def mode(self) -> str:
        return self.backend.name if self.backend is not None else self.fallback.name

    def analyze(self, image_ref: str, features: Optional[List[str]] = None) -> AnalysisResult:
        if isinstance(features, str):
            features = [features]
        features = list(features or DEFAULT_FEATURES)
        log.info("[VISION] analyzing %s features=%s", preview(image_ref), ",".join(features))

        if self.backend is None:
            log.warning("[VISION] no backend configured, using fixture data")
            return self.fallback.analyze(image_ref, features)

        try:
            return self.backend.analyze(image_ref, features)
        except Exception as e:
            log.error("[VISION] %s backend failed: %s", self.backend.name, e)
            log.warning("[VISION] falling back to fixture data")
            return self.fallback.analyze(image_ref, features)


def build_adapter(config: VisionConfig) -> VisionAdapter:
    """Use Google Vision when its credentials load, fixtures otherwise."""
    if not os.path.exists(config.credentials_path):
        log.warning("[VISION] credentials file not found at %s", config.credentials_path)
        return VisionAdapter()

    try:
        backend = GoogleVisionBackend(config)
    except Exception as e:
        log.error("[VISION] failed to initialise Google Vision client: %s", e)
        return VisionAdapter()

    log.info("[VISION] Google Vision client ready")
    return VisionAdapter(backend=backend)

"""
Vision adapter package.

Exposes a singleton accessor for the process-wide adapter
(`get_adapter`), built from environment configuration.
"""

from __future__ import annotations

from config import VisionConfig
from vision.adapter import VisionAdapter, build_adapter

_adapter = None


def get_adapter() -> VisionAdapter:
    """Returns the shared `VisionAdapter`, building it on first use."""
    global _adapter

    if _adapter is None:
        _adapter = build_adapter(VisionConfig.from_env())

    return _adapter

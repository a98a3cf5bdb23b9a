from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Optional

INLINE_PREFIX = "data:image/"

_UNSPLASH_ID = re.compile(r"photo-([a-zA-Z0-9-]+)")


@dataclass(frozen=True)
class ImageRef:
    """Either raw image bytes (`content`) or a remote `uri`."""

    content: Optional[bytes] = None
    uri: Optional[str] = None


def is_inline(image_ref: str) -> bool:
    return image_ref.startswith(INLINE_PREFIX)


def parse_image_ref(image_ref: str) -> ImageRef:
    """
    Split an image reference into bytes or a URI.

    `data:image/...;base64,<payload>` refs are decoded; anything else is
    treated as a URI the vision service fetches itself.
    """
    if is_inline(image_ref):
        _, _, payload = image_ref.partition(",")
        return ImageRef(content=base64.b64decode(payload))
    return ImageRef(uri=image_ref)


def unsplash_photo_id(image_ref: str) -> Optional[str]:
    if "unsplash.com/photo-" not in image_ref:
        return None
    match = _UNSPLASH_ID.search(image_ref)
    return match.group(1) if match else None


def preview(image_ref: str, length: int = 50) -> str:
    """Shortened ref for log lines."""
    return image_ref[:length] + "..." if len(image_ref) > length else image_ref

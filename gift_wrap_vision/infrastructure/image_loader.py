from __future__ import annotations

from pathlib import Path

import cv2

from ..domain.entities import DecodedImage
from ..shared.errors import InfrastructureError, InvalidInput


def load_image(path: str | Path) -> DecodedImage:
    """Decode an image file into a BGR array."""

    image_path = Path(path)
    if not image_path.is_file():
        raise InvalidInput(f"Image not found: {image_path}")
    frame = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if frame is None:
        raise InfrastructureError(f"Unable to decode image {image_path}")
    return DecodedImage.from_array(frame)


__all__ = ["load_image"]

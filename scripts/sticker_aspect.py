from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Dict, Tuple

from sticker_bbox import BoundingBox


logger = logging.getLogger(__name__)

TARGET_SIZE = 512
# Content must be 1.1x longer on one axis before it leaves the square bucket.
ASPECT_TOLERANCE = (11, 10)
# Padding floor: 5% of the canvas side.
MIN_PADDING_DIVISOR = 20


class DesiredAspectRatio(Enum):
    SQUARE = "square"
    WIDE = "wide"
    TALL = "tall"

    def resize_width(self) -> int:
        return RESIZE_TARGETS[self][0]

    def resize_height(self) -> int:
        return RESIZE_TARGETS[self][1]


# 0 means "derive from the other side, keeping the aspect ratio".
RESIZE_TARGETS: Dict[DesiredAspectRatio, Tuple[int, int]] = {
    DesiredAspectRatio.SQUARE: (TARGET_SIZE, TARGET_SIZE),
    DesiredAspectRatio.WIDE: (TARGET_SIZE, 0),
    DesiredAspectRatio.TALL: (0, TARGET_SIZE),
}


def classify(bbox: BoundingBox) -> DesiredAspectRatio:
    w = bbox.width()
    h = bbox.height()
    num, den = ASPECT_TOLERANCE
    if w * den > h * num:
        return DesiredAspectRatio.WIDE
    if h * den > w * num:
        return DesiredAspectRatio.TALL
    return DesiredAspectRatio.SQUARE


def plan_crop(bbox: BoundingBox, dar: DesiredAspectRatio) -> BoundingBox:
    """Derive the padded canvas size and crop window for `dar`.

    Padding is added equally to both opposite edges of the canvas. The near
    edge index therefore stays where it was (-delta + delta) while the far
    edge index moves by 2 * delta. The returned box carries the new canvas
    size in image_width/image_height and the crop window in its edges.
    """
    if dar is DesiredAspectRatio.SQUARE:
        margin = (bbox.horizontal_margin() + bbox.vertical_margin()) // 2
        d = max(margin // 2, bbox.image_height // MIN_PADDING_DIVISOR)
        width = bbox.image_width + d * 2
        height = bbox.image_height + d * 2
        planned = replace(
            bbox,
            image_width=width,
            image_height=height,
            left=0,
            right=width - 1,
            top=0,
            bottom=height - 1,
        )
    elif dar is DesiredAspectRatio.WIDE:
        dy = max(bbox.horizontal_margin() // 2, bbox.image_width // MIN_PADDING_DIVISOR)
        planned = replace(
            bbox,
            image_height=bbox.image_height + dy * 2,
            bottom=bbox.bottom + dy * 2,
            left=0,
            right=bbox.image_width - 1,
        )
    elif dar is DesiredAspectRatio.TALL:
        dx = max(bbox.vertical_margin() // 2, bbox.image_height // MIN_PADDING_DIVISOR)
        planned = replace(
            bbox,
            image_width=bbox.image_width + dx * 2,
            right=bbox.right + dx * 2,
            top=0,
            bottom=bbox.image_height - 1,
        )
    else:
        raise ValueError(f"Unknown aspect ratio: {dar!r}")

    logger.debug("planned %s crop: %s", dar.value, planned)
    return planned

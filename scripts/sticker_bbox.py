from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from PIL import Image


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    """Occupied region of a canvas.

    left/right/top/bottom are the indexes of the first occupied column or row
    seen from each edge, so they are inclusive and must be kept when cropping.
    """

    image_width: int
    image_height: int
    left: int
    right: int
    top: int
    bottom: int

    def width(self) -> int:
        return self.right - self.left + 1

    def height(self) -> int:
        return self.bottom - self.top + 1

    def horizontal_margin(self) -> int:
        return self.image_width - self.width()

    def vertical_margin(self) -> int:
        return self.image_height - self.height()

    def as_rectangle(self) -> Tuple[int, int, int, int]:
        return self.left, self.top, self.width(), self.height()

    def crop_box(self) -> Tuple[int, int, int, int]:
        # Pillow boxes exclude the right and bottom edge.
        return self.left, self.top, self.right + 1, self.bottom + 1


def _first_occupied(
    alpha: Callable[[int, int], int],
    outer: Iterable[int],
    inner: Iterable[int],
    to_xy: Callable[[int, int], Tuple[int, int]],
) -> int:
    inner = list(inner)
    for a in outer:
        for b in inner:
            if alpha(*to_xy(a, b)) != 0:
                return a
    return 0


def _xy(a: int, b: int) -> Tuple[int, int]:
    return a, b


def _yx(a: int, b: int) -> Tuple[int, int]:
    return b, a


def scan(img: Image.Image) -> BoundingBox:
    """Find the first occupied column/row from each edge of `img`.

    A pixel is occupied when its alpha is non-zero. A fully transparent image
    yields a degenerate box with every index at 0.
    """
    rgba = img if img.mode == "RGBA" else img.convert("RGBA")
    width, height = rgba.size
    px = rgba.getchannel("A").load()

    def alpha(x: int, y: int) -> int:
        return px[x, y]

    left = _first_occupied(alpha, range(width), range(height), _xy)
    right = _first_occupied(alpha, range(width - 1, -1, -1), range(height), _xy)
    top = _first_occupied(alpha, range(height), range(width), _yx)
    bottom = _first_occupied(alpha, range(height - 1, -1, -1), range(width - 1, -1, -1), _yx)

    bbox = BoundingBox(
        image_width=width,
        image_height=height,
        left=left,
        right=right,
        top=top,
        bottom=bottom,
    )
    logger.debug("scanned %dx%d canvas: %s", width, height, bbox)
    return bbox

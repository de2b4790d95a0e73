from __future__ import annotations

import sys
import unittest
from pathlib import Path

from PIL import Image, ImageDraw


REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "scripts"))

from sticker_bbox import BoundingBox, scan


def make_canvas(w: int, h: int, box: tuple[int, int, int, int] | None = None, alpha: int = 255) -> Image.Image:
    img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    if box is not None:
        x0, y0, x1, y1 = box
        img.paste((200, 40, 40, alpha), (x0, y0, x1 + 1, y1 + 1))
    return img


class ScanTests(unittest.TestCase):
    def test_solid_rectangle_bounds_are_exact(self) -> None:
        bbox = scan(make_canvas(20, 15, (3, 5, 12, 9)))
        self.assertEqual(bbox, BoundingBox(image_width=20, image_height=15, left=3, right=12, top=5, bottom=9))

    def test_fully_transparent_canvas_is_degenerate(self) -> None:
        bbox = scan(make_canvas(7, 4))
        self.assertEqual((bbox.left, bbox.right, bbox.top, bbox.bottom), (0, 0, 0, 0))
        self.assertEqual((bbox.image_width, bbox.image_height), (7, 4))
        self.assertEqual((bbox.width(), bbox.height()), (1, 1))

    def test_partial_alpha_counts_as_occupied(self) -> None:
        bbox = scan(make_canvas(10, 10, (4, 2, 6, 8), alpha=1))
        self.assertEqual((bbox.left, bbox.right, bbox.top, bbox.bottom), (4, 6, 2, 8))

    def test_content_touching_every_edge(self) -> None:
        bbox = scan(make_canvas(9, 6, (0, 0, 8, 5)))
        self.assertEqual((bbox.left, bbox.right, bbox.top, bbox.bottom), (0, 8, 0, 5))
        self.assertEqual(bbox.horizontal_margin(), 0)
        self.assertEqual(bbox.vertical_margin(), 0)

    def test_scattered_pixels_give_outer_bounds(self) -> None:
        img = make_canvas(30, 20)
        img.putpixel((5, 17), (0, 0, 0, 255))
        img.putpixel((22, 3), (0, 0, 0, 255))
        img.putpixel((11, 11), (0, 0, 0, 255))
        bbox = scan(img)
        self.assertEqual((bbox.left, bbox.right, bbox.top, bbox.bottom), (5, 22, 3, 17))

    def test_opaque_mode_without_alpha_fills_canvas(self) -> None:
        bbox = scan(Image.new("RGB", (12, 8), (255, 255, 255)))
        self.assertEqual((bbox.left, bbox.right, bbox.top, bbox.bottom), (0, 11, 0, 7))

    def test_matches_pillow_alpha_bbox(self) -> None:
        img = make_canvas(64, 48)
        draw = ImageDraw.Draw(img)
        draw.ellipse((9, 7, 50, 31), outline=(0, 0, 0, 255), width=3)
        self.assertEqual(scan(img).crop_box(), img.getchannel("A").getbbox())

    def test_scan_leaves_image_untouched(self) -> None:
        img = make_canvas(16, 16, (2, 2, 5, 5))
        before = img.tobytes()
        scan(img)
        self.assertEqual(img.tobytes(), before)


class BoundingBoxTests(unittest.TestCase):
    def test_derived_extents_and_margins(self) -> None:
        bbox = BoundingBox(image_width=100, image_height=80, left=10, right=59, top=20, bottom=39)
        self.assertEqual(bbox.width(), 50)
        self.assertEqual(bbox.height(), 20)
        self.assertEqual(bbox.horizontal_margin(), 50)
        self.assertEqual(bbox.vertical_margin(), 60)

    def test_rectangle_and_crop_box(self) -> None:
        bbox = BoundingBox(image_width=100, image_height=80, left=10, right=59, top=20, bottom=39)
        self.assertEqual(bbox.as_rectangle(), (10, 20, 50, 20))
        self.assertEqual(bbox.crop_box(), (10, 20, 60, 40))

    def test_box_is_immutable(self) -> None:
        bbox = BoundingBox(image_width=4, image_height=4, left=0, right=3, top=0, bottom=3)
        with self.assertRaises(AttributeError):
            bbox.left = 1  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()

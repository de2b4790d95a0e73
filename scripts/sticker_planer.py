from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from PIL import Image

from planer_logging import setup_planer_logging
from sticker_aspect import DesiredAspectRatio, classify, plan_crop
from sticker_bbox import BoundingBox, scan


LOGGER_NAME = "sticker_planer"
OUTPUT_DIR_NAME = "StickerPlaner"
RESAMPLE = Image.Resampling.LANCZOS

logger = logging.getLogger(LOGGER_NAME)


def load_rgba(path: Path) -> Image.Image:
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    with Image.open(path) as src:
        return src.convert("RGBA")


def output_path_for(path: Path) -> Path:
    return path.parent / OUTPUT_DIR_NAME / path.name


def pad_canvas(img: Image.Image, width: int, height: int) -> Image.Image:
    """Center `img` on a transparent canvas of width x height."""
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    offset = ((width - img.width) // 2, (height - img.height) // 2)
    canvas.alpha_composite(img.convert("RGBA"), dest=offset)
    return canvas


def resize_target(size: Tuple[int, int], dar: DesiredAspectRatio) -> Tuple[int, int]:
    src_w, src_h = size
    width = dar.resize_width()
    height = dar.resize_height()
    if width == 0:
        width = max(1, round(src_w * height / src_h))
    elif height == 0:
        height = max(1, round(src_h * width / src_w))
    return width, height


def resize_to_bucket(img: Image.Image, dar: DesiredAspectRatio) -> Image.Image:
    return img.resize(resize_target(img.size, dar), RESAMPLE)


def plan_image(img: Image.Image) -> Tuple[BoundingBox, DesiredAspectRatio, BoundingBox]:
    bbox = scan(img)
    dar = classify(bbox)
    return bbox, dar, plan_crop(bbox, dar)


def apply_plan(img: Image.Image, dar: DesiredAspectRatio, crop: BoundingBox) -> Image.Image:
    padded = pad_canvas(img, crop.image_width, crop.image_height)
    return resize_to_bucket(padded.crop(crop.crop_box()), dar)


def process_image(img: Image.Image) -> Tuple[Image.Image, DesiredAspectRatio]:
    _, dar, crop = plan_image(img)
    return apply_plan(img, dar, crop), dar


def process_file(input_path: Path, output_path: Path) -> Dict[str, Any]:
    rgba = load_rgba(input_path)
    bbox, dar, crop = plan_image(rgba)
    if rgba.getchannel("A").getbbox() is None:
        logger.warning("Fully transparent image, planning on a degenerate box: %s", input_path)

    final = apply_plan(rgba, dar, crop)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    final.save(output_path)
    logger.info("Wrote %s (%s, %dx%d)", output_path, dar.value, final.width, final.height)
    return {
        "status": "ok",
        "input": str(input_path),
        "output": str(output_path),
        "aspect": dar.value,
        "bbox": list(bbox.as_rectangle()),
        "crop": list(crop.as_rectangle()),
        "size": [final.width, final.height],
    }


def run_cli(paths: List[Path]) -> int:
    results: List[Dict[str, Any]] = []
    exit_code = 0
    for path in paths:
        try:
            result = process_file(path, output_path_for(path))
        except Exception as e:
            logger.error("Failed to process %s: %s", path, e)
            result = {"status": "fail", "input": str(path), "error": str(e)}
            exit_code = 2
        results.append(result)

    payload: Dict[str, Any] = {
        "generated_at": dt.datetime.now().isoformat(timespec="seconds"),
        "output_dir_name": OUTPUT_DIR_NAME,
        "results": results,
    }
    print(json.dumps(payload, indent=2))
    return exit_code


def main() -> int:
    ap = argparse.ArgumentParser(description="Pad, crop and resize transparent stickers to a 512px canvas.")
    ap.add_argument("paths", nargs="*", help="Sticker image paths.")
    args = ap.parse_args()

    setup_planer_logging(LOGGER_NAME)
    return run_cli([Path(p) for p in args.paths])


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from fingercount_hand.detector import FingerCountDetector  # noqa: E402
from fingercount_hand.segmentation import HsvRange  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Count fingers in a single image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument("--mask", help="Read the binary mask from this file instead of HSV thresholding")
    ap.add_argument("--mask-out", help="Also write the HSV mask to this path")
    ap.add_argument("--hue", type=int, nargs=2, default=(0, 25), metavar=("MIN", "MAX"))
    ap.add_argument("--sat", type=int, nargs=2, default=(40, 255), metavar=("MIN", "MAX"))
    ap.add_argument("--val", type=int, nargs=2, default=(60, 255), metavar=("MIN", "MAX"))
    ap.add_argument("--verbose", action="store_true", help="Log per-defect geometry")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    hsv_range = HsvRange(args.hue[0], args.hue[1], args.sat[0], args.sat[1], args.val[0], args.val[1])
    detector = FingerCountDetector(hsv_range=hsv_range)

    if args.mask:
        mask = cv2.imread(args.mask, cv2.IMREAD_GRAYSCALE)
        if mask is None:
            raise RuntimeError(f"Could not read mask: {args.mask}")
        result = detector.analyze(frame, mask)
    else:
        print(hsv_range.describe())
        mask, result = detector.detect(frame)

    out = detector.draw(frame, result)
    if not cv2.imwrite(args.out, out):
        raise RuntimeError(f"Could not write output image: {args.out}")
    if args.mask_out and not cv2.imwrite(args.mask_out, mask):
        raise RuntimeError(f"Could not write mask image: {args.mask_out}")

    if not result.hand_found:
        print("no hand found")
        return 0

    print(f"fingers: {result.finger_count}")
    for i, c in enumerate(result.candidates):
        verdict = "finger" if c.is_finger else "rejected"
        print(
            f"[{i}] {verdict} depth={c.defect.depth:.1f} angle={c.angle_deg:.1f} "
            f"start->far={c.start_far:.1f} end->far={c.end_far:.1f} far={c.far.as_int()}"
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

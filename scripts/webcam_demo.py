from __future__ import annotations

import argparse
import logging
import os
import platform
import sys
import time

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from fingercount_hand.detector import FingerCountDetector  # noqa: E402
from fingercount_hand.segmentation import HsvRange  # noqa: E402

CONTROLS = "controls"
# (trackbar name, initial value, max value)
TRACKBARS = [
    ("Hue min", 0, 180),
    ("Hue max", 25, 180),
    ("Sat min", 40, 255),
    ("Sat max", 255, 255),
    ("Val min", 60, 255),
    ("Val max", 255, 255),
]


def read_hsv_range() -> HsvRange:
    """Snapshot the trackbars once per frame into an immutable range."""
    values = [cv2.getTrackbarPos(name, CONTROLS) for name, _, _ in TRACKBARS]
    return HsvRange(*values)


def main() -> int:
    ap = argparse.ArgumentParser(description="Webcam finger counter (HSV skin mask + convexity defects).")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=640, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=480, help="Capture height (best effort)")
    ap.add_argument("--fps", type=float, default=30.0, help="Target frame rate")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--verbose", action="store_true", help="Log per-defect geometry")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(args.camera, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise RuntimeError(
            f"Could not open camera index {args.camera}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, args.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, args.height)

    cv2.namedWindow(CONTROLS, cv2.WINDOW_NORMAL)
    for name, initial, maximum in TRACKBARS:
        cv2.createTrackbar(name, CONTROLS, initial, maximum, lambda _v: None)

    detector = FingerCountDetector()
    frame_period = 1.0 / args.fps if args.fps > 0 else 0.0
    last_range = None

    while True:
        t0 = time.time()
        ok, frame = cap.read()
        if not ok:
            break

        if not args.no_mirror:
            frame = cv2.flip(frame, 1)

        hsv_range = read_hsv_range()
        if hsv_range != last_range:
            print(hsv_range.describe())
            last_range = hsv_range

        mask, result = detector.detect(frame, hsv_range)
        frame = detector.draw(frame, result)

        cv2.imshow("fingercount - frame", frame)
        cv2.imshow("fingercount - mask", mask)

        wait_ms = max(1, int((frame_period - (time.time() - t0)) * 1000))
        key = cv2.waitKey(wait_ms) & 0xFF
        if key in (ord("q"), 27):
            break

    cap.release()
    cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

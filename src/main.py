"""
Self-check for the PixImage convolutions (box blur and Sobel).

Each fixture in the settings file is a grayscale grid indexed [x][y]. For every
fixture the harness checks the image size, each listed blur iteration count,
that n blur iterations equal n successive single passes, and the Sobel output.
"""
from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional

from box_blur import box_blur
from piximage import PixImage
from sobel import sobel_edges
from utils import load_settings


DEFAULT_CONFIG: Dict[str, Any] = {
    "sobel": {"border": "edge"},
    "fixtures": [
        {
            "name": "3x3",
            "pixels": [[0, 10, 240], [30, 120, 250], [80, 250, 255]],
            "blur": {
                1: [[40, 108, 155], [81, 137, 187], [120, 164, 218]],
                2: [[91, 118, 146], [108, 134, 161], [125, 151, 176]],
            },
            "sobel": [[104, 189, 180], [160, 193, 157], [166, 178, 96]],
        },
        {
            "name": "2x3",
            "pixels": [[0, 100, 100], [0, 0, 100]],
            "blur": {1: [[25, 50, 75], [25, 50, 75]]},
            "sobel": [[122, 143, 74], [74, 143, 122]],
        },
    ],
}


# ============================================================================
# Reporting
# ============================================================================

def do_test(passed: bool, msg: str, failures: List[str]) -> None:
    """Print "Good." or the failure message, and record failures."""
    if passed:
        print("Good.")
    else:
        print(msg, file=sys.stderr)
        failures.append(msg.splitlines()[0])


# ============================================================================
# Checks
# ============================================================================

def check_fixture(fixture: Dict[str, Any], border: str, failures: List[str]) -> None:
    name = fixture.get("name", "fixture")
    image = PixImage.from_grayscale(fixture["pixels"])
    expected_width = len(fixture["pixels"])
    expected_height = len(fixture["pixels"][0]) if expected_width else 0

    print(f"[INFO] Testing width/height on the {name} image. Input image:")
    print(image, end="")
    do_test(
        image.width == expected_width and image.height == expected_height,
        f"Incorrect image width and height for {name}.",
        failures,
    )

    blur_cfg = fixture.get("blur", {}) or {}
    if blur_cfg:
        print(f"[INFO] Testing blurring on the {name} image.")
    for iterations, expected in sorted(blur_cfg.items(), key=lambda item: int(item[0])):
        iterations = int(iterations)
        blurred = box_blur(image, iterations)
        do_test(
            blurred == PixImage.from_grayscale(expected),
            f"Incorrect box blur ({iterations} rep) on {name}:\n{blurred}",
            failures,
        )

        if iterations > 1:
            stepped = image
            for _ in range(iterations):
                stepped = box_blur(stepped, 1)
            do_test(
                blurred == stepped,
                f"Incorrect box blur ({iterations} rep vs {iterations} x 1 rep) on {name}:\n"
                f"{blurred}{stepped}",
                failures,
            )

    expected_edges = fixture.get("sobel")
    if expected_edges is not None:
        print(f"[INFO] Testing edge detection on the {name} image.")
        edges = sobel_edges(image, border=border)
        do_test(
            edges == PixImage.from_grayscale(expected_edges),
            f"Incorrect Sobel on {name}:\n{edges}",
            failures,
        )


def run_checks(config: Dict[str, Any]) -> List[str]:
    """Run every configured fixture; returns the failure messages."""
    border = config.get("sobel", {}).get("border", "edge")
    failures: List[str] = []

    for fixture in config.get("fixtures", []):
        check_fixture(fixture, border, failures)

    return failures


# ============================================================================
# Entry Point
# ============================================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="PixImage convolution self-check")
    parser.add_argument(
        "--config", "-c",
        default="config/settings.yaml",
        help="Path to YAML file with fixtures",
    )
    parser.add_argument(
        "--border", "-b",
        choices=["edge", "window"],
        default=None,
        help="Sobel border policy (overrides the settings file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_settings(args.config)
    except FileNotFoundError:
        print(f"[INFO] Config not found: {args.config}, using built-in fixtures...")
        config = DEFAULT_CONFIG

    if args.border:
        config = {**config, "sobel": {**config.get("sobel", {}), "border": args.border}}

    failures = run_checks(config)
    if failures:
        print(f"[INFO] {len(failures)} check(s) failed")
        return 1
    print("[INFO] All checks passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())

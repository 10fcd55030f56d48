"""Command-line interface for houghlines."""

import argparse
import json
import sys
from dataclasses import replace

import matplotlib.pyplot as plt

from .core import (
    HoughConfig,
    decode_image,
    line_endpoints,
    lines_to_records,
    load_config,
    run_pipeline,
    save_config,
    save_raster_image,
)
from .log import setup_logging


def build_parser():
    parser = argparse.ArgumentParser(description="Detect straight lines in an image.")
    parser.add_argument("image", help="Path to the image file.")
    parser.add_argument("-c", "--config", help="Path to a YAML file with detection parameters.")
    parser.add_argument("--threshold", type=float, help="Binarization cutoff in [0, 1].")
    parser.add_argument("--maxima-threshold", type=float, help="Minimum votes for a line.")
    parser.add_argument("--min-width", type=float, help="Minimum projected line width.")
    parser.add_argument("--min-height", type=float, help="Minimum projected line height.")
    parser.add_argument(
        "--clustering", choices=["scan", "label"], help="Maxima clustering method."
    )
    parser.add_argument("--save-config", help="Write the effective parameters to this YAML file.")
    parser.add_argument("--hough-image", help="Write the accumulator to this image file.")
    parser.add_argument("--json", action="store_true", help="Print lines as JSON records.")
    parser.add_argument("--show", action="store_true", help="Show the lines over the image.")
    parser.add_argument("--log-level", default="WARNING", help="Loguru level for stderr.")
    return parser


def show_lines(image, lines):
    """Plot the detected lines over the image."""
    fig, ax = plt.subplots()
    ax.imshow(image.interior, cmap="gray")
    ax.set_title(f"{len(lines)} lines")
    for line in lines:
        ends = line_endpoints(line.r, line.theta, image.width - 1, image.height - 1)
        if ends:
            (x1, y1), (x2, y2) = ends
            ax.plot([x1, x2], [y1, y2], color="red", linewidth=2)
    plt.show()


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config) if args.config else HoughConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    overrides = {
        "threshold": args.threshold,
        "maxima_threshold": args.maxima_threshold,
        "min_width": args.min_width,
        "min_height": args.min_height,
        "clustering": args.clustering,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    config = config.validated()

    try:
        image = decode_image(args.image)
    except Exception as e:
        print(f"Error loading image: {e}", file=sys.stderr)
        sys.exit(1)

    result = run_pipeline(image, config)

    if args.save_config:
        save_config(config, args.save_config)
    if args.hough_image:
        save_raster_image(result.space.raster, args.hough_image)

    if args.json:
        print(json.dumps(lines_to_records(result.lines), indent=2))
    else:
        for line in result.lines:
            print(
                f"r={line.r:.2f} theta={line.theta:.4f} "
                f"({line.x1:.1f}, {line.y1:.1f}) -> ({line.x2:.1f}, {line.y2:.1f}) "
                f"width={line.width:.1f} height={line.height:.1f}"
            )

    if args.show:
        show_lines(image, result.lines)


if __name__ == "__main__":
    main()

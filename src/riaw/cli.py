"""Command-line driver that renders the placeholder gradient image.

Usage:
    riaw [options]
    python -m riaw.cli [options]

Options:
    --width WIDTH       Image width in pixels (default: 256)
    --height HEIGHT     Image height in pixels (default: 256)
    --blue BLUE         Constant blue channel in [0, 1] (default: 0.25)
    --output OUTPUT     Output file path, .ppm or .png (default: riaw.ppm)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --quiet             Suppress progress output

Example:
    riaw --width 200 --height 100 --output gradient.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from riaw.config import SUPPORTED_ARCHS, RenderConfig, init_taichi


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        prog="riaw",
        description="Render the placeholder gradient image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=defaults.width,
        help=f"Image width in pixels (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=defaults.height,
        help=f"Image height in pixels (default: {defaults.height})",
    )
    parser.add_argument(
        "--blue",
        type=float,
        default=defaults.blue,
        help=f"Constant blue channel in [0, 1] (default: {defaults.blue})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=defaults.output,
        help=f"Output file path, .ppm or .png (default: {defaults.output})",
    )
    parser.add_argument(
        "--arch",
        choices=SUPPORTED_ARCHS,
        default=defaults.arch,
        help=f"Taichi backend (default: {defaults.arch})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    """Build a RenderConfig from parsed arguments."""
    return RenderConfig(
        width=args.width,
        height=args.height,
        output=args.output,
        blue=args.blue,
        arch=args.arch,
        quiet=args.quiet,
    )


def render(config: RenderConfig) -> Path:
    """Render the gradient described by config and save it.

    Taichi must already be initialized.

    Args:
        config: The render settings.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so that Taichi fields are created after initialization
    from riaw.output.export import save_image
    from riaw.output.gradient import render_gradient

    start_time = time.time()

    def progress_callback(remaining: int) -> None:
        if not config.quiet:
            print(f"Scanlines remaining: {remaining}", file=sys.stderr)

    image = render_gradient(
        config.width,
        config.height,
        blue=config.blue,
        callback=progress_callback,
    )
    output_file = save_image(image, config.output)

    if not config.quiet:
        total_time = time.time() - start_time
        print(f"Saved to: {output_file.absolute()}", file=sys.stderr)
        print(f"Total time: {total_time:.2f}s", file=sys.stderr)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = config_from_args(args)

    try:
        config.validate()
        backend = init_taichi(config.arch)
        if not config.quiet:
            print(f"Using {backend.upper()} backend", file=sys.stderr)
        render(config)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

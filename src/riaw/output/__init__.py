"""Output module for the placeholder render target.

Components:
    gradient: Static colour gradient rendered scanline by scanline
    export: PPM (P3) and PNG writers with 8-bit quantization

Example:
    >>> from riaw.output import render_gradient, save_image
    >>> image = render_gradient(256, 256, blue=0.25)
    >>> save_image(image, "riaw.ppm")
"""

from riaw.output.export import (
    encode_ppm,
    save_image,
    save_png,
    to_byte_image,
    write_ppm,
)
from riaw.output.gradient import ScanlineCallback, render_gradient

__all__ = [
    # Render target
    "render_gradient",
    "ScanlineCallback",
    # Export functions
    "to_byte_image",
    "encode_ppm",
    "write_ppm",
    "save_png",
    "save_image",
]

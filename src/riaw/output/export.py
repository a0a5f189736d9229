"""Image export utilities for rendered images.

Images are written exactly as given: no tone mapping, gamma correction or
colour-space conversion is applied. Float channels are clamped to [0, 1]
and quantized with ``int(255.99 * c)``.

Supported formats:
    - PPM (ASCII ``P3``, max value 255)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from riaw.output.export import save_image
    >>> from riaw.output.gradient import render_gradient
    >>> image = render_gradient(256, 256)
    >>> save_image(image, "riaw.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Scale that maps 1.0 to 255 after truncation
BYTE_SCALE = 255.99

SUPPORTED_SUFFIXES = (".ppm", ".png")


def _check_image_shape(image: npt.NDArray) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")


def to_byte_image(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit channels.

    Args:
        image: Float image array of shape (H, W, 3).

    Returns:
        Array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the array is not (H, W, 3).
    """
    _check_image_shape(image)
    clamped = np.clip(image.astype(np.float32), 0.0, 1.0)
    return (np.float32(BYTE_SCALE) * clamped).astype(np.uint8)


def encode_ppm(pixels: npt.NDArray[np.uint8]) -> str:
    """Encode 8-bit pixels as an ASCII PPM (P3) document.

    The header is ``P3\\n<width> <height>\\n255\\n``, followed by one
    ``R G B`` line per pixel, left to right, top to bottom.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8.

    Returns:
        The PPM text.

    Raises:
        ValueError: If the array is not (H, W, 3).
    """
    _check_image_shape(pixels)
    height, width = pixels.shape[:2]
    lines = [f"P3\n{width} {height}\n255\n"]
    for r, g, b in pixels.reshape(-1, 3).tolist():
        lines.append(f"{r} {g} {b}\n")
    return "".join(lines)


def write_ppm(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Write 8-bit pixels to an ASCII PPM file.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path. An existing file is replaced.
    """
    Path(filepath).write_text(encode_ppm(pixels), encoding="ascii")


def save_png(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Write 8-bit pixels to a PNG file.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path.
    """
    _check_image_shape(pixels)
    pil_image = PILImage.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    pil_image.save(filepath, format="PNG")


def save_image(image: npt.NDArray[np.float32], filepath: str | Path) -> Path:
    """Quantize a float image and save it, choosing the format by suffix.

    Args:
        image: Float image array of shape (H, W, 3), row 0 at the top.
        filepath: Output path ending in .ppm or .png.

    Returns:
        The path written.

    Raises:
        ValueError: If the suffix is unsupported or the array is not
            (H, W, 3).
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported output format '{path.suffix}'. "
            f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    pixels = to_byte_image(image)
    if suffix == ".ppm":
        write_ppm(pixels, path)
    else:
        save_png(pixels, path)
    return path

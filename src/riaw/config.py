"""Render configuration and Taichi backend setup.

``RenderConfig`` collects every setting of the image driver in one place so
the CLI, scripts and tests build renders the same way.

Example:
    >>> from riaw.config import RenderConfig, init_taichi
    >>> config = RenderConfig(width=128, height=64, output="gradient.png")
    >>> config.validate()
    >>> backend = init_taichi(config.arch)
"""

from dataclasses import dataclass
from typing import Literal

import taichi as ti

# Backends the driver can be asked for
Arch = Literal["cpu", "gpu"]

SUPPORTED_ARCHS = ("cpu", "gpu")


@dataclass
class RenderConfig:
    """Settings for rendering the placeholder image.

    Attributes:
        width: Image width in pixels. Default is 256.
        height: Image height in pixels. Default is 256.
        output: Output file path; .ppm writes ASCII PPM, .png writes PNG.
        blue: Constant blue channel of the gradient, in [0, 1].
        arch: Requested backend, "cpu" or "gpu". "gpu" falls back to the
            CPU when no GPU backend is available.
        quiet: Suppress progress output.
    """

    width: int = 256
    height: int = 256
    output: str = "riaw.ppm"
    blue: float = 0.25
    arch: Arch = "cpu"
    quiet: bool = False

    def validate(self) -> None:
        """Check that the settings describe a renderable image.

        Raises:
            ValueError: If the dimensions are not positive, the blue channel
                is outside [0, 1], or the backend is unknown.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 <= self.blue <= 1.0:
            raise ValueError(f"Blue channel = {self.blue} is outside [0, 1]")
        if self.arch not in SUPPORTED_ARCHS:
            raise ValueError(
                f"Unknown arch '{self.arch}'. Supported: {', '.join(SUPPORTED_ARCHS)}"
            )


def init_taichi(arch: Arch = "cpu") -> str:
    """Initialize the Taichi runtime.

    Args:
        arch: Requested backend. "gpu" falls back to the CPU backend if
            initialization fails.

    Returns:
        The name of the backend that was initialized ("gpu" or "cpu").
    """
    if arch == "gpu":
        try:
            ti.init(arch=ti.gpu)
            return "gpu"
        except Exception:
            ti.init(arch=ti.cpu)
            return "cpu"

    ti.init(arch=ti.cpu)
    return "cpu"

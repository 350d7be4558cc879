"""Output module for rendered frames.

Components:
    export: 8-bit RGBA quantization and PNG export via Pillow

Example:
    >>> from src.spheretrace.output import save_png
    >>> save_png(renderer, "fireball.png")
"""

from src.spheretrace.output.export import (
    quantize_rgba,
    save_png,
    save_png_from_array,
)

__all__ = [
    "quantize_rgba",
    "save_png",
    "save_png_from_array",
]

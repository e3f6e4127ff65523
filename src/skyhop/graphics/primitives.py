"""Basic drawing primitives on numpy RGB buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(int(x), w))
    y1 = max(0, min(int(y), h))
    x2 = max(0, min(int(x + width), w))
    y2 = max(0, min(int(y + height), h))
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        buffer[y1, x1:x2] = color
        buffer[y2 - 1, x1:x2] = color
        buffer[y1:y2, x1] = color
        buffer[y1:y2, x2 - 1] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a circle, working only on its bounding box.

    An outline is the one-pixel ring between radius - 1 and radius.
    """
    h, w = buffer.shape[:2]
    x1 = max(0, int(cx - radius))
    y1 = max(0, int(cy - radius))
    x2 = min(w, int(cx + radius) + 1)
    y2 = min(h, int(cy + radius) + 1)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    dist_sq = (xs - cx) ** 2 + (ys - cy) ** 2
    mask = dist_sq <= radius ** 2
    if not filled:
        mask &= dist_sq >= (radius - 1) ** 2
    buffer[y1:y2, x1:x2][mask] = color


def blend_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a filled rectangle over the buffer."""
    h, w = buffer.shape[:2]
    x1 = max(0, min(int(x), w))
    y1 = max(0, min(int(y), h))
    x2 = max(0, min(int(x + width), w))
    y2 = max(0, min(int(y + height), h))
    if x2 <= x1 or y2 <= y1:
        return

    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = blended.astype(np.uint8)

"""Drawing primitives on numpy RGB buffers.

All functions take a (height, width, 3) uint8 array and clip to its
bounds, so callers may pass coordinates that lie partly off-screen.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a buffer of the given size filled with color."""
    buffer = np.zeros((max(height, 0), max(width, 0), 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Fill an axis-aligned rectangle.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge
        y: Top edge
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(int(x), w))
    y1 = max(0, min(int(y), h))
    x2 = max(0, min(int(x + width), w))
    y2 = max(0, min(int(y + height), h))

    if x2 > x1 and y2 > y1:
        buffer[y1:y2, x1:x2] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
) -> None:
    """Fill a disc. Only the bounding box is scanned."""
    h, w = buffer.shape[:2]

    x1 = max(0, int(cx - radius))
    y1 = max(0, int(cy - radius))
    x2 = min(w, int(cx + radius) + 1)
    y2 = min(h, int(cy + radius) + 1)
    if x2 <= x1 or y2 <= y1:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2
    buffer[y1:y2, x1:x2][mask] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm."""
    h, w = buffer.shape[:2]
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy
    half = thickness // 2

    x, y = x1, y1
    while True:
        px1, px2 = max(0, x - half), min(w, x - half + thickness)
        py1, py2 = max(0, y - half), min(h, y - half + thickness)
        if px2 > px1 and py2 > py1:
            buffer[py1:py2, px1:px2] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy

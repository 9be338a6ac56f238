"""
Drawing helpers for the decorative scene grid.
"""

from __future__ import annotations


# =============================================================================
# Grid Colors
# =============================================================================

GRID_LINE_COLOR = (128, 128, 128, 255)
GRID_AXIS_COLOR = (0, 0, 0, 255)


# =============================================================================
# Grid Generation
# =============================================================================

def create_grid_vertices(
    slices: int,
    spacing: float,
    y: float = 0.0,
) -> list[float]:
    """
    Create vertex data for a square grid on the XZ plane.

    Args:
        slices: Number of cells along each axis
        spacing: Cell size
        y: Height of the grid plane

    Returns:
        List of vertices [x, y, z, x, y, z, ...] for GL_LINES, lines
        parallel to Z first, then lines parallel to X
    """
    slices = max(2, int(slices))
    spacing = max(0.1, float(spacing))
    half = slices // 2
    extent = half * spacing

    vertices: list[float] = []
    for i in range(-half, half + 1):
        v = i * spacing
        vertices.extend((v, y, -extent, v, y, extent))
    for i in range(-half, half + 1):
        v = i * spacing
        vertices.extend((-extent, y, v, extent, y, v))
    return vertices


def create_grid_colors(
    slices: int,
    line_color: tuple[int, int, int, int] = GRID_LINE_COLOR,
    axis_color: tuple[int, int, int, int] = GRID_AXIS_COLOR,
) -> list[int]:
    """
    Create color data matching create_grid_vertices.

    The two lines through the origin use axis_color.

    Returns:
        List of colors [r, g, b, a, r, g, b, a, ...]
    """
    half = max(2, int(slices)) // 2
    colors: list[int] = []
    for _ in range(2):
        for i in range(-half, half + 1):
            color = axis_color if i == 0 else line_color
            colors.extend(color * 2)
    return colors

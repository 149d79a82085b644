"""Layout rendering for feasible placements.

This module provides SVG and ASCII rendering of one container layout
showing piece placements, ids, and the share of the container left empty.
Placements use bottom-left coordinates; both renderers draw the container
with its origin at the bottom left.
"""

from __future__ import annotations

import math
import string

from rectlayers.domain import Layout, PlacedPiece

# Fill colors cycled by piece id
PIECE_COLORS: tuple[str, ...] = (
    "#87CEEB",  # Sky blue
    "#90EE90",  # Light green
    "#DDA0DD",  # Plum
    "#F0E68C",  # Khaki
    "#FFB6C1",  # Light pink
    "#FFA07A",  # Light salmon
    "#FFD700",  # Gold
    "#DEB887",  # Burlywood
    "#E6E6FA",  # Lavender
    "#BC8F8F",  # Rosy brown
)

# Characters used to mark piece cells in ASCII output, indexed by id
LABEL_CHARS = string.digits + string.ascii_uppercase + string.ascii_lowercase
EMPTY_CELL = "."


def label_char(piece_id: int) -> str:
    """Single character standing for a piece id in ASCII output."""
    return LABEL_CHARS[piece_id % len(LABEL_CHARS)]


class LayoutRenderer:
    """Renders a container layout in SVG or ASCII.

    Attributes:
        scale: Pixels per unit for SVG rendering.
        piece_stroke: Stroke color for piece outlines.
        text_color: Color for labels and the caption.
        show_dimensions: Whether to print piece dimensions under the id.
    """

    def __init__(
        self,
        scale: float = 10.0,
        piece_stroke: str = "#000000",
        text_color: str = "#000000",
        show_dimensions: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.scale = scale
        self.piece_stroke = piece_stroke
        self.text_color = text_color
        self.show_dimensions = show_dimensions

    def caption(self, layout: Layout) -> str:
        ids = ",".join(str(piece_id) for piece_id in layout.ids)
        return f"Layer {ids} - {layout.waste_percentage:.1f}% waste"

    def render_svg(self, layout: Layout) -> str:
        """Generate an SVG document for one layout.

        Args:
            layout: Feasible layout to draw.

        Returns:
            SVG string representation of the layout.
        """
        container = layout.container
        header_height = 30
        svg_width = container.width * self.scale
        container_height = container.height * self.scale
        svg_height = container_height + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" fill="white"/>',
            "  <!-- Caption -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" fill="#E0E0E0"/>',
            f'  <text x="10" y="{header_height - 8}" font-family="Arial, sans-serif" '
            f'font-size="14" fill="{self.text_color}">{self.caption(layout)}</text>',
            "  <!-- Container outline -->",
            f'  <rect x="0" y="{header_height}" width="{svg_width}" '
            f'height="{container_height}" fill="#F5F5DC" '
            f'stroke="{self.piece_stroke}" stroke-width="2"/>',
            "  <!-- Placed pieces -->",
        ]
        for placed in layout.placements:
            parts.append(self._render_piece(placed, container.height, header_height))
        parts.append("</svg>")
        return "\n".join(parts)

    def _render_piece(
        self,
        placed: PlacedPiece,
        container_height: int,
        header_height: float,
    ) -> str:
        piece = placed.piece
        x = placed.x * self.scale
        # flip to SVG's top-left origin
        y = header_height + (container_height - placed.top_edge) * self.scale
        w = piece.width * self.scale
        h = piece.height * self.scale
        fill = PIECE_COLORS[piece.id % len(PIECE_COLORS)]

        svg_parts = [
            f'  <g id="piece-{piece.id}">',
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill}" stroke="{self.piece_stroke}"/>',
        ]
        font_size = min(12, min(w, h) / 3)
        if font_size >= 6:
            text_x = x + w / 2
            text_y = y + h / 2
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y}" text-anchor="middle" '
                f'font-family="Arial, sans-serif" font-size="{font_size}" '
                f'fill="{self.text_color}">{piece.id}</text>'
            )
            if self.show_dimensions:
                svg_parts.append(
                    f'    <text x="{text_x}" y="{text_y + font_size}" text-anchor="middle" '
                    f'font-family="Arial, sans-serif" font-size="{font_size * 0.8}" '
                    f'fill="{self.text_color}">{piece.width} x {piece.height}</text>'
                )
        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def render_ascii(self, layout: Layout, max_columns: int = 78) -> str:
        """Generate an ASCII grid for one layout.

        Each character covers ``step x step`` units, where step is the
        smallest integer that keeps the grid within max_columns. A cell shows
        the piece covering its lower-left unit, or EMPTY_CELL.

        Args:
            layout: Feasible layout to draw.
            max_columns: Maximum grid width in characters, borders excluded.

        Returns:
            ASCII string representation of the layout.
        """
        if max_columns < 1:
            raise ValueError("max_columns must be at least 1")
        container = layout.container
        step = math.ceil(container.width / max_columns)
        columns = math.ceil(container.width / step)
        rows = math.ceil(container.height / step)

        grid = [[EMPTY_CELL] * columns for _ in range(rows)]
        for placed in layout.placements:
            char = label_char(placed.piece.id)
            for row in range(rows):
                y = row * step
                if not placed.y <= y < placed.top_edge:
                    continue
                for column in range(columns):
                    if placed.x <= column * step < placed.right_edge:
                        grid[row][column] = char

        lines = [self.caption(layout), "+" + "-" * columns + "+"]
        # highest row first so the origin ends up bottom left
        for row in reversed(grid):
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * columns + "+")
        return "\n".join(lines)

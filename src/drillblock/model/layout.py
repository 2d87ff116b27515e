"""
Block Layout Calculator
=======================
Closed-form placement of the box and the cylindrical cutters of one block.

Both the mesh pipeline and the Rhino script emitter read their numbers from
here, so the preview and the exported script describe the same solid.

Coordinate frame: Z is the long axis of the block (height), X is the batch
direction (width), Y is the depth. Cutter centres are relative to the block
centre; the block itself sits at (x_offset, 0, 0).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from drillblock.config import (
    BOX_WIDTH, BOX_DEPTH, HEIGHT_PER_HOLE, FIRST_HOLE_OFFSET, HOLE_STEP,
    BATCH_SPACING, CROSS_LENGTH, VERTICAL_MARGIN,
)

if TYPE_CHECKING:
    from drillblock.model.state import Configuration


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Axis(StrEnum):
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def normal(self) -> tuple[float, float, float]:
        """Unit vector along the axis."""
        return {
            Axis.X: (1.0, 0.0, 0.0),
            Axis.Y: (0.0, 1.0, 0.0),
            Axis.Z: (0.0, 0.0, 1.0),
        }[self]


class CutterKind(StrEnum):
    VERTICAL = "vertical"        # drill along the long axis
    THROUGH = "through"          # cross hole at a hole level
    SIDE_GROOVE = "side_groove"  # groove near a lateral face
    END_GROOVE = "end_groove"    # groove near the top/bottom face


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Cutter:
    """A cylinder that is subtracted from the block box."""
    kind: CutterKind
    axis: Axis
    center: tuple[float, float, float]
    radius: float
    length: float

    def translated(self, dx: float) -> tuple[float, float, float]:
        """Absolute centre for a block shifted by `dx` along X."""
        x, y, z = self.center
        return x + dx, y, z

    @property
    def base_point(self) -> tuple[float, float, float]:
        """Centre of the start cap (cylinder runs from here along +axis)."""
        nx, ny, nz = self.axis.normal
        half = self.length / 2
        x, y, z = self.center
        return x - nx * half, y - ny * half, z - nz * half


@dataclass(frozen=True)
class BlockLayout:
    """Everything needed to build one block, independent of the renderer."""
    hole_count: int
    x_offset: float
    width: float
    depth: float
    height: float
    drill_radius: float
    groove_depth: float
    hole_levels: tuple[float, ...]
    side_groove_offset: float
    end_groove_offset: float
    cutters: tuple[Cutter, ...]

    @property
    def has_grooves(self) -> bool:
        return self.groove_depth > 0

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """Box bounds as (xmin, xmax, ymin, ymax, zmin, zmax)."""
        return (
            self.x_offset - self.width / 2, self.x_offset + self.width / 2,
            -self.depth / 2, self.depth / 2,
            -self.height / 2, self.height / 2,
        )

    def cutters_of(self, kind: CutterKind) -> list[Cutter]:
        return [c for c in self.cutters if c.kind == kind]


# ------------------------------------------------------------------------------
# Formulas
# ------------------------------------------------------------------------------
def block_height(hole_count: int) -> float:
    return hole_count * HEIGHT_PER_HOLE


def hole_level(index: int, height: float) -> float:
    """Axial position of the i-th hole level, measured from the block centre."""
    return -height / 2 + FIRST_HOLE_OFFSET + index * HOLE_STEP


def side_groove_offset(drill_radius: float, groove_depth: float) -> float:
    """Distance from the block axis to the centre of a side groove cutter."""
    return BOX_WIDTH / 2 - groove_depth + drill_radius


def end_groove_offset(height: float, drill_radius: float, groove_depth: float) -> float:
    """Distance from the block centre to the centre of a top/bottom groove cutter."""
    return height / 2 - groove_depth + drill_radius


def _cross_pair(kind: CutterKind, center: tuple[float, float, float], radius: float) -> list[Cutter]:
    """Two perpendicular lateral cylinders through the same point (X first, then Y)."""
    return [
        Cutter(kind=kind, axis=Axis.X, center=center, radius=radius, length=CROSS_LENGTH),
        Cutter(kind=kind, axis=Axis.Y, center=center, radius=radius, length=CROSS_LENGTH),
    ]


def compute_block_layout(
    hole_count: int,
    drill_radius: float,
    groove_depth: float,
    x_offset: float = 0.0
) -> BlockLayout:
    """
    Compute box dimensions and the ordered cutter list of one block.

    The order is fixed: vertical hole, then for every level the two through
    holes followed by the four side grooves, then the top and bottom grooves.
    Callers sanitize the inputs (hole_count >= 1, drill_radius > 0,
    groove_depth >= 0); nothing is validated here.
    """
    r = drill_radius
    d = groove_depth
    height = block_height(hole_count)
    grooves = d > 0

    g = side_groove_offset(r, d)
    t = end_groove_offset(height, r, d)

    cutters: list[Cutter] = [
        Cutter(
            kind=CutterKind.VERTICAL,
            axis=Axis.Z,
            center=(0.0, 0.0, 0.0),
            radius=r,
            length=height + VERTICAL_MARGIN,
        )
    ]

    levels = tuple(hole_level(i, height) for i in range(hole_count))
    for z in levels:
        cutters.extend(_cross_pair(CutterKind.THROUGH, (0.0, 0.0, z), r))

        if grooves:
            # Grooves run parallel to the face they cut, next to the through hole
            cutters.append(Cutter(CutterKind.SIDE_GROOVE, Axis.X, (0.0, g, z), r, CROSS_LENGTH))
            cutters.append(Cutter(CutterKind.SIDE_GROOVE, Axis.X, (0.0, -g, z), r, CROSS_LENGTH))
            cutters.append(Cutter(CutterKind.SIDE_GROOVE, Axis.Y, (g, 0.0, z), r, CROSS_LENGTH))
            cutters.append(Cutter(CutterKind.SIDE_GROOVE, Axis.Y, (-g, 0.0, z), r, CROSS_LENGTH))

    if grooves:
        cutters.extend(_cross_pair(CutterKind.END_GROOVE, (0.0, 0.0, t), r))
        cutters.extend(_cross_pair(CutterKind.END_GROOVE, (0.0, 0.0, -t), r))

    return BlockLayout(
        hole_count=hole_count,
        x_offset=x_offset,
        width=BOX_WIDTH,
        depth=BOX_DEPTH,
        height=height,
        drill_radius=r,
        groove_depth=d,
        hole_levels=levels,
        side_groove_offset=g,
        end_groove_offset=t,
        cutters=tuple(cutters),
    )


def compute_layouts(configuration: Configuration) -> list[BlockLayout]:
    """One layout per requested hole count, laid out along X at BATCH_SPACING."""
    return [
        compute_block_layout(
            hole_count=holes,
            drill_radius=configuration.drill_radius,
            groove_depth=configuration.groove_depth,
            x_offset=index * BATCH_SPACING,
        )
        for index, holes in enumerate(configuration.hole_counts)
    ]

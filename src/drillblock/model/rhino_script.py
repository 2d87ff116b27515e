"""
Rhino Script Emitter
====================
Renders the block layout as a RhinoPython (rhinoscriptsyntax) program.

The emitted program rebuilds every block with Rhino's own primitives
(AddBox from corner points, AddCylinder on a plane, BooleanDifference). All
numbers embedded in it come from the layout module and the current
configuration, so a script exported right after a preview reproduces it.
The script is only written out, never executed here.
"""
from __future__ import annotations

from drillblock.config import (
    BOX_WIDTH, BOX_DEPTH, HEIGHT_PER_HOLE, FIRST_HOLE_OFFSET, HOLE_STEP,
    BATCH_SPACING, CROSS_LENGTH, VERTICAL_MARGIN,
)
from drillblock.model.layout import side_groove_offset
from drillblock.model.state import Configuration


SCRIPT_TEMPLATE = '''\
import rhinoscriptsyntax as rs

# Generated by drillblock
WIDTH = {width!r}
DEPTH = {depth!r}
HEIGHT_PER_HOLE = {height_per_hole!r}
FIRST_HOLE_OFFSET = {first_hole_offset!r}
HOLE_STEP = {hole_step!r}
RADIUS = {radius!r}
GROOVE_DEPTH = {groove_depth!r}
SIDE_GROOVE_OFFSET = {side_groove_offset!r}
CROSS_LENGTH = {cross_length!r}
VERTICAL_MARGIN = {vertical_margin!r}


def add_cross_cutter(center, normal):
    """Cylinder of CROSS_LENGTH centred on `center`, running along `normal`."""
    half = CROSS_LENGTH / 2
    base = [center[i] - normal[i] * half for i in range(3)]
    plane = rs.PlaneFromNormal(base, normal)
    return rs.AddCylinder(plane, CROSS_LENGTH, RADIUS)


def create_block(num_holes, x_offset):
    height = num_holes * HEIGHT_PER_HOLE

    # Base Box, centred at (x_offset, 0, 0)
    cx = x_offset
    x0, x1 = cx - WIDTH / 2, cx + WIDTH / 2
    y0, y1 = -DEPTH / 2, DEPTH / 2
    z0, z1 = -height / 2, height / 2
    corners = [
        [x0, y0, z0], [x1, y0, z0], [x1, y1, z0], [x0, y1, z0],
        [x0, y0, z1], [x1, y0, z1], [x1, y1, z1], [x0, y1, z1],
    ]
    base_id = rs.AddBox(corners)

    cutters = []

    # Vertical Hole
    v_length = height + VERTICAL_MARGIN
    plane_v = rs.PlaneFromNormal([cx, 0, -v_length / 2], [0, 0, 1])
    cutters.append(rs.AddCylinder(plane_v, v_length, RADIUS))

    g = SIDE_GROOVE_OFFSET
    for i in range(num_holes):
        z_pos = -height / 2 + FIRST_HOLE_OFFSET + i * HOLE_STEP

        # Through Holes
        cutters.append(add_cross_cutter([cx, 0, z_pos], [1, 0, 0]))
        cutters.append(add_cross_cutter([cx, 0, z_pos], [0, 1, 0]))

        if GROOVE_DEPTH > 0:
            # Side Grooves (+Y, -Y, +X, -X)
            cutters.append(add_cross_cutter([cx, g, z_pos], [1, 0, 0]))
            cutters.append(add_cross_cutter([cx, -g, z_pos], [1, 0, 0]))
            cutters.append(add_cross_cutter([cx + g, 0, z_pos], [0, 1, 0]))
            cutters.append(add_cross_cutter([cx - g, 0, z_pos], [0, 1, 0]))

    # Top/Bottom Grooves
    if GROOVE_DEPTH > 0:
        tb_offset = height / 2 - GROOVE_DEPTH + RADIUS
        for z_pos in (tb_offset, -tb_offset):
            cutters.append(add_cross_cutter([cx, 0, z_pos], [1, 0, 0]))
            cutters.append(add_cross_cutter([cx, 0, z_pos], [0, 1, 0]))

    return rs.BooleanDifference(base_id, cutters)


def main():
    rs.UnitSystem(2)
    rs.EnableRedraw(False)

    blocks = [{blocks}]
    spacing = {spacing!r}

    for i, h in enumerate(blocks):
        x_pos = i * spacing
        create_block(h, x_pos)

    rs.EnableRedraw(True)
    print("Batch Generated")


if __name__ == "__main__":
    main()
'''


def script_literals(configuration: Configuration) -> dict[str, float]:
    """Numeric values embedded in the script for the given configuration."""
    r = float(configuration.drill_radius)
    d = float(configuration.groove_depth)
    return {
        "width": float(BOX_WIDTH),
        "depth": float(BOX_DEPTH),
        "height_per_hole": float(HEIGHT_PER_HOLE),
        "first_hole_offset": float(FIRST_HOLE_OFFSET),
        "hole_step": float(HOLE_STEP),
        "radius": r,
        "groove_depth": d,
        "side_groove_offset": side_groove_offset(r, d),
        "cross_length": float(CROSS_LENGTH),
        "vertical_margin": float(VERTICAL_MARGIN),
        "spacing": float(BATCH_SPACING),
    }


def emit_rhino_script(configuration: Configuration) -> str:
    """Return the RhinoPython program that builds every block of `configuration`."""
    blocks = ", ".join(str(int(n)) for n in configuration.hole_counts)
    return SCRIPT_TEMPLATE.format(blocks=blocks, **script_literals(configuration))

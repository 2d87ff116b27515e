"""
Solid Builder (Geometry Pipeline)
=================================
Turns block layouts into triangle meshes by subtracting every cutter cylinder
from the block box, one boolean difference at a time.

Why is this file needed?
------------------------
1. Preview: The 3D view renders the meshes produced here.
2. Export: The OBJ exporter writes the very same meshes.
3. Ownership: The builder owns the current generation and releases it before
   the next one is built, so repeated regeneration does not accumulate meshes.

Classes:
    GeneratedSolid: One finished block.
    SolidBuilder: Builds and owns the current set of solids.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce

import numpy as np
import trimesh
from trimesh.creation import box, cylinder

from drillblock.config import PREVIEW_SEGMENTS
from drillblock.model.layout import Axis, BlockLayout, Cutter, compute_layouts
from drillblock.model.state import Configuration

logger = logging.getLogger(__name__)

# Cylinders are created along Z; these rotations lay them along the other axes
_AXIS_ROTATIONS: dict[Axis, np.ndarray] = {
    Axis.X: trimesh.transformations.rotation_matrix(np.pi / 2, [0, 1, 0]),
    Axis.Y: trimesh.transformations.rotation_matrix(-np.pi / 2, [1, 0, 0]),
    Axis.Z: np.eye(4),
}


@dataclass
class GeneratedSolid:
    """A finished block, ready for rendering or export."""
    index: int
    layout: BlockLayout
    mesh: trimesh.Trimesh

    @property
    def x_offset(self) -> float:
        return self.layout.x_offset

    @property
    def name(self) -> str:
        return f"block_{self.index}_{self.layout.hole_count}holes"


def make_box_mesh(layout: BlockLayout) -> trimesh.Trimesh:
    """Rectangular box of the block, centred at (x_offset, 0, 0)."""
    transform = trimesh.transformations.translation_matrix([layout.x_offset, 0.0, 0.0])
    return box(extents=[layout.width, layout.depth, layout.height], transform=transform)


def make_cutter_mesh(cutter: Cutter, x_offset: float, sections: int = PREVIEW_SEGMENTS) -> trimesh.Trimesh:
    """Cylinder mesh of one cutter, placed in world coordinates."""
    transform = _AXIS_ROTATIONS[cutter.axis].copy()
    transform[:3, 3] = cutter.translated(x_offset)
    return cylinder(
        radius=cutter.radius,
        height=cutter.length,
        sections=sections,
        transform=transform
    )


def subtract(solid: trimesh.Trimesh, cutter_mesh: trimesh.Trimesh) -> trimesh.Trimesh:
    """Boolean difference `solid - cutter_mesh`, returned as produced (no repair)."""
    return trimesh.boolean.difference([solid, cutter_mesh], engine="manifold")


def build_block(layout: BlockLayout, sections: int = PREVIEW_SEGMENTS) -> trimesh.Trimesh:
    """Box minus every cutter of the layout, in layout order."""
    cutter_meshes = (make_cutter_mesh(c, layout.x_offset, sections) for c in layout.cutters)
    return reduce(subtract, cutter_meshes, make_box_mesh(layout))


class SolidBuilder:
    """
    Builds one solid per block of a configuration and keeps the latest result.

    `generate` always starts from scratch: the previous solids are released
    first and nothing is reused between calls.
    """
    def __init__(self, sections: int = PREVIEW_SEGMENTS) -> None:
        self.sections = sections
        self._solids: list[GeneratedSolid] = []

    @property
    def solids(self) -> list[GeneratedSolid]:
        return list(self._solids)

    def release(self) -> None:
        """Drop the current generation and its cached mesh data."""
        if not self._solids:
            return
        logger.debug(f"Releasing {len(self._solids)} solids.")
        for solid in self._solids:
            solid.mesh._cache.clear()
        self._solids.clear()

    def generate(self, configuration: Configuration) -> list[GeneratedSolid]:
        self.release()

        layouts = compute_layouts(configuration)
        logger.info(
            f"Generating {len(layouts)} block(s): holes={configuration.hole_counts}, "
            f"radius={configuration.drill_radius}, groove depth={configuration.groove_depth}"
        )

        for index, layout in enumerate(layouts):
            mesh = build_block(layout, self.sections)
            logger.debug(
                f"Block {index}: {layout.hole_count} holes, {len(layout.cutters)} cutters, "
                f"{len(mesh.faces)} faces, watertight={mesh.is_watertight}"
            )
            self._solids.append(GeneratedSolid(index=index, layout=layout, mesh=mesh))

        return self.solids

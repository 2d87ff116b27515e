"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import pyvista as pv
from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtGui import QCloseEvent
from pyvistaqt import QtInteractor

if TYPE_CHECKING:
    from drillblock.controller.solid_builder import GeneratedSolid

logger = logging.getLogger(__name__)

SOLID_COLOR = "#eeeeee"
BACKGROUND_COLOR = "#222222"


class SolidActors:
    """
    The block actors currently shown by a plotter.

    Works with any pyvista plotter (the embedded QtInteractor or an offscreen
    `pv.Plotter`). Rendering is left to the caller.
    """
    def __init__(self, plotter: pv.Plotter) -> None:
        self.plotter = plotter
        self.actors: list[pv.Actor] = []
        self.datasets: list[pv.PolyData] = []

    def __len__(self) -> int:
        return len(self.actors)

    def replace(self, solids: list[GeneratedSolid]) -> None:
        self.clear()
        for solid in solids:
            dataset = pv.wrap(solid.mesh)
            actor = self.plotter.add_mesh(
                dataset,
                color=SOLID_COLOR,
                smooth_shading=False,
                specular=0.3,
                name=solid.name,
                pickable=False,
                show_scalar_bar=False,
                render=False,
            )
            self.actors.append(actor)
            self.datasets.append(dataset)

    def clear(self) -> None:
        for actor in self.actors:
            self.plotter.remove_actor(actor, render=False)
        for dataset in self.datasets:
            dataset.clear_data()
            dataset.ReleaseData()
        self.actors.clear()
        self.datasets.clear()


class PyVistaWidget(QWidget):
    """
    Interactive 3D preview of the generated blocks.

    The displayed solids are replaced wholesale: `show_solids` removes every
    actor of the previous generation and releases its dataset before the new
    blocks are added.
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self.solid_actors = SolidActors(self.plotter)

        self._init_plotter()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def show_solids(self, solids: list[GeneratedSolid], reset_camera: bool = True) -> None:
        """Replace the displayed blocks with `solids`."""
        self.solid_actors.replace(solids)
        logger.debug(f"Preview shows {len(self.solid_actors)} block(s).")

        if reset_camera:
            self.plotter.reset_camera()
        self.plotter.render()

    def clear_solids(self, render: bool = True) -> None:
        """Remove every block actor and release its geometry."""
        self.solid_actors.clear()

        if render:
            self.plotter.render()

    @property
    def n_displayed(self) -> int:
        return len(self.solid_actors)

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(BACKGROUND_COLOR)
        self.plotter.enable_anti_aliasing()

        # Key light, fill light, ambient
        self.plotter.remove_all_lights()
        key = pv.Light(position=(50, 70, 100), focal_point=(0, 0, 0), intensity=1.0)
        fill = pv.Light(position=(-50, -50, 20), focal_point=(0, 0, 0), intensity=0.5)
        ambient = pv.Light(light_type="headlight", intensity=0.4)
        for light in (key, fill, ambient):
            self.plotter.add_light(light)

        self.plotter.add_axes()
        self.plotter.show_grid(color="#444444")
        self.plotter.camera_position = [(80, -80, 60), (0, 0, 0), (0, 0, 1)]

    def closeEvent(self, event: QCloseEvent) -> None:
        self.clear_solids(render=False)
        self.plotter.close()
        event.accept()

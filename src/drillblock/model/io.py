"""
Input/Output Manager
Handles exporting the generated blocks (OBJ mesh, Rhino script) and saving
and loading the ProjectState to .h5 files.
"""
from __future__ import annotations

import logging
from importlib.metadata import version, PackageNotFoundError
from typing import TYPE_CHECKING

import h5py
import numpy as np
import trimesh
from trimesh.exchange.obj import export_obj as obj_text

from drillblock.model.rhino_script import emit_rhino_script
from drillblock.model.state import Configuration, ProjectState

if TYPE_CHECKING:
    from drillblock.controller.solid_builder import GeneratedSolid

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("drillblock")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


class IOManager:

    # ---- EXPORT HELPERS ----
    @staticmethod
    def export_obj(solids: list[GeneratedSolid], filepath: str) -> None:
        """
        Writes every generated block into a single Wavefront OBJ file.
        """
        if not solids:
            raise ValueError("No generated blocks to export.")

        logger.info(f"Exporting {len(solids)} block(s) to OBJ: {filepath}")
        try:
            merged = trimesh.util.concatenate([s.mesh for s in solids])
            text = obj_text(merged, include_normals=False, include_texture=False)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(text)
            logger.info(f"OBJ exported ({len(merged.vertices)} vertices, {len(merged.faces)} faces).")
        except Exception as e:
            logger.exception(f"Failed to export OBJ: {e}")
            raise

    @staticmethod
    def export_rhino_script(configuration: Configuration, filepath: str) -> None:
        """
        Writes the RhinoPython script reproducing the current blocks.
        """
        logger.info(f"Exporting Rhino script to: {filepath}")
        try:
            script = emit_rhino_script(configuration)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(script)
        except Exception as e:
            logger.exception(f"Failed to export Rhino script: {e}")
            raise

    # ---- PROJECT FILES ----
    @staticmethod
    def save_project(state: ProjectState, filepath: str) -> None:
        logger.info(f"Saving project to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["project_name"] = state.project_name

                config = state.configuration
                grp = f.create_group("configuration")
                grp.attrs["mode"] = str(config.mode)
                grp.attrs["num_holes"] = config.num_holes
                grp.attrs["batch_list"] = np.asarray(config.batch_list, dtype=np.int64)
                grp.attrs["drill_radius"] = config.drill_radius
                grp.attrs["groove_depth"] = config.groove_depth

            logger.info(f"Project saved to: {filepath}")
        except Exception as e:
            logger.exception(f"Failed to save project: {e}")
            raise

    @staticmethod
    def load_project(state: ProjectState, filepath: str) -> None:
        """
        Reads a project file into `state`. Values pass through the
        Configuration setters, so out-of-range numbers are clamped.
        """
        logger.info(f"Loading project from: {filepath}")
        try:
            with h5py.File(filepath, "r") as f:
                if "configuration" not in f:
                    msg = f"File '{filepath}' does not contain a block configuration."
                    logger.error(msg)
                    raise ValueError(msg)

                file_version = f.attrs.get("version", "unknown")
                if file_version != APP_VERSION:
                    logger.debug(f"Project written by version {file_version}, running {APP_VERSION}.")

                grp = f["configuration"]
                config = Configuration.from_values(
                    mode=_as_str(grp.attrs.get("mode", "single")),
                    num_holes=int(grp.attrs.get("num_holes", 1)),
                    batch_list=[int(v) for v in np.atleast_1d(grp.attrs.get("batch_list", []))],
                    drill_radius=float(grp.attrs.get("drill_radius", 0.0)),
                    groove_depth=float(grp.attrs.get("groove_depth", 0.0)),
                )

                state.project_name = _as_str(f.attrs.get("project_name", "Untitled Project"))
                state.configuration = config
                state.filepath = filepath

            logger.info(f"Project loaded from: {filepath}")
        except ValueError:
            raise
        except Exception as e:
            logger.exception(f"Failed to load project: {e}")
            raise


def _as_str(value: object) -> str:
    """h5py may hand back bytes for string attributes."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)

"""
Project State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the current block parameters in one place.
   The parameter panel writes here, the solid builder and the exporters read.
2. Sanitization: Every user input passes through the setters below, so the
   layout calculator only ever sees values inside its domain.
3. Persistence: This object is what gets serialized when saving a project.

Classes:
    Mode: Single block or a batch of blocks.
    Configuration: The block parameters.
    ProjectState: The main container class.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from drillblock.config import (
    DEFAULT_NUM_HOLES, DEFAULT_BATCH_LIST, DEFAULT_DRILL_RADIUS, DEFAULT_GROOVE_DEPTH,
    HEIGHT_PER_HOLE, MIN_HOLES, MIN_DRILL_RADIUS,
)

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    SINGLE = "single"
    BATCH = "batch"


def parse_batch_list(text: str) -> list[int]:
    """
    Parse "3, 2, 5" into [3, 2, 5].

    Entries that are not integers or are not positive are dropped silently.
    """
    counts: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            value = int(part)
        except ValueError:
            continue
        if value > 0:
            counts.append(value)
    return counts


@dataclass
class Configuration:
    """
    Block parameters as entered by the user.

    Use the setters instead of assigning fields directly; they clamp values
    into the range the layout calculator expects.
    """
    mode: Mode = Mode.SINGLE
    num_holes: int = DEFAULT_NUM_HOLES
    batch_list: list[int] = field(default_factory=lambda: list(DEFAULT_BATCH_LIST))
    drill_radius: float = DEFAULT_DRILL_RADIUS
    groove_depth: float = DEFAULT_GROOVE_DEPTH

    @property
    def hole_counts(self) -> list[int]:
        """Hole count of every block to generate, in layout order."""
        if self.mode == Mode.SINGLE:
            return [self.num_holes]
        return list(self.batch_list)

    def set_mode(self, mode: Mode | str) -> None:
        self.mode = Mode(mode)

    def set_num_holes(self, value: int) -> None:
        self.num_holes = max(MIN_HOLES, int(value))

    def set_batch_list(self, counts: list[int]) -> bool:
        """Replace the batch list; returns False (and keeps the old list) if nothing valid remains."""
        valid = [int(c) for c in counts if int(c) > 0]
        if not valid:
            logger.debug(f"Batch list rejected, keeping {self.batch_list}")
            return False
        self.batch_list = valid
        return True

    def set_batch_text(self, text: str) -> bool:
        return self.set_batch_list(parse_batch_list(text))

    def set_drill_radius(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value) or value <= 0:
            value = MIN_DRILL_RADIUS
        self.drill_radius = value

    def set_groove_depth(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value) or value < 0:
            # A negative depth would push the grooves outside the block
            logger.warning(f"Groove depth {value} is not allowed, using 0.0 (grooves disabled).")
            value = 0.0
        self.groove_depth = value

    def batch_text(self) -> str:
        return ", ".join(str(c) for c in self.batch_list)

    def height_label(self) -> str:
        """Text for the block height read-out."""
        if self.mode == Mode.SINGLE:
            return f"{self.num_holes * HEIGHT_PER_HOLE:g}"
        return "Variable"

    @classmethod
    def from_values(
        cls,
        mode: Mode | str = Mode.SINGLE,
        num_holes: int = DEFAULT_NUM_HOLES,
        batch_list: Optional[list[int]] = None,
        drill_radius: float = DEFAULT_DRILL_RADIUS,
        groove_depth: float = DEFAULT_GROOVE_DEPTH,
    ) -> Configuration:
        """Build a configuration, passing every value through the setters."""
        config = cls()
        config.set_mode(mode)
        config.set_num_holes(num_holes)
        if batch_list is not None:
            config.set_batch_list(batch_list)
        config.set_drill_radius(drill_radius)
        config.set_groove_depth(groove_depth)
        return config


@dataclass
class ProjectState:
    """
    Holds the entire state of the open project.
    Pass this instance to the panels and the main window.
    """
    project_name: str = "Untitled Project"
    filepath: Optional[str] = None

    configuration: Configuration = field(default_factory=Configuration)

    def reset(self) -> None:
        """Clear all data for a new project"""
        self.project_name = "Untitled Project"
        self.filepath = None
        self.configuration = Configuration()
        logger.info("Project state has been reset.")

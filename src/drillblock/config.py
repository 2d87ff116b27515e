"""
Configuration & Global Constants
================================
This module serves as the central registry for the fixed dimensions shared by
the 3D preview, the OBJ export and the generated Rhino script.

Why is this file needed?
------------------------
1. Consistency: The preview and both exports must use exactly the same numbers.
   Keeping them in one place prevents the two paths from drifting apart.
2. Defaults: It holds the startup values of the user-editable parameters.

Exports:
    BOX_WIDTH, BOX_DEPTH (float): Cross-section of every block (mm).
    HEIGHT_PER_HOLE (float): Block height contributed by each hole level (mm).
    BATCH_SPACING (float): Distance between block centres in batch mode (mm).
"""

# Block geometry (mm)
BOX_WIDTH: float = 20.0
BOX_DEPTH: float = 20.0
HEIGHT_PER_HOLE: float = 20.0
FIRST_HOLE_OFFSET: float = 10.0
HOLE_STEP: float = 20.0

# Distance between blocks in batch mode
BATCH_SPACING: float = 40.0

# Cutter lengths. Lateral cutters span the whole cross-section, the vertical
# hole sticks out of both ends of the block.
CROSS_LENGTH: float = 80.0
VERTICAL_MARGIN: float = 20.0

# Mesh resolution of the cutter cylinders
PREVIEW_SEGMENTS: int = 16

# Input sanitization
MIN_HOLES: int = 1
MIN_DRILL_RADIUS: float = 0.5

# Upper limits of the parameter panel spin boxes
MAX_HOLES_INPUT: int = 500
MAX_DRILL_INPUT: float = 50.0

# Startup parameters
DEFAULT_NUM_HOLES: int = 5
DEFAULT_BATCH_LIST: tuple[int, ...] = (3, 2, 5)
DEFAULT_DRILL_RADIUS: float = 4.0
DEFAULT_GROOVE_DEPTH: float = 0.5

# Quiet interval before a parameter change triggers regeneration
REGENERATE_DEBOUNCE_MS: int = 300

# Export file names
DEFAULT_OBJ_FILENAME: str = "batch_blocks.obj"
DEFAULT_SCRIPT_FILENAME: str = "batch_blocks_v5.py"
PROJECT_FILE_FILTER: str = "HDF5 Files (*.h5)"

"""
Block Parameters Control Panel
"""
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QFormLayout, QRadioButton, QButtonGroup,
    QSpinBox, QDoubleSpinBox, QLineEdit, QLabel, QStackedWidget, QHBoxLayout
)
from PySide6.QtCore import Signal

from drillblock.config import MIN_HOLES, MAX_HOLES_INPUT, MIN_DRILL_RADIUS, MAX_DRILL_INPUT
from drillblock.model.state import Mode, ProjectState

logger = logging.getLogger(__name__)


class ParameterControlPanel(QWidget):
    """
    Left-side panel with the block parameters.

    Every edit is written straight into the ProjectState (through its
    sanitizing setters) and announced with `data_changed`.
    """
    data_changed = Signal()

    def __init__(self, project_state: ProjectState) -> None:
        super().__init__()
        self.project = project_state

        self.layout_main = QVBoxLayout(self)

        # 1. Mode selector
        mode_group = QGroupBox("Mode")
        mode_layout = QHBoxLayout(mode_group)
        self.radio_single = QRadioButton("Single")
        self.radio_batch = QRadioButton("Batch")
        self.mode_buttons = QButtonGroup(self)
        self.mode_buttons.addButton(self.radio_single)
        self.mode_buttons.addButton(self.radio_batch)
        mode_layout.addWidget(self.radio_single)
        mode_layout.addWidget(self.radio_batch)
        self.radio_single.toggled.connect(self.on_mode_toggled)
        self.layout_main.addWidget(mode_group)

        # 2. Hole counts (stacked: single spin / batch list)
        self.stack = QStackedWidget()

        self.page_single = QWidget()
        single_form = QFormLayout(self.page_single)
        self.holes_spin = QSpinBox()
        self.holes_spin.setRange(MIN_HOLES, MAX_HOLES_INPUT)
        self.holes_spin.valueChanged.connect(self.on_holes_changed)
        single_form.addRow("Number of holes:", self.holes_spin)

        self.page_batch = QWidget()
        batch_form = QFormLayout(self.page_batch)
        self.batch_edit = QLineEdit()
        self.batch_edit.setPlaceholderText("e.g. 3, 2, 5")
        self.batch_edit.textEdited.connect(self.on_batch_edited)
        batch_form.addRow("Hole counts:", self.batch_edit)

        self.stack.addWidget(self.page_single)  # Index 0
        self.stack.addWidget(self.page_batch)  # Index 1
        self.layout_main.addWidget(self.stack)

        # 3. Drill & groove
        drill_group = QGroupBox("Drill")
        form = QFormLayout(drill_group)

        self.radius_spin = QDoubleSpinBox()
        self.radius_spin.setRange(MIN_DRILL_RADIUS, MAX_DRILL_INPUT)
        self.radius_spin.setSingleStep(0.1)
        self.radius_spin.setDecimals(2)
        self.radius_spin.setSuffix(" mm")
        self.radius_spin.valueChanged.connect(self.on_radius_changed)
        form.addRow("Drill radius:", self.radius_spin)

        self.depth_spin = QDoubleSpinBox()
        self.depth_spin.setRange(0.0, MAX_DRILL_INPUT)
        self.depth_spin.setSingleStep(0.1)
        self.depth_spin.setDecimals(2)
        self.depth_spin.setSuffix(" mm")
        self.depth_spin.valueChanged.connect(self.on_depth_changed)
        form.addRow("Groove depth:", self.depth_spin)

        self.lbl_height = QLabel()
        form.addRow("Block height:", self.lbl_height)

        self.layout_main.addWidget(drill_group)
        self.layout_main.addStretch()

        # Initial State Sync
        self.load_from_state()

    # --- SLOTS ---

    def on_mode_toggled(self, single_checked: bool) -> None:
        mode = Mode.SINGLE if single_checked else Mode.BATCH
        self.project.configuration.set_mode(mode)
        self.stack.setCurrentIndex(0 if mode == Mode.SINGLE else 1)
        self._emit_changed()

    def on_holes_changed(self, value: int) -> None:
        self.project.configuration.set_num_holes(value)
        self._emit_changed()

    def on_batch_edited(self, text: str) -> None:
        # Invalid text keeps the previous list; nothing to regenerate then
        if self.project.configuration.set_batch_text(text):
            self._emit_changed()

    def on_radius_changed(self, value: float) -> None:
        self.project.configuration.set_drill_radius(value)
        self._emit_changed()

    def on_depth_changed(self, value: float) -> None:
        self.project.configuration.set_groove_depth(value)
        self._emit_changed()

    def _emit_changed(self) -> None:
        self.lbl_height.setText(self.project.configuration.height_label())
        self.data_changed.emit()

    def load_from_state(self) -> None:
        """Updates UI widgets to match ProjectState."""
        config = self.project.configuration
        widgets = (
            self.radio_single, self.radio_batch, self.holes_spin,
            self.batch_edit, self.radius_spin, self.depth_spin,
        )
        for w in widgets:
            w.blockSignals(True)

        self.radio_single.setChecked(config.mode == Mode.SINGLE)
        self.radio_batch.setChecked(config.mode == Mode.BATCH)
        self.stack.setCurrentIndex(0 if config.mode == Mode.SINGLE else 1)
        self.holes_spin.setValue(config.num_holes)
        self.batch_edit.setText(config.batch_text())
        self.radius_spin.setValue(config.drill_radius)
        self.depth_spin.setValue(config.groove_depth)
        for w in widgets:
            w.blockSignals(False)

        self._adopt_widget_limits()
        self.lbl_height.setText(config.height_label())

    def _adopt_widget_limits(self) -> None:
        """
        Values outside the spin box ranges (old project files, command line)
        are shown clamped; store the shown value so preview and widgets agree.
        """
        config = self.project.configuration
        if self.holes_spin.value() != config.num_holes:
            logger.warning(f"Hole count {config.num_holes} is outside the panel range, using {self.holes_spin.value()}.")
            config.set_num_holes(self.holes_spin.value())
        for spin, value, setter in (
            (self.radius_spin, config.drill_radius, config.set_drill_radius),
            (self.depth_spin, config.groove_depth, config.set_groove_depth),
        ):
            if abs(spin.value() - value) > 10 ** -spin.decimals():
                logger.warning(f"Value {value} is outside the panel range, using {spin.value()}.")
                setter(spin.value())

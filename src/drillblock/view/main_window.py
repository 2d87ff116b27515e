"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the parameter panel and
the 3D preview.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects parameter edits to the debounced regeneration and
   global actions (File -> Save, Export) to the IO manager.
"""
import logging
import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from drillblock.application import VISIBLE_APP_NAME
from drillblock.config import DEFAULT_OBJ_FILENAME, DEFAULT_SCRIPT_FILENAME, PROJECT_FILE_FILTER
from drillblock.controller.scheduler import RegenerationScheduler
from drillblock.controller.solid_builder import SolidBuilder
from drillblock.model.io import IOManager
from drillblock.model.state import ProjectState
from drillblock.view.tabs.tab_parameters import ParameterControlPanel
from drillblock.view.widgets.plot_3d import PyVistaWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, project_state: ProjectState) -> None:
        super().__init__()
        self.project: ProjectState = project_state
        self.is_modified: bool = False
        self.builder = SolidBuilder()
        self.scheduler = RegenerationScheduler(parent=self)

        self.update_window_title()
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Parameters ---
        self.param_panel = ParameterControlPanel(self.project)
        splitter.addWidget(self.param_panel)

        # --- RIGHT SIDE: 3D Preview ---
        self.visualizer = PyVistaWidget()
        splitter.addWidget(self.visualizer)
        splitter.setSizes([300, 1100])

        # --- SIGNAL CONNECTIONS ---
        # Parameter edit -> (debounce) -> regenerate
        self.param_panel.data_changed.connect(self.on_data_changed)
        self.scheduler.triggered.connect(self.regenerate)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Initial Render
        self.scheduler.schedule()

    def _create_actions(self) -> None:
        self.act_new = QAction("New Project", self)
        self.act_new.triggered.connect(self.on_file_new)

        self.act_open = QAction("Open...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_save = QAction("Save", self)
        self.act_save.setShortcut("Ctrl+S")
        self.act_save.triggered.connect(self.on_file_save)

        self.act_save_as = QAction("Save As...", self)
        self.act_save_as.setShortcut("Ctrl+Shift+S")
        self.act_save_as.triggered.connect(self.on_file_save_as)

        self.act_export_obj = QAction("Export OBJ...", self)
        self.act_export_obj.setShortcut("Ctrl+E")
        self.act_export_obj.triggered.connect(self.on_export_obj)

        self.act_export_script = QAction("Export Rhino Script...", self)
        self.act_export_script.triggered.connect(self.on_export_script)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_open)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save)
        file_menu.addAction(self.act_save_as)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        export_menu = menu_bar.addMenu("&Export")
        export_menu.addAction(self.act_export_obj)
        export_menu.addAction(self.act_export_script)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        """Updates the window title based on filename and dirty state."""
        filename = self.project.filepath if self.project.filepath else "Untitled"
        title = f"{VISIBLE_APP_NAME} - [{os.path.basename(filename)}"
        if self.is_modified:
            title += "*"
        title += "]"
        self.setWindowTitle(title)

    def set_modified(self, modified: bool) -> None:
        """Sets the dirty flag and updates title if changed."""
        if self.is_modified != modified:
            self.is_modified = modified
            self.update_window_title()

    def on_data_changed(self) -> None:
        """Slot called when a parameter changes."""
        self.set_modified(True)
        self.scheduler.schedule()

    def regenerate(self, reset_camera: bool = False) -> None:
        """Rebuild every block from the current parameters and show them."""
        first_render = self.visualizer.n_displayed == 0
        # Old actors go first, then the builder drops the old meshes
        self.visualizer.clear_solids(render=False)
        solids = self.builder.generate(self.project.configuration)
        self.visualizer.show_solids(solids, reset_camera=reset_camera or first_render)

    # --- EXPORT SLOTS ---

    def on_export_obj(self) -> None:
        # Export what the parameters describe right now, not a stale preview
        self.scheduler.flush()
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export OBJ", DEFAULT_OBJ_FILENAME, "Wavefront OBJ (*.obj)"
        )
        if fname:
            try:
                IOManager.export_obj(self.builder.solids, fname)
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not export OBJ:\n{e}")

    def on_export_script(self) -> None:
        self.scheduler.flush()
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Rhino Script", DEFAULT_SCRIPT_FILENAME, "Python Files (*.py)"
        )
        if fname:
            try:
                IOManager.export_rhino_script(self.project.configuration, fname)
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not export script:\n{e}")

    # --- FILE SLOTS ---

    def on_file_new(self) -> None:
        self.project.reset()
        self.set_modified(False)
        self.update_window_title()
        self.refresh_ui_from_state()

    def on_file_open(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open Project", "", PROJECT_FILE_FILTER
        )
        if fname:
            try:
                IOManager.load_project(self.project, fname)
                self.is_modified = False
                self.update_window_title()
                self.refresh_ui_from_state()
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not open file:\n{e}")

    def on_file_save(self) -> None:
        if self.project.filepath:
            try:
                IOManager.save_project(self.project, self.project.filepath)
                self.set_modified(False)
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")
        else:
            self.on_file_save_as()

    def on_file_save_as(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Project", "", PROJECT_FILE_FILTER
        )
        if fname:
            if not fname.endswith(".h5"):
                fname += ".h5"

            try:
                IOManager.save_project(self.project, fname)
                self.project.filepath = fname
                self.is_modified = False
                self.update_window_title()
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")

    def refresh_ui_from_state(self) -> None:
        """
        After loading a file the state is new but the widgets are old.
        Force the widgets to read from the state again and rebuild the blocks.
        """
        self.param_panel.load_from_state()
        self.scheduler.cancel()
        self.regenerate(reset_camera=True)

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if self.is_modified:
            reply = QMessageBox.question(
                self,
                "Save changes?",
                "The project has been modified. Save changes before closing?",
                QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel
            )

            if reply == QMessageBox.Save:
                self.on_file_save()
                if not self.project.filepath:
                    event.ignore()
                    return
            elif reply == QMessageBox.Cancel:
                event.ignore()
                return

        self.scheduler.cancel()
        self.builder.release()

        if self.visualizer and self.visualizer.plotter:
            self.visualizer.clear_solids(render=False)
            self.visualizer.plotter.close()

        event.accept()

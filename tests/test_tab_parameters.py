import pytest

from drillblock.config import MAX_DRILL_INPUT, MAX_HOLES_INPUT, MIN_DRILL_RADIUS
from drillblock.model.state import Configuration, Mode, ProjectState
from drillblock.view.tabs.tab_parameters import ParameterControlPanel


def _panel(configuration=None):
    state = ProjectState()
    if configuration is not None:
        state.configuration = configuration
    return state, ParameterControlPanel(state)


def test_radius_spin_starts_at_clamp_floor(qapp):
    state, panel = _panel()
    assert panel.radius_spin.minimum() == pytest.approx(MIN_DRILL_RADIUS)

    panel.radius_spin.setValue(0.0)
    assert panel.radius_spin.value() == pytest.approx(MIN_DRILL_RADIUS)
    assert state.configuration.drill_radius == pytest.approx(panel.radius_spin.value())


def test_large_hole_count_is_shown(qapp):
    state, panel = _panel(Configuration.from_values(num_holes=150))
    assert panel.holes_spin.value() == 150
    assert state.configuration.num_holes == 150
    assert panel.lbl_height.text() == "3000"


def test_values_beyond_panel_range_are_written_back(qapp):
    config = Configuration.from_values(num_holes=MAX_HOLES_INPUT + 100, drill_radius=MAX_DRILL_INPUT * 2)
    state, panel = _panel(config)

    assert panel.holes_spin.value() == MAX_HOLES_INPUT
    assert state.configuration.num_holes == MAX_HOLES_INPUT
    assert panel.radius_spin.value() == pytest.approx(MAX_DRILL_INPUT)
    assert state.configuration.drill_radius == pytest.approx(MAX_DRILL_INPUT)


def test_edits_update_state_and_signal(qapp):
    state, panel = _panel()
    changes = []
    panel.data_changed.connect(lambda: changes.append(1))

    panel.holes_spin.setValue(7)
    assert state.configuration.num_holes == 7
    assert panel.lbl_height.text() == "140"

    panel.radio_batch.setChecked(True)
    assert state.configuration.mode == Mode.BATCH
    assert panel.stack.currentIndex() == 1
    assert panel.lbl_height.text() == "Variable"

    assert len(changes) >= 2


def test_invalid_batch_text_does_not_signal(qapp):
    state, panel = _panel()
    changes = []
    panel.data_changed.connect(lambda: changes.append(1))

    panel.on_batch_edited("x, -1")
    assert changes == []
    assert state.configuration.batch_list == [3, 2, 5]

    panel.on_batch_edited("4, 1")
    assert changes == [1]
    assert state.configuration.batch_list == [4, 1]


def test_load_from_state_does_not_signal(qapp):
    state, panel = _panel()
    changes = []
    panel.data_changed.connect(lambda: changes.append(1))

    state.configuration = Configuration.from_values(mode=Mode.BATCH, batch_list=[2, 2], drill_radius=3.0)
    panel.load_from_state()

    assert changes == []
    assert panel.radio_batch.isChecked()
    assert panel.batch_edit.text() == "2, 2"
    assert panel.radius_spin.value() == pytest.approx(3.0)

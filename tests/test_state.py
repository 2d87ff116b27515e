import math

import pytest

from drillblock.model.state import Configuration, Mode, ProjectState, parse_batch_list


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3, 2, 5", [3, 2, 5]),
        ("3,2,5", [3, 2, 5]),
        (" 4 ,, x, -1, 0, 6 ", [4, 6]),
        ("", []),
        ("a, b", []),
    ],
)
def test_parse_batch_list(text, expected):
    assert parse_batch_list(text) == expected


def test_invalid_batch_text_keeps_previous_list():
    config = Configuration()
    assert config.set_batch_text("7, 1")
    assert config.batch_list == [7, 1]

    assert not config.set_batch_text("nope, -3")
    assert config.batch_list == [7, 1]


@pytest.mark.parametrize("value", [0.0, -2.0, math.nan, math.inf])
def test_drill_radius_clamped(value):
    config = Configuration()
    config.set_drill_radius(value)
    assert config.drill_radius == pytest.approx(0.5)


def test_drill_radius_accepted():
    config = Configuration()
    config.set_drill_radius(2.25)
    assert config.drill_radius == pytest.approx(2.25)


def test_negative_groove_depth_disables_grooves(caplog):
    config = Configuration()
    with caplog.at_level("WARNING", logger="drillblock"):
        config.set_groove_depth(-1.0)
    assert config.groove_depth == 0.0
    assert "not allowed" in caplog.text


@pytest.mark.parametrize("value, expected", [(0, 1), (-5, 1), (3, 3)])
def test_num_holes_clamped(value, expected):
    config = Configuration()
    config.set_num_holes(value)
    assert config.num_holes == expected


def test_hole_counts_per_mode():
    config = Configuration(num_holes=4, batch_list=[1, 2])
    assert config.hole_counts == [4]
    config.set_mode("batch")
    assert config.mode == Mode.BATCH
    assert config.hole_counts == [1, 2]


def test_height_label():
    config = Configuration(num_holes=5)
    assert config.height_label() == "100"
    config.set_mode(Mode.BATCH)
    assert config.height_label() == "Variable"


def test_from_values_sanitizes():
    config = Configuration.from_values(
        mode="batch", num_holes=0, batch_list=[0, 3], drill_radius=-1, groove_depth=-1
    )
    assert config.mode == Mode.BATCH
    assert config.num_holes == 1
    assert config.batch_list == [3]
    assert config.drill_radius == pytest.approx(0.5)
    assert config.groove_depth == 0.0


def test_defaults():
    config = Configuration()
    assert config.mode == Mode.SINGLE
    assert config.num_holes == 5
    assert config.batch_list == [3, 2, 5]
    assert config.batch_text() == "3, 2, 5"
    assert config.drill_radius == pytest.approx(4.0)
    assert config.groove_depth == pytest.approx(0.5)


def test_project_reset():
    state = ProjectState(project_name="Blocks", filepath="/tmp/blocks.h5")
    state.configuration.set_num_holes(9)

    state.reset()

    assert state.project_name == "Untitled Project"
    assert state.filepath is None
    assert state.configuration == Configuration()

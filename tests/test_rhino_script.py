import sys
import types

import pytest

from drillblock.model.layout import compute_block_layout, compute_layouts
from drillblock.model.rhino_script import emit_rhino_script, script_literals
from drillblock.model.state import Configuration, Mode


def test_script_is_valid_python():
    script = emit_rhino_script(Configuration())
    compile(script, "batch_blocks_v5.py", "exec")


def test_literals_match_layout():
    config = Configuration.from_values(num_holes=5, drill_radius=4.0, groove_depth=0.5)
    literals = script_literals(config)
    layout = compute_block_layout(5, 4.0, 0.5)

    assert literals["radius"] == pytest.approx(layout.drill_radius)
    assert literals["groove_depth"] == pytest.approx(layout.groove_depth)
    assert literals["side_groove_offset"] == pytest.approx(layout.side_groove_offset)
    assert literals["width"] == pytest.approx(layout.width)
    assert literals["depth"] == pytest.approx(layout.depth)
    assert literals["cross_length"] == pytest.approx(layout.cutters[1].length)
    assert literals["vertical_margin"] == pytest.approx(layout.cutters[0].length - layout.height)


def test_constants_embedded():
    script = emit_rhino_script(Configuration.from_values(drill_radius=4.0, groove_depth=0.5))
    assert "RADIUS = 4.0" in script
    assert "GROOVE_DEPTH = 0.5" in script
    assert "SIDE_GROOVE_OFFSET = 13.5" in script
    assert "CROSS_LENGTH = 80.0" in script
    assert "spacing = 40.0" in script


def test_block_list_single_and_batch():
    single = emit_rhino_script(Configuration(num_holes=7))
    assert "blocks = [7]" in single

    batch = emit_rhino_script(Configuration(mode=Mode.BATCH, batch_list=[3, 2, 5]))
    assert "blocks = [3, 2, 5]" in batch


def test_grooves_guarded_by_depth():
    script = emit_rhino_script(Configuration.from_values(groove_depth=0.0))
    assert "GROOVE_DEPTH = 0.0" in script
    assert script.count("if GROOVE_DEPTH > 0:") == 2


def test_script_structure():
    script = emit_rhino_script(Configuration())
    assert script.startswith("import rhinoscriptsyntax as rs")
    for call in ("rs.UnitSystem(2)", "rs.AddBox(", "rs.AddCylinder(", "rs.BooleanDifference("):
        assert call in script
    assert 'print("Batch Generated")' in script
    assert 'if __name__ == "__main__":' in script


def test_emit_is_deterministic():
    config = Configuration(mode=Mode.BATCH, batch_list=[1, 4])
    assert emit_rhino_script(config) == emit_rhino_script(config)


class _RecordingRhino:
    """Stands in for rhinoscriptsyntax and keeps every box and cylinder added."""

    def __init__(self):
        self.boxes = []
        self.cylinders = []
        self.differences = 0

    def module(self):
        rs = types.ModuleType("rhinoscriptsyntax")
        rs.UnitSystem = lambda *args: None
        rs.EnableRedraw = lambda *args: None
        rs.PlaneFromNormal = lambda origin, normal: (tuple(origin), tuple(normal))
        rs.AddBox = self._add_box
        rs.AddCylinder = self._add_cylinder
        rs.BooleanDifference = self._boolean_difference
        return rs

    def _add_box(self, corners):
        self.boxes.append([tuple(c) for c in corners])
        return f"box{len(self.boxes)}"

    def _add_cylinder(self, plane, length, radius):
        origin, normal = plane
        self.cylinders.append((origin, normal, length, radius))
        return f"cyl{len(self.cylinders)}"

    def _boolean_difference(self, base, cutters):
        self.differences += 1
        return [base]


def _run_script(config, monkeypatch):
    rhino = _RecordingRhino()
    monkeypatch.setitem(sys.modules, "rhinoscriptsyntax", rhino.module())
    namespace = {"__name__": "batch_blocks"}
    exec(compile(emit_rhino_script(config), "batch_blocks_v5.py", "exec"), namespace)
    namespace["main"]()
    return rhino


def _box_bounds(corners):
    xs, ys, zs = zip(*corners)
    return (min(xs), max(xs), min(ys), max(ys), min(zs), max(zs))


@pytest.mark.parametrize(
    "config",
    [
        Configuration(),
        Configuration.from_values(mode=Mode.BATCH, batch_list=[3, 2, 5], drill_radius=2.3, groove_depth=0.7),
        Configuration.from_values(num_holes=11, drill_radius=1.0, groove_depth=0.0),
    ],
)
def test_script_builds_layout_geometry(config, monkeypatch, capsys):
    rhino = _run_script(config, monkeypatch)
    layouts = compute_layouts(config)

    assert len(rhino.boxes) == len(layouts)
    assert rhino.differences == len(layouts)
    for corners, layout in zip(rhino.boxes, layouts):
        assert _box_bounds(corners) == pytest.approx(layout.bounds)

    expected = [(layout.x_offset, c) for layout in layouts for c in layout.cutters]
    assert len(rhino.cylinders) == len(expected)
    for (origin, normal, length, radius), (x_offset, cutter) in zip(rhino.cylinders, expected):
        bx, by, bz = cutter.base_point
        assert origin == pytest.approx((bx + x_offset, by, bz))
        assert normal == pytest.approx(cutter.axis.normal)
        assert length == pytest.approx(cutter.length)
        assert radius == pytest.approx(cutter.radius)

    assert "Batch Generated" in capsys.readouterr().out


def test_default_script_cuts_thirty_five_cylinders(monkeypatch):
    rhino = _run_script(Configuration(), monkeypatch)
    assert len(rhino.cylinders) == 35

import pytest
import pyvista as pv

from drillblock.controller.solid_builder import GeneratedSolid, make_box_mesh
from drillblock.model.layout import compute_block_layout
from drillblock.view.widgets.plot_3d import SolidActors


def _solids(*hole_counts):
    # Plain boxes keep these tests free of boolean operations
    solids = []
    for index, holes in enumerate(hole_counts):
        layout = compute_block_layout(holes, drill_radius=4.0, groove_depth=0.5, x_offset=index * 40.0)
        solids.append(GeneratedSolid(index=index, layout=layout, mesh=make_box_mesh(layout)))
    return solids


@pytest.fixture
def plotter():
    p = pv.Plotter(off_screen=True)
    yield p
    p.close()


def test_replace_adds_one_actor_per_block(plotter):
    actors = SolidActors(plotter)
    solids = _solids(3, 2, 5)

    actors.replace(solids)

    assert len(actors) == 3
    for solid in solids:
        assert solid.name in plotter.actors


def test_replace_removes_previous_generation(plotter):
    actors = SolidActors(plotter)
    first = _solids(3, 2)
    actors.replace(first)
    old_datasets = list(actors.datasets)

    second = _solids(4)
    actors.replace(second)

    assert len(actors) == 1
    assert first[1].name not in plotter.actors
    assert second[0].name in plotter.actors
    assert all(d.n_points == 0 for d in old_datasets)
    # The trimesh geometry itself is owned by the builder and stays intact
    assert len(first[0].mesh.vertices) == 8


def test_clear(plotter):
    actors = SolidActors(plotter)
    solids = _solids(1, 1)
    actors.replace(solids)

    actors.clear()

    assert len(actors) == 0
    assert actors.datasets == []
    assert not any(s.name in plotter.actors for s in solids)

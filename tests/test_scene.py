import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.scene import SceneLayout, build_environment, build_scene, lattice_cells, node_count_bounds
from src.scene import layout_params as lp
from src.scene.model import count_by_kind

PALETTE = set(lp.CONTAINER_PALETTE)


def _structure(nodes):
    return [(node.kind, node.size) for node in nodes if node.kind != "container"]


def test_default_lattice_matches_reference_yard():
    cells = lattice_cells(SceneLayout())
    xs = sorted({x for x, _ in cells})
    zs = sorted({z for _, z in cells})
    assert xs == [-25.0, -17.0, -9.0, -1.0, 7.0, 15.0, 23.0]
    assert zs == [5.0, 13.0]


def test_lattice_never_overshoots_upper_bound():
    layout = SceneLayout(lattice_x=(0.0, 13.0), lattice_z=(0.0, 0.0), lattice_stride=8.0)
    assert lattice_cells(layout) == [(0.0, 0.0), (8.0, 0.0)]


def test_build_order_and_fixed_nodes():
    nodes = build_scene(SceneLayout(), seed=1)
    assert nodes[0].kind == "ground"
    assert nodes[0].cast_shadow is False
    assert nodes[1].kind == "dock"
    assert nodes[1].position == (0.0, 0.5, -15.0)
    crane_nodes = nodes[2:17]
    assert [n.kind for n in crane_nodes[:3]] == ["crane-base", "crane-pole", "crane-beam"]
    assert [n.position[0] for n in crane_nodes[::3]] == [-20.0, -10.0, 0.0, 10.0, 20.0]
    assert all(n.position[2] == -15.0 for n in crane_nodes)
    assert all(n.kind == "container" for n in nodes[17:])


def test_same_seed_gives_identical_scene():
    layout = SceneLayout()
    assert build_scene(layout, seed=42) == build_scene(layout, seed=42)


def test_different_seed_only_changes_heights_and_colours():
    layout = SceneLayout()
    first = build_scene(layout, seed=1)
    second = build_scene(layout, seed=2)
    assert _structure(first) == _structure(second)
    low, high = node_count_bounds(layout)
    assert low <= len(first) <= high
    assert low <= len(second) <= high
    assert first != second


def test_seven_by_three_lattice_node_count():
    layout = SceneLayout(lattice_x=(-25.0, 23.0), lattice_z=(5.0, 21.0), lattice_stride=8.0)
    cells = lattice_cells(layout)
    assert len(cells) == 21

    nodes = build_scene(layout, seed=123)
    counts = count_by_kind(nodes)
    stack_total = counts["container"]
    assert len(nodes) == 1 + 1 + 5 * 3 + stack_total
    assert len(cells) * 1 <= stack_total <= len(cells) * 3


def test_container_stacks_sit_on_each_other():
    nodes = build_scene(SceneLayout(), seed=9)
    stacks = {}
    for node in nodes:
        if node.kind == "container":
            stacks.setdefault((node.position[0], node.position[2]), []).append(node.position[1])
    assert len(stacks) == len(lattice_cells(SceneLayout()))
    for heights in stacks.values():
        assert 1 <= len(heights) <= 3
        assert heights == [1.25 + level * 2.5 for level in range(len(heights))]


def test_container_colours_come_from_palette():
    for seed in range(20):
        for node in build_scene(SceneLayout(), seed=seed):
            if node.kind == "container":
                assert node.color in PALETTE


def test_custom_crane_offsets_change_count():
    layout = SceneLayout(crane_offsets=(-5.0, 5.0))
    counts = count_by_kind(build_scene(layout, seed=0))
    assert counts["crane-base"] == counts["crane-pole"] == counts["crane-beam"] == 2


@pytest.mark.parametrize(
    "layout",
    [
        SceneLayout(lattice_stride=0),
        SceneLayout(container_palette=()),
        SceneLayout(lattice_x=(10.0, -10.0)),
        SceneLayout(stack_height_range=(0, 3)),
    ],
)
def test_invalid_layouts_are_rejected(layout):
    with pytest.raises(ValueError):
        build_scene(layout, seed=0)


def test_environment_has_ambient_and_directional_light():
    env = build_environment()
    assert [light.kind for light in env.lights] == ["ambient", "directional"]
    assert env.lights[1].cast_shadow is True
    assert env.fog_near < env.fog_far

import logging

import numpy as np
import pytest

from cubeos import config
from cubeos.errors import ProtocolViolation
from cubeos.geometry import RIGHT_ANGLE, Direction, Face, quarter_turn_matrix
from cubeos.prism import SingleAxisLattice

FRAME = (200.0, 100.0)


def test_solid_prism_is_one_block():
    prism = SingleAxisLattice(FRAME, (4, 4))
    assert len(prism.elements) == 1
    element = prism.elements[0]
    assert np.array_equal(element.position, [0, 0, 0])
    assert element.size == (4, 1.0, 4)


@pytest.mark.parametrize("dims", [(1, 1), (2, 3), (4, 4)])
def test_tiles_populate_flat_grid(dims):
    prism = SingleAxisLattice(FRAME, dims, tessellated=True)
    assert len(prism.elements) == dims[0] * dims[1]
    xs = {e.position[0] for e in prism.elements}
    zs = {e.position[2] for e in prism.elements}
    assert xs == {-(dims[0] - 1) / 2 + i for i in range(dims[0])}
    assert zs == {-(dims[1] - 1) / 2 + i for i in range(dims[1])}
    assert all(e.position[1] == 0.0 for e in prism.elements)


def test_direction_fixed_to_rows():
    prism = SingleAxisLattice(FRAME)
    assert prism.state.direction is Direction.ROW
    # a vertical drag still spins the body
    prism.start_drag((10, 10), (10, 80))
    assert prism.state.direction is Direction.ROW
    assert prism.rotate((10, 80)) == 0.0
    prism.settle()
    assert prism.state.direction is Direction.ROW


def test_rotate_spins_whole_body():
    prism = SingleAxisLattice(FRAME, tessellated=True)
    positions = [e.position.copy() for e in prism.elements]
    prism.start_drag((20, 10), (30, 10))
    increment = prism.rotate((70, 10))
    assert increment == pytest.approx(RIGHT_ANGLE * 50 / 200)
    assert prism.state.cumulative == increment
    assert np.allclose(prism.body.orientation[0], [np.cos(increment), 0, np.sin(increment)])
    # tiles never leave the body frame
    assert all(np.array_equal(e.position, p) for e, p in zip(prism.elements, positions))
    assert all(e.owner is None for e in prism.elements)


def test_settle_snaps_body_to_exact_quarter_turn():
    prism = SingleAxisLattice(FRAME)
    prism.start_drag((10, 10), (20, 10))
    prism.rotate((150, 10))
    result = prism.settle()
    assert result.total == RIGHT_ANGLE
    assert np.array_equal(prism.body.orientation, quarter_turn_matrix(Direction.ROW, RIGHT_ANGLE))
    assert not prism.is_active
    assert prism.state.anchor is None
    assert prism.state.cumulative == 0.0


def test_short_drag_springs_body_back():
    prism = SingleAxisLattice(FRAME)
    prism.start_drag((10, 10), (20, 10))
    prism.rotate((40, 10))
    assert prism.settle().total == 0.0
    assert np.array_equal(prism.body.orientation, np.eye(3))


def test_turns_compose_across_moves():
    prism = SingleAxisLattice(FRAME)
    for _ in range(2):
        prism.start_drag((190, 10), (180, 10))
        prism.rotate((40, 10))
        assert prism.settle().total == -RIGHT_ANGLE
    assert np.array_equal(prism.body.orientation, quarter_turn_matrix(Direction.ROW, -2 * RIGHT_ANGLE))


def test_protocol_violations():
    prism = SingleAxisLattice(FRAME)
    with pytest.raises(ProtocolViolation):
        prism.rotate((1, 1))
    with pytest.raises(ProtocolViolation):
        prism.settle()
    prism.start_drag((1, 1), (2, 1))
    with pytest.raises(ProtocolViolation):
        prism.start_drag((1, 1), (2, 1))
    with pytest.raises(ProtocolViolation):
        prism.apply_images(["a"])


def test_apply_images_textures_sides_of_block():
    prism = SingleAxisLattice(FRAME)
    assert prism.apply_images(["f", "r", "b", "l"]) == 4
    block = prism.elements[0]
    assert block.materials[:4] == ["f", "r", "b", "l"]
    assert block.material(Face.TOP) == config.DEFAULT_PRISM_MATERIAL


def test_apply_images_short_leaves_remaining_sides(caplog):
    prism = SingleAxisLattice(FRAME)
    with caplog.at_level(logging.WARNING, logger="cubeos"):
        assert prism.apply_images(["f", "r", "b"]) == 3
    assert prism.elements[0].material(Face.LEFT) == config.DEFAULT_PRISM_MATERIAL
    assert "3 images for 4 side faces" in caplog.text


def test_apply_top_images_one_per_tile():
    prism = SingleAxisLattice(FRAME, (2, 2), tessellated=True)
    assert prism.apply_top_images(["a", "b", "c"]) == 3
    tops = [e.material(Face.TOP) for e in prism.elements]
    assert tops == ["a", "b", "c", config.DEFAULT_PRISM_MATERIAL]


def test_side_tiles_order_front_left_right_back():
    prism = SingleAxisLattice(FRAME, (4, 4), tessellated=True)
    slots = prism.side_tiles()
    assert len(slots) == 16
    faces = [face for _, face in slots]
    assert faces == [Face.FRONT] * 4 + [Face.LEFT] * 4 + [Face.RIGHT] * 4 + [Face.BACK] * 4
    assert all(e.position[2] == 1.5 for e, _ in slots[:4])
    assert all(e.position[0] == -1.5 for e, _ in slots[4:8])


def test_apply_side_images_consumes_in_order():
    prism = SingleAxisLattice(FRAME, (4, 4), tessellated=True)
    images = [f"side{i}" for i in range(16)]
    assert prism.apply_side_images(images) == 16
    for (element, face), image in zip(prism.side_tiles(), images):
        assert element.material(face) == image


def test_tile_helpers_need_tessellation():
    prism = SingleAxisLattice(FRAME)
    with pytest.raises(ProtocolViolation):
        prism.apply_top_images(["a"])
    with pytest.raises(ProtocolViolation):
        prism.apply_side_images(["a"])

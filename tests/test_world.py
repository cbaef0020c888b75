from __future__ import annotations

import pytest

from sandbox3d.common.aabb import AABB
from sandbox3d.common.vecmath import vec3
from sandbox3d.world.world import World, block_key


def _world() -> World:
    w = World(AABB(minimum=vec3(-50, -5, -50), maximum=vec3(50, 50, 50)))
    w.create_ground(0.0)
    return w


def test_block_key_rounds_half_away_from_zero() -> None:
    assert block_key(vec3(5.4, 0, 5.4)) == (5, 0, 5)
    assert block_key(vec3(5.6, 0, 5.6)) == (6, 0, 6)
    assert block_key(vec3(5.5, 0.5, -0.5)) == (6, 1, -1)
    assert block_key(vec3(-5.4, -5.5, 0.49)) == (-5, -6, 0)


def test_block_key_keeps_double_precision_for_plain_triples() -> None:
    assert block_key((0.49999999, 0.0, -0.49999999)) == (0, 0, 0)
    assert block_key((2.0**24, 0.0, -(2.0**24))) == (2**24, 0, -(2**24))


def test_block_key_rejects_unaddressable_coordinates() -> None:
    for bad in ((1e39, 0.0, 0.0), (0.0, float("inf"), 0.0), (0.0, 0.0, float("nan")), (2.0**24 + 1, 0.0, 0.0)):
        with pytest.raises(ValueError):
            block_key(bad)


def test_create_then_destroy_round_trip() -> None:
    w = _world()
    block = w.create_platform(vec3(5, 0, 5), vec3(1, 1, 1))
    assert block.key == (5, 0, 5)
    assert w.has_block(vec3(5, 0, 5)) is True
    assert w.destroy_platform(vec3(5, 0, 5)) is True
    assert w.destroy_platform(vec3(5, 0, 5)) is False
    assert w.block_count() == 0


def test_destroy_missing_block_has_no_side_effects() -> None:
    w = _world()
    assert w.destroy_platform(vec3(1, 2, 3)) is False
    assert w.block_count() == 0
    assert w.blocks() == []


def test_nearby_positions_address_distinct_cells() -> None:
    w = _world()
    w.create_platform(vec3(5.4, 0, 5.4))
    assert w.destroy_platform(vec3(5.6, 0, 5.6)) is False
    assert w.destroy_platform(vec3(4.9, 0.2, 5.1)) is True


def test_create_on_existing_cell_replaces_block() -> None:
    w = _world()
    w.create_platform(vec3(1, 1, 1))
    w.create_platform(vec3(1.2, 0.8, 1.1))
    assert w.block_count() == 1
    assert [b.key for b in w.blocks()] == [(1, 1, 1)]


def test_block_aabb_is_centered_on_cell() -> None:
    w = _world()
    block = w.create_platform(vec3(2, 0, -3))
    box = block.aabb()
    assert box.minimum.x == pytest.approx(1.5)
    assert box.maximum.y == pytest.approx(0.5)
    assert box.minimum.z == pytest.approx(-3.5)
    assert len(list(w.solid_boxes())) == 1


def test_draw_lists_camera_player_and_sorted_blocks() -> None:
    w = _world()
    w.create_platform(vec3(5, 0, 5))
    w.create_platform(vec3(-1, 0, 2))
    w.camera.set_position(vec3(0, 7, -10))
    w.camera.look_at(vec3(0, 2, 0))

    lines = w.draw(player_position=vec3(0, 2, 0))
    assert "=== WORLD VIEW ===" in lines
    assert "Camera: (0, 7, -10) looking at (0, 2, 0)" in lines
    assert "Ground: y = 0" in lines
    assert "Player: (0, 2, 0)" in lines
    assert "Blocks: 2" in lines
    i1 = lines.index("  block at (-1, 0, 2)")
    i2 = lines.index("  block at (5, 0, 5)")
    assert i1 < i2
    assert w.block_count() == 2


def test_clamp_and_update() -> None:
    w = _world()
    p = w.clamp_to_bounds(vec3(80, 0, -80))
    assert p.x == pytest.approx(50.0)
    assert p.z == pytest.approx(-50.0)
    w.update(0.1)
    w.update(0.1)
    assert w.world_time == pytest.approx(0.2)
    assert w.get_bounds() is w.bounds
    assert w.get_camera() is w.camera

from __future__ import annotations

import os
import sys

import numpy as np
import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from euler import euler_characteristic, euler_slice_sums
from euler_lut import EULER_LUT
from octant import octant_contribution, sample_octant
from phantoms import cuboid, planar_ring, wire_frame_cuboid
from volume import Volume


def _reference_chi(grid: np.ndarray) -> float:
    # Plain loop over every octant overlapping the grid, through Volume.get
    vol = Volume(grid)
    nu, nv, nw = vol.shape
    buf = np.zeros(8, dtype=np.bool_)
    total = 0
    for w in range(nw + 1):
        for v in range(nv + 1):
            for u in range(nu + 1):
                total += int(octant_contribution(sample_octant(vol, u, v, w, buf), EULER_LUT))
    return total / 8.0


def test_empty_grid():
    assert euler_characteristic(np.zeros((4, 5, 6), dtype=bool)) == 0.0


def test_zero_sized_axis():
    assert euler_characteristic(np.zeros((0, 3, 3), dtype=bool)) == 0.0
    assert euler_slice_sums(np.zeros((3, 3, 0), dtype=bool)).shape == (1,)


def test_single_voxel_anywhere():
    for pos in [(2, 2, 2), (0, 0, 0), (4, 0, 2), (4, 4, 4)]:
        grid = np.zeros((5, 5, 5), dtype=bool)
        grid[pos] = True
        assert euler_characteristic(grid) == 1.0, pos


def test_solid_blocks():
    assert euler_characteristic(cuboid(3, 4, 5, padding=2)) == 1.0
    assert euler_characteristic(np.ones((3, 3, 3), dtype=bool)) == 1.0
    assert euler_characteristic(np.ones((1, 1, 1), dtype=bool)) == 1.0


def test_two_particles():
    grid = np.zeros((5, 5, 5), dtype=bool)
    grid[0, 0, 0] = True
    grid[3, 3, 3] = True
    assert euler_characteristic(grid) == 2.0


def test_diagonal_voxels_are_joined():
    grid = np.zeros((3, 3, 3), dtype=bool)
    grid[0, 0, 0] = True
    grid[1, 1, 1] = True
    assert euler_characteristic(grid) == 1.0


def test_ring_has_one_loop():
    assert euler_characteristic(planar_ring(3, padding=1)) == 0.0
    assert euler_characteristic(planar_ring(5)) == 0.0


def test_hollow_box_encloses_cavity():
    grid = cuboid(5, 5, 5, padding=1)
    grid[2:5, 2:5, 2:5] = False
    assert euler_characteristic(grid) == 2.0


def test_wire_frame():
    assert euler_characteristic(wire_frame_cuboid(10, 10, 10, padding=1)) == -4.0
    assert euler_characteristic(wire_frame_cuboid(10, 10, 10)) == -4.0
    assert euler_characteristic(wire_frame_cuboid(3, 6, 4)) == -4.0


def test_matches_reference_loop():
    rng = np.random.default_rng(11)
    grid = rng.random((5, 4, 6)) > 0.55
    assert euler_characteristic(grid) == _reference_chi(grid)


def test_slice_sums():
    grid = wire_frame_cuboid(4, 4, 4, padding=1)
    sums = euler_slice_sums(grid)
    assert sums.shape == (grid.shape[2] + 1,)
    assert sums.dtype == np.int64
    assert sums.sum() == -32
    assert np.array_equal(np.concatenate([euler_slice_sums(grid, 0, 3), euler_slice_sums(grid, 3)]), sums)


def test_slice_range_checked():
    grid = np.zeros((2, 2, 2), dtype=bool)
    with pytest.raises(ValueError):
        euler_slice_sums(grid, 0, 4)
    with pytest.raises(ValueError):
        euler_slice_sums(grid, 2, 1)


def test_partition_does_not_change_result():
    rng = np.random.default_rng(5)
    grid = rng.random((12, 9, 10)) > 0.6
    chi = euler_characteristic(grid)
    for chunks in (2, 3, 7, 11, 50):
        assert euler_characteristic(grid, chunks=chunks) == chi


def test_invalid_input():
    with pytest.raises(ValueError):
        euler_characteristic(np.zeros((3, 3), dtype=bool))
    with pytest.raises(ValueError):
        euler_characteristic(np.zeros((3, 3, 3), dtype=bool), chunks=0)

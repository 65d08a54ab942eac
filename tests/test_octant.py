from __future__ import annotations

import os
import sys

import numpy as np
import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from euler_lut import EULER_LUT
from octant import OCTANT_OFFSETS, fill_octant, octant_contribution, octant_index, sample_octant
from volume import Volume


@pytest.mark.parametrize("voxel,neighbour", [
    ((0, 0, 0), 1), ((0, 1, 0), 2), ((1, 0, 0), 3), ((1, 1, 0), 4),
    ((0, 0, 1), 5), ((0, 1, 1), 6), ((1, 0, 1), 7), ((1, 1, 1), 8),
])
def test_neighbour_numbering(voxel, neighbour):
    grid = np.zeros((2, 2, 2), dtype=bool)
    grid[voxel] = True
    octant = sample_octant(Volume(grid), 1, 1, 1)
    expected = np.zeros(8, dtype=bool)
    expected[neighbour - 1] = True
    assert np.array_equal(octant, expected)


def test_offsets_order():
    assert OCTANT_OFFSETS[0] == (-1, -1, -1)
    assert OCTANT_OFFSETS[7] == (0, 0, 0)
    assert len(set(OCTANT_OFFSETS)) == 8


def test_reads_outside_grid_are_background():
    vol = Volume(np.ones((2, 2, 2), dtype=bool))
    low = sample_octant(vol, 0, 0, 0)
    assert low.tolist() == [False] * 7 + [True]
    high = sample_octant(vol, 2, 2, 2)
    assert high.tolist() == [True] + [False] * 7
    assert not sample_octant(vol, 10, -5, 0).any()


def test_buffer_is_reused():
    vol = Volume(np.ones((2, 2, 2), dtype=bool))
    buf = np.zeros(8, dtype=np.bool_)
    out = sample_octant(vol, 1, 1, 1, out=buf)
    assert out is buf
    assert buf.all()
    sample_octant(vol, 0, 0, 0, out=buf)
    assert buf.sum() == 1


def test_compiled_sampler_matches_volume_reads():
    rng = np.random.default_rng(3)
    vol = Volume(rng.random((4, 3, 5)) > 0.5)
    padded = vol.padded
    nu, nv, nw = vol.shape
    buf = np.zeros(8, dtype=np.bool_)
    for w in range(nw + 1):
        for v in range(nv + 1):
            for u in range(nu + 1):
                fill_octant(padded, u, v, w, buf)
                assert np.array_equal(buf, sample_octant(vol, u, v, w)), (u, v, w)


def _octant(*neighbours):
    o = np.zeros(8, dtype=np.bool_)
    for n in neighbours:
        o[n - 1] = True
    return o


def test_index_cascade():
    assert octant_index(_octant()) == 1
    assert octant_index(_octant(1)) == 1
    assert octant_index(_octant(8)) == 1
    assert octant_index(_octant(1, 8)) == 129
    assert octant_index(_octant(*range(1, 9))) == 255
    # highest neighbour 7 maps n2 -> 128
    assert octant_index(_octant(2, 7)) == 129
    # highest neighbour 2 maps n1 -> 2
    assert octant_index(_octant(1, 2)) == 3


def test_index_is_always_odd():
    for bits in range(256):
        o = np.array([(bits >> n) & 1 for n in range(8)], dtype=np.bool_)
        assert octant_index(o) % 2 == 1


def test_contribution_of_empty_octant_is_zero():
    assert octant_contribution(_octant(), EULER_LUT) == 0
    assert octant_contribution(_octant(4), EULER_LUT) == 1

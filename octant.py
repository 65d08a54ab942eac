from __future__ import annotations

import numpy as np
from numba import njit

from volume import Volume


# Neighbour n (1..8) of coordinate (u,v,w) sits at (u+du, v+dv, w+dw); stored at index n-1.
OCTANT_OFFSETS = (
    (-1, -1, -1),  # 1
    (-1, 0, -1),   # 2
    (0, -1, -1),   # 3
    (0, 0, -1),    # 4
    (-1, -1, 0),   # 5
    (-1, 0, 0),    # 6
    (0, -1, 0),    # 7
    (0, 0, 0),     # 8
)


def sample_octant(volume: Volume, u: int, v: int, w: int, out: np.ndarray | None = None) -> np.ndarray:
    """Read the 2×2×2 neighbourhood whose deepest corner is voxel (u,v,w).

    Parameters
    ----------
    volume : Volume
        Source grid; reads outside it are background.
    u, v, w : int
        Coordinate of neighbour 8. May lie one step past the far face.
    out : (8,) bool array, optional
        Buffer to fill and return instead of allocating.

    Returns
    -------
    octant : (8,) bool array
        Neighbours 1..8 at indices 0..7.
    """
    if out is None:
        out = np.zeros(8, dtype=np.bool_)
    for n, (du, dv, dw) in enumerate(OCTANT_OFFSETS):
        out[n] = volume.get(u + du, v + dv, w + dw)
    return out


@njit(inline='always')
def fill_octant(padded, u, v, w, out):
    # padded carries a one-voxel margin: voxel (u-1,v-1,w-1) is padded[u,v,w]
    out[0] = padded[u, v, w]
    out[1] = padded[u, v + 1, w]
    out[2] = padded[u + 1, v, w]
    out[3] = padded[u + 1, v + 1, w]
    out[4] = padded[u, v, w + 1]
    out[5] = padded[u, v + 1, w + 1]
    out[6] = padded[u + 1, v, w + 1]
    out[7] = padded[u + 1, v + 1, w + 1]


@njit(cache=True)
def octant_index(octant) -> int:
    """Canonical table index of an octant.

    The highest foreground neighbour decides a rotation/reflection of the cube
    that brings it to position 8; the remaining neighbours then set the bits
    below. Bit 0 is always set, so only odd indices occur.
    """
    n1, n2, n3, n4 = octant[0], octant[1], octant[2], octant[3]
    n5, n6, n7, n8 = octant[4], octant[5], octant[6], octant[7]
    index = 1
    if n8:
        if n1:
            index |= 128
        if n2:
            index |= 64
        if n3:
            index |= 32
        if n4:
            index |= 16
        if n5:
            index |= 8
        if n6:
            index |= 4
        if n7:
            index |= 2
    elif n7:
        if n2:
            index |= 128
        if n4:
            index |= 64
        if n1:
            index |= 32
        if n3:
            index |= 16
        if n6:
            index |= 8
        if n5:
            index |= 2
    elif n6:
        if n3:
            index |= 128
        if n1:
            index |= 64
        if n4:
            index |= 32
        if n2:
            index |= 16
        if n5:
            index |= 4
    elif n5:
        if n4:
            index |= 128
        if n3:
            index |= 64
        if n2:
            index |= 32
        if n1:
            index |= 16
    elif n4:
        if n1:
            index |= 8
        if n3:
            index |= 4
        if n2:
            index |= 2
    elif n3:
        if n2:
            index |= 8
        if n1:
            index |= 4
    elif n2:
        if n1:
            index |= 2
    return index


@njit(cache=True)
def octant_contribution(octant, lut) -> int:
    """Scaled Euler contribution of one octant; 0 when it holds no foreground."""
    for n in range(8):
        if octant[n]:
            return lut[octant_index(octant)]
    return 0

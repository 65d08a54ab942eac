from __future__ import annotations

import numpy as np
import numba

from euler_lut import EULER_LUT
from octant import fill_octant, octant_contribution
from volume import Volume, as_volume


@numba.njit(parallel=True, cache=True)
def _euler_slice_sums_numba(padded: np.ndarray, lut: np.ndarray,
                            w_start: int, w_stop: int) -> np.ndarray:
    """Scaled Euler contribution of every octant, summed per w lattice plane.

    Lattice planes run 0..W inclusive (padded has W+2 planes), so octants
    straddling the far faces are included. Each plane writes only its own slot.
    """
    nu = padded.shape[0] - 1
    nv = padded.shape[1] - 1
    nslab = w_stop - w_start
    sums = np.zeros(nslab, dtype=np.int64)

    # Process in parallel over w-slices
    for s in numba.prange(nslab):
        w = w_start + s
        octant = np.zeros(8, dtype=np.bool_)
        local = 0
        for v in range(nv):
            for u in range(nu):
                fill_octant(padded, u, v, w, octant)
                local += octant_contribution(octant, lut)
        sums[s] = local

    return sums


def _split_axis(n: int, p: int) -> list[tuple[int, int]]:
    base, rem = divmod(n, p)
    s = 0
    out = []
    for c in range(p):
        extra = 1 if c < rem else 0
        e = s + base + extra
        out.append((s, e))
        s = e
    return out


def euler_slice_sums(grid, w_start: int = 0, w_stop: int | None = None) -> np.ndarray:
    """Per-plane octant sums (scaled by 8) for w lattice planes [w_start, w_stop).

    Valid planes are 0..W; w_stop defaults to W+1.
    """
    volume = as_volume(grid)
    nw = volume.shape[2]
    if w_stop is None:
        w_stop = nw + 1
    if not 0 <= w_start <= w_stop <= nw + 1:
        raise ValueError(f"w range [{w_start}, {w_stop}) outside lattice planes 0..{nw}")
    if volume.size == 0 or w_start == w_stop:
        return np.zeros(w_stop - w_start, dtype=np.int64)
    return _euler_slice_sums_numba(volume.padded, EULER_LUT, w_start, w_stop)


def euler_characteristic(grid, chunks: int = 1) -> float:
    """Euler characteristic χ of the foreground (26-connected, closed voxels).

    Parameters
    ----------
    grid : Volume or array-like
        3-D binary volume.
    chunks : int
        Number of contiguous w-plane ranges to accumulate separately. The integer
        partials are summed before the single division by 8, so the result does
        not depend on the partition.

    Returns
    -------
    chi : float
    """
    if chunks < 1:
        raise ValueError(f"chunks must be >= 1, got {chunks}")
    volume = as_volume(grid)
    if volume.size == 0:
        return 0.0
    nplanes = volume.shape[2] + 1
    total = 0
    for w0, w1 in _split_axis(nplanes, min(chunks, nplanes)):
        total += int(euler_slice_sums(volume, w0, w1).sum())
    return total / 8.0

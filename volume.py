"""
volume.py

Binary voxel volume with zero-extended access.

- Data are stored as a read-only boolean array shaped [U, V, W].
- Any coordinate outside [0,U)x[0,V)x[0,W) reads as background.
- `padded` surrounds the grid with one background layer on every face so the
  compiled kernels can read octants without bounds checks.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from scipy import ndimage as ndi

from calibration import check_scale


class Volume:
    __slots__ = ("_data", "_padded", "scale", "unit")

    def __init__(self, data, scale: Sequence[float] = (1.0, 1.0, 1.0), unit: Optional[str] = None):
        arr = np.asarray(data)
        if arr.ndim != 3:
            raise ValueError(f"volume must be 3-dimensional, got ndim={arr.ndim} shape={arr.shape}")
        arr = np.array(arr, dtype=bool, order="C", copy=True)
        arr.flags.writeable = False
        self._data = arr
        self._padded = None
        self.scale = check_scale(scale)
        self.unit = unit or None

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def shape(self) -> tuple[int, int, int]:
        return self._data.shape

    @property
    def size(self) -> int:
        return int(self._data.size)

    @property
    def padded(self) -> np.ndarray:
        """Grid with a one-voxel background margin; voxel (i,j,k) is padded[i+1,j+1,k+1]."""
        if self._padded is None:
            p = np.pad(self._data, 1, mode="constant", constant_values=False)
            p.flags.writeable = False
            self._padded = p
        return self._padded

    def get(self, u: int, v: int, w: int) -> bool:
        nu, nv, nw = self._data.shape
        if 0 <= u < nu and 0 <= v < nv and 0 <= w < nw:
            return bool(self._data[u, v, w])
        return False

    def foreground_count(self) -> int:
        return int(np.count_nonzero(self._data))

    def __repr__(self) -> str:
        return f"Volume(shape={self.shape}, scale={self.scale}, unit={self.unit!r})"


def as_volume(grid, scale: Optional[Sequence[float]] = None) -> Volume:
    """Wrap an array-like as a Volume; an existing Volume is returned as is unless scale is given."""
    if isinstance(grid, Volume):
        if scale is None:
            return grid
        return Volume(grid.data, scale=scale, unit=grid.unit)
    return Volume(grid, scale=(1.0, 1.0, 1.0) if scale is None else scale)


def count_particles(volume: Volume) -> int:
    """Number of 26-connected foreground particles."""
    if volume.size == 0:
        return 0
    structure = np.ones((3, 3, 3), dtype=bool)
    _, n = ndi.label(volume.data, structure=structure)
    return int(n)

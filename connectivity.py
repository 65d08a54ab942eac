from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Sequence

import numpy as np

from boundary import delta_chi
from calibration import calibrated_space_size
from euler import euler_characteristic
from volume import as_volume


@dataclass(frozen=True)
class Characteristics:
    """Topology of a binary volume.

    - euler_characteristic: χ of the foreground inside the sampled box
    - delta_chi: χ minus the boundary correction, i.e. the contribution of
      the sample to the structure it was cut from
    - connectivity: 1 - delta_chi
    - connectivity_density: connectivity per calibrated volume
    """

    euler_characteristic: float
    delta_chi: float
    connectivity: float
    connectivity_density: float

    def as_dict(self) -> dict:
        return asdict(self)


def connectivity_density(connectivity: float, shape: Sequence[int], scale: Sequence[float]) -> float:
    """connectivity / (U*V*W * su*sv*sw); inf or nan when the calibrated volume is 0."""
    space = np.float64(calibrated_space_size(shape, scale))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(connectivity) / space)


def compute_connectivity(grid, scale: Optional[Sequence[float]] = None, chunks: int = 1) -> Characteristics:
    """Euler characteristic, Δχ, connectivity and connectivity density of a volume.

    Parameters
    ----------
    grid : Volume or array-like
        3-D binary volume, foreground assumed to be a single structure.
    scale : (su, sv, sw), optional
        Calibrated voxel size. Defaults to the Volume's own scale, or 1 for arrays.
    chunks : int
        Passed to euler_characteristic.
    """
    volume = as_volume(grid, scale)
    chi = euler_characteristic(volume, chunks=chunks)
    dchi = delta_chi(chi, volume)
    conn = 1.0 - dchi
    return Characteristics(
        euler_characteristic=chi,
        delta_chi=dchi,
        connectivity=conn,
        connectivity_density=connectivity_density(conn, volume.shape, volume.scale),
    )

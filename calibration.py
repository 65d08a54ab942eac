from __future__ import annotations

import math
from typing import Iterable, Sequence


def check_scale(scale: Iterable[float]) -> tuple[float, float, float]:
    """Validate a per-axis voxel size and return it as three floats.

    Zero is accepted (degenerate calibration); negative or non-finite values are not.
    """
    vals = tuple(float(s) for s in scale)
    if len(vals) != 3:
        raise ValueError(f"scale must have 3 entries (su, sv, sw), got {len(vals)}")
    for s in vals:
        if not math.isfinite(s) or s < 0.0:
            raise ValueError(f"scale entries must be finite and non-negative, got {vals}")
    return vals


def calibrated_element_size(scale: Sequence[float]) -> float:
    """Size of one voxel in calibrated units (su * sv * sw)."""
    su, sv, sw = check_scale(scale)
    return su * sv * sw


def calibrated_space_size(shape: Sequence[int], scale: Sequence[float]) -> float:
    """Calibrated size of the whole sampled box: U*V*W voxels times the element size."""
    if len(shape) != 3:
        raise ValueError(f"shape must have 3 entries, got {tuple(shape)}")
    count = 1
    for n in shape:
        count *= int(n)
    return float(count) * calibrated_element_size(scale)


def spatial_unit(units: Sequence[str | None]) -> str | None:
    """Return the unit shared by all spatial axes, or None.

    None when any axis lacks a unit or the axes disagree; callers then report
    results in voxel units.
    """
    if len(units) == 0:
        return None
    first = units[0]
    if not first:
        return None
    for u in units[1:]:
        if u != first:
            return None
    return first

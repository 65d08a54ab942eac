"""
io_bridge.py

Thin I/O wrapper for reading 3-D image stacks saved with numpy.

- `.npy` files hold the array directly; `.npz` archives need a key (or hold
  exactly one array).
- Axis order of the stored array is taken as [u, v, w]; no transposition.
- Boolean arrays are used as they are; anything else is binarised with a
  threshold.

Primary API
-----------

    from io_bridge import IOConfig, load_volume

    cfg = IOConfig(
        input_path="./trabecular_roi.npz",
        input_key="image",
        threshold=128,
        cut_op="gt",     # foreground where value > threshold
    )
    grid = load_volume(cfg)   # bool array [U, V, W]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class IOConfig:
    """Configuration for load_volume.

    - input_path: .npy or .npz file
    - input_key: array name inside an .npz archive; may be None when the archive holds one array
    - threshold: grey level separating foreground from background; None means any
      non-zero value is foreground
    - cut_op: "gt" keeps values > threshold, "lt" keeps values < threshold
    """

    input_path: str
    input_key: Optional[str] = None
    threshold: Optional[float] = None
    cut_op: str = "gt"


def read_array(path: str, key: Optional[str] = None) -> np.ndarray:
    """Read a raw array from .npy or .npz."""
    if str(path).endswith(".npz"):
        with np.load(path) as arch:
            names = list(arch.files)
            if key is None:
                if len(names) != 1:
                    raise ValueError(f"{path} holds {len(names)} arrays {names}; set input_key")
                key = names[0]
            if key not in names:
                raise KeyError(f"key '{key}' not in {path} (available: {names})")
            return np.asarray(arch[key])
    return np.asarray(np.load(path, allow_pickle=False))


def binarize(arr: np.ndarray, threshold: Optional[float] = None, cut_op: str = "gt") -> np.ndarray:
    """Foreground mask of an image; boolean input passes through unchanged."""
    if cut_op not in ("gt", "lt"):
        raise ValueError("cut_op must be 'lt' or 'gt'")
    if arr.dtype == np.bool_:
        return arr
    if threshold is None:
        return arr != 0
    if cut_op == "gt":
        return arr > threshold
    return arr < threshold


def load_volume(cfg: IOConfig) -> np.ndarray:
    """Load and binarise a 3-D image stack; non-3-D input is rejected."""
    arr = read_array(cfg.input_path, cfg.input_key)
    if arr.ndim != 3:
        raise ValueError(f"{cfg.input_path}: expected a 3-D image, got shape {arr.shape}")
    return binarize(arr, cfg.threshold, cfg.cut_op)

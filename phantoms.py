from __future__ import annotations

import numpy as np


def _check_sizes(u_size: int, v_size: int, w_size: int, padding: int) -> None:
    if min(u_size, v_size, w_size) < 1:
        raise ValueError(f"cuboid sizes must be >= 1, got {(u_size, v_size, w_size)}")
    if padding < 0:
        raise ValueError(f"padding must be >= 0, got {padding}")


def cuboid(u_size: int, v_size: int, w_size: int, padding: int = 0) -> np.ndarray:
    """Solid cuboid of u_size*v_size*w_size voxels with `padding` background layers on every face."""
    _check_sizes(u_size, v_size, w_size, padding)
    shape = (u_size + 2 * padding, v_size + 2 * padding, w_size + 2 * padding)
    grid = np.zeros(shape, dtype=bool)
    grid[padding:padding + u_size, padding:padding + v_size, padding:padding + w_size] = True
    return grid


def wire_frame_cuboid(u_size: int, v_size: int, w_size: int, padding: int = 0) -> np.ndarray:
    """The 12 one-voxel-thick edges of a cuboid, `padding` background layers around it.

    A closed wire frame has χ = -4 (five independent loops).
    """
    _check_sizes(u_size, v_size, w_size, padding)
    shape = (u_size + 2 * padding, v_size + 2 * padding, w_size + 2 * padding)
    grid = np.zeros(shape, dtype=bool)
    u0, u1 = padding, padding + u_size - 1
    v0, v1 = padding, padding + v_size - 1
    w0, w1 = padding, padding + w_size - 1
    for v in (v0, v1):
        for w in (w0, w1):
            grid[u0:u1 + 1, v, w] = True
    for u in (u0, u1):
        for w in (w0, w1):
            grid[u, v0:v1 + 1, w] = True
    for u in (u0, u1):
        for v in (v0, v1):
            grid[u, v, w0:w1 + 1] = True
    return grid


def planar_ring(size: int = 3, padding: int = 0) -> np.ndarray:
    """Square ring one voxel thick in a single w layer (size x size minus the interior)."""
    if size < 3:
        raise ValueError(f"ring size must be >= 3, got {size}")
    if padding < 0:
        raise ValueError(f"padding must be >= 0, got {padding}")
    shape = (size + 2 * padding, size + 2 * padding, 1 + 2 * padding)
    grid = np.zeros(shape, dtype=bool)
    w = padding
    s0, s1 = padding, padding + size
    grid[s0:s1, s0:s1, w] = True
    grid[s0 + 1:s1 - 1, s0 + 1:s1 - 1, w] = False
    return grid

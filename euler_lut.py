from __future__ import annotations

import numpy as np


# Euler contribution of each canonical 2×2×2 octant configuration, scaled by 8.
# Index 1 + sum of neighbour bits after the canonical reordering in octant.py;
# even indices are never produced and stay 0. Values equal
#   8·v − 4·e + 2·f − c
# for the closed voxel cubes meeting at the shared lattice vertex (26-connected
# foreground), which is why summing them over all octants gives 8·χ.
EULER_LUT = np.array([
     0,  1,  0,  0,  0,  0,  0, -1,  0, -2,  0, -1,  0, -1,  0,  0,  # 0-15
     0,  0,  0, -1,  0, -1,  0, -2,  0, -3,  0, -2,  0, -2,  0, -1,  # 16-31
     0, -2,  0, -1,  0, -3,  0, -2,  0, -1,  0, -2,  0,  0,  0, -1,  # 32-47
     0, -1,  0,  0,  0, -2,  0, -1,  0,  0,  0, -1,  0,  1,  0,  0,  # 48-63
     0, -2,  0, -3,  0, -1,  0, -2,  0, -1,  0,  0,  0, -2,  0, -1,  # 64-79
     0, -1,  0, -2,  0,  0,  0, -1,  0,  0,  0,  1,  0, -1,  0,  0,  # 80-95
     0, -1,  0,  0,  0,  0,  0,  1,  0,  4,  0,  3,  0,  3,  0,  2,  # 96-111
     0, -2,  0, -1,  0, -1,  0,  0,  0,  3,  0,  2,  0,  2,  0,  1,  # 112-127
     0, -6,  0, -3,  0, -3,  0,  0,  0, -3,  0, -2,  0, -2,  0, -1,  # 128-143
     0, -3,  0,  0,  0,  0,  0,  3,  0,  0,  0,  1,  0,  1,  0,  2,  # 144-159
     0, -3,  0, -2,  0,  0,  0,  1,  0,  0,  0, -1,  0,  1,  0,  0,  # 160-175
     0, -2,  0, -1,  0,  1,  0,  2,  0,  1,  0,  0,  0,  2,  0,  1,  # 176-191
     0, -3,  0,  0,  0, -2,  0,  1,  0,  0,  0,  1,  0, -1,  0,  0,  # 192-207
     0, -2,  0,  1,  0, -1,  0,  2,  0,  1,  0,  2,  0,  0,  0,  1,  # 208-223
     0,  0,  0,  1,  0,  1,  0,  2,  0,  3,  0,  2,  0,  2,  0,  1,  # 224-239
     0, -1,  0,  0,  0,  0,  0,  1,  0,  2,  0,  1,  0,  1,  0,  0,  # 240-255
], dtype=np.int64)
EULER_LUT.flags.writeable = False


def lookup(pattern: int) -> int:
    """Return the scaled Euler contribution for a canonical octant index (0..255)."""
    if not 0 <= pattern <= 255:
        raise ValueError(f"octant pattern must be in 0..255, got {pattern}")
    return int(EULER_LUT[pattern])

"""
boundary.py

Correction for the part of the foreground cut off by the sampled box.

The box B = [0,U]x[0,V]x[0,W] is treated as a cubical complex. A lattice
vertex, unit edge or unit facet on the box surface is foreground when a
foreground voxel touches it. From the six counts

    chi_zero  box corners covered                         (χ0)
    e         unit segments covered on the 12 box edges
    d         lattice vertices covered on the 12 box edges
    c         unit facets covered on the 6 box faces
    b         unit edges covered on the 6 box faces
    a         lattice vertices covered on the 6 box faces

we get χ1 = d - e (box edges), χ2 = a - b + c (box faces) and

    correction = χ2/2 + χ1/4 + χ0/8
    Δχ = χ - correction

Features shared by two faces are counted once: faces normal to w count
everything they hold, faces normal to u skip the w boundary, faces normal to
v skip the w and u boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from volume import as_volume


@dataclass(frozen=True)
class BoundaryCounts:
    chi_zero: int
    e: int
    c: int
    d: int
    a: int
    b: int

    @property
    def chi_one(self) -> int:
        return self.d - self.e

    @property
    def chi_two(self) -> int:
        return self.a - self.b + self.c

    @property
    def correction(self) -> float:
        return self.chi_two / 2.0 + self.chi_one / 4.0 + self.chi_zero / 8.0

    def as_dict(self) -> dict:
        return {
            "chi_zero": self.chi_zero, "e": self.e, "c": self.c,
            "d": self.d, "a": self.a, "b": self.b,
            "chi_one": self.chi_one, "chi_two": self.chi_two,
            "correction": self.correction,
        }


def _face_layers(grid: np.ndarray, axis: int) -> Iterator[np.ndarray]:
    """Yield the low and high voxel layers normal to axis.

    In-plane axes keep their order, e.g. axis=1 gives (u, w) layers. A grid one
    voxel thick yields the same layer twice (two box faces).
    """
    n = grid.shape[axis]
    for idx in (0, n - 1):
        yield np.take(grid, idx, axis=axis)


def _edge_lines(grid: np.ndarray, axis: int) -> Iterator[np.ndarray]:
    """Yield the four voxel rows running along the box edges parallel to axis."""
    moved = np.moveaxis(grid, axis, -1)
    n0, n1 = moved.shape[:2]
    for j in (0, n0 - 1):
        for k in (0, n1 - 1):
            yield moved[j, k]


def _plane_vertices(layer: np.ndarray) -> np.ndarray:
    """(Np+1, Nq+1) occupancy of the lattice vertices of a face layer."""
    p = np.pad(layer, 1)
    return p[:-1, :-1] | p[1:, :-1] | p[:-1, 1:] | p[1:, 1:]


def _plane_edges(layer: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Occupancy of the unit edges of a face layer.

    Returns (along_p, along_q) shaped (Np, Nq+1) and (Np+1, Nq); the second
    index of along_p and the first of along_q is the lattice line coordinate.
    """
    p = np.pad(layer, 1)
    along_p = p[1:-1, :-1] | p[1:-1, 1:]
    along_q = p[:-1, 1:-1] | p[1:, 1:-1]
    return along_p, along_q


def count_corner_voxels(grid) -> int:
    """χ0: corners of the box covered by foreground (0..8)."""
    volume = as_volume(grid)
    if volume.size == 0:
        return 0
    nu, nv, nw = volume.shape
    corners = volume.data[np.ix_([0, nu - 1], [0, nv - 1], [0, nw - 1])]
    return int(np.count_nonzero(corners))


def count_edge_segments(grid) -> int:
    """e: unit segments covered on the 12 box edges."""
    volume = as_volume(grid)
    if volume.size == 0:
        return 0
    total = 0
    for axis in range(3):
        for row in _edge_lines(volume.data, axis):
            total += int(np.count_nonzero(row))
    return total


def count_edge_vertices(grid) -> int:
    """d: lattice vertices covered on the 12 box edges, corners included once."""
    volume = as_volume(grid)
    if volume.size == 0:
        return 0
    total = 0
    for axis in range(3):
        for row in _edge_lines(volume.data, axis):
            total += int(np.count_nonzero(row[:-1] | row[1:]))
    return total + count_corner_voxels(volume)


def count_face_facets(grid) -> int:
    """c: unit facets covered on the 6 box faces."""
    volume = as_volume(grid)
    if volume.size == 0:
        return 0
    total = 0
    for axis in range(3):
        for layer in _face_layers(volume.data, axis):
            total += int(np.count_nonzero(layer))
    return total


def count_face_vertices(grid) -> int:
    """a: lattice vertices covered on the 6 box faces."""
    volume = as_volume(grid)
    if volume.size == 0:
        return 0
    data = volume.data
    total = 0
    for layer in _face_layers(data, 2):
        total += int(np.count_nonzero(_plane_vertices(layer)))
    # (v, w) layers: drop w = 0, W
    for layer in _face_layers(data, 0):
        total += int(np.count_nonzero(_plane_vertices(layer)[:, 1:-1]))
    # (u, w) layers: drop u = 0, U and w = 0, W
    for layer in _face_layers(data, 1):
        total += int(np.count_nonzero(_plane_vertices(layer)[1:-1, 1:-1]))
    return total


def count_face_edges(grid) -> int:
    """b: unit edges covered on the 6 box faces."""
    volume = as_volume(grid)
    if volume.size == 0:
        return 0
    data = volume.data
    total = 0
    for layer in _face_layers(data, 2):
        along_u, along_v = _plane_edges(layer)
        total += int(np.count_nonzero(along_u)) + int(np.count_nonzero(along_v))
    for layer in _face_layers(data, 0):
        along_v, along_w = _plane_edges(layer)
        total += int(np.count_nonzero(along_v[:, 1:-1])) + int(np.count_nonzero(along_w))
    for layer in _face_layers(data, 1):
        along_u, along_w = _plane_edges(layer)
        total += int(np.count_nonzero(along_u[:, 1:-1])) + int(np.count_nonzero(along_w[1:-1, :]))
    return total


def boundary_counts(grid) -> BoundaryCounts:
    volume = as_volume(grid)
    return BoundaryCounts(
        chi_zero=count_corner_voxels(volume),
        e=count_edge_segments(volume),
        c=count_face_facets(volume),
        d=count_edge_vertices(volume),
        a=count_face_vertices(volume),
        b=count_face_edges(volume),
    )


def edge_correction(grid) -> float:
    """χ2/2 + χ1/4 + χ0/8 for the sampled box."""
    return boundary_counts(grid).correction


def delta_chi(euler: float, grid) -> float:
    """Δχ: Euler characteristic minus the boundary correction."""
    return euler - edge_correction(grid)
# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

import itertools
from typing import List, NamedTuple

import numpy as np
from scipy.spatial import cKDTree

from GlycoEM.data.data import NONBOND_CUTOFF


class NeighbourHit(NamedTuple):
    atom: object
    index: int
    symmetry: int
    distance: float


class NonBondIndex:
    """
    Spatial index over every atom of a structure and, when the structure
    has a unit cell, over the symmetry and lattice images that lie within
    `cutoff` of the model.

    The index does not own the structure and never modifies it.
    """

    def __init__(self, structure, cutoff: float = NONBOND_CUTOFF):
        self.structure = structure
        self.cutoff = float(cutoff)

        coords = structure.coords
        self._tree = cKDTree(coords) if len(coords) else None

        self._image_coords = np.zeros((0, 3))
        self._image_index = np.zeros(0, dtype=int)
        self._image_symop = np.zeros(0, dtype=int)
        self._image_tree = None

        if structure.cell is not None and len(coords):
            self._build_images()

    def _build_images(self):
        cell = self.structure.cell
        frac = cell.to_fractional(self.structure.coords)
        margin = self.cutoff / cell.interplanar_widths()
        lo = frac.min(axis=0) - margin
        hi = frac.max(axis=0) + margin

        points, indices, symops = [], [], []
        for k, symop in enumerate(self.structure.symops):
            if k == 0:
                base = frac
            else:
                image = symop.apply(frac)
                base = image - np.floor(image)

            ranges = [
                range(int(np.ceil(lo[d] - base[:, d].max())),
                      int(np.floor(hi[d] - base[:, d].min())) + 1)
                for d in range(3)
            ]
            for shift in itertools.product(*ranges):
                if k == 0 and shift == (0, 0, 0):
                    continue
                moved = base + np.asarray(shift, dtype=float)
                keep = np.all((moved >= lo) & (moved <= hi), axis=1)
                if not keep.any():
                    continue
                points.append(cell.to_orthogonal(moved[keep]))
                indices.append(np.nonzero(keep)[0])
                symops.append(np.full(int(keep.sum()), k, dtype=int))

        if points:
            self._image_coords = np.vstack(points)
            self._image_index = np.concatenate(indices)
            self._image_symop = np.concatenate(symops)
            self._image_tree = cKDTree(self._image_coords)

    @property
    def n_images(self) -> int:
        return len(self._image_coords)

    def near(self, coord, radius: float) -> List[NeighbourHit]:
        """
        Atoms (and atom images) within radius of coord, nearest first.
        Image atoms are copies carrying the image coordinate.
        """
        if radius > self.cutoff + 1e-9:
            raise ValueError(
                f"Query radius {radius} exceeds the non-bond index cutoff {self.cutoff}."
            )
        coord = np.asarray(coord, dtype=float)
        hits = []

        if self._tree is not None:
            for i in self._tree.query_ball_point(coord, radius):
                atom = self.structure.atoms[i]
                d = float(np.linalg.norm(atom.coord - coord))
                hits.append(NeighbourHit(atom, int(i), 0, d))

        if self._image_tree is not None:
            for j in self._image_tree.query_ball_point(coord, radius):
                i = int(self._image_index[j])
                k = int(self._image_symop[j])
                image = self.structure.atoms[i].moved_to(self._image_coords[j], symmetry=k)
                d = float(np.linalg.norm(image.coord - coord))
                hits.append(NeighbourHit(image, i, k, d))

        hits.sort(key=lambda h: (h.distance, h.index, h.symmetry))
        return hits

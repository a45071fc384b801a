# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Unit cell and symmetry operator helpers.

Crystallographic models carry a unit cell and a list of symmetry
operators; cryo-EM models carry neither and only ever use the identity.
Operators act on fractional coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
import math
import re

import numpy as np


@dataclass(frozen=True)
class UnitCell:
    a: float
    b: float
    c: float
    alpha: float = 90.0
    beta: float = 90.0
    gamma: float = 90.0
    orth: np.ndarray = field(init=False, repr=False, compare=False)
    frac: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if min(self.a, self.b, self.c) <= 0.0:
            raise ValueError(f"Unit cell lengths must be positive, got {(self.a, self.b, self.c)}")

        al, be, ga = (math.radians(x) for x in (self.alpha, self.beta, self.gamma))
        cos_al, cos_be, cos_ga = math.cos(al), math.cos(be), math.cos(ga)
        sin_ga = math.sin(ga)

        vol_term = 1.0 - cos_al**2 - cos_be**2 - cos_ga**2 + 2.0 * cos_al * cos_be * cos_ga
        if vol_term <= 0.0:
            raise ValueError(f"Invalid unit cell angles {(self.alpha, self.beta, self.gamma)}")
        volume = self.a * self.b * self.c * math.sqrt(vol_term)

        # PDB convention, a along x, b in the xy plane
        orth = np.array([
            [self.a, self.b * cos_ga, self.c * cos_be],
            [0.0, self.b * sin_ga, self.c * (cos_al - cos_be * cos_ga) / sin_ga],
            [0.0, 0.0, volume / (self.a * self.b * sin_ga)],
        ])
        object.__setattr__(self, "orth", orth)
        object.__setattr__(self, "frac", np.linalg.inv(orth))

    @property
    def volume(self) -> float:
        return float(abs(np.linalg.det(self.orth)))

    def to_fractional(self, xyz) -> np.ndarray:
        return np.asarray(xyz, dtype=float) @ self.frac.T

    def to_orthogonal(self, uvw) -> np.ndarray:
        return np.asarray(uvw, dtype=float) @ self.orth.T

    def interplanar_widths(self) -> np.ndarray:
        """Perpendicular distance between opposite faces along a, b and c."""
        return 1.0 / np.linalg.norm(self.frac, axis=1)


_TERM = re.compile(r"([+-]?)([^+-]+)")


@dataclass(frozen=True, eq=False)
class SymOp:
    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self):
        rot = np.asarray(self.rotation, dtype=float).reshape(3, 3)
        trn = np.asarray(self.translation, dtype=float).reshape(3)
        rot.setflags(write=False)
        trn.setflags(write=False)
        object.__setattr__(self, "rotation", rot)
        object.__setattr__(self, "translation", trn)

    @classmethod
    def identity(cls) -> "SymOp":
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_xyz(cls, triplet: str) -> "SymOp":
        """
        Parse an operator in International Tables notation,
        e.g. "-x,y+1/2,-z+1/2".
        """
        rows = triplet.lower().replace(" ", "").split(",")
        if len(rows) != 3:
            raise ValueError(f"Symmetry operator must have three components: '{triplet}'")

        rotation = np.zeros((3, 3))
        translation = np.zeros(3)
        axes = {"x": 0, "y": 1, "z": 2}

        for i, row in enumerate(rows):
            if not row:
                raise ValueError(f"Empty component in symmetry operator '{triplet}'")
            for sign, body in _TERM.findall(row):
                factor = -1.0 if sign == "-" else 1.0
                if body[-1] in axes:
                    coeff = body[:-1].rstrip("*")
                    scale = float(Fraction(coeff)) if coeff else 1.0
                    rotation[i, axes[body[-1]]] += factor * scale
                else:
                    try:
                        translation[i] += factor * float(Fraction(body))
                    except ValueError as e:
                        raise ValueError(f"Could not parse '{body}' in symmetry operator '{triplet}'") from e

        return cls(rotation, translation)

    def is_identity(self) -> bool:
        return bool(np.allclose(self.rotation, np.eye(3)) and np.allclose(self.translation, 0.0))

    def apply(self, uvw) -> np.ndarray:
        return np.asarray(uvw, dtype=float) @ self.rotation.T + self.translation


def lattice_copy_near(uvw, near_uvw) -> np.ndarray:
    """Shift uvw by whole lattice vectors to the copy closest to near_uvw."""
    uvw = np.asarray(uvw, dtype=float)
    return uvw - np.round(uvw - np.asarray(near_uvw, dtype=float))


def symmetry_image(cell, symop, xyz, near_xyz) -> np.ndarray:
    """
    Orthogonal coordinate of the image of xyz under symop, taken at the
    lattice copy closest to near_xyz.
    """
    if cell is None or symop is None:
        return np.asarray(xyz, dtype=float)
    image = symop.apply(cell.to_fractional(xyz))
    image = lattice_copy_near(image, cell.to_fractional(near_xyz))
    return cell.to_orthogonal(image)


def symmetry_distance(cell, symop, xyz, near_xyz):
    image = symmetry_image(cell, symop, xyz, near_xyz)
    return image, float(np.linalg.norm(image - np.asarray(near_xyz, dtype=float)))

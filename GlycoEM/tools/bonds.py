# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Distance based covalent bond test.

Bonds are never stored; two atoms are bonded when their separation falls
strictly inside the window for their element pair.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from GlycoEM.data.data import BOND_WINDOWS, UNKNOWN_BOND_WINDOW
from GlycoEM.tools.crystal import symmetry_image


def _norm_element(element) -> str:
    return str(element).strip().upper()


def bond_window(element_a: str, element_b: str) -> Tuple[float, float]:
    key = frozenset((_norm_element(element_a), _norm_element(element_b)))
    return BOND_WINDOWS.get(key, UNKNOWN_BOND_WINDOW)


def is_bonded_distance(element_a: str, element_b: str, distance: float) -> bool:
    low, high = bond_window(element_a, element_b)
    return low < distance < high


def is_bonded(atom_a, atom_b, cell=None, symop=None) -> bool:
    """
    True if atom_a and atom_b are within the covalent window for their
    elements. With a cell and symop, atom_b is first mapped by the
    operator to the lattice copy nearest atom_a.
    """
    coord_b = atom_b.coord
    if cell is not None and symop is not None:
        coord_b = symmetry_image(cell, symop, coord_b, atom_a.coord)
    distance = float(np.linalg.norm(atom_a.coord - coord_b))
    return is_bonded_distance(atom_a.element, atom_b.element, distance)


def bonded_pairs(atoms, cell=None, symop=None):
    """All index pairs (i, j), i < j, of bonded atoms in a small atom list."""
    pairs = []
    for i in range(len(atoms)):
        for j in range(i + 1, len(atoms)):
            if is_bonded(atoms[i], atoms[j], cell, symop):
                pairs.append((i, j))
    return pairs

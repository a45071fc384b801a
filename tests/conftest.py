#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared fixtures: idealised sugar geometries built directly as GlycoEM
structure objects.

The glucose chair has ring radius 1.40 A, ring atoms alternating 0.25 A
above and below the mean plane (all ring bonds 1.4866 A, all ring
angles 109.3 degrees) and exocyclic C-O bonds of 1.43 A.
"""

import math

import numpy as np
import pytest

from GlycoEM.parsers.models import Atom, Monomer, Structure


GLUCOSE_RING = {
    "O5": (1.40, 0.0, -0.25),
    "C1": (0.70, 1.21244, 0.25),
    "C2": (-0.70, 1.21244, -0.25),
    "C3": (-1.40, 0.0, 0.25),
    "C4": (-0.70, -1.21244, -0.25),
    "C5": (0.70, -1.21244, 0.25),
}

GLUCOSE_SUBSTITUENTS = {
    "O2": (-1.3721, 2.3765, 0.2362),
    "O3": (-2.7442, 0.0, -0.2362),
    "O4": (-1.3721, -2.3765, 0.2362),
    "C6": (1.4144, -2.4498, -0.2668),
    "O6": (2.1244, -3.1598, -1.2709),
}

O1_AXIAL = (0.70, 1.21244, 1.68)
O1_EQUATORIAL = (1.3721, 2.3765, -0.2362)

GLUCOSE_ORDER = ("C1", "C2", "C3", "C4", "C5", "C6", "O1", "O2", "O3", "O4", "O5", "O6")


def glucose_coords(anomer="alpha", mirror=False):
    coords = dict(GLUCOSE_RING)
    coords.update(GLUCOSE_SUBSTITUENTS)
    coords["O1"] = O1_AXIAL if anomer == "alpha" else O1_EQUATORIAL
    sign = np.array([1.0, 1.0, -1.0 if mirror else 1.0])
    return {name: np.asarray(xyz, dtype=float) * sign for name, xyz in coords.items()}


def make_monomer(resname, coords, order=None, chain="A", seqnum=1, shift=(0.0, 0.0, 0.0),
                 altlocs=None, occupancies=None):
    order = order or list(coords)
    altlocs = altlocs or {}
    occupancies = occupancies or {}
    atoms = [
        Atom(name=name,
             element=name[0],
             coord=np.asarray(coords[name], dtype=float) + np.asarray(shift, dtype=float),
             altloc=altlocs.get(name, ""),
             occupancy=occupancies.get(name, 1.0))
        for name in order
    ]
    return Monomer(resname, chain=chain, seqnum=seqnum, atoms=atoms)


@pytest.fixture
def glucose():
    """Factory fixture: idealised 4C1 D-glucopyranose monomer."""
    def _make(anomer="alpha", mirror=False, resname="GLC", chain="A", seqnum=1,
              shift=(0.0, 0.0, 0.0), drop=()):
        coords = glucose_coords(anomer, mirror)
        order = [n for n in GLUCOSE_ORDER if n not in drop]
        return make_monomer(resname, coords, order=order, chain=chain, seqnum=seqnum, shift=shift)
    return _make


@pytest.fixture
def structure_of():
    """Factory fixture: wrap monomers into a Structure."""
    def _make(*monomers, cell=None, symops=None):
        return Structure(list(monomers), cell=cell, symops=symops)
    return _make


def pentagon(radius=1.2334, z=None, names=("O4", "C1", "C2", "C3", "C4")):
    z = z or (0.0,) * 5
    coords = {}
    for j, name in enumerate(names):
        angle = 2.0 * math.pi * j / 5.0
        coords[name] = (radius * math.cos(angle), radius * math.sin(angle), z[j])
    return coords


@pytest.fixture
def planar_furanose():
    """Factory fixture: flat regular five membered ring, 1.45 A bonds."""
    def _make(resname="XYZ"):
        coords = pentagon()
        return make_monomer(resname, coords)
    return _make


def galactofuranose_coords():
    """Furanose ring with a C5(O5)-C6(O6) exocyclic chain on C4."""
    coords = pentagon()
    coords.update({
        "O1": (0.6462, 1.9890, 1.144),
        "O2": (-1.6919, 1.2295, -1.144),
        "O3": (-1.6919, -1.2295, 1.144),
        "C5": (0.6629, -2.0403, -1.216),
        "O5": (1.8069, -2.0403, -2.074),
        "C6": (-0.2491, -3.2563, -1.216),
        "O6": (-1.1071, -3.2563, -2.360),
    })
    return coords


GALF_ORDER = ["C1", "C2", "C3", "C4", "C5", "C6", "O1", "O2", "O3", "O4", "O5", "O6"]


@pytest.fixture
def galactofuranose():
    """Factory fixture: furanose with an exocyclic C5 stereocentre."""
    def _make(resname="GZL"):
        return make_monomer(resname, galactofuranose_coords(), order=GALF_ORDER)
    return _make

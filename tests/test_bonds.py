#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pytest

from GlycoEM.parsers.models import Atom
from GlycoEM.tools.bonds import bond_window, bonded_pairs, is_bonded, is_bonded_distance
from GlycoEM.tools.crystal import SymOp, UnitCell


def _pair(el_a, el_b, d):
    a = Atom("A1", el_a, (0.0, 0.0, 0.0))
    b = Atom("B1", el_b, (d, 0.0, 0.0))
    return a, b


@pytest.mark.parametrize(
    "el_a,el_b,window",
    [("C", "C", (1.18, 1.60)),
     ("C", "N", (1.24, 1.52)),
     ("O", "C", (1.16, 1.50)),
     ("H", "C", (0.96, 1.14)),
     ("N", "H", (0.90, 1.10)),
     ("H", "O", (0.88, 1.04)),
     ("S", "C", (1.20, 1.80)),  # unknown pair
     ("O", "O", (1.20, 1.80)),
    ],
)
def test_bond_window(el_a, el_b, window):
    assert bond_window(el_a, el_b) == window
    assert bond_window(el_b, el_a) == window


@pytest.mark.parametrize(
    "el_a,el_b,d,expected",
    [("C", "C", 1.53, True),
     ("C", "C", 1.60, False),   # upper bound exclusive
     ("C", "C", 1.18, False),   # lower bound exclusive
     ("C", "O", 1.43, True),
     ("C", "O", 1.52, False),
     ("C", "N", 1.47, True),
     ("O", "H", 0.97, True),
     ("C", "S", 1.79, True),
     ("C", "S", 1.80, False),
    ],
)
def test_is_bonded_distance(el_a, el_b, d, expected):
    assert is_bonded_distance(el_a, el_b, d) is expected


@pytest.mark.parametrize("d", [0.5, 1.0, 1.2, 1.43, 1.5, 1.55, 1.7, 2.0])
@pytest.mark.parametrize("el_a,el_b", [("C", "O"), ("C", "C"), ("N", "H"), ("S", "O")])
def test_is_bonded_is_symmetric(el_a, el_b, d):
    a, b = _pair(el_a, el_b, d)
    assert is_bonded(a, b) == is_bonded(b, a)


def test_lowercase_elements_match_table():
    assert is_bonded_distance("c", "o", 1.43)


def test_is_bonded_through_lattice_translation():
    cell = UnitCell(10.0, 10.0, 10.0)
    a = Atom("C1", "C", (0.5, 5.0, 5.0))
    b = Atom("O1", "O", (9.2, 5.0, 5.0))

    assert not is_bonded(a, b)
    assert is_bonded(a, b, cell, SymOp.identity())


def test_is_bonded_through_symmetry_operator():
    cell = UnitCell(10.0, 10.0, 10.0)
    a = Atom("C1", "C", (0.5, 5.0, 0.5))
    # -x,y,-z takes b to (-0.5, 5, -0.5), 1.414 A from a
    b = Atom("O1", "O", (0.5, 5.0, 0.5))
    assert is_bonded(a, b, cell, SymOp.from_xyz("-x,y,-z"))


def test_bonded_pairs_ethanol_like_chain():
    atoms = [Atom("C1", "C", (0.0, 0.0, 0.0)),
             Atom("C2", "C", (1.53, 0.0, 0.0)),
             Atom("O2", "O", (2.0, 1.36, 0.0))]
    assert bonded_pairs(atoms) == [(0, 1), (1, 2)]
    assert np.isclose(np.linalg.norm(atoms[2].coord - atoms[1].coord), 1.439, atol=1e-3)

# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Locate the anomeric and configurational stereocentres of a sugar ring and
the substituents that define them.

Neighbours are taken from a NonBondIndex, so substituents belonging to
other monomers or to symmetry mates are found as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from GlycoEM.data.data import SUBSTITUENT_RADIUS
from GlycoEM.parsers.models import Atom
from GlycoEM.tools.bonds import is_bonded
from GlycoEM.tools.ring import in_ring


@dataclass(frozen=True)
class StereoPair:
    carbon: Optional[Atom] = None
    substituent: Optional[Atom] = None

    @property
    def found(self) -> bool:
        return self.carbon is not None and self.substituent is not None

    def translated(self, shift) -> "StereoPair":
        return StereoPair(
            None if self.carbon is None else self.carbon.translated(shift),
            None if self.substituent is None else self.substituent.translated(shift),
        )

    def names(self):
        return (None if self.carbon is None else self.carbon.name,
                None if self.substituent is None else self.substituent.name)


@dataclass(frozen=True)
class StereoChemistry:
    anomeric: StereoPair
    configurational: StereoPair
    closing_substituent: Optional[Atom] = None
    # anomer labels swap when the configurational carbon closes the ring
    # or sits outside it
    lurd_reverse: bool = False

    def translated(self, shift) -> "StereoChemistry":
        closing = self.closing_substituent
        return StereoChemistry(
            anomeric=self.anomeric.translated(shift),
            configurational=self.configurational.translated(shift),
            closing_substituent=None if closing is None else closing.translated(shift),
            lurd_reverse=self.lurd_reverse,
        )


def _neighbours(atom, nonbond, radius):
    return [hit.atom for hit in nonbond.near(atom.coord, radius)
            if not hit.atom.same_site(atom)]


def _distance(a, b) -> float:
    return float(np.linalg.norm(a.coord - b.coord))


def _nearest_preferring_hetero(atom, candidates):
    hetero = [c for c in candidates if not c.is_carbon]
    pool = hetero or list(candidates)
    if not pool:
        return None
    return min(pool, key=lambda c: _distance(atom, c))


def _site_key(atom):
    return (atom.name, atom.altloc, tuple(np.round(atom.coord, 3)))


def is_stereocentre(atom, ring, nonbond, radius=SUBSTITUENT_RADIUS) -> bool:
    """
    A carbon with more than two distinct heavy substituents. Repeated
    heteroatoms of the same element (carboxylate oxygens) count once,
    except the ring oxygen.
    """
    if atom is None or not atom.is_carbon:
        return False

    counted = []
    for nb in _neighbours(atom, nonbond, radius):
        if nb.is_hydrogen or not atom.altloc_compatible(nb):
            continue
        if (not nb.is_carbon and not nb.same_site(ring[0])
                and any(c.element == nb.element for c in counted if not c.is_carbon)):
            continue
        counted.append(nb)
    return len(counted) > 2


def find_anomeric_pair(ring, nonbond, radius=SUBSTITUENT_RADIUS) -> StereoPair:
    carbon = ring[1]
    if not carbon.is_carbon:
        return StereoPair()

    candidates = [
        nb for nb in _neighbours(carbon, nonbond, radius)
        if not nb.is_hydrogen
        and carbon.altloc_compatible(nb)
        and not in_ring(nb, ring)
        and is_bonded(carbon, nb)
    ]
    return StereoPair(carbon, _nearest_preferring_hetero(carbon, candidates))


def find_configurational_pair(ring, nonbond, radius=SUBSTITUENT_RADIUS) -> StereoPair:
    """
    The highest ranked ring stereocentre past the anomeric carbon, followed
    outward along the exocyclic chain while the chain carbons remain
    stereocentres.
    """
    carbon, position = None, None
    for i in range(2, len(ring)):
        if is_stereocentre(ring[i], ring, nonbond, radius):
            carbon, position = ring[i], i
    if carbon is None:
        return StereoPair()

    anomeric = ring[1]
    candidates = [
        nb for nb in _neighbours(carbon, nonbond, radius)
        if not nb.is_hydrogen
        and carbon.altloc_compatible(nb)
        and anomeric.altloc_compatible(nb)
        and not nb.same_site(ring[position - 1])
        and not nb.same_site(ring[0])
        and not in_ring(nb, ring)
    ]
    if not candidates:
        return StereoPair(carbon, None)
    substituent = min(candidates, key=lambda c: _distance(carbon, c))

    closing = ring[-1]
    visited = {_site_key(carbon)}
    next_carbon = substituent
    while (next_carbon is not None
           and _site_key(next_carbon) not in visited
           and is_stereocentre(next_carbon, ring, nonbond, radius)):
        carbon = next_carbon
        visited.add(_site_key(carbon))
        reach = _distance(carbon, closing)

        next_carbon, hetero = None, None
        for nb in _neighbours(carbon, nonbond, radius):
            if nb.is_hydrogen or not carbon.altloc_compatible(nb) or in_ring(nb, ring):
                continue
            if nb.is_carbon:
                if next_carbon is None and _distance(nb, closing) > reach:
                    next_carbon = nb
            elif hetero is None:
                hetero = nb
        substituent = hetero if hetero is not None else next_carbon

    return StereoPair(carbon, substituent)


def find_ring_closing_substituent(ring, nonbond, radius=SUBSTITUENT_RADIUS,
                                  same_occupancy=False) -> Optional[Atom]:
    """Heavy exocyclic neighbour of the last ring atom, heteroatoms first."""
    closing = ring[-1]
    candidates = [
        nb for nb in _neighbours(closing, nonbond, radius)
        if not nb.is_hydrogen
        and closing.altloc_compatible(nb)
        and not in_ring(nb, ring)
        and (not same_occupancy or nb.occupancy == closing.occupancy)
    ]
    return _nearest_preferring_hetero(closing, candidates)


def locate_stereochemistry(ring, nonbond, radius=SUBSTITUENT_RADIUS) -> StereoChemistry:
    anomeric = find_anomeric_pair(ring, nonbond, radius)
    configurational = find_configurational_pair(ring, nonbond, radius)
    closing_substituent = find_ring_closing_substituent(
        ring, nonbond, radius, same_occupancy=len(ring) == 6
    )

    lurd_reverse = False
    if configurational.carbon is not None:
        lurd_reverse = (configurational.carbon.same_site(ring[-1])
                        or not in_ring(configurational.carbon, ring))

    return StereoChemistry(anomeric, configurational, closing_substituent, lurd_reverse)

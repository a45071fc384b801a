# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Ring geometry and sanity checks against reference data.

Ideal values: ring C-O bonds 1.43 A, ring C-C bonds 1.53 A, angles
centred on the ring oxygen and on the ring closing atom 112 degrees, all
other ring angles 109 degrees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from GlycoEM.config import Config
from GlycoEM.tools.cremer_pople import ALPHA, BETA
from GlycoEM.tools.geometry import compute_angle, compute_distance, compute_torsion, rmsd


@dataclass
class RingGeometry:
    bond_names: List[str] = field(default_factory=list)
    bonds: List[float] = field(default_factory=list)
    ideal_bonds: List[float] = field(default_factory=list)
    angle_names: List[str] = field(default_factory=list)
    angles: List[float] = field(default_factory=list)
    ideal_angles: List[float] = field(default_factory=list)
    torsion_names: List[str] = field(default_factory=list)
    torsions: List[float] = field(default_factory=list)
    bonds_rmsd: float = 0.0
    angles_rmsd: float = 0.0

    def to_dict(self):
        return {
            "bonds": dict(zip(self.bond_names, self.bonds)),
            "angles": dict(zip(self.angle_names, self.angles)),
            "torsions": dict(zip(self.torsion_names, self.torsions)),
            "bonds_rmsd": self.bonds_rmsd,
            "angles_rmsd": self.angles_rmsd,
        }


def ring_geometry(ring, config: Optional[Config] = None) -> RingGeometry:
    """
    Bonds r0-r1 ... r(n-1)-r0, angles centred on r0 ... r(n-1) and the
    n endocyclic torsions, with RMSDs of bonds and angles against ideal
    values.
    """
    config = config or Config()
    n = len(ring)
    geo = RingGeometry()
    if n < 3:
        return geo

    for i in range(n):
        a, b = ring[i], ring[(i + 1) % n]
        geo.bond_names.append(f"{a.name}-{b.name}")
        geo.bonds.append(compute_distance(a.coord, b.coord))
        # first and last bond touch the ring oxygen
        if i == 0 or i == n - 1:
            geo.ideal_bonds.append(config.ideal_ring_oxygen_bond)
        else:
            geo.ideal_bonds.append(config.ideal_ring_carbon_bond)

    for i in range(n):
        prev, centre, nxt = ring[i - 1], ring[i], ring[(i + 1) % n]
        geo.angle_names.append(f"{prev.name}-{centre.name}-{nxt.name}")
        geo.angles.append(compute_angle(prev.coord, centre.coord, nxt.coord))
        if i == 0 or i == n - 1:
            geo.ideal_angles.append(config.ideal_oxygen_angle)
        else:
            geo.ideal_angles.append(config.ideal_carbon_angle)

    for i in range(n):
        quad = [ring[(i + k) % n] for k in range(4)]
        geo.torsion_names.append("-".join(a.name for a in quad))
        geo.torsions.append(compute_torsion(*(a.coord for a in quad)))

    geo.bonds_rmsd = rmsd(geo.bonds, geo.ideal_bonds)
    geo.angles_rmsd = rmsd(geo.angles, geo.ideal_angles)
    return geo


@dataclass(frozen=True)
class SanityFlags:
    ring: bool = False
    chirality: bool = False
    anomer: bool = False
    bonds_rmsd: bool = False
    angles_rmsd: bool = False

    @property
    def sane(self) -> bool:
        return self.ring and self.chirality and self.anomer and self.bonds_rmsd and self.angles_rmsd

    def to_dict(self):
        return {
            "ring": self.ring,
            "chirality": self.chirality,
            "anomer": self.anomer,
            "bonds_rmsd": self.bonds_rmsd,
            "angles_rmsd": self.angles_rmsd,
            "sane": self.sane,
        }


def chirality_ok(handedness: str, reference_handedness: str) -> bool:
    return ((handedness != "D" and reference_handedness != "D")
            or (handedness != "L" and reference_handedness != "L"))


def anomer_ok(anomer: str, reference_anomer: str) -> bool:
    return ((anomer == ALPHA and reference_anomer != "B")
            or (anomer == BETA and reference_anomer != "A"))


def bonds_ok(ring_size: int, bonds_rmsd: float, config: Config) -> bool:
    if ring_size == 5:
        return bonds_rmsd < config.furanose_bond_rmsd
    return bonds_rmsd < config.pyranose_bond_rmsd


def angles_ok(ring_size: int, angles_rmsd: float, config: Config) -> bool:
    if ring_size == 5:
        return config.furanose_angle_rmsd_min < angles_rmsd < config.furanose_angle_rmsd_max
    return angles_rmsd < config.pyranose_angle_rmsd


def sanity_flags(ring_size, ring_closed, handedness, anomer,
                 bonds_rmsd, angles_rmsd, reference,
                 config: Optional[Config] = None) -> SanityFlags:
    """All flags are False when there is no reference entry."""
    if reference is None:
        return SanityFlags()
    config = config or Config()
    return SanityFlags(
        ring=bool(ring_closed),
        chirality=chirality_ok(handedness, reference.handedness),
        anomer=anomer_ok(anomer, reference.anomer),
        bonds_rmsd=bonds_ok(ring_size, bonds_rmsd, config),
        angles_rmsd=angles_ok(ring_size, angles_rmsd, config),
    )


# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from GlycoEM.config import Config
from GlycoEM.data.data import ConformationCode, SugarDatabase
from GlycoEM.messages import Messages
from GlycoEM.parsers.models import Structure
from GlycoEM.tools.conformation import classify
from GlycoEM.tools.cremer_pople import UNKNOWN_ANOMER, cremer_pople
from GlycoEM.tools.diagnostics import RingGeometry, SanityFlags, ring_geometry, sanity_flags
from GlycoEM.tools.geometry import compute_centroid
from GlycoEM.tools.nonbond import NonBondIndex
from GlycoEM.tools.ring import (
    UnsupportedRingError,
    canonical_ring,
    check_ring_size,
    find_ring,
    ring_closes,
    ring_from_template,
)
from GlycoEM.tools.stereochemistry import StereoChemistry, StereoPair, locate_stereochemistry

UNSUPPORTED = "unsupported"


class Sugar:
    """
    Conformation and stereochemistry of one monomer holding a sugar ring.

    The analysis runs on construction. Chemistry problems never raise:
    a monomer without a usable 5 or 6 membered ring is marked unsupported,
    missing stereocentres give an "X" anomer or an "N" handedness, and a
    residue code missing from the reference table disables the sanity
    flags.

    The parent structure and non-bond index are referenced, never copied
    or modified, and must outlive the Sugar.
    """

    def __init__(self,
                 monomer,
                 structure: Optional[Structure] = None,
                 nonbond: Optional[NonBondIndex] = None,
                 database: Optional[SugarDatabase] = None,
                 config: Optional[Config] = None,
                 log=None):

        self.monomer = monomer.copy()
        self.config = config or Config()
        self.database = database if database is not None else SugarDatabase()
        self.reference = self.database.lookup(self.monomer.type)

        if structure is None:
            structure = nonbond.structure if nonbond is not None else Structure([self.monomer])
        self.structure = structure
        if nonbond is None:
            nonbond = NonBondIndex(structure, cutoff=self.config.nonbond_cutoff)
        self.nonbond = nonbond

        self._log = log

        self.ring = ()
        self.altloc = ""
        self.ring_centre = np.zeros(3)
        self.stereo = StereoChemistry(StereoPair(), StereoPair())
        self.pucker = None
        self.conformation = ConformationCode.UNDEFINED
        self.geometry = RingGeometry()
        self.ring_closed = False
        self.flags = SanityFlags()
        self.supported = True
        self.error = None

        try:
            self._resolve_ring()
        except UnsupportedRingError as e:
            self._mark_unsupported(e)
            return

        self._analyse()

    # -------------------------
    # Pipeline
    # -------------------------
    def _resolve_ring(self):
        if self.reference is not None and self.reference.ring_atoms:
            ring, altloc = ring_from_template(self.monomer, self.reference.ring_atoms)
        else:
            altloc = self.monomer.primary_altloc
            ring = canonical_ring(find_ring(self.monomer, altloc))
            if not any(a.altloc for a in ring):
                altloc = ""
        check_ring_size(ring)
        self.ring = ring
        self.altloc = altloc

    def _analyse(self):
        radius = self.config.substituent_radius
        self.ring_centre = compute_centroid([a.coord for a in self.ring])
        self.stereo = locate_stereochemistry(self.ring, self.nonbond, radius)
        self.pucker = cremer_pople(self.ring, self.stereo)
        self.conformation = classify(self.pucker)
        self.geometry = ring_geometry(self.ring, self.config)
        self.ring_closed = ring_closes(self.ring)

        if self.reference is None and self.config.verbose:
            self._emit(Messages.missing_reference(self.monomer.type))

        self.flags = sanity_flags(
            ring_size=len(self.ring),
            ring_closed=self.ring_closed,
            handedness=self.handedness,
            anomer=self.anomer,
            bonds_rmsd=self.geometry.bonds_rmsd,
            angles_rmsd=self.geometry.angles_rmsd,
            reference=self.reference,
            config=self.config,
        )

    def _mark_unsupported(self, error):
        self.supported = False
        self.error = str(error)
        self.ring = ()
        if self.config.verbose:
            self._emit(Messages.unsupported_sugar(self.monomer.id, error))

    def _emit(self, message):
        if self._log is not None:
            self._log(message)
        else:
            print(message)

    # -------------------------
    # Results
    # -------------------------
    @property
    def name(self) -> str:
        return self.monomer.type

    @property
    def id(self) -> str:
        return self.monomer.id

    @property
    def ring_size(self) -> int:
        return len(self.ring)

    @property
    def is_pyranose(self) -> bool:
        return self.ring_size == 6

    @property
    def is_furanose(self) -> bool:
        return self.ring_size == 5

    @property
    def anomer(self) -> str:
        if self.pucker is None:
            return UNKNOWN_ANOMER
        return self.pucker.anomer

    @property
    def handedness(self) -> str:
        if self.pucker is None:
            return "X"
        return self.pucker.handedness

    @property
    def amplitude(self) -> float:
        return math.nan if self.pucker is None else self.pucker.amplitude

    @property
    def phi(self) -> float:
        return math.nan if self.pucker is None else self.pucker.phi

    @property
    def theta(self) -> float:
        return math.nan if self.pucker is None else self.pucker.theta

    @property
    def denomination(self) -> str:
        if not self.supported:
            return UNSUPPORTED
        carbonyl = "aldo" if "C1" in self.ring[1].name else "keto"
        form = "pyranose" if self.is_pyranose else "furanose"
        return f"{self.anomer}-{self.handedness}-{carbonyl}{form}"

    @property
    def sane(self) -> bool:
        return self.flags.sane

    def ring_atom_names(self):
        return [a.name for a in self.ring]

    def to_dict(self):
        pucker = self.pucker.to_dict() if self.pucker is not None else None
        return {
            "id": self.id,
            "name": self.name,
            "chain": self.monomer.chain,
            "seqnum": self.monomer.seqnum,
            "altloc": self.altloc,
            "supported": self.supported,
            "error": self.error,
            "ring": self.ring_atom_names(),
            "ring_centre": [float(v) for v in self.ring_centre],
            "denomination": self.denomination,
            "anomer": self.anomer,
            "handedness": self.handedness,
            "conformation": self.conformation.label,
            "pucker": pucker,
            "anomeric": self.stereo.anomeric.names(),
            "configurational": self.stereo.configurational.names(),
            "geometry": self.geometry.to_dict(),
            "flags": self.flags.to_dict(),
            "reference": self.reference.to_dict() if self.reference is not None else None,
        }

    def __repr__(self):
        return f"Sugar({self.id}, {self.denomination}, {self.conformation.label})"

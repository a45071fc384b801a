# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from GlycoEM.data.data import HYDROGEN_ELEMENTS
from GlycoEM.tools.crystal import SymOp, symmetry_image


def _coord3(v) -> np.ndarray:
    a = np.array(v, dtype=float)
    if a.shape != (3,):
        raise ValueError(f"Expected shape (3,), got {a.shape}")
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class Atom:
    """
    Immutable atom record. Working copies (translated or symmetry images)
    are new Atom objects; the originals held by a Structure never change.
    """
    name: str
    element: str
    coord: np.ndarray
    occupancy: float = 1.0
    altloc: str = ""
    b_factor: float = 0.0
    index: int = -1
    symmetry: int = 0

    def __post_init__(self):
        object.__setattr__(self, "name", str(self.name).strip())
        object.__setattr__(self, "element", str(self.element).strip().capitalize())
        object.__setattr__(self, "altloc", str(self.altloc or "").strip())
        object.__setattr__(self, "coord", _coord3(self.coord))

    @property
    def is_hydrogen(self) -> bool:
        return self.element.upper() in HYDROGEN_ELEMENTS

    @property
    def is_carbon(self) -> bool:
        return self.element == "C"

    def translated(self, shift) -> "Atom":
        return replace(self, coord=self.coord + np.asarray(shift, dtype=float))

    def moved_to(self, coord, symmetry: Optional[int] = None) -> "Atom":
        return replace(self,
                       coord=coord,
                       symmetry=self.symmetry if symmetry is None else symmetry)

    def altloc_compatible(self, other: "Atom") -> bool:
        """Blank altlocs are shared by every conformer."""
        return self.altloc == "" or other.altloc == "" or self.altloc == other.altloc

    def same_site(self, other: "Atom") -> bool:
        # symmetry images and lattice copies differ in coord only
        return (self.name == other.name
                and self.altloc == other.altloc
                and bool(np.allclose(self.coord, other.coord, atol=1e-6)))

    def __repr__(self):
        alt = f":{self.altloc}" if self.altloc else ""
        return f"Atom({self.name}{alt}, {self.element}, idx={self.index})"


class AltConfMode(Enum):

    def __init__(self, idx, description):
        self.idx = idx
        self.description = description

    ANY = (0, "first atom with the name, altloc preferred when given")
    EXACT = (1, "name and altloc must both match")
    UNIQUE = (2, "name must match exactly one atom")


@dataclass(eq=False)
class Monomer:
    type: str
    chain: str = ""
    seqnum: int = 0
    icode: str = ""
    atoms: Tuple[Atom, ...] = field(default_factory=tuple)

    def __post_init__(self):
        self.type = str(self.type).strip().upper()
        self.chain = str(self.chain).strip()
        self.icode = str(self.icode or "").strip()
        self.atoms = tuple(self.atoms)

    def __len__(self):
        return len(self.atoms)

    def __iter__(self):
        return iter(self.atoms)

    def __getitem__(self, i):
        return self.atoms[i]

    @property
    def id(self) -> str:
        return f"/{self.chain}/{self.seqnum}{self.icode}({self.type})"

    def altlocs(self) -> List[str]:
        seen = []
        for atom in self.atoms:
            if atom.altloc and atom.altloc not in seen:
                seen.append(atom.altloc)
        return seen

    @property
    def primary_altloc(self) -> str:
        alts = self.altlocs()
        return alts[0] if alts else ""

    def lookup(self, name: str, mode: AltConfMode = AltConfMode.ANY,
               altloc: Optional[str] = None) -> Optional[int]:
        """Index of the atom called name within this monomer, or None."""
        name = str(name).strip()
        matches = [i for i, a in enumerate(self.atoms) if a.name == name]
        if not matches:
            return None

        if mode is AltConfMode.UNIQUE:
            return matches[0] if len(matches) == 1 else None

        if mode is AltConfMode.EXACT:
            want = altloc or ""
            for i in matches:
                if self.atoms[i].altloc == want:
                    return i
            return None

        if altloc:
            for i in matches:
                if self.atoms[i].altloc == altloc:
                    return i
            for i in matches:
                if self.atoms[i].altloc == "":
                    return i
        return matches[0]

    def atom(self, name: str, mode: AltConfMode = AltConfMode.ANY,
             altloc: Optional[str] = None) -> Optional[Atom]:
        i = self.lookup(name, mode, altloc)
        return None if i is None else self.atoms[i]

    def conformer(self, altloc: Optional[str] = None) -> "Monomer":
        """View with only the blank altloc atoms and those of one conformer."""
        if altloc is None:
            altloc = self.primary_altloc
        atoms = tuple(a for a in self.atoms if a.altloc in ("", altloc))
        return replace(self, atoms=atoms)

    def copy(self) -> "Monomer":
        return replace(self, atoms=tuple(self.atoms))


class Structure:
    """
    Ordered monomers plus the crystal context. Atom indices are assigned
    in reading order on construction; symmetry operator 0 is always the
    identity.
    """

    def __init__(self,
                 monomers: Sequence[Monomer],
                 cell=None,
                 symops: Optional[Sequence[SymOp]] = None,
                 name: str = ""):
        self.name = name
        self.cell = cell
        ops = [SymOp.from_xyz(op) if isinstance(op, str) else op for op in (symops or [])]
        if not ops or not ops[0].is_identity():
            ops = [SymOp.identity()] + [op for op in ops if not op.is_identity()]
        self.symops = ops if cell is not None else ops[:1]

        self.monomers: List[Monomer] = []
        self.atoms: List[Atom] = []
        for monomer in monomers:
            indexed = []
            for atom in monomer.atoms:
                atom = replace(atom, index=len(self.atoms), symmetry=0)
                self.atoms.append(atom)
                indexed.append(atom)
            self.monomers.append(replace(monomer, atoms=tuple(indexed)))

        if self.atoms:
            self.coords = np.array([a.coord for a in self.atoms], dtype=float)
        else:
            self.coords = np.zeros((0, 3))
        self.coords.setflags(write=False)

    def __len__(self):
        return len(self.monomers)

    def __iter__(self):
        return iter(self.monomers)

    @property
    def n_atoms(self) -> int:
        return len(self.atoms)

    def symmetry_image(self, index: int, symop: int, near) -> Atom:
        """Copy of atom `index` moved by operator `symop` to the lattice copy nearest `near`."""
        atom = self.atoms[index]
        if symop == 0 or self.cell is None:
            return atom
        coord = symmetry_image(self.cell, self.symops[symop], atom.coord, near)
        return atom.moved_to(coord, symmetry=symop)

# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

import numpy as np
import parmed
from rdkit import Chem

from .models import Atom, Monomer, Structure
from GlycoEM.messages import Messages
from GlycoEM.tools.crystal import SymOp, UnitCell


class StructureParser:
    _AA3 = {
        "ALA", "ARG", "ASN", "ASP", "CYS", "GLN", "GLU", "GLY", "HIS", "ILE",
        "LEU", "LYS", "MET", "PHE", "PRO", "SER", "THR", "TRP", "TYR", "VAL",
        "MSE", "SEC"
    }
    _WATER = {"HOH", "WAT", "H2O", "SOL", "TIP", "TIP3", "T3P", "DOD"}
    _ION_RESNAMES = {
        "NA", "K", "CL", "CA", "MG", "ZN", "MN", "FE", "FE2", "CU", "CO", "NI", "CD", "SR", "CS", "BR", "IOD", "I", "F",
        "SO4", "PO4", "NO3", "CO3",
    }

    # -------------------------
    # Component classification
    # -------------------------
    @classmethod
    def is_water(cls, monomer) -> bool:
        return monomer.type in cls._WATER

    @classmethod
    def is_ion(cls, monomer) -> bool:
        return monomer.type in cls._ION_RESNAMES

    @classmethod
    def is_amino_acid(cls, monomer) -> bool:
        names = {a.name for a in monomer.atoms}
        return monomer.type in cls._AA3 or {"N", "CA", "C"}.issubset(names)

    @classmethod
    def is_candidate_sugar(cls, monomer) -> bool:
        """Cheap pre-filter: enough carbons and at least one oxygen."""
        if cls.is_water(monomer) or cls.is_ion(monomer) or cls.is_amino_acid(monomer):
            return False
        counts = Counter(a.element for a in monomer.atoms)
        return counts.get("C", 0) >= 4 and counts.get("O", 0) >= 1

    # -------------------------
    # Element handling
    # -------------------------
    @staticmethod
    def _element_symbol(pmd_atom) -> str:
        symbol = str(getattr(pmd_atom, "element_name", "") or "").strip()
        if symbol and symbol.upper() not in ("EP", "LP"):
            return symbol

        atomic_number = int(getattr(pmd_atom, "atomic_number", 0) or 0)
        if atomic_number > 0:
            return Chem.GetPeriodicTable().GetElementSymbol(atomic_number)

        # fall back on the PDB naming convention
        name = "".join(c for c in pmd_atom.name if c.isalpha())
        return name[:1] or "X"

    @classmethod
    def _atom_from_parmed(cls, pmd_atom, altloc=None) -> Atom:
        return Atom(
            name=pmd_atom.name,
            element=cls._element_symbol(pmd_atom),
            coord=(pmd_atom.xx, pmd_atom.xy, pmd_atom.xz),
            occupancy=float(getattr(pmd_atom, "occupancy", 1.0) or 0.0),
            altloc=pmd_atom.altloc if altloc is None else altloc,
            b_factor=float(getattr(pmd_atom, "bfactor", 0.0) or 0.0),
        )

    # -------------------------
    # Loading
    # -------------------------
    @classmethod
    def from_parmed(cls, pmd_struct, symops: Optional[Sequence] = None, name: str = "") -> Structure:
        """
        Convert an already loaded ParmEd structure. Alternate locations
        kept by ParmEd in atom.other_locations become separate atoms.
        """
        monomers: List[Monomer] = []
        for res in pmd_struct.residues:
            atoms = []
            for pmd_atom in res.atoms:
                atoms.append(cls._atom_from_parmed(pmd_atom))
                for alt, other in sorted(getattr(pmd_atom, "other_locations", {}).items()):
                    atoms.append(cls._atom_from_parmed(other, altloc=alt))

            monomers.append(Monomer(
                type=res.name,
                chain=res.chain,
                seqnum=int(res.number),
                icode=res.insertion_code,
                atoms=tuple(atoms),
            ))

        cell = None
        box = getattr(pmd_struct, "box", None)
        if box is not None:
            box = np.asarray(box, dtype=float)
            # ParmEd reports a 1 A cubic box for cryo-EM PDB files
            if box.shape == (6,) and not np.allclose(box[:3], 1.0):
                cell = UnitCell(*box)

        if cell is not None and not symops:
            print(Messages.missing_symops(name or getattr(pmd_struct, "title", ""),
                                          getattr(pmd_struct, "space_group", "")))

        ops = [op if isinstance(op, SymOp) else SymOp.from_xyz(op) for op in (symops or [])]
        return Structure(monomers, cell=cell, symops=ops, name=name or getattr(pmd_struct, "title", ""))

    @classmethod
    def load_structure(cls, structure_file: str, symops: Optional[Sequence] = None) -> Structure:
        pmd_struct = parmed.load_file(structure_file)
        return cls.from_parmed(pmd_struct, symops=symops, name=str(structure_file))

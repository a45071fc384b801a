# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

import os

from rdkit import Chem
from rdkit.Geometry import Point3D

from GlycoEM.tools.bonds import bonded_pairs
from GlycoEM.tools.ring import in_ring


def sugar_to_rdkit(sugar, include_hydrogens=True):
    """
    RDKit molecule of the analysed conformer of a sugar monomer. Bonds
    come from the distance test and are all single; bond orders are not
    inferred. Ring atoms carry their ring position in "ringPosition".
    """
    monomer = sugar.monomer.conformer(sugar.altloc or None)
    selected_atoms = [a for a in monomer.atoms if include_hydrogens or not a.is_hydrogen]

    mol = Chem.RWMol()
    periodic_table = Chem.GetPeriodicTable()
    for atom in selected_atoms:
        rd_atom = Chem.Atom(periodic_table.GetAtomicNumber(atom.element))
        rd_atom.SetProp("atomName", atom.name)
        rd_atom.SetProp("resName", monomer.type)
        rd_atom.SetProp("resId", str(monomer.seqnum))
        rd_atom.SetNoImplicit(True)

        info = Chem.AtomPDBResidueInfo()
        info.SetName(f" {atom.name:<3}" if len(atom.name) < 4 else atom.name)
        info.SetResidueName(monomer.type)
        info.SetResidueNumber(int(monomer.seqnum))
        info.SetChainId(monomer.chain)
        info.SetAltLoc(atom.altloc)
        info.SetOccupancy(float(atom.occupancy))
        info.SetTempFactor(float(atom.b_factor))
        info.SetIsHeteroAtom(True)
        rd_atom.SetMonomerInfo(info)
        mol.AddAtom(rd_atom)

    for i, j in bonded_pairs(selected_atoms):
        mol.AddBond(i, j, Chem.BondType.SINGLE)

    new_mol = mol.GetMol()
    conf = Chem.Conformer(new_mol.GetNumAtoms())
    for idx, atom in enumerate(selected_atoms):
        x, y, z = (float(v) for v in atom.coord)
        conf.SetAtomPosition(idx, Point3D(x, y, z))
    new_mol.AddConformer(conf, assignId=True)

    for idx, atom in enumerate(selected_atoms):
        if in_ring(atom, sugar.ring):
            position = next(k for k, r in enumerate(sugar.ring) if atom.same_site(r))
            new_mol.GetAtomWithIdx(idx).SetIntProp("ringPosition", position)

    new_mol.SetProp("_Name", sugar.id)
    new_mol.SetProp("denomination", sugar.denomination)
    new_mol.SetProp("conformation", sugar.conformation.label)
    new_mol.UpdatePropertyCache(strict=False)
    return new_mol


def write_sugar_pdb(sugar, path, overwrite=False):
    if os.path.exists(path) and not overwrite:
        raise FileExistsError(f"{path} exists, set overwrite to write over it.")
    mol = sugar_to_rdkit(sugar)
    Chem.MolToPDBFile(mol, path)
    return path

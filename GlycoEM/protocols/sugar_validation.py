# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Structure wide sugar validation.

Every monomer that is a known sugar code (or passes the candidate filter
when no residue list is given) is analysed in turn. A failure in one
monomer is logged and skipped, never aborting the run.
"""

import json
import os
from collections import Counter

from tqdm import tqdm

from GlycoEM.config import Config
from GlycoEM.data.data import SugarDatabase
from GlycoEM.messages import Messages
from GlycoEM.parsers.structure_parser import StructureParser
from GlycoEM.sugar import Sugar
from GlycoEM.tools.nonbond import NonBondIndex


class SugarValidation:

    def __init__(self, system):
        self.system = system
        self.config = system.config or Config()
        self.database = system.database or SugarDatabase()
        self.sugars = []
        self.skipped = []

    def build_index(self):
        if self.system.nonbond is None:
            self.system.nonbond = NonBondIndex(self.system.structure,
                                               cutoff=self.config.nonbond_cutoff)
        return self.system.nonbond

    def select_monomers(self):
        wanted = {r.upper() for r in self.system.residues or self.config.residues}
        excluded = {r.upper() for r in self.system.exclude or self.config.exclude}

        selected = []
        for monomer in self.system.structure.monomers:
            if monomer.type in excluded:
                continue
            if wanted:
                if monomer.type in wanted:
                    selected.append(monomer)
            elif monomer.type in self.database or StructureParser.is_candidate_sugar(monomer):
                selected.append(monomer)
        return selected

    def analyse(self, monomer):
        return Sugar(monomer,
                     structure=self.system.structure,
                     nonbond=self.system.nonbond,
                     database=self.database,
                     config=self.config,
                     log=self.system.log)

    def summary(self):
        counts = Counter(s.conformation.label for s in self.sugars if s.supported)
        return {
            "n_sugars": len(self.sugars),
            "n_supported": sum(1 for s in self.sugars if s.supported),
            "n_sane": sum(1 for s in self.sugars if s.sane),
            "n_skipped": len(self.skipped),
            "conformations": dict(sorted(counts.items())),
        }

    def log(self):
        log_lines = [Messages.create_centered_box("Sugar Validation Summary")]
        if not self.sugars:
            log_lines.append("No sugars were found matching the criteria.")

        for sugar in self.sugars:
            if not sugar.supported:
                log_lines.append(f"{sugar.id:<20} unsupported ({sugar.error})")
                continue
            theta = "-" if sugar.is_furanose else f"{sugar.theta:7.2f}"
            log_lines.append(
                f"{sugar.id:<20} Q={sugar.amplitude:5.3f}  phi={sugar.phi:7.2f}  theta={theta:>7}  "
                f"{sugar.conformation.label:<5} {sugar.denomination:<26} "
                f"{'yes' if sugar.sane else 'check'}"
            )

        summary = self.summary()
        log_lines.append("=" * 60)
        log_lines.append(f"Sugars analysed: {summary['n_sugars']}  "
                         f"supported: {summary['n_supported']}  "
                         f"sane: {summary['n_sane']}  "
                         f"skipped: {summary['n_skipped']}")
        for label, count in summary["conformations"].items():
            log_lines.append(f"  {label:<5} {count}")
        log_lines.append("=" * 60 + "\n")

        self.system.log("\n".join(log_lines), echo=self.config.verbose)

    def write_results(self):
        output = getattr(self.system, "output", ".")
        os.makedirs(output, exist_ok=True)
        path = os.path.join(output, "sugars.json")
        if os.path.exists(path):
            overwrite = bool(getattr(self.system, "overwrite", False))
            Messages.overwrite(path, overwrite)
            if not overwrite:
                return None
        with open(path, "w") as f:
            json.dump({"summary": self.summary(),
                       "sugars": [s.to_dict() for s in self.sugars]}, f, indent=2)
        return path

    def run(self, write=None):
        if write is None:
            write = bool(getattr(self.system, "write_results", False))
        self.system.log(Messages.create_centered_box("Sugar Validation"), echo=self.config.verbose)
        self.build_index()

        monomers = self.select_monomers()
        for monomer in tqdm(monomers, desc="Sugars", unit="res", disable=not self.config.verbose):
            try:
                self.sugars.append(self.analyse(monomer))
            except Exception as e:
                self.skipped.append(monomer.id)
                self.system.log(Messages.glycoem_warning(self.__class__.__name__, f"analyse({monomer.id})", e))

        self.system.sugars = self.sugars
        self.system.validated = True
        self.log()
        if write:
            self.write_results()
        return self.sugars

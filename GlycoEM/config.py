# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set
import ast
import os

from GlycoEM.data.system import System
from GlycoEM.data.data import SYSTEM_ATTRS, NONBOND_CUTOFF, SUBSTITUENT_RADIUS


@dataclass
class Config:
    # Track which keys were explicitly set in the config file
    _provided: Set[str] = field(default_factory=set, init=False, repr=False)

    # File paths / IO
    structure: Optional[str] = None
    output: str = "."
    overwrite: bool = False

    # Selection
    residues: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    symops: List[str] = field(default_factory=list)

    # Neighbour search
    nonbond_cutoff: float = NONBOND_CUTOFF
    substituent_radius: float = SUBSTITUENT_RADIUS

    # Ideal ring geometry (A, degrees)
    ideal_ring_oxygen_bond: float = 1.43
    ideal_ring_carbon_bond: float = 1.53
    ideal_oxygen_angle: float = 112.0
    ideal_carbon_angle: float = 109.0

    # Sanity thresholds
    pyranose_bond_rmsd: float = 0.035
    furanose_bond_rmsd: float = 0.040
    pyranose_angle_rmsd: float = 4.0
    furanose_angle_rmsd_min: float = 4.0
    furanose_angle_rmsd_max: float = 7.5

    verbose: bool = False

    LIST_FIELDS = {
        "residues",
        "exclude",
        "symops",
    }

    def _process_line(self, line: str) -> None:
        if "=" not in line:
            return

        attr_id, value = line.split("=", maxsplit=1)
        attr_id = attr_id.strip()
        value = value.strip()

        try:
            parsed_value = ast.literal_eval(value)
        except (SyntaxError, ValueError):
            parsed_value = value

        if attr_id in self.LIST_FIELDS:
            current_val = getattr(self, attr_id, None)
            values = parsed_value if isinstance(parsed_value, (list, tuple)) else [parsed_value]
            if current_val is not None and isinstance(current_val, list):
                current_val.extend(values)
            else:
                setattr(self, attr_id, list(values))
            self._provided.add(attr_id)
            return
        if hasattr(self, attr_id) and not attr_id.startswith("_"):
            setattr(self, attr_id, parsed_value)
            self._provided.add(attr_id)
            return

        raise RuntimeError(f"[Error] Unknown attribute '{attr_id}' found in config.")

    def load_config(self, config_file: str) -> System:
        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        with open(config_file, "r") as f:
            for raw in f:
                line = raw.strip()
                if line and not line.startswith("#"):
                    self._process_line(line)

        self.validate()
        return self.create_system()

    def validate(self) -> None:
        if self.substituent_radius <= 0.0:
            raise ValueError(f"Config error: 'substituent_radius' must be positive, got {self.substituent_radius}")
        if self.substituent_radius > self.nonbond_cutoff:
            raise ValueError(
                f"Config error: 'substituent_radius' ({self.substituent_radius}) "
                f"exceeds 'nonbond_cutoff' ({self.nonbond_cutoff})."
            )
        if self.furanose_angle_rmsd_min >= self.furanose_angle_rmsd_max:
            raise ValueError("Config error: 'furanose_angle_rmsd_min' must be below 'furanose_angle_rmsd_max'.")

    def create_system(self, structure=None) -> System:
        system = System()

        if structure is None:
            if not self.structure:
                raise ValueError("Config error: 'structure' must be set.")
            structure = self.add_structure(self.structure)

        system.structure = structure
        system.config = self

        # Apply only attributes explicitly set in config file
        for attr in SYSTEM_ATTRS:
            if attr in self._provided:
                value = getattr(self, attr, None)
                if value is not None:
                    setattr(system, attr, value)

        return system

    def add_structure(self, structure_file: str):
        from GlycoEM.parsers.structure_parser import StructureParser
        return StructureParser.load_structure(structure_file, symops=self.symops)

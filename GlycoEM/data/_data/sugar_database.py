# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class SugarReference:
    """
    Reference data for one PDB monosaccharide code.

    anomer is "A" (alpha), "B" (beta) or "" when not defined, handedness
    is "D", "L" or "". ring_atoms lists the ring atom names with the ring
    oxygen first and the anomeric carbon second.
    """
    name_short: str
    name_long: str
    anomer: str = ""
    handedness: str = ""
    ring_atoms: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ring_size(self) -> int:
        return len(self.ring_atoms)

    @classmethod
    def from_row(cls, row):
        name_short, name_long, anomer, handedness, ring = row
        return cls(name_short=name_short,
                   name_long=name_long,
                   anomer=anomer,
                   handedness=handedness,
                   ring_atoms=tuple(ring.split()))

    def to_dict(self):
        return {
            "name_short": self.name_short,
            "name_long": self.name_long,
            "anomer": self.anomer,
            "handedness": self.handedness,
            "ring_atoms": list(self.ring_atoms),
        }


_PYRANOSE_O5 = "O5 C1 C2 C3 C4 C5"
_ULOSONIC_O6 = "O6 C2 C3 C4 C5 C6"
_FURANOSE_O4 = "O4 C1 C2 C3 C4"

_SUGAR_ROWS = (
    ("GLC", "alpha-D-glucopyranose", "A", "D", _PYRANOSE_O5),
    ("BGC", "beta-D-glucopyranose", "B", "D", _PYRANOSE_O5),
    ("GLA", "alpha-D-galactopyranose", "A", "D", _PYRANOSE_O5),
    ("GAL", "beta-D-galactopyranose", "B", "D", _PYRANOSE_O5),
    ("MAN", "alpha-D-mannopyranose", "A", "D", _PYRANOSE_O5),
    ("BMA", "beta-D-mannopyranose", "B", "D", _PYRANOSE_O5),
    ("NDG", "2-acetamido-2-deoxy-alpha-D-glucopyranose", "A", "D", _PYRANOSE_O5),
    ("NAG", "2-acetamido-2-deoxy-beta-D-glucopyranose", "B", "D", _PYRANOSE_O5),
    ("A2G", "2-acetamido-2-deoxy-alpha-D-galactopyranose", "A", "D", _PYRANOSE_O5),
    ("NGA", "2-acetamido-2-deoxy-beta-D-galactopyranose", "B", "D", _PYRANOSE_O5),
    ("FUC", "alpha-L-fucopyranose", "A", "L", _PYRANOSE_O5),
    ("FUL", "beta-L-fucopyranose", "B", "L", _PYRANOSE_O5),
    ("RAM", "alpha-L-rhamnopyranose", "A", "L", _PYRANOSE_O5),
    ("XYS", "alpha-D-xylopyranose", "A", "D", _PYRANOSE_O5),
    ("XYP", "beta-D-xylopyranose", "B", "D", _PYRANOSE_O5),
    ("ARA", "alpha-L-arabinopyranose", "A", "L", _PYRANOSE_O5),
    ("GCU", "alpha-D-glucopyranuronic acid", "A", "D", _PYRANOSE_O5),
    ("BDP", "beta-D-glucopyranuronic acid", "B", "D", _PYRANOSE_O5),
    ("IDR", "alpha-L-idopyranuronic acid", "A", "L", _PYRANOSE_O5),
    ("SIA", "N-acetyl-alpha-neuraminic acid", "A", "D", _ULOSONIC_O6),
    ("SLB", "N-acetyl-beta-neuraminic acid", "B", "D", _ULOSONIC_O6),
    ("KDO", "3-deoxy-alpha-D-manno-oct-2-ulopyranosonic acid", "A", "D", _ULOSONIC_O6),
    ("RIB", "alpha-D-ribofuranose", "A", "D", _FURANOSE_O4),
    ("BDR", "beta-D-ribofuranose", "B", "D", _FURANOSE_O4),
    ("AHR", "alpha-L-arabinofuranose", "A", "L", _FURANOSE_O4),
    ("FRU", "beta-D-fructofuranose", "B", "D", "O5 C2 C3 C4 C5"),
)

SUGAR_DATABASE: Dict[str, SugarReference] = {
    row[0]: SugarReference.from_row(row) for row in _SUGAR_ROWS
}


class SugarDatabase:
    """
    Read-only lookup service over sugar reference data.

    A custom table (for example an empty one in tests, or entries for
    non-standard codes) can be injected; the built-in table is used
    otherwise.
    """

    def __init__(self, entries: Optional[Dict[str, SugarReference]] = None):
        self._entries = dict(SUGAR_DATABASE if entries is None else entries)

    @classmethod
    def from_references(cls, references: Iterable[SugarReference]) -> "SugarDatabase":
        return cls({ref.name_short: ref for ref in references})

    def lookup(self, code: str) -> Optional[SugarReference]:
        if code is None:
            return None
        return self._entries.get(str(code).strip().upper())

    def __contains__(self, code) -> bool:
        return self.lookup(code) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def codes(self):
        return sorted(self._entries)

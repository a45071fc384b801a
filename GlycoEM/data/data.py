# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Public data facade.

This file re-exports names from GlycoEM.data._data.*
as a way to make scaling and maintining data more manageable
    from GlycoEM.data.data import BOND_WINDOWS, ConformationCode, SugarDatabase, ...
"""

from ._data.system_constants import (
    SYSTEM_ATTRS,
    BOND_WINDOWS,
    UNKNOWN_BOND_WINDOW,
    HYDROGEN_ELEMENTS,
    SUBSTITUENT_RADIUS,
    NONBOND_CUTOFF,
    RING_SIZES,
)
from ._data.conformations import (
    ConformationCode,
    PYRANOSE_BANDS,
    PYRANOSE_THETA_BANDS,
    FURANOSE_WHEEL,
    FURANOSE_WRAP,
)
from ._data.sugar_database import (
    SugarReference,
    SugarDatabase,
    SUGAR_DATABASE,
)

__all__ = [
    # system constants
    "SYSTEM_ATTRS", "BOND_WINDOWS", "UNKNOWN_BOND_WINDOW",
    "HYDROGEN_ELEMENTS", "SUBSTITUENT_RADIUS", "NONBOND_CUTOFF",
    "RING_SIZES",

    # conformations
    "ConformationCode", "PYRANOSE_BANDS", "PYRANOSE_THETA_BANDS",
    "FURANOSE_WHEEL", "FURANOSE_WRAP",

    # reference sugars
    "SugarReference", "SugarDatabase", "SUGAR_DATABASE",
]

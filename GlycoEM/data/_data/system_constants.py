# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>


# config keys copied onto the System when set in a config file
SYSTEM_ATTRS = ['output', 'verbose', 'residues', 'exclude', 'overwrite']

# (min, max) covalent distance windows in Angstrom, both bounds exclusive
BOND_WINDOWS = {
    frozenset(("C",)): (1.18, 1.60),
    frozenset(("C", "N")): (1.24, 1.52),
    frozenset(("C", "O")): (1.16, 1.50),
    frozenset(("C", "H")): (0.96, 1.14),
    frozenset(("N", "H")): (0.90, 1.10),
    frozenset(("O", "H")): (0.88, 1.04),
}

UNKNOWN_BOND_WINDOW = (1.20, 1.80)

HYDROGEN_ELEMENTS = {"H", "D"}

# substituents closer than this are considered attached for the stereo walk
SUBSTITUENT_RADIUS = 1.8

# default reach of the non-bond index
NONBOND_CUTOFF = 5.0

RING_SIZES = (5, 6)

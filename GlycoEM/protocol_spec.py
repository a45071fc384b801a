#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>


"""
GlycoEM protocol registry.

This file lists the protocols GlycoEM knows about and the CLI options
for each one.

How it works
------------
- Each protocol is described by a ProtocolSpec:
    * name: registry key / protocol name
    * cls:  protocol class to run
    * deps(args): returns names of protocols that must run first
    * add_args(parser): adds argparse options for this protocol (optional)
    * help: short description for --help output

Adding a new protocol
---------------------
1) Write the protocol class (GlycoEM.protocols.<...>).
2) Write a deps() function (return () if none).
3) Write an add_args() function to add CLI options (optional).
4) Add a ProtocolSpec entry to REGISTRY.
5) (Optional) add a short alias in SHORT_ALIASES.
"""


from dataclasses import dataclass
from typing import Callable, Optional

from GlycoEM.protocols.sugar_validation import SugarValidation


@dataclass(frozen=True)
class ProtocolSpec:
    name: str
    cls: type
    deps: Callable
    add_args: Optional[Callable] = None
    help: str = ""


def sugar_validation_deps(args):
    return tuple()


def add_sugar_validation_args(p):
    g = p.add_argument_group("Sugar validation")

    g.add_argument("-r", "--residues", nargs="+", default=None,
                   help="Only analyse these residue codes")
    g.add_argument("--exclude", nargs="+", default=None,
                   help="Residue codes to skip")
    g.add_argument("--substituent-radius", type=float, default=None, metavar="Å",
                   help="Neighbour search radius for ring substituents")
    g.add_argument("--no-json", action="store_true",
                   help="Do not write sugars.json")


SHORT_ALIASES = {
    "sugar_validation": "-s",
}


REGISTRY = {
    "sugar_validation": ProtocolSpec(
        name="sugar_validation",
        cls=SugarValidation,
        deps=sugar_validation_deps,
        add_args=add_sugar_validation_args,
        help="Ring conformation and stereochemistry of every sugar",
    ),
}

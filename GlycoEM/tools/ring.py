# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Sugar ring detection.

Rings are found either by name from a reference template or by walking
the distance-based bond graph of a monomer, then put into canonical order:
ring oxygen first, anomeric carbon second.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
import re
from typing import Dict, List, Sequence, Set, Tuple

from GlycoEM.data.data import RING_SIZES
from GlycoEM.parsers.models import AltConfMode
from GlycoEM.tools.bonds import bonded_pairs, is_bonded


class UnsupportedRingError(RuntimeError):
    """Raised when a monomer does not hold a 5 or 6 membered sugar ring."""


@dataclass
class TraversalState:
    """Mutable search state, kept apart from the immutable atom records."""
    path: List[int] = field(default_factory=list)
    visited_edges: Set[Tuple[int, int]] = field(default_factory=set)

    @staticmethod
    def _edge(i, j):
        return (i, j) if i < j else (j, i)

    def seen(self, i, j) -> bool:
        return self._edge(i, j) in self.visited_edges

    def mark(self, i, j) -> None:
        self.visited_edges.add(self._edge(i, j))


def bond_graph(atoms) -> Dict[int, List[int]]:
    adjacency = {i: [] for i in range(len(atoms))}
    for i, j in bonded_pairs(atoms):
        adjacency[i].append(j)
        adjacency[j].append(i)
    return adjacency


def find_ring(monomer, altloc=None) -> Tuple:
    """
    Depth first walk from the first atom of the monomer. The first
    neighbour met that is already on the current path closes a cycle and
    the path from that neighbour onward is returned. An empty tuple means
    no cycle could be reached.
    """
    if altloc is None:
        altloc = monomer.primary_altloc
    atoms = [a for a in monomer.atoms if a.altloc in ("", altloc)]
    if not atoms:
        return ()

    adjacency = bond_graph(atoms)
    state = TraversalState(path=[0])
    stack = [iter(adjacency[0])]

    while stack:
        current = state.path[-1]
        nb = next(stack[-1], None)
        if nb is None:
            stack.pop()
            state.path.pop()
            continue
        if state.seen(current, nb):
            continue
        state.mark(current, nb)

        if nb in state.path:
            start = state.path.index(nb)
            return tuple(atoms[i] for i in state.path[start:])

        state.path.append(nb)
        stack.append(iter(adjacency[nb]))

    return ()


_DIGITS = re.compile(r"\d+")


def numeric_rank(name: str) -> float:
    """Number embedded in an atom name (C1 -> 1, C10 -> 10), inf if none."""
    match = _DIGITS.search(name)
    return int(match.group()) if match else math.inf


def canonical_ring(atoms: Sequence) -> Tuple:
    """Oxygens, then other heteroatoms, then carbons by numeric rank."""
    oxygens = [a for a in atoms if a.element == "O"]
    hetero = [a for a in atoms if a.element not in ("O", "C")]
    carbons = sorted((a for a in atoms if a.element == "C"),
                     key=lambda a: numeric_rank(a.name))
    return tuple(oxygens + hetero + carbons)


def ring_from_template(monomer, names: Sequence[str]):
    """
    Resolve ring atoms by name. Partially occupied atoms in alternate
    conformations are taken from conformer A, else B.

    Returns (ring, altloc) where altloc is "" unless a conformer was chosen.
    """
    ring = []
    chosen = ""
    for name in names:
        atom = monomer.atom(name, AltConfMode.ANY, chosen or None)
        if atom is None:
            raise UnsupportedRingError(f"Ring atom {name} not found in {monomer.id}")

        if atom.occupancy < 1.0 and atom.altloc:
            for alt in ([chosen] if chosen else []) + ["A", "B"]:
                candidate = monomer.atom(name, AltConfMode.EXACT, alt)
                if candidate is not None:
                    atom = candidate
                    chosen = alt
                    break
            else:
                raise UnsupportedRingError(
                    f"Ring atom {name} in {monomer.id} has no conformer A or B"
                )
        ring.append(atom)
    return tuple(ring), chosen


def check_ring_size(ring) -> None:
    if len(ring) not in RING_SIZES:
        raise UnsupportedRingError(
            f"Ring of {len(ring)} atoms, expected one of {RING_SIZES}"
        )


def ring_closes(ring) -> bool:
    """Every consecutive pair, including last to first, is bonded."""
    n = len(ring)
    if n < 3:
        return False
    return all(is_bonded(ring[i], ring[(i + 1) % n]) for i in range(n))


def in_ring(atom, ring) -> bool:
    return atom is not None and any(atom.same_site(r) for r in ring)

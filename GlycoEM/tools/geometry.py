# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

import math

import numpy as np


def compute_centroid(coords) -> np.ndarray:
    coords = np.asarray(coords, dtype=float).reshape((-1, 3))
    if coords.shape[0] == 0:
        raise ValueError("Cannot compute the centroid of an empty coordinate set.")
    return coords.mean(axis=0)


def compute_distance(a, b) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def compute_angle(a, b, c) -> float:
    """Angle a-b-c in degrees."""
    ba = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    bc = np.asarray(c, dtype=float) - np.asarray(b, dtype=float)
    denom = np.linalg.norm(ba) * np.linalg.norm(bc)
    if denom == 0.0:
        return 0.0
    cos_t = np.clip(np.dot(ba, bc) / denom, -1.0, 1.0)
    return math.degrees(math.acos(cos_t))


def compute_torsion(a, b, c, d) -> float:
    """Dihedral a-b-c-d in degrees, range (-180, 180]."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (a, b, c, d))
    b0 = p0 - p1
    b1 = p2 - p1
    b2 = p3 - p2

    n1 = np.linalg.norm(b1)
    if n1 == 0.0:
        return 0.0
    b1 = b1 / n1

    v = b0 - np.dot(b0, b1) * b1
    w = b2 - np.dot(b2, b1) * b1
    x = np.dot(v, w)
    y = np.dot(np.cross(b1, v), w)
    return math.degrees(math.atan2(y, x))


def unit_vector(v) -> np.ndarray:
    v = np.asarray(v, dtype=float)
    n = np.linalg.norm(v)
    if n == 0.0:
        return v.copy()
    return v / n


def rmsd(values, reference) -> float:
    values = np.asarray(values, dtype=float)
    reference = np.broadcast_to(np.asarray(reference, dtype=float), values.shape)
    if values.size == 0:
        return 0.0
    return float(np.sqrt(np.mean((values - reference) ** 2)))

# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
"""
Cremer-Pople ring puckering.

D. Cremer and J. A. Pople, J. Am. Chem. Soc. 1975, 97, 1354-1358.

Ring atoms are projected onto the normal of the mean plane,
    n = unit(R' x R''),  R' = sum r_j sin(2 pi j / N),  R'' = sum r_j cos(2 pi j / N)
with r_j taken relative to the ring centroid. Angles are reported in degrees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Optional, Tuple

import numpy as np

from GlycoEM.tools.geometry import unit_vector
from GlycoEM.tools.ring import in_ring

ALPHA = "alpha"
BETA = "beta"
UNKNOWN_ANOMER = "X"


@dataclass(frozen=True, eq=False)
class PuckerParameters:
    amplitude: float
    phi: float
    theta: float
    q2: float
    q3: float
    anomer: str
    handedness: str
    ring_size: int
    # z(ring closing atom) - z(its substituent), nan when no substituent
    closing_projection: float = math.nan
    centroid: np.ndarray = field(default_factory=lambda: np.zeros(3), repr=False)
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3), repr=False)
    displacements: Tuple[float, ...] = field(default_factory=tuple, repr=False)

    def as_tuple(self):
        return (self.amplitude, self.phi, self.theta, self.q2, self.q3,
                self.anomer, self.handedness)

    def to_dict(self):
        return {
            "amplitude": self.amplitude,
            "phi": self.phi,
            "theta": self.theta,
            "q2": self.q2,
            "q3": self.q3,
            "anomer": self.anomer,
            "handedness": self.handedness,
            "ring_size": self.ring_size,
            "displacements": list(self.displacements),
        }


def mean_plane(coords):
    """Returns (centroid, normal, z) for an ordered ring of coordinates."""
    coords = np.asarray(coords, dtype=float)
    n_atoms = coords.shape[0]
    centroid = coords.mean(axis=0)
    r = coords - centroid

    angles = 2.0 * math.pi * np.arange(n_atoms) / n_atoms
    r_prime = (r * np.sin(angles)[:, None]).sum(axis=0)
    r_second = (r * np.cos(angles)[:, None]).sum(axis=0)

    normal = unit_vector(np.cross(r_prime, r_second))
    return centroid, normal, r @ normal


def _projection(atom, centroid, normal) -> Optional[float]:
    if atom is None:
        return None
    return float(np.dot(atom.coord - centroid, normal))


def assign_anomer(stereo, centroid, normal) -> str:
    """
    alpha when the anomeric and configurational substituents sit on the
    same relative side of their carbons (both above or both below), beta
    otherwise; swapped when lurd_reverse is set.
    """
    if not (stereo.anomeric.found and stereo.configurational.found):
        return UNKNOWN_ANOMER

    z_ac = _projection(stereo.anomeric.carbon, centroid, normal)
    z_as = _projection(stereo.anomeric.substituent, centroid, normal)
    z_cc = _projection(stereo.configurational.carbon, centroid, normal)
    z_cs = _projection(stereo.configurational.substituent, centroid, normal)

    same = (z_as > z_ac and z_cs > z_cc) or (z_as < z_ac and z_cs < z_cc)
    if same:
        return BETA if stereo.lurd_reverse else ALPHA
    return ALPHA if stereo.lurd_reverse else BETA


def assign_handedness(z_close, z_sub, substituent, ring) -> str:
    if substituent is None or in_ring(substituent, ring):
        return "N"
    return "D" if (z_close - z_sub) < 0 else "L"


def _handedness(ring, stereo, centroid, normal, z):
    substituent = stereo.closing_substituent
    if substituent is None:
        return "N", math.nan
    z_sub = _projection(substituent, centroid, normal)
    z_close = float(z[-1])
    return assign_handedness(z_close, z_sub, substituent, ring), z_close - z_sub


def cremer_pople_pyranose(ring, stereo) -> PuckerParameters:
    if len(ring) != 6:
        raise ValueError(f"Pyranose analysis needs 6 ring atoms, got {len(ring)}")

    centroid, normal, z = mean_plane([a.coord for a in ring])
    amplitude = float(math.sqrt(np.sum(z ** 2)))

    j = np.arange(6)
    q3 = float(math.sqrt(1.0 / 6.0) * np.sum(z * np.where(j % 2 == 0, 1.0, -1.0)))

    if amplitude > 1e-12:
        theta = math.acos(max(-1.0, min(1.0, q3 / amplitude)))
    else:
        theta = 0.0
    q2 = amplitude * math.sin(theta)

    arg_cos = math.sqrt(1.0 / 3.0) * float(np.sum(z * np.cos(4.0 * math.pi * j / 6.0)))
    arg_sin = -math.sqrt(1.0 / 3.0) * float(np.sum(z * np.sin(4.0 * math.pi * j / 6.0)))

    if abs(q2) > 1e-6:
        angle_cos = math.acos(max(-1.0, min(1.0, arg_cos / q2)))
        # eqn 13: pick the branch whose sine agrees
        if math.isclose(q2 * math.sin(angle_cos), arg_sin, rel_tol=1e-6, abs_tol=1e-6):
            phi = angle_cos
        else:
            phi = 2.0 * math.pi - angle_cos
    else:
        phi = 0.0

    handedness, closing = _handedness(ring, stereo, centroid, normal, z)

    return PuckerParameters(
        amplitude=amplitude,
        phi=math.degrees(phi) % 360.0,
        theta=math.degrees(theta),
        q2=q2,
        q3=q3,
        anomer=assign_anomer(stereo, centroid, normal),
        handedness=handedness,
        ring_size=6,
        closing_projection=closing,
        centroid=centroid,
        normal=normal,
        displacements=tuple(float(v) for v in z),
    )


def cremer_pople_furanose(ring, stereo) -> PuckerParameters:
    """
    Phase angle as atan(sin/cos) + 90 degrees, without quadrant
    correction, so phi always falls within [0, 180].
    """
    if len(ring) != 5:
        raise ValueError(f"Furanose analysis needs 5 ring atoms, got {len(ring)}")

    centroid, normal, z = mean_plane([a.coord for a in ring])
    amplitude = float(math.sqrt(np.sum(z ** 2)))

    j = np.arange(5)
    arg_cos = math.sqrt(1.0 / 3.0) * float(np.sum(z * np.cos(4.0 * math.pi * j / 5.0)))
    arg_sin = -math.sqrt(1.0 / 3.0) * float(np.sum(z * np.sin(4.0 * math.pi * j / 5.0)))

    if arg_cos != 0.0:
        ratio = arg_sin / arg_cos
    elif arg_sin != 0.0:
        ratio = math.copysign(math.inf, arg_sin)
    else:
        ratio = 0.0
    phi = math.atan(ratio) + math.pi / 2.0

    cos_phi = math.cos(phi)
    if abs(cos_phi) > 1e-12:
        q2 = arg_cos / cos_phi
    else:
        q2 = math.hypot(arg_cos, arg_sin)

    handedness, closing = _handedness(ring, stereo, centroid, normal, z)

    return PuckerParameters(
        amplitude=amplitude,
        phi=math.degrees(phi),
        theta=-1.0,
        q2=q2,
        q3=-1.0,
        anomer=assign_anomer(stereo, centroid, normal),
        handedness=handedness,
        ring_size=5,
        closing_projection=closing,
        centroid=centroid,
        normal=normal,
        displacements=tuple(float(v) for v in z),
    )


def cremer_pople(ring, stereo) -> PuckerParameters:
    if len(ring) == 6:
        return cremer_pople_pyranose(ring, stereo)
    if len(ring) == 5:
        return cremer_pople_furanose(ring, stereo)
    raise ValueError(f"Cremer-Pople analysis supports 5 or 6 ring atoms, got {len(ring)}")

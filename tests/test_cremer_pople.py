#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from GlycoEM.data.data import ConformationCode
from GlycoEM.parsers.models import Atom
from GlycoEM.tools.conformation import classify, classify_furanose
from GlycoEM.tools.cremer_pople import (
    assign_handedness,
    cremer_pople,
    cremer_pople_furanose,
    cremer_pople_pyranose,
    mean_plane,
)
from GlycoEM.tools.stereochemistry import StereoChemistry, StereoPair

from conftest import GLUCOSE_RING

NO_STEREO = StereoChemistry(StereoPair(), StereoPair())

PYRANOSE_NAMES = ("O5", "C1", "C2", "C3", "C4", "C5")


def _ring_from_coords(coords, names=PYRANOSE_NAMES):
    return tuple(Atom(n, n[0], xyz) for n, xyz in zip(names, coords))


def _hexagon(z, radius=1.4):
    return np.array([
        (radius * math.cos(math.pi * j / 3.0), radius * math.sin(math.pi * j / 3.0), z[j])
        for j in range(6)
    ])


def test_mean_plane_of_ideal_chair():
    coords = np.array([GLUCOSE_RING[n] for n in PYRANOSE_NAMES])
    centroid, normal, z = mean_plane(coords)
    assert np.allclose(centroid, 0.0, atol=1e-5)
    assert np.allclose(normal, [0.0, 0.0, -1.0])
    assert np.allclose(z, [0.25, -0.25, 0.25, -0.25, 0.25, -0.25])


def test_ideal_chair_is_4c1():
    ring = _ring_from_coords([GLUCOSE_RING[n] for n in PYRANOSE_NAMES])
    pucker = cremer_pople_pyranose(ring, NO_STEREO)

    assert pucker.amplitude == pytest.approx(math.sqrt(6 * 0.25 ** 2))
    assert pucker.theta == pytest.approx(0.0, abs=1e-4)
    assert pucker.q3 == pytest.approx(pucker.amplitude)
    assert pucker.q2 == pytest.approx(0.0, abs=1e-6)
    assert pucker.phi == 0.0
    assert classify(pucker) is ConformationCode.PYRANOSE_4C1


def test_inverted_chair_is_1c4():
    coords = [np.asarray(GLUCOSE_RING[n]) * [1.0, 1.0, -1.0] for n in PYRANOSE_NAMES]
    pucker = cremer_pople_pyranose(_ring_from_coords(coords), NO_STEREO)
    assert pucker.theta == pytest.approx(180.0)
    assert classify(pucker) is ConformationCode.PYRANOSE_1C4


def test_missing_stereo_gives_unknown_labels():
    ring = _ring_from_coords([GLUCOSE_RING[n] for n in PYRANOSE_NAMES])
    pucker = cremer_pople_pyranose(ring, NO_STEREO)
    assert pucker.anomer == "X"
    assert pucker.handedness == "N"


@pytest.mark.parametrize("angles", [(30.0, 0.0, 0.0), (12.0, 75.0, -40.0), (200.0, -33.0, 145.0)])
def test_pucker_invariant_under_rigid_motion(angles):
    coords = _hexagon([0.30, -0.10, -0.20, 0.30, -0.10, -0.20])
    reference = cremer_pople_pyranose(_ring_from_coords(coords), NO_STEREO)

    rotation = Rotation.from_euler("zyx", angles, degrees=True)
    moved = rotation.apply(coords) + np.array([12.0, -3.5, 40.2])
    pucker = cremer_pople_pyranose(_ring_from_coords(moved), NO_STEREO)

    assert pucker.amplitude == pytest.approx(reference.amplitude, abs=1e-9)
    assert pucker.theta == pytest.approx(reference.theta, abs=1e-6)
    assert pucker.phi == pytest.approx(reference.phi, abs=1e-6)


def test_pyranose_phi_in_range_for_all_sectors():
    for k in range(12):
        shift = 2.0 * math.pi * k / 12.0
        z = [0.35 * math.cos(shift + 4.0 * math.pi * j / 6.0) for j in range(6)]
        pucker = cremer_pople_pyranose(_ring_from_coords(_hexagon(z)), NO_STEREO)
        assert 0.0 <= pucker.phi < 360.0
        assert pucker.theta == pytest.approx(90.0, abs=1e-6)


def test_recomputation_is_bit_identical():
    ring = _ring_from_coords(_hexagon([0.30, -0.10, -0.20, 0.30, -0.10, -0.20]))
    first = cremer_pople_pyranose(ring, NO_STEREO)
    second = cremer_pople_pyranose(ring, NO_STEREO)
    assert first.as_tuple() == second.as_tuple()
    assert first.displacements == second.displacements


# Flat pentagon of radius 1.242 A, atom 0 lifted 0.5 A relative to the others.
FURANOSE_PIN = (
    (1.242, 0.0, 0.4),
    (0.38380, 1.18121, -0.1),
    (-1.00480, 0.73003, -0.1),
    (-1.00480, -0.73003, -0.1),
    (0.38380, -1.18121, -0.1),
)


def test_furanose_phase_angle_regression():
    ring = _ring_from_coords(FURANOSE_PIN, names=("O4", "C1", "C2", "C3", "C4"))
    pucker = cremer_pople_furanose(ring, NO_STEREO)

    assert pucker.phi == pytest.approx(90.0, abs=1e-6)
    assert pucker.amplitude == pytest.approx(0.3122, abs=1e-3)
    assert pucker.theta == -1.0
    assert pucker.q3 == -1.0
    assert classify_furanose(pucker.phi) is ConformationCode.FURANOSE_2T3


def test_furanose_phi_stays_within_half_wheel():
    for k in range(20):
        shift = 2.0 * math.pi * k / 20.0
        z = [0.35 * math.cos(shift + 4.0 * math.pi * j / 5.0) for j in range(5)]
        coords = [(1.242 * math.cos(2 * math.pi * j / 5), 1.242 * math.sin(2 * math.pi * j / 5), z[j])
                  for j in range(5)]
        pucker = cremer_pople_furanose(_ring_from_coords(coords, ("O4", "C1", "C2", "C3", "C4")), NO_STEREO)
        assert 0.0 <= pucker.phi <= 180.0


def test_planar_furanose_has_zero_amplitude():
    coords = [(1.2334 * math.cos(2 * math.pi * j / 5), 1.2334 * math.sin(2 * math.pi * j / 5), 0.0)
              for j in range(5)]
    pucker = cremer_pople_furanose(_ring_from_coords(coords, ("O4", "C1", "C2", "C3", "C4")), NO_STEREO)
    assert pucker.amplitude == pytest.approx(0.0, abs=1e-12)
    assert math.isfinite(pucker.phi)


def test_cremer_pople_dispatch_rejects_other_sizes():
    ring = _ring_from_coords([GLUCOSE_RING[n] for n in PYRANOSE_NAMES[:4]], PYRANOSE_NAMES[:4])
    with pytest.raises(ValueError):
        cremer_pople(ring, NO_STEREO)


def test_assign_handedness():
    ring = _ring_from_coords([GLUCOSE_RING[n] for n in PYRANOSE_NAMES])
    outside = Atom("C6", "C", (1.4, -2.4, -0.3))
    assert assign_handedness(-0.25, 0.27, outside, ring) == "D"
    assert assign_handedness(0.25, -0.27, outside, ring) == "L"
    assert assign_handedness(-0.25, 0.27, ring[2], ring) == "N"
    assert assign_handedness(-0.25, 0.27, None, ring) == "N"

# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from __future__ import annotations

from GlycoEM.data.data import (
    ConformationCode,
    PYRANOSE_BANDS,
    PYRANOSE_THETA_BANDS,
    FURANOSE_WHEEL,
    FURANOSE_WRAP,
)


def _sector(phi, start, width, count):
    """Index k with start + k*width < phi <= start + (k+1)*width, else None."""
    for k in range(count):
        low = start + k * width
        if low < phi <= low + width:
            return k
    return None


def classify_pyranose(phi: float, theta: float) -> ConformationCode:
    """
    Total over phi in [0, 360) and theta in [0, 180]; sector lower
    bounds are exclusive and upper bounds inclusive.
    """
    if theta <= PYRANOSE_THETA_BANDS[0]:
        return ConformationCode.PYRANOSE_4C1
    if theta > PYRANOSE_THETA_BANDS[-1]:
        return ConformationCode.PYRANOSE_1C4

    for upper, band in zip(PYRANOSE_THETA_BANDS[1:], PYRANOSE_BANDS):
        if theta <= upper:
            k = _sector(phi, 15.0, 30.0, 11)
            return band[-1] if k is None else band[k]

    return ConformationCode.UNDEFINED


def classify_furanose(phi: float) -> ConformationCode:
    k = _sector(phi, 4.5, 9.0, len(FURANOSE_WHEEL))
    return FURANOSE_WRAP if k is None else FURANOSE_WHEEL[k]


def classify(pucker) -> ConformationCode:
    if pucker.ring_size == 6:
        return classify_pyranose(pucker.phi, pucker.theta)
    if pucker.ring_size == 5:
        return classify_furanose(pucker.phi)
    return ConformationCode.UNDEFINED

# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

from enum import Enum


class ConformationCode(Enum):
    """
    Named ring shapes on the Cremer-Pople sphere (pyranoses) and on the
    pseudorotation wheel (furanoses).

    Member values are (idx, ring_size, label); labels use "O" for the ring
    oxygen, superscripts are written inline (4C1 is 4C1).
    """

    def __init__(self, idx, ring_size, label):
        self.idx = idx
        self.ring_size = ring_size
        self.label = label

    UNDEFINED = (-1, 0, "undefined")

    # pyranose, poles
    PYRANOSE_4C1 = (0, 6, "4C1")
    PYRANOSE_1C4 = (37, 6, "1C4")

    # pyranose, 22.5 < theta <= 67.5
    PYRANOSE_OH1 = (1, 6, "OH1")
    PYRANOSE_E1 = (2, 6, "E1")
    PYRANOSE_2H1 = (3, 6, "2H1")
    PYRANOSE_2E = (4, 6, "2E")
    PYRANOSE_2H3 = (5, 6, "2H3")
    PYRANOSE_E3 = (6, 6, "E3")
    PYRANOSE_4H3 = (7, 6, "4H3")
    PYRANOSE_4E = (8, 6, "4E")
    PYRANOSE_4H5 = (9, 6, "4H5")
    PYRANOSE_E5 = (10, 6, "E5")
    PYRANOSE_OH5 = (11, 6, "OH5")
    PYRANOSE_OE = (12, 6, "OE")

    # pyranose, 67.5 < theta <= 112.5
    PYRANOSE_3S1 = (13, 6, "3S1")
    PYRANOSE_B14 = (14, 6, "B14")
    PYRANOSE_5S1 = (15, 6, "5S1")
    PYRANOSE_25B = (16, 6, "25B")
    PYRANOSE_2SO = (17, 6, "2SO")
    PYRANOSE_B3O = (18, 6, "B3O")
    PYRANOSE_1S3 = (19, 6, "1S3")
    PYRANOSE_14B = (20, 6, "14B")
    PYRANOSE_1S5 = (21, 6, "1S5")
    PYRANOSE_B25 = (22, 6, "B25")
    PYRANOSE_OS2 = (23, 6, "OS2")
    PYRANOSE_3OB = (24, 6, "3OB")

    # pyranose, 112.5 < theta <= 157.5
    PYRANOSE_3H4 = (25, 6, "3H4")
    PYRANOSE_E4 = (26, 6, "E4")
    PYRANOSE_5H4 = (27, 6, "5H4")
    PYRANOSE_5E = (28, 6, "5E")
    PYRANOSE_5HO = (29, 6, "5HO")
    PYRANOSE_EO = (30, 6, "EO")
    PYRANOSE_1HO = (31, 6, "1HO")
    PYRANOSE_1E = (32, 6, "1E")
    PYRANOSE_1H2 = (33, 6, "1H2")
    PYRANOSE_E2 = (34, 6, "E2")
    PYRANOSE_3H2 = (35, 6, "3H2")
    PYRANOSE_3E = (36, 6, "3E")

    # furanose pseudorotation wheel, phi in [0, 180]
    FURANOSE_3T2 = (0, 5, "3T2")
    FURANOSE_3E = (1, 5, "3E")
    FURANOSE_3T4 = (2, 5, "3T4")
    FURANOSE_E4 = (3, 5, "E4")
    FURANOSE_OT4 = (4, 5, "OT4")
    FURANOSE_OE = (5, 5, "OE")
    FURANOSE_OT1 = (6, 5, "OT1")
    FURANOSE_E1 = (7, 5, "E1")
    FURANOSE_2T1 = (8, 5, "2T1")
    FURANOSE_2E = (9, 5, "2E")
    FURANOSE_2T3 = (10, 5, "2T3")
    FURANOSE_E3 = (11, 5, "E3")
    FURANOSE_4T3 = (12, 5, "4T3")
    FURANOSE_4E = (13, 5, "4E")
    FURANOSE_4TO = (14, 5, "4TO")
    FURANOSE_EO = (15, 5, "EO")
    FURANOSE_1TO = (16, 5, "1TO")
    FURANOSE_1E = (17, 5, "1E")
    FURANOSE_1T2 = (18, 5, "1T2")
    FURANOSE_E2 = (19, 5, "E2")

    def __str__(self):
        return self.label

    @property
    def is_pyranose(self):
        return self.ring_size == 6

    @property
    def is_furanose(self):
        return self.ring_size == 5

    @classmethod
    def from_label(cls, label, ring_size=6):
        for code in cls:
            if code.label == label and code.ring_size == ring_size:
                return code
        return cls.UNDEFINED

    @classmethod
    def pyranose_codes(cls):
        return sorted((c for c in cls if c.ring_size == 6), key=lambda c: c.idx)

    @classmethod
    def furanose_codes(cls):
        return sorted((c for c in cls if c.ring_size == 5), key=lambda c: c.idx)


# twelve 30 degree phi sectors per theta band, starting at (15, 45];
# the last entry of each band covers phi > 345 or phi <= 15
PYRANOSE_BANDS = (
    (
        ConformationCode.PYRANOSE_OH1, ConformationCode.PYRANOSE_E1,
        ConformationCode.PYRANOSE_2H1, ConformationCode.PYRANOSE_2E,
        ConformationCode.PYRANOSE_2H3, ConformationCode.PYRANOSE_E3,
        ConformationCode.PYRANOSE_4H3, ConformationCode.PYRANOSE_4E,
        ConformationCode.PYRANOSE_4H5, ConformationCode.PYRANOSE_E5,
        ConformationCode.PYRANOSE_OH5, ConformationCode.PYRANOSE_OE,
    ),
    (
        ConformationCode.PYRANOSE_3S1, ConformationCode.PYRANOSE_B14,
        ConformationCode.PYRANOSE_5S1, ConformationCode.PYRANOSE_25B,
        ConformationCode.PYRANOSE_2SO, ConformationCode.PYRANOSE_B3O,
        ConformationCode.PYRANOSE_1S3, ConformationCode.PYRANOSE_14B,
        ConformationCode.PYRANOSE_1S5, ConformationCode.PYRANOSE_B25,
        ConformationCode.PYRANOSE_OS2, ConformationCode.PYRANOSE_3OB,
    ),
    (
        ConformationCode.PYRANOSE_3H4, ConformationCode.PYRANOSE_E4,
        ConformationCode.PYRANOSE_5H4, ConformationCode.PYRANOSE_5E,
        ConformationCode.PYRANOSE_5HO, ConformationCode.PYRANOSE_EO,
        ConformationCode.PYRANOSE_1HO, ConformationCode.PYRANOSE_1E,
        ConformationCode.PYRANOSE_1H2, ConformationCode.PYRANOSE_E2,
        ConformationCode.PYRANOSE_3H2, ConformationCode.PYRANOSE_3E,
    ),
)

# upper theta bound of each band, degrees
PYRANOSE_THETA_BANDS = (22.5, 67.5, 112.5, 157.5)

# nineteen 9 degree sectors starting at (4.5, 13.5]; 3T2 covers the wrap
FURANOSE_WHEEL = tuple(ConformationCode.furanose_codes()[1:])
FURANOSE_WRAP = ConformationCode.FURANOSE_3T2

"""Half-up rounding.

Python's ``round`` uses banker's rounding (``round(2.5) == 2``). Scores and
Halstead metrics are defined with half-up rounding, so ``2.5`` becomes ``3``.
"""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))

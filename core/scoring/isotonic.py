"""
Isotonic Calibrator — piecewise-linear probability remapping.

Values outside the fitted range are clamped to the curve's end points.
Inside, the bracketing segment is found by binary search over the
ascending x breakpoints and the result is linearly interpolated.
A probability landing exactly on a breakpoint returns that breakpoint's y,
which also avoids dividing by zero across repeated x values.

The curve is validated when the model is loaded, not here.

Time Complexity: O(log n) in the number of breakpoints
Memory: O(1)
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class CalibrationCurve:
    x: Tuple[float, ...]
    y: Tuple[float, ...]


def calibrate(curve: CalibrationCurve, p_raw: float) -> float:
    """Map a raw probability through the calibration curve."""
    xs, ys = curve.x, curve.y

    if p_raw <= xs[0]:
        return float(ys[0])
    if p_raw >= xs[-1]:
        return float(ys[-1])

    # first index with xs[idx] >= p_raw; 1 <= idx <= len - 1 after clamping above
    idx = int(np.searchsorted(xs, p_raw, side="left"))
    if xs[idx] == p_raw:
        return float(ys[idx])

    lo, hi = idx - 1, idx
    x0, x1 = xs[lo], xs[hi]
    y0, y1 = ys[lo], ys[hi]
    t = (p_raw - x0) / (x1 - x0)
    return float(y0 + t * (y1 - y0))

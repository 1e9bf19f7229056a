"""Periodic-boundary helpers in fractional coordinates."""

import numpy as np


def nearest_image(dxf, repfactors=(1, 1, 1)):
    """Apply the nearest-image convention to fractional displacement(s).

    Each component is shifted by at most one period, which is sufficient as
    long as the displacement lies within (-rep, rep) on every axis. This holds
    for sites of molecules whose centers of mass are kept inside the box.

    Args:
        dxf: Fractional displacement(s), shape (3,) or (n, 3)
        repfactors: Period along each axis (number of unit cells)

    Returns:
        Displacement(s) with every component in [-rep/2, rep/2]
    """
    rep = np.asarray(repfactors, dtype=np.float64)
    half = 0.5 * rep
    dxf = np.where(dxf > half, dxf - rep, dxf)
    dxf = np.where(dxf < -half, dxf + rep, dxf)
    return dxf


def wrap_fractional(xf):
    """Map a fractional position back into the unit cell [0, 1)^3.

    Applies a single-period correction per axis: components >= 1 are shifted
    down by exactly 1 and components < 0 are shifted up by exactly 1.

    Args:
        xf: Fractional position, shape (3,)

    Returns:
        Tuple (wrapped, changed):
        - wrapped: Wrapped fractional position, shape (3,)
        - changed: True if any axis needed a correction
    """
    wrapped = np.array(xf, dtype=np.float64)
    changed = False
    for k in range(3):
        if wrapped[k] >= 1.0:
            wrapped[k] -= 1.0
            changed = True
        elif wrapped[k] < 0.0:
            wrapped[k] += 1.0
            changed = True
    return wrapped, changed

"""Rigid-body rotation utilities based on unit quaternions."""

import numpy as np


def quaternion_normalize(q):
    """Normalize a quaternion to unit length.

    Args:
        q: Quaternion (w, x, y, z), shape (4,)

    Returns:
        Normalized quaternion, shape (4,)
    """
    norm = np.linalg.norm(q)
    if norm < 1e-10:
        raise ValueError("Quaternion norm is too small")
    return q / norm


def uniform_random_orientation(rng):
    """Sample a uniform random orientation on SO(3) as a unit quaternion.

    Four independent standard normals, normalized, are uniform on the unit
    3-sphere, which maps 2-to-1 onto SO(3).

    Args:
        rng: Random number generator (numpy.random.Generator)

    Returns:
        Unit quaternion, shape (4,)
    """
    return quaternion_normalize(rng.normal(size=4))


def quaternion_to_rotation_matrix(q):
    """Rotation matrix of a unit quaternion (w, x, y, z), shape (3, 3)."""
    w, x, y, z = q
    return np.array([
        [1.0 - 2.0 * (y*y + z*z), 2.0 * (x*y - w*z), 2.0 * (x*z + w*y)],
        [2.0 * (x*y + w*z), 1.0 - 2.0 * (x*x + z*z), 2.0 * (y*z - w*x)],
        [2.0 * (x*z - w*y), 2.0 * (y*z + w*x), 1.0 - 2.0 * (x*x + y*y)],
    ])


def random_rotation_matrix(rng):
    """Uniformly random proper rotation matrix, shape (3, 3)."""
    return quaternion_to_rotation_matrix(uniform_random_orientation(rng))


def rotate_about(points, center, R):
    """Rotate points, shape (n, 3), by matrix R about `center`."""
    return (points - center) @ R.T + center

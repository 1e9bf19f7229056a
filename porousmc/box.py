"""Periodic simulation box: affine map between fractional and Cartesian coordinates."""

from dataclasses import dataclass, field
import numpy as np


@dataclass(frozen=True, eq=False)
class Box:
    """Parallelepiped periodic box.

    Attributes:
        f_to_c: Fractional-to-Cartesian matrix, shape (3, 3). Columns are the
            lattice vectors a, b, c.
        c_to_f: Cartesian-to-fractional matrix (inverse of f_to_c), derived
        volume: Box volume in A^3, derived
    """
    f_to_c: np.ndarray
    c_to_f: np.ndarray = field(init=False, repr=False)
    volume: float = field(init=False)

    def __post_init__(self):
        f_to_c = np.asarray(self.f_to_c, dtype=np.float64)
        if f_to_c.shape != (3, 3):
            raise ValueError(f"f_to_c must have shape (3, 3), got {f_to_c.shape}")
        volume = abs(float(np.linalg.det(f_to_c)))
        if volume < 1e-10:
            raise ValueError("Box lattice vectors are degenerate (zero volume)")
        object.__setattr__(self, "f_to_c", f_to_c)
        object.__setattr__(self, "c_to_f", np.linalg.inv(f_to_c))
        object.__setattr__(self, "volume", volume)

    @classmethod
    def from_lattice(cls, a, b, c, alpha=90.0, beta=90.0, gamma=90.0):
        """Build a box from unit cell lengths (A) and angles (degrees)."""
        alpha, beta, gamma = np.deg2rad([alpha, beta, gamma])
        cos_a, cos_b, cos_g = np.cos(alpha), np.cos(beta), np.cos(gamma)
        sin_g = np.sin(gamma)
        omega = a * b * c * np.sqrt(
            1.0 - cos_a**2 - cos_b**2 - cos_g**2 + 2.0 * cos_a * cos_b * cos_g
        )
        f_to_c = np.array([
            [a, b * cos_g, c * cos_b],
            [0.0, b * sin_g, c * (cos_a - cos_b * cos_g) / sin_g],
            [0.0, 0.0, omega / (a * b * sin_g)],
        ])
        return cls(f_to_c)

    @classmethod
    def cubic(cls, L):
        """Cubic box of side L."""
        return cls(np.eye(3) * float(L))

    @property
    def lattice_vectors(self):
        """Lattice vectors a, b, c as rows, shape (3, 3)."""
        return self.f_to_c.T.copy()

    def fractional_to_cartesian(self, xf):
        """Map fractional coordinates, shape (3,) or (n, 3), to Cartesian."""
        return np.asarray(xf, dtype=np.float64) @ self.f_to_c.T

    def cartesian_to_fractional(self, x):
        """Map Cartesian coordinates, shape (3,) or (n, 3), to fractional."""
        return np.asarray(x, dtype=np.float64) @ self.c_to_f.T

    def replicate(self, repfactors):
        """Return the supercell box made of repfactors unit cells per axis."""
        rep = np.asarray(repfactors, dtype=np.float64)
        if rep.shape != (3,) or np.any(rep < 1):
            raise ValueError(f"Replication factors must be three integers >= 1, got {repfactors}")
        return Box(self.f_to_c * rep[None, :])

    def perpendicular_widths(self):
        """Distances between opposite faces of the box, shape (3,).

        These are the widths that a spherical cutoff must not exceed (twice over)
        for the nearest-image convention to be valid.
        """
        a, b, c = self.lattice_vectors
        return np.array([
            self.volume / np.linalg.norm(np.cross(b, c)),
            self.volume / np.linalg.norm(np.cross(c, a)),
            self.volume / np.linalg.norm(np.cross(a, b)),
        ])


def replication_factors(box, cutoff_radius):
    """Number of unit cells per axis so the supercell is at least 2 * cutoff wide.

    Args:
        box: Unit cell Box
        cutoff_radius: Interaction cutoff radius (A)

    Returns:
        Tuple of three ints
    """
    widths = box.perpendicular_widths()
    return tuple(int(np.ceil(2.0 * cutoff_radius / w - 1e-12)) or 1 for w in widths)

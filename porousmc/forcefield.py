"""Lennard-Jones force field: per atom-type pair sigma^2 and epsilon tables."""

import numpy as np

from .constants import DEFAULT_CUTOFF_RADIUS, OVERLAP_RADIUS


class LennardJonesForceField:
    """Lennard-Jones parameters for every pair of atom types.

    Pure-type parameters are combined with Lorentz-Berthelot mixing rules:
    sigma_ij = (sigma_i + sigma_j) / 2 and epsilon_ij = sqrt(epsilon_i * epsilon_j).

    Attributes:
        name: Force field identifier
        atom_types: Tuple of atom-type labels; position i is row/column i of the tables
        sigma2: Symmetric matrix of squared sigma (A^2), shape (n_types, n_types)
        epsilon: Symmetric matrix of epsilon (K), shape (n_types, n_types)
        cutoff_radius: Interaction cutoff (A)
        overlap_radius: Below this separation (A) the energy is +inf
    """

    def __init__(self, name, atom_types, sigma, epsilon,
                 cutoff_radius=DEFAULT_CUTOFF_RADIUS, overlap_radius=OVERLAP_RADIUS):
        atom_types = tuple(atom_types)
        sigma = np.asarray(sigma, dtype=np.float64)
        epsilon = np.asarray(epsilon, dtype=np.float64)

        n = len(atom_types)
        if len(set(atom_types)) != n:
            raise ValueError(f"Duplicate atom types in force field: {atom_types}")
        # per-type values are checked before mixing
        for label, arr in [("sigma", sigma), ("epsilon", epsilon)]:
            if arr.shape not in [(n,), (n, n)]:
                raise ValueError(f"{label} must have shape ({n},) or ({n}, {n}), got {arr.shape}")
            if not np.all(np.isfinite(arr)):
                raise ValueError(f"{label} must be finite")
            if np.any(arr < 0):
                raise ValueError(f"{label} must be non-negative")
            if arr.ndim == 2 and not np.allclose(arr, arr.T):
                raise ValueError(f"{label} table must be symmetric")
        if sigma.shape == (n,):
            sigma = 0.5 * (sigma[:, None] + sigma[None, :])
        if epsilon.shape == (n,):
            epsilon = np.sqrt(epsilon[:, None] * epsilon[None, :])
        if cutoff_radius <= 0:
            raise ValueError(f"cutoff_radius must be > 0, got {cutoff_radius}")
        if overlap_radius < 0 or overlap_radius >= cutoff_radius:
            raise ValueError("overlap_radius must lie in [0, cutoff_radius)")

        self.name = name
        self.atom_types = atom_types
        self.sigma2 = np.ascontiguousarray(sigma**2)
        self.epsilon = np.ascontiguousarray(epsilon)
        self.cutoff_radius = float(cutoff_radius)
        self.overlap_radius = float(overlap_radius)
        self._index = {atom: i for i, atom in enumerate(atom_types)}

    @classmethod
    def from_pair_parameters(cls, name, atom_types, pair_sigma, pair_epsilon, **kwargs):
        """Build from explicit (n_types, n_types) sigma and epsilon tables."""
        return cls(name, atom_types, pair_sigma, pair_epsilon, **kwargs)

    def __repr__(self):
        return (f"LennardJonesForceField(name={self.name!r}, atom_types={self.atom_types}, "
                f"cutoff_radius={self.cutoff_radius})")

    @property
    def cutoff_radius_squared(self):
        return self.cutoff_radius**2

    @property
    def overlap_radius_squared(self):
        return self.overlap_radius**2

    def type_index(self, atom):
        """Row of `atom` in the parameter tables. Raises KeyError for unknown types."""
        try:
            return self._index[atom]
        except KeyError:
            raise KeyError(f"Atom type {atom!r} is not in force field {self.name!r}") from None

    def type_indices(self, atoms):
        """Rows of every label in `atoms`, as an int64 array."""
        return np.array([self.type_index(a) for a in atoms], dtype=np.int64)

    def sigma_squared(self, atom_a, atom_b):
        return self.sigma2[self.type_index(atom_a), self.type_index(atom_b)]

    def epsilon_of(self, atom_a, atom_b):
        return self.epsilon[self.type_index(atom_a), self.type_index(atom_b)]

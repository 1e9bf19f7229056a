"""Rigid adsorbate molecule."""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from .rigid import random_rotation_matrix, rotate_about


@dataclass(eq=False)
class Molecule:
    """Rigid collection of Lennard-Jones sites and point charges.

    The molecule is only ever moved rigidly (translate_by, translate_to, rotate),
    so its internal geometry is preserved for the whole simulation.

    Attributes:
        species: Adsorbate label, e.g. "CH4"
        atoms: Atom-type label of each Lennard-Jones site, length n
        x: Cartesian positions of the Lennard-Jones sites, shape (n, 3)
        masses: Mass of each Lennard-Jones site (amu), shape (n,); default 1.0 each
        charges: Point charge values (e), shape (m,); carried but not used for energies
        charge_x: Cartesian positions of the point charges, shape (m, 3)
        center_of_mass: Cartesian center of mass, shape (3,); derived if not given
    """
    species: str
    atoms: tuple
    x: np.ndarray
    masses: Optional[np.ndarray] = None
    charges: Optional[np.ndarray] = None
    charge_x: Optional[np.ndarray] = None
    center_of_mass: Optional[np.ndarray] = None

    def __post_init__(self):
        self.atoms = tuple(self.atoms)
        self.x = np.asarray(self.x, dtype=np.float64).reshape(-1, 3)
        n = self.x.shape[0]
        if len(self.atoms) != n:
            raise ValueError(f"Got {len(self.atoms)} atom labels but {n} site positions")

        if self.masses is None:
            self.masses = np.ones(n)
        self.masses = np.asarray(self.masses, dtype=np.float64)
        if self.masses.shape != (n,):
            raise ValueError(f"masses must have shape ({n},), got {self.masses.shape}")
        if np.any(self.masses <= 0):
            raise ValueError("All masses must be > 0")

        if self.charges is None:
            self.charges = np.zeros(0)
        self.charges = np.asarray(self.charges, dtype=np.float64).reshape(-1)
        if self.charge_x is None:
            self.charge_x = np.zeros((0, 3))
        self.charge_x = np.asarray(self.charge_x, dtype=np.float64).reshape(-1, 3)
        if self.charge_x.shape[0] != self.charges.shape[0]:
            raise ValueError(f"Got {self.charges.shape[0]} charges but {self.charge_x.shape[0]} charge positions")

        if self.n_sites == 0:
            raise ValueError("A molecule needs at least one site")

        if self.center_of_mass is None:
            if n > 0:
                com = np.sum(self.masses[:, None] * self.x, axis=0) / np.sum(self.masses)
            else:
                com = np.mean(self.charge_x, axis=0)
            self.center_of_mass = com
        self.center_of_mass = np.asarray(self.center_of_mass, dtype=np.float64).reshape(3)

    @property
    def n_sites(self):
        """Total number of Lennard-Jones sites and point charges."""
        return len(self.atoms) + self.charges.shape[0]

    def copy(self):
        """Independent deep copy."""
        return Molecule(
            species=self.species,
            atoms=self.atoms,
            x=self.x.copy(),
            masses=self.masses.copy(),
            charges=self.charges.copy(),
            charge_x=self.charge_x.copy(),
            center_of_mass=self.center_of_mass.copy(),
        )

    def centered(self):
        """Copy with the center of mass moved to the origin (template form)."""
        template = self.copy()
        template.translate_to(np.zeros(3))
        return template

    def translate_by(self, dx):
        """Rigidly translate every site and charge by the Cartesian vector dx."""
        dx = np.asarray(dx, dtype=np.float64)
        self.x += dx
        self.charge_x += dx
        self.center_of_mass += dx

    def translate_to(self, x_new):
        """Rigidly translate so the center of mass lands on x_new."""
        self.translate_by(np.asarray(x_new, dtype=np.float64) - self.center_of_mass)

    def rotate(self, rng):
        """Apply a uniformly random rigid rotation about the center of mass."""
        R = random_rotation_matrix(rng)
        self.x = rotate_about(self.x, self.center_of_mass, R)
        self.charge_x = rotate_about(self.charge_x, self.center_of_mass, R)

    def snapshot(self):
        """Minimal state needed to undo a rigid move."""
        return self.x.copy(), self.charge_x.copy(), self.center_of_mass.copy()

    def restore(self, snapshot):
        """Put the molecule back exactly where snapshot() recorded it."""
        x, charge_x, center_of_mass = snapshot
        self.x = x.copy()
        self.charge_x = charge_x.copy()
        self.center_of_mass = center_of_mass.copy()

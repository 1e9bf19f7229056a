"""Host crystal structure."""

import itertools

import numpy as np

from .box import replication_factors
from .constants import ATOMIC_MASSES


class Framework:
    """Rigid porous crystal, read-only during a simulation.

    Attributes:
        name: Crystal identifier
        box: Unit cell Box
        atoms: Atom-type label of each host atom, tuple of length n
        xf: Fractional coordinates of the host atoms in the unit cell, shape (n, 3)
        masses: Mass of each host atom (amu), shape (n,)
    """

    def __init__(self, name, box, atoms, xf, masses=None):
        atoms = tuple(atoms)
        xf = np.asarray(xf, dtype=np.float64).reshape(-1, 3)
        if xf.shape[0] != len(atoms):
            raise ValueError(f"Got {len(atoms)} atom labels but {xf.shape[0]} positions")
        if masses is None:
            masses = [_element_mass(atom) for atom in atoms]
        masses = np.asarray(masses, dtype=np.float64)
        if masses.shape != (len(atoms),):
            raise ValueError(f"masses must have shape ({len(atoms)},), got {masses.shape}")

        self.name = name
        self.box = box
        self.atoms = atoms
        # keep every host atom inside the unit cell
        self.xf = np.mod(xf, 1.0)
        self.masses = masses
        self._images = {}
        self._type_indices = {}

    def __repr__(self):
        return f"Framework(name={self.name!r}, n_atoms={self.n_atoms})"

    @property
    def n_atoms(self):
        return len(self.atoms)

    def molar_mass(self):
        """Mass of one unit cell (amu, equivalently g/mol)."""
        return float(np.sum(self.masses))

    def replication_factors(self, forcefield):
        """Unit cells per axis needed to exceed twice the force field cutoff."""
        return replication_factors(self.box, forcefield.cutoff_radius)

    def replicated_fractional_coords(self, repfactors):
        """Host atoms of every replicated unit cell, in unit-cell fractional coordinates.

        Returns:
            Tuple (xf, atoms): xf has shape (n_atoms * prod(repfactors), 3); atoms
            lists the matching atom-type labels.
        """
        repfactors = tuple(int(r) for r in repfactors)
        if repfactors not in self._images:
            shifts = np.array(list(itertools.product(*(range(r) for r in repfactors))),
                              dtype=np.float64)
            xf = (self.xf[None, :, :] + shifts[:, None, :]).reshape(-1, 3)
            atoms = self.atoms * len(shifts)
            self._images[repfactors] = (xf, atoms)
        return self._images[repfactors]

    def host_type_indices(self, forcefield, repfactors):
        """Force field table rows of the atoms from replicated_fractional_coords()."""
        key = (forcefield.atom_types, tuple(int(r) for r in repfactors))
        if key not in self._type_indices:
            _, atoms = self.replicated_fractional_coords(repfactors)
            self._type_indices[key] = forcefield.type_indices(atoms)
        return self._type_indices[key]


def _element_mass(atom):
    # strip trailing labels such as "C_co2" or "Zn1" to find the element
    element = atom.split("_")[0].rstrip("0123456789")
    try:
        return ATOMIC_MASSES[element]
    except KeyError:
        raise ValueError(f"No atomic mass known for atom type {atom!r}; pass masses explicitly") from None

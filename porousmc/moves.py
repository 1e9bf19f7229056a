"""Markov chain proposals: insertion, deletion and translation of adsorbates."""

from enum import IntEnum

import numpy as np

from .utils import wrap_fractional


class MoveKind(IntEnum):
    """Kinds of Markov chain proposal. Values index MarkovCounts arrays."""
    INSERTION = 0
    DELETION = 1
    TRANSLATION = 2

    @property
    def label(self):
        return self.name.lower()


N_MOVE_KINDS = len(MoveKind)


def choose_move(rng):
    """Pick a proposal kind uniformly at random."""
    return MoveKind(int(rng.integers(N_MOVE_KINDS)))


def insert_molecule(molecules, box, template, rng):
    """Append a copy of `template` at a uniformly random position and orientation.

    Args:
        molecules: List of Molecule, modified in place
        box: Simulation Box
        template: Molecule with its center of mass at the origin
        rng: Random number generator

    Returns:
        The inserted Molecule (also molecules[-1])
    """
    x = box.fractional_to_cartesian(rng.random(3))
    molecule = template.copy()
    if molecule.n_sites > 1:
        molecule.rotate(rng)
    molecule.translate_to(x)
    molecules.append(molecule)
    return molecule


def delete_molecule(molecule_id, molecules):
    """Remove molecules[molecule_id] in place and return it."""
    return molecules.pop(molecule_id)


def apply_periodic_boundary_condition(molecule, box):
    """Bring a molecule whose center of mass left the box back inside.

    The center of mass is wrapped in fractional coordinates, one period at
    most per axis, and the whole molecule is translated rigidly to the wrapped
    position. Sites are never wrapped individually.

    Returns:
        True if the molecule was moved
    """
    xf = box.cartesian_to_fractional(molecule.center_of_mass)
    xf, outside_box = wrap_fractional(xf)
    if outside_box:
        molecule.translate_to(box.fractional_to_cartesian(xf))
    return outside_box


def translate_molecule(molecule, box, max_translation, rng):
    """Displace every site of a molecule by one random Cartesian vector.

    Each component of the displacement is uniform in [-max_translation,
    max_translation]. Periodic boundaries are applied afterwards.

    Args:
        molecule: Molecule, modified in place
        box: Simulation Box
        max_translation: Maximum displacement per coordinate (A)
        rng: Random number generator

    Returns:
        Snapshot of the pre-move geometry, for restore_molecule()
    """
    old = molecule.snapshot()
    dx = (rng.random(3) * 2 - 1) * max_translation
    molecule.translate_by(dx)
    apply_periodic_boundary_condition(molecule, box)
    return old


def restore_molecule(molecule, snapshot):
    """Undo a rejected translation."""
    molecule.restore(snapshot)


def inside_box(molecule, box):
    """True if the molecule's center of mass lies in the unit cell [0, 1)^3."""
    xf = box.cartesian_to_fractional(molecule.center_of_mass)
    return bool(np.all(xf >= 0.0) and np.all(xf < 1.0))

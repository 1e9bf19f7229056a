"""Metropolis-Hastings acceptance rules for the grand-canonical ensemble.

Ratios are computed in log space so that very favorable moves do not overflow
and infinite energies (overlaps) give an acceptance probability of exactly 0.

    insertion:   f V / (N_new kB T) * exp(-dU / T)
    deletion:    N_old kB T / (f V) * exp(+U / T)
    translation: exp(-dU / T)

Energies are in Kelvin, so dividing by T gives beta * U. The insertion ratio
for N -> N+1 and the deletion ratio for N+1 -> N at the same energy are exact
reciprocals, which is the detailed-balance condition for the muVT ensemble.
"""

import math

from .constants import KB
from .moves import MoveKind


def log_insertion_ratio(fugacity, volume, n_new, temperature, delta_energy, boltzmann=KB):
    """log of the insertion acceptance ratio.

    Args:
        fugacity: Bulk-phase fugacity (Pa)
        volume: Simulation box volume (A^3)
        n_new: Number of adsorbates after the insertion
        temperature: Temperature (K)
        delta_energy: Energy of the inserted molecule with the rest of the system (K)
        boltzmann: Boltzmann constant (Pa A^3 / K)
    """
    return (math.log(fugacity * volume / (n_new * boltzmann * temperature))
            - delta_energy / temperature)


def log_deletion_ratio(fugacity, volume, n_old, temperature, energy, boltzmann=KB):
    """log of the deletion acceptance ratio.

    Args:
        n_old: Number of adsorbates before the deletion
        energy: Energy of the molecule proposed for deletion with the rest of the system (K)
    """
    return (math.log(n_old * boltzmann * temperature / (fugacity * volume))
            + energy / temperature)


def log_translation_ratio(delta_energy, temperature):
    """log of the translation acceptance ratio, delta_energy = U_new - U_old."""
    return -delta_energy / temperature


def probability_from_log_ratio(log_ratio):
    """min(1, exp(log_ratio)), with -inf -> 0."""
    if log_ratio >= 0.0:
        return 1.0
    return math.exp(log_ratio)


def insertion_probability(fugacity, volume, n_new, temperature, delta_energy, boltzmann=KB):
    return probability_from_log_ratio(
        log_insertion_ratio(fugacity, volume, n_new, temperature, delta_energy, boltzmann))


def deletion_probability(fugacity, volume, n_old, temperature, energy, boltzmann=KB):
    return probability_from_log_ratio(
        log_deletion_ratio(fugacity, volume, n_old, temperature, energy, boltzmann))


def translation_probability(delta_energy, temperature):
    return probability_from_log_ratio(log_translation_ratio(delta_energy, temperature))


def acceptance_probability(kind, *, temperature, energy, fugacity=None, volume=None,
                           n_molecules=None, boltzmann=KB):
    """Acceptance probability of a proposal of the given kind.

    Args:
        kind: MoveKind
        temperature: Temperature (K)
        energy: Insertion: energy of the new molecule. Deletion: energy of the
            molecule to remove. Translation: U_new - U_old. All in K.
        fugacity: Fugacity (Pa); insertion and deletion only
        volume: Simulation box volume (A^3); insertion and deletion only
        n_molecules: N after an insertion, N before a deletion
        boltzmann: Boltzmann constant (Pa A^3 / K)
    """
    if kind == MoveKind.INSERTION:
        return insertion_probability(fugacity, volume, n_molecules, temperature, energy, boltzmann)
    elif kind == MoveKind.DELETION:
        return deletion_probability(fugacity, volume, n_molecules, temperature, energy, boltzmann)
    elif kind == MoveKind.TRANSLATION:
        return translation_probability(energy, temperature)
    raise ValueError(f"Unknown move kind: {kind!r}")


def metropolis_accept(probability, rng):
    """Draw one uniform number in [0, 1) and accept if it is below `probability`."""
    return rng.random() < probability

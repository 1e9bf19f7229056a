"""Tests for guest-guest and guest-host Lennard-Jones energies."""

import itertools

import numpy as np
import pytest
from porousmc.backend import NUMBA_AVAILABLE
from porousmc.box import Box
from porousmc.energy import (
    guest_guest_vdw_energy,
    guest_host_vdw_energy,
    lennard_jones,
    total_guest_guest_vdw_energy,
    total_guest_host_vdw_energy,
)
from porousmc.molecule import Molecule
from porousmc.moves import insert_molecule


def brute_force_pair_energy(mol_a, mol_b, forcefield, box):
    """Site-by-site double loop with minimum image by rounding."""
    energy = 0.0
    for a, xa in zip(mol_a.atoms, mol_a.x):
        for b, xb in zip(mol_b.atoms, mol_b.x):
            dxf = box.c_to_f @ (xa - xb)
            dxf -= np.round(dxf)
            dx = box.f_to_c @ dxf
            r2 = dx @ dx
            if r2 < forcefield.overlap_radius_squared:
                return np.inf
            if r2 < forcefield.cutoff_radius_squared:
                s6 = (forcefield.sigma_squared(a, b) / r2) ** 3
                energy += 4.0 * forcefield.epsilon_of(a, b) * (s6 * s6 - s6)
    return energy


def random_system(template, box, n, seed):
    rng = np.random.default_rng(seed)
    molecules = []
    for _ in range(n):
        insert_molecule(molecules, box, template, rng)
    return molecules


def argon_at(*points):
    return [Molecule("Ar", ["Ar"], [p]) for p in points]


def test_lennard_jones_zero_at_sigma_and_minimum_at_two_to_one_sixth():
    sigma2, eps = 3.4**2, 120.0
    assert lennard_jones(sigma2, sigma2, eps) == pytest.approx(0.0, abs=1e-12)
    r2_min = 2.0 ** (1.0 / 3.0) * sigma2
    assert lennard_jones(r2_min, sigma2, eps) == pytest.approx(-eps, rel=1e-12)
    # repulsive inside sigma, attractive outside
    assert lennard_jones(0.8 * sigma2, sigma2, eps) > 0.0
    assert lennard_jones(2.0 * sigma2, sigma2, eps) < 0.0


@pytest.mark.parametrize("box", [
    Box.cubic(12.0),
    Box.from_lattice(12.0, 13.0, 14.0, alpha=85.0, beta=95.0, gamma=100.0),
])
def test_guest_guest_matches_brute_force(box, forcefield, co2_like):
    """Per-molecule energy equals the explicit double loop excluding self-pairs."""
    molecules = random_system(co2_like.centered(), box, 5, seed=21)

    for i in range(len(molecules)):
        expected = sum(brute_force_pair_energy(molecules[i], molecules[j], forcefield, box)
                       for j in range(len(molecules)) if j != i)
        np.testing.assert_allclose(guest_guest_vdw_energy(i, molecules, forcefield, box),
                                   expected, rtol=1e-10, atol=1e-10)


def test_total_guest_guest_counts_each_pair_once(forcefield, co2_like):
    box = Box.cubic(12.0)
    molecules = random_system(co2_like.centered(), box, 4, seed=5)

    pairs = sum(brute_force_pair_energy(molecules[i], molecules[j], forcefield, box)
                for i, j in itertools.combinations(range(4), 2))
    np.testing.assert_allclose(total_guest_guest_vdw_energy(molecules, forcefield, box),
                               pairs, rtol=1e-10, atol=1e-10)


def test_guest_guest_pair_energy_is_symmetric(forcefield, co2_like):
    box = Box.cubic(12.0)
    molecules = random_system(co2_like.centered(), box, 2, seed=9)
    np.testing.assert_allclose(guest_guest_vdw_energy(0, molecules, forcefield, box),
                               guest_guest_vdw_energy(1, molecules, forcefield, box),
                               rtol=1e-12)


def test_single_molecule_has_no_guest_guest_energy(forcefield, argon):
    assert guest_guest_vdw_energy(0, [argon], forcefield, Box.cubic(12.0)) == 0.0


def test_guest_guest_uses_nearest_periodic_image(forcefield):
    """Atoms near opposite faces interact across the boundary; far ones are cut off."""
    box = Box.cubic(12.0)
    molecules = argon_at([0.5, 6.0, 6.0], [11.5, 6.0, 6.0])
    expected = lennard_jones(1.0, 3.4**2, 120.0)
    np.testing.assert_allclose(guest_guest_vdw_energy(0, molecules, forcefield, box), expected, rtol=1e-12)

    molecules = argon_at([0.5, 6.0, 6.0], [4.5, 6.0, 6.0])
    np.testing.assert_allclose(guest_guest_vdw_energy(0, molecules, forcefield, box),
                               lennard_jones(16.0, 3.4**2, 120.0), rtol=1e-12)

    # 6 A apart, beyond the 5 A cutoff
    molecules = argon_at([3.0, 6.0, 6.0], [9.0, 6.0, 6.0])
    assert guest_guest_vdw_energy(0, molecules, forcefield, box) == 0.0


def test_guest_guest_overlap_is_infinite(forcefield):
    box = Box.cubic(12.0)
    molecules = argon_at([5.0, 5.0, 5.0], [5.05, 5.0, 5.0], [8.0, 8.0, 8.0])
    assert guest_guest_vdw_energy(0, molecules, forcefield, box) == np.inf
    assert guest_guest_vdw_energy(1, molecules, forcefield, box) == np.inf
    assert np.isfinite(guest_guest_vdw_energy(2, molecules, forcefield, box))

    # overlap through the periodic boundary
    molecules = argon_at([0.02, 5.0, 5.0], [11.99, 5.0, 5.0])
    assert guest_guest_vdw_energy(0, molecules, forcefield, box) == np.inf
    assert total_guest_guest_vdw_energy(molecules, forcefield, box) == np.inf


def brute_force_guest_host(framework, molecule, forcefield, repfactors):
    """Explicit loop over every host atom image in the supercell."""
    simulation_box = framework.box.replicate(repfactors)
    energy = 0.0
    for shift in itertools.product(*(range(r) for r in repfactors)):
        for atom, xf in zip(framework.atoms, framework.xf):
            x_host = framework.box.fractional_to_cartesian(xf + np.array(shift))
            host = Molecule("host", [atom], [x_host])
            energy += brute_force_pair_energy(molecule, host, forcefield, simulation_box)
    return energy


def test_guest_host_matches_brute_force(small_framework, forcefield, co2_like):
    repfactors = small_framework.replication_factors(forcefield)
    assert repfactors == (2, 2, 2)
    simulation_box = small_framework.box.replicate(repfactors)
    molecules = random_system(co2_like.centered(), simulation_box, 5, seed=33)

    for molecule in molecules:
        np.testing.assert_allclose(
            guest_host_vdw_energy(small_framework, molecule, forcefield, repfactors),
            brute_force_guest_host(small_framework, molecule, forcefield, repfactors),
            rtol=1e-10, atol=1e-10,
        )

    expected_total = sum(guest_host_vdw_energy(small_framework, m, forcefield, repfactors)
                         for m in molecules)
    np.testing.assert_allclose(total_guest_host_vdw_energy(small_framework, molecules, forcefield, repfactors),
                               expected_total, rtol=1e-12)


def test_guest_host_overlap_is_infinite(small_framework, forcefield, argon):
    repfactors = (2, 2, 2)
    # host atom at fractional (0.5, 0.5, 0) of the second cell along a
    x_host = small_framework.box.fractional_to_cartesian([1.5, 0.5, 0.0])
    argon.translate_to(x_host + np.array([0.0, 0.05, 0.0]))
    assert guest_host_vdw_energy(small_framework, argon, forcefield, repfactors) == np.inf


def test_empty_framework_has_zero_guest_host_energy(empty_framework, forcefield, co2_like):
    assert guest_host_vdw_energy(empty_framework, co2_like, forcefield, (1, 1, 1)) == 0.0
    assert total_guest_host_vdw_energy(empty_framework, [co2_like, co2_like], forcefield, (1, 1, 1)) == 0.0


@pytest.mark.skipif(not NUMBA_AVAILABLE, reason="numba not available")
def test_numba_guest_guest_matches_reference(forcefield, co2_like):
    """The compiled kernel reproduces the Python reference energies."""
    from porousmc.energy_numba import guest_guest_vdw_energy_fast

    box = Box.from_lattice(12.0, 13.0, 14.0, alpha=85.0, beta=95.0, gamma=100.0)
    for seed in range(3):
        molecules = random_system(co2_like.centered(), box, 5, seed=100 + seed)
        for i in range(len(molecules)):
            np.testing.assert_allclose(
                guest_guest_vdw_energy_fast(i, molecules, forcefield, box),
                guest_guest_vdw_energy(i, molecules, forcefield, box),
                rtol=1e-10, atol=1e-10,
            )


@pytest.mark.skipif(not NUMBA_AVAILABLE, reason="numba not available")
def test_numba_guest_guest_overlap_and_single_molecule(forcefield, argon):
    from porousmc.energy_numba import guest_guest_vdw_energy_fast

    box = Box.cubic(12.0)
    assert guest_guest_vdw_energy_fast(0, [argon], forcefield, box) == 0.0
    molecules = argon_at([0.02, 5.0, 5.0], [11.99, 5.0, 5.0])
    assert guest_guest_vdw_energy_fast(0, molecules, forcefield, box) == np.inf


@pytest.mark.skipif(not NUMBA_AVAILABLE, reason="numba not available")
def test_numba_guest_host_matches_reference(small_framework, forcefield, co2_like):
    from porousmc.energy_numba import guest_host_vdw_energy_fast

    repfactors = (2, 2, 2)
    simulation_box = small_framework.box.replicate(repfactors)
    for seed in range(3):
        for molecule in random_system(co2_like.centered(), simulation_box, 5, seed=200 + seed):
            np.testing.assert_allclose(
                guest_host_vdw_energy_fast(small_framework, molecule, forcefield, repfactors),
                guest_host_vdw_energy(small_framework, molecule, forcefield, repfactors),
                rtol=1e-10, atol=1e-10,
            )


@pytest.mark.skipif(not NUMBA_AVAILABLE, reason="numba not available")
def test_numba_guest_host_overlap_and_empty_host(small_framework, empty_framework, forcefield, argon):
    from porousmc.energy_numba import guest_host_vdw_energy_fast

    assert guest_host_vdw_energy_fast(empty_framework, argon, forcefield, (1, 1, 1)) == 0.0
    x_host = small_framework.box.fractional_to_cartesian([1.5, 0.5, 0.0])
    argon.translate_to(x_host + np.array([0.0, 0.05, 0.0]))
    assert guest_host_vdw_energy_fast(small_framework, argon, forcefield, (2, 2, 2)) == np.inf

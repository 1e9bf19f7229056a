"""Van der Waals (Lennard-Jones 12-6) energies of adsorbates.

These are the reference Python implementations. The Markov chain driver
evaluates every proposal with the compiled kernels in energy_numba.py. These
functions only recompute the total energies from scratch at the end of a run
and serve as the yardstick for the kernels in the tests.

All energies are in Kelvin (energy / k_B), the units of the force field epsilon.
"""

import numpy as np

from .utils import nearest_image


def lennard_jones(r2, sigma2, epsilon):
    """Lennard-Jones 12-6 energy, 4 * eps * ((sigma/r)^12 - (sigma/r)^6).

    Args:
        r2: Squared distance(s), scalar or array
        sigma2: Squared sigma, broadcastable against r2
        epsilon: Well depth, broadcastable against r2

    Returns:
        Pair energy (unshifted)
    """
    sr6 = (sigma2 / r2) ** 3
    return 4.0 * epsilon * (sr6 * sr6 - sr6)


def guest_guest_vdw_energy(molecule_id, molecules, forcefield, box):
    """Energy of molecules[molecule_id] with every other molecule in the box.

    Displacements are reduced with the nearest-image convention in the
    fractional coordinates of the simulation box, which is assumed to be at
    least twice the cutoff wide in every direction.

    Summing this over all molecules counts every pair twice.

    Args:
        molecule_id: Index of the molecule of interest
        molecules: List of Molecule
        forcefield: LennardJonesForceField
        box: Simulation Box (already replicated)

    Returns:
        Energy (K); +inf if any two sites are closer than the overlap radius
    """
    molecule = molecules[molecule_id]
    rc2 = forcefield.cutoff_radius_squared
    overlap2 = forcefield.overlap_radius_squared
    types_i = forcefield.type_indices(molecule.atoms)

    energy = 0.0
    for a, x_site in zip(types_i, molecule.x):
        for other_id, other in enumerate(molecules):
            # a molecule does not interact with itself
            if other_id == molecule_id:
                continue
            types_j = forcefield.type_indices(other.atoms)
            dxf = nearest_image(box.cartesian_to_fractional(x_site - other.x))
            dx = box.fractional_to_cartesian(dxf)
            r2 = np.sum(dx * dx, axis=1)
            if np.any(r2 < overlap2):
                return np.inf
            within = r2 < rc2
            if np.any(within):
                b = types_j[within]
                energy += np.sum(lennard_jones(r2[within],
                                               forcefield.sigma2[a, b],
                                               forcefield.epsilon[a, b]))
    return float(energy)


def total_guest_guest_vdw_energy(molecules, forcefield, box):
    """Total guest-guest energy of the system, each pair counted once."""
    energy = 0.0
    for molecule_id in range(len(molecules)):
        energy += guest_guest_vdw_energy(molecule_id, molecules, forcefield, box)
    return energy / 2.0


def guest_host_vdw_energy(framework, molecule, forcefield, repfactors):
    """Energy of one adsorbate with the rigid host framework.

    The simulation box is `repfactors` unit cells of the framework. Each site is
    expressed in unit-cell fractional coordinates and paired with the nearest
    image of every host atom of every replicated cell.

    Args:
        framework: Framework
        molecule: Molecule, in simulation-box Cartesian coordinates
        forcefield: LennardJonesForceField
        repfactors: Unit cells per axis in the simulation box

    Returns:
        Energy (K); +inf if a site overlaps a host atom
    """
    if framework.n_atoms == 0 or len(molecule.atoms) == 0:
        return 0.0
    xf_host, _ = framework.replicated_fractional_coords(repfactors)
    host_types = framework.host_type_indices(forcefield, repfactors)
    types_i = forcefield.type_indices(molecule.atoms)
    rc2 = forcefield.cutoff_radius_squared
    overlap2 = forcefield.overlap_radius_squared

    energy = 0.0
    for a, xf_site in zip(types_i, framework.box.cartesian_to_fractional(molecule.x)):
        dxf = nearest_image(xf_site - xf_host, repfactors)
        dx = framework.box.fractional_to_cartesian(dxf)
        r2 = np.sum(dx * dx, axis=1)
        if np.any(r2 < overlap2):
            return np.inf
        within = r2 < rc2
        if np.any(within):
            b = host_types[within]
            energy += np.sum(lennard_jones(r2[within],
                                           forcefield.sigma2[a, b],
                                           forcefield.epsilon[a, b]))
    return float(energy)


def total_guest_host_vdw_energy(framework, molecules, forcefield, repfactors):
    """Sum of the guest-host energy of every adsorbate."""
    energy = 0.0
    for molecule in molecules:
        energy += guest_host_vdw_energy(framework, molecule, forcefield, repfactors)
    return energy

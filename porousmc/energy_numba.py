"""Numba kernels for the guest-guest and guest-host energies.

Same physics as guest_guest_vdw_energy and guest_host_vdw_energy in energy.py,
which remain the reference implementations. These are the versions the Markov
chain driver calls on every insertion, deletion and translation proposal.

Note: This module requires numba to be installed. Functions raise ImportError
when called without numba.
"""

import numpy as np
from .backend import njit, NUMBA_AVAILABLE, require_numba

if not NUMBA_AVAILABLE:
    def _raise_numba_error():
        raise ImportError(
            "Numba is required for the energy kernels. "
            "Install with: pip install numba"
        )

    def guest_guest_vdw_energy_numba(*args, **kwargs):
        _raise_numba_error()

    def guest_host_vdw_energy_numba(*args, **kwargs):
        _raise_numba_error()
else:
    @njit(cache=True)
    def guest_guest_vdw_energy_numba(
        molecule_id,    # int, molecule of interest
        sites,          # (N, n_sites, 3) float64, Lennard-Jones site positions of every molecule
        site_types,     # (n_sites,) int64, force field row of each site
        c_to_f,         # (3, 3) float64
        f_to_c,         # (3, 3) float64
        sigma2,         # (n_types, n_types) float64
        epsilon,        # (n_types, n_types) float64
        rc2,            # float64, squared cutoff
        overlap2,       # float64, squared overlap radius
    ):
        """Energy of molecule molecule_id with every other molecule.

        Returns:
            Energy (K), or +inf on overlap
        """
        N = sites.shape[0]
        n_sites = sites.shape[1]
        energy = 0.0
        d = np.empty(3)
        dxf = np.empty(3)

        for s in range(n_sites):
            a = site_types[s]
            for j in range(N):
                if j == molecule_id:
                    continue
                for t in range(n_sites):
                    b = site_types[t]
                    for k in range(3):
                        d[k] = sites[molecule_id, s, k] - sites[j, t, k]
                    # fractional displacement, single-period nearest image
                    for k in range(3):
                        dxf[k] = c_to_f[k, 0]*d[0] + c_to_f[k, 1]*d[1] + c_to_f[k, 2]*d[2]
                        if dxf[k] > 0.5:
                            dxf[k] -= 1.0
                        elif dxf[k] < -0.5:
                            dxf[k] += 1.0
                    r2 = 0.0
                    for k in range(3):
                        dx = f_to_c[k, 0]*dxf[0] + f_to_c[k, 1]*dxf[1] + f_to_c[k, 2]*dxf[2]
                        r2 += dx * dx

                    if r2 < overlap2:
                        return np.inf
                    elif r2 < rc2:
                        sr2 = sigma2[a, b] / r2
                        sr6 = sr2 * sr2 * sr2
                        energy += 4.0 * epsilon[a, b] * (sr6 * sr6 - sr6)
        return energy

    @njit(cache=True)
    def guest_host_vdw_energy_numba(
        sites_f,        # (n_sites, 3) float64, sites in unit-cell fractional coordinates
        site_types,     # (n_sites,) int64
        xf_host,        # (n_host, 3) float64, replicated host atoms in unit-cell fractional coordinates
        host_types,     # (n_host,) int64
        f_to_c,         # (3, 3) float64, unit cell
        rep,            # (3,) float64, replication factors
        sigma2,         # (n_types, n_types) float64
        epsilon,        # (n_types, n_types) float64
        rc2,            # float64
        overlap2,       # float64
    ):
        """Energy of one adsorbate with every host atom image.

        Returns:
            Energy (K), or +inf on overlap
        """
        n_sites = sites_f.shape[0]
        n_host = xf_host.shape[0]
        energy = 0.0
        dxf = np.empty(3)

        for s in range(n_sites):
            a = site_types[s]
            for h in range(n_host):
                b = host_types[h]
                # nearest image with period rep[k] along axis k
                for k in range(3):
                    dxf[k] = sites_f[s, k] - xf_host[h, k]
                    if dxf[k] > 0.5 * rep[k]:
                        dxf[k] -= rep[k]
                    elif dxf[k] < -0.5 * rep[k]:
                        dxf[k] += rep[k]
                r2 = 0.0
                for k in range(3):
                    dx = f_to_c[k, 0]*dxf[0] + f_to_c[k, 1]*dxf[1] + f_to_c[k, 2]*dxf[2]
                    r2 += dx * dx

                if r2 < overlap2:
                    return np.inf
                elif r2 < rc2:
                    sr2 = sigma2[a, b] / r2
                    sr6 = sr2 * sr2 * sr2
                    energy += 4.0 * epsilon[a, b] * (sr6 * sr6 - sr6)
        return energy


def pack_sites(molecules):
    """Stack the Lennard-Jones sites of same-species molecules, shape (N, n_sites, 3)."""
    return np.ascontiguousarray(np.stack([m.x for m in molecules]), dtype=np.float64)


def guest_guest_vdw_energy_fast(molecule_id, molecules, forcefield, box):
    """Compiled equivalent of energy.guest_guest_vdw_energy for a single species.

    Args:
        molecule_id: Index of the molecule of interest
        molecules: List of Molecule, all copies of the same template
        forcefield: LennardJonesForceField
        box: Simulation Box

    Returns:
        Energy (K); +inf on overlap
    """
    require_numba("guest-guest energy evaluation")
    site_types = forcefield.type_indices(molecules[molecule_id].atoms)
    return float(guest_guest_vdw_energy_numba(
        int(molecule_id),
        pack_sites(molecules),
        site_types,
        box.c_to_f,
        box.f_to_c,
        forcefield.sigma2,
        forcefield.epsilon,
        float(forcefield.cutoff_radius_squared),
        float(forcefield.overlap_radius_squared),
    ))


def guest_host_vdw_energy_fast(framework, molecule, forcefield, repfactors):
    """Compiled equivalent of energy.guest_host_vdw_energy."""
    require_numba("guest-host energy evaluation")
    if framework.n_atoms == 0 or len(molecule.atoms) == 0:
        return 0.0
    xf_host, _ = framework.replicated_fractional_coords(repfactors)
    return float(guest_host_vdw_energy_numba(
        np.ascontiguousarray(framework.box.cartesian_to_fractional(molecule.x)),
        forcefield.type_indices(molecule.atoms),
        np.ascontiguousarray(xf_host),
        framework.host_type_indices(forcefield, repfactors),
        framework.box.f_to_c,
        np.asarray(repfactors, dtype=np.float64),
        forcefield.sigma2,
        forcefield.epsilon,
        float(forcefield.cutoff_radius_squared),
        float(forcefield.overlap_radius_squared),
    ))

"""Grand-canonical (muVT) Monte Carlo simulation of adsorption in a rigid framework."""

from dataclasses import dataclass
from typing import Optional
import logging
import math

import numpy as np

from .acceptance import acceptance_probability, metropolis_accept
from .backend import require_numba
from .constants import (
    AUDIT_TOLERANCE,
    DEFAULT_MAX_TRANSLATION,
    KB,
    MIN_STEPS_PER_CYCLE,
    PA_PER_BAR,
)
from .energy import (
    total_guest_guest_vdw_energy,
    total_guest_host_vdw_energy,
)
from .energy_numba import guest_guest_vdw_energy_fast, guest_host_vdw_energy_fast
from .moves import (
    MoveKind,
    choose_move,
    delete_molecule,
    insert_molecule,
    restore_molecule,
    translate_molecule,
)
from .stats import GCMCStats, MarkovCounts, derive_results

logger = logging.getLogger(__name__)


class EnergyBookkeepingError(RuntimeError):
    """Incrementally tracked state disagrees with a from-scratch recomputation."""


@dataclass(frozen=True)
class GCMCConfig:
    """Run parameters of a GCMC simulation.

    Args:
        n_burn_cycles: Cycles discarded before sampling starts
        n_sample_cycles: Cycles during which states are sampled
        sample_frequency: Sample every this many Markov chain steps (global count)
        max_translation: Maximum displacement per coordinate of a translation (A)
        min_steps_per_cycle: A cycle is max(min_steps_per_cycle, N) proposals
        boltzmann: Boltzmann constant (Pa A^3 / K)
        audit_tolerance: Allowed drift (K) between tracked and recomputed energies
        seed: Random seed (None for a fresh one)
        keep_molecules: Return the final adsorbate configuration with the results
    """
    n_burn_cycles: int = 10_000
    n_sample_cycles: int = 100_000
    sample_frequency: int = 25
    max_translation: float = DEFAULT_MAX_TRANSLATION
    min_steps_per_cycle: int = MIN_STEPS_PER_CYCLE
    boltzmann: float = KB
    audit_tolerance: float = AUDIT_TOLERANCE
    seed: Optional[int] = None
    keep_molecules: bool = False

    def __post_init__(self):
        if self.n_burn_cycles < 0:
            raise ValueError(f"n_burn_cycles must be >= 0, got {self.n_burn_cycles}")
        if self.n_sample_cycles < 1:
            raise ValueError(f"n_sample_cycles must be >= 1, got {self.n_sample_cycles}")
        if self.sample_frequency < 1:
            raise ValueError(f"sample_frequency must be >= 1, got {self.sample_frequency}")
        if self.max_translation <= 0:
            raise ValueError(f"max_translation must be > 0, got {self.max_translation}")
        if self.min_steps_per_cycle < 1:
            raise ValueError(f"min_steps_per_cycle must be >= 1, got {self.min_steps_per_cycle}")
        if self.boltzmann <= 0:
            raise ValueError(f"boltzmann must be > 0, got {self.boltzmann}")
        if self.audit_tolerance < 0:
            raise ValueError(f"audit_tolerance must be >= 0, got {self.audit_tolerance}")


def check_energy_consistency(framework, molecules, forcefield, simulation_box, repfactors,
                             current_energy_gg, current_energy_gh, tolerance=AUDIT_TOLERANCE):
    """Compare running energy totals against a from-scratch recomputation.

    Raises:
        EnergyBookkeepingError: If either total drifted by more than `tolerance`
    """
    total_U_gh = total_guest_host_vdw_energy(framework, molecules, forcefield, repfactors)
    total_U_gg = total_guest_guest_vdw_energy(molecules, forcefield, simulation_box)
    for label, tracked, computed in [("guest-host", current_energy_gh, total_U_gh),
                                     ("guest-guest", current_energy_gg, total_U_gg)]:
        if not math.isclose(tracked, computed, rel_tol=0.0, abs_tol=tolerance):
            logger.error("U_%s incremented = %r, computed at end of simulation = %r",
                         label, tracked, computed)
            raise EnergyBookkeepingError(f"{label} energy incremented improperly: "
                                         f"tracked {tracked}, recomputed {computed}")
    return total_U_gg, total_U_gh


def gcmc_simulation(framework, temperature, fugacity, molecule, forcefield, config=None):
    """Run a GCMC simulation of `molecule` adsorbing in `framework`.

    A cycle is max(config.min_steps_per_cycle, N) Markov chain proposals, with N
    read at the start of the cycle. Each proposal is an insertion, deletion or
    translation chosen uniformly. After the burn-in cycles, the state is
    sampled whenever the global step counter is a multiple of
    config.sample_frequency. The run starts from an empty box.

    Args:
        framework: Framework (host crystal)
        temperature: Temperature of the bulk gas (K)
        fugacity: Fugacity of the bulk gas (Pa); equals pressure for an ideal gas
        molecule: Molecule template of the adsorbate
        forcefield: LennardJonesForceField for guest-guest and guest-host interactions
        config: GCMCConfig (defaults if None)

    Returns:
        GCMCResults

    Raises:
        ValueError: On non-positive temperature or fugacity
        EnergyBookkeepingError: If the end-of-run audit fails
    """
    require_numba("GCMC simulation")
    if config is None:
        config = GCMCConfig()
    if temperature <= 0:
        raise ValueError(f"temperature must be > 0, got {temperature}")
    if fugacity <= 0:
        raise ValueError(f"fugacity must be > 0, got {fugacity}")

    logger.info("Simulating adsorption of %s in %s at %f K and %f Pa (fugacity).",
                molecule.species, framework.name, temperature, fugacity)

    rng = np.random.default_rng(config.seed)
    repfactors = framework.replication_factors(forcefield)
    simulation_box = framework.box.replicate(repfactors)
    volume = simulation_box.volume
    template = molecule.centered()

    # valid only because the run starts with an empty box
    current_energy_gg = 0.0
    current_energy_gh = 0.0
    gcmc_stats = GCMCStats()
    markov_counts = MarkovCounts()
    molecules = []

    markov_chain_time = 0
    for outer_cycle in range(1, config.n_burn_cycles + config.n_sample_cycles + 1):
        for _ in range(max(config.min_steps_per_cycle, len(molecules))):
            markov_chain_time += 1

            which_move = choose_move(rng)
            markov_counts.propose(which_move)

            if which_move == MoveKind.INSERTION:
                insert_molecule(molecules, simulation_box, template, rng)
                molecule_id = len(molecules) - 1

                U_gg = guest_guest_vdw_energy_fast(molecule_id, molecules, forcefield, simulation_box)
                U_gh = guest_host_vdw_energy_fast(framework, molecules[molecule_id], forcefield, repfactors)

                p = acceptance_probability(which_move, temperature=temperature, energy=U_gg + U_gh,
                                           fugacity=fugacity, volume=volume,
                                           n_molecules=len(molecules), boltzmann=config.boltzmann)
                if metropolis_accept(p, rng):
                    markov_counts.accept(which_move)
                    current_energy_gg += U_gg
                    current_energy_gh += U_gh
                else:
                    molecules.pop()

            elif which_move == MoveKind.DELETION and len(molecules) != 0:
                molecule_id = int(rng.integers(len(molecules)))

                U_gg = guest_guest_vdw_energy_fast(molecule_id, molecules, forcefield, simulation_box)
                U_gh = guest_host_vdw_energy_fast(framework, molecules[molecule_id], forcefield, repfactors)

                p = acceptance_probability(which_move, temperature=temperature, energy=U_gg + U_gh,
                                           fugacity=fugacity, volume=volume,
                                           n_molecules=len(molecules), boltzmann=config.boltzmann)
                if metropolis_accept(p, rng):
                    markov_counts.accept(which_move)
                    delete_molecule(molecule_id, molecules)
                    current_energy_gg -= U_gg
                    current_energy_gh -= U_gh

            elif which_move == MoveKind.TRANSLATION and len(molecules) != 0:
                molecule_id = int(rng.integers(len(molecules)))
                moved = molecules[molecule_id]

                U_gg_old = guest_guest_vdw_energy_fast(molecule_id, molecules, forcefield, simulation_box)
                U_gh_old = guest_host_vdw_energy_fast(framework, moved, forcefield, repfactors)

                old_geometry = translate_molecule(moved, simulation_box, config.max_translation, rng)

                U_gg_new = guest_guest_vdw_energy_fast(molecule_id, molecules, forcefield, simulation_box)
                U_gh_new = guest_host_vdw_energy_fast(framework, moved, forcefield, repfactors)

                dU = (U_gg_new + U_gh_new) - (U_gg_old + U_gh_old)
                p = acceptance_probability(which_move, temperature=temperature, energy=dU)
                if metropolis_accept(p, rng):
                    markov_counts.accept(which_move)
                    current_energy_gg += U_gg_new - U_gg_old
                    current_energy_gh += U_gh_new - U_gh_old
                else:
                    restore_molecule(moved, old_geometry)

            if outer_cycle > config.n_burn_cycles and markov_chain_time % config.sample_frequency == 0:
                gcmc_stats.sample(len(molecules), current_energy_gg, current_energy_gh)

        logger.debug("cycle %d: N = %d, U_gg = %f K, U_gh = %f K",
                     outer_cycle, len(molecules), current_energy_gg, current_energy_gh)

    check_energy_consistency(framework, molecules, forcefield, simulation_box, repfactors,
                             current_energy_gg, current_energy_gh, config.audit_tolerance)
    if markov_counts.total_proposed != markov_chain_time:
        raise EnergyBookkeepingError(f"{markov_counts.total_proposed} proposals counted "
                                     f"for {markov_chain_time} Markov chain steps")

    results = derive_results(
        gcmc_stats,
        markov_counts,
        crystal=framework.name,
        adsorbate=molecule.species,
        forcefield=forcefield.name,
        temperature=temperature,
        fugacity=fugacity,
        repfactors=repfactors,
        n_burn_cycles=config.n_burn_cycles,
        n_sample_cycles=config.n_sample_cycles,
        n_markov_steps=markov_chain_time,
        framework_molar_mass=framework.molar_mass(),
        molecules=molecules if config.keep_molecules else None,
    )
    logger.info("%s in %s at %.1f Pa (%.4g bar): <N> = %f molecules, <U> = %f K, Q_st = %f K",
                molecule.species, framework.name, fugacity, fugacity / PA_PER_BAR,
                results.mean_n, results.mean_energy, results.Q_st)
    return results

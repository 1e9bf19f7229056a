"""porousmc: grand-canonical Monte Carlo simulation of gas adsorption in porous crystals."""

from .backend import NUMBA_AVAILABLE, require_numba
from .utils import nearest_image, wrap_fractional
from .box import Box, replication_factors
from .forcefield import LennardJonesForceField
from .framework import Framework
from .molecule import Molecule
from .energy import (
    lennard_jones,
    guest_guest_vdw_energy,
    total_guest_guest_vdw_energy,
    guest_host_vdw_energy,
    total_guest_host_vdw_energy,
)
from .energy_numba import guest_guest_vdw_energy_fast, guest_host_vdw_energy_fast
from .moves import (
    MoveKind,
    choose_move,
    insert_molecule,
    delete_molecule,
    translate_molecule,
    restore_molecule,
    apply_periodic_boundary_condition,
)
from .acceptance import (
    insertion_probability,
    deletion_probability,
    translation_probability,
    acceptance_probability,
    metropolis_accept,
)
from .stats import GCMCStats, MarkovCounts, GCMCResults, derive_results
from .gcmc import GCMCConfig, EnergyBookkeepingError, gcmc_simulation, check_energy_consistency
from .isotherm import adsorption_isotherm
from .config import SystemDefinition, load_system
from .report import format_results, results_to_dict, results_to_row

__all__ = [
    "NUMBA_AVAILABLE",
    "require_numba",
    "nearest_image",
    "wrap_fractional",
    "Box",
    "replication_factors",
    "LennardJonesForceField",
    "Framework",
    "Molecule",
    "lennard_jones",
    "guest_guest_vdw_energy",
    "total_guest_guest_vdw_energy",
    "guest_host_vdw_energy",
    "total_guest_host_vdw_energy",
    "guest_guest_vdw_energy_fast",
    "guest_host_vdw_energy_fast",
    "MoveKind",
    "choose_move",
    "insert_molecule",
    "delete_molecule",
    "translate_molecule",
    "restore_molecule",
    "apply_periodic_boundary_condition",
    "insertion_probability",
    "deletion_probability",
    "translation_probability",
    "acceptance_probability",
    "metropolis_accept",
    "GCMCStats",
    "MarkovCounts",
    "GCMCResults",
    "derive_results",
    "GCMCConfig",
    "EnergyBookkeepingError",
    "gcmc_simulation",
    "check_energy_consistency",
    "adsorption_isotherm",
    "SystemDefinition",
    "load_system",
    "format_results",
    "results_to_dict",
    "results_to_row",
]

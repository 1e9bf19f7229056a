"""Human-readable presentation of GCMCResults.

Display labels exist only here; the simulation code works with named fields.
"""

import logging

import numpy as np

from .constants import PA_PER_BAR
from .moves import MoveKind

logger = logging.getLogger(__name__)

# (label, GCMCResults attribute)
LOADING_AND_ENERGY_FIELDS = [
    ("⟨N⟩ (molecules)", "mean_n"),
    ("⟨N⟩ (molecules/unit cell)", "mean_n_per_unit_cell"),
    ("⟨N⟩ (mmol/g)", "mean_n_mmol_per_g"),
    ("⟨U_gg⟩ (K)", "mean_U_gg"),
    ("⟨U_gh⟩ (K)", "mean_U_gh"),
    ("⟨Energy⟩ (K)", "mean_energy"),
    ("var(N)", "var_n"),
    ("var(U_gg)", "var_U_gg"),
    ("var(U_gh)", "var_U_gh"),
    ("var(Energy)", "var_energy"),
    ("Q_st (K)", "Q_st"),
]


def proposals_label(kind):
    return f"Total # {MoveKind(kind).label} proposals"


def acceptance_label(kind):
    return f"Fraction of {MoveKind(kind).label} proposals accepted"


def results_to_dict(results):
    """Labelled, JSON-friendly view of one GCMCResults."""
    out = {
        "crystal": results.crystal,
        "adsorbate": results.adsorbate,
        "forcefield": results.forcefield,
        "fugacity (Pa)": results.fugacity,
        "temperature (K)": results.temperature,
        "repfactors": list(results.repfactors),
        "# sample cycles": results.n_sample_cycles,
        "# burn cycles": results.n_burn_cycles,
        "# samples": results.n_samples,
        "# Markov chain steps": results.n_markov_steps,
    }
    for label, attr in LOADING_AND_ENERGY_FIELDS:
        out[label] = float(getattr(results, attr))
    out["Q_st (kJ/mol)"] = float(results.Q_st_kJ_per_mol)
    for kind in MoveKind:
        out[proposals_label(kind)] = results.n_proposed[kind]
        out[acceptance_label(kind)] = float(results.acceptance_fractions[kind])
    return out


def results_to_row(results):
    """Flat row with snake_case keys, for CSV output."""
    row = {
        "crystal": results.crystal,
        "adsorbate": results.adsorbate,
        "forcefield": results.forcefield,
        "temperature": results.temperature,
        "fugacity": results.fugacity,
        "n_samples": results.n_samples,
        "n_markov_steps": results.n_markov_steps,
    }
    for _, attr in LOADING_AND_ENERGY_FIELDS:
        row[attr] = float(getattr(results, attr))
    for kind in MoveKind:
        row[f"acceptance_{kind.label}"] = float(results.acceptance_fractions[kind])
    return row


def format_results(results):
    """Multi-line text summary of a simulation."""
    lines = [
        f"GCMC simulation of {results.adsorbate} in {results.crystal} at "
        f"{results.temperature:f} K and {results.fugacity:f} Pa = "
        f"{results.fugacity / PA_PER_BAR:f} bar fugacity.",
        "",
        "Unit cell replication factors: %d %d %d" % tuple(results.repfactors),
        "",
    ]
    for kind in MoveKind:
        lines.append(f"{proposals_label(kind)}: {results.n_proposed[kind]}")
        lines.append(f"{acceptance_label(kind)}: {results.acceptance_fractions[kind]}")
    lines.append("")
    lines.append(f"# sample cycles: {results.n_sample_cycles}")
    lines.append(f"# burn cycles: {results.n_burn_cycles}")
    lines.append(f"# samples: {results.n_samples}")
    lines.append("")
    for label, attr in LOADING_AND_ENERGY_FIELDS[:-1]:
        lines.append(f"{label}: {getattr(results, attr)}")
    if np.isfinite(results.Q_st):
        lines.append(f"Q_st (K) = {results.Q_st:f} = {results.Q_st_kJ_per_mol:f} kJ/mol")
    else:
        lines.append("Q_st (K) = undefined (loading did not fluctuate)")
    return "\n".join(lines)


def log_results(results, level=logging.INFO):
    for line in format_results(results).splitlines():
        logger.log(level, line)

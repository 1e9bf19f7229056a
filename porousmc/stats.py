"""Running statistics of a grand-canonical Monte Carlo run and derived results."""

from dataclasses import dataclass, field
from typing import Optional
import math

import numpy as np

from .constants import AMU_TO_GRAMS, AVOGADRO, GAS_CONSTANT
from .moves import MoveKind, N_MOVE_KINDS


@dataclass
class GCMCStats:
    """Running sums over sampled states.

    n is the number of adsorbates, U_gh the guest-host and U_gg the guest-guest
    energy (K). Un accumulates (U_gg + U_gh) * n for the isosteric heat.
    """
    n_samples: int = 0
    n: int = 0
    n2: int = 0
    U_gh: float = 0.0
    U_gh2: float = 0.0
    U_gg: float = 0.0
    U_gg2: float = 0.0
    U_ggU_gh: float = 0.0
    Un: float = 0.0

    def sample(self, n, U_gg, U_gh):
        """Accumulate one sampled state."""
        self.n_samples += 1
        self.n += n
        self.n2 += n * n
        self.U_gh += U_gh
        self.U_gh2 += U_gh * U_gh
        self.U_gg += U_gg
        self.U_gg2 += U_gg * U_gg
        self.U_ggU_gh += U_gg * U_gh
        self.Un += (U_gg + U_gh) * n


@dataclass
class MarkovCounts:
    """Proposed and accepted counts per MoveKind."""
    n_proposed: np.ndarray = field(default_factory=lambda: np.zeros(N_MOVE_KINDS, dtype=np.int64))
    n_accepted: np.ndarray = field(default_factory=lambda: np.zeros(N_MOVE_KINDS, dtype=np.int64))

    def propose(self, kind):
        self.n_proposed[kind] += 1

    def accept(self, kind):
        if self.n_accepted[kind] >= self.n_proposed[kind]:
            raise RuntimeError(f"More {MoveKind(kind).label} acceptances than proposals")
        self.n_accepted[kind] += 1

    @property
    def total_proposed(self):
        return int(np.sum(self.n_proposed))

    def acceptance_fractions(self):
        """accepted / proposed per kind, NaN for kinds never proposed."""
        fractions = {}
        for kind in MoveKind:
            proposed = int(self.n_proposed[kind])
            fractions[kind] = int(self.n_accepted[kind]) / proposed if proposed > 0 else math.nan
        return fractions


@dataclass(frozen=True)
class GCMCResults:
    """Ensemble averages and run metadata of one simulation.

    Energies are in K, loadings in molecules unless stated otherwise.
    """
    crystal: str
    adsorbate: str
    forcefield: str
    temperature: float
    fugacity: float
    repfactors: tuple
    n_burn_cycles: int
    n_sample_cycles: int
    n_samples: int
    n_markov_steps: int

    mean_n: float
    mean_n_per_unit_cell: float
    mean_n_mmol_per_g: float
    mean_U_gg: float
    mean_U_gh: float
    mean_energy: float
    var_n: float
    var_U_gg: float
    var_U_gh: float
    var_energy: float
    Q_st: float

    n_proposed: dict
    n_accepted: dict
    acceptance_fractions: dict
    molecules: Optional[list] = field(default=None, repr=False)

    @property
    def Q_st_kJ_per_mol(self):
        return self.Q_st * GAS_CONSTANT / 1000.0


def mmol_per_gram(n_per_unit_cell, framework_molar_mass):
    """Convert molecules per unit cell to mmol adsorbate per gram of framework."""
    if framework_molar_mass <= 0.0:
        return math.nan
    # (molecules/cell) * (mol / N_A molecules) * (1000 mmol/mol) / (cell mass in g)
    return n_per_unit_cell * 1000.0 / (AVOGADRO * framework_molar_mass * AMU_TO_GRAMS)


def derive_results(stats, counts, *, crystal, adsorbate, forcefield, temperature, fugacity,
                   repfactors, n_burn_cycles, n_sample_cycles, n_markov_steps,
                   framework_molar_mass, molecules=None):
    """Turn accumulated sums into ensemble averages, variances and Q_st.

    Q_st = T - (<U N> - <U><N>) / var(N), with U = U_gg + U_gh. It is NaN when
    the loading never fluctuated.

    Raises:
        ValueError: If no state was sampled
    """
    n_samples = stats.n_samples
    if n_samples == 0:
        raise ValueError("No samples were collected; increase n_sample_cycles or lower sample_frequency")

    mean_n = stats.n / n_samples
    mean_U_gg = stats.U_gg / n_samples
    mean_U_gh = stats.U_gh / n_samples
    mean_energy = (stats.U_gg + stats.U_gh) / n_samples

    var_n = stats.n2 / n_samples - mean_n**2
    var_U_gg = stats.U_gg2 / n_samples - mean_U_gg**2
    var_U_gh = stats.U_gh2 / n_samples - mean_U_gh**2
    var_energy = ((stats.U_gg2 + stats.U_gh2 + 2.0 * stats.U_ggU_gh) / n_samples
                  - mean_energy**2)

    if var_n > 0.0:
        Q_st = temperature - (stats.Un / n_samples - mean_energy * mean_n) / var_n
    else:
        Q_st = math.nan

    n_cells = repfactors[0] * repfactors[1] * repfactors[2]
    mean_n_per_unit_cell = mean_n / n_cells

    return GCMCResults(
        crystal=crystal,
        adsorbate=adsorbate,
        forcefield=forcefield,
        temperature=temperature,
        fugacity=fugacity,
        repfactors=tuple(repfactors),
        n_burn_cycles=n_burn_cycles,
        n_sample_cycles=n_sample_cycles,
        n_samples=n_samples,
        n_markov_steps=n_markov_steps,
        mean_n=mean_n,
        mean_n_per_unit_cell=mean_n_per_unit_cell,
        mean_n_mmol_per_g=mmol_per_gram(mean_n_per_unit_cell, framework_molar_mass),
        mean_U_gg=mean_U_gg,
        mean_U_gh=mean_U_gh,
        mean_energy=mean_energy,
        var_n=var_n,
        var_U_gg=var_U_gg,
        var_U_gh=var_U_gh,
        var_energy=var_energy,
        Q_st=Q_st,
        n_proposed={kind: int(counts.n_proposed[kind]) for kind in MoveKind},
        n_accepted={kind: int(counts.n_accepted[kind]) for kind in MoveKind},
        acceptance_fractions=counts.acceptance_fractions(),
        molecules=molecules,
    )

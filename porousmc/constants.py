"""Physical constants and default run parameters.

Units used throughout the package:
- lengths in Angstrom
- energies in Kelvin (energy / k_B)
- pressures and fugacities in Pascal
- masses in atomic mass units
"""

# Boltzmann constant in Pa * A^3 / K (1.38064852e-23 J/K = Pa m^3/K, 1 m^3 = 1e30 A^3)
KB = 1.38064852e7

AVOGADRO = 6.022140857e23
AMU_TO_GRAMS = 1.66054e-24
# J / (mol K), used to report Q_st in kJ/mol
GAS_CONSTANT = 8.314

# Maximum displacement per coordinate of a translation move (A)
DEFAULT_MAX_TRANSLATION = 0.35
# A cycle is max(MIN_STEPS_PER_CYCLE, N) Markov chain proposals
MIN_STEPS_PER_CYCLE = 20
# Tolerance (K) between incrementally tracked and recomputed energies
AUDIT_TOLERANCE = 0.01
# Sites closer than this (A) are treated as overlapping: energy = +inf
OVERLAP_RADIUS = 0.1
DEFAULT_CUTOFF_RADIUS = 12.5

PA_PER_BAR = 1.0e5

# Standard atomic weights (amu) for elements common in porous frameworks
ATOMIC_MASSES = {
    "H": 1.00794,
    "He": 4.002602,
    "B": 10.811,
    "C": 12.0107,
    "N": 14.0067,
    "O": 15.9994,
    "F": 18.9984032,
    "Ne": 20.1797,
    "Na": 22.98976928,
    "Mg": 24.305,
    "Al": 26.9815386,
    "Si": 28.0855,
    "P": 30.973762,
    "S": 32.065,
    "Cl": 35.453,
    "Ar": 39.948,
    "K": 39.0983,
    "Ca": 40.078,
    "Ti": 47.867,
    "V": 50.9415,
    "Cr": 51.9961,
    "Mn": 54.938045,
    "Fe": 55.845,
    "Co": 58.933195,
    "Ni": 58.6934,
    "Cu": 63.546,
    "Zn": 65.38,
    "Br": 79.904,
    "Kr": 83.798,
    "Zr": 91.224,
    "I": 126.90447,
    "Xe": 131.293,
}

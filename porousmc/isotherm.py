"""Adsorption isotherms: one independent GCMC chain per fugacity."""

import dataclasses
import logging

import numpy as np

from .gcmc import GCMCConfig, gcmc_simulation

logger = logging.getLogger(__name__)


def adsorption_isotherm(framework, temperature, fugacities, molecule, forcefield, config=None):
    """Run gcmc_simulation at each fugacity.

    Every chain owns its own molecules, energies and random stream; seeds are
    spawned from config.seed so the whole isotherm is reproducible.

    Args:
        framework: Framework
        temperature: Temperature (K)
        fugacities: Iterable of fugacities (Pa)
        molecule: Molecule template
        forcefield: LennardJonesForceField
        config: GCMCConfig shared by all chains (seed is replaced per chain)

    Returns:
        List of GCMCResults, in the order of `fugacities`
    """
    if config is None:
        config = GCMCConfig()
    fugacities = [float(f) for f in fugacities]
    child_seeds = np.random.SeedSequence(config.seed).spawn(len(fugacities))

    results = []
    for i, (fugacity, seed_seq) in enumerate(zip(fugacities, child_seeds)):
        chain_seed = int(seed_seq.generate_state(1)[0])
        chain_config = dataclasses.replace(config, seed=chain_seed)
        logger.info("Isotherm point %d/%d: %f Pa", i + 1, len(fugacities), fugacity)
        results.append(gcmc_simulation(framework, temperature, fugacity, molecule,
                                       forcefield, chain_config))
    return results

"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from porousmc.backend import NUMBA_AVAILABLE
from porousmc.box import Box
from porousmc.forcefield import LennardJonesForceField
from porousmc.framework import Framework
from porousmc.molecule import Molecule


def pytest_addoption(parser):
    """Add command-line options for pytest."""
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="run slow tests"
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --runslow is given."""
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(scope="session", autouse=True)
def warmup_numba_jit():
    """Compile the energy kernels once before the tests run."""
    if not NUMBA_AVAILABLE:
        return

    from porousmc.energy_numba import guest_guest_vdw_energy_numba, guest_host_vdw_energy_numba

    rng = np.random.default_rng(42)
    sites = rng.random((3, 2, 3)) * 10.0
    site_types = np.array([0, 1], dtype=np.int64)
    f_to_c = np.eye(3) * 10.0
    c_to_f = np.eye(3) / 10.0
    table = np.ones((2, 2))
    guest_guest_vdw_energy_numba(0, sites, site_types, c_to_f, f_to_c, table, table, 16.0, 0.01)
    guest_host_vdw_energy_numba(sites[0] / 10.0, site_types, rng.random((4, 3)), np.array([0, 1, 1, 0], dtype=np.int64),
                                f_to_c, np.ones(3), table, table, 16.0, 0.01)


@pytest.fixture
def forcefield():
    """Three atom types, 5 A cutoff so a 12 A cubic cell needs no replication."""
    return LennardJonesForceField(
        "toy",
        ["Ar", "C", "O"],
        sigma=[3.4, 3.4, 3.0],
        epsilon=[120.0, 50.0, 80.0],
        cutoff_radius=5.0,
    )


@pytest.fixture
def ideal_forcefield():
    """Force field with every epsilon zero: only the overlap guard remains."""
    return LennardJonesForceField(
        "ideal",
        ["Ar", "C", "O"],
        sigma=[3.4, 3.4, 3.0],
        epsilon=[0.0, 0.0, 0.0],
        cutoff_radius=5.0,
    )


@pytest.fixture
def empty_framework():
    """Host with no atoms: guest-host energy is identically zero."""
    return Framework("empty", Box.cubic(12.0), [], np.zeros((0, 3)), masses=[])


@pytest.fixture
def small_framework():
    """Small orthorhombic carbon host; needs replication for a 5 A cutoff."""
    box = Box.from_lattice(6.0, 7.0, 8.0)
    xf = np.array([
        [0.0, 0.0, 0.0],
        [0.5, 0.5, 0.0],
        [0.25, 0.0, 0.5],
    ])
    return Framework("small_C", box, ["C", "C", "C"], xf)


@pytest.fixture
def argon():
    return Molecule("Ar", ["Ar"], [[0.0, 0.0, 0.0]], masses=[39.948])


@pytest.fixture
def co2_like():
    """Linear three-site molecule with point charges."""
    x = np.array([
        [0.0, 0.0, -1.16],
        [0.0, 0.0, 0.0],
        [0.0, 0.0, 1.16],
    ])
    return Molecule(
        "CO2",
        ["O", "C", "O"],
        x,
        masses=[15.9994, 12.0107, 15.9994],
        charges=[-0.35, 0.7, -0.35],
        charge_x=x.copy(),
    )

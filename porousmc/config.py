"""Build simulation inputs from JSON system files.

A system file looks like::

    {
      "framework": {
        "name": "IRMOF-1",
        "lattice": {"a": 25.83, "b": 25.83, "c": 25.83, "alpha": 90, "beta": 90, "gamma": 90},
        "atoms": [["Zn", [0.2934, 0.2066, 0.2066]], ...],
        "masses": {"Zn": 65.38}
      },
      "forcefield": {
        "name": "UFF",
        "cutoff_radius": 12.5,
        "atoms": {"Zn": {"sigma": 2.46, "epsilon": 62.4}, "CH4": {"sigma": 3.73, "epsilon": 148.0}}
      },
      "adsorbate": {"species": "CH4", "sites": [["CH4", [0.0, 0.0, 0.0]]]},
      "temperature": 298.0,
      "fugacities": [1e5, 5e5],
      "gcmc": {"n_burn_cycles": 1000, "n_sample_cycles": 5000, "sample_frequency": 25, "seed": 1}
    }
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List
import json

from .box import Box
from .forcefield import LennardJonesForceField
from .framework import Framework
from .gcmc import GCMCConfig
from .molecule import Molecule


@dataclass
class SystemDefinition:
    """Everything needed to run an isotherm, as loaded from a system file."""
    framework: Framework
    forcefield: LennardJonesForceField
    molecule: Molecule
    temperature: float
    fugacities: List[float]
    config: GCMCConfig


def _require(data: Dict[str, Any], key: str, where: str):
    if key not in data:
        raise ValueError(f"Missing '{key}' in {where}")
    return data[key]


def _labelled_points(entries, where):
    labels, points = [], []
    for entry in entries:
        if len(entry) != 2 or len(entry[1]) != 3:
            raise ValueError(f"Each entry of {where} must be [label, [x, y, z]], got {entry!r}")
        labels.append(entry[0])
        points.append([float(v) for v in entry[1]])
    return labels, points


def framework_from_dict(data: Dict[str, Any]) -> Framework:
    lattice = _require(data, "lattice", "framework")
    box = Box.from_lattice(
        float(_require(lattice, "a", "framework.lattice")),
        float(_require(lattice, "b", "framework.lattice")),
        float(_require(lattice, "c", "framework.lattice")),
        float(lattice.get("alpha", 90.0)),
        float(lattice.get("beta", 90.0)),
        float(lattice.get("gamma", 90.0)),
    )
    atoms, xf = _labelled_points(data.get("atoms", []), "framework.atoms")
    masses = None
    if "masses" in data:
        try:
            masses = [float(data["masses"][atom]) for atom in atoms]
        except KeyError as err:
            raise ValueError(f"No mass given for framework atom {err.args[0]!r}") from None
    return Framework(_require(data, "name", "framework"), box, atoms, xf, masses)


def forcefield_from_dict(data: Dict[str, Any]) -> LennardJonesForceField:
    params = _require(data, "atoms", "forcefield")
    atom_types = list(params)
    try:
        sigma = [float(params[a]["sigma"]) for a in atom_types]
        epsilon = [float(params[a]["epsilon"]) for a in atom_types]
    except KeyError as err:
        raise ValueError(f"Force field atom entries need 'sigma' and 'epsilon' (missing {err.args[0]!r})") from None
    kwargs = {}
    for key in ("cutoff_radius", "overlap_radius"):
        if key in data:
            kwargs[key] = float(data[key])
    return LennardJonesForceField(_require(data, "name", "forcefield"), atom_types, sigma, epsilon, **kwargs)


def molecule_from_dict(data: Dict[str, Any]) -> Molecule:
    atoms, x = _labelled_points(data.get("sites", []), "adsorbate.sites")
    charges, charge_x = [], []
    for entry in data.get("charges", []):
        if len(entry) != 2 or len(entry[1]) != 3:
            raise ValueError(f"Each charge must be [q, [x, y, z]], got {entry!r}")
        charges.append(float(entry[0]))
        charge_x.append([float(v) for v in entry[1]])
    return Molecule(
        species=_require(data, "species", "adsorbate"),
        atoms=atoms,
        x=x,
        masses=data.get("masses"),
        charges=charges,
        charge_x=charge_x,
    )


_INTEGER_OPTIONS = ("n_burn_cycles", "n_sample_cycles", "sample_frequency", "min_steps_per_cycle", "seed")
_FLOAT_OPTIONS = ("max_translation", "boltzmann", "audit_tolerance")


def gcmc_config_from_dict(data: Dict[str, Any]) -> GCMCConfig:
    known = {f.name for f in fields(GCMCConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown gcmc options: {sorted(unknown)}")
    options = dict(data)
    for key, value in options.items():
        if key in _INTEGER_OPTIONS:
            if value is None and key == "seed":
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"gcmc option '{key}' must be an integer, got {value!r}")
        elif key in _FLOAT_OPTIONS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"gcmc option '{key}' must be a number, got {value!r}")
            options[key] = float(value)
        elif key == "keep_molecules" and not isinstance(value, bool):
            raise ValueError(f"gcmc option 'keep_molecules' must be true or false, got {value!r}")
    return GCMCConfig(**options)


def system_from_dict(data: Dict[str, Any]) -> SystemDefinition:
    fugacities = [float(f) for f in _require(data, "fugacities", "system file")]
    if not fugacities:
        raise ValueError("At least one fugacity is required")
    return SystemDefinition(
        framework=framework_from_dict(_require(data, "framework", "system file")),
        forcefield=forcefield_from_dict(_require(data, "forcefield", "system file")),
        molecule=molecule_from_dict(_require(data, "adsorbate", "system file")),
        temperature=float(_require(data, "temperature", "system file")),
        fugacities=fugacities,
        config=gcmc_config_from_dict(data.get("gcmc", {})),
    )


def load_system(path) -> SystemDefinition:
    """Read a JSON system file."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"System file {path} must contain a JSON object at the root")
    return system_from_dict(data)

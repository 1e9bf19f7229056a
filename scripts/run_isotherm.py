#!/usr/bin/env python3
"""Run a GCMC adsorption isotherm from a JSON system file.

Runs one independent grand-canonical Monte Carlo chain per fugacity and writes
the labelled results to results.json and one row per fugacity to results.csv.
"""

import argparse
import csv
import dataclasses
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from porousmc.config import load_system
from porousmc.isotherm import adsorption_isotherm
from porousmc.report import format_results, results_to_dict, results_to_row


def main():
    parser = argparse.ArgumentParser(
        description="Run a GCMC adsorption isotherm and log ensemble averages"
    )
    parser.add_argument(
        "system", type=str,
        help="JSON system file (framework, forcefield, adsorbate, temperature, fugacities)"
    )
    parser.add_argument(
        "--outdir", type=str, default=None,
        help="Output directory (default: results/isotherm_<timestamp>)"
    )
    parser.add_argument(
        "--fugacity", type=float, nargs="+", default=None,
        help="Override the fugacities in the system file (Pa)"
    )
    parser.add_argument(
        "--burnin", type=int, default=None,
        help="Override the number of burn-in cycles"
    )
    parser.add_argument(
        "--cycles", type=int, default=None,
        help="Override the number of sampling cycles"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Override the base random seed"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log per-point progress and summaries"
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s - %(levelname)s - %(message)s")

    system = load_system(args.system)
    overrides = {}
    if args.burnin is not None:
        overrides["n_burn_cycles"] = args.burnin
    if args.cycles is not None:
        overrides["n_sample_cycles"] = args.cycles
    if args.seed is not None:
        overrides["seed"] = args.seed
    config = dataclasses.replace(system.config, **overrides)
    fugacities = args.fugacity if args.fugacity is not None else system.fugacities

    if args.outdir is None:
        outdir = Path("results") / f"isotherm_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    else:
        outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    print(f"Output directory: {outdir}")
    print(f"{system.molecule.species} in {system.framework.name} at {system.temperature} K, "
          f"{len(fugacities)} fugacities")

    t_start = time.perf_counter()
    results = adsorption_isotherm(system.framework, system.temperature, fugacities,
                                  system.molecule, system.forcefield, config)
    elapsed = time.perf_counter() - t_start

    for res in results:
        print()
        print(format_results(res))

    with open(outdir / "results.json", "w") as f:
        json.dump({
            "system_file": str(Path(args.system).resolve()),
            "timestamp": datetime.now().isoformat(),
            "elapsed_seconds": elapsed,
            "results": [results_to_dict(res) for res in results],
        }, f, indent=2)

    rows = [results_to_row(res) for res in results]
    with open(outdir / "results.csv", "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)

    print()
    print(f"Done in {elapsed:.1f} s. Wrote {outdir / 'results.json'} and {outdir / 'results.csv'}")


if __name__ == "__main__":
    main()

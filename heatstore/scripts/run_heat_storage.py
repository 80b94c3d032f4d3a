"""
Run a heat storage simulation from a JSON experiment configuration.

Run from the project root:
    python heatstore/scripts/run_heat_storage.py experiment.json
    python heatstore/scripts/run_heat_storage.py experiment.json --plot Tf.png
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from heatstore.src import Simulation, load_config


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("config", type=Path, help="experiment configuration (JSON)")
    parser.add_argument("--plot", default=None, help="save a temperature plot to this file")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    config = load_config(args.config)
    simulation = Simulation(config)

    print("=" * 60)
    print(f"HEAT STORAGE: {config.output.title}")
    print(f"Cells: {simulation.mesh.n_cells}, dt: {config.run.time_step}, "
          f"T: {config.run.total_time}")
    print("=" * 60)

    if config.mms.enabled:
        series = simulation.run_mms()
        print(f"{'cells':>8} {'error':>14} {'diff_prev':>14} {'steps':>8}")
        for entry in series:
            print(f"{entry.num_cells:8d} {entry.error:14.6e} "
                  f"{entry.diff_prev:14.6e} {entry.num_steps:8d}")

    solver = simulation.run()
    print(f"Finished at t = {solver.time:.4e} after {solver.iteration} steps")

    if args.plot:
        solver.plot_solution(args.plot)


if __name__ == "__main__":
    main()

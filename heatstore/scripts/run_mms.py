"""
Mesh convergence study of the fluid transport with manufactured solutions.

This script demonstrates:
1. Steady-state runs on successively refined meshes
2. Error against the exact solution
3. Difference to the previous (coarser) mesh via interpolation
4. Observed order of accuracy

Run from the project root:
    python heatstore/scripts/run_mms.py --solution "cos(kx)" --stages 4
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from heatstore.src import ConvergenceTester, manufactured_solution


def main(argv=None):
    parser = argparse.ArgumentParser(description="MMS mesh convergence study")
    parser.add_argument("--solution", default="cos(kx)", help="'cos(kx)' or 'cos(kx^2)'")
    parser.add_argument("--velocity", type=float, default=1.0)
    parser.add_argument("--alpha", type=float, default=0.1)
    parser.add_argument("--wavenumber", type=float, default=np.pi)
    parser.add_argument("--cells", type=int, default=10, help="cells on the coarsest mesh")
    parser.add_argument("--stages", type=int, default=3)
    parser.add_argument("--factor", type=int, default=2)
    parser.add_argument("--length", type=float, default=1.0)
    parser.add_argument("--steps", type=int, default=20000, help="step budget per stage")
    parser.add_argument("--dt", type=float, default=1e-3)
    parser.add_argument("--threshold", type=float, default=1e-10)
    parser.add_argument("--T-left", dest="T_left", type=float, default=1.0)
    parser.add_argument("--output-dir", type=Path, default=Path("."))
    parser.add_argument("--plot", default=None, help="save a convergence plot to this file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    func_exact, func_rhs = manufactured_solution(
        args.solution, args.velocity, args.alpha, args.wavenumber)
    tester = ConvergenceTester(
        args.cells, args.stages, args.factor, args.length, args.steps, args.dt,
        args.threshold, args.velocity, args.alpha, args.T_left,
        func_rhs, func_exact, output_dir=args.output_dir)

    print("\n" + "=" * 60)
    print(f"MMS CONVERGENCE: {args.solution}")
    print("=" * 60 + "\n")

    series = tester.run()
    orders = [float("nan")] + tester.convergence_orders()
    print(f"{'cells':>8} {'h':>12} {'error':>14} {'diff_prev':>14} {'order':>8} {'steps':>8}")
    for entry, order in zip(series, orders):
        print(f"{entry.num_cells:8d} {entry.h:12.4e} {entry.error:14.6e} "
              f"{entry.diff_prev:14.6e} {order:8.3f} {entry.num_steps:8d}")

    if args.plot:
        tester.plot_convergence(args.plot)


if __name__ == "__main__":
    main()

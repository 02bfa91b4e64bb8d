###############################################################################
# Copyright (C) 2024 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""Run the disjoint-set benchmarks on the command line."""

import argparse
import logging
import sys
from typing import Sequence

import tqdm

from quickunion.auxiliary.argparseutils import (bool_options, log_level,
                                                optional_int, positive_int)
from quickunion.benchmarking.unionfind import (BenchmarkConfig,
                                               benchmark_policies,
                                               format_header, format_result)
from quickunion.datastructures.disjointset import (ALL_POLICIES,
                                                   UnionFindPolicy)

__copyright__ = "Copyright (C) 2024 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = ()


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


def _policy(value: str) -> UnionFindPolicy:
    try:
        return UnionFindPolicy.from_label(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from error


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the benchmark driver."""
    defaults = BenchmarkConfig()
    parser = argparse.ArgumentParser(
        prog="quickunion-benchmark",
        description="Time driving disjoint-sets to a single component with "
                    "random unions, for each balancing and compression "
                    "policy."
    )
    parser.add_argument(
        "-n", "--initial-n",
        type=positive_int,
        default=defaults.initial_n,
        help="The smallest number of sites, default %(default)s."
    )
    parser.add_argument(
        "-d", "--doublings",
        type=positive_int,
        default=defaults.doublings,
        help="The number of sizes, each twice the previous, "
             "default %(default)s."
    )
    parser.add_argument(
        "-r", "--reps",
        type=positive_int,
        default=defaults.reps,
        help="The number of timed repetitions, default %(default)s."
    )
    parser.add_argument(
        "-p", "--policies",
        type=_policy,
        nargs="+",
        default=list(ALL_POLICIES),
        metavar="BALANCE-COMPRESSION",
        help="The policies to benchmark, for example 'size-halving', "
             "default all of; "
             + ", ".join(policy.label for policy in ALL_POLICIES) + "."
    )
    parser.add_argument(
        "-s", "--seed",
        type=optional_int,
        default=None,
        help="Seed of the random generator, default seeded from the OS."
    )
    parser.add_argument(
        "--progress",
        help="Show a progress bar on stderr.",
        **bool_options()
    )
    parser.add_argument(
        "--log-level",
        type=log_level,
        default=logging.WARNING,
        help="The logging level, default WARNING."
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the benchmark driver."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr
    )

    config = BenchmarkConfig(
        initial_n=args.initial_n,
        doublings=args.doublings,
        reps=args.reps,
        policies=tuple(args.policies),
        seed=args.seed
    )
    progress_bar = tqdm.tqdm(
        total=config.doublings * len(config.policies),
        desc="Benchmarks",
        leave=False,
        disable=not args.progress
    )
    with progress_bar:
        for n, results in benchmark_policies(config):
            tqdm.tqdm.write(format_header(n), file=sys.stdout)
            for result in results:
                tqdm.tqdm.write(format_result(result), file=sys.stdout)
            progress_bar.update(len(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())

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

"""
Module containing the random union workload and the benchmarks comparing the
policies of the disjoint-set.
"""

import dataclasses
import logging
from numbers import Integral
from typing import Final, Iterator, NamedTuple

import numpy as np

from quickunion.benchmarking.timer import BenchmarkTimer
from quickunion.datastructures.disjointset import (ALL_POLICIES, DisjointSet,
                                                   UnionFindPolicy)

__copyright__ = "Copyright (C) 2024 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "perform_random_unions",
    "PolicyResult",
    "BenchmarkConfig",
    "benchmark_policy",
    "benchmark_policies",
    "format_header",
    "format_result"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


_LOGGER: Final = logging.getLogger("UnionFindBenchmark")

# Number of site pairs drawn from the generator at once.
_DRAW_BATCH: Final[int] = 4096


def perform_random_unions(
    n: int,
    policy: UnionFindPolicy,
    seed: int | None = None,
    rng: np.random.Generator | None = None
) -> DisjointSet:
    """
    Drive a new disjoint-set of `n` sites down to a single component with
    random unions.

    Repeatedly draws two sites uniformly and independently from `[0, n)`, and
    unions them if they are not connected, until only one component remains.

    Parameters
    ----------
    `n: int` - The number of sites.

    `policy: UnionFindPolicy` - The policy of the disjoint-set.

    `seed: int | None = None` - Seed for a new random generator, if not given
    the generator is seeded from the operating system.

    `rng: np.random.Generator | None = None` - The random generator to draw
    sites from, overrides `seed` if given.

    Returns
    -------
    `DisjointSet` - The disjoint-set, which has one component if `n > 0`.

    Raises
    ------
    `ValueError` - If `n` is negative.
    """
    dset = DisjointSet(n, policy)
    if rng is None:
        rng = np.random.default_rng(seed)
    connected = dset.connected
    union = dset.union
    component_count = dset.component_count
    while component_count() > 1:
        pairs: list[list[int]] = rng.integers(
            0, n, size=(_DRAW_BATCH, 2)).tolist()
        for first, second in pairs:
            if not connected(first, second):
                union(first, second)
                if component_count() == 1:
                    break
    return dset


class PolicyResult(NamedTuple):
    """
    The result of benchmarking a policy on a number of sites.

    Items
    -----
    `label: str` - The label of the policy.

    `n: int` - The number of sites.

    `reps: int` - The number of timed repetitions.

    `mean: float` - The mean time of a repetition in milliseconds.
    """

    label: str
    n: int
    reps: int
    mean: float


def benchmark_policy(
    n: int,
    policy: UnionFindPolicy,
    reps: int,
    seed: int | None = None
) -> PolicyResult:
    """
    Measure the mean time, in milliseconds, of driving a disjoint-set of `n`
    sites with the given policy to a single component.

    If a seed is given, every repetition (warm-up repetitions included) draws
    from a single generator created from it.
    """
    rng = np.random.default_rng(seed) if seed is not None else None

    def _workload(_: None) -> None:
        perform_random_unions(n, policy, rng=rng)

    timer: BenchmarkTimer[None] = BenchmarkTimer(
        policy.description,
        run=_workload
    )
    mean = timer.run_from_supplier(lambda: None, reps)
    _LOGGER.debug("Policy %s with n=%s: %s ms", policy.label, n, mean)
    return PolicyResult(policy.label, n, reps, mean)


def _check_positive(name: str, value: int) -> None:
    if not isinstance(value, Integral) or isinstance(value, bool) \
            or value < 1:
        raise ValueError(
            f"{name} must be a positive integer. "
            f"Got; {value!r} of {type(value)!r} instead."
        )


@dataclasses.dataclass(frozen=True)
class BenchmarkConfig:
    """
    Configuration of the disjoint-set benchmarks.

    Fields
    ------
    `initial_n: int = 100000` - The smallest number of sites.

    `doublings: int = 5` - The number of sizes benchmarked, each twice the
    previous.

    `reps: int = 50` - The number of timed repetitions per size and policy.

    `policies: tuple[UnionFindPolicy, ...] = ALL_POLICIES` - The policies
    to benchmark.

    `seed: int | None = None` - Optional seed for reproducible workloads.
    """

    initial_n: int = 100000
    doublings: int = 5
    reps: int = 50
    policies: tuple[UnionFindPolicy, ...] = ALL_POLICIES
    seed: int | None = None

    def __post_init__(self) -> None:
        _check_positive("Initial number of sites", self.initial_n)
        _check_positive("Number of doublings", self.doublings)
        _check_positive("Number of repetitions", self.reps)
        if not self.policies:
            raise ValueError("At least one policy must be benchmarked.")
        object.__setattr__(self, "policies", tuple(self.policies))

    def sizes(self) -> list[int]:
        """Get the numbers of sites to benchmark, in increasing order."""
        return [self.initial_n * (2 ** i) for i in range(self.doublings)]


def benchmark_policies(
    config: BenchmarkConfig
) -> Iterator[tuple[int, list[PolicyResult]]]:
    """
    Benchmark every configured policy on every configured size.

    Yields the number of sites and the results of all policies for it, after
    all policies for that size have been benchmarked.
    """
    for n in config.sizes():
        _LOGGER.info("Benchmarking %s policies with n=%s",
                     len(config.policies), n)
        yield n, [
            benchmark_policy(n, policy, config.reps, config.seed)
            for policy in config.policies
        ]


def format_header(n: int) -> str:
    """Get the header line printed before the results for `n` sites."""
    return f"------------- n = {n} --------------------"


def format_result(result: PolicyResult) -> str:
    """Get the line reporting the result of a policy."""
    return (f"{result.label} n= {result.n} {result.reps} reps: "
            f"{result.mean} millisecs")

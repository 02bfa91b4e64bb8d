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
Module containing a simple benchmark timer for measuring the running time of
algorithms.

A benchmark run has three phases for every trial:
- the pre-function, which prepares the input to the timed function,
- the timed function itself, assumed to mutate its input,
- the post-function, which cleans up or checks the result.

The clock only runs during the timed function.
"""

import logging
from numbers import Integral
import time
from typing import Callable, Final, Generic, NamedTuple, TypeVar, final, overload

import numpy as np

__copyright__ = "Copyright (C) 2024 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "get_warmup_runs",
    "TimingStats",
    "Timer",
    "BenchmarkTimer"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


IT = TypeVar("IT")

_MILLISECONDS_PER_SECOND: Final[float] = 1000.0


def get_warmup_runs(runs: int) -> int:
    """
    Get the number of warm-up runs performed before `runs` timed runs.

    This is a tenth of the runs, but at least two and at most ten.
    """
    return max(2, min(10, runs // 10))


def _check_runs(runs: int) -> None:
    """Raise a `ValueError` if the number of runs is not positive."""
    if not isinstance(runs, Integral) or isinstance(runs, bool) or runs < 1:
        raise ValueError(
            "Number of runs must be a positive integer. "
            f"Got; {runs!r} of {type(runs)!r} instead."
        )


class TimingStats(NamedTuple):
    """
    Summary statistics of the laps of a benchmark run, all in milliseconds.

    Items
    -----
    `runs: int` - The number of timed runs.

    `mean: float` - The arithmetic mean lap time.

    `median: float` - The median lap time.

    `stdev: float` - The population standard deviation of the lap times.

    `minimum: float` - The fastest lap time.

    `maximum: float` - The slowest lap time.
    """

    runs: int
    mean: float
    median: float
    stdev: float
    minimum: float
    maximum: float

    @classmethod
    def from_laps(cls, laps: list[float]) -> "TimingStats":
        """Summarise a non-empty list of lap times."""
        laps_ = np.asarray(laps, dtype=np.float64)
        return cls(
            runs=len(laps),
            mean=float(np.mean(laps_)),
            median=float(np.median(laps_)),
            stdev=float(np.std(laps_)),
            minimum=float(np.min(laps_)),
            maximum=float(np.max(laps_))
        )

    def __str__(self) -> str:
        """Return a string representation of the timing statistics."""
        return (
            f"TimingStats [runs={self.runs}, mean={self.mean:.3f}ms, "
            f"median={self.median:.3f}ms, stdev={self.stdev:.3f}ms, "
            f"min={self.minimum:.3f}ms, max={self.maximum:.3f}ms]"
        )


@final
class Timer:
    """
    A stop-watch which repeatedly times a function.

    Uses the monotonic high-resolution `time.perf_counter` clock.
    """

    __slots__ = {
        "__clock": "The clock function returning time in seconds."
    }

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter
    ) -> None:
        """
        Create a new timer.

        `clock: Callable[[], float] = time.perf_counter` - A monotonic clock
        returning fractional seconds.
        """
        self.__clock: Callable[[], float] = clock

    def repeat(
        self,
        runs: int,
        supplier: Callable[[], IT],
        function: Callable[[IT], object],
        pre: Callable[[IT], IT] | None = None,
        post: Callable[[IT], object] | None = None
    ) -> list[float]:
        """
        Time the function the given number of times.

        For each run; get a value from the supplier, pass it through the
        pre-function (if given) with the clock stopped, time the function on
        the result, then pass the same value to the post-function (if given)
        with the clock stopped.

        Returns
        -------
        `list[float]` - The time taken by each run of the function in
        milliseconds.
        """
        clock = self.__clock
        laps: list[float] = []
        for _ in range(runs):
            value = supplier()
            if pre is not None:
                value = pre(value)
            start_time = clock()
            function(value)
            stop_time = clock()
            laps.append((stop_time - start_time) * _MILLISECONDS_PER_SECOND)
            if post is not None:
                post(value)
        return laps


@final
class BenchmarkTimer(Generic[IT]):
    """
    A benchmark timer, which reports the mean running time of a function over
    many runs, after a number of untimed warm-up runs.

    The timer is configured with up to three functions:
    - `pre`: a function of `T -> T` run before every run of the timed
      function, with the clock stopped, whose result is passed to it,
    - `run`: the timed function of `T -> None`,
    - `post`: a function of `T -> None` run after every timed run, with the
      clock stopped, it is not run during warm-up.

    The timed function usually mutates its input, therefore if the same input
    is used for every run, the pre-function should copy or reset it.

    Example Usage
    -------------
    ```
    from quickunion.benchmarking.timer import BenchmarkTimer

    >>> timer = BenchmarkTimer(
    ...     "Sort a list",
    ...     run=lambda xs: xs.sort(),
    ...     pre=lambda xs: list(xs)
    ... )
    >>> timer.run([3, 1, 2] * 1000, 50)
    0.0312...
    ```
    """

    __BENCHMARK_LOGGER = logging.getLogger("BenchmarkTimer")

    __slots__ = {
        "__description": "The description of the benchmark.",
        "__pre": "The pre-function, or None.",
        "__run": "The timed function.",
        "__post": "The post-function, or None.",
        "__timer": "The timer used to time the runs."
    }

    @overload
    def __init__(
        self,
        description: str,
        run: Callable[[IT], object]
    ) -> None:
        """Create a benchmark timer with only the timed function."""
        ...

    @overload
    def __init__(
        self,
        description: str,
        run: Callable[[IT], object], *,
        post: Callable[[IT], object]
    ) -> None:
        """Create a benchmark timer with a timed function and post-function."""
        ...

    @overload
    def __init__(
        self,
        description: str,
        run: Callable[[IT], object], *,
        pre: Callable[[IT], IT] | None,
        post: Callable[[IT], object] | None = None
    ) -> None:
        """Create a benchmark timer with all three functions."""
        ...

    def __init__(
        self,
        description: str,
        run: Callable[[IT], object], *,
        pre: Callable[[IT], IT] | None = None,
        post: Callable[[IT], object] | None = None,
        timer: Timer | None = None
    ) -> None:
        """
        Create a new benchmark timer.

        Parameters
        ----------
        `description: str` - The description of the benchmark.

        `run: Callable[[T], object]` - The function whose running time is
        measured, its return value is ignored.

        `pre: Callable[[T], T] | None = None` - Function run before every run
        of the timed function with the clock stopped, its result is passed to
        the timed function.

        `post: Callable[[T], object] | None = None` - Function run after every
        timed run with the clock stopped, it is passed the same value as the
        timed function.

        `timer: Timer | None = None` - The timer used to time the runs, a
        default timer using `time.perf_counter` is created if not given.
        """
        if not callable(run):
            raise ValueError(
                f"The timed function must be callable. Got; {run!r}."
            )
        self.__description: str = description
        self.__pre: Callable[[IT], IT] | None = pre
        self.__run: Callable[[IT], object] = run
        self.__post: Callable[[IT], object] | None = post
        self.__timer: Timer = Timer() if timer is None else timer

    def __repr__(self) -> str:
        """Return a string representation of the benchmark timer."""
        return (f"{self.__class__.__name__}({self.__description!r}, "
                f"pre={self.__pre!r}, run={self.__run!r}, "
                f"post={self.__post!r})")

    @property
    def description(self) -> str:
        """Get the description of the benchmark."""
        return self.__description

    @property
    def pre(self) -> Callable[[IT], IT] | None:
        """Get the pre-function, or None if not given."""
        return self.__pre

    @property
    def run_function(self) -> Callable[[IT], object]:
        """Get the timed function."""
        return self.__run

    @property
    def post(self) -> Callable[[IT], object] | None:
        """Get the post-function, or None if not given."""
        return self.__post

    def measure_from_supplier(
        self,
        supplier: Callable[[], IT],
        runs: int
    ) -> TimingStats:
        """
        Time the timed function `runs` times, on values from the supplier,
        and return statistics of the lap times.

        Raises
        ------
        `ValueError` - If `runs` is not a positive integer.

        Any exception raised by the supplier or by the pre, timed, or post
        functions is propagated unchanged.
        """
        _check_runs(runs)
        warmup_runs = get_warmup_runs(runs)
        self.__BENCHMARK_LOGGER.info(
            "Begin run: %s with %s runs (%s warm-up runs)",
            self.__description, runs, warmup_runs
        )
        self.__timer.repeat(
            warmup_runs, supplier, self.__run, self.__pre, None)
        laps = self.__timer.repeat(
            runs, supplier, self.__run, self.__pre, self.__post)
        stats = TimingStats.from_laps(laps)
        self.__BENCHMARK_LOGGER.debug(
            "End run: %s, %s", self.__description, stats)
        return stats

    def measure(self, value: IT, runs: int) -> TimingStats:
        """Time the timed function `runs` times on the given value."""
        return self.measure_from_supplier(lambda: value, runs)

    def run_from_supplier(
        self,
        supplier: Callable[[], IT],
        runs: int
    ) -> float:
        """
        Time the timed function `runs` times, on values from the supplier,
        and return the mean running time in milliseconds.

        Parameters
        ----------
        `supplier: Callable[[], T]` - Supplies the input of every run, it is
        called with the clock stopped.

        `runs: int` - The number of timed runs, preceded by
        `get_warmup_runs(runs)` untimed warm-up runs.

        Returns
        -------
        `float` - The mean number of milliseconds taken by the timed function.

        Raises
        ------
        `ValueError` - If `runs` is not a positive integer.
        """
        return self.measure_from_supplier(supplier, runs).mean

    def run(self, value: IT, runs: int) -> float:
        """
        Time the timed function `runs` times on the given value, and return
        the mean running time in milliseconds.

        The same value is supplied to every run, so a timed function that
        mutates its input needs a pre-function that copies or resets it.
        """
        return self.run_from_supplier(lambda: value, runs)


import math
import time
import unittest

from quickunion.benchmarking.timer import (BenchmarkTimer, Timer, TimingStats,
                                           get_warmup_runs)


class _FakeClock:
    """A clock which only advances when told to, in seconds."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, milliseconds: float) -> None:
        self.now += milliseconds / 1000.0


class TestWarmupRuns(unittest.TestCase):
    def test_bounds(self):
        self.assertEqual(get_warmup_runs(1), 2)
        self.assertEqual(get_warmup_runs(10), 2)
        self.assertEqual(get_warmup_runs(29), 2)
        self.assertEqual(get_warmup_runs(30), 3)
        self.assertEqual(get_warmup_runs(50), 5)
        self.assertEqual(get_warmup_runs(100), 10)
        self.assertEqual(get_warmup_runs(10000), 10)

    def test_formula(self):
        for runs in range(1, 300):
            self.assertEqual(get_warmup_runs(runs),
                             max(2, min(10, runs // 10)))


class TestTimer(unittest.TestCase):
    def test_repeat_laps(self):
        clock = _FakeClock()
        durations = iter([1.0, 2.0, 4.0])
        laps = Timer(clock).repeat(
            3, lambda: None, lambda _: clock.advance(next(durations)))
        self.assertEqual(len(laps), 3)
        for lap, expected in zip(laps, [1.0, 2.0, 4.0]):
            self.assertAlmostEqual(lap, expected)

    def test_repeat_passes_pre_result(self):
        seen: list[int] = []
        Timer().repeat(2, lambda: 1, seen.append, pre=lambda x: x + 1,
                       post=lambda x: seen.append(-x))
        self.assertListEqual(seen, [2, -2, 2, -2])


class TestTimingStats(unittest.TestCase):
    def test_from_laps(self):
        stats = TimingStats.from_laps([1.0, 2.0, 3.0])
        self.assertEqual(stats.runs, 3)
        self.assertAlmostEqual(stats.mean, 2.0)
        self.assertAlmostEqual(stats.median, 2.0)
        self.assertAlmostEqual(stats.stdev, math.sqrt(2.0 / 3.0))
        self.assertAlmostEqual(stats.minimum, 1.0)
        self.assertAlmostEqual(stats.maximum, 3.0)
        self.assertIn("mean=2.000ms", str(stats))


class TestBenchmarkTimer(unittest.TestCase):
    def test_counter(self):
        counter = [0]

        def increment(cell: list[int]) -> None:
            cell[0] += 1

        timer: BenchmarkTimer[list[int]] = BenchmarkTimer(
            "Increment a counter", increment)
        mean = timer.run_from_supplier(lambda: counter, 50)
        self.assertEqual(counter[0], 50 + 5)
        self.assertTrue(math.isfinite(mean))
        self.assertGreaterEqual(mean, 0.0)

    def test_counter_with_many_runs(self):
        counter = [0]
        timer: BenchmarkTimer[list[int]] = BenchmarkTimer(
            "Increment a counter", lambda cell: cell.__setitem__(0, cell[0] + 1))
        timer.run(counter, 200)
        self.assertEqual(counter[0], 200 + 10)

    def test_phases(self):
        events: list[str] = []

        def supplier() -> int:
            events.append("supply")
            return 0

        def pre(value: int) -> int:
            events.append("pre")
            return value

        timer: BenchmarkTimer[int] = BenchmarkTimer(
            "Phases",
            run=lambda _: events.append("run"),
            pre=pre,
            post=lambda _: events.append("post")
        )
        timer.run_from_supplier(supplier, 3)
        warmup = ["supply", "pre", "run"] * 2
        timed = ["supply", "pre", "run", "post"] * 3
        self.assertListEqual(events, warmup + timed)

    def test_only_run_is_timed(self):
        clock = _FakeClock()

        def slow_supplier() -> None:
            clock.advance(100.0)

        def slow_pre(value: None) -> None:
            clock.advance(100.0)
            return value

        timer: BenchmarkTimer[None] = BenchmarkTimer(
            "Fake clock",
            run=lambda _: clock.advance(5.0),
            pre=slow_pre,
            post=lambda _: clock.advance(100.0),
            timer=Timer(clock)
        )
        self.assertAlmostEqual(timer.run_from_supplier(slow_supplier, 20), 5.0)

    def test_measure_excludes_warmup(self):
        clock = _FakeClock()
        durations = iter([50.0, 50.0, 1.0, 2.0, 3.0])
        timer: BenchmarkTimer[None] = BenchmarkTimer(
            "Fake clock",
            run=lambda _: clock.advance(next(durations)),
            timer=Timer(clock)
        )
        stats = timer.measure(None, 3)
        self.assertEqual(stats.runs, 3)
        self.assertAlmostEqual(stats.mean, 2.0)
        self.assertAlmostEqual(stats.minimum, 1.0)
        self.assertAlmostEqual(stats.maximum, 3.0)

    def test_sleep(self):
        timer: BenchmarkTimer[None] = BenchmarkTimer(
            "Sleep", lambda _: time.sleep(0.02))
        mean = timer.run(None, 5)
        self.assertGreaterEqual(mean, 19.0)
        self.assertLess(mean, 200.0)

    def test_pre_protects_seed(self):
        seed = [3, 1, 2]
        checked: list[bool] = []
        timer: BenchmarkTimer[list[int]] = BenchmarkTimer(
            "Sort",
            run=lambda xs: xs.sort(),
            pre=list,
            post=lambda xs: checked.append(xs == sorted(xs))
        )
        timer.run(seed, 10)
        self.assertListEqual(seed, [3, 1, 2])
        self.assertListEqual(checked, [True] * 10)

    def test_properties(self):
        def run(_: None) -> None:
            pass

        timer: BenchmarkTimer[None] = BenchmarkTimer("Nothing", run)
        self.assertEqual(timer.description, "Nothing")
        self.assertIs(timer.run_function, run)
        self.assertIsNone(timer.pre)
        self.assertIsNone(timer.post)

    def test_invalid_runs(self):
        timer: BenchmarkTimer[None] = BenchmarkTimer("Nothing", lambda _: None)
        for runs in (0, -1, 1.5, True):
            with self.assertRaises(ValueError):
                timer.run(None, runs)  # type: ignore

    def test_not_callable(self):
        with self.assertRaises(ValueError):
            BenchmarkTimer("Nothing", None)  # type: ignore

    def test_warmup_failure_propagates(self):
        posts: list[None] = []

        def fail(_: None) -> None:
            raise RuntimeError("failed")

        timer: BenchmarkTimer[None] = BenchmarkTimer(
            "Fail", fail, post=posts.append)
        with self.assertRaisesRegex(RuntimeError, "failed"):
            timer.run(None, 10)
        self.assertListEqual(posts, [])

    def test_supplier_failure_propagates(self):
        def supplier() -> None:
            raise KeyError("missing")

        timer: BenchmarkTimer[None] = BenchmarkTimer("Nothing", lambda _: None)
        with self.assertRaises(KeyError):
            timer.run_from_supplier(supplier, 3)

    def test_post_failure_propagates(self):
        def post(_: None) -> None:
            raise AssertionError("bad result")

        timer: BenchmarkTimer[None] = BenchmarkTimer(
            "Nothing", lambda _: None, post=post)
        with self.assertRaises(AssertionError):
            timer.run(None, 3)

    def test_logs_begin_run(self):
        timer: BenchmarkTimer[None] = BenchmarkTimer("Logged", lambda _: None)
        with self.assertLogs("BenchmarkTimer", level="INFO") as logs:
            timer.run(None, 4)
        self.assertIn("Begin run: Logged with 4 runs", logs.output[0])


if __name__ == "__main__":
    unittest.main()

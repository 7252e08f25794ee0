"""
Wall-clock timing for inference calls.

The centroid loop costs one rule-base evaluation per probe point, about
(max_val - min_val) / h of them, so wide output domains get slow. Wrap a
call in ``CodeProfiler`` to log its duration and flag it when it runs over
budget.
"""
import logging
import time

profiler_log = logging.getLogger("profiler")


class CodeProfiler:
    """
    Times the enclosed block and logs the result on exit.

    Example:
        with CodeProfiler("defuzzify tip", budget_ms=50.0) as prof:
            controller.compute(inputs)
        print(prof.elapsed_ms)

    Attributes:
        name (str): Label used in the log lines.
        budget_ms (float): Duration above which a warning is logged.
        elapsed_ms (Optional[float]): Measured duration, None until the block exits.
    """

    def __init__(self, name="", budget_ms=100.0):
        self.name = name
        self.budget_ms = budget_ms
        self.elapsed_ms = None
        self._t0 = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
        profiler_log.info("'%s' execution time: %.3f ms", self.name, self.elapsed_ms)
        if self.elapsed_ms > self.budget_ms:
            profiler_log.warning(
                "'%s' took %.3f ms, exceeded its %.1f ms budget.",
                self.name,
                self.elapsed_ms,
                self.budget_ms,
            )
        return False

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass

STATUS_CHECK = "status is 200"


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    detail: str = ""


def check_status(status_code: int, error: BaseException | None = None) -> CheckResult:
    """Evaluate the per-iteration status check. Status 0 means the request never got a response."""
    if status_code == 200:
        return CheckResult(STATUS_CHECK, True)
    if not status_code:
        detail = "no response (transport error)"
        if error is not None:
            detail = f"{detail}: {error!r}"
        return CheckResult(STATUS_CHECK, False, detail)
    return CheckResult(STATUS_CHECK, False, f"status={status_code}")


class CheckTally:
    """Pass/fail counters per check name for the lifetime of one run."""

    def __init__(self):
        self._lock = threading.Lock()
        self._passes = defaultdict(int)
        self._fails = defaultdict(int)

    def record(self, result: CheckResult) -> None:
        with self._lock:
            if result.passed:
                self._passes[result.name] += 1
            else:
                self._fails[result.name] += 1

    def total(self, name: str) -> int:
        with self._lock:
            return self._passes.get(name, 0) + self._fails.get(name, 0)

    def pass_rate(self, name: str) -> float:
        with self._lock:
            passes, fails = self._passes.get(name, 0), self._fails.get(name, 0)
        if passes + fails == 0:
            return 0.0
        return passes / (passes + fails)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(set(self._passes) | set(self._fails))

    def summary(self) -> list[str]:
        lines = []
        for name in self.names():
            with self._lock:
                passes, fails = self._passes.get(name, 0), self._fails.get(name, 0)
            total = passes + fails
            lines.append(f"{name}: {passes / total:.2%} ({passes}/{total})")
        return lines

    def reset(self) -> None:
        with self._lock:
            self._passes.clear()
            self._fails.clear()


class ResponseTimes:
    """Raw response times (ms) for the run, kept unrounded for threshold checks."""

    def __init__(self):
        self._lock = threading.Lock()
        self._samples = []

    def on_request(self, response_time, **kwargs):
        self.record(response_time)

    def record(self, response_time: float) -> None:
        with self._lock:
            self._samples.append(float(response_time))

    def __len__(self):
        with self._lock:
            return len(self._samples)

    def percentile(self, fraction: float) -> float:
        """Linearly interpolated percentile, the way k6 computes p(N)."""
        with self._lock:
            samples = sorted(self._samples)
        if not samples:
            raise ValueError("no response times recorded")
        rank = (len(samples) - 1) * fraction
        lower = int(rank)
        upper = min(lower + 1, len(samples) - 1)
        return samples[lower] + (samples[upper] - samples[lower]) * (rank - lower)

    def reset(self) -> None:
        with self._lock:
            self._samples.clear()

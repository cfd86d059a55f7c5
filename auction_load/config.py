from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from locust.util.timespan import parse_timespan

from .errors import ConfigurationError, ThresholdBreach
from .request import AuctionListQuery

Timespan = Union[int, float, str]

TARGET_HOST = "http://localhost:8085"


@dataclass(frozen=True)
class LatencyThreshold:
    """At ``percentile``, request duration must stay below ``max_duration_ms``."""

    percentile: float
    max_duration_ms: float

    def __post_init__(self):
        if not 0 < self.percentile <= 100:
            raise ConfigurationError(f"percentile must be in (0, 100], got {self.percentile}")
        if self.max_duration_ms <= 0:
            raise ConfigurationError(f"max_duration_ms must be > 0, got {self.max_duration_ms}")

    @property
    def fraction(self) -> float:
        return self.percentile / 100.0

    @property
    def expression(self) -> str:
        return f"p({self.percentile:g})<{self.max_duration_ms:g}"

    def is_breached(self, observed_ms: float) -> bool:
        return observed_ms >= self.max_duration_ms

    def enforce(self, observed_ms: float) -> None:
        if self.is_breached(observed_ms):
            raise ThresholdBreach(self.expression, observed_ms)


@dataclass(frozen=True)
class ScenarioConfig:
    """Parameters the host runs the scenario with. Read-only once built."""

    concurrency: int
    duration: Timespan
    latency_threshold: LatencyThreshold
    pacing_seconds: float = 1.0
    spawn_rate: float | None = None
    host: str = TARGET_HOST
    query: AuctionListQuery = field(default_factory=AuctionListQuery)
    duration_seconds: float = field(init=False)

    def __post_init__(self):
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int):
            raise ConfigurationError(f"concurrency must be an integer, got {self.concurrency!r}")
        if self.concurrency < 1:
            raise ConfigurationError(f"concurrency must be >= 1, got {self.concurrency}")
        if not isinstance(self.latency_threshold, LatencyThreshold):
            raise ConfigurationError("latency_threshold must be a LatencyThreshold")
        if not isinstance(self.query, AuctionListQuery):
            raise ConfigurationError("query must be an AuctionListQuery")
        if self.pacing_seconds < 0:
            raise ConfigurationError(f"pacing_seconds must be >= 0, got {self.pacing_seconds}")
        if self.spawn_rate is not None and self.spawn_rate <= 0:
            raise ConfigurationError(f"spawn_rate must be > 0, got {self.spawn_rate}")
        if not self.host.startswith(("http://", "https://")):
            raise ConfigurationError(f"host must be an http(s) URL, got {self.host!r}")

        seconds = _to_seconds(self.duration)
        if seconds <= 0:
            raise ConfigurationError(f"duration must be > 0, got {self.duration!r}")
        # frozen dataclass: derived fields go through object.__setattr__
        object.__setattr__(self, "duration_seconds", seconds)

    @property
    def effective_spawn_rate(self) -> float:
        # all users start at once unless told otherwise, matching a fixed-VU run
        return self.spawn_rate if self.spawn_rate is not None else float(self.concurrency)

    def run_time(self) -> str:
        return f"{max(1, int(self.duration_seconds))}s"

    def locust_arguments(self) -> list[str]:
        return [
            "--headless",
            "--host", self.host,
            "--users", str(self.concurrency),
            "--spawn-rate", f"{self.effective_spawn_rate:g}",
            "--run-time", self.run_time(),
        ]


def _to_seconds(value: Timespan) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"invalid duration {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(parse_timespan(value))
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"invalid duration {value!r}: {e}") from e


SCENARIO = ScenarioConfig(
    concurrency=10,
    duration="30s",
    latency_threshold=LatencyThreshold(percentile=95, max_duration_ms=5000),
    pacing_seconds=1.0,
)

"""
Configuration for the distinct-value search.

All options have defaults matching the 360-position hue wheel with a two-scalar
(saturation, lightness) context. Values are validated when the config is built.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from advs.types import Interval, SamplingContext

STRATEGIES = ("interval", "exhaustive")


@dataclass(frozen=True)
class SearchConfig:
    """Recognized options.

    Args:
        domain_size: Number of domain points N; points are ``0..N-1``.
        debounce_delay_ms: Quiet period before a context change opens a generation.
        context_bounds: (min, max) every context scalar is clamped into.
        context_size: Number of scalars in a sampling context.
        strategy: ``"interval"`` for the recursive search, ``"exhaustive"`` to
            sample every point.
        verbose: Whether to print progress messages.
    """

    domain_size: int = 360
    debounce_delay_ms: float = 200.0
    context_bounds: Tuple[float, float] = (0.0, 100.0)
    context_size: int = 2
    strategy: str = "interval"
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.domain_size < 2:
            raise ValueError("domain_size must be at least 2 to allow a root split")
        if self.debounce_delay_ms < 0:
            raise ValueError("debounce_delay_ms must be non-negative")
        low, high = self.context_bounds
        if not low <= high:
            raise ValueError(
                f"context_bounds must satisfy min <= max, got {self.context_bounds}"
            )
        if self.context_size < 1:
            raise ValueError("context_size must be at least 1")
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy {self.strategy!r}; choose from {', '.join(STRATEGIES)}"
            )

    @property
    def debounce_delay_s(self) -> float:
        return self.debounce_delay_ms / 1000.0

    def clamp(self, value: float) -> float:
        low, high = self.context_bounds
        return float(np.clip(float(value), low, high))

    def make_context(self, *values: float) -> SamplingContext:
        """Clamp ``values`` into bounds and build a context from them."""
        if len(values) != self.context_size:
            raise ValueError(
                f"Expected {self.context_size} context values, got {len(values)}"
            )
        return SamplingContext(tuple(self.clamp(v) for v in values))

    def random_context(
        self, rng: Optional[np.random.Generator] = None
    ) -> SamplingContext:
        """Pick a uniform random integer within bounds for every scalar.

        Bounds that contain no integer fall back to a uniform float.
        """
        rng = rng or np.random.default_rng()
        low, high = self.context_bounds
        int_low, int_high = int(np.ceil(low)), int(np.floor(high))
        if int_low <= int_high:
            picks = rng.integers(int_low, int_high + 1, size=self.context_size)
        else:
            picks = rng.uniform(low, high, size=self.context_size)
        return self.make_context(*(float(v) for v in picks))

    def root_intervals(self) -> Tuple[Interval, Interval]:
        """The two halves searched independently.

        Points 0 and N-1 are neighbours on the cyclic domain, so they are never
        used as the two ends of a single root interval.
        """
        last = self.domain_size - 1
        mid = last // 2
        return Interval(0, mid), Interval(mid + 1, last)

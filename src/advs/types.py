"""
Type definitions for ADVS library.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from advs.cancellation import CancellationToken


DomainPoint = int


# -----------------------------
# Public data structures
# -----------------------------


@dataclass(frozen=True)
class SamplingContext:
    """External parameters the sampler depends on besides the domain point.

    Values are expected to be clamped already (see ``SearchConfig.make_context``).
    Two contexts are the same when their values are equal.
    """

    values: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]


@dataclass(frozen=True)
class Sample:
    """Result of sampling one domain point under one context.

    ``identity`` decides whether two samples are the same named value.
    ``payload`` is forwarded untouched and takes no part in equality.
    """

    point: DomainPoint
    identity: str
    payload: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Interval:
    """Closed range ``[start, end]`` of domain points."""

    start: DomainPoint
    end: DomainPoint

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Interval requires start <= end: start={self.start} end={self.end}"
            )

    @property
    def width(self) -> int:
        return self.end - self.start

    @property
    def is_adjacent(self) -> bool:
        """True when no interior point exists."""
        return self.width <= 1

    def split(self) -> Tuple["Interval", "Interval"]:
        mid = (self.start + self.end) // 2
        return Interval(self.start, mid), Interval(mid + 1, self.end)


@dataclass
class SearchSummary:
    """Sampling statistics for one generation."""

    total_calls: int
    points_sampled: List[DomainPoint]
    distinct_values: int
    failures: int
    sampled_fraction: float
    max_unsampled_gap: int
    cancelled: bool


@dataclass(frozen=True)
class SearchSnapshot:
    """What a renderer reads: the values found so far and the loading flag."""

    values: List[Sample]
    is_loading: bool
    generation: Optional[int] = None


# -----------------------------
# Errors
# -----------------------------


class SamplerFailure(Exception):
    """The sampler could not produce a sample for one point."""

    def __init__(self, point: DomainPoint, cause: BaseException) -> None:
        super().__init__(f"Sampler failed at point {point}: {cause!r}")
        self.point = point
        self.cause = cause


class Cancelled(Exception):
    """Control signal: the owning generation was superseded."""


Sampler = Callable[
    [DomainPoint, SamplingContext, "CancellationToken"], Awaitable[Sample]
]

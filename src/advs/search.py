"""
Adaptive interval search for distinct values over a cyclic domain.

The search samples both ends of an interval. Equal identities mean the whole
interval is taken to hold one value; different identities split the interval
in half and both halves are searched concurrently. For a domain made of ``k``
same-value runs this needs ``O(k log(N/k))`` sampler calls instead of ``N``.

Values that appear only strictly inside an interval whose two ends agree are
not found; runs are assumed to be contiguous.
"""

import asyncio
from typing import TYPE_CHECKING, List

from advs.types import Cancelled, Interval, Sample, SamplerFailure

if TYPE_CHECKING:
    from advs.generation import Generation


class IntervalSearchEngine:
    """
    Recursive bisection search feeding a generation's aggregator.

    Both engines in this module expose ``run()`` so they can be swapped through
    ``SearchConfig.strategy``.
    """

    def __init__(self, generation: "Generation") -> None:
        self.generation = generation
        self.cache = generation.cache
        self.token = generation.token
        self.verbose = generation.config.verbose

    async def run(self) -> None:
        """Search both root halves of the domain concurrently."""
        left, right = self.generation.config.root_intervals()
        await asyncio.gather(self.search(left), self.search(right))

    async def search(self, interval: Interval) -> None:
        """Search ``interval``; returns once its subtree is done or cancelled."""
        if self.token.cancelled:
            return

        endpoints = await self._fetch_endpoints(interval)
        if endpoints is None or self.token.cancelled:
            return
        start_sample, end_sample = endpoints

        if start_sample.identity == end_sample.identity:
            self.generation.emit(start_sample)
        elif interval.is_adjacent:
            self.generation.emit(start_sample)
            self.generation.emit(end_sample)
        else:
            left, right = interval.split()
            await asyncio.gather(self.search(left), self.search(right))

    async def _fetch_endpoints(self, interval: Interval):
        results = await asyncio.gather(
            self.cache.get(interval.start),
            self.cache.get(interval.end),
            return_exceptions=True,
        )
        abandoned = False
        failed_points = set()
        for result in results:
            if isinstance(result, Cancelled):
                abandoned = True
            elif isinstance(result, SamplerFailure):
                abandoned = True
                # A single-point interval sees the same failure twice
                if result.point not in failed_points:
                    failed_points.add(result.point)
                    self._on_failure(interval, result)
            elif isinstance(result, BaseException):
                raise result
        if abandoned:
            return None
        return results[0], results[1]

    def _on_failure(self, interval: Interval, failure: SamplerFailure) -> None:
        if self.token.cancelled:
            return
        self.generation.record_failure(failure)
        if self.verbose:
            print(
                f"  Sampler failed at point {failure.point}; "
                f"abandoning interval [{interval.start}, {interval.end}]"
            )


class ExhaustiveSearchEngine:
    """
    Baseline that samples every domain point at once.

    Keeps the first sample per identity in point order. Costs ``N`` sampler
    calls but finds values the interval search can miss.

    Not progressive: nothing is emitted until every point has resolved, so the
    lowest point of each identity is known before it reaches the aggregator.
    """

    def __init__(self, generation: "Generation") -> None:
        self.generation = generation
        self.cache = generation.cache
        self.token = generation.token
        self.verbose = generation.config.verbose

    async def run(self) -> None:
        if self.token.cancelled:
            return
        points = range(self.generation.config.domain_size)
        results = await asyncio.gather(
            *(self.cache.get(p) for p in points), return_exceptions=True
        )
        if self.token.cancelled:
            return

        samples: List[Sample] = []
        for result in results:
            if isinstance(result, Cancelled):
                return
            if isinstance(result, SamplerFailure):
                self.generation.record_failure(result)
                if self.verbose:
                    print(f"  Sampler failed at point {result.point}; skipping it")
                continue
            if isinstance(result, BaseException):
                raise result
            samples.append(result)

        for sample in samples:
            self.generation.emit(sample)


ENGINES = {
    "interval": IntervalSearchEngine,
    "exhaustive": ExhaustiveSearchEngine,
}

"""
One epoch of search work for a single settled sampling context.
"""

from typing import Callable, List, Optional

import numpy as np

from advs.aggregator import ResultAggregator
from advs.cache import SampleCache
from advs.cancellation import CancellationToken
from advs.config import SearchConfig
from advs.search import ENGINES
from advs.types import Sample, Sampler, SamplerFailure, SamplingContext, SearchSummary


class Generation:
    """Owns the cache, aggregator and cancellation token of one search.

    Nothing is shared with other generations. After ``cancel()`` the
    generation no longer writes to its cache or aggregator.
    """

    def __init__(
        self,
        number: int,
        context: SamplingContext,
        sampler: Sampler,
        config: SearchConfig,
        on_emit: Optional[Callable[["Generation", Sample], None]] = None,
    ) -> None:
        self.number = number
        self.context = context
        self.config = config
        self.token = CancellationToken()
        self.cache = SampleCache(sampler, context, self.token)
        self.aggregator = ResultAggregator()
        self.failures: List[SamplerFailure] = []
        self.finished = False
        self._on_emit = on_emit
        self.engine = ENGINES[config.strategy](self)

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    async def run(self) -> None:
        """Run the configured search engine to completion or cancellation."""
        try:
            await self.engine.run()
        finally:
            self.finished = True

    def cancel(self) -> bool:
        return self.token.cancel()

    def emit(self, sample: Sample) -> bool:
        """Hand a discovered sample to the aggregator unless cancelled."""
        if self.token.cancelled:
            return False
        added = self.aggregator.add_if_unique(sample)
        if added and self._on_emit is not None:
            self._on_emit(self, sample)
        return added

    def record_failure(self, failure: SamplerFailure) -> None:
        if self.token.cancelled:
            return
        self.failures.append(failure)

    def values(self) -> List[Sample]:
        return self.aggregator.values()

    def summary(self) -> SearchSummary:
        """Sampling statistics, in the spirit of a coverage report."""
        points = np.asarray(self.cache.sampled_points(), dtype=np.int64)
        unique_points = np.unique(points)
        n = self.config.domain_size
        if unique_points.size:
            # Gaps between consecutive sampled points, wrapping around the cycle
            wrapped = np.append(unique_points, unique_points[0] + n)
            max_gap = int(np.max(np.diff(wrapped)) - 1)
        else:
            max_gap = n
        return SearchSummary(
            total_calls=self.cache.total_calls,
            points_sampled=[int(p) for p in unique_points],
            distinct_values=len(self.aggregator),
            failures=len(self.failures),
            sampled_fraction=float(unique_points.size) / n,
            max_unsampled_gap=max_gap,
            cancelled=self.cancelled,
        )

"""
Per-generation sample memoization with in-flight request collapsing.

Every point maps to at most one entry: either a resolved ``Sample`` or the
``asyncio.Task`` running the sampler for it. Concurrent callers asking for the
same point await the same task, so the sampler runs once per point.
"""

import asyncio
from typing import Dict, List

from advs.cancellation import CancellationToken
from advs.types import Cancelled, DomainPoint, Sample, Sampler, SamplerFailure, SamplingContext


class SampleCache:
    """Memoizes ``sampler(point, context, token)`` for one generation.

    Failed points are forgotten so a later ``get`` may retry them. Once the
    token is cancelled the cache stops recording anything and aborts the
    sampler calls still running.
    """

    def __init__(
        self,
        sampler: Sampler,
        context: SamplingContext,
        token: CancellationToken,
    ) -> None:
        self._sampler = sampler
        self._context = context
        self._token = token
        self._resolved: Dict[DomainPoint, Sample] = {}
        self._inflight: Dict[DomainPoint, "asyncio.Task[Sample]"] = {}
        self._called: List[DomainPoint] = []
        self.total_calls: int = 0
        token.add_callback(self._abort_inflight)

    @property
    def context(self) -> SamplingContext:
        return self._context

    async def get(self, point: DomainPoint) -> Sample:
        """Return the sample for ``point``, calling the sampler at most once.

        Raises:
            SamplerFailure: the sampler raised for this point.
            Cancelled: the generation was cancelled before or during the call.
        """
        if self._token.cancelled:
            raise Cancelled(f"point {point}")
        resolved = self._resolved.get(point)
        if resolved is not None:
            return resolved

        task = self._inflight.get(point)
        if task is None:
            task = asyncio.ensure_future(self._fetch(point))
            self._inflight[point] = task

        # Shielded so a caller being cancelled does not abort the shared call
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                raise Cancelled(f"point {point}") from None
            raise

    async def _fetch(self, point: DomainPoint) -> Sample:
        self.total_calls += 1
        self._called.append(point)
        try:
            sample = await self._sampler(point, self._context, self._token)
        except Exception as exc:
            if not self._token.cancelled:
                self._inflight.pop(point, None)
            raise SamplerFailure(point, exc) from exc

        if not self._token.cancelled:
            self._inflight.pop(point, None)
            self._resolved[point] = sample
        return sample

    def _abort_inflight(self) -> None:
        for task in self._inflight.values():
            if not task.done():
                task.cancel()

    def sampled_points(self) -> List[DomainPoint]:
        """Points the sampler was invoked for, ascending."""
        return sorted(self._called)

    def is_cached(self, point: DomainPoint) -> bool:
        return point in self._resolved

    def __len__(self) -> int:
        return len(self._resolved)

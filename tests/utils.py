import asyncio
from collections import Counter
from typing import Callable, Iterable, List, Optional, Sequence

from advs.types import Sample, SamplingContext

Labeler = Callable[[int, SamplingContext], str]

HUE_NAMES = ["Red", "Yellow", "Green", "Cyan", "Blue", "Magenta"]


def make_band_labeler(
    names: Sequence[str] = HUE_NAMES, domain_size: int = 360, offset: int = 30
) -> Labeler:
    """Contiguous equal-width bands on a cyclic domain.

    With the defaults the first band wraps around: "Red" covers 330..359 and
    0..29. Lightness (second context scalar) of 95 or more turns every point
    "White", which gives a uniform domain under a different context.
    """
    width = domain_size // len(names)

    def label(point: int, context: SamplingContext) -> str:
        if len(context) > 1 and context[1] >= 95:
            return "White"
        return names[((point + offset) // width) % len(names)]

    return label


def make_threshold_labeler(threshold: int, below: str = "A", above: str = "B") -> Labeler:
    def label(point: int, context: SamplingContext) -> str:
        return below if point < threshold else above

    return label


def constant_labeler(name: str = "X") -> Labeler:
    def label(point: int, context: SamplingContext) -> str:
        return name

    return label


class StubSampler:
    """Instrumented async sampler for tests.

    Args:
        labeler: Maps (point, context) to an identity.
        delay: Seconds every call sleeps before answering.
        fail_points: Points that raise ``RuntimeError``.
        blocked_contexts: Contexts whose calls wait on ``release`` before answering.
    """

    def __init__(
        self,
        labeler: Labeler,
        delay: float = 0.0,
        fail_points: Iterable[int] = (),
        blocked_contexts: Iterable[SamplingContext] = (),
    ):
        self.labeler = labeler
        self.delay = delay
        self.fail_points = set(fail_points)
        self.blocked_contexts = set(blocked_contexts)
        self.release: Optional[asyncio.Event] = None
        self.calls: Counter = Counter()
        self.contexts: List[SamplingContext] = []
        self.aborted: int = 0

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def __call__(self, point, context, token) -> Sample:
        self.calls[point] += 1
        self.contexts.append(context)
        try:
            if context in self.blocked_contexts:
                if self.release is None:
                    self.release = asyncio.Event()
                await self.release.wait()
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.aborted += 1
            raise
        if point in self.fail_points:
            raise RuntimeError(f"stub failure at {point}")
        return Sample(
            point=point,
            identity=self.labeler(point, context),
            payload={"point": point, "context": context.values},
        )

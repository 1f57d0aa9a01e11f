"""
Debounced generation controller: the entry point a renderer talks to.

Context updates are debounced. When the context settles, the active generation
is cancelled and a new one starts searching. The renderer reads ``values`` and
``is_loading`` (or a ``SearchSnapshot``) at any time.
"""

import asyncio
from typing import Callable, List, Optional

from advs.config import SearchConfig
from advs.debounce import Debouncer
from advs.generation import Generation
from advs.types import Sample, Sampler, SamplingContext, SearchSnapshot

Listener = Callable[[SearchSnapshot], None]


class GenerationController:
    """
    Turns a stream of context updates into search generations.

    Only the active generation may change what the renderer sees: values come
    from its aggregator, and a generation clears the loading flag on settle
    only while it is still the active one.
    """

    def __init__(
        self,
        sampler: Sampler,
        config: Optional[SearchConfig] = None,
        listener: Optional[Listener] = None,
    ):
        """
        Args:
            sampler: Async callable ``(point, context, token) -> Sample``.
            config: Search options; defaults to ``SearchConfig()``.
            listener: Optional callable receiving a snapshot whenever the
                visible values or the loading flag change.
        """
        self.sampler = sampler
        self.config = config or SearchConfig()
        self.listener = listener
        self.verbose = self.config.verbose

        self._debouncer = Debouncer(self.config.debounce_delay_s, self._on_settle)
        self._requested: Optional[SamplingContext] = None
        self._active: Optional[Generation] = None
        self._active_task: Optional[asyncio.Task] = None
        self._is_loading = False
        self.generation_count: int = 0

    # -----------------
    # Renderer surface
    # -----------------

    @property
    def values(self) -> List[Sample]:
        if self._active is None:
            return []
        return self._active.values()

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def active_generation(self) -> Optional[Generation]:
        return self._active

    @property
    def requested_context(self) -> Optional[SamplingContext]:
        return self._requested

    def snapshot(self) -> SearchSnapshot:
        number = self._active.number if self._active is not None else None
        return SearchSnapshot(
            values=self.values, is_loading=self._is_loading, generation=number
        )

    # -----------------
    # Context updates
    # -----------------

    def update_context(self, *values: float) -> SamplingContext:
        """Record a new context; a generation opens once updates go quiet."""
        context = self.config.make_context(*values)
        self._requested = context
        self._debouncer.schedule(context)
        return context

    async def wait_until_idle(self) -> None:
        """Wait until no debounce timer is pending and the active search settled."""
        while True:
            await self._debouncer.wait()
            task = self._active_task
            if task is not None and not task.done():
                await asyncio.shield(task)
                continue
            if not self._debouncer.pending:
                return

    async def close(self) -> None:
        """Cancel pending and running work; the controller stays readable."""
        self._debouncer.cancel()
        if self._active is not None and self._active.cancel():
            if self.verbose:
                print(f"Generation {self._active.number}: cancelled on close")
        task = self._active_task
        if task is not None and not task.done():
            await asyncio.gather(task, return_exceptions=True)
        self._set_loading(False)

    async def __aenter__(self) -> "GenerationController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -----------------
    # Generation lifecycle
    # -----------------

    def _on_settle(self, context: SamplingContext) -> None:
        active = self._active
        if active is not None and not active.cancelled and active.context == context:
            # The settled context did not change; keep the current results
            return
        self._open_generation(context)

    def _open_generation(self, context: SamplingContext) -> Generation:
        previous = self._active
        if previous is not None and previous.cancel() and self.verbose:
            print(f"Generation {previous.number}: superseded")

        self.generation_count += 1
        generation = Generation(
            self.generation_count,
            context,
            self.sampler,
            self.config,
            on_emit=self._on_emit,
        )
        self._active = generation
        if self.verbose:
            print(
                f"Generation {generation.number}: searching {self.config.domain_size} "
                f"points with context {context.values}"
            )
        self._set_loading(True, force=True)
        self._active_task = asyncio.ensure_future(self._run_generation(generation))
        return generation

    async def _run_generation(self, generation: Generation) -> None:
        try:
            await generation.run()
        finally:
            if generation is self._active and not generation.cancelled:
                if self.verbose:
                    summary = generation.summary()
                    print(
                        f"Generation {generation.number}: found {summary.distinct_values} "
                        f"values with {summary.total_calls} sampler calls "
                        f"({summary.failures} failed)"
                    )
                self._set_loading(False)

    def _on_emit(self, generation: Generation, sample: Sample) -> None:
        if generation is self._active:
            self._notify()

    def _set_loading(self, loading: bool, force: bool = False) -> None:
        if self._is_loading == loading and not force:
            return
        self._is_loading = loading
        self._notify()

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener(self.snapshot())

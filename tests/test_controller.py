"""
Tests for the debounced generation controller.

Timing-based tests use short debounce delays except where the default delay
is the subject of the test.
"""

import asyncio

from advs import Debouncer, GenerationController, SamplingContext, SearchConfig
from tests.utils import StubSampler, constant_labeler, make_band_labeler, make_threshold_labeler

FAST = SearchConfig(debounce_delay_ms=10)


def test_rapid_updates_open_one_generation():
    sampler = StubSampler(make_band_labeler())
    controller = GenerationController(sampler, SearchConfig())

    async def run():
        for value in (10, 20, 30, 40, 50):
            controller.update_context(value, 50)
            await asyncio.sleep(0.01)
        assert controller.generation_count == 0
        await controller.wait_until_idle()

    asyncio.run(run())
    assert controller.generation_count == 1
    assert controller.active_generation.context == SamplingContext((50.0, 50.0))
    assert set(sampler.contexts) == {SamplingContext((50.0, 50.0))}
    assert not controller.is_loading


def test_debouncer_fires_once_with_last_arguments():
    fired = []
    debouncer = Debouncer(0.02, lambda *args: fired.append(args))

    async def run():
        for i in range(4):
            debouncer.schedule(i, "x")
            await asyncio.sleep(0.005)
        assert fired == []
        assert debouncer.pending
        await debouncer.wait()

    asyncio.run(run())
    assert fired == [(3, "x")]
    assert debouncer.fired == 1
    assert not debouncer.pending


def test_new_context_cancels_running_generation():
    blocked = SamplingContext((50.0, 50.0))
    sampler = StubSampler(make_band_labeler(), blocked_contexts={blocked})
    snapshots = []
    controller = GenerationController(sampler, FAST, listener=snapshots.append)

    async def run():
        controller.update_context(50, 50)
        await asyncio.sleep(0.05)
        first = controller.active_generation
        assert first is not None
        assert controller.is_loading
        assert sampler.total_calls > 0

        controller.update_context(60, 40)
        await controller.wait_until_idle()
        await asyncio.sleep(0.01)
        return first

    first = asyncio.run(run())
    second = controller.active_generation

    assert controller.generation_count == 2
    assert first.cancelled and first.finished
    assert len(first.aggregator) == 0
    assert len(first.cache) == 0
    assert sampler.aborted > 0

    assert second.finished and not second.cancelled
    assert not controller.is_loading
    assert {s.identity for s in controller.values} == {
        "Red", "Yellow", "Green", "Cyan", "Blue", "Magenta"
    }
    # Loading only ever went false for the second generation, at the very end
    idle = [s for s in snapshots if not s.is_loading]
    assert idle == [snapshots[-1]]
    assert idle[0].generation == 2


def test_values_follow_active_generation():
    sampler = StubSampler(make_band_labeler())
    controller = GenerationController(sampler, FAST)

    async def run():
        controller.update_context(50, 50)
        await controller.wait_until_idle()
        assert len(controller.values) == 6

        controller.update_context(50, 99)
        await controller.wait_until_idle()

    asyncio.run(run())
    assert [s.identity for s in controller.values] == ["White"]
    assert controller.generation_count == 2


def test_settling_on_same_context_keeps_generation():
    sampler = StubSampler(constant_labeler())
    controller = GenerationController(sampler, FAST)

    async def run():
        controller.update_context(50, 50)
        await controller.wait_until_idle()
        controller.update_context(70, 70)
        controller.update_context(50, 50)
        await controller.wait_until_idle()

    asyncio.run(run())
    assert controller.generation_count == 1
    assert sampler.total_calls == 4


def test_loading_clears_after_sampler_failure():
    sampler = StubSampler(make_threshold_labeler(180), fail_points={0})
    controller = GenerationController(sampler, FAST)

    async def run():
        controller.update_context(50, 50)
        await controller.wait_until_idle()

    asyncio.run(run())
    assert not controller.is_loading
    assert [s.identity for s in controller.values] == ["B"]
    assert [f.point for f in controller.active_generation.failures] == [0]


def test_snapshots_reach_listener():
    snapshots = []
    sampler = StubSampler(make_threshold_labeler(100), delay=0.001)
    controller = GenerationController(sampler, FAST, listener=snapshots.append)

    async def run():
        controller.update_context(20, 80)
        await controller.wait_until_idle()

    asyncio.run(run())
    assert snapshots[0].is_loading and snapshots[0].values == []
    assert not snapshots[-1].is_loading
    assert [s.identity for s in snapshots[-1].values] == ["A", "B"]
    assert controller.snapshot() == snapshots[-1]


def test_context_values_are_clamped():
    sampler = StubSampler(constant_labeler())
    controller = GenerationController(sampler, FAST)

    async def run():
        context = controller.update_context(-20, 250)
        assert context == SamplingContext((0.0, 100.0))
        await controller.wait_until_idle()

    asyncio.run(run())
    assert controller.requested_context == SamplingContext((0.0, 100.0))
    assert set(sampler.contexts) == {SamplingContext((0.0, 100.0))}


def test_close_cancels_pending_and_running_work():
    blocked = SamplingContext((50.0, 50.0))
    sampler = StubSampler(constant_labeler(), blocked_contexts={blocked})

    async def run():
        async with GenerationController(sampler, FAST) as controller:
            controller.update_context(50, 50)
            await asyncio.sleep(0.05)
            assert controller.is_loading
            controller.update_context(10, 10)
        return controller

    controller = asyncio.run(run())
    assert not controller.is_loading
    assert controller.generation_count == 1
    assert controller.active_generation.cancelled
    assert controller.values == []


def test_verbose_reports_generations(capsys):
    sampler = StubSampler(make_threshold_labeler(4))
    config = SearchConfig(domain_size=8, debounce_delay_ms=10, verbose=True)
    controller = GenerationController(sampler, config)

    async def run():
        controller.update_context(50, 50)
        await controller.wait_until_idle()
        controller.update_context(60, 50)
        await controller.wait_until_idle()

    asyncio.run(run())
    out = capsys.readouterr().out
    assert "Generation 1: searching 8 points" in out
    assert "Generation 1: superseded" in out
    assert "Generation 2: found 2 values with 4 sampler calls" in out

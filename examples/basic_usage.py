"""
Basic usage example for ADVS library.

This example runs the interval search against a synthetic hue-naming sampler
and compares its cost with sampling every point, then drives the debounced
controller through a burst of context changes.
"""

import asyncio

import numpy as np
from advs import GenerationController, Generation, Sample, SearchConfig

HUE_NAMES = [
    "Red", "Orange", "Yellow", "Chartreuse", "Green", "Spring Green",
    "Cyan", "Azure", "Blue", "Violet", "Magenta", "Rose",
]


def create_example_sampler(latency: float = 0.005):
    """
    Create a fake colour-naming service.

    Hues are split into twelve 30-degree bands. Very dark or very light
    contexts collapse everything to "Black" or "White". Each call sleeps to
    simulate network latency.
    """

    async def sampler(hue, context, token):
        await asyncio.sleep(latency)
        saturation, lightness = context.values
        if lightness <= 5:
            name = "Black"
        elif lightness >= 95:
            name = "White"
        elif saturation <= 5:
            name = "Gray"
        else:
            name = HUE_NAMES[((hue + 15) // 30) % len(HUE_NAMES)]
        return Sample(point=hue, identity=name, payload={"hue": hue})

    return sampler


async def example_single_generation():
    """Example 1: One search, interval vs. exhaustive."""
    print("=" * 60)
    print("EXAMPLE 1: Interval Search vs. Exhaustive Sampling")
    print("=" * 60)

    sampler = create_example_sampler()
    context = SearchConfig().make_context(60, 50)

    for strategy in ("interval", "exhaustive"):
        config = SearchConfig(strategy=strategy)
        generation = Generation(1, context, sampler, config)
        await generation.run()
        summary = generation.summary()
        print(f"\n{strategy}:")
        print(f"- Distinct values: {summary.distinct_values}")
        print(f"- Sampler calls: {summary.total_calls}/{config.domain_size}")
        print(f"- Largest unsampled gap: {summary.max_unsampled_gap}")
        print(f"- Values: {', '.join(s.identity for s in generation.values())}")


async def example_debounced_controller():
    """Example 2: A slider being dragged, then released."""
    print("\n" + "=" * 60)
    print("EXAMPLE 2: Debounced Controller")
    print("=" * 60)

    def render(snapshot):
        status = "loading" if snapshot.is_loading else "done"
        print(f"  [gen {snapshot.generation}] {len(snapshot.values)} values ({status})")

    config = SearchConfig(verbose=True)
    async with GenerationController(create_example_sampler(), config, listener=render) as controller:
        rng = np.random.default_rng(42)
        for lightness in np.linspace(10, 60, 8):
            controller.update_context(float(rng.integers(20, 80)), float(lightness))
            await asyncio.sleep(0.02)
        await controller.wait_until_idle()

        # Change again while a search is running
        controller.update_context(0, 50)
        await asyncio.sleep(config.debounce_delay_s + 0.01)
        controller.update_context(80, 97)
        await controller.wait_until_idle()

        print("\nResults:")
        print(f"- Generations opened: {controller.generation_count}")
        print(f"- Final values: {[s.identity for s in controller.values]}")


if __name__ == "__main__":
    print("ADVS Library - Basic Usage Examples")
    print("This demonstrates the Adaptive Distinct-Value Search algorithm")

    asyncio.run(example_single_generation())
    asyncio.run(example_debounced_controller())

    print("\n" + "=" * 60)
    print("Examples completed successfully!")
    print("=" * 60)

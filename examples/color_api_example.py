"""
Live example: distinct colour names on the hue wheel via The Color API.

Requires network access and the ``examples`` extra (matplotlib). Pass
saturation and lightness on the command line, e.g.::

    python examples/color_api_example.py 60 45
"""

import asyncio
import sys

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from advs import ColorApiSampler, Generation, SearchConfig


def plot_swatches(samples, title: str, path: str = "swatches.png") -> str:
    """Draw one swatch per colour name, ordered by hue."""
    fig, ax = plt.subplots(figsize=(max(6, len(samples) * 0.9), 2.2))
    for i, sample in enumerate(samples):
        hex_value = sample.payload.get("hex", {}).get("value", "#cccccc")
        contrast = sample.payload.get("contrast", {}).get("value", "#000000")
        ax.add_patch(plt.Rectangle((i, 0), 0.95, 1, color=hex_value))
        ax.text(i + 0.47, 0.5, sample.identity, ha="center", va="center",
                rotation=90, fontsize=8, color=contrast)
    ax.set_xlim(0, max(len(samples), 1))
    ax.set_ylim(0, 1)
    ax.axis("off")
    ax.set_title(title)
    fig.savefig(path, bbox_inches="tight", dpi=120)
    plt.close(fig)
    return path


async def main(saturation: float, lightness: float) -> None:
    config = SearchConfig(verbose=True)
    context = config.make_context(saturation, lightness)
    async with ColorApiSampler() as sampler:
        generation = Generation(1, context, sampler, config)
        await generation.run()

    summary = generation.summary()
    print(f"Found {summary.distinct_values} colour names with {summary.total_calls} requests")
    for failure in generation.failures:
        print(f"  failed: {failure}")
    for sample in generation.values():
        print(f"  {sample.point:3d}  {sample.identity}")

    path = plot_swatches(
        generation.values(), f"S={context[0]:g}% L={context[1]:g}%"
    )
    print(f"Swatches saved to {path}")


if __name__ == "__main__":
    args = [float(a) for a in sys.argv[1:3]] or [50.0, 50.0]
    if len(args) == 1:
        args.append(50.0)
    asyncio.run(main(*args))

"""
ADVS - Adaptive Distinct-Value Search

A Python library for finding every distinct named value across a cyclic
ordered domain with few calls to an expensive async sampler, using recursive
interval bisection with per-generation caching and debounced cancellation.
"""

from .types import (
    Cancelled,
    Interval,
    Sample,
    SamplerFailure,
    SamplingContext,
    SearchSnapshot,
    SearchSummary,
)
from .config import SearchConfig
from .cancellation import CancellationToken
from .aggregator import ResultAggregator
from .cache import SampleCache
from .search import ExhaustiveSearchEngine, IntervalSearchEngine
from .generation import Generation
from .debounce import Debouncer
from .controller import GenerationController
from .samplers import ColorApiSampler

__version__ = "0.1.0"
__all__ = [
    "CancellationToken",
    "Cancelled",
    "ColorApiSampler",
    "Debouncer",
    "ExhaustiveSearchEngine",
    "Generation",
    "GenerationController",
    "Interval",
    "IntervalSearchEngine",
    "ResultAggregator",
    "Sample",
    "SampleCache",
    "SamplerFailure",
    "SamplingContext",
    "SearchConfig",
    "SearchSnapshot",
    "SearchSummary",
]

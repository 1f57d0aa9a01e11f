"""
Collects the first sample seen for every distinct identity.
"""

from typing import Dict, List

from advs.types import Sample


class ResultAggregator:
    """Unique-value set for one generation.

    Insertion order is discovery order; ``values()`` sorts by domain point on
    every read so output does not depend on which branch emitted first.
    """

    def __init__(self) -> None:
        self._by_identity: Dict[str, Sample] = {}

    def add_if_unique(self, sample: Sample) -> bool:
        """Insert ``sample`` unless its identity is already present."""
        if sample.identity in self._by_identity:
            return False
        self._by_identity[sample.identity] = sample
        return True

    def values(self) -> List[Sample]:
        return sorted(self._by_identity.values(), key=lambda s: s.point)

    def identities(self) -> List[str]:
        return [s.identity for s in self.values()]

    def __len__(self) -> int:
        return len(self._by_identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._by_identity

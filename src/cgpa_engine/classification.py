#!/usr/bin/env python3
"""
Degree Classification Policy
Maps a cumulative average to its honours band
Bands are half-open: a boundary value belongs to the higher band
"""

from typing import List, Optional, Tuple

from .config import BASE_CLASSIFICATION, CLASSIFICATION_BANDS
from .data_models import Classification


class ClassificationPolicy:
    """Fixed, non-overlapping classification bands"""

    def __init__(self, bands: Optional[Tuple[Tuple[float, str], ...]] = None, base_label: str = BASE_CLASSIFICATION):
        # Highest lower bound first
        self.bands: List[Tuple[float, str]] = sorted(
            bands or CLASSIFICATION_BANDS, key=lambda band: band[0], reverse=True
        )
        self.base_label = base_label

    def classify(self, average: float) -> Classification:
        """
        Classify a cumulative average

        Values outside the scale still classify by the same thresholds;
        validating the average is the caller's job.
        """
        for rank, (lower_bound, label) in enumerate(self.bands, start=1):
            if average >= lower_bound:
                return Classification(label=label, rank=rank)
        return Classification(label=self.base_label, rank=len(self.bands) + 1)

    def labels(self) -> List[str]:
        """All labels, highest band first"""
        return [label for _, label in self.bands] + [self.base_label]


DEFAULT_POLICY = ClassificationPolicy()


def classify(average: float) -> Classification:
    return DEFAULT_POLICY.classify(average)

"""
Per-series rescaling so indicators with different units can share one chart.

Two methods are supported:

- ``minmax``: ``(v - min) / (max - min)``, result in [0, 1]. A series whose
  readings are all equal maps every reading to 0.5.
- ``zscore``: ``(v - mean) / std`` with the population standard deviation.
  A series with zero spread maps every reading to 0.

Only ``value`` is rewritten; ``originalValue`` keeps the delivered reading
for tooltips, and null points stay null.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Sequence, Union

import numpy as np

from ..exceptions import InvalidNormalizationMethodError
from ..models import Present, TimeSeries

logger = logging.getLogger(__name__)


class NormalizationMethod(str, Enum):
    MINMAX = "minmax"
    ZSCORE = "zscore"

    @classmethod
    def parse(cls, method: Union[str, "NormalizationMethod"]) -> "NormalizationMethod":
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).strip().lower())
        except ValueError:
            raise InvalidNormalizationMethodError(method) from None


def normalize_min_max(values: Sequence[float]) -> List[float]:
    if len(values) == 0:
        return []
    arr = np.asarray(values, dtype=float)
    low = arr.min()
    spread = arr.max() - low
    if spread == 0:
        return [0.5] * len(arr)
    return ((arr - low) / spread).tolist()


def normalize_z_score(values: Sequence[float]) -> List[float]:
    if len(values) == 0:
        return []
    arr = np.asarray(values, dtype=float)
    # A float mean of equal values can miss them by an ulp, leaving a tiny nonzero std
    if arr.max() == arr.min():
        return [0.0] * len(arr)
    std = arr.std()  # ddof=0: population standard deviation
    return ((arr - arr.mean()) / std).tolist()


_TRANSFORMS = {
    NormalizationMethod.MINMAX: normalize_min_max,
    NormalizationMethod.ZSCORE: normalize_z_score,
}


def normalize(
    series: Sequence[TimeSeries],
    method: Union[str, NormalizationMethod] = NormalizationMethod.MINMAX,
) -> List[TimeSeries]:
    """
    Rescale each series independently and return normalized copies.

    Raises:
        InvalidNormalizationMethodError: If ``method`` is not minmax or zscore
    """
    transform = _TRANSFORMS[NormalizationMethod.parse(method)]

    result = []
    for s in series:
        readings = [p.reading for p in s.data]
        present = [r.value for r in readings if isinstance(r, Present)]
        if not present:
            result.append(s)
            continue

        rescaled = iter(transform(present))
        data = [
            p.model_copy(update={"value": next(rescaled)}) if isinstance(r, Present) else p
            for p, r in zip(s.data, readings)
        ]
        result.append(s.model_copy(update={"data": data}))

    logger.debug(f"Normalized {len(result)} series with {method}")
    return result

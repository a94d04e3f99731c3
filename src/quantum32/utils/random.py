"""Randomness helpers for reproducible behaviour."""

from __future__ import annotations

import numpy as np

RandomSource = int | np.random.Generator | None


def ensure_rng(seed: RandomSource) -> np.random.Generator:
    """Return a NumPy generator for ``seed`` (fresh entropy when ``None``)."""
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(seed)

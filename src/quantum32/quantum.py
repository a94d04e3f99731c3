# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Quantum32 adapter: project a feature vector onto controller state.

A 32-dimensional feature vector is summarised four ways:

1. **Boundary states.** The vector is split into ``num_slaves`` contiguous
   chunks; each chunk's Euclidean norm (optionally boosted by the matching
   semantic category) is scaled to an integer intensity in ``[0, 255]``.
2. **Bulk mask.** Bit ``i`` is set when component ``i`` exceeds an adaptive
   threshold ``mean + 0.5 * std``. Components within a relative band around
   the threshold are *uncertain*: each is flipped with a probability that
   grows with its signed distance to the threshold, which simulates a noisy
   measurement. The random source is injectable so runs can be replayed.
3. **Semantic weight.** Shannon entropy of the vector viewed as a
   distribution, normalised by ``ln(dim)`` and optionally boosted by the
   vocabulary richness of the source text.
4. **Holographic coherence.** Mean of ``|pearson(vector, reconstruction)|``,
   where the reconstruction repeats each boundary state across its chunk,
   and the fraction of active mask bits.

Every operation is total: zero vectors and zero-variance inputs resolve to
documented defaults instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import QuantumConfig
from .logging import get_logger
from .utils.random import RandomSource, ensure_rng

LOGGER = get_logger(__name__)

EPSILON = 1e-10
MAX_INTENSITY = 255


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def popcount(mask: int) -> int:
    return bin(mask).count("1")


def coherence_label(coherence: float) -> str:
    if coherence > 0.8:
        return "excellent"
    if coherence > 0.6:
        return "good"
    if coherence > 0.4:
        return "moderate"
    return "low"


@dataclass(frozen=True)
class UncertainBit:
    """A mask component close enough to the threshold to be resolved randomly."""

    index: int
    value: float
    probability: float


@dataclass
class BulkMask:
    """Activation mask plus the metadata of how it was measured."""

    mask: int
    threshold: float
    base_mask: int
    uncertain_bits: List[UncertainBit] = field(default_factory=list)
    flipped: List[int] = field(default_factory=list)
    width: int = 32

    @property
    def bits_active(self) -> int:
        return popcount(self.mask)

    @property
    def hex(self) -> str:
        return f"0x{self.mask:08X}"

    @property
    def binary(self) -> str:
        return "0b" + format(self.mask, f"0{self.width}b")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mask": self.mask,
            "hex": self.hex,
            "binary": self.binary,
            "bits_active": self.bits_active,
            "threshold": self.threshold,
            "uncertain_bits": [bit.__dict__ for bit in self.uncertain_bits],
            "num_uncertain": len(self.uncertain_bits),
            "flipped": list(self.flipped),
        }


@dataclass
class Quantum32State:
    boundary_states: List[int]
    bulk: BulkMask
    semantic_weight: float
    holographic_coherence: float

    @property
    def bulk_mask(self) -> int:
        return self.bulk.mask

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boundary_states": list(self.boundary_states),
            "bulk_mask": self.bulk.mask,
            "bulk_mask_hex": self.bulk.hex,
            "bulk_mask_bin": self.bulk.binary,
            "bits_active": self.bulk.bits_active,
            "semantic_weight": self.semantic_weight,
            "holographic_coherence": self.holographic_coherence,
            "coherence_label": coherence_label(self.holographic_coherence),
            "quantum_metadata": {
                "threshold": self.bulk.threshold,
                "uncertain_bits": [bit.__dict__ for bit in self.bulk.uncertain_bits],
                "num_uncertain": len(self.bulk.uncertain_bits),
                "flipped": list(self.bulk.flipped),
            },
        }


class Quantum32Adapter:
    """Map feature vectors to boundary states, bulk masks and scalar metrics."""

    def __init__(self, config: QuantumConfig | None = None, rng: RandomSource = None) -> None:
        self.config = config or QuantumConfig()
        self.rng = ensure_rng(self.config.seed if rng is None else rng)

    @property
    def vector_dim(self) -> int:
        return self.config.vector_dim

    @property
    def num_slaves(self) -> int:
        return self.config.num_slaves

    @property
    def chunk_size(self) -> int:
        return self.vector_dim // self.num_slaves

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def fit_dimension(self, vector: Sequence[float] | NDArray[np.float64]) -> NDArray[np.float64]:
        """Zero-pad or truncate ``vector`` to ``vector_dim`` components."""
        values = np.asarray(vector, dtype=float).ravel()[: self.vector_dim]
        if values.shape[0] < self.vector_dim:
            values = np.pad(values, (0, self.vector_dim - values.shape[0]))
        return values

    def _chunk_bounds(self) -> List[tuple[int, int]]:
        bounds = []
        for slave in range(self.num_slaves):
            start = slave * self.chunk_size
            end = self.vector_dim if slave == self.num_slaves - 1 else start + self.chunk_size
            bounds.append((start, end))
        return bounds

    @staticmethod
    def correlation(first: NDArray[np.float64], second: NDArray[np.float64]) -> float:
        """Pearson correlation, ``0.0`` when either side has no variance."""
        n = min(first.shape[0], second.shape[0])
        if n == 0:
            return 0.0
        a = first[:n] - np.mean(first[:n])
        b = second[:n] - np.mean(second[:n])
        denominator = math.sqrt(float(np.sum(a * a)) * float(np.sum(b * b)))
        if denominator <= EPSILON:
            return 0.0
        return float(np.sum(a * b)) / denominator

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------
    def boundary_states(
        self,
        vector: Sequence[float] | NDArray[np.float64],
        categories: Optional[Mapping[str, float]] = None,
    ) -> List[int]:
        values = self.fit_dimension(vector)
        weights = list(categories.values()) if categories else []
        boosted = len(weights) >= self.num_slaves
        states: List[int] = []
        for slave, (start, end) in enumerate(self._chunk_bounds()):
            norm = float(np.linalg.norm(values[start:end]))
            if boosted:
                norm *= 1.0 + weights[slave] * self.config.category_boost
            state = round_half_up(norm * MAX_INTENSITY)
            states.append(min(MAX_INTENSITY, max(0, state)))
        return states

    def threshold(self, values: NDArray[np.float64], adaptive: Optional[bool] = None) -> float:
        adaptive = self.config.adaptive_threshold if adaptive is None else adaptive
        if not adaptive:
            return self.config.fixed_threshold
        return float(np.mean(values) + 0.5 * np.std(values))

    def bulk_mask(
        self,
        vector: Sequence[float] | NDArray[np.float64],
        adaptive: Optional[bool] = None,
        rng: RandomSource = None,
    ) -> BulkMask:
        values = self.fit_dimension(vector)
        threshold = self.threshold(values, adaptive)
        band = self.config.uncertainty_window * abs(threshold)

        base_mask = 0
        uncertain: List[UncertainBit] = []
        for index, value in enumerate(values):
            value = float(value)
            if value > threshold:
                base_mask |= 1 << index
            if abs(value - threshold) < band:
                probability = 0.5 + (value - threshold) / (2.0 * threshold)
                uncertain.append(
                    UncertainBit(index=index, value=value, probability=min(1.0, max(0.0, probability)))
                )

        mask = base_mask
        flipped: List[int] = []
        if self.config.quantum_uncertainty and uncertain:
            generator = self.rng if rng is None else ensure_rng(rng)
            for bit in uncertain:
                if generator.random() < bit.probability:
                    mask ^= 1 << bit.index
                    flipped.append(bit.index)

        LOGGER.debug(
            "Bulk mask 0x%08X | threshold=%.4f | uncertain=%d | flipped=%d",
            mask,
            threshold,
            len(uncertain),
            len(flipped),
        )
        return BulkMask(
            mask=mask,
            threshold=threshold,
            base_mask=base_mask,
            uncertain_bits=uncertain,
            flipped=flipped,
            width=self.vector_dim,
        )

    def semantic_weight(
        self,
        vector: Sequence[float] | NDArray[np.float64],
        richness: Optional[float] = None,
    ) -> float:
        values = self.fit_dimension(vector)
        total = float(np.sum(values))
        if total <= 0:
            return 0.0
        probabilities = values / (total + EPSILON)
        positive = probabilities[probabilities > 0]
        entropy = float(-np.sum(positive * np.log(positive)))
        max_entropy = math.log(values.shape[0])
        weight = entropy / max_entropy if max_entropy > 0 else 0.0
        if richness is not None:
            weight *= 1.0 + min(richness / 10.0, self.config.richness_cap)
        return min(max(weight, 0.0), 1.0)

    def reconstruct(self, boundary_states: Sequence[int]) -> NDArray[np.float64]:
        """Spread each boundary state across its chunk as a value in ``[0, 1]``."""
        reconstruction: List[float] = []
        for state in boundary_states:
            reconstruction.extend([state / MAX_INTENSITY] * self.chunk_size)
        fill = reconstruction[-1] if reconstruction else 0.0
        while len(reconstruction) < self.vector_dim:
            reconstruction.append(fill)
        return np.asarray(reconstruction[: self.vector_dim], dtype=float)

    def holographic_coherence(
        self,
        vector: Sequence[float] | NDArray[np.float64],
        boundary_states: Sequence[int],
        mask: int,
    ) -> float:
        values = self.fit_dimension(vector)
        correlation = self.correlation(values, self.reconstruct(boundary_states))
        bit_density = popcount(mask) / self.vector_dim
        return (abs(correlation) + bit_density) / 2.0

    def project(
        self,
        vector: Sequence[float] | NDArray[np.float64],
        categories: Optional[Mapping[str, float]] = None,
        richness: Optional[float] = None,
        rng: RandomSource = None,
    ) -> Quantum32State:
        """Run every projection and bundle the results."""
        values = self.fit_dimension(vector)
        states = self.boundary_states(values, categories)
        bulk = self.bulk_mask(values, rng=rng)
        weight = self.semantic_weight(values, richness)
        coherence = self.holographic_coherence(values, states, bulk.mask)
        LOGGER.debug(
            "Projected vector | boundary=%s | weight=%.4f | coherence=%.4f",
            states,
            weight,
            coherence,
        )
        return Quantum32State(
            boundary_states=states,
            bulk=bulk,
            semantic_weight=weight,
            holographic_coherence=coherence,
        )

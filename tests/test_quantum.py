# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

from __future__ import annotations

import math

import numpy as np
import pytest

from quantum32.config import QuantumConfig
from quantum32.quantum import Quantum32Adapter, coherence_label, popcount


def _one_hot(index: int = 0, dim: int = 32) -> np.ndarray:
    vector = np.zeros(dim)
    vector[index] = 1.0
    return vector


def _uniform(dim: int = 32) -> np.ndarray:
    return np.full(dim, 1.0 / math.sqrt(dim))


@pytest.fixture
def adapter() -> Quantum32Adapter:
    return Quantum32Adapter(QuantumConfig(seed=7))


@pytest.fixture
def stable_adapter() -> Quantum32Adapter:
    return Quantum32Adapter(QuantumConfig(quantum_uncertainty=False))


# Boundary states ---------------------------------------------------------------
def test_boundary_states_scale_chunk_norms(adapter: Quantum32Adapter) -> None:
    vector = np.zeros(32)
    vector[0:2] = [0.6, 0.8]
    vector[8] = 0.5
    vector[16] = 0.2
    # 0.5 * 255 = 127.5 rounds half up.
    assert adapter.boundary_states(vector) == [255, 128, 51, 0]


def test_boundary_states_apply_category_boost(adapter: Quantum32Adapter) -> None:
    vector = np.zeros(32)
    vector[8] = 0.2
    vector[24] = 0.2
    categories = {"entities": 0.0, "actions": 0.5, "concepts": 0.0, "properties": 0.5, "relations": 0.0}
    assert adapter.boundary_states(vector, categories) == [0, 64, 0, 64]


def test_boundary_states_skip_boost_with_too_few_categories(adapter: Quantum32Adapter) -> None:
    vector = np.zeros(32)
    vector[8] = 0.2
    vector[24] = 0.2
    assert adapter.boundary_states(vector, {"a": 1.0, "b": 1.0}) == [0, 51, 0, 51]


@pytest.mark.parametrize("vector", [[1.0], list(np.ones(40)), [0.0] * 32, list(np.ones(32) * 3)])
def test_boundary_states_always_four_bytes(adapter: Quantum32Adapter, vector: list[float]) -> None:
    states = adapter.boundary_states(vector)
    assert len(states) == 4
    assert all(isinstance(state, int) and 0 <= state <= 255 for state in states)


def test_last_partition_absorbs_remainder() -> None:
    adapter = Quantum32Adapter(QuantumConfig(num_slaves=3))
    vector = np.zeros(32)
    vector[31] = 1.0
    assert adapter.boundary_states(vector) == [0, 0, 255]


# Bulk mask ---------------------------------------------------------------------
def test_one_hot_mask_has_single_bit_and_no_uncertainty(adapter: Quantum32Adapter) -> None:
    bulk = adapter.bulk_mask(_one_hot())
    assert bulk.uncertain_bits == []
    assert bulk.base_mask == 1
    assert bulk.mask == 1
    assert bulk.bits_active == 1
    assert bulk.hex == "0x00000001"
    assert bulk.binary == "0b" + "0" * 31 + "1"
    values = _one_hot()
    assert bulk.threshold == pytest.approx(values.mean() + 0.5 * values.std())


def test_zero_vector_mask_is_empty(adapter: Quantum32Adapter) -> None:
    bulk = adapter.bulk_mask(np.zeros(32))
    assert bulk.mask == 0
    assert bulk.threshold == 0.0
    assert bulk.uncertain_bits == []


def test_fixed_threshold_sets_high_bit_unsigned(adapter: Quantum32Adapter) -> None:
    bulk = adapter.bulk_mask(_one_hot(31) * 0.9, adaptive=False)
    assert bulk.threshold == 0.5
    assert bulk.mask == 2**31
    assert bulk.hex == "0x80000000"


def test_uncertain_bits_record_probability(stable_adapter: Quantum32Adapter) -> None:
    vector = np.zeros(32)
    vector[0] = 0.55
    vector[1] = 0.47
    bulk = stable_adapter.bulk_mask(vector, adaptive=False)
    assert [bit.index for bit in bulk.uncertain_bits] == [0, 1]
    assert bulk.uncertain_bits[0].probability == pytest.approx(0.55)
    assert bulk.uncertain_bits[1].probability == pytest.approx(0.47)
    assert bulk.uncertain_bits[0].value == pytest.approx(0.55)
    assert bulk.flipped == []
    assert bulk.mask == bulk.base_mask == 1


def test_uncertain_bits_flip_with_stated_probability() -> None:
    adapter = Quantum32Adapter(QuantumConfig(), rng=np.random.default_rng(2024))
    vector = np.zeros(32)
    vector[0] = 0.55
    vector[1] = 0.47
    trials = 4000
    bit0 = bit1 = 0
    for _ in range(trials):
        bulk = adapter.bulk_mask(vector, adaptive=False)
        bit0 += bulk.mask & 1
        bit1 += (bulk.mask >> 1) & 1
    # bit 0 starts set and flips off with p=0.55; bit 1 starts clear and flips on with p=0.47.
    assert bit0 / trials == pytest.approx(0.45, abs=0.03)
    assert bit1 / trials == pytest.approx(0.47, abs=0.03)


def test_seeded_masks_are_reproducible() -> None:
    vector = np.linspace(0.0, 1.0, 32)
    vector /= np.linalg.norm(vector)
    first = Quantum32Adapter(QuantumConfig(seed=99)).bulk_mask(vector)
    second = Quantum32Adapter(QuantumConfig(seed=99)).bulk_mask(vector)
    assert first.mask == second.mask
    assert first.flipped == second.flipped


def test_popcount_differs_from_base_only_by_flips(adapter: Quantum32Adapter) -> None:
    rng = np.random.default_rng(5)
    for _ in range(50):
        vector = rng.random(32)
        bulk = adapter.bulk_mask(vector)
        assert bulk.mask < 2**32
        expected = int(np.sum(vector > bulk.threshold))
        assert popcount(bulk.base_mask) == expected
        assert popcount(bulk.mask ^ bulk.base_mask) == len(bulk.flipped)
        assert abs(bulk.bits_active - expected) <= len(bulk.flipped)


# Semantic weight -----------------------------------------------------------------
def test_one_hot_semantic_weight_is_zero(adapter: Quantum32Adapter) -> None:
    assert adapter.semantic_weight(_one_hot()) == pytest.approx(0.0, abs=1e-6)


def test_uniform_semantic_weight_is_one(adapter: Quantum32Adapter) -> None:
    assert adapter.semantic_weight(_uniform()) == pytest.approx(1.0, abs=1e-6)


def test_zero_vector_semantic_weight_is_zero(adapter: Quantum32Adapter) -> None:
    assert adapter.semantic_weight(np.zeros(32)) == 0.0


def test_richness_boost_is_capped(adapter: Quantum32Adapter) -> None:
    vector = np.zeros(32)
    vector[:2] = 0.5
    base = adapter.semantic_weight(vector)
    assert base == pytest.approx(0.2, rel=1e-6)
    assert adapter.semantic_weight(vector, richness=2.0) == pytest.approx(0.24, rel=1e-6)
    assert adapter.semantic_weight(vector, richness=10.0) == pytest.approx(0.26, rel=1e-6)
    assert adapter.semantic_weight(_uniform(), richness=5.0) == 1.0


# Holographic coherence ----------------------------------------------------------
def test_coherence_blends_correlation_and_bit_density(adapter: Quantum32Adapter) -> None:
    vector = _one_hot()
    states = adapter.boundary_states(vector)
    reconstruction = adapter.reconstruct(states)
    expected_corr = abs(np.corrcoef(vector, reconstruction)[0, 1])
    coherence = adapter.holographic_coherence(vector, states, mask=1)
    assert coherence == pytest.approx((expected_corr + 1 / 32) / 2)
    assert coherence == pytest.approx(0.17117, abs=1e-4)


def test_coherence_of_zero_vector_is_zero(adapter: Quantum32Adapter) -> None:
    assert adapter.holographic_coherence(np.zeros(32), [0, 0, 0, 0], 0) == 0.0


def test_reconstruction_pads_with_last_state() -> None:
    adapter = Quantum32Adapter(QuantumConfig(num_slaves=3))
    reconstruction = adapter.reconstruct([255, 0, 51])
    assert reconstruction.shape == (32,)
    assert reconstruction[:10].tolist() == [1.0] * 10
    assert reconstruction[-2:].tolist() == pytest.approx([0.2, 0.2])


def test_correlation_without_variance_is_zero() -> None:
    assert Quantum32Adapter.correlation(np.ones(32), np.arange(32.0)) == 0.0


def test_coherence_label_bands() -> None:
    assert coherence_label(0.9) == "excellent"
    assert coherence_label(0.7) == "good"
    assert coherence_label(0.5) == "moderate"
    assert coherence_label(0.1) == "low"


# Projection ---------------------------------------------------------------------
def test_projection_is_idempotent_without_uncertainty(stable_adapter: Quantum32Adapter) -> None:
    vector = np.linspace(0.0, 1.0, 32)
    vector /= np.linalg.norm(vector)
    categories = {"entities": 0.4, "actions": 0.3, "concepts": 0.2, "properties": 0.1}
    first = stable_adapter.project(vector, categories, richness=3.0)
    second = stable_adapter.project(vector, categories, richness=3.0)
    assert first.boundary_states == second.boundary_states
    assert first.bulk.threshold == second.bulk.threshold
    assert first.bulk.mask == second.bulk.mask
    assert first.semantic_weight == second.semantic_weight
    assert 0.0 <= first.holographic_coherence <= 1.0


def test_projection_serialises_metadata(adapter: Quantum32Adapter) -> None:
    payload = adapter.project(_one_hot()).to_dict()
    assert payload["boundary_states"] == [255, 0, 0, 0]
    assert payload["bulk_mask"] == 1
    assert payload["bulk_mask_hex"] == "0x00000001"
    assert payload["quantum_metadata"]["num_uncertain"] == 0

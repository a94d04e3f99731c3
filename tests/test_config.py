from __future__ import annotations

import json
from pathlib import Path

import pytest

from quantum32.config import Quantum32Config, QuantumConfig, load_config


def test_defaults() -> None:
    config = Quantum32Config()
    assert config.vectorizer.max_features == 32
    assert config.quantum.num_slaves == 4
    assert config.quantum.uncertainty_window == pytest.approx(0.15)
    assert config.quantum.seed is None
    assert config.debate.vote_cap == 10
    assert config.fetch.language == "es"
    assert config.protocol.title_limit == 30


def test_load_yaml_with_overrides(workspace: Path) -> None:
    path = workspace / "config.yaml"
    path.write_text(
        "quantum:\n  adaptive_threshold: false\n  fixed_threshold: 0.4\n"
        "debate:\n  pace: 0.25\n",
        encoding="utf-8",
    )
    config = load_config(path, [{"quantum": {"seed": 9}}, {"fetch": {"language": "en"}}])
    assert config.quantum.adaptive_threshold is False
    assert config.quantum.fixed_threshold == pytest.approx(0.4)
    assert config.quantum.seed == 9
    assert config.debate.pace == pytest.approx(0.25)
    assert config.fetch.language == "en"


def test_empty_file_gives_defaults(workspace: Path) -> None:
    path = workspace / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == Quantum32Config()


@pytest.mark.parametrize(
    "kwargs",
    [{"vector_dim": 0}, {"vector_dim": 33}, {"num_slaves": 0}, {"uncertainty_window": -0.1}],
)
def test_invalid_quantum_config(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        QuantumConfig(**kwargs)  # type: ignore[arg-type]


def test_save_and_reload(workspace: Path) -> None:
    config = load_config(overrides=[{"quantum": {"seed": 3}, "debate": {"vote_cap": 6}}])
    for name in ("saved.yaml", "saved.json"):
        path = workspace / name
        config.save(path)
        assert load_config(path) == config


def test_non_mapping_root_is_rejected(workspace: Path) -> None:
    path = workspace / "config.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path)

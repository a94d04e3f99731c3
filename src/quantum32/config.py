"""Configuration helpers for Quantum32."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional, cast

from .utils.io import load_yaml_or_json, save_yaml_or_json

VECTOR_DIM = 32
NUM_SLAVES = 4


@dataclass
class VectorizerConfig:
    """Configuration for the TF-IDF vectorizer."""

    max_features: int = VECTOR_DIM

    def __post_init__(self) -> None:
        if self.max_features <= 0:
            raise ValueError("max_features must be positive")


@dataclass
class QuantumConfig:
    """Configuration for the Quantum32 adapter."""

    vector_dim: int = VECTOR_DIM
    num_slaves: int = NUM_SLAVES
    adaptive_threshold: bool = True
    fixed_threshold: float = 0.5
    uncertainty_window: float = 0.15
    quantum_uncertainty: bool = True
    category_boost: float = 0.5
    richness_cap: float = 0.3
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not 1 <= self.vector_dim <= 32:
            raise ValueError("vector_dim must fit in a 32-bit mask")
        if not 1 <= self.num_slaves <= self.vector_dim:
            raise ValueError("num_slaves must be between 1 and vector_dim")
        if self.uncertainty_window < 0:
            raise ValueError("uncertainty_window must be non-negative")


@dataclass
class DebateConfig:
    """Configuration for the debate simulator."""

    vote_cap: int = 10
    max_votes: int = 30
    pace: float = 0.0


@dataclass
class FetchConfig:
    """Configuration for the document fetcher."""

    language: str = "es"
    timeout: float = 10.0
    user_agent: str = "Quantum32Lexicon/0.1 (text fingerprinting)"


@dataclass
class ProtocolConfig:
    """Configuration for the controller wire protocol."""

    title_limit: int = 30


@dataclass
class Quantum32Config:
    """Top-level configuration for the analysis pipeline and its collaborators."""

    vectorizer: VectorizerConfig = field(default_factory=VectorizerConfig)
    quantum: QuantumConfig = field(default_factory=QuantumConfig)
    debate: DebateConfig = field(default_factory=DebateConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    protocol: ProtocolConfig = field(default_factory=ProtocolConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Quantum32Config:
        return cls(
            vectorizer=VectorizerConfig(**data.get("vectorizer", {})),
            quantum=QuantumConfig(**data.get("quantum", {})),
            debate=DebateConfig(**data.get("debate", {})),
            fetch=FetchConfig(**data.get("fetch", {})),
            protocol=ProtocolConfig(**data.get("protocol", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def save(self, path: Path) -> None:
        """Write the configuration to ``path`` as YAML or JSON."""
        save_yaml_or_json(Path(path), self.to_dict())


def _merge_dict(base: dict[str, Any], overrides: Iterable[dict[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for override in overrides:
        for key, value in override.items():
            existing = result.get(key)
            if isinstance(value, dict) and isinstance(existing, dict):
                nested = _merge_dict(cast(dict[str, Any], existing), [value])
                result[key] = nested
            else:
                result[key] = value
    return result


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Iterable[dict[str, Any]]] = None,
) -> Quantum32Config:
    """Load configuration from disk and merge overrides."""

    overrides = list(overrides or [])
    if path is None:
        base: dict[str, Any] = {}
    else:
        base = load_yaml_or_json(Path(path))

    merged = _merge_dict(base, overrides)
    return Quantum32Config.from_dict(merged)

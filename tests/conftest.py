from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from quantum32.config import Quantum32Config, QuantumConfig
from quantum32.data import load_sample_document
from quantum32.model import Document


@pytest.fixture
def config() -> Quantum32Config:
    return Quantum32Config(quantum=QuantumConfig(seed=1234))


@pytest.fixture
def sample_document() -> Document:
    payload = load_sample_document()
    return Document(title=payload["title"], raw_text=payload["text"])


@pytest.fixture
def workspace(tmp_path: Path) -> Iterator[Path]:
    yield tmp_path

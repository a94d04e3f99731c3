"""Top-level analysis pipeline orchestration."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import Quantum32Config
from .errors import DegenerateInputWarning
from .logging import get_logger
from .quantum import Quantum32Adapter, Quantum32State
from .semantic import DensityInfo, Entity, KeyPhrase, SemanticAnalyzer, SemanticDistribution
from .utils.random import RandomSource
from .utils.text import clean_and_tokenize
from .vectorizer import TfidfVectorizer

LOGGER = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Document:
    title: str
    raw_text: str
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass
class AnalysisResult:
    """Everything derived from one document."""

    document: Document
    vector: NDArray[np.float64]
    quantum: Quantum32State
    categories: SemanticDistribution
    key_phrases: List[KeyPhrase]
    entities: List[Entity]
    density: DensityInfo
    top_words: List[str]

    @property
    def title(self) -> str:
        return self.document.title

    @property
    def boundary_states(self) -> List[int]:
        return self.quantum.boundary_states

    @property
    def bulk_mask(self) -> int:
        return self.quantum.bulk.mask

    @property
    def semantic_weight(self) -> float:
        return self.quantum.semantic_weight

    @property
    def holographic_coherence(self) -> float:
        return self.quantum.holographic_coherence

    @property
    def is_degenerate(self) -> bool:
        return self.density.total_words == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.document.title,
            "timestamp": self.document.timestamp.isoformat(),
            "text_length": len(self.document.raw_text),
            "vector": [float(value) for value in self.vector],
            "quantum32_data": self.quantum.to_dict(),
            "semantic_analysis": {
                "key_phrases": [phrase.__dict__ for phrase in self.key_phrases],
                "categories": dict(self.categories),
                "density": self.density.__dict__,
                "entities": [entity.__dict__ for entity in self.entities],
            },
            "top_words": list(self.top_words),
        }


@dataclass
class Quantum32Pipeline:
    """Facade that runs tokenisation, vectorisation and the Quantum32 projection."""

    config: Quantum32Config = field(default_factory=Quantum32Config)
    analyzer: SemanticAnalyzer = field(default_factory=SemanticAnalyzer)

    def __post_init__(self) -> None:
        self.adapter = Quantum32Adapter(self.config.quantum)

    def analyze(
        self,
        document: Document,
        corpus: Optional[Sequence[str]] = None,
        rng: RandomSource = None,
    ) -> AnalysisResult:
        """Analyse ``document``, fitting the vocabulary on ``corpus`` or the document itself."""
        text = document.raw_text
        tokens = clean_and_tokenize(text)
        if not tokens:
            LOGGER.warning("Document %r has no usable tokens", document.title)
            warnings.warn(
                f"Document {document.title!r} produced an empty token stream",
                DegenerateInputWarning,
                stacklevel=2,
            )
        LOGGER.debug("Tokenised %r into %d tokens", document.title, len(tokens))

        key_phrases = self.analyzer.extract_key_phrases(tokens)
        categories = self.analyzer.categorize(tokens)
        density = self.analyzer.calculate_density(tokens)
        entities = self.analyzer.extract_entities(text)

        vectorizer = TfidfVectorizer(self.config.vectorizer)
        vector = vectorizer.fit_transform(text, corpus)

        state = self.adapter.project(
            vector,
            categories=categories,
            richness=density.vocabulary_richness,
            rng=rng,
        )
        LOGGER.info(
            "Analysed %r | boundary=%s | mask=%s | weight=%.4f | coherence=%.4f",
            document.title,
            state.boundary_states,
            state.bulk.hex,
            state.semantic_weight,
            state.holographic_coherence,
        )
        return AnalysisResult(
            document=document,
            vector=self.adapter.fit_dimension(vector),
            quantum=state,
            categories=categories,
            key_phrases=key_phrases,
            entities=entities,
            density=density,
            top_words=vectorizer.top_words(10),
        )

    def analyze_text(
        self,
        title: str,
        text: str,
        corpus: Optional[Sequence[str]] = None,
        rng: RandomSource = None,
    ) -> AnalysisResult:
        return self.analyze(Document(title=title, raw_text=text), corpus=corpus, rng=rng)

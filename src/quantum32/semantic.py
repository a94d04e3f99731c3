"""Semantic categorisation, key-phrase and entity extraction."""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

from .logging import get_logger
from .utils.text import sliding_window

LOGGER = get_logger(__name__)

SemanticDistribution = Dict[str, float]

# Keyword lists are matched by substring so that inflected forms count too.
CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "entities": ("nombre", "persona", "lugar", "organización", "país", "ciudad", "empresa"),
    "actions": ("hacer", "crear", "desarrollar", "producir", "generar", "construir"),
    "concepts": ("teoría", "concepto", "idea", "principio", "método", "sistema"),
    "properties": ("tipo", "clase", "forma", "manera", "modo", "estilo"),
    "relations": ("entre", "con", "para", "desde", "hacia", "mediante"),
    "temporal": ("año", "siglo", "época", "periodo", "momento", "tiempo"),
}

_SENTENCE_RE = re.compile(r"[.!?]+")
_CAPITALISED_RE = re.compile(r"^[A-ZÁÉÍÓÚÑ]")
MIN_ENTITY_LENGTH = 4


@dataclass(frozen=True)
class KeyPhrase:
    phrase: str
    count: int


@dataclass(frozen=True)
class Entity:
    entity: str
    count: int


@dataclass(frozen=True)
class DensityInfo:
    """Lexical density of a token stream."""

    total_words: int
    unique_words: int
    density: float
    vocabulary_richness: float


class SemanticAnalyzer:
    """Keyword-driven semantic profiling of a token stream."""

    def __init__(self, categories: Mapping[str, Sequence[str]] | None = None) -> None:
        self.categories: Dict[str, Tuple[str, ...]] = {
            name: tuple(keywords) for name, keywords in (categories or CATEGORIES).items()
        }

    def categorize(self, tokens: Sequence[str]) -> SemanticDistribution:
        """Return the relative frequency of each category among ``tokens``.

        A token counts towards every category that has a keyword contained in
        it. When nothing matches, every category reports ``0.0``.
        """
        counts = {name: 0 for name in self.categories}
        for token in tokens:
            for name, keywords in self.categories.items():
                if any(keyword in token for keyword in keywords):
                    counts[name] += 1
        total = sum(counts.values())
        LOGGER.debug("Categorised %d tokens with %d keyword hits", len(tokens), total)
        return {name: (count / total if total > 0 else 0.0) for name, count in counts.items()}

    @staticmethod
    def extract_key_phrases(tokens: Sequence[str], num_phrases: int = 10) -> List[KeyPhrase]:
        """Return the most frequent bigrams and trigrams, first-seen order on ties."""
        counts: Counter[str] = Counter()
        for size in (2, 3):
            for window in sliding_window(tokens, size):
                counts[" ".join(window)] += 1
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [KeyPhrase(phrase=phrase, count=count) for phrase, count in ranked[:num_phrases]]

    @staticmethod
    def extract_entities(text: str, num_entities: int = 10) -> List[Entity]:
        """Detect capitalised words (and capitalised pairs) across sentences."""
        counts: Counter[str] = Counter()
        for sentence in _SENTENCE_RE.split(text):
            words = sentence.split()
            index = 0
            while index < len(words):
                word = words[index]
                if len(word) >= MIN_ENTITY_LENGTH and _CAPITALISED_RE.match(word):
                    following = words[index + 1] if index + 1 < len(words) else ""
                    if following and _CAPITALISED_RE.match(following):
                        counts[f"{word} {following}"] += 1
                        index += 2
                        continue
                    counts[word] += 1
                index += 1
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [Entity(entity=entity, count=count) for entity, count in ranked[:num_entities]]

    @staticmethod
    def calculate_density(tokens: Sequence[str]) -> DensityInfo:
        total = len(tokens)
        unique = len(set(tokens))
        return DensityInfo(
            total_words=total,
            unique_words=unique,
            density=unique / max(total, 1),
            vocabulary_richness=unique / math.sqrt(max(total, 1)),
        )

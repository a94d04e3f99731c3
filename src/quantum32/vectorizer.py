"""TF-IDF vectorisation onto a fixed number of features."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from .config import VECTOR_DIM, VectorizerConfig
from .logging import get_logger
from .utils.text import clean_and_tokenize

LOGGER = get_logger(__name__)


class TfidfVectorizer:
    """Length-biased TF-IDF vectoriser with a fixed-size output.

    Features are the ``max_features`` terms with the highest
    ``count * ln(len(term) + 1)`` over the fitted corpus. When fitted on a
    single document every retained term has a document frequency of one, so
    the IDF factor is the same constant for all of them and the vector
    reduces to normalised term frequencies.

    The output always has ``VECTOR_DIM`` components: a smaller vocabulary
    leaves trailing zeros and terms indexed past the last slot are ignored.
    """

    def __init__(self, config: VectorizerConfig | None = None) -> None:
        self.config = config or VectorizerConfig()
        self.vocabulary: dict[str, int] = {}
        self.idf: dict[str, float] = {}

    @property
    def max_features(self) -> int:
        return self.config.max_features

    # Fitting ---------------------------------------------------------------------
    def fit(self, corpus: Sequence[str]) -> "TfidfVectorizer":
        term_counts: Counter[str] = Counter()
        doc_frequencies: Counter[str] = Counter()
        for text in corpus:
            tokens = clean_and_tokenize(text)
            term_counts.update(tokens)
            doc_frequencies.update(set(tokens))

        scored = [(term, count * math.log(len(term) + 1)) for term, count in term_counts.items()]
        scored.sort(key=lambda item: item[1], reverse=True)
        selected = [term for term, _ in scored[: self.max_features]]
        self.vocabulary = {term: index for index, term in enumerate(selected)}

        num_docs = len(corpus)
        self.idf = {
            term: math.log((num_docs + 1) / (doc_frequencies[term] + 1)) + 1.0
            for term in self.vocabulary
        }
        LOGGER.debug(
            "Fitted vocabulary of %d terms over %d documents", len(self.vocabulary), num_docs
        )
        return self

    # Transforming ----------------------------------------------------------------
    def transform(self, text: str) -> NDArray[np.float64]:
        """Return the L2-normalised TF-IDF vector of ``text``."""
        vector = np.zeros(VECTOR_DIM, dtype=float)
        tokens = clean_and_tokenize(text)
        counts = Counter(tokens)
        total = max(len(tokens), 1)
        for term, index in self.vocabulary.items():
            if index < VECTOR_DIM and counts[term]:
                vector[index] = counts[term] / total * self.idf.get(term, 1.0)
        norm = float(np.linalg.norm(vector))
        if norm > 0:
            vector /= norm
        return vector

    def fit_transform(self, text: str, corpus: Sequence[str] | None = None) -> NDArray[np.float64]:
        self.fit(list(corpus) if corpus is not None else [text])
        return self.transform(text)

    def top_words(self, n: int = 10) -> list[str]:
        return list(self.vocabulary)[:n]

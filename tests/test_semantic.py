from __future__ import annotations

import pytest

from quantum32.semantic import CATEGORIES, DensityInfo, Entity, KeyPhrase, SemanticAnalyzer


@pytest.fixture
def analyzer() -> SemanticAnalyzer:
    return SemanticAnalyzer()


def test_categorize_empty_stream_is_all_zero(analyzer: SemanticAnalyzer) -> None:
    distribution = analyzer.categorize([])
    assert list(distribution) == list(CATEGORIES)
    assert all(value == 0.0 for value in distribution.values())
    assert sum(distribution.values()) == 0.0


def test_categorize_uses_substring_matches_across_categories(analyzer: SemanticAnalyzer) -> None:
    # "construir" hits both "construir" (actions) and "con" (relations).
    distribution = analyzer.categorize(["sistema", "teoría", "construir"])
    assert distribution["concepts"] == pytest.approx(0.5)
    assert distribution["actions"] == pytest.approx(0.25)
    assert distribution["relations"] == pytest.approx(0.25)
    assert distribution["entities"] == 0.0
    assert sum(distribution.values()) == pytest.approx(1.0)


def test_key_phrases_rank_by_count_then_first_seen(analyzer: SemanticAnalyzer) -> None:
    tokens = ["alfa", "beta", "gama", "alfa", "beta"]
    phrases = analyzer.extract_key_phrases(tokens, 3)
    assert phrases == [
        KeyPhrase("alfa beta", 2),
        KeyPhrase("beta gama", 1),
        KeyPhrase("gama alfa", 1),
    ]


def test_key_phrases_include_trigrams(analyzer: SemanticAnalyzer) -> None:
    phrases = analyzer.extract_key_phrases(["alfa", "beta", "gama"])
    assert [phrase.phrase for phrase in phrases] == ["alfa beta", "beta gama", "alfa beta gama"]


def test_entities_merge_capitalised_pairs(analyzer: SemanticAnalyzer) -> None:
    text = "Galileo Galilei observó Júpiter. Después vino Galileo Galilei! El Sol brilla? Roma es bella."
    entities = analyzer.extract_entities(text)
    assert entities == [
        Entity("Galileo Galilei", 2),
        Entity("Júpiter", 1),
        Entity("Después", 1),
        Entity("Roma", 1),
    ]


def test_entities_limit_to_top_ten(analyzer: SemanticAnalyzer) -> None:
    text = ". ".join(f"Nombre{index} aparece" for index in range(15))
    assert len(analyzer.extract_entities(text)) == 10


def test_density_metrics(analyzer: SemanticAnalyzer) -> None:
    density = analyzer.calculate_density(["alfa", "beta", "alfa", "gama"])
    assert density == DensityInfo(total_words=4, unique_words=3, density=0.75, vocabulary_richness=1.5)
    empty = analyzer.calculate_density([])
    assert empty.density == 0.0 and empty.vocabulary_richness == 0.0

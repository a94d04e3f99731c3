"""Terminal rendering of analyses and debates."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from .debate import AGENT_NAMES, DebateOutcome
from .model import AnalysisResult
from .quantum import coherence_label


def analysis_table(result: AnalysisResult) -> Table:
    state = result.quantum
    table = Table(title=f"Quantum32 analysis: {result.title}")
    table.add_column("Probe")
    table.add_column("Details")
    table.add_row("Text", f"{len(result.document.raw_text)} characters")
    table.add_row(
        "Density",
        f"words={result.density.total_words} unique={result.density.unique_words} "
        f"richness={result.density.vocabulary_richness:.2f}",
    )
    table.add_row("Boundary states", ", ".join(str(value) for value in state.boundary_states))
    table.add_row("Bulk mask", f"{state.bulk.hex} ({state.bulk.bits_active}/32 bits)")
    table.add_row(
        "Threshold",
        f"{state.bulk.threshold:.4f} | uncertain={len(state.bulk.uncertain_bits)} "
        f"flipped={len(state.bulk.flipped)}",
    )
    table.add_row("Semantic weight", f"{state.semantic_weight:.4f}")
    table.add_row(
        "Holographic coherence",
        f"{state.holographic_coherence:.4f} ({coherence_label(state.holographic_coherence)})",
    )
    for name, share in result.categories.items():
        table.add_row("Category", f"{name}: {share * 100:.1f}%")
    for phrase in result.key_phrases[:5]:
        table.add_row("Key phrase", f"{phrase.phrase} ×{phrase.count}")
    for entity in result.entities[:5]:
        table.add_row("Entity", f"{entity.entity} ×{entity.count}")
    if result.top_words:
        table.add_row("Top words", ", ".join(result.top_words))
    return table


def debate_table(outcome: DebateOutcome) -> Table:
    table = Table(title=f"Debate result: {outcome.title}")
    table.add_column("Rank")
    table.add_column("Agent")
    table.add_column("Votes", justify="right")
    arguments = {argument.agent_id: argument for argument in outcome.arguments}
    for position, agent_id in enumerate(outcome.ranking, start=1):
        marker = "🏆" if agent_id == outcome.winner_id else str(position)
        table.add_row(
            marker,
            f"Agent {agent_id} ({AGENT_NAMES[agent_id]})",
            f"{arguments[agent_id].total_votes}/{outcome.max_votes}",
        )
    return table


def render_analysis(result: AnalysisResult, console: Optional[Console] = None) -> None:
    (console or Console()).print(analysis_table(result))


def render_debate(outcome: DebateOutcome, console: Optional[Console] = None) -> None:
    console = console or Console()
    for line in outcome.transcript:
        console.print(line, highlight=False, markup=False)
    console.print(debate_table(outcome))

"""Minimal quickstart script for Quantum32.

The script analyses the bundled sample article, prints the controller frame
it would send, runs a debate between the four boundary agents, and shows how
the bulk mask wobbles across repeated measurements of the same document.
"""

from collections import Counter

from quantum32 import Document, Quantum32Config, Session
from quantum32.config import QuantumConfig
from quantum32.data import load_sample_document


def run_analysis(session: Session) -> None:
    """Analyse the sample article and print its fingerprint."""

    payload = load_sample_document()
    result = session.analyze(Document(title=payload["title"], raw_text=payload["text"]))
    bulk = result.quantum.bulk
    print(f"Analysed: {result.title}")
    print("Boundary states:", result.boundary_states)
    print(f"Bulk mask: {bulk.hex} ({bulk.bits_active}/32 bits, {len(bulk.uncertain_bits)} uncertain)")
    print(f"Semantic weight: {result.semantic_weight:.4f}")
    print(f"Holographic coherence: {result.holographic_coherence:.4f}")
    print("Frame:", session.analysis_frame())


def run_debate(session: Session) -> None:
    """Let the agents argue and collect the transcript sent to the controller."""

    written: list[bytes] = []
    session.connect(written.append)
    outcome = session.run_debate()
    print(f"\nDebate winner: Agent {outcome.winner_id} ({outcome.winner_name})")
    print("Votes:", outcome.totals)
    print("Sent to controller:", written)
    session.disconnect()


def run_measurement_spread(session: Session, repeats: int = 200) -> None:
    """Re-project the same vector to show the spread of uncertain-bit flips."""

    result = session.require_result()
    adapter = session.pipeline.adapter
    masks = Counter(
        adapter.project(result.vector, result.categories, result.density.vocabulary_richness).bulk.hex
        for _ in range(repeats)
    )
    print(f"\nMask spread over {repeats} measurements:")
    for mask, count in masks.most_common(5):
        print(f"  {mask}: {count}")


def main() -> None:
    session = Session(config=Quantum32Config(quantum=QuantumConfig(seed=11)))
    run_analysis(session)
    run_debate(session)
    run_measurement_spread(session)


if __name__ == "__main__":
    main()

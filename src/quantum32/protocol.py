"""Command frames understood by the peripheral controller firmware."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .model import AnalysisResult

FRAME_START = "START"
FRAME_END = "END"
SEPARATOR = "|"
LINE_TERMINATOR = "\n"
DEFAULT_TITLE_LIMIT = 30

SHOW_ANALYSIS = "SHOW_ANALYSIS"
SHOW_BULK = "SHOW_BULK"
READ_SLAVES = "READ_SLAVES"
DEBATE_WINNER = "DEBATE_WINNER"

SIMPLE_COMMANDS = frozenset({SHOW_ANALYSIS, SHOW_BULK, READ_SLAVES})


def build_frame(
    title: str,
    boundary_states: Sequence[int],
    bulk_mask: int,
    semantic_weight: float,
    *,
    title_limit: int = DEFAULT_TITLE_LIMIT,
) -> str:
    """Return ``START|title|b0,b1,b2,b3|mask|weight|END``.

    ``|`` inside the title is not escaped; truncation is the only mitigation.
    """
    fields = [
        FRAME_START,
        title[:title_limit],
        ",".join(str(int(state)) for state in boundary_states),
        str(int(bulk_mask)),
        f"{semantic_weight:.4f}",
        FRAME_END,
    ]
    return SEPARATOR.join(fields)


def analysis_frame(result: "AnalysisResult", *, title_limit: int = DEFAULT_TITLE_LIMIT) -> str:
    return build_frame(
        result.title,
        result.boundary_states,
        result.bulk_mask,
        result.semantic_weight,
        title_limit=title_limit,
    )


def debate_winner_command(winner_id: int) -> str:
    return f"{DEBATE_WINNER}{SEPARATOR}{int(winner_id)}"


def encode_command(command: str) -> bytes:
    """Frame ``command`` for the serial link as one newline-terminated write."""
    return (command + LINE_TERMINATOR).encode("utf-8")

from __future__ import annotations

from quantum32.protocol import (
    READ_SLAVES,
    SIMPLE_COMMANDS,
    build_frame,
    debate_winner_command,
    encode_command,
)


def test_build_frame_layout() -> None:
    frame = build_frame("Sistema solar", [1, 2, 3, 4], 4294967295, 0.5)
    assert frame == "START|Sistema solar|1,2,3,4|4294967295|0.5000|END"


def test_build_frame_truncates_title() -> None:
    title = "Historia de la exploración espacial en el siglo veinte"
    frame = build_frame(title, [0, 0, 0, 0], 0, 0.0)
    assert frame.split("|")[1] == title[:30]
    assert build_frame(title, [0, 0, 0, 0], 0, 0.0, title_limit=5).split("|")[1] == "Histo"


def test_pipe_in_title_is_not_escaped() -> None:
    frame = build_frame("A|B", [0, 0, 0, 0], 0, 0.25)
    assert frame == "START|A|B|0,0,0,0|0|0.2500|END"


def test_debate_winner_command() -> None:
    assert debate_winner_command(2) == "DEBATE_WINNER|2"


def test_encode_command_appends_newline() -> None:
    assert encode_command(READ_SLAVES) == b"READ_SLAVES\n"
    assert encode_command("START|Año|0,0,0,0|0|0.0000|END").endswith(b"END\n")
    assert SIMPLE_COMMANDS == {"SHOW_ANALYSIS", "SHOW_BULK", "READ_SLAVES"}
